from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

DEFAULT_AUTO_HIDE_SECONDS = 5.0


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity
    visible: bool = True


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]
Listener = Callable[[Notification | None], None]


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class NotificationChannel:
    """Single-slot, auto-dismissing notification.

    A new ``show`` replaces the visible message and restarts the timer; a timer
    left over from an earlier message never hides a newer one.
    """

    def __init__(self, auto_hide_seconds: float = DEFAULT_AUTO_HIDE_SECONDS, scheduler: Scheduler | None = None) -> None:
        self.auto_hide_seconds = auto_hide_seconds
        self._schedule = scheduler or _loop_scheduler
        self._current: Notification | None = None
        self._handle: TimerHandle | None = None
        self._generation = 0
        self._listeners: list[Listener] = []

    @property
    def current(self) -> Notification | None:
        return self._current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def show(self, message: str, severity: Severity) -> Notification:
        self._cancel_timer()
        self._generation += 1
        generation = self._generation
        self._current = Notification(message=message, severity=Severity(severity), visible=True)
        self._handle = self._schedule(self.auto_hide_seconds, lambda: self._expire(generation))
        self._publish()
        return self._current

    def hide(self) -> None:
        self._cancel_timer()
        self._generation += 1
        if self._current is None or not self._current.visible:
            return
        self._current = Notification(message=self._current.message, severity=self._current.severity, visible=False)
        self._publish()

    def _expire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self.hide()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self._current)
