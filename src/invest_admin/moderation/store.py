from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import FetchError
from ..logger import get_logger, log_action
from ..models import ModerationItem, PageInfo
from .adapter import EntityAdapter, TabSpec

logger = get_logger("invest_admin.queue")

ItemPatch = Callable[[ModerationItem], ModerationItem]


class QueueStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass
class QueueState:
    items: list[ModerationItem] = field(default_factory=list)
    status: QueueStatus = QueueStatus.IDLE
    error_message: str | None = None
    pagination: PageInfo | None = None
    loaded: bool = False
    request_token: int = 0


class QueueStore:
    """Per-tab item lists for one entity adapter."""

    def __init__(self, adapter: EntityAdapter) -> None:
        self.adapter = adapter
        self._states: dict[str, QueueState] = {tab.name: QueueState() for tab in adapter.tabs}
        self._tokens = itertools.count(1)

    def state_for(self, tab: TabSpec | str) -> QueueState:
        name = _tab_name(tab)
        if name not in self._states:
            self._states[name] = QueueState()
        return self._states[name]

    def items(self, tab: TabSpec | str) -> list[ModerationItem]:
        return list(self.state_for(tab).items)

    def find(self, tab: TabSpec | str, item_id: str) -> ModerationItem | None:
        for item in self.state_for(tab).items:
            if item.id == item_id:
                return item
        return None

    async def load(self, tab: TabSpec | str, page: int | None = None) -> QueueState:
        resolved = self._resolve(tab)
        state = self.state_for(resolved)
        token = next(self._tokens)
        state.request_token = token
        state.status = QueueStatus.LOADING
        state.error_message = None

        try:
            result = await self.adapter.fetch_page(resolved, page)
        except FetchError as error:
            if state.request_token != token:
                log_action(logger, self.adapter.entity, f"load:{resolved.name}", outcome="discarded", token=token)
                return state
            state.status = QueueStatus.ERROR
            state.error_message = error.message
            return state

        if state.request_token != token:
            log_action(logger, self.adapter.entity, f"load:{resolved.name}", outcome="discarded", token=token)
            return state
        state.items = _unique_by_id(result.items)
        state.pagination = result.pagination
        state.status = QueueStatus.IDLE
        state.loaded = True
        return state

    def abandon(self, tab: TabSpec | str) -> None:
        """Drop interest in any in-flight load for ``tab``."""
        state = self.state_for(tab)
        state.request_token = next(self._tokens)
        if state.status is QueueStatus.LOADING:
            state.status = QueueStatus.IDLE

    def replace_items(self, tab: TabSpec | str, items: list[ModerationItem], pagination: PageInfo | None = None) -> None:
        state = self.state_for(tab)
        state.items = _unique_by_id(items)
        if pagination is not None:
            state.pagination = pagination

    def patch_item(self, tab: TabSpec | str, item_id: str, patch: ItemPatch) -> ModerationItem | None:
        state = self.state_for(tab)
        for index, item in enumerate(state.items):
            if item.id != item_id:
                continue
            patched = patch(item)
            if patched.id != item_id:
                raise ValueError("patch must not change the item id")
            state.items = [*state.items[:index], patched, *state.items[index + 1 :]]
            return patched
        return None

    def remove_item(self, tab: TabSpec | str, item_id: str) -> ModerationItem | None:
        state = self.state_for(tab)
        for index, item in enumerate(state.items):
            if item.id == item_id:
                state.items = [*state.items[:index], *state.items[index + 1 :]]
                return item
        return None

    def count_for(self, tab: TabSpec | str) -> int:
        resolved = self._resolve(tab)
        state = self.state_for(resolved)
        if resolved.paginated and state.pagination is not None:
            return state.pagination.total_count
        return len(state.items)

    def _resolve(self, tab: TabSpec | str) -> TabSpec:
        return tab if isinstance(tab, TabSpec) else self.adapter.tab(tab)


def _tab_name(tab: TabSpec | str) -> str:
    return tab.name if isinstance(tab, TabSpec) else tab


def _unique_by_id(items: list[ModerationItem]) -> list[ModerationItem]:
    seen: set[str] = set()
    unique: list[ModerationItem] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique
