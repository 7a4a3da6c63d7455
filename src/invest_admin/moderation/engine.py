from __future__ import annotations

from collections.abc import Mapping

from ..models import ItemState, ModerationItem
from .adapter import EntityAdapter, TabSpec
from .notifications import NotificationChannel
from .pagination import PaginationController
from .store import QueueState, QueueStore
from .tabs import TabCoordinator
from .transitions import TransitionController, TransitionDialog, TransitionOutcome


class ModerationQueue:
    """One entity's moderation screen: store, tabs, paging and transitions."""

    def __init__(
        self,
        adapter: EntityAdapter,
        notifications: NotificationChannel | None = None,
        summary_counts: dict[str, int] | None = None,
    ) -> None:
        self.adapter = adapter
        self.notifications = notifications or NotificationChannel()
        self.store = QueueStore(adapter)
        self.controller = TransitionController(self.store, self.notifications)
        self.tabs = TabCoordinator(self.store, summary_counts)
        self.pages = PaginationController(self.store)

    @property
    def entity(self) -> str:
        return self.adapter.entity

    async def open(self, tab: TabSpec | str | None = None, *, refresh: bool = False) -> QueueState:
        return await self.tabs.select(tab or self.tabs.active_tab, refresh=refresh)

    def items(self, tab: TabSpec | str | None = None) -> list[ModerationItem]:
        return self.store.items(tab or self.tabs.active_tab)

    def require_item(self, tab: TabSpec | str, item_id: str) -> ModerationItem:
        item = self.store.find(tab, item_id)
        if item is None:
            raise KeyError(f"{self.adapter.label} {item_id} is not loaded in tab {_name(tab)!r}")
        return item

    def dialog(self, tab: TabSpec | str, item_id: str, target_state: str) -> TransitionDialog:
        return TransitionDialog(item=self.require_item(tab, item_id), target_state=target_state)

    async def transition(
        self,
        tab: TabSpec | str,
        item_id: str,
        target_state: str,
        extra_fields: Mapping[str, object] | None = None,
    ) -> TransitionOutcome:
        resolved = tab if isinstance(tab, TabSpec) else self.adapter.tab(tab)
        item = self.require_item(resolved, item_id)
        return await self.controller.execute(self.adapter, resolved, item, target_state, extra_fields)

    async def approve(self, tab: TabSpec | str, item_id: str, **extra_fields: str) -> TransitionOutcome:
        return await self.transition(tab, item_id, ItemState.APPROVED.value, extra_fields)

    async def reject(self, tab: TabSpec | str, item_id: str, reason: str) -> TransitionOutcome:
        return await self.transition(tab, item_id, ItemState.REJECTED.value, {"reason": reason})

    def badge_counts(self) -> dict[str, int]:
        return self.tabs.badge_counts()


def _name(tab: TabSpec | str) -> str:
    return tab.name if isinstance(tab, TabSpec) else tab
