from __future__ import annotations

from ..models import ModerationItem
from .adapter import TabSpec
from .store import QueueState, QueueStore


class TabCoordinator:
    def __init__(self, store: QueueStore, summary_counts: dict[str, int] | None = None) -> None:
        self.store = store
        self.tabs: tuple[TabSpec, ...] = store.adapter.tabs
        self.active_tab: TabSpec = self.tabs[0]
        self._summary_counts: dict[str, int] = dict(summary_counts or {})

    async def select(self, tab: TabSpec | str, *, refresh: bool = False) -> QueueState:
        resolved = tab if isinstance(tab, TabSpec) else self.store.adapter.tab(tab)
        self.active_tab = resolved
        state = self.store.state_for(resolved)
        if refresh or not state.loaded:
            return await self.store.load(resolved, _current_page(state))
        return state

    async def refresh(self) -> QueueState:
        return await self.select(self.active_tab, refresh=True)

    def active_items(self) -> list[ModerationItem]:
        return self.store.items(self.active_tab)

    def set_summary_count(self, tab: str, count: int) -> None:
        self._summary_counts[tab] = max(0, int(count))

    def badge_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for tab in self.tabs:
            if self.store.state_for(tab).loaded:
                counts[tab.name] = self.store.count_for(tab)
            else:
                counts[tab.name] = self._summary_counts.get(tab.name, 0)
        return counts


def _current_page(state: QueueState) -> int | None:
    return state.pagination.page if state.pagination is not None else None
