from __future__ import annotations

from .adapter import TabSpec
from .store import QueueStore


class PaginationController:
    """Page navigation for server-paginated tabs.

    Bounds come from the last successful fetch only; before any fetch only
    page 1 is reachable.
    """

    def __init__(self, store: QueueStore) -> None:
        self.store = store

    def _resolve(self, tab: TabSpec | str) -> TabSpec:
        return tab if isinstance(tab, TabSpec) else self.store.adapter.tab(tab)

    def current_page(self, tab: TabSpec | str) -> int:
        pagination = self.store.state_for(tab).pagination
        return pagination.page if pagination else 1

    def total_pages(self, tab: TabSpec | str) -> int:
        pagination = self.store.state_for(tab).pagination
        return pagination.total_pages if pagination else 1

    async def go_to_page(self, tab: TabSpec | str, page: int) -> bool:
        resolved = self._resolve(tab)
        if not resolved.paginated:
            return False
        if page < 1 or page > self.total_pages(resolved):
            return False
        await self.store.load(resolved, page)
        return True

    async def next_page(self, tab: TabSpec | str) -> bool:
        return await self.go_to_page(tab, self.current_page(tab) + 1)

    async def previous_page(self, tab: TabSpec | str) -> bool:
        return await self.go_to_page(tab, self.current_page(tab) - 1)
