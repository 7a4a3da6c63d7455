from __future__ import annotations

import pytest

from invest_admin.models import PageInfo
from invest_admin.moderation.pagination import PaginationController
from invest_admin.moderation.store import QueueStore
from moderation_helpers import FakeAdapter, make_item, result


def _page(number: int) -> object:
    return result(make_item(f"item-{number}", "approved"), pagination=PageInfo(page=number, total_pages=3, total_count=25))


@pytest.mark.asyncio
async def test_go_to_page_respects_bounds() -> None:
    adapter = FakeAdapter()
    adapter.script_fetch("all", _page(2), _page(1))
    store = QueueStore(adapter)
    pages = PaginationController(store)
    await store.load("all", page=2)

    assert pages.current_page("all") == 2
    assert await pages.go_to_page("all", 4) is False
    assert await pages.go_to_page("all", 0) is False
    assert adapter.fetch_calls == [("all", 2)]

    assert await pages.go_to_page("all", 1) is True
    assert adapter.fetch_calls[-1] == ("all", 1)
    assert pages.current_page("all") == 1
    assert store.state_for("all").pagination.total_count == 25


@pytest.mark.asyncio
async def test_next_and_previous_page() -> None:
    adapter = FakeAdapter()
    adapter.script_fetch("all", _page(1), _page(2), _page(3), _page(2))
    store = QueueStore(adapter)
    pages = PaginationController(store)
    await store.load("all")

    assert await pages.previous_page("all") is False
    assert await pages.next_page("all") is True
    assert await pages.next_page("all") is True
    assert await pages.next_page("all") is False
    assert await pages.previous_page("all") is True
    assert pages.current_page("all") == 2


@pytest.mark.asyncio
async def test_before_any_fetch_only_first_page_is_reachable() -> None:
    adapter = FakeAdapter()
    adapter.script_fetch("all", _page(1))
    pages = PaginationController(QueueStore(adapter))

    assert pages.total_pages("all") == 1
    assert await pages.go_to_page("all", 2) is False
    assert await pages.go_to_page("all", 1) is True


@pytest.mark.asyncio
async def test_unpaginated_tabs_ignore_navigation() -> None:
    adapter = FakeAdapter()
    pages = PaginationController(QueueStore(adapter))

    assert await pages.go_to_page("pending", 1) is False
    assert adapter.fetch_calls == []
