from __future__ import annotations

import asyncio

import pytest

from invest_admin.exceptions import FetchError
from invest_admin.models import PageInfo
from invest_admin.moderation.store import QueueStatus, QueueStore
from moderation_helpers import FakeAdapter, Gate, make_item, result


@pytest.mark.asyncio
async def test_load_twice_settles_on_same_items() -> None:
    adapter = FakeAdapter()
    adapter.script_fetch("pending", result(make_item("a"), make_item("b")), result(make_item("a"), make_item("b")))
    store = QueueStore(adapter)

    first, second = await asyncio.gather(store.load("pending"), store.load("pending"))

    assert first is second
    assert [item.id for item in store.items("pending")] == ["a", "b"]
    assert store.state_for("pending").status is QueueStatus.IDLE
    assert store.state_for("pending").loaded is True


@pytest.mark.asyncio
async def test_load_marks_loading_and_clears_previous_error() -> None:
    adapter = FakeAdapter()
    gate = Gate(result(make_item("a")))
    adapter.script_fetch("pending", FetchError(code="SERVER_ERROR", message="boom"), gate)
    store = QueueStore(adapter)
    await store.load("pending")
    assert store.state_for("pending").error_message == "boom"

    task = asyncio.create_task(store.load("pending"))
    await asyncio.sleep(0)
    assert store.state_for("pending").status is QueueStatus.LOADING
    assert store.state_for("pending").error_message is None

    gate.release()
    await task
    assert store.state_for("pending").status is QueueStatus.IDLE


@pytest.mark.asyncio
async def test_stale_page_response_is_discarded() -> None:
    adapter = FakeAdapter()
    page_one = Gate(result(make_item("p1-a", "approved"), pagination=PageInfo(page=1, total_pages=3, total_count=25)))
    page_two = Gate(result(make_item("p2-a", "approved"), pagination=PageInfo(page=2, total_pages=3, total_count=25)))
    adapter.script_fetch("all", page_one, page_two)
    store = QueueStore(adapter)

    first = asyncio.create_task(store.load("all", page=1))
    await asyncio.sleep(0)
    second = asyncio.create_task(store.load("all", page=2))
    await asyncio.sleep(0)

    page_two.release()
    await second
    page_one.release()
    await first

    state = store.state_for("all")
    assert [item.id for item in state.items] == ["p2-a"]
    assert state.pagination == PageInfo(page=2, total_pages=3, total_count=25)


@pytest.mark.asyncio
async def test_failed_load_keeps_last_good_items() -> None:
    adapter = FakeAdapter()
    adapter.script_fetch("pending", result(make_item("a")), FetchError(code="TRANSPORT_ERROR", message="offline"))
    store = QueueStore(adapter)

    await store.load("pending")
    state = await store.load("pending")

    assert state.status is QueueStatus.ERROR
    assert state.error_message == "offline"
    assert [item.id for item in state.items] == ["a"]


@pytest.mark.asyncio
async def test_stale_failure_does_not_overwrite_newer_success() -> None:
    adapter = FakeAdapter()
    failing = Gate(FetchError(code="SERVER_ERROR", message="late failure"))
    adapter.script_fetch("pending", failing, result(make_item("fresh")))
    store = QueueStore(adapter)

    stale = asyncio.create_task(store.load("pending"))
    await asyncio.sleep(0)
    await store.load("pending")
    failing.release()
    await stale

    state = store.state_for("pending")
    assert state.status is QueueStatus.IDLE
    assert state.error_message is None
    assert [item.id for item in state.items] == ["fresh"]


@pytest.mark.asyncio
async def test_abandoned_load_is_ignored() -> None:
    adapter = FakeAdapter()
    gate = Gate(result(make_item("late")))
    adapter.script_fetch("pending", gate)
    store = QueueStore(adapter)

    task = asyncio.create_task(store.load("pending"))
    await asyncio.sleep(0)
    store.abandon("pending")
    gate.release()
    await task

    assert store.items("pending") == []
    assert store.state_for("pending").status is QueueStatus.IDLE
    assert store.state_for("pending").loaded is False


@pytest.mark.asyncio
async def test_duplicate_ids_keep_first_occurrence() -> None:
    adapter = FakeAdapter()
    adapter.script_fetch("pending", result(make_item("a", amount=1), make_item("a", amount=2), make_item("b")))
    store = QueueStore(adapter)

    await store.load("pending")

    items = store.items("pending")
    assert [item.id for item in items] == ["a", "b"]
    assert items[0].payload["amount"] == 1


def test_patch_and_remove_item() -> None:
    store = QueueStore(FakeAdapter())
    store.replace_items("pending", [make_item("a"), make_item("b"), make_item("c")])

    patched = store.patch_item("pending", "b", lambda item: item.model_copy(update={"state": "approved"}))
    removed = store.remove_item("pending", "a")

    assert patched is not None and patched.state == "approved"
    assert removed is not None and removed.id == "a"
    assert [item.id for item in store.items("pending")] == ["b", "c"]
    assert store.remove_item("pending", "missing") is None
    assert store.patch_item("pending", "missing", lambda item: item) is None


def test_patch_item_cannot_change_identity() -> None:
    store = QueueStore(FakeAdapter())
    store.replace_items("pending", [make_item("a")])

    with pytest.raises(ValueError):
        store.patch_item("pending", "a", lambda item: item.model_copy(update={"id": "z"}))


def test_count_for_prefers_server_total_on_paginated_tabs() -> None:
    store = QueueStore(FakeAdapter())
    store.replace_items("all", [make_item("a", "approved")], PageInfo(page=1, total_pages=3, total_count=25))
    store.replace_items("pending", [make_item("b"), make_item("c")])

    assert store.count_for("all") == 25
    assert store.count_for("pending") == 2
    assert store.count_for("approved") == 0
