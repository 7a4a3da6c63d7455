from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import ModerationItem

EMPTY_VALUE = "—"
SEARCH_FIELDS = ("id", "owner_id", "owner_name", "owner_email")


def filter_items(items: Iterable[ModerationItem], search: str | None = None, state: str | None = None) -> list[ModerationItem]:
    """Case-insensitive search over owner fields and scalar payload values."""
    needle = (search or "").strip().lower()
    matches: list[ModerationItem] = []
    for item in items:
        if state is not None and item.state != state:
            continue
        if needle and not any(needle in text.lower() for text in _searchable_text(item)):
            continue
        matches.append(item)
    return matches


def sort_items(items: Iterable[ModerationItem], key: str | None, descending: bool = False) -> list[ModerationItem]:
    rows = list(items)
    if not key:
        return rows
    present = [item for item in rows if normalize_value(value_of(item, key)) != EMPTY_VALUE]
    missing = [item for item in rows if normalize_value(value_of(item, key)) == EMPTY_VALUE]
    present.sort(key=lambda item: _sort_key(value_of(item, key)), reverse=descending)
    return present + missing


def value_of(item: ModerationItem, key: str) -> Any:
    if key in ModerationItem.model_fields:
        return getattr(item, key)
    return item.payload.get(key)


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        return value.strip() or EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _sort_key(value: Any) -> tuple[int, float, str]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, float(value), "")
    return (1, 0.0, normalize_value(value).lower())


def _searchable_text(item: ModerationItem) -> Iterable[str]:
    for name in SEARCH_FIELDS:
        value = getattr(item, name)
        if value:
            yield str(value)
    yield from _scalar_values(item.payload, depth=1)


def _scalar_values(payload: dict[str, Any], depth: int) -> Iterable[str]:
    for value in payload.values():
        if isinstance(value, str):
            yield value
        elif isinstance(value, dict) and depth > 0:
            yield from _scalar_values(value, depth - 1)
