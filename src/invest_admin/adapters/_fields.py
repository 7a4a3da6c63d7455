from __future__ import annotations

from typing import Any


def first_text(row: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def require_text(row: dict[str, Any], *keys: str) -> str:
    value = first_text(row, *keys)
    if value is None:
        raise KeyError(f"missing {' / '.join(keys)}")
    return value
