from __future__ import annotations

from typing import Any

from .exceptions import ApiError
from .models import PageInfo

SUCCESS_STATUSES = {"success", "ok"}


def unwrap_envelope(payload: Any) -> dict[str, Any]:
    """Return the ``data`` block of a ``{status, data}`` response or raise ApiError."""
    if not isinstance(payload, dict):
        raise ApiError(code="MALFORMED_ENVELOPE", message="Response is not a JSON object", raw_payload=payload)
    status = str(payload.get("status") or "").strip().lower()
    if status not in SUCCESS_STATUSES:
        message = payload.get("message") or "Response is missing a success status"
        raise ApiError(code="MALFORMED_ENVELOPE", message=str(message), raw_payload=payload)
    data = payload.get("data")
    if not isinstance(data, dict):
        raise ApiError(code="MALFORMED_ENVELOPE", message="Response is missing the data envelope", raw_payload=payload)
    return data


def read_rows(data: dict[str, Any], list_key: str) -> list[dict[str, Any]]:
    rows = data.get(list_key)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise ApiError(code="MALFORMED_ENVELOPE", message=f"Expected a list under data.{list_key}")
    return [row for row in rows if isinstance(row, dict)]


def read_message(payload: Any) -> str:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str):
            return message.strip()
    return ""


def read_pagination(payload: dict[str, Any], data: dict[str, Any], *, page: int, page_size: int, row_count: int) -> PageInfo:
    """Read paging metadata from ``data`` first, then from the top level."""
    current = _first_int(data, payload, keys=("currentPage", "page")) or page
    total_pages = _first_int(data, payload, keys=("totalPages",))
    total_count = _first_int(data, payload, keys=("totalCount", "total"))

    if total_pages is None:
        if total_count is not None:
            total_pages = max(1, -(-total_count // max(1, page_size)))
        else:
            total_pages = max(1, current)
    if total_count is None:
        total_count = row_count
    return PageInfo(page=max(1, current), total_pages=max(1, total_pages), total_count=max(0, total_count))


def _first_int(*sources: dict[str, Any], keys: tuple[str, ...]) -> int | None:
    for source in sources:
        for key in keys:
            value = _to_int(source.get(key))
            if value is not None:
                return value
    return None


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
