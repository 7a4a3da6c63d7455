from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ItemState(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    USED = "used"
    ACTIVE = "active"
    BLOCKED = "blocked"


class ItemKind(str, Enum):
    PENDING = "pending"
    HISTORY = "history"


class ModerationItem(BaseModel):
    """Entity-agnostic row in a moderation queue. ``payload`` is opaque to the engine."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    owner_name: str | None = None
    owner_email: str | None = None
    state: str
    kind: ItemKind = ItemKind.PENDING
    created_at: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    rejection_reason: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_reason_while_pending(cls, values: Any) -> Any:
        if isinstance(values, dict) and str(values.get("state") or "").lower() == ItemState.PENDING.value:
            values = {**values, "rejection_reason": None}
        return values


@dataclass(frozen=True)
class PageInfo:
    page: int
    total_pages: int
    total_count: int


@dataclass(frozen=True)
class FetchResult:
    items: list[ModerationItem] = field(default_factory=list)
    pagination: PageInfo | None = None


@dataclass(frozen=True)
class TransitionRequest:
    item_id: str
    owner_id: str
    target_state: str
    extra_fields: dict[str, str] = field(default_factory=dict)
    idempotency_key: str | None = None
