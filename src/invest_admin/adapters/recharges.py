from __future__ import annotations

from typing import Any

from ..models import ItemKind, ItemState, ModerationItem, TransitionRequest
from ..moderation.adapter import EntityAdapter, PaginationMode, TabSpec, normalize_state
from ._fields import first_text, require_text

RECHARGES_PATH = "/admin/investment/recharges"


class RechargesAdapter(EntityAdapter):
    """Investment wallet recharges; history tabs are server-paginated."""

    entity = "recharges"
    label = "Investment recharge"
    tabs = (
        TabSpec(name="pending", path=f"{RECHARGES_PATH}/pending", list_key="recharges", state=ItemState.PENDING.value),
        TabSpec(
            name="approved",
            path=f"{RECHARGES_PATH}/approved",
            list_key="recharges",
            state=ItemState.APPROVED.value,
            kind=ItemKind.HISTORY,
            pagination=PaginationMode.PAGINATED,
        ),
        TabSpec(
            name="rejected",
            path=f"{RECHARGES_PATH}/rejected",
            list_key="recharges",
            state=ItemState.REJECTED.value,
            kind=ItemKind.HISTORY,
            pagination=PaginationMode.PAGINATED,
        ),
    )

    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        state = normalize_state(row.get("status"))
        return ModerationItem(
            id=require_text(row, "_id", "paymentId"),
            owner_id=require_text(row, "userId"),
            owner_name=first_text(row, "userName"),
            owner_email=first_text(row, "userEmail"),
            state=state,
            kind=ItemKind.PENDING if state == ItemState.PENDING.value else kind,
            created_at=first_text(row, "date", "createdAt"),
            payload=dict(row),
            rejection_reason=first_text(row, "rejectionReason"),
        )

    def reference_of(self, item: ModerationItem) -> str:
        return first_text(item.payload, "paymentId") or item.id

    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        base = f"{RECHARGES_PATH}/{request.owner_id}/{request.item_id}"
        if request.target_state == ItemState.REJECTED.value:
            return "POST", f"{base}/reject", {"reason": request.extra_fields["reason"]}
        return "POST", f"{base}/approve", None
