from __future__ import annotations

from typing import Any

from ..models import ItemKind, ItemState, ModerationItem, TransitionRequest
from ..moderation.adapter import EntityAdapter, TabSpec, normalize_state
from ._fields import first_text, require_text

PAYMENTS_PATH = "/admin/payments"

_STATE_ALIASES = {"verified": ItemState.APPROVED.value}


class PaymentsAdapter(EntityAdapter):
    """Manual payment proofs uploaded by users."""

    entity = "payments"
    label = "Payment"
    tabs = (
        TabSpec(name="pending", path=PAYMENTS_PATH, list_key="payments", state=ItemState.PENDING.value),
        TabSpec(name="all", path=PAYMENTS_PATH, list_key="payments", kind=ItemKind.HISTORY),
        TabSpec(
            name="approved",
            path=f"{PAYMENTS_PATH}/approved",
            list_key="approvedPayments",
            state=ItemState.APPROVED.value,
            kind=ItemKind.HISTORY,
        ),
    )

    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        state = normalize_state(row.get("status"), _STATE_ALIASES)
        return ModerationItem(
            id=require_text(row, "_id", "paymentId"),
            owner_id=require_text(row, "userId"),
            owner_name=first_text(row, "userName"),
            owner_email=first_text(row, "userEmail"),
            state=state,
            kind=ItemKind.PENDING if state == ItemState.PENDING.value else kind,
            created_at=first_text(row, "date", "createdAt"),
            payload=dict(row),
            rejection_reason=first_text(row, "rejectionReason", "reason"),
        )

    def reference_of(self, item: ModerationItem) -> str:
        return first_text(item.payload, "paymentId") or item.id

    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        body: dict[str, Any] = {"userId": request.owner_id, "paymentId": request.item_id}
        if request.target_state == ItemState.REJECTED.value:
            body["reason"] = request.extra_fields["reason"]
            return "POST", f"{PAYMENTS_PATH}/reject", body
        return "POST", f"{PAYMENTS_PATH}/approve", body

    def default_message(self, target_state: str, item: ModerationItem) -> str:
        return f"Payment {self.reference_of(item)} has been {target_state} successfully!"
