from __future__ import annotations

from typing import Any

from ..models import ItemKind, ItemState, ModerationItem, TransitionRequest
from ..moderation.adapter import EntityAdapter, PaginationMode, TabSpec, normalize_state
from ._fields import first_text, require_text

WITHDRAWALS_PATH = "/admin/withdrawals"


class WithdrawalsAdapter(EntityAdapter):
    entity = "withdrawals"
    label = "Withdrawal"
    approve_fields = ("transactionId",)
    tabs = (
        TabSpec(
            name="pending",
            path=WITHDRAWALS_PATH,
            list_key="withdrawals",
            state=ItemState.PENDING.value,
            params=(("status", ItemState.PENDING.value),),
        ),
        TabSpec(
            name="all",
            path=WITHDRAWALS_PATH,
            list_key="withdrawals",
            kind=ItemKind.HISTORY,
            pagination=PaginationMode.PAGINATED,
        ),
    )

    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        state = normalize_state(row.get("status"))
        return ModerationItem(
            id=require_text(row, "_id"),
            owner_id=require_text(row, "userId"),
            owner_name=first_text(row, "userName"),
            owner_email=first_text(row, "userEmail"),
            state=state,
            kind=ItemKind.PENDING if state == ItemState.PENDING.value else kind,
            created_at=first_text(row, "requestDate", "createdAt"),
            payload=dict(row),
            rejection_reason=first_text(row, "rejectionReason"),
        )

    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        if request.target_state == ItemState.REJECTED.value:
            return "POST", f"{WITHDRAWALS_PATH}/reject", {
                "withdrawalId": request.item_id,
                "reason": request.extra_fields["reason"],
            }
        return "POST", f"{WITHDRAWALS_PATH}/approve", {
            "userId": request.owner_id,
            "withdrawalId": request.item_id,
            "transactionId": request.extra_fields["transactionId"],
        }
