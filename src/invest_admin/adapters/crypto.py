from __future__ import annotations

from typing import Any

from ..models import ItemKind, ItemState, ModerationItem, TransitionRequest
from ..moderation.adapter import EntityAdapter, PaginationMode, TabSpec, normalize_state
from ._fields import first_text, require_text

CRYPTO_PATH = "/admin/crypto/requests"


class CryptoAdapter(EntityAdapter):
    entity = "crypto"
    label = "Crypto request"
    tabs = (
        TabSpec(name="pending", path=f"{CRYPTO_PATH}/pending", list_key="requests", state=ItemState.PENDING.value),
        TabSpec(
            name="approved",
            path=f"{CRYPTO_PATH}/approved",
            list_key="requests",
            state=ItemState.APPROVED.value,
            kind=ItemKind.HISTORY,
            pagination=PaginationMode.PAGINATED,
        ),
        TabSpec(
            name="rejected",
            path=f"{CRYPTO_PATH}/rejected",
            list_key="requests",
            state=ItemState.REJECTED.value,
            kind=ItemKind.HISTORY,
            pagination=PaginationMode.PAGINATED,
        ),
    )

    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        state = normalize_state(row.get("status"))
        return ModerationItem(
            id=require_text(row, "requestId", "_id"),
            owner_id=require_text(row, "userId"),
            owner_name=first_text(row, "userName"),
            owner_email=first_text(row, "userEmail"),
            state=state,
            kind=ItemKind.PENDING if state == ItemState.PENDING.value else kind,
            created_at=first_text(row, "createdAt"),
            payload=dict(row),
            rejection_reason=first_text(row, "rejectionReason"),
        )

    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        body: dict[str, Any] = {"userId": request.owner_id, "requestId": request.item_id}
        if request.target_state == ItemState.REJECTED.value:
            body["reason"] = request.extra_fields["reason"]
            return "POST", f"{CRYPTO_PATH}/reject", body
        return "POST", f"{CRYPTO_PATH}/approve", body
