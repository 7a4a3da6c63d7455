from __future__ import annotations

from typing import Any

from ..envelope import read_message
from ..error_mapper import to_transition_error
from ..exceptions import ApiError, ValidationError
from ..logger import log_action
from ..models import ItemKind, ItemState, ModerationItem, TransitionRequest
from ..moderation.adapter import EntityAdapter, TabSpec, logger, normalize_state
from ._fields import first_text, require_text


def _is_used(item: ModerationItem) -> bool:
    return bool(item.payload.get("isUsed"))


class TpinAdapter(EntityAdapter):
    """Transaction PIN purchase requests and the issued-PIN history."""

    entity = "tpins"
    label = "TPIN"
    tabs = (
        TabSpec(name="pending", path="/admin/tpin/pending", list_key="pendingRequests", state=ItemState.PENDING.value),
        TabSpec(name="history", path="/admin/tpins", list_key="tpins", kind=ItemKind.HISTORY),
        TabSpec(name="used", path="/admin/tpins", list_key="tpins", kind=ItemKind.HISTORY, predicate=_is_used),
    )

    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        if kind is ItemKind.PENDING:
            tpin = row.get("tpin")
            if not isinstance(tpin, dict):
                raise TypeError("pending request has no tpin object")
            return ModerationItem(
                id=require_text(tpin, "_id"),
                owner_id=require_text(row, "userId"),
                owner_name=first_text(row, "userName"),
                owner_email=first_text(row, "userEmail"),
                state=normalize_state(tpin.get("status")),
                kind=ItemKind.PENDING,
                created_at=first_text(tpin, "purchaseDate", "createdAt"),
                payload=dict(row),
            )
        return ModerationItem(
            id=require_text(row, "_id"),
            owner_id=require_text(row, "userId"),
            owner_name=first_text(row, "userName"),
            owner_email=first_text(row, "userEmail"),
            state=normalize_state(row.get("status")),
            kind=ItemKind.HISTORY,
            created_at=first_text(row, "purchaseDate", "createdAt"),
            payload=dict(row),
            rejection_reason=first_text(row, "rejectionReason"),
        )

    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        body: dict[str, Any] = {"userId": request.owner_id, "tpinId": request.item_id}
        if request.target_state == ItemState.REJECTED.value:
            body["reason"] = request.extra_fields["reason"]
            return "POST", "/admin/tpin/reject", body
        return "POST", "/admin/tpin/approve", body

    async def generate(self, user_id: str, quantity: int, reason: str) -> str:
        """Issue ``quantity`` PINs to ``user_id`` outside the request flow."""
        field_errors: dict[str, str] = {}
        if not str(user_id or "").strip():
            field_errors["userId"] = "userId is required"
        if not isinstance(quantity, int) or quantity < 1:
            field_errors["quantity"] = "quantity must be at least 1"
        if not str(reason or "").strip():
            field_errors["reason"] = "reason is required"
        if field_errors:
            raise ValidationError(code="VALIDATION_ERROR", message="Invalid TPIN generation request", field_errors=field_errors)

        body = {"userId": user_id.strip(), "quantity": quantity, "reason": reason.strip()}
        try:
            payload = await self.session.request("POST", "/admin/tpin/generate", json_body=body)
        except ApiError as error:
            log_action(logger, self.entity, "generate", outcome="error", trace_id=error.trace_id, code=error.code, user_id=user_id)
            raise to_transition_error(error) from error
        log_action(logger, self.entity, "generate", outcome="success", user_id=user_id, quantity=quantity)
        return read_message(payload) or f"{quantity} TPIN(s) generated successfully for user {user_id.strip()}!"
