from __future__ import annotations

from typing import Any

from ..models import ItemKind, ItemState, ModerationItem, TransitionRequest
from ..moderation.adapter import EntityAdapter, TabSpec
from ._fields import first_text, require_text

USERS_PATH = "/admin/users"


def _account_state(row: dict[str, Any]) -> str:
    return ItemState.ACTIVE.value if row.get("isActive", True) else ItemState.BLOCKED.value


class AccountsAdapter(EntityAdapter):
    """User accounts: block moves active to blocked, activate moves back."""

    entity = "accounts"
    label = "User"
    transitions = {
        ItemState.ACTIVE.value: (ItemState.BLOCKED.value,),
        ItemState.BLOCKED.value: (ItemState.ACTIVE.value,),
    }
    negative_states = frozenset({ItemState.BLOCKED.value})
    tabs = (
        TabSpec(name="all", path=USERS_PATH, list_key="users", kind=ItemKind.HISTORY),
        TabSpec(name="active", path=USERS_PATH, list_key="users", state=ItemState.ACTIVE.value, kind=ItemKind.HISTORY),
        TabSpec(name="blocked", path=USERS_PATH, list_key="users", state=ItemState.BLOCKED.value, kind=ItemKind.HISTORY),
    )

    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        account_id = require_text(row, "_id", "userId")
        return ModerationItem(
            id=account_id,
            owner_id=first_text(row, "userId") or account_id,
            owner_name=first_text(row, "name"),
            owner_email=first_text(row, "email"),
            state=_account_state(row),
            kind=ItemKind.HISTORY,
            created_at=first_text(row, "createdAt"),
            payload=dict(row),
        )

    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        if request.target_state == ItemState.BLOCKED.value:
            return "POST", f"{USERS_PATH}/{request.item_id}/deactivate", {"reason": request.extra_fields["reason"]}
        return "POST", f"{USERS_PATH}/{request.item_id}/activate", None

    def default_message(self, target_state: str, item: ModerationItem) -> str:
        verb = "deactivated" if target_state == ItemState.BLOCKED.value else "activated"
        return f"User {item.owner_name or item.id} has been {verb} successfully!"
