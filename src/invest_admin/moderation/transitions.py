from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..exceptions import DuplicateSubmissionError, TransitionError, ValidationError
from ..logger import get_logger, log_action
from ..models import ItemState, ModerationItem, TransitionRequest
from .adapter import EntityAdapter, TabSpec
from .notifications import NotificationChannel, Severity
from .store import QueueStore

logger = get_logger("invest_admin.transitions")

_VERBS = {
    ItemState.APPROVED.value: "approve",
    ItemState.REJECTED.value: "reject",
    ItemState.ACTIVE.value: "activate",
    ItemState.BLOCKED.value: "block",
}


@dataclass(frozen=True)
class TransitionOutcome:
    succeeded: bool
    message: str
    item: ModerationItem
    error: TransitionError | None = None


def _attempt_key(adapter: EntityAdapter, item: ModerationItem, target: str) -> str:
    return f"{adapter.identity_key_of(item)}:{target}"


def validate_extra_fields(adapter: EntityAdapter, target_state: str, extra_fields: Mapping[str, object]) -> dict[str, str]:
    field_errors: dict[str, str] = {}
    cleaned: dict[str, str] = {}
    for name in adapter.required_fields_for(target_state):
        value = extra_fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            field_errors[name] = f"{name} is required"
            continue
        cleaned[name] = value.strip() if isinstance(value, str) else str(value)
    if field_errors:
        missing = ", ".join(sorted(field_errors))
        raise ValidationError(code="VALIDATION_ERROR", message=f"Missing required fields: {missing}", field_errors=field_errors)
    for name, value in extra_fields.items():
        if name not in cleaned and value is not None:
            cleaned[name] = value.strip() if isinstance(value, str) else str(value)
    return cleaned


class TransitionController:
    """Runs approve/reject style transitions for one entity queue.

    Each controller owns its own processing set; a key stays in it from the
    moment the network call starts until it settles.
    """

    def __init__(self, store: QueueStore, notifications: NotificationChannel) -> None:
        self.store = store
        self.notifications = notifications
        self._processing: set[str] = set()
        self._attempt_keys: dict[str, str] = {}

    def is_processing(self, adapter: EntityAdapter, item: ModerationItem) -> bool:
        return adapter.identity_key_of(item) in self._processing

    def discard_attempt(self, adapter: EntityAdapter, item: ModerationItem, target_state: str) -> None:
        """Forget the idempotency key kept for an abandoned transition."""
        target = str(getattr(target_state, "value", target_state))
        self._attempt_keys.pop(_attempt_key(adapter, item, target), None)

    async def execute(
        self,
        adapter: EntityAdapter,
        tab: TabSpec,
        item: ModerationItem,
        target_state: str,
        extra_fields: Mapping[str, object] | None = None,
    ) -> TransitionOutcome:
        target = str(getattr(target_state, "value", target_state))
        if target not in adapter.allowed_targets(item.state):
            raise ValidationError(
                code="INVALID_TRANSITION",
                message=f"Cannot move {adapter.label.lower()} {item.id} from {item.state} to {target}",
            )
        fields = validate_extra_fields(adapter, target, extra_fields or {})

        key = adapter.identity_key_of(item)
        if key in self._processing:
            log_action(logger, adapter.entity, f"transition:{target}", outcome="duplicate", item_id=item.id)
            raise DuplicateSubmissionError(identity_key=key)

        attempt_key = _attempt_key(adapter, item, target)
        idempotency_key = self._attempt_keys.setdefault(attempt_key, str(uuid.uuid4()))
        request = TransitionRequest(
            item_id=adapter.reference_of(item),
            owner_id=item.owner_id,
            target_state=target,
            extra_fields=fields,
            idempotency_key=idempotency_key,
        )

        self._processing.add(key)
        try:
            server_message = await adapter.transition(request)
        except TransitionError as error:
            verb = _VERBS.get(target, "update")
            message = f"Failed to {verb} {adapter.label.lower()}. {error.message}".strip()
            self.notifications.show(message, Severity.ERROR)
            return TransitionOutcome(succeeded=False, message=message, item=item, error=error)
        finally:
            self._processing.discard(key)

        self._attempt_keys.pop(attempt_key, None)
        reconciled = self._reconcile(tab, item, target, fields)
        message = server_message or adapter.default_message(target, item)
        self.notifications.show(message, adapter.tone_for(target))
        return TransitionOutcome(succeeded=True, message=message, item=reconciled)

    def _reconcile(self, tab: TabSpec, item: ModerationItem, target: str, fields: dict[str, str]) -> ModerationItem:
        update: dict[str, object] = {"state": target}
        if target == ItemState.REJECTED.value:
            update["rejection_reason"] = fields.get("reason")
        patched = item.model_copy(update=update)
        if tab.state is not None and tab.state != target:
            self.store.remove_item(tab, item.id)
        else:
            self.store.patch_item(tab, item.id, lambda current: current.model_copy(update=update))
        return patched


@dataclass
class TransitionDialog:
    """Confirmation dialog state; typed fields survive failed submissions."""

    item: ModerationItem
    target_state: str
    fields: dict[str, str] = field(default_factory=dict)
    field_errors: dict[str, str] = field(default_factory=dict)
    is_open: bool = True
    last_error: str | None = None
    _failed_with: tuple[TransitionController, EntityAdapter] | None = field(default=None, repr=False, compare=False)

    def set_field(self, name: str, value: str) -> None:
        self.fields[name] = value
        self.field_errors.pop(name, None)

    async def submit(self, controller: TransitionController, adapter: EntityAdapter, tab: TabSpec) -> TransitionOutcome | None:
        if not self.is_open:
            return None
        try:
            outcome = await controller.execute(adapter, tab, self.item, self.target_state, self.fields)
        except ValidationError as error:
            self.field_errors = dict(error.field_errors)
            self.last_error = error.message
            return None
        except DuplicateSubmissionError:
            return None
        if outcome.succeeded:
            self._failed_with = None
            self.close()
        else:
            self._failed_with = (controller, adapter)
            self.last_error = outcome.message
        return outcome

    def close(self) -> None:
        if self._failed_with is not None:
            controller, adapter = self._failed_with
            controller.discard_attempt(adapter, self.item, self.target_state)
            self._failed_with = None
        self.is_open = False
        self.fields = {}
        self.field_errors = {}
        self.last_error = None
