from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from ..envelope import read_message, read_pagination, read_rows, unwrap_envelope
from ..error_mapper import to_fetch_error, to_transition_error
from ..exceptions import ApiError, FetchError
from ..logger import get_logger, log_action
from ..models import FetchResult, ItemKind, ItemState, ModerationItem, TransitionRequest
from ..session import AdminSession
from .notifications import Severity

logger = get_logger("invest_admin.adapters")

ItemPredicate = Callable[[ModerationItem], bool]


class PaginationMode(str, Enum):
    UNPAGINATED = "unpaginated"
    PAGINATED = "paginated"


@dataclass(frozen=True)
class TabSpec:
    """A named view over one lifecycle state (``state=None`` shows every state)."""

    name: str
    path: str
    list_key: str
    state: str | None = None
    kind: ItemKind = ItemKind.PENDING
    pagination: PaginationMode = PaginationMode.UNPAGINATED
    predicate: ItemPredicate | None = None
    params: tuple[tuple[str, str], ...] = ()

    @property
    def paginated(self) -> bool:
        return self.pagination is PaginationMode.PAGINATED

    @property
    def pending_only(self) -> bool:
        return self.state == ItemState.PENDING.value

    def accepts(self, item: ModerationItem) -> bool:
        if self.state is not None and item.state != self.state:
            return False
        return self.predicate is None or self.predicate(item)


class EntityAdapter(ABC):
    """Per-entity wiring for the moderation engine.

    Subclasses declare their tabs, the fields each transition needs and how to
    turn a raw row into a :class:`ModerationItem`; the network handling and the
    conversion of transport errors into ``FetchError``/``TransitionError`` live
    here so no ``ApiError`` leaves an adapter.
    """

    entity: ClassVar[str]
    label: ClassVar[str]
    tabs: ClassVar[tuple[TabSpec, ...]]
    approve_fields: ClassVar[tuple[str, ...]] = ()
    transitions: ClassVar[dict[str, tuple[str, ...]]] = {
        ItemState.PENDING.value: (ItemState.APPROVED.value, ItemState.REJECTED.value),
    }
    negative_states: ClassVar[frozenset[str]] = frozenset({ItemState.REJECTED.value})

    def __init__(self, session: AdminSession, page_size: int | None = None) -> None:
        self.session = session
        self.page_size = page_size or session.page_size

    def tab(self, name: str) -> TabSpec:
        for tab in self.tabs:
            if tab.name == name:
                return tab
        raise KeyError(f"{self.entity} has no tab named {name!r}")

    async def fetch_page(self, tab: TabSpec, page: int | None = None) -> FetchResult:
        params: dict[str, Any] = dict(tab.params)
        requested_page = 1
        if tab.paginated:
            requested_page = max(1, page or 1)
            params.update({"page": requested_page, "limit": self.page_size})
        try:
            payload = await self.session.request("GET", tab.path, params=params or None)
            data = unwrap_envelope(payload)
            rows = read_rows(data, tab.list_key)
            items = [item for item in (self.parse_item(row, tab.kind) for row in rows) if tab.accepts(item)]
        except ApiError as error:
            log_action(
                logger,
                self.entity,
                f"fetch:{tab.name}",
                outcome="error",
                trace_id=error.trace_id,
                request_id=self.session.http.trace.last_request_id,
                code=error.code,
            )
            raise to_fetch_error(error, message=f"Failed to load {tab.name} {self.label.lower()}s. {error.message}".strip()) from error
        except (KeyError, TypeError, ValueError) as error:
            log_action(logger, self.entity, f"fetch:{tab.name}", outcome="error", code="MALFORMED_ROW")
            raise FetchError(code="MALFORMED_ROW", message=f"Unexpected {self.label.lower()} record: {error}") from error

        pagination = None
        if tab.paginated:
            pagination = read_pagination(payload, data, page=requested_page, page_size=self.page_size, row_count=len(items))
        log_action(logger, self.entity, f"fetch:{tab.name}", outcome="success", rows=len(items), **self.session.http.trace.log_fields())
        return FetchResult(items=items, pagination=pagination)

    def required_fields_for(self, target_state: str) -> tuple[str, ...]:
        if target_state in self.negative_states:
            return ("reason",)
        return self.approve_fields

    def allowed_targets(self, state: str) -> tuple[str, ...]:
        return self.transitions.get(state, ())

    def identity_key_of(self, item: ModerationItem) -> str:
        return f"{self.entity}:{item.id}"

    def reference_of(self, item: ModerationItem) -> str:
        """Id the remote API expects for transitions on ``item``."""
        return item.id

    def tone_for(self, target_state: str) -> Severity:
        return Severity.INFO if target_state in self.negative_states else Severity.SUCCESS

    def default_message(self, target_state: str, item: ModerationItem) -> str:
        return f"{self.label} {item.id} has been {target_state} successfully!"

    async def transition(self, request: TransitionRequest) -> str:
        method, path, body = self.transition_call(request)
        headers = {"Idempotency-Key": request.idempotency_key} if request.idempotency_key else None
        try:
            payload = await self.session.request(method, path, json_body=body, headers=headers)
        except ApiError as error:
            log_action(
                logger,
                self.entity,
                f"transition:{request.target_state}",
                outcome="error",
                trace_id=error.trace_id,
                request_id=self.session.http.trace.last_request_id,
                code=error.code,
                item_id=request.item_id,
            )
            raise to_transition_error(error) from error
        log_action(
            logger,
            self.entity,
            f"transition:{request.target_state}",
            outcome="success",
            item_id=request.item_id,
            **self.session.http.trace.log_fields(),
        )
        return read_message(payload)

    @abstractmethod
    def transition_call(self, request: TransitionRequest) -> tuple[str, str, dict[str, Any] | None]:
        """Return ``(method, path, body)`` for ``request``."""

    @abstractmethod
    def parse_item(self, row: dict[str, Any], kind: ItemKind) -> ModerationItem:
        raise NotImplementedError


def normalize_state(raw: Any, aliases: dict[str, str] | None = None) -> str:
    value = str(raw or "").strip().lower() or ItemState.PENDING.value
    return (aliases or {}).get(value, value)
