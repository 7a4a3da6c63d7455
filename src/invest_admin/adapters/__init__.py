from __future__ import annotations

from ..moderation.adapter import EntityAdapter
from ..session import AdminSession
from .accounts import AccountsAdapter
from .crypto import CryptoAdapter
from .payments import PaymentsAdapter
from .recharges import RechargesAdapter
from .tpins import TpinAdapter
from .withdrawals import WithdrawalsAdapter

ADAPTERS: dict[str, type[EntityAdapter]] = {
    adapter.entity: adapter
    for adapter in (
        PaymentsAdapter,
        TpinAdapter,
        WithdrawalsAdapter,
        RechargesAdapter,
        CryptoAdapter,
        AccountsAdapter,
    )
}


def build_adapter(entity: str, session: AdminSession, page_size: int | None = None) -> EntityAdapter:
    try:
        adapter_cls = ADAPTERS[entity]
    except KeyError as exc:
        raise KeyError(f"Unknown entity {entity!r}; expected one of {', '.join(sorted(ADAPTERS))}") from exc
    return adapter_cls(session, page_size=page_size)


def build_adapters(session: AdminSession, page_size: int | None = None) -> dict[str, EntityAdapter]:
    return {entity: build_adapter(entity, session, page_size) for entity in ADAPTERS}


__all__ = [
    "ADAPTERS",
    "AccountsAdapter",
    "CryptoAdapter",
    "PaymentsAdapter",
    "RechargesAdapter",
    "TpinAdapter",
    "WithdrawalsAdapter",
    "build_adapter",
    "build_adapters",
]
