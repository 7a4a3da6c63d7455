from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any

from .adapters import ADAPTERS, TpinAdapter, build_adapter
from .clients import DashboardClient, InvestmentClient, MlmClient
from .config import AdminConfig, ConfigError, load_config
from .error_mapper import to_user_message
from .exceptions import ApiError, ModerationError, ValidationError
from .http_client import HttpClient
from .listing import filter_items, sort_items
from .logger import set_level
from .moderation import ModerationQueue, NotificationChannel
from .session import AdminSession, AuthClient

STATS_SOURCES = ("dashboard", "mlm", "top-performers", "investment")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="invest-admin", description="Moderation queues for the investment admin API.")
    parser.add_argument("--env-file", default=None, help="Optional .env file to load before reading config")
    parser.add_argument("--email", default=None, help="Admin email (default: $INVEST_ADMIN_EMAIL)")
    parser.add_argument("--password", default=None, help="Admin password (default: $INVEST_ADMIN_PASSWORD)")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List one tab of an entity queue")
    list_cmd.add_argument("entity", choices=sorted(ADAPTERS))
    list_cmd.add_argument("--tab", default=None)
    list_cmd.add_argument("--page", type=int, default=None)
    list_cmd.add_argument("--search", default=None)
    list_cmd.add_argument("--state", default=None)
    list_cmd.add_argument("--sort", default=None)
    list_cmd.add_argument("--desc", action="store_true")

    approve_cmd = commands.add_parser("approve", help="Approve a pending item")
    approve_cmd.add_argument("entity", choices=sorted(set(ADAPTERS) - {"accounts"}))
    approve_cmd.add_argument("item_id")
    approve_cmd.add_argument("--tab", default="pending")
    approve_cmd.add_argument("--transaction-id", dest="transaction_id", default=None)

    reject_cmd = commands.add_parser("reject", help="Reject a pending item")
    reject_cmd.add_argument("entity", choices=sorted(set(ADAPTERS) - {"accounts"}))
    reject_cmd.add_argument("item_id")
    reject_cmd.add_argument("--reason", required=True)
    reject_cmd.add_argument("--tab", default="pending")

    block_cmd = commands.add_parser("block", help="Deactivate a user account")
    block_cmd.add_argument("item_id")
    block_cmd.add_argument("--reason", required=True)

    activate_cmd = commands.add_parser("activate", help="Reactivate a blocked user account")
    activate_cmd.add_argument("item_id")

    generate_cmd = commands.add_parser("generate-tpin", help="Issue TPINs directly to a user")
    generate_cmd.add_argument("user_id")
    generate_cmd.add_argument("--quantity", type=int, default=1)
    generate_cmd.add_argument("--reason", required=True)

    stats_cmd = commands.add_parser("stats", help="Show read-only platform statistics")
    stats_cmd.add_argument("source", choices=STATS_SOURCES)
    return parser


def _credentials(args: argparse.Namespace) -> tuple[str, str]:
    email = args.email or os.getenv("INVEST_ADMIN_EMAIL") or ""
    password = args.password or os.getenv("INVEST_ADMIN_PASSWORD") or ""
    return email, password


async def _open_queue(entity: str, session: AdminSession, config: AdminConfig) -> ModerationQueue:
    summary_counts = None
    if entity == "recharges":
        summary_counts = await InvestmentClient(session).pending_recharge_counts()
    adapter = build_adapter(entity, session, config.page_size)
    return ModerationQueue(adapter, NotificationChannel(config.notification_seconds), summary_counts)


async def _list(args: argparse.Namespace, session: AdminSession, config: AdminConfig) -> dict[str, Any]:
    queue = await _open_queue(args.entity, session, config)
    tab = queue.adapter.tab(args.tab) if args.tab else queue.tabs.active_tab
    await queue.open(tab)
    if args.page and args.page != queue.pages.current_page(tab):
        await queue.pages.go_to_page(tab, args.page)
    state = queue.store.state_for(tab)
    items = sort_items(filter_items(state.items, args.search, args.state), args.sort, args.desc)
    return {
        "entity": queue.entity,
        "tab": tab.name,
        "status": state.status.value,
        "error": state.error_message,
        "page": queue.pages.current_page(tab),
        "total_pages": queue.pages.total_pages(tab),
        "badges": queue.badge_counts(),
        "items": [item.model_dump(mode="json") for item in items],
    }


async def _transition(
    session: AdminSession,
    config: AdminConfig,
    entity: str,
    tab: str,
    item_id: str,
    target_state: str,
    extra_fields: dict[str, Any],
) -> dict[str, Any]:
    queue = await _open_queue(entity, session, config)
    state = await queue.open(tab)
    if state.error_message:
        return {"ok": False, "message": state.error_message}
    outcome = await queue.transition(tab, item_id, target_state, extra_fields)
    result: dict[str, Any] = {
        "ok": outcome.succeeded,
        "message": outcome.message,
        "item": outcome.item.model_dump(mode="json"),
    }
    if outcome.error is not None:
        result["code"] = outcome.error.code
    return result


async def _stats(source: str, session: AdminSession) -> Any:
    if source == "dashboard":
        return (await DashboardClient(session).get_stats()).model_dump(mode="json")
    if source == "mlm":
        return (await MlmClient(session).get_overview()).model_dump(mode="json")
    if source == "top-performers":
        return [row.model_dump(mode="json") for row in await MlmClient(session).get_top_performers()]
    return (await InvestmentClient(session).get_stats()).model_dump(mode="json")


async def _dispatch(args: argparse.Namespace, session: AdminSession, config: AdminConfig) -> Any:
    if args.command == "list":
        return await _list(args, session, config)
    if args.command == "approve":
        extra = {"transactionId": args.transaction_id} if args.transaction_id else {}
        return await _transition(session, config, args.entity, args.tab, args.item_id, "approved", extra)
    if args.command == "reject":
        return await _transition(session, config, args.entity, args.tab, args.item_id, "rejected", {"reason": args.reason})
    if args.command == "block":
        return await _transition(session, config, "accounts", "active", args.item_id, "blocked", {"reason": args.reason})
    if args.command == "activate":
        return await _transition(session, config, "accounts", "blocked", args.item_id, "active", {})
    if args.command == "generate-tpin":
        message = await TpinAdapter(session, config.page_size).generate(args.user_id, args.quantity, args.reason)
        return {"ok": True, "message": message}
    return await _stats(args.source, session)


async def _run(args: argparse.Namespace) -> Any:
    config = load_config(args.env_file)
    set_level(config.log_level)
    http = HttpClient(config)
    try:
        email, password = _credentials(args)
        session = await AuthClient(http).login(email, password)
        try:
            return await _dispatch(args, session, config)
        finally:
            session.logout()
    finally:
        await http.aclose()


def _error_payload(error: Exception) -> dict[str, Any]:
    payload: dict[str, Any] = {"ok": False, "message": to_user_message(error)}
    code = getattr(error, "code", None)
    if code:
        payload["code"] = code
    if isinstance(error, ValidationError) and error.field_errors:
        payload["field_errors"] = error.field_errors
    return payload


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        result = asyncio.run(_run(args))
    except ConfigError as exc:
        print(json.dumps({"ok": False, "code": "CONFIG_ERROR", "message": str(exc)}), file=sys.stderr)
        return 1
    except (ApiError, ModerationError, KeyError) as exc:
        print(json.dumps(_error_payload(exc)), file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2))
    if isinstance(result, dict) and result.get("ok") is False:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
