from __future__ import annotations

import json

import httpx
import pytest

from invest_admin.config import AdminConfig
from invest_admin.exceptions import ApiError, AuthError, ServerError, TransportError
from invest_admin.http_client import HttpClient
from invest_admin.tracing import TraceContext


def _http(handler, **overrides) -> HttpClient:
    cfg = AdminConfig(env_name="test", api_base_url="https://api.example.com/api", retry_backoff_seconds=0, **overrides)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.example.com/api/")
    return HttpClient(cfg, client=client, trace=TraceContext("trace-fixed"))


@pytest.mark.asyncio
async def test_request_sends_auth_and_trace_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "success", "data": {}})

    http = _http(handler)
    payload = await http.request("GET", "/admin/payments", token="tok", params={"page": 2})

    assert payload == {"status": "success", "data": {}}
    request = seen[0]
    assert request.url.path == "/api/admin/payments"
    assert request.url.params["page"] == "2"
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["X-Trace-ID"] == "trace-fixed"
    await http.aclose()


@pytest.mark.asyncio
async def test_get_retries_server_errors() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] < 3:
            return httpx.Response(502, json={"message": "bad gateway"})
        return httpx.Response(200, json={"status": "success", "data": {"ok": True}})

    http = _http(handler, retries=2)
    payload = await http.request("GET", "/admin/tpins")

    assert payload["data"] == {"ok": True}
    assert calls["count"] == 3


@pytest.mark.asyncio
async def test_post_is_never_retried() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(500, json={"code": "SERVER_ERROR", "message": "boom", "trace_id": "srv-trace"})

    http = _http(handler, retries=3)
    with pytest.raises(ServerError) as excinfo:
        await http.request("POST", "/admin/payments/approve", json_body={"paymentId": "p1"})

    assert calls["count"] == 1
    assert excinfo.value.trace_id == "srv-trace"


@pytest.mark.asyncio
async def test_transport_errors_raise_after_retries() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ConnectError("connection refused", request=request)

    http = _http(handler, retries=1)
    with pytest.raises(TransportError):
        await http.request("GET", "/admin/users")

    assert calls["count"] == 2


@pytest.mark.asyncio
async def test_unauthorized_invokes_auth_handler() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"code": "TOKEN_EXPIRED", "message": "expired"})

    http = _http(handler)
    seen = []
    http.register_auth_error_handler(seen.append)

    with pytest.raises(AuthError):
        await http.request("GET", "/admin/users", token="old")

    assert [error.code for error in seen] == ["TOKEN_EXPIRED"]


@pytest.mark.asyncio
async def test_post_sends_json_body_and_handles_empty_response() -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(204)

    http = _http(handler)
    payload = await http.request(
        "POST",
        "/admin/users/u1/deactivate",
        json_body={"reason": "fraud"},
        headers={"Idempotency-Key": "key-1"},
    )

    assert payload == {}
    assert bodies == [{"reason": "fraud"}]


@pytest.mark.asyncio
async def test_list_payload_is_wrapped() -> None:
    http = _http(lambda request: httpx.Response(200, json=[1, 2]))

    assert await http.request("GET", "/admin/mlm/top-performers") == {"data": [1, 2]}


@pytest.mark.asyncio
async def test_undecodable_success_body_falls_back_to_text() -> None:
    http = _http(lambda request: httpx.Response(200, content=b"\xff\xfe\xfa bad"))

    payload = await http.request("POST", "/admin/payments/approve", json_body={"paymentId": "p1"})

    assert set(payload) == {"message"}
    assert isinstance(payload["message"], str)


@pytest.mark.asyncio
async def test_undecodable_error_body_still_maps_to_api_error() -> None:
    http = _http(lambda request: httpx.Response(500, content=b"\xff\xfe\xfa bad"))

    with pytest.raises(ServerError) as excinfo:
        await http.request("POST", "/admin/payments/approve", json_body={"paymentId": "p1"})

    assert excinfo.value.status_code == 500
    assert excinfo.value.trace_id == "trace-fixed"


@pytest.mark.asyncio
async def test_html_error_page_maps_to_server_error() -> None:
    http = _http(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))

    with pytest.raises(ServerError):
        await http.request("POST", "/admin/tpins/approve", json_body={"tpinId": "t1"})


@pytest.mark.asyncio
async def test_each_request_gets_its_own_request_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "success", "data": {}})

    http = _http(handler)
    await http.request("GET", "/admin/payments")
    await http.request("GET", "/admin/payments")

    first, second = (request.headers["X-Request-ID"] for request in seen)
    assert first != second
    assert http.trace.last_request_id == second
    assert http.trace.log_fields() == {"trace_id": "trace-fixed", "request_id": second}
    assert {request.headers["X-Trace-ID"] for request in seen} == {"trace-fixed"}


@pytest.mark.asyncio
async def test_camel_case_trace_id_in_error_body_is_adopted() -> None:
    http = _http(lambda request: httpx.Response(409, json={"code": "CONFLICT", "message": "stale", "traceId": "srv-camel"}))

    with pytest.raises(ApiError) as excinfo:
        await http.request("POST", "/admin/crypto-payments/c1/approve")

    assert excinfo.value.trace_id == "srv-camel"
    assert http.trace.trace_id == "srv-camel"
