from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx

from .config import AdminConfig
from .error_mapper import map_error
from .exceptions import ApiError, TransportError
from .tracing import TraceContext

AuthErrorHandler = Callable[[ApiError], None]


class HttpClient:
    def __init__(
        self,
        config: AdminConfig,
        client: httpx.AsyncClient | None = None,
        trace: TraceContext | None = None,
    ) -> None:
        self.config = config
        self.trace = trace or TraceContext()
        self._client = client or httpx.AsyncClient(
            base_url=config.api_base_url.rstrip("/") + "/",
            timeout=config.timeout_seconds,
            verify=config.verify_ssl,
        )
        self._retries = max(0, config.retries)
        self._retry_backoff_seconds = max(0.0, config.retry_backoff_seconds)
        self._auth_error_handler: AuthErrorHandler | None = None

    def register_auth_error_handler(self, handler: AuthErrorHandler | None) -> None:
        self._auth_error_handler = handler

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        request_headers.update(self.trace.next_request())

        normalized_method = method.upper()
        normalized_path = path.lstrip("/")
        attempts = self._retries + 1 if normalized_method == "GET" else 1

        response: httpx.Response | None = None
        for attempt in range(attempts):
            try:
                response = await self._client.request(
                    normalized_method,
                    normalized_path,
                    json=json_body,
                    params=params,
                    headers=request_headers,
                )
            except httpx.HTTPError as exc:
                if attempt >= attempts - 1:
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc) or "Network error while calling the admin API",
                        details={"type": type(exc).__name__},
                        trace_id=self.trace.trace_id,
                        status_code=0,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            await asyncio.sleep(self._retry_backoff_seconds * (2**attempt))

        if response is None:
            raise TransportError(code="TRANSPORT_ERROR", message="retry exhausted", trace_id=self.trace.trace_id)

        self.trace.update_from_headers(response.headers)
        if response.is_success:
            if not response.content:
                return {}
            try:
                payload = response.json()
            except ValueError:
                return {"message": response.text}
            return payload if isinstance(payload, dict) else {"data": payload}

        try:
            error_payload = response.json()
        except ValueError:
            error_payload = {"message": response.text}
        if not isinstance(error_payload, dict):
            error_payload = {"details": error_payload}
        self.trace.update_from_payload(error_payload)
        error = map_error(response.status_code, error_payload, self.trace.trace_id)
        if response.status_code == 401 and self._auth_error_handler:
            self._auth_error_handler(error)
        raise error

    async def aclose(self) -> None:
        await self._client.aclose()
