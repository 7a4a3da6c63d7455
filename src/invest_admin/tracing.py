from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Trace-ID"
TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Trace-Id", "x-trace-id")
REQUEST_HEADER = "X-Request-ID"
PAYLOAD_TRACE_KEYS = ("trace_id", "traceId")


def new_trace_id() -> str:
    return str(uuid.uuid4())


@dataclass
class TraceContext:
    """Trace id shared by one admin session plus the id of its latest request.

    The server may replace the trace id through a response header or an error
    body; the request id is always generated locally, one per HTTP call.
    """

    trace_id: str | None = None
    last_request_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = new_trace_id()
        return self.trace_id

    def next_request(self) -> dict[str, str]:
        self.last_request_id = uuid.uuid4().hex
        return {TRACE_HEADER: self.ensure(), REQUEST_HEADER: self.last_request_id}

    def log_fields(self) -> dict[str, str | None]:
        return {"trace_id": self.trace_id, "request_id": self.last_request_id}

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        for key in TRACE_HEADER_ALIASES:
            trace_id = headers.get(key)
            if trace_id:
                self.trace_id = trace_id
                return

    def update_from_payload(self, payload: Mapping[str, object]) -> None:
        for key in PAYLOAD_TRACE_KEYS:
            trace_id = payload.get(key)
            if isinstance(trace_id, str) and trace_id:
                self.trace_id = trace_id
                return
