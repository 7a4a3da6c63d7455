from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    FetchError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RequestValidationError,
    ServerError,
    TransitionError,
    TransportError,
    ValidationError,
)

_STATUS_MESSAGES = {
    401: "Your session has expired. Please log in again.",
    403: "You do not have permission for this operation.",
    404: "The requested record no longer exists.",
    409: "The record was changed by someone else. Refresh and try again.",
    429: "Too many requests. Wait a moment and try again.",
}


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or "HTTP_ERROR")
    message = str(payload.get("message") or "Request failed")
    details = payload.get("details")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 403:
        mapped = ForbiddenError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = RequestValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def to_user_message(error: Exception) -> str:
    if isinstance(error, TransportError):
        return "Could not reach the server. Check your connection and retry."
    if isinstance(error, ServerError):
        return "The server failed to process the request. Please try again."
    if isinstance(error, RequestValidationError):
        return error.message.strip() or "The request was rejected by the server."
    if isinstance(error, ApiError):
        fallback = _STATUS_MESSAGES.get(error.status_code)
        if fallback:
            return fallback
        return error.message.strip() or "Request failed"
    if isinstance(error, (FetchError, TransitionError, ValidationError)):
        return error.message
    if isinstance(error, KeyError) and error.args:
        return str(error.args[0])
    return str(error) or "Unexpected error"


def to_fetch_error(error: ApiError, *, message: str | None = None) -> FetchError:
    return FetchError(
        code=error.code,
        message=message or to_user_message(error),
        trace_id=error.trace_id,
        status_code=error.status_code or None,
    )


def to_transition_error(error: ApiError, *, message: str | None = None) -> TransitionError:
    return TransitionError(
        code=error.code,
        message=message or to_user_message(error),
        trace_id=error.trace_id,
        status_code=error.status_code or None,
    )
