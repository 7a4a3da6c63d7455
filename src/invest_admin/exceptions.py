from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    trace_id: str | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(ApiError):
    """Authentication failed or session is invalid."""


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class RequestValidationError(ApiError):
    """400/422 returned by the API."""


class ConflictError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class SessionClosedError(AuthError):
    """The admin session was logged out before the call was made."""


class ModerationError(Exception):
    """Base for every error the moderation engine surfaces."""


@dataclass
class FetchError(ModerationError):
    code: str
    message: str
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass
class TransitionError(ModerationError):
    code: str
    message: str
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass
class ValidationError(ModerationError):
    code: str
    message: str
    field_errors: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass
class DuplicateSubmissionError(ModerationError):
    identity_key: str

    def __str__(self) -> str:
        return f"transition already in flight for {self.identity_key}"
