from .adapters import (
    AccountsAdapter,
    CryptoAdapter,
    PaymentsAdapter,
    RechargesAdapter,
    TpinAdapter,
    WithdrawalsAdapter,
    build_adapter,
    build_adapters,
)
from .config import AdminConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    DuplicateSubmissionError,
    FetchError,
    ModerationError,
    SessionClosedError,
    TransitionError,
    ValidationError,
)
from .http_client import HttpClient
from .models import FetchResult, ItemKind, ItemState, ModerationItem, PageInfo, TransitionRequest
from .moderation import (
    EntityAdapter,
    ModerationQueue,
    NotificationChannel,
    QueueStore,
    Severity,
    TabSpec,
    TransitionController,
    TransitionDialog,
)
from .session import AdminSession, AuthClient
from .tracing import TraceContext

__version__ = "0.1.0"

__all__ = [
    "AccountsAdapter",
    "AdminConfig",
    "AdminSession",
    "ApiError",
    "AuthClient",
    "AuthError",
    "ConfigError",
    "CryptoAdapter",
    "DuplicateSubmissionError",
    "EntityAdapter",
    "FetchError",
    "FetchResult",
    "HttpClient",
    "ItemKind",
    "ItemState",
    "ModerationError",
    "ModerationItem",
    "ModerationQueue",
    "NotificationChannel",
    "PageInfo",
    "PaymentsAdapter",
    "QueueStore",
    "RechargesAdapter",
    "SessionClosedError",
    "Severity",
    "TabSpec",
    "TpinAdapter",
    "TraceContext",
    "TransitionController",
    "TransitionDialog",
    "TransitionError",
    "TransitionRequest",
    "ValidationError",
    "WithdrawalsAdapter",
    "build_adapter",
    "build_adapters",
    "load_config",
]
