from .adapter import EntityAdapter, PaginationMode, TabSpec
from .engine import ModerationQueue
from .notifications import Notification, NotificationChannel, Severity
from .pagination import PaginationController
from .store import QueueState, QueueStatus, QueueStore
from .tabs import TabCoordinator
from .transitions import TransitionController, TransitionDialog, TransitionOutcome

__all__ = [
    "EntityAdapter",
    "ModerationQueue",
    "Notification",
    "NotificationChannel",
    "PaginationController",
    "PaginationMode",
    "QueueState",
    "QueueStatus",
    "QueueStore",
    "Severity",
    "TabCoordinator",
    "TabSpec",
    "TransitionController",
    "TransitionDialog",
    "TransitionOutcome",
]
