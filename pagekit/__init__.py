"""Key-scoped paged-list state for client applications."""

from pagekit.core.controller import PaginationController
from pagekit.core.event_bus import EventBus
from pagekit.errors import FetchFailure, PaginationError, UsageError
from pagekit.events import EventType
from pagekit.models.pagination import ListState, PageRequest, PageResult

__all__ = [
    "PaginationController",
    "EventBus",
    "EventType",
    "FetchFailure",
    "PaginationError",
    "UsageError",
    "ListState",
    "PageRequest",
    "PageResult",
]

__version__ = "0.1.0"
