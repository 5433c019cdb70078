"""quick-load-more: predictive item prefetching for "load more" interfaces."""

from qlm.config import EventConfig, EventNames
from qlm.coordinator import QuickLoadMore
from qlm.events import EventBus, EventKind, default_bus
from qlm.exceptions import (
    ConfigurationError,
    FetchError,
    QLMError,
    ServiceContractViolation,
    TransportError,
)
from qlm.fetch import FetchExecutor, FetchResult, build_url
from qlm.paginator import FunctionPaginator, OffsetPaginator, Paginator

__all__ = [
    "ConfigurationError",
    "EventBus",
    "EventConfig",
    "EventKind",
    "EventNames",
    "FetchError",
    "FetchExecutor",
    "FetchResult",
    "FunctionPaginator",
    "OffsetPaginator",
    "Paginator",
    "QLMError",
    "QuickLoadMore",
    "ServiceContractViolation",
    "TransportError",
    "build_url",
    "default_bus",
]
