"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Asynchronous resource coordination for asyncio programs.

Wraps an async producer with a per-key result cache, a fetch state
machine that ignores superseded responses, and a readiness gate.

Quick start::

    from fetchkit import RequestOptions, RequestCoordinator, read_when_ready

    coordinator = RequestCoordinator(
        fetch_user,
        RequestOptions(default_params=(0,), cache_key="fetcher-0", suspense=True),
    )
    coordinator.activate()
    result = await read_when_ready(coordinator)
    print(result.data)
"""

from .cache import (
    CacheStore,
    InMemoryCacheStore,
    create_cache_store,
    default_cache_key,
    list_cache_stores,
    register_cache_store,
    unregister_cache_store,
)
from .coordinator import RequestCoordinator, create_request_coordinator
from .errors import CacheStoreError, FetchKitError, SuspendPending
from .gate import ReadinessGate, read_when_ready
from .metrics import (
    CoordinatorMetrics,
    NoOpCoordinatorMetrics,
    PrometheusCoordinatorMetrics,
)
from .options import RequestOptions
from .settings import CoordinatorSettings
from .types import FetchResult, FetchState, FetchStatus, Producer

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "create_cache_store",
    "default_cache_key",
    "list_cache_stores",
    "register_cache_store",
    "unregister_cache_store",
    "RequestCoordinator",
    "create_request_coordinator",
    "RequestOptions",
    "CoordinatorSettings",
    "ReadinessGate",
    "read_when_ready",
    "FetchState",
    "FetchResult",
    "FetchStatus",
    "Producer",
    "CoordinatorMetrics",
    "NoOpCoordinatorMetrics",
    "PrometheusCoordinatorMetrics",
    "FetchKitError",
    "CacheStoreError",
    "SuspendPending",
]
