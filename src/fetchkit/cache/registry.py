"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/registry.py.

Named stores let several coordinators share one cache explicitly.
"""

from __future__ import annotations

import logging
from threading import Lock

from ..errors import CacheStoreError
from .base import CacheStore
from .inmemory import InMemoryCacheStore

logger = logging.getLogger("fetchkit.cache")

_REGISTRY: dict[str, CacheStore] = {}
_LOCK = Lock()


def _normalize(store_id: str) -> str:
    key = store_id.strip().lower()
    if not key:
        raise CacheStoreError("Cache store id must be non-empty")
    return key


def register_cache_store(
    store_id: str,
    store: CacheStore,
    *,
    overwrite: bool = False,
) -> None:
    """Register one shared cache store under `store_id`."""
    key = _normalize(store_id)
    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise CacheStoreError(f"Cache store already registered: {key}")
        _REGISTRY[key] = store
    logger.debug("Registered cache store %s", key)


def unregister_cache_store(store_id: str) -> None:
    """Forget a registered store; unknown ids are ignored."""
    key = _normalize(store_id)
    with _LOCK:
        _REGISTRY.pop(key, None)


def create_cache_store(store: str | CacheStore | None = None) -> CacheStore:
    """
    Resolve a cache store from id/instance/default.

    `None` yields a fresh private in-memory store, so each coordinator
    gets its own cache unless sharing is requested.
    """
    if store is None:
        return InMemoryCacheStore()

    if not isinstance(store, str):
        return store

    key = _normalize(store)
    with _LOCK:
        resolved = _REGISTRY.get(key)
    if resolved is None:
        raise CacheStoreError(f"Unknown cache store '{store}'")
    return resolved


def list_cache_stores() -> list[str]:
    """List registered cache store ids."""
    with _LOCK:
        return sorted(_REGISTRY.keys())
