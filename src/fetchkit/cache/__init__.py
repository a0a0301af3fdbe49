"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from ..errors import CacheStoreError
from .base import CacheStore
from .inmemory import InMemoryCacheStore
from .keys import default_cache_key
from .registry import (
    create_cache_store,
    list_cache_stores,
    register_cache_store,
    unregister_cache_store,
)

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "CacheStoreError",
    "default_cache_key",
    "register_cache_store",
    "unregister_cache_store",
    "create_cache_store",
    "list_cache_stores",
]
