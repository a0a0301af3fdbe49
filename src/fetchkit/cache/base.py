"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol


class CacheStore(Protocol):
    """Protocol implemented by result stores consulted by the coordinator."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def has(self, key: str) -> bool: ...

    def keys(self) -> Iterator[str]: ...

    def __len__(self) -> int: ...
