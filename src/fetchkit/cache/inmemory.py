"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/inmemory.py.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .base import CacheStore


@dataclass(slots=True)
class InMemoryCacheStore(CacheStore):
    """
    Process-local, unbounded store of the last successful result per key.

    Entries are overwritten on later successes and never evicted.
    Not thread-safe; writes are serialized through the owning coordinator.
    """

    _rows: dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def get(self, key: str) -> Any | None:
        return self._rows.get(key)

    def set(self, key: str, value: Any) -> None:
        self._rows[key] = value

    def has(self, key: str) -> bool:
        return key in self._rows

    def keys(self) -> Iterator[str]:
        return iter(list(self._rows))

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: object) -> bool:
        return key in self._rows
