"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Value types shared by the coordinator, the readiness gate and consumers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeAlias, TypeVar

T = TypeVar("T")

FetchStatus = Literal["idle", "loading", "success", "error"]

Producer: TypeAlias = Callable[..., Awaitable[Any]]
Callback: TypeAlias = Callable[[], Awaitable[None] | None]
SettleListener: TypeAlias = Callable[["FetchState"], None]


@dataclass(frozen=True, slots=True)
class FetchState(Generic[T]):
    """Read-only snapshot of one coordinator's fetch state."""

    status: FetchStatus = "idle"
    data: T | None = None
    error: BaseException | Any | None = None
    generation: int = 0

    @property
    def loading(self) -> bool:
        return self.status == "loading"


@dataclass(frozen=True, slots=True)
class FetchResult(Generic[T]):
    """
    Consumer-facing result object.

    Attributes:
        data: Last known value, possibly from an earlier key or attempt.
        loading: Whether the current attempt is unsettled.
        error: Last captured producer failure, if any.
        refresh: Starts a new attempt; returns the in-flight task on a
            cache miss and ``None`` otherwise.
    """

    data: T | None
    loading: bool
    error: BaseException | Any | None
    refresh: Callable[[], asyncio.Task[None] | None]
