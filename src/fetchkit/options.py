"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-coordinator request options.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .cache.keys import default_cache_key
from .types import Callback


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """
    Options recognized by ``RequestCoordinator``.

    Attributes:
        on_success: Invoked with no arguments after a real (non cache-hit)
            successful settlement.
        on_error: Invoked with no arguments after a failed settlement.
        refresh_deps: Values whose change triggers a fresh activation.
            Compared by value through their compact JSON form, so a new
            list or dict with equal contents is not a change. Values JSON
            cannot encode compare by ``str()``.
        suspense: Enables suspense reads through ``RequestCoordinator.read``.
        default_params: Ordered arguments passed to the producer.
        cache_key: Explicit cache key; defaults to the compact JSON form of
            ``default_params``.
    """

    on_success: Callback | None = None
    on_error: Callback | None = None
    refresh_deps: tuple[Any, ...] = field(default_factory=tuple)
    suspense: bool = False
    default_params: tuple[Any, ...] = field(default_factory=tuple)
    cache_key: str | None = None

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the snapshot immutable.
        if not isinstance(self.refresh_deps, tuple):
            object.__setattr__(self, "refresh_deps", _as_tuple(self.refresh_deps))
        if not isinstance(self.default_params, tuple):
            object.__setattr__(
                self, "default_params", _as_tuple(self.default_params)
            )
        if self.cache_key is not None and not isinstance(self.cache_key, str):
            raise ValueError("cache_key must be a string")

    @property
    def resolved_cache_key(self) -> str:
        """Cache key used for store lookups and writes."""
        if self.cache_key is not None:
            return self.cache_key
        return default_cache_key(self.default_params)

    def dependency_signature(self) -> tuple[str, str, str]:
        """Values whose change re-activates an observing coordinator."""
        return (
            default_cache_key(self.default_params),
            default_cache_key(self.refresh_deps),
            self.resolved_cache_key,
        )


def _as_tuple(values: Sequence[Any] | Any) -> tuple[Any, ...]:
    if isinstance(values, (str, bytes)):
        raise ValueError("expected a sequence of values, not a string")
    return tuple(values)
