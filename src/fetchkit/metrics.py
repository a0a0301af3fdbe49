"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics adapters for coordinator observability.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class CoordinatorMetrics(Protocol):
    """Minimal metrics interface for coordinator instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpCoordinatorMetrics:
    """Default metrics sink when no metrics backend is provided."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


COORDINATOR_COUNTERS: dict[str, tuple[str, tuple[str, ...]]] = {
    "fetch_attempts_total": ("Attempts started, by trigger", ("trigger",)),
    "fetch_cache_hits_total": ("Attempts answered from the cache store", ()),
    "fetch_success_total": ("Current attempts settled with a result", ()),
    "fetch_failure_total": ("Current attempts settled with a producer failure", ()),
    "fetch_stale_discarded_total": (
        "Superseded attempts whose outcome was dropped",
        ("outcome",),
    ),
}


class PrometheusCoordinatorMetrics(CoordinatorMetrics):
    """
    Prometheus-backed coordinator metrics adapter.

    Registers every counter in ``COORDINATOR_COUNTERS`` on construction.
    Requires `prometheus_client` package; pass a dedicated
    ``CollectorRegistry`` when more than one adapter lives in a process.
    """

    def __init__(self, *, namespace: str = "fetchkit", registry: Any | None = None) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusCoordinatorMetrics requires `prometheus_client` to be installed."
            ) from exc

        target = REGISTRY if registry is None else registry
        self._counters = {
            name: Counter(
                name,
                documentation,
                labelnames=labels,
                namespace=namespace,
                registry=target,
            )
            for name, (documentation, labels) in COORDINATOR_COUNTERS.items()
        }

    def incr(self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None) -> None:
        counter = self._counters.get(name)
        if counter is None:
            raise ValueError(f"Unknown coordinator metric '{name}'")
        labels = COORDINATOR_COUNTERS[name][1]
        if labels:
            counter.labels(*(str((tags or {}).get(label, "")) for label in labels)).inc(value)
        else:
            counter.inc(value)
