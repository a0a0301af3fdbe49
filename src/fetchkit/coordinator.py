"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request coordinator: fetch state machine with cache short-circuit and
generation-token staleness guard.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import itertools
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Generic, TypeVar

from .cache import CacheStore, create_cache_store
from .errors import SuspendPending
from .gate import ReadinessGate
from .metrics import CoordinatorMetrics, NoOpCoordinatorMetrics
from .options import RequestOptions
from .settings import CoordinatorSettings
from .types import (
    Callback,
    FetchResult,
    FetchState,
    FetchStatus,
    Producer,
    SettleListener,
)

logger = logging.getLogger("fetchkit.coordinator")

T = TypeVar("T")


class RequestCoordinator(Generic[T]):
    """
    Run a producer for one logical key and track its fetch lifecycle.

    Every attempt mints a new generation token. Only the attempt holding
    the current token may write state, the cache, or fire callbacks when
    it settles; older attempts keep running and their outcome is dropped.
    Cache hits resolve synchronously without entering ``loading``.

    All methods must be called from the event loop that runs the attempts.
    """

    def __init__(
        self,
        producer: Producer,
        options: RequestOptions | None = None,
        *,
        cache: str | CacheStore | None = None,
        settings: CoordinatorSettings | None = None,
        metrics: CoordinatorMetrics | None = None,
    ) -> None:
        self._producer = producer
        self._options = options or RequestOptions()
        self._settings = settings or CoordinatorSettings()
        self._cache = create_cache_store(
            cache if cache is not None else self._settings.cache_store
        )
        self._metrics: CoordinatorMetrics = metrics or NoOpCoordinatorMetrics()

        self._generations = itertools.count(1)
        self._current: int | None = None
        self._last_generation = 0
        self._status: FetchStatus = "idle"
        self._resting_status: FetchStatus = "idle"
        self._data: T | None = None
        self._error: Any | None = None

        self._active = False
        self._torn_down = False
        self._signature = self._options.dependency_signature()
        self._listeners: list[SettleListener] = []
        self._in_flight: set[asyncio.Task[None]] = set()

        if not callable(producer):
            logger.warning(
                "Producer %r is not callable; attempts for key %s are no-ops",
                producer,
                self._options.resolved_cache_key,
            )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def settings(self) -> CoordinatorSettings:
        return self._settings

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def cache_key(self) -> str:
        return self._options.resolved_cache_key

    @property
    def loading(self) -> bool:
        return self._status == "loading"

    @property
    def is_active(self) -> bool:
        """Whether the coordinator is observing its key (activated, not torn down)."""
        return self._active

    @property
    def in_flight_count(self) -> int:
        """Producer calls still running, including superseded ones."""
        return len(self._in_flight)

    def current_state(self) -> FetchState[T]:
        """Return a read-only snapshot of the fetch state."""
        return FetchState(
            status=self._status,
            data=self._data,
            error=self._error,
            generation=self._last_generation,
        )

    def result(self) -> FetchResult[T]:
        """Return the consumer-facing result object."""
        return FetchResult(
            data=self._data,
            loading=self.loading,
            error=self._error,
            refresh=self.refresh,
        )

    def read(self) -> FetchResult[T]:
        """
        Suspense read.

        Raises ``SuspendPending`` while ``suspense`` is enabled and the
        current attempt is loading; returns ``result()`` otherwise.
        """
        if self._options.suspense and self.loading:
            gate = ReadinessGate(self)
            raise SuspendPending(gate.wait_ready)
        return self.result()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def activate(self) -> asyncio.Task[None] | None:
        """
        Start observing the configured key and begin an attempt.

        Returns the producer task on a cache miss, ``None`` when the cache
        answered or the producer is not callable.
        """
        self._active = True
        self._torn_down = False
        return self._start_attempt("activate")

    def refresh(self) -> asyncio.Task[None] | None:
        """
        Begin a new attempt with the current options.

        A cached value for the key is still served without calling the
        producer. Ignored after ``teardown()`` until re-activated.
        """
        if self._torn_down:
            logger.debug(
                "Ignoring refresh for key %s on torn-down coordinator", self.cache_key
            )
            return None
        return self._start_attempt("refresh")

    def update(self, **changes: Any) -> asyncio.Task[None] | None:
        """
        Replace request options.

        When the coordinator is active and the dependency signature
        (``default_params``, ``refresh_deps``, ``cache_key``) changed, a new
        attempt starts and its task (if any) is returned.
        """
        self._options = replace(self._options, **changes)
        signature = self._options.dependency_signature()
        if signature == self._signature:
            return None
        self._signature = signature
        if not self._active:
            return None
        logger.debug("Dependencies changed; re-activating for key %s", self.cache_key)
        return self.activate()

    def teardown(self) -> None:
        """
        Stop observing. Outstanding attempts settle into the void.

        Safe to call repeatedly and while attempts are in flight.
        """
        self._active = False
        self._torn_down = True
        self._current = None
        if self._status == "loading":
            self._status = self._resting_status
            self._notify_settled()

    def add_settle_listener(self, listener: SettleListener) -> Callable[[], None]:
        """
        Register a callback fired whenever the current attempt leaves loading.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    async def __aenter__(self) -> "RequestCoordinator[T]":
        self.activate()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    # ------------------------------------------------------------------
    # Attempt lifecycle
    # ------------------------------------------------------------------

    def _start_attempt(self, trigger: str) -> asyncio.Task[None] | None:
        if not callable(self._producer):
            return None

        generation = next(self._generations)
        self._current = generation
        self._last_generation = generation
        self._error = None
        self._metrics.incr("fetch_attempts_total", tags={"trigger": trigger})

        options = self._options
        key = options.resolved_cache_key
        if self._cache.has(key):
            self._data = self._cache.get(key)
            was_loading = self.loading
            self._status = "success"
            self._metrics.incr("fetch_cache_hits_total")
            logger.debug("Cache hit for key %s (generation=%d)", key, generation)
            if was_loading:
                self._notify_settled()
            return None

        if self._status != "loading":
            self._resting_status = self._status
        self._status = "loading"
        task = asyncio.create_task(self._run_attempt(generation, key, options))
        self._in_flight.add(task)
        task.add_done_callback(functools.partial(self._attempt_done, generation, key))
        return task

    async def _run_attempt(
        self,
        generation: int,
        key: str,
        options: RequestOptions,
    ) -> None:
        try:
            value = self._producer(*options.default_params)
            if inspect.isawaitable(value):
                value = await value
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            if not self._is_current(generation):
                self._discard(generation, key, outcome="failure")
                return
            self._error = exc
            if not self._settings.retain_data_on_error:
                self._data = None
            self._status = "error"
            self._metrics.incr("fetch_failure_total")
            logger.debug(
                "Producer failed for key %s (generation=%d): %r", key, generation, exc
            )
            self._notify_settled()
            await self._invoke_callback(options.on_error, "on_error", key)
            return

        if not self._is_current(generation):
            self._discard(generation, key, outcome="success")
            return
        self._data = value
        self._status = "success"
        self._cache.set(key, value)
        self._metrics.incr("fetch_success_total")
        logger.debug("Fetched key %s (generation=%d)", key, generation)
        self._notify_settled()
        await self._invoke_callback(options.on_success, "on_success", key)

    def _attempt_done(
        self, generation: int, key: str, task: asyncio.Task[None]
    ) -> None:
        self._in_flight.discard(task)
        if not task.cancelled() or not self._is_current(generation):
            return
        # A cancelled current attempt settles with no outcome.
        logger.debug("Attempt cancelled for key %s (generation=%d)", key, generation)
        self._current = None
        if self._status == "loading":
            self._status = self._resting_status
            self._notify_settled()

    def _is_current(self, generation: int) -> bool:
        return self._current is not None and self._current == generation

    def _discard(self, generation: int, key: str, *, outcome: str) -> None:
        self._metrics.incr("fetch_stale_discarded_total", tags={"outcome": outcome})
        logger.debug(
            "Discarded stale %s for key %s (generation=%d, current=%s)",
            outcome,
            key,
            generation,
            self._current,
        )

    def _notify_settled(self) -> None:
        snapshot = self.current_state()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001
                logger.exception("Settle listener failed for key %s", self.cache_key)

    async def _invoke_callback(
        self, cb: Callback | None, name: str, key: str
    ) -> None:
        """Invoke a callback, handling both sync and async signatures."""
        if cb is None:
            return
        try:
            result = cb()
            if inspect.isawaitable(result):
                await result
        except Exception:  # noqa: BLE001
            logger.exception("%s callback failed for key %s", name, key)


def create_request_coordinator(
    producer: Producer,
    *,
    cache: str | CacheStore | None = None,
    settings: CoordinatorSettings | None = None,
    metrics: CoordinatorMetrics | None = None,
    **options: Any,
) -> RequestCoordinator[Any]:
    """Build a coordinator from keyword options (``default_params=...`` etc.)."""
    return RequestCoordinator(
        producer,
        RequestOptions(**options),
        cache=cache,
        settings=settings,
        metrics=metrics,
    )
