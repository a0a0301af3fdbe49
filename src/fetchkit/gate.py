"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Readiness gate: lets a renderer wait until a coordinator's current
attempt has settled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .errors import SuspendPending
from .settings import GateMode
from .types import FetchResult, FetchState

if TYPE_CHECKING:
    from .coordinator import RequestCoordinator

logger = logging.getLogger("fetchkit.gate")


class ReadinessGate:
    """
    Block callers until the coordinator leaves ``loading``.

    ``event`` mode resolves a one-shot event from the coordinator's settle
    notification. ``poll`` mode re-checks the loading flag every
    ``poll_interval_s`` seconds.
    """

    def __init__(
        self,
        coordinator: RequestCoordinator[Any],
        *,
        mode: GateMode | None = None,
        poll_interval_s: float | None = None,
    ) -> None:
        settings = coordinator.settings
        self._coordinator = coordinator
        self._mode = mode or settings.gate_mode
        if self._mode not in ("event", "poll"):
            raise ValueError(f"mode must be 'event' or 'poll', got {self._mode!r}")
        self._poll_interval_s = (
            settings.gate_poll_interval_s if poll_interval_s is None else poll_interval_s
        )
        if self._poll_interval_s <= 0:
            raise ValueError("poll_interval_s must be > 0")

    @property
    def mode(self) -> GateMode:
        return self._mode

    async def wait_ready(self, timeout: float | None = None) -> bool:
        """
        Wait for the current attempt to settle.

        Returns ``True`` once the coordinator is not loading (immediately if
        it already isn't) and ``False`` if ``timeout`` elapsed first.
        """
        if not self._coordinator.loading:
            return True

        waiter = self._wait_event() if self._mode == "event" else self._wait_poll()
        if timeout is None:
            await waiter
            return True
        try:
            await asyncio.wait_for(waiter, timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug(
                "Gate timed out after %.3fs for key %s",
                timeout,
                self._coordinator.cache_key,
            )
            return False
        return True

    async def _wait_event(self) -> None:
        ready = asyncio.Event()

        def _on_settle(state: FetchState[Any]) -> None:
            if not state.loading:
                ready.set()

        unsubscribe = self._coordinator.add_settle_listener(_on_settle)
        try:
            # Settlement may have happened between the check and subscribing.
            if not self._coordinator.loading:
                return
            await ready.wait()
        finally:
            unsubscribe()

    async def _wait_poll(self) -> None:
        while self._coordinator.loading:
            await asyncio.sleep(self._poll_interval_s)


async def read_when_ready(coordinator: RequestCoordinator[Any]) -> FetchResult[Any]:
    """
    Suspense-aware read for renderers.

    Retries ``coordinator.read()`` after each ``SuspendPending`` until it
    returns a settled result.
    """
    while True:
        try:
            return coordinator.read()
        except SuspendPending as pending:
            await pending.wait()
