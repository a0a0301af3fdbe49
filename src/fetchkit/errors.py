"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Exception types raised by fetchkit.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable


class FetchKitError(RuntimeError):
    """Base class for fetchkit configuration/resolution failures."""


class CacheStoreError(FetchKitError):
    """Raised when cache store registration or resolution fails."""


class SuspendPending(Exception):
    """
    Control signal raised by a suspense read while an attempt is loading.

    This is not a failure. Renderers catch it, await ``wait()`` and read
    again once the current attempt has settled.
    """

    def __init__(self, wait: Callable[[], Awaitable[bool]]) -> None:
        super().__init__("fetch attempt is still loading")
        self._wait = wait

    async def wait(self) -> bool:
        """Block until the pending attempt settles."""
        return await self._wait()
