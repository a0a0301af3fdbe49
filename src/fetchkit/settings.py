"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Coordinator runtime settings and explicit environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

GateMode = Literal["event", "poll"]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True, slots=True)
class CoordinatorSettings:
    """Explicit settings shared by coordinators and readiness gates."""

    gate_mode: GateMode = "event"
    gate_poll_interval_s: float = 0.1
    retain_data_on_error: bool = True
    cache_store: str | None = None

    def __post_init__(self) -> None:
        if self.gate_mode not in ("event", "poll"):
            raise ValueError(
                f"gate_mode must be 'event' or 'poll', got {self.gate_mode!r}"
            )
        if self.gate_poll_interval_s <= 0:
            raise ValueError("gate_poll_interval_s must be > 0")

    @staticmethod
    def from_env() -> "CoordinatorSettings":
        """Load settings from `FETCHKIT_*` environment variables."""
        cache_store = (os.getenv("FETCHKIT_CACHE_STORE") or "").strip() or None
        return CoordinatorSettings(
            gate_mode=os.getenv("FETCHKIT_GATE_MODE", "event").strip().lower(),  # type: ignore[arg-type]
            gate_poll_interval_s=float(
                os.getenv("FETCHKIT_GATE_POLL_INTERVAL_S", "0.1")
            ),
            retain_data_on_error=_env_bool("FETCHKIT_RETAIN_DATA_ON_ERROR", True),
            cache_store=cache_store,
        )
