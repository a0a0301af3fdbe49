"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic cache key derivation for producer arguments.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any


def default_cache_key(params: Sequence[Any]) -> str:
    """
    Serialize ordered producer arguments into a compact JSON array.

    ``[0]`` -> ``"[0]"``, ``[1, "a"]`` -> ``'[1,"a"]'``. Values that JSON
    cannot encode are rendered with ``str()``.
    """
    return json.dumps(
        list(params),
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    )
