"""Monotonic timing for log fields."""

from __future__ import annotations

import time


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


def elapsed_ms(start_ms: float) -> int:
    """Whole milliseconds since ``start_ms``, a ``monotonic_ms()`` reading."""
    return max(0, int(monotonic_ms() - start_ms))
