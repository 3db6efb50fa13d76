"""
kpi/timing.py

Latency and duration helpers for execution records.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from records.coercion import to_optional_datetime

LATENCY_PLACEHOLDER = "--"


def elapsed_ms(started_at: datetime | None, stopped_at: datetime | None) -> float | None:
    """
    Milliseconds between two timestamps, or ``None`` if either is missing.

    Naive values are read as UTC, so naive and aware inputs can be mixed.
    """
    start, stop = to_optional_datetime(started_at), to_optional_datetime(stopped_at)
    if start is None or stop is None:
        return None
    return (stop - start).total_seconds() * 1000


def median_latency_ms(samples: Iterable[float]) -> float | None:
    """
    p50 of *samples*: the value at index ``floor(0.5 * n)`` after sorting.

    For even ``n`` this is the upper of the two middle values.
    """
    ordered = sorted(samples)
    if not ordered:
        return None
    return ordered[math.floor(len(ordered) * 0.5)]


def format_latency(latency_ms: float | None) -> str:
    """``"1.5s"`` style rendering; ``"--"`` when there is no sample."""
    if latency_ms is None:
        return LATENCY_PLACEHOLDER
    return f"{latency_ms / 1000:.1f}s"


def calculate_duration(started_at: Any, stopped_at: Any) -> str | None:
    """
    Render the span between two timestamps.

    Sub-second spans render as whole milliseconds, longer ones as seconds
    with one decimal.  Returns ``None`` when either timestamp is unusable.
    """
    diff = elapsed_ms(to_optional_datetime(started_at), to_optional_datetime(stopped_at))
    if diff is None:
        return None
    if diff < 1000:
        return f"{round(diff)}ms"
    return f"{diff / 1000:.1f}s"


def format_time_saved(seconds: float | None) -> str | None:
    """``"45s"`` under a minute, ``"2m 5s"`` above; ``None`` for zero or missing."""
    if not seconds or seconds <= 0:
        return None
    whole = int(seconds)
    if whole < 60:
        return f"{whole}s"
    minutes, secs = divmod(whole, 60)
    return f"{minutes}m {secs}s"
