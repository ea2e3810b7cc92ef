#!/usr/bin/env python3
"""Formatting helpers for tick duration boundaries and time fractions.

These are shared by the chart data assembler (bucket labels), the matplotlib
chart builder (axis ticks) and the tooltip text.
"""

import math
from typing import Any, Optional

from tickperf.core.config_manager import DEFAULT_FORMAT_CONFIG


def format_tick_boundary(seconds: Any, precision: Optional[int] = None) -> str:
    """Format a boundary duration (seconds) as a compact human string.

    - values of one second or more: seconds, e.g. ``1.5s``
    - sub-second values: milliseconds, e.g. ``4.0ms``
    - sub-millisecond values: fixed point with ``precision + 1`` significant
      digits, e.g. ``0.5ms`` or ``0.05ms``, so microsecond buckets stay distinct

    A value that rounds up to the next unit is written in that unit, so
    ``0.0009996`` gives ``1.0ms`` just as ``0.001`` does.

    Args:
        seconds: Duration in seconds
        precision: Decimal places (defaults to FormatConfig.boundary_precision)

    Returns:
        Formatted string

    Raises:
        ValueError: If the duration is negative or NaN
    """
    if precision is None:
        precision = DEFAULT_FORMAT_CONFIG.boundary_precision

    value = float(seconds)
    if math.isnan(value) or value < 0:
        raise ValueError(
            f"Tick duration must be a non-negative number, got {seconds!r}"
        )
    if math.isinf(value):
        return "∞"
    if value == 0:
        return "0ms"

    ms = value * 1000
    if round(ms, precision) >= 1000:
        return f"{value:.{precision}f}s"

    if ms < 1:
        decimals = precision - math.floor(math.log10(ms))
        if round(ms, decimals) < 1:
            return f"{ms:.{decimals}f}".rstrip("0").rstrip(".") + "ms"
    return f"{ms:.{precision}f}ms"


def format_fraction(fraction: float, precision: Optional[int] = None) -> str:
    """Format a 0..1 fraction as a percent string (``0.123`` -> ``12.3%``)."""
    if precision is None:
        precision = DEFAULT_FORMAT_CONFIG.percent_precision
    return f"{fraction * 100:.{precision}f}%"


def format_bucket_range(
    lower: float, upper: float, precision: Optional[int] = None
) -> str:
    """Format a bucket's duration range as ``lower ~ upper``."""
    return (
        f"{format_tick_boundary(lower, precision)} ~ "
        f"{format_tick_boundary(upper, precision)}"
    )
