#!/usr/bin/env python3
"""Locate the tick budget threshold among histogram boundaries."""

import bisect
import math
from typing import Optional, Sequence


def get_min_tick_interval_marker(
    boundaries: Sequence[float], min_tick_interval: Optional[float]
) -> Optional[float]:
    """Return the boundary the minimum tick interval falls on, if any.

    The marker is the smallest boundary not less than the threshold, so a
    threshold below the first boundary maps onto the first boundary. There is
    no marker when the threshold is absent, non-positive, or larger than
    every boundary (the whole observed range overruns the budget).

    Args:
        boundaries: Strictly increasing bucket upper bounds in seconds
        min_tick_interval: Target tick interval in seconds, or None

    Returns:
        The chosen boundary value, or None for no marker
    """
    if min_tick_interval is None or not boundaries:
        return None
    try:
        threshold = float(min_tick_interval)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(threshold) or threshold <= 0:
        return None

    idx = bisect.bisect_left(boundaries, threshold)
    if idx >= len(boundaries):
        return None
    return boundaries[idx]


def find_marker_index(
    boundaries: Sequence[float], marker: Optional[float]
) -> Optional[int]:
    """Index of the marker boundary by exact equality, or None."""
    if marker is None:
        return None
    for i, boundary in enumerate(boundaries):
        if boundary == marker:
            return i
    return None
