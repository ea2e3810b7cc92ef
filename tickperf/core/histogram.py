#!/usr/bin/env python3
"""Time-weighted tick duration histograms.

A plain count histogram under-represents buckets covering long durations: one
200ms tick costs as much wall time as a hundred 2ms ticks. Each bucket's count
is therefore scaled by an estimate of the duration of the ticks it holds, and
the result is normalised to the fraction of total time spent per bucket.
"""

import logging
from functools import lru_cache
from typing import Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def validate_boundaries(boundaries: Sequence[float]) -> Tuple[float, ...]:
    """Check a boundary set and return it as an immutable tuple.

    Raises:
        ValueError: If a boundary is non-positive/non-finite or the set is not
            strictly increasing
    """
    values = tuple(float(b) for b in boundaries)
    if not values:
        return values

    arr = np.asarray(values, dtype=float)
    if not np.all(np.isfinite(arr)) or arr[0] <= 0:
        raise ValueError(f"Boundaries must be positive and finite: {list(values)}")
    if np.any(np.diff(arr) <= 0):
        raise ValueError(f"Boundaries must be strictly increasing: {list(values)}")
    return values


@lru_cache(maxsize=32)
def _bucket_weights(boundaries: Tuple[float, ...]) -> Tuple[float, ...]:
    arr = np.asarray(boundaries, dtype=float)
    lower = np.concatenate(([0.0], arr[:-1]))
    weights = (lower + arr) / 2
    # The overflow bucket has no upper edge to average with
    weights[-1] = arr[-1]
    return tuple(float(w) for w in weights)


def estimate_bucket_weights(boundaries: Sequence[float]) -> Tuple[float, ...]:
    """Estimate the representative tick duration of each bucket.

    Bounded buckets ``[lower, upper)`` use their midpoint, with the first
    bucket's lower edge taken as 0. The last bucket is unbounded and uses its
    boundary value. Results are cached per boundary set.

    Args:
        boundaries: Strictly increasing bucket upper bounds in seconds

    Returns:
        Tuple of per-bucket duration estimates (seconds)
    """
    values = validate_boundaries(boundaries)
    if not values:
        return ()
    return _bucket_weights(values)


def compute_time_weighted_histogram(
    counts: Sequence[int],
    weights: Sequence[float],
) -> list[float]:
    """Normalise per-bucket tick counts into fractions of total time.

    ``fraction[i] = counts[i] * weights[i] / sum(counts * weights)``; when no
    time was recorded every fraction is 0.0.

    Raises:
        ValueError: If lengths differ or a count is negative
    """
    if len(counts) != len(weights):
        raise ValueError(
            f"Bucket counts ({len(counts)}) and weights ({len(weights)}) differ in length"
        )
    if not len(counts):
        return []

    counts_a = np.asarray(counts, dtype=float)
    if np.any(counts_a < 0):
        raise ValueError(f"Bucket counts must be non-negative: {list(counts)}")

    weighted = counts_a * np.asarray(weights, dtype=float)
    total = float(weighted.sum())
    if total <= 0:
        logger.debug(f"No tick time recorded across {len(counts)} buckets")
        return [0.0] * len(counts)

    return [float(v) for v in weighted / total]


def compute_bucket_fractions(
    boundaries: Sequence[float], counts: Sequence[int]
) -> list[float]:
    """Weight and normalise live bucket counts for a boundary set."""
    if len(counts) != len(boundaries):
        raise ValueError(
            f"Expected {len(boundaries)} bucket counts, got {len(counts)}"
        )
    return compute_time_weighted_histogram(counts, estimate_bucket_weights(boundaries))
