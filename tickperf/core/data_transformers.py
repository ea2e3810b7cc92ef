#!/usr/bin/env python3
"""Snapshot parsing and normalization utilities.

The server reports runtime performance as camelCase JSON
(``perfBoundaries``, ``perfBucketCounts``, ``perfMinTickTime``) while Python
callers tend to use snake_case. This module resolves either spelling into the
immutable snapshot types consumed by the chart data assembler.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tickperf.core.histogram import validate_boundaries
from tickperf.core.threads import ThreadKey

logger = logging.getLogger(__name__)


# =============================================================================
# Field Alias Mappings
# =============================================================================

FIELD_ALIASES: Dict[str, List[str]] = {
    "boundaries": ["perfBoundaries", "perf_boundaries", "boundaries"],
    "bucket_counts": ["perfBucketCounts", "perf_bucket_counts", "bucket_counts"],
    "min_tick_time": ["perfMinTickTime", "perf_min_tick_time", "min_tick_time"],
    "weighted_perf": ["weightedPerf", "weighted_perf"],
}


# =============================================================================
# Snapshot Types
# =============================================================================


@dataclass(frozen=True)
class RuntimeSnapshot:
    """A live performance snapshot for all monitored threads.

    Any field may be None while the server has not reported it yet.
    """

    boundaries: Optional[Tuple[float, ...]] = None
    bucket_counts: Optional[Dict[ThreadKey, Tuple[int, ...]]] = None
    min_tick_time: Optional[Dict[ThreadKey, Optional[float]]] = None

    @property
    def is_complete(self) -> bool:
        return (
            self.boundaries is not None
            and self.bucket_counts is not None
            and self.min_tick_time is not None
        )


@dataclass(frozen=True)
class PerfCursorSnapshot:
    """A historical point selected by the operator.

    Carries precomputed weighted fractions only, no raw counts.
    """

    weighted_perf: Tuple[float, ...] = field(default_factory=tuple)


# =============================================================================
# SnapshotNormalizer Class
# =============================================================================


class SnapshotNormalizer:
    """Resolves snapshot fields under any of their known spellings.

    Example:
        normalizer = SnapshotNormalizer()
        snap = normalizer.parse_runtime({"perfBoundaries": [0.001, 0.002], ...})
    """

    def __init__(self, aliases: Optional[Dict[str, List[str]]] = None):
        self.aliases = aliases or FIELD_ALIASES

    def get_value(self, row: Mapping[str, Any], field: str, default: Any = None) -> Any:
        """Get field value trying all known aliases."""
        if field not in self.aliases:
            return row.get(field, default)

        for alias in self.aliases[field]:
            if alias in row and row[alias] is not None:
                return row[alias]

        return default

    def parse_runtime(self, data: Optional[Mapping[str, Any]]) -> RuntimeSnapshot:
        """Build a RuntimeSnapshot from a server payload.

        Missing fields stay None. Present but malformed fields raise.

        Raises:
            ValueError: On bad boundaries, unknown thread names or negative counts
        """
        if not data:
            return RuntimeSnapshot()

        raw_boundaries = self.get_value(data, "boundaries")
        raw_counts = self.get_value(data, "bucket_counts")
        raw_min_tick = self.get_value(data, "min_tick_time")

        boundaries = None
        if raw_boundaries is not None:
            boundaries = validate_boundaries(raw_boundaries)

        bucket_counts = None
        if raw_counts is not None:
            bucket_counts = {
                ThreadKey.parse(name): _parse_counts(name, counts)
                for name, counts in raw_counts.items()
            }

        min_tick_time = None
        if raw_min_tick is not None:
            min_tick_time = {
                ThreadKey.parse(name): (None if value is None else float(value))
                for name, value in raw_min_tick.items()
            }

        return RuntimeSnapshot(
            boundaries=boundaries,
            bucket_counts=bucket_counts,
            min_tick_time=min_tick_time,
        )

    def parse_cursor(self, data: Any) -> Optional[PerfCursorSnapshot]:
        """Build a PerfCursorSnapshot from ``{"snap": {"weightedPerf": [...]}}``.

        A bare ``{"weightedPerf": [...]}`` mapping or a plain list of fractions
        is accepted too. Returns None when no fractions are present.

        Raises:
            ValueError: If the fractions are not a list of numbers
        """
        if data is None:
            return None
        if isinstance(data, (list, tuple)):
            values = data
        elif isinstance(data, Mapping):
            snap = data.get("snap", data)
            if snap is None:
                logger.debug("Cursor payload has no snapshot")
                return None
            if not isinstance(snap, Mapping):
                raise ValueError(f"Cursor snapshot must be an object, got {snap!r}")
            values = self.get_value(snap, "weighted_perf")
            if values is None:
                logger.debug("Cursor payload has no weighted fractions")
                return None
        else:
            raise ValueError(f"Unsupported cursor payload: {data!r}")

        if not isinstance(values, (list, tuple)):
            raise ValueError(
                f"Cursor weighted fractions must be a list, got {values!r}"
            )
        try:
            fractions = tuple(float(v) for v in values)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cursor weighted fractions must be numbers: {e}") from e
        return PerfCursorSnapshot(weighted_perf=fractions)


def _parse_counts(name: str, counts: Any) -> Tuple[int, ...]:
    values = tuple(int(c) for c in counts)
    if any(c < 0 for c in values):
        raise ValueError(f"Negative bucket count for thread {name}: {list(values)}")
    return values


def parse_runtime_snapshot(data: Optional[Mapping[str, Any]]) -> RuntimeSnapshot:
    """Convenience wrapper around SnapshotNormalizer.parse_runtime."""
    return SnapshotNormalizer().parse_runtime(data)


def parse_cursor_snapshot(data: Any) -> Optional[PerfCursorSnapshot]:
    """Convenience wrapper around SnapshotNormalizer.parse_cursor."""
    return SnapshotNormalizer().parse_cursor(data)
