#!/usr/bin/env python3
"""Chart data assembly for the thread performance histogram.

Combines the boundary set, time-weighted fractions, raw counts and bucket
colours into ordered chart records for a rendering surface. The entry point is
a pure function of explicit snapshots; nothing here reads global state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional, Tuple, Union

from tickperf.core.colors import BucketColorMapper
from tickperf.core.config_manager import ChartConfig
from tickperf.core.data_transformers import PerfCursorSnapshot, RuntimeSnapshot
from tickperf.core.formatters import (
    format_bucket_range,
    format_fraction,
    format_tick_boundary,
)
from tickperf.core.histogram import compute_bucket_fractions, validate_boundaries
from tickperf.core.threads import ThreadKey, get_thread_display_name
from tickperf.core.threshold import find_marker_index, get_min_tick_interval_marker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartDatum:
    """One histogram bar."""

    bucket: float  # Upper boundary in seconds
    label: str  # Formatted boundary
    fraction: float  # Share of total tick time, 0..1
    count: int  # Raw tick count, 0 for cursor snapshots
    color: str  # "#rrggbb"


@dataclass(frozen=True)
class ThreadPerfChartData:
    """Everything a rendering surface needs to draw one thread's histogram."""

    thread: ThreadKey
    thread_display_name: str
    data: Tuple[ChartDatum, ...] = field(default_factory=tuple)
    boundaries: Tuple[float, ...] = field(default_factory=tuple)
    # Always computed; only exposed via threshold_marker when enabled
    computed_threshold_marker: Optional[float] = None
    show_threshold_marker: bool = False
    from_cursor: bool = False

    @property
    def threshold_marker(self) -> Optional[float]:
        if not self.show_threshold_marker:
            return None
        return self.computed_threshold_marker

    @property
    def title(self) -> str:
        return f"{self.thread_display_name} Thread Performance (last minute)"

    @property
    def fractions(self) -> list[float]:
        return [d.fraction for d in self.data]

    @property
    def counts(self) -> list[int]:
        return [d.count for d in self.data]

    @property
    def colors(self) -> list[str]:
        return [d.color for d in self.data]

    def __len__(self) -> int:
        return len(self.data)


def assemble_chart_data(
    snapshot: Optional[RuntimeSnapshot],
    selected_thread: Union[ThreadKey, str, None] = None,
    cursor: Optional[PerfCursorSnapshot] = None,
    config: Optional[ChartConfig] = None,
) -> Optional[ThreadPerfChartData]:
    """Build the chart records for the selected thread.

    Args:
        snapshot: Live runtime snapshot, possibly incomplete
        selected_thread: Thread to chart (defaults to ThreadConfig.default_thread)
        cursor: Historical snapshot; replaces live fractions and zeroes counts
        config: Chart configuration (defaults to ChartConfig())

    Returns:
        ThreadPerfChartData, or None when the snapshot is missing or incomplete

    Raises:
        ValueError: On malformed input (misaligned counts or cursor fractions)
    """
    config = config or ChartConfig()
    thread = ThreadKey.parse(selected_thread or config.thread.default_thread)

    if snapshot is None or not snapshot.is_complete:
        logger.debug("No complete performance snapshot yet, nothing to chart")
        return None

    boundaries = validate_boundaries(snapshot.boundaries)
    display_name = get_thread_display_name(thread)
    show_marker = config.marker.show_threshold_marker

    if not boundaries:
        return ThreadPerfChartData(
            thread=thread,
            thread_display_name=display_name,
            show_threshold_marker=show_marker,
            from_cursor=cursor is not None,
        )

    min_tick_interval = snapshot.min_tick_time.get(thread)
    marker = get_min_tick_interval_marker(boundaries, min_tick_interval)
    marker_index = find_marker_index(boundaries, marker)
    color_for = BucketColorMapper(len(boundaries), marker_index, config.colors)

    thread_counts = snapshot.bucket_counts.get(thread)
    if cursor is not None:
        fractions = list(cursor.weighted_perf)
        if len(fractions) != len(boundaries):
            raise ValueError(
                f"Cursor snapshot has {len(fractions)} fractions for "
                f"{len(boundaries)} boundaries"
            )
        counts = [0] * len(boundaries)
    else:
        if thread_counts is None:
            logger.debug(f"No bucket counts reported for thread {thread.value}")
            return None
        counts = list(thread_counts)
        fractions = compute_bucket_fractions(boundaries, counts)

    precision = config.format.boundary_precision
    data = tuple(
        ChartDatum(
            bucket=boundaries[i],
            label=format_tick_boundary(boundaries[i], precision),
            fraction=fractions[i],
            count=counts[i],
            color=color_for(i + 1),
        )
        for i in range(len(boundaries))
    )

    if config.debug.plot_debug:
        logger.debug(
            f"thread={thread.value} buckets={len(data)} marker={marker} "
            f"cursor={cursor is not None}"
        )

    return ThreadPerfChartData(
        thread=thread,
        thread_display_name=display_name,
        data=data,
        boundaries=boundaries,
        computed_threshold_marker=marker,
        show_threshold_marker=show_marker,
        from_cursor=cursor is not None,
    )


def describe_datum(
    chart_data: ThreadPerfChartData, index: int, precision: Optional[int] = None
) -> list[str]:
    """Tooltip lines for the bar at ``index``.

    The lower limit is the previous bucket's boundary, or 0 for the first.
    """
    datum = chart_data.data[index]
    lower = chart_data.data[index - 1].bucket if index > 0 else 0
    pct = format_fraction(datum.fraction, precision=0)
    return [
        f"Tick duration: {format_bucket_range(lower, datum.bucket, precision)}",
        f"Time spent: ~{pct}",
        f"Tick count: {datum.count}",
    ]


class ChartDataMemo:
    """Caches the last assembled chart keyed by its inputs.

    Recomputation is skipped while the boundaries, the selected thread's
    counts, the thread, the cursor fractions, the threshold and the marker
    flag are unchanged.
    """

    def __init__(self, config: Optional[ChartConfig] = None):
        self.config = config or ChartConfig()
        self._key: Optional[Hashable] = None
        self._value: Optional[ThreadPerfChartData] = None
        self.hits = 0
        self.misses = 0

    def _make_key(
        self,
        snapshot: Optional[RuntimeSnapshot],
        thread: ThreadKey,
        cursor: Optional[PerfCursorSnapshot],
    ) -> Tuple[Any, ...]:
        if snapshot is None:
            return (None, thread, None)
        counts = (snapshot.bucket_counts or {}).get(thread)
        threshold = (snapshot.min_tick_time or {}).get(thread)
        return (
            snapshot.boundaries,
            counts,
            thread,
            cursor.weighted_perf if cursor is not None else None,
            threshold,
            snapshot.is_complete,
            self.config.marker.show_threshold_marker,
        )

    def get(
        self,
        snapshot: Optional[RuntimeSnapshot],
        selected_thread: Union[ThreadKey, str, None] = None,
        cursor: Optional[PerfCursorSnapshot] = None,
    ) -> Optional[ThreadPerfChartData]:
        thread = ThreadKey.parse(selected_thread or self.config.thread.default_thread)
        key = self._make_key(snapshot, thread, cursor)
        if self._key is not None and key == self._key:
            self.hits += 1
            return self._value

        self.misses += 1
        self._value = assemble_chart_data(snapshot, thread, cursor, self.config)
        self._key = key
        return self._value
