"""Thread tick performance histograms: weighting, thresholds and colours."""

from .core.chart_data import (
    ChartDatum,
    ChartDataMemo,
    ThreadPerfChartData,
    assemble_chart_data,
    describe_datum,
)
from .core.data_transformers import (
    PerfCursorSnapshot,
    RuntimeSnapshot,
    parse_cursor_snapshot,
    parse_runtime_snapshot,
)
from .core.threads import ThreadKey, get_thread_display_name

__all__ = [
    "ChartDatum",
    "ChartDataMemo",
    "ThreadPerfChartData",
    "assemble_chart_data",
    "describe_datum",
    "PerfCursorSnapshot",
    "RuntimeSnapshot",
    "parse_cursor_snapshot",
    "parse_runtime_snapshot",
    "ThreadKey",
    "get_thread_display_name",
]
