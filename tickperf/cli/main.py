#!/usr/bin/env python3
"""CLI that turns a server performance snapshot into a thread histogram.

Uses:
- data_transformers to parse the snapshot (and optional cursor) JSON
- chart_data.assemble_chart_data for the weighted, coloured bucket records
- chart_builder/chart_saver when an output file is requested

Without ``--output`` a plain text table is printed instead of a chart.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from tickperf.core.chart_data import (
    ThreadPerfChartData,
    assemble_chart_data,
    describe_datum,
)
from tickperf.core.config_manager import ChartConfig, load_config
from tickperf.core.data_transformers import (
    parse_cursor_snapshot,
    parse_runtime_snapshot,
)
from tickperf.core.formatters import format_fraction
from tickperf.core.threads import ThreadKey

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _load_json(path: str):
    with open(path, "r") as f:
        return json.load(f)


def format_table(chart_data: ThreadPerfChartData) -> str:
    """Render chart data as a fixed-width text table."""
    lines = [chart_data.title]
    if not len(chart_data):
        lines.append("No data")
        return "\n".join(lines)

    lines.append(f"{'bucket':>10}  {'time':>7}  {'count':>8}  color")
    for datum in chart_data.data:
        lines.append(
            f"{datum.label:>10}  {format_fraction(datum.fraction):>7}  "
            f"{datum.count:>8}  {datum.color}"
        )

    marker = chart_data.threshold_marker
    if marker is not None:
        index = chart_data.boundaries.index(marker)
        lines.append(f"min tick interval marker: {chart_data.data[index].label}")
    return "\n".join(lines)


def render_chart(chart_data: ThreadPerfChartData, config: ChartConfig, output: str) -> bool:
    """Build the matplotlib chart and save it to ``output``."""
    from tickperf.core.chart_builder import ThreadPerfChartBuilder
    from tickperf.core.chart_saver import ChartSaver

    fig = ThreadPerfChartBuilder(config).build(chart_data)
    saver = ChartSaver(
        min_width_in=config.layout.min_chart_width_in,
        max_width_in=config.layout.max_chart_width_in,
    )
    return saver.save(fig, output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render the time-weighted tick duration histogram for a "
        "server thread from a performance snapshot JSON file."
    )
    parser.add_argument("snapshot", help="Path to runtime snapshot JSON")
    parser.add_argument(
        "--thread",
        choices=[key.value for key in ThreadKey],
        default=None,
        help="Thread to chart (default: thread.default_thread from config)",
    )
    parser.add_argument(
        "--cursor",
        help="Path to a historical cursor snapshot JSON; replaces live counts",
    )
    parser.add_argument("--config", help="Path to chart configuration JSON")
    parser.add_argument(
        "--output",
        help="Write the chart to this file (.pdf/.png/.svg) instead of printing a table",
    )
    parser.add_argument(
        "--show-marker",
        action="store_true",
        help="Expose the min tick interval marker",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--tooltips",
        action="store_true",
        help="Print tooltip text for every bucket after the table",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config and not os.path.exists(args.config):
        parser.error(f"Config file not found: {args.config}")
    if not os.path.exists(args.snapshot):
        parser.error(f"Snapshot file not found: {args.snapshot}")

    config = load_config(config_file=args.config)
    if args.show_marker:
        config.marker.show_threshold_marker = True
    if args.debug:
        config.debug.plot_debug = True
    setup_logging(config.debug.plot_debug)

    is_valid, errors = config.validate()
    if not is_valid:
        details = "\n".join(f"  - {e}" for e in errors)
        logger.error(f"Configuration validation failed:\n{details}")
        return 1

    try:
        snapshot = parse_runtime_snapshot(_load_json(args.snapshot))
        cursor = parse_cursor_snapshot(_load_json(args.cursor)) if args.cursor else None
        chart_data = assemble_chart_data(snapshot, args.thread, cursor, config)
    except (ValueError, TypeError, json.JSONDecodeError) as e:
        logger.error(f"Invalid snapshot: {e}")
        return 1

    if chart_data is None:
        logger.error("Snapshot has no performance data to chart")
        return 1

    if args.output:
        return 0 if render_chart(chart_data, config, args.output) else 1

    print(format_table(chart_data))
    if args.tooltips:
        for i in range(len(chart_data)):
            print()
            print("\n".join(describe_datum(chart_data, i)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
