#!/usr/bin/env python3
"""Matplotlib rendering for thread performance histograms.

Draws a horizontal bar chart from assembled ThreadPerfChartData:
- One bar per bucket, coloured by the bucket gradient
- Boundary labels on the Y axis, percent of total time on the X axis
- Dashed vertical grid
- Optional threshold marker drawn as two overlaid dashed lines

This is a swappable adapter; the chart data it consumes has no matplotlib
dependency of its own.
"""

from typing import Any, Dict, Optional

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from tickperf.core.chart_data import ThreadPerfChartData
from tickperf.core.config_manager import (
    ChartConfig,
    _fonts_to_dict,
    _layout_to_dict,
)
from tickperf.core.formatters import format_fraction, format_tick_boundary


def _dash_pattern(dash: str) -> tuple:
    """Convert an SVG-style dash string (``"6 2"``) to a matplotlib linestyle."""
    return (0, tuple(float(part) for part in dash.split()))


class ThreadPerfChartBuilder:
    """Builds horizontal histogram charts of time spent per tick bucket."""

    def __init__(
        self,
        config: Optional[ChartConfig] = None,
        fonts: Optional[Dict[str, int]] = None,
        layout: Optional[Dict[str, Any]] = None,
    ):
        """Initialise chart builder with styling configuration.

        Args:
            config: Chart configuration (defaults to ChartConfig())
            fonts: Font size dict overriding config.fonts
            layout: Layout dict overriding config.layout
        """
        self.config = config or ChartConfig()
        self.fonts = fonts or _fonts_to_dict(self.config.fonts)
        self.layout = layout or _layout_to_dict(self.config.layout)

    def build(
        self,
        chart_data: Optional[ThreadPerfChartData],
        title: Optional[str] = None,
    ) -> object:
        """Build the chart.

        Args:
            chart_data: Assembled chart data, None while no snapshot exists
            title: Chart title (defaults to chart_data.title)

        Returns:
            matplotlib Figure object
        """
        fig, ax = plt.subplots(figsize=self.layout["chart_figsize"])

        if chart_data is not None and title is None:
            title = chart_data.title

        # Handle empty data
        if chart_data is None or not len(chart_data):
            ax.text(
                0.5,
                0.5,
                "No data",
                ha="center",
                va="center",
                color=self.config.colors.placeholder_text,
            )
            ax.set_axis_off()
            if title:
                ax.set_title(title, fontsize=self.fonts["chart_title"])
            return fig

        y = list(range(len(chart_data)))
        bars = ax.barh(
            y,
            chart_data.fractions,
            height=self.layout["bar_height_fraction"],
            color=chart_data.colors,
            edgecolor=self.config.colors.border,
            linewidth=self.layout["border_width"],
        )

        self._configure_axes(ax, chart_data)
        self._label_bars(ax, bars, chart_data)

        marker = chart_data.threshold_marker
        if marker is not None:
            self._draw_marker(ax, chart_data, marker)

        ax.set_title(title, fontsize=self.fonts["chart_title"])
        self._apply_final_styling(fig)
        return fig

    def _configure_axes(self, ax, chart_data: ThreadPerfChartData) -> None:
        """Boundary labels on Y, percent of total time on X."""
        precision = self.config.format.boundary_precision
        ax.set_yticks(list(range(len(chart_data))))
        ax.set_yticklabels(
            [format_tick_boundary(d.bucket, precision) for d in chart_data.data],
            fontsize=self.fonts["chart_tick"],
        )

        axis_precision = self.config.format.axis_percent_precision
        ax.xaxis.set_major_formatter(
            FuncFormatter(lambda x, pos=None: format_fraction(x, axis_precision))
        )
        ax.set_xlim(0, max(max(chart_data.fractions), 0.01) * 1.05)
        ax.set_xlabel("percent of total time", fontsize=self.fonts["chart_label"])
        ax.tick_params(axis="x", labelsize=self.fonts["chart_tick"])

        ax.grid(
            axis="x",
            linestyle=(0, (8, 6)),
            color=self.config.colors.grid_line,
            alpha=0.25,
            linewidth=1,
        )
        ax.set_axisbelow(True)

    def _label_bars(self, ax, bars, chart_data: ThreadPerfChartData) -> None:
        """Write value labels inside bars that are wide enough."""
        x_max = ax.get_xlim()[1]
        skip = self.layout["label_skip_fraction"] * x_max
        precision = self.config.format.percent_precision
        for bar, datum in zip(bars, chart_data.data):
            if datum.fraction < skip:
                continue
            ax.text(
                bar.get_width() / 2,
                bar.get_y() + bar.get_height() / 2,
                format_fraction(datum.fraction, precision),
                ha="center",
                va="center",
                fontsize=self.fonts["bar_label"],
                fontweight="bold",
            )

    def _draw_marker(
        self, ax, chart_data: ThreadPerfChartData, marker: float
    ) -> None:
        """Draw the threshold marker at the top edge of its bucket's bar."""
        try:
            index = chart_data.boundaries.index(marker)
        except ValueError:
            return
        y = index + 0.5
        marker_cfg = self.config.marker
        ax.axhline(
            y,
            color=marker_cfg.outer_color,
            linewidth=marker_cfg.outer_width,
            linestyle=_dash_pattern(marker_cfg.outer_dash),
        )
        ax.axhline(
            y,
            color=marker_cfg.inner_color,
            linewidth=marker_cfg.inner_width,
            linestyle=_dash_pattern(marker_cfg.inner_dash),
        )

    def _apply_final_styling(self, fig) -> None:
        """Apply layout margins."""
        try:
            fig.subplots_adjust(
                left=self.layout["chart_left"],
                right=self.layout["chart_right"],
                top=self.layout["chart_top"],
                bottom=self.layout["chart_bottom"],
            )
        except ValueError:
            # Margins from a hand-edited config can overlap
            pass
