#!/usr/bin/env python3
"""Chart saving utilities.

Saves matplotlib figures with a tight bounding box, constrained to a sane
width range, and closes them afterwards. The output format follows the file
extension (``.pdf``, ``.png``, ``.svg``).
"""

import logging
from typing import Optional

import matplotlib.pyplot as plt

from tickperf.core.config_manager import DEFAULT_LAYOUT_CONFIG

logger = logging.getLogger(__name__)


class ChartSaver:
    """Handles saving matplotlib figures to disk."""

    def __init__(
        self,
        min_width_in: Optional[float] = None,
        max_width_in: Optional[float] = None,
    ):
        """Initialize chart saver with size constraints.

        Args:
            min_width_in: Minimum width in inches (prevents tiny charts)
            max_width_in: Maximum width in inches (prevents huge charts)
        """
        self.min_width_in = min_width_in or DEFAULT_LAYOUT_CONFIG.min_chart_width_in
        self.max_width_in = max_width_in or DEFAULT_LAYOUT_CONFIG.max_chart_width_in

    def save(self, fig, output_path: str, close_fig: bool = True) -> bool:
        """Save figure with tight bounds.

        Returns:
            True if successful, False otherwise
        """
        try:
            self._resize_figure_to_tight_bounds(fig)
            fig.savefig(output_path, bbox_inches="tight", pad_inches=0.05)
            ok = True
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save chart to {output_path}: {e}")
            ok = False

        if close_fig:
            plt.close(fig)

        if ok:
            logger.info(f"Chart saved to {output_path}")
        return ok

    def _resize_figure_to_tight_bounds(self, fig) -> None:
        """Resize figure based on tight bounding box with size constraints."""
        fig.canvas.draw()
        renderer = fig.canvas.get_renderer()
        tight_bbox = fig.get_tightbbox(renderer)
        if tight_bbox is None:
            return

        # tight bbox is already in inches
        width_in = tight_bbox.width
        height_in = tight_bbox.height
        if width_in <= 0 or height_in <= 0:
            return

        width_in, height_in = self._apply_size_constraints(width_in, height_in)
        fig.set_size_inches(width_in, height_in)

    def _apply_size_constraints(
        self,
        width_in: float,
        height_in: float,
    ) -> tuple[float, float]:
        """Apply min/max width constraints with proportional height scaling."""
        if width_in < self.min_width_in:
            scale = self.min_width_in / width_in
            width_in = self.min_width_in
            height_in = height_in * scale
        elif width_in > self.max_width_in:
            scale = self.max_width_in / width_in
            width_in = self.max_width_in
            height_in = height_in * scale

        return width_in, height_in


def save_chart(fig, output_path: str, close_fig: bool = True) -> bool:
    """Convenience function to save a chart with default constraints."""
    return ChartSaver().save(fig, output_path, close_fig)
