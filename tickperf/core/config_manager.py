#!/usr/bin/env python3
"""Configuration management for thread performance charts.

This module provides a unified configuration system that supports:
1. JSON configuration files
2. Plain dictionaries (for embedding in a larger dashboard config)
3. Validation and defaults

Every tunable of the chart pipeline lives here: the colour scales used for the
"good" and "bad" halves of the histogram, boundary label precision, the
threshold marker toggle and the matplotlib layout used by the chart builder.
"""

import json
import os
from typing import Any, Dict, Optional
from datetime import datetime
from zoneinfo import ZoneInfo
from dataclasses import dataclass, field, asdict

from matplotlib import colormaps

from tickperf.core.threads import ThreadKey


VALID_THREADS = {key.value for key in ThreadKey}


@dataclass
class ColorConfig:
    """Colour scales for the bucket gradient and chart chrome."""

    good_scale: str = "YlGn"  # Buckets within the tick budget
    bad_scale: str = "YlOrRd"  # Buckets overrunning the tick budget
    fallback_scale: str = "RdYlGn"  # Used when no threshold marker exists
    bad_scale_offset: float = 0.25  # Start of the bad scale, meets the good scale
    grid_line: str = "#3F4146"
    border: str = "#000000"
    placeholder_text: str = "#808080"


@dataclass
class MarkerConfig:
    """Threshold marker (min tick interval reference line)."""

    # The marker is always computed; this only decides whether it is exposed
    show_threshold_marker: bool = False

    outer_color: str = "black"
    outer_width: float = 4.0
    outer_dash: str = "6 2"
    inner_color: str = "#F513B3"
    inner_width: float = 2.0
    inner_dash: str = "4 4"


@dataclass
class FormatConfig:
    """Number formatting for labels and tooltips."""

    boundary_precision: int = 1  # Decimals for "4.0ms" / "1.5s"
    percent_precision: int = 1  # Decimals for bar value labels
    axis_percent_precision: int = 0  # Decimals for the percent axis


@dataclass
class FontConfig:
    """Font sizes for the chart."""

    chart_title: int = 12
    chart_label: int = 10
    chart_tick: int = 9
    bar_label: int = 8


@dataclass
class LayoutConfig:
    """Layout dimensions and constraints."""

    # Figure dimensions (stored as separate width/height for JSON serialization)
    chart_figsize_width: float = 8.0
    chart_figsize_height: float = 4.5

    # Margins (for fig.subplots_adjust)
    chart_left: float = 0.12
    chart_right: float = 0.96
    chart_top: float = 0.92
    chart_bottom: float = 0.14

    # Bars narrower than this fraction of the axis get no value label
    label_skip_fraction: float = 0.06

    bar_height_fraction: float = 0.8
    border_width: float = 0.5

    # Saved chart size constraints
    min_chart_width_in: float = 4.0
    max_chart_width_in: float = 11.0

    @property
    def chart_figsize(self) -> tuple:
        """Get chart figure size as tuple for matplotlib."""
        return (self.chart_figsize_width, self.chart_figsize_height)


@dataclass
class ThreadConfig:
    """Thread selection defaults."""

    default_thread: str = "svMain"


@dataclass
class DebugConfig:
    """Debug settings."""

    plot_debug: bool = False


@dataclass
class ChartConfig:
    """Complete chart configuration."""

    colors: ColorConfig = field(default_factory=ColorConfig)
    marker: MarkerConfig = field(default_factory=MarkerConfig)
    format: FormatConfig = field(default_factory=FormatConfig)
    fonts: FontConfig = field(default_factory=FontConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    thread: ThreadConfig = field(default_factory=ThreadConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)

    # Metadata
    created_at: Optional[str] = None
    version: str = "1.0"

    def __post_init__(self):
        """Initialize timestamp if not provided."""
        if self.created_at is None:
            self.created_at = datetime.now(ZoneInfo("UTC")).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def to_json(self, filepath: str, indent: int = 2) -> None:
        """Save configuration to JSON file.

        Args:
            filepath: Path to JSON file
            indent: JSON indentation level
        """
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartConfig":
        """Create config from dictionary.

        Keys starting with ``_`` are documentation fields and are dropped.

        Args:
            data: Configuration dictionary

        Returns:
            ChartConfig instance
        """

        def filter_meta(d: dict) -> dict:
            """Remove keys starting with _ (documentation fields)."""
            return {k: v for k, v in d.items() if not k.startswith("_")}

        return cls(
            colors=ColorConfig(**filter_meta(data.get("colors", {}))),
            marker=MarkerConfig(**filter_meta(data.get("marker", {}))),
            format=FormatConfig(**filter_meta(data.get("format", {}))),
            fonts=FontConfig(**filter_meta(data.get("fonts", {}))),
            layout=LayoutConfig(**filter_meta(data.get("layout", {}))),
            thread=ThreadConfig(**filter_meta(data.get("thread", {}))),
            debug=DebugConfig(**filter_meta(data.get("debug", {}))),
            created_at=data.get("created_at"),
            version=data.get("version", "1.0"),
        )

    @classmethod
    def from_json(cls, filepath: str) -> "ChartConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        for name in ("good_scale", "bad_scale", "fallback_scale"):
            scale = getattr(self.colors, name)
            if scale not in colormaps:
                errors.append(
                    f"colors.{name} must be a matplotlib colormap name. Got '{scale}'."
                )

        if not 0.0 <= self.colors.bad_scale_offset <= 1.0:
            errors.append(
                "colors.bad_scale_offset must be between 0 and 1. "
                f"Got {self.colors.bad_scale_offset}."
            )

        if self.format.boundary_precision < 0:
            errors.append("format.boundary_precision must be >= 0.")
        if self.format.percent_precision < 0:
            errors.append("format.percent_precision must be >= 0.")

        if self.thread.default_thread not in VALID_THREADS:
            errors.append(
                "thread.default_thread must be one of {options}. Got '{value}'.".format(
                    options=", ".join(sorted(VALID_THREADS)),
                    value=self.thread.default_thread,
                )
            )

        if self.layout.chart_figsize_width <= 0 or self.layout.chart_figsize_height <= 0:
            errors.append("layout chart figure size must be positive.")

        return len(errors) == 0, errors


def load_config(
    config_file: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
) -> ChartConfig:
    """Load configuration from file or dictionary.

    With neither argument the defaults are returned.

    Raises:
        ValueError: If the config file doesn't exist
    """
    if config_file:
        if not os.path.exists(config_file):
            raise ValueError(f"Config file not found: {config_file}")
        return ChartConfig.from_json(config_file)
    elif config_dict:
        return ChartConfig.from_dict(config_dict)
    return ChartConfig()


# =============================================================================
# Default Configuration Instances
# These are the single source of truth for all default values.
# =============================================================================

DEFAULT_COLOR_CONFIG = ColorConfig()
DEFAULT_FORMAT_CONFIG = FormatConfig()
DEFAULT_LAYOUT_CONFIG = LayoutConfig()


def _fonts_to_dict(config: FontConfig) -> Dict[str, int]:
    """Convert FontConfig to dictionary."""
    return asdict(config)


def _layout_to_dict(config: LayoutConfig) -> Dict[str, Any]:
    """Convert LayoutConfig to dictionary with tuple figsize."""
    d = asdict(config)
    d["chart_figsize"] = config.chart_figsize
    return d
