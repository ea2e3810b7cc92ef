#!/usr/bin/env python3
"""Per-bucket colours for the tick duration histogram.

Buckets up to the tick budget are drawn from a "good" scale and buckets past
it from a "bad" scale whose start is offset so the two meet near a shared
yellow instead of jumping. Without a budget a single red-to-green scale is
used, with the fastest buckets on the green end.
"""

from typing import Optional

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import to_hex

from tickperf.core.config_manager import ColorConfig, DEFAULT_COLOR_CONFIG


class BucketColorMapper:
    """Maps 1-based bucket ordinals to ``#rrggbb`` colour strings.

    Ordinal 0 is reserved for "below all recorded buckets" and is never
    coloured.

    Example:
        mapper = BucketColorMapper(total_buckets=5, split_index=2)
        mapper(1)  # good scale
        mapper(3)  # bad scale
    """

    def __init__(
        self,
        total_buckets: int,
        split_index: Optional[int] = None,
        colors: Optional[ColorConfig] = None,
    ):
        """Initialise the mapper.

        Args:
            total_buckets: Number of buckets in the boundary set
            split_index: 0-based index of the threshold boundary, or None
            colors: Colour scale configuration (defaults to DEFAULT_COLOR_CONFIG)
        """
        if total_buckets < 1:
            raise ValueError(f"total_buckets must be >= 1, got {total_buckets}")
        if split_index is not None and not 0 <= split_index < total_buckets:
            raise ValueError(
                f"split_index {split_index} outside 0..{total_buckets - 1}"
            )

        self.total_buckets = total_buckets
        self.split_index = split_index
        self.colors = colors or DEFAULT_COLOR_CONFIG

        self._good = colormaps[self.colors.good_scale]
        self._bad = colormaps[self.colors.bad_scale]
        self._fallback = colormaps[self.colors.fallback_scale]

    @property
    def has_split(self) -> bool:
        return self.split_index is not None

    def position(self, ordinal: int) -> float:
        """Scale position in [0, 1] for a 1-based bucket ordinal."""
        if not 1 <= ordinal <= self.total_buckets:
            raise ValueError(
                f"Bucket ordinal {ordinal} outside 1..{self.total_buckets}"
            )

        if self.split_index is None:
            pos = 1 - ordinal / self.total_buckets
        else:
            split_ordinal = self.split_index + 1
            if ordinal <= self.split_index:
                pos = ordinal / split_ordinal
            else:
                span = self.total_buckets - split_ordinal
                offset = (ordinal - split_ordinal) / span if span > 0 else 0.0
                pos = self.colors.bad_scale_offset + offset

        return float(np.clip(pos, 0.0, 1.0))

    def scale_for(self, ordinal: int):
        """The colormap an ordinal is drawn from."""
        if self.split_index is None:
            return self._fallback
        if ordinal <= self.split_index:
            return self._good
        return self._bad

    def __call__(self, ordinal: int) -> str:
        pos = self.position(ordinal)
        return to_hex(self.scale_for(ordinal)(pos))

    def colors_for_all(self) -> list[str]:
        """Colours for ordinals 1..total_buckets in order."""
        return [self(i) for i in range(1, self.total_buckets + 1)]
