#!/usr/bin/env python3
"""Tests for the two-segment bucket colour gradient."""

import re
import unittest

from matplotlib import colormaps
from matplotlib.colors import to_hex

from tickperf.core.colors import BucketColorMapper
from tickperf.core.config_manager import ColorConfig, DEFAULT_COLOR_CONFIG


HEX_RE = re.compile(r"^#[0-9a-f]{6}$")


class TestBucketColorMapperSplit(unittest.TestCase):
    """Test the good/bad split mode."""

    def setUp(self):
        self.mapper = BucketColorMapper(total_buckets=5, split_index=2)

    def test_every_ordinal_has_valid_color(self):
        colors = self.mapper.colors_for_all()
        self.assertEqual(len(colors), 5)
        for color in colors:
            self.assertRegex(color, HEX_RE)

    def test_switches_scale_between_two_and_three(self):
        self.assertEqual(self.mapper.scale_for(2).name, "YlGn")
        self.assertEqual(self.mapper.scale_for(3).name, "YlOrRd")

    def test_positions(self):
        self.assertAlmostEqual(self.mapper.position(1), 1 / 3)
        self.assertAlmostEqual(self.mapper.position(2), 2 / 3)
        self.assertAlmostEqual(self.mapper.position(3), 0.25)
        self.assertAlmostEqual(self.mapper.position(4), 0.75)
        # 0.25 + 1.0 is clipped to the end of the scale
        self.assertAlmostEqual(self.mapper.position(5), 1.0)

    def test_color_values(self):
        self.assertEqual(self.mapper(1), to_hex(colormaps["YlGn"](1 / 3)))
        self.assertEqual(self.mapper(3), to_hex(colormaps["YlOrRd"](0.25)))

    def test_split_at_last_bucket_has_no_division_by_zero(self):
        mapper = BucketColorMapper(total_buckets=5, split_index=4)
        self.assertAlmostEqual(mapper.position(5), 0.25)
        for color in mapper.colors_for_all():
            self.assertRegex(color, HEX_RE)

    def test_split_at_first_bucket(self):
        """A split index of 0 is a real split: every ordinal is over budget."""
        mapper = BucketColorMapper(total_buckets=5, split_index=0)
        self.assertTrue(mapper.has_split)
        self.assertAlmostEqual(mapper.position(1), 0.25)
        self.assertAlmostEqual(mapper.position(5), 1.0)
        for ordinal in range(1, 6):
            self.assertEqual(mapper.scale_for(ordinal).name, "YlOrRd")

    def test_single_bucket(self):
        mapper = BucketColorMapper(total_buckets=1, split_index=0)
        self.assertRegex(mapper(1), HEX_RE)


class TestBucketColorMapperFallback(unittest.TestCase):
    """Test the single-scale mode used without a marker."""

    def setUp(self):
        self.mapper = BucketColorMapper(total_buckets=5)

    def test_every_ordinal_has_valid_color(self):
        for color in self.mapper.colors_for_all():
            self.assertRegex(color, HEX_RE)

    def test_uses_fallback_scale(self):
        for ordinal in range(1, 6):
            self.assertEqual(self.mapper.scale_for(ordinal).name, "RdYlGn")

    def test_positions_decrease(self):
        positions = [self.mapper.position(i) for i in range(1, 6)]
        self.assertEqual(positions, sorted(positions, reverse=True))
        self.assertAlmostEqual(positions[0], 0.8)
        self.assertAlmostEqual(positions[-1], 0.0)


class TestBucketColorMapperValidation(unittest.TestCase):
    """Test argument checks and configuration."""

    def test_ordinal_zero_is_rejected(self):
        mapper = BucketColorMapper(total_buckets=3)
        with self.assertRaises(ValueError):
            mapper(0)
        with self.assertRaises(ValueError):
            mapper(4)

    def test_bad_split_index(self):
        with self.assertRaises(ValueError):
            BucketColorMapper(total_buckets=3, split_index=3)

    def test_no_buckets(self):
        with self.assertRaises(ValueError):
            BucketColorMapper(total_buckets=0)

    def test_custom_scales(self):
        colors = ColorConfig(good_scale="Blues", bad_scale="Reds", bad_scale_offset=0.0)
        mapper = BucketColorMapper(total_buckets=4, split_index=1, colors=colors)
        self.assertEqual(mapper(2), to_hex(colormaps["Reds"](0.0)))

    def test_defaults_to_shared_color_config(self):
        mapper = BucketColorMapper(total_buckets=3)
        self.assertIs(mapper.colors, DEFAULT_COLOR_CONFIG)
        self.assertEqual(mapper.scale_for(1).name, DEFAULT_COLOR_CONFIG.fallback_scale)

    def test_deterministic(self):
        a = BucketColorMapper(total_buckets=7, split_index=3).colors_for_all()
        b = BucketColorMapper(total_buckets=7, split_index=3).colors_for_all()
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
