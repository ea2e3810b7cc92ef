#!/usr/bin/env python3
"""Tests for chart data assembly."""

import unittest

import numpy as np

from tickperf.core.chart_data import (
    ChartDataMemo,
    ChartDatum,
    assemble_chart_data,
    describe_datum,
)
from tickperf.core.colors import BucketColorMapper
from tickperf.core.config_manager import ChartConfig, MarkerConfig
from tickperf.core.data_transformers import PerfCursorSnapshot, RuntimeSnapshot
from tickperf.core.threads import ThreadKey


BOUNDARIES = (0.001, 0.002, 0.004, 0.008, 0.016)


def make_snapshot(min_tick=0.004, counts=(10, 5, 3, 1, 1), boundaries=BOUNDARIES):
    return RuntimeSnapshot(
        boundaries=boundaries,
        bucket_counts={
            ThreadKey.MAIN: counts,
            ThreadKey.NETWORK: (0,) * len(boundaries),
        },
        min_tick_time={ThreadKey.MAIN: min_tick, ThreadKey.NETWORK: None},
    )


class TestAssembleChartData(unittest.TestCase):
    """Test the chart data entry point."""

    def test_one_datum_per_boundary_in_order(self):
        chart = assemble_chart_data(make_snapshot())
        self.assertEqual(len(chart), 5)
        self.assertEqual([d.bucket for d in chart.data], list(BOUNDARIES))
        self.assertEqual(chart.counts, [10, 5, 3, 1, 1])
        self.assertIsInstance(chart.data[0], ChartDatum)
        self.assertEqual(chart.data[2].label, "4.0ms")

    def test_weighted_fractions(self):
        chart = assemble_chart_data(make_snapshot())
        np.testing.assert_allclose(
            chart.fractions, [0.115, 0.172, 0.207, 0.138, 0.368], atol=1e-3
        )
        self.assertAlmostEqual(sum(chart.fractions), 1.0, delta=1e-9)

    def test_default_thread_is_main(self):
        chart = assemble_chart_data(make_snapshot())
        self.assertIs(chart.thread, ThreadKey.MAIN)
        self.assertEqual(chart.thread_display_name, "Main")
        self.assertEqual(chart.title, "Main Thread Performance (last minute)")

    def test_threshold_split_colors(self):
        """Marker 0.004 sits at index 2; gradients switch between ordinal 2 and 3."""
        chart = assemble_chart_data(make_snapshot(min_tick=0.004))
        self.assertEqual(chart.computed_threshold_marker, 0.004)

        mapper = BucketColorMapper(5, split_index=2)
        self.assertEqual(chart.colors, mapper.colors_for_all())
        self.assertEqual(mapper.scale_for(2).name, "YlGn")
        self.assertEqual(mapper.scale_for(3).name, "YlOrRd")

    def test_threshold_above_range_uses_fallback(self):
        chart = assemble_chart_data(make_snapshot(min_tick=0.5))
        self.assertIsNone(chart.computed_threshold_marker)
        self.assertEqual(chart.colors, BucketColorMapper(5).colors_for_all())

    def test_absent_threshold_uses_fallback(self):
        chart = assemble_chart_data(make_snapshot(), selected_thread="svNetwork")
        self.assertIsNone(chart.computed_threshold_marker)
        self.assertEqual(chart.colors, BucketColorMapper(5).colors_for_all())
        # No ticks recorded on this thread
        self.assertEqual(chart.fractions, [0.0] * 5)

    def test_marker_hidden_unless_enabled(self):
        hidden = assemble_chart_data(make_snapshot())
        self.assertIsNone(hidden.threshold_marker)
        self.assertEqual(hidden.computed_threshold_marker, 0.004)

        config = ChartConfig(marker=MarkerConfig(show_threshold_marker=True))
        shown = assemble_chart_data(make_snapshot(), config=config)
        self.assertEqual(shown.threshold_marker, 0.004)

    def test_cursor_snapshot_passes_fractions_through(self):
        cursor = PerfCursorSnapshot(weighted_perf=(0.2, 0.2, 0.2, 0.2, 0.2))
        chart = assemble_chart_data(make_snapshot(), cursor=cursor)
        self.assertEqual(chart.fractions, [0.2, 0.2, 0.2, 0.2, 0.2])
        self.assertEqual(chart.counts, [0, 0, 0, 0, 0])
        self.assertTrue(chart.from_cursor)

    def test_cursor_length_mismatch_raises(self):
        cursor = PerfCursorSnapshot(weighted_perf=(0.5, 0.5))
        with self.assertRaises(ValueError):
            assemble_chart_data(make_snapshot(), cursor=cursor)

    def test_missing_snapshot(self):
        self.assertIsNone(assemble_chart_data(None))

    def test_incomplete_snapshot(self):
        snap = RuntimeSnapshot(boundaries=BOUNDARIES, bucket_counts=None,
                               min_tick_time={})
        self.assertIsNone(assemble_chart_data(snap))

    def test_thread_without_counts(self):
        self.assertIsNone(assemble_chart_data(make_snapshot(), selected_thread="svSync"))

    def test_thread_without_counts_logs_thread(self):
        with self.assertLogs("tickperf.core.chart_data", level="DEBUG") as logs:
            assemble_chart_data(make_snapshot(), selected_thread="svSync")
        self.assertIn("thread svSync", logs.output[0])

    def test_empty_boundaries(self):
        snap = RuntimeSnapshot(boundaries=(), bucket_counts={}, min_tick_time={})
        chart = assemble_chart_data(snap)
        self.assertIsNotNone(chart)
        self.assertEqual(len(chart), 0)

    def test_counts_length_mismatch_raises(self):
        with self.assertRaises(ValueError):
            assemble_chart_data(make_snapshot(counts=(1, 2, 3)))

    def test_unknown_thread_raises(self):
        with self.assertRaises(ValueError):
            assemble_chart_data(make_snapshot(), selected_thread="svScripts")

    def test_datum_is_frozen(self):
        chart = assemble_chart_data(make_snapshot())
        with self.assertRaises(AttributeError):
            chart.data[0].fraction = 1.0


class TestDescribeDatum(unittest.TestCase):
    """Test tooltip text."""

    def test_first_bucket_starts_at_zero(self):
        chart = assemble_chart_data(make_snapshot())
        lines = describe_datum(chart, 0)
        self.assertEqual(lines[0], "Tick duration: 0ms ~ 1.0ms")
        self.assertEqual(lines[1], "Time spent: ~11%")
        self.assertEqual(lines[2], "Tick count: 10")

    def test_uses_previous_boundary(self):
        chart = assemble_chart_data(make_snapshot())
        lines = describe_datum(chart, 4)
        self.assertEqual(lines[0], "Tick duration: 8.0ms ~ 16.0ms")
        self.assertEqual(lines[1], "Time spent: ~37%")

    def test_explicit_none_precision_uses_default(self):
        chart = assemble_chart_data(make_snapshot())
        self.assertEqual(
            describe_datum(chart, 0, precision=None), describe_datum(chart, 0)
        )
        self.assertEqual(
            describe_datum(chart, 0, precision=2)[0], "Tick duration: 0ms ~ 1.00ms"
        )


class TestChartDataMemo(unittest.TestCase):
    """Test memoisation of assembled charts."""

    def test_same_inputs_hit(self):
        memo = ChartDataMemo()
        snap = make_snapshot()
        first = memo.get(snap)
        second = memo.get(make_snapshot())
        self.assertIs(first, second)
        self.assertEqual((memo.hits, memo.misses), (1, 1))

    def test_changed_inputs_miss(self):
        memo = ChartDataMemo()
        memo.get(make_snapshot())
        memo.get(make_snapshot(counts=(1, 1, 1, 1, 1)))
        memo.get(make_snapshot(counts=(1, 1, 1, 1, 1)), selected_thread="svNetwork")
        cursor = PerfCursorSnapshot(weighted_perf=(0.2,) * 5)
        memo.get(make_snapshot(counts=(1, 1, 1, 1, 1)), "svNetwork", cursor)
        self.assertEqual((memo.hits, memo.misses), (0, 4))

    def test_missing_snapshot_is_cached(self):
        memo = ChartDataMemo()
        self.assertIsNone(memo.get(None))
        self.assertIsNone(memo.get(None))
        self.assertEqual(memo.hits, 1)


if __name__ == "__main__":
    unittest.main()
