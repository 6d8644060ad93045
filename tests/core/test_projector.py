#!/usr/bin/env python3
"""
Tests for the linear usage projection.
"""

import os
import time
import unittest
from datetime import date, datetime, timedelta
from unittest.mock import patch

from node_usage.core.projector import build_metrics, cycle_bounds, project_target
from node_usage.models import UsageMetrics, UsageSnapshot


def at_fraction(rollover, fraction):
    """Wall-clock time a given fraction of the way through the cycle."""
    start, end = cycle_bounds(rollover)
    return datetime.fromtimestamp(start.timestamp() + (end.timestamp() - start.timestamp()) * fraction)


class TestCycleBounds(unittest.TestCase):
    def test_previous_month_same_day(self):
        start, end = cycle_bounds(date(2020, 3, 15))
        self.assertEqual(start, datetime(2020, 2, 15))
        self.assertEqual(end, datetime(2020, 3, 15))

    def test_january_rolls_back_to_december(self):
        start, _ = cycle_bounds(date(2021, 1, 10))
        self.assertEqual(start, datetime(2020, 12, 10))

    def test_missing_day_rolls_forward(self):
        start, _ = cycle_bounds(date(2020, 3, 31))
        self.assertEqual(start, datetime(2020, 3, 2))
        start, _ = cycle_bounds(date(2021, 5, 31))
        self.assertEqual(start, datetime(2021, 5, 1))


class TestProjectTarget(unittest.TestCase):
    rollover = date(2020, 3, 15)

    def test_zero_at_cycle_start(self):
        self.assertEqual(project_target(100, self.rollover, datetime(2020, 2, 15)), 0)

    def test_half_quota_at_midpoint(self):
        midpoint = at_fraction(self.rollover, 0.5)
        self.assertAlmostEqual(project_target(100, self.rollover, midpoint), 50, places=6)

    def test_bounded_and_monotonic_within_cycle(self):
        quota = 200_000_000_000
        start, end = cycle_bounds(self.rollover)
        previous = None
        now = start
        while now < end:
            target = project_target(quota, self.rollover, now)
            self.assertGreaterEqual(target, 0)
            self.assertLessEqual(target, quota)
            if previous is not None:
                self.assertGreaterEqual(target, previous)
            previous = target
            now += timedelta(hours=7)

    def test_not_clamped_outside_cycle(self):
        self.assertLess(project_target(100, self.rollover, datetime(2020, 2, 1)), 0)
        self.assertGreater(project_target(100, self.rollover, datetime(2020, 3, 20)), 100)


class TestBuildMetrics(unittest.TestCase):
    def test_derives_four_gauges(self):
        snapshot = UsageSnapshot(quota=1000, used=200, rollover=date(2020, 3, 15))
        metrics = build_metrics(snapshot, at_fraction(snapshot.rollover, 0.15))

        self.assertIsInstance(metrics, UsageMetrics)
        self.assertEqual(metrics.quota, 1000)
        self.assertEqual(metrics.used, 200)
        self.assertEqual(metrics.remain, 800)
        self.assertIsInstance(metrics.target, int)
        self.assertIn(metrics.target, (149, 150))

    def test_target_is_truncated_not_rounded(self):
        snapshot = UsageSnapshot(quota=10, used=0, rollover=date(2020, 3, 15))
        metrics = build_metrics(snapshot, at_fraction(snapshot.rollover, 0.99))
        self.assertEqual(metrics.target, 9)

    def test_remaining_goes_negative_over_quota(self):
        snapshot = UsageSnapshot(quota=100, used=150, rollover=date(2020, 3, 15))
        self.assertEqual(build_metrics(snapshot, datetime(2020, 3, 1)).remain, -50)


@unittest.skipUnless(hasattr(time, "tzset"), "requires time.tzset")
class TestDaylightSaving(unittest.TestCase):
    # Sydney rules: daylight saving ends 2020-04-05 03:00, one extra hour
    SYDNEY = "AEST-10AEDT,M10.1.0,M4.1.0/3"

    def setUp(self):
        patcher = patch.dict(os.environ, {"TZ": self.SYDNEY})
        patcher.start()
        self.addCleanup(time.tzset)
        self.addCleanup(patcher.stop)
        time.tzset()

    def test_cycle_length_includes_extra_hour(self):
        rollover = date(2020, 4, 15)
        cycle_seconds = 31 * 86400 + 3600
        # One unit of quota per real second
        target = project_target(cycle_seconds, rollover, datetime(2020, 4, 10))
        self.assertAlmostEqual(target, 26 * 86400 + 3600, places=3)

    def test_full_quota_at_rollover(self):
        rollover = date(2020, 4, 15)
        self.assertAlmostEqual(project_target(100, rollover, datetime(2020, 4, 15)), 100, places=6)


if __name__ == "__main__":
    unittest.main()
