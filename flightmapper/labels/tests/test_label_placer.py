#!/usr/bin/env python3
# flightmapper/labels/tests/test_label_placer.py
import sys
import random
from itertools import combinations
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

import unittest
from flightmapper.labels.core import LabelPlacer, zoom_adjusted_spacing
from flightmapper.labels.data_models import LabelSpacing, ScreenPoint


class TestLabelPlacer(unittest.TestCase):
    def setUp(self):
        self.placer = LabelPlacer()
        self.anchor = ScreenPoint(100.0, 100.0)
        self.spacing = LabelSpacing(min_distance_px=10.0, margin_px=10.0)

    def assertPointAlmostEqual(self, point, x, y):
        self.assertAlmostEqual(point.x, x, places=6)
        self.assertAlmostEqual(point.y, y, places=6)

    def test_first_preferred_candidate_when_free(self):
        point, forced = self.placer.find_position("KPAO", self.anchor, {}, self.spacing)
        self.assertPointAlmostEqual(point, 100.0, 120.0)
        self.assertFalse(forced)
        self.assertNotEqual(point, self.anchor)

    def test_own_entry_ignored(self):
        existing = {"KPAO": ScreenPoint(100.0, 120.0)}
        point, _ = self.placer.find_position("KPAO", self.anchor, existing, self.spacing)
        self.assertPointAlmostEqual(point, 100.0, 120.0)

    def test_next_preferred_candidate_when_blocked(self):
        existing = {"KSQL": ScreenPoint(100.0, 120.0)}
        point, forced = self.placer.find_position("KPAO", self.anchor, existing, self.spacing)
        self.assertPointAlmostEqual(point, 100.0, 80.0)
        self.assertFalse(forced)

    def test_diagonal_after_cardinals(self):
        existing = {
            "A": ScreenPoint(100.0, 120.0),
            "B": ScreenPoint(100.0, 80.0),
            "C": ScreenPoint(80.0, 100.0),
            "D": ScreenPoint(120.0, 100.0),
        }
        point, _ = self.placer.find_position("KPAO", self.anchor, existing, self.spacing)
        offset = 20.0 * 2 ** -0.5
        self.assertPointAlmostEqual(point, 100.0 + offset, 100.0 + offset)

    def test_spiral_fallback(self):
        # A label sitting on the anchor blocks the whole 20px ring.
        existing = {"KSQL": ScreenPoint(100.0, 100.0)}
        spacing = LabelSpacing(min_distance_px=25.0, margin_px=10.0)
        point, forced = self.placer.find_position("KPAO", self.anchor, existing, spacing)
        self.assertPointAlmostEqual(point, 130.0, 100.0)
        self.assertFalse(forced)

    def test_forced_fallback_at_max_distance(self):
        existing = {"KSQL": ScreenPoint(100.0, 100.0)}
        spacing = LabelSpacing(min_distance_px=200.0, margin_px=10.0)
        point, forced = self.placer.find_position("KPAO", self.anchor, existing, spacing)
        self.assertTrue(forced)
        self.assertAlmostEqual(point.distance_to(self.anchor), 100.0, places=6)

    def test_spiral_stops_beyond_max_distance(self):
        existing = {"KSQL": ScreenPoint(100.0, 100.0)}
        spacing = LabelSpacing(min_distance_px=80.0, margin_px=50.0)
        point, forced = self.placer.find_position("KPAO", self.anchor, existing, spacing)
        self.assertTrue(forced)
        self.assertAlmostEqual(point.distance_to(self.anchor), 100.0, places=6)

    def test_forced_fallback_is_reproducible(self):
        existing = {"KSQL": ScreenPoint(100.0, 100.0)}
        spacing = LabelSpacing(min_distance_px=500.0, margin_px=10.0)
        first, _ = self.placer.find_position("KPAO", self.anchor, existing, spacing)
        second, _ = self.placer.find_position("KPAO", self.anchor, existing, spacing)
        self.assertEqual(first, second)

    def test_sequential_placement_never_overlaps(self):
        rng = random.Random(7)
        spacing = LabelSpacing(min_distance_px=30.0, margin_px=12.0)
        placed, forced_keys = {}, set()
        for i in range(25):
            anchor = ScreenPoint(rng.uniform(0, 200), rng.uniform(0, 200))
            point, forced = self.placer.find_position(f"AP{i}", anchor, placed, spacing)
            placed[f"AP{i}"] = point
            if forced:
                forced_keys.add(f"AP{i}")

        for (key_a, a), (key_b, b) in combinations(placed.items(), 2):
            if key_a in forced_keys or key_b in forced_keys:
                continue
            self.assertGreaterEqual(a.distance_to(b), spacing.min_distance_px)


class TestZoomAdjustedSpacing(unittest.TestCase):
    def test_reference_values(self):
        low = zoom_adjusted_spacing(4)
        self.assertAlmostEqual(low.min_distance_px, 50 * (1 - 0.3 * 0.7))
        self.assertAlmostEqual(low.margin_px, 20 * (1 - 0.3 * 0.7))

        high = zoom_adjusted_spacing(12)
        self.assertAlmostEqual(high.min_distance_px, 15.0)
        self.assertAlmostEqual(high.margin_px, 6.0)

    def test_clamped_outside_reference_range(self):
        self.assertEqual(zoom_adjusted_spacing(1), zoom_adjusted_spacing(4))
        self.assertEqual(zoom_adjusted_spacing(18), zoom_adjusted_spacing(12))

    def test_shrinks_as_zoom_increases(self):
        values = [zoom_adjusted_spacing(z / 4).min_distance_px for z in range(0, 80)]
        self.assertEqual(values, sorted(values, reverse=True))


if __name__ == '__main__':
    unittest.main()
