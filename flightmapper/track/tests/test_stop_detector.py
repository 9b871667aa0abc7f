#!/usr/bin/env python3
# flightmapper/track/tests/test_stop_detector.py
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

import unittest
from flightmapper.airports.core import AirportIndex
from flightmapper.track.data_models import TrackSample
from flightmapper.track.stop_detector import StopDetector

# Roughly 1 km of arc, in degrees, at the equator
KM = 1 / 111.195


def airborne(lat, lon):
    return TrackSample(lat=lat, lon=lon, ground_speed_kts=110.0, altitude_agl_ft=1500.0)


def landed(lat, lon):
    return TrackSample(lat=lat, lon=lon, ground_speed_kts=8.0, altitude_agl_ft=0.0)


class TestStopDetector(unittest.TestCase):
    def setUp(self):
        self.index = AirportIndex.from_records({
            "AAAA": {"lat": 0.0, "lon": 0.0, "name": "Alpha", "type": "small_airport"},
            "BBBB": {"lat": 0.0, "lon": 0.5, "name": "Bravo", "type": "small_airport"},
        })
        self.detector = StopDetector(self.index)

    def test_single_stop_at_zone_midpoint(self):
        samples = [
            airborne(0.2, -0.2),
            airborne(0.1, -0.1),
            landed(0.0, 0.0),
            landed(0.0, 0.001),
            landed(0.0, 0.002),
            airborne(0.05, 0.05),
        ]
        stops = self.detector.detect(samples)
        self.assertEqual(len(stops), 1)
        self.assertEqual(stops[0].airport_code, "AAAA")
        self.assertEqual(stops[0].sample_midpoint, (0.0, 0.001))
        self.assertEqual(stops[0].airport_coordinate, (0.0, 0.0))

    def test_unclosed_zone_produces_no_stop(self):
        samples = [airborne(0.2, -0.2), landed(0.0, 0.0), landed(0.0, 0.001)]
        self.assertEqual(self.detector.detect(samples), [])

    def test_missing_fields_never_trigger(self):
        samples = [TrackSample(lat=0.0, lon=0.0), TrackSample(lat=0.0, lon=0.001), airborne(0.1, 0.1)]
        self.assertEqual(self.detector.detect(samples), [])

    def test_low_or_slow_is_enough(self):
        slow_only = TrackSample(lat=0.0, lon=0.0, ground_speed_kts=5.0, altitude_agl_ft=900.0)
        low_only = TrackSample(lat=0.0, lon=0.0, ground_speed_kts=90.0, altitude_agl_ft=20.0)
        self.assertTrue(self.detector.is_low_and_slow(slow_only))
        self.assertTrue(self.detector.is_low_and_slow(low_only))
        self.assertFalse(self.detector.is_low_and_slow(airborne(0.0, 0.0)))

    def test_custom_thresholds(self):
        detector = StopDetector(self.index, agl_threshold_ft=5.0, speed_threshold_kts=5.0)
        self.assertFalse(detector.is_low_and_slow(TrackSample(lat=0.0, lon=0.0, ground_speed_kts=10.0, altitude_agl_ft=10.0)))

    def test_stops_in_exit_order(self):
        samples = [
            airborne(0.1, 0.6),
            landed(0.0, 0.5),
            airborne(0.1, 0.3),
            landed(0.0, 0.0),
            airborne(0.1, -0.1),
        ]
        codes = [stop.airport_code for stop in self.detector.detect(samples)]
        self.assertEqual(codes, ["BBBB", "AAAA"])

    def test_revisited_airport_recorded_once(self):
        samples = [
            landed(0.0, 0.0), airborne(0.1, 0.1),
            landed(0.0, 0.5), airborne(0.1, 0.3),
            landed(0.0, 0.0), airborne(0.1, -0.1),
        ]
        codes = [stop.airport_code for stop in self.detector.detect(samples)]
        self.assertEqual(codes, ["AAAA", "BBBB"])

    def test_no_airport_resolves(self):
        detector = StopDetector(AirportIndex({}))
        self.assertEqual(detector.detect([landed(0.0, 0.0), airborne(0.1, 0.1)]), [])

    def test_deterministic(self):
        samples = [
            landed(0.0, 0.0), airborne(0.1, 0.1),
            landed(0.0, 0.5), airborne(0.1, 0.6),
        ]
        self.assertEqual(self.detector.detect(samples), self.detector.detect(samples))


class TestStopProximityMerge(unittest.TestCase):
    def test_higher_priority_replaces_existing(self):
        index = AirportIndex.from_records({
            "HELI": {"lat": 0.0, "lon": 0.0, "name": "Pad", "type": "heliport"},
            "FLD": {"lat": 1.5 * KM, "lon": 0.0, "name": "Field", "type": "small_airport"},
        })
        samples = [
            landed(0.0, 0.0), airborne(0.3, 0.3),
            landed(1.5 * KM, 0.0), airborne(0.3, 0.3),
        ]
        stops = StopDetector(index).detect(samples)
        self.assertEqual([s.airport_code for s in stops], ["FLD"])

    def test_lower_priority_does_not_replace(self):
        index = AirportIndex.from_records({
            "HELI": {"lat": 0.0, "lon": 0.0, "name": "Pad", "type": "heliport"},
            "FLD": {"lat": 1.5 * KM, "lon": 0.0, "name": "Field", "type": "small_airport"},
        })
        samples = [
            landed(1.5 * KM, 0.0), airborne(0.3, 0.3),
            landed(0.0, 0.0), airborne(0.3, 0.3),
        ]
        stops = StopDetector(index).detect(samples)
        self.assertEqual([s.airport_code for s in stops], ["FLD"])

    def test_equal_priority_closer_to_midpoint_wins(self):
        index = AirportIndex.from_records({
            "WEST": {"lat": 0.0, "lon": 0.0, "name": "West", "type": "small_airport"},
            "EAST": {"lat": 0.0, "lon": 1.5 * KM, "name": "East", "type": "small_airport"},
        })
        samples = [
            landed(0.0, 0.0), airborne(0.3, 0.3),
            landed(0.0, 1.5 * KM), airborne(0.3, 0.3),
        ]
        stops = StopDetector(index).detect(samples)
        self.assertEqual([s.airport_code for s in stops], ["EAST"])
        self.assertEqual(stops[0].sample_midpoint, (0.0, 1.5 * KM))

    def test_full_tie_keeps_first_seen(self):
        # EAST is listed first so it wins the equidistant nearest-airport query.
        index = AirportIndex.from_records({
            "EAST": {"lat": 0.0, "lon": 0.75 * KM, "name": "East", "type": "small_airport"},
            "WEST": {"lat": 0.0, "lon": -0.75 * KM, "name": "West", "type": "small_airport"},
        })
        samples = [
            landed(0.0, -0.75 * KM), airborne(0.3, 0.3),
            landed(0.0, 0.0), airborne(0.3, 0.3),
        ]
        stops = StopDetector(index).detect(samples)
        self.assertEqual([s.airport_code for s in stops], ["WEST"])

    def test_distant_airports_not_merged(self):
        index = AirportIndex.from_records({
            "ONE": {"lat": 0.0, "lon": 0.0, "name": "One", "type": "small_airport"},
            "TWO": {"lat": 2.5 * KM, "lon": 0.0, "name": "Two", "type": "small_airport"},
        })
        samples = [
            landed(0.0, 0.0), airborne(0.3, 0.3),
            landed(2.5 * KM, 0.0), airborne(0.3, 0.3),
        ]
        self.assertEqual([s.airport_code for s in StopDetector(index).detect(samples)], ["ONE", "TWO"])

    def test_custom_proximity_threshold(self):
        index = AirportIndex.from_records({
            "ONE": {"lat": 0.0, "lon": 0.0, "name": "One", "type": "small_airport"},
            "TWO": {"lat": 2.5 * KM, "lon": 0.0, "name": "Two", "type": "small_airport"},
        })
        samples = [
            landed(0.0, 0.0), airborne(0.3, 0.3),
            landed(2.5 * KM, 0.0), airborne(0.3, 0.3),
        ]
        detector = StopDetector(index, proximity_threshold_km=3.0)
        self.assertEqual([s.airport_code for s in detector.detect(samples)], ["TWO"])


if __name__ == '__main__':
    unittest.main()
