# flightmapper/track/stop_detector.py
"""
Finds intermediate landings in a track.

The scan walks the samples with a two-state machine. A sample is low-and-slow
when its AGL or its ground speed is at or under threshold; missing values never
trigger on their own. Each closed low-and-slow zone is resolved to an airport
at the zone's midpoint sample. Zones resolving to airports closer together
than the proximity threshold count as the same landing and are merged.
"""
import logging
import math
from enum import Enum
from typing import List, Optional, Sequence

from .data_models import IntermediateStop, TrackSample
from ..airports.constants import AirportConstants
from ..airports.core import AirportIndex
from ..airports.data_models import AirportMatch
from ..utils.coordinates import distance_km


class FlightState(Enum):
    AIRBORNE = 'airborne'
    LOW_SLOW = 'low_slow'


class StopDetector:
    """Detects low-and-slow zones and resolves them to de-duplicated stops."""

    def __init__(self, airport_index: AirportIndex, agl_threshold_ft: float = 20.0, speed_threshold_kts: float = 20.0,
                 proximity_threshold_km: float = AirportConstants.PROXIMITY_THRESHOLD_KM):
        self.index = airport_index
        self.agl_threshold_ft = agl_threshold_ft
        self.speed_threshold_kts = speed_threshold_kts
        self.proximity_threshold_km = proximity_threshold_km

    def is_low_and_slow(self, sample: TrackSample) -> bool:
        agl = sample.altitude_agl_ft if sample.altitude_agl_ft is not None else math.inf
        speed = sample.ground_speed_kts if sample.ground_speed_kts is not None else math.inf
        return agl <= self.agl_threshold_ft or speed <= self.speed_threshold_kts

    def detect(self, samples: Sequence[TrackSample]) -> List[IntermediateStop]:
        """
        Returns stops in order of zone exit. A zone still open when the track
        ends produces no stop.
        """
        stops: List[IntermediateStop] = []
        seen_codes = set()
        state = FlightState.AIRBORNE
        zone_start = -1

        for i, sample in enumerate(samples):
            low_and_slow = self.is_low_and_slow(sample)

            if state is FlightState.AIRBORNE and low_and_slow:
                state = FlightState.LOW_SLOW
                zone_start = i
            elif state is FlightState.LOW_SLOW and not low_and_slow:
                state = FlightState.AIRBORNE
                midpoint = samples[(zone_start + i) // 2].coordinate
                nearest = self.index.find_nearest(*midpoint)
                if nearest is not None and nearest.code not in seen_codes:
                    self._record_stop(stops, seen_codes, nearest, midpoint)

        if state is FlightState.LOW_SLOW:
            logging.debug(f"Track ended inside a low/slow zone starting at sample {zone_start}; no stop recorded")
        return stops

    def _record_stop(self, stops: List[IntermediateStop], seen_codes: set, nearest: AirportMatch, midpoint):
        candidate = IntermediateStop(
            airport_code=nearest.code,
            sample_midpoint=midpoint,
            airport_coordinate=nearest.airport.coordinate
        )

        conflict = self._find_conflict(stops, nearest)
        if conflict is None:
            stops.append(candidate)
            seen_codes.add(candidate.airport_code)
            return

        existing = stops[conflict]
        if self._new_stop_wins(existing, nearest, midpoint):
            logging.debug(f"Replacing stop {existing.airport_code} with {nearest.code}")
            seen_codes.discard(existing.airport_code)
            stops[conflict] = candidate
            seen_codes.add(candidate.airport_code)
        else:
            logging.debug(f"Keeping stop {existing.airport_code} over {nearest.code}")

    def _find_conflict(self, stops: List[IntermediateStop], nearest: AirportMatch) -> Optional[int]:
        """Index of the first recorded stop within the proximity threshold."""
        for j, existing in enumerate(stops):
            separation = distance_km(nearest.airport.lat, nearest.airport.lon, *existing.airport_coordinate)
            if separation < self.proximity_threshold_km:
                logging.debug(f"Found nearby airports: {existing.airport_code} and {nearest.code} ({separation:.2f}km apart)")
                return j
        return None

    def _new_stop_wins(self, existing: IntermediateStop, nearest: AirportMatch, midpoint) -> bool:
        """Higher type priority wins, then proximity to the midpoint; otherwise first-seen stays."""
        existing_priority = self.index.priority_of(existing.airport_code)
        new_priority = nearest.airport.priority
        if new_priority != existing_priority:
            return new_priority > existing_priority

        existing_distance = distance_km(midpoint[0], midpoint[1], *existing.airport_coordinate)
        new_distance = distance_km(midpoint[0], midpoint[1], nearest.airport.lat, nearest.airport.lon)
        return new_distance < existing_distance
