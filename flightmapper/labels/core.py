# flightmapper/labels/core.py
"""
Overlap-free placement of airport code labels in screen space.

LabelPlacer holds the search itself: a ring of eight preferred offsets, then
an outward spiral, then a forced position at the maximum distance. LabelLayout
owns the keyed set of placed labels for one map session and re-runs the
placement when the zoom level changes.
"""
import logging
import math
import zlib
from typing import Dict, List, Mapping, Optional, Tuple

from .constants import LabelConstants
from .data_models import Coordinate, LabelPlacementResult, LabelRole, LabelSpacing, ScreenPoint
from .projection import WebMercatorProjection


def zoom_adjusted_spacing(zoom: float) -> LabelSpacing:
    """
    Label separation and spiral margin for a zoom level. Both shrink as zoom
    increases, since features are already spread apart on screen.
    """
    zoom_factor = (zoom - LabelConstants.MIN_ZOOM) / (LabelConstants.MAX_ZOOM - LabelConstants.MIN_ZOOM)
    zoom_factor = max(LabelConstants.MIN_ZOOM_FACTOR, min(1.0, zoom_factor))
    shrink = 1 - zoom_factor * LabelConstants.ZOOM_SHRINK
    return LabelSpacing(
        min_distance_px=LabelConstants.BASE_MIN_LABEL_DISTANCE_PX * shrink,
        margin_px=LabelConstants.BASE_LABEL_MARGIN_PX * shrink
    )


class LabelPlacer:
    """Finds a label position that keeps clear of previously placed labels."""

    def __init__(self, preferred_offset_px: float = LabelConstants.PREFERRED_OFFSET_PX,
                 max_pixel_distance: float = LabelConstants.MAX_PIXEL_DISTANCE,
                 max_spiral_attempts: int = LabelConstants.MAX_SPIRAL_ATTEMPTS):
        self.preferred_offset_px = preferred_offset_px
        self.max_pixel_distance = max_pixel_distance
        self.max_spiral_attempts = max_spiral_attempts

    def find_position(self, key: str, anchor: ScreenPoint, existing: Mapping[str, ScreenPoint],
                      spacing: LabelSpacing) -> Tuple[ScreenPoint, bool]:
        """
        Args:
            key: Identity of the label being placed; its own entry in
                 `existing` is ignored.
            anchor: Projected position of the labeled feature.
            existing: Projected positions of labels already placed.
            spacing: Minimum label separation and spiral margin.

        Returns:
            (position, forced). forced is True when no free spot was found and
            the position may overlap another label.
        """
        others = [point for other_key, point in existing.items() if other_key != key]

        for angle in LabelConstants.PREFERRED_ANGLES:
            candidate = _polar_offset(anchor, self.preferred_offset_px, angle)
            if self._is_free(candidate, others, spacing.min_distance_px):
                return candidate, False

        for i in range(self.max_spiral_attempts):
            turn, step = divmod(i, LabelConstants.SPIRAL_STEPS_PER_TURN)
            radius = self.preferred_offset_px + turn * spacing.margin_px
            candidate = _polar_offset(anchor, radius, step * LabelConstants.SPIRAL_STEP_RAD)
            if candidate.distance_to(anchor) > self.max_pixel_distance:
                break
            if self._is_free(candidate, others, spacing.min_distance_px):
                return candidate, False

        angle = self._fallback_angle(key)
        logging.warning(f"No free label position for {key}; forcing placement at {self.max_pixel_distance:.0f}px")
        return _polar_offset(anchor, self.max_pixel_distance, angle), True

    @staticmethod
    def _is_free(candidate: ScreenPoint, others: List[ScreenPoint], min_distance_px: float) -> bool:
        return all(candidate.distance_to(point) >= min_distance_px for point in others)

    @staticmethod
    def _fallback_angle(key: str) -> float:
        # Stable per key so repeated runs draw identical maps.
        return (zlib.crc32(key.encode('utf-8')) % 3600) / 3600.0 * 2 * math.pi


class LabelLayout:
    """
    The placed-label set of one map session, keyed by airport code. Labels
    are placed one at a time; the set only grows until reset() or relayout().
    """

    def __init__(self, zoom: float = 8.0, placer: Optional[LabelPlacer] = None):
        self.placer = placer or LabelPlacer()
        self._set_zoom(zoom)
        self._placements: Dict[str, LabelPlacementResult] = {}
        self._points: Dict[str, ScreenPoint] = {}

    def __contains__(self, code: str) -> bool:
        return code in self._placements

    def __len__(self) -> int:
        return len(self._placements)

    def get(self, code: str) -> Optional[LabelPlacementResult]:
        return self._placements.get(code)

    def placements(self) -> List[LabelPlacementResult]:
        return list(self._placements.values())

    def place(self, code: str, coordinate: Coordinate, role: LabelRole) -> LabelPlacementResult:
        """Places a label for `code` unless one already exists, and returns it."""
        existing = self._placements.get(code)
        if existing is not None:
            return existing

        anchor = self.projection.project(*coordinate)
        point, forced = self.placer.find_position(code, anchor, self._points, self.spacing)
        result = LabelPlacementResult(
            code=code,
            role=role,
            anchor=tuple(coordinate),
            label_position=self.projection.unproject(point),
            was_moved=point != anchor,
            forced=forced
        )
        self._placements[code] = result
        self._points[code] = point
        logging.debug(f"Placed label {code} ({role.value}) at offset ({point.x - anchor.x:.1f}, {point.y - anchor.y:.1f})px")
        return result

    def relayout(self, zoom: float) -> List[LabelPlacementResult]:
        """
        Re-places every label at a new zoom level. Departure and arrival labels
        go first, then intermediate stops, each group in original order.
        """
        previous = sorted(self.placements(), key=lambda p: p.role is LabelRole.INTERMEDIATE_STOP)
        self._set_zoom(zoom)
        self.reset()
        for placement in previous:
            self.place(placement.code, placement.anchor, placement.role)
        logging.info(f"Re-laid out {len(previous)} labels at zoom {zoom}")
        return self.placements()

    def reset(self):
        self._placements.clear()
        self._points.clear()

    def _set_zoom(self, zoom: float):
        self.zoom = zoom
        self.projection = WebMercatorProjection(zoom)
        self.spacing = zoom_adjusted_spacing(zoom)


def _polar_offset(anchor: ScreenPoint, radius: float, angle: float) -> ScreenPoint:
    return anchor.offset(radius * math.cos(angle), radius * math.sin(angle))
