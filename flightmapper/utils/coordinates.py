# flightmapper/utils/coordinates.py
"""
Great-circle and point-to-segment distances. Logging is omitted here as these
are high-frequency, low-level functions.
"""
import numpy as np
from typing import Tuple

Coordinate = Tuple[float, float]

EARTH_RADIUS_KM = 6371


def distance_km(lat1, lon1, lat2, lon2):
    """
    Calculates the Haversine distance between two points in kilometers.
    Accepts scalars or numpy arrays; NaN inputs propagate as NaN.
    """
    d_lat = np.radians(lat2 - lat1)
    d_lon = np.radians(lon2 - lon1)
    a = np.sin(d_lat / 2)**2 + np.cos(np.radians(lat1)) * np.cos(np.radians(lat2)) * np.sin(d_lon / 2)**2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def perpendicular_distances_km(points: np.ndarray, line_start: Coordinate, line_end: Coordinate) -> np.ndarray:
    """
    Vectorized form of perpendicular_distance_km for an (N, 2) array of
    (lat, lon) rows. The projection is done in degree space, clamped to the
    segment, and the gap to the closest point is measured with Haversine.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    x1, y1 = line_start
    x2, y2 = line_end
    dx = x2 - x1
    dy = y2 - y1

    if dx == 0 and dy == 0:
        return distance_km(points[:, 0], points[:, 1], x1, y1)

    t = ((points[:, 0] - x1) * dx + (points[:, 1] - y1) * dy) / (dx * dx + dy * dy)
    t = np.clip(t, 0.0, 1.0)
    closest_x = x1 + t * dx
    closest_y = y1 + t * dy
    return distance_km(points[:, 0], points[:, 1], closest_x, closest_y)


def perpendicular_distance_km(point: Coordinate, line_start: Coordinate, line_end: Coordinate) -> float:
    """Distance in km from a point to the closest point of a segment."""
    return float(perpendicular_distances_km(np.array([point]), line_start, line_end)[0])


def planar_midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Arithmetic midpoint in degree space, used for on-map label anchors."""
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)
