from .coordinates import (
    Coordinate,
    distance_km,
    perpendicular_distance_km,
    perpendicular_distances_km,
    planar_midpoint,
)
from .simplification import simplify_polyline

__all__ = [
    "Coordinate",
    "distance_km",
    "perpendicular_distance_km",
    "perpendicular_distances_km",
    "planar_midpoint",
    "simplify_polyline"
]
