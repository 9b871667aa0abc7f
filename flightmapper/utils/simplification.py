# flightmapper/utils/simplification.py
"""
Ramer-Douglas-Peucker polyline reduction for display. The work is driven by an
explicit stack of spans so long tracks never hit the interpreter's recursion
limit; the result is the same as the textbook recursive formulation.
"""
import numpy as np
from typing import List, Sequence

from .coordinates import Coordinate, perpendicular_distances_km


def simplify_polyline(points: Sequence[Coordinate], epsilon_km: float) -> List[Coordinate]:
    """
    Reduces a (lat, lon) sequence, keeping every point whose perpendicular
    deviation from its enclosing chord exceeds epsilon_km.

    Args:
        points: Ordered (lat, lon) pairs.
        epsilon_km: Maximum tolerated deviation in kilometers. Must be >= 0.

    Returns:
        A new list holding a subset of the input points, endpoints included.
    """
    if epsilon_km < 0:
        raise ValueError(f"epsilon_km must be non-negative, got {epsilon_km}")

    points = list(points)
    if len(points) <= 2:
        return points

    coords = np.asarray(points, dtype=float)
    keep = np.zeros(len(points), dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, len(points) - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue

        distances = perpendicular_distances_km(coords[start + 1:end], coords[start], coords[end])
        distances = np.nan_to_num(distances, nan=0.0)

        # argmax returns the first index reaching the maximum
        offset = int(np.argmax(distances))
        max_distance, max_index = distances[offset], start + 1 + offset

        if max_distance > epsilon_km:
            keep[max_index] = True
            stack.append((max_index, end))
            stack.append((start, max_index))

    return [point for point, kept in zip(points, keep) if kept]
