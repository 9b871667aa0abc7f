# flightmapper/labels/constants.py
"""
Static constants for label placement. Pixel values are at the reference zoom
range and are scaled by zoom_adjusted_spacing().
"""
import math


class LabelConstants:
    """Constants used by the label placer"""

    BASE_MIN_LABEL_DISTANCE_PX = 50.0
    BASE_LABEL_MARGIN_PX = 20.0
    MAX_PIXEL_DISTANCE = 100.0
    PREFERRED_OFFSET_PX = 20.0
    MAX_SPIRAL_ATTEMPTS = 32

    MIN_ZOOM = 4
    MAX_ZOOM = 12
    MIN_ZOOM_FACTOR = 0.3
    ZOOM_SHRINK = 0.7

    # Cardinal directions first, then diagonals (radians, screen y grows downward)
    PREFERRED_ANGLES = (
        math.pi / 2,
        -math.pi / 2,
        math.pi,
        0.0,
        math.pi / 4,
        -math.pi / 4,
        3 * math.pi / 4,
        -3 * math.pi / 4
    )
    SPIRAL_STEP_RAD = math.pi / 4
    SPIRAL_STEPS_PER_TURN = 8

    TILE_SIZE = 256
    MAX_MERCATOR_LAT = 85.05112878
