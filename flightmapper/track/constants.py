# flightmapper/track/constants.py
"""
Defaults for stop detection, simplification and flight-log parsing.
"""

class TrackConstants:
    """Constants used throughout the track module"""

    AGL_THRESHOLD_FT = 20.0
    SPEED_THRESHOLD_KTS = 20.0

    # ~0.5 m tolerance for display simplification
    SIMPLIFY_EPSILON_KM = 0.0005

    # Avionics CSV logs: two metadata lines, then the header row.
    HEADER_LINE = 2
    LATITUDE_COLUMN = 'Latitude'
    LONGITUDE_COLUMN = 'Longitude'
    AGL_COLUMN = 'AGL'
    GROUND_SPEED_COLUMN = 'GndSpd'
