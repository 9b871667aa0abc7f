# flightmapper/airports/constants.py
"""
Static constants for airport resolution: type priorities, search radii and
the flight-log filename convention.
"""
import re


class AirportConstants:
    """Constants used by the airport index and stop de-duplication"""

    # Higher wins. Medium and large airports are deliberately equal.
    TYPE_PRIORITY = {
        'closed': -1,
        'heliport': 0,
        'seaplane_base': 1,
        'small_airport': 2,
        'medium_airport': 3,
        'large_airport': 3
    }
    DEFAULT_PRIORITY = 0

    # Airports this close to a query point override anything farther away.
    CLOSE_POOL_RADIUS_KM = 1.0

    # Two resolved stops closer than this are treated as one landing.
    PROXIMITY_THRESHOLD_KM = 2.0

    # log_YYYYMMDD_HHMMSS_CODE.csv
    FILENAME_PATTERN = re.compile(r'log_\d{8}_\d{6}_([A-Z0-9]{3,4})\.csv$')

    # OurAirports catalog
    REMOTE_CATALOG_URL = "https://raw.githubusercontent.com/davidmegginson/ourairports-data/main/airports.csv"
    DUPLICATE_MARKER = "(Duplicate)"
    CACHE_EXPIRY_SECONDS = 86400  # 24 hours
