"""
flightmapper.airports - Airport catalog loading and nearest-airport resolution.
"""

from .core import AirportIndex, extract_code_from_filename
from .catalog_loader import CatalogLoader
from .constants import AirportConstants
from .data_models import Airport, AirportMatch, AirportType
from .exceptions import AirportError, CatalogLoadError

__all__ = [
    "AirportIndex",
    "extract_code_from_filename",
    "CatalogLoader",
    "AirportConstants",
    "Airport",
    "AirportMatch",
    "AirportType",
    "AirportError",
    "CatalogLoadError"
]
