"""
flightmapper - Geospatial annotation of flight-track logs.

Derives a simplified path, departure/arrival airports, intermediate stops and
overlap-free label placements from one or more avionics CSV logs.
"""

from .airports import AirportIndex, CatalogLoader, extract_code_from_filename
from .labels import LabelLayout, LabelPlacer
from .track import AnnotationConfig, StopDetector, TrackAnnotation, TrackAnnotator, TrackLogReader
from .utils import distance_km, perpendicular_distance_km, simplify_polyline

__version__ = "0.1.0"

__all__ = [
    "AirportIndex",
    "CatalogLoader",
    "extract_code_from_filename",
    "LabelLayout",
    "LabelPlacer",
    "AnnotationConfig",
    "StopDetector",
    "TrackAnnotation",
    "TrackAnnotator",
    "TrackLogReader",
    "distance_km",
    "perpendicular_distance_km",
    "simplify_polyline"
]
