# flightmapper/labels/projection.py
"""
Web Mercator (slippy-map) projection between WGS84 coordinates and world
pixel coordinates at a given, possibly fractional, zoom level.
"""
import math

from .constants import LabelConstants
from .data_models import Coordinate, ScreenPoint


class WebMercatorProjection:
    """Projects (lat, lon) to pixels with the standard OSM tile formula."""

    def __init__(self, zoom: float, tile_size: int = LabelConstants.TILE_SIZE):
        self.zoom = zoom
        self.tile_size = tile_size
        self.world_size = tile_size * 2.0 ** zoom

    def project(self, lat: float, lon: float) -> ScreenPoint:
        # Clamp latitude to valid Mercator range
        lat = max(-LabelConstants.MAX_MERCATOR_LAT, min(LabelConstants.MAX_MERCATOR_LAT, lat))
        lat_rad = math.radians(lat)
        x = (lon + 180.0) / 360.0 * self.world_size
        y = (1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2 * self.world_size
        return ScreenPoint(x, y)

    def unproject(self, point: ScreenPoint) -> Coordinate:
        lon = point.x / self.world_size * 360.0 - 180.0
        lat_rad = math.atan(math.sinh(math.pi * (1 - 2 * point.y / self.world_size)))
        return (math.degrees(lat_rad), lon)
