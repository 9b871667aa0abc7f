# flightmapper/airports/core.py
"""
Nearest-airport resolution over the shared, read-only airport catalog.

The whole catalog is scanned on every query with a vectorized Haversine pass.
Selection follows a priority-then-distance rule, with one override: if any
airport lies within the close-pool radius of the query point, only those
airports are considered. Co-located fields (a heliport pad beside a small
airport, say) then resolve to the operationally meaningful one.
"""
import logging
from typing import Dict, Mapping, Optional

import numpy as np

from .constants import AirportConstants
from .data_models import Airport, AirportMatch, AirportType
from ..utils.coordinates import distance_km


def extract_code_from_filename(filename: Optional[str]) -> Optional[str]:
    """Returns CODE from 'log_YYYYMMDD_HHMMSS_CODE.csv', or None."""
    if not filename:
        return None
    match = AirportConstants.FILENAME_PATTERN.search(filename)
    return match.group(1) if match else None


class AirportIndex:
    """Answers nearest-airport queries against an immutable catalog."""

    def __init__(self, airports: Mapping[str, Airport], max_radius_km: Optional[float] = None):
        """
        Args:
            airports: Mapping of catalog code to Airport.
            max_radius_km: Optional cap on search distance. None searches
                           the whole catalog.
        """
        self._airports: Dict[str, Airport] = dict(airports)
        self.max_radius_km = max_radius_km

        ordered = list(self._airports.values())
        self._codes = [a.code for a in ordered]
        self._lats = np.array([a.lat for a in ordered], dtype=float)
        self._lons = np.array([a.lon for a in ordered], dtype=float)
        self._priorities = np.array([a.priority for a in ordered], dtype=int)
        logging.info(f"AirportIndex initialized with {len(self._codes)} airports. Max radius: {max_radius_km or 'unbounded'}")

    @classmethod
    def from_records(cls, records: Mapping[str, Mapping], max_radius_km: Optional[float] = None) -> "AirportIndex":
        """Builds an index from plain {code: {lat, lon, name, type}} records."""
        airports = {
            code: Airport(
                code=code,
                lat=float(rec['lat']),
                lon=float(rec['lon']),
                name=rec.get('name', code),
                type=AirportType.parse(rec.get('type'))
            )
            for code, rec in records.items()
        }
        return cls(airports, max_radius_km=max_radius_km)

    @classmethod
    def from_loader(cls, loader, path: Optional[str] = None, max_radius_km: Optional[float] = None) -> "AirportIndex":
        """Builds an index from a CatalogLoader, reusing its cached catalog."""
        return cls(loader.load(path), max_radius_km=max_radius_km)

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, code: str) -> bool:
        return code in self._airports

    def get(self, code: Optional[str]) -> Optional[Airport]:
        return self._airports.get(code) if code else None

    def priority_of(self, code: Optional[str]) -> int:
        airport = self.get(code)
        return airport.priority if airport else AirportConstants.DEFAULT_PRIORITY

    def find_nearest(self, lat: float, lon: float) -> Optional[AirportMatch]:
        """
        Resolves the preferred airport for a position.

        Returns:
            An AirportMatch, or None if the catalog is empty or nothing lies
            within max_radius_km.
        """
        if not self._codes:
            return None

        distances = distance_km(lat, lon, self._lats, self._lons)
        candidates = np.ones(len(self._codes), dtype=bool)
        if self.max_radius_km is not None:
            candidates &= distances <= self.max_radius_km

        close_pool = candidates & (distances <= AirportConstants.CLOSE_POOL_RADIUS_KM)
        pool = close_pool if close_pool.any() else candidates
        if not pool.any():
            logging.debug(f"No airport found near ({lat:.4f}, {lon:.4f}) within {self.max_radius_km}km")
            return None

        best = self._select_preferred(pool, distances)
        match = AirportMatch(airport=self._airports[self._codes[best]], distance_km=float(distances[best]))
        logging.debug(
            f"Nearest airport to ({lat:.4f}, {lon:.4f}): {match.code} ({match.airport.type.value}) "
            f"at {match.distance_km:.2f}km, close pool size {int(close_pool.sum())}"
        )
        return match

    def verify_code(self, suggested_code: Optional[str], lat: float, lon: float) -> Optional[str]:
        """
        Confirms a filename hint against the position, or overrides it with
        the nearest airport's code.
        """
        nearest = self.find_nearest(lat, lon)
        if nearest is None:
            logging.info(f"No airport resolves at ({lat:.4f}, {lon:.4f}); hint {suggested_code or 'not provided'} discarded")
            return None

        if suggested_code and suggested_code == nearest.code:
            logging.debug(f"Using suggested code {suggested_code} (matches nearest airport)")
            return suggested_code

        logging.info(f"Using nearest airport code {nearest.code} (suggested code {suggested_code or 'not provided'} didn't match)")
        return nearest.code

    def _select_preferred(self, pool: np.ndarray, distances: np.ndarray) -> int:
        """Highest priority, then shortest distance, then catalog order."""
        best_priority = self._priorities[pool].max()
        indices = np.flatnonzero(pool & (self._priorities == best_priority))
        return int(indices[np.argmin(distances[indices])])
