# flightmapper/airports/data_models.py
"""
Defines the airport records read from the external catalog and the match
object returned by nearest-airport queries.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .constants import AirportConstants


class AirportType(str, Enum):
    CLOSED = 'closed'
    HELIPORT = 'heliport'
    SEAPLANE_BASE = 'seaplane_base'
    SMALL_AIRPORT = 'small_airport'
    MEDIUM_AIRPORT = 'medium_airport'
    LARGE_AIRPORT = 'large_airport'
    UNKNOWN = 'unknown'

    @classmethod
    def parse(cls, value) -> "AirportType":
        """Maps a raw catalog string to a type, falling back to UNKNOWN."""
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def priority(self) -> int:
        return AirportConstants.TYPE_PRIORITY.get(self.value, AirportConstants.DEFAULT_PRIORITY)


@dataclass(frozen=True)
class Airport:
    """A single catalog entry. Immutable once loaded."""
    code: str
    lat: float
    lon: float
    name: str
    type: AirportType = AirportType.UNKNOWN

    @property
    def coordinate(self) -> Tuple[float, float]:
        return (self.lat, self.lon)

    @property
    def priority(self) -> int:
        return self.type.priority


@dataclass(frozen=True)
class AirportMatch:
    """The result of a nearest-airport query."""
    airport: Airport
    distance_km: float

    @property
    def code(self) -> str:
        return self.airport.code

    def is_preferred_over(self, other: "AirportMatch") -> bool:
        """Priority first, then distance. Exact ties keep the other match."""
        if self.airport.priority != other.airport.priority:
            return self.airport.priority > other.airport.priority
        return self.distance_km < other.distance_km
