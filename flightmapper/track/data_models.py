# flightmapper/track/data_models.py
"""
Defines the per-run data structures: validated track samples, detected stops,
annotation settings and the final display-ready annotation for one track.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import TrackConstants
from ..airports.constants import AirportConstants
from ..labels.data_models import LabelPlacementResult

Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class TrackSample:
    """One validated log row. Order in the track is the file's row order."""
    lat: float
    lon: float
    ground_speed_kts: Optional[float] = None
    altitude_agl_ft: Optional[float] = None

    @property
    def coordinate(self) -> Coordinate:
        return (self.lat, self.lon)


@dataclass(frozen=True)
class IntermediateStop:
    """A landing between departure and arrival, resolved to an airport."""
    airport_code: str
    sample_midpoint: Coordinate
    airport_coordinate: Coordinate


@dataclass
class AnnotationConfig:
    """Configuration parameters for annotating a batch of tracks."""
    agl_threshold_ft: float = TrackConstants.AGL_THRESHOLD_FT
    speed_threshold_kts: float = TrackConstants.SPEED_THRESHOLD_KTS
    simplify_epsilon_km: float = TrackConstants.SIMPLIFY_EPSILON_KM
    max_search_radius_km: Optional[float] = None
    proximity_threshold_km: float = AirportConstants.PROXIMITY_THRESHOLD_KM
    zoom: float = 8.0


@dataclass
class TrackAnnotation:
    """The output object for one track, consumed by the presentation layer."""
    source: Optional[str]
    departure_code: Optional[str] = None
    arrival_code: Optional[str] = None
    intermediate_stops: List[IntermediateStop] = field(default_factory=list)
    simplified_path: List[Coordinate] = field(default_factory=list)
    sample_count: int = 0
    route_label_position: Optional[Coordinate] = None
    labels: List[LabelPlacementResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def route_label(self) -> Optional[str]:
        if self.route_label_position is None:
            return None
        return f"{self.departure_code} → {self.arrival_code}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': self.source,
            'departure': self.departure_code,
            'arrival': self.arrival_code,
            'intermediate_stops': [
                {
                    'airport': stop.airport_code,
                    'lat': stop.sample_midpoint[0],
                    'lon': stop.sample_midpoint[1],
                    'airport_lat': stop.airport_coordinate[0],
                    'airport_lon': stop.airport_coordinate[1]
                }
                for stop in self.intermediate_stops
            ],
            'path': [list(point) for point in self.simplified_path],
            'sample_count': self.sample_count,
            'route_label': self.route_label,
            'route_label_position': list(self.route_label_position) if self.route_label_position else None,
            'labels': [label.to_dict() for label in self.labels],
            'error': self.error
        }
