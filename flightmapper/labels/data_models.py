# flightmapper/labels/data_models.py
"""
Screen-space points and placement records for airport labels.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

Coordinate = Tuple[float, float]


class LabelRole(str, Enum):
    DEPARTURE = 'departure'
    ARRIVAL = 'arrival'
    INTERMEDIATE_STOP = 'intermediate_stop'


@dataclass(frozen=True)
class ScreenPoint:
    """A projected point in pixels."""
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "ScreenPoint":
        return ScreenPoint(self.x + dx, self.y + dy)

    def distance_to(self, other: "ScreenPoint") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class LabelSpacing:
    """Zoom-dependent separation parameters."""
    min_distance_px: float
    margin_px: float


@dataclass(frozen=True)
class LabelPlacementResult:
    """Where a label was drawn relative to the airport it names."""
    code: str
    role: LabelRole
    anchor: Coordinate
    label_position: Coordinate
    was_moved: bool
    forced: bool = False

    @property
    def needs_connector(self) -> bool:
        return self.was_moved

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'role': self.role.value,
            'anchor': list(self.anchor),
            'label_position': list(self.label_position),
            'was_moved': self.was_moved,
            'forced': self.forced
        }
