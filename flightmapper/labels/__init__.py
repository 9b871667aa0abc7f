"""
flightmapper.labels - Screen-space placement of airport labels.
"""

from .core import LabelLayout, LabelPlacer, zoom_adjusted_spacing
from .constants import LabelConstants
from .data_models import LabelPlacementResult, LabelRole, LabelSpacing, ScreenPoint
from .projection import WebMercatorProjection

__all__ = [
    "LabelLayout",
    "LabelPlacer",
    "zoom_adjusted_spacing",
    "LabelConstants",
    "LabelPlacementResult",
    "LabelRole",
    "LabelSpacing",
    "ScreenPoint",
    "WebMercatorProjection"
]
