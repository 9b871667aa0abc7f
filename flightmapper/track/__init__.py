"""
flightmapper.track - Flight log reading, stop detection and track annotation.
"""

from .core import TrackAnnotator
from .data_models import AnnotationConfig, IntermediateStop, TrackAnnotation, TrackSample
from .exceptions import EmptyTrackError, TrackError, TrackLogError
from .log_reader import TrackLogReader
from .stop_detector import FlightState, StopDetector

__all__ = [
    "TrackAnnotator",
    "AnnotationConfig",
    "IntermediateStop",
    "TrackAnnotation",
    "TrackSample",
    "EmptyTrackError",
    "TrackError",
    "TrackLogError",
    "TrackLogReader",
    "FlightState",
    "StopDetector"
]
