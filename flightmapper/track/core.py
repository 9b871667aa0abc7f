# flightmapper/track/core.py
"""
The core orchestrator for track annotation. It takes validated samples for one
flight and produces the departure/arrival codes, the intermediate stops, a
simplified path and, when a label layout is attached, label placements for
every airport involved.
"""
import logging
import os
from typing import Iterable, List, Optional, Sequence

from .data_models import AnnotationConfig, TrackAnnotation, TrackSample
from .exceptions import EmptyTrackError
from .log_reader import TrackLogReader
from .stop_detector import StopDetector
from ..airports.core import AirportIndex, extract_code_from_filename
from ..labels.core import LabelLayout
from ..labels.data_models import LabelRole
from ..utils.coordinates import planar_midpoint
from ..utils.simplification import simplify_polyline


class TrackAnnotator:
    """Turns flight tracks into display-ready annotations."""

    def __init__(self, airport_index: AirportIndex, config: Optional[AnnotationConfig] = None,
                 layout: Optional[LabelLayout] = None, reader: Optional[TrackLogReader] = None):
        """
        Args:
            airport_index: Shared, fully loaded airport index.
            config: Thresholds and simplification settings.
            layout: Label session shared by every track of this run. Labels
                    are skipped when None.
            reader: Log reader used by annotate_file().
        """
        self.config = config or AnnotationConfig()
        self.index = airport_index
        self.layout = layout
        self.reader = reader or TrackLogReader()
        self.stop_detector = StopDetector(
            airport_index,
            agl_threshold_ft=self.config.agl_threshold_ft,
            speed_threshold_kts=self.config.speed_threshold_kts,
            proximity_threshold_km=self.config.proximity_threshold_km
        )
        if not logging.getLogger().hasHandlers():
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        logging.info("TrackAnnotator initialized and all components linked.")

    def annotate(self, samples: Sequence[TrackSample], filename: Optional[str] = None) -> TrackAnnotation:
        """Annotates one track. Raises EmptyTrackError if there are no samples."""
        if not samples:
            raise EmptyTrackError(filename)

        start, end = samples[0].coordinate, samples[-1].coordinate
        hint = extract_code_from_filename(os.path.basename(filename) if filename else None)
        departure = self.index.verify_code(hint, *start)
        arrival_match = self.index.find_nearest(*end)
        arrival = arrival_match.code if arrival_match else None

        stops = [
            stop for stop in self.stop_detector.detect(samples)
            if stop.airport_code not in (departure, arrival)
        ]

        annotation = TrackAnnotation(
            source=filename,
            departure_code=departure,
            arrival_code=arrival,
            intermediate_stops=stops,
            simplified_path=simplify_polyline([s.coordinate for s in samples], self.config.simplify_epsilon_km),
            sample_count=len(samples)
        )
        if departure and arrival and departure != arrival:
            annotation.route_label_position = planar_midpoint(start, end)

        if self.layout is not None:
            annotation.labels = self._place_labels(annotation)

        logging.info(
            f"Flight {filename or '<memory>'}: {departure or '?'} -> {arrival or '?'}, "
            f"{len(stops)} intermediate stops, {len(annotation.simplified_path)}/{len(samples)} points kept"
        )
        return annotation

    def annotate_file(self, path: str) -> TrackAnnotation:
        return self.annotate(self.reader.read(path), filename=path)

    def annotate_files(self, paths: Iterable[str]) -> List[TrackAnnotation]:
        """
        Annotates logs in file-name order (chronological for the standard
        naming scheme). A failing file is recorded and does not stop the batch.
        """
        results = []
        for path in sorted(paths, key=os.path.basename):
            try:
                results.append(self.annotate_file(path))
            except Exception as e:
                logging.error(f"Skipping {path}: {e}")
                results.append(TrackAnnotation(source=path, error=str(e)))
        return results

    def _place_labels(self, annotation: TrackAnnotation):
        placements = []
        for code, role in ((annotation.departure_code, LabelRole.DEPARTURE), (annotation.arrival_code, LabelRole.ARRIVAL)):
            airport = self.index.get(code)
            if airport is not None:
                placements.append(self.layout.place(code, airport.coordinate, role))

        for stop in annotation.intermediate_stops:
            placements.append(self.layout.place(stop.airport_code, stop.airport_coordinate, LabelRole.INTERMEDIATE_STOP))
        return placements
