# flightmapper/track/log_reader.py
"""
Reads avionics CSV flight logs and normalizes their rows into TrackSample
objects. This is the only place that deals with loosely typed log fields;
everything downstream assumes clean samples.
"""
import csv
import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional

from .constants import TrackConstants
from .data_models import TrackSample
from .exceptions import TrackLogError


class TrackLogReader:
    """Parses one log file into an ordered list of valid samples."""

    def __init__(self, header_line: int = TrackConstants.HEADER_LINE):
        """
        Args:
            header_line: Zero-based line index of the column header row.
                         Lines before it are metadata and are skipped.
        """
        self.header_line = header_line

    def read(self, path: str) -> List[TrackSample]:
        try:
            with open(path, 'r', encoding='utf-8', errors='ignore', newline='') as f:
                for _ in range(self.header_line):
                    f.readline()
                samples = self.normalize_rows(csv.DictReader(f))
        except OSError as e:
            raise TrackLogError(path, message=f"Failed to read flight log ({e})") from e

        logging.info(f"Read {len(samples)} valid samples from {path}")
        return samples

    @staticmethod
    def normalize_rows(rows: Iterable[Mapping[str, object]]) -> List[TrackSample]:
        """
        Converts raw rows into samples, dropping any row whose latitude or
        longitude is missing, non-numeric, NaN or zero. Column names are
        matched without regard to case or surrounding whitespace.
        """
        samples = []
        dropped = 0
        for row in rows:
            fields = _normalize_keys(row)
            lat = _to_float(fields.get(TrackConstants.LATITUDE_COLUMN.lower()))
            lon = _to_float(fields.get(TrackConstants.LONGITUDE_COLUMN.lower()))
            if not lat or not lon:
                dropped += 1
                continue

            samples.append(TrackSample(
                lat=lat,
                lon=lon,
                ground_speed_kts=_to_float(fields.get(TrackConstants.GROUND_SPEED_COLUMN.lower())),
                altitude_agl_ft=_to_float(fields.get(TrackConstants.AGL_COLUMN.lower()))
            ))

        if dropped:
            logging.debug(f"Dropped {dropped} rows without valid coordinates")
        return samples


def _normalize_keys(row: Mapping[str, object]) -> Dict[str, object]:
    return {str(key).strip().lower(): value for key, value in row.items() if key is not None}


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
