# flightmapper/airports/catalog_loader.py
"""
Loads the OurAirports catalog (airports.csv) into Airport records.

The remote copy is tried first through a cached HTTP session; a local file is
used when the network is unavailable or the remote copy has no usable rows.
The parsed catalog is kept on the loader so it is built once per process.
"""
import csv
import io
import logging
import math
import os
from typing import Dict, Iterable, Mapping, Optional

import requests
import requests_cache

from .constants import AirportConstants
from .data_models import Airport, AirportType
from .exceptions import CatalogLoadError


class CatalogLoader:
    """
    Fetches and parses the airport catalog, with a 24h HTTP cache for the
    remote source.
    """
    CACHE_DIR = os.path.join(os.path.expanduser("~"), ".flightmapper_cache")

    def __init__(self, local_path: Optional[str] = None, remote_url: Optional[str] = AirportConstants.REMOTE_CATALOG_URL,
                 timeout: int = 30, cache_enabled: bool = True):
        """
        Args:
            local_path: airports.csv to use when the remote source fails.
            remote_url: Catalog URL. None disables the network entirely.
            timeout: Request timeout in seconds.
            cache_enabled: If True, remote responses are cached in sqlite.
        """
        self.local_path = local_path
        self.remote_url = remote_url
        self.timeout = timeout
        self._catalog: Optional[Dict[str, Airport]] = None

        # No session is built when the network is disabled
        self.session = None
        if remote_url and cache_enabled:
            os.makedirs(self.CACHE_DIR, exist_ok=True)
            self.session = requests_cache.CachedSession(
                os.path.join(self.CACHE_DIR, 'airport_catalog'),
                backend='sqlite',
                expire_after=AirportConstants.CACHE_EXPIRY_SECONDS
            )
        elif remote_url:
            self.session = requests.Session()

        if not logging.getLogger().hasHandlers():
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        logging.info(f"CatalogLoader initialized. Remote: {remote_url or 'disabled'}, local: {local_path or 'none'}")

    def load(self, path: Optional[str] = None) -> Dict[str, Airport]:
        """
        Returns the parsed catalog, loading it on first use. The local file
        is used when the remote source fails or yields no usable rows.

        Args:
            path: Overrides the local fallback file for this load.
        """
        if self._catalog is not None:
            return self._catalog

        local_path = path or self.local_path
        catalog, source = {}, self.remote_url
        text = self._fetch_remote()
        if text is not None:
            catalog = self.parse_rows(csv.DictReader(io.StringIO(text)))
            if not catalog:
                logging.warning(f"Remote airport catalog {self.remote_url} contained no usable rows")

        if not catalog:
            if not local_path:
                raise CatalogLoadError(self.remote_url or "no source configured")
            logging.info(f"Using local airport database: {local_path}")
            catalog = self.parse_rows(csv.DictReader(io.StringIO(self._read_local(local_path))))
            source = local_path
            if not catalog:
                raise CatalogLoadError(source, message="Airport catalog contained no usable rows")

        logging.info(f"Loaded {len(catalog)} airports from {source}")
        self._catalog = catalog
        return catalog

    def clear(self):
        """Drops the cached catalog so the next load re-reads its source."""
        self._catalog = None

    @staticmethod
    def parse_rows(rows: Iterable[Mapping[str, str]]) -> Dict[str, Airport]:
        """
        Converts OurAirports rows into Airport records, skipping rows without
        an ident, a name or numeric coordinates, and entries flagged as
        duplicates.
        """
        catalog = {}
        skipped = 0
        for row in rows:
            code = (row.get('ident') or '').strip()
            name = (row.get('name') or '').strip()
            lat = _parse_float(row.get('latitude_deg'))
            lon = _parse_float(row.get('longitude_deg'))

            if not code or not name or lat is None or lon is None:
                skipped += 1
                continue
            if AirportConstants.DUPLICATE_MARKER in name:
                skipped += 1
                continue

            catalog[code] = Airport(code=code, lat=lat, lon=lon, name=name, type=AirportType.parse(row.get('type')))

        if skipped:
            logging.debug(f"Skipped {skipped} catalog rows during parsing")
        return catalog

    def _fetch_remote(self) -> Optional[str]:
        if not self.remote_url:
            return None
        try:
            logging.info(f"Fetching airport catalog from {self.remote_url}...")
            response = self.session.get(self.remote_url, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.exceptions.RequestException as e:
            logging.warning(f"Remote airport catalog unavailable: {e}")
            return None

    def _read_local(self, path: str) -> str:
        try:
            with open(path, 'r', encoding='utf-8', errors='ignore') as f:
                return f.read()
        except OSError as e:
            raise CatalogLoadError(path, message=f"Local airport database unreadable ({e})") from e


def _parse_float(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
