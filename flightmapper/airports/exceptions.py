# flightmapper/airports/exceptions.py

class AirportError(Exception):
    """Base exception for airport catalog and lookup errors."""
    pass

class CatalogLoadError(AirportError):
    """Raised when no catalog source yields usable airport data."""
    def __init__(self, source, message="Could not load airport catalog"):
        self.source = source
        super().__init__(f"{message}: {source}")
