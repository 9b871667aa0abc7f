# flightmapper/track/exceptions.py

class TrackError(Exception):
    """Base exception for track processing errors."""
    pass

class EmptyTrackError(TrackError):
    """Raised when a track has no valid samples left after normalization."""
    def __init__(self, source=None, message="Empty track"):
        self.source = source
        super().__init__(f"{message} [Source: {source}]" if source else message)

class TrackLogError(TrackError):
    """Raised when a flight log file cannot be read."""
    def __init__(self, path, message="Failed to read flight log"):
        self.path = path
        super().__init__(f"{message}: {path}")
