"""Application exception classes."""

from typing import Optional


class StationMapError(Exception):
    """Base class for station map data failures."""


class FetchError(StationMapError):
    """Raised when a remote document cannot be retrieved."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(StationMapError):
    """Raised when a retrieved document is not the expected feature data."""
