"""Exceptions raised by the verification pipeline."""


class AddyError(Exception):
    """Base class for verification failures that are not expected outcomes."""
    pass


class ConfigurationError(AddyError):
    """Raised when credentials or settings needed to call Addy are missing."""
    pass


class MalformedResponse(AddyError):
    """Raised when the service reply cannot be interpreted as any match result."""
    pass


class CoordinateParseFailure(AddyError, ValueError):
    """Raised when a matched address carries coordinates that are not numbers."""

    def __init__(self, longitude: str, latitude: str):
        self.longitude = longitude
        self.latitude = latitude
        super().__init__(
            f"Addy returned non-numeric coordinates: x={longitude!r}, y={latitude!r}"
        )
