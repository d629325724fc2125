"""
Custom exceptions for the geo module.

Every failure raised by the adapter is a GeoError subclass carrying a
stable ``code``, a human readable ``message`` and, where one applies,
the offending ``geofence_id``.
"""

from typing import Optional


# Code recorded for every item of a batch whose whole request was rejected
API_CONNECTION_ERROR = "APIConnectionError"


class GeoError(Exception):
    """Base exception for the geo module."""

    code = "GeoError"

    def __init__(self, message: str = "", geofence_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.geofence_id = geofence_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class AuthFailure(GeoError):
    """No credentials could be obtained from the auth session provider."""
    code = "AuthFailure"


class MissingConfiguration(GeoError):
    """A required Geo resource is neither configured nor overridden."""
    code = "MissingConfiguration"


class InvalidOptions(GeoError):
    """Search options combine settings that cannot be used together."""
    code = "InvalidOptions"


class EmptyInput(GeoError):
    """A bulk operation was called with an empty collection."""
    code = "EmptyInput"


class InvalidGeofenceId(GeoError):
    """A geofence id is empty or contains unsupported characters."""
    code = "InvalidGeofenceId"


class InvalidPolygon(GeoError):
    """A geofence polygon is missing, empty or has a malformed linear ring."""
    code = "InvalidPolygon"


class InvalidPlaceId(GeoError):
    """A place id is empty."""
    code = "InvalidPlaceId"


class TransportError(GeoError):
    """
    Raised by the transport when a provider call fails.

    ``provider_code`` holds the provider's own error code when the
    provider answered, and is None for connectivity failures.
    """
    code = "TransportError"

    def __init__(self, message: str = "", provider_code: Optional[str] = None):
        super().__init__(message)
        self.provider_code = provider_code
