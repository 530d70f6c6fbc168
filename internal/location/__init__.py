"""
Location services: platform backends and the location provider.
"""

from .backend import ConfiguredLocationBackend, LocationBackend, LocationDelegate
from .provider import DEFAULT_MIN_DISPLACEMENT, SEARCH_FAILED_MESSAGE, UNKNOWN_LOCATION, LocationProvider
from .types import (
    AuthorizationStatus,
    LocationChanged,
    LocationEvent,
    LocationFailed,
    Placemark,
    PlatformLocationError,
    PlatformLocationErrorCode,
)

__all__ = [
    "AuthorizationStatus",
    "ConfiguredLocationBackend",
    "DEFAULT_MIN_DISPLACEMENT",
    "LocationBackend",
    "LocationChanged",
    "LocationDelegate",
    "LocationEvent",
    "LocationFailed",
    "LocationProvider",
    "Placemark",
    "PlatformLocationError",
    "PlatformLocationErrorCode",
    "SEARCH_FAILED_MESSAGE",
    "UNKNOWN_LOCATION",
]
