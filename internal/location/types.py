"""
Location types: authorization status, placemarks, platform errors and
the events delivered to location subscribers.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Optional, Union

from lib.geo import Coordinate
from lib.openweathermap import WeatherError


class AuthorizationStatus(StrEnum):
    """Platform location authorization status"""

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"


@dataclass(frozen=True, slots=True)
class Placemark:
    """Reverse geocoding result"""

    locality: Optional[str] = None
    subLocality: Optional[str] = None
    administrativeArea: Optional[str] = None
    country: Optional[str] = None


class PlatformLocationErrorCode(Enum):
    DENIED = "denied"
    LOCATION_UNKNOWN = "location_unknown"
    OTHER = "other"


class PlatformLocationError(Exception):
    """Error reported by the platform location backend"""

    def __init__(self, code: PlatformLocationErrorCode, detail: str = ""):
        self.code = code
        self.detail = detail
        super().__init__(detail or code.value)


@dataclass(frozen=True, slots=True)
class LocationChanged:
    """New distinct coordinate was published"""

    coordinate: Coordinate


@dataclass(frozen=True, slots=True)
class LocationFailed:
    """Location could not be obtained

    Attributes:
        error: Domain error describing the failure
        message: User-facing message
    """

    error: WeatherError
    message: str


LocationEvent = Union[LocationChanged, LocationFailed]
