"""
OpenWeatherMap client exceptions

This module defines the domain error taxonomy shared by the API client,
the location provider and the weather orchestrator. All errors inherit
from WeatherError and carry an ErrorKind tag, so consumers can match on
the kind without caring about the concrete class.
"""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Kinds of weather errors"""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    INVALID_DATA = "invalid_data"
    NETWORK_ERROR = "network_error"
    API_ERROR = "api_error"
    NO_LOCATION_FOUND = "no_location_found"
    LOCATION_SERVICES_DISABLED = "location_services_disabled"
    LOCATION_PERMISSION_DENIED = "location_permission_denied"
    UNKNOWN = "unknown"


class WeatherError(Exception):
    """Base exception class for all weather errors.

    Attributes:
        kind: Error kind tag
        message: Human-readable error description
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    defaultMessage: str = "An unknown error occurred. Please try again."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message if message is not None else self.defaultMessage
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidURLError(WeatherError):
    """Raised when request URL can not be built"""

    kind = ErrorKind.INVALID_URL
    defaultMessage = "Invalid URL. Please try again."


class InvalidResponseError(WeatherError):
    """Raised when transport returned something that is not a valid HTTP response"""

    kind = ErrorKind.INVALID_RESPONSE
    defaultMessage = "Invalid response from server. Please try again later."


class InvalidDataError(WeatherError):
    """Raised when response body can not be decoded into expected shape"""

    kind = ErrorKind.INVALID_DATA
    defaultMessage = "The data received from the server was invalid. Please try again."


class NetworkError(WeatherError):
    """Raised on transport-level failures (DNS, connection, timeout).

    Attributes:
        cause: Underlying transport exception
    """

    kind = ErrorKind.NETWORK_ERROR

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Network error: {cause}")
        logger.debug(f"NetworkError: {cause!r}")


class APIError(WeatherError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        apiMessage: Message supplied by the server or synthesized from the status code
        statusCode: HTTP status code, if known
    """

    kind = ErrorKind.API_ERROR

    def __init__(self, apiMessage: str, statusCode: Optional[int] = None) -> None:
        self.apiMessage = apiMessage
        self.statusCode = statusCode
        super().__init__(f"API error: {apiMessage}")


class NoLocationFoundError(WeatherError):
    kind = ErrorKind.NO_LOCATION_FOUND
    defaultMessage = "No location found. Please try a different search term."


class LocationServicesDisabledError(WeatherError):
    kind = ErrorKind.LOCATION_SERVICES_DISABLED
    defaultMessage = "Location services are disabled. Please enable them in Settings."


class LocationPermissionDeniedError(WeatherError):
    kind = ErrorKind.LOCATION_PERMISSION_DENIED
    defaultMessage = "Location permission denied. Please update in Settings."


class UnknownWeatherError(WeatherError):
    kind = ErrorKind.UNKNOWN
