"""
Location Provider

Tracks the most recent device coordinate, filters small movements, turns
platform authorization changes and failures into subscriber events and
offers reverse geocoding and location search, dood!

Subscribers receive events through their own asyncio.Queue:

    queue = provider.subscribe()
    event = await queue.get()
    match event:
        case LocationChanged(coordinate=coordinate): ...
        case LocationFailed(message=message): ...
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from lib.geo import Coordinate, distanceMeters
from lib.openweathermap import (
    GeocodingResult,
    LocationPermissionDeniedError,
    LocationServicesDisabledError,
    OpenWeatherMapClient,
    UnknownWeatherError,
)

from .backend import LocationBackend
from .types import (
    AuthorizationStatus,
    LocationChanged,
    LocationEvent,
    LocationFailed,
    PlatformLocationError,
    PlatformLocationErrorCode,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_DISPLACEMENT = 500.0
UNKNOWN_LOCATION = "Unknown Location"
SEARCH_FAILED_MESSAGE = "Unable to search for locations"


class LocationProvider:
    """
    Location source for the weather orchestrator

    Attributes:
        backend: Platform location backend
        client: API client used for location search
        minDisplacement: Updates closer than this (meters) to the last
            published coordinate are dropped
        location: Last published coordinate
        authorizationStatus: Last known authorization status
        errorMessage: Last location error message
        searchResults: Results of the last search
        isSearching: Whether a search is in progress
        searchErrorMessage: Message of the last search, if it failed or found nothing
    """

    def __init__(
        self,
        backend: LocationBackend,
        client: OpenWeatherMapClient,
        minDisplacement: float = DEFAULT_MIN_DISPLACEMENT,
    ):
        self.backend = backend
        self.client = client
        self.minDisplacement = minDisplacement

        self.location: Optional[Coordinate] = None
        self.authorizationStatus: AuthorizationStatus = backend.authorizationStatus
        self.errorMessage: Optional[str] = None

        self.searchResults: List[GeocodingResult] = []
        self.isSearching = False
        self.searchErrorMessage: Optional[str] = None

        self._subscribers: List[asyncio.Queue[LocationEvent]] = []

        backend.setDelegate(self)

    def subscribe(self) -> asyncio.Queue[LocationEvent]:
        """Get new event queue, events published from now on are delivered to it"""
        queue: asyncio.Queue[LocationEvent] = asyncio.Queue()
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[LocationEvent]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def _publish(self, event: LocationEvent) -> None:
        for queue in self._subscribers:
            queue.put_nowait(event)

    def start(self) -> None:
        """Act on the current authorization status"""
        self.onAuthorizationChanged(self.backend.authorizationStatus)

    def requestLocationPermission(self) -> None:
        self.backend.requestPermission()

    def startUpdatingLocation(self) -> None:
        self.backend.startUpdates()

    def stopUpdatingLocation(self) -> None:
        self.backend.stopUpdates()

    # Backend callbacks

    def onAuthorizationChanged(self, status: AuthorizationStatus) -> None:
        self.authorizationStatus = status
        logger.debug(f"Location authorization: {status}")

        match status:
            case AuthorizationStatus.AUTHORIZED_WHEN_IN_USE | AuthorizationStatus.AUTHORIZED_ALWAYS:
                self.backend.startUpdates()
            case AuthorizationStatus.DENIED | AuthorizationStatus.RESTRICTED:
                error = LocationServicesDisabledError()
                self._fail(LocationFailed(error=error, message=error.message))
            case AuthorizationStatus.NOT_DETERMINED:
                self.backend.requestPermission()

    def onLocationsUpdated(self, coordinates: Sequence[Coordinate]) -> None:
        if not coordinates:
            return
        coordinate = coordinates[-1]

        if self.location is not None:
            distance = distanceMeters(self.location, coordinate)
            if distance < self.minDisplacement:
                logger.debug(f"Ignoring location update {coordinate}: moved only {distance:.0f}m")
                return

        self.location = coordinate
        self.errorMessage = None
        logger.info(f"Location changed: {coordinate}")
        self._publish(LocationChanged(coordinate=coordinate))

    def onLocationFailed(self, error: BaseException) -> None:
        if isinstance(error, PlatformLocationError):
            match error.code:
                case PlatformLocationErrorCode.DENIED:
                    weatherError = LocationPermissionDeniedError()
                    message = weatherError.message
                case PlatformLocationErrorCode.LOCATION_UNKNOWN:
                    message = "Unable to determine your location. Please try again later."
                    weatherError = UnknownWeatherError(message)
                case _:
                    message = f"Location error: {error}"
                    weatherError = UnknownWeatherError(message)
        else:
            message = f"Location error: {error}"
            weatherError = UnknownWeatherError(message)

        self._fail(LocationFailed(error=weatherError, message=message))

    def _fail(self, event: LocationFailed) -> None:
        logger.warning(f"Location failed: {event.message}")
        self.errorMessage = event.message
        self._publish(event)

    # Geocoding

    async def placeName(self, coordinate: Coordinate) -> str:
        """
        Human-readable name for coordinate

        Uses the first placemark: locality, then sub-locality, then
        administrative area. Any failure yields "Unknown Location".
        """
        try:
            placemarks = await self.backend.reverseGeocode(coordinate)
        except Exception as e:
            logger.error(f"Error getting location name: {e}")
            return UNKNOWN_LOCATION

        if not placemarks:
            return UNKNOWN_LOCATION

        placemark = placemarks[0]
        for name in (placemark.locality, placemark.subLocality, placemark.administrativeArea):
            if name:
                return name
        return UNKNOWN_LOCATION

    async def searchLocations(self, query: str) -> List[GeocodingResult]:
        """
        Search locations by name, results are kept in ``searchResults``

        Errors never propagate: they clear the results and set
        ``searchErrorMessage`` to a generic message.
        """
        self.searchErrorMessage = None

        if not query:
            self.searchResults = []
            self.isSearching = False
            return self.searchResults

        self.isSearching = True
        try:
            results = await self.client.fetchGeocodingResults(query)
            self.searchResults = results
            if not results:
                self.searchErrorMessage = f"No locations found for '{query}'"
        except Exception as e:
            logger.error(f"Search error: {e}")
            self.searchErrorMessage = SEARCH_FAILED_MESSAGE
            self.searchResults = []
        finally:
            self.isSearching = False

        return self.searchResults
