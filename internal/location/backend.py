"""
Location backends

A LocationBackend wraps the platform location service. It reports
authorization changes, coordinate batches and failures to its delegate
(the LocationProvider) and performs reverse geocoding.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Protocol, Sequence

from lib.geo import Coordinate
from lib.openweathermap import OpenWeatherMapClient

from .types import AuthorizationStatus, Placemark, PlatformLocationError, PlatformLocationErrorCode

logger = logging.getLogger(__name__)


class LocationDelegate(Protocol):
    def onAuthorizationChanged(self, status: AuthorizationStatus) -> None: ...

    def onLocationsUpdated(self, coordinates: Sequence[Coordinate]) -> None: ...

    def onLocationFailed(self, error: BaseException) -> None: ...


class LocationBackend(ABC):
    """Abstract platform location service"""

    def __init__(self) -> None:
        self.delegate: Optional[LocationDelegate] = None

    def setDelegate(self, delegate: Optional[LocationDelegate]) -> None:
        self.delegate = delegate

    @property
    @abstractmethod
    def authorizationStatus(self) -> AuthorizationStatus:
        pass

    @abstractmethod
    def requestPermission(self) -> None:
        """Ask the user for location permission, result arrives via delegate"""
        pass

    @abstractmethod
    def startUpdates(self) -> None:
        pass

    @abstractmethod
    def stopUpdates(self) -> None:
        pass

    @abstractmethod
    async def reverseGeocode(self, coordinate: Coordinate) -> List[Placemark]:
        """Get placemarks for coordinate, may raise"""
        pass


class ConfiguredLocationBackend(LocationBackend):
    """
    Location backend with a fixed coordinate

    Used by the console host where there is no device location: the
    coordinate comes from configuration and reverse geocoding goes through
    the OpenWeatherMap geocoding API.
    """

    def __init__(
        self,
        client: OpenWeatherMapClient,
        coordinate: Optional[Coordinate],
        status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
    ):
        super().__init__()
        self.client = client
        self.coordinate = coordinate
        self._status = status
        self._updating = False

    @property
    def authorizationStatus(self) -> AuthorizationStatus:
        return self._status

    @property
    def isUpdating(self) -> bool:
        return self._updating

    def requestPermission(self) -> None:
        self._status = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE
        if self.delegate is not None:
            self.delegate.onAuthorizationChanged(self._status)

    def startUpdates(self) -> None:
        self._updating = True
        if self.delegate is None:
            return
        if self.coordinate is None:
            self.delegate.onLocationFailed(
                PlatformLocationError(PlatformLocationErrorCode.LOCATION_UNKNOWN, "No location configured")
            )
            return
        self.delegate.onLocationsUpdated([self.coordinate])

    def stopUpdates(self) -> None:
        self._updating = False

    async def reverseGeocode(self, coordinate: Coordinate) -> List[Placemark]:
        results = await self.client.fetchReverseGeocoding(coordinate.latitude, coordinate.longitude)
        logger.debug(f"Reverse geocoding for {coordinate}: {len(results)} results")
        return [
            Placemark(locality=result.name, administrativeArea=result.state, country=result.country)
            for result in results
        ]
