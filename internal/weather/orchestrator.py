"""
Weather Orchestrator

Owns the current location query and fans it out to four independent
fetches (current weather, forecast, air quality, alerts). Each fetch goes
through the cache, publishes its own LoadingState and fails on its own, so
a broken forecast never blanks the current weather. A new query cancels
the previous one; a generation counter makes sure superseded fetches never
write to the state slots, dood!

Example:
    orchestrator = WeatherOrchestrator(client, cache, locationProvider)
    orchestrator.addListener(lambda field, value: print(field, value))
    await orchestrator.runQuery(Coordinate(51.5, -0.12))
    print(orchestrator.currentWeatherState.value)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

from internal.location import LocationChanged, LocationEvent, LocationFailed, LocationProvider
from lib.cache import CacheInterface
from lib.geo import Coordinate, tileForCoordinate
from lib.loading_state import LoadingState
from lib.openweathermap import (
    AirQualityResponse,
    AlertsResponse,
    CurrentWeather,
    Endpoint,
    ForecastResponse,
    GeocodingResult,
    LocationServicesDisabledError,
    MapLayer,
    OpenWeatherMapClient,
    WeatherError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAP_ZOOM = 2
INITIAL_LOCATION_NAME = "Loading location..."
LOCATION_UNAVAILABLE = "Location Unavailable"

StateListener = Callable[[str, Any], None]

STATE_FIELDS = ("currentWeatherState", "forecastState", "airQualityState", "alertsState")


class WeatherOrchestrator:
    """
    Coordinates location, cache and API client for the presentation layer

    Observable fields (reported to listeners as ``(fieldName, newValue)``):
        currentWeatherState, forecastState, airQualityState, alertsState,
        selectedMapLayer, mapURL, currentCoordinate, locationName
    """

    def __init__(
        self,
        client: OpenWeatherMapClient,
        cache: CacheInterface[Endpoint, Any],
        locationProvider: Optional[LocationProvider] = None,
        mapZoom: int = DEFAULT_MAP_ZOOM,
        defaultLayer: MapLayer = MapLayer.PRECIPITATION,
    ):
        """
        Initialize orchestrator

        Args:
            client: OpenWeatherMap API client
            cache: Response cache keyed by Endpoint
            locationProvider: Source of location events and search (optional)
            mapZoom: Zoom level of the map tile
            defaultLayer: Initially selected map layer
        """
        self.client = client
        self.cache = cache
        self.locationProvider = locationProvider
        self.mapZoom = mapZoom

        self.currentWeatherState: LoadingState[CurrentWeather] = LoadingState.idle()
        self.forecastState: LoadingState[ForecastResponse] = LoadingState.idle()
        self.airQualityState: LoadingState[AirQualityResponse] = LoadingState.idle()
        self.alertsState: LoadingState[AlertsResponse] = LoadingState.idle()
        self.selectedMapLayer = defaultLayer
        self.mapURL: Optional[str] = None
        self.currentCoordinate: Optional[Coordinate] = None
        self.locationName = INITIAL_LOCATION_NAME

        self.generation = 0
        self._currentTask: Optional[asyncio.Task] = None
        self._nameTask: Optional[asyncio.Task] = None
        self._eventTask: Optional[asyncio.Task] = None
        self._eventQueue: Optional[asyncio.Queue[LocationEvent]] = None
        self._listeners: List[StateListener] = []

    # Observation

    def addListener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def removeListener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _setField(self, name: str, value: Any) -> None:
        setattr(self, name, value)
        for listener in list(self._listeners):
            try:
                listener(name, value)
            except Exception as e:
                logger.error(f"State listener failed on {name}: {e}")
                logger.exception(e)

    def _publish(self, generation: int, name: str, state: LoadingState) -> None:
        """Set state slot unless the query was superseded"""
        if generation != self.generation:
            logger.debug(f"Dropping stale {name} from generation {generation}")
            return
        self._setField(name, state)

    # Queries

    @property
    def isQueryRunning(self) -> bool:
        return self._currentTask is not None and not self._currentTask.done()

    def cancelCurrentQuery(self) -> None:
        """Cancel in-flight query, if any, and invalidate its generation"""
        self.generation += 1
        if self._currentTask is not None and not self._currentTask.done():
            self._currentTask.cancel()
        self._currentTask = None

    def runQuery(self, coordinate: Coordinate) -> asyncio.Task:
        """
        Start fetching everything for coordinate

        Cancels the previous query and resets all four slots to loading.
        Must be called with a running event loop.

        Returns:
            Task that finishes when all four fetches settled and the map URL
            is updated
        """
        self.cancelCurrentQuery()
        generation = self.generation
        logger.info(f"Running weather query #{generation} for {coordinate}")

        if self.currentCoordinate != coordinate:
            self._setField("currentCoordinate", coordinate)
        for name in STATE_FIELDS:
            self._setField(name, LoadingState.loading())

        task = asyncio.create_task(self._runQuery(coordinate, generation))
        self._currentTask = task
        return task

    async def _runQuery(self, coordinate: Coordinate, generation: int) -> None:
        lat, lon = coordinate.latitude, coordinate.longitude

        async with asyncio.TaskGroup() as group:
            group.create_task(
                self._fetchResource(
                    generation, "currentWeatherState", Endpoint.currentWeather(lat, lon), self.client.fetchCurrentWeather
                )
            )
            group.create_task(
                self._fetchResource(generation, "forecastState", Endpoint.forecast(lat, lon), self.client.fetchForecast)
            )
            group.create_task(
                self._fetchResource(
                    generation, "airQualityState", Endpoint.airQuality(lat, lon), self.client.fetchAirQuality
                )
            )
            group.create_task(
                self._fetchResource(generation, "alertsState", Endpoint.alerts(lat, lon), self.client.fetchAlerts)
            )

        if generation != self.generation:
            return
        self._updateMapURL(coordinate)
        logger.debug(f"Weather query #{generation} finished")

    async def _checkpoint(self, generation: int) -> None:
        await asyncio.sleep(0)
        if generation != self.generation:
            raise asyncio.CancelledError()

    async def _fetchResource(
        self,
        generation: int,
        name: str,
        endpoint: Endpoint,
        fetch: Callable[[float, float], Awaitable[Any]],
    ) -> None:
        """Fetch one resource through the cache and publish its state"""
        try:
            cached = await self.cache.get(endpoint)
            if cached is not None:
                logger.debug(f"Cache hit for {name}")
                self._publish(generation, name, LoadingState.success(cached))
                return

            self._publish(generation, name, LoadingState.loading(0.3))
            await self._checkpoint(generation)
            self._publish(generation, name, LoadingState.loading(0.7))

            result = await fetch(endpoint.lat, endpoint.lon)
            await self._checkpoint(generation)

            await self.cache.set(endpoint, result)
            self._publish(generation, name, LoadingState.success(result))
        except asyncio.CancelledError:
            logger.debug(f"Fetch of {name} for generation {generation} cancelled")
            raise
        except WeatherError as e:
            logger.error(f"Failed to fetch {name}: {e}")
            self._publish(generation, name, LoadingState.failure(e))
        except Exception as e:
            logger.error(f"Unexpected error while fetching {name}: {e}")
            logger.exception(e)
            self._publish(generation, name, LoadingState.failure(e))

    # Map

    def _updateMapURL(self, coordinate: Coordinate) -> None:
        x, y = tileForCoordinate(coordinate, self.mapZoom)
        try:
            url = self.client.getWeatherMapURL(self.selectedMapLayer, self.mapZoom, x, y)
        except WeatherError as e:
            logger.error(f"Unable to build map URL: {e}")
            url = None
        self._setField("mapURL", url)
        logger.debug(f"Map URL: {url} for {coordinate}")

    def changeMapLayer(self, layer: MapLayer) -> None:
        """Select map layer and rebuild the tile URL without refetching weather"""
        self._setField("selectedMapLayer", layer)
        if self.currentCoordinate is not None:
            self._updateMapURL(self.currentCoordinate)

    # Commands

    def refresh(self) -> Optional[asyncio.Task]:
        """Rerun last query or, without one, ask for a location fix"""
        if self.currentCoordinate is not None:
            return self.runQuery(self.currentCoordinate)
        if self.locationProvider is not None:
            self.locationProvider.startUpdatingLocation()
        else:
            logger.warning("Nothing to refresh: no coordinate and no location provider")
        return None

    def requestLocationPermission(self) -> None:
        if self.locationProvider is not None:
            self.locationProvider.requestLocationPermission()

    def setLocationName(self, name: str) -> None:
        """Set display name, superseding any pending reverse geocode"""
        self._cancelNameTask()
        self._setField("locationName", name)

    def selectSearchResult(self, result: GeocodingResult) -> asyncio.Task:
        self.setLocationName(result.name)
        return self.runQuery(Coordinate(result.lat, result.lon))

    async def search(self, query: str) -> List[GeocodingResult]:
        if self.locationProvider is None:
            return []
        return await self.locationProvider.searchLocations(query)

    @property
    def searchResults(self) -> List[GeocodingResult]:
        return self.locationProvider.searchResults if self.locationProvider is not None else []

    @property
    def searchErrorMessage(self) -> Optional[str]:
        return self.locationProvider.searchErrorMessage if self.locationProvider is not None else None

    @property
    def isSearching(self) -> bool:
        return self.locationProvider is not None and self.locationProvider.isSearching

    # Location events

    async def start(self) -> None:
        """Subscribe to location events and kick off location updates"""
        if self.locationProvider is None:
            raise RuntimeError("No location provider configured")
        if self._eventTask is not None:
            raise RuntimeError("Orchestrator is already started")

        self._eventQueue = self.locationProvider.subscribe()
        self._eventTask = asyncio.create_task(self._consumeLocationEvents(self._eventQueue))
        self.locationProvider.start()
        logger.info("Weather orchestrator started")

    async def stop(self) -> None:
        """Stop consuming location events and cancel running work"""
        self.cancelCurrentQuery()

        for task in (self._eventTask, self._nameTask):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._eventTask = None
        self._nameTask = None

        if self.locationProvider is not None and self._eventQueue is not None:
            self.locationProvider.unsubscribe(self._eventQueue)
        self._eventQueue = None
        logger.info("Weather orchestrator stopped")

    async def _consumeLocationEvents(self, queue: asyncio.Queue[LocationEvent]) -> None:
        while True:
            event = await queue.get()
            try:
                self.handleLocationEvent(event)
            except Exception as e:
                logger.error(f"Error handling location event {event}: {e}")
                logger.exception(e)

    def handleLocationEvent(self, event: LocationEvent) -> None:
        match event:
            case LocationChanged(coordinate=coordinate):
                if coordinate == self.currentCoordinate:
                    return
                self._setField("currentCoordinate", coordinate)
                self._updateLocationName(coordinate)
                self.runQuery(coordinate)
            case LocationFailed(message=message):
                logger.warning(f"Location unavailable: {message}")
                self._handleLocationError()

    def _cancelNameTask(self) -> None:
        if self._nameTask is not None and not self._nameTask.done():
            self._nameTask.cancel()
        self._nameTask = None

    def _updateLocationName(self, coordinate: Coordinate) -> None:
        if self.locationProvider is None:
            return
        self._cancelNameTask()
        self._nameTask = asyncio.create_task(self._resolveLocationName(coordinate))

    async def _resolveLocationName(self, coordinate: Coordinate) -> None:
        assert self.locationProvider is not None
        name = await self.locationProvider.placeName(coordinate)
        if coordinate == self.currentCoordinate:
            self._setField("locationName", name)

    def _handleLocationError(self) -> None:
        self.cancelCurrentQuery()
        self._cancelNameTask()
        self._setField("locationName", LOCATION_UNAVAILABLE)

        error = LocationServicesDisabledError()
        for name in STATE_FIELDS:
            self._setField(name, LoadingState.failure(error))
