"""
Skycast - weather for a location or a searched city, fetched concurrently
through a TTL cache and printed as JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from internal.config.manager import ConfigManager
from internal.location import DEFAULT_MIN_DISPLACEMENT, ConfiguredLocationBackend, LocationProvider
from internal.weather import DEFAULT_MAP_ZOOM, INITIAL_LOCATION_NAME, LOCATION_UNAVAILABLE, WeatherOrchestrator
from lib.cache import DictCache
from lib.geo import Coordinate
from lib.loading_state import LoadingKind, LoadingState
from lib.logging_utils import initLogging
from lib.openweathermap import Endpoint, EndpointKeyGenerator, MapLayer, OpenWeatherMapClient, WeatherError
from lib.openweathermap.models import toDict
from lib.utils import jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 900
DEFAULT_CACHE_SIZE = 50
SETTLE_POLL_INTERVAL = 0.05


def stateToDict(state: LoadingState) -> Dict[str, Any]:
    """Convert loading state into JSON-friendly dict"""
    match state.kind:
        case LoadingKind.IDLE:
            return {"state": "idle"}
        case LoadingKind.LOADING:
            return {"state": "loading", "progress": state.progress}
        case LoadingKind.SUCCESS:
            return {"state": "success", "value": toDict(state.value)}
        case LoadingKind.FAILURE:
            error = state.error
            return {
                "state": "failure",
                "kind": error.kind.value if isinstance(error, WeatherError) else "unknown",
                "error": str(error),
            }


class SkycastApp:
    """Wires configuration, cache, API client, location and orchestrator together."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        owmConfig = self.configManager.getOpenWeatherMapConfig()
        self.requestTimeout = float(owmConfig.get("request-timeout", 10))
        self.client = OpenWeatherMapClient(
            apiKey=self.configManager.getApiKey(),
            requestTimeout=self.requestTimeout,
            geocodingLimit=int(owmConfig.get("geocoding-limit", 5)),
        )

        cacheConfig = self.configManager.getCacheConfig()
        self.cache: DictCache[Endpoint, Any] = DictCache(
            keyGenerator=EndpointKeyGenerator(),
            defaultTtl=int(cacheConfig.get("ttl", DEFAULT_CACHE_TTL)),
            maxSize=int(cacheConfig.get("max-size", DEFAULT_CACHE_SIZE)),
        )

        locationConfig = self.configManager.getLocationConfig()
        configuredCoordinate: Optional[Coordinate] = None
        if "latitude" in locationConfig and "longitude" in locationConfig:
            configuredCoordinate = Coordinate(float(locationConfig["latitude"]), float(locationConfig["longitude"]))
        self.locationBackend = ConfiguredLocationBackend(self.client, configuredCoordinate)
        self.locationProvider = LocationProvider(
            self.locationBackend,
            self.client,
            minDisplacement=float(locationConfig.get("min-displacement", DEFAULT_MIN_DISPLACEMENT)),
        )

        mapConfig = self.configManager.getMapConfig()
        self.orchestrator = WeatherOrchestrator(
            client=self.client,
            cache=self.cache,
            locationProvider=self.locationProvider,
            mapZoom=int(mapConfig.get("zoom", DEFAULT_MAP_ZOOM)),
            defaultLayer=MapLayer(mapConfig.get("default-layer", MapLayer.PRECIPITATION.value)),
        )

    def snapshot(self) -> Dict[str, Any]:
        orchestrator = self.orchestrator
        coordinate = orchestrator.currentCoordinate
        return {
            "location": orchestrator.locationName,
            "coordinate": {"lat": coordinate.latitude, "lon": coordinate.longitude} if coordinate else None,
            "currentWeather": stateToDict(orchestrator.currentWeatherState),
            "forecast": stateToDict(orchestrator.forecastState),
            "airQuality": stateToDict(orchestrator.airQualityState),
            "alerts": stateToDict(orchestrator.alertsState),
            "mapLayer": orchestrator.selectedMapLayer.value,
            "mapURL": orchestrator.mapURL,
        }

    async def runForCoordinate(self, coordinate: Coordinate) -> Dict[str, Any]:
        task = self.orchestrator.runQuery(coordinate)
        locationName = await self.locationProvider.placeName(coordinate)
        await task
        self.orchestrator.setLocationName(locationName)
        return self.snapshot()

    async def runForCity(self, city: str) -> Dict[str, Any]:
        results = await self.orchestrator.search(city)
        if not results:
            raise LookupError(self.orchestrator.searchErrorMessage or f"No locations found for '{city}'")
        await self.orchestrator.selectSearchResult(results[0])
        return self.snapshot()

    def _isSettled(self) -> bool:
        orchestrator = self.orchestrator
        if orchestrator.locationName == LOCATION_UNAVAILABLE:
            return True
        return (
            orchestrator.currentCoordinate is not None
            and not orchestrator.isQueryRunning
            and orchestrator.locationName != INITIAL_LOCATION_NAME
        )

    async def _waitSettled(self) -> None:
        while not self._isSettled():
            await asyncio.sleep(SETTLE_POLL_INTERVAL)

    async def runForConfiguredLocation(self) -> Dict[str, Any]:
        """Follow the location provider until the first query and place name settled."""
        await self.orchestrator.start()
        try:
            # Name lookup and four fetches each take at most one request timeout
            await asyncio.wait_for(self._waitSettled(), timeout=self.requestTimeout * 3)
        finally:
            await self.orchestrator.stop()
        return self.snapshot()

    async def run(
        self, coordinate: Optional[Coordinate] = None, city: Optional[str] = None, layer: Optional[MapLayer] = None
    ) -> Dict[str, Any]:
        if layer is not None:
            self.orchestrator.changeMapLayer(layer)

        if coordinate is not None:
            return await self.runForCoordinate(coordinate)
        if city is not None:
            return await self.runForCity(city)
        return await self.runForConfiguredLocation()


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Skycast - current weather, forecast, air quality and weather map")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    parser.add_argument("--lat", type=float, help="Latitude to query")
    parser.add_argument("--lon", type=float, help="Longitude to query")
    parser.add_argument("--city", help="City to search for, first result is used")
    parser.add_argument(
        "--layer",
        choices=[layer.value for layer in MapLayer],
        help="Weather map layer (default: from config or precipitation_new)",
    )
    args = parser.parse_args()

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be used together")
    if args.lat is not None and args.city:
        parser.error("--city can not be combined with --lat/--lon")

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration."""
    print("=== Skycast Configuration ===")
    print()

    config = dict(configManager.config)
    # Never print the real API key
    if "api-key" in config.get("openweathermap", {}):
        config["openweathermap"] = {**config["openweathermap"], "api-key": "***"}

    print(jsonDumps(config, indent=2))
    print()
    print("=== Configuration loaded successfully ===")


def main():
    """Main entry point."""
    args = parse_arguments()

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            sys.exit(0)

        app = SkycastApp(configPath=args.config, configDirs=args.config_dir)
        coordinate = Coordinate(args.lat, args.lon) if args.lat is not None else None
        layer = MapLayer(args.layer) if args.layer else None

        result = asyncio.run(app.run(coordinate=coordinate, city=args.city, layer=layer))
        print(jsonDumps(result, indent=2))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except LookupError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Skycast crashed: {e}")
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
