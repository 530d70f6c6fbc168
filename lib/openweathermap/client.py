"""
OpenWeatherMap Async Client

This module provides the OpenWeatherMapClient class for interacting with
the OpenWeatherMap data and geocoding APIs. The client performs exactly one
HTTP GET per call and never retries or caches: callers own those policies.
Failures surface as WeatherError subclasses (see errors.py).
"""

import json
import logging
import random
from typing import Any, Callable, List, Optional, TypeVar

import httpx

from .endpoints import Endpoint, MapLayer
from .errors import APIError, InvalidDataError, InvalidResponseError, InvalidURLError, NetworkError
from .models import AirQualityResponse, AlertsResponse, City, CurrentWeather, ForecastResponse, GeocodingResult

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class OpenWeatherMapClient:
    """
    Async client for OpenWeatherMap API

    Creates a new HTTP session for each request to support proper concurrent requests.

    Example usage:
        client = OpenWeatherMapClient(apiKey="your_key", requestTimeout=10)

        current = await client.fetchCurrentWeather(51.5, -0.12)
        forecast = await client.fetchForecast(51.5, -0.12)
        places = await client.fetchGeocodingResults("Paris", limit=5)
        tileUrl = client.getWeatherMapURL(MapLayer.PRECIPITATION, zoom=2, x=2, y=1)
    """

    def __init__(
        self,
        apiKey: str,
        requestTimeout: float = 10,
        geocodingLimit: int = 5,
    ):
        """
        Initialize OpenWeatherMap client

        Args:
            apiKey: OpenWeatherMap API key, appended to every request
            requestTimeout: HTTP request timeout (seconds)
            geocodingLimit: Default number of geocoding results to request
        """
        self.apiKey = apiKey
        self.requestTimeout = requestTimeout
        self.geocodingLimit = geocodingLimit

    async def fetchCurrentWeather(self, lat: float, lon: float) -> CurrentWeather:
        """
        Fetch current weather

        Uses: https://api.openweathermap.org/data/2.5/weather
        """
        return await self.fetchData(Endpoint.currentWeather(lat, lon), CurrentWeather.fromDict)

    async def fetchForecast(self, lat: float, lon: float) -> ForecastResponse:
        """
        Fetch 5-day / 3-hour forecast

        Uses: https://api.openweathermap.org/data/2.5/forecast
        """
        return await self.fetchData(Endpoint.forecast(lat, lon), ForecastResponse.fromDict)

    async def fetchAirQuality(self, lat: float, lon: float) -> AirQualityResponse:
        """
        Fetch air pollution data

        Uses: https://api.openweathermap.org/data/2.5/air_pollution
        """
        return await self.fetchData(Endpoint.airQuality(lat, lon), AirQualityResponse.fromDict)

    async def fetchAlerts(self, lat: float, lon: float) -> AlertsResponse:
        """
        Fetch weather alerts

        No alerts source is wired: the response is synthesized from a
        current-weather request. The City record is built from the current
        weather payload and the alert list is always empty (None).
        """
        currentWeather = await self.fetchCurrentWeather(lat, lon)

        city = City(
            id=random.randint(1000, 9999),
            name=currentWeather.name,
            coord=currentWeather.coord,
            country=currentWeather.sys.country,
            population=0,
            timezone=currentWeather.timezone,
            sunrise=currentWeather.sys.sunrise,
            sunset=currentWeather.sys.sunset,
        )

        return AlertsResponse(alerts=None, city=city)

    async def fetchGeocodingResults(self, query: str, limit: Optional[int] = None) -> List[GeocodingResult]:
        """
        Search locations by name

        Uses: http://api.openweathermap.org/geo/1.0/direct

        Args:
            query: Free-form query (e.g. "Paris" or "London,GB")
            limit: Max results (default: client geocodingLimit)

        Returns:
            Results in API order, possibly empty
        """
        endpoint = Endpoint.geocoding(query, limit if limit is not None else self.geocodingLimit)
        return await self.fetchData(endpoint, self._decodeGeocodingList)

    async def fetchReverseGeocoding(self, lat: float, lon: float, limit: int = 1) -> List[GeocodingResult]:
        """
        Get place names for coordinates

        Uses: http://api.openweathermap.org/geo/1.0/reverse
        """
        return await self.fetchData(Endpoint.reverseGeocoding(lat, lon, limit), self._decodeGeocodingList)

    def getWeatherMapURL(self, layer: MapLayer, zoom: int, x: int, y: int) -> str:
        """
        Get weather map tile URL, the tile itself is not fetched

        Raises:
            InvalidURLError: If URL can not be built
        """
        try:
            return Endpoint.weatherMap(layer, zoom, x, y).url(self.apiKey)
        except httpx.InvalidURL as e:
            raise InvalidURLError() from e

    @staticmethod
    def _decodeGeocodingList(data: Any) -> List[GeocodingResult]:
        if not isinstance(data, list):
            raise TypeError(f"Expected list of locations, got {type(data).__name__}")
        return [GeocodingResult.fromDict(item) for item in data]

    async def fetchData(self, endpoint: Endpoint, decoder: Callable[[Any], _T]) -> _T:
        """
        Fetch endpoint and decode response with decoder

        Raises:
            InvalidURLError: URL can not be built
            NetworkError: Transport level failure
            InvalidResponseError: Malformed HTTP response
            APIError: Non-2xx status
            InvalidDataError: Body is not JSON or does not match expected shape
        """
        responseData = await self._makeRequest(endpoint)
        try:
            return decoder(responseData)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Decoding error for {endpoint.kind.value}: {e}")
            raise InvalidDataError() from e

    async def _makeRequest(self, endpoint: Endpoint) -> Any:
        """
        Make HTTP request to OpenWeatherMap API

        Creates a new session for each request to support proper concurrent requests.

        Returns:
            Parsed JSON response
        """
        try:
            url = endpoint.url(self.apiKey)
        except httpx.InvalidURL as e:
            raise InvalidURLError() from e

        logger.debug(f"Making request to {endpoint.baseURL}{endpoint.path} with params: {endpoint.queryParams}")

        try:
            # Create new session for each request
            async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                response = await session.get(url)
        except httpx.ProtocolError as e:
            logger.error(f"Invalid response: {e}")
            raise InvalidResponseError() from e
        except httpx.TimeoutException as e:
            logger.error("Request timeout")
            raise NetworkError(e) from e
        except httpx.RequestError as e:
            logger.error(f"Network error: {e}")
            raise NetworkError(e) from e

        statusCode = response.status_code
        if not isinstance(statusCode, int):
            raise InvalidResponseError()

        if not 200 <= statusCode <= 299:
            message = self._extractErrorMessage(response)
            if message is not None:
                logger.error(f"API request failed: {statusCode}, {message}")
                raise APIError(message, statusCode)
            logger.error(f"API request failed: {statusCode}")
            raise APIError(f"Status code: {statusCode}", statusCode)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
            logger.error(f"Failed to parse JSON response: {e}")
            raise InvalidDataError() from e

        logger.debug(f"API request successful: {statusCode}")
        return data

    @staticmethod
    def _extractErrorMessage(response: httpx.Response) -> Optional[str]:
        """Get ``message`` field from JSON error body, if any"""
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str):
                return message
        return None
