"""
OpenWeatherMap endpoint descriptions

Each Endpoint value fully describes one remote resource: which host and
path to call, which query parameters to send and which cache key the
resource is stored under.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Dict, Optional, Union

import httpx

from lib.cache import KeyGenerator

DATA_API_BASE = "https://api.openweathermap.org/data/2.5"
GEOCODING_API_BASE = "https://api.openweathermap.org/geo/1.0"
TILE_API_BASE = "https://tile.openweathermap.org/map"

QueryValue = Union[str, int, float]


class MapLayer(StrEnum):
    """Weather map tile layers"""

    PRECIPITATION = "precipitation_new"
    TEMPERATURE = "temp_new"
    PRESSURE = "pressure_new"
    WIND = "wind_new"
    CLOUDS = "clouds_new"


class EndpointKind(Enum):
    """Kinds of remote resources, value is the cache key prefix"""

    CURRENT_WEATHER = "current"
    FORECAST = "forecast"
    AIR_QUALITY = "airquality"
    ALERTS = "alerts"
    GEOCODING = "geocoding"
    REVERSE_GEOCODING = "reverse"
    WEATHER_MAP = "map"


_PATHS: Dict[EndpointKind, str] = {
    EndpointKind.CURRENT_WEATHER: "/weather",
    EndpointKind.FORECAST: "/forecast",
    EndpointKind.AIR_QUALITY: "/air_pollution",
    EndpointKind.GEOCODING: "/direct",
    EndpointKind.REVERSE_GEOCODING: "/reverse",
}


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Single OpenWeatherMap resource

    Use the named constructors instead of filling fields directly:

        >>> Endpoint.currentWeather(51.5, -0.12).url("key")
        'https://api.openweathermap.org/data/2.5/weather?lat=51.5&lon=-0.12&units=metric&appid=key'
    """

    kind: EndpointKind
    lat: Optional[float] = None
    lon: Optional[float] = None
    query: Optional[str] = None
    limit: Optional[int] = None
    layer: Optional[MapLayer] = None
    zoom: Optional[int] = None
    x: Optional[int] = None
    y: Optional[int] = None

    @classmethod
    def currentWeather(cls, lat: float, lon: float) -> "Endpoint":
        return cls(EndpointKind.CURRENT_WEATHER, lat=lat, lon=lon)

    @classmethod
    def forecast(cls, lat: float, lon: float) -> "Endpoint":
        return cls(EndpointKind.FORECAST, lat=lat, lon=lon)

    @classmethod
    def airQuality(cls, lat: float, lon: float) -> "Endpoint":
        return cls(EndpointKind.AIR_QUALITY, lat=lat, lon=lon)

    @classmethod
    def alerts(cls, lat: float, lon: float) -> "Endpoint":
        return cls(EndpointKind.ALERTS, lat=lat, lon=lon)

    @classmethod
    def geocoding(cls, query: str, limit: int = 5) -> "Endpoint":
        return cls(EndpointKind.GEOCODING, query=query, limit=limit)

    @classmethod
    def reverseGeocoding(cls, lat: float, lon: float, limit: int = 1) -> "Endpoint":
        return cls(EndpointKind.REVERSE_GEOCODING, lat=lat, lon=lon, limit=limit)

    @classmethod
    def weatherMap(cls, layer: MapLayer, zoom: int, x: int, y: int) -> "Endpoint":
        return cls(EndpointKind.WEATHER_MAP, layer=layer, zoom=zoom, x=x, y=y)

    @property
    def baseURL(self) -> str:
        match self.kind:
            case EndpointKind.GEOCODING | EndpointKind.REVERSE_GEOCODING:
                return GEOCODING_API_BASE
            case EndpointKind.WEATHER_MAP:
                return TILE_API_BASE
            case _:
                return DATA_API_BASE

    @property
    def isRequestable(self) -> bool:
        """Alerts are synthesized from current weather and only used as a cache key"""
        return self.kind is not EndpointKind.ALERTS

    @property
    def path(self) -> str:
        if self.kind is EndpointKind.WEATHER_MAP:
            return f"/{self.layer}/{self.zoom}/{self.x}/{self.y}.png"
        if not self.isRequestable:
            raise ValueError(f"{self.kind.name} endpoint has no remote path")
        return _PATHS[self.kind]

    @property
    def queryParams(self) -> Dict[str, QueryValue]:
        """Query parameters without the API key"""
        match self.kind:
            case EndpointKind.CURRENT_WEATHER | EndpointKind.FORECAST | EndpointKind.AIR_QUALITY:
                return {"lat": self.lat, "lon": self.lon, "units": "metric"}
            case EndpointKind.ALERTS:
                return {"lat": self.lat, "lon": self.lon}
            case EndpointKind.GEOCODING:
                return {"q": self.query, "limit": self.limit}
            case EndpointKind.REVERSE_GEOCODING:
                return {"lat": self.lat, "lon": self.lon, "limit": self.limit}
            case EndpointKind.WEATHER_MAP:
                return {}

    def url(self, apiKey: str) -> str:
        """Build full request URL with the API key appended

        Raises:
            httpx.InvalidURL: If the resulting URL is malformed
        """
        params: Dict[str, QueryValue] = dict(self.queryParams)
        params["appid"] = apiKey
        return str(httpx.URL(self.baseURL + self.path, params=params))


class EndpointKeyGenerator(KeyGenerator[Endpoint]):
    """Cache key generator for endpoints

    Every key starts with the endpoint kind prefix, so equal coordinates
    of different resources never collide:

        >>> EndpointKeyGenerator().generateKey(Endpoint.forecast(51.5, -0.12))
        'forecast-51.5--0.12'
    """

    def generateKey(self, obj: Endpoint) -> str:
        prefix = obj.kind.value
        match obj.kind:
            case EndpointKind.GEOCODING:
                return f"{prefix}-{obj.query}"
            case EndpointKind.WEATHER_MAP:
                return f"{prefix}-{obj.layer}-{obj.zoom}-{obj.x}-{obj.y}"
            case _:
                return f"{prefix}-{obj.lat}-{obj.lon}"
