"""
Data models for OpenWeatherMap API client

This module defines immutable dataclasses for API responses of the
OpenWeatherMap API v2.5 (weather, forecast, air_pollution) and the
geocoding API v1.0. Every model has a ``fromDict`` constructor which
raises KeyError/TypeError/ValueError on malformed payloads; the client
turns those into InvalidDataError.

Equality follows each record's primary timestamp plus identifying fields,
so two payloads fetched at different times compare unequal even when the
remaining fields match.
"""

import datetime
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

_T = TypeVar("_T")


def _optionalInt(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _optionalFloat(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _tupleOf(items: List[Dict[str, Any]], factory: Callable[[Dict[str, Any]], _T]) -> Tuple[_T, ...]:
    if not isinstance(items, list):
        raise TypeError(f"Expected list, got {type(items).__name__}")
    return tuple(factory(item) for item in items)


def _toDatetime(timestamp: float) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)


# Common Components


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Geographic coordinates as returned by the API"""

    lon: float
    lat: float

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "Coordinates":
        return cls(lon=float(data["lon"]), lat=float(data["lat"]))


@dataclass(frozen=True, slots=True)
class WeatherCondition:
    """Weather condition"""

    # https://openweathermap.org/weather-conditions#Weather-Condition-Codes-2
    id: int  # Weather condition ID
    main: str  # Weather group (Rain, Snow, Clear, etc.)
    description: str  # Weather description
    icon: str  # Icon ID

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "WeatherCondition":
        return cls(
            id=int(data["id"]),
            main=str(data["main"]),
            description=str(data["description"]),
            icon=str(data["icon"]),
        )


@dataclass(frozen=True, slots=True)
class MainWeatherData:
    temp: float  # Temperature (Celsius)
    feels_like: float  # Feels like temperature (Celsius)
    temp_min: float  # Min temperature (Celsius)
    temp_max: float  # Max temperature (Celsius)
    pressure: int  # Atmospheric pressure (hPa)
    humidity: int  # Humidity percentage
    sea_level: Optional[int] = None  # Pressure at sea level (hPa)
    grnd_level: Optional[int] = None  # Pressure at ground level (hPa)

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "MainWeatherData":
        return cls(
            temp=float(data["temp"]),
            feels_like=float(data["feels_like"]),
            temp_min=float(data["temp_min"]),
            temp_max=float(data["temp_max"]),
            pressure=int(data["pressure"]),
            humidity=int(data["humidity"]),
            sea_level=_optionalInt(data.get("sea_level")),
            grnd_level=_optionalInt(data.get("grnd_level")),
        )


@dataclass(frozen=True, slots=True)
class Wind:
    speed: float  # Wind speed (m/s)
    deg: int  # Wind direction (degrees)
    gust: Optional[float] = None  # Wind gust (m/s)

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "Wind":
        return cls(speed=float(data["speed"]), deg=int(data["deg"]), gust=_optionalFloat(data.get("gust")))


@dataclass(frozen=True, slots=True)
class Clouds:
    all: int  # Cloudiness percentage

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "Clouds":
        return cls(all=int(data["all"]))


@dataclass(frozen=True, slots=True)
class Sys:
    country: str  # Country code (e.g., "GB")
    sunrise: float  # Sunrise time (Unix timestamp)
    sunset: float  # Sunset time (Unix timestamp)
    type: Optional[int] = None
    id: Optional[int] = None

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "Sys":
        return cls(
            country=str(data["country"]),
            sunrise=float(data["sunrise"]),
            sunset=float(data["sunset"]),
            type=_optionalInt(data.get("type")),
            id=_optionalInt(data.get("id")),
        )


@dataclass(frozen=True, slots=True)
class City:
    id: int
    name: str
    coord: Coordinates
    country: str
    population: int
    timezone: int  # Shift in seconds from UTC
    sunrise: float
    sunset: float

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "City":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            coord=Coordinates.fromDict(data["coord"]),
            country=str(data["country"]),
            population=int(data["population"]),
            timezone=int(data["timezone"]),
            sunrise=float(data["sunrise"]),
            sunset=float(data["sunset"]),
        )


# Current Weather


@dataclass(frozen=True, slots=True)
class CurrentWeather:
    """Current weather data (/data/2.5/weather)"""

    coord: Coordinates = field(compare=False)
    weather: Tuple[WeatherCondition, ...]
    base: str = field(compare=False)
    main: MainWeatherData
    visibility: int = field(compare=False)  # Visibility (meters) max 10Km
    wind: Wind = field(compare=False)
    clouds: Clouds = field(compare=False)
    dt: float  # Unix timestamp
    sys: Sys = field(compare=False)
    timezone: int = field(compare=False)  # Shift in seconds from UTC
    name: str  # City name

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "CurrentWeather":
        return cls(
            coord=Coordinates.fromDict(data["coord"]),
            weather=_tupleOf(data["weather"], WeatherCondition.fromDict),
            base=str(data["base"]),
            main=MainWeatherData.fromDict(data["main"]),
            visibility=int(data["visibility"]),
            wind=Wind.fromDict(data["wind"]),
            clouds=Clouds.fromDict(data["clouds"]),
            dt=float(data["dt"]),
            sys=Sys.fromDict(data["sys"]),
            timezone=int(data["timezone"]),
            name=str(data["name"]),
        )

    @property
    def date(self) -> datetime.datetime:
        return _toDatetime(self.dt)

    @property
    def iconURL(self) -> Optional[str]:
        if not self.weather:
            return None
        return ICON_URL_TEMPLATE.format(icon=self.weather[0].icon)


# 5-Day Forecast


@dataclass(frozen=True, slots=True)
class ForecastItem:
    """Single 3-hour forecast step"""

    dt: float  # Unix timestamp
    main: MainWeatherData
    weather: Tuple[WeatherCondition, ...]
    clouds: Clouds = field(compare=False)
    wind: Wind = field(compare=False)
    visibility: int = field(compare=False)
    pop: float = field(compare=False)  # Probability of precipitation (0-1)
    dt_txt: str  # Forecast time, "YYYY-MM-DD HH:MM:SS"

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "ForecastItem":
        return cls(
            dt=float(data["dt"]),
            main=MainWeatherData.fromDict(data["main"]),
            weather=_tupleOf(data["weather"], WeatherCondition.fromDict),
            clouds=Clouds.fromDict(data["clouds"]),
            wind=Wind.fromDict(data["wind"]),
            visibility=int(data["visibility"]),
            pop=float(data["pop"]),
            dt_txt=str(data["dt_txt"]),
        )

    @property
    def date(self) -> datetime.datetime:
        return _toDatetime(self.dt)

    @property
    def iconURL(self) -> Optional[str]:
        if not self.weather:
            return None
        return ICON_URL_TEMPLATE.format(icon=self.weather[0].icon)


@dataclass(frozen=True, slots=True)
class ForecastResponse:
    """Forecast response (/data/2.5/forecast), ``items`` is the API ``list`` field"""

    items: Tuple[ForecastItem, ...]
    city: City

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "ForecastResponse":
        return cls(
            items=_tupleOf(data["list"], ForecastItem.fromDict),
            city=City.fromDict(data["city"]),
        )


# Air Quality


@dataclass(frozen=True, slots=True)
class AirQualityMain:
    aqi: int  # Air Quality Index, 1 (Good) .. 5 (Very Poor)

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "AirQualityMain":
        return cls(aqi=int(data["aqi"]))


@dataclass(frozen=True, slots=True)
class AirQualityComponents:
    """Pollutant concentrations, μg/m³"""

    co: float
    no: float
    no2: float
    o3: float
    so2: float
    pm2_5: float
    pm10: float
    nh3: float

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "AirQualityComponents":
        return cls(
            co=float(data["co"]),
            no=float(data["no"]),
            no2=float(data["no2"]),
            o3=float(data["o3"]),
            so2=float(data["so2"]),
            pm2_5=float(data["pm2_5"]),
            pm10=float(data["pm10"]),
            nh3=float(data["nh3"]),
        )


_AQI_LEVELS: Dict[int, Tuple[str, str]] = {
    1: ("Good", "green"),
    2: ("Fair", "blue"),
    3: ("Moderate", "yellow"),
    4: ("Poor", "orange"),
    5: ("Very Poor", "red"),
}


@dataclass(frozen=True, slots=True)
class AirQualityData:
    main: AirQualityMain
    components: AirQualityComponents
    dt: float  # Unix timestamp

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "AirQualityData":
        return cls(
            main=AirQualityMain.fromDict(data["main"]),
            components=AirQualityComponents.fromDict(data["components"]),
            dt=float(data["dt"]),
        )

    @property
    def date(self) -> datetime.datetime:
        return _toDatetime(self.dt)

    @property
    def qualityLevel(self) -> str:
        return _AQI_LEVELS.get(self.main.aqi, ("Unknown", "gray"))[0]

    @property
    def qualityColor(self) -> str:
        return _AQI_LEVELS.get(self.main.aqi, ("Unknown", "gray"))[1]


@dataclass(frozen=True, slots=True)
class AirQualityResponse:
    """Air pollution response (/data/2.5/air_pollution), ``items`` is the API ``list`` field"""

    items: Tuple[AirQualityData, ...]

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "AirQualityResponse":
        return cls(items=_tupleOf(data["list"], AirQualityData.fromDict))


# Weather Alerts


@dataclass(frozen=True, slots=True)
class WeatherAlert:
    sender_name: str
    event: str
    start: float  # Unix timestamp
    end: float  # Unix timestamp
    description: str = field(compare=False)
    tags: Tuple[str, ...] = field(compare=False)

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "WeatherAlert":
        return cls(
            sender_name=str(data["sender_name"]),
            event=str(data["event"]),
            start=float(data["start"]),
            end=float(data["end"]),
            description=str(data["description"]),
            tags=tuple(str(tag) for tag in data["tags"]),
        )

    @property
    def startDate(self) -> datetime.datetime:
        return _toDatetime(self.start)

    @property
    def endDate(self) -> datetime.datetime:
        return _toDatetime(self.end)


@dataclass(frozen=True, slots=True)
class AlertsResponse:
    alerts: Optional[Tuple[WeatherAlert, ...]]
    city: City

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "AlertsResponse":
        alerts = data.get("alerts")
        return cls(
            alerts=_tupleOf(alerts, WeatherAlert.fromDict) if alerts is not None else None,
            city=City.fromDict(data["city"]),
        )


# Geocoding


@dataclass(frozen=True, slots=True)
class GeocodingResult:
    """Result from geocoding API"""

    name: str  # City name (English)
    lat: float  # Latitude
    lon: float  # Longitude
    country: str  # Country code (e.g., "FR")
    state: Optional[str] = None  # State/region name (if available)

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "GeocodingResult":
        state = data.get("state")
        return cls(
            name=str(data["name"]),
            lat=float(data["lat"]),
            lon=float(data["lon"]),
            country=str(data["country"]),
            state=str(state) if state is not None else None,
        )

    @property
    def displayName(self) -> str:
        if self.state is not None:
            return f"{self.name}, {self.state}, {self.country}"
        return f"{self.name}, {self.country}"


def toDict(model: Any) -> Dict[str, Any]:
    """Convert any model from this module into plain JSON-friendly dict"""
    return asdict(model)
