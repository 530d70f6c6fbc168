"""
OpenWeatherMap Async Client Library

This module provides an async client for the OpenWeatherMap data API
(current weather, forecast, air pollution), the geocoding API and the
weather map tile service, together with typed response models and the
weather error taxonomy.

Example usage:
    from lib.openweathermap import OpenWeatherMapClient, MapLayer

    client = OpenWeatherMapClient(apiKey="your_api_key")

    weather = await client.fetchCurrentWeather(51.5, -0.12)
    print(f"Temperature: {weather.main.temp}°C in {weather.name}")

    places = await client.fetchGeocodingResults("Paris")
    tileUrl = client.getWeatherMapURL(MapLayer.CLOUDS, zoom=2, x=2, y=1)
"""

from .client import OpenWeatherMapClient
from .endpoints import Endpoint, EndpointKeyGenerator, EndpointKind, MapLayer
from .errors import (
    APIError,
    ErrorKind,
    InvalidDataError,
    InvalidResponseError,
    InvalidURLError,
    LocationPermissionDeniedError,
    LocationServicesDisabledError,
    NetworkError,
    NoLocationFoundError,
    UnknownWeatherError,
    WeatherError,
)
from .models import (
    AirQualityComponents,
    AirQualityData,
    AirQualityMain,
    AirQualityResponse,
    AlertsResponse,
    City,
    Clouds,
    Coordinates,
    CurrentWeather,
    ForecastItem,
    ForecastResponse,
    GeocodingResult,
    MainWeatherData,
    Sys,
    WeatherAlert,
    WeatherCondition,
    Wind,
)

__all__ = [
    # Client
    "OpenWeatherMapClient",
    # Endpoints
    "Endpoint",
    "EndpointKind",
    "EndpointKeyGenerator",
    "MapLayer",
    # Errors
    "ErrorKind",
    "WeatherError",
    "InvalidURLError",
    "InvalidResponseError",
    "InvalidDataError",
    "NetworkError",
    "APIError",
    "NoLocationFoundError",
    "LocationServicesDisabledError",
    "LocationPermissionDeniedError",
    "UnknownWeatherError",
    # Models
    "Coordinates",
    "WeatherCondition",
    "MainWeatherData",
    "Wind",
    "Clouds",
    "Sys",
    "City",
    "CurrentWeather",
    "ForecastItem",
    "ForecastResponse",
    "AirQualityMain",
    "AirQualityComponents",
    "AirQualityData",
    "AirQualityResponse",
    "WeatherAlert",
    "AlertsResponse",
    "GeocodingResult",
]
