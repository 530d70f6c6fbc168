"""
Test fixtures package for skycast tests.

This package organizes test fixtures into logical modules:
- weather_payloads: Sample OpenWeatherMap JSON payloads
- service_mocks: Fake location backend and mock API client

All fixtures are also available through the main conftest.py file.
"""

from tests.fixtures.service_mocks import (
    FakeLocationBackend,
    createMockWeatherClient,
)
from tests.fixtures.weather_payloads import (
    createAirQualityPayload,
    createCityPayload,
    createCurrentWeatherPayload,
    createForecastItemPayload,
    createForecastPayload,
    createGeocodingPayload,
)

__all__ = [
    # Service mocks
    "FakeLocationBackend",
    "createMockWeatherClient",
    # Payloads
    "createAirQualityPayload",
    "createCityPayload",
    "createCurrentWeatherPayload",
    "createForecastItemPayload",
    "createForecastPayload",
    "createGeocodingPayload",
]
