"""
Pytest configuration and common fixtures for skycast tests.

This module provides shared fixtures for testing the cache, the location
provider and the weather orchestrator. All fixtures follow camelCase
naming convention.
"""

from typing import Any, List, Tuple
from unittest.mock import Mock

import pytest

from internal.location import LocationProvider
from lib.cache import DictCache
from lib.openweathermap import Endpoint, EndpointKeyGenerator
from tests.fixtures.service_mocks import FakeLocationBackend, createMockWeatherClient


class FakeClock:
    """Manually advanced clock for cache TTL tests"""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def fakeClock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def weatherCache(fakeClock) -> DictCache[Endpoint, Any]:
    """
    Provide weather cache with 15 minutes TTL and 50 entries.

    Returns:
        DictCache: Empty cache driven by fakeClock
    """
    return DictCache(keyGenerator=EndpointKeyGenerator(), defaultTtl=900, maxSize=50, clock=fakeClock)


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def mockWeatherClient() -> Mock:
    return createMockWeatherClient()


@pytest.fixture
def fakeLocationBackend() -> FakeLocationBackend:
    return FakeLocationBackend()


@pytest.fixture
def locationProvider(fakeLocationBackend, mockWeatherClient) -> LocationProvider:
    return LocationProvider(fakeLocationBackend, mockWeatherClient)


# ============================================================================
# Recording helpers
# ============================================================================


@pytest.fixture
def stateRecorder() -> "StateRecorder":
    return StateRecorder()


class StateRecorder:
    """Orchestrator listener remembering every published change"""

    def __init__(self):
        self.changes: List[Tuple[str, Any]] = []

    def __call__(self, name: str, value: Any) -> None:
        self.changes.append((name, value))

    def valuesOf(self, name: str) -> List[Any]:
        return [value for field, value in self.changes if field == name]
