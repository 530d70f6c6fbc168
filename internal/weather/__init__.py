"""
Weather orchestration: fans location queries out to the weather API and
exposes per-resource loading states.
"""

from .orchestrator import (
    DEFAULT_MAP_ZOOM,
    INITIAL_LOCATION_NAME,
    LOCATION_UNAVAILABLE,
    STATE_FIELDS,
    StateListener,
    WeatherOrchestrator,
)

__all__ = [
    "DEFAULT_MAP_ZOOM",
    "INITIAL_LOCATION_NAME",
    "LOCATION_UNAVAILABLE",
    "STATE_FIELDS",
    "StateListener",
    "WeatherOrchestrator",
]
