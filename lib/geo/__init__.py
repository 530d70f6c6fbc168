"""
Geographic helpers: coordinates, great-circle distance and slippy-map tiles.
"""

from .coordinates import (
    EARTH_RADIUS_METERS,
    MAX_MERCATOR_LATITUDE,
    Coordinate,
    clampLatitude,
    distanceMeters,
    tileForCoordinate,
)

__all__ = [
    "Coordinate",
    "EARTH_RADIUS_METERS",
    "MAX_MERCATOR_LATITUDE",
    "clampLatitude",
    "distanceMeters",
    "tileForCoordinate",
]
