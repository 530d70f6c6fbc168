"""
Coordinate value type and projection math
"""

import math
from dataclasses import dataclass
from typing import Tuple

EARTH_RADIUS_METERS = 6371000.0
# Web Mercator is undefined at the poles
MAX_MERCATOR_LATITUDE = 85.05


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in degrees"""

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude}, {self.longitude}"


def distanceMeters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance between two coordinates in meters"""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dLat = lat2 - lat1
    dLon = math.radians(b.longitude - a.longitude)

    h = math.sin(dLat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dLon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def clampLatitude(latitude: float) -> float:
    return max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, latitude))


def tileForCoordinate(coordinate: Coordinate, zoom: int) -> Tuple[int, int]:
    """
    Slippy-map tile (x, y) containing the coordinate at the given zoom

    Latitude is clamped to +-85.05 degrees before projecting, dood!

    Args:
        coordinate: Point to project
        zoom: Zoom level, 2**zoom tiles per axis

    Returns:
        Tuple of (x, y) tile indices
    """
    n = 2**zoom
    latRad = math.radians(clampLatitude(coordinate.latitude))

    x = math.floor((coordinate.longitude + 180.0) / 360.0 * n)
    y = math.floor((1.0 - math.log(math.tan(latRad) + 1.0 / math.cos(latRad)) / math.pi) / 2.0 * n)
    return x, y
