"""
Sample OpenWeatherMap API payloads for tests.

Each factory returns a fresh dict shaped like the real API response, so
tests can tweak fields without affecting each other.
"""

from typing import Any, Dict, List, Optional


def createCurrentWeatherPayload(
    lat: float = 51.5,
    lon: float = -0.12,
    name: str = "London",
    dt: int = 1697644800,
    temp: float = 12.5,
) -> Dict[str, Any]:
    """Create /data/2.5/weather response"""
    return {
        "coord": {"lon": lon, "lat": lat},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "base": "stations",
        "main": {
            "temp": temp,
            "feels_like": temp - 1.2,
            "temp_min": temp - 2.0,
            "temp_max": temp + 1.5,
            "pressure": 1012,
            "humidity": 81,
            "sea_level": 1012,
            "grnd_level": 1008,
        },
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 240, "gust": 7.2},
        "clouds": {"all": 75},
        "dt": dt,
        "sys": {"type": 2, "id": 2075535, "country": "GB", "sunrise": 1697610000, "sunset": 1697648000},
        "timezone": 3600,
        "id": 2643743,
        "name": name,
        "cod": 200,
    }


def createForecastItemPayload(dt: int = 1697652000, dtTxt: str = "2023-10-18 18:00:00") -> Dict[str, Any]:
    return {
        "dt": dt,
        "main": {
            "temp": 11.3,
            "feels_like": 10.4,
            "temp_min": 10.9,
            "temp_max": 11.3,
            "pressure": 1013,
            "humidity": 84,
        },
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10n"}],
        "clouds": {"all": 90},
        "wind": {"speed": 3.9, "deg": 230},
        "visibility": 10000,
        "pop": 0.42,
        "dt_txt": dtTxt,
    }


def createCityPayload(name: str = "London", lat: float = 51.5, lon: float = -0.12) -> Dict[str, Any]:
    return {
        "id": 2643743,
        "name": name,
        "coord": {"lat": lat, "lon": lon},
        "country": "GB",
        "population": 1000000,
        "timezone": 3600,
        "sunrise": 1697610000,
        "sunset": 1697648000,
    }


def createForecastPayload(
    name: str = "London", lat: float = 51.5, lon: float = -0.12, items: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """Create /data/2.5/forecast response"""
    if items is None:
        items = [
            createForecastItemPayload(),
            createForecastItemPayload(dt=1697662800, dtTxt="2023-10-18 21:00:00"),
        ]
    return {"cod": "200", "message": 0, "cnt": len(items), "list": items, "city": createCityPayload(name, lat, lon)}


def createAirQualityPayload(lat: float = 51.5, lon: float = -0.12, aqi: int = 2) -> Dict[str, Any]:
    """Create /data/2.5/air_pollution response"""
    return {
        "coord": {"lon": lon, "lat": lat},
        "list": [
            {
                "main": {"aqi": aqi},
                "components": {
                    "co": 201.94,
                    "no": 0.02,
                    "no2": 0.77,
                    "o3": 68.66,
                    "so2": 0.64,
                    "pm2_5": 0.5,
                    "pm10": 0.54,
                    "nh3": 0.12,
                },
                "dt": 1697644800,
            }
        ],
    }


def createGeocodingPayload() -> List[Dict[str, Any]]:
    """Create /geo/1.0/direct response"""
    return [
        {
            "name": "Paris",
            "local_names": {"fr": "Paris", "en": "Paris"},
            "lat": 48.8588897,
            "lon": 2.3200410,
            "country": "FR",
            "state": "Ile-de-France",
        },
        {
            "name": "Paris",
            "lat": 33.6617962,
            "lon": -95.5555130,
            "country": "US",
            "state": "Texas",
        },
    ]
