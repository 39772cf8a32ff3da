from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pytest

from weatherdash.config import WeatherEnv
from weatherdash.providers.base import ProviderData
from weatherdash.providers.views import (
    OwmCurrentResponse,
    OwmForecastResponse,
    TomorrowForecastResponse,
    TomorrowRealtimeResponse,
)
from weatherdash.models import ResolvedLocation

# 2024-01-01T00:00:00Z
DAY0 = 1704067200
HOUR = 3600
NOW = DAY0 + 12 * HOUR
SUNRISE = DAY0 + 8 * HOUR
SUNSET = DAY0 + 17 * HOUR

OWM_BASE = "https://api.openweathermap.org/data/2.5"
GEO_BASE = "https://api.openweathermap.org/geo/1.0"
TOMORROW_BASE = "https://api.tomorrow.io/v4/weather"


# =============================================================================
# Fake aiohttp session
# =============================================================================


class FakeResponse:
    def __init__(self, status: int, payload: Any):
        self.status = status
        self._payload = payload

    async def json(self, content_type: str | None = "application/json") -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@dataclass
class Route:
    url: str
    payload: Any = None
    status: int = 200
    match: dict[str, Any] = field(default_factory=dict)
    delay: float = 0.0
    exc: Exception | None = None

    def matches(self, url: str, params: dict[str, Any]) -> bool:
        if url != self.url:
            return False
        return all(str(params.get(k)) == str(v) for k, v in self.match.items())


class _FakeRequest:
    def __init__(self, session: FakeSession, route: Route):
        self._session = session
        self._route = route

    async def __aenter__(self) -> FakeResponse:
        self._session.in_flight += 1
        self._session.max_in_flight = max(
            self._session.max_in_flight, self._session.in_flight
        )
        try:
            if self._route.delay:
                await asyncio.sleep(self._route.delay)
            else:
                await asyncio.sleep(0)
        finally:
            self._session.in_flight -= 1
        if self._route.exc is not None:
            raise self._route.exc
        return FakeResponse(self._route.status, self._route.payload)

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession; routes GETs to canned responses."""

    def __init__(self) -> None:
        self.routes: list[Route] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def add(self, url: str, payload: Any = None, **kwargs: Any) -> Route:
        route = Route(url=url, payload=payload, **kwargs)
        self.routes.insert(0, route)
        return route

    def get(self, url: str, params: dict[str, Any] | None = None) -> _FakeRequest:
        params = dict(params or {})
        self.calls.append((url, params))
        for route in self.routes:
            if route.matches(url, params):
                return _FakeRequest(self, route)
        raise AssertionError(f"Unexpected request: {url} {params}")

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [params for called, params in self.calls if called == url]

    async def close(self) -> None:
        self.closed = True


# =============================================================================
# Payload factories
# =============================================================================


def iso(unix: int) -> str:
    return datetime.fromtimestamp(unix, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def owm_current_payload(
    *,
    name: str = "Paris",
    country: str = "FR",
    lat: float = 48.85,
    lon: float = 2.35,
    icon: str = "01d",
    description: str = "clear sky",
    temp: float = 20.0,
    dt: int = NOW,
    sunrise: int = SUNRISE,
    sunset: int = SUNSET,
    tz: int = 0,
    uvi: float | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "coord": {"lat": lat, "lon": lon},
        "weather": [{"id": 800, "main": "Clear", "description": description, "icon": icon}],
        "main": {"temp": temp, "feels_like": temp - 1, "pressure": 1012, "humidity": 55},
        "wind": {"speed": 3.6, "deg": 200},
        "sys": {"country": country, "sunrise": sunrise, "sunset": sunset},
        "dt": dt,
        "name": name,
        "timezone": tz,
    }
    if uvi is not None:
        payload["uvi"] = uvi
    return payload


def owm_item(
    dt: int,
    *,
    temp: float = 10.0,
    icon: str = "04d",
    pop: float = 0.0,
    description: str = "broken clouds",
) -> dict[str, Any]:
    return {
        "dt": dt,
        "main": {"temp": temp, "temp_min": temp - 1, "temp_max": temp + 1},
        "weather": [{"description": description, "icon": icon}],
        "pop": pop,
    }


def owm_forecast_payload(
    items: list[dict[str, Any]] | None = None,
    *,
    count: int = 40,
    start: int = DAY0 + 15 * HOUR,
    tz: int = 0,
) -> dict[str, Any]:
    if items is None:
        items = [
            owm_item(start + i * 3 * HOUR, temp=5.0 + (i % 8))
            for i in range(count)
        ]
    return {"list": items, "city": {"timezone": tz}}


def tomorrow_realtime_payload(
    *,
    temperature: float = 21.5,
    weather_code: int = 4001,
    uv_index: float | None = 3.0,
) -> dict[str, Any]:
    return {
        "data": {
            "time": iso(NOW),
            "values": {
                "temperature": temperature,
                "temperatureApparent": temperature + 0.5,
                "humidity": 61,
                "windSpeed": 4.2,
                "windDirection": 95,
                "pressureSeaLevel": 1009.4,
                "uvIndex": uv_index,
                "weatherCode": weather_code,
            },
        },
        "location": {"lat": 48.85, "lon": 2.35},
    }


def tomorrow_entry(unix: int, **values: Any) -> dict[str, Any]:
    return {"time": iso(unix), "values": values}


def tomorrow_forecast_payload(
    *,
    hourly_count: int = 24,
    daily_count: int = 6,
    hourly_start: int = NOW,
    daily_start: int = DAY0 + 6 * HOUR,
) -> dict[str, Any]:
    return {
        "timelines": {
            "hourly": [
                tomorrow_entry(
                    hourly_start + i * HOUR,
                    temperature=15.0 + i,
                    precipitationProbability=10 * (i % 4),
                    weatherCode=1100,
                )
                for i in range(hourly_count)
            ],
            "daily": [
                tomorrow_entry(
                    daily_start + i * 24 * HOUR,
                    temperatureMin=3.0 + i,
                    temperatureMax=12.0 + i,
                    precipitationProbabilityAvg=20,
                    weatherCode=1001,
                )
                for i in range(daily_count)
            ],
        }
    }


def provider_data(
    *,
    current: dict[str, Any] | None = None,
    forecast: dict[str, Any] | None = None,
    realtime: dict[str, Any] | None = None,
    advanced_forecast: dict[str, Any] | None = None,
) -> ProviderData:
    owm_current = OwmCurrentResponse.model_validate(current or owm_current_payload())
    return ProviderData(
        location=ResolvedLocation(
            lat=owm_current.coord.lat,
            lon=owm_current.coord.lon,
            display_name=owm_current.display_name,
        ),
        standard_current=owm_current,
        standard_forecast=OwmForecastResponse.model_validate(
            forecast if forecast is not None else owm_forecast_payload()
        ),
        advanced_realtime=(
            TomorrowRealtimeResponse.model_validate(realtime) if realtime is not None else None
        ),
        advanced_forecast=(
            TomorrowForecastResponse.model_validate(advanced_forecast)
            if advanced_forecast is not None
            else None
        ),
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def env() -> WeatherEnv:
    return WeatherEnv(owm_api_key="owm-key", tomorrow_api_key="tomorrow-key")


@pytest.fixture
def standard_routes(session: FakeSession) -> FakeSession:
    session.add(f"{OWM_BASE}/weather", owm_current_payload())
    session.add(f"{OWM_BASE}/forecast", owm_forecast_payload())
    return session


@pytest.fixture
def advanced_routes(standard_routes: FakeSession) -> FakeSession:
    standard_routes.add(f"{TOMORROW_BASE}/realtime", tomorrow_realtime_payload())
    standard_routes.add(f"{TOMORROW_BASE}/forecast", tomorrow_forecast_payload())
    standard_routes.add(
        f"{GEO_BASE}/direct",
        [{"name": "Paris", "state": "Ile-de-France", "country": "FR", "lat": 48.85, "lon": 2.35}],
    )
    return standard_routes
