from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from weatherdash.config.models import EndpointSettings
from weatherdash.exceptions import PartialDataWarning, UpstreamError
from weatherdash.models import (
    Coordinates,
    LocationDescriptor,
    ResolvedLocation,
    Units,
)
from weatherdash.providers.base import ProviderAdapter, ProviderData
from weatherdash.providers.views import OwmCurrentResponse, OwmForecastResponse
from weatherdash.shared.api_client import ApiClient
from weatherdash.shared.logging_mixin import LoggingMixin

CURRENT_FAILURE_MESSAGE = "Could not fetch current weather."
FORECAST_FAILURE_MESSAGE = "Could not fetch forecast data."


class OpenWeatherClient(ApiClient):
    """Client for the OpenWeatherMap current weather and forecast endpoints."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        endpoints: EndpointSettings | None = None,
    ):
        super().__init__(session)
        self._api_key = api_key
        self._base_url = (endpoints or EndpointSettings()).owm_base_url.rstrip("/")

    async def current(
        self,
        descriptor: LocationDescriptor,
        units: Units,
        *,
        failure_message: str = CURRENT_FAILURE_MESSAGE,
    ) -> OwmCurrentResponse:
        return await self._get_model(
            OwmCurrentResponse,
            f"{self._base_url}/weather",
            self._params(descriptor, units),
            failure_message=failure_message,
        )

    async def forecast(
        self, descriptor: LocationDescriptor, units: Units
    ) -> OwmForecastResponse:
        return await self._get_model(
            OwmForecastResponse,
            f"{self._base_url}/forecast",
            self._params(descriptor, units),
            failure_message=FORECAST_FAILURE_MESSAGE,
        )

    def _params(self, descriptor: LocationDescriptor, units: Units) -> dict[str, Any]:
        params: dict[str, Any]
        if isinstance(descriptor, Coordinates):
            params = {"lat": descriptor.lat, "lon": descriptor.lon}
        else:
            params = {"q": descriptor}
        params.update({"appid": self._api_key, "units": units.value})
        return params


def unwrap_mandatory(result: Any) -> Any:
    """Return a gathered result, re-raising it if the call failed."""
    if isinstance(result, BaseException):
        raise result
    return result


def settle_optional_forecast(
    result: OwmForecastResponse | BaseException,
    timezone: int,
    source: str,
) -> tuple[OwmForecastResponse, list[PartialDataWarning]]:
    """
    Degrade a failed forecast call to an empty forecast plus a warning.

    Only upstream failures degrade; any other exception propagates.
    """
    if isinstance(result, UpstreamError):
        warning = PartialDataWarning(
            f"Forecast unavailable: {result.message}", source=source
        )
        return OwmForecastResponse.empty(timezone=timezone), [warning]
    return unwrap_mandatory(result), []


class StandardAdapter(ProviderAdapter, LoggingMixin):
    """OpenWeatherMap only: current conditions and the 3-hourly forecast."""

    def __init__(self, client: OpenWeatherClient):
        self._client = client

    async def fetch_current_and_forecast(
        self, descriptor: LocationDescriptor, units: Units
    ) -> ProviderData:
        self.logger.info("Fetching standard weather for %s (%s)", descriptor, units)

        current_result, forecast_result = await asyncio.gather(
            self._client.current(descriptor, units),
            self._client.forecast(descriptor, units),
            return_exceptions=True,
        )

        current: OwmCurrentResponse = unwrap_mandatory(current_result)
        forecast, warnings = settle_optional_forecast(
            forecast_result, timezone=current.timezone, source="standard.forecast"
        )
        for warning in warnings:
            self.logger.warning("Could not fetch forecast data: %s", warning.message)

        location = ResolvedLocation(
            lat=current.coord.lat,
            lon=current.coord.lon,
            display_name=current.display_name,
        )
        return ProviderData(
            location=location,
            standard_current=current,
            standard_forecast=forecast,
            warnings=tuple(warnings),
        )
