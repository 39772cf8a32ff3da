from __future__ import annotations

import asyncio

import aiohttp

from weatherdash.config.models import EndpointSettings
from weatherdash.geo.service import GeoResolver
from weatherdash.models import Coordinates, LocationDescriptor, ResolvedLocation, Units
from weatherdash.providers.base import ProviderAdapter, ProviderData
from weatherdash.providers.standard import (
    OpenWeatherClient,
    settle_optional_forecast,
    unwrap_mandatory,
)
from weatherdash.providers.views import (
    OwmCurrentResponse,
    TomorrowForecastResponse,
    TomorrowRealtimeResponse,
)
from weatherdash.shared.api_client import ApiClient
from weatherdash.shared.logging_mixin import LoggingMixin

ADVANCED_FAILURE_MESSAGE = "Failed to fetch Tomorrow.io weather data."
VISUAL_LAYER_FAILURE_MESSAGE = "Could not fetch OpenWeatherMap data for visual layer."
FORECAST_TIMESTEPS = "1h,1d"


class TomorrowClient(ApiClient):
    """Client for the Tomorrow.io realtime and forecast endpoints."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        endpoints: EndpointSettings | None = None,
    ):
        super().__init__(session)
        self._api_key = api_key
        self._base_url = (endpoints or EndpointSettings()).tomorrow_base_url.rstrip("/")

    async def realtime(
        self, coordinates: Coordinates, units: Units
    ) -> TomorrowRealtimeResponse:
        return await self._get_model(
            TomorrowRealtimeResponse,
            f"{self._base_url}/realtime",
            self._params(coordinates, units),
            failure_message=ADVANCED_FAILURE_MESSAGE,
        )

    async def forecast(
        self, coordinates: Coordinates, units: Units
    ) -> TomorrowForecastResponse:
        params = self._params(coordinates, units)
        params["timesteps"] = FORECAST_TIMESTEPS
        return await self._get_model(
            TomorrowForecastResponse,
            f"{self._base_url}/forecast",
            params,
            failure_message=ADVANCED_FAILURE_MESSAGE,
        )

    def _params(self, coordinates: Coordinates, units: Units) -> dict[str, str]:
        return {
            "location": f"{coordinates.lat},{coordinates.lon}",
            "apikey": self._api_key,
            "units": units.value,
        }


class AdvancedAdapter(ProviderAdapter, LoggingMixin):
    """
    Tomorrow.io numbers with OpenWeatherMap iconography.

    Tomorrow.io has no free-text search and no icon set usable by the icon
    mapper, so free text is geocoded first and the OpenWeatherMap current and
    forecast payloads for the same coordinates are fetched alongside.
    """

    def __init__(
        self,
        tomorrow: TomorrowClient,
        openweather: OpenWeatherClient,
        geo_resolver: GeoResolver,
    ):
        self._tomorrow = tomorrow
        self._openweather = openweather
        self._geo_resolver = geo_resolver

    async def fetch_current_and_forecast(
        self, descriptor: LocationDescriptor, units: Units
    ) -> ProviderData:
        resolved = await self._geo_resolver.resolve(descriptor)
        coordinates = resolved.coordinates
        self.logger.info(
            "Fetching advanced weather for %s,%s (%s)",
            coordinates.lat,
            coordinates.lon,
            units,
        )

        (
            realtime_result,
            forecast_result,
            owm_current_result,
            owm_forecast_result,
        ) = await asyncio.gather(
            self._tomorrow.realtime(coordinates, units),
            self._tomorrow.forecast(coordinates, units),
            self._openweather.current(
                coordinates, units, failure_message=VISUAL_LAYER_FAILURE_MESSAGE
            ),
            self._openweather.forecast(coordinates, units),
            return_exceptions=True,
        )

        realtime: TomorrowRealtimeResponse = unwrap_mandatory(realtime_result)
        forecast: TomorrowForecastResponse = unwrap_mandatory(forecast_result)
        owm_current: OwmCurrentResponse = unwrap_mandatory(owm_current_result)
        owm_forecast, warnings = settle_optional_forecast(
            owm_forecast_result,
            timezone=owm_current.timezone,
            source="advanced.icon_forecast",
        )
        for warning in warnings:
            self.logger.warning(
                "Could not fetch OWM forecast data for icons: %s", warning.message
            )

        location = ResolvedLocation(
            lat=owm_current.coord.lat,
            lon=owm_current.coord.lon,
            display_name=owm_current.display_name or resolved.display_name,
        )
        return ProviderData(
            location=location,
            standard_current=owm_current,
            standard_forecast=owm_forecast,
            advanced_realtime=realtime,
            advanced_forecast=forecast,
            warnings=tuple(warnings),
        )
