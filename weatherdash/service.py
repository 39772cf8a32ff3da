from __future__ import annotations

import itertools
from types import TracebackType

import aiohttp
from pydantic import BaseModel, ConfigDict

from weatherdash.config.env import WeatherEnv
from weatherdash.config.models import DashboardConfig
from weatherdash.exceptions import WeatherDashError
from weatherdash.geo.service import GeoResolver
from weatherdash.models import (
    LocationDescriptor,
    UnifiedViewModel,
    Units,
    WeatherProvider,
)
from weatherdash.providers import (
    AdvancedAdapter,
    OpenWeatherClient,
    ProviderAdapter,
    StandardAdapter,
    TomorrowClient,
)
from weatherdash.shared.logging_mixin import LoggingMixin
from weatherdash.weather.reconciler import build_view_model


class CycleOutcome(BaseModel):
    """Tagged result of one fetch cycle."""

    model_config = ConfigDict(frozen=True)

    cycle_id: int
    view_model: UnifiedViewModel | None = None
    error: str | None = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.view_model is not None


class WeatherDashboard(LoggingMixin):
    """
    Owns the single "current view model" slot.

    Every fetch takes a new cycle id. Only the most recently started cycle may
    commit its result; a cycle that settles after a newer one was started is
    returned flagged as stale and leaves the slot untouched.
    """

    def __init__(
        self,
        env: WeatherEnv,
        config: DashboardConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self._env = env
        self._config = config or DashboardConfig()
        self._session = session
        self._owns_session = session is None

        self.provider: WeatherProvider = self._config.defaults.provider
        self.units: Units = self._config.defaults.units

        self._cycle_ids = itertools.count(1)
        self._latest_cycle_id = 0
        self._view_model: UnifiedViewModel | None = None
        self._error: str | None = None
        self._last_descriptor: LocationDescriptor | None = None

    async def __aenter__(self) -> WeatherDashboard:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def view_model(self) -> UnifiedViewModel | None:
        return self._view_model

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def last_descriptor(self) -> LocationDescriptor | None:
        return self._last_descriptor

    async def fetch(
        self,
        descriptor: LocationDescriptor,
        provider: WeatherProvider | None = None,
        units: Units | None = None,
    ) -> CycleOutcome:
        """Fetch and build the view model for (descriptor, provider, units)."""
        if isinstance(descriptor, str):
            descriptor = descriptor.strip()
            if not descriptor:
                raise ValueError("Location query must not be empty")

        provider = provider or self.provider
        units = units or self.units

        # Raises on missing configuration; no cycle is started then
        adapter = self._adapter_for(provider)

        cycle_id = next(self._cycle_ids)
        self._latest_cycle_id = cycle_id
        self.logger.debug("Cycle %s started for %s (%s, %s)", cycle_id, descriptor, provider, units)

        try:
            data = await adapter.fetch_current_and_forecast(descriptor, units)
            view_model = build_view_model(data, provider, units)
        except WeatherDashError as e:
            return self._commit_failure(cycle_id, str(e) or "An unknown error occurred.")

        return self._commit_success(cycle_id, descriptor, view_model)

    async def switch_provider(self, provider: WeatherProvider) -> CycleOutcome | None:
        """Change the active provider and refresh the last location, if any."""
        self.provider = provider
        return await self._refresh()

    async def switch_units(self, units: Units) -> CycleOutcome | None:
        """Change the units and refresh the last location, if any."""
        self.units = units
        return await self._refresh()

    async def suggest_cities(self, query: str) -> list[str]:
        return await self._geo_resolver().suggest(query)

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _refresh(self) -> CycleOutcome | None:
        if self._last_descriptor is None:
            return None
        return await self.fetch(self._last_descriptor)

    def _commit_success(
        self,
        cycle_id: int,
        descriptor: LocationDescriptor,
        view_model: UnifiedViewModel,
    ) -> CycleOutcome:
        if self._is_stale(cycle_id):
            return CycleOutcome(cycle_id=cycle_id, view_model=view_model, stale=True)

        self._view_model = view_model
        self._error = None
        self._last_descriptor = descriptor
        self.logger.info("Cycle %s committed view model for %s", cycle_id, view_model.location.display_name)
        return CycleOutcome(cycle_id=cycle_id, view_model=view_model)

    def _commit_failure(self, cycle_id: int, message: str) -> CycleOutcome:
        if self._is_stale(cycle_id):
            return CycleOutcome(cycle_id=cycle_id, error=message, stale=True)

        self.logger.error("Cycle %s failed: %s", cycle_id, message)
        self._view_model = None
        self._error = message
        return CycleOutcome(cycle_id=cycle_id, error=message)

    def _is_stale(self, cycle_id: int) -> bool:
        if cycle_id == self._latest_cycle_id:
            return False
        self.logger.debug(
            "Discarding stale cycle %s (latest is %s)", cycle_id, self._latest_cycle_id
        )
        return True

    def _adapter_for(self, provider: WeatherProvider) -> ProviderAdapter:
        openweather = OpenWeatherClient(
            self._http_session(), self._env.owm_api_key, self._config.endpoints
        )
        if provider == WeatherProvider.STANDARD:
            return StandardAdapter(openweather)

        if not self._env.tomorrow_api_key:
            raise RuntimeError(
                "Missing required environment variable: TOMORROW_API_KEY "
                "(Tomorrow.io API key for the advanced provider)"
            )
        tomorrow = TomorrowClient(
            self._http_session(), self._env.tomorrow_api_key, self._config.endpoints
        )
        return AdvancedAdapter(tomorrow, openweather, self._geo_resolver())

    def _geo_resolver(self) -> GeoResolver:
        return GeoResolver(
            self._http_session(), self._env.owm_api_key, self._config.endpoints
        )

    def _http_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._config.http.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session
