from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from weatherdash.exceptions import PartialDataWarning
from weatherdash.models import LocationDescriptor, ResolvedLocation, Units
from weatherdash.providers.views import (
    OwmCurrentResponse,
    OwmForecastResponse,
    TomorrowForecastResponse,
    TomorrowRealtimeResponse,
)


class ProviderData(BaseModel):
    """Validated upstream payloads of one fetch cycle plus the resolved location."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    location: ResolvedLocation
    standard_current: OwmCurrentResponse
    standard_forecast: OwmForecastResponse
    advanced_realtime: TomorrowRealtimeResponse | None = None
    advanced_forecast: TomorrowForecastResponse | None = None
    warnings: tuple[PartialDataWarning, ...] = ()


class ProviderAdapter(ABC):
    """Fetches everything one provider needs to build a view model."""

    @abstractmethod
    async def fetch_current_and_forecast(
        self, descriptor: LocationDescriptor, units: Units
    ) -> ProviderData:
        """
        Raises:
            NotFoundError: if a free-text query cannot be geocoded
            UpstreamError: if a mandatory upstream call fails
        """
        ...
