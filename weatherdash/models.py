from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from weatherdash.exceptions import PartialDataWarning


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class WeatherProvider(StrEnum):
    """
    Weather providers the dashboard can render.

    - standard: OpenWeatherMap, numbers and iconography.
    - advanced: Tomorrow.io numbers, iconography borrowed from OpenWeatherMap.
    """

    STANDARD = "standard"
    ADVANCED = "advanced"


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


LocationDescriptor = str | Coordinates


class ResolvedLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float
    display_name: str | None = None

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lon=self.lon)


# =============================================================================
# Intermediate representation (provider-agnostic)
# =============================================================================


class CurrentConditions(BaseModel):
    """Current conditions, values in the units the fetch was made with."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    humidity_pct: float
    wind_speed: float
    wind_direction_deg: float
    pressure_hpa: float
    uv_index: float | None = None
    weather_code: str
    description: str
    sunrise_unix: int
    sunset_unix: int
    timezone_offset_sec: int
    observed_at_unix: int


class ForecastSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp_unix: int
    temperature: float
    weather_code: str | None = None
    precipitation_probability_pct: float | None = None
    is_daily: bool = False
    temp_min: float | None = None
    temp_max: float | None = None
    description: str | None = None


# =============================================================================
# Presentation references
# =============================================================================


class IconRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    url: str
    accuweather_id: int | None = None
    is_placeholder: bool = False


class ThemeFamily(StrEnum):
    DAWN = "dawn"
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    CLEAR = "clear"
    FEW_CLOUDS = "few-clouds"
    SCATTERED_CLOUDS = "scattered-clouds"
    BROKEN_CLOUDS = "broken-clouds"
    RAIN = "rain"
    STORM = "storm"
    SNOW = "snow"
    FOG = "fog"


class DayPeriod(StrEnum):
    DAY = "day"
    NIGHT = "night"


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: ThemeFamily
    period: DayPeriod | None = None
    dark: bool = False

    @property
    def tag(self) -> str:
        if self.period is None:
            return self.family.value
        return f"{self.family.value}-{self.period.value}"

    @property
    def css_class(self) -> str:
        css = f"theme-{self.tag}"
        return f"{css} dark" if self.dark else css


# =============================================================================
# View model
# =============================================================================


class UnifiedViewModel(BaseModel):
    """Fully reconciled data consumed by presentation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    location: ResolvedLocation
    current: CurrentConditions
    hourly: tuple[ForecastSlot, ...] = ()
    daily: tuple[ForecastSlot, ...] = ()
    provider: WeatherProvider
    units: Units
    theme: Theme
    warnings: tuple[PartialDataWarning, ...] = ()
