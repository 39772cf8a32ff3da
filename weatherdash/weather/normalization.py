"""Conversion of the validated upstream payloads into the shared IR."""

from weatherdash.models import CurrentConditions, ForecastSlot
from weatherdash.providers.views import (
    OwmCurrentResponse,
    OwmForecastItem,
    TomorrowRealtimeValues,
    TomorrowTimelineEntry,
)
from weatherdash.weather.formatting import parse_iso_timestamp


def normalize_standard_current(owm: OwmCurrentResponse) -> CurrentConditions:
    """Transform the OpenWeatherMap current payload to the IR."""
    return CurrentConditions(
        temperature=owm.main.temp,
        feels_like=owm.main.feels_like,
        humidity_pct=owm.main.humidity,
        wind_speed=owm.wind.speed,
        wind_direction_deg=owm.wind.deg,
        pressure_hpa=owm.main.pressure,
        uv_index=owm.uvi,
        **_standard_visuals(owm),
    )


def normalize_advanced_current(
    values: TomorrowRealtimeValues, owm: OwmCurrentResponse
) -> CurrentConditions:
    """
    Numbers from Tomorrow.io, iconography and solar times from OpenWeatherMap.
    """
    return CurrentConditions(
        temperature=values.temperature,
        feels_like=values.temperatureApparent,
        humidity_pct=values.humidity,
        wind_speed=values.windSpeed,
        wind_direction_deg=values.windDirection,
        pressure_hpa=values.pressureSeaLevel,
        uv_index=values.uvIndex,
        **_standard_visuals(owm),
    )


def standard_hourly_slot(item: OwmForecastItem) -> ForecastSlot:
    return ForecastSlot(
        timestamp_unix=item.dt,
        temperature=item.main.temp,
        weather_code=item.icon,
        precipitation_probability_pct=round(item.pop * 100),
        description=item.weather[0].description,
    )


def advanced_hourly_slot(
    entry: TomorrowTimelineEntry, borrowed: OwmForecastItem | None
) -> ForecastSlot:
    values = entry.values
    return ForecastSlot(
        timestamp_unix=parse_iso_timestamp(entry.time),
        temperature=_or_zero(values.temperature),
        weather_code=borrowed.icon if borrowed else None,
        precipitation_probability_pct=round(_or_zero(values.precipitationProbability)),
        description=borrowed.weather[0].description if borrowed else None,
    )


def advanced_daily_slot(
    entry: TomorrowTimelineEntry, icon_code: str | None
) -> ForecastSlot:
    values = entry.values
    temp_max = _or_zero(values.temperatureMax)
    probability = values.precipitationProbabilityAvg
    return ForecastSlot(
        timestamp_unix=parse_iso_timestamp(entry.time),
        temperature=temp_max,
        weather_code=icon_code,
        precipitation_probability_pct=round(probability) if probability is not None else None,
        is_daily=True,
        temp_min=_or_zero(values.temperatureMin),
        temp_max=temp_max,
    )


def _standard_visuals(owm: OwmCurrentResponse) -> dict:
    return {
        "weather_code": owm.condition.icon,
        "description": owm.condition.description,
        "sunrise_unix": owm.sys.sunrise,
        "sunset_unix": owm.sys.sunset,
        "timezone_offset_sec": owm.timezone,
        "observed_at_unix": owm.dt,
    }


def _or_zero(value: float | None) -> float:
    return value if value is not None else 0.0
