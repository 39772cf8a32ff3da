from textwrap import dedent

from weatherdash.models import ForecastSlot, UnifiedViewModel, Units
from weatherdash.weather.formatting import (
    degrees_to_cardinal,
    format_hour,
    format_time,
    format_weekday,
)
from weatherdash.weather.icons import map_icon

_UNIT_LABELS = {
    Units.METRIC: ("°C", "m/s"),
    Units.IMPERIAL: ("°F", "mph"),
}

# Hourly cards only show a probability above this value
_MIN_VISIBLE_PRECIPITATION_PCT = 5


def format_weather_report(view_model: UnifiedViewModel) -> str:
    """Format the complete view model into a readable plain-text report."""
    return (
        _format_current_section(view_model)
        + _format_hourly_section(view_model)
        + _format_daily_section(view_model)
        + _format_warnings(view_model)
    )


def _format_current_section(view_model: UnifiedViewModel) -> str:
    current = view_model.current
    temp_unit, speed_unit = _UNIT_LABELS[view_model.units]
    offset = current.timezone_offset_sec
    uv_index = f"{current.uv_index:g}" if current.uv_index is not None else "N/A"
    name = view_model.location.display_name or (
        f"{view_model.location.lat:.2f}, {view_model.location.lon:.2f}"
    )

    return dedent(
        f"""
        Weather for {name} ({view_model.provider.value} provider)

        Now: {round(current.temperature)}{temp_unit}, {current.description}
           Icon: {map_icon(current.weather_code).key}
           Feels like: {round(current.feels_like)}{temp_unit}
           Humidity: {round(current.humidity_pct)}%
           Wind: {current.wind_speed:.1f} {speed_unit} {degrees_to_cardinal(current.wind_direction_deg)}
           Pressure: {round(current.pressure_hpa)} hPa
           UV index: {uv_index}
           Sunrise: {format_time(current.sunrise_unix, offset)}  Sunset: {format_time(current.sunset_unix, offset)}
           Theme: {view_model.theme.css_class}
        """
    ).strip()


def _format_hourly_line(slot: ForecastSlot, offset: int, temp_unit: str) -> str:
    line = (
        f"   {format_hour(slot.timestamp_unix, offset):>5}: "
        f"{round(slot.temperature)}{temp_unit} {map_icon(slot.weather_code).key}"
    )
    probability = slot.precipitation_probability_pct or 0
    if probability > _MIN_VISIBLE_PRECIPITATION_PCT:
        line += f" ({probability:.0f}%)"
    return line


def _format_hourly_section(view_model: UnifiedViewModel) -> str:
    if not view_model.hourly:
        return "\n\nHourly forecast data not available."

    temp_unit, _ = _UNIT_LABELS[view_model.units]
    offset = view_model.current.timezone_offset_sec
    section = "\n\nHourly Forecast:"
    for slot in view_model.hourly:
        section += f"\n{_format_hourly_line(slot, offset, temp_unit)}"
    return section


def _format_daily_section(view_model: UnifiedViewModel) -> str:
    if not view_model.daily:
        return "\n\nDaily forecast data not available."

    temp_unit, _ = _UNIT_LABELS[view_model.units]
    offset = view_model.current.timezone_offset_sec
    section = "\n\n5-Day Forecast:"
    for slot in view_model.daily:
        section += (
            f"\n   {format_weekday(slot.timestamp_unix, offset)}: "
            f"{round(slot.temp_min or 0)}{temp_unit} - {round(slot.temp_max or 0)}{temp_unit} "
            f"{map_icon(slot.weather_code).key}"
        )
    return section


def _format_warnings(view_model: UnifiedViewModel) -> str:
    if not view_model.warnings:
        return ""
    return "".join(f"\n\nNote: {warning.message}" for warning in view_model.warnings)
