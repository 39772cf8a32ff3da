from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Sequence

from weatherdash.exceptions import PartialDataWarning
from weatherdash.models import (
    CurrentConditions,
    ForecastSlot,
    UnifiedViewModel,
    Units,
    WeatherProvider,
)
from weatherdash.providers.base import ProviderData
from weatherdash.providers.views import (
    OwmForecastItem,
    TomorrowForecastResponse,
    TomorrowTimelineEntry,
)
from weatherdash.weather.formatting import local_date, parse_iso_timestamp
from weatherdash.weather.normalization import (
    advanced_daily_slot,
    advanced_hourly_slot,
    normalize_advanced_current,
    normalize_standard_current,
    standard_hourly_slot,
)
from weatherdash.weather.theme import resolve_theme

# =============================================================================
# Constants
# =============================================================================

HOURLY_LIMIT = 16
DAILY_LIMIT = 5


def build_view_model(
    data: ProviderData, provider: WeatherProvider, units: Units
) -> UnifiedViewModel:
    """Reconcile one cycle's payloads into the view model for the active provider."""
    warnings = list(data.warnings)

    if provider == WeatherProvider.ADVANCED:
        current, hourly, daily = _reconcile_advanced(data, warnings)
    else:
        current, hourly, daily = _reconcile_standard(data)

    return UnifiedViewModel(
        location=data.location,
        current=current,
        hourly=tuple(hourly),
        daily=tuple(daily),
        provider=provider,
        units=units,
        theme=resolve_theme(current),
        warnings=tuple(warnings),
    )


# =============================================================================
# Cross-reference helpers
# =============================================================================


def find_nearest_slot(
    timestamp_unix: int, items: Sequence[OwmForecastItem]
) -> OwmForecastItem | None:
    """
    Slot with the smallest absolute time difference; ties go to the lowest index.
    """
    nearest: OwmForecastItem | None = None
    nearest_delta = 0
    for item in items:
        delta = abs(item.dt - timestamp_unix)
        if nearest is None or delta < nearest_delta:
            nearest, nearest_delta = item, delta
    return nearest


def most_common_icon(codes: Iterable[str]) -> str | None:
    """
    Most frequent code; on a tie the code encountered first wins.
    """
    counts = Counter(codes)
    if not counts:
        return None

    max_count = max(counts.values())
    return next(code for code, count in counts.items() if count == max_count)


# =============================================================================
# Standard provider
# =============================================================================


def _reconcile_standard(
    data: ProviderData,
) -> tuple[CurrentConditions, list[ForecastSlot], list[ForecastSlot]]:
    current = normalize_standard_current(data.standard_current)
    items = data.standard_forecast.items

    hourly = [
        standard_hourly_slot(item)
        for item in _chronological_items(items)[:HOURLY_LIMIT]
    ]
    daily = _standard_daily(items, current)
    return current, hourly, daily


def _standard_daily(
    items: Sequence[OwmForecastItem], current: CurrentConditions
) -> list[ForecastSlot]:
    """
    Aggregate the 3-hourly list into days after the current one.

    Days are location-local calendar dates; the current day is the local date
    of the current observation. Icons are tallied in upstream list order.
    """
    offset = current.timezone_offset_sec
    today = local_date(current.observed_at_unix, offset)

    days: dict[date, list[OwmForecastItem]] = {}
    for item in items:
        day = local_date(item.dt, offset)
        if day <= today:
            continue
        days.setdefault(day, []).append(item)

    return [_standard_daily_slot(days[day]) for day in sorted(days)[:DAILY_LIMIT]]


def _standard_daily_slot(items: list[OwmForecastItem]) -> ForecastSlot:
    temps = [item.main.temp for item in items]
    icon = most_common_icon(item.icon for item in items)
    description = next(
        item.weather[0].description for item in items if item.icon == icon
    )
    return ForecastSlot(
        timestamp_unix=min(item.dt for item in items),
        temperature=max(temps),
        weather_code=icon,
        precipitation_probability_pct=round(max(item.pop for item in items) * 100),
        is_daily=True,
        temp_min=min(temps),
        temp_max=max(temps),
        description=description,
    )


# =============================================================================
# Advanced provider
# =============================================================================


def _reconcile_advanced(
    data: ProviderData, warnings: list[PartialDataWarning]
) -> tuple[CurrentConditions, list[ForecastSlot], list[ForecastSlot]]:
    owm_current = data.standard_current
    realtime = data.advanced_realtime.data if data.advanced_realtime else None

    if realtime is None:
        warnings.append(
            PartialDataWarning(
                "Advanced realtime data missing, showing standard values",
                source="advanced.realtime",
            )
        )
        current = normalize_standard_current(owm_current)
    else:
        current = normalize_advanced_current(realtime.values, owm_current)

    # Upstream order: nearest-slot and tally ties go to the earlier list entry
    owm_items = data.standard_forecast.items
    hourly_entries, daily_entries = _advanced_timelines(data.advanced_forecast)

    hourly = [
        advanced_hourly_slot(entry, find_nearest_slot(parse_iso_timestamp(entry.time), owm_items))
        for entry in hourly_entries[:HOURLY_LIMIT]
    ]
    daily = [
        advanced_daily_slot(
            entry,
            _icon_for_day(entry, owm_items, current.timezone_offset_sec),
        )
        for entry in daily_entries[:DAILY_LIMIT]
    ]
    return current, hourly, daily


def _advanced_timelines(
    forecast: TomorrowForecastResponse | None,
) -> tuple[list[TomorrowTimelineEntry], list[TomorrowTimelineEntry]]:
    if forecast is None or forecast.timelines is None:
        return [], []
    return (
        _chronological_entries(forecast.timelines.hourly),
        _chronological_entries(forecast.timelines.daily),
    )


def _icon_for_day(
    entry: TomorrowTimelineEntry, owm_items: Sequence[OwmForecastItem], offset: int
) -> str | None:
    day = local_date(parse_iso_timestamp(entry.time), offset)
    return most_common_icon(
        item.icon for item in owm_items if local_date(item.dt, offset) == day
    )


def _chronological_items(items: Sequence[OwmForecastItem]) -> list[OwmForecastItem]:
    return sorted(items, key=lambda item: item.dt)


def _chronological_entries(
    entries: Sequence[TomorrowTimelineEntry],
) -> list[TomorrowTimelineEntry]:
    return sorted(entries, key=lambda entry: parse_iso_timestamp(entry.time))
