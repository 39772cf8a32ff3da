"""
Theme classification from current conditions.

Time-of-day windows around sunrise and sunset take precedence over the
weather family; everything else is "<family>-<day|night>".
"""

from weatherdash.models import CurrentConditions, DayPeriod, Theme, ThemeFamily

MAGIC_HOUR_WINDOW_SEC = 45 * 60

_DEFAULT_THEME = Theme(family=ThemeFamily.CLEAR, period=DayPeriod.DAY)

# Leading two digits of the OpenWeatherMap icon code -> weather family
_FAMILY_BY_CODE: dict[int, ThemeFamily] = {
    1: ThemeFamily.CLEAR,
    2: ThemeFamily.FEW_CLOUDS,
    3: ThemeFamily.SCATTERED_CLOUDS,
    4: ThemeFamily.BROKEN_CLOUDS,
    9: ThemeFamily.RAIN,
    10: ThemeFamily.RAIN,
    11: ThemeFamily.STORM,
    13: ThemeFamily.SNOW,
    50: ThemeFamily.FOG,
}


def resolve_theme(current: CurrentConditions | None) -> Theme:
    if current is None:
        return _DEFAULT_THEME

    now = current.observed_at_unix
    sunrise = current.sunrise_unix
    sunset = current.sunset_unix

    if sunrise - MAGIC_HOUR_WINDOW_SEC <= now < sunrise:
        return Theme(family=ThemeFamily.DAWN, dark=True)
    if sunrise <= now <= sunrise + MAGIC_HOUR_WINDOW_SEC:
        return Theme(family=ThemeFamily.SUNRISE)
    if sunset - MAGIC_HOUR_WINDOW_SEC <= now <= sunset:
        return Theme(family=ThemeFamily.SUNSET)

    is_day = sunrise < now < sunset
    return Theme(
        family=_weather_family(current.weather_code),
        period=DayPeriod.DAY if is_day else DayPeriod.NIGHT,
        dark=not is_day,
    )


def _weather_family(icon_code: str) -> ThemeFamily:
    try:
        code = int(icon_code[:2])
    except (TypeError, ValueError):
        return ThemeFamily.CLEAR
    return _FAMILY_BY_CODE.get(code, ThemeFamily.CLEAR)
