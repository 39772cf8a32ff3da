from weatherdash.models import IconRef

# =============================================================================
# Constants
# =============================================================================

_ACCUWEATHER_ICON_URL = (
    "https://developer.accuweather.com/sites/default/files/{icon_id:02d}-s.png"
)
_PLACEHOLDER_ICON_URL = "https://placehold.co/64x64/e2e8f0/a0aec0?text=Icon"

# OpenWeatherMap icon code -> (canonical key, AccuWeather icon id)
_ICON_TABLE: dict[str, tuple[str, int]] = {
    "01d": ("clear-day", 1),
    "01n": ("clear-night", 33),
    "02d": ("few-clouds-day", 3),
    "02n": ("few-clouds-night", 35),
    "03d": ("scattered-clouds-day", 6),
    "03n": ("scattered-clouds-night", 38),
    "04d": ("broken-clouds-day", 7),
    "04n": ("broken-clouds-night", 7),
    "09d": ("shower-rain-day", 12),
    "09n": ("shower-rain-night", 39),
    "10d": ("rain-day", 18),
    "10n": ("rain-night", 40),
    "11d": ("storm-day", 15),
    "11n": ("storm-night", 41),
    "13d": ("snow-day", 22),
    "13n": ("snow-night", 44),
    "50d": ("fog-day", 11),
    "50n": ("fog-night", 11),
}

PLACEHOLDER_ICON = IconRef(
    key="placeholder", url=_PLACEHOLDER_ICON_URL, is_placeholder=True
)


def map_icon(code: str | None) -> IconRef:
    """Resolve an OpenWeatherMap icon code; unknown codes get the placeholder."""
    if not is_known_icon(code):
        return PLACEHOLDER_ICON

    key, icon_id = _ICON_TABLE[code]
    return IconRef(
        key=key,
        url=_ACCUWEATHER_ICON_URL.format(icon_id=icon_id),
        accuweather_id=icon_id,
    )


def is_known_icon(code: str | None) -> bool:
    return isinstance(code, str) and code in _ICON_TABLE
