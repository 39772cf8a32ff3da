from datetime import date, datetime, timedelta, timezone
from numbers import Real

_CARDINAL_DIRECTIONS = [
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
]

_MISSING_TIME = "--:--"
_MISSING_DIRECTION = "--"


def format_time(unix_timestamp: int | None, timezone_offset_sec: int) -> str:
    """Local clock time ("HH:MM") of a timestamp at a UTC offset."""
    if not unix_timestamp:
        return _MISSING_TIME
    local = _shift(unix_timestamp, timezone_offset_sec)
    return local.strftime("%H:%M")


def format_hour(unix_timestamp: int, timezone_offset_sec: int) -> str:
    """Hour label such as "3 PM" for hourly forecast cards."""
    local = _shift(unix_timestamp, timezone_offset_sec)
    hour = local.hour % 12 or 12
    return f"{hour} {'AM' if local.hour < 12 else 'PM'}"


def format_weekday(unix_timestamp: int, timezone_offset_sec: int) -> str:
    """Short weekday name ("Mon") for daily forecast cards."""
    return _shift(unix_timestamp, timezone_offset_sec).strftime("%a")


def degrees_to_cardinal(degrees: float | None) -> str:
    """16-point compass label for a wind direction in degrees."""
    if isinstance(degrees, bool) or not isinstance(degrees, Real):
        return _MISSING_DIRECTION
    index = round(degrees / 22.5) % 16
    return _CARDINAL_DIRECTIONS[index]


def local_date(unix_timestamp: int, timezone_offset_sec: int) -> date:
    """Calendar date of a timestamp at the location's UTC offset."""
    return _shift(unix_timestamp, timezone_offset_sec).date()


def parse_iso_timestamp(value: str) -> int:
    """Unix timestamp of an ISO-8601 string; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def _shift(unix_timestamp: int, timezone_offset_sec: int) -> datetime:
    return datetime.fromtimestamp(unix_timestamp, tz=timezone.utc) + timedelta(
        seconds=timezone_offset_sec
    )
