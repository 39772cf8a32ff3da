"""Pure reconciliation and presentation helpers."""

from .formatting import degrees_to_cardinal, format_hour, format_time, format_weekday
from .icons import PLACEHOLDER_ICON, map_icon
from .reconciler import build_view_model, find_nearest_slot, most_common_icon
from .theme import resolve_theme

__all__ = [
    "PLACEHOLDER_ICON",
    "build_view_model",
    "degrees_to_cardinal",
    "find_nearest_slot",
    "format_hour",
    "format_time",
    "format_weekday",
    "map_icon",
    "most_common_icon",
    "resolve_theme",
]
