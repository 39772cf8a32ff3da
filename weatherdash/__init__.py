from .config import DashboardConfig, WeatherEnv, load_config
from .exceptions import NotFoundError, PartialDataWarning, UpstreamError, WeatherDashError
from .models import (
    Coordinates,
    CurrentConditions,
    ForecastSlot,
    IconRef,
    ResolvedLocation,
    Theme,
    ThemeFamily,
    UnifiedViewModel,
    Units,
    WeatherProvider,
)
from .service import CycleOutcome, WeatherDashboard
from .weather import map_icon, resolve_theme

__all__ = [
    "Coordinates",
    "CurrentConditions",
    "CycleOutcome",
    "DashboardConfig",
    "ForecastSlot",
    "IconRef",
    "NotFoundError",
    "PartialDataWarning",
    "ResolvedLocation",
    "Theme",
    "ThemeFamily",
    "UnifiedViewModel",
    "Units",
    "UpstreamError",
    "WeatherDashError",
    "WeatherDashboard",
    "WeatherEnv",
    "load_config",
    "map_icon",
    "resolve_theme",
]
