from .env import WeatherEnv
from .loader import load_config
from .models import (
    DashboardConfig,
    DefaultsSettings,
    EndpointSettings,
    HttpSettings,
)

__all__ = [
    "DashboardConfig",
    "DefaultsSettings",
    "EndpointSettings",
    "HttpSettings",
    "WeatherEnv",
    "load_config",
]
