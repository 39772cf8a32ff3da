from .advanced import AdvancedAdapter, TomorrowClient
from .base import ProviderAdapter, ProviderData
from .standard import OpenWeatherClient, StandardAdapter

__all__ = [
    "AdvancedAdapter",
    "OpenWeatherClient",
    "ProviderAdapter",
    "ProviderData",
    "StandardAdapter",
    "TomorrowClient",
]
