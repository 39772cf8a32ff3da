from pydantic import BaseModel, Field

from weatherdash.models import Units, WeatherProvider


class EndpointSettings(BaseModel):
    """Base URLs of the upstream services."""

    owm_base_url: str = "https://api.openweathermap.org/data/2.5"
    geo_base_url: str = "https://api.openweathermap.org/geo/1.0"
    tomorrow_base_url: str = "https://api.tomorrow.io/v4/weather"


class HttpSettings(BaseModel):
    timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)


class DefaultsSettings(BaseModel):
    provider: WeatherProvider = WeatherProvider.STANDARD
    units: Units = Units.METRIC


class DashboardConfig(BaseModel):
    """Main application configuration"""

    defaults: DefaultsSettings = Field(default_factory=DefaultsSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)
