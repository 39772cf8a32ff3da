from pydantic import BaseModel, ConfigDict


class GeocodingResult(BaseModel):
    """Direct mapping to one entry of the OpenWeatherMap direct geocoding response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = None
    state: str | None = None
    country: str | None = None
    lat: float
    lon: float

    @property
    def label(self) -> str:
        parts = [self.name, self.state, self.country]
        return ", ".join(part for part in parts if part)
