from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# OpenWeatherMap (standard provider) response models
# =============================================================================


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class OwmCoordinates(_UpstreamModel):
    lat: float
    lon: float


class OwmCondition(_UpstreamModel):
    id: int | None = None
    main: str | None = None
    description: str = ""
    icon: str


class OwmMain(_UpstreamModel):
    temp: float
    feels_like: float
    pressure: float
    humidity: float


class OwmWind(_UpstreamModel):
    speed: float = 0.0
    deg: float = 0.0


class OwmSys(_UpstreamModel):
    country: str | None = None
    sunrise: int
    sunset: int


class OwmCurrentResponse(_UpstreamModel):
    """Direct mapping to the OpenWeatherMap current weather response."""

    coord: OwmCoordinates
    weather: list[OwmCondition] = Field(min_length=1)
    main: OwmMain
    wind: OwmWind = Field(default_factory=OwmWind)
    sys: OwmSys
    dt: int
    name: str = ""
    timezone: int = 0
    uvi: float | None = None

    @property
    def condition(self) -> OwmCondition:
        return self.weather[0]

    @property
    def display_name(self) -> str:
        parts = [part for part in (self.name, self.sys.country) if part]
        return ", ".join(parts)


class OwmForecastMain(_UpstreamModel):
    temp: float
    temp_min: float | None = None
    temp_max: float | None = None


class OwmForecastItem(_UpstreamModel):
    """One 3-hourly slot of the OpenWeatherMap forecast list."""

    dt: int
    main: OwmForecastMain
    weather: list[OwmCondition] = Field(min_length=1)
    pop: float = 0.0

    @property
    def icon(self) -> str:
        return self.weather[0].icon


class OwmForecastCity(_UpstreamModel):
    timezone: int = 0


class OwmForecastResponse(_UpstreamModel):
    """Direct mapping to the OpenWeatherMap 5 day / 3 hour forecast response."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    items: list[OwmForecastItem] = Field(default_factory=list, alias="list")
    city: OwmForecastCity = Field(default_factory=OwmForecastCity)

    @classmethod
    def empty(cls, timezone: int = 0) -> "OwmForecastResponse":
        return cls(items=[], city=OwmForecastCity(timezone=timezone))


# =============================================================================
# Tomorrow.io (advanced provider) response models
# =============================================================================


class TomorrowRealtimeValues(_UpstreamModel):
    temperature: float
    temperatureApparent: float
    humidity: float
    windSpeed: float
    windDirection: float
    pressureSeaLevel: float
    uvIndex: float | None = None
    weatherCode: int | None = None


class TomorrowRealtimeData(_UpstreamModel):
    time: str
    values: TomorrowRealtimeValues


class TomorrowLocation(_UpstreamModel):
    name: str | None = None
    lat: float | None = None
    lon: float | None = None


class TomorrowRealtimeResponse(_UpstreamModel):
    """Direct mapping to the Tomorrow.io realtime response."""

    data: TomorrowRealtimeData | None = None
    location: TomorrowLocation | None = None


class TomorrowTimelineValues(_UpstreamModel):
    temperature: float | None = None
    temperatureMin: float | None = None
    temperatureMax: float | None = None
    precipitationProbability: float | None = None
    precipitationProbabilityAvg: float | None = None
    weatherCode: int | None = None
    weatherCodeMax: int | None = None


class TomorrowTimelineEntry(_UpstreamModel):
    time: str
    values: TomorrowTimelineValues


class TomorrowTimelines(_UpstreamModel):
    hourly: list[TomorrowTimelineEntry] = []
    daily: list[TomorrowTimelineEntry] = []


class TomorrowForecastResponse(_UpstreamModel):
    """Direct mapping to the Tomorrow.io forecast response (1h and 1d timesteps)."""

    timelines: TomorrowTimelines | None = None
