class WeatherDashError(Exception):
    """Base error of the dashboard core."""


class NotFoundError(WeatherDashError):
    """Raised when geocoding yields no result for a query."""


class UpstreamError(WeatherDashError):
    """Raised when a mandatory upstream call fails."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class PartialDataWarning(UserWarning):
    """
    Recorded (never raised) when an optional companion call fails
    and the fetch degrades to empty or placeholder data.
    """

    def __init__(self, message: str, source: str):
        super().__init__(message)
        self.message = message
        self.source = source

    def __repr__(self) -> str:
        return f"PartialDataWarning(source={self.source!r}, message={self.message!r})"
