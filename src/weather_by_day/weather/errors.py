"""Error types raised by the weather-by-day core."""

from typing import Optional


class WeatherServiceError(Exception):
    """Base class for all service errors.

    Carries a human readable message, the HTTP status the API layer
    should answer with and, for upstream failures, the provider's own
    status code.
    """

    title: str = "Internal server error"
    status_code: int = 500

    def __init__(self, message: str, upstream_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.upstream_code = upstream_code

    @property
    def kind(self) -> str:
        return type(self).__name__


class MissingParameter(WeatherServiceError):
    title = "Missing required parameter"
    status_code = 400


class InvalidDateFormat(WeatherServiceError):
    title = "Invalid date"
    status_code = 400


class PastDateNotSupported(WeatherServiceError):
    title = "Date out of range"
    status_code = 400


class ForecastHorizonExceeded(WeatherServiceError):
    title = "Date out of range"
    status_code = 400


class CityNotFound(WeatherServiceError):
    title = "City not found"


class NoForecastData(WeatherServiceError):
    title = "No forecast data"


class DateNotInForecastData(WeatherServiceError):
    title = "Date not available"


class UpstreamTransportFailure(WeatherServiceError):
    """Upstream call failed; status is passed through when known."""

    title = "Error fetching weather data"

    def __init__(self, message: str, upstream_code: Optional[int] = None):
        super().__init__(message, upstream_code)
        if upstream_code is not None:
            self.status_code = upstream_code


class UnclassifiedFailure(WeatherServiceError):
    title = "Internal server error"
