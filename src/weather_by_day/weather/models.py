"""Data models for the weather-by-day service."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _UpstreamModel(BaseModel):
    """Immutable view of an upstream payload; unknown keys are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")


class WeatherCondition(_UpstreamModel):
    """Condition descriptor from OpenWeatherMap."""
    id: Optional[int] = None
    main: str = Field(..., description="Condition group, e.g. Rain")
    description: str = Field(..., description="Localized condition description")
    icon: str = Field(..., description="Icon id")


class MainReadings(_UpstreamModel):
    """Temperature, pressure and humidity block."""
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int = Field(..., description="Pressure in hPa")
    humidity: int = Field(..., description="Relative humidity in %")


class Wind(_UpstreamModel):
    speed: float
    deg: Optional[int] = None
    gust: Optional[float] = None


class Clouds(_UpstreamModel):
    all: int = Field(..., description="Cloud coverage in %")


class WeatherReading(_UpstreamModel):
    """Fields shared by current-weather and forecast payloads."""
    dt: int = Field(..., description="Observation time, UTC epoch seconds")
    main: MainReadings
    weather: List[WeatherCondition] = Field(..., min_length=1)
    wind: Wind
    clouds: Clouds
    visibility: Optional[int] = Field(None, description="Visibility in meters")


class ForecastSample(WeatherReading):
    """One 3-hour bucket from the forecast endpoint."""
    pop: float = Field(0.0, ge=0.0, le=1.0, description="Probability of precipitation")
    dt_txt: Optional[str] = None


class SysInfo(_UpstreamModel):
    country: str = ""
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class CurrentWeatherSnapshot(WeatherReading):
    """Payload of the current-weather endpoint."""
    name: str = Field(..., description="City name")
    sys: SysInfo = Field(default_factory=SysInfo)
    timezone: Optional[int] = Field(None, description="Shift from UTC in seconds")


class ForecastCity(_UpstreamModel):
    name: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[int] = None


class ForecastResponse(_UpstreamModel):
    """Envelope of the 5 day / 3 hour forecast endpoint."""
    samples: List[ForecastSample] = Field(default_factory=list, alias="list")
    city: Optional[ForecastCity] = None


class GeoLocation(_UpstreamModel):
    """One result of the direct geocoding endpoint."""
    name: str
    country: str = ""
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    state: Optional[str] = None


class _ReportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TemperatureInfo(_ReportModel):
    """Rounded temperatures in the requested units."""
    min: int
    max: int
    current: int
    feels_like: int = Field(..., alias="feelsLike")


class ConditionInfo(_ReportModel):
    main: str
    description: str
    icon: str


class WindInfo(_ReportModel):
    speed: float
    direction: Optional[int] = None


class WeatherReport(_ReportModel):
    """Normalized weather for one city on one day."""
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    day_of_week: str = Field(..., alias="dayOfWeek", description="Localized weekday name")
    city: str
    country: str
    temperature: TemperatureInfo
    weather: ConditionInfo
    humidity: int
    pressure: int
    wind: WindInfo
    clouds: int
    visibility: Optional[float] = Field(None, description="Visibility in kilometers")
    precipitation_probability: int = Field(
        ..., ge=0, le=100, alias="precipitationProbability",
        description="Probability of precipitation in %"
    )


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error title")
    message: str = Field(..., description="Human readable error message")
    code: Optional[int] = Field(None, description="Upstream status code, when known")
