"""Configuration settings for the weather-by-day service."""

import os
from datetime import timezone, tzinfo
from typing import Final, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

load_dotenv()

# API Configuration
OPENWEATHER_API_BASE_URL: Final[str] = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_GEO_BASE_URL: Final[str] = "https://api.openweathermap.org/geo/1.0"
OPENWEATHER_API_KEY: Optional[str] = os.getenv("OPENWEATHER_API_KEY")

SERVICE_NAME: Final[str] = "weather-api"
SERVICE_VERSION: Final[str] = "1.0.0"

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Upstream request defaults
DEFAULT_UNITS: str = os.getenv("DEFAULT_UNITS", "metric")
DEFAULT_LANG: str = os.getenv("DEFAULT_LANG", "pt_br")
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

# Forecast window (the 5 day / 3 hour endpoint)
FORECAST_WINDOW_DAYS: int = int(os.getenv("FORECAST_WINDOW_DAYS", "5"))

# IANA timezone used to resolve "today" and bucket dates; process local time if unset
TIMEZONE: Optional[str] = os.getenv("TIMEZONE") or None


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or invalid."""
    pass


class Settings(BaseModel):
    """Immutable runtime settings, built once at startup."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="OpenWeatherMap API key")
    api_base_url: str = OPENWEATHER_API_BASE_URL
    geo_base_url: str = OPENWEATHER_GEO_BASE_URL
    default_units: str = DEFAULT_UNITS
    default_lang: str = DEFAULT_LANG
    request_timeout: float = Field(REQUEST_TIMEOUT_SECONDS, gt=0)
    forecast_window_days: int = Field(FORECAST_WINDOW_DAYS, ge=0)
    timezone: Optional[str] = TIMEZONE

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value and value.upper() != "UTC":
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError, OSError):
                raise ValueError(f"Unknown timezone: {value}")
        return value

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Configured timezone, or None for the process local timezone."""
        if not self.timezone:
            return None
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


def load_settings(api_key: Optional[str] = None) -> Settings:
    """Build settings from the environment.

    Args:
        api_key: Explicit API key (falls back to OPENWEATHER_API_KEY)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the API key is missing or a setting is invalid
    """
    key = api_key or OPENWEATHER_API_KEY
    if not key:
        raise ConfigurationError(
            "OPENWEATHER_API_KEY is not set. "
            "Make sure the .env file exists and defines OPENWEATHER_API_KEY."
        )
    try:
        return Settings(api_key=key, timezone=TIMEZONE)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
