"""Weather service resolving a city and a day to one weather report."""

import logging
from datetime import date
from typing import Optional

from weather_by_day.config import Settings
from weather_by_day.weather.client import OpenWeatherClient
from weather_by_day.weather.dates import (
    DateRange, ensure_forecast_range, format_date, reject_unsupported,
    resolve_date, today_local, uses_current_weather
)
from weather_by_day.weather.errors import (
    DateNotInForecastData, MissingParameter, NoForecastData
)
from weather_by_day.weather.geocoding import GeocodingService
from weather_by_day.weather.models import WeatherReport
from weather_by_day.weather.normalizer import normalize
from weather_by_day.weather.selector import available_dates, select_sample

logger = logging.getLogger(__name__)


class WeatherService:
    """Service for resolving weather-by-day queries."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[OpenWeatherClient] = None,
        geocoding_service: Optional[GeocodingService] = None
    ):
        """Initialize the weather service.

        Args:
            settings: Service settings
            client: Weather client instance (creates default if None)
            geocoding_service: Geocoding service instance (creates default if None)
        """
        self.settings = settings
        self.tz = settings.tzinfo
        self.client = client or OpenWeatherClient(settings)
        self.geocoding_service = geocoding_service or GeocodingService(self.client)

    async def get_weather_by_day(
        self,
        city: Optional[str],
        date_token: Optional[str] = None,
        units: Optional[str] = None,
        lang: Optional[str] = None
    ) -> WeatherReport:
        """Get the weather for a city on a given day.

        An absent date or "today" is served by the current-weather
        endpoint. Any other date goes through geocoding and the 3-hour
        forecast, after the date is checked against the forecast window.

        Args:
            city: City name
            date_token: "today", "tomorrow", "YYYY-MM-DD" or None
            units: metric, imperial or kelvin (settings default if None)
            lang: Provider language code (settings default if None)

        Returns:
            Normalized weather report

        Raises:
            MissingParameter: If city is empty
            InvalidDateFormat: If the date token is malformed
            PastDateNotSupported: If the date lies in the past
            ForecastHorizonExceeded: If the date lies beyond the forecast window
            CityNotFound: If geocoding finds nothing
            NoForecastData: If the forecast is empty
            DateNotInForecastData: If no bucket falls on the date
            UpstreamTransportFailure: If an upstream call fails
        """
        if not city or not city.strip():
            raise MissingParameter('The "city" parameter is required')
        city = city.strip()

        units = units or self.settings.default_units
        lang = lang or self.settings.default_lang

        today = today_local(self.tz)
        resolved = resolve_date(date_token, today=today)

        current = uses_current_weather(date_token)
        if current:
            classification = DateRange.CURRENT_DAY
        else:
            classification = ensure_forecast_range(
                resolved, today, self.settings.forecast_window_days
            )

        return await self.fetch_weather(city, resolved, classification, units, lang, current=current)

    async def fetch_weather(
        self,
        city: str,
        resolved: date,
        classification: DateRange,
        units: str,
        lang: str,
        current: bool = False
    ) -> WeatherReport:
        """Call the upstream endpoints for a classified date.

        The current-weather endpoint serves only a CURRENT_DAY request made
        without an explicit date; every other servable date goes through
        the forecast. Past and out-of-window dates never reach upstream.

        Args:
            city: City name
            resolved: Target calendar date
            classification: Result of the forecast window check
            units: Units to request
            lang: Language to request
            current: The request asked for "now" (no date or "today")

        Returns:
            Normalized weather report

        Raises:
            PastDateNotSupported: If classification is PAST
            ForecastHorizonExceeded: If classification is BEYOND_FORECAST_WINDOW
        """
        reject_unsupported(classification, resolved, self.settings.forecast_window_days)
        current = current and classification is DateRange.CURRENT_DAY

        logger.info(
            f"Getting weather for city={city}, date={format_date(resolved)}, "
            f"range={classification.value}, path={'current' if current else 'forecast'}"
        )

        if current:
            snapshot = await self.client.get_current_weather(city, units, lang)
            return normalize(snapshot, lang=lang, fallback_lang=self.settings.default_lang)

        location = await self.geocoding_service.resolve_city(city)
        forecast = await self.client.get_forecast(location.lat, location.lon, units, lang)

        if not forecast.samples:
            raise NoForecastData("No forecast data available in the provider response")

        sample = select_sample(forecast.samples, resolved, self.tz)
        if sample is None:
            dates = available_dates(forecast.samples, self.tz)
            raise DateNotInForecastData(
                f"Weather data is not available for {format_date(resolved)}. "
                f"The forecast only covers the next {self.settings.forecast_window_days} days. "
                f"Available dates: {', '.join(dates)}"
            )

        return normalize(sample, location.name, location.country, lang, self.settings.default_lang)

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
