"""Geocoding service for the forecast path."""

import logging

from weather_by_day.weather.client import OpenWeatherClient
from weather_by_day.weather.errors import CityNotFound
from weather_by_day.weather.models import GeoLocation

logger = logging.getLogger(__name__)


class GeocodingService:
    """Resolves city names through the provider's geocoding endpoint."""

    def __init__(self, client: OpenWeatherClient):
        """Initialize the geocoding service.

        Args:
            client: Shared OpenWeatherMap client
        """
        self.client = client

    async def resolve_city(self, city: str) -> GeoLocation:
        """Convert city name to a location.

        Args:
            city: City name to geocode

        Returns:
            Best matching GeoLocation

        Raises:
            CityNotFound: If the provider returns no match
        """
        results = await self.client.geocode(city, limit=1)

        if not results:
            logger.warning(f"City '{city}' not found")
            raise CityNotFound(f'City "{city}" not found')

        location = results[0]
        logger.info(
            f"Successfully geocoded '{city}' to {location.name}, {location.country} "
            f"({location.lat}, {location.lon})"
        )
        return location
