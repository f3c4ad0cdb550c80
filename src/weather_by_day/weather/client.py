"""HTTP client for the OpenWeatherMap API."""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from weather_by_day.config import Settings
from weather_by_day.weather.errors import UnclassifiedFailure, UpstreamTransportFailure
from weather_by_day.weather.models import (
    CurrentWeatherSnapshot, ForecastResponse, GeoLocation
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# The provider calls Kelvin "standard"
UNITS_ALIASES = {"kelvin": "standard"}

_GEO_RESULTS = TypeAdapter(List[GeoLocation])


def upstream_units(units: str) -> str:
    """Translate a public units value to the provider's name for it."""
    return UNITS_ALIASES.get(units, units)


class OpenWeatherClient:
    """Async client for the current weather, forecast and geocoding endpoints."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the weather client.

        Args:
            settings: Service settings carrying the API key and defaults
            transport: Optional httpx transport (used by tests)
        """
        self.settings = settings
        self.client = httpx.AsyncClient(
            params={
                "appid": settings.api_key,
                "units": upstream_units(settings.default_units),
                "lang": settings.default_lang,
            },
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def get_current_weather(
        self,
        city: str,
        units: Optional[str] = None,
        lang: Optional[str] = None
    ) -> CurrentWeatherSnapshot:
        """Fetch current conditions for a city name.

        Raises:
            UpstreamTransportFailure: If the API request fails
            UnclassifiedFailure: If the response format is invalid
        """
        logger.info(f"Fetching current weather for city={city}")
        data = await self._get(
            f"{self.settings.api_base_url}/weather",
            self._params({"q": city}, units, lang)
        )
        return self._parse(CurrentWeatherSnapshot, data)

    async def get_forecast(
        self,
        lat: float,
        lon: float,
        units: Optional[str] = None,
        lang: Optional[str] = None
    ) -> ForecastResponse:
        """Fetch the 5 day / 3 hour forecast for given coordinates.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            units: metric, imperial or kelvin
            lang: Provider language code

        Returns:
            Parsed forecast envelope; the sample list may be empty

        Raises:
            UpstreamTransportFailure: If the API request fails
            UnclassifiedFailure: If the response format is invalid
        """
        logger.info(f"Fetching forecast for lat={lat}, lon={lon}")
        data = await self._get(
            f"{self.settings.api_base_url}/forecast",
            self._params({"lat": lat, "lon": lon}, units, lang)
        )
        forecast = self._parse(ForecastResponse, data or {})
        logger.info(f"Successfully fetched forecast with {len(forecast.samples)} entries")
        return forecast

    async def geocode(self, city: str, limit: int = 1) -> List[GeoLocation]:
        """Resolve a city name to candidate locations."""
        logger.info(f"Geocoding city: {city}")
        data = await self._get(
            f"{self.settings.geo_base_url}/direct",
            {"q": city, "limit": limit}
        )
        try:
            return _GEO_RESULTS.validate_python(data or [])
        except ValidationError as e:
            logger.error(f"Invalid geocoding response format: {e}")
            raise UnclassifiedFailure("Invalid geocoding response from weather provider")

    def _params(
        self,
        params: Dict[str, Any],
        units: Optional[str],
        lang: Optional[str]
    ) -> Dict[str, Any]:
        return {
            **params,
            "units": upstream_units(units or self.settings.default_units),
            "lang": lang or self.settings.default_lang,
        }

    async def _get(self, url: str, params: Dict[str, Any]) -> Any:
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from weather API: {e.response.status_code} - {e.response.text}")
            raise UpstreamTransportFailure(
                self._upstream_message(e.response) or str(e),
                upstream_code=e.response.status_code
            )
        except httpx.RequestError as e:
            logger.error(f"Request error to weather API: {e!r}")
            raise UpstreamTransportFailure(f"Weather provider request failed: {e}")
        except ValueError as e:
            logger.error(f"Weather API returned a non-JSON body: {e}")
            raise UnclassifiedFailure("Invalid response from weather provider")

    @staticmethod
    def _upstream_message(response: httpx.Response) -> Optional[str]:
        try:
            payload = response.json()
        except ValueError:
            return None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return None

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid API response format: {e}")
            raise UnclassifiedFailure("Invalid response format from weather provider")

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
