"""API endpoints for the weather-by-day service."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from weather_by_day.config import SERVICE_NAME
from weather_by_day.weather.errors import MissingParameter
from weather_by_day.weather.models import ErrorResponse, WeatherReport
from weather_by_day.weather.service import WeatherService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/weather", tags=["weather"])


def get_weather_service(request: Request) -> WeatherService:
    """Dependency returning the application's shared weather service."""
    return request.app.state.weather_service


@router.get(
    "",
    response_model=WeatherReport,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_weather_by_day(
    city: Optional[str] = Query(
        None,
        description="City name (required)"
    ),
    date: Optional[str] = Query(
        None,
        description="Date as 'today' (default), 'tomorrow' or YYYY-MM-DD"
    ),
    units: Optional[str] = Query(
        None,
        pattern="^(metric|imperial|kelvin)$",
        description="Units: 'metric' (default), 'imperial' or 'kelvin'"
    ),
    lang: Optional[str] = Query(
        None,
        description="Language code, e.g. pt_br, en, es"
    ),
    weather_service: WeatherService = Depends(get_weather_service)
) -> WeatherReport:
    """Get the weather for a city on a given day.

    Args:
        city: City name
        date: 'today', 'tomorrow' or YYYY-MM-DD
        units: Units system
        lang: Language code

    Returns:
        WeatherReport for the requested day

    Raises:
        WeatherServiceError: Translated to an error response by the app handlers
    """
    if not city or not city.strip():
        raise MissingParameter('The "city" parameter is required')

    report = await weather_service.get_weather_by_day(
        city=city,
        date_token=date,
        units=units,
        lang=lang
    )

    logger.info(f"Successfully retrieved weather for {report.city} on {report.date}")
    return report


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
