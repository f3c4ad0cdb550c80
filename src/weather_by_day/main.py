"""Main FastAPI application for the weather-by-day service."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_by_day.api.endpoints import router as weather_router
from weather_by_day.config import (
    DEBUG, HOST, PORT, SERVICE_NAME, SERVICE_VERSION, Settings, load_settings
)
from weather_by_day.logging_config import configure_logging
from weather_by_day.middleware.request_logging import RequestLoggingMiddleware
from weather_by_day.weather.errors import UnclassifiedFailure, WeatherServiceError
from weather_by_day.weather.models import ErrorResponse
from weather_by_day.weather.service import WeatherService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting weather-by-day service")
    try:
        yield
    finally:
        logger.info("Shutting down weather-by-day service")
        await app.state.weather_service.aclose()


def _error_response(error: WeatherServiceError) -> JSONResponse:
    body = ErrorResponse(
        error=error.title,
        message=error.message,
        code=error.upstream_code
    )
    return JSONResponse(
        status_code=error.status_code,
        content=body.model_dump(exclude_none=True)
    )


async def weather_error_handler(_request: Request, exc: WeatherServiceError) -> JSONResponse:
    """Translate service errors to structured JSON responses."""
    logger.warning(f"{exc.kind}: {exc.message}")
    return _error_response(exc)


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed query parameters with 400 instead of 422."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Invalid request parameters: {details}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid parameter", message=details).model_dump(exclude_none=True)
    )


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Last resort handler; the stack trace is logged, never returned."""
    logger.error(f"Unhandled error: {exc}")
    logger.error(traceback.format_exc())
    return _error_response(UnclassifiedFailure(
        str(exc) or "Unknown error while processing the request"
    ))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded before any component is built, so a missing
    API key stops the application from starting.

    Args:
        settings: Explicit settings (loaded from the environment if None)

    Returns:
        Configured FastAPI application instance

    Raises:
        ConfigurationError: If the API key is not configured
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Weather by Day API",
        description="Weather for a city on a given day, backed by OpenWeatherMap",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.weather_service = WeatherService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(WeatherServiceError, weather_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(weather_router)

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """Service descriptor.

        Returns:
            Service information and endpoint documentation
        """
        return {
            "message": "Weather by Day API",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "endpoints": {
                "weather": "/weather",
                "health": "/weather/health",
                "docs": "/docs",
                "documentation": {
                    "method": "GET",
                    "path": "/weather",
                    "queryParams": {
                        "city": "string (required) - City name",
                        "date": "string (optional) - 'today' (default), 'tomorrow' or YYYY-MM-DD",
                        "units": "string (optional) - 'metric' (default), 'imperial' or 'kelvin'",
                        "lang": "string (optional) - Language code (e.g. pt_br, en, es)",
                    },
                },
            },
        }

    return app


def main() -> None:
    """Main entry point for the application."""
    configure_logging()
    app = create_app()
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
