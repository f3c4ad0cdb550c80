"""Request logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request."""

    # Paths that are not worth logging
    BYPASS_PATHS = {
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Time the request and log the outcome.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/endpoint in chain

        Returns:
            HTTP response from the rest of the chain
        """
        if request.url.path in self.BYPASS_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client_host = request.client.host if request.client else "unknown"
        logger.info(
            f"{client_host} {request.method} {request.url.path} "
            f"-> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response
