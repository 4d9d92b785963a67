"""
Logfire Middleware for FastAPI.

Times every request, reports it through ``log_api_request`` (Logfire when
enabled, the standard logger otherwise), adds an ``X-Process-Time`` header
and warns about slow requests.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000


class LogfireMiddleware(BaseHTTPMiddleware):
    """Middleware for timing and logging API requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        method = request.method
        path = request.url.path
        request.state.start_time = start_time

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"API request failed: {method} {path}",
                exc_info=True,
                extra={"method": method, "path": path, "duration_ms": duration_ms, "error": str(e)},
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": response.status_code},
            )
        return response
