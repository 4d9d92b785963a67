"""
Exception Handlers for FastAPI Application.

This module maps the application error taxonomy to JSON responses and provides
a global handler that catches all unhandled exceptions and logs detailed
information including error ID, request context, and full traceback.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from compliance_ai.core.errors import AppError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.monitoring import log_error

logger = get_logger(__name__)


def _request_context(request: Request) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client": request.client.host if request.client else "unknown",
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Render an ``AppError`` with its own status code.

    Operational errors (bad input, missing rows, unavailable providers) are
    logged as warnings, everything else as errors.
    """
    message = f"{exc.type.value} in {request.method} {request.url.path}: {exc.message}"
    if exc.is_operational:
        logger.warning(message, extra=_request_context(request))
    else:
        logger.error(message, extra=_request_context(request))
        log_error(exc.type.value, exc.message, context=_request_context(request))
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique and foreign key violations are conflicts with existing data."""
    logger.warning(
        f"Integrity error in {request.method} {request.url.path}: {exc.orig}",
        extra=_request_context(request),
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Resource conflicts with existing data", "error_type": "database_error"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            **_request_context(request),
            "error_id": error_id,
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), context={"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
