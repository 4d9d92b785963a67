"""
Monitoring and Tracing Configuration Module.

Optional Pydantic Logfire integration for the compliance backend. When
enabled it traces API endpoints, database statements and outbound AI
provider and search calls, and records errors with their context.

All helpers degrade to plain debug logging when Logfire is not configured,
so callers never need to guard them.
"""

import logging
import os
from typing import Callable, List, Optional, Tuple

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _env_flag("LOGFIRE_ENABLED")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "compliance-ai")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "compliance-ai-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

LOGFIRE_TRACE_SQLALCHEMY = _env_flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _env_flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _env_flag("LOGFIRE_TRACE_FASTAPI", "true")


def _instrumentations(logfire, app: Optional[FastAPI]) -> List[Tuple[str, bool, Callable[[], object]]]:
    return [
        ("SQLAlchemy", LOGFIRE_TRACE_SQLALCHEMY, logfire.instrument_sqlalchemy),
        ("HTTPX", LOGFIRE_TRACE_HTTPX, logfire.instrument_httpx),
        ("FastAPI", LOGFIRE_TRACE_FASTAPI and app is not None, lambda: logfire.instrument_fastapi(app=app)),
    ]


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Configure Logfire and instrument the libraries selected by the trace flags.

    FastAPI endpoints are only instrumented when ``app`` is given. A failing
    instrumentation is logged and skipped; the others still apply.

    Returns:
        True when Logfire was configured, False otherwise.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False
    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set; monitoring stays off.")
        return False

    try:
        import logfire
    except ImportError:
        logger.warning(
            "Logfire is enabled but the 'logfire' package is not installed. "
            "Install it with: pip install 'compliance-ai[monitoring]'"
        )
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    for name, enabled, instrument in _instrumentations(logfire, app):
        if not enabled:
            continue
        try:
            instrument()
            logger.info(f"Logfire: {name} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {name}: {e}")

    logger.info(
        f"Logfire monitoring initialized: project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}"
    )
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    try:
        import logfire

        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_ai_call(provider: str, success: bool, duration_ms: float, tokens_used: Optional[int] = None) -> None:
    """
    Log an outbound AI provider or search call.

    Args:
        provider: Provider name (deepseek, gemini, openai, google_search)
        success: Whether the call returned a usable result
        duration_ms: Call duration in milliseconds
        tokens_used: Total tokens reported by the provider, when known
    """
    try:
        import logfire

        logfire.info(
            "AI provider call completed",
            provider=provider,
            success=success,
            duration_ms=duration_ms,
            tokens_used=tokens_used,
        )
    except Exception:
        logger.debug(f"Could not log AI call to Logfire: provider={provider}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    try:
        import logfire

        logfire.error(
            f"{error_type}: {error_message}",
            **(context or {}),
        )
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
