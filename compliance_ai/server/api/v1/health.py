"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version) used for
monitoring and deployment verification, plus a dependency check covering the
database and the AI provider keys.
"""

from fastapi import APIRouter
from sqlalchemy import text

from compliance_ai.ai_services.api_key_manager import api_key_manager
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import AIProvider
from compliance_ai.server.core import constant
from compliance_ai.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}


@router.get(
    f"{constant.API_V1_STR}/health/services",
    summary="Service Health",
    description="Check the database connection and the number of usable API keys per AI provider.",
    response_description="Per-service status object.",
)
async def services_health(session: SessionDep):
    """
    Dependency health check.

    The overall status is ``degraded`` when the database is unreachable.
    Providers without keys are reported but do not degrade the status.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = {"status": "ok"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database = {"status": "error", "detail": str(e)}

    providers = {
        provider.value: {
            "configured": api_key_manager.is_registered(provider.value),
            "available_keys": api_key_manager.available_key_count(provider.value),
        }
        for provider in AIProvider
    }
    return {
        "status": "ok" if database["status"] == "ok" else "degraded",
        "database": database,
        "ai_providers": providers,
    }
