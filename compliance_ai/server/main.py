"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from compliance_ai.ai_services.api_key_manager import register_api_keys_from_env
from compliance_ai.core.database import init_db
from compliance_ai.core.logging_config import get_logger, setup_logging
from compliance_ai.core.monitoring import initialize_logfire

from .api.v1 import (
    activities,
    ai,
    ai_keys,
    alerts,
    approval_settings,
    approvals,
    auth,
    dashboard,
    deadlines,
    departments,
    documents,
    health,
    notifications,
    regulatory_terms,
    risk_assessments,
    risk_management,
    systems,
    training,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Startup initializes the database and registers the AI provider keys found
    in the environment.
    """
    try:
        logger.info("Starting up Compliance-AI Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    register_api_keys_from_env(settings)

    yield

    logger.info("Shutting down Compliance-AI Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Compliance-AI Server API

    This API provides the backend services for EU AI Act compliance tracking.
    It supports the AI system inventory, risk assessments, training, approval
    workflows, regulatory glossary and AI-assisted text generation.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(systems.router, prefix=f"{constant.API_V1_STR}/systems", tags=["systems"])
app.include_router(departments.router, prefix=f"{constant.API_V1_STR}/departments", tags=["departments"])
app.include_router(activities.router, prefix=f"{constant.API_V1_STR}/activities", tags=["activities"])
app.include_router(alerts.router, prefix=f"{constant.API_V1_STR}/alerts", tags=["alerts"])
app.include_router(deadlines.router, prefix=f"{constant.API_V1_STR}/deadlines", tags=["deadlines"])
app.include_router(documents.router, prefix=f"{constant.API_V1_STR}/documents", tags=["documents"])
app.include_router(
    risk_assessments.router, prefix=f"{constant.API_V1_STR}/risk-assessments", tags=["risk-assessments"]
)
app.include_router(risk_management.router, prefix=f"{constant.API_V1_STR}/risk-management", tags=["risk-management"])
app.include_router(dashboard.router, prefix=f"{constant.API_V1_STR}/dashboard", tags=["dashboard"])
app.include_router(training.router, prefix=f"{constant.API_V1_STR}/training", tags=["training"])
app.include_router(ai_keys.router, prefix=f"{constant.API_V1_STR}/ai-keys", tags=["ai-keys"])
app.include_router(ai.router, prefix=f"{constant.API_V1_STR}/ai", tags=["ai"])
app.include_router(approvals.router, prefix=f"{constant.API_V1_STR}/approval-workflows", tags=["approvals"])
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(
    approval_settings.router, prefix=f"{constant.API_V1_STR}/approval-settings", tags=["approvals"]
)
app.include_router(
    regulatory_terms.router, prefix=f"{constant.API_V1_STR}/regulatory-terms", tags=["regulatory-terms"]
)
