"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup initializes the database and registers the AI
provider keys, and that a failing database does not prevent startup.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from compliance_ai.server.main import lifespan


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database_and_keys(self):
        app = FastAPI()

        with (
            patch("compliance_ai.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("compliance_ai.server.main.register_api_keys_from_env") as mock_register,
        ):
            async with lifespan(app):
                mock_init_db.assert_awaited_once()
                mock_register.assert_called_once()

    async def test_lifespan_survives_database_failure(self):
        app = FastAPI()

        with (
            patch("compliance_ai.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("compliance_ai.server.main.register_api_keys_from_env") as mock_register,
            patch("compliance_ai.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = ConnectionError("database unreachable")

            async with lifespan(app):
                pass

            mock_logger.error.assert_called_once()
            assert "Database initialization failed" in mock_logger.error.call_args[0][0]
            mock_register.assert_called_once()

    async def test_lifespan_logs_shutdown(self):
        app = FastAPI()

        with (
            patch("compliance_ai.server.main.init_db", new_callable=AsyncMock),
            patch("compliance_ai.server.main.register_api_keys_from_env"),
            patch("compliance_ai.server.main.logger") as mock_logger,
        ):
            async with lifespan(app):
                mock_logger.reset_mock()

            messages = [call[0][0] for call in mock_logger.info.call_args_list]
            assert any("Shutting down" in message for message in messages)


class TestInitDb:
    """Test the init_db startup hook."""

    async def test_init_db_skips_without_auto_create(self):
        from compliance_ai.core.database import session as session_module

        with (
            patch.object(session_module, "settings", MagicMock(auto_create_tables=False)),
            patch.object(session_module, "create_all", new_callable=AsyncMock) as mock_create_all,
        ):
            await session_module.init_db()

            mock_create_all.assert_not_awaited()

    async def test_init_db_creates_tables_with_auto_create(self):
        from compliance_ai.core.database import session as session_module

        with (
            patch.object(session_module, "settings", MagicMock(auto_create_tables=True)),
            patch.object(session_module, "create_all", new_callable=AsyncMock) as mock_create_all,
        ):
            await session_module.init_db()

            mock_create_all.assert_awaited_once_with(session_module.engine)


class TestAppWiring:
    def test_routers_are_mounted(self):
        from compliance_ai.server.main import app

        paths = {getattr(route, "path", None) for route in app.routes}

        for expected in (
            "/health",
            "/version",
            "/api/v1/health/services",
            "/api/v1/systems",
            "/api/v1/approval-workflows",
            "/api/v1/notifications",
            "/api/v1/regulatory-terms",
            "/api/v1/training/modules",
            "/api/v1/ai/generate",
            "/api/v1/ai-keys",
        ):
            assert expected in paths

    def test_openapi_served_under_api_prefix(self):
        from compliance_ai.server.main import app

        assert app.openapi_url == "/api/v1/openapi.json"
