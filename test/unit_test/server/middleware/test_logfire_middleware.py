"""
Unit tests for Logfire middleware.

This test suite covers:
- Request/response processing
- Performance metrics collection
- Error handling
- Slow request detection
- Header injection
"""

import itertools
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from compliance_ai.server.middleware.logfire_middleware import LogfireMiddleware


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/systems"
    request.state = MagicMock()
    return request


@pytest.fixture
def middleware():
    return LogfireMiddleware(app=AsyncMock())


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    async def test_successful_request_is_logged(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        with patch("compliance_ai.server.middleware.logfire_middleware.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/systems"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    async def test_process_time_header_added(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="created", status_code=201)

        with patch("compliance_ai.server.middleware.logfire_middleware.log_api_request"):
            response = await middleware.dispatch(mock_request, call_next)

        assert "X-Process-Time" in response.headers
        assert float(response.headers["X-Process-Time"]) >= 0

    async def test_start_time_stored_on_request_state(self, middleware, mock_request):
        async def call_next(request):
            return Response(status_code=204)

        with patch("compliance_ai.server.middleware.logfire_middleware.log_api_request"):
            await middleware.dispatch(mock_request, call_next)

        assert isinstance(mock_request.state.start_time, float)

    async def test_exception_is_logged_and_reraised(self, middleware, mock_request):
        async def call_next(request):
            raise RuntimeError("handler exploded")

        with (
            patch("compliance_ai.server.middleware.logfire_middleware.log_api_request") as mock_log,
            patch("compliance_ai.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            with pytest.raises(RuntimeError, match="handler exploded"):
                await middleware.dispatch(mock_request, call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[1]["extra"]["error"] == "handler exploded"

    async def test_slow_request_warning(self, middleware, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        with (
            patch("compliance_ai.server.middleware.logfire_middleware.log_api_request"),
            patch("compliance_ai.server.middleware.logfire_middleware.logger") as mock_logger,
            patch("compliance_ai.server.middleware.logfire_middleware.time.time", side_effect=itertools.chain([100.0], itertools.repeat(102.5))),
        ):
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]
        assert mock_logger.warning.call_args[1]["extra"]["duration_ms"] == pytest.approx(2500.0)

    async def test_fast_request_no_warning(self, middleware, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        with (
            patch("compliance_ai.server.middleware.logfire_middleware.log_api_request"),
            patch("compliance_ai.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_not_called()


class TestLogfireMiddlewareIntegration:
    async def test_header_present_on_api_responses(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert "x-process-time" in response.headers
