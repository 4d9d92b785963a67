"""Unit tests for the application error taxonomy."""

from datetime import datetime

import pytest

from compliance_ai.core.errors import (
    AIModelError,
    AppError,
    AuthenticationError,
    AuthorizationError,
    BusinessLogicError,
    ConfigurationError,
    DatabaseError,
    ErrorType,
    ExternalServiceError,
    RateLimitError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    ValidationError,
)


class TestAppError:
    def test_defaults(self):
        error = AppError("Something broke")

        assert error.message == "Something broke"
        assert str(error) == "Something broke"
        assert error.type is ErrorType.UNKNOWN
        assert error.status_code == 500
        assert error.is_operational is True
        assert error.details is None
        assert isinstance(error.timestamp, datetime)

    def test_to_dict_without_details(self):
        body = AppError("Nope", ErrorType.VALIDATION, 400).to_dict()

        assert body["detail"] == "Nope"
        assert body["error_type"] == "validation_error"
        assert "timestamp" in body
        assert "details" not in body

    def test_to_dict_with_details(self):
        body = ValidationError("Bad", details={"field": "email"}).to_dict()

        assert body["details"] == {"field": "email"}

    def test_repr_mentions_status(self):
        assert repr(RateLimitError()) == "RateLimitError(message='Rate limit exceeded', status_code=429)"


class TestErrorSubclasses:
    @pytest.mark.parametrize(
        "error,error_type,status_code,operational",
        [
            (ValidationError("bad"), ErrorType.VALIDATION, 400, True),
            (AuthenticationError(), ErrorType.AUTHENTICATION, 401, True),
            (AuthorizationError(), ErrorType.AUTHORIZATION, 403, True),
            (ResourceNotFoundError("AI system", "AI-SYS-1"), ErrorType.RESOURCE_NOT_FOUND, 404, True),
            (ExternalServiceError("DeepSeek"), ErrorType.EXTERNAL_SERVICE, 502, True),
            (DatabaseError(), ErrorType.DATABASE, 500, False),
            (AIModelError("no answer"), ErrorType.AI_MODEL, 500, True),
            (BusinessLogicError("conflict"), ErrorType.BUSINESS_LOGIC, 400, True),
            (RateLimitError(), ErrorType.RATE_LIMIT, 429, True),
            (ConfigurationError("missing key"), ErrorType.CONFIGURATION, 500, False),
            (ServiceUnavailableError(), ErrorType.SERVICE_UNAVAILABLE, 503, True),
        ],
    )
    def test_classification(self, error, error_type, status_code, operational):
        assert isinstance(error, AppError)
        assert error.type is error_type
        assert error.status_code == status_code
        assert error.is_operational is operational

    def test_resource_not_found_message(self):
        error = ResourceNotFoundError("Training module", "eu-ai-act-intro")

        assert error.message == "Training module with ID eu-ai-act-intro not found"
        assert error.resource == "Training module"
        assert error.resource_id == "eu-ai-act-intro"

    def test_external_service_error_status_override(self):
        error = ExternalServiceError("Google Search", status_code=504)

        assert error.message == "Error communicating with Google Search"
        assert error.service == "Google Search"
        assert error.status_code == 504
