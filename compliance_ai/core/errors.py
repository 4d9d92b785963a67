"""
Application error taxonomy.

Every error raised deliberately by the compliance backend derives from
``AppError``. Each subclass fixes an ``ErrorType`` and an HTTP status code so
the FastAPI exception handlers can render it without knowing where it came
from.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ErrorType(str, Enum):
    """Classification of application errors."""

    VALIDATION = "validation_error"
    AUTHENTICATION = "authentication_error"
    AUTHORIZATION = "authorization_error"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_SERVICE = "external_service_error"
    DATABASE = "database_error"
    AI_MODEL = "ai_model_error"
    BUSINESS_LOGIC = "business_logic_error"
    RATE_LIMIT = "rate_limit_error"
    CONFIGURATION = "configuration_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNKNOWN = "unknown_error"


class AppError(Exception):
    """Base application error.

    Attributes:
        message: Human readable description
        type: The ``ErrorType`` classification
        status_code: HTTP status code to respond with
        is_operational: True for expected failures (bad input, missing rows,
            unavailable providers); False for programming or infrastructure faults
        details: Optional structured context
        timestamp: When the error was created (UTC)
    """

    def __init__(
        self,
        message: str,
        type: ErrorType = ErrorType.UNKNOWN,
        status_code: int = 500,
        is_operational: bool = True,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type
        self.status_code = status_code
        self.is_operational = is_operational
        self.details = details
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "detail": self.message,
            "error_type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details is not None:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code})"


class ValidationError(AppError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.VALIDATION, 400, True, details)


class AuthenticationError(AppError):
    def __init__(self, message: str = "Authentication required", details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.AUTHENTICATION, 401, True, details)


class AuthorizationError(AppError):
    def __init__(self, message: str = "Insufficient permissions", details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.AUTHORIZATION, 403, True, details)


class ResourceNotFoundError(AppError):
    """Raised when a looked-up row does not exist.

    The message follows the ``"<Resource> with ID <id> not found"`` form.
    """

    def __init__(self, resource: str, resource_id: Any, details: Optional[Any] = None) -> None:
        super().__init__(f"{resource} with ID {resource_id} not found", ErrorType.RESOURCE_NOT_FOUND, 404, True, details)
        self.resource = resource
        self.resource_id = resource_id


class ExternalServiceError(AppError):
    def __init__(self, service: str, details: Optional[Any] = None, status_code: int = 502) -> None:
        super().__init__(f"Error communicating with {service}", ErrorType.EXTERNAL_SERVICE, status_code, True, details)
        self.service = service


class DatabaseError(AppError):
    def __init__(self, message: str = "Database operation failed", details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.DATABASE, 500, False, details)


class AIModelError(AppError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.AI_MODEL, 500, True, details)


class BusinessLogicError(AppError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.BUSINESS_LOGIC, 400, True, details)


class RateLimitError(AppError):
    def __init__(self, message: str = "Rate limit exceeded", details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.RATE_LIMIT, 429, True, details)


class ConfigurationError(AppError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.CONFIGURATION, 500, False, details)


class ServiceUnavailableError(AppError):
    def __init__(self, message: str = "Service temporarily unavailable", details: Optional[Any] = None) -> None:
        super().__init__(message, ErrorType.SERVICE_UNAVAILABLE, 503, True, details)
