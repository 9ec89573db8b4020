"""Custom exception classes for the application.

This module provides domain-specific exception classes that carry
appropriate HTTP status codes, an error code tag and structured error
information.
"""

from __future__ import annotations

from typing import Any
from typing import Optional

INVALID_REQUEST = "INVALID_REQUEST"
VALIDATION_ERROR = "VALIDATION_ERROR"
REGISTRATION_FAILED = "REGISTRATION_FAILED"
# Tag for ConfigurationError, which aborts the invocation instead of being
# rendered as a response.
INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """Base exception for application errors.

    All application-specific exceptions should inherit from this class.
    Each exception carries an HTTP status code and an error code tag.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        error_code: Machine-readable tag returned to the caller.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = INTERNAL_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        return {"error": self.error_code, "message": self.message}


class ValidationError(AppError):
    """Raised when input validation fails.

    Use VALIDATION_ERROR for semantic problems with well-formed input and
    INVALID_REQUEST when the body itself cannot be understood.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        error_code: str = VALIDATION_ERROR,
    ):
        super().__init__(message, status_code=400, error_code=error_code)
        self.field = field


class InvalidRequestError(ValidationError):
    """Raised when the request body is missing or malformed."""

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message, error_code=INVALID_REQUEST)


class RegistrationError(AppError):
    """Raised when the identity provider rejects a provisioning call.

    The upstream message is passed through unchanged.

    Attributes:
        operation: Provider operation that failed.
        user_id: Username the call was made for.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        user_id: Optional[str] = None,
    ):
        super().__init__(
            message,
            status_code=500,
            error_code=REGISTRATION_FAILED,
        )
        self.operation = operation
        self.user_id = user_id


class ConfigurationError(AppError):
    """Raised when required configuration is missing.

    Use when environment variables or settings are not properly configured.
    """

    def __init__(self, config_name: str):
        super().__init__(
            f"Missing required configuration: {config_name}",
            status_code=500,
        )
        self.config_name = config_name
