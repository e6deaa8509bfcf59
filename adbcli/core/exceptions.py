"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Commands catch ApplicationError, print the message and exit with -1.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when command-line input is invalid."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ConfigurationError(ApplicationError):
    """Raised when configuration is missing or malformed."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error", code: str = "SYS_EXTERNAL_SERVICE_ERROR") -> None:
        super().__init__(message, code=code)


class ApiError(ExternalServiceError):
    """
    Raised when the REST API answers with a non-2xx status.

    Carries the HTTP status, the service error code (e.g. RESOURCE_DOES_NOT_EXIST)
    and the raw response body.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str | None = None,
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.body = body
        super().__init__(message, code=error_code or "SYS_EXTERNAL_SERVICE_ERROR")

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.status_code} {self.error_code}: {self.message}"
        return f"{self.status_code}: {self.message}"
