"""
Base exception classes for the Patbin backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps the bases to HTTP status codes, so a module never has
to know about HTTP.
"""

from typing import Optional, Any


class PatbinError(Exception):
    """
    Base exception for all Patbin errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(PatbinError):
    """Resource not found."""

    pass


class ValidationError(PatbinError):
    """Input validation failed."""

    pass


class AuthenticationError(PatbinError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(PatbinError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(PatbinError):
    """Resource already exists."""

    pass


class ExternalServiceError(PatbinError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class PersistenceError(ExternalServiceError):
    """The backing store rejected or failed an operation."""

    def __init__(self, operation: str, original_error: Optional[str] = None):
        super().__init__(
            f"Storage operation failed: {operation}",
            service="database",
            code="PERSISTENCE_ERROR",
            details={"operation": operation, "original_error": original_error},
        )


class ConfigurationError(PatbinError):
    """Settings are missing or inconsistent for the selected backend."""

    pass
