"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ConflictError, NotFoundError


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no usable authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            "Username already taken",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user does not exist."""

    def __init__(self, identifier: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user": identifier},
        )
