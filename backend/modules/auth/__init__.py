"""
Authentication module.

Handles user registration, password checks, session tokens and the
Identity Store.

Public API:
- IAuthService, ITokenService, IUserRepository: Interfaces
- User, UserPublic: User records
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ITokenService, IUserRepository
from .models import User, UserPublic, TokenClaims
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UsernameTakenError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ITokenService",
    "IUserRepository",
    # Models
    "User",
    "UserPublic",
    "TokenClaims",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UsernameTakenError",
    "UserNotFoundError",
]
