"""
Token authentication dependencies.

The session token is read from the `patbin_token` cookie first, then
from an `Authorization: Bearer` header. A missing or invalid token
makes the request anonymous; routes that need a user say so by
depending on get_current_user.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import ITokenService
from shared.config import get_settings
from shared.models import AuthenticatedUser

from ..dependencies import get_token_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Cookie wins over the Authorization header."""
    cookie = request.cookies.get(get_settings().cookie_name)
    if cookie:
        return cookie
    if credentials is not None:
        return credentials.credentials
    return None


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: ITokenService = Depends(get_token_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.username}"}
            return {"message": "Hello, anonymous"}
    """
    token = extract_token(request, credentials)
    if token is None:
        return None
    return tokens.verify(token)


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if user is None:
        raise MissingTokenError()
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
