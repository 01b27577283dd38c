"""
Authentication API endpoints.

Registration and login set the session cookie; logout clears it.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_auth_service
from api.middleware.auth import get_optional_user
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import MissingTokenError
from .interfaces import IAuthService
from .models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserPublic,
)

router = APIRouter()


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only cookie."""
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.token_max_age,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create a new account and start a session.

    Returns 409 if the username is already taken.
    """
    user, token = await service.register(request.username, request.password)
    set_session_cookie(response, token)
    return AuthResponse(message="Registration successful", user=user, token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Authenticate and start a session."""
    user, token = await service.login(request.username, request.password)
    set_session_cookie(response, token)
    return AuthResponse(message="Login successful", user=user, token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Tokens are stateless, so nothing is revoked."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserPublic)
async def me(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserPublic:
    """Return the current authenticated user."""
    if user is None:
        raise MissingTokenError("Not authenticated")
    return await service.get_user(user.id)
