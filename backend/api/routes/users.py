"""
User-facing listing endpoints.

Public profiles show only a user's public pastes; the dashboard shows
the caller everything they own.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.interfaces import IAuthService
from modules.auth.models import UserPublic
from modules.pastes.interfaces import IPasteService
from modules.pastes.models import Dashboard, Paste
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service, get_paste_service
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """Public profile response model."""

    user: UserPublic
    pastes: list[Paste]


@router.get("/user/{username}", response_model=UserProfileResponse)
async def get_user_profile(
    username: str,
    auth: IAuthService = Depends(get_auth_service),
    pastes: IPasteService = Depends(get_paste_service),
) -> UserProfileResponse:
    """
    Get a user's public profile.

    Returns 404 if the username is unknown.
    """
    user = await auth.get_user_by_username(username)
    public_pastes = await pastes.list_by_owner(user.id, public_only=True)
    return UserProfileResponse(user=user, pastes=public_pastes)


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(
    user: AuthenticatedUser = Depends(get_current_user),
    pastes: IPasteService = Depends(get_paste_service),
) -> Dashboard:
    """
    Get the current user's pastes with visibility counts.

    Requires authentication.
    """
    return await pastes.get_dashboard(user)
