"""
Paste API endpoints.

A paste reference in the URL may carry an extension (`1a2b3c4d.py`);
it is stripped before lookup and only used as a display hint.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.dependencies import get_auth_service, get_paste_service
from api.middleware.auth import get_current_user, get_optional_user
from modules.auth.interfaces import IAuthService
from modules.auth.models import MessageResponse
from shared.models import AuthenticatedUser

from .ids import count_lines, display_language, split_paste_ref
from .interfaces import IPasteService
from .models import AuthoredPaste, CreatePasteRequest, Paste, PasteView, UpdatePasteRequest

router = APIRouter()

# Mounted at /api/pastes
listing_router = APIRouter()

# Mounted at the site root for the short raw URL, after every other route
raw_router = APIRouter()


def _author_ids(pastes: list[Paste]) -> list[int]:
    return [p.owner_id for p in pastes if p.owner_id is not None]


@router.post("", response_model=Paste, status_code=201)
async def create_paste(
    request: CreatePasteRequest,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IPasteService = Depends(get_paste_service),
) -> Paste:
    """
    Create a paste.

    Anonymous callers get an ownerless paste that can never be edited
    or deleted.
    """
    return await service.create_paste(request, user)


@router.get("/{ref}", response_model=PasteView)
async def get_paste(
    ref: str,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IPasteService = Depends(get_paste_service),
    auth: IAuthService = Depends(get_auth_service),
) -> PasteView:
    """
    Read a paste and count the view.

    A burn-after-read paste is gone after this returns once.
    """
    paste_id, ext = split_paste_ref(ref)
    paste = await service.get_paste(paste_id, user)
    authors = await auth.find_users(_author_ids([paste]))
    return PasteView(
        **paste.model_dump(),
        user=authors.get(paste.owner_id),
        display_language=display_language(paste.language, ext),
        line_count=count_lines(paste.content),
    )


@router.put("/{ref}", response_model=Paste)
async def update_paste(
    ref: str,
    request: UpdatePasteRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPasteService = Depends(get_paste_service),
) -> Paste:
    paste_id, _ = split_paste_ref(ref)
    return await service.update_paste(paste_id, request, user)


@router.delete("/{ref}", response_model=MessageResponse)
async def delete_paste(
    ref: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPasteService = Depends(get_paste_service),
) -> MessageResponse:
    paste_id, _ = split_paste_ref(ref)
    await service.delete_paste(paste_id, user)
    return MessageResponse(message="Paste deleted successfully")


@router.post("/{ref}/fork", response_model=Paste, status_code=201)
async def fork_paste(
    ref: str,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IPasteService = Depends(get_paste_service),
) -> Paste:
    """Copy a readable paste into a new public paste owned by the caller."""
    paste_id, _ = split_paste_ref(ref)
    return await service.fork_paste(paste_id, user)


@router.get("/{ref}/raw", response_class=PlainTextResponse)
async def get_raw_paste(
    ref: str,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IPasteService = Depends(get_paste_service),
) -> PlainTextResponse:
    """
    Paste content as text/plain.

    Raw reads do not count views and do not burn burn-after-read pastes.
    """
    paste_id, _ = split_paste_ref(ref)
    content = await service.get_raw_content(paste_id, user)
    return PlainTextResponse(content)


@listing_router.get("/recent", response_model=list[AuthoredPaste])
async def list_recent(
    service: IPasteService = Depends(get_paste_service),
    auth: IAuthService = Depends(get_auth_service),
) -> list[AuthoredPaste]:
    """Newest public pastes, each with its author."""
    pastes = await service.list_recent()
    authors = await auth.find_users(_author_ids(pastes))
    return [
        AuthoredPaste(**paste.model_dump(), user=authors.get(paste.owner_id))
        for paste in pastes
    ]


raw_router.add_api_route(
    "/{ref}/raw",
    get_raw_paste,
    methods=["GET"],
    response_class=PlainTextResponse,
    include_in_schema=False,
)
