"""
Pastes module interfaces.

IPasteRepository is the Paste Store contract the service is built on.
IPasteService is what the API layer depends on for every paste operation.
"""

from datetime import datetime
from typing import Protocol, Optional, Any, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    CreatePasteRequest,
    Dashboard,
    Paste,
    UpdatePasteRequest,
)


@runtime_checkable
class IPasteRepository(Protocol):
    """
    Paste Store contract.

    Implementations persist Paste records. They perform no access checks;
    the service layer is responsible for policy.
    """

    def create(self, paste: Paste) -> Paste:
        """
        Insert a new paste and return the stored record.

        Raises:
            PasteIdTakenError: If a paste with the same ID already exists
        """
        ...

    def get(self, paste_id: str) -> Optional[Paste]:
        """Get a paste by ID, or None."""
        ...

    def update(
        self,
        paste_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Optional[Paste]:
        """
        Apply field changes and refresh updated_at.

        Returns:
            The updated paste, or None if it no longer exists
        """
        ...

    def increment_views(self, paste_id: str, expected_views: int) -> bool:
        """
        Set views to expected_views + 1 if views still equals expected_views.

        Returns:
            True if the increment was applied, False if the paste changed
            or disappeared in the meantime
        """
        ...

    def delete(self, paste_id: str) -> bool:
        """Hard-delete a paste. Returns True if a row was removed."""
        ...

    def list_public(self, limit: int, now: datetime) -> list[Paste]:
        """
        Public pastes that are neither expired nor burned as of `now`,
        newest first, at most `limit`.
        """
        ...

    def list_by_owner(self, user_id: int, public_only: bool = False) -> list[Paste]:
        """A user's pastes, newest first."""
        ...

    def ping(self) -> bool:
        """Return True if the store is reachable."""
        ...


@runtime_checkable
class IPasteService(Protocol):
    """
    Interface for paste lifecycle operations.

    `requester` is None for anonymous callers throughout.
    """

    async def create_paste(
        self,
        request: CreatePasteRequest,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Create a paste owned by the requester (or anonymous).

        Raises:
            ValidationError: If the request is invalid
        """
        ...

    async def get_paste(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Read a paste and count the view.

        Raises:
            PasteNotFoundError: Missing, expired or burned (the latter two
                are deleted on discovery)
            PastePrivateError: Private and requester is not the owner
            ViewNotCountedError: Concurrent readers kept winning the view
                increment
        """
        ...

    async def get_raw_content(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> str:
        """
        Return paste content without counting a view or burning it.

        Raises:
            PasteNotFoundError: Missing or expired
            PastePrivateError: Private and requester is not the owner
        """
        ...

    async def update_paste(
        self,
        paste_id: str,
        request: UpdatePasteRequest,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Partially update an owned paste.

        Raises:
            MissingTokenError: Requester is anonymous
            PasteNotFoundError: Missing, expired or burned
            PasteAccessDeniedError: Requester is not the owner
        """
        ...

    async def delete_paste(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> None:
        """
        Delete an owned paste.

        Raises:
            MissingTokenError: Requester is anonymous
            PasteNotFoundError: Missing, expired or burned
            PasteAccessDeniedError: Requester is not the owner
        """
        ...

    async def fork_paste(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Copy a readable paste into a new public, permanent paste.

        Raises:
            PasteNotFoundError: Source missing, expired or burned
            PastePrivateError: Source is private to someone else
        """
        ...

    async def list_recent(self, limit: Optional[int] = None) -> list[Paste]:
        """Newest public pastes."""
        ...

    async def list_by_owner(self, user_id: int, public_only: bool = False) -> list[Paste]:
        """A user's pastes, newest first."""
        ...

    async def get_dashboard(self, requester: Optional[AuthenticatedUser]) -> Dashboard:
        """
        The requester's pastes with counts.

        Raises:
            MissingTokenError: Requester is anonymous
        """
        ...
