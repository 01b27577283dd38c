"""
Paste lifecycle service.

Coordinates ID allocation, expiry computation, forks, view counting and the
delete-on-expiry / delete-after-burn side effects on top of an injected
Paste Store. Access decisions come from the policy module.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from modules.auth.exceptions import MissingTokenError
from shared.models import AuthenticatedUser

from . import policy
from .exceptions import (
    PasteAccessDeniedError,
    PasteBurnedError,
    PasteExpiredError,
    PasteNotFoundError,
    PasteIdTakenError,
    PastePrivateError,
    ViewNotCountedError,
)
from .ids import generate_paste_id
from .interfaces import IPasteRepository, IPasteService
from .models import (
    ANONYMOUS,
    CreatePasteRequest,
    Dashboard,
    OwnedBy,
    Paste,
    UpdatePasteRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 20

# Attempts at the conditional view increment before the read fails
MAX_VIEW_RETRIES = 5

FORK_SUFFIX = "(Fork)"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasteService(IPasteService):
    """
    Paste service over an injected repository.

    Implements IPasteService. The clock and ID factory are injectable so
    expiry and ID collisions can be exercised deterministically.
    """

    def __init__(
        self,
        repository: IPasteRepository,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ):
        self._repository = repository
        self._clock = clock or utcnow
        self._id_factory = id_factory or generate_paste_id
        self._recent_limit = recent_limit

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    async def create_paste(
        self,
        request: CreatePasteRequest,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """Create a new paste owned by the requester, or anonymous."""
        now = self._clock()

        expires_at = None
        if request.expires_in is not None and request.expires_in.duration is not None:
            expires_at = now + request.expires_in.duration

        paste = Paste(
            id=self._id_factory(),
            title=request.title,
            content=request.content,
            language=request.language,
            is_public=request.is_public,
            views=0,
            expires_at=expires_at,
            burn_after_read=request.burn_after_read,
            owner=self._owner_for(requester),
            created_at=now,
            updated_at=now,
        )

        created = self._insert(paste)
        logger.info(f"Created paste {created.id} (owner={created.owner_id})")
        return created

    async def fork_paste(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Copy a readable paste into a new public paste.

        The fork never inherits expiry or burn-after-read, and the
        source's view count is left alone.
        """
        original = self._load_live(paste_id)
        if not policy.can_read(original, requester):
            raise PastePrivateError(paste_id, "Cannot fork a private paste")

        now = self._clock()
        forked = Paste(
            id=self._id_factory(),
            title=f"{original.title} {FORK_SUFFIX}" if original.title else FORK_SUFFIX,
            content=original.content,
            language=original.language,
            is_public=True,
            views=0,
            expires_at=None,
            burn_after_read=False,
            owner=self._owner_for(requester),
            created_at=now,
            updated_at=now,
        )

        created = self._insert(forked)
        logger.info(f"Forked paste {original.id} into {created.id}")
        return created

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_paste(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Read a paste: expiry, then burn, then visibility, then count the view.

        The returned record carries the post-increment view count. If the
        view cannot be counted the read fails rather than returning a stale
        count.
        """
        paste = self._load_live(paste_id)
        if not policy.can_read(paste, requester):
            raise PastePrivateError(paste_id)
        return self._count_view(paste)

    async def get_raw_content(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> str:
        """
        Plain-text content for the raw endpoint.

        Enforces expiry and visibility only: raw reads neither count a
        view nor burn a burn-after-read paste.
        """
        paste = self._get_or_404(paste_id)
        if policy.is_expired(paste, self._clock()):
            self._purge(paste, "expired")
            raise PasteExpiredError(paste_id)
        if not policy.can_read(paste, requester):
            raise PastePrivateError(paste_id)
        return paste.content

    async def list_recent(self, limit: Optional[int] = None) -> list[Paste]:
        """Newest public pastes that are still live, up to the limit."""
        return self._repository.list_public(limit or self._recent_limit, self._clock())

    async def list_by_owner(self, user_id: int, public_only: bool = False) -> list[Paste]:
        pastes = self._repository.list_by_owner(user_id, public_only=public_only)
        return self._without_gone(pastes)

    async def get_dashboard(self, requester: Optional[AuthenticatedUser]) -> Dashboard:
        if requester is None:
            raise MissingTokenError()

        pastes = await self.list_by_owner(requester.id)
        public_count = sum(1 for p in pastes if p.is_public)
        return Dashboard(
            pastes=pastes,
            total_count=len(pastes),
            public_count=public_count,
            private_count=len(pastes) - public_count,
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def update_paste(
        self,
        paste_id: str,
        request: UpdatePasteRequest,
        requester: Optional[AuthenticatedUser],
    ) -> Paste:
        """
        Partial update. Empty fields are ignored; updated_at always moves.
        """
        if requester is None:
            raise MissingTokenError()

        paste = self._load_live(paste_id)
        self._check_mutable(paste, requester, "edit")

        updated = self._repository.update(paste.id, request.changes(), self._clock())
        if updated is None:
            raise PasteNotFoundError(paste_id)
        return updated

    async def delete_paste(
        self,
        paste_id: str,
        requester: Optional[AuthenticatedUser],
    ) -> None:
        if requester is None:
            raise MissingTokenError()

        paste = self._load_live(paste_id)
        self._check_mutable(paste, requester, "delete")

        if not self._repository.delete(paste.id):
            raise PasteNotFoundError(paste_id)
        logger.info(f"Deleted paste {paste.id}")

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _insert(self, paste: Paste) -> Paste:
        """Store a new paste, drawing a fresh ID each time the store reports a clash."""
        while True:
            try:
                return self._repository.create(paste)
            except PasteIdTakenError:
                logger.debug(f"Paste ID collision on {paste.id}, retrying")
                paste = paste.model_copy(update={"id": self._id_factory()})

    def _owner_for(self, requester: Optional[AuthenticatedUser]):
        if requester is None:
            return ANONYMOUS
        return OwnedBy(user_id=requester.id)

    def _get_or_404(self, paste_id: str) -> Paste:
        paste = self._repository.get(paste_id)
        if paste is None:
            raise PasteNotFoundError(paste_id)
        return paste

    def _load_live(self, paste_id: str) -> Paste:
        """
        Load a paste that is not logically gone.

        An expired or already-burned paste is deleted by the access that
        discovers it and reported as not found.
        """
        paste = self._get_or_404(paste_id)

        if policy.is_expired(paste, self._clock()):
            self._purge(paste, "expired")
            raise PasteExpiredError(paste_id)

        if policy.is_burned(paste):
            self._purge(paste, "burned")
            raise PasteBurnedError(paste_id)

        return paste

    def _purge(self, paste: Paste, reason: str) -> None:
        self._repository.delete(paste.id)
        logger.info(f"Deleted {reason} paste {paste.id}")

    def _check_mutable(self, paste: Paste, requester: AuthenticatedUser, action: str) -> None:
        decision = policy.can_mutate(paste, requester)
        if decision.reason == policy.DenyReason.NOT_AUTHENTICATED:
            raise MissingTokenError()
        if not decision:
            raise PasteAccessDeniedError(paste.id, action)

    def _count_view(self, paste: Paste) -> Paste:
        """
        Increment views with a compare-and-set on the observed count.

        Losing the race on a burn-after-read paste means another reader
        got the single permitted read, so this one sees it as burned.
        """
        current = paste
        for _ in range(MAX_VIEW_RETRIES):
            if self._repository.increment_views(current.id, current.views):
                return current.model_copy(update={"views": current.views + 1})

            if current.burn_after_read:
                self._purge(current, "burned")
                raise PasteBurnedError(current.id)

            fresh = self._repository.get(current.id)
            if fresh is None:
                raise PasteNotFoundError(current.id)
            current = fresh

        logger.warning(f"Gave up counting view on paste {paste.id} after {MAX_VIEW_RETRIES} attempts")
        raise ViewNotCountedError(paste.id, MAX_VIEW_RETRIES)

    def _without_gone(self, pastes: list[Paste]) -> list[Paste]:
        now = self._clock()
        return [
            p for p in pastes
            if not policy.is_expired(p, now) and not policy.is_burned(p)
        ]
