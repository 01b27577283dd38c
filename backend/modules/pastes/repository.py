"""
Paste repositories.

Two implementations of IPasteRepository:
- InMemoryPasteRepository: dict-backed, for development and tests
- SupabasePasteRepository: the `pastes` table through the Supabase client

Neither performs authorization checks. The service layer owns policy.
"""

import threading
from datetime import datetime
from typing import Optional, Any

from postgrest.exceptions import APIError
from supabase import Client

from shared.exceptions import PersistenceError
from shared.repository import BaseRepository
from . import policy
from .exceptions import PasteIdTakenError
from .models import ANONYMOUS, OwnedBy, Paste

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _newest_first(pastes: list[Paste]) -> list[Paste]:
    # Reversing first keeps later inserts ahead on equal timestamps
    return sorted(reversed(pastes), key=lambda p: p.created_at, reverse=True)


class InMemoryPasteRepository:
    """
    Paste store kept in process memory.

    A single lock serialises writes so the conditional view increment
    behaves like the database's compare-and-set.
    """

    def __init__(self) -> None:
        self._pastes: dict[str, Paste] = {}
        self._lock = threading.Lock()

    def create(self, paste: Paste) -> Paste:
        with self._lock:
            if paste.id in self._pastes:
                raise PasteIdTakenError(paste.id)
            self._pastes[paste.id] = paste.model_copy()
        return paste.model_copy()

    def get(self, paste_id: str) -> Optional[Paste]:
        paste = self._pastes.get(paste_id)
        return paste.model_copy() if paste else None

    def update(
        self,
        paste_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Optional[Paste]:
        with self._lock:
            paste = self._pastes.get(paste_id)
            if paste is None:
                return None
            updated = paste.model_copy(update={**changes, "updated_at": updated_at})
            self._pastes[paste_id] = updated
        return updated.model_copy()

    def increment_views(self, paste_id: str, expected_views: int) -> bool:
        with self._lock:
            paste = self._pastes.get(paste_id)
            if paste is None or paste.views != expected_views:
                return False
            self._pastes[paste_id] = paste.model_copy(update={"views": expected_views + 1})
            return True

    def delete(self, paste_id: str) -> bool:
        with self._lock:
            return self._pastes.pop(paste_id, None) is not None

    def list_public(self, limit: int, now: datetime) -> list[Paste]:
        public = [
            p for p in self._pastes.values()
            if p.is_public and not policy.is_expired(p, now) and not policy.is_burned(p)
        ]
        return [p.model_copy() for p in _newest_first(public)[:limit]]

    def list_by_owner(self, user_id: int, public_only: bool = False) -> list[Paste]:
        owned = [
            p for p in self._pastes.values()
            if p.owner_id == user_id and (p.is_public or not public_only)
        ]
        return [p.model_copy() for p in _newest_first(owned)]

    def ping(self) -> bool:
        return True


class SupabasePasteRepository(BaseRepository[Paste]):
    """
    Repository for the `pastes` table.

    The owner sum type is stored as a nullable `user_id` column
    (NULL for anonymous pastes).
    """

    TABLE = "pastes"

    def __init__(self, db: Client) -> None:
        super().__init__(db)

    def create(self, paste: Paste) -> Paste:
        try:
            result = self._db.table(self.TABLE).insert(self._map_to_row(paste)).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise PasteIdTakenError(paste.id) from e
            raise PersistenceError("create paste", str(e)) from e
        return self._map_to_paste(result.data[0])

    def get(self, paste_id: str) -> Optional[Paste]:
        with self._translate_errors("get paste"):
            result = self._db.table(self.TABLE).select("*").eq("id", paste_id).execute()
        if not result.data:
            return None
        return self._map_to_paste(result.data[0])

    def update(
        self,
        paste_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Optional[Paste]:
        data = {**changes, "updated_at": updated_at.isoformat()}
        with self._translate_errors("update paste"):
            result = self._db.table(self.TABLE).update(data).eq("id", paste_id).execute()
        if not result.data:
            return None
        return self._map_to_paste(result.data[0])

    def increment_views(self, paste_id: str, expected_views: int) -> bool:
        with self._translate_errors("increment views"):
            result = (
                self._db.table(self.TABLE)
                .update({"views": expected_views + 1})
                .eq("id", paste_id)
                .eq("views", expected_views)
                .execute()
            )
        return bool(result.data)

    def delete(self, paste_id: str) -> bool:
        with self._translate_errors("delete paste"):
            result = self._db.table(self.TABLE).delete().eq("id", paste_id).execute()
        return bool(result.data)

    def list_public(self, limit: int, now: datetime) -> list[Paste]:
        # Expired and burned rows are left for the next direct access to delete
        cutoff = now.isoformat()
        with self._translate_errors("list public pastes"):
            result = (
                self._db.table(self.TABLE)
                .select("*")
                .eq("is_public", True)
                .or_(f"expires_at.is.null,expires_at.gt.\"{cutoff}\"")
                .or_("burn_after_read.is.false,views.eq.0")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        return [self._map_to_paste(row) for row in result.data]

    def list_by_owner(self, user_id: int, public_only: bool = False) -> list[Paste]:
        query = self._db.table(self.TABLE).select("*").eq("user_id", user_id)
        if public_only:
            query = query.eq("is_public", True)
        with self._translate_errors("list pastes by owner"):
            result = query.order("created_at", desc=True).execute()
        return [self._map_to_paste(row) for row in result.data]

    def ping(self) -> bool:
        try:
            self._db.table(self.TABLE).select("id").limit(1).execute()
            return True
        except APIError:
            return False

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_row(self, paste: Paste) -> dict[str, Any]:
        """Map Paste model to a database row."""
        row = paste.model_dump(mode="json", exclude={"owner"})
        row["user_id"] = paste.owner_id
        return row

    def _map_to_paste(self, data: dict[str, Any]) -> Paste:
        """Map database row to Paste model."""
        user_id = data.get("user_id")
        owner = OwnedBy(user_id=int(user_id)) if user_id is not None else ANONYMOUS

        return Paste(
            id=data["id"],
            title=data.get("title"),
            content=data["content"],
            language=data.get("language"),
            is_public=data.get("is_public", True),
            views=data.get("views", 0),
            expires_at=data.get("expires_at"),
            burn_after_read=data.get("burn_after_read", False),
            owner=owner,
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
