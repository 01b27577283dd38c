"""
User repositories.

Two implementations of IUserRepository:
- InMemoryUserRepository: dict-backed, for development and tests
- SupabaseUserRepository: the `users` table through the Supabase client
"""

import threading
from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError
from supabase import Client

from shared.exceptions import PersistenceError
from shared.repository import BaseRepository
from .exceptions import UsernameTakenError
from .models import User

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class InMemoryUserRepository:
    """
    User store kept in process memory.

    IDs are allocated from a counter starting at 1. Data does not
    survive a restart.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, username: str, password_hash: str) -> User:
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise UsernameTakenError(username)
            user = User(
                id=self._next_id,
                username=username,
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            self._next_id += 1
            return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def get_many(self, user_ids: list[int]) -> list[User]:
        return [self._users[i] for i in user_ids if i in self._users]

    def ping(self) -> bool:
        return True


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for the `users` table.

    Note: This repository does NOT check passwords or issue tokens.
    The service layer owns those concerns.
    """

    TABLE = "users"

    def __init__(self, db: Client) -> None:
        super().__init__(db)

    def create(self, username: str, password_hash: str) -> User:
        data = {
            "username": username,
            "password_hash": password_hash,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = self._db.table(self.TABLE).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UsernameTakenError(username) from e
            raise PersistenceError("create user", str(e)) from e
        return self._map_to_user(result.data[0])

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._translate_errors("get user by id"):
            result = self._db.table(self.TABLE).select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_username(self, username: str) -> Optional[User]:
        with self._translate_errors("get user by username"):
            result = self._db.table(self.TABLE).select("*").eq("username", username).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_many(self, user_ids: list[int]) -> list[User]:
        with self._translate_errors("get users by id"):
            result = self._db.table(self.TABLE).select("*").in_("id", user_ids).execute()
        return [self._map_to_user(row) for row in result.data]

    def ping(self) -> bool:
        try:
            self._db.table(self.TABLE).select("id").limit(1).execute()
            return True
        except APIError:
            return False

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=int(data["id"]),
            username=data["username"],
            password_hash=data["password_hash"],
            created_at=data["created_at"],
        )
