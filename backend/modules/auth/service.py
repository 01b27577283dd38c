"""
Authentication service implementation.

Registers users, checks credentials and issues session tokens.
"""

import logging
from typing import Iterable

from .exceptions import InvalidCredentialsError, UsernameTakenError, UserNotFoundError
from .interfaces import IAuthService, IUserRepository, ITokenService
from .models import UserPublic
from .passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the account service.

    Uses an injected Identity Store for persistence and an injected
    Token Service for session tokens.
    """

    def __init__(self, users: IUserRepository, tokens: ITokenService):
        self._users = users
        self._tokens = tokens

    async def register(self, username: str, password: str) -> tuple[UserPublic, str]:
        """
        Register a new user.

        The password is hashed with bcrypt before storage; the repository
        also rejects duplicates, which covers two concurrent registrations
        passing the pre-check.
        """
        if self._users.get_by_username(username) is not None:
            raise UsernameTakenError(username)

        user = self._users.create(username, hash_password(password))
        logger.info(f"Registered user {user.id} ({user.username})")

        token = self._tokens.issue(user.id, user.username)
        return user.to_public(), token

    async def login(self, username: str, password: str) -> tuple[UserPublic, str]:
        """Authenticate user and return a fresh token."""
        user = self._users.get_by_username(username)

        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for username '{username}'")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id, user.username)
        return user.to_public(), token

    async def get_user(self, user_id: int) -> UserPublic:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user.to_public()

    async def get_user_by_username(self, username: str) -> UserPublic:
        user = self._users.get_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return user.to_public()

    async def find_users(self, user_ids: Iterable[int]) -> dict[int, UserPublic]:
        wanted = sorted(set(user_ids))
        if not wanted:
            return {}
        return {user.id: user.to_public() for user in self._users.get_many(wanted)}
