"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with in-memory stores and swapping
the persistence backend without touching the service layer.
"""

from typing import Iterable, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from .models import User, UserPublic


@runtime_checkable
class IUserRepository(Protocol):
    """
    Identity Store contract.

    Implementations persist User records and enforce username uniqueness.
    """

    def create(self, username: str, password_hash: str) -> User:
        """
        Create a user.

        Raises:
            UsernameTakenError: If the username already exists
        """
        ...

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by numeric ID, or None."""
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, or None."""
        ...

    def get_many(self, user_ids: list[int]) -> list[User]:
        """Users whose IDs are in `user_ids`; unknown IDs are skipped."""
        ...

    def ping(self) -> bool:
        """Return True if the store is reachable."""
        ...


@runtime_checkable
class ITokenService(Protocol):
    """
    Token Service contract.

    Issues and verifies signed, time-limited session tokens.
    """

    def issue(self, user_id: int, username: str) -> str:
        """Issue a signed token for the given identity."""
        ...

    def verify(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """
        Verify a token.

        Returns:
            The embedded identity, or None for a missing, malformed,
            badly signed or expired token. Never raises.
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account operations.

    This protocol defines the contract that the auth module exposes
    to the API layer.
    """

    async def register(self, username: str, password: str) -> tuple[UserPublic, str]:
        """
        Register a new user and issue a token.

        Raises:
            UsernameTakenError: If the username is already registered
        """
        ...

    async def login(self, username: str, password: str) -> tuple[UserPublic, str]:
        """
        Authenticate a user and issue a token.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password
        """
        ...

    async def get_user(self, user_id: int) -> UserPublic:
        """
        Get a user's public profile by ID.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...

    async def get_user_by_username(self, username: str) -> UserPublic:
        """
        Get a user's public profile by username.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...

    async def find_users(self, user_ids: Iterable[int]) -> dict[int, UserPublic]:
        """
        Public profiles keyed by ID, for labelling pastes with their author.

        Unknown IDs are left out of the result rather than raising.
        """
        ...
