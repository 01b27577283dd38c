"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The storage backend (in-memory or Supabase) is chosen here from settings;
nothing below the container knows which one is in use.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, ITokenService, IUserRepository
    from modules.pastes.interfaces import IPasteRepository, IPasteService


class ServiceContainer:
    """
    Container for all service instances.

    Services and repositories are created lazily on first access and
    cached as singletons within the container. Use reset() to clear
    them for testing.
    """

    def __init__(self) -> None:
        self._user_repository: "IUserRepository | None" = None
        self._paste_repository: "IPasteRepository | None" = None
        self._token_service: "ITokenService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._paste_service: "IPasteService | None" = None

    def _uses_supabase(self) -> bool:
        return get_settings().storage_backend == "supabase"

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the Identity Store."""
        if self._user_repository is None:
            if self._uses_supabase():
                from modules.auth.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_repository = SupabaseUserRepository(get_supabase_client())
            else:
                from modules.auth.repository import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def paste_repository(self) -> "IPasteRepository":
        """Get the Paste Store."""
        if self._paste_repository is None:
            if self._uses_supabase():
                from modules.pastes.repository import SupabasePasteRepository
                from shared.database import get_supabase_client
                self._paste_repository = SupabasePasteRepository(get_supabase_client())
            else:
                from modules.pastes.repository import InMemoryPasteRepository
                self._paste_repository = InMemoryPasteRepository()
        return self._paste_repository

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from modules.auth.tokens import TokenService
            self._token_service = TokenService()
        return self._token_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                tokens=self.tokens,
            )
        return self._auth_service

    @property
    def pastes(self) -> "IPasteService":
        """Get the paste service instance."""
        if self._paste_service is None:
            from modules.pastes.service import PasteService
            self._paste_service = PasteService(
                repository=self.paste_repository,
                recent_limit=get_settings().recent_limit,
            )
        return self._paste_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._paste_repository = None
        self._token_service = None
        self._auth_service = None
        self._paste_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_service() -> "ITokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_paste_service() -> "IPasteService":
    """FastAPI dependency for paste service."""
    return get_container().pastes
