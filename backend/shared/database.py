"""
Supabase client for the `supabase` storage backend.

Built lazily the first time a Supabase repository is wired up, so the
in-memory backend runs without any Supabase settings. Patbin uses the
service-role key only; paste ownership is checked in the service layer.
"""

from functools import lru_cache

from supabase import Client, create_client

from .config import get_settings
from .exceptions import ConfigurationError


@lru_cache
def get_supabase_client() -> Client:
    """
    Service-role client shared by the Supabase repositories.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    settings = get_settings()
    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", settings.supabase_url),
            ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"STORAGE_BACKEND=supabase needs {' and '.join(missing)} to be set",
            code="STORAGE_NOT_CONFIGURED",
            details={"missing": missing},
        )
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def reset_client_cache() -> None:
    """Forget the cached client so the next call reads settings again."""
    get_supabase_client.cache_clear()
