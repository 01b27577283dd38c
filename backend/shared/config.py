"""
Centralized configuration for the Patbin backend.

All settings are loaded from environment variables with sensible defaults.
Storage settings are namespaced (SUPABASE_*), token settings live under JWT_*.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "patbin-super-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Patbin API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8080", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Storage
    storage_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""

    # Tokens
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 7
    cookie_name: str = "patbin_token"
    cookie_secure: bool = False

    # Listings
    recent_limit: int = 20

    @property
    def token_max_age(self) -> int:
        """Cookie max age in seconds, matching the token lifetime."""
        return self.token_ttl_days * 24 * 60 * 60

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
