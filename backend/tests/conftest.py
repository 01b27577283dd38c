"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from datetime import datetime, timedelta, timezone

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import reset_container
from shared.config import get_settings
from shared.database import reset_client_cache


TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: int = 1,
    username: str = "alice",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token the way the token service would.

    Args:
        user_id: User ID to embed
        username: Username to embed
        expired: If True, creates a token that expired an hour ago
        secret: Signing key
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)

    payload = {
        "sub": str(user_id),
        "user_id": user_id,
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Fresh settings and an empty in-memory container for every test."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client() -> TestClient:
    """TestClient over a freshly created app."""
    return TestClient(create_app())


@pytest.fixture
def register(client):
    """
    Register a user and return their bearer headers.

    The session cookie set by registration is dropped so each request
    authenticates only with the headers it is given.
    """

    def _register(username: str = "alice", password: str = "secret123") -> dict[str, str]:
        response = client.post(
            "/api/auth/register",
            json={"username": username, "password": password},
        )
        assert response.status_code == 201, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register) -> dict[str, str]:
    """Bearer headers for a freshly registered user 'alice'."""
    return register("alice")
