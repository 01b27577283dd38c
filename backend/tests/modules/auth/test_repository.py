"""Tests for the user repositories."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from modules.auth.exceptions import UsernameTakenError
from modules.auth.interfaces import IUserRepository
from modules.auth.repository import InMemoryUserRepository, SupabaseUserRepository
from shared.exceptions import PersistenceError


def create_mock_user_data(user_id: int = 1, username: str = "alice") -> dict:
    """Helper to create a users row."""
    return {
        "id": user_id,
        "username": username,
        "password_hash": "$2b$12$hash",
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


class TestInMemoryUserRepository:
    def test_implements_interface(self):
        assert isinstance(InMemoryUserRepository(), IUserRepository)

    def test_ids_start_at_one_and_increase(self):
        repo = InMemoryUserRepository()
        first = repo.create("alice", "h1")
        second = repo.create("bob", "h2")
        assert (first.id, second.id) == (1, 2)

    def test_lookup(self):
        repo = InMemoryUserRepository()
        user = repo.create("alice", "h1")
        assert repo.get_by_id(user.id) == user
        assert repo.get_by_username("alice") == user
        assert repo.get_by_username("bob") is None
        assert repo.get_by_id(99) is None

    def test_get_many(self):
        repo = InMemoryUserRepository()
        alice = repo.create("alice", "h1")
        bob = repo.create("bob", "h2")

        assert repo.get_many([bob.id, 99, alice.id]) == [bob, alice]

    def test_duplicate_username(self):
        repo = InMemoryUserRepository()
        repo.create("alice", "h1")
        with pytest.raises(UsernameTakenError):
            repo.create("alice", "h2")


class TestSupabaseUserRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return SupabaseUserRepository(mock_db)

    def test_implements_interface(self, repo):
        assert isinstance(repo, IUserRepository)

    def test_create(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_user_data()
        ]

        user = repo.create("alice", "$2b$12$hash")

        assert user.id == 1
        assert user.username == "alice"
        mock_db.table.assert_called_with("users")
        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted["username"] == "alice"
        assert inserted["password_hash"] == "$2b$12$hash"

    def test_create_unique_violation(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"message": "duplicate key value", "code": "23505"}
        )
        with pytest.raises(UsernameTakenError):
            repo.create("alice", "hash")

    def test_create_other_failure(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"message": "timeout", "code": "57014"}
        )
        with pytest.raises(PersistenceError):
            repo.create("alice", "hash")

    def test_get_by_id(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            create_mock_user_data(user_id=5)
        ]

        user = repo.get_by_id(5)

        assert user.id == 5
        mock_db.table.return_value.select.return_value.eq.assert_called_with("id", 5)

    def test_get_many(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.in_.return_value.execute.return_value.data = [
            create_mock_user_data(user_id=1),
            create_mock_user_data(user_id=2, username="bob"),
        ]

        users = repo.get_many([1, 2])

        assert [u.username for u in users] == ["alice", "bob"]
        mock_db.table.return_value.select.return_value.in_.assert_called_with("id", [1, 2])

    def test_get_by_username_not_found(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
        assert repo.get_by_username("nobody") is None

    def test_get_translates_errors(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.side_effect = APIError(
            {"message": "boom", "code": "XX000"}
        )
        with pytest.raises(PersistenceError):
            repo.get_by_username("alice")

    def test_ping(self, repo, mock_db):
        assert repo.ping() is True
        mock_db.table.return_value.select.return_value.limit.return_value.execute.side_effect = APIError(
            {"message": "down", "code": "08006"}
        )
        assert repo.ping() is False
