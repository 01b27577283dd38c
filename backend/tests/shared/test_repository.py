"""Tests for shared/repository.py."""

from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from shared.exceptions import PersistenceError
from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "1a2b3c4d", "content": "hello"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                result = self._db.table("pastes").select("*").execute()
                return result.data

        repo = TestRepository(mock_db)
        result = repo.get_all()

        assert result == [{"id": "1a2b3c4d", "content": "hello"}]
        mock_db.table.assert_called_once_with("pastes")


class TestTranslateErrors:
    def test_passes_through_on_success(self):
        repo = BaseRepository(MagicMock())
        with repo._translate_errors("noop"):
            value = 42
        assert value == 42

    def test_wraps_api_error(self):
        repo = BaseRepository(MagicMock())

        with pytest.raises(PersistenceError) as exc_info:
            with repo._translate_errors("get paste"):
                raise APIError({"message": "connection refused", "code": "08006"})

        assert exc_info.value.details["operation"] == "get paste"
        assert isinstance(exc_info.value.__cause__, APIError)

    def test_other_exceptions_propagate(self):
        repo = BaseRepository(MagicMock())

        with pytest.raises(KeyError):
            with repo._translate_errors("get paste"):
                raise KeyError("id")
