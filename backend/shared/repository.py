"""
Base repository class for database access.

Provides a common abstraction layer for the Supabase-backed repositories,
encapsulating client access and translating PostgREST failures into
PersistenceError.
"""

from contextlib import contextmanager
import logging
from typing import TypeVar, Generic, Iterator

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import PersistenceError


T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _translate_errors() context manager for wrapping queries

    Subclasses implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class PasteRepository(BaseRepository[Paste]):
            def get(self, paste_id: str) -> Optional[Paste]:
                with self._translate_errors("get paste"):
                    result = self._db.table("pastes").select("*").eq("id", paste_id).execute()
                if not result.data:
                    return None
                return self._map_to_paste(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Re-raise PostgREST errors as PersistenceError."""
        try:
            yield
        except APIError as e:
            logger.error(f"Database error during '{operation}': {e}")
            raise PersistenceError(operation, str(e)) from e
