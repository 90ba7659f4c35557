"""
Base repository class for database access.

Wraps the Supabase client so feature repositories only deal with their
own tables and row-to-model mapping.
"""

from typing import Any, Generic, Optional, TypeVar
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses set ``table_name`` and implement domain-specific data access
    methods, mapping rows to Pydantic models internally.

    Example:
        class UserVerificationRepository(BaseRepository[VerificationRecord]):
            table_name = "users"

            def get_user(self, user_id: str) -> Optional[VerificationRecord]:
                row = self._first(self._table().select("*").eq("id", user_id).execute())
                return self._map(row) if row else None
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _table(self):
        """Query builder for this repository's table."""
        return self._db.table(self.table_name)

    @staticmethod
    def _first(result: Any) -> Optional[dict[str, Any]]:
        """Return the first row of a PostgREST response, or None."""
        if not result.data:
            return None
        return result.data[0]
