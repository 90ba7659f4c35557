"""
Verification repository for database access.

Reads and writes the verification columns of the ``users`` table:
- email_verified
- email_verification_code
- email_verification_code_expires

Conditional updates filter on the expected code so that PostgREST runs a
single ``UPDATE ... WHERE id = ? AND email_verification_code = ?``. Only
one of several concurrent callers can match the row.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from postgrest.exceptions import APIError

from shared.exceptions import AmcbunqError
from shared.repository import BaseRepository

from .exceptions import DependencyUnavailableError, UserNotFoundError
from .models import VerificationRecord

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "id, email, display_name, email_verified, "
    "email_verification_code, email_verification_code_expires"
)

# Postgres SQLSTATE for a value that does not parse as the column type
INVALID_TEXT_REPRESENTATION = "22P02"


@contextmanager
def _store_errors(service: str = "supabase") -> Iterator[None]:
    """Surface client failures (timeouts, HTTP and API errors) as DependencyUnavailableError."""
    try:
        yield
    except AmcbunqError:
        raise
    except Exception as e:
        logger.warning("%s call failed: %s", service, e)
        raise DependencyUnavailableError(service, str(e)) from e


class UserVerificationRepository(BaseRepository[VerificationRecord]):
    """
    Repository for per-user verification state.

    Note: This repository does NOT decide whether a code is valid.
    The service layer owns the workflow; this class only persists it.
    """

    table_name = "users"

    def get_user(self, user_id: str) -> Optional[VerificationRecord]:
        """
        Load the verification record for a user.

        Args:
            user_id: The user UUID.

        Returns:
            VerificationRecord, or None if the user does not exist.
        """
        with _store_errors():
            try:
                result = self._table().select(USER_COLUMNS).eq("id", user_id).limit(1).execute()
            except APIError as e:
                # A malformed id cannot match any row of the uuid primary key.
                if e.code == INVALID_TEXT_REPRESENTATION:
                    return None
                raise

        row = self._first(result)
        if row is None:
            return None
        return self._map_to_record(row)

    def save_code(self, user_id: str, code: str, expires_at: datetime) -> None:
        """
        Store a new code, replacing any previous one.

        Raises:
            UserNotFoundError: If no row was updated.
        """
        data = {
            "email_verification_code": code,
            "email_verification_code_expires": expires_at.isoformat(),
        }
        with _store_errors():
            result = self._table().update(data).eq("id", user_id).execute()

        if not result.data:
            raise UserNotFoundError(user_id)

    def clear_code(self, user_id: str, expected_code: str) -> bool:
        """
        Clear code and expiry if the stored code is still expected_code.

        Returns:
            True if a row was cleared.
        """
        data = {
            "email_verification_code": None,
            "email_verification_code_expires": None,
        }
        with _store_errors():
            result = (
                self._table()
                .update(data)
                .eq("id", user_id)
                .eq("email_verification_code", expected_code)
                .execute()
            )
        return bool(result.data)

    def consume_code(self, user_id: str, expected_code: str) -> bool:
        """
        Mark the user verified and clear the code in one conditional update.

        Returns:
            True if this call consumed the code.
        """
        data = {
            "email_verified": True,
            "email_verification_code": None,
            "email_verification_code_expires": None,
        }
        with _store_errors():
            result = (
                self._table()
                .update(data)
                .eq("id", user_id)
                .eq("email_verification_code", expected_code)
                .execute()
            )
        return bool(result.data)

    def confirm_identity(self, user_id: str) -> None:
        """Set email_confirm on the Supabase Auth user. Idempotent."""
        with _store_errors("supabase-auth"):
            self._db.auth.admin.update_user_by_id(user_id, {"email_confirm": True})

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_record(self, data: dict[str, Any]) -> VerificationRecord:
        """Map database row to VerificationRecord model."""
        return VerificationRecord(
            user_id=str(data["id"]),
            email=data.get("email"),
            display_name=data.get("display_name"),
            email_verified=bool(data.get("email_verified") or False),
            code=data.get("email_verification_code"),
            expires_at=_parse_timestamp(data.get("email_verification_code_expires")),
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamptz column, assuming UTC when no offset is present."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
