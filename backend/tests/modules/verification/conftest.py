"""
Pytest fixtures for verification module tests.

Provides in-memory stand-ins for the Supabase store and the Mailgun mailer.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from modules.verification.exceptions import UserNotFoundError
from modules.verification.models import EmailMessage, VerificationRecord
from modules.verification.service import VerificationService
from shared.config import Settings


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryVerificationStore:
    """
    IVerificationStore backed by a dict.

    Conditional updates run under a lock, the way a single UPDATE ... WHERE
    runs atomically in Postgres. An optional barrier makes concurrent
    readers wait for each other after get_user.
    """

    def __init__(self, barrier: Optional[threading.Barrier] = None):
        self.rows: dict[str, dict] = {}
        self.get_user_calls = 0
        self.confirmed: list[str] = []
        self.barrier = barrier
        self._lock = threading.Lock()

    def add_user(
        self,
        user_id: str,
        email: Optional[str] = "user@example.com",
        display_name: Optional[str] = "Camille",
        email_verified: bool = False,
        code: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> None:
        self.rows[user_id] = {
            "email": email,
            "display_name": display_name,
            "email_verified": email_verified,
            "code": code,
            "expires_at": expires_at,
        }

    def row(self, user_id: str) -> dict:
        return self.rows[user_id]

    def get_user(self, user_id: str) -> Optional[VerificationRecord]:
        with self._lock:
            self.get_user_calls += 1
            row = self.rows.get(user_id)
            record = None if row is None else VerificationRecord(user_id=user_id, **row)
        if self.barrier is not None:
            self.barrier.wait()
        return record

    def save_code(self, user_id: str, code: str, expires_at: datetime) -> None:
        with self._lock:
            if user_id not in self.rows:
                raise UserNotFoundError(user_id)
            self.rows[user_id].update(code=code, expires_at=expires_at)

    def clear_code(self, user_id: str, expected_code: str) -> bool:
        with self._lock:
            row = self.rows.get(user_id)
            if row is None or row["code"] != expected_code:
                return False
            row.update(code=None, expires_at=None)
            return True

    def consume_code(self, user_id: str, expected_code: str) -> bool:
        with self._lock:
            row = self.rows.get(user_id)
            if row is None or row["code"] != expected_code:
                return False
            row.update(email_verified=True, code=None, expires_at=None)
            return True

    def confirm_identity(self, user_id: str) -> None:
        with self._lock:
            self.confirmed.append(user_id)


class FakeMailer:
    """IMailer that records messages instead of sending them."""

    def __init__(self, configured: bool = True, error: Optional[Exception] = None):
        self._configured = configured
        self.error = error
        self.sent: list[EmailMessage] = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def send(self, message: EmailMessage) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)


class FrozenClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        brand_name="AmCbunq",
        public_base_url="https://amcbunq.example",
        verification_code_ttl_minutes=10,
    )


@pytest.fixture
def store() -> InMemoryVerificationStore:
    store = InMemoryVerificationStore()
    store.add_user("user-1")
    return store


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def service(store, mailer, settings, clock) -> VerificationService:
    return VerificationService(
        store=store,
        mailer=mailer,
        settings=settings,
        clock=clock,
        code_generator=lambda: "123456",
    )
