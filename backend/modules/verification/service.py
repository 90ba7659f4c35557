"""
Email verification service implementation.

Issues single-use, time-limited six-digit codes and validates them.

Per-user state machine:
    NoCode --issue--> CodeIssued --issue--> CodeIssued (overwritten)
    CodeIssued --verify(match)--> NoCode, user verified
    CodeIssued --verify(expired)--> NoCode
    CodeIssued --verify(mismatch)--> CodeIssued
"""

import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from shared.config import Settings, get_settings
from shared.database import get_supabase_client
from shared.exceptions import AmcbunqError, ConfigurationError, ExternalServiceError

from .interfaces import IMailer, IVerificationService, IVerificationStore
from .models import (
    ResendCodeRequest,
    SendCodeRequest,
    VerificationResult,
    VerificationStatus,
    VerifyCodeRequest,
)
from .exceptions import (
    CodeExpiredError,
    CodeMismatchError,
    DependencyUnavailableError,
    InvalidCodeFormatError,
    MissingEmailError,
    NoCodeRequestedError,
    UserNotFoundError,
    VerificationNotConfiguredError,
    error_code_for,
)
from .templates import render_verification_email

logger = logging.getLogger(__name__)

CODE_LENGTH = 6


def generate_verification_code() -> str:
    """Generate a random six-digit code (100000-999999)."""
    return str(100000 + secrets.randbelow(900000))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VerificationService(IVerificationService):
    """
    Implementation of the email verification workflow.

    The store and mailer default to Supabase and Mailgun, created on
    first use so that missing credentials surface as a
    ConfigurationError result instead of failing at startup.
    """

    def __init__(
        self,
        store: Optional[IVerificationStore] = None,
        mailer: Optional[IMailer] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = _utcnow,
        code_generator: Callable[[], str] = generate_verification_code,
    ):
        self._store = store
        self._mailer = mailer
        self._settings = settings or get_settings()
        self._clock = clock
        self._generate_code = code_generator

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    async def send_code(self, request: SendCodeRequest) -> VerificationResult:
        """Issue a code and email it. Failures are returned, not raised."""
        try:
            await self._issue(
                request.user_id,
                email=request.email,
                user_name=request.user_name,
                locale=request.locale,
            )
        except Exception as e:
            return self._failure("send_code", request.user_id, e)
        return VerificationResult(success=True)

    async def resend_code(self, request: ResendCodeRequest) -> VerificationResult:
        """Issue a fresh code to the stored email address."""
        try:
            await self._issue(request.user_id, locale=request.locale)
        except Exception as e:
            return self._failure("resend_code", request.user_id, e)
        return VerificationResult(success=True)

    async def verify_code(self, request: VerifyCodeRequest) -> VerificationResult:
        """Validate a submitted code. Failures are returned, not raised."""
        try:
            self._verify(request.user_id, request.code)
        except Exception as e:
            return self._failure("verify_code", request.user_id, e)
        return VerificationResult(success=True)

    async def get_status(self, user_id: str) -> VerificationStatus:
        """Report verification state without revealing the code."""
        record = self._get_store().get_user(user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return VerificationStatus(
            user_id=record.user_id,
            email_verified=record.email_verified,
            code_pending=record.has_pending_code,
            expires_at=record.expires_at if record.has_pending_code else None,
        )

    # -------------------------------------------------------------------------
    # Workflow steps
    # -------------------------------------------------------------------------

    async def _issue(
        self,
        user_id: str,
        email: Optional[str] = None,
        user_name: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> None:
        store = self._get_store()
        mailer = self._get_mailer()
        if not mailer.configured:
            raise VerificationNotConfiguredError(
                "Email delivery is not configured. Cannot send verification code."
            )

        record = store.get_user(user_id)
        if record is None:
            raise UserNotFoundError(user_id)

        recipient = email or record.email
        if not recipient:
            raise MissingEmailError(user_id)

        ttl = self._settings.verification_code_ttl_minutes
        code = self._generate_code()
        expires_at = self._clock() + timedelta(minutes=ttl)

        # Written before sending: a delivery failure leaves the code live for a resend.
        store.save_code(user_id, code, expires_at)
        logger.info("Issued verification code for user %s, expires %s", user_id, expires_at.isoformat())

        message = render_verification_email(
            to=recipient,
            user_name=user_name or record.display_name or recipient,
            code=code,
            ttl_minutes=ttl,
            brand=self._settings.brand_name,
            base_url=self._settings.public_base_url,
            locale=locale,
            now=self._clock(),
        )
        await mailer.send(message)

    def _verify(self, user_id: str, code: str) -> None:
        if len(code) != CODE_LENGTH:
            raise InvalidCodeFormatError(len(code))

        store = self._get_store()
        record = store.get_user(user_id)
        if record is None:
            raise UserNotFoundError(user_id)

        if not record.has_pending_code:
            raise NoCodeRequestedError(user_id)

        if self._clock() > record.expires_at:
            store.clear_code(user_id, record.code)
            logger.info("Verification code for user %s expired, cleared", user_id)
            raise CodeExpiredError(user_id)

        if not hmac.compare_digest(code.encode("utf-8"), record.code.encode("utf-8")):
            logger.debug("Verification code mismatch for user %s", user_id)
            raise CodeMismatchError(user_id)

        if not store.consume_code(user_id, record.code):
            # Another request consumed or replaced the code after our read.
            raise NoCodeRequestedError(user_id)

        logger.info("Email verified for user %s", user_id)

        if self._settings.verification_sync_auth:
            self._sync_auth(store, user_id)

    def _sync_auth(self, store: IVerificationStore, user_id: str) -> None:
        """
        Mirror the verified flag into Supabase Auth.

        Runs only for the request that consumed the code. The users row is
        the system of record, so a failure here is logged and the
        verification still succeeds.
        """
        try:
            store.confirm_identity(user_id)
        except AmcbunqError as e:
            logger.error("Auth sync failed for verified user %s: %s", user_id, e.message)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_store(self) -> IVerificationStore:
        if self._store is None:
            from .repository import UserVerificationRepository
            self._store = UserVerificationRepository(get_supabase_client())
        return self._store

    def _get_mailer(self) -> IMailer:
        if self._mailer is None:
            from .mailer import MailgunMailer
            self._mailer = MailgunMailer.from_settings(self._settings)
        return self._mailer

    def _failure(self, operation: str, user_id: str, error: Exception) -> VerificationResult:
        """Convert an exception into a failed result at the operation boundary."""
        if not isinstance(error, AmcbunqError):
            logger.exception("Unexpected error in %s for user %s", operation, user_id)
            error = DependencyUnavailableError("verification", str(error) or error.__class__.__name__)
        elif isinstance(error, (ExternalServiceError, ConfigurationError)):
            logger.error("%s failed for user %s: %s", operation, user_id, error.message)

        return VerificationResult(
            success=False,
            error=error.message,
            error_code=error_code_for(error),
        )
