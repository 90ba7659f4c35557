"""
Verification module interfaces.

The service depends on IVerificationStore and IMailer, not on Supabase or
Mailgun directly. This enables testing with fakes and swapping providers.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import (
    EmailMessage,
    ResendCodeRequest,
    SendCodeRequest,
    VerificationRecord,
    VerificationResult,
    VerificationStatus,
    VerifyCodeRequest,
)


@runtime_checkable
class IVerificationStore(Protocol):
    """
    Persistence contract for per-user verification state.

    The conditional methods must be single atomic updates: they only
    touch the row while its stored code still equals ``expected_code``.
    """

    def get_user(self, user_id: str) -> Optional[VerificationRecord]:
        """Load the user's verification record, or None if the user is unknown."""
        ...

    def save_code(self, user_id: str, code: str, expires_at: datetime) -> None:
        """
        Store a code and its expiry, overwriting any previous code.

        Raises:
            UserNotFoundError: If the user row does not exist
        """
        ...

    def clear_code(self, user_id: str, expected_code: str) -> bool:
        """Clear code and expiry if the stored code is still expected_code."""
        ...

    def consume_code(self, user_id: str, expected_code: str) -> bool:
        """
        Set the verified flag and clear code and expiry in one update.

        Returns:
            True if this call consumed the code, False if it was already
            consumed or replaced
        """
        ...

    def confirm_identity(self, user_id: str) -> None:
        """Mirror the verified state into the authentication provider."""
        ...


@runtime_checkable
class IMailer(Protocol):
    """Transactional email sender."""

    @property
    def configured(self) -> bool:
        """Whether credentials needed to send are present."""
        ...

    async def send(self, message: EmailMessage) -> None:
        """
        Send an email.

        Raises:
            DependencyUnavailableError: If the provider is unreachable or rejects it
            VerificationNotConfiguredError: If credentials are missing
        """
        ...


@runtime_checkable
class IVerificationService(Protocol):
    """
    Interface for email verification operations.

    Every method except get_status reports failures in the returned
    VerificationResult instead of raising.
    """

    async def send_code(self, request: SendCodeRequest) -> VerificationResult:
        """Issue a six-digit code and email it."""
        ...

    async def resend_code(self, request: ResendCodeRequest) -> VerificationResult:
        """Issue a fresh code to the stored email address."""
        ...

    async def verify_code(self, request: VerifyCodeRequest) -> VerificationResult:
        """Validate a submitted code and mark the user verified on success."""
        ...

    async def get_status(self, user_id: str) -> VerificationStatus:
        """
        Report whether the user is verified and a code is pending.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...
