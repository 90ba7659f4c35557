"""
Verification module exceptions.

The workflow raises these internally; the service converts them to a
VerificationResult at its boundary.
"""

from shared.exceptions import (
    AmcbunqError,
    NotFoundError,
    ValidationError,
    ConfigurationError,
    ExternalServiceError,
)

from .models import VerificationErrorCode


class VerificationError(AmcbunqError):
    """Base exception for verification state failures."""

    pass


class InvalidCodeFormatError(ValidationError):
    """Raised when a submitted code is not exactly six characters."""

    def __init__(self, length: int):
        super().__init__(
            "Verification code must be exactly 6 characters.",
            code=VerificationErrorCode.VALIDATION_ERROR.value,
            details={"length": length},
        )


class MissingEmailError(ValidationError):
    """Raised when there is no address to send a code to."""

    def __init__(self, user_id: str):
        super().__init__(
            "No email address is available for this user.",
            code=VerificationErrorCode.VALIDATION_ERROR.value,
            details={"user_id": user_id},
        )


class UserNotFoundError(NotFoundError):
    """Raised when the user row does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found.",
            code=VerificationErrorCode.USER_NOT_FOUND.value,
            details={"user_id": user_id},
        )


class NoCodeRequestedError(VerificationError):
    """Raised when no live code exists, including one consumed concurrently."""

    def __init__(self, user_id: str):
        super().__init__(
            "No verification code found for this user.",
            code=VerificationErrorCode.NO_CODE_REQUESTED.value,
            details={"user_id": user_id},
        )


class CodeExpiredError(VerificationError):
    """Raised when the stored code is past its expiry. The code is cleared."""

    def __init__(self, user_id: str):
        super().__init__(
            "The verification code has expired. Please request a new one.",
            code=VerificationErrorCode.CODE_EXPIRED.value,
            details={"user_id": user_id},
        )


class CodeMismatchError(VerificationError):
    """Raised when the submitted code differs from the stored one."""

    def __init__(self, user_id: str):
        super().__init__(
            "Invalid verification code.",
            code=VerificationErrorCode.CODE_MISMATCH.value,
            details={"user_id": user_id},
        )


class DependencyUnavailableError(ExternalServiceError):
    """Raised when the store or the mail API cannot be reached or rejects a call."""

    def __init__(self, service: str, reason: str):
        super().__init__(
            f"{service} is unavailable: {reason}",
            service=service,
            code=VerificationErrorCode.DEPENDENCY_UNAVAILABLE.value,
            details={"reason": reason},
        )


class VerificationNotConfiguredError(ConfigurationError):
    """Raised when server credentials needed by the workflow are absent."""

    def __init__(self, message: str):
        super().__init__(
            message,
            code=VerificationErrorCode.CONFIGURATION_ERROR.value,
        )


def error_code_for(error: AmcbunqError) -> VerificationErrorCode:
    """
    Map any backend error to a verification failure category.

    Errors raised by shared infrastructure (e.g. a missing Supabase
    configuration) carry their own codes and are mapped by type.
    """
    try:
        return VerificationErrorCode(error.code)
    except ValueError:
        pass
    if isinstance(error, ConfigurationError):
        return VerificationErrorCode.CONFIGURATION_ERROR
    if isinstance(error, ValidationError):
        return VerificationErrorCode.VALIDATION_ERROR
    if isinstance(error, NotFoundError):
        return VerificationErrorCode.USER_NOT_FOUND
    return VerificationErrorCode.DEPENDENCY_UNAVAILABLE
