"""
Email verification module.

Issues single-use, time-limited six-digit codes by email and marks the
user verified when the right code comes back in time.

Public API:
- IVerificationService: Interface for verification operations
- IVerificationStore / IMailer: Collaborator contracts
- Request/result models
- Verification exceptions
"""

from .interfaces import IVerificationService, IVerificationStore, IMailer
from .models import (
    VerificationErrorCode,
    VerificationRecord,
    VerificationResult,
    VerificationStatus,
    SendCodeRequest,
    ResendCodeRequest,
    VerifyCodeRequest,
    EmailMessage,
)
from .exceptions import (
    VerificationError,
    InvalidCodeFormatError,
    MissingEmailError,
    UserNotFoundError,
    NoCodeRequestedError,
    CodeExpiredError,
    CodeMismatchError,
    DependencyUnavailableError,
    VerificationNotConfiguredError,
)

__all__ = [
    # Interfaces
    "IVerificationService",
    "IVerificationStore",
    "IMailer",
    # Models
    "VerificationErrorCode",
    "VerificationRecord",
    "VerificationResult",
    "VerificationStatus",
    "SendCodeRequest",
    "ResendCodeRequest",
    "VerifyCodeRequest",
    "EmailMessage",
    # Exceptions
    "VerificationError",
    "InvalidCodeFormatError",
    "MissingEmailError",
    "UserNotFoundError",
    "NoCodeRequestedError",
    "CodeExpiredError",
    "CodeMismatchError",
    "DependencyUnavailableError",
    "VerificationNotConfiguredError",
]
