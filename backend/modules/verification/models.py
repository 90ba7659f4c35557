"""
Verification module data models.

These models define the data structures used by the verification module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class VerificationErrorCode(str, Enum):
    """Failure categories reported by the verification workflow."""

    VALIDATION_ERROR = "ValidationError"
    USER_NOT_FOUND = "UserNotFound"
    NO_CODE_REQUESTED = "NoCodeRequested"
    CODE_EXPIRED = "CodeExpired"
    CODE_MISMATCH = "CodeMismatch"
    DEPENDENCY_UNAVAILABLE = "DependencyUnavailable"
    CONFIGURATION_ERROR = "ConfigurationError"


class VerificationRecord(BaseModel):
    """
    Verification state stored on a user's row.

    The verified flag and the code/expiry pair live on the same row and
    are updated together.
    """

    user_id: str = Field(..., description="Owning user ID")
    email: Optional[str] = Field(None, description="Email address codes are sent to")
    display_name: Optional[str] = Field(None, description="Name used in the greeting")
    email_verified: bool = Field(default=False, description="Identity verified flag")
    code: Optional[str] = Field(None, description="Live six-digit code")
    expires_at: Optional[datetime] = Field(None, description="Expiry of the live code")

    @property
    def has_pending_code(self) -> bool:
        """Whether a code and its expiry are both stored."""
        return bool(self.code) and self.expires_at is not None


class EmailMessage(BaseModel):
    """An outgoing transactional email."""

    to: str
    subject: str
    text: str
    html: Optional[str] = None


class SendCodeRequest(BaseModel):
    """Request to issue a verification code."""

    user_id: str = Field(..., min_length=1)
    email: Optional[EmailStr] = Field(None, description="Defaults to the stored email")
    user_name: Optional[str] = Field(None, description="Defaults to the stored display name")
    locale: Optional[str] = Field(None, description="Language of the email")


class ResendCodeRequest(BaseModel):
    """Request to issue a fresh code to the stored email address."""

    user_id: str = Field(..., min_length=1)
    locale: Optional[str] = None


class VerifyCodeRequest(BaseModel):
    """
    Request to check a submitted code.

    The code length is checked by the workflow, not here, so malformed
    codes come back as a structured ValidationError result.
    """

    user_id: str = Field(..., min_length=1)
    code: str = Field(default="", description="Submitted code; missing or null is reported by the workflow")

    @field_validator("code", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class VerificationResult(BaseModel):
    """Outcome of an issue or verify operation."""

    success: bool
    error: Optional[str] = Field(None, description="Human-readable failure message")
    error_code: Optional[VerificationErrorCode] = Field(None, description="Failure category")


class VerificationStatus(BaseModel):
    """Public view of a user's verification state. Never includes the code."""

    user_id: str
    email_verified: bool
    code_pending: bool
    expires_at: Optional[datetime] = None
