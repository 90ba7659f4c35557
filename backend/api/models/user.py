"""
Token models for authentication.

The authenticated user itself lives in shared.models so feature modules
can depend on it without importing the API layer.
"""

from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional


class TokenPayload(BaseModel):
    """Supabase JWT payload structure."""
    model_config = ConfigDict(extra="ignore")

    sub: str  # User ID
    email: str
    email_confirmed_at: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    role: str = "authenticated"


class UserProfileResponse(BaseModel):
    """Current user response model."""

    id: str
    email: EmailStr
    email_verified: bool
    role: str
