"""API models package."""

from .user import TokenPayload, UserProfileResponse
from .errors import ErrorResponse

__all__ = [
    "TokenPayload",
    "UserProfileResponse",
    "ErrorResponse",
]
