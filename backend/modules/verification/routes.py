"""
Email verification API endpoints.

Every endpoint requires a bearer token whose subject is the user the
request is about.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.middleware.auth import get_current_user
from api.dependencies import get_verification_service
from shared.exceptions import AuthorizationError, ConfigurationError, ExternalServiceError
from shared.models import AuthenticatedUser

from .interfaces import IVerificationService
from .models import (
    ResendCodeRequest,
    SendCodeRequest,
    VerificationResult,
    VerificationStatus,
    VerifyCodeRequest,
)
from .exceptions import UserNotFoundError

router = APIRouter()


def _ensure_same_user(user: AuthenticatedUser, user_id: str) -> None:
    if user.id != user_id:
        raise AuthorizationError(
            "Cannot act on another user's verification",
            code="FORBIDDEN",
            details={"user_id": user_id},
        )


@router.post("/send-code", response_model=VerificationResult)
async def send_code(
    request: SendCodeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IVerificationService = Depends(get_verification_service),
) -> VerificationResult:
    """
    Issue a six-digit verification code and email it.

    A new code replaces any code issued before.
    """
    _ensure_same_user(user, request.user_id)
    return await service.send_code(request)


@router.post("/resend-code", response_model=VerificationResult)
async def resend_code(
    request: ResendCodeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IVerificationService = Depends(get_verification_service),
) -> VerificationResult:
    """Issue a fresh code to the stored email address."""
    _ensure_same_user(user, request.user_id)
    return await service.resend_code(request)


@router.post("/verify-code", response_model=VerificationResult)
async def verify_code(
    request: VerifyCodeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IVerificationService = Depends(get_verification_service),
) -> VerificationResult:
    """
    Check a submitted code.

    Failures (wrong length, expired, mismatch, ...) are reported in the
    body with success=false, not as HTTP errors.
    """
    _ensure_same_user(user, request.user_id)
    return await service.verify_code(request)


@router.get("/status/{user_id}", response_model=VerificationStatus)
async def verification_status(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IVerificationService = Depends(get_verification_service),
) -> VerificationStatus:
    """Whether the user is verified and a code is pending."""
    _ensure_same_user(user, user_id)
    try:
        return await service.get_status(user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=e.message)
    except ExternalServiceError as e:
        raise HTTPException(status_code=503, detail=e.message)
