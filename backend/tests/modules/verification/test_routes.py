"""
Tests for verification API routes.

The service is replaced with an AsyncMock through dependency overrides.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import get_verification_service
from modules.verification.exceptions import DependencyUnavailableError, UserNotFoundError
from modules.verification.models import (
    VerificationErrorCode,
    VerificationResult,
    VerificationStatus,
)
from shared.config import Settings
from tests.conftest import TEST_JWT_SECRET, create_test_token


@pytest.fixture
def mock_service():
    service = MagicMock()
    service.send_code = AsyncMock(return_value=VerificationResult(success=True))
    service.resend_code = AsyncMock(return_value=VerificationResult(success=True))
    service.verify_code = AsyncMock(return_value=VerificationResult(success=True))
    service.get_status = AsyncMock()
    return service


@pytest.fixture
def client(mock_service):
    app = create_app(Settings(_env_file=None))
    app.dependency_overrides[get_verification_service] = lambda: mock_service
    with patch("api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        yield TestClient(app)


@pytest.fixture
def headers():
    return {"Authorization": f"Bearer {create_test_token(user_id='user-1')}"}


class TestAuthRequired:
    @pytest.mark.parametrize(
        "method,path,body",
        [
            ("post", "/api/verification/send-code", {"user_id": "user-1"}),
            ("post", "/api/verification/resend-code", {"user_id": "user-1"}),
            ("post", "/api/verification/verify-code", {"user_id": "user-1", "code": "123456"}),
            ("get", "/api/verification/status/user-1", None),
        ],
    )
    def test_missing_token(self, client, mock_service, method, path, body):
        kwargs = {"json": body} if body is not None else {}
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 401

    def test_other_users_code_is_forbidden(self, client, mock_service, headers):
        response = client.post(
            "/api/verification/verify-code",
            json={"user_id": "user-2", "code": "123456"},
            headers=headers,
        )
        assert response.status_code == 403
        assert response.json() == {
            "error": "FORBIDDEN",
            "message": "Cannot act on another user's verification",
            "details": {"user_id": "user-2"},
        }
        mock_service.verify_code.assert_not_called()


class TestSendCode:
    def test_success(self, client, mock_service, headers):
        response = client.post(
            "/api/verification/send-code",
            json={"user_id": "user-1", "email": "user@example.com", "locale": "en"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "error": None, "error_code": None}
        request = mock_service.send_code.call_args.args[0]
        assert request.user_id == "user-1"
        assert request.email == "user@example.com"
        assert request.locale == "en"

    def test_invalid_email_rejected(self, client, mock_service, headers):
        response = client.post(
            "/api/verification/send-code",
            json={"user_id": "user-1", "email": "nope"},
            headers=headers,
        )
        assert response.status_code == 422
        mock_service.send_code.assert_not_called()

    def test_failure_is_in_body(self, client, mock_service, headers):
        mock_service.send_code.return_value = VerificationResult(
            success=False,
            error="Email delivery is not configured. Cannot send verification code.",
            error_code=VerificationErrorCode.CONFIGURATION_ERROR,
        )
        response = client.post(
            "/api/verification/send-code", json={"user_id": "user-1"}, headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["error_code"] == "ConfigurationError"


class TestResendCode:
    def test_success(self, client, mock_service, headers):
        response = client.post(
            "/api/verification/resend-code", json={"user_id": "user-1"}, headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_service.resend_code.assert_awaited_once()


class TestVerifyCode:
    def test_success(self, client, mock_service, headers):
        response = client.post(
            "/api/verification/verify-code",
            json={"user_id": "user-1", "code": "123456"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_wrong_length_reaches_service(self, client, mock_service, headers):
        """Length is checked by the workflow so the failure comes back structured."""
        mock_service.verify_code.return_value = VerificationResult(
            success=False,
            error="Verification code must be exactly 6 characters.",
            error_code=VerificationErrorCode.VALIDATION_ERROR,
        )
        response = client.post(
            "/api/verification/verify-code",
            json={"user_id": "user-1", "code": "12345"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["error_code"] == "ValidationError"

    def test_missing_code_reaches_service(self, client, mock_service, headers):
        """A body without a code is a workflow ValidationError, not a 422."""
        mock_service.verify_code.return_value = VerificationResult(
            success=False,
            error="Verification code must be exactly 6 characters.",
            error_code=VerificationErrorCode.VALIDATION_ERROR,
        )
        response = client.post(
            "/api/verification/verify-code",
            json={"user_id": "user-1"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["error_code"] == "ValidationError"
        assert mock_service.verify_code.call_args.args[0].code == ""

    def test_mismatch(self, client, mock_service, headers):
        mock_service.verify_code.return_value = VerificationResult(
            success=False,
            error="Invalid verification code.",
            error_code=VerificationErrorCode.CODE_MISMATCH,
        )
        response = client.post(
            "/api/verification/verify-code",
            json={"user_id": "user-1", "code": "000000"},
            headers=headers,
        )
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Invalid verification code."
        assert data["error_code"] == "CodeMismatch"


class TestStatus:
    def test_status(self, client, mock_service, headers):
        mock_service.get_status.return_value = VerificationStatus(
            user_id="user-1",
            email_verified=False,
            code_pending=True,
            expires_at=datetime(2025, 3, 1, 12, 10, tzinfo=timezone.utc),
        )
        response = client.get("/api/verification/status/user-1", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["code_pending"] is True
        assert "code" not in data

    def test_unknown_user(self, client, mock_service, headers):
        mock_service.get_status.side_effect = UserNotFoundError("user-1")
        response = client.get("/api/verification/status/user-1", headers=headers)
        assert response.status_code == 404

    def test_store_unavailable(self, client, mock_service, headers):
        mock_service.get_status.side_effect = DependencyUnavailableError("supabase", "timeout")
        response = client.get("/api/verification/status/user-1", headers=headers)
        assert response.status_code == 503

    def test_other_user_forbidden(self, client, mock_service, headers):
        response = client.get("/api/verification/status/user-2", headers=headers)
        assert response.status_code == 403
