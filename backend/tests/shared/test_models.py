"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_default_values(self):
        """Should have correct default values."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        assert user.email_verified is False
        assert user.role == "user"
        assert user.created_at is None

    def test_rejects_invalid_email(self):
        """Should validate the email address."""
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="not-an-email")

    def test_is_frozen(self):
        """Should be immutable."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(ValidationError):
            user.email_verified = True

    def test_ignores_extra_fields(self):
        """Should ignore unknown JWT claims."""
        user = AuthenticatedUser(id="user-123", email="test@example.com", aal="aal1")
        assert not hasattr(user, "aal")
