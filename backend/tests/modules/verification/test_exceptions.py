"""Tests for verification exceptions and error-code mapping."""

import pytest

from modules.verification.exceptions import (
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
from modules.verification.models import VerificationErrorCode
from shared.exceptions import (
    AmcbunqError,
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error,expected",
    [
        (InvalidCodeFormatError(5), VerificationErrorCode.VALIDATION_ERROR),
        (MissingEmailError("u"), VerificationErrorCode.VALIDATION_ERROR),
        (UserNotFoundError("u"), VerificationErrorCode.USER_NOT_FOUND),
        (NoCodeRequestedError("u"), VerificationErrorCode.NO_CODE_REQUESTED),
        (CodeExpiredError("u"), VerificationErrorCode.CODE_EXPIRED),
        (CodeMismatchError("u"), VerificationErrorCode.CODE_MISMATCH),
        (DependencyUnavailableError("mailgun", "down"), VerificationErrorCode.DEPENDENCY_UNAVAILABLE),
        (VerificationNotConfiguredError("no key"), VerificationErrorCode.CONFIGURATION_ERROR),
    ],
)
def test_workflow_errors_map_to_their_codes(error, expected):
    assert error_code_for(error) is expected


@pytest.mark.parametrize(
    "error,expected",
    [
        (ConfigurationError("Supabase configuration missing", code="SUPABASE_NOT_CONFIGURED"),
         VerificationErrorCode.CONFIGURATION_ERROR),
        (ValidationError("bad"), VerificationErrorCode.VALIDATION_ERROR),
        (NotFoundError("gone"), VerificationErrorCode.USER_NOT_FOUND),
        (ExternalServiceError("down", service="x"), VerificationErrorCode.DEPENDENCY_UNAVAILABLE),
        (AmcbunqError("other"), VerificationErrorCode.DEPENDENCY_UNAVAILABLE),
    ],
)
def test_shared_errors_map_by_type(error, expected):
    assert error_code_for(error) is expected


def test_dependency_error_names_service():
    error = DependencyUnavailableError("supabase", "timeout")
    assert error.message == "supabase is unavailable: timeout"
    assert error.to_dict()["details"] == {"reason": "timeout", "service": "supabase"}


def test_invalid_format_records_length():
    error = InvalidCodeFormatError(7)
    assert error.details == {"length": 7}
    assert isinstance(error, ValidationError)
