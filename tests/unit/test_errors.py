"""Unit tests for the AppError hierarchy."""

import pytest

from errors import (
    AccountLockedError,
    AppError,
    ConflictError,
    ExpiredOrInvalidOtpError,
    IncorrectOtpError,
    NotFoundError,
    OtpCooldownError,
    SpamLockedError,
    TooManyFailuresError,
    TransportError,
    ValidationError,
)


class TestAppErrorSubclasses:
    @pytest.mark.parametrize(
        "error, status, code",
        [
            (ValidationError("bad input"), 400, "validation_error"),
            (NotFoundError("missing"), 404, "not_found"),
            (ConflictError("exists"), 409, "conflict"),
            (TransportError("down"), 503, "transport_error"),
            (AccountLockedError(), 403, "account_locked"),
            (SpamLockedError(), 429, "otp_spam_locked"),
            (OtpCooldownError(), 429, "otp_cooldown"),
            (ExpiredOrInvalidOtpError(), 400, "otp_expired_or_invalid"),
            (TooManyFailuresError(), 403, "otp_too_many_failures"),
        ],
    )
    def test_status_and_code(self, error, status, code):
        assert isinstance(error, AppError)
        assert error.status_code == status
        assert error.error_code == code
        assert error.message

    def test_otp_errors_have_default_messages(self):
        assert "30 minutes" in AccountLockedError().message
        assert "hour" in SpamLockedError().message
        assert "1 minute" in OtpCooldownError().message

    def test_incorrect_otp_carries_attempts(self):
        e = IncorrectOtpError(1)
        assert isinstance(e, ValidationError)
        assert e.attempts_remaining == 1
        assert e.message == "Incorrect OTP. 1 attempts left."
        assert e.to_dict()["details"] == {"attempts_remaining": 1}


class TestAppErrorToDict:
    def test_basic(self):
        e = NotFoundError("user not found")
        assert e.to_dict() == {"error": "user not found", "code": "not_found"}

    def test_field_included(self):
        assert ValidationError("invalid", field="email").to_dict()["field"] == "email"

    def test_no_optional_keys_when_absent(self):
        d = NotFoundError("missing").to_dict()
        assert "field" not in d
        assert "details" not in d
