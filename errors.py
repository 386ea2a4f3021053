"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. Services raise these; the global
exception handler converts them to consistent JSON responses, so the service
layer never deals with status codes or response bodies directly.

Non-AppError exceptions bubble up as 500s (with Sentry reporting in production).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class ForbiddenError(AppError):
    status_code = 403
    error_code = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class ConflictError(AppError):
    status_code = 409
    error_code = "conflict"


class RateLimitError(AppError):
    status_code = 429
    error_code = "rate_limit_exceeded"


class TransportError(AppError):
    """A store or notifier call failed. Infrastructure trouble, not abuse;
    callers may retry after backoff."""

    status_code = 503
    error_code = "transport_error"


# ── OTP abuse-control errors ─────────────────────────────────────────────────


class AccountLockedError(ForbiddenError):
    error_code = "account_locked"

    def __init__(
        self,
        message: str = "Account locked due to multiple failed attempts! Try again after 30 minutes.",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class SpamLockedError(RateLimitError):
    error_code = "otp_spam_locked"

    def __init__(
        self,
        message: str = "Too many OTP requests! Please wait for an hour before trying again.",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class OtpCooldownError(RateLimitError):
    error_code = "otp_cooldown"

    def __init__(
        self,
        message: str = "Please wait 1 minute before requesting a new OTP!",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class ExpiredOrInvalidOtpError(ValidationError):
    error_code = "otp_expired_or_invalid"

    def __init__(self, message: str = "Invalid or expired OTP!", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class IncorrectOtpError(ValidationError):
    error_code = "incorrect_otp"

    def __init__(self, attempts_remaining: int, **kwargs: Any) -> None:
        super().__init__(
            f"Incorrect OTP. {attempts_remaining} attempts left.",
            details={"attempts_remaining": attempts_remaining},
            **kwargs,
        )
        self.attempts_remaining = attempts_remaining


class TooManyFailuresError(ForbiddenError):
    error_code = "otp_too_many_failures"

    def __init__(
        self,
        message: str = "Too many failed attempts. Your account is locked for 30 minutes!",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )
