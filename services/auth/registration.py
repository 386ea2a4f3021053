"""
RegistrationService: sign-up gated by an emailed OTP.

start()   validate → email must be unused → guard → throttle → issue
verify()  email must still be unused → verify OTP → hash password → create
"""

from __future__ import annotations

from typing import Optional, Protocol

from errors import ConflictError
from schemas.models.user import UserDoc
from services.otp import (
    TEMPLATE_USER_ACTIVATION,
    OtpIssuer,
    OtpVerifier,
    RateLimitGuard,
    RequestThrottle,
)
from shared.crypto import hash_password
from shared.logging import get_logger
from shared.validators import require_fields, require_valid_email

log = get_logger(__name__)

REGISTRATION_OTP_SENT_MESSAGE = "OTP sent to email. Please verify your account."


class UserStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[UserDoc]: ...

    async def create(self, email: str, name: str, password_hash: str) -> UserDoc: ...


class RegistrationService:
    def __init__(
        self,
        users: UserStore,
        guard: RateLimitGuard,
        throttle: RequestThrottle,
        issuer: OtpIssuer,
        verifier: OtpVerifier,
    ) -> None:
        self._users = users
        self._guard = guard
        self._throttle = throttle
        self._issuer = issuer
        self._verifier = verifier

    async def _require_unused(self, email: str) -> None:
        if await self._users.find_by_email(email) is not None:
            raise ConflictError("User already exists with this email!", field="email")

    async def start(self, name: Optional[str], email: Optional[str]) -> str:
        require_fields("Missing required fields!", name=name, email=email)
        require_valid_email(email)
        await self._require_unused(email)

        (await self._guard.check_restrictions(email)).raise_if_blocked()
        (await self._throttle.track(email)).raise_if_blocked()

        await self._issuer.issue(name, email, TEMPLATE_USER_ACTIVATION)
        return REGISTRATION_OTP_SENT_MESSAGE

    async def verify(
        self,
        email: Optional[str],
        otp: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> UserDoc:
        require_fields(
            "All fields are required!", email=email, otp=otp, password=password, name=name
        )
        await self._require_unused(email)

        await self._verifier.verify(email, otp)

        user = await self._users.create(email, name, hash_password(password))
        log.info("user_registered", email=email)
        return user
