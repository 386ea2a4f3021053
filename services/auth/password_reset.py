"""
ForgotPasswordOrchestrator: the password-reset variant of the OTP flow.

initiate()        account must exist → guard → throttle → issue
confirm()         verifies the OTP and records a single-use reset grant
reset_password()  redeems the grant and replaces the stored password hash
"""

from __future__ import annotations

from typing import Optional, Protocol

from errors import ForbiddenError, NotFoundError, ValidationError
from infrastructure.cache.protocol import TTLStore
from schemas.models.user import UserDoc
from services.otp import (
    TEMPLATE_FORGOT_PASSWORD,
    OtpIssuer,
    OtpVerifier,
    RateLimitGuard,
    RequestThrottle,
    VerificationResult,
)
from services.otp.policy import DEFAULT_POLICY, GRANT_MARKER, OtpPolicy, reset_grant_key
from shared.crypto import hash_password, verify_password
from shared.logging import get_logger
from shared.validators import require_fields, require_valid_email

log = get_logger(__name__)

RESET_OTP_SENT_MESSAGE = "OTP sent to email. Please verify your account."


class PasswordStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[UserDoc]: ...

    async def update_password(self, email: str, password_hash: str) -> None: ...


class ForgotPasswordOrchestrator:
    def __init__(
        self,
        users: PasswordStore,
        guard: RateLimitGuard,
        throttle: RequestThrottle,
        issuer: OtpIssuer,
        verifier: OtpVerifier,
        store: TTLStore,
        policy: OtpPolicy = DEFAULT_POLICY,
    ) -> None:
        self._users = users
        self._guard = guard
        self._throttle = throttle
        self._issuer = issuer
        self._verifier = verifier
        self._store = store
        self._policy = policy

    async def _require_user(self, email: str) -> UserDoc:
        user = await self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("User doesn't exist!", field="email")
        return user

    async def initiate(self, email: Optional[str]) -> str:
        """Send a password-reset OTP to an existing account.

        Raises ValidationError, NotFoundError, the guard/throttle block
        errors, or TransportError from the notifier.
        """
        require_fields("Email is required!", email=email)
        require_valid_email(email)

        user = await self._require_user(email)

        (await self._guard.check_restrictions(email)).raise_if_blocked()
        (await self._throttle.track(email)).raise_if_blocked()

        await self._issuer.issue(user.display_name, email, TEMPLATE_FORGOT_PASSWORD)
        log.info("password_reset_otp_sent", email=email)
        return RESET_OTP_SENT_MESSAGE

    async def confirm(
        self, email: Optional[str], submitted_code: Optional[str]
    ) -> VerificationResult:
        require_fields("Email and OTP are required!", email=email, otp=submitted_code)
        result = await self._verifier.verify(email, submitted_code)
        await self._store.set(reset_grant_key(email), GRANT_MARKER, self._policy.reset_grant_ttl)
        return result

    async def reset_password(
        self, email: Optional[str], new_password: Optional[str]
    ) -> None:
        """Store a new password for *email*.

        Requires the grant written by a successful confirm(); the grant is
        consumed before the password changes so it cannot be replayed.
        """
        require_fields(
            "Email and password are required!", email=email, new_password=new_password
        )
        user = await self._require_user(email)

        grant = reset_grant_key(email)
        if await self._store.get(grant) is None:
            log.warning("password_reset_rejected", email=email, reason="no_verified_otp")
            raise ForbiddenError(
                "Verify the OTP sent to your email before resetting the password!"
            )

        if verify_password(new_password, user.password_hash):
            raise ValidationError(
                "New password can't be the same as the old password!",
                field="new_password",
            )

        await self._store.delete(grant)
        await self._users.update_password(email, hash_password(new_password))
        log.info("password_reset_success", email=email)
