"""
OtpIssuer: generates a code, dispatches it, and records it with a cooldown.
"""

from __future__ import annotations

from typing import Callable

from infrastructure.cache.protocol import TTLStore
from infrastructure.email.protocol import Notifier
from services.otp.policy import (
    COOLDOWN_MARKER,
    DEFAULT_POLICY,
    OtpPolicy,
    cooldown_key,
    otp_key,
)
from shared.generators import generate_otp_code
from shared.logging import get_logger

log = get_logger(__name__)

OTP_EMAIL_SUBJECT = "Verify your email"

TEMPLATE_USER_ACTIVATION = "user-activation-mail"
TEMPLATE_FORGOT_PASSWORD = "forgot-password"


class OtpIssuer:
    def __init__(
        self,
        store: TTLStore,
        notifier: Notifier,
        policy: OtpPolicy = DEFAULT_POLICY,
        code_factory: Callable[[], str] = generate_otp_code,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._policy = policy
        self._code_factory = code_factory

    async def issue(self, display_name: str, email: str, template_kind: str) -> str:
        """Send a fresh OTP to *email* and record it.

        Nothing is written if the notifier raises; its TransportError
        propagates unchanged. A new code overwrites any live one.

        Returns:
            The generated code. Callers never need it on the success path.
        """
        code = self._code_factory()

        await self._notifier.send(
            email,
            OTP_EMAIL_SUBJECT,
            template_kind,
            {"name": display_name, "otp": code},
        )

        await self._store.set(otp_key(email), code, self._policy.otp_ttl)
        await self._store.set(cooldown_key(email), COOLDOWN_MARKER, self._policy.cooldown_ttl)

        log.info("otp_issued", email=email, template_kind=template_kind)
        return code
