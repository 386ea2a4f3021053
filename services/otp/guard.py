"""
RateLimitGuard: inspects lock and cooldown markers before any OTP issuance.
"""

from __future__ import annotations

from infrastructure.cache.protocol import TTLStore
from services.otp.outcome import ALLOWED, BlockReason, Outcome
from services.otp.policy import account_lock_key, cooldown_key, spam_lock_key
from shared.logging import get_logger

log = get_logger(__name__)

# Checked in this order; the first marker present decides the reason.
_GATES = (
    (account_lock_key, BlockReason.ACCOUNT_LOCKED),
    (spam_lock_key, BlockReason.SPAM_LOCKED),
    (cooldown_key, BlockReason.COOLDOWN),
)


class RateLimitGuard:
    def __init__(self, store: TTLStore) -> None:
        self._store = store

    async def check_restrictions(self, email: str) -> Outcome:
        """Return ALLOWED, or Blocked with the first gate that is set.

        Read-only: calling it repeatedly without intervening writes always
        yields the same outcome.
        """
        for key_fn, reason in _GATES:
            if await self._store.get(key_fn(email)) is not None:
                log.info("otp_request_blocked", email=email, reason=reason.value)
                return Outcome.blocked(reason)
        return ALLOWED
