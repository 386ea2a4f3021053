"""
RequestThrottle: counts OTP requests per identity in a rolling window.
"""

from __future__ import annotations

from infrastructure.cache.protocol import TTLStore
from services.otp.outcome import ALLOWED, BlockReason, Outcome
from services.otp.policy import (
    DEFAULT_POLICY,
    LOCK_MARKER,
    OtpPolicy,
    parse_count,
    request_count_key,
    spam_lock_key,
)
from shared.logging import get_logger

log = get_logger(__name__)


class RequestThrottle:
    def __init__(self, store: TTLStore, policy: OtpPolicy = DEFAULT_POLICY) -> None:
        self._store = store
        self._policy = policy

    async def track(self, email: str) -> Outcome:
        """Record one OTP request for *email*.

        The request arriving when the counter already holds ``max_requests``
        sets the spam lock and is blocked. Every allowed request rewrites the
        counter with a fresh window TTL, so the window rolls forward rather
        than resetting on a fixed wall-clock boundary.

        The read and the write are separate round trips; two concurrent
        requests may both observe the same count.
        """
        key = request_count_key(email)
        count = parse_count(await self._store.get(key), key=key)

        if count >= self._policy.max_requests:
            await self._store.set(spam_lock_key(email), LOCK_MARKER, self._policy.spam_lock_ttl)
            log.warning("otp_spam_lock_set", email=email, request_count=count + 1)
            return Outcome.blocked(BlockReason.SPAM_LOCKED)

        await self._store.set(key, str(count + 1), self._policy.request_window)
        return ALLOWED
