"""
OtpVerifier: checks a submitted code and escalates repeated failures.

Per-identity states, as implied by store contents:

    NoActiveOtp          otp:{email} absent
    PendingVerification  otp:{email} present
      ├─ correct code  → Verified (record and attempt counter deleted)
      ├─ wrong code    → Failed   (attempt counter incremented)
      └─ wrong code at the failure threshold
                       → Locked   (account lock set, record and counter deleted)
"""

from __future__ import annotations

from dataclasses import dataclass

from errors import ExpiredOrInvalidOtpError, IncorrectOtpError, TooManyFailuresError
from infrastructure.cache.protocol import TTLStore
from services.otp.policy import (
    DEFAULT_POLICY,
    LOCK_MARKER,
    OtpPolicy,
    account_lock_key,
    attempts_key,
    otp_key,
    parse_count,
)
from shared.crypto import codes_match
from shared.logging import get_logger, log_with_context

_log = get_logger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    email: str
    verified: bool = True


class OtpVerifier:
    def __init__(self, store: TTLStore, policy: OtpPolicy = DEFAULT_POLICY) -> None:
        self._store = store
        self._policy = policy

    async def verify(self, email: str, submitted_code: str) -> VerificationResult:
        """Verify *submitted_code* against the live OTP for *email*.

        Raises:
            ExpiredOrInvalidOtpError: no live OTP; no counters are touched.
            TooManyFailuresError: wrong code at the failure threshold; the
                account lock is set and the OTP is discarded.
            IncorrectOtpError: wrong code with attempts remaining.
        """
        log = log_with_context(_log, email=email)

        stored = await self._store.get(otp_key(email))
        if stored is None:
            log.info("otp_verification_failed", reason="expired_or_missing")
            raise ExpiredOrInvalidOtpError()

        attempts = attempts_key(email)
        failed = parse_count(await self._store.get(attempts), key=attempts)

        if codes_match(stored, str(submitted_code).strip()):
            await self._store.delete(otp_key(email), attempts_key(email))
            log.info("otp_verified_success")
            return VerificationResult(email=email)

        if failed >= self._policy.max_failed_attempts:
            await self._store.set(
                account_lock_key(email), LOCK_MARKER, self._policy.account_lock_ttl
            )
            await self._store.delete(otp_key(email), attempts_key(email))
            log.warning("otp_account_locked", failed_attempts=failed + 1)
            raise TooManyFailuresError()

        # TTL restarts from this attempt, not from issuance.
        await self._store.set(attempts_key(email), str(failed + 1), self._policy.attempts_ttl)
        remaining = self._policy.max_failed_attempts - (failed + 1)
        log.info("otp_verification_failed", reason="incorrect", attempts_remaining=remaining)
        raise IncorrectOtpError(remaining)
