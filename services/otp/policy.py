"""
OTP policy table: TTLs, escalation thresholds and the store key scheme.

The key names are a wire format shared with existing deployments and must
not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from config import OtpSettings
from shared.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class OtpPolicy:
    otp_ttl: int = 300
    attempts_ttl: int = 300
    cooldown_ttl: int = 60
    spam_lock_ttl: int = 3600
    account_lock_ttl: int = 1800
    request_window: int = 3600
    reset_grant_ttl: int = 600

    # The request/failure that arrives when the counter already holds this
    # value is the one that escalates to a lock.
    max_requests: int = 2
    max_failed_attempts: int = 2

    @classmethod
    def from_settings(cls, settings: Optional[OtpSettings]) -> "OtpPolicy":
        if settings is None:
            return cls()
        return cls(
            otp_ttl=settings.otp_ttl_seconds,
            attempts_ttl=settings.otp_attempts_ttl_seconds,
            cooldown_ttl=settings.otp_cooldown_seconds,
            spam_lock_ttl=settings.otp_spam_lock_seconds,
            account_lock_ttl=settings.otp_account_lock_seconds,
            request_window=settings.otp_request_window_seconds,
            reset_grant_ttl=settings.otp_reset_grant_seconds,
            max_requests=settings.otp_max_requests,
            max_failed_attempts=settings.otp_max_failed_attempts,
        )


DEFAULT_POLICY = OtpPolicy()

LOCK_MARKER = "locked"
COOLDOWN_MARKER = "true"
GRANT_MARKER = "verified"


def account_lock_key(email: str) -> str:
    return f"otp_lock:{email}"


def spam_lock_key(email: str) -> str:
    return f"otp_spam_lock:{email}"


def cooldown_key(email: str) -> str:
    return f"otp_cooldown:{email}"


def request_count_key(email: str) -> str:
    return f"otp_request_count:{email}"


def otp_key(email: str) -> str:
    return f"otp:{email}"


def attempts_key(email: str) -> str:
    return f"otp_attempts:{email}"


def reset_grant_key(email: str) -> str:
    return f"password_reset_grant:{email}"


def parse_count(raw: Optional[str], key: str = "") -> int:
    """Counter value stored at a key; absent or unreadable counts as 0."""
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        log.warning("otp_counter_corrupt", key=key, raw_value=raw[:32])
        return 0
