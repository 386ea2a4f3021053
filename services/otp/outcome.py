"""
Gate outcomes returned by the guard and the request throttle.

An Outcome is either ALLOWED or blocked with a BlockReason. Callers that
want exception-style control flow call ``raise_if_blocked()``, which maps
each reason to its AppError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import AccountLockedError, AppError, OtpCooldownError, SpamLockedError


class BlockReason(str, Enum):
    ACCOUNT_LOCKED = "account_locked"
    SPAM_LOCKED = "spam_locked"
    COOLDOWN = "cooldown"


_REASON_ERRORS: dict[BlockReason, type[AppError]] = {
    BlockReason.ACCOUNT_LOCKED: AccountLockedError,
    BlockReason.SPAM_LOCKED: SpamLockedError,
    BlockReason.COOLDOWN: OtpCooldownError,
}


@dataclass(frozen=True)
class Outcome:
    reason: Optional[BlockReason] = None

    @property
    def allowed(self) -> bool:
        return self.reason is None

    @classmethod
    def blocked(cls, reason: BlockReason) -> "Outcome":
        return cls(reason=reason)

    def to_error(self) -> Optional[AppError]:
        if self.reason is None:
            return None
        return _REASON_ERRORS[self.reason]()

    def raise_if_blocked(self) -> None:
        error = self.to_error()
        if error is not None:
            raise error


ALLOWED = Outcome()
