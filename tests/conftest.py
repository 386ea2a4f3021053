"""
Shared fixtures for unit and integration tests.

The OTP services run against InMemoryTTLStore driven by a VirtualClock, so
TTL expiry is simulated by advancing the clock rather than sleeping.
"""

from __future__ import annotations

from typing import Optional
from unittest.mock import AsyncMock

import pytest

from infrastructure.cache.memory_store import InMemoryTTLStore, VirtualClock
from schemas.models.user import UserDoc
from services.otp import OtpIssuer, OtpVerifier, RateLimitGuard, RequestThrottle


class FakeUserRepository:
    """Dict-backed stand-in for UserRepository."""

    def __init__(self) -> None:
        self.users: dict[str, UserDoc] = {}

    async def find_by_email(self, email: str) -> Optional[UserDoc]:
        return self.users.get(email)

    async def create(self, email: str, name: str, password_hash: str) -> UserDoc:
        user = UserDoc(email=email, name=name, password_hash=password_hash)
        self.users[email] = user
        return user

    async def update_password(self, email: str, password_hash: str) -> None:
        self.users[email] = self.users[email].model_copy(
            update={"password_hash": password_hash}
        )


class SequenceCodes:
    """Code factory returning preset codes in order."""

    def __init__(self, *codes: str) -> None:
        self._codes = list(codes)

    def __call__(self) -> str:
        return self._codes.pop(0)


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock(start=1_000.0)


@pytest.fixture
def store(clock) -> InMemoryTTLStore:
    return InMemoryTTLStore(clock=clock)


@pytest.fixture
def notifier() -> AsyncMock:
    n = AsyncMock()
    n.send.return_value = None
    return n


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def guard(store) -> RateLimitGuard:
    return RateLimitGuard(store)


@pytest.fixture
def throttle(store) -> RequestThrottle:
    return RequestThrottle(store)


@pytest.fixture
def issuer(store, notifier) -> OtpIssuer:
    return OtpIssuer(store, notifier, code_factory=SequenceCodes("482913", "555555", "777777"))


@pytest.fixture
def verifier(store) -> OtpVerifier:
    return OtpVerifier(store)
