"""In-process implementation of TTLStore.

Used when Redis is not configured (single-instance deployments only, since
state is not shared across processes) and as the fake store in tests.
Expiry is evaluated against an injectable clock, so tests can advance
virtual time instead of sleeping.
"""

import heapq
import time
from typing import Callable, Optional


class InMemoryTTLStore:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}
        # (expires_at, key); may hold stale entries for overwritten keys
        self._expiry: list[tuple[float, str]] = []

    def size(self) -> int:
        """Number of live entries."""
        self._purge_expired()
        return len(self._data)

    def _purge_expired(self) -> None:
        now = self._clock()
        while self._expiry and self._expiry[0][0] <= now:
            expires_at, key = heapq.heappop(self._expiry)
            entry = self._data.get(key)
            if entry is not None and entry[1] == expires_at:
                del self._data[key]

    def _live(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def get(self, key: str) -> Optional[str]:
        return self._live(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._purge_expired()
        expires_at = self._clock() + ttl_seconds
        self._data[key] = (str(value), expires_at)
        heapq.heappush(self._expiry, (expires_at, key))

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)
        self._purge_expired()

    def ttl(self, key: str) -> Optional[float]:
        """Seconds until *key* expires, or None if it is absent."""
        if self._live(key) is None:
            return None
        return self._data[key][1] - self._clock()


class VirtualClock:
    """Manually advanced clock for driving InMemoryTTLStore expiry."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
