"""TTLStore protocol - OTP services depend on this, not the concrete store."""

from typing import Optional, Protocol


class TTLStore(Protocol):
    """String key-value store with per-key expiry.

    Each call is atomic for the key it touches; there is no multi-key
    transaction.
    """

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def delete(self, *keys: str) -> None: ...
