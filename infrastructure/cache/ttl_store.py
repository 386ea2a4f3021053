"""Redis implementation of TTLStore.

Unlike the read-through caches, OTP state is authoritative: a Redis failure
must not be mistaken for "no lock present". Every RedisError is therefore
raised as TransportError instead of being logged and ignored.
"""

from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from errors import TransportError
from shared.logging import get_logger

log = get_logger(__name__)


class RedisTTLStore:
    def __init__(self, redis_client: aioredis.Redis) -> None:
        self._redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            log.error("ttl_store_get_error", key=key, error=str(e), error_type=type(e).__name__)
            raise TransportError("Temporary storage failure. Please try again later.") from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            log.error("ttl_store_set_error", key=key, error=str(e), error_type=type(e).__name__)
            raise TransportError("Temporary storage failure. Please try again later.") from e

    async def delete(self, *keys: str) -> None:
        if not keys:
            return
        try:
            await self._redis.delete(*keys)
        except RedisError as e:
            log.error("ttl_store_delete_error", keys=list(keys), error=str(e), error_type=type(e).__name__)
            raise TransportError("Temporary storage failure. Please try again later.") from e
