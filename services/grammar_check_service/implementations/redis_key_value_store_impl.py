"""Redis-backed key-value store for the result cache."""

from __future__ import annotations

from grammarcheck_service_libs.logging_utils import create_service_logger
from grammarcheck_service_libs.protocols import RedisClientProtocol
from redis.exceptions import RedisError

from services.grammar_check_service.exceptions import CacheError
from services.grammar_check_service.protocols import KeyValueStoreProtocol

logger = create_service_logger("grammar_check_service.redis_store")


class RedisKeyValueStore(KeyValueStoreProtocol):
    """Adapts the shared RedisClient to the store contract.

    Redis and connection failures are translated into ``CacheError`` so the
    result cache has a single failure type to absorb.
    """

    backend = "redis"

    def __init__(self, redis_client: RedisClientProtocol):
        self.redis_client = redis_client

    async def get(self, key: str) -> str | None:
        try:
            return await self.redis_client.get(key)
        except (RedisError, RuntimeError, OSError) as e:
            raise CacheError(f"Redis GET failed for key '{key}': {e}") from e

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        try:
            await self.redis_client.set(key, value, ttl_seconds=ttl_seconds)
        except (RedisError, RuntimeError, OSError) as e:
            raise CacheError(f"Redis SET failed for key '{key}': {e}") from e

    async def increment(self, key: str) -> int:
        try:
            return await self.redis_client.incr(key)
        except (RedisError, RuntimeError, OSError) as e:
            raise CacheError(f"Redis INCR failed for key '{key}': {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.redis_client.exists(key))
        except (RedisError, RuntimeError, OSError) as e:
            raise CacheError(f"Redis EXISTS failed for key '{key}': {e}") from e

    async def ping(self) -> bool:
        return await self.redis_client.ping()
