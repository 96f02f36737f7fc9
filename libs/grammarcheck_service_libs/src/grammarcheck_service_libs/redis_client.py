"""
Redis client wrapper for grammar check services.

Provides the small set of string/counter operations the result cache needs,
with explicit start/stop lifecycle management. The client connects lazily:
operations on a client that has not been started attempt a start first.
"""

from __future__ import annotations

import os

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from grammarcheck_service_libs.logging_utils import create_service_logger
from grammarcheck_service_libs.protocols import RedisClientProtocol

logger = create_service_logger("redis-client")

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379")


class RedisClient(RedisClientProtocol):
    """Redis client with lifecycle management for cache and counter operations."""

    def __init__(self, *, client_id: str, redis_url: str = REDIS_URL):
        self.redis_url = redis_url
        self.client_id = client_id
        self.client = aioredis.from_url(
            self.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        self._started = False

    async def start(self) -> None:
        """Initialize Redis connection with health verification."""
        if not self._started:
            try:
                await self.client.ping()
                self._started = True
                logger.info(f"Redis client '{self.client_id}' connected to {self.redis_url}")
            except RedisConnectionError as e:
                logger.error(f"Redis client '{self.client_id}' failed to connect: {e}")
                raise
            except Exception as e:
                logger.error(f"Redis client '{self.client_id}' startup error: {e}")
                raise

    async def stop(self) -> None:
        """Clean shutdown of Redis connection."""
        if self._started:
            try:
                await self.client.aclose()
                self._started = False
                logger.info(f"Redis client '{self.client_id}' disconnected")
            except Exception as e:
                logger.error(
                    f"Error stopping Redis client '{self.client_id}': {e}",
                    exc_info=True,
                )

    async def _ensure_started(self) -> None:
        if not self._started:
            logger.warning(f"Redis client '{self.client_id}' not started. Attempting to start.")
            await self.start()

    async def get(self, key: str) -> str | None:
        """
        Get string value from Redis.

        Returns:
            String value if key exists, None otherwise
        """
        await self._ensure_started()
        try:
            value = await self.client.get(key)
            logger.debug(
                f"Redis GET by '{self.client_id}': key='{key}' "
                f"result={'HIT' if value is not None else 'MISS'}",
            )
            return str(value) if value is not None else None
        except RedisTimeoutError:
            logger.error(f"Timeout on Redis GET operation by '{self.client_id}' for key '{key}'")
            raise
        except Exception as e:
            logger.error(
                f"Error in Redis GET operation by '{self.client_id}' for key '{key}': {e}",
                exc_info=True,
            )
            raise

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        """
        Set string value, with expiry when ``ttl_seconds`` is given.

        Returns:
            True if the value was written
        """
        await self._ensure_started()
        try:
            result = await self.client.set(key, value, ex=ttl_seconds)
            logger.debug(f"Redis SET by '{self.client_id}': key='{key}' ttl={ttl_seconds}s")
            return bool(result)
        except Exception as e:
            logger.error(
                f"Error in Redis SET operation by '{self.client_id}' for key '{key}': {e}",
                exc_info=True,
            )
            raise

    async def incr(self, key: str) -> int:
        """
        Atomically increment an integer counter, creating it at 0 when absent.

        Returns:
            Counter value after the increment
        """
        await self._ensure_started()
        try:
            value = await self.client.incr(key)
            logger.debug(f"Redis INCR by '{self.client_id}': key='{key}' value={value}")
            return int(value)
        except Exception as e:
            logger.error(
                f"Error in Redis INCR operation by '{self.client_id}' for key '{key}': {e}",
                exc_info=True,
            )
            raise

    async def exists(self, key: str) -> int:
        """
        Check if key exists in Redis.

        Returns:
            1 if key exists, 0 otherwise
        """
        await self._ensure_started()
        try:
            exists_count = int(await self.client.exists(key))
            logger.debug(
                f"Redis EXISTS by '{self.client_id}': key='{key}' exists={exists_count > 0}",
            )
            return exists_count
        except Exception as e:
            logger.error(
                f"Error in Redis EXISTS operation by '{self.client_id}' for key '{key}': {e}",
                exc_info=True,
            )
            raise

    async def ping(self) -> bool:
        """Health check; returns False instead of raising when Redis is unreachable."""
        try:
            await self._ensure_started()
            is_healthy = bool(await self.client.ping())
            logger.debug(f"Redis PING by '{self.client_id}': result={is_healthy}")
            return is_healthy
        except Exception as e:
            logger.error(f"Error in Redis PING operation by '{self.client_id}': {e}")
            return False
