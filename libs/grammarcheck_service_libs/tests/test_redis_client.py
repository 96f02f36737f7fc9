"""
Unit tests for the Redis client wrapper.

The underlying redis.asyncio connection is replaced by an AsyncMock, so no
Redis server is required.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from grammarcheck_service_libs.redis_client import RedisClient
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError


@pytest.fixture
def redis_client() -> RedisClient:
    return RedisClient(client_id="test-client", redis_url="redis://localhost:6379")


@pytest.fixture
def mock_redis_connection() -> AsyncMock:
    mock = AsyncMock()
    mock.ping = AsyncMock(return_value=True)
    mock.aclose = AsyncMock()
    return mock


@pytest.fixture
def started_redis_client(
    redis_client: RedisClient, mock_redis_connection: AsyncMock
) -> RedisClient:
    redis_client.client = mock_redis_connection
    redis_client._started = True
    return redis_client


class TestRedisClientLifecycle:
    async def test_start_verifies_connection(
        self, redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        redis_client.client = mock_redis_connection

        await redis_client.start()

        mock_redis_connection.ping.assert_awaited_once()
        assert redis_client._started

    async def test_start_failure_propagates(
        self, redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.ping.side_effect = RedisConnectionError("refused")
        redis_client.client = mock_redis_connection

        with pytest.raises(RedisConnectionError):
            await redis_client.start()
        assert not redis_client._started

    async def test_stop_closes_started_client(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        await started_redis_client.stop()

        mock_redis_connection.aclose.assert_awaited_once()
        assert not started_redis_client._started

    async def test_operations_start_lazily(
        self, redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.get.return_value = "value"
        redis_client.client = mock_redis_connection

        assert await redis_client.get("key") == "value"
        mock_redis_connection.ping.assert_awaited_once()


class TestRedisClientOperations:
    async def test_get_miss_returns_none(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.get.return_value = None

        assert await started_redis_client.get("missing") is None

    async def test_set_passes_ttl_as_expiry(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.set.return_value = True

        assert await started_redis_client.set("key", "value", ttl_seconds=86_400) is True
        mock_redis_connection.set.assert_awaited_once_with("key", "value", ex=86_400)

    async def test_set_without_ttl(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.set.return_value = True

        await started_redis_client.set("key", "value")

        mock_redis_connection.set.assert_awaited_once_with("key", "value", ex=None)

    async def test_incr_and_exists(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.incr.return_value = 4
        mock_redis_connection.exists.return_value = 1

        assert await started_redis_client.incr("counter") == 4
        assert await started_redis_client.exists("key") == 1

    async def test_timeout_propagates(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.get.side_effect = RedisTimeoutError("timed out")

        with pytest.raises(RedisTimeoutError):
            await started_redis_client.get("key")

    async def test_ping_reports_failure_without_raising(
        self, started_redis_client: RedisClient, mock_redis_connection: AsyncMock
    ) -> None:
        mock_redis_connection.ping.side_effect = RedisConnectionError("gone")

        assert await started_redis_client.ping() is False
