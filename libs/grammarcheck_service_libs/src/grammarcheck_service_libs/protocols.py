"""
Shared protocol definitions for grammarcheck_service_libs.

These protocols define the contracts for shared infrastructure components so
services can depend on behaviour rather than concrete clients.
"""

from __future__ import annotations

from typing import Protocol

__all__ = ["RedisClientProtocol"]


class RedisClientProtocol(Protocol):
    """Protocol for the Redis string and counter operations used by the result cache."""

    async def start(self) -> None:
        """Open the connection and verify it with a PING."""
        ...

    async def stop(self) -> None:
        """Close the connection."""
        ...

    async def get(self, key: str) -> str | None:
        """
        Get string value from Redis.

        Returns:
            String value if key exists, None otherwise
        """
        ...

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        """Set string value, expiring after ``ttl_seconds`` when given."""
        ...

    async def incr(self, key: str) -> int:
        """Increment an integer counter and return its new value."""
        ...

    async def exists(self, key: str) -> int:
        """Return 1 if key exists, 0 otherwise."""
        ...

    async def ping(self) -> bool:
        """Return True when the server answers a PING."""
        ...
