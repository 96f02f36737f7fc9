"""Null-object key-value store used when no cache store is configured."""

from __future__ import annotations

from services.grammar_check_service.protocols import KeyValueStoreProtocol


class NullKeyValueStore(KeyValueStoreProtocol):
    """Accepts every operation and remembers nothing."""

    backend = "disabled"

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        return None

    async def increment(self, key: str) -> int:
        return 0

    async def exists(self, key: str) -> bool:
        return False

    async def ping(self) -> bool:
        return True
