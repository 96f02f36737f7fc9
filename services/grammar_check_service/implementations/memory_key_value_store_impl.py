"""Process-local key-value store with TTL expiry and LRU eviction."""

from __future__ import annotations

import time
from collections import OrderedDict

from grammarcheck_service_libs.logging_utils import create_service_logger

from services.grammar_check_service.protocols import KeyValueStoreProtocol

logger = create_service_logger("grammar_check_service.memory_store")


class InMemoryKeyValueStore(KeyValueStoreProtocol):
    """In-memory store for development without Redis.

    Entries are ``(value, expires_at)`` pairs; ``expires_at`` is None for keys
    without a TTL. Expired entries are dropped lazily on access.
    """

    backend = "memory"

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max_entries
        self._entries: OrderedDict[str, tuple[str, float | None]] = OrderedDict()

        logger.info(f"In-memory cache store initialized: max_entries={max_entries}")

    def _live_value(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._entries[key]
            logger.debug(f"In-memory cache entry expired for key: {key}")
            return None

        self._entries.move_to_end(key)
        return value

    def _store(self, key: str, value: str, ttl_seconds: int | None) -> None:
        expires_at = time.monotonic() + ttl_seconds if ttl_seconds else None
        self._entries[key] = (value, expires_at)
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            logger.debug(f"In-memory cache evicted key: {evicted_key}")

    async def get(self, key: str) -> str | None:
        return self._live_value(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self._store(key, value, ttl_seconds)

    async def increment(self, key: str) -> int:
        current = self._live_value(key)
        new_value = int(current or 0) + 1
        if current is None:
            self._store(key, str(new_value), None)
        else:
            # Counters keep their original expiry, as Redis INCR does
            self._entries[key] = (str(new_value), self._entries[key][1])
        return new_value

    async def exists(self, key: str) -> bool:
        return self._live_value(key) is not None

    async def ping(self) -> bool:
        return True
