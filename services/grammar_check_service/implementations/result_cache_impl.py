"""Best-effort result cache for grammar check responses.

Every request-path operation absorbs store failures: a failed lookup is a
miss, a failed write or counter update is logged and dropped.
"""

from __future__ import annotations

import json
import time
from typing import Any

from common_core.api_models.grammar_check import GrammarError, ProviderUsage, UsageStats
from common_core.domain_enums import GrammarProvider
from grammarcheck_service_libs.logging_utils import create_service_logger
from pydantic import TypeAdapter, ValidationError

from services.grammar_check_service.config import Settings
from services.grammar_check_service.exceptions import CacheError
from services.grammar_check_service.implementations.null_key_value_store_impl import (
    NullKeyValueStore,
)
from services.grammar_check_service.protocols import KeyValueStoreProtocol, ResultCacheProtocol

logger = create_service_logger("grammar_check_service.result_cache")

_ERROR_LIST_ADAPTER: TypeAdapter[list[GrammarError]] = TypeAdapter(list[GrammarError])

SESSIONS_TOTAL_KEY = "sessions:total"


def usage_key(provider: GrammarProvider) -> str:
    return f"usage:{GrammarProvider(provider).value}:count"


def session_key(session_id: str) -> str:
    return f"session:{session_id}"


class ResultCacheImpl(ResultCacheProtocol):
    """Caches error lists as JSON and maintains usage/session counters."""

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        settings: Settings,
        metrics: dict[str, Any] | None = None,
    ):
        self.store = store
        self.settings = settings
        self.metrics = metrics

    @property
    def enabled(self) -> bool:
        return not isinstance(self.store, NullKeyValueStore)

    def _record_lookup(self, result: str) -> None:
        if self.metrics and "cache_lookups_total" in self.metrics:
            self.metrics["cache_lookups_total"].labels(result=result).inc()

    async def get(self, key: str) -> list[GrammarError] | None:
        if not self.enabled:
            return None

        try:
            raw = await self.store.get(key)
        except CacheError as e:
            logger.warning(f"Cache lookup failed, treating as miss: {e}", cache_key=key)
            self._record_lookup("error")
            return None

        if raw is None:
            self._record_lookup("miss")
            return None

        try:
            errors = _ERROR_LIST_ADAPTER.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding undecodable cache entry: {e.error_count()} validation errors",
                cache_key=key,
            )
            self._record_lookup("invalid")
            return None

        self._record_lookup("hit")
        return errors

    async def set(
        self, key: str, errors: list[GrammarError], ttl_seconds: int | None = None
    ) -> None:
        if not self.enabled:
            return

        ttl = ttl_seconds if ttl_seconds is not None else self.settings.CACHE_TTL_SECONDS
        payload = json.dumps(
            [error.model_dump(mode="json", by_alias=True, exclude_none=True) for error in errors]
        )
        try:
            await self.store.set(key, payload, ttl_seconds=ttl)
            logger.debug(f"Cached {len(errors)} errors for {ttl}s", cache_key=key)
        except CacheError as e:
            logger.warning(f"Cache write failed: {e}", cache_key=key)

    async def increment_provider_usage(self, provider: GrammarProvider) -> None:
        if not self.enabled:
            return

        try:
            await self.store.increment(usage_key(provider))
        except CacheError as e:
            logger.warning(f"Usage counter update failed: {e}", provider=str(provider))

    async def track_session(self, session_id: str) -> None:
        if not self.enabled:
            return

        key = session_key(session_id)
        try:
            if await self.store.exists(key):
                return
            await self.store.set(
                key,
                str(int(time.time() * 1000)),
                ttl_seconds=self.settings.SESSION_TTL_SECONDS,
            )
            await self.store.increment(SESSIONS_TOTAL_KEY)
        except CacheError as e:
            logger.warning(f"Session tracking failed: {e}")

    async def get_usage_stats(self) -> UsageStats | None:
        if not self.enabled:
            return None

        stats: dict[str, ProviderUsage] = {}
        for provider in GrammarProvider:
            raw = await self.store.get(usage_key(provider))
            stats[provider.value] = ProviderUsage(total=_as_count(raw))

        total_sessions = _as_count(await self.store.get(SESSIONS_TOTAL_KEY))
        return UsageStats(stats=stats, total_sessions=total_sessions)


def _as_count(raw: str | None) -> int:
    try:
        return int(raw) if raw is not None else 0
    except ValueError:
        return 0
