"""Tests for the best-effort result cache."""

from __future__ import annotations

from unittest.mock import ANY, AsyncMock, MagicMock

import pytest
from common_core.api_models.grammar_check import GrammarError
from common_core.domain_enums import GrammarProvider

from services.grammar_check_service.config import Settings
from services.grammar_check_service.exceptions import CacheError
from services.grammar_check_service.implementations.memory_key_value_store_impl import (
    InMemoryKeyValueStore,
)
from services.grammar_check_service.implementations.null_key_value_store_impl import (
    NullKeyValueStore,
)
from services.grammar_check_service.implementations.result_cache_impl import ResultCacheImpl
from services.grammar_check_service.protocols import KeyValueStoreProtocol


@pytest.fixture
def failing_store() -> AsyncMock:
    store = AsyncMock(spec=KeyValueStoreProtocol)
    failure = CacheError("store unreachable")
    store.get.side_effect = failure
    store.set.side_effect = failure
    store.increment.side_effect = failure
    store.exists.side_effect = failure
    return store


class TestResultCacheWithMemoryStore:
    async def test_round_trip(self, settings: Settings, spelling_error: GrammarError) -> None:
        cache = ResultCacheImpl(InMemoryKeyValueStore(), settings)

        await cache.set("grammar:languagetool:en-US:abc", [spelling_error])

        assert await cache.get("grammar:languagetool:en-US:abc") == [spelling_error]

    async def test_empty_list_is_a_hit(self, settings: Settings) -> None:
        cache = ResultCacheImpl(InMemoryKeyValueStore(), settings)

        await cache.set("key", [])

        assert await cache.get("key") == []

    async def test_miss_returns_none(self, settings: Settings) -> None:
        metrics = {"cache_lookups_total": MagicMock()}
        cache = ResultCacheImpl(InMemoryKeyValueStore(), settings, metrics)

        assert await cache.get("missing") is None
        metrics["cache_lookups_total"].labels.assert_called_with(result="miss")

    async def test_usage_counters_and_sessions(self, settings: Settings) -> None:
        cache = ResultCacheImpl(InMemoryKeyValueStore(), settings)

        await cache.increment_provider_usage(GrammarProvider.LANGUAGETOOL)
        await cache.increment_provider_usage(GrammarProvider.LANGUAGETOOL)
        await cache.increment_provider_usage(GrammarProvider.OPENAI)
        await cache.track_session("session-1")
        await cache.track_session("session-1")
        await cache.track_session("session-2")

        usage = await cache.get_usage_stats()

        assert usage is not None
        assert usage.stats["languagetool"].total == 2
        assert usage.stats["openai"].total == 1
        assert usage.stats["openrouter"].total == 0
        assert usage.total_sessions == 2


class TestResultCacheStoreInteraction:
    async def test_set_uses_configured_ttl(
        self, settings: Settings, spelling_error: GrammarError
    ) -> None:
        store = AsyncMock(spec=KeyValueStoreProtocol)
        cache = ResultCacheImpl(store, settings)

        await cache.set("key", [spelling_error])

        store.set.assert_awaited_once_with("key", ANY, ttl_seconds=86_400)
        stored_json = store.set.await_args.args[1]
        assert '"shortMessage": "Spelling mistake"' in stored_json

    async def test_session_marker_uses_session_ttl(self, settings: Settings) -> None:
        store = AsyncMock(spec=KeyValueStoreProtocol)
        store.exists.return_value = False
        cache = ResultCacheImpl(store, settings)

        await cache.track_session("abc")

        store.set.assert_awaited_once_with("session:abc", ANY, ttl_seconds=2_592_000)
        store.increment.assert_awaited_once_with("sessions:total")

    async def test_undecodable_entry_is_a_miss(self, settings: Settings) -> None:
        store = AsyncMock(spec=KeyValueStoreProtocol)
        store.get.return_value = "{not json"

        assert await ResultCacheImpl(store, settings).get("key") is None


class TestResultCacheFailures:
    async def test_request_path_operations_absorb_store_failures(
        self, settings: Settings, failing_store: AsyncMock, spelling_error: GrammarError
    ) -> None:
        cache = ResultCacheImpl(failing_store, settings)

        assert await cache.get("key") is None
        await cache.set("key", [spelling_error])
        await cache.increment_provider_usage(GrammarProvider.OPENAI)
        await cache.track_session("abc")

    async def test_usage_stats_propagate_store_failure(
        self, settings: Settings, failing_store: AsyncMock
    ) -> None:
        with pytest.raises(CacheError):
            await ResultCacheImpl(failing_store, settings).get_usage_stats()


class TestDisabledResultCache:
    async def test_disabled_cache_is_inert(
        self, settings: Settings, spelling_error: GrammarError
    ) -> None:
        cache = ResultCacheImpl(NullKeyValueStore(), settings)

        await cache.set("key", [spelling_error])

        assert cache.enabled is False
        assert await cache.get("key") is None
        assert await cache.get_usage_stats() is None
