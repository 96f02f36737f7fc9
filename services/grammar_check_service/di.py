"""Dependency injection configuration for the Grammar Check Service using Dishka."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import aiohttp
from common_core.config_enums import CacheBackend
from common_core.domain_enums import GrammarProvider
from dishka import Provider, Scope, provide
from grammarcheck_service_libs.error_handling.correlation import (
    CorrelationContext,
    extract_correlation_context_from_request,
)
from grammarcheck_service_libs.logging_utils import create_service_logger
from grammarcheck_service_libs.redis_client import RedisClient
from prometheus_client import REGISTRY, CollectorRegistry
from quart import g, request

from services.grammar_check_service.config import Settings, settings
from services.grammar_check_service.implementations.background_task_runner import (
    BackgroundTaskRunner,
)
from services.grammar_check_service.implementations.cache_key_generator import (
    CacheKeyGenerator,
)
from services.grammar_check_service.implementations.fallback_provider_impl import (
    FallbackGrammarProvider,
)
from services.grammar_check_service.implementations.grammar_orchestrator_impl import (
    GrammarOrchestratorImpl,
)
from services.grammar_check_service.implementations.languagetool_provider_impl import (
    LanguageToolProviderImpl,
)
from services.grammar_check_service.implementations.memory_key_value_store_impl import (
    InMemoryKeyValueStore,
)
from services.grammar_check_service.implementations.null_key_value_store_impl import (
    NullKeyValueStore,
)
from services.grammar_check_service.implementations.openai_provider_impl import (
    OpenAIProviderImpl,
)
from services.grammar_check_service.implementations.openrouter_provider_impl import (
    OpenRouterProviderImpl,
)
from services.grammar_check_service.implementations.redis_key_value_store_impl import (
    RedisKeyValueStore,
)
from services.grammar_check_service.implementations.result_cache_impl import ResultCacheImpl
from services.grammar_check_service.implementations.suggestion_ranker import SuggestionRanker
from services.grammar_check_service.metrics import METRICS
from services.grammar_check_service.protocols import (
    BackgroundTaskRunnerProtocol,
    CacheKeyGeneratorProtocol,
    GrammarOrchestratorProtocol,
    GrammarProviderProtocol,
    KeyValueStoreProtocol,
    ResultCacheProtocol,
    SuggestionRankerProtocol,
)

logger = create_service_logger("grammar_check_service.di")


class CoreInfrastructureProvider(Provider):
    """Provider for core infrastructure dependencies (settings, metrics, correlation context)."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return settings

    @provide(scope=Scope.APP)
    def provide_metrics_registry(self) -> CollectorRegistry:
        """Provide the global Prometheus metrics registry shared across collectors."""
        return REGISTRY

    @provide(scope=Scope.APP)
    def provide_metrics(self) -> dict[str, Any]:
        return METRICS

    @provide(scope=Scope.REQUEST)
    def provide_correlation_context(self) -> CorrelationContext:
        """Provide the correlation context set by middleware, or extract it from the request."""
        ctx = getattr(g, "correlation_context", None)
        if isinstance(ctx, CorrelationContext):
            return ctx
        return extract_correlation_context_from_request(request)

    @provide(scope=Scope.APP)
    async def provide_http_session(
        self, settings: Settings
    ) -> AsyncIterator[aiohttp.ClientSession]:
        """Provide the shared HTTP client session used by every grammar provider."""
        timeout = aiohttp.ClientTimeout(total=settings.HTTP_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            yield session


class CacheProvider(Provider):
    """Provider for the result cache and its backing store."""

    @provide(scope=Scope.APP)
    async def provide_key_value_store(
        self, settings: Settings
    ) -> AsyncIterator[KeyValueStoreProtocol]:
        """Select Redis, process-local or no-op storage from configuration."""
        backend = settings.cache_backend

        if backend is CacheBackend.REDIS:
            redis_client = RedisClient(
                client_id=f"{settings.SERVICE_NAME}-redis",
                redis_url=settings.REDIS_URL,
            )
            try:
                await redis_client.start()
            except Exception as e:
                # Operations retry the connection; failures degrade to cache misses
                logger.warning(f"Redis unavailable at startup, continuing without warm cache: {e}")
            try:
                yield RedisKeyValueStore(redis_client)
            finally:
                await redis_client.stop()
            return

        if backend is CacheBackend.MEMORY:
            yield InMemoryKeyValueStore(max_entries=settings.LOCAL_CACHE_MAX_ENTRIES)
            return

        logger.info("No cache store configured; result caching and usage tracking disabled")
        yield NullKeyValueStore()

    @provide(scope=Scope.APP)
    def provide_result_cache(
        self,
        store: KeyValueStoreProtocol,
        settings: Settings,
        metrics: dict[str, Any],
    ) -> ResultCacheProtocol:
        return ResultCacheImpl(store=store, settings=settings, metrics=metrics)

    @provide(scope=Scope.APP)
    def provide_cache_key_generator(self) -> CacheKeyGeneratorProtocol:
        return CacheKeyGenerator()


class GrammarProviderClientsProvider(Provider):
    """Provider for the grammar checking backends."""

    @provide(scope=Scope.APP)
    def provide_suggestion_ranker(self) -> SuggestionRankerProtocol:
        return SuggestionRanker()

    @provide(scope=Scope.APP)
    def provide_grammar_provider_map(
        self,
        session: aiohttp.ClientSession,
        settings: Settings,
        ranker: SuggestionRankerProtocol,
        metrics: dict[str, Any],
    ) -> dict[GrammarProvider, GrammarProviderProtocol]:
        """Provide the provider registry; OpenRouter falls back to LanguageTool."""
        languagetool = LanguageToolProviderImpl(session=session, settings=settings, ranker=ranker)

        return {
            GrammarProvider.LANGUAGETOOL: languagetool,
            GrammarProvider.OPENAI: OpenAIProviderImpl(session=session, settings=settings),
            GrammarProvider.OPENROUTER: FallbackGrammarProvider(
                primary=OpenRouterProviderImpl(session=session, settings=settings),
                fallback=languagetool,
                metrics=metrics,
            ),
        }


class ServiceImplementationsProvider(Provider):
    """Provider for request orchestration and background work."""

    @provide(scope=Scope.APP)
    async def provide_background_task_runner(
        self, settings: Settings, metrics: dict[str, Any]
    ) -> AsyncIterator[BackgroundTaskRunnerProtocol]:
        """Provide the fire-and-forget runner, draining pending tasks at shutdown."""
        runner = BackgroundTaskRunner(metrics=metrics)
        try:
            yield runner
        finally:
            await runner.drain(settings.BACKGROUND_DRAIN_TIMEOUT_SECONDS)

    @provide(scope=Scope.APP)
    def provide_grammar_orchestrator(
        self,
        settings: Settings,
        providers: dict[GrammarProvider, GrammarProviderProtocol],
        cache: ResultCacheProtocol,
        key_generator: CacheKeyGeneratorProtocol,
        background: BackgroundTaskRunnerProtocol,
        metrics: dict[str, Any],
    ) -> GrammarOrchestratorProtocol:
        return GrammarOrchestratorImpl(
            settings=settings,
            providers=providers,
            cache=cache,
            key_generator=key_generator,
            background=background,
            metrics=metrics,
        )
