"""Route tests using a lightweight app, Dishka DI and the Quart test client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from common_core.api_models.grammar_check import GrammarError
from common_core.domain_enums import GrammarProvider
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from grammarcheck_service_libs.error_handling.quart_handlers import register_error_handlers
from grammarcheck_service_libs.middleware.quart_correlation_middleware import (
    setup_correlation_middleware,
)
from grammarcheck_service_libs.quart_app import GrammarCheckApp
from quart.typing import TestClientProtocol as QuartTestClient
from quart_dishka import QuartDishka

from services.grammar_check_service.api.grammar_routes import grammar_bp
from services.grammar_check_service.api.health_routes import health_bp
from services.grammar_check_service.config import Settings
from services.grammar_check_service.di import CoreInfrastructureProvider
from services.grammar_check_service.error_handlers import register_grammar_check_error_handlers
from services.grammar_check_service.exceptions import raise_provider_error
from services.grammar_check_service.implementations.background_task_runner import (
    BackgroundTaskRunner,
)
from services.grammar_check_service.implementations.cache_key_generator import CacheKeyGenerator
from services.grammar_check_service.implementations.grammar_orchestrator_impl import (
    GrammarOrchestratorImpl,
)
from services.grammar_check_service.implementations.memory_key_value_store_impl import (
    InMemoryKeyValueStore,
)
from services.grammar_check_service.implementations.null_key_value_store_impl import (
    NullKeyValueStore,
)
from services.grammar_check_service.implementations.result_cache_impl import ResultCacheImpl
from services.grammar_check_service.protocols import (
    GrammarOrchestratorProtocol,
    GrammarProviderProtocol,
    KeyValueStoreProtocol,
    ResultCacheProtocol,
)

ENDPOINT = "/api/grammar-check"


class _TestProvider(Provider):
    scope = Scope.APP

    def __init__(
        self,
        orchestrator: GrammarOrchestratorProtocol,
        cache: ResultCacheProtocol,
        store: KeyValueStoreProtocol,
    ) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._cache = cache
        self._store = store

    @provide
    def provide_orchestrator(self) -> GrammarOrchestratorProtocol:
        return self._orchestrator

    @provide
    def provide_cache(self) -> ResultCacheProtocol:
        return self._cache

    @provide
    def provide_store(self) -> KeyValueStoreProtocol:
        return self._store


class _Harness:
    def __init__(
        self,
        settings: Settings,
        provider: AsyncMock,
        store: KeyValueStoreProtocol,
    ) -> None:
        self.provider = provider
        self.store = store
        self.runner = BackgroundTaskRunner()
        self.api_errors = MagicMock()
        cache = ResultCacheImpl(store, settings)
        orchestrator = GrammarOrchestratorImpl(
            settings=settings,
            providers={GrammarProvider.LANGUAGETOOL: provider},
            cache=cache,
            key_generator=CacheKeyGenerator(),
            background=self.runner,
        )

        self.app = GrammarCheckApp(__name__)
        setup_correlation_middleware(self.app)
        register_error_handlers(self.app)
        register_grammar_check_error_handlers(self.app, {"api_errors_total": self.api_errors})
        self.container: AsyncContainer = make_async_container(
            CoreInfrastructureProvider(), _TestProvider(orchestrator, cache, store)
        )
        QuartDishka(app=self.app, container=self.container)
        self.app.register_blueprint(grammar_bp)
        self.app.register_blueprint(health_bp)

    @property
    def client(self) -> QuartTestClient:
        return self.app.test_client()

    async def close(self) -> None:
        await self.runner.drain(timeout_seconds=1.0)
        await self.container.close()


@pytest.fixture
def languagetool(spelling_error: GrammarError) -> AsyncMock:
    provider = AsyncMock(spec=GrammarProviderProtocol)
    provider.check.return_value = [spelling_error]
    return provider


@pytest.fixture
async def harness(settings: Settings, languagetool: AsyncMock) -> AsyncIterator[_Harness]:
    harness = _Harness(settings, languagetool, InMemoryKeyValueStore())
    yield harness
    await harness.close()


@pytest.fixture
async def disabled_harness(
    settings: Settings, languagetool: AsyncMock
) -> AsyncIterator[_Harness]:
    harness = _Harness(settings, languagetool, NullKeyValueStore())
    yield harness
    await harness.close()


async def _post(harness: _Harness, body: Any) -> tuple[int, dict[str, Any]]:
    response = await harness.client.post(ENDPOINT, json=body)
    return response.status_code, await response.get_json()


class TestGrammarCheckRoute:
    async def test_success_envelope(self, harness: _Harness) -> None:
        status, body = await _post(harness, {"text": "helo, how are you", "provider": "languagetool"})

        assert status == 200
        assert body["errors"][0]["shortMessage"] == "Spelling mistake"
        assert body["errors"][0]["replacements"] == ["hello", "help"]
        assert "context" not in body["errors"][0]
        metadata = body["metadata"]
        assert metadata["provider"] == "languagetool"
        assert metadata["cached"] is False
        assert metadata["language"] == "en-US"
        assert isinstance(metadata["processingTime"], int)
        assert isinstance(metadata["timestamp"], int)

    async def test_repeat_request_served_from_cache(
        self, harness: _Harness, languagetool: AsyncMock
    ) -> None:
        body = {"text": "helo, how are you", "provider": "languagetool", "sessionId": "abc"}

        await _post(harness, body)
        await harness.runner.drain(timeout_seconds=1.0)
        status, second = await _post(harness, body)

        assert status == 200
        assert second["metadata"]["cached"] is True
        assert languagetool.check.await_count == 1

    async def test_text_too_long(self, harness: _Harness, languagetool: AsyncMock) -> None:
        status, body = await _post(harness, {"text": "a" * 10_001, "provider": "languagetool"})

        assert status == 400
        assert body["error"] == "Text exceeds maximum length of 10000 characters"
        assert body["error_code"] == "VALIDATION_ERROR"
        languagetool.check.assert_not_called()
        harness.api_errors.labels.assert_called_once_with(
            endpoint=ENDPOINT, error_type="validation_error"
        )

    @pytest.mark.parametrize(
        "body, message",
        [
            ({"provider": "languagetool"}, "Text is required"),
            ({"text": "Hello", "provider": "grammarly"}, "Invalid provider"),
            ({"text": "Hello"}, "Invalid provider"),
        ],
    )
    async def test_validation_errors(
        self, harness: _Harness, body: dict[str, Any], message: str
    ) -> None:
        status, response_body = await _post(harness, body)

        assert status == 400
        assert response_body["error"] == message

    async def test_non_object_body_rejected(self, harness: _Harness) -> None:
        response = await harness.client.post(
            ENDPOINT, data="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in await response.get_json()

    async def test_provider_failure_returns_500(
        self, harness: _Harness, languagetool: AsyncMock
    ) -> None:
        def fail(*_: object) -> None:
            raise_provider_error(
                provider="languagetool",
                operation="languagetool_check",
                message="LanguageTool API error: 503 Service Unavailable",
            )

        languagetool.check.side_effect = fail

        status, body = await _post(harness, {"text": "Hello", "provider": "languagetool"})

        assert status == 500
        assert body["error"] == "Grammar check failed: LanguageTool API error: 503 Service Unavailable"
        assert body["error_code"] == "PROVIDER_FAILED"

    async def test_unexpected_failure_returns_generic_500(
        self, harness: _Harness, languagetool: AsyncMock
    ) -> None:
        languagetool.check.side_effect = RuntimeError("kaboom")

        status, body = await _post(harness, {"text": "Hello", "provider": "languagetool"})

        assert status == 500
        assert body == {"error": "Internal server error"}

    async def test_correlation_id_echoed(self, harness: _Harness) -> None:
        correlation_id = str(uuid4())

        response = await harness.client.post(
            ENDPOINT,
            json={"text": "Hello", "provider": "languagetool"},
            headers={"X-Correlation-ID": correlation_id},
        )

        assert response.headers["X-Correlation-ID"] == correlation_id


class TestUsageRoute:
    async def test_usage_counts(self, harness: _Harness) -> None:
        await _post(harness, {"text": "Hello", "provider": "languagetool", "sessionId": "s1"})
        await harness.runner.drain(timeout_seconds=1.0)

        response = await harness.client.get("/api/usage")

        assert response.status_code == 200
        body = await response.get_json()
        assert body["stats"]["languagetool"] == {"total": 1}
        assert body["stats"]["openai"] == {"total": 0}
        assert body["totalSessions"] == 1

    async def test_usage_without_store_returns_503(self, disabled_harness: _Harness) -> None:
        response = await disabled_harness.client.get("/api/usage")

        assert response.status_code == 503
        body = await response.get_json()
        assert body["error"] == "Usage statistics not configured (cache store not available)"


class TestHealthRoutes:
    async def test_healthz(self, disabled_harness: _Harness) -> None:
        response = await disabled_harness.client.get("/healthz")

        assert response.status_code == 200
        body = await response.get_json()
        assert body["status"] == "healthy"
        assert body["dependencies"]["cache_store"] == {"status": "healthy", "backend": "disabled"}

    async def test_healthz_degraded_when_store_unreachable(
        self, settings: Settings, languagetool: AsyncMock
    ) -> None:
        store = AsyncMock(spec=KeyValueStoreProtocol)
        store.backend = "redis"
        store.ping.return_value = False
        harness = _Harness(settings, languagetool, store)

        try:
            response = await harness.client.get("/healthz")
        finally:
            await harness.close()

        assert response.status_code == 503
        assert (await response.get_json())["status"] == "degraded"

    async def test_metrics_endpoint(self, disabled_harness: _Harness) -> None:
        response = await disabled_harness.client.get("/metrics")

        assert response.status_code == 200
        assert response.content_type.startswith("text/plain")
