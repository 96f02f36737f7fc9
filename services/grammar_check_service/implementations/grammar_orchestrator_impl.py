"""
Request orchestration for grammar checks.

Validates input, consults the result cache, dispatches to the selected
provider on a miss, and assembles the response envelope. Cache writes, usage
counters and session tracking run as background tasks and never delay or
fail the response.
"""

from __future__ import annotations

import time
from typing import Any
from uuid import UUID

from common_core.api_models.grammar_check import (
    GrammarCheckMetadata,
    GrammarCheckRequest,
    GrammarCheckResponse,
    GrammarError,
)
from common_core.domain_enums import GrammarProvider
from grammarcheck_service_libs.error_handling import raise_validation_error
from grammarcheck_service_libs.logging_utils import create_service_logger

from services.grammar_check_service.config import Settings
from services.grammar_check_service.exceptions import SERVICE_NAME
from services.grammar_check_service.protocols import (
    BackgroundTaskRunnerProtocol,
    CacheKeyGeneratorProtocol,
    GrammarOrchestratorProtocol,
    GrammarProviderProtocol,
    ResultCacheProtocol,
)

logger = create_service_logger("grammar_check_service.orchestrator")

_OPERATION = "check_grammar"


class GrammarOrchestratorImpl(GrammarOrchestratorProtocol):
    def __init__(
        self,
        settings: Settings,
        providers: dict[GrammarProvider, GrammarProviderProtocol],
        cache: ResultCacheProtocol,
        key_generator: CacheKeyGeneratorProtocol,
        background: BackgroundTaskRunnerProtocol,
        metrics: dict[str, Any] | None = None,
    ):
        self.settings = settings
        self.providers = providers
        self.cache = cache
        self.key_generator = key_generator
        self.background = background
        self.metrics = metrics

    async def check_grammar(
        self, request: GrammarCheckRequest, correlation_id: UUID
    ) -> GrammarCheckResponse:
        start = time.perf_counter()

        text = self._validate_text(request.text, correlation_id)
        provider = self._validate_provider(request.provider, correlation_id)
        language = self._validate_language(request.language, correlation_id)

        if isinstance(request.session_id, str) and request.session_id:
            self.background.spawn(
                self.cache.track_session(request.session_id), name="track_session"
            )

        cache_key = self.key_generator.generate_key(provider, language, text)
        errors = await self.cache.get(cache_key)
        # An empty cached list is still a hit
        cached = errors is not None

        if errors is None:
            errors = await self._run_provider(provider, text, language, correlation_id)
            self.background.spawn(self.cache.set(cache_key, errors), name="cache_result")
            self.background.spawn(
                self.cache.increment_provider_usage(provider), name="increment_usage"
            )

        elapsed = time.perf_counter() - start
        self._record_check(provider, "success", cached, elapsed)

        logger.info(
            f"Grammar check completed: {len(errors)} errors via {provider.value}",
            correlation_id=str(correlation_id),
            cached=cached,
            text_length=len(text),
        )

        return GrammarCheckResponse(
            errors=errors,
            metadata=GrammarCheckMetadata(
                provider=provider,
                processing_time=int(elapsed * 1000),
                cached=cached,
                timestamp=int(time.time() * 1000),
                language=language,
            ),
        )

    async def _run_provider(
        self, provider: GrammarProvider, text: str, language: str, correlation_id: UUID
    ) -> list[GrammarError]:
        start = time.perf_counter()
        try:
            return await self.providers[provider].check(text, language, correlation_id)
        except Exception:
            self._record_check(provider, "failure", False, time.perf_counter() - start)
            raise

    def _record_check(
        self, provider: GrammarProvider, status: str, cached: bool, elapsed: float
    ) -> None:
        if not self.metrics:
            return
        self.metrics["grammar_checks_total"].labels(provider=provider.value, status=status).inc()
        self.metrics["grammar_check_duration_seconds"].labels(
            provider=provider.value, cached=str(cached).lower()
        ).observe(elapsed)

    def _validate_text(self, value: Any, correlation_id: UUID) -> str:
        if not isinstance(value, str) or not value:
            raise_validation_error(
                service=SERVICE_NAME,
                operation=_OPERATION,
                field="text",
                message="Text is required",
                correlation_id=correlation_id,
            )
        if len(value) > self.settings.MAX_TEXT_LENGTH:
            raise_validation_error(
                service=SERVICE_NAME,
                operation=_OPERATION,
                field="text",
                message=(
                    "Text exceeds maximum length of "
                    f"{self.settings.MAX_TEXT_LENGTH} characters"
                ),
                correlation_id=correlation_id,
                text_length=len(value),
            )
        return value

    def _validate_provider(self, value: Any, correlation_id: UUID) -> GrammarProvider:
        provider: GrammarProvider | None = None
        if isinstance(value, str):
            try:
                provider = GrammarProvider(value)
            except ValueError:
                provider = None

        if provider is None or provider not in self.providers:
            raise_validation_error(
                service=SERVICE_NAME,
                operation=_OPERATION,
                field="provider",
                message="Invalid provider",
                correlation_id=correlation_id,
                provider=str(value),
            )
        return provider

    def _validate_language(self, value: Any, correlation_id: UUID) -> str:
        if value is None:
            return self.settings.DEFAULT_LANGUAGE
        if not isinstance(value, str) or not value.strip():
            raise_validation_error(
                service=SERVICE_NAME,
                operation=_OPERATION,
                field="language",
                message="Invalid language",
                correlation_id=correlation_id,
            )
        return value
