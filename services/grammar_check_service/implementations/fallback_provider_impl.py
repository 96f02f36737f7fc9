"""Decorator giving a grammar provider a silent fallback on failure."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from common_core.api_models.grammar_check import GrammarError
from grammarcheck_service_libs.logging_utils import create_service_logger

from services.grammar_check_service.protocols import GrammarProviderProtocol

logger = create_service_logger("grammar_check_service.fallback_provider")


class FallbackGrammarProvider(GrammarProviderProtocol):
    """Delegates to ``fallback`` whenever ``primary`` fails for any reason.

    Reports the primary's name, so callers and cache keys see the provider
    that was requested. Failures of the fallback itself propagate.
    """

    def __init__(
        self,
        primary: GrammarProviderProtocol,
        fallback: GrammarProviderProtocol,
        metrics: dict[str, Any] | None = None,
    ):
        self.primary = primary
        self.fallback = fallback
        self.metrics = metrics
        self.name = primary.name

    async def check(self, text: str, language: str, correlation_id: UUID) -> list[GrammarError]:
        try:
            return await self.primary.check(text, language, correlation_id)
        except Exception as e:
            logger.info(
                f"{self.primary.name} unavailable, using {self.fallback.name} instead: {e}",
                correlation_id=str(correlation_id),
            )
            if self.metrics and "provider_fallbacks_total" in self.metrics:
                self.metrics["provider_fallbacks_total"].labels(
                    provider=self.primary.name, fallback=self.fallback.name
                ).inc()

        return await self.fallback.check(text, language, correlation_id)
