"""
Protocol definitions for Grammar Check Service dependency injection.

Behavioral contracts for every collaborator of the request orchestrator, so
implementations can be swapped (Redis vs. in-memory vs. disabled cache,
real vs. mocked providers) through the DI container.
"""

from __future__ import annotations

from collections.abc import Coroutine
from typing import Any, Protocol
from uuid import UUID

from common_core.api_models.grammar_check import (
    GrammarCheckRequest,
    GrammarCheckResponse,
    GrammarError,
    UsageStats,
)
from common_core.domain_enums import GrammarProvider


class KeyValueStoreProtocol(Protocol):
    """Minimal string/counter store backing the result cache.

    Implementations raise ``CacheError`` on backend failure; the null
    implementation never raises.
    """

    backend: str

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store a value, expiring after ``ttl_seconds`` when given."""
        ...

    async def increment(self, key: str) -> int:
        """Increment an integer counter and return the new value."""
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def ping(self) -> bool:
        """Return True when the store is reachable."""
        ...


class CacheKeyGeneratorProtocol(Protocol):
    def generate_key(self, provider: GrammarProvider, language: str, text: str) -> str:
        """Derive the deterministic cache key for a (provider, language, text) triple."""
        ...


class ResultCacheProtocol(Protocol):
    """Best-effort storage of grammar check results and usage counters."""

    @property
    def enabled(self) -> bool:
        """True when a real backing store is configured."""
        ...

    async def get(self, key: str) -> list[GrammarError] | None:
        """
        Look up a cached error list.

        Returns:
            The cached errors, or None on miss, disabled store or any store failure
        """
        ...

    async def set(
        self, key: str, errors: list[GrammarError], ttl_seconds: int | None = None
    ) -> None:
        """Store an error list; never raises."""
        ...

    async def increment_provider_usage(self, provider: GrammarProvider) -> None:
        """Count one completed provider check; never raises."""
        ...

    async def track_session(self, session_id: str) -> None:
        """Record a session the first time it is seen; never raises."""
        ...

    async def get_usage_stats(self) -> UsageStats | None:
        """
        Read provider usage counters and the session total.

        Returns:
            Usage statistics, or None when no store is configured

        Raises:
            CacheError: If the store cannot be read
        """
        ...


class GrammarProviderProtocol(Protocol):
    """Uniform capability implemented by every grammar checking backend."""

    name: str

    async def check(self, text: str, language: str, correlation_id: UUID) -> list[GrammarError]:
        """
        Check text and return normalized errors.

        Args:
            text: Text to check
            language: Language code (e.g. "en-US")
            correlation_id: Request correlation ID for tracing

        Returns:
            Errors whose spans lie within ``text`` and whose replacements are capped at five

        Raises:
            ProviderError: If the backend cannot produce a result
        """
        ...


class SuggestionRankerProtocol(Protocol):
    def rank(
        self, candidates: list[str], original_word: str, full_text: str, error_offset: int
    ) -> list[str]:
        """Reorder candidates by descending plausibility; ties keep input order."""
        ...


class BackgroundTaskRunnerProtocol(Protocol):
    """Runs fire-and-forget coroutines detached from the request path."""

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        """Schedule ``coro`` without awaiting it; failures are only logged."""
        ...

    async def drain(self, timeout_seconds: float) -> None:
        """Wait for pending tasks, cancelling whatever is still running at the timeout."""
        ...


class GrammarOrchestratorProtocol(Protocol):
    async def check_grammar(
        self, request: GrammarCheckRequest, correlation_id: UUID
    ) -> GrammarCheckResponse:
        """
        Validate, consult the cache, dispatch to a provider on a miss, and build the envelope.

        Raises:
            GrammarCheckError: VALIDATION_ERROR for invalid input
            ProviderError: If the selected provider fails without a fallback
        """
        ...
