"""Deterministic cache key derivation for grammar check results."""

from __future__ import annotations

import hashlib

from common_core.domain_enums import GrammarProvider

from services.grammar_check_service.protocols import CacheKeyGeneratorProtocol

CACHE_KEY_PREFIX = "grammar"
CONTENT_HASH_LENGTH = 16


class CacheKeyGenerator(CacheKeyGeneratorProtocol):
    """Builds ``grammar:{provider}:{language}:{sha256(text)[:16]}`` keys.

    The digest is truncated to 64 bits, so unrelated texts sharing a provider
    and language can collide with negligible but non-zero probability.
    """

    def generate_key(self, provider: GrammarProvider, language: str, text: str) -> str:
        content_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()
        return (
            f"{CACHE_KEY_PREFIX}:{GrammarProvider(provider).value}:{language}:"
            f"{content_hash[:CONTENT_HASH_LENGTH]}"
        )
