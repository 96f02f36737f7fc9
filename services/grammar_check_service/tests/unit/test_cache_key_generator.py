"""Tests for deterministic cache key derivation."""

from __future__ import annotations

import hashlib
import re

from common_core.domain_enums import GrammarProvider

from services.grammar_check_service.implementations.cache_key_generator import CacheKeyGenerator

KEY_PATTERN = re.compile(r"^grammar:(languagetool|openai|openrouter):[^:]+:[0-9a-f]{16}$")


def test_key_format() -> None:
    key = CacheKeyGenerator().generate_key(GrammarProvider.LANGUAGETOOL, "en-US", "Hello world")

    assert KEY_PATTERN.match(key)
    expected_hash = hashlib.sha256("Hello world".encode("utf-8")).hexdigest()[:16]
    assert key == f"grammar:languagetool:en-US:{expected_hash}"


def test_key_is_pure() -> None:
    generator = CacheKeyGenerator()

    first = generator.generate_key(GrammarProvider.OPENAI, "en-US", "Same text")
    second = CacheKeyGenerator().generate_key(GrammarProvider.OPENAI, "en-US", "Same text")

    assert first == second


def test_key_sensitive_to_every_component() -> None:
    generator = CacheKeyGenerator()
    base = generator.generate_key(GrammarProvider.OPENAI, "en-US", "Some text")

    assert generator.generate_key(GrammarProvider.OPENROUTER, "en-US", "Some text") != base
    assert generator.generate_key(GrammarProvider.OPENAI, "en-GB", "Some text") != base
    assert generator.generate_key(GrammarProvider.OPENAI, "en-US", "Some text.") != base


def test_non_ascii_text_hashed_as_utf8() -> None:
    text = "Är det här rätt?"
    key = CacheKeyGenerator().generate_key(GrammarProvider.LANGUAGETOOL, "sv", text)

    assert key.endswith(hashlib.sha256(text.encode("utf-8")).hexdigest()[:16])
