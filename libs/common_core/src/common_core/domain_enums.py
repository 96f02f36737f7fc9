"""
common_core.domain_enums - Enums defining core business domain concepts.
"""

from __future__ import annotations

from enum import Enum


class GrammarProvider(str, Enum):
    """Grammar checking backends selectable by API clients.

    LANGUAGETOOL is the rule-based engine, OPENAI the premium language model,
    OPENROUTER the free-tier language model (falls back to LANGUAGETOOL).
    """

    LANGUAGETOOL = "languagetool"
    OPENAI = "openai"
    OPENROUTER = "openrouter"


class GrammarErrorType(str, Enum):
    """Normalized classification of a reported grammar issue."""

    GRAMMAR = "grammar"
    SPELLING = "spelling"
    STYLE = "style"
    PUNCTUATION = "punctuation"
    OTHER = "other"

    @classmethod
    def from_label(cls, value: object) -> "GrammarErrorType":
        """Resolve a loosely formatted label, defaulting to OTHER."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.OTHER
