"""Prompt text sent to language model grammar providers."""

from __future__ import annotations

GRAMMAR_SYSTEM_PROMPT = """You are a professional grammar and style checker. Analyze the provided text and identify all grammar, spelling, punctuation, and style errors.

For each error, provide:
1. "message": a clear explanation of the issue
2. "offset": the exact character offset where the error starts (0-indexed)
3. "length": the length of the error in characters
4. "replacements": up to 5 suggested replacements, best first
5. "ruleId": a rule identifier (e.g., "GRAMMAR_001")
6. "ruleDescription": a brief rule description
7. "category": the category (e.g., "Grammar", "Spelling", "Style", "Punctuation")
8. "type": one of "grammar", "spelling", "style", "punctuation", or "other"
Optionally include "shortMessage", a few-word summary.

Return the results as a JSON object with an "errors" array containing all identified issues. Return {"errors": []} when the text has no issues."""


def build_user_prompt(text: str, language: str) -> str:
    """Return the user message for a check of ``text`` in ``language``."""
    return f"Check this {language} text for errors:\n\n{text}"


def build_chat_messages(text: str, language: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": GRAMMAR_SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(text, language)},
    ]
