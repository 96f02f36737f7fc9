"""
Rule-based grammar provider backed by the public LanguageTool HTTP API.

Matches are normalized into GrammarError objects, replacement candidates are
re-ranked by the SuggestionRanker, and the LanguageTool category taxonomy is
folded onto the five GrammarErrorType members. Match offsets arrive in UTF-16
code units and are emitted as Python str indices.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from uuid import UUID

import aiohttp
from common_core.api_models.grammar_check import GrammarContext, GrammarError, GrammarRule
from common_core.domain_enums import GrammarErrorType, GrammarProvider
from common_core.error_enums import ErrorCode
from grammarcheck_service_libs.logging_utils import create_service_logger
from pydantic import ValidationError

from services.grammar_check_service.config import Settings
from services.grammar_check_service.exceptions import raise_provider_error
from services.grammar_check_service.protocols import (
    GrammarProviderProtocol,
    SuggestionRankerProtocol,
)

logger = create_service_logger("grammar_check_service.languagetool_provider")

# Checked in order; first substring hit wins
_TYPE_MARKERS: tuple[tuple[str, GrammarErrorType], ...] = (
    ("spell", GrammarErrorType.SPELLING),
    ("grammar", GrammarErrorType.GRAMMAR),
    ("style", GrammarErrorType.STYLE),
    ("punctuation", GrammarErrorType.PUNCTUATION),
)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def utf16_boundaries(text: str) -> dict[int, int]:
    """Map UTF-16 code unit positions in ``text`` to str indices.

    LanguageTool reports offsets in UTF-16 code units. Only positions on a
    character boundary appear in the map; the end of the text maps to
    ``len(text)``.
    """
    boundaries: dict[int, int] = {}
    units = 0
    for index, char in enumerate(text):
        boundaries[units] = index
        units += 2 if ord(char) > 0xFFFF else 1
    boundaries[units] = len(text)
    return boundaries


def _context(raw: Any) -> GrammarContext | None:
    if not isinstance(raw, dict) or not isinstance(raw.get("text"), str):
        return None

    boundaries = utf16_boundaries(raw["text"])
    offset, length = raw.get("offset"), raw.get("length")
    if isinstance(offset, int) and isinstance(length, int) and length >= 0:
        start = boundaries.get(offset)
        end = boundaries.get(offset + length)
        if start is not None and end is not None:
            raw = {**raw, "offset": start, "length": end - start}
    try:
        return GrammarContext.model_validate(raw)
    except ValidationError:
        return None


def map_error_type(category_id: str, type_name: str | None = None) -> GrammarErrorType:
    """Map LanguageTool category id / match type name onto GrammarErrorType."""
    category_lower = (category_id or "").lower()
    type_lower = (type_name or "").lower()

    for marker, error_type in _TYPE_MARKERS:
        if marker in category_lower or marker in type_lower:
            return error_type
    return GrammarErrorType.OTHER


class LanguageToolProviderImpl(GrammarProviderProtocol):
    """LanguageTool client implementing the grammar provider capability."""

    name = GrammarProvider.LANGUAGETOOL.value

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: Settings,
        ranker: SuggestionRankerProtocol,
    ):
        """Initialize LanguageTool provider.

        Args:
            session: Shared HTTP client session
            settings: Service settings
            ranker: Re-ranks replacement candidates for each match
        """
        self.session = session
        self.settings = settings
        self.ranker = ranker
        self.api_url = settings.LANGUAGETOOL_API_URL

    async def check(self, text: str, language: str, correlation_id: UUID) -> list[GrammarError]:
        matches = await self._fetch_matches(text, language, correlation_id)

        boundaries = utf16_boundaries(text)
        errors: list[GrammarError] = []
        for match in matches:
            error = self._normalize_match(match, text, boundaries)
            if error is not None:
                errors.append(error)

        logger.info(
            "LanguageTool check completed",
            correlation_id=str(correlation_id),
            total_matches=len(matches),
            grammar_errors=len(errors),
        )
        return errors

    async def _fetch_matches(
        self, text: str, language: str, correlation_id: UUID
    ) -> list[dict[str, Any]]:
        # LanguageTool expects form data, not JSON
        data = {"text": text, "language": language}

        try:
            async with self.session.post(self.api_url, data=data) as response:
                if response.status < 200 or response.status >= 300:
                    error_text = await response.text()
                    logger.error(
                        f"LanguageTool returned error status: {response.status}",
                        correlation_id=str(correlation_id),
                        error=error_text[:500],
                    )
                    reason = f" {response.reason}" if response.reason else ""
                    raise_provider_error(
                        provider=self.name,
                        operation="languagetool_check",
                        message=f"LanguageTool API error: {response.status}{reason}",
                        correlation_id=correlation_id,
                        status_code=response.status,
                    )

                payload = await response.json(content_type=None)
        except (json.JSONDecodeError, aiohttp.ContentTypeError) as e:
            raise_provider_error(
                provider=self.name,
                operation="languagetool_response_parsing",
                message=f"Invalid JSON response from LanguageTool: {e}",
                correlation_id=correlation_id,
                error_code=ErrorCode.PARSING_ERROR,
            )
        except aiohttp.ClientError as e:
            logger.error(
                f"HTTP client error communicating with LanguageTool: {e}",
                correlation_id=str(correlation_id),
            )
            raise_provider_error(
                provider=self.name,
                operation="languagetool_check",
                message=f"Failed to communicate with LanguageTool: {e}",
                correlation_id=correlation_id,
            )
        except asyncio.TimeoutError:
            logger.error(
                "LanguageTool request timed out",
                correlation_id=str(correlation_id),
                timeout_seconds=self.settings.HTTP_TIMEOUT_SECONDS,
            )
            raise_provider_error(
                provider=self.name,
                operation="languagetool_check",
                message="LanguageTool request timed out",
                correlation_id=correlation_id,
                timeout_seconds=self.settings.HTTP_TIMEOUT_SECONDS,
            )

        matches = payload.get("matches") if isinstance(payload, dict) else None
        if not isinstance(matches, list):
            raise_provider_error(
                provider=self.name,
                operation="languagetool_response_parsing",
                message="LanguageTool response did not contain a matches list",
                correlation_id=correlation_id,
                error_code=ErrorCode.PARSING_ERROR,
            )
        return matches

    def _normalize_match(
        self, match: Any, text: str, boundaries: dict[int, int]
    ) -> GrammarError | None:
        if not isinstance(match, dict):
            return None

        offset = match.get("offset")
        length = match.get("length")
        if not isinstance(offset, int) or not isinstance(length, int):
            logger.warning("Skipping LanguageTool match without integer offset/length")
            return None
        start = boundaries.get(offset)
        end = boundaries.get(offset + length)
        if offset < 0 or length <= 0 or start is None or end is None:
            logger.warning(
                "Skipping LanguageTool match outside text bounds",
                offset=offset,
                length=length,
                text_length=len(text),
            )
            return None
        offset, length = start, end - start

        rule = _as_dict(match.get("rule"))
        category = _as_dict(rule.get("category"))
        match_type = _as_dict(match.get("type"))

        candidates = [
            replacement["value"]
            for replacement in match.get("replacements") or []
            if isinstance(replacement, dict) and isinstance(replacement.get("value"), str)
        ]
        original_word = text[offset : offset + length]
        ranked = self.ranker.rank(candidates, original_word, text, offset)

        try:
            return GrammarError(
                message=match.get("message") or "",
                short_message=match.get("shortMessage") or None,
                offset=offset,
                length=length,
                replacements=ranked[:5],
                rule=GrammarRule(
                    id=rule.get("id") or "UNKNOWN",
                    description=rule.get("description") or "",
                    category=category.get("name") or "",
                ),
                type=map_error_type(category.get("id") or "", match_type.get("typeName")),
                context=_context(match.get("context")),
            )
        except ValidationError as e:
            logger.warning(f"Skipping malformed LanguageTool match: {e.error_count()} errors")
            return None

