"""Parsing of language model grammar responses into GrammarError objects.

Expected content: a JSON object ``{"errors": [...]}`` whose items use the flat
shape requested by the prompt (``ruleId``, ``ruleDescription``, ``category``
at item level). A missing ``errors`` key means no errors. Items that are
malformed or whose span falls outside the checked text are dropped.
"""

from __future__ import annotations

import json
from typing import Any
from uuid import UUID

from common_core.api_models.grammar_check import GrammarError, GrammarRule
from common_core.domain_enums import GrammarErrorType
from common_core.error_enums import ErrorCode
from grammarcheck_service_libs.logging_utils import create_service_logger
from pydantic import ValidationError

from services.grammar_check_service.exceptions import raise_provider_error

logger = create_service_logger("grammar_check_service.response_parser")


def parse_llm_errors(
    content: str,
    text: str,
    provider: str,
    correlation_id: UUID | None = None,
) -> list[GrammarError]:
    """Parse model output into normalized errors for ``text``.

    Raises:
        ProviderError: If content is not a JSON object or ``errors`` is not a list
    """
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise_provider_error(
            provider=provider,
            operation="llm_response_parsing",
            message=f"Failed to parse {provider} response as JSON: {e}",
            correlation_id=correlation_id,
            error_code=ErrorCode.PARSING_ERROR,
            response_preview=content[:100],
        )

    if not isinstance(parsed, dict):
        raise_provider_error(
            provider=provider,
            operation="llm_response_parsing",
            message=f"{provider} response is not a JSON object",
            correlation_id=correlation_id,
            error_code=ErrorCode.PARSING_ERROR,
        )

    raw_errors = parsed.get("errors", [])
    if raw_errors is None:
        return []
    if not isinstance(raw_errors, list):
        raise_provider_error(
            provider=provider,
            operation="llm_response_parsing",
            message=f"{provider} response field 'errors' is not a list",
            correlation_id=correlation_id,
            error_code=ErrorCode.PARSING_ERROR,
        )

    errors: list[GrammarError] = []
    dropped = 0
    for item in raw_errors:
        error = _normalize_item(item)
        if error is None or not error.fits_within(text):
            dropped += 1
            continue
        errors.append(error)

    if dropped:
        logger.warning(
            f"Dropped {dropped} invalid or out-of-range errors from {provider} response",
            correlation_id=str(correlation_id) if correlation_id else None,
        )
    return errors


def _normalize_item(item: Any) -> GrammarError | None:
    if not isinstance(item, dict):
        return None

    replacements = item.get("replacements") or []
    if not isinstance(replacements, list):
        replacements = []
    short_message = item.get("shortMessage")

    try:
        return GrammarError(
            message=str(item.get("message") or ""),
            short_message=short_message if isinstance(short_message, str) else None,
            offset=item.get("offset"),
            length=item.get("length"),
            replacements=[value for value in replacements if isinstance(value, str)],
            rule=GrammarRule(
                id=str(item.get("ruleId") or "UNKNOWN"),
                description=str(item.get("ruleDescription") or ""),
                category=str(item.get("category") or ""),
            ),
            type=GrammarErrorType.from_label(item.get("type")),
        )
    except ValidationError:
        return None
