"""Grammar check and usage routes for the Grammar Check Service."""

from __future__ import annotations

from typing import Any

from common_core.api_models.grammar_check import GrammarCheckRequest
from dishka import FromDishka
from grammarcheck_service_libs.error_handling import raise_processing_error, raise_validation_error
from grammarcheck_service_libs.error_handling.correlation import CorrelationContext
from grammarcheck_service_libs.logging_utils import create_service_logger
from quart import Blueprint, request
from quart_dishka import inject

from services.grammar_check_service.exceptions import (
    SERVICE_NAME,
    CacheError,
    ProviderError,
    raise_cache_unavailable,
    raise_grammar_check_failed,
)
from services.grammar_check_service.protocols import (
    GrammarOrchestratorProtocol,
    ResultCacheProtocol,
)

logger = create_service_logger("grammar_check_service.api.grammar")
grammar_bp = Blueprint("grammar_routes", __name__, url_prefix="/api")


@grammar_bp.route("/grammar-check", methods=["POST"])
@inject
async def check_grammar(
    corr: FromDishka[CorrelationContext],
    orchestrator: FromDishka[GrammarOrchestratorProtocol],
) -> tuple[dict[str, Any], int]:
    """
    Check text with the requested provider.

    Body: ``{"text": str, "provider": "languagetool"|"openai"|"openrouter",
    "sessionId"?: str, "language"?: str}``.

    Returns:
        Tuple of (response_dict, status_code)

    Raises:
        GrammarCheckError: VALIDATION_ERROR (400) for bad input,
            PROVIDER_FAILED (500) when the provider fails
    """
    request_data = await request.get_json(silent=True)
    if not isinstance(request_data, dict):
        raise_validation_error(
            service=SERVICE_NAME,
            operation="check_grammar",
            field="request_body",
            message="Request body must be a JSON object",
            correlation_id=corr.uuid,
        )

    grammar_request = GrammarCheckRequest.model_validate(request_data)

    try:
        response = await orchestrator.check_grammar(grammar_request, corr.uuid)
    except ProviderError as e:
        logger.error(
            f"Provider {e.provider} failed: {e.message}",
            correlation_id=corr.original,
            error_code=e.error_code,
        )
        raise_grammar_check_failed(e, corr.uuid)

    return response.model_dump(mode="json", by_alias=True, exclude_none=True), 200


@grammar_bp.route("/usage", methods=["GET"])
@inject
async def get_usage(
    corr: FromDishka[CorrelationContext],
    cache: FromDishka[ResultCacheProtocol],
) -> tuple[dict[str, Any], int]:
    """Return provider usage counters and the distinct session total."""
    try:
        usage = await cache.get_usage_stats()
    except CacheError as e:
        logger.error(f"Failed to read usage statistics: {e}", correlation_id=corr.original)
        raise_processing_error(
            service=SERVICE_NAME,
            operation="get_usage",
            message="Failed to read usage statistics",
            correlation_id=corr.uuid,
        )

    if usage is None:
        raise_cache_unavailable(
            operation="get_usage",
            message="Usage statistics not configured (cache store not available)",
            correlation_id=corr.uuid,
        )

    return usage.model_dump(mode="json", by_alias=True), 200
