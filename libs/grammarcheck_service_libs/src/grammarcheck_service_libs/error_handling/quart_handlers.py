"""
Quart error handlers translating GrammarCheckError into JSON responses.

Response body: ``{"error": <message>, "error_code": ..., "correlation_id": ...,
"service": ..., "operation": ...}``. The ``error`` key is the user-facing
message; the remaining keys support tracing.
"""

from __future__ import annotations

from typing import Any

from common_core.error_enums import ErrorCode, GrammarCheckErrorCode
from common_core.models.error_models import ErrorDetail
from quart import Quart, Response, jsonify
from werkzeug.exceptions import HTTPException

from grammarcheck_service_libs.error_handling.grammarcheck_error import GrammarCheckError
from grammarcheck_service_libs.logging_utils import create_service_logger

logger = create_service_logger("grammarcheck.error_handlers")

INTERNAL_ERROR_MESSAGE = "Internal server error"

_STATUS_BY_CODE: dict[ErrorCode | GrammarCheckErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.RESOURCE_NOT_FOUND: 404,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    GrammarCheckErrorCode.CACHE_UNAVAILABLE: 503,
}


def status_code_for(error_code: ErrorCode | GrammarCheckErrorCode) -> int:
    """HTTP status for an error code; anything unmapped is a server error."""
    return _STATUS_BY_CODE.get(error_code, 500)


def create_error_response(
    error_detail: ErrorDetail, status_code: int | None = None
) -> tuple[Response, int]:
    """Build the JSON error response for an ErrorDetail."""
    body: dict[str, Any] = {
        "error": error_detail.message,
        "error_code": error_detail.error_code.value,
        "correlation_id": str(error_detail.correlation_id),
        "service": error_detail.service,
        "operation": error_detail.operation,
    }
    return jsonify(body), status_code or status_code_for(error_detail.error_code)


def register_error_handlers(app: Quart) -> None:
    """Register handlers for GrammarCheckError and unexpected exceptions."""

    @app.errorhandler(GrammarCheckError)
    async def handle_grammarcheck_error(error: GrammarCheckError) -> tuple[Response, int]:
        logger.warning(
            f"GrammarCheckError: {error.error_detail.message}",
            correlation_id=error.correlation_id,
            error_code=error.error_code,
            operation=error.operation,
        )
        return create_error_response(error.error_detail)

    @app.errorhandler(Exception)
    async def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
        if isinstance(error, HTTPException):
            return jsonify({"error": error.description}), error.code or 500
        logger.error(f"Unhandled exception: {error}", exc_info=True)
        return jsonify({"error": INTERNAL_ERROR_MESSAGE}), 500
