"""
Factory functions raising GrammarCheckError for common failure categories.

Every factory accepts ``details`` plus free keyword context; both are merged
into ``ErrorDetail.details``. All factories are typed ``NoReturn``.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from common_core.error_enums import ErrorCode, GrammarCheckErrorCode

from grammarcheck_service_libs.error_handling.error_detail_factory import (
    create_error_detail_with_context,
)
from grammarcheck_service_libs.error_handling.grammarcheck_error import GrammarCheckError


def _raise(
    error_code: ErrorCode | GrammarCheckErrorCode,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None,
    details: dict[str, Any] | None,
    context: dict[str, Any],
) -> NoReturn:
    merged = {**(details or {}), **context}
    raise GrammarCheckError(
        create_error_detail_with_context(
            error_code=error_code,
            message=message,
            service=service,
            operation=operation,
            correlation_id=correlation_id,
            details=merged,
        )
    )


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise for invalid client input (HTTP 400)."""
    _raise(
        ErrorCode.VALIDATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        details,
        {"field": field, **additional_context},
    )


def raise_processing_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise for internal processing failures (HTTP 500)."""
    _raise(
        ErrorCode.PROCESSING_ERROR,
        service,
        operation,
        message,
        correlation_id,
        details,
        additional_context,
    )
