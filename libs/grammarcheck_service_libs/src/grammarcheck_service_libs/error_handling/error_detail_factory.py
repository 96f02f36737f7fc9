"""Factory for ErrorDetail instances with automatic context capture."""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from common_core.error_enums import ErrorCode, GrammarCheckErrorCode
from common_core.models.error_models import ErrorDetail


def create_error_detail_with_context(
    error_code: ErrorCode | GrammarCheckErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
    capture_stack: bool = False,
) -> ErrorDetail:
    """
    Build an ErrorDetail, generating a correlation id when none is supplied.

    Args:
        error_code: Code classifying the failure
        message: Human readable description
        service: Name of the service raising the error
        operation: Operation that failed
        correlation_id: Request correlation id, generated if omitted
        details: Additional structured context
        capture_stack: Include the current stack in ``stack_trace``
    """
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid4(),
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace="".join(traceback.format_stack()) if capture_stack else None,
    )
