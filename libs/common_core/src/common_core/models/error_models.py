"""
common_core.models.error_models - Structured error payload shared by all services.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from common_core.error_enums import ErrorCode, GrammarCheckErrorCode


class ErrorDetail(BaseModel):
    """Immutable description of a failure, carried by service exceptions."""

    model_config = ConfigDict(frozen=True)

    error_code: ErrorCode | GrammarCheckErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    stack_trace: str | None = None
