"""Service-specific exceptions for the Grammar Check Service."""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from common_core.error_enums import ErrorCode, GrammarCheckErrorCode
from grammarcheck_service_libs.error_handling import (
    GrammarCheckError,
    create_error_detail_with_context,
)

SERVICE_NAME = "grammar_check_service"


class ProviderError(GrammarCheckError):
    """Raised when a grammar checking backend cannot produce a result."""

    @property
    def provider(self) -> str:
        return str(self.error_detail.details.get("provider", "unknown"))


class CacheError(Exception):
    """Raised by key-value store implementations when the backing store fails.

    The result cache absorbs it on the request path; only the usage
    statistics read lets it propagate.
    """

    def __init__(
        self,
        message: str,
        error_code: GrammarCheckErrorCode = GrammarCheckErrorCode.CACHE_UNAVAILABLE,
    ):
        self.error_code = error_code
        super().__init__(message)


def raise_provider_error(
    provider: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
    **details: Any,
) -> NoReturn:
    """Raise a ProviderError with the provider name recorded in its details."""
    raise ProviderError(
        create_error_detail_with_context(
            error_code=error_code,
            message=message,
            service=SERVICE_NAME,
            operation=operation,
            correlation_id=correlation_id,
            details={"provider": provider, **details},
        )
    )


def raise_grammar_check_failed(
    cause: ProviderError, correlation_id: UUID | None = None
) -> NoReturn:
    """Re-raise a provider failure as the user-facing PROVIDER_FAILED error (HTTP 500)."""
    raise GrammarCheckError(
        create_error_detail_with_context(
            error_code=GrammarCheckErrorCode.PROVIDER_FAILED,
            message=f"Grammar check failed: {cause.message}",
            service=SERVICE_NAME,
            operation="check_grammar",
            correlation_id=correlation_id,
            details={"provider": cause.provider, "cause_error_code": cause.error_code},
        )
    ) from cause


def raise_cache_unavailable(
    operation: str, message: str, correlation_id: UUID | None = None
) -> NoReturn:
    """Raise CACHE_UNAVAILABLE (HTTP 503) for endpoints that need a configured store."""
    raise GrammarCheckError(
        create_error_detail_with_context(
            error_code=GrammarCheckErrorCode.CACHE_UNAVAILABLE,
            message=message,
            service=SERVICE_NAME,
            operation=operation,
            correlation_id=correlation_id,
        )
    )
