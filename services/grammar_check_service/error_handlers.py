"""Grammar Check Service error handlers with metrics integration.

Counts every structured error by endpoint and error code before delegating
to the shared response factory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Tuple

from grammarcheck_service_libs.error_handling.grammarcheck_error import GrammarCheckError
from grammarcheck_service_libs.error_handling.quart_handlers import (
    create_error_response,
    status_code_for,
)
from grammarcheck_service_libs.logging_utils import create_service_logger
from quart import Response, request

if TYPE_CHECKING:
    from quart import Quart

logger = create_service_logger("grammar_check_service.error_handlers")


def register_grammar_check_error_handlers(app: Quart, metrics: dict[str, Any]) -> None:
    """Register the GrammarCheckError handler with API error metrics.

    Must be called after ``register_error_handlers`` so it replaces the
    generic GrammarCheckError handler; the catch-all Exception handler stays.
    """

    @app.errorhandler(GrammarCheckError)
    async def handle_grammar_check_error(error: GrammarCheckError) -> Tuple[Response, int]:
        detail = error.error_detail
        status_code = status_code_for(detail.error_code)

        metrics["api_errors_total"].labels(
            endpoint=request.path, error_type=detail.error_code.value.lower()
        ).inc()

        log = logger.warning if status_code < 500 else logger.error
        log(
            f"GrammarCheckError: {detail.message}",
            correlation_id=str(detail.correlation_id),
            error_code=detail.error_code.value,
            operation=detail.operation,
            provider=detail.details.get("provider"),
        )

        return create_error_response(detail, status_code)
