"""Quart middleware establishing a CorrelationContext for every request."""

from __future__ import annotations

from quart import Quart, Response, g, request

from grammarcheck_service_libs.error_handling.correlation import (
    CORRELATION_HEADER,
    CorrelationContext,
    extract_correlation_context_from_request,
)
from grammarcheck_service_libs.logging_utils import bind_request_context


def setup_correlation_middleware(app: Quart) -> None:
    """Store the request's CorrelationContext on ``g`` and echo it on the response."""

    @app.before_request
    async def _bind_correlation_context() -> None:
        ctx = extract_correlation_context_from_request(request)
        g.correlation_context = ctx
        bind_request_context(ctx.original, path=request.path, method=request.method)

    @app.after_request
    async def _echo_correlation_header(response: Response) -> Response:
        ctx = getattr(g, "correlation_context", None)
        if isinstance(ctx, CorrelationContext):
            response.headers[CORRELATION_HEADER] = ctx.original
        return response
