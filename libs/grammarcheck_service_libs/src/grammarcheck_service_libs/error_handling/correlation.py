"""Request correlation context shared by routes, logging and error handling."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import NAMESPACE_URL, UUID, uuid4, uuid5

from quart import Request

CORRELATION_HEADER = "X-Correlation-ID"


@dataclass(frozen=True)
class CorrelationContext:
    """Correlation identifiers for one request.

    ``original`` is the value as received (or generated); ``uuid`` is a UUID
    form of it, derived deterministically when the caller sent a non-UUID id.
    """

    original: str
    uuid: UUID
    source: str


def _to_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        return uuid5(NAMESPACE_URL, value)


def extract_correlation_context_from_request(request: Request) -> CorrelationContext:
    """Read the correlation id from the header or query string, or generate one."""
    header_value = request.headers.get(CORRELATION_HEADER)
    if header_value:
        return CorrelationContext(
            original=header_value, uuid=_to_uuid(header_value), source="header"
        )

    query_value = request.args.get("correlation_id")
    if query_value:
        return CorrelationContext(original=query_value, uuid=_to_uuid(query_value), source="query")

    generated = uuid4()
    return CorrelationContext(original=str(generated), uuid=generated, source="generated")
