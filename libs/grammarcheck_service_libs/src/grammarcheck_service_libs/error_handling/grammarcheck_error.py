"""Core exception type carrying a structured ErrorDetail."""

from __future__ import annotations

from typing import Any

from common_core.models.error_models import ErrorDetail


class GrammarCheckError(Exception):
    """Exception raised by grammar check services for every expected failure.

    The wrapped ErrorDetail is what error handlers serialize; the exception
    string is ``[<error_code>] <message>``.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        self.error_detail = error_detail
        super().__init__(f"[{error_detail.error_code.value}] {error_detail.message}")

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def message(self) -> str:
        return self.error_detail.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error detail for logging or transport."""
        return self.error_detail.model_dump(mode="json")
