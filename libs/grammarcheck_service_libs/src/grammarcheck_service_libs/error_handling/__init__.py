"""
Structured error handling for grammar check services.

Framework-specific handlers live in
grammarcheck_service_libs.error_handling.quart_handlers.
"""

from .error_detail_factory import create_error_detail_with_context
from .factories import (
    raise_processing_error,
    raise_validation_error,
)
from .grammarcheck_error import GrammarCheckError

__all__ = [
    "GrammarCheckError",
    "create_error_detail_with_context",
    "raise_processing_error",
    "raise_validation_error",
]
