"""
Grammar Check Common Core Package.
"""

from .api_models.grammar_check import (
    GrammarCheckMetadata,
    GrammarCheckRequest,
    GrammarCheckResponse,
    GrammarContext,
    GrammarError,
    GrammarRule,
    UsageStats,
)
from .config_enums import CacheBackend, Environment
from .domain_enums import GrammarErrorType, GrammarProvider
from .error_enums import ErrorCode, GrammarCheckErrorCode
from .models.error_models import ErrorDetail

__all__ = [
    # Config Enums
    "CacheBackend",
    "Environment",
    # Domain Enums
    "GrammarErrorType",
    "GrammarProvider",
    # Error Enums
    "ErrorCode",
    "GrammarCheckErrorCode",
    # Models
    "ErrorDetail",
    "GrammarCheckMetadata",
    "GrammarCheckRequest",
    "GrammarCheckResponse",
    "GrammarContext",
    "GrammarError",
    "GrammarRule",
    "UsageStats",
]
