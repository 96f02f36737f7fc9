"""
common_core.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"  # For APIs

    # Generic external service errors (can be used by any service)
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    RATE_LIMIT = "RATE_LIMIT"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    PARSING_ERROR = "PARSING_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"  # Internal processing failures


class GrammarCheckErrorCode(str, Enum):
    """
    Business logic specific error codes for grammar check operations.

    Note: Transport-level failures use the generic ErrorCode enum
    (EXTERNAL_SERVICE_ERROR, PARSING_ERROR, CONFIGURATION_ERROR, etc.)
    """

    PROVIDER_FAILED = "PROVIDER_FAILED"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"
