"""
Grammar Check Service Libraries Package.

Shared infrastructure used by grammar check services: structured logging,
the Redis client, the typed Quart app, metrics and correlation middleware,
and structured error handling.
"""

from .quart_app import GrammarCheckApp
from .redis_client import RedisClient

__all__ = [
    "GrammarCheckApp",
    "RedisClient",
]

# Framework-specific middleware should be imported directly from:
# - grammarcheck_service_libs.middleware.quart_correlation_middleware
# - grammarcheck_service_libs.metrics_middleware
