"""
common_core.config_enums - Enums related to service configuration.
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class CacheBackend(str, Enum):
    """Key-value store backends available to the result cache."""

    REDIS = "redis"
    MEMORY = "memory"
    DISABLED = "disabled"
