"""
Configuration module for the Grammar Check Service.

Settings cover the HTTP surface, the result cache backing store, and the
three grammar checking providers. Provider API keys and the cache URL are
also read from their conventional unprefixed environment variables.
"""

from __future__ import annotations

from common_core.config_enums import CacheBackend, Environment
from dotenv import find_dotenv, load_dotenv
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class Settings(BaseSettings):
    """
    Configuration settings for the Grammar Check Service.

    These settings can be overridden via environment variables prefixed with
    GRAMMAR_CHECK_SERVICE_.
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias=AliasChoices("ENVIRONMENT", "GRAMMAR_CHECK_SERVICE_ENVIRONMENT"),
        description="Runtime environment for the service",
    )
    SERVICE_NAME: str = "grammar-check-service"
    VERSION: str = "1.0.0"
    HTTP_PORT: int = 8090
    HOST: str = "0.0.0.0"

    # Request limits
    MAX_TEXT_LENGTH: int = Field(default=10_000, description="Maximum characters per check")
    DEFAULT_LANGUAGE: str = Field(default="en-US", description="Language used when omitted")

    # Result cache
    REDIS_URL: str = Field(
        default="",
        validation_alias=AliasChoices("GRAMMAR_CHECK_SERVICE_REDIS_URL", "REDIS_URL", "KV_URL"),
        description="Redis URL for result caching and usage counters; empty disables caching",
    )
    LOCAL_CACHE_ENABLED: bool = Field(
        default=False,
        description="Use a process-local cache when no Redis URL is configured",
    )
    LOCAL_CACHE_MAX_ENTRIES: int = Field(
        default=1000, description="Maximum entries kept by the process-local cache"
    )
    CACHE_TTL_SECONDS: int = Field(default=86_400, description="Lifetime of cached results")
    SESSION_TTL_SECONDS: int = Field(
        default=30 * 24 * 60 * 60, description="Lifetime of session markers"
    )

    # LanguageTool (rule-based provider)
    LANGUAGETOOL_API_URL: str = Field(
        default="https://api.languagetool.org/v2/check",
        description="LanguageTool check endpoint",
    )

    # Language model providers
    OPENAI_API_KEY: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices(
            "GRAMMAR_CHECK_SERVICE_OPENAI_API_KEY",
            "OPENAI_API_KEY",
        ),
        description="OpenAI API key for the premium provider",
    )
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"

    OPENROUTER_API_KEY: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices(
            "GRAMMAR_CHECK_SERVICE_OPENROUTER_API_KEY",
            "OPENROUTER_API_KEY",
        ),
        description="OpenRouter API key for the free-tier provider",
    )
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_MODEL: str = "meta-llama/llama-3.1-8b-instruct:free"

    LLM_TEMPERATURE: float = Field(
        default=0.3, description="Sampling temperature for language model checks"
    )

    # Attribution headers sent to OpenRouter
    APP_URL: str = Field(
        default="http://localhost:3000",
        validation_alias=AliasChoices(
            "GRAMMAR_CHECK_SERVICE_APP_URL", "APP_URL", "NEXT_PUBLIC_APP_URL"
        ),
        description="Public URL of the calling application",
    )
    APP_TITLE: str = "Grammar Checker"

    # Outbound HTTP and background work
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0, description="Total timeout applied by the shared HTTP session"
    )
    BACKGROUND_DRAIN_TIMEOUT_SECONDS: float = Field(
        default=5.0, description="Time allowed for pending cache writes at shutdown"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="GRAMMAR_CHECK_SERVICE_",
        populate_by_name=True,
    )

    @property
    def cache_backend(self) -> CacheBackend:
        """Store selected for the result cache, derived from the cache settings."""
        if self.REDIS_URL:
            return CacheBackend.REDIS
        if self.LOCAL_CACHE_ENABLED:
            return CacheBackend.MEMORY
        return CacheBackend.DISABLED


# Create a single instance for the application to use
settings = Settings()
