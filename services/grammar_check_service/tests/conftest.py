"""Shared fixtures for Grammar Check Service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import aiohttp
import pytest
from common_core.api_models.grammar_check import GrammarError, GrammarRule
from common_core.domain_enums import GrammarErrorType
from pydantic import SecretStr

from services.grammar_check_service.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Deterministic settings independent of the developer's environment."""
    return Settings().model_copy(
        update={
            "REDIS_URL": "",
            "LOCAL_CACHE_ENABLED": False,
            "MAX_TEXT_LENGTH": 10_000,
            "DEFAULT_LANGUAGE": "en-US",
            "CACHE_TTL_SECONDS": 86_400,
            "SESSION_TTL_SECONDS": 2_592_000,
            "LANGUAGETOOL_API_URL": "https://api.languagetool.org/v2/check",
            "OPENAI_API_KEY": SecretStr("sk-test"),
            "OPENAI_BASE_URL": "https://api.openai.com/v1",
            "OPENAI_MODEL": "gpt-4o-mini",
            "LLM_TEMPERATURE": 0.3,
            "OPENROUTER_API_KEY": SecretStr(""),
            "OPENROUTER_BASE_URL": "https://openrouter.ai/api/v1",
            "APP_URL": "http://localhost:3000",
            "APP_TITLE": "Grammar Checker",
        }
    )


@pytest.fixture
async def client_session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def spelling_error() -> GrammarError:
    return GrammarError(
        message="Possible spelling mistake found.",
        short_message="Spelling mistake",
        offset=0,
        length=4,
        replacements=["hello", "help"],
        rule=GrammarRule(
            id="MORFOLOGIK_RULE_EN_US",
            description="Possible spelling mistake",
            category="Possible Typo",
        ),
        type=GrammarErrorType.SPELLING,
    )
