"""OpenRouter grammar provider implementation (free-tier language model).

Used behind FallbackGrammarProvider, which substitutes LanguageTool whenever
this client fails.
"""

from __future__ import annotations

import aiohttp
from common_core.domain_enums import GrammarProvider

from services.grammar_check_service.config import Settings
from services.grammar_check_service.implementations.chat_completion_provider_base import (
    ChatCompletionProviderBase,
)


class OpenRouterProviderImpl(ChatCompletionProviderBase):
    name = GrammarProvider.OPENROUTER.value
    display_name = "OpenRouter"
    api_key_setting = "OPENROUTER_API_KEY"

    def __init__(self, session: aiohttp.ClientSession, settings: Settings):
        super().__init__(
            session=session,
            settings=settings,
            api_key=settings.OPENROUTER_API_KEY.get_secret_value(),
            base_url=settings.OPENROUTER_BASE_URL,
            model=settings.OPENROUTER_MODEL,
        )

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        # OpenRouter attribution headers
        headers["HTTP-Referer"] = self.settings.APP_URL
        headers["X-Title"] = self.settings.APP_TITLE
        return headers
