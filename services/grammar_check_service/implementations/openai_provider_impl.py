"""OpenAI grammar provider implementation (premium language model)."""

from __future__ import annotations

from typing import Any

import aiohttp
from common_core.domain_enums import GrammarProvider

from services.grammar_check_service.config import Settings
from services.grammar_check_service.implementations.chat_completion_provider_base import (
    ChatCompletionProviderBase,
)


class OpenAIProviderImpl(ChatCompletionProviderBase):
    """OpenAI chat-completions client with JSON-object response mode."""

    name = GrammarProvider.OPENAI.value
    display_name = "OpenAI"
    api_key_setting = "OPENAI_API_KEY"

    def __init__(self, session: aiohttp.ClientSession, settings: Settings):
        super().__init__(
            session=session,
            settings=settings,
            api_key=settings.OPENAI_API_KEY.get_secret_value(),
            base_url=settings.OPENAI_BASE_URL,
            model=settings.OPENAI_MODEL,
        )

    def _payload(self, text: str, language: str) -> dict[str, Any]:
        payload = super()._payload(text, language)
        payload["response_format"] = {"type": "json_object"}
        return payload
