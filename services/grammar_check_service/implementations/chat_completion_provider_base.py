"""Shared request/response handling for chat-completion grammar providers.

OpenAI and OpenRouter expose the same chat-completions API; subclasses
supply credentials, endpoint, model and any provider-specific headers or
payload fields.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from uuid import UUID

import aiohttp
from common_core.api_models.grammar_check import GrammarError
from common_core.error_enums import ErrorCode
from grammarcheck_service_libs.logging_utils import create_service_logger

from services.grammar_check_service.config import Settings
from services.grammar_check_service.exceptions import raise_provider_error
from services.grammar_check_service.prompt_utils import build_chat_messages
from services.grammar_check_service.protocols import GrammarProviderProtocol
from services.grammar_check_service.response_parser import parse_llm_errors

logger = create_service_logger("grammar_check_service.chat_completion_provider")


class ChatCompletionProviderBase(GrammarProviderProtocol):
    """Grammar provider that asks a chat model for a JSON list of errors."""

    name: str
    display_name: str
    api_key_setting: str

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: Settings,
        api_key: str,
        base_url: str,
        model: str,
    ):
        self.session = session
        self.settings = settings
        self.api_key = api_key
        self.endpoint = f"{base_url.rstrip('/')}/chat/completions"
        self.model = model

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _payload(self, text: str, language: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": build_chat_messages(text, language),
            "temperature": self.settings.LLM_TEMPERATURE,
        }

    async def check(self, text: str, language: str, correlation_id: UUID) -> list[GrammarError]:
        if not self.api_key:
            raise_provider_error(
                provider=self.name,
                operation="chat_completion_check",
                message=f"{self.display_name} API key not configured",
                correlation_id=correlation_id,
                error_code=ErrorCode.CONFIGURATION_ERROR,
                config_key=self.api_key_setting,
            )

        content = await self._request_completion(text, language, correlation_id)
        errors = parse_llm_errors(content, text, self.name, correlation_id)

        logger.info(
            f"{self.display_name} check completed",
            correlation_id=str(correlation_id),
            model=self.model,
            grammar_errors=len(errors),
        )
        return errors

    async def _request_completion(self, text: str, language: str, correlation_id: UUID) -> str:
        try:
            async with self.session.post(
                self.endpoint,
                headers=self._headers(),
                json=self._payload(text, language),
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    message = f"{self.display_name} API error: {response.status} - {error_text[:200]}"
                    raise_provider_error(
                        provider=self.name,
                        operation="chat_completion_request",
                        message=message,
                        correlation_id=correlation_id,
                        status_code=response.status,
                    )

                response_data = await response.json(content_type=None)
        except (json.JSONDecodeError, aiohttp.ContentTypeError) as e:
            raise_provider_error(
                provider=self.name,
                operation="chat_completion_response_parsing",
                message=f"Invalid JSON envelope from {self.display_name}: {e}",
                correlation_id=correlation_id,
                error_code=ErrorCode.PARSING_ERROR,
            )
        except aiohttp.ClientError as e:
            raise_provider_error(
                provider=self.name,
                operation="chat_completion_request",
                message=f"{self.display_name} API call failed: {e}",
                correlation_id=correlation_id,
            )
        except asyncio.TimeoutError:
            raise_provider_error(
                provider=self.name,
                operation="chat_completion_request",
                message=f"{self.display_name} API call timed out",
                correlation_id=correlation_id,
                timeout_seconds=self.settings.HTTP_TIMEOUT_SECONDS,
            )

        content = _first_message_content(response_data)
        if not content:
            raise_provider_error(
                provider=self.name,
                operation="chat_completion_response_parsing",
                message=f"No response from {self.display_name}",
                correlation_id=correlation_id,
                error_code=ErrorCode.INVALID_RESPONSE,
            )
        return content


def _first_message_content(response_data: Any) -> str | None:
    if not isinstance(response_data, dict):
        return None
    choices = response_data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
