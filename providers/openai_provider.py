"""OpenAI-compatible providers (OpenAI and Deepseek)."""

import os
from typing import Optional

from config import settings

from .base import LLMProvider, LLMResponse


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI chat models."""

    API_KEY_ENV = "OPENAI_API_KEY"
    BASE_URL: Optional[str] = None

    def __init__(self, api_key: Optional[str] = None):
        """Initialize the provider.

        Args:
            api_key: API key. Falls back to settings, then the provider's env var.
        """
        self.api_key = api_key or self._configured_key() or os.environ.get(self.API_KEY_ENV)
        self._client = None

    def _configured_key(self) -> str:
        return settings.openai_api_key

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.BASE_URL,
                timeout=settings.api_timeout_seconds,
                max_retries=settings.api_max_retries,
            )
        return self._client

    def _resolve_model(self, model: Optional[str]) -> str:
        return model or self.default_model

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        self._require_available()
        client = self._get_client()
        resolved_model = self._resolve_model(model)

        response = client.chat.completions.create(
            model=resolved_model,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        )

        return LLMResponse(
            content=response.choices[0].message.content or "",
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
            model=resolved_model,
            provider=self.name,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)


class DeepseekProvider(OpenAIProvider):
    """Provider for Deepseek models (OpenAI-compatible API)."""

    API_KEY_ENV = "DEEPSEEK_API_KEY"
    BASE_URL = "https://api.deepseek.com/v1"

    def _configured_key(self) -> str:
        return settings.deepseek_api_key

    @property
    def name(self) -> str:
        return "deepseek"

    @property
    def default_model(self) -> str:
        return "deepseek-chat"
