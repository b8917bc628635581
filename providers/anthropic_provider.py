"""Anthropic (Claude) provider implementation."""

import os
from typing import Optional

from config import settings

from .base import LLMProvider, LLMResponse


class AnthropicProvider(LLMProvider):
    """Provider for Anthropic Claude models."""

    MODELS = {
        "haiku": "claude-3-5-haiku-20241022",
    }

    def __init__(self, api_key: Optional[str] = None):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key. Falls back to settings, then ANTHROPIC_API_KEY.
        """
        self.api_key = api_key or settings.anthropic_api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._client = None

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-3-5-haiku-20241022"

    def _get_client(self):
        if self._client is None:
            from anthropic import Anthropic
            self._client = Anthropic(
                api_key=self.api_key,
                timeout=settings.api_timeout_seconds,
                max_retries=settings.api_max_retries,
            )
        return self._client

    def _resolve_model(self, model: Optional[str]) -> str:
        """Resolve model alias to full model name."""
        if model is None:
            return self.default_model
        return self.MODELS.get(model, model)

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

        response = client.messages.create(
            model=resolved_model,
            max_tokens=max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_message}],
        )

        text = "\n".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return LLMResponse(
            content=text,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=resolved_model,
            provider=self.name,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)
