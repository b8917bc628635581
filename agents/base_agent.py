"""Base agent class shared by the AI-backed triage classifier and action generator.

Every agent:
- Resolves an LLM provider (explicit name, model auto-detection, or settings)
- Calls the LLM with its system prompt and a task-specific user message
- Extracts a JSON object from the response text
- Tracks token usage and cost
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel

from config import settings
from providers import LLMProvider, LLMResponse, get_provider

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class TokenUsage(BaseModel):
    """Track token usage for cost calculation."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_cost(self) -> float:
        """Calculate cost based on current token pricing."""
        return settings.calculate_cost(self.input_tokens, self.output_tokens)


class BaseAgent:
    """Base class for the AI-backed capabilities.

    Subclasses build prompts and turn the parsed JSON into contracts; this
    class owns the provider call, JSON extraction and usage accounting.
    Failure handling (fallback results) is left to subclasses because each
    capability has its own fixed fallback.
    """

    def __init__(
        self,
        role: str,
        system_prompt: str,
        max_tokens: int,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        llm_provider: Optional[LLMProvider] = None,
    ):
        """Initialize the agent.

        Args:
            role: Agent role, used in log messages (e.g. 'triage', 'actions')
            system_prompt: The agent's system prompt defining its behavior
            max_tokens: Maximum tokens for a single response
            model: Override the default model (e.g. 'gpt-4o', 'deepseek-chat')
            provider: Explicit provider name (anthropic, openai, deepseek).
                     If not specified, auto-detected from model name or taken from settings
            llm_provider: Ready-made provider instance; takes precedence over provider/model lookup
        """
        self.role = role
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens

        model = model or settings.ai_model
        if llm_provider is not None:
            self.llm_provider = llm_provider
        elif provider or model:
            self.llm_provider = get_provider(provider_name=provider, model=model)
        else:
            self.llm_provider = get_provider(provider_name=settings.ai_provider)
        self.model = model or self.llm_provider.default_model

        self.total_usage = TokenUsage()

    def _truncate(self, text: str) -> str:
        """Cap insight text at the configured prompt length."""
        limit = settings.max_insight_chars_in_prompt
        text = text or ""
        if len(text) <= limit:
            return text
        return text[:limit] + "..."

    def _call(self, user_message: str) -> LLMResponse:
        """Call the provider and record token usage.

        Raises:
            Exception: Whatever the provider raises; callers convert it to a fallback
        """
        response = self.llm_provider.complete(
            system_prompt=self.system_prompt,
            user_message=user_message,
            model=self.model,
            max_tokens=self.max_tokens,
        )
        self.total_usage.input_tokens += response.input_tokens
        self.total_usage.output_tokens += response.output_tokens
        logger.debug(
            "%s agent call: provider=%s model=%s in=%d out=%d",
            self.role, response.provider, response.model,
            response.input_tokens, response.output_tokens,
        )
        return response

    @staticmethod
    def _extract_json(response_text: str) -> Optional[Dict[str, Any]]:
        """Pull the first JSON object out of an LLM response.

        Tries a fenced code block first, then the outermost ``{...}`` span.

        Returns:
            The parsed object, or None when no JSON object could be parsed
        """
        text = (response_text or "").strip()
        candidates = [m.group(1).strip() for m in _FENCE.finditer(text)]
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            candidates.append(text[start:end + 1])

        for candidate in candidates:
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                return data
        return None
