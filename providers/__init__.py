"""LLM provider abstraction used by the AI-backed triage and action agents."""

from .base import LLMProvider, LLMResponse, ProviderError
from .factory import get_provider, list_providers

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "ProviderError",
    "get_provider",
    "list_providers",
]
