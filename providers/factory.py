"""Factory for creating LLM providers."""

from typing import Optional, Dict, Type

from .base import LLMProvider
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider, DeepseekProvider


# Registry of available providers
PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
    "claude": AnthropicProvider,
    "openai": OpenAIProvider,
    "gpt": OpenAIProvider,
    "deepseek": DeepseekProvider,
}

ALIASES = ("claude", "gpt")

# Model prefix to provider mapping for auto-detection
MODEL_PROVIDERS: Dict[str, str] = {
    "claude": "anthropic",
    "haiku": "anthropic",
    "gpt": "openai",
    "deepseek": "deepseek",
}


def get_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
) -> LLMProvider:
    """Get an LLM provider instance.

    Args:
        provider_name: Explicit provider name (anthropic, openai, deepseek)
        model: Model name - if provided without provider, will auto-detect provider

    Returns:
        LLMProvider instance

    Raises:
        ValueError: If provider_name is not registered

    Examples:
        get_provider("openai")
        get_provider(model="deepseek-chat")  # Deepseek provider
        get_provider()  # Anthropic
    """
    if provider_name:
        provider_key = provider_name.lower()
        if provider_key not in PROVIDERS:
            raise ValueError(
                f"Unknown provider: {provider_name}. "
                f"Available: {list(PROVIDERS.keys())}"
            )
        return PROVIDERS[provider_key]()

    if model:
        model_lower = model.lower()
        for prefix, provider in MODEL_PROVIDERS.items():
            if model_lower.startswith(prefix):
                return PROVIDERS[provider]()

    return AnthropicProvider()


def list_providers() -> Dict[str, bool]:
    """List all providers and their availability.

    Returns:
        Dict mapping provider name to availability status
    """
    return {
        name: provider_class().is_available()
        for name, provider_class in PROVIDERS.items()
        if name not in ALIASES
    }
