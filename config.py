"""Configuration settings for InsightExtractor."""

import logging
from typing import Optional

# Load .env into os.environ so provider SDK variables (e.g. ANTHROPIC_API_KEY) work
from dotenv import load_dotenv

load_dotenv()

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Global settings for InsightExtractor.

    Settings can be overridden via environment variables with INSIGHT_EXTRACTOR_ prefix.
    Example: INSIGHT_EXTRACTOR_USE_AI_TRIAGE=true
    """

    # Capability selection
    use_ai_triage: bool = Field(
        default=False,
        description="Use the AI-backed triage classifier instead of the heuristic one",
    )
    use_ai_actions: bool = Field(
        default=False,
        description="Use the AI-backed action generator instead of the heuristic one",
    )

    # Model config
    ai_provider: str = Field(
        default="anthropic",
        description="LLM provider for AI-backed triage and action generation",
    )
    ai_model: Optional[str] = Field(
        default=None,
        description="Model override; provider default when unset",
    )
    triage_max_tokens: int = Field(
        default=1000,
        description="Maximum tokens for an AI triage response",
    )
    action_max_tokens: int = Field(
        default=2000,
        description="Maximum tokens for an AI action generation response",
    )
    max_insight_chars_in_prompt: int = Field(
        default=4000,
        description="Insight text beyond this length is truncated in prompts",
    )

    # API settings (env: INSIGHT_EXTRACTOR_<KEY> or the provider's standard env var)
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (env: INSIGHT_EXTRACTOR_ANTHROPIC_API_KEY)",
    )
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (env: INSIGHT_EXTRACTOR_OPENAI_API_KEY)",
    )
    deepseek_api_key: str = Field(
        default="",
        description="Deepseek API key (env: INSIGHT_EXTRACTOR_DEEPSEEK_API_KEY)",
    )
    api_timeout_seconds: float = Field(
        default=120.0,
        description="API call timeout in seconds",
    )
    api_max_retries: int = Field(
        default=2,
        description="Retries performed by the provider SDK on transient failures",
    )

    # Token pricing (per 1M tokens)
    input_token_cost_per_million: float = Field(
        default=0.80,
        description="Cost per 1M input tokens",
    )
    output_token_cost_per_million: float = Field(
        default=4.00,
        description="Cost per 1M output tokens",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level used by the CLI",
    )

    model_config = {
        "env_prefix": "INSIGHT_EXTRACTOR_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def calculate_cost(self, input_tokens: int, output_tokens: int) -> float:
        """Calculate cost in USD for given token usage."""
        input_cost = (input_tokens / 1_000_000) * self.input_token_cost_per_million
        output_cost = (output_tokens / 1_000_000) * self.output_token_cost_per_million
        return input_cost + output_cost


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Create singleton instance
settings = Settings()
