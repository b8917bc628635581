"""AI-backed implementations of the triage and action generation capabilities."""

from .base_agent import BaseAgent, TokenUsage
from .triage_agent import AITriageClassifier, fallback_triage_result, normalize_triage_payload
from .action_agent import (
    AIActionGenerator,
    error_fallback,
    normalize_action_payload,
    unparsable_fallback,
)

__all__ = [
    "BaseAgent",
    "TokenUsage",
    "AITriageClassifier",
    "fallback_triage_result",
    "normalize_triage_payload",
    "AIActionGenerator",
    "error_fallback",
    "normalize_action_payload",
    "unparsable_fallback",
]
