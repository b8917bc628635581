"""AI-backed triage classifier.

Sends the insight to an LLM and normalizes its JSON assessment into a
TriageResult. The classifier never raises: provider errors and unparsable
responses both yield a fixed fallback result.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from config import settings
from contracts import (
    Clarity,
    InsightImpact,
    InsightSource,
    ProjectContext,
    TriageResult,
    TriageStatus,
    UserSentiment,
)
from providers import LLMProvider
from scoring.normalize import bounded, coerce_number, round_half_up
from triage.classifier import TriageClassifier

from .base_agent import BaseAgent

logger = logging.getLogger(__name__)

PARSE_FAILURE_EXPLANATION = "Unable to parse detailed AI assessment"
ERROR_EXPLANATION_PREFIX = "Error in AI triage assessment: "


def fallback_triage_result(explanation: str) -> TriageResult:
    """The fixed low-confidence result used whenever AI triage fails."""
    return TriageResult(
        clarity=Clarity.VAGUE,
        impact=InsightImpact.NICE_TO_HAVE,
        score=2,
        triage_status=TriageStatus.RESEARCH_NEEDED,
        explanation=explanation,
        contextual_relevance=50,
        innovation_potential=50,
        urgency=50,
        user_sentiment=UserSentiment.NEUTRAL,
        primary_domain="General",
        affected_features=[],
        fallback=True,
    )


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    """First non-None value among camelCase/snake_case spellings of a key."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _enum_or_default(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def normalize_triage_payload(data: Dict[str, Any]) -> TriageResult:
    """Build a TriageResult from a parsed AI response, defaulting each field independently.

    The returned status is recomputed from (clarity, score), so a response
    whose own status disagrees with the rule is corrected.
    """
    score = coerce_number(data.get("score"))
    explanation = data.get("explanation")
    return TriageResult(
        clarity=_enum_or_default(Clarity, data.get("clarity"), Clarity.VAGUE),
        impact=_enum_or_default(InsightImpact, data.get("impact"), InsightImpact.NICE_TO_HAVE),
        score=max(0, round_half_up(score)) if score is not None else 2,
        explanation=explanation.strip() if isinstance(explanation, str) and explanation.strip()
        else "No explanation provided",
        contextual_relevance=bounded(_pick(data, "contextualRelevance", "contextual_relevance"), 50, 0, 100),
        innovation_potential=bounded(_pick(data, "innovationPotential", "innovation_potential"), 50, 0, 100),
        urgency=bounded(data.get("urgency"), 50, 0, 100),
        user_sentiment=_enum_or_default(
            UserSentiment, _pick(data, "userSentiment", "user_sentiment"), UserSentiment.NEUTRAL
        ),
        primary_domain=str(_pick(data, "primaryDomain", "primary_domain") or "General"),
        affected_features=_string_list(_pick(data, "affectedFeatures", "affected_features")),
    )


class AITriageClassifier(BaseAgent, TriageClassifier):
    """Triage classifier backed by an LLM provider."""

    SYSTEM_PROMPT = """You are an AI assistant performing advanced insight triage for a product team.

Analyze each insight with precision and provide a triage assessment covering:

1. Clarity of the insight (clear or vague)
2. Impact level (core user experience, improve experience, or nice to have)
3. Contextual Relevance (how directly this impacts the core user journey)
4. Innovation Potential (how novel the insight is)
5. Urgency (time-sensitivity of addressing this insight)
6. User Sentiment (emotional tone of the feedback)
7. Primary Domain and Affected Features

## Scoring Guidelines

- Clarity: Based on specificity and completeness of information
- Impact: Evaluate potential transformation of user experience
- Contextual Relevance: Alignment with core product goals
- Innovation Potential: Uniqueness of the proposed improvement
- Urgency: Immediate vs. long-term need
- User Sentiment: Emotional undertone of the feedback
- Score: integer from 0 to 10; insights scoring 4 or more are actionable

## Output Format

Respond in strict JSON:
{
  "clarity": "clear|vague",
  "impact": "core_experience|improve_experience|nice_to_have",
  "explanation": "Detailed reasoning...",
  "score": number,
  "triageStatus": "passed|research_needed|rejected",
  "contextualRelevance": number,
  "innovationPotential": number,
  "urgency": number,
  "userSentiment": "positive|neutral|negative",
  "primaryDomain": "string",
  "affectedFeatures": ["string"]
}
"""

    def __init__(
        self,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        llm_provider: Optional[LLMProvider] = None,
    ):
        super().__init__(
            role="triage",
            system_prompt=self.SYSTEM_PROMPT,
            max_tokens=settings.triage_max_tokens,
            model=model,
            provider=provider,
            llm_provider=llm_provider,
        )

    def _build_user_message(
        self,
        text: str,
        source: InsightSource,
        project: Optional[ProjectContext],
    ) -> str:
        parts = [
            f"Insight Source: {source.value}",
            f"Insight Description: {self._truncate(text)}",
        ]
        if project:
            parts.extend([
                "",
                "Project Context:",
                f"- Project Name: {project.name}",
                f"- Value Proposition: {project.value_proposition or 'Not specified'}",
                f"- North Star Objective: {project.north_star_objective or 'Not specified'}",
                f"- Core Features: {', '.join(project.core_features) or 'Not specified'}",
                f"- Business Objectives: {', '.join(project.current_business_objectives) or 'Not specified'}",
            ])
        return "\n".join(parts)

    def classify(
        self,
        text: str,
        source: Union[InsightSource, str],
        project: Optional[ProjectContext] = None,
    ) -> TriageResult:
        """Classify the insight with the LLM.

        Args:
            text: Insight text
            source: Insight source
            project: Optional project context included in the prompt

        Returns:
            Normalized TriageResult, or the fixed fallback on any failure

        Raises:
            ValueError: If source is not a known insight source
        """
        source = InsightSource(source)
        try:
            response = self._call(self._build_user_message(text, source, project))
        except Exception as e:
            logger.warning("AI triage call failed: %s", e)
            return fallback_triage_result(f"{ERROR_EXPLANATION_PREFIX}{e}")

        data = self._extract_json(response.content)
        if data is None:
            logger.warning("Failed to parse AI triage response: %r", response.content[:500])
            return fallback_triage_result(PARSE_FAILURE_EXPLANATION)

        result = normalize_triage_payload(data)
        reported = str(_pick(data, "triageStatus", "triage_status") or "")
        if reported and reported != result.triage_status.value:
            logger.info(
                "AI triage status %r replaced by %r (clarity=%s, score=%d)",
                reported, result.triage_status.value, result.clarity.value, result.score,
            )
        return result
