"""AI-backed action generator.

Asks an LLM for 3-5 candidate actions with RICE scoring on the 1-10 scale,
then normalizes every field. Provider errors and unparsable responses are
turned into fixed single-action fallbacks instead of being raised.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from config import settings
from contracts import (
    ActionGenerationResult,
    CandidateAction,
    CandidateRiceScoring,
    Clarity,
    InsightImpact,
    InsightSource,
    ProjectContext,
)
from actions.generator import ActionGenerator
from providers import LLMProvider
from scoring.normalize import bounded, coerce_number, round_half_up
from scoring.rice import CANDIDATE_DEFAULTS, candidate_priority_score

from .base_agent import BaseAgent

logger = logging.getLogger(__name__)

DEFAULT_REASONING = "No detailed reasoning provided"


def unparsable_fallback(response_text: str) -> ActionGenerationResult:
    """Fixed result for a response that held no usable actions."""
    return ActionGenerationResult(
        actions=[
            CandidateAction(
                domain="General Analysis",
                description="Comprehensive review needed",
                rationale="Unable to parse detailed AI response",
                rice_scoring=CandidateRiceScoring(
                    reach=50, impact=5, confidence=50, effort=3, priority_score=4
                ),
                priority=4,
            )
        ],
        full_reasoning=f"Original response could not be parsed: {(response_text or '')[:500]}...",
        key_insights=["Parsing required manual review"],
        potential_challenges=["Complex response structure"],
        fallback=True,
    )


def error_fallback() -> ActionGenerationResult:
    """Fixed result for a failed provider call."""
    return ActionGenerationResult(
        actions=[
            CandidateAction(
                domain="Product UX",
                description="Investigate and improve feature based on user feedback",
                rationale="Error in AI action generation",
                rice_scoring=CandidateRiceScoring(
                    reach=50, impact=5, confidence=70, effort=3, priority_score=5
                ),
                priority=5,
            )
        ],
        full_reasoning="Unable to generate detailed actions due to an error",
        key_insights=["Action generation failed"],
        potential_challenges=["Technical issue with AI service"],
        fallback=True,
    )


def _text_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def normalize_rice_scoring(raw: Any) -> CandidateRiceScoring:
    """Default and clamp candidate-scale RICE values; derive a missing priority score."""
    raw = raw if isinstance(raw, dict) else {}
    reach = bounded(raw.get("reach"), CANDIDATE_DEFAULTS["reach"], 0, 100)
    impact = bounded(raw.get("impact"), CANDIDATE_DEFAULTS["impact"], 1, 10)
    confidence = bounded(raw.get("confidence"), CANDIDATE_DEFAULTS["confidence"], 0, 100)
    effort = bounded(raw.get("effort"), CANDIDATE_DEFAULTS["effort"], 1, 10)

    supplied = coerce_number(raw.get("priorityScore", raw.get("priority_score")))
    if supplied is None:
        priority_score = candidate_priority_score(reach, impact, confidence, effort)
    else:
        priority_score = max(0, round_half_up(supplied))

    return CandidateRiceScoring(
        reach=reach,
        impact=impact,
        confidence=confidence,
        effort=effort,
        priority_score=priority_score,
    )


def normalize_action(raw: Any) -> CandidateAction:
    raw = raw if isinstance(raw, dict) else {}
    return CandidateAction(
        domain=_text_or_default(raw.get("domain"), "Unspecified"),
        description=_text_or_default(raw.get("description"), "No description provided"),
        rationale=_text_or_default(raw.get("rationale"), "No rationale provided"),
        rice_scoring=normalize_rice_scoring(raw.get("riceScoring", raw.get("rice_scoring"))),
        priority=bounded(raw.get("priority"), 5, 0, 10),
    )


def normalize_action_payload(data: Dict[str, Any]) -> Optional[ActionGenerationResult]:
    """Normalize a parsed AI response.

    Returns:
        ActionGenerationResult, or None when the payload has no non-empty ``actions`` list
    """
    actions = data.get("actions")
    if not isinstance(actions, list) or not actions:
        return None

    return ActionGenerationResult(
        actions=[normalize_action(action) for action in actions],
        full_reasoning=_text_or_default(
            data.get("fullReasoning", data.get("full_reasoning")), DEFAULT_REASONING
        ),
        key_insights=_string_list(data.get("keyInsights", data.get("key_insights"))),
        potential_challenges=_string_list(
            data.get("potentialChallenges", data.get("potential_challenges"))
        ),
        category_area=_text_or_default(data.get("categoryArea", data.get("category_area")), "") or None,
    )


class AIActionGenerator(BaseAgent, ActionGenerator):
    """Action generator backed by an LLM provider."""

    SYSTEM_PROMPT = """You are an expert product strategist specializing in generating actionable insights with precise RICE scoring.

## RICE Scoring Guidelines

1. Reach (0-100):
   - How many users/customers will this action impact?
   - Align with the project's ideal customer profile
2. Impact (1-10):
   - Potential transformative effect on user experience
   - Alignment with the north star objective
3. Confidence (0-100):
   - Likelihood of successful implementation
   - Based on insight source and triage outcome
4. Effort (1-10):
   - Resources, technical complexity and time required

Priority Score = (Reach * Impact * Confidence) / (Effort * 100)

## Task

1. Generate 3-5 actionable strategies
2. For EACH action provide a specific domain, a detailed description,
   a rationale, precise RICE scoring and an overall priority (1-10)

## Output Format

Respond in strict JSON:
{
  "actions": [
    {
      "domain": "string",
      "description": "string",
      "rationale": "string",
      "riceScoring": {
        "reach": number,
        "impact": number,
        "confidence": number,
        "effort": number,
        "priorityScore": number
      },
      "priority": number
    }
  ],
  "fullReasoning": "string",
  "keyInsights": ["string"],
  "potentialChallenges": ["string"]
}
"""

    def __init__(
        self,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        llm_provider: Optional[LLMProvider] = None,
    ):
        super().__init__(
            role="actions",
            system_prompt=self.SYSTEM_PROMPT,
            max_tokens=settings.action_max_tokens,
            model=model,
            provider=provider,
            llm_provider=llm_provider,
        )

    def _build_user_message(
        self,
        insight_text: str,
        source: InsightSource,
        impact: InsightImpact,
        clarity: Optional[Clarity],
        project: Optional[ProjectContext],
    ) -> str:
        lines = [
            "Insight Context:",
            f"- Source: {source.value}",
            f"- Text: {self._truncate(insight_text)}",
            f"- Triage Impact: {impact.value}",
        ]
        if clarity is not None:
            lines.append(f"- Triage Clarity: {clarity.value}")

        lines.extend(["", "Project Context:"])
        if project:
            lines.extend([
                f"- Project Name: {project.name}",
                f"- Value Proposition: {project.value_proposition or 'Not specified'}",
                f"- North Star Objective: {project.north_star_objective or 'Not specified'}",
                f"- Core Features: {', '.join(project.core_features) or 'Not specified'}",
                f"- Ideal Customer Profile: {project.ideal_customer_profile or 'Not specified'}",
            ])
        else:
            lines.append("No specific project context provided")
        return "\n".join(lines)

    def generate_result(
        self,
        insight_text: str,
        source: Union[InsightSource, str],
        impact: Union[InsightImpact, str],
        project: Optional[ProjectContext] = None,
        clarity: Optional[Union[Clarity, str]] = None,
    ) -> ActionGenerationResult:
        """Generate candidate actions with the LLM.

        Args:
            insight_text: Insight text
            source: Insight source
            impact: Impact category assigned by triage
            project: Optional project context included in the prompt
            clarity: Clarity assigned by triage, if known

        Returns:
            Normalized ActionGenerationResult, or a fixed fallback on failure
        """
        source = InsightSource(source)
        impact = InsightImpact(impact)
        clarity = Clarity(clarity) if clarity is not None else None

        try:
            response = self._call(
                self._build_user_message(insight_text, source, impact, clarity, project)
            )
        except Exception as e:
            logger.warning("AI action generation failed: %s", e)
            return error_fallback()

        data = self._extract_json(response.content)
        result = normalize_action_payload(data) if data is not None else None
        if result is None:
            logger.warning("Failed to parse AI action response: %r", response.content[:500])
            return unparsable_fallback(response.content)

        logger.debug("AI proposed %d action(s): %s", len(result.actions), [a.domain for a in result.actions])
        return result
