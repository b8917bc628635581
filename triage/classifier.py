"""Triage classifiers.

``TriageClassifier`` is the capability interface. The heuristic
implementation here is fully deterministic; the AI-backed implementation
lives in ``agents.triage_agent`` and falls back to a fixed result on failure.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from contracts import Clarity, InsightImpact, InsightSource, ProjectContext, TriageResult, TriageStatus
from triage.rules import (
    assess_project_alignment,
    derive_triage_status,
    determine_clarity,
    impact_from_keywords,
    triage_score,
)

logger = logging.getLogger(__name__)

SOURCE_DESCRIPTIONS = {
    InsightSource.USER_FEEDBACK: "direct user input",
    InsightSource.TEAM_OBSERVATION: "internal team observation",
    InsightSource.ASSUMPTION_IDEA: "potential improvement idea",
}

IMPACT_DESCRIPTIONS = {
    InsightImpact.CORE_EXPERIENCE: "fundamental to user experience",
    InsightImpact.IMPROVE_EXPERIENCE: "can significantly enhance current processes",
    InsightImpact.NICE_TO_HAVE: "optional improvement",
}

CLARITY_DESCRIPTIONS = {
    Clarity.CLEAR: "well-articulated and specific",
    Clarity.VAGUE: "requires further clarification",
}

STATUS_DESCRIPTIONS = {
    TriageStatus.PASSED: "Passed triage - high potential value",
    TriageStatus.RESEARCH_NEEDED: "Needs research - promising but requires more details",
    TriageStatus.REJECTED: "Rejected - insufficient impact or clarity",
}


class TriageClassifier(ABC):
    """Maps insight text and source to a TriageResult."""

    @abstractmethod
    def classify(
        self,
        text: str,
        source: Union[InsightSource, str],
        project: Optional[ProjectContext] = None,
    ) -> TriageResult:
        """Classify an insight."""
        pass


class HeuristicTriageClassifier(TriageClassifier):
    """Rule-based classifier driven by text length, keywords and project context."""

    def classify(
        self,
        text: str,
        source: Union[InsightSource, str],
        project: Optional[ProjectContext] = None,
    ) -> TriageResult:
        """Classify the insight.

        Args:
            text: Insight text; empty text is classified as vague
            source: Insight source
            project: Optional project context used for alignment bonuses

        Returns:
            TriageResult whose status follows the (clarity, score) rule

        Raises:
            ValueError: If source is not a known insight source
        """
        source = InsightSource(source)
        clarity = determine_clarity(text)
        impact = impact_from_keywords(text, source, project)
        score = triage_score(clarity, impact, source, project)
        status = derive_triage_status(clarity, score)

        logger.debug(
            "Triage: source=%s clarity=%s impact=%s score=%d status=%s",
            source.value, clarity.value, impact.value, score, status.value,
        )

        return TriageResult(
            clarity=clarity,
            impact=impact,
            score=score,
            triage_status=status,
            explanation=self._build_explanation(text, source, clarity, impact, score, status, project),
        )

    def _build_explanation(
        self,
        text: str,
        source: InsightSource,
        clarity: Clarity,
        impact: InsightImpact,
        score: int,
        status: TriageStatus,
        project: Optional[ProjectContext],
    ) -> str:
        lines = [
            "Insight Analysis:",
            f"- Source: {SOURCE_DESCRIPTIONS[source]}",
            f"- Clarity: {CLARITY_DESCRIPTIONS[clarity]}",
            f"- Impact: {IMPACT_DESCRIPTIONS[impact]}",
            f"- Triage Score: {score}",
            f"- Status: {STATUS_DESCRIPTIONS[status]}",
        ]

        if project:
            lines.extend([
                "",
                "Project Context:",
                f"- Name: {project.name}",
                f"- Value Proposition: {project.value_proposition or 'Not specified'}",
                f"- North Star Objective: {project.north_star_objective or 'Not specified'}",
                f"- Alignment: {assess_project_alignment(text, project)}",
            ])

        lines.extend(["", f"Recommendation: {self._recommendation(status, project)}"])
        return "\n".join(lines)

    def _recommendation(self, status: TriageStatus, project: Optional[ProjectContext]) -> str:
        if status == TriageStatus.PASSED:
            if project:
                return f'Proceed with detailed analysis aligned with project "{project.name}".'
            return "Proceed with detailed analysis and potential implementation."
        if status == TriageStatus.RESEARCH_NEEDED:
            if project:
                return f'Gather more context specific to project "{project.name}" before making a decision.'
            return "Gather more context and details before making a decision."
        return "Consider refining the insight or exploring alternative approaches."


def classify_insight(
    text: str,
    source: Union[InsightSource, str],
    project: Optional[ProjectContext] = None,
    use_ai: bool = False,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> TriageResult:
    """Convenience function for classifying an insight.

    Args:
        text: Insight text
        source: Insight source
        project: Optional project context
        use_ai: Use the AI-backed classifier instead of the heuristic one
        provider: LLM provider name for the AI classifier
        model: Model override for the AI classifier

    Returns:
        TriageResult
    """
    if use_ai:
        from agents.triage_agent import AITriageClassifier

        return AITriageClassifier(provider=provider, model=model).classify(text, source, project)
    return HeuristicTriageClassifier().classify(text, source, project)
