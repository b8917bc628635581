"""RICE action scoring.

Two representations are scored here and kept apart:

* the persisted action scale: impact and effort in 1-3, priority score
  ``reach * (impact*30) * (confidence/100) / (effort*30)`` clamped to 0-100;
* the candidate scale used by generators and AI responses: impact and effort
  in 1-10, priority score ``reach * impact * confidence / (effort * 100)``.

``to_persisted_scale`` and ``to_candidate_scale`` convert between them.
"""

import logging
from typing import Any, Dict, Optional, Union

from contracts import (
    ActionEstimate,
    CandidateRiceScoring,
    Clarity,
    InsightImpact,
    InsightSource,
    ProjectContext,
    RICEScore,
)
from scoring.normalize import bounded, clamp, normalize_rice_inputs, round_half_up

logger = logging.getLogger(__name__)

BASE_REACH: Dict[InsightSource, int] = {
    InsightSource.USER_FEEDBACK: 80,
    InsightSource.TEAM_OBSERVATION: 50,
    InsightSource.ASSUMPTION_IDEA: 30,
}

BASE_CONFIDENCE: Dict[InsightSource, int] = {
    InsightSource.USER_FEEDBACK: 90,
    InsightSource.TEAM_OBSERVATION: 75,
    InsightSource.ASSUMPTION_IDEA: 50,
}

# Shared by impact and effort on the 1-3 scale
IMPACT_LEVEL: Dict[InsightImpact, int] = {
    InsightImpact.CORE_EXPERIENCE: 3,
    InsightImpact.IMPROVE_EXPERIENCE: 2,
    InsightImpact.NICE_TO_HAVE: 1,
}

POTENTIAL_IMPACT_BASE: Dict[InsightImpact, int] = {
    InsightImpact.CORE_EXPERIENCE: 9,
    InsightImpact.IMPROVE_EXPERIENCE: 6,
    InsightImpact.NICE_TO_HAVE: 3,
}

# Candidate-scale defaults for missing values
CANDIDATE_DEFAULTS = {"reach": 50, "impact": 5, "confidence": 70, "effort": 3}


def clarity_multiplier(clarity: Union[Clarity, str]) -> float:
    return 1.2 if Clarity(clarity) == Clarity.CLEAR else 0.8


def project_multiplier(project: Optional[ProjectContext]) -> float:
    multiplier = 1.0
    if project:
        if project.has_north_star:
            multiplier += 0.2
        if project.has_core_features:
            multiplier += 0.1
    return multiplier


def calculate_reach(
    source: Union[InsightSource, str],
    clarity: Union[Clarity, str],
    project: Optional[ProjectContext] = None,
) -> int:
    raw = BASE_REACH[InsightSource(source)] * clarity_multiplier(clarity) * project_multiplier(project)
    return int(clamp(round_half_up(raw), 0, 100))


def calculate_confidence(
    source: Union[InsightSource, str],
    clarity: Union[Clarity, str],
    project: Optional[ProjectContext] = None,
) -> int:
    raw = BASE_CONFIDENCE[InsightSource(source)] * clarity_multiplier(clarity) * project_multiplier(project)
    return int(clamp(round_half_up(raw), 0, 100))


def rice_impact(
    insight_impact: Union[InsightImpact, str],
    project: Optional[ProjectContext] = None,
) -> int:
    """Category-keyed impact rule (1-3).

    Independent of the keyword-based impact rule used during triage.
    """
    impact = IMPACT_LEVEL[InsightImpact(insight_impact)]
    if project:
        if project.has_north_star:
            impact = 3
        elif project.has_core_features:
            impact = max(2, impact)
    return impact


def rice_effort(
    insight_impact: Union[InsightImpact, str],
    project: Optional[ProjectContext] = None,
) -> int:
    effort = IMPACT_LEVEL[InsightImpact(insight_impact)]
    if project:
        if project.has_north_star:
            effort = min(3, effort + 1)
        if project.has_business_objectives:
            effort = min(3, effort + 1)
    return effort


def persisted_priority_score(reach: Any, impact: Any, confidence: Any, effort: Any) -> int:
    """Priority score (0-100) for the persisted 1-3 scale."""
    reach, impact, confidence, effort = normalize_rice_inputs(reach, impact, confidence, effort)
    raw = reach * (impact * 30) * (confidence / 100) / (effort * 30)
    score = int(clamp(round_half_up(raw), 0, 100))
    logger.debug(
        "Priority score: reach=%s impact=%s confidence=%s effort=%s -> %s",
        reach, impact, confidence, effort, score,
    )
    return score


def candidate_priority_score(reach: Any, impact: Any, confidence: Any, effort: Any) -> int:
    """Priority score for the 1-10 candidate scale."""
    reach = bounded(reach, CANDIDATE_DEFAULTS["reach"], 0, 100)
    impact = bounded(impact, CANDIDATE_DEFAULTS["impact"], 1, 10)
    confidence = bounded(confidence, CANDIDATE_DEFAULTS["confidence"], 0, 100)
    effort = bounded(effort, CANDIDATE_DEFAULTS["effort"], 1, 10)
    return round_half_up(reach * impact * confidence / (effort * 100))


def to_persisted_scale(value: float) -> int:
    """Map a 1-10 impact or effort value to the persisted 1-3 scale."""
    if value > 7:
        return 3
    if value > 3:
        return 2
    return 1


def to_candidate_scale(value: int) -> int:
    """Map a persisted 1-3 value onto the candidate scale (1->3, 2->6, 3->9)."""
    return int(clamp(value, 1, 3)) * 3


def estimated_effort(
    insight_impact: Union[InsightImpact, str],
    project: Optional[ProjectContext] = None,
) -> int:
    effort = float(IMPACT_LEVEL[InsightImpact(insight_impact)])
    if project:
        if project.has_north_star:
            effort += 1
        if project.has_business_objectives:
            effort += 0.5
    return int(clamp(round_half_up(effort), 1, 3))


def potential_impact(
    insight_impact: Union[InsightImpact, str],
    project: Optional[ProjectContext] = None,
) -> int:
    impact = POTENTIAL_IMPACT_BASE[InsightImpact(insight_impact)]
    if project:
        if project.has_north_star:
            impact += 2
        if project.has_core_features:
            impact += 1
    return min(10, impact)


def action_priority(reach: float, impact: float, confidence: float, effort: float) -> int:
    """Coarse 0-10 priority from 1-3 scale RICE values."""
    effort = max(1.0, effort)
    rice = reach * impact * confidence / effort
    return int(clamp(round_half_up(rice / 10), 0, 10))


class RICEScorer:
    """Computes RICE fields for actions derived from a triaged insight."""

    def score(
        self,
        insight_impact: Union[InsightImpact, str],
        source: Union[InsightSource, str],
        clarity: Union[Clarity, str],
        project: Optional[ProjectContext] = None,
    ) -> RICEScore:
        """Score on the persisted scale.

        Args:
            insight_impact: Impact category from triage
            source: Insight source
            clarity: Clarity from triage
            project: Optional project context

        Returns:
            RICEScore with reach, impact, confidence, effort and priority score
        """
        reach = calculate_reach(source, clarity, project)
        impact = rice_impact(insight_impact, project)
        confidence = calculate_confidence(source, clarity, project)
        effort = rice_effort(insight_impact, project)
        return RICEScore(
            reach=reach,
            impact=impact,
            confidence=confidence,
            effort=effort,
            priority_score=persisted_priority_score(reach, impact, confidence, effort),
        )

    def candidate_scoring(self, rice: RICEScore) -> CandidateRiceScoring:
        """Express a persisted-scale score on the candidate scale."""
        impact = to_candidate_scale(rice.impact)
        effort = to_candidate_scale(rice.effort)
        return CandidateRiceScoring(
            reach=rice.reach,
            impact=impact,
            confidence=rice.confidence,
            effort=effort,
            priority_score=candidate_priority_score(rice.reach, impact, rice.confidence, effort),
        )

    def estimate(
        self,
        insight_impact: Union[InsightImpact, str],
        rice: RICEScore,
        project: Optional[ProjectContext] = None,
    ) -> ActionEstimate:
        return ActionEstimate(
            estimated_effort=estimated_effort(insight_impact, project),
            potential_impact=potential_impact(insight_impact, project),
            action_priority=action_priority(rice.reach, rice.impact, rice.confidence, rice.effort),
        )


def score_action(
    insight_impact: Union[InsightImpact, str],
    source: Union[InsightSource, str],
    clarity: Union[Clarity, str],
    project: Optional[ProjectContext] = None,
) -> RICEScore:
    """Convenience function for scoring with a default scorer."""
    return RICEScorer().score(insight_impact, source, clarity, project)
