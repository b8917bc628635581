"""Deterministic triage rules.

These are plain functions so the classifier, the AI response parser and the
persistence-layer recomputation all apply the same rule.
"""

from typing import Dict, List, Optional, Tuple, Union

from contracts import Clarity, InsightImpact, InsightSource, ProjectContext, TriageStatus

PASS_THRESHOLD = 4

CORE_EXPERIENCE_KEYWORDS = ("fundamental", "critical", "essential", "core", "primary", "main")
IMPROVE_EXPERIENCE_KEYWORDS = ("enhance", "improve", "optimize", "refine", "better", "smoother")

CLARITY_POINTS: Dict[Clarity, int] = {Clarity.CLEAR: 2, Clarity.VAGUE: 1}

IMPACT_POINTS: Dict[InsightImpact, int] = {
    InsightImpact.CORE_EXPERIENCE: 3,
    InsightImpact.IMPROVE_EXPERIENCE: 2,
    InsightImpact.NICE_TO_HAVE: 1,
}

SOURCE_POINTS: Dict[InsightSource, int] = {
    InsightSource.USER_FEEDBACK: 3,
    InsightSource.TEAM_OBSERVATION: 2,
    InsightSource.ASSUMPTION_IDEA: 1,
}


def derive_triage_status(clarity: Union[Clarity, str], score: int) -> TriageStatus:
    """clear & score>=4 -> passed; vague & score>=4 -> research_needed; else rejected."""
    clarity = Clarity(clarity)
    if score >= PASS_THRESHOLD:
        return TriageStatus.PASSED if clarity == Clarity.CLEAR else TriageStatus.RESEARCH_NEEDED
    return TriageStatus.REJECTED


def text_metrics(text: str) -> Tuple[int, int]:
    """Return (word_count, text_length) of the trimmed text."""
    trimmed = (text or "").strip()
    return len(trimmed.split()), len(trimmed)


def determine_clarity(text: str) -> Clarity:
    word_count, text_length = text_metrics(text)
    return Clarity.CLEAR if word_count > 10 and text_length > 50 else Clarity.VAGUE


def project_vocabulary(project: ProjectContext) -> List[str]:
    """Lowercase words from the project's core features, north star and value proposition."""
    parts = list(project.core_features)
    parts.append(project.north_star_objective or "")
    parts.append(project.value_proposition or "")
    return " ".join(parts).lower().split()


def impact_from_keywords(
    text: str,
    source: Union[InsightSource, str],
    project: Optional[ProjectContext] = None,
) -> InsightImpact:
    """Keyword-based impact rule applied at triage time.

    Independent of the category-keyed impact rule used by the RICE scorer.
    """
    source = InsightSource(source)
    lowered = (text or "").lower()

    if project and any(word in lowered for word in project_vocabulary(project)):
        return InsightImpact.CORE_EXPERIENCE

    if source == InsightSource.USER_FEEDBACK:
        if any(keyword in lowered for keyword in CORE_EXPERIENCE_KEYWORDS):
            return InsightImpact.CORE_EXPERIENCE
        return InsightImpact.IMPROVE_EXPERIENCE

    if source == InsightSource.TEAM_OBSERVATION:
        if any(keyword in lowered for keyword in IMPROVE_EXPERIENCE_KEYWORDS):
            return InsightImpact.IMPROVE_EXPERIENCE
        return InsightImpact.NICE_TO_HAVE

    return InsightImpact.NICE_TO_HAVE


def project_alignment_bonus(project: Optional[ProjectContext]) -> int:
    if not project:
        return 0
    bonus = 0
    if project.has_business_objectives:
        bonus += 1
    if project.has_core_features or project.has_north_star:
        bonus += 1
    return bonus


def triage_score(
    clarity: Union[Clarity, str],
    impact: Union[InsightImpact, str],
    source: Union[InsightSource, str],
    project: Optional[ProjectContext] = None,
) -> int:
    return (
        CLARITY_POINTS[Clarity(clarity)]
        + IMPACT_POINTS[InsightImpact(impact)]
        + SOURCE_POINTS[InsightSource(source)]
        + project_alignment_bonus(project)
    )


def recompute_persisted_triage(
    clarity: Union[Clarity, str],
    impact: Union[InsightImpact, str],
    source: Union[InsightSource, str],
) -> Tuple[int, TriageStatus]:
    """Score and status as recomputed when an insight record is saved.

    The stored score counts only source and impact points; the status rule is
    the same one the classifier uses.
    """
    score = SOURCE_POINTS[InsightSource(source)] + IMPACT_POINTS[InsightImpact(impact)]
    return score, derive_triage_status(clarity, score)


def assess_project_alignment(text: str, project: ProjectContext) -> str:
    lowered = (text or "").lower()
    phrases = [project.name, project.value_proposition or "", project.north_star_objective or ""]
    phrases.extend(project.core_features)
    phrases.extend(project.current_business_objectives)

    matched = [p for p in (phrase.lower() for phrase in phrases) if p and p in lowered]
    if len(matched) > 2:
        return "Strong Alignment"
    if matched:
        return "Partial Alignment"
    return "Limited Alignment"
