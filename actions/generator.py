"""Domain/action generation.

``ActionGenerator`` is the capability interface; ``HeuristicActionGenerator``
matches domain keywords in the insight text and phrases one candidate action
per matched domain. Template and fallback-domain choice is random, drawn from
an injectable ``random.Random`` so callers (and tests) can fix the seed.
"""

import logging
import random
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from actions.domains import (
    CATEGORY_LABELS,
    CORE_FEATURE_CATEGORY,
    DOMAIN_PLACEHOLDER_VALUE,
    DOMAINS,
    IMPACT_PHRASES,
    NORTH_STAR_CATEGORY,
    SOURCE_PREFIXES,
    DomainSpec,
)
from contracts import (
    ActionGenerationResult,
    CandidateAction,
    Clarity,
    InsightImpact,
    InsightSource,
    ProjectContext,
)
from scoring.rice import RICEScorer
from triage.rules import determine_clarity

logger = logging.getLogger(__name__)

_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")


def normalize_text(text: str) -> str:
    """Lowercase and strip the punctuation set used for keyword matching."""
    return _PUNCTUATION.sub("", (text or "").lower())


def _keyword_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(r"\b" + re.escape(normalize_text(keyword)) + r"\w*\b", re.IGNORECASE)


@dataclass(frozen=True)
class DomainMatch:
    """A domain selected for the insight, with the phrase chosen for it."""
    domain: str
    action: str
    keywords: Tuple[str, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return not self.keywords


def _render_template(entry: DomainSpec, rng: random.Random) -> str:
    return rng.choice(entry.templates).replace("{domain}", DOMAIN_PLACEHOLDER_VALUE)


def match_domains(text: str, rng: Optional[random.Random] = None) -> List[DomainMatch]:
    """Pick a phrase for every domain whose keywords appear in ``text``.

    When nothing matches, 1-3 random domains are chosen instead, so the
    result is never empty.
    """
    rng = rng or random.Random()
    clean_text = normalize_text(text)

    matches: List[DomainMatch] = []
    for entry in DOMAINS.values():
        found = tuple(kw for kw in entry.keywords if _keyword_pattern(kw).search(clean_text))
        if found:
            matches.append(DomainMatch(entry.name, _render_template(entry, rng), found))

    if not matches:
        count = rng.randint(1, 3)
        for name in rng.sample(list(DOMAINS), count):
            matches.append(DomainMatch(name, _render_template(DOMAINS[name], rng)))

    logger.debug("Matched domains for %r: %s", (text or "")[:80], [m.domain for m in matches])
    return matches


def describe_action(
    action: str,
    source: Union[InsightSource, str],
    impact: Union[InsightImpact, str],
    project: Optional[ProjectContext] = None,
) -> str:
    """Compose '<source prefix> <impact phrase> <action>[ for <project> project]'."""
    suffix = f" for {project.name} project" if project else ""
    prefix = SOURCE_PREFIXES[InsightSource(source)]
    phrase = IMPACT_PHRASES[InsightImpact(impact)]
    return f"{prefix} {phrase} {action}{suffix}".strip()


def select_category_area(
    source: Union[InsightSource, str],
    project: Optional[ProjectContext] = None,
    rng: Optional[random.Random] = None,
) -> str:
    rng = rng or random.Random()
    options = list(CATEGORY_LABELS[InsightSource(source)])
    if project:
        if project.has_north_star:
            options.append(NORTH_STAR_CATEGORY)
        if project.has_core_features:
            options.append(CORE_FEATURE_CATEGORY)
    return rng.choice(options)


class ActionGenerator(ABC):
    """Proposes candidate actions for a triaged insight."""

    @abstractmethod
    def generate_result(
        self,
        insight_text: str,
        source: Union[InsightSource, str],
        impact: Union[InsightImpact, str],
        project: Optional[ProjectContext] = None,
        clarity: Optional[Union[Clarity, str]] = None,
    ) -> ActionGenerationResult:
        """Generate candidate actions along with reasoning and a category area."""
        pass

    def generate(
        self,
        insight_text: str,
        source: Union[InsightSource, str],
        impact: Union[InsightImpact, str],
        project: Optional[ProjectContext] = None,
        clarity: Optional[Union[Clarity, str]] = None,
    ) -> List[CandidateAction]:
        """Generate candidate actions; never empty."""
        return self.generate_result(insight_text, source, impact, project, clarity).actions


class HeuristicActionGenerator(ActionGenerator):
    """Keyword-driven generator usable without any AI service."""

    def __init__(self, rng: Optional[random.Random] = None, scorer: Optional[RICEScorer] = None):
        """Initialize the generator.

        Args:
            rng: Randomness source for template, fallback-domain and category choice
            scorer: RICE scorer used to attach scores to each candidate
        """
        self.rng = rng or random.Random()
        self.scorer = scorer or RICEScorer()

    def generate_result(
        self,
        insight_text: str,
        source: Union[InsightSource, str],
        impact: Union[InsightImpact, str],
        project: Optional[ProjectContext] = None,
        clarity: Optional[Union[Clarity, str]] = None,
        rng: Optional[random.Random] = None,
    ) -> ActionGenerationResult:
        """Generate keyword-matched candidates.

        ``rng`` overrides the generator's own randomness source for this call,
        so concurrent callers can keep their draws independent.
        """
        rng = rng or self.rng
        source = InsightSource(source)
        impact = InsightImpact(impact)
        clarity = Clarity(clarity) if clarity is not None else determine_clarity(insight_text)

        rice = self.scorer.score(impact, source, clarity, project)
        candidate_scoring = self.scorer.candidate_scoring(rice)
        estimate = self.scorer.estimate(impact, rice, project)

        matches = match_domains(insight_text, rng)
        actions = [
            CandidateAction(
                domain=match.domain,
                description=describe_action(match.action, source, impact, project),
                rationale=self._rationale(match),
                rice_scoring=candidate_scoring,
                priority=estimate.action_priority,
            )
            for match in matches
        ]
        logger.debug("Final action descriptions: %s", [a.description for a in actions])

        if any(m.is_fallback for m in matches):
            reasoning = (
                f"No domain keywords matched; proposed {len(matches)} exploratory "
                f"domain(s): {', '.join(m.domain for m in matches)}"
            )
        else:
            reasoning = f"Matched domains: {', '.join(m.domain for m in matches)}"

        return ActionGenerationResult(
            actions=actions,
            full_reasoning=reasoning,
            key_insights=sorted({kw for m in matches for kw in m.keywords}),
            category_area=select_category_area(source, project, rng),
            estimate=estimate,
        )

    def _rationale(self, match: DomainMatch) -> str:
        if match.is_fallback:
            return f"No keyword match; {match.domain} suggested as an exploratory direction"
        return f"Insight mentions {', '.join(match.keywords)} ({match.domain} domain)"


def generate_actions(
    insight_text: str,
    source: Union[InsightSource, str],
    impact: Union[InsightImpact, str],
    project: Optional[ProjectContext] = None,
    rng: Optional[random.Random] = None,
) -> List[CandidateAction]:
    """Convenience function for heuristic action generation."""
    return HeuristicActionGenerator(rng=rng).generate(insight_text, source, impact, project)
