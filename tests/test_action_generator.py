"""Tests for the keyword-driven domain/action generator."""

import random
from unittest.mock import MagicMock

import pytest

from actions import (
    CATEGORY_LABELS,
    DOMAINS,
    HeuristicActionGenerator,
    describe_action,
    generate_actions,
    match_domains,
    normalize_text,
    select_category_area,
)
from contracts import ActionRecord, Clarity, InsightImpact, InsightSource, ProjectContext

CHECKOUT_TEXT = (
    "Users report the checkout button is fundamental to completing purchases "
    "and it's broken on mobile"
)


class LastChoice(random.Random):
    """Random source whose choice() always returns the last option."""

    def choice(self, seq):
        return seq[-1]


def rendered_templates(domain: str):
    return {t.replace("{domain}", "project") for t in DOMAINS[domain].templates}


@pytest.fixture
def project():
    return ProjectContext(
        name="Acme",
        north_star_objective="Weekly active buyers",
        core_features=["payments"],
    )


class TestNormalizeText:
    """Test keyword normalization."""

    def test_strips_punctuation_and_lowercases(self):
        assert normalize_text("Support! (Onboarding), long-term: {API}") == "support onboarding longterm api"

    def test_none(self):
        assert normalize_text(None) == ""


class TestMatchDomains:
    """Test domain matching."""

    def test_single_domain(self):
        matches = match_domains("The onboarding is confusing and support is slow", random.Random(1))
        assert [m.domain for m in matches] == ["service"]
        assert matches[0].keywords == ("support", "onboarding")
        assert matches[0].action in rendered_templates("service")
        assert not matches[0].is_fallback

    def test_multiple_domains_in_table_order(self):
        matches = match_domains("The navigation design hurts performance", random.Random(1))
        assert [m.domain for m in matches] == ["product", "technology"]

    def test_punctuation_is_ignored(self):
        matches = match_domains("Support!!!", random.Random(1))
        assert [m.domain for m in matches] == ["service"]

    def test_hyphenated_keyword(self):
        matches = match_domains("We lack a long-term plan", random.Random(1))
        assert [m.domain for m in matches] == ["strategy"]
        assert matches[0].keywords == ("long-term",)

    def test_multi_word_keyword(self):
        matches = match_domains("The user experience on tablets is poor", random.Random(1))
        assert "product" in [m.domain for m in matches]

    def test_keyword_prefix_matches_longer_word(self):
        matches = match_domains("Customers want more integrations", random.Random(1))
        assert {m.domain for m in matches} == {"service", "technology"}

    def test_word_boundary(self):
        # "support" inside "unsupported" does not start a word
        matches = match_domains("xx unsupported yy", random.Random(3))
        assert all(m.is_fallback for m in matches)

    @pytest.mark.parametrize("seed", range(20))
    def test_fallback_never_empty(self, seed):
        matches = match_domains("zzz qqq", random.Random(seed))
        assert 1 <= len(matches) <= 3
        assert len({m.domain for m in matches}) == len(matches)
        for match in matches:
            assert match.is_fallback
            assert match.action in rendered_templates(match.domain)

    def test_empty_text(self):
        assert match_domains("", random.Random(0))

    def test_placeholder_replaced(self):
        for seed in range(10):
            for match in match_domains("design roadmap support", random.Random(seed)):
                assert "{domain}" not in match.action


class TestDescribeAction:
    """Test description composition."""

    def test_prefix_and_phrase(self):
        description = describe_action("Do the thing", "user_feedback", "core_experience")
        assert description == "Address user-reported critical improvement for Do the thing"

    def test_team_and_idea(self):
        assert describe_action("X", InsightSource.TEAM_OBSERVATION, InsightImpact.IMPROVE_EXPERIENCE) == (
            "Implement team-identified enhancement to X"
        )
        assert describe_action("X", InsightSource.ASSUMPTION_IDEA, InsightImpact.NICE_TO_HAVE) == (
            "Explore potential optimization of X"
        )

    def test_project_suffix(self, project):
        description = describe_action("X", "user_feedback", "nice_to_have", project)
        assert description.endswith(" for Acme project")


class TestCategoryArea:
    """Test category area selection."""

    def test_source_labels(self):
        for seed in range(10):
            area = select_category_area(InsightSource.TEAM_OBSERVATION, rng=random.Random(seed))
            assert area in CATEGORY_LABELS[InsightSource.TEAM_OBSERVATION]

    def test_project_extends_options(self, project):
        assert select_category_area("user_feedback", project, LastChoice()) == "Core Feature Development"
        north_star_only = ProjectContext(name="Acme", north_star_objective="Grow")
        assert select_category_area("user_feedback", north_star_only, LastChoice()) == "Strategic Alignment"
        assert select_category_area("user_feedback", None, LastChoice()) == "Feature Enhancement"


class TestHeuristicActionGenerator:
    """Test the heuristic generator end to end."""

    def test_generates_candidates(self):
        generator = HeuristicActionGenerator(rng=random.Random(7))
        result = generator.generate_result(
            "The onboarding is confusing and support is slow",
            InsightSource.USER_FEEDBACK,
            InsightImpact.CORE_EXPERIENCE,
        )
        assert len(result.actions) == 1
        action = result.actions[0]
        assert action.domain == "service"
        prefix = "Address user-reported critical improvement for "
        assert action.description.startswith(prefix)
        assert action.description[len(prefix):] in rendered_templates("service")
        assert "support" in action.rationale
        assert result.key_insights == ["onboarding", "support"]
        assert result.full_reasoning == "Matched domains: service"
        assert result.category_area in CATEGORY_LABELS[InsightSource.USER_FEEDBACK]
        assert not result.fallback

    def test_seeded_generation_is_reproducible(self, project):
        first = HeuristicActionGenerator(rng=random.Random(42)).generate_result(
            "zzz", "team_observation", "nice_to_have", project
        )
        second = HeuristicActionGenerator(rng=random.Random(42)).generate_result(
            "zzz", "team_observation", "nice_to_have", project
        )
        assert first == second

    def test_per_call_rng(self, project):
        shared = MagicMock(wraps=random.Random(0))
        generator = HeuristicActionGenerator(rng=shared)
        first = generator.generate_result(
            "zzz", "team_observation", "nice_to_have", project, rng=random.Random(42)
        )
        second = HeuristicActionGenerator(rng=random.Random(42)).generate_result(
            "zzz", "team_observation", "nice_to_have", project
        )
        assert first == second
        assert shared.method_calls == []

    def test_fallback_reasoning(self):
        result = HeuristicActionGenerator(rng=random.Random(5)).generate_result(
            "zzz", "assumption_idea", "nice_to_have"
        )
        assert result.full_reasoning.startswith("No domain keywords matched; proposed")
        assert result.key_insights == []
        for action in result.actions:
            assert action.rationale.startswith("No keyword match;")

    def test_rice_scoring_on_candidate_scale(self):
        result = HeuristicActionGenerator(rng=random.Random(1)).generate_result(
            CHECKOUT_TEXT, "user_feedback", "core_experience", clarity=Clarity.CLEAR
        )
        for action in result.actions:
            scoring = action.rice_scoring
            assert (scoring.reach, scoring.impact, scoring.confidence, scoring.effort) == (96, 9, 100, 9)
            assert scoring.priority_score == 96
            record = ActionRecord.from_candidate(action)
            assert (record.impact, record.effort, record.priority_score) == (3, 3, 96)

    def test_clarity_derived_from_text(self):
        result = HeuristicActionGenerator(rng=random.Random(1)).generate_result(
            "short text", "user_feedback", "core_experience"
        )
        # vague: reach 80 * 0.8
        assert result.actions[0].rice_scoring.reach == 64

    def test_estimate_attached(self, project):
        result = HeuristicActionGenerator(rng=random.Random(1)).generate_result(
            CHECKOUT_TEXT, "user_feedback", "core_experience", project, Clarity.CLEAR
        )
        assert result.estimate is not None
        assert result.estimate.potential_impact == 10
        for action in result.actions:
            assert action.description.endswith(" for Acme project")
            assert 0 <= action.priority <= 10

    def test_generate_returns_list(self):
        actions = generate_actions("zzz", "user_feedback", "improve_experience", rng=random.Random(2))
        assert isinstance(actions, list)
        assert actions
        for action in actions:
            assert action.description.startswith("Address user-reported enhancement to ")

    def test_invalid_impact(self):
        with pytest.raises(ValueError):
            HeuristicActionGenerator().generate("text", "user_feedback", "huge")
