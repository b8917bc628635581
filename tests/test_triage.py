"""Tests for the triage rules and the heuristic triage classifier."""

from unittest.mock import patch

import pytest

from contracts import (
    Clarity,
    InsightImpact,
    InsightSource,
    ProjectContext,
    TriageResult,
    TriageStatus,
)
from triage import (
    HeuristicTriageClassifier,
    classify_insight,
    derive_triage_status,
    impact_from_keywords,
    recompute_persisted_triage,
    triage_score,
)
from triage.rules import assess_project_alignment, determine_clarity, text_metrics

CHECKOUT_TEXT = (
    "Users report the checkout button is fundamental to completing purchases "
    "and it's broken on mobile"
)


@pytest.fixture
def classifier():
    return HeuristicTriageClassifier()


@pytest.fixture
def full_project():
    return ProjectContext(
        name="Acme",
        value_proposition="Fastest checkout around",
        north_star_objective="Weekly active buyers",
        core_features=["payments", "wishlist"],
        current_business_objectives=["Reduce churn"],
    )


class TestStatusRule:
    """Test the (clarity, score) -> status rule."""

    @pytest.mark.parametrize("clarity,score,expected", [
        (Clarity.CLEAR, 4, TriageStatus.PASSED),
        (Clarity.CLEAR, 9, TriageStatus.PASSED),
        (Clarity.CLEAR, 3, TriageStatus.REJECTED),
        (Clarity.VAGUE, 5, TriageStatus.RESEARCH_NEEDED),
        (Clarity.VAGUE, 4, TriageStatus.RESEARCH_NEEDED),
        (Clarity.VAGUE, 3, TriageStatus.REJECTED),
        (Clarity.VAGUE, 0, TriageStatus.REJECTED),
    ])
    def test_status_table(self, clarity, score, expected):
        assert derive_triage_status(clarity, score) == expected

    def test_accepts_string_clarity(self):
        assert derive_triage_status("clear", 4) == TriageStatus.PASSED


class TestClarity:
    """Test clarity determination."""

    def test_metrics_use_trimmed_text(self):
        assert text_metrics("  two words  ") == (2, 9)

    def test_empty_text(self):
        assert text_metrics("") == (0, 0)
        assert text_metrics(None) == (0, 0)
        assert determine_clarity("   ") == Clarity.VAGUE

    def test_long_text_is_clear(self):
        assert determine_clarity(CHECKOUT_TEXT) == Clarity.CLEAR

    def test_many_short_words_are_vague(self):
        # 11 words but only 21 characters
        assert determine_clarity("a b c d e f g h i j k") == Clarity.VAGUE

    def test_few_long_words_are_vague(self):
        text = "Internationalization considerations overwhelmingly complicate implementation"
        assert len(text) > 50
        assert determine_clarity(text) == Clarity.VAGUE


class TestImpactFromKeywords:
    """Test the keyword-based impact rule."""

    def test_user_feedback_core_keyword(self):
        assert impact_from_keywords("This is critical", "user_feedback") == InsightImpact.CORE_EXPERIENCE

    def test_user_feedback_default(self):
        assert impact_from_keywords("Colors look odd", "user_feedback") == InsightImpact.IMPROVE_EXPERIENCE

    def test_team_observation_improve_keyword(self):
        result = impact_from_keywords("We could OPTIMIZE search", InsightSource.TEAM_OBSERVATION)
        assert result == InsightImpact.IMPROVE_EXPERIENCE

    def test_team_observation_default(self):
        result = impact_from_keywords("Search is used a lot", InsightSource.TEAM_OBSERVATION)
        assert result == InsightImpact.NICE_TO_HAVE

    def test_assumption_idea_always_nice_to_have(self):
        result = impact_from_keywords("A critical core idea", InsightSource.ASSUMPTION_IDEA)
        assert result == InsightImpact.NICE_TO_HAVE

    def test_project_vocabulary_short_circuits(self, full_project):
        result = impact_from_keywords("Our wishlist page", InsightSource.ASSUMPTION_IDEA, full_project)
        assert result == InsightImpact.CORE_EXPERIENCE

    def test_project_without_vocabulary(self):
        project = ProjectContext(name="Bare")
        result = impact_from_keywords("Nothing relevant", InsightSource.TEAM_OBSERVATION, project)
        assert result == InsightImpact.NICE_TO_HAVE

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            impact_from_keywords("text", "rumour")


class TestScore:
    """Test the triage score rule."""

    def test_points_without_project(self):
        assert triage_score(Clarity.CLEAR, InsightImpact.CORE_EXPERIENCE, InsightSource.USER_FEEDBACK) == 8
        assert triage_score(Clarity.VAGUE, InsightImpact.NICE_TO_HAVE, InsightSource.ASSUMPTION_IDEA) == 3

    def test_project_bonus(self, full_project):
        score = triage_score(Clarity.VAGUE, InsightImpact.NICE_TO_HAVE, InsightSource.ASSUMPTION_IDEA, full_project)
        assert score == 5

    def test_partial_project_bonus(self):
        objectives_only = ProjectContext(name="A", current_business_objectives=["Grow"])
        north_star_only = ProjectContext(name="B", north_star_objective="Grow")
        bare = ProjectContext(name="C")
        base = (Clarity.VAGUE, InsightImpact.NICE_TO_HAVE, InsightSource.ASSUMPTION_IDEA)
        assert triage_score(*base, objectives_only) == 4
        assert triage_score(*base, north_star_only) == 4
        assert triage_score(*base, bare) == 3


class TestPersistedRecompute:
    """Test the recomputation applied when an insight record is saved."""

    @pytest.mark.parametrize("clarity,impact,source,expected", [
        (Clarity.CLEAR, InsightImpact.CORE_EXPERIENCE, InsightSource.USER_FEEDBACK, (6, TriageStatus.PASSED)),
        (Clarity.VAGUE, InsightImpact.IMPROVE_EXPERIENCE, InsightSource.TEAM_OBSERVATION,
         (4, TriageStatus.RESEARCH_NEEDED)),
        (Clarity.CLEAR, InsightImpact.NICE_TO_HAVE, InsightSource.ASSUMPTION_IDEA, (2, TriageStatus.REJECTED)),
    ])
    def test_recompute(self, clarity, impact, source, expected):
        assert recompute_persisted_triage(clarity, impact, source) == expected


class TestProjectAlignment:
    """Test the alignment label used in explanations."""

    def test_strong(self, full_project):
        text = "acme payments should help reduce churn"
        assert assess_project_alignment(text, full_project) == "Strong Alignment"

    def test_partial(self, full_project):
        assert assess_project_alignment("The wishlist is hidden", full_project) == "Partial Alignment"

    def test_limited(self, full_project):
        assert assess_project_alignment("Nothing in common", full_project) == "Limited Alignment"


class TestHeuristicTriageClassifier:
    """Test the heuristic classifier end to end."""

    def test_checkout_example(self, classifier):
        result = classifier.classify(CHECKOUT_TEXT, InsightSource.USER_FEEDBACK)
        assert result.clarity == Clarity.CLEAR
        assert result.impact == InsightImpact.CORE_EXPERIENCE
        assert result.score == 8
        assert result.triage_status == TriageStatus.PASSED
        assert not result.fallback

    def test_deterministic(self, classifier, full_project):
        first = classifier.classify(CHECKOUT_TEXT, "user_feedback", full_project)
        second = classifier.classify(CHECKOUT_TEXT, "user_feedback", full_project)
        assert first == second

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text_does_not_crash(self, classifier, text):
        result = classifier.classify(text, InsightSource.USER_FEEDBACK)
        assert result.clarity == Clarity.VAGUE
        assert result.impact == InsightImpact.IMPROVE_EXPERIENCE
        assert result.score == 6
        assert result.triage_status == TriageStatus.RESEARCH_NEEDED

    def test_research_needed(self, classifier):
        result = classifier.classify("We should improve search", InsightSource.TEAM_OBSERVATION)
        assert result.score == 5
        assert result.triage_status == TriageStatus.RESEARCH_NEEDED

    def test_rejected(self, classifier):
        result = classifier.classify("Maybe add dark mode", InsightSource.ASSUMPTION_IDEA)
        assert result.score == 3
        assert result.triage_status == TriageStatus.REJECTED

    def test_clear_idea_passes_at_threshold(self, classifier):
        text = "What if we offered a weekly digest email summarizing activity for every team member"
        result = classifier.classify(text, InsightSource.ASSUMPTION_IDEA)
        assert result.score == 4
        assert result.triage_status == TriageStatus.PASSED

    def test_project_context(self, classifier, full_project):
        result = classifier.classify("The payments page feels slow", InsightSource.ASSUMPTION_IDEA, full_project)
        assert result.impact == InsightImpact.CORE_EXPERIENCE
        # 1 (vague) + 3 (core) + 1 (idea) + 2 (project bonus)
        assert result.score == 7
        assert result.triage_status == TriageStatus.RESEARCH_NEEDED

    def test_explanation_facts(self, classifier):
        result = classifier.classify(CHECKOUT_TEXT, InsightSource.USER_FEEDBACK)
        assert "Source: direct user input" in result.explanation
        assert "Clarity: well-articulated and specific" in result.explanation
        assert "Impact: fundamental to user experience" in result.explanation
        assert "Triage Score: 8" in result.explanation
        assert "Recommendation: Proceed with detailed analysis" in result.explanation
        assert "Project Context:" not in result.explanation

    def test_explanation_with_project(self, classifier, full_project):
        result = classifier.classify("The payments page feels slow", InsightSource.ASSUMPTION_IDEA, full_project)
        assert "Project Context:" in result.explanation
        assert "Name: Acme" in result.explanation
        assert "North Star Objective: Weekly active buyers" in result.explanation
        assert "Alignment: Partial Alignment" in result.explanation
        assert 'specific to project "Acme"' in result.explanation

    def test_unknown_source(self, classifier):
        with pytest.raises(ValueError):
            classifier.classify("text", "rumour")


class TestClassifyInsight:
    """Test the classify_insight convenience function."""

    def test_heuristic_by_default(self):
        result = classify_insight(CHECKOUT_TEXT, "user_feedback")
        assert result.triage_status == TriageStatus.PASSED

    def test_ai_path(self):
        expected = TriageResult(clarity=Clarity.CLEAR, impact=InsightImpact.CORE_EXPERIENCE, score=9)
        with patch("agents.triage_agent.AITriageClassifier") as mock_cls:
            mock_cls.return_value.classify.return_value = expected
            result = classify_insight(CHECKOUT_TEXT, "user_feedback", use_ai=True, provider="openai")

        assert result is expected
        mock_cls.assert_called_once_with(provider="openai", model=None)
