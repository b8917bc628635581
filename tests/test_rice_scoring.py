"""Tests for RICE scoring, scale conversion and the legacy estimates."""

import pytest

from contracts import Clarity, InsightImpact, InsightSource, ProjectContext
from scoring import RICEScorer, score_action
from scoring.normalize import bounded, coerce_number, normalize_rice_inputs, round_half_up
from scoring.rice import (
    action_priority,
    calculate_confidence,
    calculate_reach,
    candidate_priority_score,
    estimated_effort,
    persisted_priority_score,
    potential_impact,
    rice_effort,
    rice_impact,
    to_candidate_scale,
    to_persisted_scale,
)


@pytest.fixture
def scorer():
    return RICEScorer()


@pytest.fixture
def aligned_project():
    return ProjectContext(
        name="Acme",
        north_star_objective="Weekly active buyers",
        core_features=["payments"],
    )


class TestNormalize:
    """Test shared coercion and clamping helpers."""

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (2.4999, 2),
        (0.5, 1),
        (96.0, 96),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (None, None),
        (True, None),
        ("abc", None),
        ("", None),
        (float("nan"), None),
        (float("inf"), None),
        ("75", 75.0),
        ("80%", 80.0),
        (3, 3.0),
    ])
    def test_coerce_number(self, value, expected):
        assert coerce_number(value) == expected

    def test_bounded(self):
        assert bounded(None, 50, 0, 100) == 50
        assert bounded(250, 50, 0, 100) == 100
        assert bounded(-1, 50, 0, 100) == 0

    def test_normalize_rice_inputs(self):
        assert normalize_rice_inputs(None, None, None, None) == (50, 1, 70, 1)
        assert normalize_rice_inputs(0, 0, 0, 0) == (0, 1, 0, 1)
        assert normalize_rice_inputs(120, 2.6, "90", 4) == (100, 3, 90, 3)


class TestReachAndConfidence:
    """Test reach and confidence calculation."""

    def test_clear_user_feedback(self):
        assert calculate_reach(InsightSource.USER_FEEDBACK, Clarity.CLEAR) == 96
        assert calculate_confidence(InsightSource.USER_FEEDBACK, Clarity.CLEAR) == 100

    def test_vague_assumption(self):
        assert calculate_reach(InsightSource.ASSUMPTION_IDEA, Clarity.VAGUE) == 24
        assert calculate_confidence(InsightSource.ASSUMPTION_IDEA, Clarity.VAGUE) == 40

    def test_project_multiplier(self, aligned_project):
        # 50 * 1.2 * 1.3
        assert calculate_reach(InsightSource.TEAM_OBSERVATION, Clarity.CLEAR, aligned_project) == 78
        assert calculate_confidence(InsightSource.TEAM_OBSERVATION, Clarity.CLEAR, aligned_project) == 100


class TestImpactAndEffort:
    """Test the category-keyed impact and effort rules."""

    @pytest.mark.parametrize("impact,expected", [
        (InsightImpact.CORE_EXPERIENCE, 3),
        (InsightImpact.IMPROVE_EXPERIENCE, 2),
        (InsightImpact.NICE_TO_HAVE, 1),
    ])
    def test_base_levels(self, impact, expected):
        assert rice_impact(impact) == expected
        assert rice_effort(impact) == expected

    def test_north_star_forces_impact(self):
        project = ProjectContext(name="A", north_star_objective="Grow")
        assert rice_impact(InsightImpact.NICE_TO_HAVE, project) == 3

    def test_core_features_raise_impact(self):
        project = ProjectContext(name="A", core_features=["payments"])
        assert rice_impact(InsightImpact.NICE_TO_HAVE, project) == 2
        assert rice_impact(InsightImpact.CORE_EXPERIENCE, project) == 3

    def test_effort_increments_capped(self):
        both = ProjectContext(name="A", north_star_objective="Grow", current_business_objectives=["Retain"])
        objectives = ProjectContext(name="B", current_business_objectives=["Retain"])
        assert rice_effort(InsightImpact.NICE_TO_HAVE, both) == 3
        assert rice_effort(InsightImpact.NICE_TO_HAVE, objectives) == 2
        assert rice_effort(InsightImpact.CORE_EXPERIENCE, both) == 3


class TestPriorityScore:
    """Test the persisted and candidate priority formulas."""

    def test_worked_example(self, scorer):
        rice = scorer.score(InsightImpact.CORE_EXPERIENCE, InsightSource.USER_FEEDBACK, Clarity.CLEAR)
        assert rice.reach == 96
        assert rice.confidence == 100
        assert rice.impact == 3
        assert rice.effort == 3
        assert rice.priority_score == 96

    def test_vague_idea(self):
        rice = score_action("nice_to_have", "assumption_idea", "vague")
        # 24 * 30 * 0.4 / 30 = 9.6
        assert rice.priority_score == 10

    def test_project_example(self, scorer, aligned_project):
        rice = scorer.score(
            InsightImpact.IMPROVE_EXPERIENCE, InsightSource.TEAM_OBSERVATION, Clarity.CLEAR, aligned_project
        )
        assert (rice.reach, rice.impact, rice.confidence, rice.effort) == (78, 3, 100, 3)
        assert rice.priority_score == 78

    @pytest.mark.parametrize("inputs,expected", [
        ((500, 10, 500, 0), 100),
        ((-5, 0, -5, 9), 0),
        ((None, None, None, None), 35),
        (("abc", "x", None, "y"), 35),
        ((50, 2, 100, 1), 100),
        ((40, 1, 50, 1), 20),
    ])
    def test_persisted_clamping(self, inputs, expected):
        assert persisted_priority_score(*inputs) == expected

    @pytest.mark.parametrize("reach", [-50, 0, 33.3, 100, 1000, None])
    @pytest.mark.parametrize("impact", [-1, 1, 2, 3, 11, None])
    def test_output_ranges(self, reach, impact):
        score = persisted_priority_score(reach, impact, 150, 2)
        assert 0 <= score <= 100

    def test_monotonic_in_reach(self):
        for impact in (1, 2, 3):
            for effort in (1, 2, 3):
                scores = [persisted_priority_score(r, impact, 80, effort) for r in range(0, 101, 5)]
                assert scores == sorted(scores)

    def test_monotonic_in_effort(self):
        for reach in (0, 25, 60, 100):
            for impact in (1, 2, 3):
                scores = [persisted_priority_score(reach, impact, 80, e) for e in (1, 2, 3)]
                assert scores == sorted(scores, reverse=True)

    def test_candidate_formula(self):
        assert candidate_priority_score(50, 5, 70, 3) == 58
        assert candidate_priority_score(96, 9, 100, 9) == 96
        assert candidate_priority_score(None, None, None, None) == 58


class TestScaleConversion:
    """Test the candidate <-> persisted scale mapping."""

    @pytest.mark.parametrize("value,expected", [
        (10, 3), (8, 3), (7.5, 3), (7, 2), (4, 2), (3.5, 2), (3, 1), (1, 1),
    ])
    def test_to_persisted(self, value, expected):
        assert to_persisted_scale(value) == expected

    def test_round_trip(self):
        for value in (1, 2, 3):
            assert to_persisted_scale(to_candidate_scale(value)) == value

    def test_candidate_scoring(self, scorer):
        rice = scorer.score(InsightImpact.CORE_EXPERIENCE, InsightSource.USER_FEEDBACK, Clarity.CLEAR)
        candidate = scorer.candidate_scoring(rice)
        assert candidate.impact == 9
        assert candidate.effort == 9
        assert candidate.reach == 96
        assert candidate.priority_score == 96


class TestLegacyEstimates:
    """Test the coarse estimates attached by the heuristic generator."""

    def test_estimated_effort(self):
        both = ProjectContext(name="A", north_star_objective="Grow", current_business_objectives=["Retain"])
        objectives = ProjectContext(name="B", current_business_objectives=["Retain"])
        assert estimated_effort(InsightImpact.CORE_EXPERIENCE) == 3
        assert estimated_effort(InsightImpact.CORE_EXPERIENCE, both) == 3
        # 1 + 0.5 rounds half up
        assert estimated_effort(InsightImpact.NICE_TO_HAVE, objectives) == 2

    def test_potential_impact(self, aligned_project):
        assert potential_impact(InsightImpact.NICE_TO_HAVE) == 3
        assert potential_impact(InsightImpact.IMPROVE_EXPERIENCE, aligned_project) == 9
        assert potential_impact(InsightImpact.CORE_EXPERIENCE, aligned_project) == 10

    def test_action_priority(self):
        assert action_priority(96, 3, 100, 3) == 10
        assert action_priority(5, 1, 10, 3) == 2
        assert action_priority(0, 3, 100, 1) == 0

    def test_estimate(self, scorer):
        rice = scorer.score(InsightImpact.CORE_EXPERIENCE, InsightSource.USER_FEEDBACK, Clarity.CLEAR)
        estimate = scorer.estimate(InsightImpact.CORE_EXPERIENCE, rice)
        assert estimate.estimated_effort == 3
        assert estimate.potential_impact == 9
        assert estimate.action_priority == 10
