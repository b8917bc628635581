"""RICE scoring and shared numeric normalization."""

from .normalize import clamp, coerce_number, normalize_rice_inputs, round_half_up
from .rice import (
    RICEScorer,
    score_action,
    calculate_reach,
    calculate_confidence,
    rice_impact,
    rice_effort,
    persisted_priority_score,
    candidate_priority_score,
    to_persisted_scale,
    to_candidate_scale,
    estimated_effort,
    potential_impact,
    action_priority,
)

__all__ = [
    "clamp",
    "coerce_number",
    "normalize_rice_inputs",
    "round_half_up",
    "RICEScorer",
    "score_action",
    "calculate_reach",
    "calculate_confidence",
    "rice_impact",
    "rice_effort",
    "persisted_priority_score",
    "candidate_priority_score",
    "to_persisted_scale",
    "to_candidate_scale",
    "estimated_effort",
    "potential_impact",
    "action_priority",
]
