"""Triage rules and classifiers."""

from .classifier import TriageClassifier, HeuristicTriageClassifier, classify_insight
from .rules import derive_triage_status, impact_from_keywords, recompute_persisted_triage, triage_score

__all__ = [
    "TriageClassifier",
    "HeuristicTriageClassifier",
    "classify_insight",
    "derive_triage_status",
    "impact_from_keywords",
    "recompute_persisted_triage",
    "triage_score",
]
