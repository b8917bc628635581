"""Orchestration of the insight lifecycle: triage, action generation and scoring."""

from .lifecycle import (
    InvalidTransitionError,
    LifecycleEvent,
    classification_event,
    is_terminal,
    override_triage_status,
    state_for_status,
    transition,
)
from .pipeline import InsightPipeline, PipelineResult, build_pipeline

__all__ = [
    "InvalidTransitionError",
    "LifecycleEvent",
    "classification_event",
    "is_terminal",
    "override_triage_status",
    "state_for_status",
    "transition",
    "InsightPipeline",
    "PipelineResult",
    "build_pipeline",
]
