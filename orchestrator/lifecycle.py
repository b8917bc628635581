"""Insight lifecycle state machine.

pending --classify(passed)--> triaged_passed --generate--> actioned
pending --classify(research_needed)--> triaged_research
pending --classify(rejected)--> triaged_rejected

Nothing transitions back to pending. Manual status overrides are handled
separately by ``override_triage_status`` and bypass the machine.
"""

from enum import Enum
from typing import Dict, Tuple, Union

from contracts import InsightState, TriageResult, TriageStatus


class InvalidTransitionError(ValueError):
    """Raised when an event is not allowed in the current lifecycle state."""

    def __init__(self, state: InsightState, event: "LifecycleEvent"):
        self.state = state
        self.event = event
        super().__init__(f"Cannot apply '{event.value}' to an insight in state '{state.value}'")


class LifecycleEvent(str, Enum):
    CLASSIFIED_PASSED = "classified_passed"
    CLASSIFIED_RESEARCH = "classified_research_needed"
    CLASSIFIED_REJECTED = "classified_rejected"
    ACTIONS_GENERATED = "actions_generated"


TRANSITIONS: Dict[Tuple[InsightState, LifecycleEvent], InsightState] = {
    (InsightState.PENDING, LifecycleEvent.CLASSIFIED_PASSED): InsightState.TRIAGED_PASSED,
    (InsightState.PENDING, LifecycleEvent.CLASSIFIED_RESEARCH): InsightState.TRIAGED_RESEARCH,
    (InsightState.PENDING, LifecycleEvent.CLASSIFIED_REJECTED): InsightState.TRIAGED_REJECTED,
    (InsightState.TRIAGED_PASSED, LifecycleEvent.ACTIONS_GENERATED): InsightState.ACTIONED,
}

_CLASSIFY_EVENTS = {
    TriageStatus.PASSED: LifecycleEvent.CLASSIFIED_PASSED,
    TriageStatus.RESEARCH_NEEDED: LifecycleEvent.CLASSIFIED_RESEARCH,
    TriageStatus.REJECTED: LifecycleEvent.CLASSIFIED_REJECTED,
}

_STATUS_STATES = {
    TriageStatus.PENDING: InsightState.PENDING,
    TriageStatus.PASSED: InsightState.TRIAGED_PASSED,
    TriageStatus.RESEARCH_NEEDED: InsightState.TRIAGED_RESEARCH,
    TriageStatus.REJECTED: InsightState.TRIAGED_REJECTED,
}


def transition(state: Union[InsightState, str], event: Union[LifecycleEvent, str]) -> InsightState:
    """Apply ``event`` to ``state``.

    Raises:
        InvalidTransitionError: If the event is not allowed from ``state``
        ValueError: If state or event is not a known value
    """
    state = InsightState(state)
    event = LifecycleEvent(event)
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(state, event) from None


def classification_event(status: Union[TriageStatus, str]) -> LifecycleEvent:
    """Event emitted when triage produces ``status``.

    Raises:
        ValueError: For PENDING, which triage never produces
    """
    status = TriageStatus(status)
    if status not in _CLASSIFY_EVENTS:
        raise ValueError(f"Triage cannot produce status '{status.value}'")
    return _CLASSIFY_EVENTS[status]


def state_for_status(status: Union[TriageStatus, str]) -> InsightState:
    return _STATUS_STATES[TriageStatus(status)]


def is_terminal(state: Union[InsightState, str]) -> bool:
    state = InsightState(state)
    return not any(source == state for source, _ in TRANSITIONS)


def override_triage_status(result: TriageResult, status: Union[TriageStatus, str]) -> TriageResult:
    """Manually set a triage status, bypassing the (clarity, score) rule.

    Args:
        result: Triage result to override
        status: One of pending, passed, rejected, research_needed

    Returns:
        Copy of ``result`` carrying the new status

    Raises:
        ValueError: If status is not one of the accepted values
    """
    try:
        status = TriageStatus(status)
    except ValueError:
        raise ValueError(
            f"Invalid triage status '{status}'. "
            f"Must be one of: {', '.join(s.value for s in TriageStatus)}"
        ) from None
    # model_copy skips validation, so the status rule does not reassert itself
    return result.model_copy(update={"triage_status": status})
