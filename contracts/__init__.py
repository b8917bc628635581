"""Pydantic contracts for InsightExtractor.

Every value passed between triage, scoring, generation and the
persistence layer is typed through these contracts.
"""

from .insight_contracts import (
    InsightSource,
    Clarity,
    InsightImpact,
    TriageStatus,
    UserSentiment,
    InsightState,
    ProjectContext,
    Insight,
    TriageResult,
)

from .action_contracts import (
    ActionStatus,
    GeneratedBy,
    RICEScore,
    CandidateRiceScoring,
    CandidateAction,
    ActionEstimate,
    ActionGenerationResult,
    AIAnalysis,
    GeneratedActionSummary,
    ActionRecord,
)

__all__ = [
    # Insight
    "InsightSource",
    "Clarity",
    "InsightImpact",
    "TriageStatus",
    "UserSentiment",
    "InsightState",
    "ProjectContext",
    "Insight",
    "TriageResult",
    # Action
    "ActionStatus",
    "GeneratedBy",
    "RICEScore",
    "CandidateRiceScoring",
    "CandidateAction",
    "ActionEstimate",
    "ActionGenerationResult",
    "AIAnalysis",
    "GeneratedActionSummary",
    "ActionRecord",
]
