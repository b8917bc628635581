"""Action contracts: candidate actions (1-10 scale) and persisted action records (1-3 scale)."""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional
from enum import Enum


class ActionStatus(str, Enum):
    """Workflow status of a persisted action."""
    PROPOSED = "proposed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class GeneratedBy(str, Enum):
    """Who created an action."""
    AI = "ai"
    HUMAN = "human"


class RICEScore(BaseModel):
    """RICE values on the persisted scale, as produced by the action scorer."""
    reach: int = Field(..., ge=0, le=100, description="Share of users reached (0-100)")
    impact: int = Field(..., ge=1, le=3, description="1-low, 2-medium, 3-high")
    confidence: int = Field(..., ge=0, le=100, description="Confidence percentage")
    effort: int = Field(..., ge=1, le=3, description="1-low, 2-medium, 3-high")
    priority_score: int = Field(..., ge=0, le=100, description="Normalized priority")


class CandidateRiceScoring(BaseModel):
    """RICE values on the candidate scale (impact and effort 1-10)."""
    reach: float = Field(..., ge=0, le=100)
    impact: float = Field(..., ge=1, le=10)
    confidence: float = Field(..., ge=0, le=100)
    effort: float = Field(..., ge=1, le=10)
    priority_score: float = Field(..., ge=0)


class CandidateAction(BaseModel):
    """One proposed action for a passed insight."""
    domain: str = Field(..., description="Topical bucket, e.g. product or technology")
    description: str = Field(..., min_length=1)
    rationale: str = Field("")
    rice_scoring: CandidateRiceScoring
    priority: float = Field(5, ge=0, le=10, description="Overall priority (0-10)")


class ActionEstimate(BaseModel):
    """Coarse estimates attached by the heuristic generator."""
    estimated_effort: int = Field(..., ge=1, le=3)
    potential_impact: int = Field(..., ge=1, le=10)
    action_priority: int = Field(..., ge=0, le=10)


class ActionGenerationResult(BaseModel):
    """Envelope returned by an action generator."""
    actions: List[CandidateAction] = Field(..., min_length=1)
    full_reasoning: str = Field("No detailed reasoning provided")
    key_insights: List[str] = Field(default_factory=list)
    potential_challenges: List[str] = Field(default_factory=list)
    category_area: Optional[str] = None
    estimate: Optional[ActionEstimate] = None
    fallback: bool = False

    def joined_description(self) -> str:
        """Single-string form of all descriptions, as the legacy action field expects."""
        return "; ".join(action.description for action in self.actions)


class AIAnalysis(BaseModel):
    """AI commentary stored alongside a persisted action."""
    full_reasoning: Optional[str] = None
    key_insights: List[str] = Field(default_factory=list)
    potential_challenges: List[str] = Field(default_factory=list)


class GeneratedActionSummary(BaseModel):
    """Condensed candidate stored on a persisted action."""
    domain: str
    description: str
    rationale: str = ""
    priority: float = 5


class ActionRecord(BaseModel):
    """Action as handed to the persistence layer.

    RICE inputs are clamped (with defaults for missing values) and the priority
    score is recomputed on every construction; a supplied priority score is
    never trusted. Records are frozen; use ``with_updates`` to change a field.
    """
    model_config = {"frozen": True}

    insight_id: Optional[str] = None
    description: str = Field(..., min_length=1, max_length=500)
    reach: float = Field(50, ge=0, le=100)
    impact: int = Field(1, ge=1, le=3)
    confidence: float = Field(70, ge=0, le=100)
    effort: int = Field(1, ge=1, le=3)
    priority_score: int = Field(0, ge=0, le=100)
    status: ActionStatus = ActionStatus.PROPOSED
    generated_by: GeneratedBy = GeneratedBy.AI
    ai_generated_actions: List[GeneratedActionSummary] = Field(default_factory=list)
    ai_analysis: Optional[AIAnalysis] = None
    category_area: Optional[str] = None
    business_priority: Optional[str] = None
    assigned_to: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def trim_description(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if len(value) > 500:
                value = value[:497].rstrip() + "..."
        return value

    @model_validator(mode="before")
    @classmethod
    def clamp_rice_inputs(cls, data: Any) -> Any:
        """Substitute defaults for missing values and clamp RICE inputs to range."""
        if not isinstance(data, dict):
            return data
        from scoring.normalize import normalize_rice_inputs

        data = dict(data)
        reach, impact, confidence, effort = normalize_rice_inputs(
            data.get("reach"), data.get("impact"), data.get("confidence"), data.get("effort")
        )
        data.update(reach=reach, impact=int(impact), confidence=confidence, effort=int(effort))
        return data

    @model_validator(mode="after")
    def recompute_priority(self) -> "ActionRecord":
        from scoring.rice import persisted_priority_score

        score = persisted_priority_score(self.reach, self.impact, self.confidence, self.effort)
        object.__setattr__(self, "priority_score", score)
        return self

    def with_updates(self, **changes: Any) -> "ActionRecord":
        """Return a copy with ``changes`` applied and the priority score recomputed."""
        data: Dict[str, Any] = self.model_dump()
        data.update(changes)
        data.pop("priority_score", None)
        return ActionRecord.model_validate(data)

    @classmethod
    def from_candidate(
        cls,
        candidate: CandidateAction,
        insight_id: Optional[str] = None,
        category_area: Optional[str] = None,
        siblings: Optional[List[CandidateAction]] = None,
        analysis: Optional[AIAnalysis] = None,
    ) -> "ActionRecord":
        """Map a 1-10 scale candidate onto the persisted 1-3 scale."""
        from scoring.rice import to_persisted_scale

        scoring = candidate.rice_scoring
        return cls(
            insight_id=insight_id,
            description=candidate.description,
            reach=scoring.reach,
            impact=to_persisted_scale(scoring.impact),
            confidence=scoring.confidence,
            effort=to_persisted_scale(scoring.effort),
            generated_by=GeneratedBy.AI,
            ai_generated_actions=[
                GeneratedActionSummary(
                    domain=c.domain,
                    description=c.description,
                    rationale=c.rationale,
                    priority=c.priority,
                )
                for c in (siblings or [candidate])
            ],
            ai_analysis=analysis,
            category_area=category_area or candidate.domain,
        )
