"""Insight, project context and triage contracts."""

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from enum import Enum


class InsightSource(str, Enum):
    """Where an insight came from."""
    USER_FEEDBACK = "user_feedback"
    TEAM_OBSERVATION = "team_observation"
    ASSUMPTION_IDEA = "assumption_idea"


class Clarity(str, Enum):
    """How well-articulated an insight is."""
    CLEAR = "clear"
    VAGUE = "vague"


class InsightImpact(str, Enum):
    """Impact category assigned during triage."""
    CORE_EXPERIENCE = "core_experience"
    IMPROVE_EXPERIENCE = "improve_experience"
    NICE_TO_HAVE = "nice_to_have"


class TriageStatus(str, Enum):
    """Outcome of triage. PENDING is only ever stored, never computed."""
    PENDING = "pending"
    PASSED = "passed"
    RESEARCH_NEEDED = "research_needed"
    REJECTED = "rejected"


class UserSentiment(str, Enum):
    """Emotional tone of an insight, as judged by the AI triage path."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class InsightState(str, Enum):
    """Lifecycle state of an insight as driven by triage and action generation."""
    PENDING = "pending"
    TRIAGED_PASSED = "triaged_passed"
    TRIAGED_RESEARCH = "triaged_research"
    TRIAGED_REJECTED = "triaged_rejected"
    ACTIONED = "actioned"


class ProjectContext(BaseModel):
    """Read-only project data used to bias scores and match keywords."""
    name: str = Field(..., min_length=1, max_length=100, description="Project name")
    details: str = Field("", description="Free-form project details")
    value_proposition: Optional[str] = Field(None, max_length=500)
    north_star_objective: Optional[str] = Field(None, max_length=300)
    core_features: List[str] = Field(default_factory=list)
    ideal_customer_profile: Optional[str] = Field(None, max_length=300)
    current_business_objectives: List[str] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    @field_validator("core_features", "current_business_objectives", mode="before")
    @classmethod
    def drop_blank_entries(cls, value):
        if value is None:
            return []
        return [str(v).strip() for v in value if v is not None and str(v).strip()]

    @field_validator("value_proposition", "north_star_objective", "ideal_customer_profile", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @property
    def has_north_star(self) -> bool:
        return bool(self.north_star_objective)

    @property
    def has_core_features(self) -> bool:
        return bool(self.core_features)

    @property
    def has_business_objectives(self) -> bool:
        return bool(self.current_business_objectives)


class Insight(BaseModel):
    """A raw piece of feedback, observation or idea under evaluation.

    ``clarity`` and ``impact`` stay unset until the triage classifier fills them
    in; after that they are treated as fixed inputs to scoring. The model is
    frozen, so triage results are applied with ``model_copy``.
    """
    model_config = {"frozen": True}

    text: str = Field(..., description="Free-form description of the insight")
    source: InsightSource = Field(..., description="Origin of the insight")
    clarity: Optional[Clarity] = Field(None, description="Set by triage")
    impact: Optional[InsightImpact] = Field(None, description="Set by triage")
    project_name: Optional[str] = Field(None, description="Owning project, if any")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Insight text is required")
        return value

    @property
    def is_triaged(self) -> bool:
        return self.clarity is not None and self.impact is not None


class TriageResult(BaseModel):
    """Classification produced by a triage classifier."""
    clarity: Clarity
    impact: InsightImpact
    score: int = Field(..., ge=0, description="Triage score")
    triage_status: TriageStatus = Field(TriageStatus.REJECTED)
    explanation: str = Field("", description="Human-readable reasoning")

    contextual_relevance: float = Field(50, ge=0, le=100)
    innovation_potential: float = Field(50, ge=0, le=100)
    urgency: float = Field(50, ge=0, le=100)
    user_sentiment: UserSentiment = UserSentiment.NEUTRAL
    primary_domain: Optional[str] = None
    affected_features: List[str] = Field(default_factory=list)

    fallback: bool = Field(False, description="True when produced by the failure fallback")

    @model_validator(mode="after")
    def enforce_status_rule(self) -> "TriageResult":
        """Recompute the status from (clarity, score); fallback results keep their fixed status."""
        if self.fallback:
            return self
        from triage.rules import derive_triage_status

        expected = derive_triage_status(self.clarity, self.score)
        if self.triage_status != expected:
            object.__setattr__(self, "triage_status", expected)
        return self

    @property
    def passed(self) -> bool:
        return self.triage_status == TriageStatus.PASSED
