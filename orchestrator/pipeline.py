"""Insight pipeline: triage, then action generation and RICE scoring for passed insights.

The pipeline does no I/O of its own beyond what the configured classifier and
generator do; storing the returned action records is the caller's job.
"""

import logging
import random
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from actions.generator import ActionGenerator, HeuristicActionGenerator
from config import Settings, settings as default_settings
from contracts import (
    ActionGenerationResult,
    ActionRecord,
    AIAnalysis,
    Insight,
    InsightSource,
    InsightState,
    ProjectContext,
    RICEScore,
    TriageResult,
)
from orchestrator.lifecycle import LifecycleEvent, classification_event, transition
from scoring.rice import RICEScorer
from triage.classifier import HeuristicTriageClassifier, TriageClassifier

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    """Everything produced for one insight."""
    insight: Insight
    triage: TriageResult
    state: InsightState
    rice: Optional[RICEScore] = Field(None, description="Insight-level RICE score, set when passed")
    generation: Optional[ActionGenerationResult] = None
    actions: List[ActionRecord] = Field(default_factory=list)

    @property
    def actioned(self) -> bool:
        return self.state == InsightState.ACTIONED


class InsightPipeline:
    """Runs an insight through triage and, if it passes, action generation."""

    def __init__(
        self,
        classifier: Optional[TriageClassifier] = None,
        generator: Optional[ActionGenerator] = None,
        scorer: Optional[RICEScorer] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the pipeline.

        Args:
            classifier: Triage classifier (heuristic by default)
            generator: Action generator (heuristic by default)
            scorer: RICE scorer for the insight-level score
            rng: Randomness source for the default heuristic generator
        """
        self.scorer = scorer or RICEScorer()
        self.classifier = classifier or HeuristicTriageClassifier()
        self.generator = generator or HeuristicActionGenerator(rng=rng, scorer=self.scorer)

    def triage(
        self,
        text: str,
        source: Union[InsightSource, str],
        project: Optional[ProjectContext] = None,
    ) -> PipelineResult:
        """Validate and classify an insight without generating actions.

        Raises:
            pydantic.ValidationError: If text is empty or source is unknown
        """
        insight = Insight(
            text=text,
            source=source,
            project_name=project.name if project else None,
        )
        result = self.classifier.classify(insight.text, insight.source, project)
        insight = insight.model_copy(update={"clarity": result.clarity, "impact": result.impact})
        state = transition(InsightState.PENDING, classification_event(result.triage_status))

        logger.debug(
            "Insight triaged: status=%s score=%d fallback=%s",
            result.triage_status.value, result.score, result.fallback,
        )
        return PipelineResult(insight=insight, triage=result, state=state)

    def process(
        self,
        text: str,
        source: Union[InsightSource, str],
        project: Optional[ProjectContext] = None,
        insight_id: Optional[str] = None,
        generate: bool = True,
    ) -> PipelineResult:
        """Triage an insight and, when it passes, generate and score actions.

        Args:
            text: Insight text
            source: Insight source
            project: Optional project context
            insight_id: Identifier copied onto every action record
            generate: Set False to stop after triage

        Returns:
            PipelineResult; ``actions`` is empty unless the insight passed triage

        Raises:
            pydantic.ValidationError: If text is empty or source is unknown
        """
        result = self.triage(text, source, project)
        if not generate or not result.triage.passed:
            return result

        insight = result.insight
        rice = self.scorer.score(insight.impact, insight.source, insight.clarity, project)
        generation = self.generator.generate_result(
            insight.text, insight.source, insight.impact, project, insight.clarity
        )
        analysis = AIAnalysis(
            full_reasoning=generation.full_reasoning,
            key_insights=generation.key_insights,
            potential_challenges=generation.potential_challenges,
        )
        records = [
            ActionRecord.from_candidate(
                candidate,
                insight_id=insight_id,
                category_area=generation.category_area,
                siblings=generation.actions,
                analysis=analysis,
            )
            for candidate in generation.actions
        ]
        state = transition(result.state, LifecycleEvent.ACTIONS_GENERATED)

        logger.debug(
            "Generated %d action(s); top priority score %d",
            len(records), max(r.priority_score for r in records),
        )
        return result.model_copy(
            update={"state": state, "rice": rice, "generation": generation, "actions": records}
        )


def build_pipeline(
    config: Optional[Settings] = None,
    use_ai_triage: Optional[bool] = None,
    use_ai_actions: Optional[bool] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> InsightPipeline:
    """Build a pipeline with heuristic or AI-backed capabilities.

    Explicit arguments override the corresponding settings.
    """
    config = config or default_settings
    use_ai_triage = config.use_ai_triage if use_ai_triage is None else use_ai_triage
    use_ai_actions = config.use_ai_actions if use_ai_actions is None else use_ai_actions
    model = model or config.ai_model
    # A bare model name picks its provider by prefix
    if not provider and not model:
        provider = config.ai_provider

    classifier = None
    generator = None
    if use_ai_triage:
        from agents.triage_agent import AITriageClassifier

        classifier = AITriageClassifier(model=model, provider=provider)
    if use_ai_actions:
        from agents.action_agent import AIActionGenerator

        generator = AIActionGenerator(model=model, provider=provider)

    return InsightPipeline(classifier=classifier, generator=generator, rng=rng)
