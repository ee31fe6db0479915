"""Transparent, human-editable decisions.

A TransparentDecision exposes every evaluator's scoring components as
EditableComponents so a reviewer can override individual scores and see
the consensus recomputed without re-running the evaluators.
"""

from datetime import datetime

from pydantic import Field

from roster_consensus.models.base import BaseSchema
from roster_consensus.models.config import ConsensusConfig
from roster_consensus.models.consensus import ConsensusResult
from roster_consensus.models.decision import AgentDecision
from roster_consensus.models.enums import (
    AgentRole,
    ConfidenceBand,
    DecisionStatus,
    DecisionType,
    QuickActionType,
    Recommendation,
    SummaryRecommendation,
)
from roster_consensus.models.evidence import ScoringComponent
from roster_consensus.models.proposal import Proposal

__all__ = [
    "AgentEvaluation",
    "ComponentEdit",
    "DecisionSummary",
    "EditableComponent",
    "QuickAction",
    "TransparentDecision",
]


class AgentEvaluation(BaseSchema):
    """An evaluator's decision together with its scoring components.

    Attributes:
        agent_role: Role of the evaluator.
        agent_name: Display name of the evaluator.
        recommendation: Current recommendation.
        confidence: Current confidence.
        score: Current weighted score.
        scoring_components: Components as produced by the evaluator.
        reasoning: Explanations of well-scoring components.
        concerns: Explanations of poorly scoring components.
        suggestions: Evidence-derived suggestions.

    """

    agent_role: AgentRole
    agent_name: str
    recommendation: Recommendation
    confidence: int = Field(..., ge=0, le=100)
    score: int = Field(..., ge=0, le=100)
    scoring_components: list[ScoringComponent] = Field(default_factory=list)
    reasoning: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class EditableComponent(BaseSchema):
    """A scoring component exposed for human review.

    Attributes:
        id: Unique identifier used to address edits.
        agent_role: Evaluator that produced the component.
        component_index: Position in that evaluator's component list.
        component_name: Component display name.
        original_score: Score as produced by the evaluator.
        current_score: Score after any human edits.
        max_score: Upper bound of the score.
        weight: Relative weight within the evaluator.
        reasoning: Evaluator's explanation.
        evidence_references: Evidence rendered as "source: description".
        is_editable: Whether edits are permitted.
        user_modified: Whether a human changed the score.
        user_reason: Reason given with the latest edit.

    """

    id: str
    agent_role: AgentRole
    component_index: int = Field(..., ge=0)
    component_name: str
    original_score: float
    current_score: float
    max_score: float
    weight: float
    reasoning: str
    evidence_references: list[str] = Field(default_factory=list)
    is_editable: bool
    user_modified: bool = False
    user_reason: str | None = None


class ComponentEdit(BaseSchema):
    """A reviewer's override of one component score."""

    component_id: str = Field(..., min_length=1)
    new_score: float
    reason: str = Field(..., min_length=1)


class QuickAction(BaseSchema):
    """Action offered alongside a decision summary."""

    label: str
    action: QuickActionType
    description: str = ""


class DecisionSummary(BaseSchema):
    """Condensed, display-ready view of a consensus result.

    Attributes:
        headline: One-line verdict.
        recommendation: approve, reject or needs_review.
        confidence_level: high, medium or low.
        key_points: Leading reasoning lines pooled across evaluators.
        main_concerns: Leading concern lines pooled across evaluators.
        quick_actions: Actions offered to the reviewer.

    """

    headline: str
    recommendation: SummaryRecommendation
    confidence_level: ConfidenceBand
    key_points: list[str] = Field(default_factory=list)
    main_concerns: list[str] = Field(default_factory=list)
    quick_actions: list[QuickAction] = Field(default_factory=list)


class TransparentDecision(BaseSchema):
    """A consensus result with its full, editable scoring ledger.

    Attributes:
        id: Decision identifier.
        decision_type: Kind of decision evaluated.
        proposal: The evaluated proposal.
        agent_evaluations: Per-evaluator decisions and components.
        debated_decisions: Panel decisions as they stood after the debate;
            kept unchanged so edits can always be recomputed from them.
        consensus_result: Current consensus.
        editable_components: Flattened components across all evaluators.
        summary: Current display summary.
        created_at: When the decision was produced.
        status: Review lifecycle status.
        reviewed_by: Reviewer who approved or rejected the decision.
        review_note: Note left with the approval or rejection.
        consensus_config: Configuration the vote was taken under; edits are
            recomputed with it.

    """

    id: str
    decision_type: DecisionType
    proposal: Proposal
    agent_evaluations: list[AgentEvaluation] = Field(default_factory=list)
    debated_decisions: list[AgentDecision] = Field(default_factory=list)
    consensus_result: ConsensusResult
    editable_components: list[EditableComponent] = Field(default_factory=list)
    summary: DecisionSummary
    created_at: datetime
    status: DecisionStatus = DecisionStatus.pending_review
    reviewed_by: str | None = None
    review_note: str | None = None
    consensus_config: ConsensusConfig | None = None

    def component(self, component_id: str) -> EditableComponent | None:
        """Return the editable component with the given id, if present."""
        for component in self.editable_components:
            if component.id == component_id:
                return component
        return None

    def components_for(self, role: AgentRole) -> list[EditableComponent]:
        """Return one evaluator's components in their original order."""
        return sorted(
            (c for c in self.editable_components if c.agent_role == role),
            key=lambda c: c.component_index,
        )

    def component_named(
        self, role: AgentRole, component_name: str
    ) -> EditableComponent | None:
        """Return the first component of a role with the given name, if present."""
        for component in self.components_for(role):
            if component.component_name == component_name:
                return component
        return None
