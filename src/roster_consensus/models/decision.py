"""Evaluator decisions and debate records."""

from datetime import datetime

from pydantic import Field

from roster_consensus.models.base import BaseSchema, FrozenSchema
from roster_consensus.models.enums import AgentRole, Recommendation

__all__ = [
    "AgentDebateResponse",
    "AgentDecision",
    "DebateResponse",
    "DebateRound",
]


class AgentDecision(FrozenSchema):
    """One evaluator's verdict on a proposal.

    The first-pass ``recommendation`` and ``confidence`` are never
    overwritten. A debate that changes the evaluator's position records the
    new values in ``revised_recommendation`` / ``revised_confidence``; the
    vote uses the ``effective_*`` properties.

    Attributes:
        agent_role: Role of the evaluator.
        agent_name: Display name of the evaluator.
        recommendation: First-pass recommendation.
        confidence: First-pass confidence, 0-100.
        score: Weighted score over the evaluator's components, 0-100.
        score_breakdown: Component name to component score.
        reasoning: Explanations of components that scored well.
        concerns: Explanations of components that scored below half.
        suggestions: Actionable suggestions derived from evidence.
        evaluated_at: When the decision was produced.
        agrees_with_previous_decisions: Set when the debate moved this evaluator.
        disagreement_points: Points the evaluator disputed during debate.
        revised_recommendation: Recommendation adopted during debate.
        revised_confidence: Confidence adopted during debate.

    """

    agent_role: AgentRole
    agent_name: str
    recommendation: Recommendation
    confidence: int = Field(..., ge=0, le=100)
    score: int = Field(..., ge=0, le=100)
    score_breakdown: dict[str, float] = Field(default_factory=dict)
    reasoning: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    evaluated_at: datetime
    agrees_with_previous_decisions: bool | None = None
    disagreement_points: list[str] = Field(default_factory=list)
    revised_recommendation: Recommendation | None = None
    revised_confidence: int | None = Field(default=None, ge=0, le=100)

    @property
    def effective_recommendation(self) -> Recommendation:
        """Recommendation after debate, falling back to the first pass."""
        return self.revised_recommendation or self.recommendation

    @property
    def effective_confidence(self) -> int:
        """Confidence after debate, falling back to the first pass."""
        if self.revised_confidence is None:
            return self.confidence
        return self.revised_confidence


class DebateResponse(FrozenSchema):
    """What an evaluator says when asked to respond in a debate round.

    Attributes:
        response: Free-text statement.
        changed_position: Whether the evaluator adopts a new position.
        new_recommendation: The adopted recommendation, when changed.
        new_confidence: The adopted confidence, when changed.

    """

    response: str
    changed_position: bool = False
    new_recommendation: Recommendation | None = None
    new_confidence: int | None = Field(default=None, ge=0, le=100)


class AgentDebateResponse(FrozenSchema):
    """A debate response attributed to an evaluator within a round."""

    agent_role: AgentRole
    response: str
    changed_position: bool
    new_recommendation: Recommendation | None = None


class DebateRound(BaseSchema):
    """Record of one debate round.

    Attributes:
        round_number: 1-based round index.
        topic: Topic the panel was asked to address.
        agent_responses: One response per evaluator, in panel order.
        consensus_reached: Whether the round ended the debate.
        resolution_summary: Summary when consensus was reached.

    """

    round_number: int = Field(..., ge=1)
    topic: str
    agent_responses: list[AgentDebateResponse] = Field(default_factory=list)
    consensus_reached: bool = False
    resolution_summary: str | None = None
