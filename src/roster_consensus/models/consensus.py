"""Consensus requests, results and audit records."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import Field, model_validator

from roster_consensus.models.base import BaseSchema
from roster_consensus.models.config import ConsensusConfigOverride
from roster_consensus.models.decision import AgentDecision, DebateRound
from roster_consensus.models.enums import (
    AgentRole,
    ConsensusStatus,
    DecisionType,
    FinalDecision,
    Recommendation,
)
from roster_consensus.models.proposal import Proposal

__all__ = [
    "AgentAuditSummary",
    "AuditRecord",
    "ConsensusRequest",
    "ConsensusResponse",
    "ConsensusResult",
]

_PROPOSAL_DECISION_TYPES = frozenset(
    {"shift_assignment", "schedule_creation", "shift_swap", "schedule_optimization"}
)


class ConsensusRequest(BaseSchema):
    """Input to the consensus service.

    Attributes:
        decision_type: Kind of decision requested.
        proposal: The proposed roster change.
        roster_id: Roster to load context from; omit for a context-free run.
        config: Per-request consensus configuration overrides.
        requested_by: Identifier of the requesting user.

    """

    decision_type: DecisionType
    proposal: Proposal
    roster_id: str | None = None
    config: ConsensusConfigOverride | None = None
    requested_by: str | None = None

    @model_validator(mode="after")
    def validate_proposal_kind(self) -> "ConsensusRequest":
        """Ensure a proposal-specific decision type carries that proposal kind.

        conflict_resolution and compliance_override accept any proposal.

        """
        if (
            self.decision_type.value in _PROPOSAL_DECISION_TYPES
            and self.decision_type.value != self.proposal.type
        ):
            raise ValueError(
                f"decision_type '{self.decision_type.value}' requires a "
                f"'{self.decision_type.value}' proposal, got '{self.proposal.type}'"
            )
        return self


class ConsensusResult(BaseSchema):
    """Outcome of the weighted vote.

    Attributes:
        status: Outcome class of the vote.
        final_decision: approve, reject or escalate.
        votes_for: Evaluators recommending approve or approve_with_conditions.
        votes_against: Evaluators recommending reject.
        abstentions: Evaluators recommending needs_modification.
        agent_decisions: Decisions the vote was taken over.
        debate_rounds: Full debate history.
        total_rounds: Number of debate rounds held.
        consensus_score: Share of evaluators in the largest recommendation cluster.
        confidence_level: Average effective confidence of the panel.
        summary: Status-specific human-readable summary.
        key_reasons: Reasoning from non-rejecting evaluators.
        remaining_concerns: Concerns raised by any evaluator.
        conditions: Suggestions of approve_with_conditions evaluators.
        decision_type: Kind of decision evaluated.
        evaluated_at: When the evaluation ran.
        evaluation_duration_ms: Wall-clock duration of the evaluation.

    """

    status: ConsensusStatus
    final_decision: FinalDecision
    votes_for: int = Field(..., ge=0)
    votes_against: int = Field(..., ge=0)
    abstentions: int = Field(..., ge=0)
    agent_decisions: list[AgentDecision] = Field(default_factory=list)
    debate_rounds: list[DebateRound] = Field(default_factory=list)
    total_rounds: int = Field(default=0, ge=0)
    consensus_score: int = Field(..., ge=0, le=100)
    confidence_level: float = Field(..., ge=0, le=100)
    summary: str
    key_reasons: list[str] = Field(default_factory=list)
    remaining_concerns: list[str] = Field(default_factory=list)
    conditions: list[str] | None = None
    decision_type: DecisionType
    evaluated_at: datetime
    evaluation_duration_ms: int = Field(default=0, ge=0)


class ConsensusResponse(BaseSchema):
    """Envelope returned by ``ConsensusService.get_consensus``.

    Attributes:
        success: Whether an evaluation result was produced.
        result: The consensus result on success.
        audit_id: Identifier of the audit record, when one was written.
        error: Error message on failure.

    """

    success: bool
    result: ConsensusResult | None = None
    audit_id: str | None = None
    error: str | None = None


class AgentAuditSummary(BaseSchema):
    """Per-evaluator line in an audit record."""

    role: AgentRole
    recommendation: Recommendation
    score: int


class AuditRecord(BaseSchema):
    """Retained record of one consensus evaluation.

    Attributes:
        id: Audit record identifier.
        decision_type: Kind of decision evaluated.
        proposal: The evaluated proposal, as plain data.
        result: Condensed consensus outcome.
        agent_summaries: One line per evaluator.
        roster_id: Roster the proposal belongs to.
        requested_by: Requesting user.
        created_at: When the record was written.
        retain_until: Date after which the record may be purged.

    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    decision_type: DecisionType
    proposal: dict[str, Any]
    result: dict[str, Any]
    agent_summaries: list[AgentAuditSummary] = Field(default_factory=list)
    roster_id: str | None = None
    requested_by: str | None = None
    created_at: datetime
    retain_until: datetime
