"""Batch evaluation results."""

from pydantic import Field

from roster_consensus.models.base import BaseSchema
from roster_consensus.models.consensus import ConsensusResult

__all__ = [
    "BatchEvaluationResult",
    "BatchFailure",
    "BatchSummary",
]


class BatchSummary(BaseSchema):
    """Counts over a batch of evaluated proposals.

    ``total_proposals`` counts every input; the outcome counts only cover
    proposals that evaluated successfully.

    Attributes:
        total_proposals: Number of proposals submitted.
        approved: Successful evaluations with final decision approve.
        rejected: Successful evaluations with final decision reject.
        needs_review: Successful evaluations that escalated.
        average_score: Rounded mean consensus score over successes.

    """

    total_proposals: int = Field(..., ge=0)
    approved: int = Field(default=0, ge=0)
    rejected: int = Field(default=0, ge=0)
    needs_review: int = Field(default=0, ge=0)
    average_score: int = Field(default=0, ge=0, le=100)


class BatchFailure(BaseSchema):
    """A proposal that failed to evaluate."""

    index: int = Field(..., ge=0)
    user_id: str
    error: str


class BatchEvaluationResult(BaseSchema):
    """Per-proposal results plus summary for a batch run.

    Attributes:
        decisions: Successful results keyed by their proposal index.
        summary: Aggregate counts.
        failures: Proposals that could not be evaluated.

    """

    decisions: dict[int, ConsensusResult] = Field(default_factory=dict)
    summary: BatchSummary
    failures: list[BatchFailure] = Field(default_factory=list)
