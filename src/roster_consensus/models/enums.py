"""Enumeration types for roster-consensus.

This module defines all enum types used throughout the consensus engine,
including evaluator roles, recommendations, and consensus outcomes.
"""

from enum import Enum

__all__ = [
    "AgentRole",
    "ConfidenceBand",
    "ConsensusStatus",
    "DecisionStatus",
    "DecisionType",
    "EvidenceImpact",
    "EvidenceType",
    "FinalDecision",
    "QuickActionType",
    "Recommendation",
    "SummaryRecommendation",
]


class AgentRole(str, Enum):
    """Role of a domain evaluator in the panel.

    Attributes:
        compliance: Labor-law compliance guardian.
        cost_optimizer: Labor cost and budget analyst.
        employee_advocate: Employee welfare and preference advocate.
        operations: Coverage and operational continuity expert.
    """

    compliance = "compliance"
    cost_optimizer = "cost_optimizer"
    employee_advocate = "employee_advocate"
    operations = "operations"


class DecisionType(str, Enum):
    """Kind of roster decision being evaluated.

    Attributes:
        shift_assignment: Assign one shift to one employee.
        schedule_creation: Create a batch of assignments.
        shift_swap: Exchange shifts between two employees.
        schedule_optimization: Reassign existing shifts to save cost.
        conflict_resolution: Resolve a reported roster conflict.
        compliance_override: Request an exception to a compliance rule.
    """

    shift_assignment = "shift_assignment"
    schedule_creation = "schedule_creation"
    shift_swap = "shift_swap"
    schedule_optimization = "schedule_optimization"
    conflict_resolution = "conflict_resolution"
    compliance_override = "compliance_override"


class Recommendation(str, Enum):
    """An evaluator's vote on a proposal.

    Attributes:
        approve: Accept the proposal as is.
        approve_with_conditions: Accept, subject to stated conditions.
        needs_modification: Counted as an abstention.
        reject: Refuse the proposal.
    """

    approve = "approve"
    approve_with_conditions = "approve_with_conditions"
    needs_modification = "needs_modification"
    reject = "reject"

    @property
    def is_approval(self) -> bool:
        """Whether this recommendation counts as a vote for."""
        return self in (Recommendation.approve, Recommendation.approve_with_conditions)


class ConsensusStatus(str, Enum):
    """Outcome class of the weighted vote.

    Attributes:
        unanimous_approve: Every weighted vote is an approval.
        majority_approve: Approval weight reached the majority threshold.
        unanimous_reject: Every weighted vote is a rejection.
        majority_reject: Rejection weight reached the majority threshold.
        deadlock: No side reached the threshold and escalation is disabled.
        escalate: Handed to a human reviewer.
    """

    unanimous_approve = "unanimous_approve"
    majority_approve = "majority_approve"
    unanimous_reject = "unanimous_reject"
    majority_reject = "majority_reject"
    deadlock = "deadlock"
    escalate = "escalate"


class FinalDecision(str, Enum):
    """Final decision attached to a consensus result.

    Attributes:
        approve: Proposal accepted.
        reject: Proposal refused.
        escalate: Human review required.
    """

    approve = "approve"
    reject = "reject"
    escalate = "escalate"


class EvidenceType(str, Enum):
    """Source category of an evidence reference.

    Attributes:
        rule: A statutory or policy rule.
        data: An observed fact from roster data.
        preference: An employee preference.
        calculation: A derived figure.
        pattern: A pattern in past or planned shifts.
        risk: A forward-looking risk.
    """

    rule = "rule"
    data = "data"
    preference = "preference"
    calculation = "calculation"
    pattern = "pattern"
    risk = "risk"


class EvidenceImpact(str, Enum):
    """Direction in which an evidence reference moved a score.

    Attributes:
        positive: Supports the proposal.
        negative: Counts against the proposal.
        neutral: Informational only.
    """

    positive = "positive"
    negative = "negative"
    neutral = "neutral"


class DecisionStatus(str, Enum):
    """Review lifecycle of a transparent decision.

    Attributes:
        pending_review: Produced by the engine, awaiting a human.
        modified: A human has edited component scores.
        approved: A human accepted the decision.
        rejected: A human refused the decision.
    """

    pending_review = "pending_review"
    modified = "modified"
    approved = "approved"
    rejected = "rejected"


class SummaryRecommendation(str, Enum):
    """Recommendation shown in a decision summary.

    Attributes:
        approve: The panel recommends approval.
        reject: The panel recommends rejection.
        needs_review: The panel could not decide.
    """

    approve = "approve"
    reject = "reject"
    needs_review = "needs_review"


class ConfidenceBand(str, Enum):
    """Coarse confidence label derived from average confidence.

    Attributes:
        high: Average confidence of at least 80.
        medium: Average confidence of at least 60.
        low: Anything lower.
    """

    high = "high"
    medium = "medium"
    low = "low"


class QuickActionType(str, Enum):
    """Action offered to the reviewer of a decision.

    Attributes:
        approve: Approve the proposal as is.
        reject: Reject the proposal.
        modify: Edit component scores.
        request_alternative: Ask for a different proposal.
    """

    approve = "approve"
    reject = "reject"
    modify = "modify"
    request_alternative = "request_alternative"
