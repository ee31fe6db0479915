"""Models module for roster-consensus.

This module contains data models organized by domain:
- base: BaseSchema and FrozenSchema for Pydantic models
- enums: AgentRole, Recommendation, ConsensusStatus and friends
- config: ComplianceConfig, ConsensusConfig
- roster: Shift, EmployeePreference, CoverageGoal
- proposal: the Proposal tagged union
- context: DecisionContext
- evidence: EvidenceReference, ScoringComponent, AgentPersona
- decision: AgentDecision and debate records
- consensus: requests, results and audit records
- transparent: the human-editable decision ledger
- batch: batch evaluation results
"""

from roster_consensus.models.base import BaseSchema, FrozenSchema
from roster_consensus.models.batch import (
    BatchEvaluationResult,
    BatchFailure,
    BatchSummary,
)
from roster_consensus.models.config import (
    ComplianceConfig,
    ConsensusConfig,
    ConsensusConfigOverride,
)
from roster_consensus.models.consensus import (
    AgentAuditSummary,
    AuditRecord,
    ConsensusRequest,
    ConsensusResponse,
    ConsensusResult,
)
from roster_consensus.models.context import DecisionContext
from roster_consensus.models.decision import (
    AgentDebateResponse,
    AgentDecision,
    DebateResponse,
    DebateRound,
)
from roster_consensus.models.enums import (
    AgentRole,
    ConfidenceBand,
    ConsensusStatus,
    DecisionStatus,
    DecisionType,
    EvidenceImpact,
    EvidenceType,
    FinalDecision,
    QuickActionType,
    Recommendation,
    SummaryRecommendation,
)
from roster_consensus.models.evidence import (
    AgentPersona,
    EvidenceReference,
    ScoringComponent,
)
from roster_consensus.models.proposal import (
    OptimizationChange,
    Proposal,
    ScheduleAssignment,
    ScheduleCreation,
    ScheduleOptimization,
    ShiftAssignment,
    ShiftSwap,
)
from roster_consensus.models.roster import (
    CoverageGoal,
    EmployeePreference,
    RosterInfo,
    Shift,
)
from roster_consensus.models.transparent import (
    AgentEvaluation,
    ComponentEdit,
    DecisionSummary,
    EditableComponent,
    QuickAction,
    TransparentDecision,
)

__all__ = [
    "AgentAuditSummary",
    "AgentDebateResponse",
    "AgentDecision",
    "AgentEvaluation",
    "AgentPersona",
    "AgentRole",
    "AuditRecord",
    "BaseSchema",
    "BatchEvaluationResult",
    "BatchFailure",
    "BatchSummary",
    "ComplianceConfig",
    "ComponentEdit",
    "ConfidenceBand",
    "ConsensusConfig",
    "ConsensusConfigOverride",
    "ConsensusRequest",
    "ConsensusResponse",
    "ConsensusResult",
    "ConsensusStatus",
    "CoverageGoal",
    "DebateResponse",
    "DebateRound",
    "DecisionContext",
    "DecisionStatus",
    "DecisionSummary",
    "DecisionType",
    "EditableComponent",
    "EmployeePreference",
    "EvidenceImpact",
    "EvidenceReference",
    "EvidenceType",
    "FinalDecision",
    "FrozenSchema",
    "OptimizationChange",
    "Proposal",
    "QuickAction",
    "QuickActionType",
    "Recommendation",
    "RosterInfo",
    "ScheduleAssignment",
    "ScheduleCreation",
    "ScheduleOptimization",
    "ScoringComponent",
    "Shift",
    "ShiftAssignment",
    "ShiftSwap",
    "SummaryRecommendation",
    "TransparentDecision",
]
