"""Consensus service: the engine's single entry point.

A request flows through four phases: the context is built from the data
source, every evaluator scores the proposal, the panel debates, and the
aggregator takes the weighted vote. The quick path returns a
ConsensusResponse and never raises; the review path returns an editable
TransparentDecision and lets failures propagate.
"""

import math
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from roster_consensus.config.settings import get_settings
from roster_consensus.core.aggregator import ConsensusAggregator
from roster_consensus.core.context_builder import DecisionContextBuilder
from roster_consensus.core.debate.coordinator import DebateCoordinator
from roster_consensus.core.evaluators.registry import EvaluatorRegistry
from roster_consensus.core.evaluators.shift_math import round_half_up
from roster_consensus.core.ledger import DecisionLedger
from roster_consensus.core.lifecycle import DecisionLifecycle
from roster_consensus.logging_config import decision_context, get_logger
from roster_consensus.models.batch import (
    BatchEvaluationResult,
    BatchFailure,
    BatchSummary,
)
from roster_consensus.models.config import ComplianceConfig, ConsensusConfig
from roster_consensus.models.consensus import (
    AgentAuditSummary,
    AuditRecord,
    ConsensusRequest,
    ConsensusResponse,
    ConsensusResult,
)
from roster_consensus.models.enums import DecisionStatus, DecisionType, FinalDecision
from roster_consensus.models.evidence import AgentPersona
from roster_consensus.models.proposal import ShiftAssignment
from roster_consensus.models.transparent import ComponentEdit, TransparentDecision
from roster_consensus.storage.interfaces import AuditSink, RosterDataSource

__all__ = ["ConsensusService"]

logger = get_logger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class ConsensusService:
    """Orchestrates context building, evaluation, debate and voting.

    Unset collaborators and configuration fall back to ``get_settings()``.

    Attributes:
        data_source: Where roster data is read from.
        audit_sink: Where audit records are written; None disables auditing.
        consensus_config: Service-wide consensus configuration.
        compliance_config: Statutory limits placed into every context.
        registry: Evaluator panel.
        clock: Source of evaluation timestamps.
        retention_days: Days audit records are retained.

    """

    def __init__(
        self,
        data_source: RosterDataSource,
        audit_sink: AuditSink | None = None,
        consensus_config: ConsensusConfig | None = None,
        compliance_config: ComplianceConfig | None = None,
        registry: EvaluatorRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
        retention_days: int | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            data_source: Where roster data is read from.
            audit_sink: Where audit records are written.
            consensus_config: Service-wide consensus configuration.
            compliance_config: Statutory limits.
            registry: Evaluator panel; the four standard evaluators by default.
            clock: Source of evaluation timestamps; ``datetime.now`` by default.
            retention_days: Days audit records are retained.

        """
        settings = get_settings()
        self.data_source = data_source
        self.audit_sink = audit_sink
        self.consensus_config = consensus_config or settings.consensus.to_config()
        self.compliance_config = compliance_config or settings.compliance.to_config()
        self.registry = registry or EvaluatorRegistry.default(settings.cost)
        self.clock = clock or datetime.now
        self.retention_days = retention_days or settings.audit.retention_days
        self.context_builder = DecisionContextBuilder(
            data_source, self.compliance_config, self.clock
        )
        self.ledger = DecisionLedger(self.registry, self.consensus_config)

    def agents(self) -> list[AgentPersona]:
        """Return the panel's personas with their configured vote weights."""
        return self.registry.personas(self.consensus_config)

    async def get_consensus(self, request: ConsensusRequest) -> ConsensusResponse:
        """Evaluate a request on the quick path.

        Args:
            request: The consensus request.

        Returns:
            A successful response with the result and audit id, or an
            unsuccessful one carrying the error message.

        """
        with decision_context(request.decision_type.value, request.roster_id):
            return await self._get_consensus(request)

    async def _get_consensus(self, request: ConsensusRequest) -> ConsensusResponse:
        started = time.perf_counter()
        logger.info("consensus_started")
        try:
            config = self.consensus_config.merged(request.config)
            context = await self.context_builder.build(request)
            decisions = await self.registry.evaluate_all(context)
            outcome = await DebateCoordinator(config).run(
                context, self.registry.evaluators, decisions
            )
            result = ConsensusAggregator(config).calculate(
                outcome.final_decisions,
                outcome.rounds,
                request.decision_type,
                evaluated_at=context.as_of,
                duration_ms=_elapsed_ms(started),
            )
            audit_id = await self._audit(request, result)
        except Exception as e:
            logger.error(
                "consensus_failed",
                error=str(e),
            )
            return ConsensusResponse(success=False, error=str(e) or type(e).__name__)

        logger.info(
            "consensus_completed",
            status=result.status.value,
            final_decision=result.final_decision.value,
            total_rounds=result.total_rounds,
            duration_ms=result.evaluation_duration_ms,
        )
        return ConsensusResponse(success=True, result=result, audit_id=audit_id)

    async def get_transparent_decision(
        self, request: ConsensusRequest
    ) -> TransparentDecision:
        """Evaluate a request on the review path.

        Args:
            request: The consensus request.

        Returns:
            An editable decision in pending_review.

        Raises:
            RosterNotFoundError: If the request names an unknown roster.
            ValidationError: If the merged configuration is invalid.

        """
        with decision_context(request.decision_type.value, request.roster_id):
            started = time.perf_counter()
            config = self.consensus_config.merged(request.config)
            context = await self.context_builder.build(request)
            decisions = await self.registry.evaluate_all(context)
            components = [
                e.get_scoring_components(context) for e in self.registry.evaluators
            ]
            outcome = await DebateCoordinator(config).run(
                context, self.registry.evaluators, decisions
            )
            result = ConsensusAggregator(config).calculate(
                outcome.final_decisions,
                outcome.rounds,
                request.decision_type,
                evaluated_at=context.as_of,
                duration_ms=_elapsed_ms(started),
            )
            decision = self.ledger.build(
                request.decision_type,
                request.proposal,
                components,
                outcome.final_decisions,
                result,
                created_at=context.as_of,
                config=config,
            )
            logger.info(
                "transparent_decision_created",
                decision_id=decision.id,
                component_count=len(decision.editable_components),
                final_decision=result.final_decision.value,
            )
            return decision

    def apply_user_edits(
        self, decision: TransparentDecision, edits: Sequence[ComponentEdit]
    ) -> TransparentDecision:
        """Apply reviewer edits and recompute the consensus."""
        return self.ledger.apply_edits(decision, edits)

    def approve(
        self,
        decision: TransparentDecision,
        reviewed_by: str | None = None,
        note: str | None = None,
    ) -> TransparentDecision:
        """Mark a decision approved by a reviewer."""
        return DecisionLifecycle(decision).transition_to(
            DecisionStatus.approved, reviewed_by=reviewed_by, note=note
        )

    def reject(
        self,
        decision: TransparentDecision,
        reason: str,
        reviewed_by: str | None = None,
    ) -> TransparentDecision:
        """Mark a decision rejected by a reviewer."""
        return DecisionLifecycle(decision).transition_to(
            DecisionStatus.rejected, reviewed_by=reviewed_by, note=reason
        )

    async def batch_evaluate(
        self,
        roster_id: str,
        proposals: Sequence[ShiftAssignment],
        requested_by: str | None = None,
    ) -> BatchEvaluationResult:
        """Evaluate candidate assignments one by one.

        A failing proposal is logged and recorded as a failure; it does not
        stop the batch and does not count towards the outcome totals.

        Args:
            roster_id: Roster every proposal belongs to.
            proposals: Candidate assignments.
            requested_by: Requesting user.

        Returns:
            Results keyed by proposal index, summary and failures.

        """
        decisions: dict[int, ConsensusResult] = {}
        failures: list[BatchFailure] = []

        for index, proposal in enumerate(proposals):
            response = await self.get_consensus(
                ConsensusRequest(
                    decision_type=DecisionType.shift_assignment,
                    proposal=proposal,
                    roster_id=roster_id,
                    requested_by=requested_by,
                )
            )
            if response.success and response.result is not None:
                decisions[index] = response.result
                continue

            logger.warning(
                "batch_proposal_failed",
                index=index,
                user_id=proposal.user_id,
                error=response.error,
            )
            failures.append(
                BatchFailure(
                    index=index,
                    user_id=proposal.user_id,
                    error=response.error or "Unknown error during consensus",
                )
            )

        results = list(decisions.values())
        summary = BatchSummary(
            total_proposals=len(proposals),
            approved=sum(1 for r in results if r.final_decision == FinalDecision.approve),
            rejected=sum(1 for r in results if r.final_decision == FinalDecision.reject),
            needs_review=sum(
                1 for r in results if r.final_decision == FinalDecision.escalate
            ),
            average_score=(
                round_half_up(math.fsum(r.consensus_score for r in results) / len(results))
                if results
                else 0
            ),
        )

        logger.info(
            "batch_completed",
            roster_id=roster_id,
            total=summary.total_proposals,
            failed=len(failures),
        )
        return BatchEvaluationResult(decisions=decisions, summary=summary, failures=failures)

    async def _audit(
        self, request: ConsensusRequest, result: ConsensusResult
    ) -> str | None:
        if self.audit_sink is None:
            return None
        now = self.clock()
        record = AuditRecord(
            decision_type=request.decision_type,
            proposal=request.proposal.model_dump(mode="json"),
            result={
                "status": result.status.value,
                "final_decision": result.final_decision.value,
                "votes_for": result.votes_for,
                "votes_against": result.votes_against,
                "consensus_score": result.consensus_score,
                "confidence_level": result.confidence_level,
            },
            agent_summaries=[
                AgentAuditSummary(
                    role=d.agent_role,
                    recommendation=d.effective_recommendation,
                    score=d.score,
                )
                for d in result.agent_decisions
            ],
            roster_id=request.roster_id,
            requested_by=request.requested_by,
            created_at=now,
            retain_until=now + timedelta(days=self.retention_days),
        )
        return await self.audit_sink.write(record)
