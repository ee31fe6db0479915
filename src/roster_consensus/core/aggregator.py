"""Consensus aggregator: weighted vote over the panel's effective decisions.

Two numbers come out of the vote and they are kept apart. The weighted
approve and reject ratios decide the status; the consensus score measures
raw agreement as the share of evaluators in the largest recommendation
cluster and ignores vote weights.
"""

import math
from collections import Counter
from collections.abc import Sequence
from datetime import datetime

from roster_consensus.config.defaults import (
    MAX_CONDITIONS,
    MAX_KEY_REASONS,
    MAX_REMAINING_CONCERNS,
)
from roster_consensus.core.evaluators.shift_math import round_half_up
from roster_consensus.logging_config import get_logger
from roster_consensus.models.config import ConsensusConfig
from roster_consensus.models.consensus import ConsensusResult
from roster_consensus.models.decision import AgentDecision, DebateRound
from roster_consensus.models.enums import (
    ConsensusStatus,
    DecisionType,
    FinalDecision,
    Recommendation,
)

__all__ = ["ConsensusAggregator", "consensus_score"]

logger = get_logger(__name__)


def consensus_score(decisions: Sequence[AgentDecision]) -> int:
    """Return the share of evaluators in the largest recommendation cluster.

    Args:
        decisions: Panel decisions.

    Returns:
        100 when every evaluator agrees, otherwise the rounded percentage of
        evaluators holding the most common recommendation. 0 for no decisions.

    """
    if not decisions:
        return 0
    clusters = Counter(d.effective_recommendation for d in decisions)
    if len(clusters) == 1:
        return 100
    return round_half_up(max(clusters.values()) / len(decisions) * 100)


class ConsensusAggregator:
    """Turns a panel's decisions into a ConsensusResult.

    Attributes:
        config: Consensus configuration supplying weights and thresholds.

    """

    def __init__(self, config: ConsensusConfig) -> None:
        """Initialize the aggregator.

        Args:
            config: Consensus configuration.

        """
        self.config = config

    def calculate(
        self,
        decisions: Sequence[AgentDecision],
        debate_rounds: Sequence[DebateRound],
        decision_type: DecisionType,
        evaluated_at: datetime,
        duration_ms: int = 0,
    ) -> ConsensusResult:
        """Compute the consensus result.

        Args:
            decisions: Panel decisions, typically after debate.
            debate_rounds: Debate history to attach to the result.
            decision_type: Kind of decision evaluated.
            evaluated_at: Timestamp to record on the result.
            duration_ms: Wall-clock duration of the evaluation.

        Returns:
            The consensus result.

        """
        status, final_decision = self._vote(decisions)

        average_confidence = (
            math.fsum(d.effective_confidence for d in decisions) / len(decisions)
            if decisions
            else 0.0
        )
        if (
            self.config.escalate_on_low_confidence
            and average_confidence < self.config.minimum_confidence_threshold
        ):
            status = ConsensusStatus.escalate
            final_decision = FinalDecision.escalate

        key_reasons = [
            line
            for d in decisions
            if d.effective_recommendation != Recommendation.reject
            for line in d.reasoning
        ][:MAX_KEY_REASONS]
        remaining_concerns = [line for d in decisions for line in d.concerns][
            :MAX_REMAINING_CONCERNS
        ]
        conditions = [
            line
            for d in decisions
            if d.effective_recommendation == Recommendation.approve_with_conditions
            for line in d.suggestions
        ][:MAX_CONDITIONS]

        result = ConsensusResult(
            status=status,
            final_decision=final_decision,
            votes_for=sum(
                1 for d in decisions if d.effective_recommendation.is_approval
            ),
            votes_against=sum(
                1
                for d in decisions
                if d.effective_recommendation == Recommendation.reject
            ),
            abstentions=sum(
                1
                for d in decisions
                if d.effective_recommendation == Recommendation.needs_modification
            ),
            agent_decisions=list(decisions),
            debate_rounds=list(debate_rounds),
            total_rounds=len(debate_rounds),
            consensus_score=consensus_score(decisions),
            confidence_level=average_confidence,
            summary=self._summary(status, decisions),
            key_reasons=key_reasons,
            remaining_concerns=remaining_concerns,
            conditions=conditions or None,
            decision_type=decision_type,
            evaluated_at=evaluated_at,
            evaluation_duration_ms=duration_ms,
        )

        logger.debug(
            "consensus_calculated",
            status=status.value,
            final_decision=final_decision.value,
            consensus_score=result.consensus_score,
            confidence_level=round(average_confidence, 1),
        )
        return result

    def _vote(
        self, decisions: Sequence[AgentDecision]
    ) -> tuple[ConsensusStatus, FinalDecision]:
        total = math.fsum(self.config.weight_for(d.agent_role) for d in decisions)
        approve = math.fsum(
            self.config.weight_for(d.agent_role)
            for d in decisions
            if d.effective_recommendation.is_approval
        )
        reject = math.fsum(
            self.config.weight_for(d.agent_role)
            for d in decisions
            if d.effective_recommendation == Recommendation.reject
        )

        if total > 0:
            approve_ratio = approve / total
            reject_ratio = reject / total
            threshold = self.config.majority_threshold

            if approve_ratio == 1:
                return ConsensusStatus.unanimous_approve, FinalDecision.approve
            if reject_ratio == 1:
                return ConsensusStatus.unanimous_reject, FinalDecision.reject
            if not self.config.require_unanimous:
                if approve_ratio >= threshold:
                    return ConsensusStatus.majority_approve, FinalDecision.approve
                if reject_ratio >= threshold:
                    return ConsensusStatus.majority_reject, FinalDecision.reject

        if self.config.escalate_on_deadlock:
            return ConsensusStatus.escalate, FinalDecision.escalate
        return ConsensusStatus.deadlock, FinalDecision.escalate

    @staticmethod
    def _summary(status: ConsensusStatus, decisions: Sequence[AgentDecision]) -> str:
        names = ", ".join(d.agent_name for d in decisions)
        if status == ConsensusStatus.unanimous_approve:
            return f"All agents ({names}) unanimously recommend approval."
        if status == ConsensusStatus.unanimous_reject:
            return f"All agents ({names}) unanimously recommend rejection."
        if status == ConsensusStatus.majority_approve:
            approvers = ", ".join(
                d.agent_name for d in decisions if d.effective_recommendation.is_approval
            )
            return f"Majority approval: {approvers} recommend proceeding."
        if status == ConsensusStatus.majority_reject:
            rejecters = ", ".join(
                d.agent_name
                for d in decisions
                if d.effective_recommendation == Recommendation.reject
            )
            return f"Majority rejection: {rejecters} have significant concerns."
        if status == ConsensusStatus.deadlock:
            return "Agents could not reach consensus. Human review required."
        return "Decision escalated for human review due to low confidence or deadlock."
