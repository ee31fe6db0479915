"""Debate coordinator: bounded rounds in which evaluators may revise positions.

Each round reads one immutable snapshot of decisions. Every evaluator
responds to the other evaluators' decisions in that snapshot, and the
responses are folded into a new snapshot for the next round. Responses
within a round therefore never observe each other.
"""

import asyncio
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from pydantic import Field

from roster_consensus.logging_config import get_logger
from roster_consensus.models.base import BaseSchema
from roster_consensus.models.config import ConsensusConfig
from roster_consensus.models.context import DecisionContext
from roster_consensus.models.decision import (
    AgentDebateResponse,
    AgentDecision,
    DebateResponse,
    DebateRound,
)
from roster_consensus.models.enums import Recommendation

if TYPE_CHECKING:
    from roster_consensus.core.evaluators.base import BaseEvaluator

__all__ = [
    "DebateCoordinator",
    "DebateOutcome",
    "debate_topic",
    "majority_reached",
]

logger = get_logger(__name__)


class DebateOutcome(BaseSchema):
    """Result of a debate.

    Attributes:
        rounds: Append-only history of the rounds held.
        final_decisions: Decisions as they stand after the last round.

    """

    rounds: list[DebateRound] = Field(default_factory=list)
    final_decisions: list[AgentDecision] = Field(default_factory=list)


def debate_topic(decisions: Sequence[AgentDecision], round_number: int) -> str:
    """Choose the topic of a debate round.

    When the panel is split between approval and rejection, the round
    addresses the first concern raised by a rejecting evaluator.

    Args:
        decisions: Snapshot of decisions entering the round.
        round_number: 1-based round number.

    Returns:
        The topic string.

    """
    approvers = [d for d in decisions if d.effective_recommendation.is_approval]
    rejecters = [
        d for d in decisions if d.effective_recommendation == Recommendation.reject
    ]
    if approvers and rejecters:
        concerns = [c for d in rejecters for c in d.concerns]
        main = concerns[0] if concerns else "general disagreement"
        return f"Round {round_number}: Addressing concerns - {main}"
    return f"Round {round_number}: Reaching alignment on recommendation"


def majority_reached(decisions: Sequence[AgentDecision], threshold: float) -> bool:
    """Return True when either side holds ceil(n * threshold) unweighted votes."""
    needed = math.ceil(len(decisions) * threshold)
    approve = sum(1 for d in decisions if d.effective_recommendation.is_approval)
    reject = sum(
        1 for d in decisions if d.effective_recommendation == Recommendation.reject
    )
    return approve >= needed or reject >= needed


def _all_agree(decisions: Sequence[AgentDecision]) -> bool:
    return len({d.effective_recommendation for d in decisions}) <= 1


def _revise(decision: AgentDecision, response: DebateResponse) -> AgentDecision:
    if not (response.changed_position and response.new_recommendation):
        return decision
    confidence = (
        response.new_confidence
        if response.new_confidence is not None
        else decision.effective_confidence
    )
    return decision.model_copy(
        update={
            "revised_recommendation": response.new_recommendation,
            "revised_confidence": confidence,
            "agrees_with_previous_decisions": True,
        }
    )


class DebateCoordinator:
    """Runs debate rounds over an evaluator panel.

    Attributes:
        config: Consensus configuration supplying round cap and threshold.

    """

    def __init__(self, config: ConsensusConfig) -> None:
        """Initialize the coordinator.

        Args:
            config: Consensus configuration.

        """
        self.config = config

    async def run(
        self,
        context: DecisionContext,
        evaluators: Sequence["BaseEvaluator"],
        decisions: Sequence[AgentDecision],
    ) -> DebateOutcome:
        """Debate until the panel converges or the round cap is hit.

        Args:
            context: Decision context under debate.
            evaluators: Panel, index-aligned with ``decisions``.
            decisions: First-pass decisions.

        Returns:
            Round history and the final decision snapshot.

        Raises:
            ValueError: If evaluators and decisions are not index-aligned.

        """
        if len(evaluators) != len(decisions):
            raise ValueError(
                f"Got {len(evaluators)} evaluators for {len(decisions)} decisions"
            )

        snapshot = list(decisions)
        rounds: list[DebateRound] = []

        if not self.config.enable_cross_evaluation or _all_agree(snapshot):
            return DebateOutcome(rounds=rounds, final_decisions=snapshot)

        for round_number in range(1, self.config.max_debate_rounds + 1):
            topic = debate_topic(snapshot, round_number)
            responses = await asyncio.gather(
                *(
                    asyncio.to_thread(
                        evaluator.respond_to_debate,
                        context,
                        snapshot[:index] + snapshot[index + 1 :],
                        topic,
                    )
                    for index, evaluator in enumerate(evaluators)
                )
            )

            snapshot = [
                _revise(decision, response)
                for decision, response in zip(snapshot, responses)
            ]
            reached = _all_agree(snapshot) or majority_reached(
                snapshot, self.config.majority_threshold
            )
            rounds.append(
                DebateRound(
                    round_number=round_number,
                    topic=topic,
                    agent_responses=[
                        AgentDebateResponse(
                            agent_role=decision.agent_role,
                            response=response.response,
                            changed_position=response.changed_position,
                            new_recommendation=response.new_recommendation,
                        )
                        for decision, response in zip(snapshot, responses)
                    ],
                    consensus_reached=reached,
                    resolution_summary=(
                        f"Consensus reached in round {round_number}" if reached else None
                    ),
                )
            )

            logger.debug(
                "debate_round_completed",
                round_number=round_number,
                changed=sum(1 for r in responses if r.changed_position),
                consensus_reached=reached,
            )

            if reached:
                break

        return DebateOutcome(rounds=rounds, final_decisions=snapshot)
