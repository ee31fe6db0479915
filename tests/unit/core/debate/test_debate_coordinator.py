"""Unit tests for DebateCoordinator."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from roster_consensus.core.debate.coordinator import (
    DebateCoordinator,
    debate_topic,
    majority_reached,
)
from roster_consensus.models.config import ConsensusConfig
from roster_consensus.models.decision import DebateResponse
from roster_consensus.models.enums import AgentRole, Recommendation
from roster_consensus.models.proposal import ShiftAssignment

ROLES = [
    AgentRole.compliance,
    AgentRole.cost_optimizer,
    AgentRole.employee_advocate,
    AgentRole.operations,
]

HOLD = DebateResponse(response="holding position")


def _holding_evaluator() -> MagicMock:
    evaluator = MagicMock()
    evaluator.respond_to_debate.return_value = HOLD
    return evaluator


@pytest.fixture
def context(make_shift, make_context, monday):
    """Create a context for a plain day shift."""
    proposed = make_shift("u1", monday + timedelta(hours=9), 8)
    return make_context(ShiftAssignment(user_id="u1", shift=proposed))


@pytest.fixture
def panel(make_decision):
    """Build a panel of decisions from a list of recommendations."""

    def _panel(*recommendations: Recommendation):
        return [
            make_decision(role, rec, concerns=[f"{role.value} concern"])
            for role, rec in zip(ROLES, recommendations)
        ]

    return _panel


class TestDebateHelpers:
    """Tests for topic selection and the majority test."""

    def test_split_panel_topic_names_first_rejecting_concern(self, panel) -> None:
        """Test that a split panel debates the first rejecting concern."""
        decisions = panel(Recommendation.approve, Recommendation.reject)
        assert debate_topic(decisions, 2) == (
            "Round 2: Addressing concerns - cost_optimizer concern"
        )

    def test_alignment_topic_without_split(self, panel) -> None:
        """Test the topic when nobody rejects."""
        decisions = panel(Recommendation.approve, Recommendation.needs_modification)
        assert debate_topic(decisions, 1) == "Round 1: Reaching alignment on recommendation"

    def test_majority_uses_ceiling(self, panel) -> None:
        """Test the unweighted ceil(n * threshold) majority."""
        decisions = panel(
            Recommendation.approve,
            Recommendation.approve_with_conditions,
            Recommendation.approve,
            Recommendation.reject,
        )
        assert majority_reached(decisions, 0.75)
        assert not majority_reached(decisions, 0.76)


class TestDebateCoordinator:
    """Tests for running debate rounds."""

    @pytest.mark.asyncio
    async def test_no_rounds_when_unanimous(self, context, panel) -> None:
        """Test that an agreeing panel skips the debate."""
        evaluators = [_holding_evaluator() for _ in ROLES]
        decisions = panel(*[Recommendation.approve] * 4)

        outcome = await DebateCoordinator(ConsensusConfig()).run(
            context, evaluators, decisions
        )

        assert outcome.rounds == []
        assert outcome.final_decisions == decisions
        for evaluator in evaluators:
            evaluator.respond_to_debate.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_rounds_when_cross_evaluation_disabled(self, context, panel) -> None:
        """Test that disabling cross evaluation skips the debate."""
        evaluators = [_holding_evaluator() for _ in ROLES]
        decisions = panel(Recommendation.approve, Recommendation.reject)

        outcome = await DebateCoordinator(
            ConsensusConfig(enable_cross_evaluation=False)
        ).run(context, evaluators[:2], decisions)

        assert outcome.rounds == []

    @pytest.mark.asyncio
    async def test_misaligned_panel_raises(self, context, panel) -> None:
        """Test that evaluators and decisions must be index-aligned."""
        with pytest.raises(ValueError, match="evaluators"):
            await DebateCoordinator(ConsensusConfig()).run(
                context, [_holding_evaluator()], panel(Recommendation.approve, Recommendation.reject)
            )

    @pytest.mark.asyncio
    async def test_rounds_capped(self, context, panel) -> None:
        """Test that a stuck panel debates exactly max_debate_rounds times."""
        evaluators = [_holding_evaluator() for _ in ROLES]
        decisions = panel(
            Recommendation.approve,
            Recommendation.approve,
            Recommendation.reject,
            Recommendation.reject,
        )

        outcome = await DebateCoordinator(ConsensusConfig(max_debate_rounds=3)).run(
            context, evaluators, decisions
        )

        assert [r.round_number for r in outcome.rounds] == [1, 2, 3]
        assert not any(r.consensus_reached for r in outcome.rounds)
        assert all(len(r.agent_responses) == 4 for r in outcome.rounds)
        assert outcome.final_decisions == decisions

    @pytest.mark.asyncio
    async def test_majority_ends_debate(self, context, panel) -> None:
        """Test that reaching the majority closes the round with a summary."""
        evaluators = [_holding_evaluator() for _ in ROLES]
        decisions = panel(
            Recommendation.approve,
            Recommendation.approve,
            Recommendation.approve_with_conditions,
            Recommendation.reject,
        )

        outcome = await DebateCoordinator(ConsensusConfig()).run(
            context, evaluators, decisions
        )

        assert len(outcome.rounds) == 1
        assert outcome.rounds[0].consensus_reached is True
        assert outcome.rounds[0].resolution_summary == "Consensus reached in round 1"

    @pytest.mark.asyncio
    async def test_responses_read_the_pre_round_snapshot(self, context, panel) -> None:
        """Test that a change in round 1 is only visible to others in round 2."""
        seen_by_second: list[Recommendation] = []

        changer = MagicMock()
        changer.respond_to_debate.return_value = DebateResponse(
            response="changing",
            changed_position=True,
            new_recommendation=Recommendation.reject,
            new_confidence=88,
        )

        def observe(context, others, topic):
            seen_by_second.append(others[0].effective_recommendation)
            return HOLD

        observer = MagicMock()
        observer.respond_to_debate.side_effect = observe
        evaluators = [changer, observer, _holding_evaluator(), _holding_evaluator()]
        decisions = panel(
            Recommendation.approve,
            Recommendation.reject,
            Recommendation.approve,
            Recommendation.approve,
        )

        outcome = await DebateCoordinator(ConsensusConfig(max_debate_rounds=2)).run(
            context, evaluators, decisions
        )

        assert seen_by_second == [Recommendation.approve, Recommendation.reject]
        revised = outcome.final_decisions[0]
        assert revised.recommendation == Recommendation.approve
        assert revised.revised_recommendation == Recommendation.reject
        assert revised.effective_confidence == 88
        assert revised.agrees_with_previous_decisions is True
        assert outcome.rounds[0].agent_responses[0].changed_position is True

    @pytest.mark.asyncio
    async def test_others_exclude_self(self, context, panel) -> None:
        """Test that each evaluator is shown every decision but its own."""
        evaluators = [_holding_evaluator() for _ in ROLES]
        decisions = panel(
            Recommendation.approve,
            Recommendation.approve,
            Recommendation.reject,
            Recommendation.reject,
        )

        await DebateCoordinator(ConsensusConfig(max_debate_rounds=1)).run(
            context, evaluators, decisions
        )

        for index, evaluator in enumerate(evaluators):
            others = evaluator.respond_to_debate.call_args.args[1]
            assert decisions[index] not in others
            assert len(others) == 3
