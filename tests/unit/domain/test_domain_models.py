"""Unit tests for roster, proposal and request models."""

from datetime import timedelta

import pytest
from pydantic import TypeAdapter, ValidationError

from roster_consensus.models.config import ConsensusConfig, ConsensusConfigOverride
from roster_consensus.models.consensus import ConsensusRequest
from roster_consensus.models.decision import AgentDecision
from roster_consensus.models.enums import (
    AgentRole,
    DecisionType,
    EvidenceImpact,
    EvidenceType,
    Recommendation,
)
from roster_consensus.models.evidence import EvidenceReference, ScoringComponent
from roster_consensus.models.proposal import (
    OptimizationChange,
    Proposal,
    ScheduleAssignment,
    ScheduleCreation,
    ScheduleOptimization,
    ShiftAssignment,
    ShiftSwap,
)
from roster_consensus.models.roster import Shift


class TestShift:
    """Tests for the Shift model."""

    def test_end_must_follow_start(self, monday) -> None:
        """Test that zero-length and inverted shifts are rejected."""
        with pytest.raises(ValidationError, match="end_time must be after"):
            Shift(user_id="u1", start_time=monday, end_time=monday)

    def test_negative_break_rejected(self, monday) -> None:
        """Test that breaks cannot be negative."""
        with pytest.raises(ValidationError):
            Shift(
                user_id="u1",
                start_time=monday,
                end_time=monday + timedelta(hours=8),
                break_minutes=-5,
            )

    def test_shift_is_immutable(self, make_shift, monday) -> None:
        """Test that shifts are frozen value objects."""
        shift = make_shift("u1", monday, 8)
        with pytest.raises(ValidationError):
            shift.user_id = "u2"


class TestProposals:
    """Tests for the proposal union."""

    def test_discriminated_parse(self) -> None:
        """Test that the type tag selects the variant."""
        adapter = TypeAdapter(Proposal)
        proposal = adapter.validate_python(
            {
                "type": "schedule_optimization",
                "changes": [
                    {"shift_id": "s1", "current_user_id": "u1", "proposed_user_id": "u2"}
                ],
                "expected_savings": 400,
            }
        )

        assert isinstance(proposal, ScheduleOptimization)
        assert proposal.expected_savings == 400.0

    def test_unknown_type_rejected(self) -> None:
        """Test that an unknown tag is a validation error."""
        with pytest.raises(ValidationError):
            TypeAdapter(Proposal).validate_python({"type": "shift_trade"})

    def test_affected_user_ids(self, make_shift, monday) -> None:
        """Test the users each proposal kind reports."""
        shift = make_shift("u1", monday, 8)
        swap = ShiftSwap(
            requester_id="u1",
            target_user_id="u2",
            shift_to_swap=shift,
            shift_to_receive=make_shift("u2", monday + timedelta(days=1), 8),
        )
        creation = ScheduleCreation(
            assignments=[
                ScheduleAssignment(user_id="u3", shift=shift),
                ScheduleAssignment(user_id="u1", shift=shift),
                ScheduleAssignment(user_id="u3", shift=shift),
            ]
        )
        optimization = ScheduleOptimization(
            changes=[
                OptimizationChange(shift_id="a", current_user_id="u1", proposed_user_id="u2"),
                OptimizationChange(shift_id="b", current_user_id="u2", proposed_user_id="u4"),
            ]
        )

        assert ShiftAssignment(user_id="u1", shift=shift).affected_user_ids() == ["u1"]
        assert swap.affected_user_ids() == ["u1", "u2"]
        assert creation.affected_user_ids() == ["u3", "u1"]
        assert optimization.affected_user_ids() == ["u1", "u2", "u4"]


class TestConsensusRequest:
    """Tests for request validation."""

    def test_kind_must_match_decision_type(self, make_shift, monday) -> None:
        """Test that a swap decision cannot carry an assignment."""
        with pytest.raises(ValidationError, match="requires a 'shift_swap' proposal"):
            ConsensusRequest(
                decision_type=DecisionType.shift_swap,
                proposal=ShiftAssignment(user_id="u1", shift=make_shift("u1", monday, 8)),
            )

    @pytest.mark.parametrize(
        "decision_type",
        [DecisionType.compliance_override, DecisionType.conflict_resolution],
    )
    def test_open_decision_types_accept_any_kind(
        self, decision_type, make_shift, monday
    ) -> None:
        """Test that override and conflict decisions take any proposal."""
        request = ConsensusRequest(
            decision_type=decision_type,
            proposal=ShiftAssignment(user_id="u1", shift=make_shift("u1", monday, 8)),
        )
        assert request.proposal.type == "shift_assignment"

    def test_parse_from_mapping(self) -> None:
        """Test parsing a request as read from a scenario file."""
        request = ConsensusRequest.model_validate(
            {
                "decision_type": "shift_assignment",
                "roster_id": "r1",
                "proposal": {
                    "type": "shift_assignment",
                    "user_id": "u1",
                    "shift": {
                        "user_id": "u1",
                        "start_time": "2026-03-02T08:00:00",
                        "end_time": "2026-03-02T16:00:00",
                    },
                },
                "config": {"max_debate_rounds": 1},
            }
        )

        assert isinstance(request.proposal, ShiftAssignment)
        assert request.config.max_debate_rounds == 1


class TestConsensusConfig:
    """Tests for consensus configuration."""

    def test_defaults(self) -> None:
        """Test the default weights and thresholds."""
        config = ConsensusConfig()

        assert config.majority_threshold == 0.66
        assert config.max_debate_rounds == 3
        assert config.weight_for(AgentRole.compliance) == 1.5
        assert config.weight_for(AgentRole.employee_advocate) == 1.2

    @pytest.mark.parametrize(
        "field, value",
        [("majority_threshold", 0), ("majority_threshold", 1.2), ("max_debate_rounds", 11)],
    )
    def test_out_of_range_rejected(self, field, value) -> None:
        """Test the configured bounds."""
        with pytest.raises(ValidationError):
            ConsensusConfig(**{field: value})

    def test_merged_keeps_unset_fields(self) -> None:
        """Test that an override only replaces the fields it sets."""
        base = ConsensusConfig(max_debate_rounds=2)
        merged = base.merged(
            ConsensusConfigOverride(
                majority_threshold=0.8, agent_weights={AgentRole.operations: 2.0}
            )
        )

        assert merged.majority_threshold == 0.8
        assert merged.max_debate_rounds == 2
        assert merged.weight_for(AgentRole.operations) == 2.0
        assert merged.weight_for(AgentRole.compliance) == 1.5
        assert base.majority_threshold == 0.66

    def test_merged_without_override_copies(self) -> None:
        """Test that merging None returns an equal, distinct config."""
        base = ConsensusConfig()
        merged = base.merged(None)

        assert merged == base
        assert merged is not base


class TestScoringModels:
    """Tests for components and decisions."""

    def test_score_above_max_rejected(self) -> None:
        """Test that a component cannot exceed its maximum."""
        with pytest.raises(ValidationError, match="must not exceed max_score"):
            ScoringComponent(name="Rest", score=11, max_score=10, weight=1, reasoning="x")

    def test_evidence_reference_rendering(self) -> None:
        """Test the one-line evidence rendering."""
        ref = EvidenceReference(
            type=EvidenceType.rule,
            source="Working Environment Act",
            description="11 hours daily rest",
            impact=EvidenceImpact.negative,
        )
        assert ref.as_reference() == "Working Environment Act: 11 hours daily rest"

    def test_effective_values_fall_back(self, make_decision) -> None:
        """Test that effective values use revisions only when present."""
        decision: AgentDecision = make_decision(
            AgentRole.cost_optimizer, Recommendation.approve, confidence=70
        )
        revised = decision.model_copy(
            update={"revised_recommendation": Recommendation.reject}
        )

        assert decision.effective_recommendation == Recommendation.approve
        assert revised.effective_recommendation == Recommendation.reject
        assert revised.effective_confidence == 70
        assert revised.recommendation == Recommendation.approve
