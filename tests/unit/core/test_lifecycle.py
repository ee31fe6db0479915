"""Unit tests for DecisionLifecycle."""

from datetime import timedelta

import pytest
import pytest_asyncio

from roster_consensus.core.exceptions import InvalidDecisionStateError
from roster_consensus.core.lifecycle import DecisionLifecycle
from roster_consensus.core.service import ConsensusService
from roster_consensus.models.consensus import ConsensusRequest
from roster_consensus.models.enums import DecisionStatus, DecisionType
from roster_consensus.models.proposal import ShiftAssignment
from roster_consensus.storage.memory import InMemoryRosterStore


@pytest_asyncio.fixture
async def decision(make_shift, monday, as_of):
    """Create a pending decision."""
    service = ConsensusService(InMemoryRosterStore(), clock=lambda: as_of)
    shift = make_shift("u1", monday + timedelta(hours=10), 6)
    return await service.get_transparent_decision(
        ConsensusRequest(
            decision_type=DecisionType.shift_assignment,
            proposal=ShiftAssignment(user_id="u1", shift=shift),
        )
    )


class TestDecisionLifecycle:
    """Tests for review status transitions."""

    @pytest.mark.asyncio
    async def test_pending_transitions(self, decision) -> None:
        """Test the moves available from pending_review."""
        lifecycle = DecisionLifecycle(decision)

        assert not lifecycle.is_terminal()
        assert set(lifecycle.get_valid_transitions()) == {
            DecisionStatus.modified,
            DecisionStatus.approved,
            DecisionStatus.rejected,
        }

    @pytest.mark.asyncio
    async def test_approval_records_reviewer(self, decision) -> None:
        """Test that approval records reviewer and note on a copy."""
        approved = DecisionLifecycle(decision).transition_to(
            DecisionStatus.approved, reviewed_by="manager-1", note="Looks fine"
        )

        assert approved.status == DecisionStatus.approved
        assert approved.reviewed_by == "manager-1"
        assert approved.review_note == "Looks fine"
        assert decision.status == DecisionStatus.pending_review

    @pytest.mark.asyncio
    async def test_modified_may_be_modified_again(self, decision) -> None:
        """Test that repeated edits are allowed."""
        modified = DecisionLifecycle(decision).transition_to(DecisionStatus.modified)

        assert DecisionLifecycle(modified).can_transition_to(DecisionStatus.modified)
        assert modified.reviewed_by is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("terminal", [DecisionStatus.approved, DecisionStatus.rejected])
    async def test_terminal_states_are_final(self, decision, terminal) -> None:
        """Test that approved and rejected decisions cannot move."""
        closed = DecisionLifecycle(decision).transition_to(terminal)
        lifecycle = DecisionLifecycle(closed)

        assert lifecycle.is_terminal()
        for target in DecisionStatus:
            assert not lifecycle.can_transition_to(target)
        with pytest.raises(
            InvalidDecisionStateError, match=f"already {terminal.value}"
        ):
            lifecycle.transition_to(DecisionStatus.modified)

    @pytest.mark.asyncio
    async def test_cannot_return_to_pending(self, decision) -> None:
        """Test that no decision goes back to pending_review."""
        with pytest.raises(InvalidDecisionStateError, match="Cannot transition"):
            DecisionLifecycle(decision).ensure_can_transition(
                DecisionStatus.pending_review
            )
