"""Unit tests for DecisionContextBuilder."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from roster_consensus.core.context_builder import DecisionContextBuilder
from roster_consensus.core.exceptions import ContextBuildError, RosterNotFoundError
from roster_consensus.models.config import ComplianceConfig
from roster_consensus.models.consensus import ConsensusRequest
from roster_consensus.models.enums import DecisionType
from roster_consensus.models.proposal import ShiftAssignment
from roster_consensus.models.roster import EmployeePreference, RosterInfo


@pytest.fixture
def data_source() -> AsyncMock:
    """Create a mock roster data source."""
    return AsyncMock()


@pytest.fixture
def builder(data_source, as_of) -> DecisionContextBuilder:
    """Create a builder with a fixed clock."""
    return DecisionContextBuilder(data_source, ComplianceConfig(), lambda: as_of)


@pytest.fixture
def request_for(make_shift, monday):
    """Build a shift assignment request for user u9."""

    def _request(roster_id: str | None) -> ConsensusRequest:
        shift = make_shift("u9", monday + timedelta(hours=8), 8)
        return ConsensusRequest(
            decision_type=DecisionType.shift_assignment,
            proposal=ShiftAssignment(user_id="u9", shift=shift),
            roster_id=roster_id,
        )

    return _request


class TestDecisionContextBuilder:
    """Tests for context assembly."""

    @pytest.mark.asyncio
    async def test_no_roster_reads_nothing(self, builder, data_source, request_for, as_of) -> None:
        """Test that a request without roster id builds an empty context."""
        context = await builder.build(request_for(None))

        assert context.existing_shifts == []
        assert context.employee_preferences == []
        assert context.labor_budget is None
        assert context.as_of == as_of
        data_source.get_roster.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_roster_raises(self, builder, data_source, request_for) -> None:
        """Test that an unknown roster id is an error."""
        data_source.get_roster.return_value = None

        with pytest.raises(RosterNotFoundError, match="Roster not found: r404") as exc_info:
            await builder.build(request_for("r404"))

        assert isinstance(exc_info.value, ContextBuildError)
        data_source.find_shifts_by_roster.assert_not_called()

    @pytest.mark.asyncio
    async def test_loads_roster_data(
        self, builder, data_source, request_for, make_shift, monday
    ) -> None:
        """Test that shifts, preferences and budget land in the context."""
        existing = make_shift("u1", monday, 8, shift_id="s1")
        preference = EmployeePreference(user_id="u9", avoid_days=["Monday"])
        data_source.get_roster.return_value = RosterInfo(id="r1")
        data_source.find_shifts_by_roster.return_value = [existing]
        data_source.find_preferences.return_value = [preference]
        data_source.find_labor_budget.return_value = 50000.0

        context = await builder.build(request_for("r1"))

        assert context.roster_id == "r1"
        assert context.existing_shifts == [existing]
        assert context.employee_preferences == [preference]
        assert context.labor_budget == 50000.0
        data_source.find_preferences.assert_awaited_once_with(["u1", "u9"])

    @pytest.mark.asyncio
    async def test_none_collections_are_empty(self, builder, data_source, request_for) -> None:
        """Test that degraded data yields an empty but valid context."""
        data_source.get_roster.return_value = RosterInfo(id="r1")
        data_source.find_shifts_by_roster.return_value = None
        data_source.find_preferences.return_value = None
        data_source.find_labor_budget.return_value = None

        context = await builder.build(request_for("r1"))

        assert context.existing_shifts == []
        assert context.employee_preferences == []
        assert context.labor_budget is None
        data_source.find_preferences.assert_awaited_once_with(["u9"])
