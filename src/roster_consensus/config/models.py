"""YAML scenario models for the command-line interface.

A scenario file describes one or more rosters (shifts, preferences and
budget) plus the request or batch to evaluate against them.
"""

from datetime import datetime

from pydantic import Field, model_validator

from roster_consensus.models.base import BaseSchema
from roster_consensus.models.consensus import ConsensusRequest
from roster_consensus.models.enums import AgentRole
from roster_consensus.models.proposal import ShiftAssignment
from roster_consensus.models.roster import EmployeePreference, Shift

__all__ = [
    "BatchFixture",
    "EditSpec",
    "RosterFixture",
    "Scenario",
]


class RosterFixture(BaseSchema):
    """A roster and its data, as written in a scenario file.

    Attributes:
        id: Roster identifier.
        organization_id: Owning organization.
        location_id: Location the roster is planned for.
        labor_budget: Labor budget in NOK.
        shifts: Shifts already on the roster.
        preferences: Employee preferences.

    """

    id: str = Field(..., min_length=1)
    organization_id: str | None = None
    location_id: str | None = None
    labor_budget: float | None = Field(default=None, ge=0)
    shifts: list[Shift] = Field(default_factory=list)
    preferences: list[EmployeePreference] = Field(default_factory=list)


class BatchFixture(BaseSchema):
    """Candidate assignments to evaluate one by one."""

    roster_id: str = Field(..., min_length=1)
    proposals: list[ShiftAssignment] = Field(default_factory=list)
    requested_by: str | None = None


class EditSpec(BaseSchema):
    """A component edit addressed by evaluator role and component name.

    Component ids are generated per decision, so files name the component
    instead; the first component of that name for the role is edited.

    Attributes:
        agent_role: Evaluator that produced the component.
        component_name: Component display name.
        new_score: Score to set.
        reason: Why the reviewer changed the score.

    """

    agent_role: AgentRole
    component_name: str = Field(..., min_length=1)
    new_score: float
    reason: str = Field(..., min_length=1)


class Scenario(BaseSchema):
    """Complete scenario file.

    Attributes:
        as_of: Fixed evaluation time; the wall clock is used when omitted.
        rosters: Roster data served to the engine.
        request: Single consensus request to evaluate.
        batch: Batch of assignments to evaluate.
        edits: Component edits to apply to a detailed decision.

    """

    as_of: datetime | None = None
    rosters: list[RosterFixture] = Field(default_factory=list)
    request: ConsensusRequest | None = None
    batch: BatchFixture | None = None
    edits: list[EditSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_has_work(self) -> "Scenario":
        """Require at least a request or a batch."""
        if self.request is None and self.batch is None:
            raise ValueError("Scenario must define a 'request' or a 'batch'")
        return self
