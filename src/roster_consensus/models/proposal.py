"""Proposal models: the four kinds of roster change the panel can judge.

``Proposal`` is a tagged union discriminated on ``type``, so a proposal
parsed from JSON or YAML always resolves to exactly one variant.
"""

from typing import Annotated, Literal

from pydantic import Field

from roster_consensus.models.base import FrozenSchema
from roster_consensus.models.roster import CoverageGoal, Shift

__all__ = [
    "OptimizationChange",
    "Proposal",
    "ScheduleAssignment",
    "ScheduleCreation",
    "ScheduleOptimization",
    "ShiftAssignment",
    "ShiftSwap",
]


class ShiftAssignment(FrozenSchema):
    """Assign a single shift to an employee.

    Attributes:
        user_id: Employee receiving the shift.
        shift: The shift being assigned.

    """

    type: Literal["shift_assignment"] = "shift_assignment"
    user_id: str = Field(..., min_length=1)
    shift: Shift

    def affected_user_ids(self) -> list[str]:
        """Return the employees whose rosters change."""
        return [self.user_id]


class ShiftSwap(FrozenSchema):
    """Exchange shifts between two employees.

    The requester gives away ``shift_to_swap`` and receives
    ``shift_to_receive``; the target does the opposite.

    Attributes:
        requester_id: Employee asking for the swap.
        target_user_id: Employee asked to swap.
        shift_to_swap: Shift currently held by the requester.
        shift_to_receive: Shift currently held by the target.
        reason: Reason given by the requester.

    """

    type: Literal["shift_swap"] = "shift_swap"
    requester_id: str = Field(..., min_length=1)
    target_user_id: str = Field(..., min_length=1)
    shift_to_swap: Shift
    shift_to_receive: Shift
    reason: str = ""

    def affected_user_ids(self) -> list[str]:
        """Return the employees whose rosters change."""
        return [self.requester_id, self.target_user_id]


class ScheduleAssignment(FrozenSchema):
    """One assignment inside a schedule creation proposal."""

    user_id: str = Field(..., min_length=1)
    shift: Shift


class ScheduleCreation(FrozenSchema):
    """Create a set of assignments at once.

    Attributes:
        assignments: Proposed assignments, evaluated in order.
        coverage_goals: Staffing targets the schedule should meet.

    """

    type: Literal["schedule_creation"] = "schedule_creation"
    assignments: list[ScheduleAssignment] = Field(default_factory=list)
    coverage_goals: list[CoverageGoal] = Field(default_factory=list)

    def affected_user_ids(self) -> list[str]:
        """Return the employees whose rosters change, in first-seen order."""
        return list(dict.fromkeys(a.user_id for a in self.assignments))


class OptimizationChange(FrozenSchema):
    """Move one existing shift from one employee to another."""

    shift_id: str
    current_user_id: str
    proposed_user_id: str
    reason: str = ""


class ScheduleOptimization(FrozenSchema):
    """Reassign existing shifts to lower cost.

    Attributes:
        changes: Reassignments making up the optimization.
        expected_savings: Estimated savings in NOK.
        affects_compliance: Whether the optimizer flagged compliance impact.

    """

    type: Literal["schedule_optimization"] = "schedule_optimization"
    changes: list[OptimizationChange] = Field(default_factory=list)
    expected_savings: float = 0.0
    affects_compliance: bool = False

    def affected_user_ids(self) -> list[str]:
        """Return both sides of every reassignment, in first-seen order."""
        users: list[str] = []
        for change in self.changes:
            users.extend([change.current_user_id, change.proposed_user_id])
        return list(dict.fromkeys(users))


Proposal = Annotated[
    ShiftAssignment | ShiftSwap | ScheduleCreation | ScheduleOptimization,
    Field(discriminator="type"),
]
