"""Decision context: the read-only snapshot every evaluator reasons over."""

from datetime import datetime

from pydantic import Field

from roster_consensus.models.base import FrozenSchema
from roster_consensus.models.config import ComplianceConfig
from roster_consensus.models.enums import DecisionType
from roster_consensus.models.proposal import Proposal
from roster_consensus.models.roster import EmployeePreference, Shift

__all__ = ["DecisionContext"]


class DecisionContext(FrozenSchema):
    """Immutable view of the roster data relevant to one proposal.

    Attributes:
        decision_type: Kind of decision being evaluated.
        proposal: The proposed roster change.
        roster_id: Roster the proposal belongs to, if any.
        existing_shifts: Shifts already on the roster.
        employee_preferences: Preferences of the affected employees.
        compliance: Statutory limits in force.
        labor_budget: Labor budget in NOK, when one is configured.
        as_of: Reference time for notice and lead-time calculations.

    """

    decision_type: DecisionType
    proposal: Proposal
    roster_id: str | None = None
    existing_shifts: list[Shift] = Field(default_factory=list)
    employee_preferences: list[EmployeePreference] = Field(default_factory=list)
    compliance: ComplianceConfig = Field(default_factory=ComplianceConfig)
    labor_budget: float | None = None
    as_of: datetime

    def shifts_for_user(self, user_id: str) -> list[Shift]:
        """Return the existing shifts of one employee."""
        return [s for s in self.existing_shifts if s.user_id == user_id]

    def preference_for(self, user_id: str) -> EmployeePreference | None:
        """Return the preferences of one employee, if recorded."""
        for pref in self.employee_preferences:
            if pref.user_id == user_id:
                return pref
        return None

    def with_existing_shifts(self, shifts: list[Shift]) -> "DecisionContext":
        """Return a copy whose existing shifts are replaced."""
        return self.model_copy(update={"existing_shifts": list(shifts)})
