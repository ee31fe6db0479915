"""Roster data models: shifts, employee preferences and coverage goals."""

from datetime import datetime

from pydantic import Field, model_validator

from roster_consensus.models.base import FrozenSchema

__all__ = [
    "CoverageGoal",
    "EmployeePreference",
    "RosterInfo",
    "Shift",
]


class Shift(FrozenSchema):
    """A block of work assigned to one employee.

    Attributes:
        id: Identifier of a persisted shift; proposed shifts may have none.
        user_id: Employee the shift belongs to.
        start_time: Shift start.
        end_time: Shift end, strictly after start_time.
        break_minutes: Unpaid break deducted from working hours.

    """

    id: str | None = None
    user_id: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    break_minutes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_interval(self) -> "Shift":
        """Reject shifts that end before or when they start."""
        if self.end_time <= self.start_time:
            raise ValueError("Shift.end_time must be after start_time")
        return self


class EmployeePreference(FrozenSchema):
    """Scheduling preferences and availability of one employee.

    Day names are English weekday names ("Monday" ... "Sunday").

    Attributes:
        user_id: Employee the preferences belong to.
        preferred_days: Weekdays the employee likes to work.
        avoid_days: Weekdays the employee wants to avoid.
        prefer_morning: Likes shifts starting 06:00-11:59.
        prefer_evening: Likes shifts starting 12:00-19:59.
        prefer_night: Likes shifts starting 20:00-05:59.
        min_hours_per_week: Lower bound on desired weekly hours.
        max_hours_per_week: Upper bound on desired weekly hours.
        unavailable_from: Start of a declared unavailability window.
        unavailable_to: End of a declared unavailability window.
        unavailable_reason: Free-text reason for the unavailability.

    """

    user_id: str = Field(..., min_length=1)
    preferred_days: list[str] = Field(default_factory=list)
    avoid_days: list[str] = Field(default_factory=list)
    prefer_morning: bool = False
    prefer_evening: bool = False
    prefer_night: bool = False
    min_hours_per_week: float | None = Field(default=None, ge=0)
    max_hours_per_week: float | None = Field(default=None, ge=0)
    unavailable_from: datetime | None = None
    unavailable_to: datetime | None = None
    unavailable_reason: str | None = None


class CoverageGoal(FrozenSchema):
    """Staffing target for a time slot in a schedule proposal.

    Attributes:
        start: Slot start.
        end: Slot end.
        minimum_employees: Headcount the slot needs to be considered met.
        preferred_employees: Desired headcount.
        required_skills: Skills expected in the slot.
        department: Department the slot belongs to.

    """

    start: datetime
    end: datetime
    minimum_employees: int = Field(..., ge=1)
    preferred_employees: int | None = Field(default=None, ge=1)
    required_skills: list[str] = Field(default_factory=list)
    department: str | None = None


class RosterInfo(FrozenSchema):
    """Roster header as returned by a data source.

    Attributes:
        id: Roster identifier.
        organization_id: Owning organization.
        location_id: Location the roster is planned for.

    """

    id: str
    organization_id: str | None = None
    location_id: str | None = None
