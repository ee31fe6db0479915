"""In-memory roster store and audit log.

Used by the command-line interface to serve scenario files and by tests.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from roster_consensus.config.models import RosterFixture, Scenario
from roster_consensus.logging_config import get_logger
from roster_consensus.models.consensus import AuditRecord
from roster_consensus.models.roster import EmployeePreference, RosterInfo, Shift

__all__ = ["InMemoryAuditLog", "InMemoryRosterStore"]

logger = get_logger(__name__)


class InMemoryRosterStore:
    """RosterDataSource backed by plain dictionaries.

    Attributes:
        rosters: Roster fixtures keyed by roster id.

    """

    def __init__(self, rosters: Iterable[RosterFixture] = ()) -> None:
        """Initialize the store.

        Args:
            rosters: Rosters to serve.

        Raises:
            ValueError: If two rosters share an id.

        """
        self.rosters: dict[str, RosterFixture] = {}
        for roster in rosters:
            if roster.id in self.rosters:
                raise ValueError(f"Duplicate roster id '{roster.id}'")
            self.rosters[roster.id] = roster

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> InMemoryRosterStore:
        """Build a store serving a scenario's rosters."""
        return cls(scenario.rosters)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InMemoryRosterStore:
        """Build a store from a ``{"rosters": [...]}`` mapping.

        Args:
            data: Parsed YAML or JSON.

        Returns:
            The populated store.

        """
        rosters = [RosterFixture.model_validate(r) for r in data.get("rosters", [])]
        return cls(rosters)

    async def get_roster(self, roster_id: str) -> RosterInfo | None:
        roster = self.rosters.get(roster_id)
        if roster is None:
            return None
        return RosterInfo(
            id=roster.id,
            organization_id=roster.organization_id,
            location_id=roster.location_id,
        )

    async def find_shifts_by_roster(self, roster_id: str) -> list[Shift] | None:
        roster = self.rosters.get(roster_id)
        return list(roster.shifts) if roster else None

    async def find_preferences(
        self, user_ids: Iterable[str]
    ) -> list[EmployeePreference] | None:
        wanted = set(user_ids)
        found: dict[str, EmployeePreference] = {}
        for roster in self.rosters.values():
            for pref in roster.preferences:
                if pref.user_id in wanted:
                    found.setdefault(pref.user_id, pref)
        return list(found.values())

    async def find_labor_budget(self, roster: RosterInfo) -> float | None:
        fixture = self.rosters.get(roster.id)
        return fixture.labor_budget if fixture else None


class InMemoryAuditLog:
    """AuditSink that keeps records in a list.

    Attributes:
        records: Records written so far, oldest first.

    """

    def __init__(self) -> None:
        """Initialize an empty log."""
        self.records: list[AuditRecord] = []

    async def write(self, record: AuditRecord) -> str:
        """Append a record and return its id."""
        self.records.append(record)
        logger.debug("audit_record_written", audit_id=record.id, sink="memory")
        return record.id

    def get(self, audit_id: str) -> AuditRecord | None:
        """Return the record with the given id, if present."""
        for record in self.records:
            if record.id == audit_id:
                return record
        return None
