"""Collaborator interfaces the engine reads from and writes to.

The engine never owns roster storage. It reads through a RosterDataSource
and hands finished audit records to an AuditSink; both are structural
protocols so any object with the right coroutine methods will do.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from roster_consensus.models.consensus import AuditRecord
from roster_consensus.models.roster import EmployeePreference, RosterInfo, Shift

__all__ = ["AuditSink", "RosterDataSource"]


@runtime_checkable
class RosterDataSource(Protocol):
    """Read-only access to roster data.

    Collection-returning methods may return None, which callers treat as
    empty.
    """

    async def get_roster(self, roster_id: str) -> RosterInfo | None: ...

    async def find_shifts_by_roster(self, roster_id: str) -> list[Shift] | None: ...

    async def find_preferences(
        self, user_ids: Iterable[str]
    ) -> list[EmployeePreference] | None: ...

    async def find_labor_budget(self, roster: RosterInfo) -> float | None: ...


@runtime_checkable
class AuditSink(Protocol):
    """Destination for consensus audit records."""

    async def write(self, record: AuditRecord) -> str: ...
