"""Roster data sources and audit sinks."""

from roster_consensus.storage.exceptions import StorageError
from roster_consensus.storage.interfaces import AuditSink, RosterDataSource
from roster_consensus.storage.jsonl import JsonlAuditLog
from roster_consensus.storage.memory import InMemoryAuditLog, InMemoryRosterStore

__all__ = [
    "AuditSink",
    "InMemoryAuditLog",
    "InMemoryRosterStore",
    "JsonlAuditLog",
    "RosterDataSource",
    "StorageError",
]
