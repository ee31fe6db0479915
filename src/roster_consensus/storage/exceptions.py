"""Exceptions for the storage package."""

from roster_consensus.exceptions import RosterConsensusError

__all__ = ["StorageError"]


class StorageError(RosterConsensusError):
    """Exception for audit log writing and loading failures."""

    pass
