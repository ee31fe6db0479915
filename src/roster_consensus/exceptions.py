"""Base exceptions for roster-consensus.

This module defines the root exception hierarchy for the entire
roster-consensus package. All domain-specific exceptions should
inherit from RosterConsensusError.
"""

__all__ = ["RosterConsensusError"]


class RosterConsensusError(Exception):
    """Base exception for all roster-consensus errors.

    Provides a common exception type for clients to catch engine errors
    without catching unrelated failures.
    """

    pass
