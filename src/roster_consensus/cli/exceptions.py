"""Exceptions for the CLI module.

This module defines exceptions specific to CLI operations.
"""

from roster_consensus.exceptions import RosterConsensusError

__all__ = [
    "CLIError",
    "CommandError",
]


class CLIError(RosterConsensusError):
    """Base exception for CLI-related errors."""

    pass


class CommandError(CLIError):
    """Raised when a command cannot be carried out with the given input."""

    pass
