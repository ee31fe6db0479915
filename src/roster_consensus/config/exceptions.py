"""Exceptions for config module.

This module defines exceptions related to configuration loading,
parsing, and validation errors.
"""

from roster_consensus.exceptions import RosterConsensusError

__all__ = ["ConfigurationError"]


class ConfigurationError(RosterConsensusError):
    """Base exception for configuration-related errors."""

    pass
