"""CLI command implementations."""

from roster_consensus.cli.commands.agents import AgentsCommand
from roster_consensus.cli.commands.base import BaseCommand, CommandResult
from roster_consensus.cli.commands.evaluate import EvaluateCommand, resolve_edits

__all__ = [
    "AgentsCommand",
    "BaseCommand",
    "CommandResult",
    "EvaluateCommand",
    "resolve_edits",
]
