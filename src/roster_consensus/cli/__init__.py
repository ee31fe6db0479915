"""Command-line interface for roster-consensus."""

from roster_consensus.cli.main import main

__all__ = ["main"]
