"""CLI main entry point.

This module provides the main entry point for the roster-consensus CLI.
"""

import argparse
import asyncio
import sys
import traceback

from roster_consensus.cli.commands import AgentsCommand, EvaluateCommand
from roster_consensus.cli.parser import create_parser
from roster_consensus.cli.validators import validate_args
from roster_consensus.logging_config import configure_logging, get_logger

__all__ = ["CommandDispatcher", "main"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers."""

    def __init__(self) -> None:
        """Initialize the command dispatcher with all command handlers."""
        self._agents_cmd = AgentsCommand()
        self._evaluate_cmd = EvaluateCommand()

    async def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch to the appropriate command based on arguments.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        """
        if getattr(args, "agents", False):
            result = await self._agents_cmd.execute(args)
        else:
            result = await self._evaluate_cmd.execute(args)
        print(result.output)
        return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    _setup_logging(getattr(args, "verbose", False))

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        dispatcher = CommandDispatcher()
        return asyncio.run(dispatcher.dispatch(args))

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Whether to enable debug-level logging to console.

    """
    configure_logging(verbose=verbose, json_output=False)


if __name__ == "__main__":
    sys.exit(main())
