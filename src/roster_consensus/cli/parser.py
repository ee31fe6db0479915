"""CLI argument parser configuration.

This module provides the argument parser for the roster-consensus CLI.
"""

import argparse

from roster_consensus import __version__

__all__ = ["create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with all CLI options.

    """
    parser = argparse.ArgumentParser(
        prog="roster-consensus",
        description=(
            "Roster Consensus - Evaluate roster changes with a panel of "
            "compliance, cost, employee-welfare and operations evaluators."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evaluate the request in a scenario file
  roster-consensus --scenario scenarios/late-shift.yaml

  # Show the full, editable breakdown
  roster-consensus --scenario scenarios/late-shift.yaml --detailed

  # Apply reviewer edits to the breakdown
  roster-consensus --scenario scenarios/late-shift.yaml --detailed --edits edits.yaml

  # Evaluate the scenario's batch of candidate assignments
  roster-consensus --scenario scenarios/week-12.yaml --batch --json

  # Append audit records to a file
  roster-consensus --scenario scenarios/late-shift.yaml --audit-log audit.jsonl

  # List the evaluator panel
  roster-consensus --agents
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--scenario",
        type=str,
        metavar="FILE",
        help="YAML scenario with rosters and a request or batch to evaluate",
    )

    parser.add_argument(
        "--detailed",
        action="store_true",
        help="Produce the transparent, editable decision instead of the quick result",
    )

    parser.add_argument(
        "--edits",
        type=str,
        metavar="FILE",
        help="YAML file of component edits to apply (requires --detailed)",
    )

    parser.add_argument(
        "--batch",
        action="store_true",
        help="Evaluate the scenario's batch of candidate assignments",
    )

    parser.add_argument(
        "--agents",
        action="store_true",
        help="List the evaluator panel and exit",
    )

    parser.add_argument(
        "--audit-log",
        type=str,
        metavar="FILE",
        dest="audit_log",
        help="Append audit records to this JSON-lines file",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with debug logging",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text",
    )

    return parser
