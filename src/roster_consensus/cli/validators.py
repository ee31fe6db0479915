"""Validation utilities for CLI arguments."""

import argparse
from pathlib import Path

__all__ = ["validate_args"]

_YAML_SUFFIXES = (".yaml", ".yml")


def validate_args(args: argparse.Namespace) -> str | None:
    """Validate CLI arguments for consistency.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Error message if validation fails, None if valid.

    """
    if getattr(args, "agents", False):
        return None

    scenario = getattr(args, "scenario", None)
    if scenario is None:
        return "Error: --scenario is required (or use --agents)"

    scenario_path = Path(scenario)
    if not scenario_path.exists():
        return f"Error: Scenario file not found: {scenario}"
    if scenario_path.suffix not in _YAML_SUFFIXES:
        return f"Error: Scenario file must be YAML: {scenario}"

    if getattr(args, "batch", False) and getattr(args, "detailed", False):
        return "Error: --batch and --detailed cannot be combined"

    edits = getattr(args, "edits", None)
    if edits is not None:
        if not getattr(args, "detailed", False):
            return "Error: --edits requires --detailed"
        if not Path(edits).exists():
            return f"Error: Edits file not found: {edits}"

    return None
