"""YAML loaders for scenario and edit files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from roster_consensus.config.exceptions import ConfigurationError
from roster_consensus.config.models import EditSpec, Scenario

__all__ = ["load_edits", "load_scenario", "load_yaml_file"]


def load_yaml_file(
    path: Path,
    error_class: type[Exception] = ConfigurationError,
    label: str = "File",
) -> dict[str, Any]:
    """Load and validate a YAML file, returning the parsed dict.

    Args:
        path: Path to the YAML file.
        error_class: Exception class to raise on validation errors.
        label: Human-readable label for error messages (e.g. "Scenario file").

    Returns:
        Parsed dictionary from the YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        error_class: If the file is empty, not a mapping, or invalid YAML.

    """
    if not path.exists():
        raise FileNotFoundError(f"{label} not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error_class(f"Failed to parse YAML file {path}: {e}") from e

    if data is None:
        raise error_class(f"Empty YAML file: {path}")

    if not isinstance(data, dict):
        raise error_class(
            f"Invalid YAML structure: expected mapping, got {type(data).__name__}"
        )

    return data


def load_scenario(path: Path) -> Scenario:
    """Load a scenario file.

    Args:
        path: Path to the scenario YAML file.

    Returns:
        The validated Scenario.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file cannot be parsed or validated.

    """
    data = load_yaml_file(path, label="Scenario file")
    try:
        return Scenario.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid scenario file {path}: {e}") from e


def load_edits(path: Path) -> list[EditSpec]:
    """Load component edits from a YAML file with a top-level ``edits`` list.

    Args:
        path: Path to the edits YAML file.

    Returns:
        The validated edits, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file cannot be parsed or validated.

    """
    data = load_yaml_file(path, label="Edits file")
    raw_edits = data.get("edits")
    if not isinstance(raw_edits, list):
        raise ConfigurationError(f"Edits file {path} must contain an 'edits' list")
    try:
        return [EditSpec.model_validate(item) for item in raw_edits]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid edits file {path}: {e}") from e
