"""Exceptions for core module.

This module defines exceptions raised while building decision contexts,
evaluating proposals, and editing or transitioning decisions.
"""

from roster_consensus.exceptions import RosterConsensusError

__all__ = [
    "ComponentNotEditableError",
    "ComponentNotFoundError",
    "ContextBuildError",
    "EvaluationError",
    "InvalidDecisionStateError",
    "InvalidEditError",
    "RosterNotFoundError",
]


class EvaluationError(RosterConsensusError):
    """Base exception for evaluation-related errors."""

    pass


class ContextBuildError(EvaluationError):
    """Raised when the decision context cannot be assembled."""

    pass


class RosterNotFoundError(ContextBuildError):
    """Raised when a request names a roster the data source does not know.

    Attributes:
        roster_id: The missing roster identifier.

    """

    def __init__(self, roster_id: str) -> None:
        """Initialize RosterNotFoundError.

        Args:
            roster_id: The missing roster identifier.

        """
        self.roster_id = roster_id
        super().__init__(f"Roster not found: {roster_id}")


class InvalidEditError(EvaluationError):
    """Base exception for rejected component edits."""

    pass


class ComponentNotFoundError(InvalidEditError):
    """Raised when an edit addresses an unknown component.

    Attributes:
        component_id: The unknown component identifier.

    """

    def __init__(self, component_id: str) -> None:
        """Initialize ComponentNotFoundError.

        Args:
            component_id: The unknown component identifier.

        """
        self.component_id = component_id
        super().__init__(f"Component not found: {component_id}")


class ComponentNotEditableError(InvalidEditError):
    """Raised when an edit targets a component reviewers may not change.

    Compliance components encode statutory limits and are read-only.

    Attributes:
        component_id: The protected component identifier.
        component_name: Display name of the protected component.

    """

    def __init__(self, component_id: str, component_name: str) -> None:
        """Initialize ComponentNotEditableError.

        Args:
            component_id: The protected component identifier.
            component_name: Display name of the protected component.

        """
        self.component_id = component_id
        self.component_name = component_name
        super().__init__(
            f"Component '{component_name}' ({component_id}) is not editable"
        )


class InvalidDecisionStateError(EvaluationError):
    """Raised when an invalid decision lifecycle transition is attempted."""

    pass
