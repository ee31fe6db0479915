"""Review lifecycle of transparent decisions.

This module provides a generic mixin for state machine functionality and
the DecisionLifecycle that governs how a TransparentDecision moves from
pending review through edits to approval or rejection.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Generic, TypeVar

from roster_consensus.core.exceptions import InvalidDecisionStateError
from roster_consensus.logging_config import get_logger
from roster_consensus.models.enums import DecisionStatus
from roster_consensus.models.transparent import TransparentDecision

__all__ = ["DecisionLifecycle", "StateMachineMixin"]

logger = get_logger(__name__)

StateT = TypeVar("StateT")


class StateMachineMixin(Generic[StateT]):
    """Mixin providing common state machine operations.

    Subclasses define ``_VALID_TRANSITIONS`` and ``_TERMINAL_STATES`` as
    class attributes and implement ``_get_current_state``.

    Type Parameters:
        StateT: The enum type representing possible states.

    """

    _VALID_TRANSITIONS: dict[StateT, set[StateT]]
    _TERMINAL_STATES: set[StateT]

    @abstractmethod
    def _get_current_state(self) -> StateT:
        """Get the current state of the entity.

        Returns:
            The current state.

        """
        ...

    def can_transition_to(self, new_state: StateT) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            new_state: The target state to check.

        Returns:
            True if the transition is allowed, False otherwise.

        """
        current = self._get_current_state()
        return new_state in self._VALID_TRANSITIONS.get(current, set())

    def is_terminal(self) -> bool:
        """Check if the entity is in a terminal state."""
        return self._get_current_state() in self._TERMINAL_STATES

    def get_valid_transitions(self) -> list[StateT]:
        """Get the list of valid states the entity can transition to."""
        current = self._get_current_state()
        return list(self._VALID_TRANSITIONS.get(current, set()))


class DecisionLifecycle(StateMachineMixin[DecisionStatus]):
    """State machine over a TransparentDecision's review status.

    Transitions never mutate the wrapped decision; each returns an updated
    copy.

    Attributes:
        decision: The decision whose status is governed.

    """

    _VALID_TRANSITIONS = {
        DecisionStatus.pending_review: {
            DecisionStatus.modified,
            DecisionStatus.approved,
            DecisionStatus.rejected,
        },
        DecisionStatus.modified: {
            DecisionStatus.modified,
            DecisionStatus.approved,
            DecisionStatus.rejected,
        },
        DecisionStatus.approved: set(),
        DecisionStatus.rejected: set(),
    }
    _TERMINAL_STATES = {DecisionStatus.approved, DecisionStatus.rejected}

    def __init__(self, decision: TransparentDecision) -> None:
        """Initialize the lifecycle.

        Args:
            decision: The decision to govern.

        """
        self.decision = decision

    def _get_current_state(self) -> DecisionStatus:
        return self.decision.status

    def ensure_can_transition(self, new_state: DecisionStatus) -> None:
        """Raise unless the decision may move to ``new_state``.

        Raises:
            InvalidDecisionStateError: If the transition is not allowed.

        """
        if self.is_terminal():
            raise InvalidDecisionStateError(
                f"Decision {self.decision.id} is already "
                f"{self.decision.status.value} and can no longer change"
            )
        if not self.can_transition_to(new_state):
            current = self._get_current_state()
            raise InvalidDecisionStateError(
                f"Cannot transition decision {self.decision.id} from "
                f"{current.value} to {new_state.value}. Valid transitions: "
                f"{sorted(s.value for s in self.get_valid_transitions())}"
            )

    def transition_to(
        self,
        new_state: DecisionStatus,
        reviewed_by: str | None = None,
        note: str | None = None,
    ) -> TransparentDecision:
        """Move the decision to a new status.

        Args:
            new_state: Target status.
            reviewed_by: Reviewer recorded on approval or rejection.
            note: Note recorded on approval or rejection.

        Returns:
            An updated copy of the decision.

        Raises:
            InvalidDecisionStateError: If the transition is not allowed.

        """
        self.ensure_can_transition(new_state)
        update: dict[str, object] = {"status": new_state}
        if new_state in self._TERMINAL_STATES:
            update["reviewed_by"] = reviewed_by
            update["review_note"] = note

        logger.info(
            "decision_status_changed",
            decision_id=self.decision.id,
            from_status=self.decision.status.value,
            to_status=new_state.value,
        )
        return self.decision.model_copy(update=update)
