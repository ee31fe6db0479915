"""Pytest configuration and shared fixtures for the roster-consensus test suite.

This module provides factories for shifts, decision contexts and evaluator
decisions, anchored on a fixed week so that weekday- and notice-dependent
rules evaluate deterministically.
"""

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

import pytest

from roster_consensus.models.context import DecisionContext
from roster_consensus.models.decision import AgentDecision
from roster_consensus.models.enums import AgentRole, DecisionType, Recommendation
from roster_consensus.models.roster import EmployeePreference, Shift

# Monday of the ISO week most tests plan shifts in.
MONDAY = datetime(2026, 3, 2)

# Evaluation time: four weeks before MONDAY, well outside the notice window.
AS_OF = datetime(2026, 2, 1)

AGENT_NAMES = {
    AgentRole.compliance: "Compliance Guardian",
    AgentRole.cost_optimizer: "Budget Analyst",
    AgentRole.employee_advocate: "Employee Advocate",
    AgentRole.operations: "Operations Expert",
}


@pytest.fixture
def monday() -> datetime:
    """Provide midnight of the Monday tests plan shifts around."""
    return MONDAY


@pytest.fixture
def as_of() -> datetime:
    """Provide the fixed evaluation time."""
    return AS_OF


@pytest.fixture
def make_shift() -> Callable[..., Shift]:
    """Provide a factory for shifts given a start and a length in hours.

    Returns:
        Callable building a Shift from user_id, start, hours and optional id.
    """

    def _make(
        user_id: str,
        start: datetime,
        hours: float,
        shift_id: str | None = None,
        break_minutes: int = 0,
    ) -> Shift:
        return Shift(
            id=shift_id,
            user_id=user_id,
            start_time=start,
            end_time=start + timedelta(hours=hours),
            break_minutes=break_minutes,
        )

    return _make


@pytest.fixture
def make_context(as_of: datetime) -> Callable[..., DecisionContext]:
    """Provide a factory for decision contexts around a proposal.

    The decision type defaults to the proposal's own kind.
    """

    def _make(
        proposal,
        existing_shifts: Sequence[Shift] = (),
        preferences: Sequence[EmployeePreference] = (),
        labor_budget: float | None = None,
        decision_type: DecisionType | None = None,
    ) -> DecisionContext:
        return DecisionContext(
            decision_type=decision_type or DecisionType(proposal.type),
            proposal=proposal,
            roster_id="roster-1",
            existing_shifts=list(existing_shifts),
            employee_preferences=list(preferences),
            labor_budget=labor_budget,
            as_of=as_of,
        )

    return _make


@pytest.fixture
def make_decision(as_of: datetime) -> Callable[..., AgentDecision]:
    """Provide a factory for evaluator decisions with sensible defaults."""

    def _make(
        role: AgentRole,
        recommendation: Recommendation,
        confidence: int = 80,
        score: int = 80,
        reasoning: Sequence[str] = (),
        concerns: Sequence[str] = (),
        suggestions: Sequence[str] = (),
    ) -> AgentDecision:
        return AgentDecision(
            agent_role=role,
            agent_name=AGENT_NAMES[role],
            recommendation=recommendation,
            confidence=confidence,
            score=score,
            reasoning=list(reasoning),
            concerns=list(concerns),
            suggestions=list(suggestions),
            evaluated_at=as_of,
        )

    return _make
