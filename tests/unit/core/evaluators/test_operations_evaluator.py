"""Unit tests for OperationsEvaluator."""

from datetime import timedelta

import pytest

from roster_consensus.core.evaluators.operations import OperationsEvaluator, is_peak_hour
from roster_consensus.models.enums import AgentRole, Recommendation
from roster_consensus.models.proposal import (
    OptimizationChange,
    ScheduleAssignment,
    ScheduleCreation,
    ScheduleOptimization,
    ShiftAssignment,
)
from roster_consensus.models.roster import CoverageGoal


def _by_name(components, name):
    return next(c for c in components if c.name == name)


class TestOperationsEvaluator:
    """Tests for operational scoring."""

    @pytest.fixture
    def evaluator(self) -> OperationsEvaluator:
        """Create an OperationsEvaluator instance."""
        return OperationsEvaluator()

    def test_peak_hours(self) -> None:
        """Test the lunch and dinner rush windows."""
        assert is_peak_hour(11)
        assert is_peak_hour(20)
        assert not is_peak_hour(15)
        assert not is_peak_hour(21)

    def test_empty_slot_is_a_coverage_gap(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that staffing an empty peak slot scores full coverage."""
        proposed = make_shift("u1", monday + timedelta(hours=12), 6)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        coverage = _by_name(evaluator.get_scoring_components(context), "Coverage Analysis")

        assert coverage.score == 100.0
        assert "fills a coverage gap" in coverage.reasoning
        assert any(r.source == "Peak Hours" for r in coverage.evidence)

    @pytest.mark.parametrize(
        ("start_hour", "colleagues", "expected"),
        [
            (12, 1, 80.0),
            (12, 2, 90.0),
            (9, 2, 60.0),
        ],
    )
    def test_coverage_levels(
        self, evaluator, make_shift, make_context, monday, start_hour, colleagues, expected
    ) -> None:
        """Test the coverage score by staffing ratio."""
        start = monday + timedelta(hours=start_hour)
        existing = [make_shift(f"c{i}", start, 6) for i in range(colleagues)]
        proposed = make_shift("u1", start, 6)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        coverage = _by_name(evaluator.get_scoring_components(context), "Coverage Analysis")

        assert coverage.score == expected

    def test_experience_from_similar_shifts(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that three similar shifts in history count as experienced."""
        existing = [
            make_shift("u1", monday + timedelta(days=day, hours=9), 6) for day in range(3)
        ]
        proposed = make_shift("u1", monday + timedelta(days=3, hours=10), 6)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        skill = _by_name(evaluator.get_scoring_components(context), "Skill Match")

        assert skill.score == 90.0

    def test_short_shift_is_less_efficient(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test the short-shift penalty."""
        proposed = make_shift("u1", monday + timedelta(hours=9), 3)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        efficiency = _by_name(
            evaluator.get_scoring_components(context), "Operational Efficiency"
        )

        assert efficiency.score == 65.0

    def test_handoff_bonus(self, evaluator, make_shift, make_context, monday) -> None:
        """Test that starting as a colleague leaves earns the handoff bonus."""
        existing = [make_shift("u2", monday + timedelta(hours=8), 6)]
        proposed = make_shift("u1", monday + timedelta(hours=14), 6)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        efficiency = _by_name(
            evaluator.get_scoring_components(context), "Operational Efficiency"
        )

        assert efficiency.score == 95.0

    def test_coverage_goals(self, evaluator, make_shift, make_context, monday) -> None:
        """Test that half the goals met scores 50."""
        proposal = ScheduleCreation(
            assignments=[
                ScheduleAssignment(
                    user_id="u1", shift=make_shift("u1", monday + timedelta(hours=8), 8)
                )
            ],
            coverage_goals=[
                CoverageGoal(
                    start=monday + timedelta(hours=9),
                    end=monday + timedelta(hours=10),
                    minimum_employees=1,
                ),
                CoverageGoal(
                    start=monday + timedelta(hours=20),
                    end=monday + timedelta(hours=21),
                    minimum_employees=1,
                ),
            ],
        )

        components = evaluator.get_scoring_components(make_context(proposal))

        assert len(components) == 1
        assert components[0].score == 50.0
        assert components[0].reasoning == "1/2 coverage goals met"

    def test_optimization_with_unknown_shift(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that reassigning shifts missing from the roster scores 60."""
        existing = [make_shift("u1", monday + timedelta(hours=8), 8, shift_id="s1")]
        proposal = ScheduleOptimization(
            changes=[
                OptimizationChange(shift_id="s9", current_user_id="u1", proposed_user_id="u2")
            ]
        )

        components = evaluator.get_scoring_components(
            make_context(proposal, existing_shifts=existing)
        )

        assert components[0].name == "Reassignment Coverage"
        assert components[0].score == 60.0


class TestOperationsDebate:
    """Tests for the operations debate behavior."""

    @pytest.fixture
    def evaluator(self) -> OperationsEvaluator:
        """Create an OperationsEvaluator instance."""
        return OperationsEvaluator()

    def test_defers_to_compliance(
        self, evaluator, make_shift, make_context, make_decision, monday
    ) -> None:
        """Test that a compliance rejection is adopted at 90."""
        context = make_context(
            ShiftAssignment(
                user_id="u1", shift=make_shift("u1", monday + timedelta(hours=12), 6)
            )
        )
        others = [make_decision(AgentRole.compliance, Recommendation.reject)]

        response = evaluator.respond_to_debate(context, others, "topic")

        assert response.new_recommendation == Recommendation.reject
        assert response.new_confidence == 90

    def test_defends_coverage_gap(
        self, evaluator, make_shift, make_context, make_decision, monday
    ) -> None:
        """Test that a gap-filling shift is defended against a welfare rejection."""
        context = make_context(
            ShiftAssignment(
                user_id="u1", shift=make_shift("u1", monday + timedelta(hours=12), 6)
            )
        )
        others = [
            make_decision(AgentRole.employee_advocate, Recommendation.reject, score=40)
        ]

        response = evaluator.respond_to_debate(context, others, "topic")

        assert response.changed_position is False
        assert "coverage gap" in response.response

    def test_yields_to_low_welfare_score_without_gap(
        self, evaluator, make_shift, make_context, make_decision, monday
    ) -> None:
        """Test that operations adopts welfare's position when coverage is fine."""
        existing = [make_shift("u2", monday + timedelta(hours=18), 5)]
        proposed = make_shift("u1", monday + timedelta(hours=20), 6)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )
        others = [
            make_decision(AgentRole.employee_advocate, Recommendation.reject, score=40)
        ]

        response = evaluator.respond_to_debate(context, others, "topic")

        assert response.changed_position is True
        assert response.new_recommendation == Recommendation.reject
        assert response.new_confidence == 75
