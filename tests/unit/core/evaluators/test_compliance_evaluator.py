"""Unit tests for ComplianceEvaluator."""

from datetime import timedelta

import pytest

from roster_consensus.core.evaluators.compliance import ComplianceEvaluator
from roster_consensus.models.enums import AgentRole, Recommendation
from roster_consensus.models.proposal import (
    OptimizationChange,
    ScheduleAssignment,
    ScheduleCreation,
    ScheduleOptimization,
    ShiftAssignment,
    ShiftSwap,
)


def _by_name(components, name):
    return next(c for c in components if c.name == name)


class TestComplianceEvaluator:
    """Tests for the statutory working-time checks."""

    @pytest.fixture
    def evaluator(self) -> ComplianceEvaluator:
        """Create a ComplianceEvaluator instance."""
        return ComplianceEvaluator()

    def test_short_rest_is_a_critical_violation(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that a 2h gap after a day shift rejects with confidence 90."""
        existing = make_shift("u1", monday + timedelta(hours=8), 8, shift_id="s1")
        proposed = make_shift("u1", monday + timedelta(hours=18), 4)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=[existing]
        )

        components = evaluator.get_scoring_components(context)
        daily_rest = _by_name(components, "Daily Rest Period")
        decision = evaluator.evaluate(context)

        assert daily_rest.score == 0.0
        assert "VIOLATION" in daily_rest.reasoning
        assert "11" in daily_rest.reasoning
        assert decision.recommendation == Recommendation.reject
        assert decision.confidence == 90
        assert daily_rest.reasoning in decision.concerns

    @pytest.mark.parametrize(
        ("start", "expected"),
        [
            (timedelta(hours=16), "Only 0.0h rest"),
            (timedelta(hours=16, minutes=30), "Only 0.5h rest"),
            (timedelta(hours=15), "Shifts overlap by 1.0h"),
        ],
    )
    def test_sub_hour_and_overlapping_gaps_are_violations(
        self, evaluator, make_shift, make_context, monday, start, expected
    ) -> None:
        """Test that gaps under an hour, or none at all, still violate daily rest."""
        existing = make_shift("u1", monday + timedelta(hours=8), 8, shift_id="s1")
        proposed = make_shift("u1", monday + start, 4)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=[existing]
        )

        daily_rest = _by_name(
            evaluator.get_scoring_components(context), "Daily Rest Period"
        )
        decision = evaluator.evaluate(context)

        assert daily_rest.score == 0.0
        assert daily_rest.reasoning.startswith("VIOLATION")
        assert expected in daily_rest.reasoning
        assert decision.recommendation == Recommendation.reject
        assert decision.confidence == 90

    def test_clean_assignment_approves(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that a lone shift passes every rule."""
        proposed = make_shift("u1", monday + timedelta(hours=9), 8)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        components = evaluator.get_scoring_components(context)
        decision = evaluator.evaluate(context)

        assert [c.name for c in components] == [
            "Daily Rest Period",
            "Weekly Rest Period",
            "Daily Working Hours",
            "Weekly Working Hours",
            "Overtime Limits",
        ]
        assert all(c.score == 100.0 for c in components)
        assert decision.recommendation == Recommendation.approve
        assert decision.confidence == 100
        assert decision.agent_role == AgentRole.compliance

    def test_components_are_not_editable(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that legal components are locked against reviewer edits."""
        proposed = make_shift("u1", monday + timedelta(hours=9), 8)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        components = evaluator.get_scoring_components(context)

        assert components
        assert not any(c.is_editable for c in components)

    def test_weekly_rest_counts_gap_from_week_start(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that the rest before the first shift of the week counts."""
        existing = [
            make_shift("u1", monday + timedelta(days=day, hours=8), 12)
            for day in range(3, 7)
        ]
        proposed = make_shift("u1", monday + timedelta(days=2, hours=8), 12)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        weekly_rest = _by_name(
            evaluator.get_scoring_components(context), "Weekly Rest Period"
        )

        assert weekly_rest.score == 100.0
        assert "56.0h" in weekly_rest.reasoning

    def test_weekly_rest_violation(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that working every day of the week violates weekly rest."""
        existing = [
            make_shift("u1", monday + timedelta(days=day, hours=8), 12)
            for day in range(6)
        ]
        proposed = make_shift("u1", monday + timedelta(days=6, hours=8), 12)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        weekly_rest = _by_name(
            evaluator.get_scoring_components(context), "Weekly Rest Period"
        )
        decision = evaluator.evaluate(context)

        assert weekly_rest.score == 0.0
        assert weekly_rest.reasoning.startswith("VIOLATION")
        assert decision.recommendation == Recommendation.reject

    def test_weekly_hours_and_overtime(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that 46 weekly hours exceed the limit with overtime within cap."""
        existing = [
            make_shift("u1", monday + timedelta(days=day, hours=8), 10)
            for day in range(4)
        ]
        proposed = make_shift("u1", monday + timedelta(days=4, hours=8), 6)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        components = evaluator.get_scoring_components(context)

        assert _by_name(components, "Weekly Working Hours").score == pytest.approx(85.0)
        assert _by_name(components, "Overtime Limits").score == 70.0
        assert _by_name(components, "Daily Rest Period").score == 100.0

    def test_other_users_shifts_are_ignored(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that colleagues' shifts do not count against the employee."""
        existing = make_shift("u2", monday + timedelta(hours=8), 8)
        proposed = make_shift("u1", monday + timedelta(hours=18), 4)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=[existing]
        )

        assert evaluator.evaluate(context).recommendation == Recommendation.approve

    def test_schedule_checks_earlier_assignments(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that assignments in one schedule are checked against each other."""
        proposal = ScheduleCreation(
            assignments=[
                ScheduleAssignment(
                    user_id="u1", shift=make_shift("u1", monday + timedelta(hours=8), 8)
                ),
                ScheduleAssignment(
                    user_id="u1", shift=make_shift("u1", monday + timedelta(hours=18), 4)
                ),
            ]
        )
        context = make_context(proposal)

        components = evaluator.get_scoring_components(context)

        assert len(components) == 10
        assert components[5].name == "Daily Rest Period"
        assert components[5].score == 0.0
        assert evaluator.evaluate(context).recommendation == Recommendation.reject

    def test_swap_excludes_exchanged_shifts(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that each side is checked without the shift it gives away."""
        given = make_shift("u1", monday + timedelta(hours=8), 8, shift_id="s1")
        received = make_shift("u2", monday + timedelta(hours=10), 8, shift_id="s2")
        proposal = ShiftSwap(
            requester_id="u1",
            target_user_id="u2",
            shift_to_swap=given,
            shift_to_receive=received,
        )
        context = make_context(proposal, existing_shifts=[given, received])

        components = evaluator.get_scoring_components(context)

        assert len(components) == 10
        assert all(c.score == 100.0 for c in components)

    def test_optimization_flagged_for_compliance(
        self, evaluator, make_context
    ) -> None:
        """Test the single optimization component when compliance is affected."""
        proposal = ScheduleOptimization(
            changes=[
                OptimizationChange(shift_id="s1", current_user_id="u1", proposed_user_id="u2")
            ],
            expected_savings=500,
            affects_compliance=True,
        )
        context = make_context(proposal)

        components = evaluator.get_scoring_components(context)
        decision = evaluator.evaluate(context)

        assert len(components) == 1
        assert components[0].score == 40.0
        assert decision.recommendation == Recommendation.needs_modification

    def test_suggestions_cite_violated_rule(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that violated provisions become review suggestions."""
        existing = make_shift("u1", monday + timedelta(hours=8), 8)
        proposed = make_shift("u1", monday + timedelta(hours=18), 4)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=[existing]
        )

        decision = evaluator.evaluate(context)

        assert (
            "Review Arbeidsmiljøloven § 10-8(1): Minimum 11 hours continuous rest "
            "between shifts"
        ) in decision.suggestions


class TestComplianceDebate:
    """Tests for the compliance debate behavior."""

    @pytest.fixture
    def evaluator(self) -> ComplianceEvaluator:
        """Create a ComplianceEvaluator instance."""
        return ComplianceEvaluator()

    def test_refuses_override_topics(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that requests for an exception are refused."""
        proposed = make_shift("u1", monday + timedelta(hours=9), 8)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        response = evaluator.respond_to_debate(
            context, [], "Round 1: Addressing concerns - grant an Exception"
        )

        assert response.changed_position is False
        assert "cannot be overridden" in response.response

    def test_echoes_shared_rejection(
        self, evaluator, make_shift, make_context, make_decision, monday
    ) -> None:
        """Test that a rejecting evaluator echoes another rejection at 95."""
        existing = make_shift("u1", monday + timedelta(hours=8), 8)
        proposed = make_shift("u1", monday + timedelta(hours=18), 4)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=[existing]
        )
        others = [make_decision(AgentRole.employee_advocate, Recommendation.reject)]

        response = evaluator.respond_to_debate(context, others, "Round 1: topic")

        assert response.changed_position is True
        assert response.new_recommendation == Recommendation.reject
        assert response.new_confidence == 95

    def test_holds_position_when_compliant(
        self, evaluator, make_shift, make_context, make_decision, monday
    ) -> None:
        """Test that a compliant proposal is not echoed as a rejection."""
        proposed = make_shift("u1", monday + timedelta(hours=9), 8)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))
        others = [make_decision(AgentRole.cost_optimizer, Recommendation.reject)]

        response = evaluator.respond_to_debate(context, others, "Round 1: topic")

        assert response.changed_position is False
