"""Unit tests for CostEvaluator."""

from datetime import timedelta

import pytest

from roster_consensus.core.evaluators.cost import CostEvaluator
from roster_consensus.models.enums import AgentRole, Recommendation
from roster_consensus.models.proposal import (
    OptimizationChange,
    ScheduleOptimization,
    ShiftAssignment,
)


def _by_name(components, name):
    return next(c for c in components if c.name == name)


class TestCostEvaluator:
    """Tests for cost scoring."""

    @pytest.fixture
    def evaluator(self) -> CostEvaluator:
        """Create a CostEvaluator with the default rate and premium."""
        return CostEvaluator()

    def test_shift_cost_splits_at_weekly_limit(self, evaluator, make_shift, monday) -> None:
        """Test that hours beyond the weekly limit are paid at the premium."""
        shift = make_shift("u1", monday + timedelta(hours=8), 8)

        cost = evaluator.shift_cost(shift, hours_before=36, max_weekly_hours=40)

        assert cost.regular_hours == 4
        assert cost.overtime_hours == 4
        assert cost.regular_cost == pytest.approx(800.0)
        assert cost.overtime_cost == pytest.approx(1120.0)
        assert cost.total_cost == pytest.approx(1920.0)

    def test_no_budget_gives_three_components(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that the budget component only appears with a budget."""
        proposed = make_shift("u1", monday + timedelta(hours=8), 8)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        components = evaluator.get_scoring_components(context)

        assert [c.name for c in components] == [
            "Overtime Cost Impact",
            "Regular Cost",
            "Cost Efficiency",
        ]
        assert _by_name(components, "Overtime Cost Impact").score == 100.0
        assert _by_name(components, "Regular Cost").score == 85.0
        assert _by_name(components, "Cost Efficiency").score == 100.0

    def test_budget_within_limit(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test a comfortable budget utilization scores full marks."""
        proposed = make_shift("u1", monday + timedelta(hours=8), 8)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), labor_budget=10000
        )

        components = evaluator.get_scoring_components(context)

        assert len(components) == 4
        assert _by_name(components, "Budget Compliance").score == 100.0

    def test_budget_exceeded(self, evaluator, make_shift, make_context, monday) -> None:
        """Test that going 10% over budget scores 50 minus the overage."""
        proposed = make_shift("u1", monday + timedelta(hours=8), 8)
        existing = [make_shift("u2", monday + timedelta(hours=8), 8)]
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed),
            existing_shifts=existing,
            labor_budget=2909.09,
        )

        budget = _by_name(evaluator.get_scoring_components(context), "Budget Compliance")

        assert budget.score == pytest.approx(40.0, abs=0.01)
        assert "Budget exceeded" in budget.reasoning

    def test_overtime_is_critical(
        self, evaluator, make_shift, make_context, monday
    ) -> None:
        """Test that a shift entirely in overtime rejects."""
        existing = [
            make_shift("u1", monday + timedelta(days=day, hours=8), 10)
            for day in range(4)
        ]
        proposed = make_shift("u1", monday + timedelta(days=4, hours=8), 4)
        context = make_context(
            ShiftAssignment(user_id="u1", shift=proposed), existing_shifts=existing
        )

        components = evaluator.get_scoring_components(context)
        decision = evaluator.evaluate(context)

        assert _by_name(components, "Overtime Cost Impact").score == 0.0
        assert _by_name(components, "Cost Efficiency").score == 71.0
        assert decision.recommendation == Recommendation.reject
        assert decision.confidence == 90
        assert any(s.startswith("Consider: 4.0h overtime") for s in decision.suggestions)

    def test_optimization_savings(self, evaluator, make_context) -> None:
        """Test the savings score for optimizations with and without savings."""
        change = OptimizationChange(
            shift_id="s1", current_user_id="u1", proposed_user_id="u2"
        )
        with_savings = make_context(
            ScheduleOptimization(changes=[change], expected_savings=300)
        )
        without = make_context(ScheduleOptimization(changes=[change]))

        assert evaluator.get_scoring_components(with_savings)[0].score == 80.0
        assert evaluator.get_scoring_components(without)[0].score == 30.0

    def test_custom_rate(self, make_shift, make_context, monday) -> None:
        """Test that the configured rate flows into the reasoning."""
        evaluator = CostEvaluator(hourly_rate=250.0, overtime_premium=1.5)
        proposed = make_shift("u1", monday + timedelta(hours=8), 4)
        context = make_context(ShiftAssignment(user_id="u1", shift=proposed))

        regular = _by_name(evaluator.get_scoring_components(context), "Regular Cost")

        assert regular.reasoning == "Regular cost: NOK 1000.00 for 4.0 hours"


class TestCostDebate:
    """Tests for the cost debate behavior."""

    @pytest.fixture
    def evaluator(self) -> CostEvaluator:
        """Create a CostEvaluator instance."""
        return CostEvaluator()

    @pytest.fixture
    def context(self, make_shift, make_context, monday):
        """Create a context for a plain day shift."""
        proposed = make_shift("u1", monday + timedelta(hours=8), 8)
        return make_context(ShiftAssignment(user_id="u1", shift=proposed))

    def test_defers_to_compliance(self, evaluator, context, make_decision) -> None:
        """Test that a compliance rejection is adopted at 90."""
        others = [make_decision(AgentRole.compliance, Recommendation.reject)]

        response = evaluator.respond_to_debate(context, others, "topic")

        assert response.new_recommendation == Recommendation.reject
        assert response.new_confidence == 90

    def test_softens_for_welfare_concerns(self, evaluator, context, make_decision) -> None:
        """Test that a welfare rejection with concerns softens to conditions."""
        others = [
            make_decision(AgentRole.compliance, Recommendation.approve),
            make_decision(
                AgentRole.employee_advocate,
                Recommendation.reject,
                concerns=["Preference concerns: 1 mismatches found"],
            ),
        ]

        response = evaluator.respond_to_debate(context, others, "topic")

        assert response.new_recommendation == Recommendation.approve_with_conditions
        assert response.new_confidence == 70

    def test_welfare_rejection_without_concerns_is_ignored(
        self, evaluator, context, make_decision
    ) -> None:
        """Test that a bare welfare rejection does not move cost."""
        others = [make_decision(AgentRole.employee_advocate, Recommendation.reject)]

        response = evaluator.respond_to_debate(context, others, "topic")

        assert response.changed_position is False
