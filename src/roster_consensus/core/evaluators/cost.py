"""Cost evaluator: overtime exposure, budget fit and cost efficiency.

Weekly hours are measured with the same ISO-week window and shift-hours
calculation the compliance evaluator uses, so overtime here begins exactly
where the weekly-hours limit is exceeded there.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from roster_consensus.config.defaults import DEFAULT_HOURLY_RATE, DEFAULT_OVERTIME_PREMIUM
from roster_consensus.core.evaluators.base import BaseEvaluator, make_evidence
from roster_consensus.core.evaluators.shift_math import (
    round_half_up,
    shift_hours,
    week_bounds,
)
from roster_consensus.models.context import DecisionContext
from roster_consensus.models.decision import AgentDecision, DebateResponse
from roster_consensus.models.enums import (
    AgentRole,
    EvidenceImpact,
    EvidenceType,
    Recommendation,
)
from roster_consensus.models.evidence import AgentPersona, ScoringComponent
from roster_consensus.models.proposal import (
    ScheduleCreation,
    ScheduleOptimization,
    ShiftAssignment,
    ShiftSwap,
)
from roster_consensus.models.roster import Shift

__all__ = ["CostEvaluator", "ShiftCost"]

OVERTIME_COST = "Overtime Cost Impact"


@dataclass(frozen=True)
class ShiftCost:
    """Cost breakdown of one shift given the hours already worked that week."""

    regular_hours: float
    overtime_hours: float
    regular_cost: float
    overtime_cost: float

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours

    @property
    def total_cost(self) -> float:
        return self.regular_cost + self.overtime_cost


class CostEvaluator(BaseEvaluator):
    """Budget Analyst: minimizes overtime and keeps labor within budget.

    Attributes:
        hourly_rate: Base hourly rate in NOK.
        overtime_premium: Multiplier applied to overtime hours.

    """

    persona = AgentPersona(
        role=AgentRole.cost_optimizer,
        name="Budget Analyst",
        description=(
            "Labor cost optimization specialist focused on efficient resource allocation"
        ),
        expertise=[
            "Labor cost calculation and forecasting",
            "Overtime cost analysis",
            "Budget variance tracking",
            "Cost-per-shift optimization",
        ],
        priorities=[
            "Minimize unnecessary overtime costs",
            "Stay within labor budget",
            "Balance cost with quality of service",
        ],
        component_weights={
            "overtime_cost": 0.35,
            "regular_cost": 0.25,
            "budget_compliance": 0.25,
            "efficiency": 0.15,
        },
    )
    critical_components = frozenset({OVERTIME_COST})

    def __init__(
        self,
        hourly_rate: float = DEFAULT_HOURLY_RATE,
        overtime_premium: float = DEFAULT_OVERTIME_PREMIUM,
    ) -> None:
        """Initialize the cost evaluator.

        Args:
            hourly_rate: Base hourly rate in NOK.
            overtime_premium: Multiplier applied to overtime hours.

        """
        self.hourly_rate = hourly_rate
        self.overtime_premium = overtime_premium

    def shift_cost(
        self, shift: Shift, hours_before: float, max_weekly_hours: float
    ) -> ShiftCost:
        """Split a shift into regular and overtime cost.

        Args:
            shift: The shift to cost.
            hours_before: Hours the employee already worked that week.
            max_weekly_hours: Weekly hours after which overtime applies.

        Returns:
            The cost breakdown.

        """
        hours = shift_hours(shift)
        until_overtime = max(0.0, max_weekly_hours - hours_before)
        regular = min(hours, until_overtime)
        overtime = max(0.0, hours - until_overtime)
        return ShiftCost(
            regular_hours=regular,
            overtime_hours=overtime,
            regular_cost=regular * self.hourly_rate,
            overtime_cost=overtime * self.hourly_rate * self.overtime_premium,
        )

    @staticmethod
    def hours_before(user_id: str, shift: Shift, shifts: Iterable[Shift]) -> float:
        """Return hours the employee worked earlier in the shift's ISO week."""
        week_start, week_end = week_bounds(shift.start_time)
        return sum(
            shift_hours(s)
            for s in shifts
            if s.user_id == user_id
            and week_start <= s.start_time <= week_end
            and s.start_time < shift.start_time
        )

    def get_scoring_components(
        self, context: DecisionContext
    ) -> list[ScoringComponent]:
        """Score the labor cost of the proposal.

        Args:
            context: Decision context to evaluate.

        Returns:
            Four components for a single assignment (three without a budget),
            one aggregate component for other proposal kinds.

        """
        proposal = context.proposal
        if isinstance(proposal, ShiftAssignment):
            return self._assignment_components(proposal, context)
        if isinstance(proposal, ScheduleCreation):
            return [self._schedule_component(proposal, context)]
        if isinstance(proposal, ShiftSwap):
            return [self._swap_component(proposal, context)]
        if isinstance(proposal, ScheduleOptimization):
            return [self._optimization_component(proposal)]
        return []

    def suggestions(self, components: Sequence[ScoringComponent]) -> list[str]:
        """Turn negative cost calculations into suggestions."""
        result: list[str] = []
        for component in components:
            for ref in component.evidence:
                if (
                    ref.impact == EvidenceImpact.negative
                    and ref.type == EvidenceType.calculation
                    and ref.value
                ):
                    result.append(f"Consider: {ref.description}")
        return result

    def respond_to_debate(
        self,
        context: DecisionContext,
        other_decisions: Sequence[AgentDecision],
        topic: str,
    ) -> DebateResponse:
        """Defer to compliance rejections and soften for welfare rejections."""
        compliance = self.find_decision(other_decisions, AgentRole.compliance)
        welfare = self.find_decision(other_decisions, AgentRole.employee_advocate)

        if compliance and compliance.effective_recommendation == Recommendation.reject:
            return DebateResponse(
                response=(
                    f"{self.name}: I defer to Compliance Guardian on legal matters. "
                    "Cost savings cannot justify labor law violations."
                ),
                changed_position=True,
                new_recommendation=Recommendation.reject,
                new_confidence=90,
            )

        if (
            welfare
            and welfare.effective_recommendation == Recommendation.reject
            and welfare.concerns
        ):
            return DebateResponse(
                response=(
                    f"{self.name}: While cost is a factor, I acknowledge the employee "
                    "welfare concerns raised. A modified approach could balance cost "
                    "efficiency and employee needs."
                ),
                changed_position=True,
                new_recommendation=Recommendation.approve_with_conditions,
                new_confidence=70,
            )

        return DebateResponse(
            response=(
                f"{self.name}: My cost analysis stands. The financial impact should "
                "be considered alongside other factors."
            ),
            changed_position=False,
        )

    def _assignment_components(
        self, proposal: ShiftAssignment, context: DecisionContext
    ) -> list[ScoringComponent]:
        before = self.hours_before(
            proposal.user_id, proposal.shift, context.existing_shifts
        )
        cost = self.shift_cost(
            proposal.shift, before, context.compliance.max_weekly_hours
        )
        components = [
            self._overtime_component(cost, before),
            self._regular_component(cost),
        ]
        if context.labor_budget:
            components.append(self._budget_component(cost.total_cost, context))
        components.append(self._efficiency_component(cost))
        return components

    def _overtime_component(self, cost: ShiftCost, hours_before: float) -> ScoringComponent:
        refs = [
            make_evidence(
                EvidenceType.rule,
                "Overtime Premium Rate",
                f"Overtime costs {(self.overtime_premium - 1) * 100:.0f}% more than "
                "regular hours",
                EvidenceImpact.neutral,
                1.0,
                f"{self.overtime_premium:g}x regular rate",
            )
        ]
        if cost.overtime_hours > 0:
            ratio = cost.overtime_hours / cost.total_hours
            score = max(0.0, 100 - ratio * 100)
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Overtime Analysis",
                    f"{cost.overtime_hours:.1f}h overtime ({ratio * 100:.0f}% of shift)",
                    EvidenceImpact.negative,
                    0.8,
                    round(cost.overtime_cost, 2),
                )
            )
            refs.append(
                make_evidence(
                    EvidenceType.data,
                    "Weekly Hours Context",
                    f"Employee had {hours_before:.1f}h before this shift",
                    EvidenceImpact.neutral,
                    0.5,
                    round(hours_before, 2),
                )
            )
            reasoning = (
                f"Cost concern: {cost.overtime_hours:.1f}h overtime at NOK "
                f"{cost.overtime_cost:.2f} ({ratio * 100:.0f}% of shift)"
            )
        else:
            score = 100.0
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Overtime Analysis",
                    "No overtime hours in this shift",
                    EvidenceImpact.positive,
                    1.0,
                    0,
                )
            )
            reasoning = "Efficient: No overtime costs for this assignment"

        return ScoringComponent(
            name=OVERTIME_COST,
            score=score,
            weight=self.weight("overtime_cost"),
            reasoning=reasoning,
            evidence=refs,
        )

    def _regular_component(self, cost: ShiftCost) -> ScoringComponent:
        return ScoringComponent(
            name="Regular Cost",
            score=85.0,
            weight=self.weight("regular_cost"),
            reasoning=(
                f"Regular cost: NOK {cost.regular_cost:.2f} for "
                f"{cost.regular_hours:.1f} hours"
            ),
            evidence=[
                make_evidence(
                    EvidenceType.data,
                    "Hourly Rate",
                    f"Base rate: NOK {self.hourly_rate:g}/hour",
                    EvidenceImpact.neutral,
                    1.0,
                    self.hourly_rate,
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Regular Hours Cost",
                    f"{cost.regular_hours:.1f}h x NOK {self.hourly_rate:g} = "
                    f"NOK {cost.regular_cost:.2f}",
                    EvidenceImpact.neutral,
                    1.0,
                    round(cost.regular_cost, 2),
                ),
            ],
        )

    def _budget_component(
        self, added_cost: float, context: DecisionContext
    ) -> ScoringComponent:
        budget = context.labor_budget or 0.0
        current = sum(shift_hours(s) * self.hourly_rate for s in context.existing_shifts)
        projected = current + added_cost
        utilization = projected / budget * 100

        if utilization <= 90:
            score = 100.0
            impact = EvidenceImpact.positive
            description = f"{utilization:.1f}% of budget used"
            reasoning = (
                f"Within budget: {utilization:.1f}% utilized (NOK {projected:.2f} "
                f"of NOK {budget:.2f})"
            )
        elif utilization <= 100:
            score = 70.0
            impact = EvidenceImpact.neutral
            description = f"{utilization:.1f}% of budget used - approaching limit"
            reasoning = f"Near budget limit: {utilization:.1f}% utilized"
        else:
            score = max(0.0, 50 - (utilization - 100))
            impact = EvidenceImpact.negative
            description = f"{utilization:.1f}% of budget - OVER BUDGET"
            reasoning = (
                f"Budget exceeded: {utilization:.1f}% (NOK {projected - budget:.2f} over)"
            )

        return ScoringComponent(
            name="Budget Compliance",
            score=score,
            weight=self.weight("budget_compliance"),
            reasoning=reasoning,
            evidence=[
                make_evidence(
                    EvidenceType.data,
                    "Labor Budget",
                    f"Budget: NOK {budget:.2f}",
                    EvidenceImpact.neutral,
                    1.0,
                    budget,
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Budget Utilization",
                    description,
                    impact,
                    0.7 if impact == EvidenceImpact.neutral else 1.0,
                    round(utilization, 1),
                ),
            ],
        )

    def _efficiency_component(self, cost: ShiftCost) -> ScoringComponent:
        effective_rate = cost.total_cost / cost.total_hours if cost.total_hours else 0.0
        ratio = self.hourly_rate / effective_rate if effective_rate else 1.0
        return ScoringComponent(
            name="Cost Efficiency",
            score=float(min(100, round_half_up(ratio * 100))),
            weight=self.weight("efficiency"),
            reasoning=(
                f"Cost efficiency: {ratio * 100:.0f}% (effective rate NOK "
                f"{effective_rate:.2f} vs base NOK {self.hourly_rate:g})"
            ),
            evidence=[
                make_evidence(
                    EvidenceType.calculation,
                    "Effective Rate",
                    f"Effective hourly rate: NOK {effective_rate:.2f}",
                    EvidenceImpact.positive if ratio >= 0.9 else EvidenceImpact.negative,
                    1.0,
                    round(effective_rate, 2),
                )
            ],
        )

    def _schedule_component(
        self, proposal: ScheduleCreation, context: DecisionContext
    ) -> ScoringComponent:
        proposed = [
            a.shift.model_copy(update={"user_id": a.user_id}) for a in proposal.assignments
        ]
        pool = list(context.existing_shifts) + proposed
        total = overtime = regular = 0.0
        for shift in proposed:
            before = self.hours_before(shift.user_id, shift, pool)
            cost = self.shift_cost(shift, before, context.compliance.max_weekly_hours)
            total += cost.total_cost
            overtime += cost.overtime_cost
            regular += cost.regular_cost

        ratio = overtime / total if total else 0.0
        return ScoringComponent(
            name="Schedule Total Cost",
            score=float(round_half_up((1 - ratio) * 100)),
            weight=1.0,
            reasoning=f"Schedule cost: NOK {total:.2f} ({ratio * 100:.1f}% overtime)",
            evidence=[
                make_evidence(
                    EvidenceType.calculation,
                    "Total Schedule Cost",
                    f"Total: NOK {total:.2f} (Regular: NOK {regular:.2f}, "
                    f"Overtime: NOK {overtime:.2f})",
                    EvidenceImpact.negative
                    if overtime > regular * 0.2
                    else EvidenceImpact.positive,
                    1.0,
                    round(total, 2),
                )
            ],
        )

    def _swap_component(
        self, proposal: ShiftSwap, context: DecisionContext
    ) -> ScoringComponent:
        limit = context.compliance.max_weekly_hours
        requester_before = self.hours_before(
            proposal.requester_id, proposal.shift_to_receive, context.existing_shifts
        )
        target_before = self.hours_before(
            proposal.target_user_id, proposal.shift_to_swap, context.existing_shifts
        )
        cost_after = (
            self.shift_cost(proposal.shift_to_receive, requester_before, limit).total_cost
            + self.shift_cost(proposal.shift_to_swap, target_before, limit).total_cost
        )
        cost_before = (
            self.shift_cost(proposal.shift_to_swap, requester_before, limit).total_cost
            + self.shift_cost(proposal.shift_to_receive, target_before, limit).total_cost
        )
        difference = cost_after - cost_before

        if difference <= 0:
            score = 100.0
            impact = EvidenceImpact.positive
            description = f"Swap saves NOK {abs(difference):.2f}"
            reasoning = f"Cost-efficient: Swap saves NOK {abs(difference):.2f}"
        else:
            score = max(0.0, 100 - difference / cost_before * 100) if cost_before else 0.0
            impact = EvidenceImpact.negative
            description = f"Swap increases cost by NOK {difference:.2f}"
            reasoning = f"Cost increase: Swap adds NOK {difference:.2f} to labor costs"

        return ScoringComponent(
            name="Swap Cost Impact",
            score=score,
            weight=1.0,
            reasoning=reasoning,
            evidence=[
                make_evidence(
                    EvidenceType.calculation,
                    "Cost Impact",
                    description,
                    impact,
                    1.0 if impact == EvidenceImpact.positive else 0.8,
                    round(difference, 2),
                )
            ],
        )

    def _optimization_component(self, proposal: ScheduleOptimization) -> ScoringComponent:
        savings = proposal.expected_savings
        if savings > 0:
            score = min(100.0, 50 + savings / 10)
            reasoning = f"Recommended: Expected savings of NOK {savings:.2f}"
        else:
            score = 30.0
            reasoning = "Not recommended: No cost savings identified"

        return ScoringComponent(
            name="Optimization Savings",
            score=score,
            weight=1.0,
            reasoning=reasoning,
            evidence=[
                make_evidence(
                    EvidenceType.calculation,
                    "Expected Savings",
                    f"Optimization would save NOK {savings:.2f}",
                    EvidenceImpact.positive if savings > 0 else EvidenceImpact.negative,
                    1.0,
                    savings,
                )
            ],
        )
