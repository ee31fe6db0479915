"""Operations evaluator: staffing coverage, experience and continuity."""

from collections.abc import Sequence

from roster_consensus.core.debate.topics import mentions_coverage_gap
from roster_consensus.core.evaluators.base import BaseEvaluator, make_evidence
from roster_consensus.core.evaluators.shift_math import (
    day_name,
    is_weekend,
    shift_hours,
    shifts_overlap,
    whole_hours_between,
)
from roster_consensus.models.context import DecisionContext
from roster_consensus.models.decision import AgentDecision, DebateResponse
from roster_consensus.models.enums import (
    AgentRole,
    EvidenceImpact,
    EvidenceType,
    Recommendation,
)
from roster_consensus.models.evidence import (
    AgentPersona,
    EvidenceReference,
    ScoringComponent,
)
from roster_consensus.models.proposal import (
    ScheduleCreation,
    ScheduleOptimization,
    ShiftAssignment,
    ShiftSwap,
)
from roster_consensus.models.roster import CoverageGoal, Shift

__all__ = ["OperationsEvaluator", "is_peak_hour"]

COVERAGE_ANALYSIS = "Coverage Analysis"

PEAK_HEADCOUNT = 3
OFF_PEAK_HEADCOUNT = 2


def is_peak_hour(hour: int) -> bool:
    """Return True for the lunch (11-14) and dinner (17-20) rush hours."""
    return 11 <= hour <= 14 or 17 <= hour <= 20


def _is_business_hour(hour: int) -> bool:
    return 8 < hour < 20


def _goal_coverage(goal: CoverageGoal, shifts: Sequence[Shift]) -> int:
    return sum(
        1
        for s in shifts
        if s.start_time <= goal.start <= s.end_time
        or s.start_time <= goal.end <= s.end_time
    )


class OperationsEvaluator(BaseEvaluator):
    """Operations Expert: keeps slots staffed and handoffs smooth."""

    persona = AgentPersona(
        role=AgentRole.operations,
        name="Operations Expert",
        description=(
            "Operational efficiency specialist ensuring adequate coverage and "
            "service quality"
        ),
        expertise=[
            "Staff coverage analysis",
            "Skill-shift matching",
            "Peak hour management",
            "Operational continuity",
        ],
        priorities=[
            "Ensure adequate staff coverage",
            "Match skills to shift requirements",
            "Maintain service quality",
            "Minimize coverage gaps",
        ],
        component_weights={
            "coverage": 0.35,
            "skill_match": 0.25,
            "efficiency": 0.25,
            "continuity": 0.15,
        },
    )
    critical_components = frozenset({COVERAGE_ANALYSIS})

    def get_scoring_components(
        self, context: DecisionContext
    ) -> list[ScoringComponent]:
        """Score the operational impact of the proposal.

        Args:
            context: Decision context to evaluate.

        Returns:
            Four components for a single assignment, one aggregate
            component for other proposal kinds.

        """
        proposal = context.proposal
        if isinstance(proposal, ShiftAssignment):
            shift = proposal.shift
            return [
                self._coverage_analysis(shift, context),
                self._skill_match(proposal.user_id, shift, context),
                self._operational_efficiency(shift, context),
                self._coverage_continuity(shift, context),
            ]
        if isinstance(proposal, ScheduleCreation):
            return [self._coverage_goals(proposal)]
        if isinstance(proposal, ShiftSwap):
            return [self._swap_component(proposal, context)]
        if isinstance(proposal, ScheduleOptimization):
            return [self._optimization_component(proposal, context)]
        return []

    def suggestions(self, components: Sequence[ScoringComponent]) -> list[str]:
        """Surface every negative piece of operational evidence."""
        return [
            f"Operational consideration: {ref.description}"
            for component in components
            for ref in component.evidence
            if ref.impact == EvidenceImpact.negative
        ]

    def respond_to_debate(
        self,
        context: DecisionContext,
        other_decisions: Sequence[AgentDecision],
        topic: str,
    ) -> DebateResponse:
        """Defer to compliance, defend coverage gaps, otherwise yield to welfare."""
        compliance = self.find_decision(other_decisions, AgentRole.compliance)
        welfare = self.find_decision(other_decisions, AgentRole.employee_advocate)
        cost = self.find_decision(other_decisions, AgentRole.cost_optimizer)

        if compliance and compliance.effective_recommendation == Recommendation.reject:
            return DebateResponse(
                response=(
                    f"{self.name}: Operations must work within legal constraints. "
                    "I support the compliance decision."
                ),
                changed_position=True,
                new_recommendation=Recommendation.reject,
                new_confidence=90,
            )

        has_gap = mentions_coverage_gap(self.evaluate(context).reasoning)
        if has_gap:
            if welfare and welfare.effective_recommendation == Recommendation.reject:
                return DebateResponse(
                    response=(
                        f"{self.name}: I understand the employee welfare concerns, but "
                        "we have a coverage gap. Can we find a compromise that fills "
                        "the gap while addressing those concerns?"
                    ),
                    changed_position=False,
                )
            if cost and cost.effective_recommendation == Recommendation.reject:
                return DebateResponse(
                    response=(
                        f"{self.name}: The cost concerns are noted, but leaving gaps in "
                        "coverage could cost more in the long run through lost business "
                        "or service quality issues."
                    ),
                    changed_position=False,
                )
        elif welfare and welfare.score < 50:
            return DebateResponse(
                response=(
                    f"{self.name}: Since coverage is adequate, I can support "
                    "prioritizing employee welfare in this case."
                ),
                changed_position=True,
                new_recommendation=welfare.effective_recommendation,
                new_confidence=75,
            )

        return DebateResponse(
            response=(
                f"{self.name}: My operational assessment stands - we need to ensure "
                "adequate coverage and service quality."
            ),
            changed_position=False,
        )

    def _coverage_analysis(
        self, shift: Shift, context: DecisionContext
    ) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        current = sum(1 for s in context.existing_shifts if shifts_overlap(shift, s))
        staffed = current + 1
        peak = is_peak_hour(shift.start_time.hour)
        recommended = PEAK_HEADCOUNT if peak else OFF_PEAK_HEADCOUNT
        ratio = staffed / recommended

        if current == 0:
            score = 100.0
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Coverage Gap",
                    "This assignment fills an uncovered time slot",
                    EvidenceImpact.positive,
                    1.0,
                    "Gap filled",
                )
            )
            reasoning = "Critical: This shift fills a coverage gap"
        elif ratio >= 1.5:
            score = 60.0
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Coverage Level",
                    f"{staffed} staff when {recommended} recommended - potential "
                    "overstaffing",
                    EvidenceImpact.neutral,
                    0.6,
                    staffed,
                )
            )
            reasoning = f"Note: {staffed} staff during this slot may be more than needed"
        elif ratio >= 1:
            score = 90.0
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Coverage Level",
                    f"{staffed} staff meets recommended coverage of {recommended}",
                    EvidenceImpact.positive,
                    0.9,
                    staffed,
                )
            )
            reasoning = f"Good coverage: {staffed} staff meets operational needs"
        else:
            score = 80.0
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Coverage Level",
                    f"{staffed} staff - still below recommended {recommended}",
                    EvidenceImpact.positive,
                    0.7,
                    staffed,
                )
            )
            reasoning = (
                f"Helps: Improves coverage to {staffed} ({recommended} recommended)"
            )

        if peak:
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Peak Hours",
                    "Shift is during peak business hours",
                    EvidenceImpact.positive
                    if current < recommended
                    else EvidenceImpact.neutral,
                    0.5,
                    f"{shift.start_time:%H:%M} - {shift.end_time:%H:%M}",
                )
            )
        if is_weekend(shift.start_time):
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Weekend Coverage",
                    "Weekend shift - may have different coverage needs",
                    EvidenceImpact.neutral,
                    0.4,
                    day_name(shift.start_time),
                )
            )

        return ScoringComponent(
            name=COVERAGE_ANALYSIS,
            score=score,
            weight=self.weight("coverage"),
            reasoning=reasoning,
            evidence=refs,
        )

    def _skill_match(
        self, user_id: str, shift: Shift, context: DecisionContext
    ) -> ScoringComponent:
        hour = shift.start_time.hour
        similar = sum(
            1
            for s in context.shifts_for_user(user_id)
            if abs(s.start_time.hour - hour) <= 2
        )

        if similar >= 3:
            score = 90.0
            ref = make_evidence(
                EvidenceType.pattern,
                "Experience",
                f"Employee has {similar} similar shifts in history",
                EvidenceImpact.positive,
                0.9,
                similar,
            )
            reasoning = f"Experienced: {similar} similar shifts worked previously"
        elif similar > 0:
            score = 75.0
            ref = make_evidence(
                EvidenceType.pattern,
                "Experience",
                f"Employee has {similar} similar shifts - some experience",
                EvidenceImpact.neutral,
                0.6,
                similar,
            )
            reasoning = f"Some experience: {similar} similar shifts worked"
        else:
            score = 60.0
            ref = make_evidence(
                EvidenceType.pattern,
                "Experience",
                "No record of similar shifts - may need support",
                EvidenceImpact.neutral,
                0.5,
                0,
            )
            reasoning = "New assignment type for this employee - consider training/support"

        return ScoringComponent(
            name="Skill Match",
            score=score,
            weight=self.weight("skill_match"),
            reasoning=reasoning,
            evidence=[ref],
        )

    def _operational_efficiency(
        self, shift: Shift, context: DecisionContext
    ) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        score = 85
        hours = shift_hours(shift)

        if hours < 4:
            score -= 20
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Shift Length",
                    f"Short shift ({hours:.1f}h) - less efficient",
                    EvidenceImpact.negative,
                    0.6,
                    round(hours, 2),
                )
            )
        elif hours > 8:
            score -= 10
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Shift Length",
                    f"Long shift ({hours:.1f}h) - may impact productivity",
                    EvidenceImpact.neutral,
                    0.4,
                    round(hours, 2),
                )
            )
        else:
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Shift Length",
                    f"Optimal shift length: {hours:.1f}h",
                    EvidenceImpact.positive,
                    0.7,
                    round(hours, 2),
                )
            )

        handoffs = sum(
            1
            for s in context.existing_shifts
            if 0 <= whole_hours_between(shift.start_time, s.end_time) < 1
        )
        if handoffs:
            score += 10
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Handoff",
                    "Good overlap/handoff with previous shift",
                    EvidenceImpact.positive,
                    0.5,
                    handoffs,
                )
            )

        score = min(100, score)
        return ScoringComponent(
            name="Operational Efficiency",
            score=float(score),
            weight=self.weight("efficiency"),
            reasoning=(
                "Operationally efficient shift structure"
                if score >= 80
                else "Some efficiency concerns with shift structure"
            ),
            evidence=refs,
        )

    def _coverage_continuity(
        self, shift: Shift, context: DecisionContext
    ) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        score = 85

        before = sum(
            1
            for s in context.existing_shifts
            if 0 < whole_hours_between(shift.start_time, s.end_time) <= 2
        )
        after = sum(
            1
            for s in context.existing_shifts
            if 0 < whole_hours_between(s.start_time, shift.end_time) <= 2
        )

        if before:
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Coverage Continuity",
                    "Good coverage continuity with previous shifts",
                    EvidenceImpact.positive,
                    0.7,
                    before,
                )
            )
        elif _is_business_hour(shift.start_time.hour):
            score -= 15
            refs.append(
                make_evidence(
                    EvidenceType.risk,
                    "Coverage Gap Before",
                    "No coverage immediately before this shift",
                    EvidenceImpact.negative,
                    0.6,
                    "Gap before",
                )
            )

        if not after and _is_business_hour(shift.end_time.hour):
            score -= 15
            refs.append(
                make_evidence(
                    EvidenceType.risk,
                    "Coverage Gap After",
                    "No coverage immediately after this shift",
                    EvidenceImpact.negative,
                    0.6,
                    "Gap after",
                )
            )

        return ScoringComponent(
            name="Coverage Continuity",
            score=float(score),
            weight=self.weight("continuity"),
            reasoning=(
                "Good coverage continuity maintained"
                if score >= 80
                else "Potential coverage gaps around this shift"
            ),
            evidence=refs,
        )

    def _coverage_goals(self, proposal: ScheduleCreation) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        shifts = [a.shift for a in proposal.assignments]
        met = 0

        for goal in proposal.coverage_goals:
            staffed = _goal_coverage(goal, shifts)
            slot = f"{goal.start:%a %H:%M}"
            if staffed >= goal.minimum_employees:
                met += 1
                refs.append(
                    make_evidence(
                        EvidenceType.calculation,
                        "Coverage Goal",
                        f"{slot}: {staffed}/{goal.minimum_employees} required met",
                        EvidenceImpact.positive,
                        0.8,
                        staffed,
                    )
                )
            else:
                refs.append(
                    make_evidence(
                        EvidenceType.calculation,
                        "Coverage Goal",
                        f"{slot}: {staffed}/{goal.minimum_employees} required - "
                        "UNDERSTAFFED",
                        EvidenceImpact.negative,
                        1.0,
                        staffed,
                    )
                )

        total = len(proposal.coverage_goals)
        score = round(met / total * 100) if total else 80
        return ScoringComponent(
            name="Coverage Goals",
            score=float(score),
            weight=1.0,
            reasoning=f"{met}/{total} coverage goals met",
            evidence=refs,
        )

    def _swap_component(
        self, proposal: ShiftSwap, context: DecisionContext
    ) -> ScoringComponent:
        start = min(proposal.shift_to_swap.start_time, proposal.shift_to_receive.start_time)
        end = max(proposal.shift_to_swap.end_time, proposal.shift_to_receive.end_time)
        current = sum(
            1
            for s in context.existing_shifts
            if start <= s.start_time <= end or start <= s.end_time <= end
        )
        return ScoringComponent(
            name="Swap Operations Impact",
            score=85.0,
            weight=1.0,
            reasoning="Swap maintains operational coverage",
            evidence=[
                make_evidence(
                    EvidenceType.calculation,
                    "Coverage Maintained",
                    "Swap maintains current coverage levels",
                    EvidenceImpact.positive,
                    0.9,
                    current,
                ),
                make_evidence(
                    EvidenceType.pattern,
                    "Skill Continuity",
                    "Both employees should have equivalent capabilities",
                    EvidenceImpact.neutral,
                    0.6,
                ),
            ],
        )

    def _optimization_component(
        self, proposal: ScheduleOptimization, context: DecisionContext
    ) -> ScoringComponent:
        known = {s.id for s in context.existing_shifts if s.id}
        missing = [c.shift_id for c in proposal.changes if c.shift_id not in known]
        if missing and context.existing_shifts:
            score = 60.0
            ref = make_evidence(
                EvidenceType.data,
                "Reassigned Shifts",
                f"{len(missing)} reassigned shift(s) not found on the roster",
                EvidenceImpact.neutral,
                0.5,
                len(missing),
            )
            reasoning = "Reassignment references shifts outside the current roster"
        else:
            score = 85.0
            ref = make_evidence(
                EvidenceType.calculation,
                "Coverage Maintained",
                "Reassignment keeps every shift staffed",
                EvidenceImpact.positive,
                0.8,
                len(proposal.changes),
            )
            reasoning = "Reassignment maintains operational coverage"
        return ScoringComponent(
            name="Reassignment Coverage",
            score=score,
            weight=1.0,
            reasoning=reasoning,
            evidence=[ref],
        )
