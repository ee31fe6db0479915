"""Compliance evaluator: Norwegian working-time law (Arbeidsmiljøloven).

Checks rest periods, daily and weekly hours, and overtime against the
limits in the context's ComplianceConfig. None of its components may be
edited by a reviewer, and a rest-period violation forces a rejection.
"""

from collections.abc import Sequence

from roster_consensus.core.debate.topics import is_legal_override_topic
from roster_consensus.core.evaluators.base import BaseEvaluator, make_evidence
from roster_consensus.core.evaluators.shift_math import (
    rest_hours_between,
    shift_hours,
    shifts_on_day,
    week_bounds,
    whole_hours_between,
)
from roster_consensus.logging_config import get_logger
from roster_consensus.models.config import ComplianceConfig
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
from roster_consensus.models.roster import Shift

__all__ = ["ComplianceEvaluator"]

logger = get_logger(__name__)

DAILY_REST = "Daily Rest Period"
WEEKLY_REST = "Weekly Rest Period"
DAILY_HOURS = "Daily Working Hours"
WEEKLY_HOURS = "Weekly Working Hours"
OVERTIME = "Overtime Limits"
OPTIMIZATION_IMPACT = "Optimization Compliance Impact"

# Confidence used when echoing another evaluator's rejection.
ECHO_REJECT_CONFIDENCE = 95


def _rule(source: str, description: str, violated: bool, value: str) -> EvidenceReference:
    return make_evidence(
        EvidenceType.rule,
        source,
        description,
        EvidenceImpact.negative if violated else EvidenceImpact.neutral,
        1.0,
        value,
    )


class ComplianceEvaluator(BaseEvaluator):
    """Compliance Guardian: enforces statutory working-time limits."""

    persona = AgentPersona(
        role=AgentRole.compliance,
        name="Compliance Guardian",
        description=(
            "Norwegian labor law expert specializing in Arbeidsmiljøloven compliance"
        ),
        expertise=[
            "Arbeidsmiljøloven (Working Environment Act)",
            "Rest period requirements (11h daily, 35h weekly)",
            "Working hours limits (9h daily, 40h weekly)",
            "Overtime regulations and limits",
            "14-day publication rule",
        ],
        priorities=[
            "Legal compliance is non-negotiable",
            "Employee health and safety",
            "Preventing burnout through rest requirements",
            "Audit trail for labor inspections",
        ],
        component_weights={
            "daily_rest": 0.25,
            "weekly_rest": 0.20,
            "daily_hours": 0.20,
            "weekly_hours": 0.20,
            "overtime_limits": 0.15,
        },
    )
    critical_components = frozenset({DAILY_REST, WEEKLY_REST})

    def get_scoring_components(
        self, context: DecisionContext
    ) -> list[ScoringComponent]:
        """Score the proposal against every working-time rule.

        Schedule creations check each assignment against the existing roster
        plus the earlier assignments of the same employee. Swaps check both
        employees' rosters after the exchange.

        Args:
            context: Decision context to evaluate.

        Returns:
            Five components per checked assignment.

        """
        proposal = context.proposal
        limits = context.compliance

        if isinstance(proposal, ShiftAssignment):
            return self._check_assignment(
                proposal.shift, context.shifts_for_user(proposal.user_id), limits
            )

        if isinstance(proposal, ScheduleCreation):
            components: list[ScoringComponent] = []
            for index, assignment in enumerate(proposal.assignments):
                earlier = [
                    a.shift
                    for a in proposal.assignments[:index]
                    if a.user_id == assignment.user_id
                ]
                existing = context.shifts_for_user(assignment.user_id) + earlier
                components.extend(
                    self._check_assignment(assignment.shift, existing, limits)
                )
            return components

        if isinstance(proposal, ShiftSwap):
            return self._check_swap(proposal, context, limits)

        if isinstance(proposal, ScheduleOptimization):
            return [self._check_optimization(proposal)]

        return []

    def suggestions(self, components: Sequence[ScoringComponent]) -> list[str]:
        """Point reviewers at each violated legal provision."""
        result: list[str] = []
        for component in components:
            for ref in component.evidence:
                if ref.impact == EvidenceImpact.negative and ref.type == EvidenceType.rule:
                    result.append(f"Review {ref.source}: {ref.description}")
        return result

    def respond_to_debate(
        self,
        context: DecisionContext,
        other_decisions: Sequence[AgentDecision],
        topic: str,
    ) -> DebateResponse:
        """Hold firm on legal grounds.

        Requests for exceptions or overrides are refused outright. When this
        evaluator rejects and another evaluator also rejects, the response
        echoes the agreement with a fixed high confidence; the recommendation
        itself stays reject.

        """
        if is_legal_override_topic(topic):
            return DebateResponse(
                response=(
                    f"{self.name}: Legal compliance requirements under "
                    "Arbeidsmiljøloven cannot be overridden. Rest periods and "
                    "working hour limits are non-negotiable for employee health "
                    "and safety."
                ),
                changed_position=False,
            )

        others_reject = any(
            d.effective_recommendation == Recommendation.reject for d in other_decisions
        )
        if others_reject and self.evaluate(context).recommendation == Recommendation.reject:
            return DebateResponse(
                response=(
                    f"{self.name}: Other agents have identified concerns. I maintain "
                    "my compliance assessment. Legal requirements must be met "
                    "regardless of other factors."
                ),
                changed_position=True,
                new_recommendation=Recommendation.reject,
                new_confidence=ECHO_REJECT_CONFIDENCE,
            )

        return DebateResponse(
            response=(
                f"{self.name}: I acknowledge the other perspectives but maintain "
                "that compliance is the foundation of any scheduling decision."
            ),
            changed_position=False,
        )

    def _check_assignment(
        self, shift: Shift, existing: list[Shift], limits: ComplianceConfig
    ) -> list[ScoringComponent]:
        week_start, week_end = week_bounds(shift.start_time)
        week_total = shift_hours(shift) + sum(
            shift_hours(s) for s in existing if week_start <= s.start_time <= week_end
        )
        return [
            self._check_daily_rest(shift, existing, limits),
            self._check_weekly_rest(shift, existing, limits),
            self._check_daily_hours(shift, existing, limits),
            self._check_weekly_hours(week_total, limits),
            self._check_overtime(week_total, limits),
        ]

    def _check_swap(
        self, proposal: ShiftSwap, context: DecisionContext, limits: ComplianceConfig
    ) -> list[ScoringComponent]:
        exchanged = {proposal.shift_to_swap.id, proposal.shift_to_receive.id} - {None}
        requester_rest = [
            s
            for s in context.shifts_for_user(proposal.requester_id)
            if s.id not in exchanged
        ]
        target_rest = [
            s
            for s in context.shifts_for_user(proposal.target_user_id)
            if s.id not in exchanged
        ]
        received = proposal.shift_to_receive.model_copy(
            update={"user_id": proposal.requester_id}
        )
        given = proposal.shift_to_swap.model_copy(
            update={"user_id": proposal.target_user_id}
        )
        return self._check_assignment(received, requester_rest, limits) + (
            self._check_assignment(given, target_rest, limits)
        )

    def _check_daily_rest(
        self, shift: Shift, existing: list[Shift], limits: ComplianceConfig
    ) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        minimum = limits.min_daily_rest_hours
        score = 100.0
        reasoning = ""

        for other in existing:
            if shift.id is not None and other.id == shift.id:
                continue
            rest = rest_hours_between(shift, other)
            if rest < minimum:
                score = 0.0
                logger.debug(
                    "daily_rest_violation", user_id=shift.user_id, rest_hours=rest
                )
                if rest < 0:
                    detail = f"Shifts overlap by {-rest:.1f} hours"
                    summary = f"Shifts overlap by {-rest:.1f}h"
                else:
                    detail = f"Only {rest:.1f} hours rest between shifts"
                    summary = f"Only {rest:.1f}h rest between shifts"
                refs.append(
                    make_evidence(
                        EvidenceType.calculation,
                        "Rest period calculation",
                        detail,
                        EvidenceImpact.negative,
                        1.0,
                        round(rest, 2),
                    )
                )
                reasoning = (
                    f"VIOLATION: {summary} "
                    f"(requires {minimum:g}h per Arbeidsmiljøloven § 10-8)"
                )
                break
            refs.append(
                make_evidence(
                    EvidenceType.calculation,
                    "Rest period calculation",
                    f"{rest:.1f} hours rest between shifts",
                    EvidenceImpact.positive,
                    0.5,
                    round(rest, 2),
                )
            )

        if score == 100.0:
            reasoning = (
                f"Compliant: All rest periods meet the {minimum:g}h minimum requirement"
            )

        refs.insert(
            0,
            _rule(
                "Arbeidsmiljøloven § 10-8(1)",
                f"Minimum {minimum:g} hours continuous rest between shifts",
                score == 0.0,
                f"{minimum:g} hours required",
            ),
        )
        return ScoringComponent(
            name=DAILY_REST,
            score=score,
            weight=self.weight("daily_rest"),
            reasoning=reasoning,
            evidence=refs,
            is_editable=False,
        )

    def _check_weekly_rest(
        self, shift: Shift, existing: list[Shift], limits: ComplianceConfig
    ) -> ScoringComponent:
        minimum = limits.min_weekly_rest_hours
        week_start, week_end = week_bounds(shift.start_time)
        week_shifts = sorted(
            [s for s in existing if week_start <= s.start_time <= week_end] + [shift],
            key=lambda s: s.start_time,
        )

        longest = max(0, whole_hours_between(week_shifts[0].start_time, week_start))
        for index, current in enumerate(week_shifts):
            if index + 1 < len(week_shifts):
                next_start = week_shifts[index + 1].start_time
            else:
                next_start = week_end
            longest = max(longest, whole_hours_between(next_start, current.end_time))

        violated = longest < minimum
        if violated:
            reasoning = (
                f"VIOLATION: Longest rest period is {longest:.1f}h (requires "
                f"{minimum:g}h continuous per Arbeidsmiljøloven § 10-8)"
            )
        else:
            reasoning = (
                f"Compliant: {longest:.1f}h continuous rest available "
                f"({minimum:g}h required)"
            )

        return ScoringComponent(
            name=WEEKLY_REST,
            score=0.0 if violated else 100.0,
            weight=self.weight("weekly_rest"),
            reasoning=reasoning,
            evidence=[
                _rule(
                    "Arbeidsmiljøloven § 10-8(2)",
                    f"Minimum {minimum:g} hours continuous rest per week",
                    violated,
                    f"{minimum:g} hours required",
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Weekly rest calculation",
                    f"Longest continuous rest: {longest:.1f} hours",
                    EvidenceImpact.negative if violated else EvidenceImpact.positive,
                    1.0,
                    longest,
                ),
            ],
            is_editable=False,
        )

    def _check_daily_hours(
        self, shift: Shift, existing: list[Shift], limits: ComplianceConfig
    ) -> ScoringComponent:
        limit = limits.max_daily_hours
        total = shift_hours(shift) + sum(
            shift_hours(s) for s in shifts_on_day(existing, shift.start_time)
        )
        violated = total > limit
        if violated:
            score = max(0.0, 100 - (total - limit) / limit * 100)
            reasoning = (
                f"WARNING: {total:.1f}h total work on this day exceeds {limit:g}h limit"
            )
            description = f"Total daily hours: {total:.1f}h"
        else:
            score = 100.0
            reasoning = f"Compliant: {total:.1f}h total work (limit: {limit:g}h)"
            description = f"Total daily hours: {total:.1f}h (within limit)"

        return ScoringComponent(
            name=DAILY_HOURS,
            score=score,
            weight=self.weight("daily_hours"),
            reasoning=reasoning,
            evidence=[
                _rule(
                    "Arbeidsmiljøloven § 10-4(1)",
                    f"Maximum {limit:g} hours per day",
                    violated,
                    f"{limit:g} hours limit",
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Daily hours calculation",
                    description,
                    EvidenceImpact.negative if violated else EvidenceImpact.positive,
                    1.0,
                    round(total, 2),
                ),
            ],
            is_editable=False,
        )

    def _check_weekly_hours(
        self, total: float, limits: ComplianceConfig
    ) -> ScoringComponent:
        limit = limits.max_weekly_hours
        violated = total > limit
        if violated:
            score = max(0.0, 100 - (total - limit) / limit * 100)
            reasoning = f"WARNING: {total:.1f}h this week exceeds {limit:g}h limit"
        else:
            score = 100.0
            reasoning = f"Compliant: {total:.1f}h this week (limit: {limit:g}h)"

        return ScoringComponent(
            name=WEEKLY_HOURS,
            score=score,
            weight=self.weight("weekly_hours"),
            reasoning=reasoning,
            evidence=[
                _rule(
                    "Arbeidsmiljøloven § 10-4(4)",
                    f"Maximum {limit:g} hours per week",
                    violated,
                    f"{limit:g} hours limit",
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Weekly hours calculation",
                    f"Total weekly hours: {total:.1f}h",
                    EvidenceImpact.negative if violated else EvidenceImpact.positive,
                    1.0,
                    round(total, 2),
                ),
            ],
            is_editable=False,
        )

    def _check_overtime(
        self, week_total: float, limits: ComplianceConfig
    ) -> ScoringComponent:
        cap = limits.max_overtime_per_week
        overtime = max(0.0, week_total - limits.max_weekly_hours)
        rule_description = (
            f"Overtime limits: {cap:g}h/week, {limits.max_overtime_per_month:g}h/4 weeks, "
            f"{limits.max_overtime_per_year:g}h/year"
        )

        if overtime > cap:
            score = 20.0
            impact = EvidenceImpact.negative
            description = f"{overtime:.1f}h overtime exceeds weekly limit"
            reasoning = f"WARNING: {overtime:.1f}h overtime exceeds {cap:g}h weekly limit"
        elif overtime > 0:
            score = 70.0
            impact = EvidenceImpact.neutral
            description = f"{overtime:.1f}h overtime within weekly limit"
            reasoning = f"Note: {overtime:.1f}h overtime (within {cap:g}h weekly limit)"
        else:
            score = 100.0
            impact = EvidenceImpact.positive
            description = "No overtime hours"
            reasoning = "Compliant: No overtime hours"

        return ScoringComponent(
            name=OVERTIME,
            score=score,
            weight=self.weight("overtime_limits"),
            reasoning=reasoning,
            evidence=[
                _rule(
                    "Arbeidsmiljøloven § 10-6(4)",
                    rule_description,
                    overtime > cap,
                    "Multiple overtime limits apply",
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Overtime calculation",
                    description,
                    impact,
                    1.0 if impact != EvidenceImpact.neutral else 0.5,
                    round(overtime, 2),
                ),
            ],
            is_editable=False,
        )

    def _check_optimization(self, proposal: ScheduleOptimization) -> ScoringComponent:
        if proposal.affects_compliance:
            score = 40.0
            reasoning = (
                "Optimization was flagged as affecting compliance; each "
                "reassignment must be re-checked against working-time limits"
            )
            impact = EvidenceImpact.negative
        else:
            score = 100.0
            reasoning = "Compliant: Optimization does not affect working-time limits"
            impact = EvidenceImpact.positive

        return ScoringComponent(
            name=OPTIMIZATION_IMPACT,
            score=score,
            weight=1.0,
            reasoning=reasoning,
            evidence=[
                make_evidence(
                    EvidenceType.data,
                    "Optimization proposal",
                    f"{len(proposal.changes)} reassignment(s) proposed",
                    impact,
                    1.0,
                    len(proposal.changes),
                )
            ],
            is_editable=False,
        )
