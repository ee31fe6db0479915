"""Employee-welfare evaluator: preferences, work-life balance and fairness."""

import math
from collections.abc import Sequence

from roster_consensus.core.evaluators.base import BaseEvaluator, make_evidence
from roster_consensus.core.evaluators.shift_math import (
    day_name,
    is_weekend,
    round_half_up,
    shift_hours,
    week_bounds,
    whole_days_between,
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
from roster_consensus.models.roster import EmployeePreference, Shift

__all__ = ["EmployeeWelfareEvaluator", "preference_match"]

PREFERENCE_ALIGNMENT = "Preference Alignment"
WORK_LIFE_BALANCE = "Work-Life Balance"
WORKLOAD_FAIRNESS = "Workload Fairness"
SCHEDULE_STABILITY = "Schedule Stability"

NEUTRAL_PREFERENCE_SCORE = 70


def _is_morning(hour: int) -> bool:
    return 6 <= hour < 12


def _is_evening(hour: int) -> bool:
    return 12 <= hour < 20


def _is_night(hour: int) -> bool:
    return hour >= 20 or hour < 6


def preference_match(shift: Shift, prefs: EmployeePreference | None) -> int:
    """Return a quick 0-100 preference fit of a shift for one employee.

    Used for swaps, where both sides are compared without the detailed
    evidence trail of the full preference-alignment component.
    """
    if prefs is None:
        return NEUTRAL_PREFERENCE_SCORE

    score = NEUTRAL_PREFERENCE_SCORE
    name = day_name(shift.start_time)
    if name in prefs.preferred_days:
        score += 15
    if name in prefs.avoid_days:
        score -= 30

    hour = shift.start_time.hour
    if prefs.prefer_morning and _is_morning(hour):
        score += 10
    if prefs.prefer_evening and _is_evening(hour):
        score += 10
    if prefs.prefer_night and _is_night(hour):
        score += 10
    return max(0, min(100, score))


def _longest_run_of_days(shifts: Sequence[Shift]) -> int:
    ordinals = sorted({s.start_time.date().toordinal() for s in shifts})
    longest = current = 1
    for previous, day in zip(ordinals, ordinals[1:]):
        current = current + 1 if day - previous == 1 else 1
        longest = max(longest, current)
    return longest


class EmployeeWelfareEvaluator(BaseEvaluator):
    """Employee Advocate: protects preferences, rest and fair workloads."""

    persona = AgentPersona(
        role=AgentRole.employee_advocate,
        name="Employee Advocate",
        description="Champion for employee wellbeing, preferences, and work-life balance",
        expertise=[
            "Employee preference matching",
            "Work-life balance assessment",
            "Burnout prevention",
            "Fair workload distribution",
            "Schedule predictability",
        ],
        priorities=[
            "Respect employee preferences",
            "Ensure fair workload distribution",
            "Protect work-life balance",
            "Prevent burnout through reasonable scheduling",
        ],
        component_weights={
            "preference_match": 0.30,
            "workload_fairness": 0.25,
            "work_life_balance": 0.25,
            "schedule_stability": 0.20,
        },
    )
    critical_components = frozenset({WORK_LIFE_BALANCE, PREFERENCE_ALIGNMENT})

    def get_scoring_components(
        self, context: DecisionContext
    ) -> list[ScoringComponent]:
        """Score the human impact of the proposal.

        Args:
            context: Decision context to evaluate.

        Returns:
            Four components per evaluated shift; one for swaps and
            optimizations.

        """
        proposal = context.proposal
        if isinstance(proposal, ShiftAssignment):
            return self._shift_components(proposal.user_id, proposal.shift, context)

        if isinstance(proposal, ScheduleCreation):
            by_user: dict[str, list[Shift]] = {}
            for assignment in proposal.assignments:
                by_user.setdefault(assignment.user_id, []).append(
                    assignment.shift.model_copy(update={"user_id": assignment.user_id})
                )
            components: list[ScoringComponent] = []
            for user_id, shifts in by_user.items():
                for index, shift in enumerate(shifts):
                    others = shifts[:index] + shifts[index + 1 :]
                    scoped = context.with_existing_shifts(
                        list(context.existing_shifts) + others
                    )
                    components.extend(self._shift_components(user_id, shift, scoped))
            return components

        if isinstance(proposal, ShiftSwap):
            return [self._swap_component(proposal, context)]

        if isinstance(proposal, ScheduleOptimization):
            return [self._optimization_component(proposal)]

        return []

    def suggestions(self, components: Sequence[ScoringComponent]) -> list[str]:
        """Surface every negative piece of welfare evidence."""
        return [
            f"Consider employee welfare: {ref.description}"
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
        """Back compliance rejections; bend for confident operational needs."""
        compliance = self.find_decision(other_decisions, AgentRole.compliance)
        operations = self.find_decision(other_decisions, AgentRole.operations)

        if compliance and compliance.effective_recommendation == Recommendation.reject:
            return DebateResponse(
                response=(
                    f"{self.name}: I support the compliance rejection. Employee "
                    "welfare includes legal protections."
                ),
                changed_position=True,
                new_recommendation=Recommendation.reject,
                new_confidence=95,
            )

        if (
            operations
            and operations.effective_recommendation == Recommendation.approve
            and operations.effective_confidence > 85
            and self.evaluate(context).score >= 60
        ):
            return DebateResponse(
                response=(
                    f"{self.name}: I understand operational needs. I can support this "
                    "with conditions to protect employee welfare."
                ),
                changed_position=True,
                new_recommendation=Recommendation.approve_with_conditions,
                new_confidence=70,
            )

        return DebateResponse(
            response=(
                f"{self.name}: Employee wellbeing remains my priority. Cost savings and "
                "operational efficiency should not come at the expense of worker welfare."
            ),
            changed_position=False,
        )

    def _shift_components(
        self, user_id: str, shift: Shift, context: DecisionContext
    ) -> list[ScoringComponent]:
        user_shifts = context.shifts_for_user(user_id)
        return [
            self._preference_alignment(
                shift, user_shifts, context.preference_for(user_id)
            ),
            self._work_life_balance(shift, user_shifts),
            self._workload_fairness(user_id, shift, context),
            self._schedule_stability(shift, user_shifts, context),
        ]

    def _preference_alignment(
        self,
        shift: Shift,
        user_shifts: list[Shift],
        prefs: EmployeePreference | None,
    ) -> ScoringComponent:
        if prefs is None:
            return ScoringComponent(
                name=PREFERENCE_ALIGNMENT,
                score=float(NEUTRAL_PREFERENCE_SCORE),
                weight=self.weight("preference_match"),
                reasoning="No preferences set - using neutral score",
                evidence=[
                    make_evidence(
                        EvidenceType.data,
                        "Employee Preferences",
                        "No preferences on file - cannot evaluate alignment",
                        EvidenceImpact.neutral,
                        0.5,
                    )
                ],
            )

        refs: list[EvidenceReference] = []
        score = NEUTRAL_PREFERENCE_SCORE
        name = day_name(shift.start_time)
        hour = shift.start_time.hour

        if name in prefs.preferred_days:
            score += 15
            refs.append(
                make_evidence(
                    EvidenceType.preference,
                    "Preferred Day",
                    f"Employee prefers working on {name}",
                    EvidenceImpact.positive,
                    0.8,
                    name,
                )
            )
        if name in prefs.avoid_days:
            score -= 30
            refs.append(
                make_evidence(
                    EvidenceType.preference,
                    "Avoided Day",
                    f"Employee prefers to avoid {name}",
                    EvidenceImpact.negative,
                    0.9,
                    name,
                )
            )

        matched = None
        if prefs.prefer_morning and _is_morning(hour):
            matched = "morning"
        elif prefs.prefer_evening and _is_evening(hour):
            matched = "evening"
        elif prefs.prefer_night and _is_night(hour):
            matched = "night"

        if matched:
            score += 10
            refs.append(
                make_evidence(
                    EvidenceType.preference,
                    "Time Preference",
                    f"Matches {matched} shift preference",
                    EvidenceImpact.positive,
                    0.6,
                )
            )
        elif prefs.prefer_morning or prefs.prefer_evening or prefs.prefer_night:
            score -= 10
            refs.append(
                make_evidence(
                    EvidenceType.preference,
                    "Time Preference",
                    "Does not match preferred time of day",
                    EvidenceImpact.negative,
                    0.5,
                )
            )

        if (
            prefs.unavailable_from is not None
            and prefs.unavailable_to is not None
            and prefs.unavailable_from <= shift.start_time <= prefs.unavailable_to
        ):
            score = 0
            reason = prefs.unavailable_reason or "personal reasons"
            refs.append(
                make_evidence(
                    EvidenceType.preference,
                    "Unavailability",
                    f"Employee marked unavailable: {reason}",
                    EvidenceImpact.negative,
                    1.0,
                    prefs.unavailable_reason,
                )
            )

        if prefs.max_hours_per_week is not None:
            week_start, week_end = week_bounds(shift.start_time)
            weekly = shift_hours(shift) + sum(
                shift_hours(s)
                for s in user_shifts
                if week_start <= s.start_time <= week_end
            )
            if weekly > prefs.max_hours_per_week:
                score -= 20
                refs.append(
                    make_evidence(
                        EvidenceType.preference,
                        "Hours Constraint",
                        f"Week reaches {weekly:.1f}h, above preferred max "
                        f"{prefs.max_hours_per_week:g}h/week",
                        EvidenceImpact.negative,
                        0.7,
                        round(weekly, 2),
                    )
                )

        score = max(0, min(100, score))
        if score >= 70:
            met = sum(1 for r in refs if r.impact == EvidenceImpact.positive)
            reasoning = f"Good preference match: {met} preferences met"
        else:
            missed = sum(1 for r in refs if r.impact == EvidenceImpact.negative)
            reasoning = f"Preference concerns: {missed} mismatches found"

        return ScoringComponent(
            name=PREFERENCE_ALIGNMENT,
            score=float(score),
            weight=self.weight("preference_match"),
            reasoning=reasoning,
            evidence=refs,
        )

    def _work_life_balance(
        self, shift: Shift, user_shifts: list[Shift]
    ) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        score = 100

        consecutive = _longest_run_of_days(user_shifts + [shift])
        if consecutive >= 6:
            score -= 30
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Consecutive Days",
                    f"{consecutive} consecutive work days - risk of burnout",
                    EvidenceImpact.negative,
                    0.9,
                    consecutive,
                )
            )
        elif consecutive == 5:
            score -= 15
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Consecutive Days",
                    f"{consecutive} consecutive work days",
                    EvidenceImpact.neutral,
                    0.6,
                    consecutive,
                )
            )
        else:
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Consecutive Days",
                    f"{consecutive} consecutive work days - reasonable",
                    EvidenceImpact.positive,
                    0.7,
                    consecutive,
                )
            )

        if is_weekend(shift.start_time):
            recent_weekends = [
                s
                for s in user_shifts
                if abs(whole_days_between(s.start_time, shift.start_time)) <= 7
                and is_weekend(s.start_time)
            ]
            if len(recent_weekends) >= 2:
                score -= 20
                refs.append(
                    make_evidence(
                        EvidenceType.pattern,
                        "Weekend Work",
                        "Multiple weekend shifts recently - impacts personal time",
                        EvidenceImpact.negative,
                        0.7,
                        len(recent_weekends) + 1,
                    )
                )
            else:
                refs.append(
                    make_evidence(
                        EvidenceType.pattern,
                        "Weekend Work",
                        "Weekend shift with reasonable frequency",
                        EvidenceImpact.neutral,
                        0.4,
                    )
                )

        start_hour = shift.start_time.hour
        irregular = any(
            abs(s.start_time.hour - start_hour) > 8
            and abs(whole_days_between(s.start_time, shift.start_time)) <= 2
            for s in user_shifts
        )
        if irregular:
            score -= 15
            refs.append(
                make_evidence(
                    EvidenceType.pattern,
                    "Schedule Irregularity",
                    "Large variation in shift times - affects sleep patterns",
                    EvidenceImpact.negative,
                    0.6,
                )
            )

        score = max(0, score)
        return ScoringComponent(
            name=WORK_LIFE_BALANCE,
            score=float(score),
            weight=self.weight("work_life_balance"),
            reasoning=(
                "Good work-life balance maintained"
                if score >= 70
                else "Work-life balance concerns identified"
            ),
            evidence=refs,
        )

    def _workload_fairness(
        self, user_id: str, shift: Shift, context: DecisionContext
    ) -> ScoringComponent:
        hours_by_user: dict[str, float] = {}
        for existing in context.existing_shifts:
            hours_by_user[existing.user_id] = hours_by_user.get(
                existing.user_id, 0.0
            ) + shift_hours(existing)
        user_hours = hours_by_user.get(user_id, 0.0) + shift_hours(shift)
        hours_by_user[user_id] = user_hours

        totals = list(hours_by_user.values())
        mean = math.fsum(totals) / len(totals)
        std_dev = math.sqrt(math.fsum((h - mean) ** 2 for h in totals) / len(totals))
        deviation = (user_hours - mean) / std_dev if std_dev > 0 else 0.0
        comparison = f"{user_hours:.1f}h vs team avg {mean:.1f}h"

        if deviation > 2:
            score, impact, weight = 30, EvidenceImpact.negative, 1.0
            description = f"{comparison} - significantly overloaded"
        elif deviation > 1:
            score, impact, weight = 60, EvidenceImpact.neutral, 0.7
            description = f"{comparison} - above average workload"
        elif deviation < -1:
            score, impact, weight = 90, EvidenceImpact.positive, 0.8
            description = f"{comparison} - below average workload"
        else:
            score, impact, weight = 85, EvidenceImpact.positive, 0.9
            description = f"{comparison} - fair distribution"

        if score >= 70:
            reasoning = (
                f"Fair workload: {user_hours:.1f}h is reasonable vs team avg {mean:.1f}h"
            )
        else:
            reasoning = f"Workload concern: {user_hours:.1f}h exceeds team avg {mean:.1f}h"

        return ScoringComponent(
            name=WORKLOAD_FAIRNESS,
            score=float(score),
            weight=self.weight("workload_fairness"),
            reasoning=reasoning,
            evidence=[
                make_evidence(
                    EvidenceType.calculation,
                    "Hours Distribution",
                    description,
                    impact,
                    weight,
                    round(user_hours, 2),
                )
            ],
        )

    def _schedule_stability(
        self, shift: Shift, user_shifts: list[Shift], context: DecisionContext
    ) -> ScoringComponent:
        refs: list[EvidenceReference] = []
        score = 100
        deadline = context.compliance.publish_deadline_days
        notice = whole_days_between(shift.start_time, context.as_of)

        if notice < deadline:
            score -= max(0, (deadline - notice) * 3)
            refs.append(
                make_evidence(
                    EvidenceType.data,
                    "Notice Period",
                    f"Only {notice} days notice ({deadline} days recommended by law)",
                    EvidenceImpact.negative if notice < 7 else EvidenceImpact.neutral,
                    0.8,
                    notice,
                )
            )
        else:
            refs.append(
                make_evidence(
                    EvidenceType.data,
                    "Notice Period",
                    f"{notice} days notice - adequate time to plan",
                    EvidenceImpact.positive,
                    0.6,
                    notice,
                )
            )

        recent = sorted(user_shifts, key=lambda s: s.start_time)[-5:]
        if recent:
            average_hour = math.fsum(s.start_time.hour for s in recent) / len(recent)
            variation = abs(shift.start_time.hour - average_hour)
            if variation > 6:
                score -= 20
                refs.append(
                    make_evidence(
                        EvidenceType.pattern,
                        "Shift Timing Consistency",
                        f"Significant variation from recent pattern ({variation:.0f}h "
                        "difference)",
                        EvidenceImpact.negative,
                        0.6,
                        round(variation, 1),
                    )
                )
            else:
                refs.append(
                    make_evidence(
                        EvidenceType.pattern,
                        "Shift Timing Consistency",
                        "Consistent with recent shift patterns",
                        EvidenceImpact.positive,
                        0.5,
                    )
                )

        score = max(0, score)
        return ScoringComponent(
            name=SCHEDULE_STABILITY,
            score=float(score),
            weight=self.weight("schedule_stability"),
            reasoning=(
                "Schedule provides good predictability for employee"
                if score >= 70
                else "Schedule stability concerns - may impact personal planning"
            ),
            evidence=refs,
        )

    def _swap_component(
        self, proposal: ShiftSwap, context: DecisionContext
    ) -> ScoringComponent:
        requester_match = preference_match(
            proposal.shift_to_receive, context.preference_for(proposal.requester_id)
        )
        target_match = preference_match(
            proposal.shift_to_swap, context.preference_for(proposal.target_user_id)
        )
        reason = proposal.reason or "no reason given"
        return ScoringComponent(
            name="Swap Preference Match",
            score=float(round_half_up((requester_match + target_match) / 2)),
            weight=1.0,
            reasoning=(
                f"Swap benefits: Requester {requester_match}%, Target {target_match}%"
            ),
            evidence=[
                make_evidence(
                    EvidenceType.data,
                    "Employee Initiative",
                    f'Swap requested by employee: "{reason}"',
                    EvidenceImpact.positive,
                    0.8,
                    proposal.reason or None,
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Requester Fit",
                    f"Requester preference match: {requester_match}%",
                    EvidenceImpact.positive
                    if requester_match >= 70
                    else EvidenceImpact.neutral,
                    0.6,
                    requester_match,
                ),
                make_evidence(
                    EvidenceType.calculation,
                    "Target Fit",
                    f"Target preference match: {target_match}%",
                    EvidenceImpact.positive if target_match >= 70 else EvidenceImpact.neutral,
                    0.6,
                    target_match,
                ),
            ],
        )

    def _optimization_component(self, proposal: ScheduleOptimization) -> ScoringComponent:
        moved = len({c.current_user_id for c in proposal.changes})
        score = max(40, 85 - 5 * len(proposal.changes))
        return ScoringComponent(
            name="Reassignment Impact",
            score=float(score),
            weight=1.0,
            reasoning=(
                f"Reassignment touches {len(proposal.changes)} shift(s) across "
                f"{moved} employee(s)"
            ),
            evidence=[
                make_evidence(
                    EvidenceType.data,
                    "Reassignments",
                    f"{len(proposal.changes)} shift(s) change owner after publication",
                    EvidenceImpact.neutral if score >= 70 else EvidenceImpact.negative,
                    0.6,
                    len(proposal.changes),
                )
            ],
        )
