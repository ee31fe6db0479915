"""Configuration models for evaluation and voting.

ComplianceConfig carries the statutory limits every evaluator reads from the
decision context. ConsensusConfig controls debate length, vote weights and
escalation. Both are plain validated models; environment overrides are
applied by ``roster_consensus.config.settings``.
"""

from pydantic import Field

from roster_consensus.config.defaults import (
    DEBATE_ROUNDS_MAX,
    DEBATE_ROUNDS_MIN,
    DEFAULT_AGENT_WEIGHTS,
    DEFAULT_ENABLE_CROSS_EVALUATION,
    DEFAULT_ESCALATE_ON_DEADLOCK,
    DEFAULT_ESCALATE_ON_LOW_CONFIDENCE,
    DEFAULT_MAJORITY_THRESHOLD,
    DEFAULT_MAX_DAILY_HOURS,
    DEFAULT_MAX_DEBATE_ROUNDS,
    DEFAULT_MAX_OVERTIME_PER_MONTH,
    DEFAULT_MAX_OVERTIME_PER_WEEK,
    DEFAULT_MAX_OVERTIME_PER_YEAR,
    DEFAULT_MAX_WEEKLY_HOURS,
    DEFAULT_MIN_DAILY_REST_HOURS,
    DEFAULT_MIN_WEEKLY_REST_HOURS,
    DEFAULT_MINIMUM_CONFIDENCE_THRESHOLD,
    DEFAULT_PUBLISH_DEADLINE_DAYS,
    DEFAULT_REQUIRE_UNANIMOUS,
    MAJORITY_THRESHOLD_MAX,
    MAJORITY_THRESHOLD_MIN,
)
from roster_consensus.models.base import BaseSchema, FrozenSchema
from roster_consensus.models.enums import AgentRole

__all__ = [
    "ComplianceConfig",
    "ConsensusConfig",
    "ConsensusConfigOverride",
]


class ComplianceConfig(FrozenSchema):
    """Statutory working-time limits.

    Attributes:
        max_daily_hours: Maximum working hours per calendar day.
        max_weekly_hours: Maximum regular working hours per ISO week.
        min_daily_rest_hours: Minimum rest between two shifts.
        min_weekly_rest_hours: Minimum continuous rest per ISO week.
        publish_deadline_days: Days of notice a roster must be published with.
        max_overtime_per_week: Overtime hours allowed per week.
        max_overtime_per_month: Overtime hours allowed per month.
        max_overtime_per_year: Overtime hours allowed per year.

    """

    max_daily_hours: float = Field(default=DEFAULT_MAX_DAILY_HOURS, gt=0)
    max_weekly_hours: float = Field(default=DEFAULT_MAX_WEEKLY_HOURS, gt=0)
    min_daily_rest_hours: float = Field(default=DEFAULT_MIN_DAILY_REST_HOURS, ge=0)
    min_weekly_rest_hours: float = Field(default=DEFAULT_MIN_WEEKLY_REST_HOURS, ge=0)
    publish_deadline_days: int = Field(default=DEFAULT_PUBLISH_DEADLINE_DAYS, ge=0)
    max_overtime_per_week: float = Field(default=DEFAULT_MAX_OVERTIME_PER_WEEK, ge=0)
    max_overtime_per_month: float = Field(default=DEFAULT_MAX_OVERTIME_PER_MONTH, ge=0)
    max_overtime_per_year: float = Field(default=DEFAULT_MAX_OVERTIME_PER_YEAR, ge=0)


class ConsensusConfig(BaseSchema):
    """Voting and debate configuration.

    Attributes:
        require_unanimous: Only unanimous outcomes may approve or reject.
        majority_threshold: Weighted share needed for a majority, in (0, 1].
        max_debate_rounds: Upper bound on debate rounds.
        enable_cross_evaluation: Whether evaluators debate at all.
        agent_weights: Vote weight per evaluator role; missing roles weigh 1.
        escalate_on_deadlock: Escalate instead of reporting deadlock.
        escalate_on_low_confidence: Escalate when average confidence is low.
        minimum_confidence_threshold: Average confidence below which to escalate.

    """

    require_unanimous: bool = Field(default=DEFAULT_REQUIRE_UNANIMOUS)
    majority_threshold: float = Field(
        default=DEFAULT_MAJORITY_THRESHOLD,
        gt=MAJORITY_THRESHOLD_MIN,
        le=MAJORITY_THRESHOLD_MAX,
        description="Weighted share of votes needed for a majority",
    )
    max_debate_rounds: int = Field(
        default=DEFAULT_MAX_DEBATE_ROUNDS,
        ge=DEBATE_ROUNDS_MIN,
        le=DEBATE_ROUNDS_MAX,
        description="Upper bound on the number of debate rounds",
    )
    enable_cross_evaluation: bool = Field(default=DEFAULT_ENABLE_CROSS_EVALUATION)
    agent_weights: dict[AgentRole, float] = Field(
        default_factory=lambda: {
            AgentRole(role): weight for role, weight in DEFAULT_AGENT_WEIGHTS.items()
        },
        description="Vote weight per evaluator role",
    )
    escalate_on_deadlock: bool = Field(default=DEFAULT_ESCALATE_ON_DEADLOCK)
    escalate_on_low_confidence: bool = Field(default=DEFAULT_ESCALATE_ON_LOW_CONFIDENCE)
    minimum_confidence_threshold: float = Field(
        default=DEFAULT_MINIMUM_CONFIDENCE_THRESHOLD,
        ge=0,
        le=100,
        description="Average confidence below which the decision escalates",
    )

    def weight_for(self, role: AgentRole) -> float:
        """Return the vote weight of a role, defaulting to 1."""
        return self.agent_weights.get(role, 1.0)

    def merged(self, override: "ConsensusConfigOverride | None") -> "ConsensusConfig":
        """Return a new config with the override's set fields applied.

        The merged values are validated again, so an override cannot
        smuggle in an out-of-range threshold.

        Args:
            override: Partial configuration supplied with a request.

        Returns:
            A new ConsensusConfig; self is left untouched.

        """
        if override is None:
            return self.model_copy(deep=True)
        data = self.model_dump()
        updates = override.model_dump(exclude_none=True)
        if "agent_weights" in updates:
            data["agent_weights"] = {**data["agent_weights"], **updates.pop("agent_weights")}
        data.update(updates)
        return ConsensusConfig.model_validate(data)


class ConsensusConfigOverride(BaseSchema):
    """Partial ConsensusConfig supplied with a single request.

    Every field is optional; unset fields keep the service configuration.
    """

    require_unanimous: bool | None = None
    majority_threshold: float | None = Field(
        default=None, gt=MAJORITY_THRESHOLD_MIN, le=MAJORITY_THRESHOLD_MAX
    )
    max_debate_rounds: int | None = Field(
        default=None, ge=DEBATE_ROUNDS_MIN, le=DEBATE_ROUNDS_MAX
    )
    enable_cross_evaluation: bool | None = None
    agent_weights: dict[AgentRole, float] | None = None
    escalate_on_deadlock: bool | None = None
    escalate_on_low_confidence: bool | None = None
    minimum_confidence_threshold: float | None = Field(default=None, ge=0, le=100)
