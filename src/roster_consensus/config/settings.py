"""Application settings using pydantic-settings.

This module provides environment variable support for configuration
using pydantic-settings. Settings can be overridden via environment
variables with the appropriate prefix.

Environment Variables:
    ROSTER_COMPLIANCE_MAX_DAILY_HOURS: Maximum working hours per day
    ROSTER_COMPLIANCE_MAX_WEEKLY_HOURS: Maximum regular hours per week
    ROSTER_COMPLIANCE_MIN_DAILY_REST_HOURS: Minimum rest between shifts
    ROSTER_COMPLIANCE_MIN_WEEKLY_REST_HOURS: Minimum continuous weekly rest
    ROSTER_COMPLIANCE_PUBLISH_DEADLINE_DAYS: Required roster notice in days
    ROSTER_COMPLIANCE_MAX_OVERTIME_PER_WEEK: Weekly overtime cap
    ROSTER_CONSENSUS_MAJORITY_THRESHOLD: Weighted share needed for a majority
    ROSTER_CONSENSUS_MAX_DEBATE_ROUNDS: Upper bound on debate rounds
    ROSTER_CONSENSUS_ENABLE_CROSS_EVALUATION: Whether evaluators debate
    ROSTER_CONSENSUS_AGENT_WEIGHTS: JSON object of role to vote weight
    ROSTER_COST_HOURLY_RATE: Base hourly rate in NOK
    ROSTER_COST_OVERTIME_PREMIUM: Overtime multiplier
    ROSTER_AUDIT_RETENTION_DAYS: Audit record retention period
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from roster_consensus.config.defaults import (
    DEBATE_ROUNDS_MAX,
    DEBATE_ROUNDS_MIN,
    DEFAULT_AGENT_WEIGHTS,
    DEFAULT_AUDIT_RETENTION_DAYS,
    DEFAULT_ENABLE_CROSS_EVALUATION,
    DEFAULT_ESCALATE_ON_DEADLOCK,
    DEFAULT_ESCALATE_ON_LOW_CONFIDENCE,
    DEFAULT_HOURLY_RATE,
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
    DEFAULT_OVERTIME_PREMIUM,
    DEFAULT_PUBLISH_DEADLINE_DAYS,
    DEFAULT_REQUIRE_UNANIMOUS,
    MAJORITY_THRESHOLD_MAX,
    MAJORITY_THRESHOLD_MIN,
)
from roster_consensus.models.config import ComplianceConfig, ConsensusConfig

__all__ = [
    "AuditSettings",
    "ComplianceSettings",
    "ConsensusSettings",
    "CostSettings",
    "Settings",
    "get_settings",
]


class ComplianceSettings(BaseSettings):
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

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_COMPLIANCE_",
        extra="ignore",
    )

    max_daily_hours: float = Field(default=DEFAULT_MAX_DAILY_HOURS, gt=0)
    max_weekly_hours: float = Field(default=DEFAULT_MAX_WEEKLY_HOURS, gt=0)
    min_daily_rest_hours: float = Field(default=DEFAULT_MIN_DAILY_REST_HOURS, ge=0)
    min_weekly_rest_hours: float = Field(default=DEFAULT_MIN_WEEKLY_REST_HOURS, ge=0)
    publish_deadline_days: int = Field(default=DEFAULT_PUBLISH_DEADLINE_DAYS, ge=0)
    max_overtime_per_week: float = Field(default=DEFAULT_MAX_OVERTIME_PER_WEEK, ge=0)
    max_overtime_per_month: float = Field(default=DEFAULT_MAX_OVERTIME_PER_MONTH, ge=0)
    max_overtime_per_year: float = Field(default=DEFAULT_MAX_OVERTIME_PER_YEAR, ge=0)

    def to_config(self) -> ComplianceConfig:
        """Build the immutable ComplianceConfig evaluators read."""
        return ComplianceConfig.model_validate(self.model_dump())


class ConsensusSettings(BaseSettings):
    """Voting and debate defaults.

    Attributes:
        require_unanimous: Only unanimous outcomes may approve or reject.
        majority_threshold: Weighted share needed for a majority.
        max_debate_rounds: Upper bound on debate rounds.
        enable_cross_evaluation: Whether evaluators debate.
        agent_weights: Vote weight per evaluator role.
        escalate_on_deadlock: Escalate instead of reporting deadlock.
        escalate_on_low_confidence: Escalate when average confidence is low.
        minimum_confidence_threshold: Average confidence below which to escalate.

    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_CONSENSUS_",
        extra="ignore",
    )

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
    agent_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_AGENT_WEIGHTS),
        description="Vote weight per evaluator role",
    )
    escalate_on_deadlock: bool = Field(default=DEFAULT_ESCALATE_ON_DEADLOCK)
    escalate_on_low_confidence: bool = Field(default=DEFAULT_ESCALATE_ON_LOW_CONFIDENCE)
    minimum_confidence_threshold: float = Field(
        default=DEFAULT_MINIMUM_CONFIDENCE_THRESHOLD,
        ge=0,
        le=100,
    )

    def to_config(self) -> ConsensusConfig:
        """Build the ConsensusConfig used by the aggregator and debate."""
        return ConsensusConfig.model_validate(self.model_dump())


class CostSettings(BaseSettings):
    """Cost model used by the cost evaluator.

    Attributes:
        hourly_rate: Base hourly rate in NOK.
        overtime_premium: Multiplier applied to overtime hours.

    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_COST_",
        extra="ignore",
    )

    hourly_rate: float = Field(default=DEFAULT_HOURLY_RATE, gt=0)
    overtime_premium: float = Field(default=DEFAULT_OVERTIME_PREMIUM, ge=1.0)


class AuditSettings(BaseSettings):
    """Audit trail settings.

    Attributes:
        retention_days: Days an audit record is retained.

    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_AUDIT_",
        extra="ignore",
    )

    retention_days: int = Field(default=DEFAULT_AUDIT_RETENTION_DAYS, ge=1)


class Settings(BaseSettings):
    """Root settings container.

    Aggregates all subsystem settings into a single configuration object.
    Use get_settings() to access the cached singleton instance.

    Attributes:
        compliance: Statutory limits.
        consensus: Voting and debate defaults.
        cost: Cost model.
        audit: Audit trail settings.

    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_",
        extra="ignore",
    )

    compliance: ComplianceSettings = Field(default_factory=ComplianceSettings)
    consensus: ConsensusSettings = Field(default_factory=ConsensusSettings)
    cost: CostSettings = Field(default_factory=CostSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
