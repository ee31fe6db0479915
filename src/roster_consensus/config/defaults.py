"""Default configuration values for roster-consensus.

This module centralizes all hard-coded default values used throughout
the engine, making them easy to discover and modify. Compliance limits
follow the Norwegian Working Environment Act (Arbeidsmiljøloven).
"""

# Compliance limits (Arbeidsmiljøloven)
DEFAULT_MAX_DAILY_HOURS = 9
DEFAULT_MAX_WEEKLY_HOURS = 40
DEFAULT_MIN_DAILY_REST_HOURS = 11
DEFAULT_MIN_WEEKLY_REST_HOURS = 35
DEFAULT_PUBLISH_DEADLINE_DAYS = 14
DEFAULT_MAX_OVERTIME_PER_WEEK = 10
DEFAULT_MAX_OVERTIME_PER_MONTH = 25
DEFAULT_MAX_OVERTIME_PER_YEAR = 200

# Consensus behaviour
DEFAULT_REQUIRE_UNANIMOUS = False
DEFAULT_MAJORITY_THRESHOLD = 0.66
DEFAULT_MAX_DEBATE_ROUNDS = 3
DEFAULT_ENABLE_CROSS_EVALUATION = True
DEFAULT_ESCALATE_ON_DEADLOCK = True
DEFAULT_ESCALATE_ON_LOW_CONFIDENCE = True
DEFAULT_MINIMUM_CONFIDENCE_THRESHOLD = 60

# Vote weights per evaluator role
DEFAULT_AGENT_WEIGHTS: dict[str, float] = {
    "compliance": 1.5,
    "cost_optimizer": 1.0,
    "employee_advocate": 1.2,
    "operations": 1.0,
}

# Cost model (NOK)
DEFAULT_HOURLY_RATE = 200.0
DEFAULT_OVERTIME_PREMIUM = 1.4

# Audit
DEFAULT_AUDIT_RETENTION_DAYS = 730

# Validation ranges
MAJORITY_THRESHOLD_MIN = 0.0
MAJORITY_THRESHOLD_MAX = 1.0
DEBATE_ROUNDS_MIN = 1
DEBATE_ROUNDS_MAX = 10

# Result list limits
MAX_KEY_REASONS = 5
MAX_REMAINING_CONCERNS = 5
MAX_CONDITIONS = 3
MAX_SUMMARY_POINTS = 4
