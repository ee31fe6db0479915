"""Debate between evaluators and the keyword heuristics that steer it."""

from roster_consensus.core.debate.coordinator import (
    DebateCoordinator,
    DebateOutcome,
    debate_topic,
    majority_reached,
)
from roster_consensus.core.debate.topics import (
    is_legal_override_topic,
    mentions_coverage_gap,
)

__all__ = [
    "DebateCoordinator",
    "DebateOutcome",
    "debate_topic",
    "is_legal_override_topic",
    "majority_reached",
    "mentions_coverage_gap",
]
