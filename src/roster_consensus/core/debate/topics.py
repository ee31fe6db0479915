"""Keyword heuristics applied to debate topics and evaluator reasoning.

Evaluators decide some debate responses by matching plain keywords. The
matching lives here so the rules are explicit and testable in one place.
"""

from collections.abc import Iterable

__all__ = [
    "LEGAL_OVERRIDE_KEYWORDS",
    "is_legal_override_topic",
    "mentions_coverage_gap",
]

LEGAL_OVERRIDE_KEYWORDS = ("exception", "override")


def is_legal_override_topic(topic: str) -> bool:
    """Return True when a debate topic asks to bend a legal rule.

    Args:
        topic: Debate round topic.

    Returns:
        Whether the topic mentions an exception or override.

    """
    lowered = topic.lower()
    return any(keyword in lowered for keyword in LEGAL_OVERRIDE_KEYWORDS)


def mentions_coverage_gap(lines: Iterable[str]) -> bool:
    """Return True when any line mentions a coverage gap.

    Args:
        lines: Reasoning lines of an evaluator.

    Returns:
        Whether the substring "gap" occurs in any line, case-insensitively.

    """
    return any("gap" in line.lower() for line in lines)
