"""roster-consensus: multi-agent consensus engine for roster decisions.

Four domain evaluators (compliance, cost, employee welfare, operations)
score a proposed roster change, debate their disagreements, and vote
into a single auditable, human-editable consensus result.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
