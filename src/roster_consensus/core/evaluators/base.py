"""Base class and shared scoring policy for domain evaluators.

An evaluator turns a DecisionContext into named, weighted ScoringComponents
and folds them into an AgentDecision. The folding step (``decide``) is pure
and depends only on the components, so the editable-decision ledger can
re-run it on human-edited scores without touching the context again.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import ClassVar

from roster_consensus.core.evaluators.shift_math import round_half_up
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

__all__ = [
    "BaseEvaluator",
    "CONCERN_RATIO",
    "determine_recommendation",
    "make_evidence",
    "weighted_score",
]

# A component scoring below this share of its max_score is a concern.
CONCERN_RATIO = 0.5


def weighted_score(components: Sequence[ScoringComponent]) -> float:
    """Compute the weight-normalized mean of component scores on a 0-100 scale.

    Sums are taken with ``math.fsum`` so the result does not depend on the
    order of the components.

    Args:
        components: Components to combine.

    Returns:
        The weighted score, or 0.0 when the total weight is zero.

    """
    total_weight = math.fsum(c.weight for c in components)
    if total_weight <= 0:
        return 0.0
    weighted_sum = math.fsum(c.ratio * c.weight * 100 for c in components)
    return weighted_sum / total_weight


def determine_recommendation(
    score: float,
    has_critical: bool,
    has_warnings: bool,
) -> tuple[Recommendation, int]:
    """Map a weighted score and concern flags to a recommendation.

    Args:
        score: Weighted score, 0-100.
        has_critical: Whether a critical component scored below half.
        has_warnings: Whether any component scored below half.

    Returns:
        Tuple of (recommendation, confidence).

    """
    if has_critical:
        return Recommendation.reject, 90
    if score >= 80:
        if has_warnings:
            return Recommendation.approve_with_conditions, round_half_up(score)
        return Recommendation.approve, round_half_up(score)
    if score >= 60:
        return Recommendation.approve_with_conditions, round_half_up(score)
    if score >= 40:
        return Recommendation.needs_modification, 70
    return Recommendation.reject, 80


def make_evidence(
    type: EvidenceType,
    source: str,
    description: str,
    impact: EvidenceImpact,
    weight: float = 1.0,
    value: str | float | int | None = None,
) -> EvidenceReference:
    """Build an EvidenceReference with positional brevity."""
    return EvidenceReference(
        type=type,
        source=source,
        description=description,
        impact=impact,
        weight=weight,
        value=value,
    )


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


class BaseEvaluator(ABC):
    """Abstract base class for domain evaluators.

    Subclasses declare their persona, the names of components whose failure
    forces a rejection, and implement ``get_scoring_components`` and
    ``suggestions``. Evaluators hold no mutable state; the same instance may
    evaluate many contexts concurrently.

    Attributes:
        persona: Display metadata, including component weights.
        critical_components: Component names that force a rejection when
            they score below half.

    """

    persona: ClassVar[AgentPersona]
    critical_components: ClassVar[frozenset[str]] = frozenset()

    @property
    def role(self) -> AgentRole:
        """Role of this evaluator."""
        return self.persona.role

    @property
    def name(self) -> str:
        """Display name of this evaluator."""
        return self.persona.name

    def weight(self, key: str) -> float:
        """Return the configured weight of a scoring dimension."""
        return self.persona.component_weights[key]

    @abstractmethod
    def get_scoring_components(
        self, context: DecisionContext
    ) -> list[ScoringComponent]:
        """Score the proposal in the context along this evaluator's dimensions.

        Args:
            context: Decision context to evaluate.

        Returns:
            Scoring components; empty only if nothing could be assessed.

        """
        ...

    def suggestions(self, components: Sequence[ScoringComponent]) -> list[str]:
        """Derive actionable suggestions from component evidence.

        Args:
            components: Components the decision is based on.

        Returns:
            Suggestions in component order. The base implementation has none.

        """
        return []

    def evaluate(self, context: DecisionContext) -> AgentDecision:
        """Evaluate a proposal.

        Args:
            context: Decision context to evaluate.

        Returns:
            The evaluator's decision, timestamped with the context's as_of.

        """
        components = self.get_scoring_components(context)
        return self.decide(components, evaluated_at=context.as_of)

    def decide(
        self,
        components: Sequence[ScoringComponent],
        evaluated_at: datetime,
    ) -> AgentDecision:
        """Fold scoring components into a decision.

        Args:
            components: Components to fold, possibly with edited scores.
            evaluated_at: Timestamp to record on the decision.

        Returns:
            The resulting AgentDecision.

        """
        score = weighted_score(components)
        breakdown: dict[str, float] = {}
        reasoning: list[str] = []
        concerns: list[str] = []
        has_critical = False

        for component in components:
            breakdown[component.name] = component.score
            if component.score < component.max_score * CONCERN_RATIO:
                concerns.append(component.reasoning)
                if component.name in self.critical_components:
                    has_critical = True
            else:
                reasoning.append(component.reasoning)

        recommendation, confidence = determine_recommendation(
            score, has_critical, bool(concerns)
        )

        return AgentDecision(
            agent_role=self.role,
            agent_name=self.name,
            recommendation=recommendation,
            confidence=_clamp(confidence),
            score=_clamp(round_half_up(score)),
            score_breakdown=breakdown,
            reasoning=reasoning,
            concerns=concerns,
            suggestions=self.suggestions(components),
            evaluated_at=evaluated_at,
        )

    def respond_to_debate(
        self,
        context: DecisionContext,
        other_decisions: Sequence[AgentDecision],
        topic: str,
    ) -> DebateResponse:
        """Respond to a debate round.

        The default response holds the current position.

        Args:
            context: Decision context under debate.
            other_decisions: The other evaluators' current decisions.
            topic: Topic of the round.

        Returns:
            The evaluator's response.

        """
        return DebateResponse(
            response=f"{self.name} maintains original position",
            changed_position=False,
        )

    @staticmethod
    def find_decision(
        decisions: Sequence[AgentDecision], role: AgentRole
    ) -> AgentDecision | None:
        """Return the decision of the given role, if present."""
        for decision in decisions:
            if decision.agent_role == role:
                return decision
        return None
