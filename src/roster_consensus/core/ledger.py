"""Editable decision ledger.

Builds TransparentDecisions from a finished evaluation and applies human
edits to them. Edits never re-run an evaluator against roster data: the
edited evaluator's decision is recomputed from its component scores with
``BaseEvaluator.decide``, keeping any position it adopted in debate, and the
vote is retaken over the preserved debate history.
"""

from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

from roster_consensus.config.defaults import MAX_SUMMARY_POINTS
from roster_consensus.core.aggregator import ConsensusAggregator
from roster_consensus.core.evaluators.registry import EvaluatorRegistry
from roster_consensus.core.exceptions import (
    ComponentNotEditableError,
    ComponentNotFoundError,
    EvaluationError,
)
from roster_consensus.core.lifecycle import DecisionLifecycle
from roster_consensus.logging_config import get_logger
from roster_consensus.models.config import ConsensusConfig
from roster_consensus.models.consensus import ConsensusResult
from roster_consensus.models.decision import AgentDecision
from roster_consensus.models.enums import (
    ConfidenceBand,
    DecisionStatus,
    DecisionType,
    FinalDecision,
    QuickActionType,
    SummaryRecommendation,
)
from roster_consensus.models.evidence import ScoringComponent
from roster_consensus.models.proposal import Proposal
from roster_consensus.models.transparent import (
    AgentEvaluation,
    ComponentEdit,
    DecisionSummary,
    EditableComponent,
    QuickAction,
    TransparentDecision,
)

__all__ = ["DecisionLedger", "build_summary", "confidence_band"]

logger = get_logger(__name__)


def confidence_band(confidence: float) -> ConfidenceBand:
    """Bucket an average confidence into high, medium or low."""
    if confidence >= 80:
        return ConfidenceBand.high
    if confidence >= 60:
        return ConfidenceBand.medium
    return ConfidenceBand.low


def build_summary(
    evaluations: Sequence[AgentEvaluation], result: ConsensusResult
) -> DecisionSummary:
    """Derive the display summary of a consensus result.

    Args:
        evaluations: Per-evaluator evaluations, in panel order.
        result: The consensus result.

    Returns:
        The decision summary.

    """
    panel = len(evaluations)
    if result.final_decision == FinalDecision.approve:
        headline = f"Recommended: {result.votes_for}/{panel} agents approve"
        recommendation = SummaryRecommendation.approve
    elif result.final_decision == FinalDecision.reject:
        headline = f"Not Recommended: {result.votes_against}/{panel} agents have concerns"
        recommendation = SummaryRecommendation.reject
    else:
        headline = "Requires Review: Agents could not reach consensus"
        recommendation = SummaryRecommendation.needs_review

    key_points = [line for e in evaluations for line in e.reasoning][:MAX_SUMMARY_POINTS]
    main_concerns = [line for e in evaluations for line in e.concerns][
        :MAX_SUMMARY_POINTS
    ]

    quick_actions = [
        QuickAction(
            label="Approve as is",
            action=QuickActionType.approve,
            description="Accept the current proposal without changes",
        ),
        QuickAction(
            label="Reject",
            action=QuickActionType.reject,
            description="Reject the proposal and request alternatives",
        ),
        QuickAction(
            label="Modify",
            action=QuickActionType.modify,
            description="Edit individual components and recalculate",
        ),
    ]
    if recommendation == SummaryRecommendation.reject or main_concerns:
        quick_actions.append(
            QuickAction(
                label="Request Alternative",
                action=QuickActionType.request_alternative,
                description="Ask for a different proposal that addresses concerns",
            )
        )

    return DecisionSummary(
        headline=headline,
        recommendation=recommendation,
        confidence_level=confidence_band(result.confidence_level),
        key_points=key_points,
        main_concerns=main_concerns,
        quick_actions=quick_actions,
    )


def _evaluation(
    decision: AgentDecision, components: Sequence[ScoringComponent]
) -> AgentEvaluation:
    return AgentEvaluation(
        agent_role=decision.agent_role,
        agent_name=decision.agent_name,
        recommendation=decision.effective_recommendation,
        confidence=decision.effective_confidence,
        score=decision.score,
        scoring_components=list(components),
        reasoning=list(decision.reasoning),
        concerns=list(decision.concerns),
        suggestions=list(decision.suggestions),
    )


class DecisionLedger:
    """Builds and edits TransparentDecisions.

    Attributes:
        registry: Evaluator panel; used to recompute edited decisions.
        default_config: Configuration used when a decision carries none.

    """

    def __init__(
        self, registry: EvaluatorRegistry, default_config: ConsensusConfig
    ) -> None:
        """Initialize the ledger.

        Args:
            registry: Evaluator panel.
            default_config: Fallback consensus configuration.

        """
        self.registry = registry
        self.default_config = default_config

    def build(
        self,
        decision_type: DecisionType,
        proposal: Proposal,
        components: Sequence[Sequence[ScoringComponent]],
        debated_decisions: Sequence[AgentDecision],
        result: ConsensusResult,
        created_at: datetime,
        config: ConsensusConfig | None = None,
    ) -> TransparentDecision:
        """Assemble a TransparentDecision.

        Args:
            decision_type: Kind of decision evaluated.
            proposal: The evaluated proposal.
            components: Each evaluator's components, index-aligned with
                ``debated_decisions``.
            debated_decisions: Decisions after debate.
            result: Consensus over ``debated_decisions``.
            created_at: Creation timestamp.
            config: Configuration the vote was taken under.

        Returns:
            A decision in pending_review.

        """
        evaluations = [
            _evaluation(decision, comps)
            for decision, comps in zip(debated_decisions, components)
        ]
        editable = [
            EditableComponent(
                id=str(uuid4()),
                agent_role=decision.agent_role,
                component_index=index,
                component_name=component.name,
                original_score=component.score,
                current_score=component.score,
                max_score=component.max_score,
                weight=component.weight,
                reasoning=component.reasoning,
                evidence_references=[ref.as_reference() for ref in component.evidence],
                is_editable=component.is_editable,
            )
            for decision, comps in zip(debated_decisions, components)
            for index, component in enumerate(comps)
        ]

        return TransparentDecision(
            id=str(uuid4()),
            decision_type=decision_type,
            proposal=proposal,
            agent_evaluations=evaluations,
            debated_decisions=list(debated_decisions),
            consensus_result=result,
            editable_components=editable,
            summary=build_summary(evaluations, result),
            created_at=created_at,
            consensus_config=config,
        )

    def apply_edits(
        self, decision: TransparentDecision, edits: Sequence[ComponentEdit]
    ) -> TransparentDecision:
        """Apply component edits and recompute the consensus.

        Every edit is validated before anything changes, and the input
        decision is never modified.

        Args:
            decision: The decision to edit.
            edits: Score overrides.

        Returns:
            An edited copy in the modified state.

        Raises:
            ComponentNotFoundError: If an edit names an unknown component.
            ComponentNotEditableError: If an edit targets a read-only component.
            InvalidDecisionStateError: If the decision is already approved or
                rejected.

        """
        for edit in edits:
            target = decision.component(edit.component_id)
            if target is None:
                raise ComponentNotFoundError(edit.component_id)
            if not target.is_editable:
                raise ComponentNotEditableError(target.id, target.component_name)
        DecisionLifecycle(decision).ensure_can_transition(DecisionStatus.modified)

        updated = decision.model_copy(deep=True)
        for edit in edits:
            target = updated.component(edit.component_id)
            target.current_score = max(0.0, min(target.max_score, edit.new_score))
            target.user_modified = True
            target.user_reason = edit.reason

        decisions: list[AgentDecision] = []
        evaluations: list[AgentEvaluation] = []
        for debated, evaluation in zip(
            updated.debated_decisions, updated.agent_evaluations
        ):
            editable = updated.components_for(evaluation.agent_role)
            if any(c.user_modified for c in editable):
                recomputed = self._recompute(debated, evaluation, editable)
                decisions.append(recomputed)
                evaluations.append(_evaluation(recomputed, evaluation.scoring_components))
            else:
                decisions.append(debated)
                evaluations.append(_evaluation(debated, evaluation.scoring_components))

        original = updated.consensus_result
        aggregator = ConsensusAggregator(updated.consensus_config or self.default_config)
        result = aggregator.calculate(
            decisions,
            original.debate_rounds,
            updated.decision_type,
            evaluated_at=original.evaluated_at,
            duration_ms=original.evaluation_duration_ms,
        )

        updated.agent_evaluations = evaluations
        updated.consensus_result = result
        updated.summary = build_summary(evaluations, result)

        logger.info(
            "decision_edited",
            decision_id=updated.id,
            edit_count=len(edits),
            final_decision=result.final_decision.value,
        )
        return DecisionLifecycle(updated).transition_to(DecisionStatus.modified)

    def _recompute(
        self,
        debated: AgentDecision,
        evaluation: AgentEvaluation,
        editable: Sequence[EditableComponent],
    ) -> AgentDecision:
        evaluator = self.registry.get(evaluation.agent_role)
        if evaluator is None:
            raise EvaluationError(
                f"No evaluator registered for role '{evaluation.agent_role.value}'"
            )
        components = [
            component.model_copy(update={"score": current.current_score})
            for component, current in zip(evaluation.scoring_components, editable)
        ]
        recomputed = evaluator.decide(components, evaluated_at=debated.evaluated_at)
        if debated.revised_recommendation is None:
            return recomputed
        # The debate outcome stands; only the first-pass values follow the scores.
        return recomputed.model_copy(
            update={
                "revised_recommendation": debated.revised_recommendation,
                "revised_confidence": debated.revised_confidence,
                "agrees_with_previous_decisions": debated.agrees_with_previous_decisions,
                "disagreement_points": list(debated.disagreement_points),
            }
        )
