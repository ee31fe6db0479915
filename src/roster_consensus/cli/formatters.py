"""Output formatting utilities for CLI.

This module renders consensus results, transparent decisions, batch
results and the evaluator panel as text or JSON.
"""

import json
from collections.abc import Sequence

from roster_consensus.models.batch import BatchEvaluationResult
from roster_consensus.models.consensus import ConsensusResponse, ConsensusResult
from roster_consensus.models.evidence import AgentPersona
from roster_consensus.models.transparent import TransparentDecision

__all__ = [
    "format_agents",
    "format_batch",
    "format_response",
    "format_transparent",
]


def _dump(data: object) -> str:
    return json.dumps(data, indent=2, default=str)


def _heading(lines: list[str], title: str, char: str = "=") -> None:
    lines.append("")
    lines.append(char * 60)
    lines.append(title)
    lines.append(char * 60)


def _result_lines(result: ConsensusResult) -> list[str]:
    lines = [
        f"  Status: {result.status.value}",
        f"  Final decision: {result.final_decision.value}",
        f"  Votes: {result.votes_for} for, {result.votes_against} against, "
        f"{result.abstentions} abstaining",
        f"  Consensus score: {result.consensus_score}",
        f"  Confidence: {result.confidence_level:.1f}",
        f"  Debate rounds: {result.total_rounds}",
        f"  Summary: {result.summary}",
    ]
    for decision in result.agent_decisions:
        revised = ""
        if decision.revised_recommendation is not None:
            revised = f" (revised from {decision.recommendation.value})"
        lines.append(
            f"  - {decision.agent_name}: {decision.effective_recommendation.value}"
            f"{revised} @ {decision.effective_confidence}, score {decision.score}"
        )
    if result.remaining_concerns:
        lines.append("  Concerns:")
        lines.extend(f"    * {c}" for c in result.remaining_concerns)
    if result.conditions:
        lines.append("  Conditions:")
        lines.extend(f"    * {c}" for c in result.conditions)
    return lines


def format_response(response: ConsensusResponse, json_output: bool = False) -> str:
    """Format a quick-path consensus response.

    Args:
        response: The consensus response.
        json_output: Whether to format as JSON.

    Returns:
        Formatted string output.

    """
    if json_output:
        return _dump(response.model_dump(mode="json"))

    lines: list[str] = []
    _heading(lines, "Consensus Result")
    if not response.success or response.result is None:
        lines.append(f"  Error: {response.error}")
        lines.append("")
        return "\n".join(lines)

    lines.extend(_result_lines(response.result))
    if response.audit_id:
        lines.append(f"  Audit id: {response.audit_id}")
    lines.append("")
    return "\n".join(lines)


def format_transparent(decision: TransparentDecision, json_output: bool = False) -> str:
    """Format a transparent decision with its editable components.

    Args:
        decision: The transparent decision.
        json_output: Whether to format as JSON.

    Returns:
        Formatted string output.

    """
    if json_output:
        return _dump(decision.model_dump(mode="json"))

    lines: list[str] = []
    _heading(lines, decision.summary.headline)
    lines.append(f"  Decision: {decision.id}")
    lines.append(f"  Status: {decision.status.value}")
    lines.append(f"  Confidence: {decision.summary.confidence_level.value}")
    lines.extend(_result_lines(decision.consensus_result))

    for evaluation in decision.agent_evaluations:
        _heading(
            lines,
            f"{evaluation.agent_name}: {evaluation.recommendation.value} "
            f"(score {evaluation.score})",
            char="-",
        )
        for component in decision.components_for(evaluation.agent_role):
            marker = "" if component.is_editable else " [locked]"
            edited = ""
            if component.user_modified:
                edited = f" (edited from {component.original_score:g}: {component.user_reason})"
            lines.append(
                f"  {component.component_name}: {component.current_score:g}/"
                f"{component.max_score:g}{marker}{edited}"
            )
            lines.append(f"    {component.reasoning}")
            lines.extend(f"    - {ref}" for ref in component.evidence_references)

    if decision.summary.quick_actions:
        lines.append("")
        lines.append(
            "Actions: " + ", ".join(a.label for a in decision.summary.quick_actions)
        )
    lines.append("")
    return "\n".join(lines)


def format_batch(result: BatchEvaluationResult, json_output: bool = False) -> str:
    """Format a batch evaluation result.

    Args:
        result: The batch result.
        json_output: Whether to format as JSON.

    Returns:
        Formatted string output.

    """
    if json_output:
        return _dump(result.model_dump(mode="json"))

    lines: list[str] = []
    _heading(lines, "Batch Results")
    for index, consensus in sorted(result.decisions.items()):
        lines.append(
            f"  #{index}: {consensus.final_decision.value} "
            f"({consensus.status.value}, score {consensus.consensus_score})"
        )
    for failure in result.failures:
        lines.append(f"  #{failure.index}: FAILED for {failure.user_id}: {failure.error}")

    summary = result.summary
    _heading(lines, "Summary", char="-")
    lines.append(f"  Total proposals: {summary.total_proposals}")
    lines.append(f"  Approved: {summary.approved}")
    lines.append(f"  Rejected: {summary.rejected}")
    lines.append(f"  Needs review: {summary.needs_review}")
    lines.append(f"  Average score: {summary.average_score}")
    lines.append("")
    return "\n".join(lines)


def format_agents(personas: Sequence[AgentPersona], json_output: bool = False) -> str:
    """Format the evaluator panel.

    Args:
        personas: Evaluator personas with vote weights.
        json_output: Whether to format as JSON.

    Returns:
        Formatted string output.

    """
    if json_output:
        return _dump([p.model_dump(mode="json") for p in personas])

    lines: list[str] = []
    _heading(lines, "Evaluator Panel")
    for persona in personas:
        lines.append("")
        lines.append(f"{persona.name} ({persona.role.value})")
        lines.append(f"  {persona.description}")
        if persona.vote_weight is not None:
            lines.append(f"  Vote weight: {persona.vote_weight:g}")
        weights = ", ".join(
            f"{key} {value:g}" for key, value in persona.component_weights.items()
        )
        lines.append(f"  Component weights: {weights}")
    lines.append("")
    return "\n".join(lines)
