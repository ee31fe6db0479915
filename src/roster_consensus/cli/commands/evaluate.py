"""Evaluate command: run a scenario file through the consensus service.

Depending on the flags, the scenario's request is evaluated on the quick
path or as an editable decision, or the scenario's batch is evaluated.
"""

from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path

from roster_consensus.cli.commands.base import BaseCommand, CommandResult
from roster_consensus.cli.exceptions import CommandError
from roster_consensus.cli.formatters import (
    format_batch,
    format_response,
    format_transparent,
)
from roster_consensus.config.loader import load_edits, load_scenario
from roster_consensus.config.models import EditSpec, Scenario
from roster_consensus.core.service import ConsensusService
from roster_consensus.logging_config import get_logger
from roster_consensus.models.transparent import ComponentEdit, TransparentDecision
from roster_consensus.storage import (
    AuditSink,
    InMemoryAuditLog,
    InMemoryRosterStore,
    JsonlAuditLog,
)

__all__ = ["EvaluateCommand", "resolve_edits"]

logger = get_logger(__name__)


def resolve_edits(
    decision: TransparentDecision, specs: Sequence[EditSpec]
) -> list[ComponentEdit]:
    """Translate role/name edit specs into component-id edits.

    Args:
        decision: Decision whose components the specs address.
        specs: Edits as written in a file.

    Returns:
        Edits addressed by component id.

    Raises:
        CommandError: If a spec names a component the decision does not have.

    """
    edits: list[ComponentEdit] = []
    for spec in specs:
        component = decision.component_named(spec.agent_role, spec.component_name)
        if component is None:
            raise CommandError(
                f"No component '{spec.component_name}' for {spec.agent_role.value}"
            )
        edits.append(
            ComponentEdit(
                component_id=component.id,
                new_score=spec.new_score,
                reason=spec.reason,
            )
        )
    return edits


class EvaluateCommand(BaseCommand):
    """Command evaluating the request or batch of a scenario file."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "evaluate"

    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the evaluate command.

        Args:
            args: Parsed arguments with scenario, detailed, edits, batch,
                audit_log and json_output.

        Returns:
            CommandResult; exit code 1 when the quick path fails.

        Raises:
            CommandError: If the scenario lacks what the flags ask for.

        """
        scenario = load_scenario(Path(args.scenario))
        service = self._service(scenario, getattr(args, "audit_log", None))
        json_output = getattr(args, "json_output", False)

        if getattr(args, "batch", False):
            if scenario.batch is None:
                raise CommandError("Scenario has no 'batch' section")
            result = await service.batch_evaluate(
                scenario.batch.roster_id,
                scenario.batch.proposals,
                requested_by=scenario.batch.requested_by,
            )
            return CommandResult(exit_code=0, output=format_batch(result, json_output))

        if scenario.request is None:
            raise CommandError("Scenario has no 'request' section")

        if getattr(args, "detailed", False):
            decision = await service.get_transparent_decision(scenario.request)
            edits_path = getattr(args, "edits", None)
            specs = load_edits(Path(edits_path)) if edits_path else scenario.edits
            if specs:
                decision = service.apply_user_edits(
                    decision, resolve_edits(decision, specs)
                )
            return CommandResult(
                exit_code=0, output=format_transparent(decision, json_output)
            )

        response = await service.get_consensus(scenario.request)
        return CommandResult(
            exit_code=0 if response.success else 1,
            output=format_response(response, json_output),
        )

    @staticmethod
    def _service(scenario: Scenario, audit_log: str | None) -> ConsensusService:
        sink: AuditSink = JsonlAuditLog(Path(audit_log)) if audit_log else InMemoryAuditLog()
        as_of = scenario.as_of
        return ConsensusService(
            InMemoryRosterStore.from_scenario(scenario),
            audit_sink=sink,
            clock=(lambda: as_of) if as_of is not None else None,
        )
