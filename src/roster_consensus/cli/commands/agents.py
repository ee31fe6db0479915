"""Agents command: list the evaluator panel."""

from argparse import Namespace

from roster_consensus.cli.commands.base import BaseCommand, CommandResult
from roster_consensus.cli.formatters import format_agents
from roster_consensus.config.settings import get_settings
from roster_consensus.core.evaluators.registry import EvaluatorRegistry

__all__ = ["AgentsCommand"]


class AgentsCommand(BaseCommand):
    """Command printing each evaluator's persona and vote weight."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "agents"

    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the agents command.

        Args:
            args: Parsed arguments; only ``json_output`` is used.

        Returns:
            CommandResult with the rendered panel.

        """
        settings = get_settings()
        registry = EvaluatorRegistry.default(settings.cost)
        personas = registry.personas(settings.consensus.to_config())
        return CommandResult(
            exit_code=0,
            output=format_agents(personas, json_output=getattr(args, "json_output", False)),
        )
