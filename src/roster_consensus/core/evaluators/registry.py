"""Evaluator registry for managing and running the evaluator panel.

This module provides the EvaluatorRegistry class, which holds exactly one
evaluator per role and runs them sequentially or in parallel.
"""

import asyncio
from enum import Enum

from roster_consensus.config.settings import CostSettings
from roster_consensus.core.evaluators.base import BaseEvaluator
from roster_consensus.core.evaluators.compliance import ComplianceEvaluator
from roster_consensus.core.evaluators.cost import CostEvaluator
from roster_consensus.core.evaluators.employee_welfare import EmployeeWelfareEvaluator
from roster_consensus.core.evaluators.operations import OperationsEvaluator
from roster_consensus.logging_config import get_logger
from roster_consensus.models.config import ConsensusConfig
from roster_consensus.models.context import DecisionContext
from roster_consensus.models.decision import AgentDecision
from roster_consensus.models.enums import AgentRole
from roster_consensus.models.evidence import AgentPersona

__all__ = [
    "EvaluatorRegistry",
    "ExecutionMode",
]

logger = get_logger(__name__)


class ExecutionMode(str, Enum):
    """Execution mode for running evaluators.

    Attributes:
        SEQUENTIAL: Execute evaluators one at a time in order.
        PARALLEL: Execute evaluators concurrently.

    """

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


class EvaluatorRegistry:
    """Registry holding the evaluator panel.

    The registration order is the panel order: decisions, debate responses
    and audit summaries are always reported in it.

    Attributes:
        evaluators: Registered evaluator instances.
        execution_mode: SEQUENTIAL or PARALLEL execution mode.

    """

    def __init__(
        self,
        execution_mode: ExecutionMode = ExecutionMode.PARALLEL,
    ) -> None:
        """Initialize the evaluator registry.

        Args:
            execution_mode: SEQUENTIAL or PARALLEL execution mode.

        """
        self.evaluators: list[BaseEvaluator] = []
        self.execution_mode = execution_mode

    @classmethod
    def default(
        cls,
        cost_settings: CostSettings | None = None,
        execution_mode: ExecutionMode = ExecutionMode.PARALLEL,
    ) -> "EvaluatorRegistry":
        """Build a registry with the four standard evaluators.

        Args:
            cost_settings: Cost model for the cost evaluator; defaults apply
                when omitted.
            execution_mode: SEQUENTIAL or PARALLEL execution mode.

        Returns:
            Registry with compliance, cost, welfare and operations evaluators.

        """
        cost_settings = cost_settings or CostSettings()
        registry = cls(execution_mode=execution_mode)
        registry.register(ComplianceEvaluator())
        registry.register(
            CostEvaluator(
                hourly_rate=cost_settings.hourly_rate,
                overtime_premium=cost_settings.overtime_premium,
            )
        )
        registry.register(EmployeeWelfareEvaluator())
        registry.register(OperationsEvaluator())
        return registry

    def register(self, evaluator: BaseEvaluator) -> None:
        """Register an evaluator instance.

        Args:
            evaluator: The evaluator instance to register.

        Raises:
            ValueError: If an evaluator with the same role is already registered.

        """
        for existing in self.evaluators:
            if existing.role == evaluator.role:
                raise ValueError(
                    f"Evaluator with role '{evaluator.role.value}' is already registered"
                )

        self.evaluators.append(evaluator)
        logger.debug(
            "evaluator_registered",
            role=evaluator.role.value,
            name=evaluator.name,
        )

    def get(self, role: AgentRole) -> BaseEvaluator | None:
        """Return the evaluator registered for a role, if any."""
        for evaluator in self.evaluators:
            if evaluator.role == role:
                return evaluator
        return None

    def personas(self, config: ConsensusConfig | None = None) -> list[AgentPersona]:
        """Return evaluator personas, with vote weights when a config is given."""
        personas = []
        for evaluator in self.evaluators:
            persona = evaluator.persona.model_copy(deep=True)
            if config is not None:
                persona.vote_weight = config.weight_for(evaluator.role)
            personas.append(persona)
        return personas

    async def evaluate_all(self, context: DecisionContext) -> list[AgentDecision]:
        """Run every registered evaluator on the context.

        Evaluators are synchronous and CPU-bound; in PARALLEL mode each runs
        in a worker thread and the results are gathered in panel order.

        Args:
            context: Decision context to evaluate.

        Returns:
            One decision per evaluator, in panel order.

        """
        logger.debug(
            "evaluate_all_started",
            evaluator_count=len(self.evaluators),
            execution_mode=self.execution_mode.value,
        )

        if self.execution_mode == ExecutionMode.PARALLEL:
            decisions = list(
                await asyncio.gather(
                    *(asyncio.to_thread(e.evaluate, context) for e in self.evaluators)
                )
            )
        else:
            decisions = [e.evaluate(context) for e in self.evaluators]

        logger.debug(
            "evaluate_all_completed",
            recommendations={d.agent_role.value: d.recommendation.value for d in decisions},
        )
        return decisions
