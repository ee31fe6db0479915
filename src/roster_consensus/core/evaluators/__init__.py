"""Domain evaluators and the registry that runs them as a panel."""

from roster_consensus.core.evaluators.base import (
    BaseEvaluator,
    determine_recommendation,
    weighted_score,
)
from roster_consensus.core.evaluators.compliance import ComplianceEvaluator
from roster_consensus.core.evaluators.cost import CostEvaluator
from roster_consensus.core.evaluators.employee_welfare import EmployeeWelfareEvaluator
from roster_consensus.core.evaluators.operations import OperationsEvaluator
from roster_consensus.core.evaluators.registry import EvaluatorRegistry, ExecutionMode

__all__ = [
    "BaseEvaluator",
    "ComplianceEvaluator",
    "CostEvaluator",
    "EmployeeWelfareEvaluator",
    "EvaluatorRegistry",
    "ExecutionMode",
    "OperationsEvaluator",
    "determine_recommendation",
    "weighted_score",
]
