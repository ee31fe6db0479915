"""Decision context builder: gathers the roster data a request needs.

Reads are the only I/O in an evaluation. Missing collections are treated
as empty so evaluators always see a well-formed context.
"""

from collections.abc import Callable
from datetime import datetime

from roster_consensus.core.exceptions import RosterNotFoundError
from roster_consensus.logging_config import get_logger
from roster_consensus.models.config import ComplianceConfig
from roster_consensus.models.consensus import ConsensusRequest
from roster_consensus.models.context import DecisionContext
from roster_consensus.storage.interfaces import RosterDataSource

__all__ = ["DecisionContextBuilder"]

logger = get_logger(__name__)


class DecisionContextBuilder:
    """Builds DecisionContexts from a RosterDataSource.

    Attributes:
        data_source: Where roster data is read from.
        compliance: Statutory limits placed into every context.
        clock: Source of the context's ``as_of`` timestamp.

    """

    def __init__(
        self,
        data_source: RosterDataSource,
        compliance: ComplianceConfig,
        clock: Callable[[], datetime],
    ) -> None:
        """Initialize the builder.

        Args:
            data_source: Where roster data is read from.
            compliance: Statutory limits placed into every context.
            clock: Source of the context's ``as_of`` timestamp.

        """
        self.data_source = data_source
        self.compliance = compliance
        self.clock = clock

    async def build(self, request: ConsensusRequest) -> DecisionContext:
        """Assemble the context for a request.

        Without a roster id the context is empty and no data is read.

        Args:
            request: The consensus request.

        Returns:
            The decision context.

        Raises:
            RosterNotFoundError: If the request names an unknown roster.

        """
        as_of = self.clock()
        if not request.roster_id:
            return DecisionContext(
                decision_type=request.decision_type,
                proposal=request.proposal,
                compliance=self.compliance,
                as_of=as_of,
            )

        roster = await self.data_source.get_roster(request.roster_id)
        if roster is None:
            raise RosterNotFoundError(request.roster_id)

        shifts = await self.data_source.find_shifts_by_roster(roster.id) or []
        user_ids = list(
            dict.fromkeys(
                [s.user_id for s in shifts] + request.proposal.affected_user_ids()
            )
        )
        preferences = await self.data_source.find_preferences(user_ids) or []
        budget = await self.data_source.find_labor_budget(roster)

        logger.debug(
            "decision_context_built",
            roster_id=roster.id,
            shift_count=len(shifts),
            preference_count=len(preferences),
            has_budget=budget is not None,
        )

        return DecisionContext(
            decision_type=request.decision_type,
            proposal=request.proposal,
            roster_id=roster.id,
            existing_shifts=shifts,
            employee_preferences=preferences,
            compliance=self.compliance,
            labor_budget=budget,
            as_of=as_of,
        )
