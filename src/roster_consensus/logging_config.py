"""Structured logging for the consensus engine.

Log lines are rendered by structlog through the standard library and always
go to stderr. Request fields bound with ``decision_context`` are merged into
every line emitted while a request is evaluated, including lines logged by
evaluators running in worker threads.
"""

import logging
import sys
from contextlib import AbstractContextManager

import structlog

__all__ = ["configure_logging", "decision_context", "get_logger"]


def configure_logging(verbose: bool = False, json_output: bool = False) -> None:
    """Configure structured logging for the engine.

    Log lines go to stderr so that CLI output on stdout stays parseable.

    Args:
        verbose: Enable debug output, such as individual rule violations.
        json_output: Render one JSON object per line instead of console text.

    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def decision_context(
    decision_type: str, roster_id: str | None = None
) -> AbstractContextManager[None]:
    """Bind a request's identifying fields to the log lines it produces.

    Args:
        decision_type: Kind of decision being evaluated.
        roster_id: Roster the request reads from, when it names one.

    Returns:
        A context manager; the fields are unbound again when it exits.

    """
    fields = {"decision_type": decision_type}
    if roster_id is not None:
        fields["roster_id"] = roster_id
    return structlog.contextvars.bound_contextvars(**fields)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ from the calling module.

    Returns:
        Configured structlog logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("consensus_started", proposal_type="shift_assignment")

    """
    return structlog.get_logger(name)
