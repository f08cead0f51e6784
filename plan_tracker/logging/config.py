"""
Centralized logging configuration for the plan tracker.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor

from ..config.defaults import LoggingParams

_SHARED_PROCESSORS: tuple[Processor, ...] = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
)


def build_processors(
    params: LoggingParams,
    extra_processors: Optional[list[Processor]] = None
) -> list[Processor]:
    """
    Assemble the processor chain for the given logging parameters.

    The renderer is always last: JSON when ``params.format_json`` is set,
    the colored console renderer otherwise.
    """
    processors = list(_SHARED_PROCESSORS)

    if params.include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if params.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    processors.extend(extra_processors or ())
    processors.append(
        structlog.processors.JSONRenderer() if params.format_json
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return processors


def configure_logging(
    params: Optional[LoggingParams] = None,
    extra_processors: Optional[list[Processor]] = None
) -> None:
    """
    Configure structlog and the stdlib root logger for the application.

    Args:
        params: Logging section of the tracker config; defaults when omitted
        extra_processors: Additional structlog processors, run before rendering
    """
    params = params or LoggingParams()

    logging.basicConfig(
        level=getattr(logging, params.level.upper()),
        stream=sys.stdout,
        format="%(message)s"
    )

    structlog.configure(
        processors=build_processors(params, extra_processors),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_store_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for plan store mutations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for store audit events
    """
    # Stays a lazy proxy; binds on first use, after configure_logging()
    return structlog.get_logger(
        name,
        subsystem="plan_store",
        audit_trail=True
    )


def log_status_change(
    logger: FilteringBoundLogger,
    plan_id: str,
    from_status: str,
    to_status: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a derived plan status change with standardized format.

    Args:
        logger: Structlog logger instance
        plan_id: ID of the plan whose status changed
        from_status: Status before recomputation
        to_status: Status after recomputation
        trigger: Store operation that caused the recomputation
        context: Additional context data
    """
    bound_logger = logger.bind(
        plan_id=plan_id,
        from_status=from_status,
        to_status=to_status,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("status_change")
