"""
Centralized logging configuration for the contribution director.

This module provides standardized logging configuration using structlog
for all components. Every classification and allocation decision is logged
through the helpers below so a recommendation can be audited after the fact.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
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


def get_decision_logger(name: str, subsystem: str) -> FilteringBoundLogger:
    """
    Get a logger bound for per-fund decision auditing.

    Args:
        name: Logger name (typically __name__)
        subsystem: Pipeline stage emitting the decisions

    Returns:
        Configured structlog logger for decision audit lines
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem=subsystem,
        audit_trail=True
    )


def log_fund_classification(
    logger: FilteringBoundLogger,
    fund_code: str,
    status: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the decision state assigned to a fund.

    Args:
        logger: Structlog logger instance
        fund_code: Fund being classified
        status: Resulting decision state
        reason: Rule that produced the state
        context: Additional context data
    """
    bound_logger = logger.bind(
        fund_code=fund_code,
        fund_status=status,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Fund classified")


def log_allocation_decision(
    logger: FilteringBoundLogger,
    fund_code: str,
    allocated: bool,
    requested_amount: float,
    units: int,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log whether a fund received money in the allocation pass.

    Args:
        logger: Structlog logger instance
        fund_code: Fund being funded
        allocated: Whether an allocation was emitted
        requested_amount: Amount computed before unit rounding
        units: Whole units bought
        reason: Why the fund was funded or skipped
        context: Additional context data
    """
    bound_logger = logger.bind(
        fund_code=fund_code,
        allocation_result="ALLOCATED" if allocated else "SKIPPED",
        requested_amount=requested_amount,
        units=units,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if allocated:
        bound_logger.info("Allocation emitted")
    else:
        bound_logger.debug("Allocation skipped")
