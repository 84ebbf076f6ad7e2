"""
Centralized logging configuration for the coinpurse engine.

This module provides standardized logging configuration using structlog
for all components. Settlement code logs through a bound audit logger so
committed and rejected settlements can be told apart from ordinary
diagnostics.
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


def get_settlement_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for settlement audit records.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for settlement decisions
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="settlement",
        audit_trail=True
    )


def log_settlement(
    logger: FilteringBoundLogger,
    amount: int,
    committed: bool,
    total_before: int,
    total_after: Optional[int] = None,
    owner_id: Optional[str] = None,
    reason: Optional[str] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a settlement outcome with standardized format.

    Committed settlements log at info, ordinary rejections at warning.
    Internal inconsistencies are logged separately by the engine at error.

    Args:
        logger: Structlog logger instance
        amount: Signed amount in base units
        committed: Whether the settlement was committed
        total_before: Ledger total before the settlement
        total_after: Ledger total after commit, if committed
        owner_id: Owner of the ledger, when known
        reason: Rejection reason
        context: Additional context data
    """
    bound_logger = logger.bind(
        owner_id=owner_id,
        amount=amount,
        settlement_result="COMMITTED" if committed else "REJECTED",
        total_before=total_before,
        total_after=total_after,
    )

    if reason:
        bound_logger = bound_logger.bind(reason=reason)

    if context:
        bound_logger = bound_logger.bind(context=context)

    if committed:
        bound_logger.info("settlement_committed")
    else:
        bound_logger.warning("settlement_rejected")
