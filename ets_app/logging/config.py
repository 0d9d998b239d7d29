"""
Centralized logging configuration for the signal engine.

This module provides standardized logging configuration using structlog
for all components. Pure indicator math does not log; signal evaluation,
position transitions, backtests and cycle classification do.
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


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for entry/exit rule decisions."""
    return get_logger(name).bind(
        subsystem="signals",
        audit_trail=True
    )


def get_position_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for position state transitions."""
    return get_logger(name).bind(
        subsystem="position_state",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    signal_type: str,
    price: float,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a signal decision with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Instrument symbol
        signal_type: BUY, SELL or HOLD
        price: Evaluated close price
        reason: Human-readable reason attached to the signal
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        signal_type=signal_type,
        price=price,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if signal_type == "HOLD":
        bound_logger.debug("Signal evaluated")
    else:
        bound_logger.info("Signal evaluated")


def log_position_transition(
    logger: FilteringBoundLogger,
    symbol: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a position state transition with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Instrument symbol
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Position transition")
