"""
Centralized logging configuration for the TradeCalc calculator.

This module provides standardized logging configuration using structlog
for all components. Calculator modules and the configuration provider
obtain their loggers here so every event shares the same formatting.
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

    # Log output goes to stderr so calculator output on stdout stays clean
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
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
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

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


def get_config_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for configuration loading and fallback decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for the configuration subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="config",
        audit_trail=True
    )


def log_config_transition(
    logger: FilteringBoundLogger,
    from_source: str,
    to_source: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a configuration snapshot replacement with standardized format.

    Args:
        logger: Structlog logger instance
        from_source: Source of the snapshot being replaced
        to_source: Source of the new snapshot
        trigger: What caused the replacement (refresh, save, reset)
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_source=from_source,
        to_source=to_source,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("config_snapshot_replaced")
