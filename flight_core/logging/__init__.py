"""Structured logging for the flight core.

Usage:
    from flight_core.logging import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Route planned", extra={"waypoints": 4})
"""

from flight_core.logging.config import LogFormat, LoggingConfig, LogLevel
from flight_core.logging.context import (
    clear_context,
    correlation_id,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    get_extra_context,
    set_correlation_id,
    set_extra_context,
)
from flight_core.logging.formatters import HumanFormatter, JSONFormatter
from flight_core.logging.logger import get_logger, reset_logging, setup_logging

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "clear_context",
    "correlation_id",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "get_extra_context",
    "get_logger",
    "reset_logging",
    "set_correlation_id",
    "set_extra_context",
    "setup_logging",
]
