"""Logging configuration using Pydantic settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(StrEnum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(StrEnum):
    """Valid log formats."""

    JSON = "json"
    HUMAN = "human"


class LoggingConfig(BaseSettings):
    """Logging configuration loaded from ``FLIGHT_LOG_*`` environment variables.

    Attributes:
        log_level: Minimum level emitted by the root logger.
        log_format: ``json`` for collectors, ``human`` for a terminal.
        service_name: Value of the ``service`` field on every JSON record.
        include_timestamp: Whether records carry a UTC timestamp.
        include_location: Whether records carry module, function and line.
        quiet_tick_logs: Raise the vehicle integrator logger to INFO so per-tick
            DEBUG lines stay out of the stream.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLIGHT_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: LogFormat = Field(default=LogFormat.JSON)
    service_name: str = Field(default="flight-core")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)
    quiet_tick_logs: bool = Field(default=True)


@lru_cache
def get_logging_config() -> LoggingConfig:
    """Get cached logging configuration instance."""
    return LoggingConfig()
