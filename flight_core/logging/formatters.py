"""Log formatters for machine and terminal output."""

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

from flight_core.logging.context import get_correlation_id, get_extra_context

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_RECORD_FIELDS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
    | {"message", "asctime", "taskName"}
)

_LOGGER_NAME_WIDTH = 32


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the fields passed through ``extra=`` on a logging call."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_RECORD_FIELDS and not key.startswith("_")
    }


def _context_fields() -> dict[str, Any]:
    """Collect correlation ID and extra context for the current context."""
    fields: dict[str, Any] = {}
    corr_id = get_correlation_id()
    if corr_id:
        fields["correlation_id"] = corr_id
    fields.update(get_extra_context())
    return fields


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def __init__(
        self,
        *,
        service_name: str = "flight-core",
        include_timestamp: bool = True,
        include_location: bool = False,
    ) -> None:
        """Initialize the JSON formatter.

        Args:
            service_name: Value of the ``service`` field.
            include_timestamp: Whether to emit a ``timestamp`` field.
            include_location: Whether to emit ``module``, ``function`` and ``line``.
        """
        super().__init__()
        self._service_name = service_name
        self._include_timestamp = include_timestamp
        self._include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        entry: dict[str, Any] = {}

        if self._include_timestamp:
            created = datetime.fromtimestamp(record.created, tz=UTC)
            entry["timestamp"] = created.isoformat(timespec="milliseconds")

        entry["level"] = record.levelname
        entry["logger"] = record.name
        entry["message"] = record.getMessage()
        entry["service"] = self._service_name

        if self._include_location:
            entry["module"] = record.module
            entry["function"] = record.funcName
            entry["line"] = record.lineno

        entry.update(_context_fields())
        entry.update(_record_extras(record))

        if record.exc_info and record.exc_info[0] is not None:
            error_type, error, _ = record.exc_info
            entry["exception"] = {
                "type": error_type.__name__,
                "message": str(error),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Render records as aligned, optionally colored, single lines."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, *, use_colors: bool = True) -> None:
        """Initialize the human formatter.

        Args:
            use_colors: Whether to wrap the level name in ANSI colors.
        """
        super().__init__()
        self._use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record for a terminal."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        level = f"{record.levelname:<8}"
        if self._use_colors:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        name = record.name
        if len(name) > _LOGGER_NAME_WIDTH:
            name = "..." + name[-(_LOGGER_NAME_WIDTH - 3) :]

        line = f"{timestamp} {level} {name:<{_LOGGER_NAME_WIDTH}} | {record.getMessage()}"

        fields = {**_context_fields(), **_record_extras(record)}
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())

        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line
