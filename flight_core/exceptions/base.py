"""Base exception for the flight core.

Subclasses declare an ``error_code`` and are registered under it, so the
transport layer can turn a code received from a peer back into a class and
pick the HTTP status it answers with.
"""

from http import HTTPStatus
from typing import Any, ClassVar

_ERROR_CLASSES: dict[str, type["FlightCoreError"]] = {}


class FlightCoreError(Exception):
    """Base exception for all flight core errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        http_status: Status the external API layer should answer with.
        context: Debugging details, e.g. the offending field or command.
    """

    error_code: ClassVar[str] = "INTERNAL_ERROR"
    http_status: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _ERROR_CLASSES[cls.error_code] = cls

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            context: Additional key-value pairs for debugging.
        """
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def to_dict(self) -> dict[str, Any]:
        """Error body in the camelCase wire form used by telemetry."""
        return {
            "errorCode": self.error_code,
            "message": self.message,
            "context": self.context,
        }

    def to_log_dict(self) -> dict[str, Any]:
        """Fields for ``logger.warning(..., extra=error.to_log_dict())``.

        Keys avoid ``message`` and other ``LogRecord`` attribute names.
        """
        return {
            "error_code": self.error_code,
            "http_status": int(self.http_status),
            "error_message": self.message,
            "error_context": self.context,
            "exception_type": type(self).__name__,
        }

    @classmethod
    def get_by_error_code(cls, error_code: str) -> type["FlightCoreError"] | None:
        """Look up a registered subclass; the base class itself is not registered."""
        return _ERROR_CLASSES.get(error_code)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} [{details}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"
