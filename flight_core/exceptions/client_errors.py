"""Errors caused by the caller's input or the vehicle's current state."""

from http import HTTPStatus
from typing import Any, ClassVar

from flight_core.exceptions.base import FlightCoreError


class ClientError(FlightCoreError):
    """Base class for all client errors (4xx)."""

    error_code: ClassVar[str] = "CLIENT_ERROR"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST


class ValidationError(ClientError):
    """A command argument is outside its accepted range."""

    error_code: ClassVar[str] = "VALIDATION_ERROR"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with optional field info.

        Args:
            message: Description of the validation failure.
            field: Name of the field that failed validation.
            value: The invalid value.
            context: Additional context information.
        """
        context_dict = dict(context or {})
        if field is not None:
            context_dict["field"] = field
        if value is not None:
            context_dict["value"] = value
        super().__init__(message, context=context_dict)


class CommandRejectedError(ClientError):
    """The vehicle refused a command in its current state."""

    error_code: ClassVar[str] = "COMMAND_REJECTED"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        command: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the name of the rejected command.

        Args:
            message: Why the command was refused.
            command: Command name, e.g. ``execute_path``.
            context: Additional context information.
        """
        super().__init__(message, context={**(context or {}), "command": command})


class RouteBlockedError(ClientError):
    """No obstacle-free route exists between the requested endpoints."""

    error_code: ClassVar[str] = "ROUTE_BLOCKED"
    http_status: ClassVar[int] = HTTPStatus.UNPROCESSABLE_ENTITY
