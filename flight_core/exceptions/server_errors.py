"""Server error exceptions (HTTP 5xx)."""

from http import HTTPStatus
from typing import ClassVar

from flight_core.exceptions.base import FlightCoreError


class ServerError(FlightCoreError):
    """Base class for all server errors (5xx)."""

    error_code: ClassVar[str] = "SERVER_ERROR"
    http_status: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR


class ConfigurationError(ServerError):
    """Settings are inconsistent with each other."""

    error_code: ClassVar[str] = "CONFIGURATION_ERROR"
    http_status: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR
