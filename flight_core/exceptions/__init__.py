"""Flight core exception hierarchy.

Architecture:
    FlightCoreError (base)
    ├── ClientError (4xx)
    │   ├── ValidationError (400)
    │   ├── CommandRejectedError (400)
    │   └── RouteBlockedError (422)
    └── ServerError (5xx)
        └── ConfigurationError (500)

The planner and the simulator never raise these for geometric or state
conditions; they report "no path" as an empty route and a refused commit as
``False``. ``MissionControl`` is where those results become exceptions.

Usage:
    from flight_core.exceptions import RouteBlockedError

    route = planner.plan_route(start, end, snapshot)
    if route.is_empty:
        raise RouteBlockedError("No obstacle-free route", context={"start": start})
"""

from flight_core.exceptions.base import FlightCoreError
from flight_core.exceptions.client_errors import (
    ClientError,
    CommandRejectedError,
    RouteBlockedError,
    ValidationError,
)
from flight_core.exceptions.server_errors import ConfigurationError, ServerError

__all__ = [
    "ClientError",
    "CommandRejectedError",
    "ConfigurationError",
    "FlightCoreError",
    "RouteBlockedError",
    "ServerError",
    "ValidationError",
]
