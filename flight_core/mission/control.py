"""Mission control: the validated command surface over planner and simulator.

This is the calling layer the engines expect. It range-checks every command,
turns "no path" and "nothing staged" results into exceptions, and logs each
planning request under its own correlation ID, restoring the caller's afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

import pydantic

from flight_core.exceptions import CommandRejectedError, RouteBlockedError, ValidationError
from flight_core.logging.context import correlation_scope
from flight_core.mission.models import (
    AltitudeCommand,
    PayloadPointCommand,
    SpeedCommand,
    TargetCommand,
)
from flight_core.planning.models import GeoPoint, RouteRequest
from flight_core.vehicle.models import Waypoint

if TYPE_CHECKING:
    from flight_core.planning.models import RouteResponse
    from flight_core.planning.planner import PathPlanner
    from flight_core.planning.repository import ObstacleRepository
    from flight_core.vehicle.models import TelemetrySnapshot
    from flight_core.vehicle.simulator import VehicleSimulator

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _validate(
    model: type[ModelT],
    field: str,
    payload: Mapping[str, Any],
) -> ModelT:
    """Build a command model, mapping pydantic errors to ``ValidationError``."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as error:
        first = error.errors()[0]
        logger.warning("Rejected %s: %s", field, first["msg"])
        raise ValidationError(
            f"Invalid {field}: {first['msg']}",
            field=field,
            value=first.get("input"),
        ) from error


class MissionControl:
    """Command facade for the external API layer."""

    def __init__(
        self,
        simulator: VehicleSimulator,
        planner: PathPlanner,
        obstacles: ObstacleRepository,
    ) -> None:
        """Initialize mission control.

        Args:
            simulator: The vehicle being commanded.
            planner: Route planner.
            obstacles: Source of restricted-zone snapshots.
        """
        self._simulator = simulator
        self._planner = planner
        self._obstacles = obstacles

    def plan_route(self, request: RouteRequest | Mapping[str, Any]) -> RouteResponse:
        """Plan a route around the current restricted zones.

        Args:
            request: Endpoints and cruise altitude, as a model or wire dict.

        Returns:
            The planned 3D route.

        Raises:
            ValidationError: If the request is malformed.
            RouteBlockedError: If no obstacle-free route exists.
        """
        if not isinstance(request, RouteRequest):
            request = _validate(RouteRequest, "route_request", request)

        with correlation_scope() as request_id:
            logger.info(
                "Route requested from (%.6f, %.6f) to (%.6f, %.6f) at %.0f ft",
                request.start_lat,
                request.start_lng,
                request.end_lat,
                request.end_lng,
                request.altitude_ft,
            )
            response = self._planner.calculate(request, self._obstacles.snapshot())

            if not response.path:
                logger.warning("Route request %s is blocked", request_id)
                raise RouteBlockedError(
                    "No obstacle-free route between the requested points",
                    context={
                        "request_id": request_id,
                        "start": [request.start_lat, request.start_lng],
                        "end": [request.end_lat, request.end_lng],
                    },
                )
        return response

    def preview_path(self, path: Sequence[GeoPoint | Mapping[str, Any]]) -> int:
        """Stage a route on the vehicle without flying it.

        Returns:
            Number of staged waypoints.

        Raises:
            ValidationError: If a point is malformed or its altitude is out of range.
        """
        waypoints: list[Waypoint] = []
        for index, raw_point in enumerate(path):
            point = (
                raw_point
                if isinstance(raw_point, GeoPoint)
                else _validate(GeoPoint, f"path[{index}]", raw_point)
            )
            self._validate_altitude(point.altitude_ft, field=f"path[{index}].altitude_ft")
            waypoints.append(Waypoint(lat=point.lat, lng=point.lng, altitude_ft=point.altitude_ft))

        self._simulator.stage_pending_path(waypoints)
        return len(waypoints)

    def plan_and_preview(self, request: RouteRequest | Mapping[str, Any]) -> RouteResponse:
        """Plan a route and stage it for execution in one step."""
        response = self.plan_route(request)
        self.preview_path(response.path)
        return response

    def execute_path(self) -> None:
        """Commit the staged route.

        Raises:
            CommandRejectedError: If no route is staged.
        """
        if not self._simulator.execute_pending_path():
            raise CommandRejectedError("No pending path to execute", command="execute_path")

    def set_target(self, lat: float, lng: float) -> None:
        """Fly to a point and orbit it.

        Raises:
            ValidationError: If the coordinate is out of range or (0, 0).
        """
        command = _validate(TargetCommand, "target", {"lat": lat, "lng": lng})
        self._simulator.set_destination(command.lat, command.lng)

    def set_speed(self, speed_kts: float) -> None:
        """Set the target speed (1-500 kts).

        Raises:
            ValidationError: If the speed is out of range.
        """
        command = _validate(SpeedCommand, "speed_kts", {"speed_kts": speed_kts})
        self._simulator.set_speed(command.speed_kts)

    def set_altitude(self, altitude_ft: float) -> None:
        """Set the target altitude (0-60000 ft).

        Raises:
            ValidationError: If the altitude is out of range.
        """
        self._validate_altitude(altitude_ft, field="altitude_ft")
        self._simulator.set_altitude(altitude_ft)

    def point_payload(self, lat: float, lng: float, altitude_ft: float = 0.0) -> None:
        """Lock the sensor on a point.

        Raises:
            ValidationError: If the coordinate or altitude is out of range.
        """
        command = _validate(
            PayloadPointCommand,
            "payload_target",
            {"lat": lat, "lng": lng, "altitude_ft": altitude_ft},
        )
        self._simulator.point_payload(command.lat, command.lng, command.altitude_ft)

    def reset_payload(self) -> None:
        """Return the sensor to its default pose."""
        self._simulator.reset_payload()

    def get_state(self) -> TelemetrySnapshot:
        """Return the latest telemetry snapshot."""
        return self._simulator.telemetry()

    @staticmethod
    def _validate_altitude(altitude_ft: float, *, field: str) -> None:
        _validate(AltitudeCommand, field, {"altitude_ft": altitude_ft})
