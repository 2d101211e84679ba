"""Vehicle simulator: owns the vehicle state and serializes access to it.

The periodic tick and every external command run under one lock, so no
command is ever observed half-applied by the integrator or vice versa.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

from flight_core.vehicle import integrator
from flight_core.vehicle.models import (
    LatLng,
    MotionProfile,
    PayloadLock,
    TelemetrySnapshot,
    Transiting,
    VehicleState,
    Waypoint,
)
from flight_core.vehicle.sensor import heading_degrees

if TYPE_CHECKING:
    from flight_core.config import FlightSettings

logger = logging.getLogger(__name__)


class VehicleSimulator:
    """Kinematic simulation of a single vehicle.

    Commands only touch targets and the flight mode; the integrator converges
    the current values toward them tick by tick. All commands are synchronous.
    Range checks belong to the caller.
    """

    def __init__(
        self,
        settings: FlightSettings,
        *,
        profile: MotionProfile | None = None,
    ) -> None:
        """Initialize the simulator in its default orbit.

        Args:
            settings: Configuration with the home position and flight envelope.
            profile: Per-tick constants. Derived from ``settings`` if omitted.
        """
        self._profile = profile or MotionProfile.from_settings(settings)
        self._state = VehicleState.initial(settings)
        self._lock = threading.Lock()

    @property
    def profile(self) -> MotionProfile:
        return self._profile

    def update_physics(self) -> None:
        """Advance the simulation by one tick."""
        with self._lock:
            integrator.update_physics(self._state, self._profile)

    def tick(self) -> TelemetrySnapshot:
        """Advance one tick and return the telemetry of the resulting state."""
        with self._lock:
            integrator.update_physics(self._state, self._profile)
            return self._telemetry()

    def telemetry(self) -> TelemetrySnapshot:
        """Return a read-only snapshot of the current state."""
        with self._lock:
            return self._telemetry()

    def state(self) -> VehicleState:
        """Return a deep copy of the internal state for inspection."""
        with self._lock:
            return copy.deepcopy(self._state)

    def set_destination(self, lat: float, lng: float) -> None:
        """Fly straight to a point and orbit it, dropping any queued waypoints.

        The target altitude is kept.
        """
        with self._lock:
            self._state.flight = Transiting(target=LatLng(lat, lng))
        logger.info("Destination set to (%.6f, %.6f)", lat, lng)

    def set_speed(self, speed_kts: float) -> None:
        """Set the target speed; current speed eases toward it."""
        with self._lock:
            self._state.target_speed_kts = speed_kts
        logger.info("Target speed set to %.1f kts", speed_kts)

    def set_altitude(self, altitude_ft: float) -> None:
        """Set the target altitude; current altitude eases toward it."""
        with self._lock:
            self._state.target_altitude_ft = altitude_ft
        logger.info("Target altitude set to %.0f ft", altitude_ft)

    def stage_pending_path(self, points: Iterable[Waypoint]) -> None:
        """Store a candidate route without touching the current flight.

        Replaces any previously staged route. The points are copied.
        """
        staged = tuple(points)
        with self._lock:
            self._state.pending_path = staged
        logger.info("Staged pending path with %d waypoints", len(staged))

    def execute_pending_path(self) -> bool:
        """Commit the staged route.

        Loads the staged points as the waypoint queue, flies to the first one
        at its altitude and clears the staging slot.

        Returns:
            False, with no state change, if nothing is staged.
        """
        with self._lock:
            staged = self._state.pending_path
            if not staged:
                logger.warning("Execute rejected: no pending path staged")
                return False

            queue = deque(staged)
            first = queue.popleft()
            self._state.flight = Transiting(target=first.position, queue=queue)
            self._state.target_altitude_ft = first.altitude_ft
            self._state.pending_path = None

        logger.info(
            "Executing pending path: %d waypoints, first (%.6f, %.6f) at %.0f ft",
            len(staged),
            first.lat,
            first.lng,
            first.altitude_ft,
        )
        return True

    def point_payload(self, lat: float, lng: float, altitude_ft: float = 0.0) -> None:
        """Lock the sensor on a point, overriding implicit tracking."""
        with self._lock:
            self._state.payload_lock = PayloadLock(lat=lat, lng=lng, altitude_ft=altitude_ft)
        logger.info("Payload locked on (%.6f, %.6f, %.0f ft)", lat, lng, altitude_ft)

    def reset_payload(self) -> None:
        """Clear the sensor lock and return to the default pose."""
        with self._lock:
            self._state.payload_lock = None
            self._state.payload_pitch_degrees = self._profile.default_payload_pitch_degrees
            self._state.payload_yaw_degrees = 0.0
        logger.info("Payload reset to default pose")

    def _telemetry(self) -> TelemetrySnapshot:
        state = self._state
        target = state.target_center
        return TelemetrySnapshot(
            lat=state.position.lat,
            lng=state.position.lng,
            heading_deg=heading_degrees(state),
            altitude_ft=state.current_altitude_ft,
            speed_kts=state.current_speed_kts,
            target_lat=target.lat,
            target_lng=target.lng,
            payload_pitch_deg=state.payload_pitch_degrees,
            payload_yaw_deg=state.payload_yaw_degrees,
            mode=state.mode,
        )
