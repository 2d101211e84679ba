"""Vehicle state, flight modes and telemetry models.

The flight mode is a tagged union: ``Orbiting`` carries the holding pattern,
``Transiting`` carries the navigation target and the remaining waypoints.
The integrator matches on it exhaustively.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, assert_never

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from flight_core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from flight_core.config import FlightSettings


class FlightMode(StrEnum):
    """Flight mode as reported in telemetry."""

    ORBITING = "Orbiting"
    TRANSITING = "Transiting"


@dataclass(frozen=True, slots=True)
class LatLng:
    """2D position in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Queued 3D destination; the altitude becomes the target for its leg."""

    lat: float
    lng: float
    altitude_ft: float

    @property
    def position(self) -> LatLng:
        return LatLng(self.lat, self.lng)


@dataclass(frozen=True, slots=True)
class PayloadLock:
    """Explicit sensor lock target."""

    lat: float
    lng: float
    altitude_ft: float = 0.0


@dataclass(slots=True)
class Orbiting:
    """Circling ``center`` at ``radius`` degrees; ``angle`` stays in [0, 2π)."""

    center: LatLng
    radius: float
    angle: float = 0.0


@dataclass(slots=True)
class Transiting:
    """Flying straight at ``target``, then through ``queue`` in FIFO order."""

    target: LatLng
    queue: deque[Waypoint] = field(default_factory=deque)


Flight = Orbiting | Transiting


@dataclass(slots=True)
class VehicleState:
    """Mutable vehicle record, owned by a single ``VehicleSimulator``."""

    position: LatLng
    flight: Flight
    orbit_radius: float
    target_speed_kts: float
    current_speed_kts: float
    target_altitude_ft: float
    current_altitude_ft: float
    payload_pitch_degrees: float
    payload_yaw_degrees: float = 0.0
    payload_lock: PayloadLock | None = None
    pending_path: tuple[Waypoint, ...] | None = None

    @classmethod
    def initial(cls, settings: FlightSettings) -> VehicleState:
        """Default state: orbiting home at the configured speed and altitude."""
        home = LatLng(settings.home_latitude, settings.home_longitude)
        return cls(
            position=home,
            flight=Orbiting(center=home, radius=settings.orbit_radius_degrees),
            orbit_radius=settings.orbit_radius_degrees,
            target_speed_kts=settings.initial_speed_kts,
            current_speed_kts=settings.initial_speed_kts,
            target_altitude_ft=settings.initial_altitude_ft,
            current_altitude_ft=settings.initial_altitude_ft,
            payload_pitch_degrees=settings.default_payload_pitch_degrees,
        )

    @property
    def mode(self) -> FlightMode:
        match self.flight:
            case Orbiting():
                return FlightMode.ORBITING
            case Transiting():
                return FlightMode.TRANSITING
            case _:
                assert_never(self.flight)

    @property
    def target_center(self) -> LatLng:
        """Navigation target while transiting, orbit center while orbiting."""
        match self.flight:
            case Orbiting(center=center):
                return center
            case Transiting(target=target):
                return target

    @property
    def waypoint_queue(self) -> tuple[Waypoint, ...]:
        """Remaining waypoints; always empty while orbiting."""
        match self.flight:
            case Transiting(queue=queue):
                return tuple(queue)
            case Orbiting():
                return ()


class MotionProfile(BaseModel):
    """Per-tick constants derived from the tick rate.

    The arrival epsilon scales with the distance flown per tick, so a coarser
    tick rate gets a proportionally wider arrival window.
    """

    model_config = ConfigDict(frozen=True)

    tick_rate_hz: float = Field(gt=0)
    speed_step_kts: float = Field(gt=0)
    altitude_step_ft: float = Field(gt=0)
    degrees_per_knot_tick: float = Field(gt=0)
    arrival_epsilon_degrees: float = Field(gt=0)
    orbit_capture_radius_degrees: float = Field(gt=0)
    default_payload_pitch_degrees: float = Field(default=-45.0)

    @classmethod
    def from_settings(cls, settings: FlightSettings) -> MotionProfile:
        """Derive the per-tick constants.

        Raises:
            ConfigurationError: If the arrival window reaches the orbit radius,
                which would make orbit capture unreachable on the final leg.
        """
        degrees_per_knot_tick = settings.degrees_per_knot_second / settings.tick_rate_hz
        arrival_epsilon = (
            settings.arrival_threshold_ticks * settings.reference_speed_kts * degrees_per_knot_tick
        )
        if arrival_epsilon >= settings.orbit_radius_degrees:
            raise ConfigurationError(
                "Arrival epsilon must be smaller than the orbit radius",
                context={
                    "arrival_epsilon_degrees": arrival_epsilon,
                    "orbit_radius_degrees": settings.orbit_radius_degrees,
                    "tick_rate_hz": settings.tick_rate_hz,
                },
            )
        return cls(
            tick_rate_hz=settings.tick_rate_hz,
            speed_step_kts=settings.speed_ramp_kts_per_second / settings.tick_rate_hz,
            altitude_step_ft=settings.altitude_ramp_ft_per_second / settings.tick_rate_hz,
            degrees_per_knot_tick=degrees_per_knot_tick,
            arrival_epsilon_degrees=arrival_epsilon,
            orbit_capture_radius_degrees=settings.orbit_radius_degrees,
            default_payload_pitch_degrees=settings.default_payload_pitch_degrees,
        )

    def step_degrees(self, speed_kts: float) -> float:
        """Distance flown in one tick at the given speed."""
        return speed_kts * self.degrees_per_knot_tick

    def orbit_period_ticks(self, radius_degrees: float, speed_kts: float) -> float:
        """Ticks needed to fly one full circle at constant speed."""
        return math.tau * radius_degrees / self.step_degrees(speed_kts)


class TelemetrySnapshot(BaseModel):
    """Read-only view of the vehicle published every tick."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    lat: float
    lng: float
    heading_deg: float = Field(ge=0, lt=360)
    altitude_ft: float
    speed_kts: float
    target_lat: float
    target_lng: float
    payload_pitch_deg: float
    payload_yaw_deg: float
    mode: FlightMode

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the transport layer expects."""
        return self.model_dump(mode="json", by_alias=True)
