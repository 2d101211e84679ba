"""Fixed-tick motion integrator.

Each tick, in order: ease speed, ease altitude, compute the distance flown this
tick, move according to the flight mode, then re-slave the gimbal.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, assert_never

from flight_core.vehicle.models import LatLng, Orbiting, Transiting
from flight_core.vehicle.sensor import slave_gimbal

if TYPE_CHECKING:
    from flight_core.vehicle.models import MotionProfile, VehicleState

logger = logging.getLogger(__name__)


def ease_toward(current: float, target: float, max_step: float) -> float:
    """Move ``current`` toward ``target`` by at most ``max_step``."""
    delta = target - current
    if abs(delta) <= max_step:
        return target
    return current + math.copysign(max_step, delta)


def wrap_angle(angle: float) -> float:
    """Wrap radians into [0, 2π)."""
    wrapped = angle % math.tau
    return 0.0 if wrapped >= math.tau else wrapped


def update_physics(state: VehicleState, profile: MotionProfile) -> None:
    """Advance the vehicle by one tick.

    Args:
        state: Vehicle state, mutated in place. The caller holds its lock.
        profile: Per-tick constants.
    """
    state.current_speed_kts = ease_toward(
        state.current_speed_kts, state.target_speed_kts, profile.speed_step_kts
    )
    state.current_altitude_ft = ease_toward(
        state.current_altitude_ft, state.target_altitude_ft, profile.altitude_step_ft
    )

    step = profile.step_degrees(state.current_speed_kts)

    match state.flight:
        case Transiting() as transit:
            _advance_transit(state, transit, step, profile)
        case Orbiting() as orbit:
            _advance_orbit(state, orbit, step)
        case _:
            assert_never(state.flight)

    pose = slave_gimbal(state, profile.default_payload_pitch_degrees)
    state.payload_pitch_degrees = pose.pitch_degrees
    state.payload_yaw_degrees = pose.yaw_degrees

    logger.debug(
        "Tick: mode=%s lat=%.6f lng=%.6f speed=%.1f alt=%.1f",
        state.mode,
        state.position.lat,
        state.position.lng,
        state.current_speed_kts,
        state.current_altitude_ft,
    )


def _advance_transit(
    state: VehicleState,
    transit: Transiting,
    step: float,
    profile: MotionProfile,
) -> None:
    target = transit.target
    delta_lat = target.lat - state.position.lat
    delta_lng = target.lng - state.position.lng
    distance = math.hypot(delta_lat, delta_lng)

    # Final leg: start circling where the path meets the perimeter.
    if not transit.queue and distance <= profile.orbit_capture_radius_degrees:
        angle = wrap_angle(
            math.atan2(state.position.lng - target.lng, state.position.lat - target.lat)
        )
        state.flight = Orbiting(center=target, radius=state.orbit_radius, angle=angle)
        logger.info(
            "Orbit capture at (%.6f, %.6f), angle=%.1f deg",
            target.lat,
            target.lng,
            math.degrees(angle),
        )
        return

    if distance < profile.arrival_epsilon_degrees:
        state.position = target
        if transit.queue:
            waypoint = transit.queue.popleft()
            transit.target = waypoint.position
            state.target_altitude_ft = waypoint.altitude_ft
            logger.info(
                "Waypoint reached, next (%.6f, %.6f) at %.0f ft, %d remaining",
                waypoint.lat,
                waypoint.lng,
                waypoint.altitude_ft,
                len(transit.queue),
            )
        return

    ratio = min(1.0, step / distance)
    state.position = LatLng(
        state.position.lat + delta_lat * ratio,
        state.position.lng + delta_lng * ratio,
    )


def _advance_orbit(state: VehicleState, orbit: Orbiting, step: float) -> None:
    orbit.angle = wrap_angle(orbit.angle + step / orbit.radius)
    state.position = LatLng(
        orbit.center.lat + orbit.radius * math.cos(orbit.angle),
        orbit.center.lng + orbit.radius * math.sin(orbit.angle),
    )
