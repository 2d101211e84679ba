"""Heading derivation and sensor gimbal slaving."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple, assert_never

from flight_core.geo.geodesy import (
    FEET_TO_METERS,
    METERS_PER_DEGREE,
    corrected_offset_degrees,
    normalize_degrees,
    planar_bearing_degrees,
)
from flight_core.vehicle.models import Orbiting, PayloadLock, Transiting

if TYPE_CHECKING:
    from flight_core.vehicle.models import VehicleState

# Floors the horizontal range so pitch stays finite right above the target.
MIN_HORIZONTAL_DISTANCE_METERS: float = 10.0

_TANGENT_OFFSET_DEGREES: float = 90.0


class GimbalPose(NamedTuple):
    """Gimbal orientation in degrees; yaw is clockwise from north in [0, 360)."""

    pitch_degrees: float
    yaw_degrees: float


def heading_degrees(state: VehicleState) -> float:
    """Direction of travel, clockwise from north in [0, 360).

    Transiting vehicles head straight at their target. Orbiting vehicles fly
    tangent to the circle, a quarter turn ahead of the orbit angle.
    """
    match state.flight:
        case Transiting(target=target):
            return planar_bearing_degrees(
                from_latitude=state.position.lat,
                from_longitude=state.position.lng,
                to_latitude=target.lat,
                to_longitude=target.lng,
            )
        case Orbiting(angle=angle):
            return normalize_degrees(math.degrees(angle) + _TANGENT_OFFSET_DEGREES)
        case _:
            assert_never(state.flight)


def track_point(
    *,
    latitude: float,
    longitude: float,
    altitude_ft: float,
    target: PayloadLock,
) -> GimbalPose:
    """Point the gimbal from the vehicle at a ground or elevated target.

    Yaw uses the longitude offset scaled by cos(latitude). Pitch looks down by
    the angle between the height above the target and the horizontal range.
    """
    delta_north, delta_east = corrected_offset_degrees(
        from_latitude=latitude,
        from_longitude=longitude,
        to_latitude=target.lat,
        to_longitude=target.lng,
    )
    yaw = normalize_degrees(math.degrees(math.atan2(delta_east, delta_north)))

    horizontal_meters = max(
        math.hypot(delta_north, delta_east) * METERS_PER_DEGREE,
        MIN_HORIZONTAL_DISTANCE_METERS,
    )
    height_meters = (altitude_ft - target.altitude_ft) * FEET_TO_METERS
    pitch = -math.degrees(math.atan2(height_meters, horizontal_meters))

    return GimbalPose(pitch_degrees=pitch, yaw_degrees=yaw)


def slave_gimbal(state: VehicleState, default_pitch_degrees: float) -> GimbalPose:
    """Derive the gimbal pose for the current tick.

    An explicit lock always wins. Without one, a transiting vehicle tracks its
    navigation target on the ground and an orbiting vehicle looks forward and
    down along its heading.
    """
    tracked = state.payload_lock
    if tracked is None and isinstance(state.flight, Transiting):
        tracked = PayloadLock(lat=state.flight.target.lat, lng=state.flight.target.lng)

    if tracked is not None:
        return track_point(
            latitude=state.position.lat,
            longitude=state.position.lng,
            altitude_ft=state.current_altitude_ft,
            target=tracked,
        )

    return GimbalPose(pitch_degrees=default_pitch_degrees, yaw_degrees=heading_degrees(state))
