"""Tests for heading derivation and gimbal slaving."""

import math

import pytest

from flight_core.config import FlightSettings
from flight_core.geo.geodesy import FEET_TO_METERS, METERS_PER_DEGREE
from flight_core.vehicle.models import (
    Flight,
    LatLng,
    Orbiting,
    PayloadLock,
    Transiting,
    VehicleState,
)
from flight_core.vehicle.sensor import (
    GimbalPose,
    heading_degrees,
    slave_gimbal,
    track_point,
)


def _make_state(
    flight: Flight | None = None,
    payload_lock: PayloadLock | None = None,
) -> VehicleState:
    state = VehicleState.initial(FlightSettings(home_latitude=0.0, home_longitude=0.0))
    if flight is not None:
        state.flight = flight
    state.payload_lock = payload_lock
    return state


class TestHeadingDegrees:
    @pytest.mark.parametrize(
        ("angle", "expected"),
        [(0.0, 90.0), (math.pi / 2, 180.0), (math.pi, 270.0)],
    )
    def test_orbit_heading_is_tangent(self, angle, expected):
        state = _make_state(Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=angle))
        assert heading_degrees(state) == pytest.approx(expected, abs=1e-9)

    def test_orbit_heading_stays_below_full_turn(self):
        state = _make_state(Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=3 * math.pi / 2))
        assert 0.0 <= heading_degrees(state) < 360.0

    def test_transit_heading_points_at_target(self):
        state = _make_state(Transiting(target=LatLng(-1.0, 0.0)))
        assert heading_degrees(state) == pytest.approx(180.0)


class TestTrackPoint:
    def test_target_due_north(self):
        pose = track_point(
            latitude=0.0, longitude=0.0, altitude_ft=4000, target=PayloadLock(lat=0.01, lng=0.0)
        )
        assert pose.yaw_degrees == pytest.approx(0.0)

    def test_target_due_west(self):
        pose = track_point(
            latitude=0.0, longitude=0.0, altitude_ft=4000, target=PayloadLock(lat=0.0, lng=-0.01)
        )
        assert pose.yaw_degrees == pytest.approx(270.0)

    def test_pitch_forty_five_degrees(self):
        horizontal_degrees = 4000 * FEET_TO_METERS / METERS_PER_DEGREE
        pose = track_point(
            latitude=0.0,
            longitude=0.0,
            altitude_ft=4000,
            target=PayloadLock(lat=horizontal_degrees, lng=0.0),
        )
        assert pose.pitch_degrees == pytest.approx(-45.0)

    def test_directly_overhead_stays_finite(self):
        pose = track_point(
            latitude=0.0, longitude=0.0, altitude_ft=4000, target=PayloadLock(lat=0.0, lng=0.0)
        )
        expected = -math.degrees(math.atan2(4000 * FEET_TO_METERS, 10.0))
        assert pose.pitch_degrees == pytest.approx(expected)
        assert -90.0 < pose.pitch_degrees < 0.0

    def test_level_with_elevated_target(self):
        pose = track_point(
            latitude=0.0,
            longitude=0.0,
            altitude_ft=4000,
            target=PayloadLock(lat=0.01, lng=0.0, altitude_ft=4000),
        )
        assert pose.pitch_degrees == pytest.approx(0.0)


class TestSlaveGimbal:
    def test_orbit_without_lock_looks_along_heading(self):
        state = _make_state(Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=0.0))
        assert slave_gimbal(state, -45.0) == GimbalPose(pitch_degrees=-45.0, yaw_degrees=90.0)

    def test_transit_tracks_navigation_target(self):
        state = _make_state(Transiting(target=LatLng(0.0, 0.05)))
        pose = slave_gimbal(state, -45.0)
        assert pose.yaw_degrees == pytest.approx(90.0)
        assert pose.pitch_degrees < 0.0

    def test_lock_overrides_navigation_target(self):
        state = _make_state(
            Transiting(target=LatLng(0.0, 0.05)),
            payload_lock=PayloadLock(lat=-0.05, lng=0.0),
        )
        assert slave_gimbal(state, -45.0).yaw_degrees == pytest.approx(180.0)

    def test_lock_applies_while_orbiting(self):
        state = _make_state(
            Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=0.0),
            payload_lock=PayloadLock(lat=0.0, lng=-0.05),
        )
        assert slave_gimbal(state, -45.0).yaw_degrees == pytest.approx(270.0)
