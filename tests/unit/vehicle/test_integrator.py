"""Tests for the fixed-tick motion integrator."""

import math
from collections import deque

import pytest

from flight_core.config import FlightSettings
from flight_core.vehicle.integrator import ease_toward, update_physics, wrap_angle
from flight_core.vehicle.models import (
    Flight,
    FlightMode,
    LatLng,
    MotionProfile,
    Orbiting,
    Transiting,
    VehicleState,
    Waypoint,
)


def _make_state(flight: Flight | None = None, speed_kts: float = 105.0) -> VehicleState:
    settings = FlightSettings(home_latitude=0.0, home_longitude=0.0)
    state = VehicleState.initial(settings)
    if flight is not None:
        state.flight = flight
    state.target_speed_kts = state.current_speed_kts = speed_kts
    return state


def _make_profile() -> MotionProfile:
    return MotionProfile.from_settings(FlightSettings())


class TestEaseToward:
    def test_steps_up(self):
        assert ease_toward(105.0, 200.0, 0.1) == pytest.approx(105.1)

    def test_steps_down(self):
        assert ease_toward(200.0, 105.0, 0.1) == pytest.approx(199.9)

    def test_lands_exactly_on_target(self):
        assert ease_toward(199.95, 200.0, 0.1) == 200.0

    def test_at_target_unchanged(self):
        assert ease_toward(4000.0, 4000.0, 0.5) == 4000.0


class TestWrapAngle:
    def test_negative_wraps_up(self):
        assert wrap_angle(-0.1) == pytest.approx(math.tau - 0.1)

    def test_full_turn_wraps_to_zero(self):
        assert wrap_angle(math.tau) == 0.0

    def test_in_range_unchanged(self):
        assert wrap_angle(1.0) == 1.0


class TestEasing:
    def test_speed_and_altitude_ease_once_per_tick(self):
        state = _make_state()
        state.target_speed_kts = 200.0
        state.target_altitude_ft = 5000.0
        update_physics(state, _make_profile())
        assert state.current_speed_kts == pytest.approx(105.1)
        assert state.current_altitude_ft == pytest.approx(4000.5)


class TestTransit:
    def test_moves_one_step_toward_target(self):
        state = _make_state(Transiting(target=LatLng(1.0, 0.0)))
        update_physics(state, _make_profile())
        assert state.position.lat == pytest.approx(0.000025)
        assert state.position.lng == pytest.approx(0.0)

    def test_does_not_overshoot(self):
        queued = Waypoint(lat=1.0, lng=0.0, altitude_ft=4000)
        state = _make_state(
            Transiting(target=LatLng(0.00011, 0.0), queue=deque([queued])),
            speed_kts=500.0,
        )
        update_physics(state, _make_profile())
        assert state.position.lat == pytest.approx(0.00011)

    def test_arrival_snaps_and_pops_next_waypoint(self):
        next_waypoint = Waypoint(lat=0.01, lng=0.0, altitude_ft=6000)
        state = _make_state(Transiting(target=LatLng(0.00005, 0.0), queue=deque([next_waypoint])))
        update_physics(state, _make_profile())
        assert state.position == LatLng(0.00005, 0.0)
        assert state.target_center == next_waypoint.position
        assert state.waypoint_queue == ()
        assert state.target_altitude_ft == 6000

    def test_no_capture_while_waypoints_remain(self):
        queued = Waypoint(lat=1.0, lng=0.0, altitude_ft=4000)
        state = _make_state(Transiting(target=LatLng(0.02, 0.0), queue=deque([queued])))
        update_physics(state, _make_profile())
        assert state.mode == FlightMode.TRANSITING

    def test_captures_orbit_inside_radius(self):
        state = _make_state(Transiting(target=LatLng(0.02, 0.0)))
        update_physics(state, _make_profile())
        assert state.mode == FlightMode.ORBITING
        assert state.flight.center == LatLng(0.02, 0.0)
        assert state.flight.radius == pytest.approx(0.027)
        assert state.flight.angle == pytest.approx(math.pi)
        assert state.position == LatLng(0.0, 0.0)

    def test_gimbal_tracks_target_during_transit(self):
        state = _make_state(Transiting(target=LatLng(0.0, 1.0)))
        update_physics(state, _make_profile())
        assert state.payload_yaw_degrees == pytest.approx(90.0)


class TestOrbit:
    def test_advances_angle_by_arc_step(self):
        state = _make_state(Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=0.0))
        update_physics(state, _make_profile())
        assert state.flight.angle == pytest.approx(0.000025 / 0.027)

    def test_position_on_circle(self):
        state = _make_state(Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=1.0))
        update_physics(state, _make_profile())
        angle = state.flight.angle
        assert state.position.lat == pytest.approx(0.027 * math.cos(angle))
        assert state.position.lng == pytest.approx(0.027 * math.sin(angle))

    def test_gimbal_uses_default_pose(self):
        state = _make_state(Orbiting(center=LatLng(0.0, 0.0), radius=0.027, angle=0.0))
        update_physics(state, _make_profile())
        assert state.payload_pitch_degrees == -45.0
        assert state.payload_yaw_degrees == pytest.approx(90.0, abs=0.01)
