"""Tests for component wiring."""

import pytest

from flight_core.config import FlightSettings
from flight_core.context import create_flight_context
from flight_core.exceptions import ConfigurationError
from flight_core.planning.models import GeoPoint, Obstacle, RouteRequest
from flight_core.planning.repository import InMemoryObstacleRepository


def _make_zone(name: str = "zone-1", south: float = 31.82) -> Obstacle:
    corners = [(south, 34.66), (south, 34.68), (south + 0.01, 34.68), (south + 0.01, 34.66)]
    return Obstacle(name=name, ring=tuple(GeoPoint(lat=lat, lng=lng) for lat, lng in corners))


class TestCreateFlightContext:
    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv("FLIGHT_VEHICLE_ID", "UAV-Env-01")
        context = create_flight_context()
        assert context.settings.vehicle_id == "UAV-Env-01"

    def test_seeds_in_memory_repository(self):
        context = create_flight_context(FlightSettings(), [_make_zone()])
        assert isinstance(context.obstacles, InMemoryObstacleRepository)
        assert [zone.name for zone in context.obstacles.snapshot().obstacles] == ["zone-1"]

    def test_uses_given_repository(self):
        repository = InMemoryObstacleRepository()
        context = create_flight_context(FlightSettings(), repository)
        assert context.obstacles is repository

    def test_mission_drives_the_same_simulator(self):
        context = create_flight_context(FlightSettings())
        context.mission.set_speed(300)
        assert context.simulator.state().target_speed_kts == 300

    def test_rejects_inconsistent_settings(self):
        with pytest.raises(ConfigurationError):
            create_flight_context(FlightSettings(arrival_threshold_ticks=2000))

    def test_every_unnamed_zone_blocks_routes(self):
        context = create_flight_context(
            FlightSettings(),
            [_make_zone(""), _make_zone("", south=32.5)],
        )
        request = RouteRequest(start_lat=31.80, start_lng=34.64, end_lat=31.85, end_lng=34.70)
        assert len(context.obstacles.snapshot().obstacles) == 2
        assert len(context.mission.plan_route(request).path) >= 4
