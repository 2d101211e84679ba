"""Tests for path planning models."""

from typing import Any

import pytest
from pydantic import ValidationError

from flight_core.planning.models import (
    GeoPoint,
    Obstacle,
    ObstacleSnapshot,
    Route,
    RouteRequest,
    RouteResponse,
)


def _make_zone(name: str = "zone-1", **kwargs: Any) -> Obstacle:
    ring = (
        GeoPoint(lat=31.82, lng=34.66),
        GeoPoint(lat=31.82, lng=34.68),
        GeoPoint(lat=31.83, lng=34.68),
        GeoPoint(lat=31.83, lng=34.66),
    )
    return Obstacle(name=name, ring=ring, **kwargs)


class TestGeoPoint:
    def test_coordinate_is_lng_lat(self):
        assert GeoPoint(lat=31.8, lng=34.6).coordinate == (34.6, 31.8)

    def test_from_coordinate(self):
        point = GeoPoint.from_coordinate((34.6, 31.8), altitude_ft=500)
        assert point.lat == 31.8
        assert point.lng == 34.6
        assert point.altitude_ft == 500

    def test_accepts_camel_case_alias(self):
        point = GeoPoint.model_validate({"lat": 31.8, "lng": 34.6, "altitudeFt": 2500})
        assert point.altitude_ft == 2500

    def test_altitude_defaults_to_zero(self):
        assert GeoPoint(lat=31.8, lng=34.6).altitude_ft == 0.0

    def test_rejects_out_of_range_latitude(self):
        with pytest.raises(ValidationError):
            GeoPoint(lat=91, lng=0)

    def test_distance_to(self):
        first = GeoPoint(lat=0.0, lng=0.0)
        second = GeoPoint(lat=1.0, lng=0.0)
        assert first.distance_to(second) == pytest.approx(111_195, rel=1e-3)


class TestObstacle:
    def test_coordinates_drop_closing_vertex(self):
        zone = _make_zone()
        closed = zone.model_copy(update={"ring": (*zone.ring, zone.ring[0])})
        assert closed.coordinates == zone.coordinates
        assert len(closed.coordinates) == 4

    def test_rejects_inverted_band(self):
        with pytest.raises(ValidationError, match="below"):
            _make_zone(min_altitude_ft=5000, max_altitude_ft=1000)

    def test_applies_at_band_edges(self):
        zone = _make_zone(min_altitude_ft=1000, max_altitude_ft=5000)
        assert zone.applies_at(1000)
        assert zone.applies_at(5000)
        assert not zone.applies_at(5001)

    def test_active_by_default(self):
        assert _make_zone().is_active is True


class TestObstacleSnapshot:
    def test_active_skips_inactive(self):
        snapshot = ObstacleSnapshot(
            obstacles=(_make_zone("on"), _make_zone("off", is_active=False))
        )
        assert [zone.name for zone in snapshot.active()] == ["on"]

    def test_active_filters_by_altitude(self):
        snapshot = ObstacleSnapshot(
            obstacles=(
                _make_zone("low", max_altitude_ft=3000),
                _make_zone("high", min_altitude_ft=8000),
            )
        )
        assert [zone.name for zone in snapshot.active(2000)] == ["low"]
        assert [zone.name for zone in snapshot.active()] == ["low", "high"]

    def test_empty_by_default(self):
        assert ObstacleSnapshot().active() == []


class TestRoute:
    def test_empty(self):
        route = Route.empty()
        assert route.is_empty
        assert route.total_distance_meters == 0.0

    def test_through_sums_legs(self):
        points = [
            GeoPoint(lat=0.0, lng=0.0),
            GeoPoint(lat=1.0, lng=0.0),
            GeoPoint(lat=2.0, lng=0.0),
        ]
        route = Route.through(points)
        assert not route.is_empty
        assert route.total_distance_meters == pytest.approx(
            points[0].distance_to(points[1]) + points[1].distance_to(points[2])
        )

    def test_through_single_point_has_zero_length(self):
        route = Route.through([GeoPoint(lat=1.0, lng=1.0)])
        assert route.total_distance_meters == 0.0


class TestRouteRequest:
    def test_parses_wire_format(self):
        request = RouteRequest.model_validate(
            {"startLat": 31.80, "startLng": 34.64, "endLat": 31.85, "endLng": 34.70, "altitudeFt": 3000}
        )
        assert request.start == GeoPoint(lat=31.80, lng=34.64)
        assert request.end == GeoPoint(lat=31.85, lng=34.70)
        assert request.altitude_ft == 3000

    def test_rejects_altitude_above_ceiling(self):
        with pytest.raises(ValidationError):
            RouteRequest(start_lat=0, start_lng=0, end_lat=1, end_lng=1, altitude_ft=70000)


class TestRouteResponse:
    def test_from_route_assigns_altitude(self):
        route = Route.through([GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=0.1, lng=0.1)])
        response = RouteResponse.from_route(route, altitude_ft=4500)
        assert [point.altitude_ft for point in response.path] == [4500, 4500]
        assert response.total_distance_meters == route.total_distance_meters

    def test_wire_format_uses_camel_case(self):
        route = Route.through([GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=0.1, lng=0.1)])
        payload = RouteResponse.from_route(route, altitude_ft=100).model_dump(by_alias=True)
        assert "totalDistanceMeters" in payload
        assert payload["path"][0]["altitudeFt"] == 100

    def test_empty_route_gives_empty_path(self):
        response = RouteResponse.from_route(Route.empty(), altitude_ft=100)
        assert response.path == []
        assert response.total_distance_meters == 0.0
