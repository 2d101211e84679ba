"""Obstacle-avoiding route planner.

Tries the direct segment first. When a zone blocks it, builds a visibility
graph over the buffered zone vertices and resolves it with Dijkstra using
haversine edge lengths. "No path" is an empty route, never an exception.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flight_core.geo.geodesy import haversine_distance
from flight_core.planning.models import GeoPoint, Route, RouteResponse
from flight_core.planning.obstacles import buffer_obstacles, margin_to_degrees, segment_is_clear
from flight_core.planning.shortest_path import find_shortest_path
from flight_core.planning.visibility_graph import build_visibility_graph

if TYPE_CHECKING:
    from flight_core.config import FlightSettings
    from flight_core.planning.models import Coordinate, ObstacleSnapshot, RouteRequest

logger = logging.getLogger(__name__)


def edge_length_meters(first: Coordinate, second: Coordinate) -> float:
    """Haversine length of a graph edge between two ``(x, y)`` coordinates."""
    return haversine_distance(
        latitude_1=first[1],
        longitude_1=first[0],
        latitude_2=second[1],
        longitude_2=second[0],
    )


class PathPlanner:
    """Plans routes around restricted zones.

    Holds only immutable configuration, so a single instance can serve
    concurrent requests as long as each one passes its own snapshot.
    """

    def __init__(self, settings: FlightSettings) -> None:
        """Initialize the planner.

        Args:
            settings: Configuration with the safety margin and altitude-band policy.
        """
        self._margin_degrees = margin_to_degrees(settings.safety_margin_meters)
        self._respect_altitude_bands = settings.respect_altitude_bands

    def plan_route(
        self,
        start: GeoPoint,
        end: GeoPoint,
        snapshot: ObstacleSnapshot,
        *,
        altitude_ft: float | None = None,
    ) -> Route:
        """Plan a route from ``start`` to ``end``.

        Args:
            start: Route start.
            end: Route end.
            snapshot: Restricted zones for this request.
            altitude_ft: Cruise altitude, used to filter zones by altitude band
                when that policy is enabled.

        Returns:
            A route whose first and last points are the endpoints, or an empty
            route when every path is blocked. Points carry no altitude.
        """
        band_altitude = altitude_ft if self._respect_altitude_bands else None
        obstacles = buffer_obstacles(
            snapshot.active(band_altitude),
            margin_degrees=self._margin_degrees,
        )

        origin = GeoPoint(lat=start.lat, lng=start.lng)
        destination = GeoPoint(lat=end.lat, lng=end.lng)

        for endpoint in (origin, destination):
            if not segment_is_clear(endpoint.coordinate, endpoint.coordinate, obstacles):
                logger.info(
                    "Route endpoint (%.6f, %.6f) is inside an obstacle",
                    endpoint.lat,
                    endpoint.lng,
                )
                return Route.empty()

        if segment_is_clear(origin.coordinate, destination.coordinate, obstacles):
            logger.info("Direct route is clear (%d obstacles considered)", len(obstacles))
            return Route.through([origin, destination])

        graph = build_visibility_graph(origin.coordinate, destination.coordinate, obstacles)
        shortest = find_shortest_path(
            graph,
            origin.coordinate,
            destination.coordinate,
            edge_length_meters,
        )

        if not shortest.nodes:
            logger.info(
                "No route found around %d obstacles (%d graph nodes)",
                len(obstacles),
                len(graph),
            )
            return Route.empty()

        # Endpoints keep the caller's values instead of their coordinate round-trip.
        inner = [GeoPoint.from_coordinate(node) for node in shortest.nodes[1:-1]]
        route = Route.through([origin, *inner, destination])

        logger.info(
            "Route planned around obstacles: %d points, %.1f m",
            len(route.points),
            route.total_distance_meters,
        )
        return route

    def calculate(self, request: RouteRequest, snapshot: ObstacleSnapshot) -> RouteResponse:
        """Plan a route for an API request and assign its altitude to every point.

        Args:
            request: Endpoints and cruise altitude.
            snapshot: Restricted zones for this request.

        Returns:
            The 3D route; ``path`` is empty when no route exists.
        """
        route = self.plan_route(
            request.start,
            request.end,
            snapshot,
            altitude_ft=request.altitude_ft,
        )
        return RouteResponse.from_route(route, request.altitude_ft)
