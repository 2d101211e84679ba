"""Visibility graph over the route endpoints and buffered zone vertices."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from flight_core.planning.obstacles import segment_is_clear

if TYPE_CHECKING:
    from flight_core.planning.models import Coordinate
    from flight_core.planning.obstacles import BufferedObstacle

logger = logging.getLogger(__name__)


class VisibilityGraph:
    """Undirected graph linking mutually visible coordinates.

    Built fresh for every planning call and discarded afterwards.
    """

    def __init__(self, nodes: Sequence[Coordinate] = ()) -> None:
        self._adjacency: dict[Coordinate, set[Coordinate]] = {node: set() for node in nodes}

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency.values()) // 2

    def add_edge(self, first: Coordinate, second: Coordinate) -> None:
        """Link two coordinates, adding either one as a node if needed."""
        self._adjacency.setdefault(first, set()).add(second)
        self._adjacency.setdefault(second, set()).add(first)

    def neighbors(self, node: Coordinate) -> set[Coordinate]:
        """Return the coordinates visible from ``node`` (empty if unknown)."""
        return self._adjacency.get(node, set())

    def has_edge(self, first: Coordinate, second: Coordinate) -> bool:
        return second in self.neighbors(first)


def collect_nodes(
    start: Coordinate,
    end: Coordinate,
    obstacles: Sequence[BufferedObstacle],
) -> list[Coordinate]:
    """Gather graph nodes: the endpoints, then every buffered vertex.

    Vertices shared by several zones, or coinciding with an endpoint, appear
    once. Order is deterministic for a given input.
    """
    candidates = [start, end]
    for obstacle in obstacles:
        candidates.extend(obstacle.vertices)
    return list(dict.fromkeys(candidates))


def build_visibility_graph(
    start: Coordinate,
    end: Coordinate,
    obstacles: Sequence[BufferedObstacle],
) -> VisibilityGraph:
    """Build the visibility graph for one planning request.

    Every unordered node pair is tested against every zone, so the cost is
    quadratic in the vertex count. This is sized for tens of zones.

    Args:
        start: Route start as ``(x, y)``.
        end: Route end as ``(x, y)``.
        obstacles: Buffered zones.

    Returns:
        Graph containing every node, linked where the segment is clear.
    """
    nodes = collect_nodes(start, end, obstacles)
    graph = VisibilityGraph(nodes)

    for index, first in enumerate(nodes):
        for second in nodes[index + 1 :]:
            if segment_is_clear(first, second, obstacles):
                graph.add_edge(first, second)

    logger.debug(
        "Visibility graph built: %d nodes, %d edges, %d obstacles",
        len(graph),
        graph.edge_count,
        len(obstacles),
    )
    return graph
