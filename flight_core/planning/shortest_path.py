"""Dijkstra shortest-path search over a visibility graph."""

from __future__ import annotations

import heapq
import itertools
import math
from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from flight_core.planning.models import Coordinate
    from flight_core.planning.visibility_graph import VisibilityGraph

EdgeWeight = Callable[["Coordinate", "Coordinate"], float]


class ShortestPath(NamedTuple):
    """Resolved node sequence and its accumulated weight.

    ``nodes`` is empty when the target cannot be reached.
    """

    nodes: list[Coordinate]
    distance: float


def find_shortest_path(
    graph: VisibilityGraph,
    start: Coordinate,
    end: Coordinate,
    weight: EdgeWeight,
) -> ShortestPath:
    """Run Dijkstra from ``start`` to ``end``.

    Entries left behind in the queue by a later improvement are skipped when
    popped. Ties are broken by insertion order, so identical inputs always
    resolve to the same path.

    Args:
        graph: Visibility graph to search.
        start: Source node.
        end: Target node.
        weight: Non-negative edge length function.

    Returns:
        The shortest node sequence from start to end inclusive, or an empty
        path with zero distance if end is unreachable.
    """
    if start == end:
        return ShortestPath(nodes=[start], distance=0.0)

    distances: dict[Coordinate, float] = {start: 0.0}
    previous: dict[Coordinate, Coordinate] = {}
    sequence = itertools.count()
    queue: list[tuple[float, int, Coordinate]] = [(0.0, next(sequence), start)]

    while queue:
        distance, _, node = heapq.heappop(queue)
        if distance > distances.get(node, math.inf):
            continue
        if node == end:
            break

        for neighbor in graph.neighbors(node):
            candidate = distance + weight(node, neighbor)
            if candidate < distances.get(neighbor, math.inf):
                distances[neighbor] = candidate
                previous[neighbor] = node
                heapq.heappush(queue, (candidate, next(sequence), neighbor))

    if end not in distances:
        return ShortestPath(nodes=[], distance=0.0)

    nodes = [end]
    while nodes[-1] != start:
        nodes.append(previous[nodes[-1]])
    nodes.reverse()

    return ShortestPath(nodes=nodes, distance=distances[end])
