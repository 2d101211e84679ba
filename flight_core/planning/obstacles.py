"""Obstacle buffering and the segment clearance test.

Restricted zones are grown outward by a safety margin with a bevelled
(chamfered) join: every convex corner becomes two vertices instead of a
rounded arc, which keeps the visibility graph small.

A segment is clear of a buffered zone when neither the segment's interior nor
its endpoints touch the zone's interior. Running along the zone's boundary or
grazing one of its vertices is allowed, since the graph nodes sit on those
boundaries.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapely import LineString, MultiPolygon, Point, Polygon
from shapely.affinity import scale

from flight_core.geo.geodesy import METERS_PER_DEGREE

if TYPE_CHECKING:
    from flight_core.planning.models import Coordinate, Obstacle

logger = logging.getLogger(__name__)

# DE-9IM: interior/interior and boundary/interior must both be empty.
_CLEAR_PATTERN = "F**F*****"
_MIN_RING_VERTICES = 3
_BEVEL_QUAD_SEGMENTS = 1
# Floor on the east-west scale so zones near the poles still buffer.
_MIN_LONGITUDE_SCALE = 0.01

Bounds = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class BufferedObstacle:
    """A restricted zone after outward buffering, ready for geometric tests."""

    name: str
    polygon: Polygon

    @property
    def bounds(self) -> Bounds:
        return self.polygon.bounds

    @property
    def vertices(self) -> list[Coordinate]:
        """Exterior ring vertices without the duplicate closing vertex."""
        ring = list(self.polygon.exterior.coords)
        return [(x, y) for x, y, *_ in ring[:-1]]


def margin_to_degrees(margin_meters: float) -> float:
    """Convert a safety margin in meters to degrees of latitude."""
    return margin_meters / METERS_PER_DEGREE


def buffer_obstacles(
    obstacles: Iterable[Obstacle],
    *,
    margin_degrees: float,
) -> list[BufferedObstacle]:
    """Buffer each obstacle outward, skipping the ones that degenerate.

    Args:
        obstacles: Zones to buffer, in the order they should be tested.
        margin_degrees: Outward safety margin in degrees of latitude. The east-west
            margin is widened by 1/cos(latitude) at each zone, so the ground
            distance is the same on both axes.

    Returns:
        One entry per usable polygon. A zone that splits into several parts
        contributes each part; a zone left with fewer than three vertices is
        dropped.
    """
    buffered: list[BufferedObstacle] = []

    for obstacle in obstacles:
        coordinates = list(dict.fromkeys(obstacle.coordinates))
        if len(coordinates) < _MIN_RING_VERTICES:
            logger.warning(
                "Skipping obstacle %r: ring has %d distinct vertices",
                obstacle.name,
                len(coordinates),
            )
            continue

        longitude_scale = _longitude_scale(coordinates)
        local = scale(Polygon(coordinates), xfact=longitude_scale, yfact=1.0, origin=(0, 0))
        grown = scale(
            local.buffer(margin_degrees, quad_segs=_BEVEL_QUAD_SEGMENTS, join_style="bevel"),
            xfact=1.0 / longitude_scale,
            yfact=1.0,
            origin=(0, 0),
        )
        parts = list(grown.geoms) if isinstance(grown, MultiPolygon) else [grown]

        usable = [
            part
            for part in parts
            if isinstance(part, Polygon)
            and not part.is_empty
            and len(part.exterior.coords) - 1 >= _MIN_RING_VERTICES
        ]
        if not usable:
            logger.warning("Skipping obstacle %r: degenerate after buffering", obstacle.name)
            continue

        buffered.extend(BufferedObstacle(name=obstacle.name, polygon=part) for part in usable)

    return buffered


def segment_is_clear(
    start: Coordinate,
    end: Coordinate,
    obstacles: Sequence[BufferedObstacle],
) -> bool:
    """Test whether the straight segment between two coordinates is unobstructed.

    Args:
        start: Segment start as ``(x, y)``.
        end: Segment end as ``(x, y)``.
        obstacles: Buffered zones to test against.

    Returns:
        True if no zone's interior meets the segment's interior or endpoints.
    """
    geometry = Point(start) if start == end else LineString([start, end])
    segment_bounds: Bounds = (
        min(start[0], end[0]),
        min(start[1], end[1]),
        max(start[0], end[0]),
        max(start[1], end[1]),
    )

    for obstacle in obstacles:
        if not _envelopes_overlap(segment_bounds, obstacle.bounds):
            continue
        if not geometry.relate_pattern(obstacle.polygon, _CLEAR_PATTERN):
            return False

    return True


def _envelopes_overlap(first: Bounds, second: Bounds) -> bool:
    first_min_x, first_min_y, first_max_x, first_max_y = first
    second_min_x, second_min_y, second_max_x, second_max_y = second
    return not (
        first_max_x < second_min_x
        or second_max_x < first_min_x
        or first_max_y < second_min_y
        or second_max_y < first_min_y
    )


def _longitude_scale(coordinates: Sequence[Coordinate]) -> float:
    """Meters per degree of longitude relative to latitude, at the ring's mean latitude."""
    mean_latitude = sum(latitude for _, latitude in coordinates) / len(coordinates)
    return max(math.cos(math.radians(mean_latitude)), _MIN_LONGITUDE_SCALE)
