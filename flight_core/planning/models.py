"""Path planning data models.

Coordinates handed to the geometry layer are ``(longitude, latitude)`` tuples,
which is the x/y order shapely expects.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from flight_core.geo.geodesy import haversine_distance

Coordinate = tuple[float, float]

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GeoPoint(BaseModel):
    """Geographic point with an optional altitude."""

    model_config = _WIRE_CONFIG

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    altitude_ft: float = Field(default=0.0, ge=0)

    @property
    def coordinate(self) -> Coordinate:
        """Planar ``(x, y)`` form used by the geometry layer."""
        return (self.lng, self.lat)

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate, altitude_ft: float = 0.0) -> "GeoPoint":
        """Build a point from an ``(x, y)`` coordinate."""
        longitude, latitude = coordinate
        return cls(lat=latitude, lng=longitude, altitude_ft=altitude_ft)

    def distance_to(self, other: "GeoPoint") -> float:
        """Haversine distance to another point in meters."""
        return haversine_distance(
            latitude_1=self.lat,
            longitude_1=self.lng,
            latitude_2=other.lat,
            longitude_2=other.lng,
        )


class Obstacle(BaseModel):
    """Restricted airspace volume: a polygon ring extruded over an altitude band."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="")
    ring: tuple[GeoPoint, ...]
    min_altitude_ft: float = Field(default=0.0, ge=0)
    max_altitude_ft: float = Field(default=60000.0, ge=0)
    is_active: bool = Field(default=True)

    @model_validator(mode="after")
    def check_altitude_band(self) -> Self:
        """Reject an inverted altitude band."""
        if self.max_altitude_ft < self.min_altitude_ft:
            error_message = (
                f"max_altitude_ft ({self.max_altitude_ft}) is below "
                f"min_altitude_ft ({self.min_altitude_ft})"
            )
            raise ValueError(error_message)
        return self

    @property
    def coordinates(self) -> list[Coordinate]:
        """Ring vertices as ``(x, y)`` with any explicit closing vertex removed."""
        points = [point.coordinate for point in self.ring]
        if len(points) > 1 and points[0] == points[-1]:
            points.pop()
        return points

    def applies_at(self, altitude_ft: float) -> bool:
        """Whether the altitude band contains the given altitude."""
        return self.min_altitude_ft <= altitude_ft <= self.max_altitude_ft


class ObstacleSnapshot(BaseModel):
    """Immutable per-request view of the restricted zones."""

    model_config = ConfigDict(frozen=True)

    obstacles: tuple[Obstacle, ...] = ()

    def active(self, altitude_ft: float | None = None) -> list[Obstacle]:
        """Return active obstacles, optionally limited to an altitude band.

        Args:
            altitude_ft: When given, keep only zones whose band contains it.

        Returns:
            Active obstacles in snapshot order.
        """
        return [
            obstacle
            for obstacle in self.obstacles
            if obstacle.is_active and (altitude_ft is None or obstacle.applies_at(altitude_ft))
        ]


class Route(BaseModel):
    """Ordered route; an empty route means no path was found."""

    model_config = ConfigDict(frozen=True)

    points: tuple[GeoPoint, ...] = ()
    total_distance_meters: float = Field(default=0.0, ge=0)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @classmethod
    def empty(cls) -> "Route":
        """The "no path found" result."""
        return cls()

    @classmethod
    def through(cls, points: list[GeoPoint]) -> "Route":
        """Build a route whose length is the sum of its haversine legs."""
        total = sum(
            (first.distance_to(second) for first, second in zip(points, points[1:], strict=False)),
            start=0.0,
        )
        return cls(points=tuple(points), total_distance_meters=total)


class RouteRequest(BaseModel):
    """Route request as received from the external API."""

    model_config = _WIRE_CONFIG

    start_lat: float = Field(ge=-90, le=90)
    start_lng: float = Field(ge=-180, le=180)
    end_lat: float = Field(ge=-90, le=90)
    end_lng: float = Field(ge=-180, le=180)
    altitude_ft: float = Field(default=0.0, ge=0, le=60000)

    @property
    def start(self) -> GeoPoint:
        return GeoPoint(lat=self.start_lat, lng=self.start_lng)

    @property
    def end(self) -> GeoPoint:
        return GeoPoint(lat=self.end_lat, lng=self.end_lng)


class RouteResponse(BaseModel):
    """Planned route with the requested altitude assigned to every leg."""

    model_config = _WIRE_CONFIG

    path: list[GeoPoint]
    total_distance_meters: float = Field(ge=0)

    @classmethod
    def from_route(cls, route: Route, altitude_ft: float) -> "RouteResponse":
        """Lift a 2D route into a 3D response at a single altitude."""
        return cls(
            path=[point.model_copy(update={"altitude_ft": altitude_ft}) for point in route.points],
            total_distance_meters=route.total_distance_meters,
        )
