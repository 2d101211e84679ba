"""Great-circle distance, bearings and unit conversions.

Route lengths are reported in meters through the haversine formula. The
simulator works in raw degrees and only converts to meters where a physical
angle is derived (gimbal pitch).
"""

import math

EARTH_RADIUS_METERS: float = 6_371_000.0
METERS_PER_DEGREE: float = 111_320.0
FEET_TO_METERS: float = 0.3048
FULL_TURN_DEGREES: float = 360.0


def haversine_distance(
    *,
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float,
) -> float:
    """Compute the haversine distance between two coordinates.

    Args:
        latitude_1: First point latitude in degrees.
        longitude_1: First point longitude in degrees.
        latitude_2: Second point latitude in degrees.
        longitude_2: Second point longitude in degrees.

    Returns:
        Distance between the two points in meters.
    """
    delta_latitude = math.radians(latitude_2 - latitude_1)
    delta_longitude = math.radians(longitude_2 - longitude_1)

    haversine = (
        math.sin(delta_latitude / 2.0) ** 2
        + math.cos(math.radians(latitude_1))
        * math.cos(math.radians(latitude_2))
        * math.sin(delta_longitude / 2.0) ** 2
    )
    # Rounding can push the term fractionally past 1 for antipodal points.
    haversine = min(1.0, haversine)
    angular_distance = 2.0 * math.atan2(math.sqrt(haversine), math.sqrt(1.0 - haversine))

    return EARTH_RADIUS_METERS * angular_distance


def normalize_degrees(angle_degrees: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = angle_degrees % FULL_TURN_DEGREES
    # -1e-17 % 360 rounds to exactly 360.0
    return 0.0 if wrapped == FULL_TURN_DEGREES else wrapped


def planar_bearing_degrees(
    *,
    from_latitude: float,
    from_longitude: float,
    to_latitude: float,
    to_longitude: float,
) -> float:
    """Bearing in raw degree space, clockwise from north, in [0, 360).

    Matches the simulator's straight-line motion, which interpolates latitude
    and longitude linearly.
    """
    return normalize_degrees(
        math.degrees(math.atan2(to_longitude - from_longitude, to_latitude - from_latitude))
    )


def corrected_offset_degrees(
    *,
    from_latitude: float,
    from_longitude: float,
    to_latitude: float,
    to_longitude: float,
) -> tuple[float, float]:
    """North and east offsets in degrees, with longitude scaled by cos(latitude).

    Returns:
        ``(delta_north, delta_east)``, both in degrees of latitude.
    """
    delta_east = (to_longitude - from_longitude) * math.cos(math.radians(from_latitude))
    delta_north = to_latitude - from_latitude
    return delta_north, delta_east
