"""Component wiring for one simulated vehicle.

Usage:
    from flight_core.context import create_flight_context

    context = create_flight_context()
    context.mission.set_target(31.78, 34.60)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from flight_core.config import get_settings
from flight_core.mission.control import MissionControl
from flight_core.planning.planner import PathPlanner
from flight_core.planning.repository import InMemoryObstacleRepository
from flight_core.vehicle.simulator import VehicleSimulator

if TYPE_CHECKING:
    from flight_core.config import FlightSettings
    from flight_core.planning.models import Obstacle
    from flight_core.planning.repository import ObstacleRepository


@dataclass(frozen=True)
class FlightContext:
    """The planner, simulator and command facade sharing one configuration."""

    settings: FlightSettings
    simulator: VehicleSimulator
    planner: PathPlanner
    obstacles: ObstacleRepository
    mission: MissionControl


def create_flight_context(
    settings: FlightSettings | None = None,
    obstacles: ObstacleRepository | list[Obstacle] | None = None,
) -> FlightContext:
    """Build every component for a single vehicle.

    Args:
        settings: Configuration. Loaded from the environment if omitted.
        obstacles: A zone repository, or zones to seed an in-memory one.

    Returns:
        The wired components.

    Raises:
        ConfigurationError: If the settings produce an unusable motion profile.
    """
    if settings is None:
        settings = get_settings()

    if obstacles is None or isinstance(obstacles, list):
        obstacles = InMemoryObstacleRepository(obstacles)

    simulator = VehicleSimulator(settings)
    planner = PathPlanner(settings)
    return FlightContext(
        settings=settings,
        simulator=simulator,
        planner=planner,
        obstacles=obstacles,
        mission=MissionControl(simulator, planner, obstacles),
    )
