"""Obstacle store interface and an in-memory implementation.

The persistent zone store lives outside this package. Whatever backs it hands
the planner an immutable ``ObstacleSnapshot`` per request.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

from flight_core.planning.models import ObstacleSnapshot

if TYPE_CHECKING:
    from flight_core.planning.models import Obstacle

logger = logging.getLogger(__name__)


class ObstacleRepository(Protocol):
    """Source of restricted-zone snapshots."""

    def snapshot(self) -> ObstacleSnapshot:
        """Return the current zones as an immutable snapshot."""
        ...


class InMemoryObstacleRepository:
    """Zone store held in memory, keyed by zone name.

    A zone stored without a name is given a generated one, so unnamed zones
    never replace each other.

    Every write publishes a new snapshot, so snapshots already handed to a
    planning call never change underneath it.
    """

    def __init__(self, obstacles: list[Obstacle] | None = None) -> None:
        self._lock = threading.Lock()
        self._zones: dict[str, Obstacle] = {}
        for obstacle in obstacles or []:
            named = _with_name(obstacle)
            self._zones[named.name] = named
        self._snapshot = ObstacleSnapshot(obstacles=tuple(self._zones.values()))

    def snapshot(self) -> ObstacleSnapshot:
        """Return the latest published snapshot."""
        with self._lock:
            return self._snapshot

    def put(self, obstacle: Obstacle) -> str:
        """Add a zone, replacing any zone with the same name.

        Returns:
            The name the zone is stored under.
        """
        obstacle = _with_name(obstacle)
        with self._lock:
            replaced = obstacle.name in self._zones
            self._zones = {**self._zones, obstacle.name: obstacle}
            self._publish()
        logger.info("Obstacle %r %s", obstacle.name, "replaced" if replaced else "added")
        return obstacle.name

    def set_active(self, name: str, *, is_active: bool) -> bool:
        """Toggle a zone's active flag.

        Returns:
            False if no zone has that name.
        """
        with self._lock:
            existing = self._zones.get(name)
            if existing is None:
                return False
            updated = existing.model_copy(update={"is_active": is_active})
            self._zones = {**self._zones, name: updated}
            self._publish()
        logger.info("Obstacle %r active=%s", name, is_active)
        return True

    def remove(self, name: str) -> bool:
        """Delete a zone.

        Returns:
            False if no zone has that name.
        """
        with self._lock:
            if name not in self._zones:
                return False
            self._zones = {key: value for key, value in self._zones.items() if key != name}
            self._publish()
        logger.info("Obstacle %r removed", name)
        return True

    def _publish(self) -> None:
        self._snapshot = ObstacleSnapshot(obstacles=tuple(self._zones.values()))


def _with_name(obstacle: Obstacle) -> Obstacle:
    if obstacle.name:
        return obstacle
    return obstacle.model_copy(update={"name": f"zone-{uuid4().hex[:12]}"})
