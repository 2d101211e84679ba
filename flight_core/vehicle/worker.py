"""Periodic simulation task.

The worker is the only caller of the physics tick. It advances the simulator at
the configured rate and hands every resulting telemetry snapshot to a sink,
such as a websocket broadcaster owned by the transport layer.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from flight_core.logging.context import set_extra_context

if TYPE_CHECKING:
    from flight_core.config import FlightSettings
    from flight_core.vehicle.models import TelemetrySnapshot
    from flight_core.vehicle.simulator import VehicleSimulator

logger = logging.getLogger(__name__)

# Cosmetic oscillation applied to published telemetry only.
_JITTER_ALTITUDE_FT: float = 5.0
_JITTER_SPEED_KTS: float = 0.5
_JITTER_SPEED_FREQUENCY: float = 2.0


class TelemetrySink(Protocol):
    """Receiver of per-tick telemetry."""

    def publish(self, vehicle_id: str, telemetry: TelemetrySnapshot) -> None:
        """Deliver one telemetry snapshot."""
        ...


class LoggingTelemetrySink:
    """Sink that writes telemetry to the log, for running without a transport."""

    def __init__(self, every_n_ticks: int = 20) -> None:
        self._every_n_ticks = max(1, every_n_ticks)
        self._received = 0

    def publish(self, vehicle_id: str, telemetry: TelemetrySnapshot) -> None:
        self._received += 1
        if self._received % self._every_n_ticks:
            return
        logger.info("Telemetry", extra={"vehicle_id": vehicle_id, **telemetry.to_wire()})


class SimulationWorker:
    """Drives a ``VehicleSimulator`` at a fixed tick rate."""

    def __init__(
        self,
        simulator: VehicleSimulator,
        sink: TelemetrySink,
        settings: FlightSettings,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the worker.

        Args:
            simulator: Simulator to advance.
            sink: Receiver of per-tick telemetry.
            settings: Configuration with the tick rate, vehicle ID and jitter flag.
            clock: Time source for the display jitter, in seconds.
        """
        self._simulator = simulator
        self._sink = sink
        self._vehicle_id = settings.vehicle_id
        self._interval_seconds = settings.tick_interval_seconds
        self._display_jitter = settings.telemetry_display_jitter
        self._clock = clock
        self._running = False
        self._tick_count = 0

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def is_running(self) -> bool:
        return self._running

    def tick(self) -> TelemetrySnapshot:
        """Advance the simulation once and publish the result.

        Returns:
            The telemetry as published, including any display jitter.
        """
        telemetry = self._simulator.tick()
        if self._display_jitter:
            telemetry = self._with_display_jitter(telemetry)

        try:
            self._sink.publish(self._vehicle_id, telemetry)
        except (ConnectionError, TimeoutError):
            logger.warning("Failed to publish telemetry for tick %d", self._tick_count)

        self._tick_count += 1
        return telemetry

    async def run(self, *, max_ticks: int | None = None) -> None:
        """Tick until stopped, cancelled, or ``max_ticks`` is reached.

        Sleep time is shortened by however long the tick itself took, so the
        cadence holds as long as a tick fits inside its interval.
        """
        self._running = True
        set_extra_context(vehicle_id=self._vehicle_id)
        logger.info(
            "Simulation worker started (%.1f Hz)",
            1.0 / self._interval_seconds,
        )

        loop = asyncio.get_running_loop()
        try:
            while self._running and (max_ticks is None or self._tick_count < max_ticks):
                started = loop.time()
                self.tick()
                elapsed = loop.time() - started
                await asyncio.sleep(max(0.0, self._interval_seconds - elapsed))
        except asyncio.CancelledError:
            logger.info("Simulation worker cancelled")
            raise
        finally:
            self._running = False
            logger.info("Simulation worker stopped after %d ticks", self._tick_count)

    def stop(self) -> None:
        """Signal the run loop to exit after the current tick."""
        logger.info("Stop signal received")
        self._running = False

    def _with_display_jitter(self, telemetry: TelemetrySnapshot) -> TelemetrySnapshot:
        now = self._clock()
        return telemetry.model_copy(
            update={
                "altitude_ft": telemetry.altitude_ft + _JITTER_ALTITUDE_FT * math.sin(now),
                "speed_kts": telemetry.speed_kts
                + _JITTER_SPEED_KTS * math.cos(_JITTER_SPEED_FREQUENCY * now),
            }
        )
