"""Standalone entry point.

Runs the simulation worker for one vehicle with telemetry written to the log.
The HTTP and websocket transport that normally drives mission control lives
outside this package.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

from flight_core.config import get_settings
from flight_core.context import create_flight_context
from flight_core.logging import setup_logging
from flight_core.vehicle.worker import LoggingTelemetrySink, SimulationWorker

if TYPE_CHECKING:
    from flight_core.config import FlightSettings

logger = logging.getLogger(__name__)


async def run_simulation(settings: FlightSettings) -> None:
    """Run the simulation worker until SIGINT or SIGTERM.

    Args:
        settings: Flight core configuration.
    """
    context = create_flight_context(settings)
    worker = SimulationWorker(
        context.simulator,
        LoggingTelemetrySink(every_n_ticks=round(settings.tick_rate_hz)),
        settings,
    )

    loop = asyncio.get_running_loop()

    def signal_handler() -> None:
        logger.info("Received shutdown signal")
        worker.stop()

    for signal_name in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signal_name, signal_handler)

    await worker.run()


def main() -> None:
    """CLI entry point: configure logging and run the async event loop."""
    settings = get_settings()
    setup_logging()

    logger.info(
        "Starting flight core (vehicle_id=%s, tick_rate=%.1f Hz, home=%.6f,%.6f)",
        settings.vehicle_id,
        settings.tick_rate_hz,
        settings.home_latitude,
        settings.home_longitude,
    )

    asyncio.run(run_simulation(settings))


if __name__ == "__main__":
    main()
