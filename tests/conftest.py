"""Shared test fixtures."""

import pytest

from flight_core.config import get_settings
from flight_core.logging.config import get_logging_config
from flight_core.logging.context import clear_context


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "FLIGHT_VEHICLE_ID",
        "FLIGHT_TICK_RATE_HZ",
        "FLIGHT_SPEED_RAMP_KTS_PER_SECOND",
        "FLIGHT_ALTITUDE_RAMP_FT_PER_SECOND",
        "FLIGHT_DEGREES_PER_KNOT_SECOND",
        "FLIGHT_REFERENCE_SPEED_KTS",
        "FLIGHT_ARRIVAL_THRESHOLD_TICKS",
        "FLIGHT_ORBIT_RADIUS_DEGREES",
        "FLIGHT_HOME_LATITUDE",
        "FLIGHT_HOME_LONGITUDE",
        "FLIGHT_INITIAL_SPEED_KTS",
        "FLIGHT_INITIAL_ALTITUDE_FT",
        "FLIGHT_DEFAULT_PAYLOAD_PITCH_DEGREES",
        "FLIGHT_SAFETY_MARGIN_METERS",
        "FLIGHT_RESPECT_ALTITUDE_BANDS",
        "FLIGHT_TELEMETRY_DISPLAY_JITTER",
        "FLIGHT_LOG_LEVEL",
        "FLIGHT_LOG_FORMAT",
        "FLIGHT_SERVICE_NAME",
        "FLIGHT_INCLUDE_TIMESTAMP",
        "FLIGHT_INCLUDE_LOCATION",
        "FLIGHT_QUIET_TICK_LOGS",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    clear_context()
