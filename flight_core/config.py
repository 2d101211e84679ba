"""Flight core configuration using Pydantic BaseSettings.

All settings are loaded from environment variables prefixed with ``FLIGHT_``.

Usage:
    from flight_core.config import get_settings

    settings = get_settings()
    print(settings.tick_rate_hz)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 0.000025 degrees per tick at 105 kts and 20 Hz
_DEFAULT_DEGREES_PER_KNOT_SECOND: float = 0.000025 / 105.0 * 20.0


class FlightSettings(BaseSettings):
    """Simulation and planning settings loaded from environment variables.

    Attributes:
        vehicle_id: Identifier reported with telemetry.
        tick_rate_hz: Physics update rate of the simulation worker.
        speed_ramp_kts_per_second: Maximum rate of change of current speed.
        altitude_ramp_ft_per_second: Maximum rate of change of current altitude.
        degrees_per_knot_second: Distance covered per knot of speed per second, in degrees.
        reference_speed_kts: Cruise speed the arrival threshold is tuned against.
        arrival_threshold_ticks: Arrival epsilon, in ticks of travel at reference speed.
        orbit_radius_degrees: Holding pattern radius.
        home_latitude: Initial orbit center latitude.
        home_longitude: Initial orbit center longitude.
        initial_speed_kts: Initial target and current speed.
        initial_altitude_ft: Initial target and current altitude.
        default_payload_pitch_degrees: Gimbal pitch used when nothing is tracked.
        safety_margin_meters: Outward buffer applied to restricted zones.
        respect_altitude_bands: Only plan around zones whose band contains the route altitude.
        telemetry_display_jitter: Add cosmetic oscillation to published telemetry.
        log_level: Logging level.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLIGHT_",
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    vehicle_id: str = Field(default="UAV-Ashdod-01", min_length=1)

    # Simulation cadence
    tick_rate_hz: float = Field(default=20.0, ge=1.0, le=200.0)
    speed_ramp_kts_per_second: float = Field(default=2.0, gt=0.0)
    altitude_ramp_ft_per_second: float = Field(default=10.0, gt=0.0)
    degrees_per_knot_second: float = Field(default=_DEFAULT_DEGREES_PER_KNOT_SECOND, gt=0.0)
    reference_speed_kts: float = Field(default=105.0, gt=0.0)
    arrival_threshold_ticks: float = Field(default=4.0, gt=0.0)

    # Holding pattern
    orbit_radius_degrees: float = Field(default=0.027, gt=0.0, le=1.0)
    home_latitude: float = Field(default=31.801447, ge=-90.0, le=90.0)
    home_longitude: float = Field(default=34.643497, ge=-180.0, le=180.0)

    # Initial flight envelope
    initial_speed_kts: float = Field(default=105.0, ge=1.0, le=500.0)
    initial_altitude_ft: float = Field(default=4000.0, ge=0.0, le=60000.0)
    default_payload_pitch_degrees: float = Field(default=-45.0, ge=-90.0, le=0.0)

    # Planning
    safety_margin_meters: float = Field(default=55.0, ge=0.0, le=5000.0)
    respect_altitude_bands: bool = Field(default=False)

    # Telemetry
    telemetry_display_jitter: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed:
            error_message = f"log_level must be one of {allowed}, got '{value}'"
            raise ValueError(error_message)
        return upper_value

    @property
    def tick_interval_seconds(self) -> float:
        """Wall-clock time between two physics ticks."""
        return 1.0 / self.tick_rate_hz


@lru_cache
def get_settings() -> FlightSettings:
    """Get cached settings instance.

    Returns:
        Cached FlightSettings instance.
    """
    return FlightSettings()
