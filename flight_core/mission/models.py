"""Validated command payloads accepted by mission control."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_COMMAND_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TargetCommand(BaseModel):
    """New destination; (0, 0) is treated as a missing coordinate."""

    model_config = _COMMAND_CONFIG

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    @model_validator(mode="after")
    def reject_null_island(self) -> Self:
        """Reject the all-zero coordinate sent by clients with no position."""
        if self.lat == 0 and self.lng == 0:
            error_message = "Valid lat/lng coordinates are required"
            raise ValueError(error_message)
        return self


class SpeedCommand(BaseModel):
    """Target speed in knots."""

    model_config = _COMMAND_CONFIG

    speed_kts: float = Field(ge=1, le=500)


class AltitudeCommand(BaseModel):
    """Target altitude in feet."""

    model_config = _COMMAND_CONFIG

    altitude_ft: float = Field(ge=0, le=60000)


class PayloadPointCommand(BaseModel):
    """Sensor lock target."""

    model_config = _COMMAND_CONFIG

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    altitude_ft: float = Field(default=0.0, ge=0, le=60000)

