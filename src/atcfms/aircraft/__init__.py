"""Aircraft type performance data."""

from atcfms.aircraft.type_definition import (
    AircraftTypeDefinition,
    RateProfile,
    RunwayRequirements,
    SpeedProfile,
)

__all__ = [
    "AircraftTypeDefinition",
    "RateProfile",
    "RunwayRequirements",
    "SpeedProfile",
]
