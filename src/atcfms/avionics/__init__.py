"""Avionics for simulated aircraft.

This package provides the Flight Management System and its parts:
- Legs built from route string segments
- Mode Control Panel with per-axis modes
- FMS route sequencing and target resolution
"""

from atcfms.avionics.fms import (
    HEADING_NOT_COMMANDED,
    EndOfRouteError,
    FlightManagementSystem,
    FmsError,
    InvalidInitError,
    WaypointNotFoundError,
)
from atcfms.avionics.leg import Leg
from atcfms.avionics.mode_control import (
    AltitudeMode,
    HeadingMode,
    McpAxis,
    ModeController,
    SpeedMode,
    resolve_target,
)

__all__ = [
    "AltitudeMode",
    "EndOfRouteError",
    "FlightManagementSystem",
    "FmsError",
    "HEADING_NOT_COMMANDED",
    "HeadingMode",
    "InvalidInitError",
    "Leg",
    "McpAxis",
    "ModeController",
    "SpeedMode",
    "WaypointNotFoundError",
    "resolve_target",
]
