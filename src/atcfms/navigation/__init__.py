"""Navigation data and route strings.

This module provides fixes, procedures and the route string codec used to
build an FMS's legs.

Typical usage:
    from atcfms.navigation import NavigationLibrary, RouteStringCodec

    library = NavigationLibrary()
    library.load_from_yaml("data/navigation/las.yaml")

    segments = RouteStringCodec.parse("cowby..dag.kepec3.klas")
"""

from atcfms.navigation.navdata import NavigationLibrary, NavigationLookupError
from atcfms.navigation.procedure import (
    FlightPhase,
    Procedure,
    ProcedureFix,
    ProcedureType,
    parse_restrictions,
)
from atcfms.navigation.route_string import (
    LegType,
    MalformedRouteError,
    RouteSegment,
    RouteStringCodec,
)
from atcfms.navigation.waypoint import NO_RESTRICTION, Position, WaypointEntry

__all__ = [
    "FlightPhase",
    "LegType",
    "MalformedRouteError",
    "NavigationLibrary",
    "NavigationLookupError",
    "NO_RESTRICTION",
    "Position",
    "Procedure",
    "ProcedureFix",
    "ProcedureType",
    "RouteSegment",
    "RouteStringCodec",
    "WaypointEntry",
    "parse_restrictions",
]
