"""Flight Management System.

The FMS owns an aircraft's route, as an ordered collection of legs, and its
Mode Control Panel. Each simulation tick asks it for the altitude, heading
and speed the aircraft should fly, and tells it when a waypoint has been
passed.

Typical usage:
    fms = FlightManagementSystem(
        {"route": "cowby..bikkr..dag.kepec3.klas", "category": "arrival"},
        "19l",
        b738,
        navigation_library,
    )
    target_altitude = fms.get_altitude()
    if fms.has_next_waypoint():
        fms.next_waypoint()
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from atcfms.aircraft.type_definition import AircraftTypeDefinition
from atcfms.avionics.leg import Leg
from atcfms.avionics.mode_control import (
    AltitudeMode,
    HeadingMode,
    McpAxis,
    ModeController,
    SpeedMode,
    resolve_target,
)
from atcfms.core.config import ConfigLoader
from atcfms.core.logging_system import get_logger
from atcfms.navigation.navdata import NavigationLibrary
from atcfms.navigation.procedure import FlightPhase
from atcfms.navigation.route_string import MalformedRouteError, RouteStringCodec
from atcfms.navigation.waypoint import Position, WaypointEntry

logger = get_logger(__name__)

HEADING_NOT_COMMANDED = -999


class FmsError(Exception):
    """Base class for FMS errors."""


class InvalidInitError(FmsError):
    """Raised when an FMS is created without a usable init payload."""


class WaypointNotFoundError(FmsError):
    """Raised when skipping to a waypoint that is on no remaining leg."""


class EndOfRouteError(FmsError):
    """Raised when sequencing past the last waypoint of the route."""


@dataclass(frozen=True)
class _AxisResolution:
    """How one axis target is resolved.

    Attributes:
        base: Default value source
        restriction: Route restriction source, None if the axis has none
        hold_mode: MCP mode that overrides everything
    """

    base: Callable[["FlightManagementSystem"], float]
    restriction: Callable[["FlightManagementSystem"], float] | None
    hold_mode: Enum


_RESOLUTION_TABLE: dict[McpAxis, _AxisResolution] = {
    McpAxis.ALTITUDE: _AxisResolution(
        base=lambda fms: fms.type_definition.ceiling,
        restriction=lambda fms: fms.current_waypoint.altitude_restriction,
        hold_mode=AltitudeMode.HOLD,
    ),
    McpAxis.HEADING: _AxisResolution(
        base=lambda fms: HEADING_NOT_COMMANDED,
        restriction=None,
        hold_mode=HeadingMode.HOLD,
    ),
    McpAxis.SPEED: _AxisResolution(
        base=lambda fms: fms.type_definition.speed.cruise,
        restriction=lambda fms: fms.current_waypoint.speed_restriction,
        hold_mode=SpeedMode.HOLD,
    ),
}


class FlightManagementSystem:
    """Route sequencing and target resolution for one aircraft.

    Legs are kept in an arena with a cursor on the current leg. Legs before
    the cursor have been flown and destroyed, and are discarded when a leg is
    inserted; ``leg_collection`` exposes only the live legs, with the current
    leg first.

    Attributes:
        current_phase: Flight phase the route is flown in
        type_definition: Static performance data for the aircraft type

    Examples:
        >>> fms = FlightManagementSystem(
        ...     {"route": "cowby..dag.kepec3.klas", "category": "arrival"},
        ...     "19l", b738, library,
        ... )
        >>> fms.current_route
        'cowby..dag.kepec3.klas'
        >>> fms.skip_to_waypoint("KEPEC")
        >>> fms.current_waypoint.name
        'kepec'
    """

    def __init__(
        self,
        aircraft_init_props: Mapping[str, Any],
        initial_runway_assignment: str | None,
        type_definition: AircraftTypeDefinition,
        navigation_library: NavigationLibrary,
        config: ConfigLoader | None = None,
    ) -> None:
        """Initialize the FMS and build the initial route.

        Args:
            aircraft_init_props: Mapping with ``route`` and ``category``
                (``"arrival"`` or ``"departure"``)
            initial_runway_assignment: Runway assigned for takeoff/landing
            type_definition: Aircraft type performance data
            navigation_library: Library to build legs from
            config: Configuration providing MCP presets; defaults used if None

        Raises:
            InvalidInitError: If the init payload is missing, empty or invalid
            MalformedRouteError: If the route does not parse
            LookupError: If a route segment cannot be resolved
        """
        if not isinstance(aircraft_init_props, Mapping) or not aircraft_init_props:
            raise InvalidInitError("Invalid aircraft_init_props passed to FlightManagementSystem")

        self._navigation_library: NavigationLibrary | None = navigation_library
        self._mode_controller = ModeController(config)
        self.type_definition = type_definition
        self._runway_name = initial_runway_assignment

        self._legs: list[Leg] = []
        self._current_leg_index = 0
        self.current_phase: FlightPhase | None = None

        self._init(aircraft_init_props)

    def _init(self, aircraft_init_props: Mapping[str, Any]) -> None:
        route = aircraft_init_props.get("route")
        if not route:
            raise InvalidInitError("aircraft_init_props has no route")

        try:
            phase = FlightPhase(aircraft_init_props.get("category"))
        except ValueError as e:
            raise InvalidInitError(
                f"Invalid category {aircraft_init_props.get('category')!r}"
            ) from e

        self.current_phase = phase
        self._legs = self._build_initial_leg_collection(route)
        self._current_leg_index = 0

        logger.info(
            "FMS initialized for %s: %s (%d legs)",
            phase.value,
            self.current_route,
            len(self._legs),
        )

    def _build_initial_leg_collection(self, route: str) -> list[Leg]:
        segments = RouteStringCodec.parse(route)
        return [self._build_leg(segment) for segment in segments]

    def _build_leg(self, route_segment: str) -> Leg:
        try:
            return Leg(
                route_segment, self._runway_name, self.current_phase, self._navigation_library
            )
        except LookupError as e:
            logger.warning("Unable to build leg %s: %s", route_segment, e)
            raise

    def destroy(self) -> None:
        """Release the navigation library and reset route state."""
        self._navigation_library = None
        self._runway_name = ""
        self._legs = []
        self._current_leg_index = 0
        self.current_phase = None

    @property
    def leg_collection(self) -> list[Leg]:
        """Live legs in flight order; the first is the current leg."""
        return self._legs[self._current_leg_index:]

    @property
    def current_leg(self) -> Leg:
        return self._legs[self._current_leg_index]

    @property
    def current_waypoint(self) -> WaypointEntry:
        """The waypoint the aircraft is flying towards."""
        return self.current_leg.current_waypoint

    @property
    def current_route(self) -> str:
        """Route string for the remaining legs, e.g. ``cowby..dag.kepec3.klas``."""
        return RouteStringCodec.format(self.leg_collection)

    @property
    def mode_controller(self) -> ModeController:
        return self._mode_controller

    @property
    def runway_name(self) -> str | None:
        return self._runway_name

    @runway_name.setter
    def runway_name(self, runway_name: str | None) -> None:
        """Reassign the runway; only legs built afterwards use it."""
        logger.info("Runway reassigned: %s -> %s", self._runway_name, runway_name)
        self._runway_name = runway_name

    def _resolve(self, axis: McpAxis) -> float:
        resolution = _RESOLUTION_TABLE[axis]
        restriction = resolution.restriction(self) if resolution.restriction else None

        return resolve_target(
            base=resolution.base(self),
            restriction=restriction,
            mode=self._mode_controller.get_mode(axis),
            held_value=self._mode_controller.get_value(axis),
            hold_mode=resolution.hold_mode,
        )

    def get_altitude(self) -> float:
        """Altitude the aircraft should be at.

        Type ceiling, overridden by the current waypoint's altitude
        restriction, overridden by an MCP altitude hold.
        """
        return self._resolve(McpAxis.ALTITUDE)

    def get_heading(self) -> float:
        """Heading the aircraft should fly.

        Returns ``HEADING_NOT_COMMANDED`` (-999) unless the MCP is holding a
        heading; the simulation then follows the route laterally.
        """
        return self._resolve(McpAxis.HEADING)

    def get_speed(self) -> float:
        """Speed the aircraft should fly.

        Type cruise speed, overridden by the current waypoint's speed
        restriction, overridden by an MCP speed hold.
        """
        return self._resolve(McpAxis.SPEED)

    def update_modes_for_arrival(self) -> None:
        self._mode_controller.set_modes_for_arrival()

    def update_modes_for_departure(self) -> None:
        self._mode_controller.set_modes_for_departure()

    def set_altitude_vnav(self) -> None:
        """Fly the route's altitude restrictions."""
        self._mode_controller.set_mode_and_value(
            McpAxis.ALTITUDE, AltitudeMode.VNAV, self.current_waypoint.altitude_restriction
        )

    def set_altitude_hold(self, altitude: float) -> None:
        self._mode_controller.set_mode_and_value(McpAxis.ALTITUDE, AltitudeMode.HOLD, altitude)

    def set_heading_lnav(self, heading: float) -> None:
        """Follow the route laterally, ``heading`` being the course to the next fix."""
        self._mode_controller.set_mode_and_value(McpAxis.HEADING, HeadingMode.LNAV, heading)

    def set_heading_hold(self, heading: float) -> None:
        self._mode_controller.set_mode_and_value(McpAxis.HEADING, HeadingMode.HOLD, heading)

    def set_speed_hold(self, speed: float) -> None:
        self._mode_controller.set_mode_and_value(McpAxis.SPEED, SpeedMode.HOLD, speed)

    def transition_to_phase(self, phase: FlightPhase | str) -> None:
        """Change flight phase and apply the matching MCP preset.

        Args:
            phase: New phase, as enum or its string value

        Raises:
            ValueError: If ``phase`` is not a known flight phase
        """
        phase = FlightPhase(phase)
        logger.info(
            "Phase transition: %s -> %s",
            self.current_phase.value if self.current_phase else None,
            phase.value,
        )
        self.current_phase = phase

        if phase == FlightPhase.ARRIVAL:
            self.update_modes_for_arrival()
        else:
            self.update_modes_for_departure()

    def _has_next_leg(self) -> bool:
        return self._current_leg_index + 1 < len(self._legs)

    def has_next_waypoint(self) -> bool:
        """Check whether there is any waypoint after the current one.

        True if the current leg has another waypoint or another leg follows.
        """
        return self.current_leg.has_next_waypoint() or self._has_next_leg()

    @property
    def is_route_complete(self) -> bool:
        """True once the current waypoint is the last one on the route."""
        return not self.has_next_waypoint()

    def next_waypoint(self) -> None:
        """Sequence to the next waypoint.

        Advances within the current leg, or drops the current leg and makes
        the first waypoint of the following leg current.

        Raises:
            EndOfRouteError: If the current waypoint is the last on the route
        """
        if self.current_leg.has_next_waypoint():
            self.current_leg.move_to_next_waypoint()
        elif self._has_next_leg():
            self._move_to_next_leg()
        else:
            raise EndOfRouteError(
                f"No waypoint after {self.current_waypoint.name}; route is complete"
            )

        logger.debug("Sequenced to %s", self.current_waypoint.name)

    def _move_to_next_leg(self) -> None:
        flown = self.current_leg
        flown.destroy()
        self._current_leg_index += 1

        logger.info(
            "Leg %s complete, now flying %s", flown.route_string, self.current_leg.route_string
        )

    def skip_to_waypoint(self, waypoint_name: str) -> None:
        """Make ``waypoint_name`` the current waypoint.

        Legs before the one containing the waypoint are dropped.

        Args:
            waypoint_name: Fix name (case-insensitive)

        Raises:
            WaypointNotFoundError: If no remaining leg contains the waypoint
        """
        leg_index, waypoint_index = self._find_leg_and_waypoint_index_for_waypoint_name(
            waypoint_name
        )

        if waypoint_index == -1:
            raise WaypointNotFoundError(f"Waypoint {waypoint_name} is not on the route")

        for leg in self.leg_collection[:leg_index]:
            leg.destroy()

        self._current_leg_index += leg_index
        self.current_leg.skip_to_waypoint_at_index(waypoint_index)

        logger.info("Skipped to waypoint %s", self.current_waypoint.name)

    def _find_leg_and_waypoint_index_for_waypoint_name(
        self, waypoint_name: str
    ) -> tuple[int, int]:
        """Locate a waypoint among the live legs.

        Returns:
            ``(leg_index, waypoint_index)`` relative to ``leg_collection``,
            or ``(len(leg_collection), -1)`` if not found
        """
        legs = self.leg_collection

        for leg_index, leg in enumerate(legs):
            waypoint_index = leg.find_waypoint_index(waypoint_name)
            if waypoint_index != -1:
                return leg_index, waypoint_index

        return len(legs), -1

    def get_next_waypoint_position(self) -> Position | None:
        """Position of the waypoint after the current one.

        Returns:
            Next position, or None at the end of the route or when the next
            fix has no known position
        """
        if not self.has_next_waypoint():
            return None

        if self.current_leg.has_next_waypoint():
            return self.current_leg.next_waypoint.position

        return self._legs[self._current_leg_index + 1].current_waypoint.position

    def add_leg_to_beginning(self, route_string: str) -> None:
        """Insert a new leg ahead of the current one and make it current.

        Args:
            route_string: A single route segment, e.g. ``cowby`` or ``@bikkr``

        Raises:
            MalformedRouteError: If the string is not exactly one valid segment
            LookupError: If the segment cannot be resolved
        """
        segments = RouteStringCodec.parse(route_string)
        if len(segments) != 1:
            raise MalformedRouteError(
                f"Expected a single route segment, got {len(segments)}: {route_string}"
            )

        leg = self._build_leg(segments[0])

        # Inserting a leg discards the flown prefix of the arena
        del self._legs[:self._current_leg_index]
        self._current_leg_index = 0
        self._legs.insert(0, leg)

        logger.info("Added leg %s to beginning of route", leg.route_string)
