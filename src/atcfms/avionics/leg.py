"""Flight plan leg.

A leg is one contiguous section of a flight route built from a single route
segment: a fix flown direct, a fix to hold at, or a standard procedure
expanded into many fixes. Each leg keeps its waypoints in flight order and a
cursor pointing at the active one.

Typical usage:
    leg = Leg("dag.kepec3.klas", "19l", FlightPhase.ARRIVAL, navigation_library)
    while leg.has_next_waypoint():
        leg.move_to_next_waypoint()
"""

from atcfms.core.logging_system import get_logger
from atcfms.navigation.navdata import NavigationLibrary
from atcfms.navigation.procedure import FlightPhase
from atcfms.navigation.route_string import LegType, RouteSegment, RouteStringCodec
from atcfms.navigation.waypoint import WaypointEntry

logger = get_logger(__name__)


class Leg:
    """An ordered, sequenced group of waypoints.

    Attributes:
        waypoint_collection: Waypoints in flight order
        current_index: Index of the active waypoint
        segment: Route segment the leg was built from

    Examples:
        >>> leg = Leg("cowby", "19l", FlightPhase.ARRIVAL, library)
        >>> leg.route_string
        'cowby'
        >>> leg.current_waypoint.name
        'cowby'
    """

    def __init__(
        self,
        route_segment: str,
        runway_name: str | None,
        flight_phase: FlightPhase,
        navigation_library: NavigationLibrary,
    ) -> None:
        """Build a leg from a single route segment.

        Args:
            route_segment: One segment of a route string (no ``..``)
            runway_name: Assigned runway, used to pick procedure transitions
            flight_phase: Phase the route is flown in
            navigation_library: Library to resolve fixes and procedures from

        Raises:
            MalformedRouteError: If the segment does not parse
            LookupError: If the navigation library cannot resolve the segment
        """
        self.segment: RouteSegment = RouteStringCodec.classify(route_segment)
        self._navigation_library: NavigationLibrary | None = navigation_library
        self.waypoint_collection: list[WaypointEntry] = self._build_waypoint_collection(
            runway_name, flight_phase
        )
        self.current_index = 0
        self._destroyed = False

        logger.debug(
            "Built %s leg %s with %d waypoints",
            self.leg_type.value,
            self.route_string,
            len(self.waypoint_collection),
        )

    def _build_waypoint_collection(
        self, runway_name: str | None, flight_phase: FlightPhase
    ) -> list[WaypointEntry]:
        library = self._navigation_library

        if self.segment.leg_type == LegType.PROCEDURE:
            waypoints = library.get_procedure_waypoints(
                self.segment.entry,
                self.segment.procedure,
                self.segment.exit,
                runway_name,
                flight_phase,
            )
        else:
            waypoints = library.get_fix_waypoints(
                self.segment.fix_name, is_hold=self.segment.leg_type == LegType.HOLD
            )

        if not waypoints:
            raise LookupError(f"Route segment {self.segment.route_string} has no waypoints")

        return waypoints

    @property
    def leg_type(self) -> LegType:
        return self.segment.leg_type

    @property
    def is_hold(self) -> bool:
        return self.segment.leg_type == LegType.HOLD

    @property
    def is_procedure(self) -> bool:
        return self.segment.leg_type == LegType.PROCEDURE

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def route_string(self) -> str:
        """Route string segment for this leg.

        A procedure renders as ``entry.procedure.exit``, a direct fix as its
        bare name and a hold as ``@name``.
        """
        return self.segment.route_string

    @property
    def current_waypoint(self) -> WaypointEntry:
        """Waypoint the aircraft is currently flying to."""
        return self.waypoint_collection[self.current_index]

    @property
    def next_waypoint(self) -> WaypointEntry:
        """Waypoint after the current one.

        Raises:
            IndexError: If the current waypoint is the last in the leg
        """
        if not self.has_next_waypoint():
            raise IndexError(f"Leg {self.route_string} has no waypoint after {self.current_index}")
        return self.waypoint_collection[self.current_index + 1]

    @property
    def waypoint_names(self) -> list[str]:
        return [waypoint.name for waypoint in self.waypoint_collection]

    def __len__(self) -> int:
        return len(self.waypoint_collection)

    def has_next_waypoint(self) -> bool:
        """Check whether another waypoint follows the current one in this leg."""
        return self.current_index + 1 < len(self.waypoint_collection)

    def move_to_next_waypoint(self) -> None:
        """Advance the cursor to the next waypoint.

        Raises:
            IndexError: If the current waypoint is the last in the leg
        """
        if not self.has_next_waypoint():
            raise IndexError(f"Leg {self.route_string} has no next waypoint")

        self.current_index += 1

    def skip_to_waypoint_at_index(self, index: int) -> None:
        """Make the waypoint at ``index`` the current waypoint.

        Args:
            index: Index into ``waypoint_collection``

        Raises:
            IndexError: If ``index`` is out of range
        """
        if not 0 <= index < len(self.waypoint_collection):
            raise IndexError(f"Waypoint index {index} out of range for leg {self.route_string}")

        self.current_index = index

    def find_waypoint_index(self, waypoint_name: str) -> int:
        """Find a waypoint by name (case-insensitive).

        Returns:
            Index of the first match, or -1 if not found
        """
        name = waypoint_name.lower()
        for index, waypoint in enumerate(self.waypoint_collection):
            if waypoint.name == name:
                return index
        return -1

    def destroy(self) -> None:
        """Release waypoint data once the leg has been sequenced past."""
        if self._destroyed:
            logger.debug("Leg %s already destroyed", self.route_string)
            return

        self.waypoint_collection = []
        self.current_index = 0
        self._navigation_library = None
        self._destroyed = True
