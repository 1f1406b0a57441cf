"""Navigation library for resolving fixes and procedures.

This module provides the read-only navigation data an FMS builds its legs
from: named fixes with positions, and standard procedures (SID/STAR) that
expand to ordered waypoint lists for a given runway and flight phase.

Typical usage:
    library = NavigationLibrary()
    library.load_from_yaml("data/navigation/las.yaml")

    waypoints = library.get_procedure_waypoints(
        "dag", "kepec3", "klas", runway="19l", phase=FlightPhase.ARRIVAL
    )
"""

import logging
from pathlib import Path

import yaml

from atcfms.navigation.procedure import FlightPhase, Procedure, ProcedureFix, ProcedureType
from atcfms.navigation.waypoint import Position, WaypointEntry

logger = logging.getLogger(__name__)


class NavigationLookupError(LookupError):
    """Raised when a fix or procedure cannot be resolved."""


class NavigationLibrary:
    """Database of fixes and procedures.

    Names are stored lowercase and looked up case-insensitively. The library
    is only read by legs while they are built, so one instance can be shared
    by many flight management systems.

    Attributes:
        fixes: Dictionary mapping lowercase fix name to Position
        procedures: Dictionary mapping lowercase procedure name to Procedure

    Examples:
        >>> library = NavigationLibrary()
        >>> library.add_fix("DAG", Position(34.9624, -116.5781))
        >>> library.get_fix_waypoints("dag")[0].name
        'dag'
    """

    def __init__(self) -> None:
        """Initialize empty navigation library."""
        self.fixes: dict[str, Position] = {}
        self.procedures: dict[str, Procedure] = {}
        logger.info("Initialized navigation library")

    def add_fix(self, name: str, position: Position) -> None:
        """Add a fix, replacing any existing fix with the same name."""
        self.fixes[name.lower()] = position
        logger.debug("Added fix: %s", name.lower())

    def add_procedure(self, procedure: Procedure) -> None:
        """Add a procedure, replacing any existing one with the same name."""
        self.procedures[procedure.name.lower()] = procedure
        logger.debug("Added %s: %s", procedure.type.value, procedure.name)

    def has_fix(self, name: str) -> bool:
        return name.lower() in self.fixes

    def find_fix(self, name: str) -> Position | None:
        """Find fix position by name.

        Args:
            name: Fix identifier (case-insensitive)

        Returns:
            Position if found, None otherwise
        """
        return self.fixes.get(name.lower())

    def find_procedure(self, name: str) -> Procedure | None:
        return self.procedures.get(name.lower())

    def get_fix_waypoints(self, name: str, is_hold: bool = False) -> list[WaypointEntry]:
        """Resolve a single fix to a one-entry waypoint list.

        Args:
            name: Fix identifier (case-insensitive)
            is_hold: Whether the aircraft holds at this fix

        Returns:
            List containing one WaypointEntry

        Raises:
            NavigationLookupError: If the fix is unknown
        """
        position = self.find_fix(name)
        if position is None:
            logger.warning("Unknown fix: %s", name)
            raise NavigationLookupError(f"Unknown fix: {name}")

        return [WaypointEntry(name=name.lower(), position=position, is_hold=is_hold)]

    def get_procedure_waypoints(
        self,
        entry: str,
        procedure_name: str,
        exit_fix: str,
        runway: str | None,
        phase: FlightPhase,
    ) -> list[WaypointEntry]:
        """Expand a procedure into its ordered waypoints.

        Args:
            entry: Entry fix (STAR transition, or the airport/runway for a SID)
            procedure_name: Procedure identifier
            exit_fix: Exit fix (SID transition, or the airport for a STAR)
            runway: Assigned runway name, if any
            phase: Flight phase the route is built for

        Returns:
            Ordered list of WaypointEntry, names unique

        Raises:
            NavigationLookupError: If the procedure, transition or runway is
                unknown, or the procedure cannot be flown in this phase
        """
        procedure = self.find_procedure(procedure_name)
        if procedure is None:
            logger.warning("Unknown procedure: %s", procedure_name)
            raise NavigationLookupError(f"Unknown procedure: {procedure_name}")

        if procedure.type.flight_phase != phase:
            raise NavigationLookupError(
                f"{procedure.type.value.upper()} {procedure.name} cannot be flown "
                f"during {phase.value}"
            )

        entry = entry.lower()
        exit_fix = exit_fix.lower()
        runway_key = runway.lower() if runway else None

        if procedure.type == ProcedureType.STAR:
            fixes = self._expand_star(procedure, entry, exit_fix, runway_key)
        else:
            fixes = self._expand_sid(procedure, entry, exit_fix, runway_key)

        return self._build_waypoints(fixes)

    def _expand_star(
        self, procedure: Procedure, entry: str, exit_fix: str, runway: str | None
    ) -> list[ProcedureFix]:
        if entry not in procedure.entry_points:
            raise NavigationLookupError(f"Unknown entry {entry} for STAR {procedure.name}")

        if exit_fix != procedure.airport and exit_fix not in procedure.exit_points:
            raise NavigationLookupError(f"Unknown exit {exit_fix} for STAR {procedure.name}")

        fixes = procedure.entry_points[entry] + procedure.body
        if runway and runway in procedure.runways:
            fixes = fixes + procedure.runways[runway]

        return fixes

    def _expand_sid(
        self, procedure: Procedure, entry: str, exit_fix: str, runway: str | None
    ) -> list[ProcedureFix]:
        if entry not in (procedure.airport, runway):
            raise NavigationLookupError(f"Unknown entry {entry} for SID {procedure.name}")

        if exit_fix not in procedure.exit_points:
            raise NavigationLookupError(f"Unknown exit {exit_fix} for SID {procedure.name}")

        runway_fixes: list[ProcedureFix] = []
        if procedure.runways:
            if runway not in procedure.runways:
                raise NavigationLookupError(f"Unknown runway {runway} for SID {procedure.name}")
            runway_fixes = procedure.runways[runway]

        return runway_fixes + procedure.body + procedure.exit_points[exit_fix]

    def _build_waypoints(self, fixes: list[ProcedureFix]) -> list[WaypointEntry]:
        waypoints: list[WaypointEntry] = []
        seen: set[str] = set()

        for fix in fixes:
            if fix.name in seen:
                continue
            seen.add(fix.name)

            position = self.find_fix(fix.name)
            if position is None:
                logger.debug("Procedure fix %s has no known position", fix.name)

            waypoints.append(
                WaypointEntry(
                    name=fix.name,
                    position=position,
                    altitude_restriction=fix.altitude_restriction,
                    speed_restriction=fix.speed_restriction,
                )
            )

        return waypoints

    def load_from_yaml(self, yaml_path: str | Path) -> int:
        """Load fixes and procedures from a YAML file.

        Expected layout::

            airport: klas
            fixes:
              DAG: [34.9624, -116.5781]
            procedures:
              KEPEC3:
                type: star
                entry_points: {DAG: [DAG, [KEPEC, "A120|S250"]]}
                body: [...]
                runways: {19L: [...]}

        Args:
            yaml_path: Path to YAML file

        Returns:
            Number of fixes and procedures loaded

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file structure is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Navigation data not found: {yaml_path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Navigation data root must be a mapping: {yaml_path}")

        airport = str(data.get("airport", "")).lower()
        fixes = data.get("fixes", {}) or {}
        procedures = data.get("procedures", {}) or {}

        if not isinstance(fixes, dict) or not isinstance(procedures, dict):
            raise ValueError(f"'fixes' and 'procedures' must be mappings: {yaml_path}")

        count = 0
        for name, coordinates in fixes.items():
            self.add_fix(str(name), _parse_position(str(name), coordinates))
            count += 1

        for name, procedure_data in procedures.items():
            self.add_procedure(Procedure.from_dict(str(name), procedure_data, airport))
            count += 1

        logger.info(
            "Loaded %d fixes and %d procedures from %s", len(fixes), len(procedures), yaml_path
        )
        return count

    def count(self) -> int:
        """Return total number of fixes and procedures in the library."""
        return len(self.fixes) + len(self.procedures)

    def clear(self) -> None:
        """Remove all fixes and procedures."""
        self.fixes.clear()
        self.procedures.clear()
        logger.info("Cleared navigation library")


def _parse_position(name: str, coordinates: object) -> Position:
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) not in (2, 3):
        raise ValueError(f"Fix {name} must be [lat, lon] or [lat, lon, elevation_ft]")

    try:
        values = [float(value) for value in coordinates]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Fix {name} has non-numeric coordinates") from e

    return Position(*values)
