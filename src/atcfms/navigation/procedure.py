"""Standard procedure definitions.

This module provides the data types for standard instrument departures (SID)
and standard terminal arrival routes (STAR) as stored in the navigation
library, along with the restriction token format used by procedure fixes.

Restriction tokens are separated by ``|``:

- ``A110``: altitude restriction of 11,000 ft (hundreds of feet)
- ``A80+`` / ``A80-``: at or above / at or below 8,000 ft
- ``S250``: speed restriction of 250 knots
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from atcfms.navigation.waypoint import NO_RESTRICTION


class FlightPhase(Enum):
    """Flight phase an aircraft's route is built for.

    Attributes:
        ARRIVAL: Inbound aircraft flying a STAR
        DEPARTURE: Outbound aircraft flying a SID
    """

    ARRIVAL = "arrival"
    DEPARTURE = "departure"


class ProcedureType(Enum):
    """Standard procedure type.

    Attributes:
        SID: Standard Instrument Departure
        STAR: Standard Terminal Arrival Route
    """

    SID = "sid"
    STAR = "star"

    @property
    def flight_phase(self) -> FlightPhase:
        """Flight phase this kind of procedure is flown in."""
        if self is ProcedureType.SID:
            return FlightPhase.DEPARTURE
        return FlightPhase.ARRIVAL


def parse_restrictions(text: str) -> tuple[float, float]:
    """Parse a restriction token string.

    Args:
        text: Tokens such as ``A110|S250``

    Returns:
        Tuple of (altitude_ft, speed_kts), ``NO_RESTRICTION`` where absent

    Raises:
        ValueError: If a token is not understood

    Examples:
        >>> parse_restrictions("A80+|S210")
        (8000, 210)
    """
    altitude: float = NO_RESTRICTION
    speed: float = NO_RESTRICTION

    for token in text.split("|"):
        token = token.strip().upper()
        if not token:
            continue

        kind, raw_value = token[0], token[1:].rstrip("+-")
        if not raw_value.isdigit():
            raise ValueError(f"Invalid restriction token: {token}")

        if kind == "A":
            altitude = int(raw_value) * 100
        elif kind == "S":
            speed = int(raw_value)
        else:
            raise ValueError(f"Unknown restriction type in token: {token}")

    return altitude, speed


@dataclass(frozen=True)
class ProcedureFix:
    """A fix as listed inside a procedure, with its restrictions.

    Attributes:
        name: Lowercase fix identifier
        altitude_restriction: Altitude restriction in feet, or NO_RESTRICTION
        speed_restriction: Speed restriction in knots, or NO_RESTRICTION
    """

    name: str
    altitude_restriction: float = NO_RESTRICTION
    speed_restriction: float = NO_RESTRICTION

    @classmethod
    def from_entry(cls, entry: Any) -> "ProcedureFix":
        """Build from a navigation data entry.

        Accepts either a bare fix name or a ``[name, restrictions]`` pair.

        Raises:
            ValueError: If the entry has an unexpected shape
        """
        if isinstance(entry, str):
            return cls(name=entry.strip().lower())

        if isinstance(entry, (list, tuple)) and len(entry) == 2 and isinstance(entry[0], str):
            altitude, speed = parse_restrictions(str(entry[1]))
            return cls(
                name=entry[0].strip().lower(),
                altitude_restriction=altitude,
                speed_restriction=speed,
            )

        raise ValueError(f"Invalid procedure fix entry: {entry!r}")


@dataclass
class Procedure:
    """Standard procedure definition.

    A STAR expands to ``entry_points[entry] + body + runways[runway]``;
    a SID expands to ``runways[runway] + body + exit_points[exit]``.

    Attributes:
        name: Lowercase procedure identifier (e.g., "kepec3")
        type: SID or STAR
        airport: Lowercase ICAO of the airport the procedure serves
        entry_points: Transition fixes keyed by entry fix name
        body: Fixes common to every transition
        exit_points: Transition fixes keyed by exit fix name
        runways: Runway transition fixes keyed by lowercase runway name
    """

    name: str
    type: ProcedureType
    airport: str
    entry_points: dict[str, list[ProcedureFix]] = field(default_factory=dict)
    body: list[ProcedureFix] = field(default_factory=list)
    exit_points: dict[str, list[ProcedureFix]] = field(default_factory=dict)
    runways: dict[str, list[ProcedureFix]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any], default_airport: str = "") -> "Procedure":
        """Build a procedure from its navigation data mapping.

        Raises:
            ValueError: If the mapping is missing required keys or is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Procedure '{name}' must be a mapping")

        try:
            procedure_type = ProcedureType(str(data["type"]).lower())
        except (KeyError, ValueError) as e:
            raise ValueError(f"Procedure '{name}' has no valid type (sid/star)") from e

        airport = str(data.get("airport", default_airport)).lower()
        if not airport:
            raise ValueError(f"Procedure '{name}' has no airport")

        return cls(
            name=name.lower(),
            type=procedure_type,
            airport=airport,
            entry_points=_parse_transitions(data.get("entry_points", {})),
            body=[ProcedureFix.from_entry(entry) for entry in data.get("body", [])],
            exit_points=_parse_transitions(data.get("exit_points", {})),
            runways=_parse_transitions(data.get("runways", {})),
        )


def _parse_transitions(data: dict[str, Any]) -> dict[str, list[ProcedureFix]]:
    if not isinstance(data, dict):
        raise ValueError(f"Procedure transitions must be a mapping, got {type(data).__name__}")

    return {
        str(key).lower(): [ProcedureFix.from_entry(entry) for entry in entries]
        for key, entries in data.items()
    }
