"""Navigation waypoint definition.

This module provides the WaypointEntry class for fixes along a leg, with
optional altitude and speed restrictions, and the Position it is located at.
"""

import math
from dataclasses import dataclass

NO_RESTRICTION = -1
EARTH_RADIUS_NM = 3440.065


@dataclass(frozen=True)
class Position:
    """Geographic position of a fix.

    Attributes:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        elevation_ft: Elevation in feet MSL, if known

    Examples:
        >>> dag = Position(34.9624, -116.5781)
    """

    latitude: float
    longitude: float
    elevation_ft: float | None = None

    def distance_to(self, other: "Position") -> float:
        """Calculate great circle distance to another position.

        Uses the Haversine formula.

        Args:
            other: Position to measure to

        Returns:
            Distance in nautical miles
        """
        lat1, lon1 = math.radians(self.latitude), math.radians(self.longitude)
        lat2, lon2 = math.radians(other.latitude), math.radians(other.longitude)

        dlat = lat2 - lat1
        dlon = lon2 - lon1
        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        c = 2 * math.asin(math.sqrt(a))

        return c * EARTH_RADIUS_NM


@dataclass(frozen=True)
class WaypointEntry:
    """A navigation fix within a leg.

    Restrictions use ``NO_RESTRICTION`` (-1) when the fix carries none.

    Attributes:
        name: Lowercase fix identifier, unique within a leg
        position: Resolved position, or None if the fix could not be resolved
        altitude_restriction: Altitude restriction in feet MSL
        speed_restriction: Speed restriction in knots
        is_hold: True when the aircraft is to hold at this fix

    Examples:
        >>> entry = WaypointEntry(
        ...     name="kepec",
        ...     position=Position(36.1, -115.5),
        ...     altitude_restriction=12000,
        ...     speed_restriction=250,
        ... )
    """

    name: str
    position: Position | None = None
    altitude_restriction: float = NO_RESTRICTION
    speed_restriction: float = NO_RESTRICTION
    is_hold: bool = False

    @property
    def has_altitude_restriction(self) -> bool:
        return self.altitude_restriction != NO_RESTRICTION

    @property
    def has_speed_restriction(self) -> bool:
        return self.speed_restriction != NO_RESTRICTION

    def __str__(self) -> str:
        """Return string representation of waypoint.

        Returns:
            Name followed by any restrictions, e.g. ``kepec (A12000, S250)``
        """
        parts = []
        if self.has_altitude_restriction:
            parts.append(f"A{self.altitude_restriction:.0f}")
        if self.has_speed_restriction:
            parts.append(f"S{self.speed_restriction:.0f}")
        if self.is_hold:
            parts.append("HOLD")

        if parts:
            return f"{self.name} ({', '.join(parts)})"
        return self.name
