"""Route string parsing and formatting.

A route string is the compact textual form of a flight route. Segments are
joined with ``..`` and each segment becomes one leg:

- ``cowby``: fly direct to a fix
- ``@bikkr``: hold at a fix
- ``dag.kepec3.klas``: fly a procedure from an entry fix to an exit fix

Typical usage:
    from atcfms.navigation.route_string import RouteStringCodec

    segments = RouteStringCodec.parse("cowby..bikkr..dag.kepec3.klas")
    # ['cowby', 'bikkr', 'dag.kepec3.klas']
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)

SEGMENT_DELIMITER = ".."
PROCEDURE_DELIMITER = "."
HOLD_MARKER = "@"

_NAME_PATTERN = re.compile(r"^[a-z0-9_#]+$")


class MalformedRouteError(ValueError):
    """Raised when a route string cannot be parsed."""


class LegType(Enum):
    """Kind of leg a route segment describes.

    Attributes:
        DIRECT: Single fix flown direct
        HOLD: Single fix to hold at
        PROCEDURE: Standard procedure (SID/STAR) expanded to many fixes
    """

    DIRECT = "direct"
    HOLD = "hold"
    PROCEDURE = "procedure"


@dataclass(frozen=True)
class RouteSegment:
    """A classified route segment.

    Attributes:
        leg_type: Kind of leg this segment produces
        fix_name: Fix name for direct and hold segments
        entry: Entry fix for procedure segments
        procedure: Procedure name for procedure segments
        exit: Exit fix for procedure segments
    """

    leg_type: LegType
    fix_name: str | None = None
    entry: str | None = None
    procedure: str | None = None
    exit: str | None = None

    @property
    def route_string(self) -> str:
        if self.leg_type == LegType.PROCEDURE:
            return PROCEDURE_DELIMITER.join((self.entry, self.procedure, self.exit))
        if self.leg_type == LegType.HOLD:
            return f"{HOLD_MARKER}{self.fix_name}"
        return self.fix_name


class HasRouteString(Protocol):
    """Anything that renders itself as a single route segment."""

    @property
    def route_string(self) -> str: ...


class RouteStringCodec:
    """Parses route strings into segments and formats legs back into one.

    Examples:
        >>> RouteStringCodec.parse("cowby..dag.kepec3.klas")
        ['cowby', 'dag.kepec3.klas']
        >>> RouteStringCodec.classify("dag.kepec3.klas").procedure
        'kepec3'
    """

    @staticmethod
    def parse(route_string: str) -> list[str]:
        """Split a route string into ordered, validated segments.

        Names are lowercased and surrounding whitespace is removed.

        Args:
            route_string: Route string such as ``cowby..dag.kepec3.klas``

        Returns:
            List of segments in flight order

        Raises:
            MalformedRouteError: If the string is empty or any segment is invalid
        """
        if not isinstance(route_string, str) or not route_string.strip():
            raise MalformedRouteError(f"Route string is empty: {route_string!r}")

        normalized = route_string.strip().lower()
        segments = [segment.strip() for segment in normalized.split(SEGMENT_DELIMITER)]

        for segment in segments:
            RouteStringCodec.classify(segment)

        logger.debug(
            "Parsed route %s into %d segments", SEGMENT_DELIMITER.join(segments), len(segments)
        )
        return segments

    @staticmethod
    def classify(segment: str) -> RouteSegment:
        """Classify a single route segment.

        Args:
            segment: One segment of a route string

        Returns:
            RouteSegment describing the leg to build

        Raises:
            MalformedRouteError: If the segment does not match the grammar
        """
        if not segment:
            raise MalformedRouteError("Route contains an empty segment")

        segment = segment.strip().lower()
        parts = segment.split(PROCEDURE_DELIMITER)

        if len(parts) == 3:
            for part in parts:
                _validate_name(part, segment)
            entry, procedure, exit_fix = parts
            return RouteSegment(
                leg_type=LegType.PROCEDURE, entry=entry, procedure=procedure, exit=exit_fix
            )

        if len(parts) != 1:
            raise MalformedRouteError(
                f"Segment '{segment}' must be a fix or entry.procedure.exit"
            )

        if segment.startswith(HOLD_MARKER):
            fix_name = segment[len(HOLD_MARKER):]
            _validate_name(fix_name, segment)
            return RouteSegment(leg_type=LegType.HOLD, fix_name=fix_name)

        _validate_name(segment, segment)
        return RouteSegment(leg_type=LegType.DIRECT, fix_name=segment)

    @staticmethod
    def format(legs: Iterable[HasRouteString]) -> str:
        """Join each leg's route string with the segment delimiter.

        Args:
            legs: Legs in flight order

        Returns:
            Route string for the whole sequence
        """
        return SEGMENT_DELIMITER.join(leg.route_string for leg in legs)


def _validate_name(name: str, segment: str) -> None:
    if not name:
        raise MalformedRouteError(f"Segment '{segment}' contains an empty name")
    if not _NAME_PATTERN.match(name):
        raise MalformedRouteError(f"Invalid name '{name}' in segment '{segment}'")
