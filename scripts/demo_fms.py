#!/usr/bin/env python3
"""FMS route walk demo.

Builds an arriving Boeing 737-800 on ``cowby..bikkr..dag.kepec3.klas`` into
runway 19L at Las Vegas, then sequences through every waypoint, logging the
target altitude, heading and speed the FMS resolves at each one. Halfway
through, a controller-style altitude hold is applied.

Usage:
    python scripts/demo_fms.py [route]
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from atcfms.aircraft import AircraftTypeDefinition
from atcfms.avionics import FlightManagementSystem
from atcfms.core.config import ConfigLoader
from atcfms.core.logging_system import get_logger, initialize_logging
from atcfms.navigation import NavigationLibrary

ROOT = Path(__file__).parent.parent
DEFAULT_ROUTE = "cowby..bikkr..dag.kepec3.klas"

logger = get_logger(__name__)


def main() -> int:
    initialize_logging(ROOT / "config" / "logging.yaml")

    library = NavigationLibrary()
    library.load_from_yaml(ROOT / "data" / "navigation" / "las.yaml")
    b738 = AircraftTypeDefinition.load(ROOT / "config" / "aircraft" / "b738.yaml")
    config = ConfigLoader.with_defaults(ROOT / "config" / "fms.yaml")

    route = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_ROUTE
    fms = FlightManagementSystem(
        {"route": route, "category": "arrival"}, "19l", b738, library, config
    )
    fms.update_modes_for_arrival()

    logger.info("=== FMS demo: %s ===", fms.current_route)

    step = 0
    while True:
        waypoint = fms.current_waypoint
        logger.info(
            "%-10s alt=%-6.0f hdg=%-5.0f spd=%-4.0f remaining=%s",
            waypoint.name,
            fms.get_altitude(),
            fms.get_heading(),
            fms.get_speed(),
            fms.current_route,
        )

        if step == 3:
            fms.set_altitude_hold(9000)
            logger.info("ATC: maintain 9000")

        if fms.is_route_complete:
            break

        fms.next_waypoint()
        step += 1

    logger.info("Route complete at %s", fms.current_waypoint.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
