"""Pytest configuration and fixtures for all tests."""

import pytest

from atcfms.aircraft.type_definition import AircraftTypeDefinition
from atcfms.navigation.navdata import NavigationLibrary
from atcfms.navigation.procedure import Procedure
from atcfms.navigation.waypoint import Position

FIXES = {
    "KLAS": Position(36.0801, -115.1522, 2181),
    "COWBY": Position(36.1288, -114.2419),
    "BIKKR": Position(35.8539, -114.9331),
    "DAG": Position(34.9624, -116.5781),
    "TNP": Position(34.1123, -115.7698),
    "MISEN": Position(35.1145, -116.2303),
    "CLARR": Position(35.4245, -115.7225),
    "SKEBR": Position(35.6153, -115.4561),
    "KEPEC": Position(35.7426, -115.3209),
    "IPUMY": Position(35.8603, -115.2056),
    "NIPZO": Position(35.9375, -115.1347),
    "SUNST": Position(35.9895, -115.1086),
    "GUP": Position(35.0973, -110.8024),
    "DRK": Position(34.7025, -112.4803),
    "BOACH": Position(36.2230, -114.9121),
}

KEPEC3 = {
    "type": "star",
    "airport": "klas",
    "entry_points": {
        "DAG": ["DAG", ["MISEN", "A170+"]],
        "TNP": ["TNP", ["MISEN", "A170+"]],
    },
    "body": [["CLARR", "A130+|S250"], "SKEBR", ["KEPEC", "A120|S250"]],
    "runways": {
        "19L": ["IPUMY", ["NIPZO", "A90|S210"], "SUNST"],
        "25L": ["IPUMY", ["NIPZO", "A80+|S210"]],
    },
}

COWBY6 = {
    "type": "sid",
    "airport": "klas",
    "runways": {
        "25R": [["_RWY25R02", "A30+"], "BOACH"],
        "07L": [["_RWY07L02", "A30+"], "BOACH"],
    },
    "body": [["COWBY", "A190+|S280"]],
    "exit_points": {"GUP": ["GUP"], "DRK": ["DRK"]},
}


@pytest.fixture
def navigation_library():
    """Navigation library with Las Vegas fixes, the KEPEC3 STAR and COWBY6 SID."""
    library = NavigationLibrary()

    for name, position in FIXES.items():
        library.add_fix(name, position)

    library.add_procedure(Procedure.from_dict("KEPEC3", KEPEC3))
    library.add_procedure(Procedure.from_dict("COWBY6", COWBY6))

    return library


@pytest.fixture
def b738():
    """Boeing 737-800 type definition."""
    return AircraftTypeDefinition.from_dict(
        {
            "name": "Boeing 737-800",
            "icao": "B738",
            "ceiling": 41000,
            "speed": {"min": 135, "landing": 145, "cruise": 460, "max": 502},
            "weightclass": "M",
            "category": "jet",
        }
    )
