"""Tests for the navigation library."""

from pathlib import Path

import pytest

from atcfms.navigation.navdata import NavigationLibrary, NavigationLookupError
from atcfms.navigation.procedure import FlightPhase, ProcedureType
from atcfms.navigation.waypoint import NO_RESTRICTION, Position

REPO_ROOT = Path(__file__).parents[2]


class TestFixes:
    """Test fix lookups."""

    def test_add_and_find_fix(self):
        """Test fixes are stored lowercase and found case-insensitively."""
        library = NavigationLibrary()
        library.add_fix("COWBY", Position(36.1288, -114.2419))

        assert library.has_fix("cowby")
        assert library.has_fix("Cowby")
        assert library.find_fix("COWBY") == Position(36.1288, -114.2419)
        assert library.find_fix("BIKKR") is None

    def test_get_fix_waypoints(self, navigation_library):
        """Test a fix resolves to a single waypoint."""
        waypoints = navigation_library.get_fix_waypoints("COWBY")

        assert len(waypoints) == 1
        assert waypoints[0].name == "cowby"
        assert waypoints[0].position == Position(36.1288, -114.2419)
        assert waypoints[0].is_hold is False

    def test_get_fix_waypoints_hold(self, navigation_library):
        """Test a hold fix is flagged."""
        waypoints = navigation_library.get_fix_waypoints("bikkr", is_hold=True)

        assert waypoints[0].is_hold is True

    def test_unknown_fix(self, navigation_library):
        """Test an unknown fix raises a lookup error."""
        with pytest.raises(NavigationLookupError):
            navigation_library.get_fix_waypoints("nowhere")

    def test_lookup_error_is_lookup_error(self, navigation_library):
        """Test NavigationLookupError can be caught as LookupError."""
        with pytest.raises(LookupError):
            navigation_library.get_fix_waypoints("nowhere")


class TestStarExpansion:
    """Test STAR expansion."""

    def test_star_with_runway(self, navigation_library):
        """Test entry transition, body and runway transition in order."""
        waypoints = navigation_library.get_procedure_waypoints(
            "dag", "kepec3", "klas", "19L", FlightPhase.ARRIVAL
        )

        assert [waypoint.name for waypoint in waypoints] == [
            "dag",
            "misen",
            "clarr",
            "skebr",
            "kepec",
            "ipumy",
            "nipzo",
            "sunst",
        ]

    def test_star_restrictions(self, navigation_library):
        """Test restrictions are carried onto waypoints."""
        waypoints = navigation_library.get_procedure_waypoints(
            "dag", "kepec3", "klas", "19l", FlightPhase.ARRIVAL
        )
        by_name = {waypoint.name: waypoint for waypoint in waypoints}

        assert by_name["kepec"].altitude_restriction == 12000
        assert by_name["kepec"].speed_restriction == 250
        assert by_name["skebr"].altitude_restriction == NO_RESTRICTION
        assert by_name["nipzo"].altitude_restriction == 9000

    def test_star_without_runway(self, navigation_library):
        """Test the runway transition is optional for a STAR."""
        waypoints = navigation_library.get_procedure_waypoints(
            "tnp", "kepec3", "klas", None, FlightPhase.ARRIVAL
        )

        assert [waypoint.name for waypoint in waypoints] == [
            "tnp",
            "misen",
            "clarr",
            "skebr",
            "kepec",
        ]

    def test_star_unknown_entry(self, navigation_library):
        """Test an unknown entry transition."""
        with pytest.raises(NavigationLookupError, match="entry"):
            navigation_library.get_procedure_waypoints(
                "cowby", "kepec3", "klas", "19l", FlightPhase.ARRIVAL
            )

    def test_star_unknown_exit(self, navigation_library):
        """Test the exit must be the procedure's airport."""
        with pytest.raises(NavigationLookupError, match="exit"):
            navigation_library.get_procedure_waypoints(
                "dag", "kepec3", "kphx", "19l", FlightPhase.ARRIVAL
            )

    def test_star_wrong_phase(self, navigation_library):
        """Test a STAR cannot be flown by a departure."""
        with pytest.raises(NavigationLookupError):
            navigation_library.get_procedure_waypoints(
                "dag", "kepec3", "klas", "19l", FlightPhase.DEPARTURE
            )


class TestSidExpansion:
    """Test SID expansion."""

    def test_sid(self, navigation_library):
        """Test runway transition, body and exit transition in order."""
        waypoints = navigation_library.get_procedure_waypoints(
            "klas", "cowby6", "gup", "25r", FlightPhase.DEPARTURE
        )

        assert [waypoint.name for waypoint in waypoints] == ["_rwy25r02", "boach", "cowby", "gup"]

    def test_sid_unresolved_fix_has_no_position(self, navigation_library):
        """Test procedure fixes missing from the library have no position."""
        waypoints = navigation_library.get_procedure_waypoints(
            "klas", "cowby6", "gup", "25r", FlightPhase.DEPARTURE
        )

        assert waypoints[0].position is None
        assert waypoints[0].altitude_restriction == 3000
        assert waypoints[1].position is not None

    def test_sid_entry_may_be_runway(self, navigation_library):
        """Test the runway is accepted as SID entry."""
        waypoints = navigation_library.get_procedure_waypoints(
            "07l", "cowby6", "drk", "07L", FlightPhase.DEPARTURE
        )

        assert waypoints[0].name == "_rwy07l02"
        assert waypoints[-1].name == "drk"

    def test_sid_unknown_runway(self, navigation_library):
        """Test a SID requires a runway it has a transition for."""
        with pytest.raises(NavigationLookupError, match="runway"):
            navigation_library.get_procedure_waypoints(
                "klas", "cowby6", "gup", "19l", FlightPhase.DEPARTURE
            )

    def test_sid_unknown_exit(self, navigation_library):
        """Test an unknown exit transition."""
        with pytest.raises(NavigationLookupError, match="exit"):
            navigation_library.get_procedure_waypoints(
                "klas", "cowby6", "dag", "25r", FlightPhase.DEPARTURE
            )

    def test_sid_wrong_phase(self, navigation_library):
        """Test a SID cannot be flown by an arrival."""
        with pytest.raises(NavigationLookupError):
            navigation_library.get_procedure_waypoints(
                "klas", "cowby6", "gup", "25r", FlightPhase.ARRIVAL
            )

    def test_unknown_procedure(self, navigation_library):
        """Test an unknown procedure."""
        with pytest.raises(NavigationLookupError, match="procedure"):
            navigation_library.get_procedure_waypoints(
                "dag", "nope1", "klas", "19l", FlightPhase.ARRIVAL
            )


class TestLoadFromYaml:
    """Test loading navigation data from YAML."""

    def test_load_sample_data(self):
        """Test the bundled Las Vegas data loads."""
        library = NavigationLibrary()
        count = library.load_from_yaml(REPO_ROOT / "data" / "navigation" / "las.yaml")

        assert count == library.count()
        assert library.has_fix("kepec")
        assert library.find_procedure("KEPEC3").type == ProcedureType.STAR
        assert library.find_procedure("cowby6").airport == "klas"
        assert library.find_fix("klas").elevation_ft == 2181

    def test_load_minimal_file(self, tmp_path):
        """Test loading a small file."""
        yaml_file = tmp_path / "nav.yaml"
        yaml_file.write_text(
            "airport: kabc\n"
            "fixes:\n"
            "  ALPHA: [10.0, 20.0]\n"
            "  BRAVO: [11.0, 21.0, 500]\n"
            "procedures:\n"
            "  ALPHA1:\n"
            "    type: star\n"
            "    entry_points: {ALPHA: [ALPHA]}\n"
            "    body: [[BRAVO, A50]]\n"
        )

        library = NavigationLibrary()
        assert library.load_from_yaml(yaml_file) == 3

        waypoints = library.get_procedure_waypoints(
            "alpha", "alpha1", "kabc", None, FlightPhase.ARRIVAL
        )
        assert [waypoint.name for waypoint in waypoints] == ["alpha", "bravo"]
        assert waypoints[1].altitude_restriction == 5000

    def test_load_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            NavigationLibrary().load_from_yaml(tmp_path / "missing.yaml")

    def test_load_bad_coordinates(self, tmp_path):
        """Test malformed fix coordinates raise ValueError."""
        yaml_file = tmp_path / "nav.yaml"
        yaml_file.write_text("fixes:\n  ALPHA: [10.0]\n")

        with pytest.raises(ValueError):
            NavigationLibrary().load_from_yaml(yaml_file)

    def test_load_bad_root(self, tmp_path):
        """Test a non-mapping root raises ValueError."""
        yaml_file = tmp_path / "nav.yaml"
        yaml_file.write_text("- ALPHA\n- BRAVO\n")

        with pytest.raises(ValueError):
            NavigationLibrary().load_from_yaml(yaml_file)

    def test_clear(self, navigation_library):
        """Test clearing the library."""
        navigation_library.clear()

        assert navigation_library.count() == 0
