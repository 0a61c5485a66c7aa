"""
Command line parsing and simulation setup for the interactive window.
"""

import argparse
import math

import pytest

from orbit_overlay.app import (
    build_parser,
    build_simulation,
    element_overrides,
    main,
    parse_effects,
    parse_size,
    scenario_help,
)
from orbit_overlay.core.config import RENDER_CFG


class TestParsing:

    def test_size(self):
        assert parse_size("800x600") == (800, 600)
        assert parse_size("1280X720") == (1280, 720)

    @pytest.mark.parametrize("text", ["800", "axb", "0x600"])
    def test_bad_size(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_size(text)

    def test_effects(self):
        assert parse_effects("drag, j2") == ["drag", "j2"]
        assert parse_effects("all") == ["lunar", "solar", "drag", "j2", "srp"]
        assert parse_effects("none") == []

    def test_unknown_effect(self):
        with pytest.raises(argparse.ArgumentTypeError, match="tides"):
            parse_effects("lunar,tides")

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.body == "earth"
        assert args.scenario == "leo"
        assert args.effects == []
        assert args.no_log is False

    def test_flags(self):
        args = build_parser().parse_args(
            ["--body", "mars", "--scenario", "molniya", "--effects", "j2,srp", "--size", "640x480", "--no-log"]
        )
        assert args.body == "mars"
        assert args.effects == ["j2", "srp"]
        assert args.size == (640, 480)
        assert args.no_log is True

    def test_unknown_body_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--body", "vulcan"])


def test_build_simulation():
    sim = build_simulation("mars", "iss", ["drag", "j2"])
    assert sim.body.name == "Mars"
    assert sim.effects.active() == ["drag", "j2"]
    assert sim.satellite.body is sim.body


# =============================================================================
# Custom orbital elements and trail length
# =============================================================================

class TestOrbitOverrides:

    def test_no_element_options(self):
        assert element_overrides(build_parser().parse_args([])) == {}

    def test_elements_override_scenario(self):
        args = build_parser().parse_args(
            ["--scenario", "leo", "--sma-km", "8000", "--ecc", "0.2", "--inc", "45", "--nu", "90"]
        )
        sim = build_simulation("earth", "leo", [], element_overrides(args))
        sat = sim.satellite
        assert sat.semi_major_axis == pytest.approx(8.0e6)
        assert sat.eccentricity == pytest.approx(0.2)
        assert sat.inclination == pytest.approx(math.radians(45.0))
        assert sat.true_anomaly == pytest.approx(math.pi / 2)
        assert sat.argument_of_periapsis == 0.0
        assert sat.longitude_of_ascending_node == 0.0

    def test_angles_in_degrees(self):
        args = build_parser().parse_args(["--argp", "180", "--raan", "-90"])
        assert element_overrides(args) == {
            "argument_of_periapsis": pytest.approx(math.pi),
            "longitude_of_ascending_node": pytest.approx(-math.pi / 2),
        }

    @pytest.mark.parametrize("overrides", [{"eccentricity": 1.2}, {"semi_major_axis": -1.0}])
    def test_invalid_elements_rejected(self, overrides):
        with pytest.raises(ValueError):
            build_simulation("earth", "leo", [], overrides)

    def test_invalid_elements_are_usage_errors(self, capsys):
        with pytest.raises(SystemExit):
            main(["--ecc", "1.5", "--no-log"])
        assert "eccentricity" in capsys.readouterr().err

    def test_trail_length(self):
        assert build_parser().parse_args([]).trail_length == RENDER_CFG.trail_max_length
        assert build_parser().parse_args(["--trail-length", "50"]).trail_length == 50

    @pytest.mark.parametrize("value", ["0", "-3", "long"])
    def test_bad_trail_length(self, value):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--trail-length", value])


def test_scenario_help_lists_descriptions():
    text = scenario_help()
    assert "geo: Geostationary ring, far above the atmosphere." in text
    assert "molniya: " in text
