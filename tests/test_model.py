"""
Simulation model: viewport mapping, orbit parameters, effect flags,
satellite propagation and the bundled body and scenario presets.
"""

import math

import numpy as np
import pytest

from orbit_overlay.core.model import (
    EFFECT_NAMES,
    EffectFlags,
    OrbitParameters,
    Satellite,
    Simulation,
    Viewport,
)
from orbit_overlay.data.bodies import (
    BODIES,
    SCENARIO_DISPLAY_ORDER,
    get_body,
    get_scenario,
)


# =============================================================================
# Viewport
# =============================================================================

class TestViewport:

    def test_world_to_screen_flips_y(self):
        viewport = Viewport(500, 400, 1e-5, 2.0)
        assert viewport.ppm == pytest.approx(2e-5)
        assert viewport.world_to_screen(1e6, 1e6) == (520, 380)

    @pytest.mark.parametrize("scale, zoom", [(0.0, 1.0), (-1.0, 1.0), (1e-5, 0.0)])
    def test_rejects_non_positive(self, scale, zoom):
        with pytest.raises(ValueError):
            Viewport(0, 0, scale, zoom)


# =============================================================================
# Orbit parameters
# =============================================================================

class TestOrbitParameters:

    def test_semi_minor_axis(self):
        orbit = OrbitParameters(semi_major_axis=1e7, eccentricity=0.6)
        assert orbit.semi_minor_axis == pytest.approx(8e6)
        assert orbit.focus_offset == pytest.approx(6e6)

    @pytest.mark.parametrize("a, e", [(0.0, 0.1), (1e7, 1.0), (1e7, -0.1)])
    def test_invalid(self, a, e):
        with pytest.raises(ValueError):
            OrbitParameters(semi_major_axis=a, eccentricity=e)


# =============================================================================
# Effect flags
# =============================================================================

class TestEffectFlags:

    def test_toggle_returns_new_state(self):
        flags = EffectFlags()
        assert flags.toggle("drag") is True
        assert flags.active() == ["drag"]
        assert flags.toggle("drag") is False
        assert flags.active() == []

    def test_from_names_keeps_canonical_order(self):
        flags = EffectFlags.from_names(["srp", "lunar"])
        assert flags.active() == ["lunar", "srp"]

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            EffectFlags().toggle("tides")
        with pytest.raises(KeyError):
            EffectFlags.from_names(["lunar", "tides"])

    def test_names(self):
        assert EFFECT_NAMES == ("lunar", "solar", "drag", "j2", "srp")


# =============================================================================
# Satellite and simulation
# =============================================================================

class TestSatellite:

    def test_invalid_elements(self, earth):
        with pytest.raises(ValueError):
            Satellite(body=earth, semi_major_axis=7e6, eccentricity=1.2)

    def test_full_period_returns_to_start(self, earth):
        sat = Satellite(body=earth, semi_major_axis=1.2e7, eccentricity=0.4, true_anomaly=0.5)
        start = sat.position_3d()
        sat.advance(sat.period())
        np.testing.assert_allclose(sat.position_3d(), start, rtol=1e-6, atol=1.0)

    def test_altitude_of_leo_scenario(self, earth):
        sat = get_scenario("leo").build_satellite(earth)
        assert sat.altitude() == pytest.approx(400_000.0, rel=1e-6)

    def test_leo_feels_drag_geo_does_not(self, earth):
        assert get_scenario("leo").build_satellite(earth).drag_acceleration() > 0.0
        assert get_scenario("geo").build_satellite(earth).drag_acceleration() == 0.0


class TestSimulation:

    def test_step_advances_time(self, leo_simulation):
        anomaly = leo_simulation.satellite.true_anomaly
        leo_simulation.step(60.0)
        assert leo_simulation.time == 60.0
        assert leo_simulation.satellite.true_anomaly != anomaly

    def test_paused_step_is_noop(self, leo_simulation):
        leo_simulation.paused = True
        leo_simulation.step(60.0)
        assert leo_simulation.time == 0.0

    def test_orbit_parameters_combine_angles(self, earth):
        sat = Satellite(
            body=earth,
            semi_major_axis=8e6,
            eccentricity=0.1,
            argument_of_periapsis=0.3,
            longitude_of_ascending_node=0.2,
        )
        orbit = Simulation(body=earth, satellite=sat).orbit_parameters()
        assert orbit.periapsis_angle == pytest.approx(0.5)

    def test_without_satellite(self, earth):
        sim = Simulation(body=earth, satellite=None)
        assert sim.orbit_parameters() is None
        np.testing.assert_allclose(sim.lunar_acceleration(), np.zeros(2))


# =============================================================================
# Presets
# =============================================================================

class TestPresets:

    def test_earth_preset(self, earth):
        assert earth.name == "Earth"
        assert earth.mu == pytest.approx(3.986e14, rel=1e-3)

    def test_every_body_builds(self):
        for key in BODIES:
            body = get_body(key)
            assert body.radius > 0.0
            assert body.mu > 0.0

    def test_lookup_is_case_insensitive(self):
        assert get_body("MARS").name == "Mars"

    def test_unknown_keys(self):
        with pytest.raises(KeyError, match="earth"):
            get_body("vulcan")
        with pytest.raises(KeyError, match="leo"):
            get_scenario("halo")

    def test_scenarios_build_valid_satellites(self, earth):
        for key in SCENARIO_DISPLAY_ORDER:
            scenario = get_scenario(key)
            sat = scenario.build_satellite(earth)
            periapsis = sat.semi_major_axis * (1 - sat.eccentricity)
            assert periapsis - earth.radius == pytest.approx(scenario.altitude_periapsis)
            assert sat.inclination == pytest.approx(math.radians(scenario.inclination_deg))
