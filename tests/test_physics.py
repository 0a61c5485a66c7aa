"""
Perturbation physics tests: Kepler propagation, third-body tidal pull,
atmospheric drag band, J2 acceleration and precession, shadow cones and
solar radiation pressure.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from orbit_overlay.core import physics
from orbit_overlay.core.config import PHYSICS_CFG
from orbit_overlay.core.physics import ShadowCondition, ShadowType


EARTH_RADIUS = 6_371_000.0
EARTH_MU = PHYSICS_CFG.gravitational_constant * 5.972e24
EARTH_J2 = 1.08263e-3
SUN_ON_X = np.array([PHYSICS_CFG.au, 0.0])


# =============================================================================
# Kepler propagation
# =============================================================================

class TestKepler:

    def test_solve_kepler_satisfies_equation(self):
        for e in (0.0, 0.3, 0.9):
            M = 1.2
            E = physics.solve_kepler(M, e)
            assert E - e * math.sin(E) == pytest.approx(M, abs=1e-9)

    def test_true_anomaly_survives_mean_conversion(self):
        nu = 1.0
        M = physics.mean_from_true(nu, 0.3)
        assert physics.true_from_mean(M, 0.3) == pytest.approx(nu, abs=1e-9)

    def test_circular_speed(self):
        a = EARTH_RADIUS + 400_000.0
        v = physics.velocity_from_elements(a, 0.0, 0.0, 0.0, 0.0, 0.3, EARTH_MU)
        assert np.linalg.norm(v) == pytest.approx(math.sqrt(EARTH_MU / a), rel=1e-12)

    def test_periapsis_radius(self):
        a, e = 10_000_000.0, 0.2
        r = physics.position_from_elements(a, e, 0.0, 0.0, 0.0, 0.0)
        assert_allclose(r, [a * (1 - e), 0.0, 0.0], atol=1e-6)

    def test_inclination_lifts_orbit_out_of_plane(self):
        r = physics.position_from_elements(7e6, 0.0, math.radians(90.0), 0.0, 0.0, math.pi / 2)
        assert r[2] == pytest.approx(7e6, rel=1e-12)


# =============================================================================
# Third-body gravity
# =============================================================================

class TestThirdBody:

    def test_zero_at_primary_centre(self):
        moon = physics.moon_position(0.0)
        acc = physics.third_body_acceleration(np.zeros(2), moon, PHYSICS_CFG.moon_mu)
        assert_allclose(acc, [0.0, 0.0], atol=1e-20)

    def test_points_toward_body_on_near_side(self):
        body = np.array([384_400_000.0, 0.0])
        acc = physics.third_body_acceleration(np.array([7e6, 0.0]), body, PHYSICS_CFG.moon_mu)
        assert acc[0] > 0.0
        assert abs(acc[1]) < 1e-20

    def test_lunar_tidal_magnitude_in_leo(self):
        acc = physics.lunar_acceleration(np.array([7e6, 0.0, 0.0]), 0.0)
        assert 1e-7 < np.linalg.norm(acc) < 5e-6

    def test_ephemeris_distances(self):
        assert np.linalg.norm(physics.moon_position(1e6)) == pytest.approx(PHYSICS_CFG.moon_distance)
        assert np.linalg.norm(physics.sun_position(1e6)) == pytest.approx(PHYSICS_CFG.au)


# =============================================================================
# Drag
# =============================================================================

class TestDrag:

    def test_positive_inside_band(self):
        acc = physics.drag_acceleration(EARTH_RADIUS + 400_000.0, 7670.0, EARTH_RADIUS)
        assert acc > 0.0

    @pytest.mark.parametrize("altitude", [50_000.0, 1_500_000.0])
    def test_zero_outside_band(self, altitude):
        assert physics.drag_acceleration(EARTH_RADIUS + altitude, 7670.0, EARTH_RADIUS) == 0.0

    def test_density_decreases_with_altitude(self):
        assert physics.atmospheric_density(100_000.0) > physics.atmospheric_density(200_000.0)
        assert physics.atmospheric_density(2_000_000.0) == 0.0


# =============================================================================
# J2
# =============================================================================

class TestJ2:

    def test_equatorial_acceleration_points_inward(self):
        acc = physics.j2_acceleration(np.array([7e6, 0.0, 0.0]), EARTH_MU, EARTH_RADIUS, EARTH_J2)
        assert acc[0] < 0.0
        assert acc[2] == 0.0

    def test_iss_nodal_regression(self):
        nodal, _ = physics.j2_rates(6.78e6, 0.0005, math.radians(51.6), EARTH_MU, EARTH_RADIUS, EARTH_J2)
        assert -5.5 < nodal < -4.5

    def test_polar_orbit_has_no_nodal_drift(self):
        nodal, _ = physics.j2_rates(7e6, 0.0, math.radians(90.0), EARTH_MU, EARTH_RADIUS, EARTH_J2)
        assert abs(nodal) < 1e-9

    def test_latitude(self):
        assert physics.latitude(np.array([1.0, 0.0, 1.0])) == pytest.approx(math.pi / 4)
        assert physics.latitude(np.zeros(3)) == 0.0


# =============================================================================
# Shadow and SRP
# =============================================================================

class TestShadow:

    def test_sunward_side_is_lit(self):
        cond = physics.shadow_condition(np.array([7e6, 0.0, 0.0]), SUN_ON_X, EARTH_RADIUS)
        assert cond.shadow_type is ShadowType.DIRECT_SUNLIGHT
        assert cond.lighting_factor == 1.0

    def test_behind_body_is_umbra(self):
        cond = physics.shadow_condition(np.array([-7e6, 0.0, 0.0]), SUN_ON_X, EARTH_RADIUS)
        assert cond.shadow_type is ShadowType.UMBRAL
        assert cond.lighting_factor == 0.0

    def test_limb_is_penumbra(self):
        cond = physics.shadow_condition(np.array([-7e6, EARTH_RADIUS, 0.0]), SUN_ON_X, EARTH_RADIUS)
        assert cond.shadow_type is ShadowType.PENUMBRA
        assert 0.0 < cond.lighting_factor < 1.0

    def test_far_off_axis_is_lit(self):
        cond = physics.shadow_condition(np.array([-7e6, 2 * EARTH_RADIUS, 0.0]), SUN_ON_X, EARTH_RADIUS)
        assert cond.shadow_type is ShadowType.DIRECT_SUNLIGHT

    def test_descriptions(self):
        assert ShadowType.UMBRAL.description == "Umbra (Complete Shadow)"


class TestSRP:

    def test_direct_magnitude_and_direction(self):
        sat = np.array([7e6, 0.0, 0.0])
        acc = physics.srp_acceleration(sat, SUN_ON_X, ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0))
        assert np.linalg.norm(acc) == pytest.approx(9.08e-8, rel=1e-2)
        assert acc[0] < 0.0

    def test_zero_in_umbra(self):
        acc = physics.srp_acceleration(
            np.array([-7e6, 0.0, 0.0]), SUN_ON_X, ShadowCondition(ShadowType.UMBRAL, 0.0)
        )
        assert_allclose(acc, np.zeros(3))

    def test_penumbra_scales_with_lighting(self):
        sat = np.array([7e6, 0.0, 0.0])
        full = physics.srp_acceleration(sat, SUN_ON_X, ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0))
        half = physics.srp_acceleration(sat, SUN_ON_X, ShadowCondition(ShadowType.PENUMBRA, 0.5))
        assert_allclose(half, 0.5 * full)

    def test_solar_cycle_bounds(self):
        assert physics.solar_cycle_variation(0.0) == pytest.approx(1.0)
        quarter = PHYSICS_CFG.solar_cycle_period / 4
        assert physics.solar_cycle_variation(quarter) == pytest.approx(1.0 + PHYSICS_CFG.solar_cycle_amplitude)
