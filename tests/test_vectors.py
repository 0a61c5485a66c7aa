"""
Vector annotation builders: gravity, drag, J2 and SRP arrows with labels.
"""

import math

import numpy as np
import pytest

from orbit_overlay.core import physics
from orbit_overlay.core.config import RENDER_CFG
from orbit_overlay.core.physics import ShadowCondition, ShadowType
from orbit_overlay.render.vectors import (
    build_drag_annotation,
    build_gravity_annotation,
    build_j2_annotation,
    build_srp_annotation,
    hemisphere_label,
    label_position,
    radial_tangential,
    shadow_color,
)


CANVAS = (1000, 800)
START = (400, 300)
EARTH_RADIUS = 6_371_000.0
EARTH_MU = physics.PHYSICS_CFG.gravitational_constant * 5.972e24


# =============================================================================
# Gravity
# =============================================================================

class TestGravityAnnotation:

    def test_lunar_only(self):
        ann = build_gravity_annotation(START, CANVAS, lunar=np.array([1e-5, 0.0]), solar=None)
        assert ann.color == RENDER_CFG.lunar_vector_color
        assert ann.lines == ("Lunar a: 1.00e-05 m/s²",)
        assert ann.length == pytest.approx(115.0)
        assert ann.end == (515, 300)
        assert ann.anchor == "left"
        assert ann.label_position == (525, 295)

    def test_dominant_contributor_sets_colour(self):
        ann = build_gravity_annotation(
            START, CANVAS, lunar=np.array([1e-7, 0.0]), solar=np.array([0.0, 4e-7])
        )
        assert ann.color == RENDER_CFG.solar_vector_color
        assert ann.lines[0].startswith("Solar a: ")
        assert ann.lines[1] == "Moon 1.0e-07 / Sun 4.0e-07"

    def test_points_up_for_positive_y(self):
        ann = build_gravity_annotation(START, CANVAS, lunar=np.array([0.0, 1e-5]), solar=None)
        assert ann.end[0] == START[0]
        assert ann.end[1] < START[1]

    def test_right_half_anchors_right(self):
        ann = build_gravity_annotation((700, 300), CANVAS, lunar=np.array([1e-5, 0.0]), solar=None)
        assert ann.anchor == "right"
        assert ann.label_position == (ann.end[0] - RENDER_CFG.label_offset_x, 295)

    def test_nothing_enabled(self):
        assert build_gravity_annotation(START, CANVAS, lunar=None, solar=None) is None

    def test_zero_vector(self):
        assert build_gravity_annotation(START, CANVAS, lunar=np.zeros(2), solar=None) is None


def test_label_pushed_below_top_margin():
    position, anchor = label_position((400, 300), (450, 12), CANVAS)
    assert anchor == "left"
    assert position == (460, 12 + RENDER_CFG.label_top_margin)


# =============================================================================
# Drag
# =============================================================================

class TestDragAnnotation:

    def test_opposes_velocity(self):
        ann = build_drag_annotation(START, CANVAS, drag_magnitude=1e-3, velocity=np.array([0.0, 7000.0, 0.0]))
        assert ann.end == (400, 400)
        assert ann.color == RENDER_CFG.drag_style.color
        assert ann.lines == ("Drag: 1.00e-03 m/s²",)

    def test_no_drag(self):
        assert build_drag_annotation(START, CANVAS, drag_magnitude=0.0, velocity=np.array([1.0, 0.0])) is None


# =============================================================================
# J2
# =============================================================================

class TestJ2Annotation:

    @pytest.mark.parametrize(
        "lat_deg, expected",
        [
            (1.0, "North (near equator)"),
            (-1.0, "South (near equator)"),
            (-40.0, "South"),
            (80.0, "North (high lat)"),
        ],
    )
    def test_hemisphere_label(self, lat_deg, expected):
        assert hemisphere_label(math.radians(lat_deg)) == expected

    def test_equatorial_labels(self):
        position = np.array([7e6, 0.0, 0.0])
        acc = physics.j2_acceleration(position, EARTH_MU, EARTH_RADIUS, 1.08263e-3)
        ann = build_j2_annotation(START, CANVAS, position=position, acceleration=acc)
        assert ann.color == RENDER_CFG.j2_style.color
        assert len(ann.lines) == 3
        assert ann.lines[1] == "Lat +0.0° North (near equator)"
        assert ann.lines[2].startswith("Rad -")
        assert ann.end[0] < START[0]

    def test_radial_tangential_split(self):
        radial, tangential = radial_tangential(np.array([1.0, 0.0, 0.0]), np.array([-2.0, 3.0, 5.0]))
        assert radial == pytest.approx(-2.0)
        assert tangential == pytest.approx(3.0)

    def test_pole_gets_marker(self):
        position = np.array([0.0, 0.0, 7e6])
        acc = physics.j2_acceleration(position, EARTH_MU, EARTH_RADIUS, 1.08263e-3)
        ann = build_j2_annotation(START, CANVAS, position=position, acceleration=acc)
        assert ann is not None
        assert ann.length == RENDER_CFG.j2_style.min_length
        assert ann.end == (START[0], START[1] - int(RENDER_CFG.j2_style.min_length))
        assert ann.lines[1] == "Lat +90.0° North (high lat)"
        assert ann.lines[2].startswith("Rad +")

    def test_zero_acceleration(self):
        assert build_j2_annotation(START, CANVAS, position=np.ones(3), acceleration=np.zeros(3)) is None


# =============================================================================
# SRP
# =============================================================================

class TestSRPAnnotation:

    def test_shadow_colours_are_distinct(self):
        colours = {shadow_color(kind) for kind in ShadowType}
        assert len(colours) == len(ShadowType)
        assert shadow_color(ShadowType.DIRECT_SUNLIGHT) == RENDER_CFG.srp_direct_color

    def test_direct_sunlight(self):
        sat = np.array([7e6, 0.0, 0.0])
        sun = np.array([physics.PHYSICS_CFG.au, 0.0])
        cond = ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)
        acc = physics.srp_acceleration(sat, sun, cond)
        ann = build_srp_annotation(
            START, CANVAS, position=sat, sun_position=sun, acceleration=acc, condition=cond
        )
        assert ann.color == RENDER_CFG.srp_direct_color
        assert ann.width == RENDER_CFG.srp_style.width
        assert ann.lines[1] == "Lit: 100% (Direct Sunlight)"
        assert ann.lines[2].startswith("Away:(-1.00,")
        assert ann.end[0] < START[0]

    def test_umbra_keeps_direction_at_min_length(self):
        sat = np.array([-7e6, 0.0, 0.0])
        sun = np.array([physics.PHYSICS_CFG.au, 0.0])
        cond = ShadowCondition(ShadowType.UMBRAL, 0.0)
        ann = build_srp_annotation(
            START, CANVAS, position=sat, sun_position=sun, acceleration=np.zeros(3), condition=cond
        )
        assert ann.color == RENDER_CFG.srp_umbral_color
        assert ann.length == RENDER_CFG.srp_style.min_length
        assert ann.end == (START[0] - int(RENDER_CFG.srp_style.min_length), START[1])
        assert ann.width == max(1, round(RENDER_CFG.srp_style.width * 0.5))
        assert ann.lines[0] == "SRP: 0.00e+00 m/s²"
        assert ann.lines[1] == "Lit: 0% (Umbra (Complete Shadow))"
