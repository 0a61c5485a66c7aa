"""Configuration dataclasses for the orbit overlay."""
from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PhysicsCfg:
    gravitational_constant: float = 6.67430e-11
    moon_mass: float = 7.342e22
    moon_radius: float = 1_737_400.0
    moon_distance: float = 384_400_000.0
    moon_period: float = 29.530 * 24 * 3600
    moon_initial_angle_deg: float = 84.7
    sun_mass: float = 1.989e30
    sun_radius: float = 695_700_000.0
    sun_period: float = 365.25 * 24 * 3600
    sun_initial_angle_deg: float = 0.0
    au: float = 149_597_870_700.0
    solar_constant: float = 1361.0
    speed_of_light: float = 299_792_458.0
    solar_cycle_period: float = 11.0 * 365.25 * 24 * 3600
    solar_cycle_amplitude: float = 0.034
    drag_coefficient: float = 2.2
    satellite_area: float = 10.0
    satellite_mass: float = 1000.0
    sea_level_density: float = 1.225
    scale_height: float = 8500.0
    drag_min_altitude: float = 80_000.0
    drag_max_altitude: float = 1_000_000.0
    reflectivity: float = 0.6
    diffuse_reflection_factor: float = 2.0 / 3.0
    kepler_tolerance: float = 1e-10
    kepler_max_iterations: int = 50

    @property
    def moon_mu(self) -> float:
        return self.gravitational_constant * self.moon_mass

    @property
    def sun_mu(self) -> float:
        return self.gravitational_constant * self.sun_mass


@dataclass(frozen=True)
class VectorStyle:
    """Length scaling and stroke for one perturbation arrow."""

    color: tuple[int, int, int]
    base_length: float
    scale_factor: float
    threshold: float
    min_length: float
    max_length: float
    width: int = 4


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    background_color: tuple[int, int, int] = (4, 10, 24)
    fps: int = 60
    font_names: tuple[str, ...] = ("DejaVu Sans", "Arial", "Helvetica")
    label_font_size: int = 12
    hud_font_size: int = 14
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.55))
    legend_status_color: tuple[int, int, int] = (255, 230, 90)
    legend_text_color: tuple[int, int, int] = (120, 230, 255)
    base_scale: float = 5e-6
    min_zoom: float = 0.01
    max_zoom: float = 200.0
    zoom_step: float = 1.2
    zoom_smoothing: float = 0.2
    body_icon_radius: int = 4
    image_min_pixels: int = 6
    moon_color: tuple[int, int, int] = (192, 192, 192)
    moon_outline_color: tuple[int, int, int] = (255, 255, 255)
    moon_image_filename: str = "moon.png"
    moon_visual_orbit_radii: float = 8.0
    moon_orbit_ring_color: tuple[int, int, int, int] = (128, 128, 128, 50)
    moon_link_color: tuple[int, int, int, int] = (255, 255, 255, 40)
    sun_color: tuple[int, int, int] = (255, 200, 40)
    sun_line_width: int = 3
    sun_arrow_min_distance: float = 50.0
    satellite_min_image_size: int = 8
    orbit_color: tuple[int, int, int, int] = (255, 255, 255, 80)
    orbit_dash_length: float = 5.0
    orbit_samples: int = 360
    trail_color: tuple[int, int, int, int] = (255, 255, 0, 100)
    trail_max_length: int = 500
    trail_max_rendered_points: int = 400
    arrow_head_angle: float = math.pi / 7
    arrow_head_fraction: float = 0.015
    arrow_head_max_ratio: float = 0.4
    arrow_head_width: int = 3
    origin_dot_radius: int = 3
    label_offset_x: int = 10
    label_offset_y: int = 5
    label_top_margin: int = 15
    label_line_spacing: int = 2
    lunar_vector_color: tuple[int, int, int] = (110, 160, 255)
    solar_vector_color: tuple[int, int, int] = (255, 210, 80)
    gravity_style: VectorStyle = field(
        default_factory=lambda: VectorStyle(
            color=(110, 160, 255),
            base_length=100.0,
            scale_factor=15.0,
            threshold=1e-6,
            min_length=40.0,
            max_length=300.0,
        )
    )
    drag_style: VectorStyle = field(
        default_factory=lambda: VectorStyle(
            color=(170, 170, 170),
            base_length=80.0,
            scale_factor=20.0,
            threshold=1e-4,
            min_length=30.0,
            max_length=200.0,
        )
    )
    j2_style: VectorStyle = field(
        default_factory=lambda: VectorStyle(
            color=(80, 220, 120),
            base_length=90.0,
            scale_factor=18.0,
            threshold=1e-4,
            min_length=30.0,
            max_length=250.0,
        )
    )
    srp_style: VectorStyle = field(
        default_factory=lambda: VectorStyle(
            color=(255, 165, 0),
            base_length=70.0,
            scale_factor=20.0,
            threshold=1e-8,
            min_length=30.0,
            max_length=220.0,
        )
    )
    srp_direct_color: tuple[int, int, int] = (255, 165, 0)
    srp_penumbra_color: tuple[int, int, int] = (200, 130, 40)
    srp_umbral_color: tuple[int, int, int] = (90, 70, 50)
    j2_equator_band_deg: float = 2.3
    j2_high_latitude_deg: float = 75.0
    log_every_frames: int = 30


PHYSICS_CFG = PhysicsCfg()
RENDER_CFG = RenderCfg()


__all__ = ["PHYSICS_CFG", "RENDER_CFG", "PhysicsCfg", "RenderCfg", "VectorStyle"]
