"""Text overlays: orbital info readout and the effects legend."""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import pygame

from orbit_overlay.core.config import RENDER_CFG, RenderCfg
from orbit_overlay.core.model import EffectFlags, Simulation
from orbit_overlay.core.physics import ShadowType, atmospheric_density

from .assets import Color, get_text_surface

TextLine = tuple[str, tuple[int, int, int]]

_EFFECT_LABELS = {
    "lunar": "Lunar",
    "solar": "Solar",
    "drag": "Drag",
    "j2": "J2",
    "srp": "Radiation",
}


def _angle_deg(vec: np.ndarray) -> float:
    return math.degrees(math.atan2(float(vec[1]), float(vec[0]))) % 360.0


def build_info_lines(simulation: Simulation) -> list[str]:
    sat = simulation.satellite
    if sat is None:
        return [f"{simulation.body.name}: no satellite"]
    effects = simulation.effects
    body = simulation.body

    position = sat.position_3d()
    velocity = sat.velocity_3d()
    r = float(np.linalg.norm(position))
    speed = float(np.linalg.norm(velocity))
    altitude_km = (r - body.radius) / 1000.0
    energy = 0.5 * speed * speed - body.mu / r
    angular_momentum = float(np.linalg.norm(np.cross(position, velocity)))
    v_radial = float(np.dot(position, velocity)) / r
    flight_path = math.degrees(math.asin(max(-1.0, min(1.0, v_radial / speed)))) if speed > 0.0 else 0.0

    lines = [
        f"{body.name} Altitude: {altitude_km:.1f} km",
        f"Velocity: {speed / 1000.0:.2f} km/s",
        f"Period: {sat.period() / 3600.0:.2f} hours",
        f"True Anomaly: {math.degrees(sat.true_anomaly):.1f}°",
        f"Specific Energy: {energy / 1e6:.2f} MJ/kg",
        f"Angular Momentum: {angular_momentum:.2e} m²/s",
        f"Flight Path Angle: {flight_path:.2f}°",
    ]

    if effects.lunar:
        lunar = float(np.linalg.norm(simulation.lunar_acceleration()))
        lines.append(f"Lunar Acceleration: {lunar:.3e} m/s²")
    if effects.solar:
        solar = float(np.linalg.norm(simulation.solar_acceleration()))
        lines.append(f"Solar Acceleration: {solar:.3e} m/s²")
    if effects.drag:
        drag = sat.drag_acceleration()
        if drag > 0.0:
            density = atmospheric_density(altitude_km * 1000.0, sat.cfg)
            lines.append(f"Drag Acceleration: {drag:.3e} m/s²")
            lines.append(f"Atmospheric Density: {density:.3e} kg/m³")
        else:
            lines.append("Drag: N/A (outside atmosphere)")
    if effects.j2:
        j2 = float(np.linalg.norm(sat.j2_acceleration()))
        nodal, apsidal = sat.j2_rates()
        lines.append(f"J2 Acceleration: {j2:.3e} m/s²")
        lines.append(f"Nodal Precession: {nodal:.3f}°/day")
        lines.append(f"Apsidal Precession: {apsidal:.3f}°/day")
    if effects.srp:
        sun = simulation.sun_position()
        condition = sat.shadow_condition(sun)
        srp = float(np.linalg.norm(sat.srp_acceleration(sun, simulation.time)))
        lines.append(f"Solar Radiation Pressure: {srp:.3e} m/s²")
        lines.append(f"Shadow Condition: {condition.shadow_type.description}")
        if condition.shadow_type is ShadowType.PENUMBRA:
            lines.append(f"Lighting Factor: {condition.lighting_factor:.3f}")
        if srp <= 0.0:
            lines.append("SRP: N/A (in shadow)")

    if effects.lunar:
        lines.append(f"Moon Position: {_angle_deg(simulation.moon_position()):.1f}°")
    if effects.solar:
        lines.append(f"Sun Position: {_angle_deg(simulation.sun_position()):.1f}°")
    return lines


def build_effects_legend(flags: EffectFlags, render_cfg: RenderCfg = RENDER_CFG) -> list[TextLine]:
    active = flags.active()
    if not active:
        return []
    status = " + ".join(_EFFECT_LABELS[name] for name in active) + " Effects: ON"
    lines: list[TextLine] = [(status, render_cfg.legend_status_color)]
    if flags.lunar:
        lines.append(("Moon-dominated gravity", render_cfg.lunar_vector_color))
    if flags.solar:
        lines.append(("Sun-dominated gravity", render_cfg.solar_vector_color))
    if flags.drag:
        lines.append(("Atmospheric drag", render_cfg.drag_style.color))
    if flags.j2:
        lines.append(("J2 oblateness", render_cfg.j2_style.color))
    if flags.srp:
        lines.append(("Solar radiation pressure", render_cfg.srp_direct_color))
    return lines


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[TextLine],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    width = max(font.size(text)[0] for text, _ in lines) + padding_x * 2
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(
        panel_surface,
        background_color,
        panel_surface.get_rect(),
        border_radius=12,
    )
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        text_surf = get_text_surface(font, text, color)
        panel_surface.blit(text_surf, (padding_x, padding_y + idx * line_height))
    return panel_surface


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    simulation: Simulation,
    *,
    zoom: float,
    time_warp: float,
    render_cfg: RenderCfg = RENDER_CFG,
) -> None:
    info = [(text, render_cfg.hud_text_color) for text in build_info_lines(simulation)]
    panel = build_text_panel(font, info, background_color=render_cfg.hud_background_color)
    surface.blit(panel, (10, 10))

    width, height = surface.get_size()
    status = [
        (f"Zoom: {zoom:.2f}x  Warp: {time_warp:.0f}x", render_cfg.legend_text_color),
        *build_effects_legend(simulation.effects, render_cfg),
    ]
    legend = build_text_panel(font, status, background_color=render_cfg.hud_background_color)
    surface.blit(legend, legend.get_rect(topright=(width - 10, 10)))

    hint = get_text_surface(
        font,
        "1-5 toggle effects, wheel: zoom, drag: pan, space: pause",
        render_cfg.legend_text_color,
    )
    surface.blit(hint, hint.get_rect(bottomright=(width - 10, height - 10)))


__all__ = [
    "build_effects_legend",
    "build_info_lines",
    "build_text_panel",
    "draw_hud",
]
