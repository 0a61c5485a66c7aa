"""Perturbation arrows and their text labels.

Each ``build_*`` function turns a physical vector into a
:class:`VectorAnnotation` in screen space. They never touch a surface, so the
renderer can draw the result and tests can inspect it directly. ``None`` means
the effect has nothing to show this frame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from orbit_overlay.core.config import RENDER_CFG, RenderCfg, VectorStyle
from orbit_overlay.core.physics import ShadowCondition, ShadowType, clamp, latitude

from .draw import label_anchor, vector_length

Point = tuple[int, int]


@dataclass(frozen=True)
class VectorAnnotation:
    name: str
    start: Point
    end: Point
    color: tuple[int, int, int]
    width: int
    magnitude: float
    length: float
    lines: tuple[str, ...]
    anchor: str
    label_position: Point


def _unit_2d(vec: np.ndarray) -> np.ndarray | None:
    planar = np.asarray(vec, dtype=float)[:2]
    norm = float(np.linalg.norm(planar))
    if norm <= 0.0:
        return None
    return planar / norm


def _style_length(magnitude: float, style: VectorStyle) -> float:
    return vector_length(
        magnitude,
        base_length=style.base_length,
        scale_factor=style.scale_factor,
        threshold=style.threshold,
        min_length=style.min_length,
        max_length=style.max_length,
    )


def _endpoint(start: Point, direction: np.ndarray, length: float) -> Point:
    # screen y grows downwards
    return (
        start[0] + int(direction[0] * length),
        start[1] - int(direction[1] * length),
    )


def label_position(
    start: Point, end: Point, canvas_size: tuple[int, int], render_cfg: RenderCfg = RENDER_CFG
) -> tuple[Point, str]:
    """Label origin next to the arrow tip and its horizontal anchor."""

    anchor = label_anchor(start[0], canvas_size[0])
    if anchor == "left":
        x = end[0] + render_cfg.label_offset_x
    else:
        x = end[0] - render_cfg.label_offset_x
    y = end[1] - render_cfg.label_offset_y
    if y < render_cfg.label_top_margin:
        y = end[1] + render_cfg.label_top_margin
    return (x, y), anchor


def _annotation(
    name: str,
    start: Point,
    direction: np.ndarray,
    magnitude: float,
    lines: list[str],
    color: tuple[int, int, int],
    style: VectorStyle,
    canvas_size: tuple[int, int],
    render_cfg: RenderCfg,
    *,
    width: int | None = None,
    length: float | None = None,
) -> VectorAnnotation:
    if length is None:
        length = _style_length(magnitude, style)
    end = _endpoint(start, direction, length)
    position, anchor = label_position(start, end, canvas_size, render_cfg)
    return VectorAnnotation(
        name=name,
        start=start,
        end=end,
        color=color,
        width=style.width if width is None else width,
        magnitude=magnitude,
        length=length,
        lines=tuple(lines),
        anchor=anchor,
        label_position=position,
    )


def build_gravity_annotation(
    start: Point,
    canvas_size: tuple[int, int],
    *,
    lunar: np.ndarray | None,
    solar: np.ndarray | None,
    render_cfg: RenderCfg = RENDER_CFG,
) -> VectorAnnotation | None:
    """Combined third-body arrow coloured by whichever of moon and sun dominates."""

    combined = np.zeros(2)
    contributions: list[tuple[str, float, tuple[int, int, int]]] = []
    if lunar is not None:
        lunar = np.asarray(lunar, dtype=float)[:2]
        combined = combined + lunar
        contributions.append(("Lunar", float(np.linalg.norm(lunar)), render_cfg.lunar_vector_color))
    if solar is not None:
        solar = np.asarray(solar, dtype=float)[:2]
        combined = combined + solar
        contributions.append(("Solar", float(np.linalg.norm(solar)), render_cfg.solar_vector_color))
    if not contributions:
        return None

    direction = _unit_2d(combined)
    if direction is None:
        return None
    magnitude = float(np.linalg.norm(combined))
    source, _, color = max(contributions, key=lambda item: item[1])
    lines = [f"{source} a: {magnitude:.2e} m/s²"]
    if len(contributions) == 2:
        share = {name: value for name, value, _ in contributions}
        lines.append(f"Moon {share['Lunar']:.1e} / Sun {share['Solar']:.1e}")
    return _annotation(
        "gravity",
        start,
        direction,
        magnitude,
        lines,
        color,
        render_cfg.gravity_style,
        canvas_size,
        render_cfg,
    )


def build_drag_annotation(
    start: Point,
    canvas_size: tuple[int, int],
    *,
    drag_magnitude: float,
    velocity: np.ndarray,
    render_cfg: RenderCfg = RENDER_CFG,
) -> VectorAnnotation | None:
    """Drag arrow pointing against the in-plane velocity."""

    if drag_magnitude <= 0.0:
        return None
    velocity_dir = _unit_2d(velocity)
    if velocity_dir is None:
        return None
    style = render_cfg.drag_style
    return _annotation(
        "drag",
        start,
        -velocity_dir,
        drag_magnitude,
        [f"Drag: {drag_magnitude:.2e} m/s²"],
        style.color,
        style,
        canvas_size,
        render_cfg,
    )


def hemisphere_label(lat_rad: float, render_cfg: RenderCfg = RENDER_CFG) -> str:
    lat_deg = math.degrees(lat_rad)
    hemisphere = "North" if lat_deg >= 0.0 else "South"
    if abs(lat_deg) < render_cfg.j2_equator_band_deg:
        return f"{hemisphere} (near equator)"
    if abs(lat_deg) > render_cfg.j2_high_latitude_deg:
        return f"{hemisphere} (high lat)"
    return hemisphere


def radial_tangential(position: np.ndarray, acceleration: np.ndarray) -> tuple[float, float]:
    """In-plane radial and tangential components of ``acceleration``."""

    radial_dir = _unit_2d(position)
    accel = np.asarray(acceleration, dtype=float)[:2]
    if radial_dir is None:
        return 0.0, 0.0
    tangential_dir = np.array([-radial_dir[1], radial_dir[0]])
    return float(np.dot(accel, radial_dir)), float(np.dot(accel, tangential_dir))


def build_j2_annotation(
    start: Point,
    canvas_size: tuple[int, int],
    *,
    position: np.ndarray,
    acceleration: np.ndarray,
    render_cfg: RenderCfg = RENDER_CFG,
) -> VectorAnnotation | None:
    """Oblateness arrow with latitude and radial/tangential breakdown."""

    accel = np.asarray(acceleration, dtype=float)
    magnitude = float(np.linalg.norm(accel))
    if magnitude <= 0.0:
        return None
    style = render_cfg.j2_style
    direction = _unit_2d(accel)
    marker_length = None
    if direction is None:
        # purely out of plane: short marker towards the sign of the z component
        direction = np.array([0.0, 1.0 if accel[2] >= 0.0 else -1.0])
        marker_length = style.min_length
    lat = latitude(np.asarray(position, dtype=float))
    radial, tangential = radial_tangential(position, accel)
    lines = [
        f"J2: {magnitude:.2e} m/s²",
        f"Lat {math.degrees(lat):+.1f}° {hemisphere_label(lat, render_cfg)}",
        f"Rad {radial:+.2e} Tan {tangential:+.2e}",
    ]
    return _annotation(
        "j2",
        start,
        direction,
        magnitude,
        lines,
        style.color,
        style,
        canvas_size,
        render_cfg,
        length=marker_length,
    )


def shadow_color(
    shadow_type: ShadowType, render_cfg: RenderCfg = RENDER_CFG
) -> tuple[int, int, int]:
    if shadow_type is ShadowType.DIRECT_SUNLIGHT:
        return render_cfg.srp_direct_color
    if shadow_type is ShadowType.PENUMBRA:
        return render_cfg.srp_penumbra_color
    if shadow_type is ShadowType.UMBRAL:
        return render_cfg.srp_umbral_color
    raise ValueError(f"Unhandled shadow type: {shadow_type!r}")


def build_srp_annotation(
    start: Point,
    canvas_size: tuple[int, int],
    *,
    position: np.ndarray,
    sun_position: np.ndarray,
    acceleration: np.ndarray,
    condition: ShadowCondition,
    render_cfg: RenderCfg = RENDER_CFG,
) -> VectorAnnotation | None:
    """Radiation pressure arrow pointing away from the sun.

    In umbra the magnitude is zero and the arrow keeps its direction at
    minimum length in the umbral colour.
    """

    sat = np.asarray(position, dtype=float)[:2]
    to_sun = _unit_2d(np.asarray(sun_position, dtype=float)[:2] - sat)
    if to_sun is None:
        return None
    away = -to_sun
    magnitude = float(np.linalg.norm(np.asarray(acceleration, dtype=float)))
    lit = clamp(condition.lighting_factor, 0.0, 1.0)
    style = render_cfg.srp_style
    width = max(1, round(style.width * (0.5 + 0.5 * lit)))
    lines = [
        f"SRP: {magnitude:.2e} m/s²",
        f"Lit: {lit * 100:.0f}% ({condition.shadow_type.description})",
        f"Away:({away[0]:.2f},{away[1]:.2f})",
    ]
    return _annotation(
        "srp",
        start,
        away,
        magnitude,
        lines,
        shadow_color(condition.shadow_type, render_cfg),
        style,
        canvas_size,
        render_cfg,
        width=width,
    )


__all__ = [
    "VectorAnnotation",
    "build_drag_annotation",
    "build_gravity_annotation",
    "build_j2_annotation",
    "build_srp_annotation",
    "hemisphere_label",
    "label_position",
    "radial_tangential",
    "shadow_color",
]
