"""Rendering helpers for the orbit overlay."""

from .camera import Camera
from .assets import (
    AssetLibrary,
    get_text_surface,
    load_font,
)
from .draw import (
    arrow_head_points,
    body_pixel_radius,
    downsample_points,
    draw_arrow,
    draw_body,
    draw_label,
    draw_orbit_line,
    draw_satellite,
    label_anchor,
    orbit_ellipse_points,
    vector_length,
)
from .renderer import OrbitalRenderer
from .trail import SatelliteTrail
from .ui import (
    build_effects_legend,
    build_info_lines,
    build_text_panel,
    draw_hud,
)
from .vectors import (
    VectorAnnotation,
    build_drag_annotation,
    build_gravity_annotation,
    build_j2_annotation,
    build_srp_annotation,
    shadow_color,
)

__all__ = [
    "AssetLibrary",
    "Camera",
    "OrbitalRenderer",
    "SatelliteTrail",
    "VectorAnnotation",
    "arrow_head_points",
    "body_pixel_radius",
    "build_drag_annotation",
    "build_effects_legend",
    "build_gravity_annotation",
    "build_info_lines",
    "build_j2_annotation",
    "build_srp_annotation",
    "build_text_panel",
    "downsample_points",
    "draw_arrow",
    "draw_body",
    "draw_hud",
    "draw_label",
    "draw_orbit_line",
    "draw_satellite",
    "get_text_surface",
    "label_anchor",
    "load_font",
    "orbit_ellipse_points",
    "shadow_color",
    "vector_length",
]
