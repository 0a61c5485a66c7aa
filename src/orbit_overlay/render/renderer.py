"""Frame renderer for the orbit view and its perturbation overlays."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import pygame

from orbit_overlay.core.config import RENDER_CFG, RenderCfg
from orbit_overlay.core.model import Satellite, Simulation, Viewport

from .assets import AssetLibrary, load_font
from .draw import (
    arrow_head_points,
    body_pixel_radius,
    draw_arrow,
    draw_body,
    draw_dashed_circle,
    draw_dashed_lines,
    draw_label,
    draw_satellite,
    draw_translucent_line,
    orbit_ellipse_points,
)
from .vectors import (
    VectorAnnotation,
    build_drag_annotation,
    build_gravity_annotation,
    build_j2_annotation,
    build_srp_annotation,
)

if TYPE_CHECKING:  # pragma: no cover
    from orbit_overlay.core.logging_utils import RunLogger


class OrbitalRenderer:
    """Paints one frame of the simulation onto a surface.

    Layers, back to front: body, moon, sun direction, gravity, drag, J2 and
    SRP vectors, orbit ellipse, satellite. The simulation is only read.
    """

    def __init__(
        self,
        simulation: Simulation,
        *,
        render_cfg: RenderCfg = RENDER_CFG,
        assets: AssetLibrary | None = None,
        font: pygame.font.Font | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.simulation = simulation
        self.render_cfg = render_cfg
        self.assets = assets or AssetLibrary()
        self._font = font
        self._run_logger = run_logger
        self._missing_reported = 0
        self.last_annotations: list[VectorAnnotation] = []

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = load_font(self.render_cfg.font_names, self.render_cfg.label_font_size, bold=True)
        return self._font

    def render(
        self,
        surface: pygame.Surface,
        center_x: int,
        center_y: int,
        scale: float,
        zoom_factor: float,
    ) -> list[VectorAnnotation]:
        viewport = Viewport(center_x, center_y, scale, zoom_factor)
        sim = self.simulation
        effects = sim.effects

        self.draw_celestial_body(surface, viewport)
        if effects.lunar:
            self.draw_moon(surface, viewport)
        if effects.solar:
            self.draw_sun(surface, viewport)

        annotations: list[VectorAnnotation] = []
        satellite = sim.satellite
        if satellite is not None:
            for annotation in self.build_annotations(surface.get_size(), viewport, satellite):
                self.draw_annotation(surface, annotation)
                annotations.append(annotation)
            self.draw_orbit(surface, viewport)
            self.draw_satellite(surface, viewport, satellite)

        self.last_annotations = annotations
        return annotations

    def build_annotations(
        self,
        canvas_size: tuple[int, int],
        viewport: Viewport,
        satellite: Satellite,
    ) -> list[VectorAnnotation]:
        sim = self.simulation
        effects = sim.effects
        cfg = self.render_cfg
        position_3d = satellite.position_3d()
        start = viewport.world_to_screen(position_3d[0], position_3d[1])

        candidates: list[VectorAnnotation | None] = []
        if effects.lunar or effects.solar:
            candidates.append(
                build_gravity_annotation(
                    start,
                    canvas_size,
                    lunar=sim.lunar_acceleration() if effects.lunar else None,
                    solar=sim.solar_acceleration() if effects.solar else None,
                    render_cfg=cfg,
                )
            )
        if effects.drag:
            candidates.append(
                build_drag_annotation(
                    start,
                    canvas_size,
                    drag_magnitude=satellite.drag_acceleration(),
                    velocity=satellite.velocity_3d(),
                    render_cfg=cfg,
                )
            )
        if effects.j2:
            candidates.append(
                build_j2_annotation(
                    start,
                    canvas_size,
                    position=position_3d,
                    acceleration=satellite.j2_acceleration(),
                    render_cfg=cfg,
                )
            )
        if effects.srp:
            sun = sim.sun_position()
            candidates.append(
                build_srp_annotation(
                    start,
                    canvas_size,
                    position=position_3d,
                    sun_position=sun,
                    acceleration=satellite.srp_acceleration(sun, sim.time),
                    condition=satellite.shadow_condition(sun),
                    render_cfg=cfg,
                )
            )
        return [annotation for annotation in candidates if annotation is not None]

    def draw_celestial_body(self, surface: pygame.Surface, viewport: Viewport) -> None:
        body = self.simulation.body
        radius = body_pixel_radius(body.radius, viewport.ppm, self.render_cfg.body_icon_radius)
        draw_body(
            surface,
            viewport.center,
            radius,
            color=body.color,
            outline_color=body.outline_color,
            image=body.image,
            assets=self.assets,
            image_min_pixels=self.render_cfg.image_min_pixels,
        )

    def moon_screen_position(self, viewport: Viewport) -> tuple[int, int] | None:
        moon = self.simulation.moon_position()
        distance = float(np.linalg.norm(moon))
        if distance <= 0.0:
            return None
        visual = self.visual_moon_orbit_radius()
        direction = moon / distance
        return viewport.world_to_screen(direction[0] * visual, direction[1] * visual)

    def visual_moon_orbit_radius(self) -> float:
        return self.simulation.body.radius * self.render_cfg.moon_visual_orbit_radii

    def draw_moon(self, surface: pygame.Surface, viewport: Viewport) -> None:
        cfg = self.render_cfg
        position = self.moon_screen_position(viewport)
        if position is None:
            return

        ring_radius = self.visual_moon_orbit_radius() * viewport.ppm
        draw_dashed_circle(
            surface,
            cfg.moon_orbit_ring_color,
            viewport.center,
            ring_radius,
            dash_length=3.0,
        )
        draw_translucent_line(surface, cfg.moon_link_color, viewport.center, position, 1)

        radius = body_pixel_radius(self.simulation.cfg.moon_radius, viewport.ppm, cfg.body_icon_radius)
        image = self.assets.load_optional_image(cfg.moon_image_filename)
        if image is None:
            self._report_missing()
        draw_body(
            surface,
            position,
            radius,
            color=cfg.moon_color,
            outline_color=cfg.moon_outline_color,
            image=image,
            assets=self.assets,
            image_min_pixels=cfg.image_min_pixels,
        )

    def draw_sun(self, surface: pygame.Surface, viewport: Viewport) -> None:
        cfg = self.render_cfg
        sun = self.simulation.sun_position()
        distance = float(np.linalg.norm(sun))
        if distance <= 0.0:
            return
        dx, dy = float(sun[0]) / distance, float(sun[1]) / distance
        width, height = surface.get_size()
        reach = math.hypot(width, height)
        cx, cy = viewport.center
        line_end = (cx + int(dx * reach), cy - int(dy * reach))
        pygame.draw.line(surface, cfg.sun_color, viewport.center, line_end, cfg.sun_line_width)

        body_radius = body_pixel_radius(self.simulation.body.radius, viewport.ppm, cfg.body_icon_radius)
        arrow_distance = max(cfg.sun_arrow_min_distance, body_radius * 2.0)
        tip = (cx + int(dx * arrow_distance), cy - int(dy * arrow_distance))
        barbs = arrow_head_points(
            viewport.center,
            tip,
            head_length=cfg.arrow_head_fraction * min(width, height),
            head_angle=cfg.arrow_head_angle,
            max_ratio=cfg.arrow_head_max_ratio,
        )
        if barbs is not None:
            for barb in barbs:
                pygame.draw.line(surface, cfg.sun_color, tip, (int(barb[0]), int(barb[1])), cfg.arrow_head_width)

    def draw_orbit(self, surface: pygame.Surface, viewport: Viewport) -> None:
        orbit = self.simulation.orbit_parameters()
        if orbit is None:
            return
        points = orbit_ellipse_points(orbit, viewport.center, viewport.ppm, self.render_cfg.orbit_samples)
        width = max(1, int(viewport.zoom / 2))
        draw_dashed_lines(surface, self.render_cfg.orbit_color, points, width, self.render_cfg.orbit_dash_length)

    def draw_satellite(self, surface: pygame.Surface, viewport: Viewport, satellite: Satellite) -> None:
        position = satellite.position()
        draw_satellite(
            surface,
            viewport.world_to_screen(position[0], position[1]),
            satellite.size,
            viewport.zoom,
            color=satellite.color,
            image=satellite.image,
            assets=self.assets,
            min_image_size=self.render_cfg.satellite_min_image_size,
        )

    def draw_annotation(self, surface: pygame.Surface, annotation: VectorAnnotation) -> None:
        cfg = self.render_cfg
        draw_arrow(
            surface,
            annotation.start,
            annotation.end,
            color=annotation.color,
            width=annotation.width,
            render_cfg=cfg,
        )
        pygame.draw.circle(surface, annotation.color, annotation.start, cfg.origin_dot_radius)
        draw_label(
            surface,
            self.font,
            annotation.lines,
            annotation.label_position,
            anchor=annotation.anchor,
            color=annotation.color,
            line_spacing=cfg.label_line_spacing,
        )

    def _report_missing(self) -> None:
        """Log each asset that failed to load since the last report."""

        missing = self.assets.missing
        new = missing[self._missing_reported:]
        self._missing_reported = len(missing)
        if self._run_logger is None:
            return
        for filename in new:
            self._run_logger.log_event(
                [self.simulation.time, "asset_fallback", filename, str(self.assets.asset_dir)]
            )


__all__ = ["OrbitalRenderer"]
