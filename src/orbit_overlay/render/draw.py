from __future__ import annotations

import math
from typing import Sequence, TYPE_CHECKING

import pygame

from orbit_overlay.core.model import OrbitParameters

from .assets import AssetLibrary, Color, get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from orbit_overlay.core.config import RenderCfg


Point = tuple[int, int]


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def body_pixel_radius(radius: float, ppm: float, icon_radius: int) -> int:
    """Pixel radius for a body, never smaller than the icon radius."""

    return max(icon_radius, int(radius * ppm))


def vector_length(
    magnitude: float,
    *,
    base_length: float,
    scale_factor: float,
    threshold: float,
    min_length: float,
    max_length: float,
) -> float:
    """Log-scaled arrow length in pixels, clamped to ``[min_length, max_length]``."""

    if magnitude <= 0.0 or threshold <= 0.0:
        return min_length
    length = base_length + scale_factor * math.log10(magnitude / threshold)
    return _clamp(length, min_length, max_length)


def arrow_head_points(
    start: Point,
    end: Point,
    *,
    head_length: float,
    head_angle: float,
    max_ratio: float,
) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """Two barb endpoints at +/- ``head_angle`` from the reversed direction."""

    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return None
    head_length = min(head_length, length * max_ratio)
    ux = dx / length
    uy = dy / length
    cos_a = math.cos(head_angle)
    sin_a = math.sin(head_angle)
    left = (
        end[0] - head_length * (ux * cos_a - uy * sin_a),
        end[1] - head_length * (uy * cos_a + ux * sin_a),
    )
    right = (
        end[0] - head_length * (ux * cos_a + uy * sin_a),
        end[1] - head_length * (uy * cos_a - ux * sin_a),
    )
    return left, right


def label_anchor(x: float, canvas_width: int) -> str:
    """``"left"`` aligned labels on the left half of the canvas, ``"right"`` otherwise."""

    return "left" if x < canvas_width / 2.0 else "right"


def orbit_ellipse_points(
    orbit: OrbitParameters,
    center: Point,
    ppm: float,
    samples: int,
) -> list[tuple[float, float]]:
    """Screen points of the orbit ellipse with its occupied focus on ``center``."""

    a = orbit.semi_major_axis * ppm
    b = orbit.semi_minor_axis * ppm
    c = orbit.focus_offset * ppm
    cos_w = math.cos(orbit.periapsis_angle)
    sin_w = math.sin(orbit.periapsis_angle)
    points: list[tuple[float, float]] = []
    for i in range(samples + 1):
        theta = 2.0 * math.pi * i / samples
        x = a * math.cos(theta) - c
        y = b * math.sin(theta)
        rx = x * cos_w - y * sin_w
        ry = x * sin_w + y * cos_w
        points.append((center[0] + rx, center[1] - ry))
    return points


def draw_body(
    surface: pygame.Surface,
    position: Point,
    radius: int,
    *,
    color: Color,
    outline_color: Color,
    image: pygame.Surface | None = None,
    assets: AssetLibrary | None = None,
    image_min_pixels: int = 0,
) -> None:
    if radius <= 0:
        return
    diameter = radius * 2
    rect = pygame.Rect(0, 0, diameter, diameter)
    rect.center = position
    if image is not None and assets is not None and radius >= image_min_pixels:
        sprite = assets.get_scaled_surface(image, (diameter, diameter))
        surface.blit(sprite, rect)
    else:
        pygame.draw.circle(surface, color, position, radius)
    pygame.draw.circle(surface, outline_color, position, radius, 1)


def draw_satellite(
    surface: pygame.Surface,
    position: Point,
    size: int,
    zoom: float,
    *,
    color: Color,
    image: pygame.Surface | None = None,
    assets: AssetLibrary | None = None,
    min_image_size: int = 8,
) -> None:
    if image is not None and assets is not None:
        side = int(max(size * 2, size * 2 * zoom, min_image_size))
        sprite = assets.get_scaled_surface(image, (side, side))
        surface.blit(sprite, sprite.get_rect(center=position))
        return
    diameter = int(max(size, size * zoom))
    if diameter <= 0:
        return
    pygame.draw.circle(surface, color, position, max(1, diameter // 2))


def draw_arrow(
    surface: pygame.Surface,
    start: Point,
    end: Point,
    *,
    color: Color,
    width: int,
    render_cfg: RenderCfg,
) -> None:
    pygame.draw.line(surface, color, start, end, width)
    canvas = min(surface.get_size())
    barbs = arrow_head_points(
        start,
        end,
        head_length=render_cfg.arrow_head_fraction * canvas,
        head_angle=render_cfg.arrow_head_angle,
        max_ratio=render_cfg.arrow_head_max_ratio,
    )
    if barbs is None:
        return
    for barb in barbs:
        pygame.draw.line(
            surface,
            color,
            end,
            (int(barb[0]), int(barb[1])),
            render_cfg.arrow_head_width,
        )


def draw_dashed_lines(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[float, float]],
    width: int,
    dash_length: float,
) -> None:
    """Polyline with alternating drawn and skipped runs of ``dash_length`` pixels."""

    if len(points) < 2 or dash_length <= 0.0:
        return
    overlay = _alpha_overlay(surface, color)
    target = surface if overlay is None else overlay
    drawing = True
    remaining = dash_length
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        seg = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while pos < seg:
            step = min(remaining, seg - pos)
            if drawing:
                t0 = pos / seg
                t1 = (pos + step) / seg
                pygame.draw.line(
                    target,
                    color,
                    (x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0),
                    (x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1),
                    width,
                )
            pos += step
            remaining -= step
            if remaining <= 0.0:
                drawing = not drawing
                remaining = dash_length
    if overlay is not None:
        surface.blit(overlay, (0, 0))


def draw_dashed_circle(
    surface: pygame.Surface,
    color: Color,
    center: Point,
    radius: float,
    *,
    dash_length: float,
    samples: int = 180,
) -> None:
    if radius <= 0.0:
        return
    points = [
        (
            center[0] + radius * math.cos(2.0 * math.pi * i / samples),
            center[1] + radius * math.sin(2.0 * math.pi * i / samples),
        )
        for i in range(samples + 1)
    ]
    draw_dashed_lines(surface, color, points, 1, dash_length)


def _alpha_overlay(surface: pygame.Surface, color: Color) -> pygame.Surface | None:
    """Transparent layer for colours with alpha, which opaque surfaces would ignore."""

    if len(color) == 4 and color[3] < 255:
        return pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    return None


def draw_translucent_line(
    surface: pygame.Surface,
    color: Color,
    start: Point,
    end: Point,
    width: int = 1,
) -> None:
    overlay = _alpha_overlay(surface, color)
    if overlay is None:
        pygame.draw.line(surface, color, start, end, width)
        return
    pygame.draw.line(overlay, color, start, end, width)
    surface.blit(overlay, (0, 0))


def draw_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[str],
    position: Point,
    *,
    anchor: str,
    color: Color,
    line_spacing: int = 2,
) -> list[pygame.Rect]:
    """Blit stacked text lines with the top of the first line at ``position``."""

    rects: list[pygame.Rect] = []
    x, y = position
    for idx, text in enumerate(lines):
        if not text:
            continue
        text_surf = get_text_surface(font, text, color)
        rect = text_surf.get_rect()
        top = y + idx * (font.get_linesize() + line_spacing)
        if anchor == "left":
            rect.topleft = (x, top)
        else:
            rect.topright = (x, top)
        surface.blit(text_surf, rect)
        rects.append(rect)
    return rects


def draw_orbit_line(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[float, float]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    overlay = _alpha_overlay(surface, color)
    if overlay is not None:
        pygame.draw.lines(overlay, color, False, points, max(1, width))
        surface.blit(overlay, (0, 0))
    elif width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def downsample_points(
    points: Sequence[tuple[float, float]], max_points: int
) -> list[tuple[float, float]]:
    if len(points) <= max_points:
        return list(points)
    step = max(1, math.ceil(len(points) / max_points))
    sampled = list(points[::step])
    if sampled[-1] != points[-1]:
        sampled.append(points[-1])
    return sampled
