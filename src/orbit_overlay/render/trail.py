from __future__ import annotations

from collections import deque
from typing import Iterable

import pygame

from orbit_overlay.core.model import Viewport

from .assets import Color
from .draw import downsample_points, draw_orbit_line


class SatelliteTrail:
    """Recent satellite positions in world metres, oldest first."""

    def __init__(self, max_length: int, *, color: Color, width: int = 1) -> None:
        if max_length <= 0:
            raise ValueError("Trail max_length must be positive")
        self._points: deque[tuple[float, float]] = deque(maxlen=max_length)
        self.color = color
        self.width = width

    def __len__(self) -> int:
        return len(self._points)

    @property
    def max_length(self) -> int:
        return self._points.maxlen or 0

    def add_point(self, x: float, y: float) -> None:
        self._points.append((float(x), float(y)))

    def clear(self) -> None:
        self._points.clear()

    def resize(self, max_length: int) -> None:
        if max_length <= 0:
            raise ValueError("Trail max_length must be positive")
        self._points = deque(self._points, maxlen=max_length)

    def points(self) -> list[tuple[float, float]]:
        return list(self._points)

    def screen_points(self, viewport: Viewport, max_points: int) -> list[tuple[int, int]]:
        sampled: Iterable[tuple[float, float]] = downsample_points(self.points(), max_points)
        return [viewport.world_to_screen(x, y) for x, y in sampled]

    def draw(self, surface: pygame.Surface, viewport: Viewport, *, max_points: int) -> None:
        width = min(6, max(self.width, int(self.width * viewport.zoom)))
        draw_orbit_line(surface, self.color, self.screen_points(viewport, max_points), width)


__all__ = ["SatelliteTrail"]
