from __future__ import annotations

from dataclasses import dataclass

from orbit_overlay.core.model import Viewport


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class CameraState:
    offset_x: float
    offset_y: float
    zoom: float
    zoom_target: float


class Camera:
    """Zoom and pan state that produces the per-frame :class:`Viewport`."""

    def __init__(
        self,
        size: tuple[int, int],
        base_scale: float,
        *,
        min_zoom: float,
        max_zoom: float,
        zoom: float = 1.0,
    ) -> None:
        if base_scale <= 0.0:
            raise ValueError("Camera base_scale must be positive")
        self._size = size
        self._base_scale = base_scale
        self._min_zoom = min_zoom
        self._max_zoom = max_zoom
        zoom = _clamp(zoom, min_zoom, max_zoom)
        self._state = CameraState(offset_x=0.0, offset_y=0.0, zoom=zoom, zoom_target=zoom)
        self._pan_anchor: tuple[int, int] | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def base_scale(self) -> float:
        return self._base_scale

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def zoom_target(self) -> float:
        return self._state.zoom_target

    @property
    def center(self) -> tuple[int, int]:
        width, height = self._size
        return (
            width // 2 + int(self._state.offset_x),
            height // 2 + int(self._state.offset_y),
        )

    def set_zoom(self, zoom: float) -> None:
        clamped = _clamp(zoom, self._min_zoom, self._max_zoom)
        self._state.zoom = clamped
        self._state.zoom_target = clamped

    def zoom_by_factor(self, factor: float) -> None:
        self._state.zoom_target = _clamp(
            self._state.zoom_target * factor, self._min_zoom, self._max_zoom
        )

    def reset(self) -> None:
        self._state.offset_x = 0.0
        self._state.offset_y = 0.0
        self.set_zoom(1.0)

    def update(self, smoothing: float = 0.1) -> None:
        state = self._state
        state.zoom += (state.zoom_target - state.zoom) * smoothing
        state.zoom = _clamp(state.zoom, self._min_zoom, self._max_zoom)

    def begin_pan(self, position: tuple[int, int]) -> None:
        self._pan_anchor = position

    def pan(self, position: tuple[int, int]) -> None:
        if self._pan_anchor is None:
            return
        dx = position[0] - self._pan_anchor[0]
        dy = position[1] - self._pan_anchor[1]
        if dx == 0 and dy == 0:
            return
        self._state.offset_x += dx
        self._state.offset_y += dy
        self._pan_anchor = position

    def end_pan(self) -> None:
        self._pan_anchor = None

    def viewport(self) -> Viewport:
        cx, cy = self.center
        return Viewport(cx, cy, self._base_scale, self._state.zoom)
