from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]

_SCALED_CACHE_MAX_SIZE = 64


class AssetLibrary:
    """Best-effort image loading plus a cache of scaled copies."""

    def __init__(self, asset_dir: Path | None = None) -> None:
        self._asset_dir = asset_dir or Path(__file__).resolve().parents[3] / "assets"
        self._images: dict[str, pygame.Surface | None] = {}
        self._scaled_cache: OrderedDict[tuple[int, int, int], pygame.Surface] = OrderedDict()
        self._missing: list[str] = []

    @property
    def asset_dir(self) -> Path:
        return self._asset_dir

    @property
    def missing(self) -> tuple[str, ...]:
        """Filenames that failed to load, in the order they were first requested."""
        return tuple(self._missing)

    def load_optional_image(self, filename: str) -> pygame.Surface | None:
        if filename in self._images:
            return self._images[filename]
        path = self._asset_dir / filename
        image: pygame.Surface | None = None
        if path.is_file():
            try:
                image = pygame.image.load(path.as_posix())
                if pygame.display.get_surface() is not None:
                    image = image.convert_alpha()
            except (pygame.error, OSError):
                image = None
        if image is None:
            self._missing.append(filename)
        self._images[filename] = image
        return image

    def get_scaled_surface(self, surface: pygame.Surface, size: tuple[int, int]) -> pygame.Surface:
        if size[0] <= 0 or size[1] <= 0:
            raise ValueError("Scaled surface size must be positive")
        cache_key = (id(surface), size[0], size[1])
        cached = self._scaled_cache.get(cache_key)
        if cached is not None:
            self._scaled_cache.move_to_end(cache_key)
            return cached
        if surface.get_bitsize() in (24, 32):
            scaled = pygame.transform.smoothscale(surface, size)
        else:
            scaled = pygame.transform.scale(surface, size)
        self._scaled_cache[cache_key] = scaled
        if len(self._scaled_cache) > _SCALED_CACHE_MAX_SIZE:
            self._scaled_cache.popitem(last=False)
        return scaled


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color."""

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    font = pygame.font.Font(None, size)
    font.set_bold(bold)
    return font
