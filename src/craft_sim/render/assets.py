from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Iterable

import pygame

from .draw import build_ship_surface


Color = tuple[int, int, int] | tuple[int, int, int, int]

_ROTATION_CACHE_MAX_SIZE = 360


class AssetLibrary:
    """Cache for the ship sprite and its rotated variants."""

    def __init__(
        self,
        asset_dir: Path | None = None,
        *,
        ship_size: tuple[int, int] = (24, 32),
        ship_color: tuple[int, int, int] = (234, 241, 255),
        flame_color: tuple[int, int, int] = (255, 176, 120),
    ) -> None:
        self._asset_dir = asset_dir or Path(__file__).resolve().parents[3] / "assets"
        self._ship_size = ship_size
        self._ship_color = ship_color
        self._flame_color = flame_color
        self._ship_sprite: pygame.Surface | None = None
        self._rotated_cache: OrderedDict[int, pygame.Surface] = OrderedDict()

    @property
    def asset_dir(self) -> Path:
        return self._asset_dir

    def load_ship_sprite(self, filename: str = "ship.png") -> pygame.Surface:
        if self._ship_sprite is None:
            path = self._asset_dir / filename
            sprite: pygame.Surface | None = None
            if path.exists():
                try:
                    sprite = pygame.image.load(path.as_posix())
                except pygame.error:
                    sprite = None
            if sprite is None:
                sprite = build_ship_surface(
                    self._ship_size,
                    color=self._ship_color,
                    flame_color=self._flame_color,
                )
            elif pygame.display.get_surface() is not None:
                sprite = sprite.convert_alpha()
            self._ship_sprite = sprite
        return self._ship_sprite

    def half_extent(self) -> tuple[float, float]:
        width, height = self.load_ship_sprite().get_size()
        return width / 2.0, height / 2.0

    def get_rotated_ship(self, degrees: float) -> pygame.Surface:
        """Return the ship sprite rotated clockwise by ``degrees``."""

        key = int(round(degrees)) % 360
        cached = self._rotated_cache.get(key)
        if cached is not None:
            self._rotated_cache.move_to_end(key)
            return cached
        # pygame rotates counter-clockwise
        rotated = pygame.transform.rotate(self.load_ship_sprite(), -key)
        self._rotated_cache[key] = rotated
        if len(self._rotated_cache) > _ROTATION_CACHE_MAX_SIZE:
            self._rotated_cache.popitem(last=False)
        return rotated


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
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)
