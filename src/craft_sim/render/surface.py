"""pygame implementation of the simulation's drawing boundary."""
from __future__ import annotations

import math

import pygame

from craft_sim.core.config import RENDER_CFG, RenderCfg

from .assets import AssetLibrary, get_text_surface, load_font
from .draw import draw_sprite_centred_at


class PygameRenderer:
    """Draws craft sprites and overlay primitives onto a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        assets: AssetLibrary,
        *,
        render_cfg: RenderCfg = RENDER_CFG,
        font: pygame.font.Font | None = None,
    ) -> None:
        self.surface = surface
        self.assets = assets
        self.render_cfg = render_cfg
        self._font = font

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = load_font(self.render_cfg.text_font_names, self.render_cfg.text_font_size)
        return self._font

    def clear(self) -> None:
        self.surface.fill(self.render_cfg.background_color)

    def fill_box(self, x: int, y: int, w: int, h: int, color: tuple[int, int, int]) -> None:
        self.surface.fill(color, pygame.Rect(x, y, w, h))

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        self.surface.fill(self.render_cfg.background_color, pygame.Rect(x, y, w, h))

    def fill_text(self, text: str, x: int, y: int) -> None:
        # ``y`` is the text baseline
        font = self.font
        text_surf = get_text_surface(font, text, self.render_cfg.text_color)
        self.surface.blit(text_surf, (x, y - font.get_ascent()))

    def draw_entity_at(self, position: tuple[float, float], rotation: float) -> None:
        sprite = self.assets.get_rotated_ship(math.degrees(rotation))
        draw_sprite_centred_at(self.surface, sprite, position)

    def present(self) -> None:
        if pygame.display.get_surface() is self.surface:
            pygame.display.flip()
