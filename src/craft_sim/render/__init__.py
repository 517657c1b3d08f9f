"""Rendering helpers for the craft simulator."""

from .assets import AssetLibrary, get_text_surface, load_font
from .draw import build_ship_surface, draw_sprite_centred_at
from .surface import PygameRenderer

__all__ = [
    "AssetLibrary",
    "PygameRenderer",
    "build_ship_surface",
    "draw_sprite_centred_at",
    "get_text_surface",
    "load_font",
]
