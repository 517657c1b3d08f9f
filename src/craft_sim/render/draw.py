from __future__ import annotations

import pygame


def build_ship_surface(
    size: tuple[int, int],
    *,
    color: tuple[int, int, int],
    flame_color: tuple[int, int, int],
) -> pygame.Surface:
    """Draw a ship pointing up, centred on a transparent surface."""

    width, height = size
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    hull = [
        (width / 2.0, 0.0),
        (width - 1.0, height - 1.0),
        (width / 2.0, height * 0.72),
        (0.0, height - 1.0),
    ]
    pygame.draw.polygon(surface, color, hull)
    flame = [
        (width * 0.38, height * 0.8),
        (width * 0.62, height * 0.8),
        (width / 2.0, height - 1.0),
    ]
    pygame.draw.polygon(surface, flame_color, flame)
    return surface


def draw_sprite_centred_at(
    surface: pygame.Surface,
    sprite: pygame.Surface,
    position: tuple[float, float],
) -> None:
    rect = sprite.get_rect(center=(int(round(position[0])), int(round(position[1]))))
    surface.blit(sprite, rect)
