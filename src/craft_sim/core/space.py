"""Wrap-around topology of the plane the craft fly in."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .model import Craft


def _wrap_axis(value: float, size: float) -> float:
    # Triggered by the centre leaving [0, size), not by the sprite extent
    if value >= size:
        return value - size
    if value < 0.0:
        value += size
        # -tiny + size can round up to size itself
        return value if value < size else 0.0
    return value


@dataclass(frozen=True)
class ToroidalSpace:
    """Bounded plane where leaving one edge re-enters from the opposite one."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Plane dimensions must be positive")

    @property
    def phantom_offsets(self) -> tuple[tuple[float, float], ...]:
        w, h = self.width, self.height
        return (
            (-w, -h),
            (-w, 0.0),
            (-w, h),
            (0.0, -h),
            (0.0, h),
            (w, -h),
            (w, 0.0),
            (w, h),
        )

    def wrap(self, position: np.ndarray) -> np.ndarray:
        """Return ``position`` moved back onto the plane.

        Each axis is shifted by exactly one plane dimension once the centre
        has left ``[0, size)``. Applying it to a wrapped position is a no-op.
        """

        return np.array(
            [_wrap_axis(float(position[0]), self.width), _wrap_axis(float(position[1]), self.height)],
            dtype=float,
        )

    def wrap_craft(self, craft: Craft) -> bool:
        """Move ``craft`` onto the plane, returning ``True`` if it wrapped."""

        wrapped = self.wrap(craft.position)
        if np.array_equal(wrapped, craft.position):
            return False
        craft.position = wrapped
        return True

    def tile_positions(self, position: np.ndarray) -> list[tuple[float, float]]:
        """Canonical position followed by its 8 phantom copies."""

        x, y = float(position[0]), float(position[1])
        tiles = [(x, y)]
        tiles.extend((x + dx, y + dy) for dx, dy in self.phantom_offsets)
        return tiles


__all__ = ["ToroidalSpace"]
