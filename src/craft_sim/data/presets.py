"""Boot-time descriptors for the craft of a session."""
from __future__ import annotations

from dataclasses import dataclass

from craft_sim.core.fleet import CraftSlot, Fleet
from craft_sim.core.model import Craft


@dataclass(frozen=True)
class CraftDescriptor:
    key: str
    position: tuple[float, float]
    description: str
    rotation: float = 0.0
    velocity: tuple[float, float] = (0.0, 0.0)
    substeps: int = 1
    extra: bool = False

    def build(self, half_extent: tuple[float, float]) -> CraftSlot:
        craft = Craft(
            position=self.position,
            velocity=self.velocity,
            rotation=self.rotation,
            half_extent=half_extent,
            name=self.key,
        )
        return CraftSlot(craft=craft, substeps=self.substeps, extra=self.extra)


DEFAULT_FLEET: tuple[CraftDescriptor, ...] = (
    CraftDescriptor(
        key="ship",
        position=(140.0, 200.0),
        description="Primary craft, one update per frame at full du.",
    ),
    CraftDescriptor(
        key="extra1",
        position=(200.0, 200.0),
        substeps=2,
        extra=True,
        description="Two half-steps per frame.",
    ),
    CraftDescriptor(
        key="extra2",
        position=(260.0, 200.0),
        substeps=4,
        extra=True,
        description="Four quarter-steps per frame.",
    ),
)


def build_fleet(
    descriptors: tuple[CraftDescriptor, ...] = DEFAULT_FLEET,
    *,
    half_extent: tuple[float, float] = (12.0, 16.0),
) -> Fleet:
    return Fleet(descriptor.build(half_extent) for descriptor in descriptors)


def describe_fleet(descriptors: tuple[CraftDescriptor, ...] = DEFAULT_FLEET) -> dict[str, dict[str, object]]:
    """Per-craft boot settings keyed by craft name, as stored in run metadata."""

    return {
        descriptor.key: {
            "description": descriptor.description,
            "position": list(descriptor.position),
            "substeps": descriptor.substeps,
            "extra": descriptor.extra,
        }
        for descriptor in descriptors
    }


__all__ = ["CraftDescriptor", "DEFAULT_FLEET", "build_fleet", "describe_fleet"]
