"""Multi-rate stepping of a small fleet of craft."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .actions import ActionInput
from .config import PHYSICS_CFG, PhysicsCfg, SimulationFlags
from .model import Craft
from .space import ToroidalSpace


@dataclass
class CraftSlot:
    """A craft together with its fixed sub-stepping rate.

    A slot with ``substeps=n`` calls :meth:`Craft.update` ``n`` times per
    frame with ``du / n``. Craft with identical physics but different rates
    drift apart, which makes the integration error visible.
    """

    craft: Craft
    substeps: int = 1
    extra: bool = False

    def __post_init__(self) -> None:
        if self.substeps < 1:
            raise ValueError("substeps must be at least 1")

    def is_active(self, flags: SimulationFlags) -> bool:
        return flags.extras or not self.extra

    def advance(
        self,
        du: float,
        actions: ActionInput,
        flags: SimulationFlags,
        space: ToroidalSpace,
        cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> None:
        step = du / self.substeps
        for _ in range(self.substeps):
            self.craft.update(step, actions, flags, space, cfg)


class Fleet:
    """Ordered collection of craft slots; the first slot is the primary craft."""

    def __init__(self, slots: Iterable[CraftSlot]) -> None:
        self._slots: list[CraftSlot] = list(slots)
        if not self._slots:
            raise ValueError("A fleet needs at least one craft")

    def __iter__(self) -> Iterator[CraftSlot]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def primary(self) -> Craft:
        return self._slots[0].craft

    @property
    def craft(self) -> list[Craft]:
        return [slot.craft for slot in self._slots]

    def active(self, flags: SimulationFlags) -> Sequence[CraftSlot]:
        return [slot for slot in self._slots if slot.is_active(flags)]

    def update(
        self,
        du: float,
        actions: ActionInput,
        flags: SimulationFlags,
        space: ToroidalSpace,
        cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> list[CraftSlot]:
        """Advance every active craft by ``du`` and return the slots that moved."""

        updated = list(self.active(flags))
        for slot in updated:
            slot.advance(du, actions, flags, space, cfg)
        return updated

    def halt_all(self) -> None:
        for slot in self._slots:
            slot.craft.halt()

    def reset_all(self) -> None:
        for slot in self._slots:
            slot.craft.reset()


__all__ = ["CraftSlot", "Fleet"]
