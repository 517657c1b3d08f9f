"""Data models for the craft simulation state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from .actions import Action, ActionInput
from .config import PHYSICS_CFG, PhysicsCfg, SimulationFlags
from .physics import (
    bounce_vertical,
    directional_accel,
    rotation_step,
    thrust_magnitude,
    trapezoid_step,
)

if TYPE_CHECKING:  # pragma: no cover
    from .space import ToroidalSpace


@dataclass(frozen=True)
class CraftBindings:
    """Which logical actions drive a craft's engines and rudder."""

    thrust: Action = Action.THRUST
    retro: Action = Action.RETRO
    turn_left: Action = Action.TURN_LEFT
    turn_right: Action = Action.TURN_RIGHT


@dataclass
class Craft:
    """Mutable state for one controllable craft.

    The reset baseline is captured from the initial position and rotation
    and never changes afterwards.
    """

    position: np.ndarray
    velocity: np.ndarray = field(
        default_factory=lambda: np.zeros(2, dtype=float)
    )
    rotation: float = 0.0
    half_extent: tuple[float, float] = (12.0, 16.0)
    bindings: CraftBindings = field(default_factory=CraftBindings)
    name: str = "craft"
    reset_position: np.ndarray = field(init=False, repr=False)
    reset_rotation: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=float)
        self.velocity = np.array(self.velocity, dtype=float)
        self.rotation = float(self.rotation)
        self.reset_position = self.position.copy()
        self.reset_rotation = self.rotation

    def update(
        self,
        du: float,
        actions: ActionInput,
        flags: SimulationFlags,
        space: ToroidalSpace,
        cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> None:
        bindings = self.bindings
        thrust = thrust_magnitude(
            actions.is_asserted(bindings.thrust),
            actions.is_asserted(bindings.retro),
            cfg,
        )
        accel = directional_accel(self.rotation, thrust, gravity=flags.gravity, cfg=cfg)

        self.position, self.velocity = trapezoid_step(self.position, self.velocity, accel, du)
        if flags.gravity:
            self.position, self.velocity = bounce_vertical(
                self.position,
                self.velocity,
                self.half_extent[1],
                space.height,
                cfg,
            )

        # No turning under thrust unless mixed actions are allowed
        if thrust == 0 or flags.mixed_actions:
            self.rotation = rotation_step(
                self.rotation,
                actions.is_asserted(bindings.turn_left),
                actions.is_asserted(bindings.turn_right),
                du,
                cfg,
            )

    def halt(self) -> None:
        self.velocity = np.zeros(2, dtype=float)

    def reset(self) -> None:
        self.position = self.reset_position.copy()
        self.rotation = self.reset_rotation
        self.halt()

    def place_at(self, x: float, y: float) -> None:
        self.position = np.array([x, y], dtype=float)

    def snapshot(self) -> tuple[float, float, float, float, float]:
        return (
            float(self.position[0]),
            float(self.position[1]),
            float(self.velocity[0]),
            float(self.velocity[1]),
            self.rotation,
        )


__all__ = ["Craft", "CraftBindings"]
