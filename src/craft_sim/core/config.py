"""Configuration dataclasses for the craft simulation."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class PhysicsCfg:
    # Accelerations are in plane-units per nominal interval squared.
    nominal_thrust: float = 0.2
    nominal_retro: float = -0.1
    nominal_gravity: float = 0.12
    nominal_rotate_rate: float = 0.1
    bounce_restitution: float = 0.9
    nominal_update_interval: float = 16.666
    big_delta_threshold: float = 200.0

    def __post_init__(self) -> None:
        if self.nominal_update_interval <= 0.0:
            raise ValueError("nominal_update_interval must be positive")


@dataclass(frozen=True)
class RenderCfg:
    width: int = 400
    height: int = 400
    fps: int = 60
    background_color: tuple[int, int, int] = (0, 0, 0)
    ship_color: tuple[int, int, int] = (234, 241, 255)
    ship_flame_color: tuple[int, int, int] = (255, 176, 120)
    ship_size: tuple[int, int] = (24, 32)
    text_color: tuple[int, int, int] = (255, 255, 255)
    text_font_names: tuple[str, ...] = ("consolas", "dejavusansmono", "couriernew")
    text_font_size: int = 14
    box_color: tuple[int, int, int] = (255, 0, 0)
    box_rect: tuple[int, int, int, int] = (200, 200, 50, 50)
    flip_flop_color: tuple[int, int, int] = (0, 128, 0)
    flip_flop_x: int = 250
    flip_flop_y_odd: int = 100
    flip_flop_y_even: int = 200
    timer_overlay_origin: tuple[int, int] = (50, 350)


@dataclass(frozen=True)
class SimulationFlags:
    """Runtime feature flags that change how the craft behave."""

    gravity: bool = False
    extras: bool = True
    mixed_actions: bool = True

    def toggled(self, name: str) -> "SimulationFlags":
        if name not in {f.name for f in fields(self)}:
            raise ValueError(f"Unknown simulation flag: {name!r}")
        return replace(self, **{name: not getattr(self, name)})


PHYSICS_CFG = PhysicsCfg()
RENDER_CFG = RenderCfg()


__all__ = ["PHYSICS_CFG", "RENDER_CFG", "PhysicsCfg", "RenderCfg", "SimulationFlags"]
