"""Physics helpers for the craft simulation.

All quantities are expressed per *nominal interval*: velocities in
plane-units per interval and accelerations in plane-units per interval
squared, so a step of ``du`` advances the state by ``du`` intervals.
"""
from __future__ import annotations

import math

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg


def thrust_magnitude(thrust: bool, retro: bool, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Return the signed thrust along the craft heading.

    With both engines firing the nominal values are summed, so forward
    thrust wins at a reduced rate instead of cancelling out.
    """

    if thrust and retro:
        return cfg.nominal_thrust + cfg.nominal_retro
    if thrust:
        return cfg.nominal_thrust
    if retro:
        return cfg.nominal_retro
    return 0.0


def directional_accel(
    rotation: float,
    thrust: float,
    *,
    gravity: bool = False,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> np.ndarray:
    """Acceleration for a craft at ``rotation`` radians (0 points up)."""

    accel_x = math.sin(rotation) * thrust
    accel_y = -math.cos(rotation) * thrust
    if gravity:
        accel_y += cfg.nominal_gravity
    return np.array([accel_x, accel_y], dtype=float)


def trapezoid_step(
    r: np.ndarray,
    v: np.ndarray,
    a: np.ndarray,
    du: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Advance ``(r, v)`` by ``du`` using the average of old and new velocity.

    The averaged velocity is returned as the new velocity, so
    ``v_next = v + a * du / 2`` and ``r_next = r + v_next * du``.
    """

    v_provisional = v + a * du
    v_next = (v_provisional + v) / 2.0
    r_next = r + v_next * du
    return r_next, v_next


def bounce_vertical(
    r: np.ndarray,
    v: np.ndarray,
    half_height: float,
    plane_height: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> tuple[np.ndarray, np.ndarray]:
    """Bounce off the bottom and top edges of the plane.

    The craft is clamped back onto the edge it touched and its vertical
    velocity is reversed and damped by the restitution factor.
    """

    r = r.copy()
    v = v.copy()
    if r[1] + half_height >= plane_height:
        v[1] *= -cfg.bounce_restitution
        r[1] = plane_height - half_height
    if r[1] - half_height <= 0.0:
        v[1] *= -cfg.bounce_restitution
        r[1] = half_height
    return r, v


def rotation_step(
    rotation: float,
    left: bool,
    right: bool,
    du: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> float:
    """Return the rotation after turning for ``du`` intervals."""

    if left:
        rotation -= cfg.nominal_rotate_rate * du
    if right:
        rotation += cfg.nominal_rotate_rate * du
    return rotation


__all__ = [
    "PHYSICS_CFG",
    "PhysicsCfg",
    "bounce_vertical",
    "directional_accel",
    "rotation_step",
    "thrust_magnitude",
    "trapezoid_step",
]
