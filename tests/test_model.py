"""Tests for craft_sim.core.model."""
from __future__ import annotations

import numpy as np
import pytest

from craft_sim.core.actions import Action, ActionState
from craft_sim.core.config import SimulationFlags
from craft_sim.core.model import Craft, CraftBindings


def make_craft(**kwargs) -> Craft:
    kwargs.setdefault("position", (140.0, 200.0))
    return Craft(**kwargs)


class TestConstruction:
    def test_defaults(self) -> None:
        craft = make_craft()
        assert craft.velocity.tolist() == [0.0, 0.0]
        assert craft.rotation == 0.0

    def test_reset_baseline_captured(self) -> None:
        craft = make_craft(rotation=0.5, velocity=(1.0, 2.0))
        assert craft.reset_position.tolist() == [140.0, 200.0]
        assert craft.reset_rotation == 0.5

    def test_baseline_is_a_copy(self) -> None:
        craft = make_craft()
        craft.position[0] = 0.0
        assert craft.reset_position[0] == 140.0


class TestUpdate:
    def test_single_thrust_step_from_rest(self, space, flags) -> None:
        craft = make_craft()
        craft.update(1.0, ActionState({Action.THRUST}), flags, space)

        assert craft.velocity == pytest.approx(np.array([0.0, -0.1]))
        assert craft.position == pytest.approx(np.array([140.0, 199.9]))
        assert craft.rotation == 0.0

    def test_coasting_keeps_velocity(self, space, flags, actions) -> None:
        craft = make_craft(velocity=(1.0, -2.0))
        craft.update(2.0, actions, flags, space)
        assert craft.velocity == pytest.approx(np.array([1.0, -2.0]))
        assert craft.position == pytest.approx(np.array([142.0, 196.0]))

    def test_thrust_and_retro_are_summed(self, space, flags) -> None:
        craft = make_craft()
        craft.update(1.0, ActionState({Action.THRUST, Action.RETRO}), flags, space)
        assert craft.velocity[1] == pytest.approx(-0.05)

    def test_retro_pushes_backwards(self, space, flags) -> None:
        craft = make_craft()
        craft.update(1.0, ActionState({Action.RETRO}), flags, space)
        assert craft.velocity[1] == pytest.approx(0.05)

    def test_turning_while_idle(self, space, flags) -> None:
        craft = make_craft()
        craft.update(1.0, ActionState({Action.TURN_RIGHT}), flags, space)
        assert craft.rotation == pytest.approx(0.1)
        craft.update(3.0, ActionState({Action.TURN_LEFT}), flags, space)
        assert craft.rotation == pytest.approx(-0.2)

    def test_mixed_actions_allow_turning_under_thrust(self, space) -> None:
        craft = make_craft()
        flags = SimulationFlags(mixed_actions=True)
        craft.update(1.0, ActionState({Action.THRUST, Action.TURN_LEFT}), flags, space)
        assert craft.rotation == pytest.approx(-0.1)

    def test_no_turning_under_thrust_without_mixed_actions(self, space) -> None:
        craft = make_craft()
        flags = SimulationFlags(mixed_actions=False)
        craft.update(1.0, ActionState({Action.THRUST, Action.TURN_LEFT}), flags, space)
        assert craft.rotation == 0.0
        craft.update(1.0, ActionState({Action.RETRO, Action.TURN_RIGHT}), flags, space)
        assert craft.rotation == 0.0

    def test_turning_allowed_without_thrust_even_if_mixed_off(self, space) -> None:
        craft = make_craft()
        flags = SimulationFlags(mixed_actions=False)
        craft.update(1.0, ActionState({Action.TURN_LEFT}), flags, space)
        assert craft.rotation == pytest.approx(-0.1)

    def test_rotation_is_applied_after_integration(self, space, flags) -> None:
        craft = make_craft()
        craft.update(1.0, ActionState({Action.THRUST, Action.TURN_RIGHT}), flags, space)
        # thrust used the old heading (straight up)
        assert craft.velocity[0] == pytest.approx(0.0)
        assert craft.rotation == pytest.approx(0.1)

    def test_gravity_pulls_down(self, space, actions) -> None:
        craft = make_craft()
        craft.update(1.0, actions, SimulationFlags(gravity=True), space)
        assert craft.velocity[1] == pytest.approx(0.06)
        assert craft.position[1] == pytest.approx(200.06)

    def test_gravity_bounce_on_bottom(self, space, actions) -> None:
        craft = make_craft(position=(100.0, 383.0), velocity=(0.0, 2.0), half_extent=(12.0, 16.0))
        craft.update(1.0, actions, SimulationFlags(gravity=True), space)
        assert craft.position[1] == pytest.approx(384.0)
        assert craft.velocity[1] == pytest.approx(-0.9 * 2.06)

    def test_gravity_bounce_on_top(self, space, actions) -> None:
        craft = make_craft(position=(100.0, 17.0), velocity=(0.0, -3.0), half_extent=(12.0, 16.0))
        craft.update(1.0, actions, SimulationFlags(gravity=True), space)
        assert craft.position[1] == pytest.approx(16.0)
        assert craft.velocity[1] == pytest.approx(0.9 * 2.94)

    def test_no_bounce_without_gravity(self, space, actions, flags) -> None:
        craft = make_craft(position=(100.0, 395.0), velocity=(0.0, 2.0))
        craft.update(1.0, actions, flags, space)
        assert craft.position[1] == pytest.approx(397.0)
        assert craft.velocity[1] == pytest.approx(2.0)

    def test_custom_bindings(self, space, flags) -> None:
        bindings = CraftBindings(thrust=Action.RETRO, retro=Action.THRUST)
        craft = make_craft(bindings=bindings)
        craft.update(1.0, ActionState({Action.RETRO}), flags, space)
        assert craft.velocity[1] == pytest.approx(-0.1)

    def test_zero_du_changes_nothing(self, space, flags) -> None:
        craft = make_craft(velocity=(1.0, 1.0))
        craft.update(0.0, ActionState({Action.THRUST, Action.TURN_LEFT}), flags, space)
        assert craft.position.tolist() == [140.0, 200.0]
        assert craft.velocity.tolist() == [1.0, 1.0]
        assert craft.rotation == 0.0


class TestHaltAndReset:
    def test_halt_only_zeroes_velocity(self) -> None:
        craft = make_craft(position=(10.0, 20.0), velocity=(3.0, -4.0), rotation=1.2)
        craft.halt()
        assert craft.velocity.tolist() == [0.0, 0.0]
        assert craft.position.tolist() == [10.0, 20.0]
        assert craft.rotation == 1.2

    def test_reset_restores_baseline(self, space, flags) -> None:
        craft = make_craft(rotation=0.3)
        held = ActionState({Action.THRUST, Action.TURN_LEFT})
        for _ in range(10):
            craft.update(1.0, held, flags, space)
        craft.reset()
        assert craft.position.tolist() == [140.0, 200.0]
        assert craft.rotation == 0.3
        assert craft.velocity.tolist() == [0.0, 0.0]

    def test_reset_is_idempotent(self, space, flags) -> None:
        craft = make_craft()
        for _ in range(5):
            craft.update(1.0, ActionState({Action.THRUST}), flags, space)
        craft.reset()
        first = craft.snapshot()
        for _ in range(3):
            craft.reset()
            assert craft.snapshot() == first

    def test_place_at_keeps_velocity_and_rotation(self) -> None:
        craft = make_craft(velocity=(1.0, 2.0), rotation=0.7)
        craft.place_at(5.0, 6.0)
        assert craft.position.tolist() == [5.0, 6.0]
        assert craft.velocity.tolist() == [1.0, 2.0]
        assert craft.rotation == 0.7
        assert craft.reset_position.tolist() == [140.0, 200.0]
