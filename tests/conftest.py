from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from craft_sim.core.actions import ActionState
from craft_sim.core.config import SimulationFlags
from craft_sim.core.space import ToroidalSpace


class RecordingRenderer:
    """Renderer double that remembers every drawing call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.presented = 0

    def clear(self) -> None:
        self.calls.append(("clear",))

    def fill_box(self, x, y, w, h, color) -> None:
        self.calls.append(("fill_box", x, y, w, h, color))

    def clear_rect(self, x, y, w, h) -> None:
        self.calls.append(("clear_rect", x, y, w, h))

    def fill_text(self, text, x, y) -> None:
        self.calls.append(("fill_text", text, x, y))

    def draw_entity_at(self, position, rotation) -> None:
        self.calls.append(("draw", (float(position[0]), float(position[1])), rotation))

    def present(self) -> None:
        self.presented += 1

    def of(self, kind: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == kind]

    def reset(self) -> None:
        self.calls.clear()


@pytest.fixture
def space() -> ToroidalSpace:
    return ToroidalSpace(400, 400)


@pytest.fixture
def actions() -> ActionState:
    return ActionState()


@pytest.fixture
def flags() -> SimulationFlags:
    return SimulationFlags()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
