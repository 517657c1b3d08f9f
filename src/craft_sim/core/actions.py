"""Logical actions and the input boundary consumed by the simulation."""
from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, Protocol


class Action(Enum):
    """Logical actions the simulation reacts to."""

    # Per-craft controls (possibly shared between craft)
    THRUST = auto()
    RETRO = auto()
    TURN_LEFT = auto()
    TURN_RIGHT = auto()
    # Process-wide controls
    HALT = auto()
    RESET = auto()
    PAUSE = auto()
    STEP = auto()
    QUIT = auto()
    # Feature flags
    TOGGLE_EXTRAS = auto()
    TOGGLE_GRAVITY = auto()
    TOGGLE_MIXED = auto()
    # Presentation only
    TOGGLE_CLEAR = auto()
    TOGGLE_BOX = auto()
    TOGGLE_UNDO_BOX = auto()
    TOGGLE_FLIPFLOP = auto()
    TOGGLE_RENDER = auto()
    TOGGLE_TIMER = auto()


class ActionInput(Protocol):
    def gather(self) -> None:
        ...

    def is_asserted(self, action: Action) -> bool:
        ...

    def consume_and_clear(self, action: Action) -> bool:
        ...


class ActionState:
    """In-memory table of asserted actions.

    ``press``/``release`` mirror key down/up. ``consume_and_clear`` returns
    the current state and clears it, so an edge-triggered action fires once
    per press even if it stays held.
    """

    def __init__(self, asserted: Iterable[Action] = ()) -> None:
        self._asserted: set[Action] = set(asserted)

    def gather(self) -> None:
        pass

    def press(self, action: Action) -> None:
        self._asserted.add(action)

    def release(self, action: Action) -> None:
        self._asserted.discard(action)

    def clear(self) -> None:
        self._asserted.clear()

    def is_asserted(self, action: Action) -> bool:
        return action in self._asserted

    def consume_and_clear(self, action: Action) -> bool:
        if action in self._asserted:
            self._asserted.remove(action)
            return True
        return False

    @property
    def asserted(self) -> frozenset[Action]:
        return frozenset(self._asserted)


__all__ = ["Action", "ActionInput", "ActionState"]
