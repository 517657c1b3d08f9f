"""pygame-backed input and frame pacing for the interactive simulator."""
from __future__ import annotations

from typing import Callable, Mapping

import pygame

from craft_sim.core.actions import Action, ActionState
from craft_sim.core.timekeeping import perf_counter_ms


DEFAULT_KEY_MAP: dict[int, Action] = {
    pygame.K_w: Action.THRUST,
    pygame.K_s: Action.RETRO,
    pygame.K_a: Action.TURN_LEFT,
    pygame.K_d: Action.TURN_RIGHT,
    pygame.K_h: Action.HALT,
    pygame.K_r: Action.RESET,
    pygame.K_p: Action.PAUSE,
    pygame.K_o: Action.STEP,
    pygame.K_q: Action.QUIT,
    pygame.K_e: Action.TOGGLE_EXTRAS,
    pygame.K_g: Action.TOGGLE_GRAVITY,
    pygame.K_m: Action.TOGGLE_MIXED,
    pygame.K_c: Action.TOGGLE_CLEAR,
    pygame.K_b: Action.TOGGLE_BOX,
    pygame.K_u: Action.TOGGLE_UNDO_BOX,
    pygame.K_f: Action.TOGGLE_FLIPFLOP,
    pygame.K_x: Action.TOGGLE_RENDER,
    pygame.K_t: Action.TOGGLE_TIMER,
}


class KeyboardActionInput:
    """Translates pygame events into asserted logical actions.

    Held mouse buttons move the craft passed as ``on_place`` to the cursor.
    """

    def __init__(
        self,
        key_map: Mapping[int, Action] | None = None,
        *,
        on_place: Callable[[float, float], None] | None = None,
        state: ActionState | None = None,
    ) -> None:
        self.key_map = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self.on_place = on_place
        self.state = state or ActionState()

    def gather(self) -> None:
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.state.press(Action.QUIT)
        elif event.type == pygame.KEYDOWN:
            action = self.key_map.get(event.key)
            if action is not None:
                self.state.press(action)
        elif event.type == pygame.KEYUP:
            action = self.key_map.get(event.key)
            if action is not None:
                self.state.release(action)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self._place(event.pos)
        elif event.type == pygame.MOUSEMOTION and any(event.buttons):
            self._place(event.pos)

    def _place(self, pos: tuple[int, int]) -> None:
        if self.on_place is not None:
            self.on_place(float(pos[0]), float(pos[1]))

    def is_asserted(self, action: Action) -> bool:
        return self.state.is_asserted(action)

    def consume_and_clear(self, action: Action) -> bool:
        return self.state.consume_and_clear(action)


class PygameFrameSource:
    """Paces the main loop with :class:`pygame.time.Clock`."""

    def __init__(self, fps: int = 60, clock: pygame.time.Clock | None = None) -> None:
        self.fps = fps
        self.clock = clock or pygame.time.Clock()

    def next_frame(self) -> float:
        self.clock.tick(self.fps)
        return perf_counter_ms()


__all__ = ["DEFAULT_KEY_MAP", "KeyboardActionInput", "PygameFrameSource"]
