"""Main loop driving one simulation iteration per display frame."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from .actions import Action, ActionInput
from .config import PHYSICS_CFG, RENDER_CFG, PhysicsCfg, RenderCfg, SimulationFlags
from .fleet import Fleet
from .logging_utils import TraceRecorder
from .space import ToroidalSpace
from .timekeeping import SimulationClock


logger = logging.getLogger(__name__)

Color = tuple[int, int, int]


class Renderer(Protocol):
    def clear(self) -> None:
        ...

    def fill_box(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        ...

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        ...

    def fill_text(self, text: str, x: int, y: int) -> None:
        ...

    def draw_entity_at(self, position: tuple[float, float], rotation: float) -> None:
        ...

    def present(self) -> None:
        ...


class FrameSource(Protocol):
    def next_frame(self) -> float:
        """Block until the next display frame and return its timestamp in ms."""
        ...


class SchedulerState(Enum):
    RUNNING = auto()
    STOPPED = auto()


@dataclass
class PresentationToggles:
    render: bool = True
    clear: bool = True
    box: bool = False
    undo_box: bool = False
    flip_flop: bool = False
    timer: bool = False


FLAG_ACTIONS: dict[Action, str] = {
    Action.TOGGLE_EXTRAS: "extras",
    Action.TOGGLE_GRAVITY: "gravity",
    Action.TOGGLE_MIXED: "mixed_actions",
}

PRESENTATION_ACTIONS: dict[Action, str] = {
    Action.TOGGLE_CLEAR: "clear",
    Action.TOGGLE_BOX: "box",
    Action.TOGGLE_UNDO_BOX: "undo_box",
    Action.TOGGLE_FLIPFLOP: "flip_flop",
    Action.TOGGLE_RENDER: "render",
}


class Scheduler:
    """Sequences clock, input, update and render once per frame.

    The scheduler starts RUNNING and moves to STOPPED, permanently, the
    first time it sees the quit action.
    """

    def __init__(
        self,
        fleet: Fleet,
        space: ToroidalSpace,
        actions: ActionInput,
        renderer: Renderer,
        *,
        clock: SimulationClock | None = None,
        flags: SimulationFlags | None = None,
        physics_cfg: PhysicsCfg = PHYSICS_CFG,
        render_cfg: RenderCfg = RENDER_CFG,
        recorder: TraceRecorder | None = None,
    ) -> None:
        self.fleet = fleet
        self.space = space
        self.actions = actions
        self.renderer = renderer
        self.clock = clock or SimulationClock(cfg=physics_cfg)
        self.flags = flags or SimulationFlags()
        self.physics_cfg = physics_cfg
        self.render_cfg = render_cfg
        self.recorder = recorder
        self.toggles = PresentationToggles()
        self.state = SchedulerState.RUNNING
        self.frame_counter = 1

    @property
    def running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    def run(self, frame_source: FrameSource) -> None:
        while self.running:
            self.iter(frame_source.next_frame())

    def iter(self, frame_time: float) -> None:
        """Perform one iteration of the main loop."""

        if not self.running:
            return
        delta = self.clock.tick(frame_time)
        if self.actions.is_asserted(Action.QUIT):
            self.game_over()
            return

        self.actions.gather()
        self._process_flag_toggles()
        self.update(delta)
        self.render()
        self._debug_render()
        self.renderer.present()

    def game_over(self) -> None:
        if not self.running:
            return
        self.state = SchedulerState.STOPPED
        logger.info("gameOver: quitting...")
        self._record_event("quit")

    def toggle_flag(self, name: str) -> None:
        self.flags = self.flags.toggled(name)
        value = getattr(self.flags, name)
        logger.info("%s %s", name, "on" if value else "off")
        self._record_event("flag", name=name, value=value)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def update(self, delta_ms: float) -> bool:
        """Run one normalised update; returns ``False`` if it was skipped."""

        if self.clock.should_skip_update(self.actions):
            return False

        du = self.clock.normalize_delta(delta_ms)
        if delta_ms > self.physics_cfg.big_delta_threshold:
            self._record_event("clamp", delta_ms=delta_ms, du=du)

        self._process_diagnostics()
        updated = self.fleet.update(du, self.actions, self.flags, self.space, self.physics_cfg)
        for slot in updated:
            self.space.wrap_craft(slot.craft)
        if self.recorder is not None:
            for slot in updated:
                self.recorder.log_craft(self.frame_counter, slot.craft, du)
        return True

    def _process_flag_toggles(self) -> None:
        for action, name in FLAG_ACTIONS.items():
            if self.actions.consume_and_clear(action):
                self.toggle_flag(name)

    def _process_diagnostics(self) -> None:
        if self.actions.consume_and_clear(Action.RESET):
            self.fleet.reset_all()
            logger.info("Reset all craft")
            self._record_event("reset")
        if self.actions.consume_and_clear(Action.HALT):
            self.fleet.halt_all()
            logger.info("Halted all craft")
            self._record_event("halt")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> None:
        for action, name in PRESENTATION_ACTIONS.items():
            if self.actions.consume_and_clear(action):
                setattr(self.toggles, name, not getattr(self.toggles, name))

        cfg = self.render_cfg
        toggles = self.toggles
        if toggles.clear:
            self.renderer.clear()
        if toggles.box:
            self.renderer.fill_box(*cfg.box_rect, cfg.box_color)
        if toggles.render:
            self.render_simulation()
        if toggles.flip_flop:
            self._render_flip_flop()
        if toggles.undo_box:
            self.renderer.clear_rect(*cfg.box_rect)

        self.frame_counter += 1

    def render_simulation(self) -> None:
        for slot in self.fleet.active(self.flags):
            craft = slot.craft
            # Wrapping mutates the craft, so it must precede drawing
            self.space.wrap_craft(craft)
            for position in self.space.tile_positions(craft.position):
                self.renderer.draw_entity_at(position, craft.rotation)

    def _render_flip_flop(self) -> None:
        cfg = self.render_cfg
        box_x = cfg.flip_flop_x
        box_y = cfg.flip_flop_y_odd if self.clock.update_odd else cfg.flip_flop_y_even
        self.renderer.fill_box(box_x, box_y, 50, 50, cfg.flip_flop_color)
        self.renderer.fill_text(str(self.frame_counter % 1000), box_x + 10, box_y + 20)
        parity = "odd" if self.frame_counter % 2 else "even"
        self.renderer.fill_text(parity, box_x + 10, box_y + 40)

    def _debug_render(self) -> None:
        if self.actions.consume_and_clear(Action.TOGGLE_TIMER):
            self.toggles.timer = not self.toggles.timer
        if not self.toggles.timer:
            return

        x, y = self.render_cfg.timer_overlay_origin
        lines = (
            f"FT {self.clock.last_frame_time}",
            f"FD {self.clock.frame_delta_ms}",
            f"UU {self.clock.last_du}",
            "FrameSync ON",
        )
        for idx, text in enumerate(lines, start=1):
            self.renderer.fill_text(text, x, y + idx * 10)

    def _record_event(self, event_type: str, **details: object) -> None:
        if self.recorder is not None:
            self.recorder.log_event(self.frame_counter, event_type, **details)


__all__ = [
    "FLAG_ACTIONS",
    "FrameSource",
    "PRESENTATION_ACTIONS",
    "PresentationToggles",
    "Renderer",
    "Scheduler",
    "SchedulerState",
]
