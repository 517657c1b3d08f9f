"""Frame timing and normalisation of wall-clock deltas into simulation steps."""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from .actions import Action, ActionInput
from .config import PHYSICS_CFG, PhysicsCfg


logger = logging.getLogger(__name__)


def perf_counter_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class SimulationClock:
    """Turns frame timestamps (ms) into normalised steps ``du``.

    ``du`` counts nominal intervals, so every physical constant is
    calibrated against one reference frame period. The clock also owns the
    pause/single-step state.
    """

    cfg: PhysicsCfg = PHYSICS_CFG
    last_frame_time: float | None = None
    frame_delta_ms: float = 0.0
    last_delta_ms: float | None = None
    last_du: float | None = None
    paused: bool = False
    update_odd: bool = False

    @property
    def nominal_interval(self) -> float:
        return self.cfg.nominal_update_interval

    def tick(self, frame_time: float) -> float:
        """Record a frame timestamp and return the raw delta since the last one."""

        if not math.isfinite(frame_time):
            raise ValueError(f"Frame timestamp must be finite, got {frame_time!r}")
        if self.last_frame_time is None:
            self.last_frame_time = frame_time
        self.frame_delta_ms = frame_time - self.last_frame_time
        self.last_frame_time = frame_time
        return self.frame_delta_ms

    def normalize_delta(self, delta_ms: float) -> float:
        original_delta = delta_ms
        if delta_ms < 0.0:
            logger.warning("Negative dt = %s: frame source went backwards, using 0", delta_ms)
            delta_ms = 0.0
        elif delta_ms > self.cfg.big_delta_threshold:
            logger.warning("Big dt = %s: clamping to nominal", delta_ms)
            delta_ms = self.nominal_interval

        du = delta_ms / self.nominal_interval
        self.last_delta_ms = original_delta
        self.last_du = du
        self.update_odd = not self.update_odd
        return du

    def normalize(self, frame_time: float) -> float:
        return self.normalize_delta(self.tick(frame_time))

    def should_skip_update(self, actions: ActionInput) -> bool:
        """Handle pause/step actions and report whether to skip this update."""

        if actions.consume_and_clear(Action.PAUSE):
            self.paused = not self.paused
            logger.info("Simulation %s", "paused" if self.paused else "resumed")
        if not self.paused:
            return False
        if actions.consume_and_clear(Action.STEP):
            logger.debug("Single step")
            return False
        return True


__all__ = ["SimulationClock", "perf_counter_ms"]
