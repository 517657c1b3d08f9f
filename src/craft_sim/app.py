"""
CraftLab - Inertial Craft Simulator
===================================

Up to three identical craft fly on a wrap-around plane. The extra craft
integrate with two and four sub-steps per frame, so their drift against
the primary craft shows the integration error of the time step.

Keys:
    W / S       thrust / retro-thrust
    A / D       turn left / right
    H           halt all craft
    R           reset all craft
    P / O       pause / single step
    E, G, M     toggle extra craft, gravity, mixed actions
    C, B, U, F  toggle clear, box, undo-box, flip-flop overlays
    X, T        toggle craft rendering, timer overlay
    Q           quit
Mouse: click or drag to place the primary craft.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Sequence

import pygame
from pygame.locals import DOUBLEBUF

from craft_sim.core.config import PHYSICS_CFG, RENDER_CFG, SimulationFlags
from craft_sim.core.logging_utils import TraceRecorder
from craft_sim.core.scheduler import Scheduler
from craft_sim.core.space import ToroidalSpace
from craft_sim.data.presets import DEFAULT_FLEET, build_fleet, describe_fleet
from craft_sim.devices import KeyboardActionInput, PygameFrameSource
from craft_sim.render import AssetLibrary, PygameRenderer


logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fly inertial craft on a wrap-around plane.")
    parser.add_argument("--width", type=int, default=RENDER_CFG.width, help="Plane width in pixels")
    parser.add_argument("--height", type=int, default=RENDER_CFG.height, help="Plane height in pixels")
    parser.add_argument("--fps", type=int, default=RENDER_CFG.fps, help="Frame rate cap")
    parser.add_argument("--gravity", action="store_true", help="Start with gravity enabled")
    parser.add_argument("--no-extras", action="store_true", help="Start without the sub-stepped craft")
    parser.add_argument(
        "--no-mixed",
        action="store_true",
        help="Disallow turning while thrusting",
    )
    parser.add_argument(
        "--record",
        nargs="?",
        const="data/runs",
        default=None,
        metavar="DIR",
        help="Record craft state to DIR (default: data/runs)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    if args.fps <= 0:
        parser.error("--fps must be positive")
    return args


def flags_from_args(args: argparse.Namespace) -> SimulationFlags:
    return SimulationFlags(
        gravity=args.gravity,
        extras=not args.no_extras,
        mixed_actions=not args.no_mixed,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    render_cfg = replace(RENDER_CFG, width=args.width, height=args.height, fps=args.fps)

    pygame.init()
    pygame.display.set_caption("CraftLab – Inertial Craft Simulator")
    screen = pygame.display.set_mode((render_cfg.width, render_cfg.height), DOUBLEBUF)

    assets = AssetLibrary(
        ship_size=render_cfg.ship_size,
        ship_color=render_cfg.ship_color,
        flame_color=render_cfg.ship_flame_color,
    )
    fleet = build_fleet(half_extent=assets.half_extent())
    space = ToroidalSpace(render_cfg.width, render_cfg.height)
    actions = KeyboardActionInput(on_place=fleet.primary.place_at)
    renderer = PygameRenderer(screen, assets, render_cfg=render_cfg)
    flags = flags_from_args(args)

    recorder = TraceRecorder(args.record) if args.record else None
    if recorder is not None:
        recorder.write_meta(
            {
                "plane": [render_cfg.width, render_cfg.height],
                "fps": render_cfg.fps,
                "nominal_interval_ms": PHYSICS_CFG.nominal_update_interval,
                "flags": {
                    "gravity": flags.gravity,
                    "extras": flags.extras,
                    "mixed_actions": flags.mixed_actions,
                },
                "craft": describe_fleet(DEFAULT_FLEET),
            }
        )
        logger.info("Recording run to %s", recorder.run_dir)

    scheduler = Scheduler(
        fleet,
        space,
        actions,
        renderer,
        flags=flags,
        render_cfg=render_cfg,
        recorder=recorder,
    )
    try:
        scheduler.run(PygameFrameSource(fps=render_cfg.fps))
    finally:
        if recorder is not None:
            recorder.close()
        pygame.quit()
    return 0


def run() -> None:
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        pygame.quit()
