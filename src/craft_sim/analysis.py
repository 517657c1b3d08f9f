"""Analyze a recorded run and compare how the sub-stepped craft drifted."""
from __future__ import annotations

import argparse
import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from craft_sim.core.logging_utils import (
    EVENTS_FILENAME,
    LAST_RUN_MARKER,
    META_FILENAME,
    TIMESERIES_FILENAME,
)


FIGS_SUBDIR = "figs"
NUMERIC_COLUMNS = ("frame", "x", "y", "vx", "vy", "rotation", "du")
CRAFT_COLORS = ("#6bc5c0", "#ffa94d", "#9775fa", "#94d82d")


@dataclass(frozen=True)
class CraftSummary:
    name: str
    updates: int
    path_length: float
    final_position: tuple[float, float]
    max_speed: float


def load_timeseries(path: Path) -> Dict[str, Dict[str, np.ndarray]]:
    """Load ``timeseries.csv`` grouped by craft name."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            craft = columns.setdefault(row["craft"], {name: [] for name in NUMERIC_COLUMNS})
            for name in NUMERIC_COLUMNS:
                craft[name].append(float(row[name]))
    return {
        name: {key: np.asarray(values) for key, values in data.items()}
        for name, data in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {"frame": int(row["frame"]), "type": row["type"], "details": {}}
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def path_length(x: np.ndarray, y: np.ndarray, plane: Sequence[float] | None = None) -> float:
    """Length of the travelled path, undoing wrap-around jumps when ``plane`` is given."""

    if x.size < 2:
        return 0.0
    dx = np.diff(x)
    dy = np.diff(y)
    if plane is not None:
        width, height = plane
        dx = (dx + width / 2.0) % width - width / 2.0
        dy = (dy + height / 2.0) % height - height / 2.0
    return float(np.sum(np.hypot(dx, dy)))


def summarize_craft(
    timeseries: Dict[str, Dict[str, np.ndarray]],
    plane: Sequence[float] | None = None,
) -> List[CraftSummary]:
    summaries: List[CraftSummary] = []
    for name, ts in timeseries.items():
        speeds = np.hypot(ts["vx"], ts["vy"])
        summaries.append(
            CraftSummary(
                name=name,
                updates=int(ts["x"].size),
                path_length=path_length(ts["x"], ts["y"], plane),
                final_position=(float(ts["x"][-1]), float(ts["y"][-1])),
                max_speed=float(speeds.max()) if speeds.size else 0.0,
            )
        )
    return summaries


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def plot_trajectories(
    fig_dir: Path,
    timeseries: Dict[str, Dict[str, np.ndarray]],
    plane: Sequence[float] | None = None,
) -> Path:
    fig, ax = plt.subplots(figsize=(6, 6))
    for idx, (name, ts) in enumerate(timeseries.items()):
        color = CRAFT_COLORS[idx % len(CRAFT_COLORS)]
        ax.scatter(ts["x"], ts["y"], s=2, color=color, label=name)
    if plane is not None:
        ax.set_xlim(0, plane[0])
        ax.set_ylim(plane[1], 0)
    else:
        ax.invert_yaxis()
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x [px]")
    ax.set_ylabel("y [px]")
    ax.set_title("Craft positions")
    ax.legend()
    fig.tight_layout()
    out = fig_dir / "trajectories.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def plot_speed(fig_dir: Path, timeseries: Dict[str, Dict[str, np.ndarray]]) -> Path:
    fig, ax = plt.subplots(figsize=(7, 4))
    for idx, (name, ts) in enumerate(timeseries.items()):
        color = CRAFT_COLORS[idx % len(CRAFT_COLORS)]
        ax.plot(ts["frame"], np.hypot(ts["vx"], ts["vy"]), color=color, lw=1.2, label=name)
    ax.set_xlabel("frame")
    ax.set_ylabel("speed [px / nominal interval]")
    ax.set_title("Speed per craft")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    out = fig_dir / "speed.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def print_summary(run_dir: Path, summaries: List[CraftSummary], event_summary: Dict[str, int]) -> None:
    print(f"Run: {run_dir.name}")
    for summary in summaries:
        x, y = summary.final_position
        print(
            f" {summary.name}: {summary.updates} updates, path {summary.path_length:.1f} px, "
            f"max speed {summary.max_speed:.3f}, final ({x:.1f}, {y:.1f})"
        )
    if event_summary:
        print(" Events: " + ", ".join(f"{etype}: {count}" for etype, count in sorted(event_summary.items())))
    else:
        print(" Events: none")


def resolve_run_dir(run_dir: str | None, base_runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
        return run_path
    marker = base_runs_dir / LAST_RUN_MARKER
    if not marker.exists():
        raise FileNotFoundError(f"No run given and {marker} is missing")
    return base_runs_dir / marker.read_text(encoding="utf-8").strip()


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path to, or id of, a recorded run")
    parser.add_argument("--runs-dir", default=str(Path("data") / "runs"), help="Base directory of recorded runs")
    args = parser.parse_args(argv)

    try:
        run_path = resolve_run_dir(args.run_dir, Path(args.runs_dir))
    except FileNotFoundError as exc:
        parser.error(str(exc))

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing timeseries.csv or events.csv")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)
    plane = meta.get("plane")

    timeseries = load_timeseries(ts_path)
    if not timeseries:
        parser.error("timeseries.csv is empty, nothing to analyze")
    events = load_events(ev_path)

    fig_dir = ensure_fig_dir(run_path)
    plot_trajectories(fig_dir, timeseries, plane)
    plot_speed(fig_dir, timeseries)

    print_summary(run_path, summarize_craft(timeseries, plane), summarize_events(events))


if __name__ == "__main__":
    main()
