"""Recording of simulation runs to disk."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from .model import Craft


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
LAST_RUN_MARKER = "last_run.txt"


class TraceRecorder:
    """Buffered recorder that stores per-update craft state in CSV files."""

    TIMESERIES_HEADER = ["frame", "craft", "x", "y", "vx", "vy", "rotation", "du"]
    EVENTS_HEADER = ["frame", "type", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        base = run_id or f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_run"
        candidate_id = base
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = f"{base}_{suffix:02d}"
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / TIMESERIES_FILENAME
        self.events_path = self.run_dir / EVENTS_FILENAME
        self.meta_path = self.run_dir / META_FILENAME

        self._ts_file = self.timeseries_path.open("w", newline="", encoding="utf-8")
        self._ts_file.write(",".join(self.TIMESERIES_HEADER) + "\n")
        self._ts_file.flush()
        self._ev_file = self.events_path.open("w", newline="", encoding="utf-8")
        self._ev_file.write(",".join(self.EVENTS_HEADER) + "\n")
        self._ev_file.flush()

        self._ts_buffer: list[str] = []
        self._ev_buffer: list[str] = []
        self._ts_threshold = max(1, timeseries_flush_threshold)
        self._ev_threshold = max(1, events_flush_threshold)
        self.closed = False

        (self.root_dir / LAST_RUN_MARKER).write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: Mapping[str, object]) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(dict(meta), fh, indent=2, sort_keys=True)

    def log_craft(self, frame: int, craft: Craft, du: float) -> None:
        x, y, vx, vy, rotation = craft.snapshot()
        row = [str(frame), craft.name] + [
            self._format_value(v) for v in (x, y, vx, vy, rotation, du)
        ]
        self._ts_buffer.append(",".join(row))
        if len(self._ts_buffer) >= self._ts_threshold:
            self._flush_timeseries()

    def log_event(self, frame: int, event_type: str, **details: object) -> None:
        payload = json.dumps(details, sort_keys=True) if details else ""
        # JSON contains commas, so the details column is always quoted
        quoted = '"' + payload.replace('"', '""') + '"'
        self._ev_buffer.append(f"{frame},{event_type},{quoted}")
        if len(self._ev_buffer) >= self._ev_threshold:
            self._flush_events()

    def close(self) -> None:
        if self.closed:
            return
        self._flush_timeseries()
        self._flush_events()
        self._ts_file.close()
        self._ev_file.close()
        self.closed = True

    def _flush_timeseries(self) -> None:
        if self._ts_buffer:
            self._ts_file.write("\n".join(self._ts_buffer) + "\n")
            self._ts_file.flush()
            self._ts_buffer.clear()

    def _flush_events(self) -> None:
        if self._ev_buffer:
            self._ev_file.write("\n".join(self._ev_buffer) + "\n")
            self._ev_file.flush()
            self._ev_buffer.clear()

    @staticmethod
    def _format_value(value: float) -> str:
        return f"{value:.10g}"

    def __enter__(self) -> "TraceRecorder":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = [
    "EVENTS_FILENAME",
    "LAST_RUN_MARKER",
    "META_FILENAME",
    "TIMESERIES_FILENAME",
    "TraceRecorder",
]
