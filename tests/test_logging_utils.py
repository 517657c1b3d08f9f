"""Tests for craft_sim.core.logging_utils."""
from __future__ import annotations

import csv
import json

from craft_sim.core.logging_utils import LAST_RUN_MARKER, TraceRecorder
from craft_sim.core.model import Craft


class TestTraceRecorder:
    def test_creates_run_directory_and_marker(self, tmp_path) -> None:
        recorder = TraceRecorder(tmp_path, run_id="alpha")
        recorder.close()
        assert recorder.run_dir == tmp_path / "alpha"
        assert (tmp_path / LAST_RUN_MARKER).read_text(encoding="utf-8") == "alpha"
        assert recorder.timeseries_path.read_text().splitlines()[0] == ",".join(
            TraceRecorder.TIMESERIES_HEADER
        )

    def test_run_ids_are_unique(self, tmp_path) -> None:
        first = TraceRecorder(tmp_path, run_id="beta")
        second = TraceRecorder(tmp_path, run_id="beta")
        first.close()
        second.close()
        assert first.run_id == "beta"
        assert second.run_id == "beta_01"

    def test_craft_rows(self, tmp_path) -> None:
        craft = Craft(position=(1.5, 2.0), velocity=(0.25, -0.5), rotation=0.1, name="ship")
        with TraceRecorder(tmp_path, run_id="rows") as recorder:
            recorder.log_craft(7, craft, 1.0)

        with recorder.timeseries_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        assert rows == [
            {
                "frame": "7",
                "craft": "ship",
                "x": "1.5",
                "y": "2",
                "vx": "0.25",
                "vy": "-0.5",
                "rotation": "0.1",
                "du": "1",
            }
        ]

    def test_event_details_survive_csv(self, tmp_path) -> None:
        with TraceRecorder(tmp_path, run_id="events") as recorder:
            recorder.log_event(3, "flag", name="gravity", value=True)
            recorder.log_event(4, "reset")

        with recorder.events_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        assert rows[0]["type"] == "flag"
        assert json.loads(rows[0]["details"]) == {"name": "gravity", "value": True}
        assert rows[1]["details"] == ""

    def test_buffer_flushes_at_threshold(self, tmp_path) -> None:
        craft = Craft(position=(0.0, 0.0))
        recorder = TraceRecorder(tmp_path, run_id="flush", timeseries_flush_threshold=2)
        recorder.log_craft(1, craft, 1.0)
        assert len(recorder.timeseries_path.read_text().splitlines()) == 1
        recorder.log_craft(2, craft, 1.0)
        assert len(recorder.timeseries_path.read_text().splitlines()) == 3
        recorder.close()

    def test_close_is_idempotent(self, tmp_path) -> None:
        recorder = TraceRecorder(tmp_path, run_id="close")
        recorder.close()
        recorder.close()
        assert recorder.closed

    def test_meta(self, tmp_path) -> None:
        with TraceRecorder(tmp_path, run_id="meta") as recorder:
            recorder.write_meta({"plane": [400, 400]})
        assert json.loads(recorder.meta_path.read_text()) == {"plane": [400, 400]}
