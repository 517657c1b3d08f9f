"""Tests for craft_sim.app command line handling."""
from __future__ import annotations

import pytest

from craft_sim.app import flags_from_args, parse_args
from craft_sim.core.config import RENDER_CFG, SimulationFlags


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert (args.width, args.height, args.fps) == (RENDER_CFG.width, RENDER_CFG.height, RENDER_CFG.fps)
        assert args.record is None
        assert args.log_level == "INFO"

    def test_record_without_directory_uses_default(self) -> None:
        assert parse_args(["--record"]).record == "data/runs"
        assert parse_args(["--record", "out"]).record == "out"

    @pytest.mark.parametrize("argv", [["--width", "0"], ["--height", "-5"], ["--fps", "0"]])
    def test_non_positive_values_are_rejected(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit):
            parse_args(argv)


class TestFlagsFromArgs:
    def test_defaults_match_simulation_flags(self) -> None:
        assert flags_from_args(parse_args([])) == SimulationFlags()

    def test_switches(self) -> None:
        flags = flags_from_args(parse_args(["--gravity", "--no-extras", "--no-mixed"]))
        assert flags == SimulationFlags(gravity=True, extras=False, mixed_actions=False)
