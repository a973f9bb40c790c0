"""
Tests for the determinism guard and the headless driver.
"""

from pathlib import Path

from main import parse_args, run
from tools.determinism_guard import scan_paths, scan_source


class TestDeterminismGuard:
    def test_simulation_packages_are_clean(self):
        assert scan_paths() == []

    def test_flags_wall_clock_and_global_rng(self):
        src = (
            "import time, random, datetime\n"
            "from random import choice\n"
            "a = time.time()\n"
            "b = random.random()\n"
            "c = datetime.datetime.now()\n"
            "d = hash('x')\n"
        )
        kinds = sorted(f["kind"] for f in scan_source(src, Path("sample.py")))
        assert kinds == ["global_rng", "global_rng", "unstable_hash", "wall_clock_time", "wall_clock_time"]

    def test_seeded_stream_calls_pass(self):
        src = "x = stream.random()\ny = self.rng.next()\n"
        assert scan_source(src, Path("sample.py")) == []


class TestDriver:
    def test_parse_args(self):
        args = parse_args(["--seed", "9", "--seconds", "2", "--tick-hz", "4"])
        assert (args.seed, args.seconds, args.tick_hz) == (9, 2.0, 4)

    def test_run_mines_with_selected_mine(self):
        sim = run(seed=3, seconds=2.0, tick_hz=4)
        assert sim.clock.elapsed == 2.0
        assert sum(sim.ledger.values()) == 2
