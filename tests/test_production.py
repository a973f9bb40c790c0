"""
Tests for the mining and quarry production tick.

These tests verify:
- Whole cycles pay every resource exactly its weight
- Leftover completions are drawn one at a time
- Fractional progress is conserved across tick splits
- Cooldowns are swept before the tick's grants re-arm them
"""

import math
from decimal import Decimal

import pytest

from conftest import FakeStream
from planar.entities.resources import BASE_WEIGHTS
from planar.systems.production import (
    CooldownTracker,
    ProductionSystem,
    advance_progress,
    resolve_draw,
    split_completions,
)

AB = {"A": 1, "B": 1}


class TestHelpers:
    def test_advance_progress(self):
        assert advance_progress(0.5, 2.75) == (3, 0.25)

    def test_split_completions(self):
        assert split_completions(5, 2) == (2, 1)
        assert split_completions(719, 360) == (1, 359)

    def test_resolve_draw_uses_strict_cumulative_bound(self):
        weights = {"A": 2, "B": 3}
        assert [resolve_draw(d, weights) for d in range(5)] == ["A", "A", "B", "B", "B"]

    def test_resolve_draw_out_of_range(self):
        with pytest.raises(ValueError):
            resolve_draw(5, {"A": 2, "B": 3})


class TestMine:
    def test_four_seconds_pays_two_each(self):
        """{A:1, B:1}, dt=4 -> two whole cycles, no draws."""
        stream = FakeStream([0.0])
        system = ProductionSystem(weights=AB, stream=stream)
        result = system.mine(0.0, 4.0)
        assert result.grants == {"A": Decimal(2), "B": Decimal(2)}
        assert result.progress == 0.0
        assert stream.calls == 0

    def test_five_seconds_adds_one_random_unit(self):
        """{A:1, B:1}, dt=5 -> two each plus one drawn unit."""
        stream = FakeStream([0.75])
        system = ProductionSystem(weights=AB, stream=stream)
        result = system.mine(0.0, 5.0)
        assert result.whole_cycles == 2
        assert result.remainder == 1
        assert result.grants == {"A": Decimal(2), "B": Decimal(3)}
        assert stream.calls == 1

    @pytest.mark.parametrize("k", [1, 2, 3])
    def test_exact_cycles_match_loot_table(self, k):
        sum_weights = sum(BASE_WEIGHTS.values())
        system = ProductionSystem()
        result = system.mine(0.0, float(k * sum_weights))
        assert result.grants == {kind: Decimal(k * w) for kind, w in BASE_WEIGHTS.items()}
        assert result.remainder == 0

    def test_progress_conserved_across_splits(self):
        """Carried fraction is (sum of dt) mod 1 however the time is split."""
        steps = [0.25, 0.5, 0.25, 0.5, 0.5, 0.25, 0.5]
        system = ProductionSystem(weights=AB, stream=FakeStream([0.1]))
        progress = 0.0
        completions = 0
        for dt in steps:
            result = system.mine(progress, dt)
            progress = result.progress
            completions += result.completions
        total = sum(steps)
        assert progress == total - math.floor(total)
        assert completions == math.floor(total)

    def test_speed_and_gain(self):
        system = ProductionSystem(weights=AB, stream=FakeStream([0.0]))
        result = system.mine(0.0, 2.0, speed=2, gain=4)
        assert result.completions == 4
        assert result.grants == {"A": Decimal(8), "B": Decimal(8)}

    def test_no_completions_no_grants(self):
        system = ProductionSystem(weights=AB, stream=FakeStream([0.0]))
        result = system.mine(0.2, 0.5)
        assert result.grants == {}
        assert result.progress == pytest.approx(0.7)

    def test_zero_weight_never_granted_in_whole_cycle(self):
        system = ProductionSystem(weights={"A": 1, "B": 0}, stream=FakeStream([0.0]))
        result = system.mine(0.0, 3.0)
        assert result.grants == {"A": Decimal(3)}

    @pytest.mark.parametrize("dt", [-0.1, float("nan")])
    def test_rejects_bad_dt(self, dt):
        system = ProductionSystem(weights=AB, stream=FakeStream([0.0]))
        with pytest.raises(ValueError):
            system.update(dt, 0.0)

    def test_same_seed_same_grants(self):
        a = ProductionSystem()
        b = ProductionSystem()
        assert a.mine(0.0, 1000.5).grants == b.mine(0.0, 1000.5).grants


class TestCooldowns:
    def test_grant_arms_cooldown(self):
        system = ProductionSystem(weights=AB, stream=FakeStream([0.0]))
        system.mine(0.0, 2.0)
        assert system.mined_cooldowns.get("A") == 0.3
        assert system.mined_cooldowns.get("B") == 0.3

    def test_sweep_decrements_then_prunes(self):
        tracker = CooldownTracker(0.3)
        tracker.arm("A")
        tracker.sweep(0.1)
        assert tracker.get("A") == pytest.approx(0.2)
        tracker.sweep(0.2)
        assert "A" not in tracker

    def test_sweep_runs_before_grants(self):
        """A grant in the same tick that expires a cooldown re-arms it at full length."""
        system = ProductionSystem(weights={"A": 1}, stream=FakeStream([0.0]))
        system.mine(0.0, 1.0)
        result = system.update(1.0, 0.0)
        assert result.grants == {"A": Decimal(1)}
        assert system.mined_cooldowns.get("A") == 0.3

    def test_to_dict_uses_plain_keys(self):
        tracker = CooldownTracker(0.3)
        tracker.arm("A")
        assert tracker.to_dict() == {"A": 0.3}


class TestQuarry:
    def test_required_progress_sums_inverse_rates(self):
        """Rates 100 and 50 need 1 + 2 = 3 progress per completion."""
        system = ProductionSystem(weights={"A": 100, "B": 50})
        result = system.quarry(0.0, 7.0, ["A", "B"])
        assert result.completions == 2
        assert result.progress == pytest.approx(1.0)
        assert result.grants == {"A": Decimal(2), "B": Decimal(2)}
        assert "A" in system.quarried_cooldowns

    def test_progress_carries_between_ticks(self):
        system = ProductionSystem(weights={"A": 100})
        result = system.quarry(0.5, 0.5, ["A"])
        assert result.completions == 1
        assert result.progress == pytest.approx(0.0)

    def test_no_resources_no_progress(self):
        system = ProductionSystem(weights={"A": 100})
        result = system.quarry(0.25, 5.0, [])
        assert result.progress == 0.25
        assert result.grants == {}
