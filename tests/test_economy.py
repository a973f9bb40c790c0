"""
Tests for energy, upkeep and cost formulas.
"""

from decimal import Decimal

import pytest

from planar.systems.economy import (
    EconomySystem,
    PowerFormula,
    next_power_cost,
    resource_level,
    resource_level_progress,
    upkeep,
)
from planar.systems.modifiers import ToolEffects, drop_rates
from planar.entities.resources import BASE_WEIGHTS, ResourceKind, ToolKind


class TestFormulas:
    def test_power_formula_inverse(self):
        formula = PowerFormula(10, 1.5)
        for level in (0, 1, 5, 20):
            assert formula.invert_integral(formula.integral(level)) == pytest.approx(level)

    def test_resource_level_steps(self):
        # level 0 costs 10, level 1 costs 10 * 2^1.5
        assert resource_level(0) == 0
        assert resource_level(Decimal("9.99")) == 0
        assert resource_level(10) == 1
        assert resource_level(10 + 10 * 2**1.5) == 2

    def test_resource_level_large_amount_is_consistent(self):
        formula = PowerFormula(10, 1.5)
        amount = Decimal(10) ** 8
        level = resource_level(amount)
        summed = sum(formula.evaluate(i) for i in range(level))
        assert summed <= amount < summed + formula.evaluate(level)

    def test_resource_level_progress(self):
        assert resource_level_progress(5, 0) == pytest.approx(0.5)

    def test_upkeep(self):
        assert upkeep(0) == 0
        assert upkeep(1) == 10
        assert upkeep(2) == 1000

    def test_next_power_cost(self):
        assert next_power_cost(0) == 10
        assert next_power_cost(1) == Decimal("990")


class TestEconomySystem:
    def test_spend(self):
        economy = EconomySystem(energy=100)
        assert economy.spend(40, "tool", tool="Pickaxe")
        assert economy.energy == 60
        assert not economy.spend(61, "tool")
        assert economy.get_recent_transactions() == [{"type": "tool", "cost": Decimal(40), "tool": "Pickaxe"}]

    def test_energy_per_second(self):
        economy = EconomySystem()
        assert economy.energy_per_second() == 1
        assert economy.energy_per_second(levels=[1, 1], level_effect=1.01) == Decimal("1.0201")
        assert economy.energy_per_second(multiplier=4, powered_count=1) == -6

    def test_depletion_clamps_to_zero(self):
        economy = EconomySystem(energy=5)
        assert economy.apply(1.0, Decimal(-9))
        assert economy.energy == 0
        assert not economy.apply(1.0, Decimal(1))

    def test_buy_connection(self):
        economy = EconomySystem(energy=10_000)
        cost = economy.connection_cost(1)
        assert cost == Decimal("4000.0")
        assert economy.buy_connection(1)
        assert economy.energy == 10_000 - cost


class TestModifiers:
    def test_tools_double_and_empowered_quadruple(self):
        effects = ToolEffects(
            present=frozenset({ToolKind.PICKAXE, ToolKind.ENERGIZER}),
            empowered=frozenset({ToolKind.ENERGIZER}),
        )
        assert effects.mining_speed == 2
        assert effects.energy_multiplier == 4
        assert effects.material_gain == 1

    def test_national_grid_bonus(self):
        assert ToolEffects().bonus_connections == 0
        grid = frozenset({ToolKind.NATIONAL_GRID})
        assert ToolEffects(present=grid).bonus_connections == 1
        assert ToolEffects(present=grid, empowered=grid).bonus_connections == 2

    def test_book_raises_level_effect(self):
        book = frozenset({ToolKind.BOOK})
        assert ToolEffects(present=book).material_level_effect == pytest.approx(1.011)
        assert ToolEffects(present=book, empowered=book).material_level_effect == pytest.approx(1.012)

    def test_dowsing_doubles_linked_weights(self):
        rates = drop_rates([ResourceKind.GOLD])
        assert rates[ResourceKind.GOLD] == 2 * BASE_WEIGHTS[ResourceKind.GOLD]
        assert rates[ResourceKind.DIRT] == BASE_WEIGHTS[ResourceKind.DIRT]

    def test_plane_gain_robotics_and_time_factor(self):
        assert ToolEffects().plane_resource_gain(1, 600) == 1
        robotics = frozenset({ToolKind.ROBOTICS})
        assert ToolEffects(present=robotics).plane_resource_gain(1, 600) == 2
        assert ToolEffects(present=robotics, empowered=robotics).plane_resource_gain(1, 600) == 4
        ai = frozenset({ToolKind.ARTIFICIAL_INTELLIGENCE})
        assert ToolEffects(present=ai).plane_resource_gain(1, 600) == Decimal("0.1")
        assert ToolEffects(present=ai, empowered=ai).plane_resource_gain(1, 600) == Decimal("0.2")

    def test_tool_and_resource_values_never_collide(self):
        assert not {t.value for t in ToolKind} & {r.value for r in ResourceKind}
        assert ToolKind.for_resource(ResourceKind.DIRT) == ToolKind.PICKAXE
        assert ToolKind.PICKAXE.resource == ResourceKind.DIRT
        with pytest.raises(KeyError):
            ToolKind.for_resource(ResourceKind.WOOD)
