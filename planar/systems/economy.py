"""
Economy system for energy, machine upkeep, and purchases.
"""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, Protocol

from loguru import logger

from config import (
    BASE_ENERGY_PER_SECOND,
    CONNECTION_COST_BASE,
    CONNECTION_COST_EXPONENT,
    FIRST_POWER_COST,
    PORTAL_BASE_COST,
    POWER_COST_DISCOUNT,
    POWER_UPKEEP_BASE,
    RESOURCE_LEVEL_BASE,
    RESOURCE_LEVEL_EXPONENT,
    STARTING_ENERGY,
)


class CostFormula(Protocol):
    """Monotonic cost curve: price of buying level `level`, and its cumulative inverse."""

    def evaluate(self, level: float) -> float: ...

    def invert_integral(self, total: float) -> float: ...


class PowerFormula:
    """cost(level) = base * (level + 1) ** exponent, with a closed-form integral."""

    def __init__(self, base: float, exponent: float):
        self.base = float(base)
        self.exponent = float(exponent)

    def evaluate(self, level: float) -> float:
        return self.base * (float(level) + 1) ** self.exponent

    def integral(self, level: float) -> float:
        """Total spent to go from level 0 to `level`."""
        e1 = self.exponent + 1
        return self.base / e1 * ((float(level) + 1) ** e1 - 1)

    def invert_integral(self, total: float) -> float:
        """Level reachable with `total` cumulative spend."""
        e1 = self.exponent + 1
        return (float(total) * e1 / self.base + 1) ** (1 / e1) - 1


RESOURCE_LEVEL_FORMULA = PowerFormula(RESOURCE_LEVEL_BASE, RESOURCE_LEVEL_EXPONENT)
CONNECTION_COST_FORMULA = PowerFormula(CONNECTION_COST_BASE, CONNECTION_COST_EXPONENT)


def _summed_cost(formula: CostFormula, level: int) -> float:
    return sum(formula.evaluate(i) for i in range(level))


def resource_level(amount, formula: CostFormula = RESOURCE_LEVEL_FORMULA) -> int:
    """
    Highest level whose summed per-level costs fit in `amount`.

    Starts ten levels under the integral estimate and steps up one level at a
    time, so an inexact `invert_integral` never overshoots.
    """
    amount = float(amount)
    if amount <= 0:
        return 0
    level = max(0, math.floor(formula.invert_integral(amount)) - 10)
    summed = _summed_cost(formula, level)
    while True:
        next_cost = formula.evaluate(level)
        if summed + next_cost > amount:
            return level
        summed += next_cost
        level += 1


def resource_level_progress(amount, level: int, formula: CostFormula = RESOURCE_LEVEL_FORMULA) -> float:
    """Fraction of the way from `level` to `level + 1`, clamped at 0 from below."""
    current = _summed_cost(formula, level)
    following = current + formula.evaluate(level)
    return max(0.0, float(amount) - current) / (following - current)


def upkeep(powered_count: int) -> Decimal:
    """Energy/s drained by `powered_count` running machines."""
    if powered_count <= 0:
        return Decimal(0)
    return Decimal(POWER_UPKEEP_BASE) ** powered_count / 10


def next_power_cost(powered_count: int) -> Decimal:
    """Extra upkeep the next powered machine would add (shown before toggling on)."""
    if powered_count == 0:
        return Decimal(FIRST_POWER_COST)
    return Decimal(POWER_UPKEEP_BASE) ** (powered_count + 1) / 10 * Decimal(str(POWER_COST_DISCOUNT))


class EconomySystem:
    """Manages the energy ledger."""

    def __init__(self, energy=STARTING_ENERGY, connection_formula: CostFormula = CONNECTION_COST_FORMULA):
        self.energy = Decimal(str(energy))
        self.connection_formula = connection_formula
        self.portal_cost = Decimal(str(PORTAL_BASE_COST))
        self.transaction_log = []

    def energy_per_second(
        self,
        levels: Iterable[int] = (),
        level_effect: float = 1.01,
        multiplier=1,
        powered_count: int = 0,
    ) -> Decimal:
        """Base gain times per-level and tool multipliers, minus machine upkeep."""
        rate = Decimal(BASE_ENERGY_PER_SECOND)
        effect = Decimal(str(level_effect))
        for level in levels:
            rate *= effect ** int(level)
        rate *= Decimal(str(multiplier))
        return rate - upkeep(powered_count)

    def apply(self, dt: float, rate: Decimal) -> bool:
        """Add `rate * dt` energy. Returns True if energy ran out (and was clamped to 0)."""
        self.energy += Decimal(rate) * Decimal(str(dt))
        if self.energy < 0:
            self.energy = Decimal(0)
            logger.warning("Ran out of energy! The mine has been turned off.")
            return True
        return False

    def can_afford(self, cost) -> bool:
        return self.energy >= Decimal(str(cost))

    def spend(self, cost, purchase: str, **details) -> bool:
        """Attempt a purchase. Returns True if successful."""
        cost = Decimal(str(cost))
        if self.energy < cost:
            return False
        self.energy -= cost
        self.transaction_log.append({"type": purchase, "cost": cost, **details})
        return True

    def connection_cost(self, max_connections: int) -> Decimal:
        return Decimal(str(self.connection_formula.evaluate(max_connections)))

    def buy_connection(self, max_connections: int) -> bool:
        """Pay for one more base connection slot on a machine currently at `max_connections`."""
        return self.spend(
            self.connection_cost(max_connections), "connection", max_connections=int(max_connections)
        )

    def get_recent_transactions(self, count: int = 5) -> list:
        """Get the most recent transactions."""
        return self.transaction_log[-count:]
