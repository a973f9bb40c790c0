"""
Multipliers and bonuses granted by passive tools.

A tool counts once its node exists on the board; an empowered tool (linked to
an active empowerer) doubles its own effect.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from config import MATERIAL_LEVEL_EFFECT, PLANE_TIME_EFFECT_SECONDS
from planar.entities.resources import BASE_WEIGHTS, ResourceKind, ToolKind


@dataclass(frozen=True, slots=True)
class ToolEffects:
    present: frozenset[ToolKind] = frozenset()
    empowered: frozenset[ToolKind] = frozenset()

    def _double(self, tool: ToolKind) -> int:
        """1 without the tool, 2 with it, 4 when empowered."""
        if tool not in self.present:
            return 1
        return 4 if tool in self.empowered else 2

    @property
    def bonus_connections(self) -> int:
        if ToolKind.NATIONAL_GRID not in self.present:
            return 0
        return 2 if ToolKind.NATIONAL_GRID in self.empowered else 1

    @property
    def mining_speed(self) -> int:
        return self._double(ToolKind.PICKAXE)

    @property
    def material_gain(self) -> int:
        return self._double(ToolKind.ORE_PROCESSOR)

    @property
    def energy_multiplier(self) -> int:
        return self._double(ToolKind.ENERGIZER)

    @property
    def plane_gain_multiplier(self) -> int:
        return self._double(ToolKind.ROBOTICS)

    @property
    def material_level_effect(self) -> float:
        if ToolKind.BOOK not in self.present:
            return MATERIAL_LEVEL_EFFECT
        return MATERIAL_LEVEL_EFFECT + (0.002 if ToolKind.BOOK in self.empowered else 0.001)

    def plane_resource_gain(self, base, time_active: float) -> Decimal:
        """
        Plane resource per second: Robotics doubles it, and Artificial Intelligence
        scales it by how long the plane has been active.
        """
        gain = Decimal(str(base)) * self.plane_gain_multiplier
        if ToolKind.ARTIFICIAL_INTELLIGENCE in self.present:
            factor = 2 if ToolKind.ARTIFICIAL_INTELLIGENCE in self.empowered else 1
            gain *= Decimal(str(time_active)) / PLANE_TIME_EFFECT_SECONDS * factor
        return gain


def drop_rates(dowsed: Iterable[ResourceKind] = ()) -> dict[ResourceKind, int]:
    """Mine weights; resources linked to an active dowsing rod drop twice as often."""
    dowsed = set(dowsed)
    return {kind: weight * 2 if kind in dowsed else weight for kind, weight in BASE_WEIGHTS.items()}
