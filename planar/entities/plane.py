"""
Planes: procedurally named and colored sub-worlds behind a portal.

Everything visible about a plane is derived from its seed, so storing
`(id, tier, seed, influences)` is enough to rebuild it exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable

from loguru import logger

from config import PLANE_BACKGROUND_BASE_RGB, PLANE_PRIMARY_BASE_RGB
from planar.procgen.colors import Color, generate_color
from planar.procgen.names import generate_name
from planar.sim.determinism import Sfc32Stream

from .node import InfluenceState
from .resources import InfluenceKind, ResourceKind


@dataclass
class Plane:
    id: str
    tier: ResourceKind
    seed: int
    name: str
    color: Color
    background: Color
    resource_name: str
    difficulty: float
    rewards_level: float
    length: int
    influences: tuple[InfluenceState, ...] = ()
    resource_amount: Decimal = field(default_factory=Decimal)
    # Per-resource (and "energy") multipliers the plane has earned; applied while its portal is active
    resource_multis: dict[str, Decimal] = field(default_factory=dict)
    time_active: float = 0.0

    def add_resource_multi(self, key: str, multi) -> Decimal:
        """Fold an earned multiplier for a resource name (or "energy") into this plane."""
        total = self.resource_multis.get(key, Decimal(1)) * Decimal(str(multi))
        self.resource_multis[key] = total
        return total

    @property
    def influence_kinds(self) -> tuple[InfluenceKind, ...]:
        return tuple(i.kind for i in self.influences)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tier": self.tier.value,
            "seed": int(self.seed),
            "influences": [
                {"kind": i.kind.value, "data": [r.value for r in i.data]} for i in self.influences
            ],
            "resource_amount": str(self.resource_amount),
            "resource_multis": {k: str(v) for k, v in self.resource_multis.items()},
            "time_active": float(self.time_active),
        }


def create_plane(
    plane_id: str,
    tier: ResourceKind,
    seed: int,
    influences: Iterable[InfluenceState] = (),
) -> Plane:
    """
    Build a plane from its seed.

    Draw order is fixed (name, color, background, resource name, difficulty,
    length); changing it changes every existing plane.
    """
    tier = ResourceKind(tier)
    influences = tuple(influences)
    kinds = {i.kind for i in influences}
    tier_index = tier.tier_index
    stream = Sfc32Stream.from_seed(seed)

    name = generate_name(stream)
    color = generate_color(PLANE_PRIMARY_BASE_RGB, stream)
    background = generate_color(PLANE_BACKGROUND_BASE_RGB, stream)
    resource_name = generate_name(stream)

    difficulty_rand = stream.next()
    if InfluenceKind.INCREASE_DIFF in kinds:
        difficulty_rand = difficulty_rand / 2 + 0.5
    if InfluenceKind.DECREASE_DIFF in kinds:
        difficulty_rand = difficulty_rand / 2
    if InfluenceKind.RELIC in kinds:
        difficulty_rand = 1
    difficulty = difficulty_rand + tier_index + 1
    rewards_level = difficulty + 1 if InfluenceKind.INCREASE_REWARDS in kinds else difficulty

    if InfluenceKind.RELIC in kinds:
        length = tier_index + 2
    else:
        length = math.ceil(stream.next() * (tier_index + 2))
    if InfluenceKind.INCREASE_LENGTH in kinds:
        length += 1

    plane = Plane(
        id=plane_id,
        tier=tier,
        seed=int(seed) & 0xFFFFFFFF,
        name=name,
        color=color,
        background=background,
        resource_name=resource_name,
        difficulty=difficulty,
        rewards_level=rewards_level,
        length=length,
        influences=influences,
    )
    logger.debug("Generated plane {} '{}' (tier={}, seed={})", plane_id, name, tier.value, plane.seed)
    return plane
