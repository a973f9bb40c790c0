"""
Weighted picks driven by a seeded stream.
"""

from __future__ import annotations

from typing import Iterable, Mapping, TypeVar

from config import INFLUENCE_RESOURCE_FACTOR
from planar.entities.node import InfluenceState
from planar.entities.resources import BASE_WEIGHTS, InfluenceKind, ResourceKind

from .names import RandomStream

K = TypeVar("K")


def pick_random(weights: Mapping[K, float], stream: RandomStream) -> K:
    """Pick a key with probability proportional to its weight (one draw)."""
    total = sum(weights.values())
    r = stream.next() * total
    cumulative = 0.0
    for key, weight in weights.items():
        cumulative += weight
        if r < cumulative:
            return key
    raise RuntimeError("Failed to pick random: weights must sum to a positive number")


def resource_weights(influences: Iterable[InfluenceState] = ()) -> dict[ResourceKind, float]:
    """Loot weights with +resource / -resource influences applied."""
    weights: dict[ResourceKind, float] = {kind: float(w) for kind, w in BASE_WEIGHTS.items()}
    for influence in influences:
        if influence.kind == InfluenceKind.INCREASE_RESOURCES:
            factor = INFLUENCE_RESOURCE_FACTOR
        elif influence.kind == InfluenceKind.DECREASE_RESOURCES:
            factor = 1 / INFLUENCE_RESOURCE_FACTOR
        else:
            continue
        for kind in influence.data:
            weights[kind] *= factor
    return weights


def random_resource(stream: RandomStream, influences: Iterable[InfluenceState] = ()) -> ResourceKind:
    """Integer-bucket pick over the (influenced) loot weights, as planes use for treasure."""
    weights = resource_weights(influences)
    r = int(stream.next() * sum(weights.values()))
    cumulative = 0.0
    for kind, weight in weights.items():
        cumulative += weight
        if r < cumulative:
            return kind
    # Only reachable through float rounding at the very top of the range
    return next(reversed(weights))
