"""
Production system: turns elapsed time into resource grants.

Mining splits its completions into whole cycles and a remainder. A whole cycle
(`sum(weights)` completions) pays every resource exactly its weight, so the
long-run mix matches the loot table with no sampling error. Only the leftover
completions (< one cycle) are drawn at random, one independent draw each.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic, Hashable, Iterable, Mapping, TypeVar

from loguru import logger

from config import QUARRY_BASE_PROGRESS, RESOURCE_COOLDOWN_SECONDS, SIM_SEED
from planar.entities.resources import BASE_WEIGHTS
from planar.sim.determinism import Sfc32Stream, get_stream
from planar.sim.timebase import check_dt

K = TypeVar("K", bound=Hashable)


class CooldownTracker(Generic[K]):
    """Per-key countdowns armed on grant; swept (decrement, then prune) once per tick."""

    def __init__(self, duration: float = RESOURCE_COOLDOWN_SECONDS):
        self.duration = float(duration)
        self.remaining: dict[K, float] = {}

    def sweep(self, dt: float) -> None:
        # Rebuild instead of deleting while iterating.
        self.remaining = {
            key: left - dt for key, left in self.remaining.items() if left - dt > 0
        }

    def arm(self, key: K) -> None:
        self.remaining[key] = self.duration

    def __contains__(self, key) -> bool:
        return key in self.remaining

    def get(self, key: K) -> float | None:
        return self.remaining.get(key)

    def to_dict(self) -> dict:
        return {getattr(k, "value", k): float(v) for k, v in self.remaining.items()}


@dataclass
class MineResult:
    progress: float
    completions: int = 0
    whole_cycles: int = 0
    remainder: int = 0
    grants: dict = field(default_factory=dict)


@dataclass
class QuarryResult:
    progress: float
    completions: int = 0
    grants: dict = field(default_factory=dict)


def advance_progress(progress: float, amount: float) -> tuple[int, float]:
    """Add `amount` to a fractional accumulator; return (whole completions, carried fraction)."""
    total = progress + amount
    completions = math.floor(total)
    return int(completions), total - completions


def split_completions(completions: int, sum_weights: int) -> tuple[int, int]:
    """(whole cycles, leftover completions) for `completions` over a table summing to `sum_weights`."""
    whole = completions // sum_weights
    return whole, completions - whole * sum_weights


def resolve_draw(draw: int, weights: Mapping[K, int]) -> K:
    """Map an integer in [0, sum(weights)) to the first key whose cumulative weight exceeds it."""
    cumulative = 0
    for key, weight in weights.items():
        cumulative += weight
        if draw < cumulative:
            return key
    raise ValueError(f"draw {draw} is outside [0, {cumulative})")


def _add(grants: dict, key, amount) -> None:
    grants[key] = grants.get(key, Decimal(0)) + amount


class ProductionSystem:
    """Mine and quarry output plus their highlight cooldowns."""

    def __init__(
        self,
        weights: Mapping[K, int] | None = None,
        stream: Sfc32Stream | None = None,
        cooldown: float = RESOURCE_COOLDOWN_SECONDS,
    ):
        self.weights: dict = dict(BASE_WEIGHTS if weights is None else weights)
        self.stream = stream if stream is not None else get_stream(SIM_SEED, "mine")
        self.mined_cooldowns: CooldownTracker = CooldownTracker(cooldown)
        self.quarried_cooldowns: CooldownTracker = CooldownTracker(cooldown)

    def sweep(self, dt: float) -> None:
        """Expire cooldowns; must run before this tick's grants so they can re-arm."""
        dt = check_dt(dt)
        self.mined_cooldowns.sweep(dt)
        self.quarried_cooldowns.sweep(dt)

    def mine(
        self,
        progress: float,
        dt: float,
        weights: Mapping[K, int] | None = None,
        speed: float = 1,
        gain=1,
    ) -> MineResult:
        dt = check_dt(dt)
        weights = self.weights if weights is None else weights
        gain = Decimal(str(gain))
        sum_weights = sum(weights.values())

        completions, progress = advance_progress(progress, dt * speed)
        result = MineResult(progress=progress, completions=completions)
        if completions <= 0 or sum_weights <= 0:
            return result

        whole, remainder = split_completions(completions, sum_weights)
        result.whole_cycles, result.remainder = whole, remainder

        if whole > 0:
            for key, weight in weights.items():
                if weight <= 0:
                    continue
                _add(result.grants, key, weight * whole * gain)
                self.mined_cooldowns.arm(key)

        for _ in range(remainder):
            key = resolve_draw(self.stream.randrange(sum_weights), weights)
            _add(result.grants, key, gain)
            self.mined_cooldowns.arm(key)

        logger.debug(
            "Mined {} completions ({} whole cycles, {} drawn)", completions, whole, remainder
        )
        return result

    def update(
        self,
        dt: float,
        progress: float,
        weights: Mapping[K, int] | None = None,
        speed: float = 1,
        gain=1,
    ) -> MineResult:
        """One mining step: sweep cooldowns, then mine."""
        self.sweep(dt)
        return self.mine(progress, dt, weights=weights, speed=speed, gain=gain)

    def quarry(
        self,
        progress: float,
        dt: float,
        resources: Iterable[K],
        rates: Mapping[K, int] | None = None,
    ) -> QuarryResult:
        """
        Quarry every linked resource at once.

        One completion needs `sum(QUARRY_BASE_PROGRESS / rate)` progress over the
        linked resources, so rare resources slow the whole quarry down.
        """
        dt = check_dt(dt)
        resources = tuple(resources)
        rates = self.weights if rates is None else rates
        if not resources:
            return QuarryResult(progress=progress)

        required = sum(QUARRY_BASE_PROGRESS / rates[r] for r in resources)
        progress = progress + dt
        completions = math.floor(progress / required)
        progress -= completions * required
        result = QuarryResult(progress=progress, completions=int(completions))
        if completions > 0:
            for resource in resources:
                _add(result.grants, resource, Decimal(int(completions)))
                self.quarried_cooldowns.arm(resource)
        return result
