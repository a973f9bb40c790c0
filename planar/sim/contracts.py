"""
Thin, stable data contracts for save/load and inspection.

These are intentionally small "struct-like" dataclasses so:
- the host's save mechanism can persist them verbatim (nodes, plane seeds, ledger, cooldowns)
- UI/debug code can read simulation state without reaching into systems
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


def to_plain(value: Any) -> Any:
    """Convert enums, decimals, tuples and state dataclasses to JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(to_plain(k)): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


@dataclass(slots=True)
class NodeSnapshot:
    id: int
    type: str
    position: tuple[float, float]
    state: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": int(self.id),
            "type": str(self.type),
            "position": [float(self.position[0]), float(self.position[1])],
            "state": dict(self.state),
        }


@dataclass(slots=True)
class SimulationSnapshot:
    """
    Everything the host needs to persist.

    Planes are stored as their seeds (plus tier/influences); names and colors
    are regenerated on load.
    """

    elapsed: float
    energy: str
    bonus_connections: int
    nodes: list[NodeSnapshot] = field(default_factory=list)
    planes: list[dict[str, Any]] = field(default_factory=list)
    ledger: dict[str, str] = field(default_factory=dict)
    mined_cooldowns: dict[str, float] = field(default_factory=dict)
    quarried_cooldowns: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "elapsed": float(self.elapsed),
            "energy": str(self.energy),
            "bonus_connections": int(self.bonus_connections),
            "nodes": [n.to_dict() for n in self.nodes],
            "planes": list(self.planes),
            "ledger": dict(self.ledger),
            "mined_cooldowns": dict(self.mined_cooldowns),
            "quarried_cooldowns": dict(self.quarried_cooldowns),
        }
