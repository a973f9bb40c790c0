"""
Board nodes and their per-type state.

State records are frozen: a node's state is only ever changed by replacing the
whole record (`dataclasses.replace`), so no half-updated state is ever visible
to the tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

from .resources import InfluenceKind, ResourceKind, ToolKind


class NodeType(str, Enum):
    MINE = "mine"
    BROKEN_FACTORY = "brokenFactory"
    FACTORY = "factory"
    RESOURCE = "resource"
    PASSIVE = "passive"
    DOWSING = "dowsing"
    QUARRY = "quarry"
    EMPOWERER = "empowerer"
    PORTAL_GENERATOR = "portalGenerator"
    PORTAL = "portal"
    INFLUENCE = "influence"
    BOOSTER = "booster"
    UPGRADER = "upgrader"
    AUTOMATOR = "automator"
    INVESTMENTS = "investments"
    TRASH_CAN = "trashCan"


@dataclass(frozen=True, slots=True)
class MineState:
    progress: float = 0.0
    powered: bool = False


@dataclass(frozen=True, slots=True)
class ResourceState:
    kind: ResourceKind
    amount: Decimal = Decimal(0)


@dataclass(frozen=True, slots=True)
class PassiveState:
    tool: ToolKind


@dataclass(frozen=True, slots=True)
class FactoryState:
    pass


@dataclass(frozen=True, slots=True)
class TrashCanState:
    pass


@dataclass(frozen=True, slots=True)
class ConnectionState:
    """Shared shape of every machine that holds capacity-limited connections."""

    connections: tuple = ()
    max_connections: int = 1
    powered: bool = False


@dataclass(frozen=True, slots=True)
class DowsingState(ConnectionState):
    pass


@dataclass(frozen=True, slots=True)
class QuarryState(ConnectionState):
    progress: float = 0.0


@dataclass(frozen=True, slots=True)
class EmpowererState(ConnectionState):
    pass


@dataclass(frozen=True, slots=True)
class BoosterState(ConnectionState):
    level: int = 1


@dataclass(frozen=True, slots=True)
class UpgraderState(ConnectionState):
    pass


@dataclass(frozen=True, slots=True)
class AutomatorState(ConnectionState):
    pass


@dataclass(frozen=True, slots=True)
class InvestmentsState(ConnectionState):
    pass


@dataclass(frozen=True, slots=True)
class PortalGeneratorState:
    tier: ResourceKind | None = None
    influences: tuple[InfluenceKind, ...] = ()


@dataclass(frozen=True, slots=True)
class PortalState:
    plane_id: str
    powered: bool = False


@dataclass(frozen=True, slots=True)
class InfluenceState:
    kind: InfluenceKind
    # Resources for increase/decreaseResources, empty otherwise
    data: tuple[ResourceKind, ...] = ()


NodeState = Union[
    MineState,
    ResourceState,
    PassiveState,
    FactoryState,
    TrashCanState,
    DowsingState,
    QuarryState,
    EmpowererState,
    BoosterState,
    UpgraderState,
    AutomatorState,
    InvestmentsState,
    PortalGeneratorState,
    PortalState,
    InfluenceState,
]


# Expected state record per node type; checked when a node is created.
STATE_TYPES: dict[NodeType, type] = {
    NodeType.MINE: MineState,
    NodeType.BROKEN_FACTORY: FactoryState,
    NodeType.FACTORY: FactoryState,
    NodeType.RESOURCE: ResourceState,
    NodeType.PASSIVE: PassiveState,
    NodeType.DOWSING: DowsingState,
    NodeType.QUARRY: QuarryState,
    NodeType.EMPOWERER: EmpowererState,
    NodeType.PORTAL_GENERATOR: PortalGeneratorState,
    NodeType.PORTAL: PortalState,
    NodeType.INFLUENCE: InfluenceState,
    NodeType.BOOSTER: BoosterState,
    NodeType.UPGRADER: UpgraderState,
    NodeType.AUTOMATOR: AutomatorState,
    NodeType.INVESTMENTS: InvestmentsState,
    NodeType.TRASH_CAN: TrashCanState,
}


def default_state(node_type: NodeType) -> NodeState:
    """Fresh state for a crafted node of `node_type` (not valid for types that need data)."""
    return STATE_TYPES[NodeType(node_type)]()


@dataclass(eq=False)
class Node:
    """A placed entity on the board. Identity is the id, not the state."""

    id: int
    type: NodeType
    state: NodeState
    position: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        self.type = NodeType(self.type)
        expected = STATE_TYPES[self.type]
        if not isinstance(self.state, expected):
            raise TypeError(
                f"{self.type.value} node needs {expected.__name__}, got {type(self.state).__name__}"
            )

    @property
    def powered(self) -> bool:
        return bool(getattr(self.state, "powered", False))

    @property
    def holds_connections(self) -> bool:
        return isinstance(self.state, ConnectionState)
