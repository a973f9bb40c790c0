"""
Node type registry: which dragged nodes each type accepts, and what a
connection entry looks like for each accepted node.
"""

from __future__ import annotations

from .node import Node, NodeType

# Machines whose state is a ConnectionState (capacity-limited list of links).
CONNECTION_TYPES: frozenset[NodeType] = frozenset(
    {
        NodeType.DOWSING,
        NodeType.QUARRY,
        NodeType.EMPOWERER,
        NodeType.BOOSTER,
        NodeType.UPGRADER,
        NodeType.AUTOMATOR,
        NodeType.INVESTMENTS,
    }
)

# Nodes with a `powered` flag (the toggle action applies to them).
POWERABLE_TYPES: frozenset[NodeType] = CONNECTION_TYPES | {NodeType.MINE, NodeType.PORTAL}

# Machines whose powered flag costs energy upkeep.
UPKEEP_TYPES: frozenset[NodeType] = frozenset(
    {
        NodeType.MINE,
        NodeType.DOWSING,
        NodeType.QUARRY,
        NodeType.EMPOWERER,
        NodeType.BOOSTER,
        NodeType.PORTAL,
    }
)

ACCEPTS: dict[NodeType, frozenset[NodeType]] = {
    NodeType.DOWSING: frozenset({NodeType.RESOURCE}),
    NodeType.QUARRY: frozenset({NodeType.RESOURCE}),
    NodeType.EMPOWERER: frozenset({NodeType.PASSIVE}),
    NodeType.BOOSTER: frozenset({NodeType.PORTAL}),
    NodeType.UPGRADER: frozenset({NodeType.PORTAL}),
    NodeType.AUTOMATOR: frozenset({NodeType.PORTAL}),
    NodeType.INVESTMENTS: frozenset({NodeType.PORTAL}),
    NodeType.TRASH_CAN: frozenset({NodeType.PORTAL}),
    NodeType.PORTAL_GENERATOR: frozenset({NodeType.RESOURCE, NodeType.INFLUENCE, NodeType.PORTAL}),
    NodeType.INFLUENCE: frozenset({NodeType.RESOURCE}),
}


def accepts_type(node: Node, other: Node) -> bool:
    """Type-level accept predicate (capacity is checked separately)."""
    if other is node:
        return False
    if other.type not in ACCEPTS.get(node.type, frozenset()):
        return False
    if node.type == NodeType.INFLUENCE:
        return node.state.kind.takes_resources
    return True


def connection_item(node: Node):
    """The identifier a connection list stores for `node` (resource kind, tool kind, or plane id)."""
    if node.type == NodeType.RESOURCE:
        return node.state.kind
    if node.type == NodeType.PASSIVE:
        return node.state.tool
    if node.type == NodeType.PORTAL:
        return node.state.plane_id
    raise ValueError(f"{node.type.value} nodes cannot be connected")
