"""
The board: ordered node collection, placement, selection, and connection edits.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterator

import pygame
from loguru import logger

from config import NODE_SIZE, NODE_SPACING, PLACEMENT_MAX_RINGS
from planar.entities.node import ConnectionState, Node, NodeState, NodeType
from planar.entities.registry import (
    CONNECTION_TYPES,
    POWERABLE_TYPES,
    accepts_type,
    connection_item,
)
from planar.systems.connections import (
    can_accept,
    effective_capacity,
    enforce_capacity,
    purge_item,
    toggle_connection,
)


class Board:
    """Owns every node on the board and the current selection."""

    def __init__(self, node_size: int = NODE_SIZE, spacing: int = NODE_SPACING):
        self.node_size = node_size
        self.spacing = spacing
        self.nodes: list[Node] = []
        self.selected: Node | None = None
        self.last_id = -1

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: Node) -> bool:
        return any(n is node for n in self.nodes)

    # Lookup

    def next_id(self) -> int:
        """Id the next added node will get. Ids only ever increase, even after deletions."""
        return max(self.last_id, max((n.id for n in self.nodes), default=-1)) + 1

    def get(self, node_id: int) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(f"no node with id {node_id}")

    def of_type(self, node_type: NodeType) -> list[Node]:
        return [n for n in self.nodes if n.type == node_type]

    def first_of_type(self, node_type: NodeType) -> Node | None:
        return next((n for n in self.nodes if n.type == node_type), None)

    # Placement

    def get_rect(self, position: tuple[float, float]) -> pygame.Rect:
        """Bounding square of a node centred on `position`, padded by the spacing."""
        size = self.node_size + self.spacing
        x, y = position
        return pygame.Rect(round(x - size / 2), round(y - size / 2), size, size)

    def is_free(self, position: tuple[float, float], ignore: Node | None = None) -> bool:
        rect = self.get_rect(position)
        return not any(
            rect.colliderect(self.get_rect(n.position)) for n in self.nodes if n is not ignore
        )

    def find_free_position(self, near: tuple[float, float] = (0.0, 0.0)) -> tuple[float, float]:
        """Scan square rings of grid cells outward from `near` for the first free spot."""
        step = self.node_size + self.spacing
        cx, cy = near
        for ring in range(PLACEMENT_MAX_RINGS):
            for dx, dy in _ring_offsets(ring):
                candidate = (cx + dx * step, cy + dy * step)
                if self.is_free(candidate):
                    return candidate
        raise RuntimeError(f"no free board position within {PLACEMENT_MAX_RINGS} rings of {near}")

    def add_node(
        self,
        node_type: NodeType,
        state: NodeState,
        near: tuple[float, float] | None = None,
    ) -> Node:
        """Create a node with the next id at the nearest free position to `near`."""
        position = self.find_free_position(near if near is not None else (0.0, 0.0))
        node = Node(id=self.next_id(), type=node_type, state=state, position=position)
        self.nodes.append(node)
        self.last_id = node.id
        logger.debug("Added {} node {} at {}", node.type.value, node.id, position)
        return node

    def remove_node(self, node: Node) -> Node:
        """Delete `node` and scrub whatever it stood for out of every other node's links."""
        if node not in self:
            raise KeyError(f"node {node.id} is not on the board")
        self.nodes = [n for n in self.nodes if n is not node]
        if self.selected is node:
            self.selected = None

        if node.type in (NodeType.RESOURCE, NodeType.PASSIVE, NodeType.PORTAL):
            item = connection_item(node)
            for other in self.nodes:
                if isinstance(other.state, ConnectionState) and item in other.state.connections:
                    self.replace_state(other, connections=purge_item(other.state.connections, item))
        logger.debug("Removed {} node {}", node.type.value, node.id)
        return node

    # State edits (whole-record replace)

    def replace_state(self, node: Node, **changes) -> NodeState:
        node.state = replace(node.state, **changes)
        return node.state

    def select(self, node: Node | None) -> None:
        self.selected = node

    def is_active(self, node: Node | None) -> bool:
        """Selected nodes run for free; otherwise a node runs while powered."""
        if node is None:
            return False
        return node is self.selected or node.powered

    def toggle_powered(self, node: Node) -> bool:
        if node.type not in POWERABLE_TYPES:
            raise ValueError(f"{node.type.value} nodes cannot be powered")
        self.replace_state(node, powered=not node.powered)
        return node.powered

    # Connections

    def capacity(self, node: Node, bonus: int = 0) -> int:
        return effective_capacity(node.state.max_connections, bonus)

    def can_drop(self, node: Node, other: Node, bonus: int = 0) -> bool:
        if not accepts_type(node, other):
            return False
        if node.type in CONNECTION_TYPES:
            return can_accept(node.state.connections, connection_item(other), self.capacity(node, bonus))
        return True

    def drop(self, node: Node, other: Node, bonus: int = 0) -> bool:
        """
        Drop `other` onto `node`: toggle the link if the type accepts it.

        Returns True if the node's state changed. An add beyond capacity is a
        silent no-op. Portal drops onto generators and trash cans need plane
        data and are handled by the simulation context.
        """
        if not self.can_drop(node, other, bonus):
            if accepts_type(node, other):
                logger.debug("Node {} is at max connections", node.id)
            return False
        before = node.state
        if node.type in CONNECTION_TYPES:
            connections = toggle_connection(
                node.state.connections, connection_item(other), self.capacity(node, bonus)
            )
            if connections != node.state.connections:
                self.replace_state(node, connections=connections)
        elif node.type == NodeType.INFLUENCE:
            kind = other.state.kind
            data = node.state.data
            data = tuple(r for r in data if r != kind) if kind in data else data + (kind,)
            self.replace_state(node, data=data)
        elif node.type == NodeType.PORTAL_GENERATOR:
            if other.type == NodeType.RESOURCE:
                tier = None if node.state.tier == other.state.kind else other.state.kind
                self.replace_state(node, tier=tier)
            elif other.type == NodeType.INFLUENCE:
                kind = other.state.kind
                influences = node.state.influences
                if kind in influences:
                    influences = tuple(i for i in influences if i != kind)
                else:
                    influences = influences + (kind,)
                self.replace_state(node, influences=influences)
            else:
                return False
        else:
            return False
        self.selected = node
        return node.state is not before

    def disconnect_all(self, node: Node) -> None:
        if node.type in CONNECTION_TYPES:
            self.replace_state(node, connections=())
        elif node.type == NodeType.INFLUENCE:
            self.replace_state(node, data=())
        elif node.type == NodeType.PORTAL_GENERATOR:
            self.replace_state(node, tier=None, influences=())
        if self.selected is node:
            self.selected = None

    def enforce_capacities(self, bonus: int) -> list[Node]:
        """Trim every machine's links to its effective capacity; return the nodes that lost links."""
        trimmed = []
        for node in self.nodes:
            if node.type not in CONNECTION_TYPES:
                continue
            kept = enforce_capacity(node.state.connections, self.capacity(node, bonus))
            if kept != node.state.connections:
                self.replace_state(node, connections=kept)
                trimmed.append(node)
                logger.debug("Trimmed {} node {} to {} connections", node.type.value, node.id, len(kept))
        return trimmed


def _ring_offsets(ring: int) -> list[tuple[int, int]]:
    """Grid offsets on the square ring at Chebyshev distance `ring`, in a fixed order."""
    if ring == 0:
        return [(0, 0)]
    offsets = []
    for dx in range(-ring, ring + 1):
        offsets.append((dx, -ring))
    for dy in range(-ring + 1, ring + 1):
        offsets.append((ring, dy))
    for dx in range(ring - 1, -ring - 1, -1):
        offsets.append((dx, ring))
    for dy in range(ring - 1, -ring, -1):
        offsets.append((-ring, dy))
    return offsets
