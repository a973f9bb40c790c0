"""
Capacity rules for machine connections.

Pure functions over tuples: a machine's effective capacity is its base
`max_connections` plus a bonus that is passed in explicitly, never read from
shared state.
"""

from __future__ import annotations

from typing import Hashable, Sequence

from loguru import logger


def effective_capacity(max_connections: int, bonus: int = 0) -> int:
    return int(max_connections) + int(bonus)


def enforce_capacity(connections: Sequence, capacity: int) -> tuple:
    """
    Trim `connections` to at most `capacity` entries, keeping the earliest.

    Idempotent, and the result is always a prefix of the input.
    """
    connections = tuple(connections)
    capacity = max(0, int(capacity))
    if len(connections) > capacity:
        return connections[:capacity]
    return connections


def can_accept(connections: Sequence, item: Hashable, capacity: int) -> bool:
    """Existing links can always be dropped again (to disconnect); new ones need room."""
    if item in connections:
        return True
    return len(connections) < int(capacity)


def toggle_connection(connections: Sequence, item: Hashable, capacity: int) -> tuple:
    """
    Remove `item` if present, otherwise append it.

    An add beyond capacity is rejected and returns the input unchanged; removing
    is always allowed.
    """
    connections = tuple(connections)
    if item in connections:
        return tuple(c for c in connections if c != item)
    if len(connections) >= int(capacity):
        logger.debug("Rejected connection {!r}: {} of {} slots used", item, len(connections), capacity)
        return connections
    return connections + (item,)


def purge_item(connections: Sequence, item: Hashable) -> tuple:
    """Drop every occurrence of `item` (used when the linked node is deleted)."""
    return tuple(c for c in connections if c != item)
