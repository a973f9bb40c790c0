"""
Tests for connection capacity rules.
"""

import pytest

from planar.systems.connections import (
    can_accept,
    effective_capacity,
    enforce_capacity,
    purge_item,
    toggle_connection,
)


class TestEnforceCapacity:
    @pytest.mark.parametrize("capacity", [0, 1, 2, 3, 5])
    def test_result_is_prefix_of_min_length(self, capacity):
        connections = ("a", "b", "c")
        kept = enforce_capacity(connections, capacity)
        assert kept == connections[: min(len(connections), capacity)]

    @pytest.mark.parametrize("capacity", [0, 1, 2, 4])
    def test_idempotent(self, capacity):
        connections = ("a", "b", "c")
        once = enforce_capacity(connections, capacity)
        assert enforce_capacity(once, capacity) == once

    def test_negative_capacity_empties(self):
        assert enforce_capacity(("a", "b"), -1) == ()

    def test_effective_capacity_adds_signed_bonus(self):
        assert effective_capacity(1, 2) == 3
        assert effective_capacity(3, -1) == 2


class TestToggleConnection:
    def test_adds_at_end_when_room(self):
        assert toggle_connection(("a",), "b", 2) == ("a", "b")

    def test_removes_existing(self):
        assert toggle_connection(("a", "b"), "a", 2) == ("b",)

    def test_add_beyond_capacity_is_noop(self):
        assert toggle_connection(("a", "b"), "c", 2) == ("a", "b")

    def test_remove_allowed_when_over_capacity(self):
        assert toggle_connection(("a", "b", "c"), "b", 1) == ("a", "c")

    def test_can_accept(self):
        assert can_accept(("a",), "a", 1)
        assert not can_accept(("a",), "b", 1)
        assert can_accept(("a",), "b", 2)

    def test_purge_item(self):
        assert purge_item(("a", "b", "a"), "a") == ("b",)
