"""
Tests for snapshot contracts.
"""

from decimal import Decimal

from planar.entities.node import DowsingState, ResourceState
from planar.entities.resources import ResourceKind
from planar.sim.contracts import NodeSnapshot, SimulationSnapshot, to_plain


def test_to_plain_converts_state_records():
    assert to_plain(ResourceState(kind=ResourceKind.DIRT, amount=Decimal("1.5"))) == {
        "kind": "dirt",
        "amount": "1.5",
    }
    assert to_plain(DowsingState(connections=(ResourceKind.SAND,))) == {
        "connections": ["sand"],
        "max_connections": 1,
        "powered": False,
    }


def test_simulation_snapshot_to_dict():
    snapshot = SimulationSnapshot(
        elapsed=1.5,
        energy="12",
        bonus_connections=1,
        nodes=[NodeSnapshot(id=0, type="mine", position=(0, 0), state={"progress": 0.5, "powered": False})],
        ledger={"dirt": "3"},
    )
    data = snapshot.to_dict()
    assert data["nodes"] == [
        {"id": 0, "type": "mine", "position": [0.0, 0.0], "state": {"progress": 0.5, "powered": False}}
    ]
    assert data["ledger"] == {"dirt": "3"}
    assert data["mined_cooldowns"] == {}
