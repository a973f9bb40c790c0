"""
Tests for seeded plane construction.
"""

from planar.entities.node import InfluenceState
from planar.entities.plane import create_plane
from planar.entities.resources import InfluenceKind, ResourceKind


class TestCreatePlane:
    def test_same_inputs_same_plane(self):
        a = create_plane("portal-0", ResourceKind.IRON, 123456)
        b = create_plane("portal-0", ResourceKind.IRON, 123456)
        assert a == b

    def test_different_seeds_give_different_planes(self):
        planes = [create_plane("p", ResourceKind.DIRT, seed) for seed in range(20)]
        assert len({(p.name, p.color) for p in planes}) > 1

    def test_difficulty_and_length_ranges(self):
        tier = ResourceKind.GOLD
        for seed in range(50):
            plane = create_plane("p", tier, seed)
            assert tier.tier_index + 1 <= plane.difficulty < tier.tier_index + 2
            assert 1 <= plane.length <= tier.tier_index + 2
            assert plane.rewards_level == plane.difficulty

    def test_relic_fixes_difficulty_and_length(self):
        relic = InfluenceState(kind=InfluenceKind.RELIC)
        plane = create_plane("p", ResourceKind.SAND, 9, [relic])
        assert plane.difficulty == 1 + ResourceKind.SAND.tier_index + 1
        assert plane.length == ResourceKind.SAND.tier_index + 2

    def test_increase_diff_and_rewards(self):
        influences = [
            InfluenceState(kind=InfluenceKind.INCREASE_DIFF),
            InfluenceState(kind=InfluenceKind.INCREASE_REWARDS),
        ]
        plane = create_plane("p", ResourceKind.DIRT, 31, influences)
        assert 1.5 <= plane.difficulty < 2
        assert plane.rewards_level == plane.difficulty + 1

    def test_increase_length_adds_one(self):
        plain = create_plane("p", ResourceKind.DIRT, 5)
        longer = create_plane("p", ResourceKind.DIRT, 5, [InfluenceState(kind=InfluenceKind.INCREASE_LENGTH)])
        assert longer.length == plain.length + 1

    def test_influences_do_not_change_name_or_colors(self):
        """Name and colors are drawn before any influence is consulted."""
        plain = create_plane("p", ResourceKind.COAL, 77)
        relic = create_plane("p", ResourceKind.COAL, 77, [InfluenceState(kind=InfluenceKind.RELIC)])
        assert (plain.name, plain.color, plain.background, plain.resource_name) == (
            relic.name,
            relic.color,
            relic.background,
            relic.resource_name,
        )

    def test_to_dict_stores_seed_and_influences(self):
        influence = InfluenceState(kind=InfluenceKind.INCREASE_RESOURCES, data=(ResourceKind.GOLD,))
        data = create_plane("portal-3", ResourceKind.IRON, 42, [influence]).to_dict()
        assert data["id"] == "portal-3"
        assert data["tier"] == "iron"
        assert data["seed"] == 42
        assert data["influences"] == [{"kind": "increaseResources", "data": ["gold"]}]

    def test_resource_multis_compound(self):
        plane = create_plane("portal-0", ResourceKind.IRON, 7)
        plane.add_resource_multi("gold", 2)
        assert plane.add_resource_multi("gold", 3) == 6
        assert plane.to_dict()["resource_multis"] == {"gold": "6"}
