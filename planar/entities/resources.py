"""
Resource, tool and influence kinds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from config import MINE_LOOT_TABLE


class ResourceKind(str, Enum):
    DIRT = "dirt"
    SAND = "sand"
    GRAVEL = "gravel"
    WOOD = "wood"
    STONE = "stone"
    COAL = "coal"
    COPPER = "copper"
    IRON = "iron"
    SILVER = "silver"
    GOLD = "gold"
    EMERALD = "emerald"
    PLATINUM = "platinum"
    DIAMOND = "diamond"
    BERYLIUM = "berylium"
    UNOBTAINIUM = "unobtainium"
    ULTIMATUM = "ultimatum"

    @property
    def tier_index(self) -> int:
        return RESOURCE_ORDER.index(self)

    @property
    def weight(self) -> int:
        return MINE_LOOT_TABLE[self.value]


# Loot table order; cumulative weight lookups rely on it.
RESOURCE_ORDER: tuple[ResourceKind, ...] = tuple(ResourceKind(name) for name in MINE_LOOT_TABLE)

BASE_WEIGHTS: dict[ResourceKind, int] = {kind: MINE_LOOT_TABLE[kind.value] for kind in RESOURCE_ORDER}


class ToolKind(str, Enum):
    """Passive tools (plain node with no connections) that an empowerer can boost."""

    PICKAXE = "pickaxe"
    ORE_PROCESSOR = "oreProcessor"
    ENERGIZER = "energizer"
    BOOK = "book"
    ROBOTICS = "robotics"
    ARTIFICIAL_INTELLIGENCE = "artificialIntelligence"
    MACHINE_LEARNING = "machineLearning"
    NATIONAL_GRID = "nationalGrid"

    @property
    def resource(self) -> ResourceKind:
        """The resource a factory crafts this tool from."""
        return TOOL_RESOURCES[self]

    @classmethod
    def for_resource(cls, resource: ResourceKind) -> "ToolKind":
        for tool, source in TOOL_RESOURCES.items():
            if source == resource:
                return tool
        raise KeyError(f"{ResourceKind(resource).value} does not craft a passive tool")


# Tool values never equal a resource value, so a connection list holding both
# kinds can always tell them apart.
TOOL_RESOURCES: dict[ToolKind, ResourceKind] = {
    ToolKind.PICKAXE: ResourceKind.DIRT,
    ToolKind.ORE_PROCESSOR: ResourceKind.GRAVEL,
    ToolKind.ENERGIZER: ResourceKind.STONE,
    ToolKind.BOOK: ResourceKind.COPPER,
    ToolKind.ROBOTICS: ResourceKind.SILVER,
    ToolKind.ARTIFICIAL_INTELLIGENCE: ResourceKind.EMERALD,
    ToolKind.MACHINE_LEARNING: ResourceKind.DIAMOND,
    ToolKind.NATIONAL_GRID: ResourceKind.UNOBTAINIUM,
}


class InfluenceKind(str, Enum):
    INCREASE_RESOURCES = "increaseResources"
    DECREASE_RESOURCES = "decreaseResources"
    INCREASE_LENGTH = "increaseLength"
    INCREASE_CACHES = "increaseCaches"
    INCREASE_GENS = "increaseGens"
    INCREASE_INFLUENCES = "increaseInfluences"
    INCREASE_ENERGY_MULTS = "increaseEnergyMults"
    INCREASE_RESOURCE_MULTS = "increaseResourceMults"
    INCREASE_DIFF = "increaseDiff"
    DECREASE_DIFF = "decreaseDiff"
    INCREASE_REWARDS = "increaseRewards"
    RELIC = "relic"

    @property
    def takes_resources(self) -> bool:
        """Influences whose data is a list of resources (resource nodes can be dropped on them)."""
        return self in (InfluenceKind.INCREASE_RESOURCES, InfluenceKind.DECREASE_RESOURCES)


@dataclass(frozen=True, slots=True)
class ToolRecipe:
    """What a factory crafts out of a discovered resource."""

    resource: ResourceKind
    name: str
    node_type: str
    cost: float


TOOL_RECIPES: dict[ResourceKind, ToolRecipe] = {
    recipe.resource: recipe
    for recipe in (
        ToolRecipe(ResourceKind.DIRT, "Pickaxe", "passive", 1e3),
        ToolRecipe(ResourceKind.SAND, "Dowsing Rod", "dowsing", 1e4),
        ToolRecipe(ResourceKind.GRAVEL, "Ore Processor", "passive", 1e5),
        ToolRecipe(ResourceKind.WOOD, "Quarry", "quarry", 1e6),
        ToolRecipe(ResourceKind.STONE, "Energizer", "passive", 1e7),
        ToolRecipe(ResourceKind.COAL, "Tool Empowerer", "empowerer", 1e8),
        ToolRecipe(ResourceKind.COPPER, "Book", "passive", 1e9),
        ToolRecipe(ResourceKind.IRON, "Portal Generator", "portalGenerator", 1e10),
        ToolRecipe(ResourceKind.SILVER, "Robotics", "passive", 1e12),
        ToolRecipe(ResourceKind.GOLD, "Booster", "booster", 1e15),
        ToolRecipe(ResourceKind.EMERALD, "Artificial Intelligence", "passive", 1e19),
        ToolRecipe(ResourceKind.PLATINUM, "Upgrader", "upgrader", 1e24),
        ToolRecipe(ResourceKind.DIAMOND, "Machine Learning", "passive", 1e30),
        ToolRecipe(ResourceKind.BERYLIUM, "Automator", "automator", 1e37),
        ToolRecipe(ResourceKind.UNOBTAINIUM, "National Grid", "passive", 1e45),
        ToolRecipe(ResourceKind.ULTIMATUM, "Investments", "investments", 1e54),
    )
}
