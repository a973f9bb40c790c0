"""
Simulation context - owns the board, ledgers and systems, and advances them one tick at a time.
"""
from __future__ import annotations

from decimal import Decimal

from loguru import logger

from config import (
    BOOST_COST_OFFSET,
    PLANE_BASE_RESOURCE_GAIN,
    SIM_SEED,
    START_NODE_POSITION,
    STARTING_ENERGY,
)
from planar.board import Board
from planar.entities.node import (
    InfluenceState,
    MineState,
    Node,
    NodeType,
    PassiveState,
    PortalState,
    ResourceState,
    default_state,
)
from planar.entities.plane import Plane, create_plane
from planar.entities.registry import UPKEEP_TYPES
from planar.entities.resources import (
    RESOURCE_ORDER,
    TOOL_RECIPES,
    InfluenceKind,
    ResourceKind,
    ToolKind,
)
from planar.sim.contracts import NodeSnapshot, SimulationSnapshot, to_plain
from planar.sim.determinism import get_stream
from planar.sim.timebase import SimClock, check_dt
from planar.systems.economy import EconomySystem, resource_level
from planar.systems.modifiers import ToolEffects, drop_rates
from planar.systems.production import ProductionSystem


class SimulationContext:
    """
    One game's worth of simulation state.

    Created once per game and passed to whoever needs it; there is no
    module-level singleton.
    """

    def __init__(self, seed: int = SIM_SEED, energy=STARTING_ENERGY):
        self.seed = int(seed) & 0xFFFFFFFF
        self.board = Board()
        self.economy = EconomySystem(energy=energy)
        self.production = ProductionSystem(stream=get_stream(self.seed, "mine"))
        # Seeds for new planes come from their own stream so mining draws never shift them.
        self.plane_seeds = get_stream(self.seed, "plane_seeds")
        self.clock = SimClock()
        self.planes: dict[str, Plane] = {}
        self.bonus_connections = 0

        self.mine = self.board.add_node(NodeType.MINE, MineState(), near=START_NODE_POSITION)
        logger.info("Simulation started (seed={})", self.seed)

    # Queries

    def resource_node(self, kind: ResourceKind) -> Node | None:
        return next(
            (n for n in self.board.of_type(NodeType.RESOURCE) if n.state.kind == kind), None
        )

    @property
    def ledger(self) -> dict[ResourceKind, Decimal]:
        """Discovered resources only; a resource has no entry until first granted."""
        return {n.state.kind: n.state.amount for n in self.board.of_type(NodeType.RESOURCE)}

    def amount(self, kind: ResourceKind) -> Decimal:
        node = self.resource_node(kind)
        return node.state.amount if node is not None else Decimal(0)

    def tool_node(self, tool: ToolKind) -> Node | None:
        return next(
            (n for n in self.board.of_type(NodeType.PASSIVE) if n.state.tool == tool), None
        )

    def tool_effects(self) -> ToolEffects:
        present = frozenset(n.state.tool for n in self.board.of_type(NodeType.PASSIVE))
        empowerer = self.board.first_of_type(NodeType.EMPOWERER)
        empowered = frozenset()
        if empowerer is not None and self.board.is_active(empowerer):
            empowered = frozenset(empowerer.state.connections) & present
        return ToolEffects(present=present, empowered=empowered)

    def is_empowered(self, tool: ToolKind) -> bool:
        return tool in self.tool_effects().empowered

    def current_drop_rates(self) -> dict[ResourceKind, int]:
        dowsing = self.board.first_of_type(NodeType.DOWSING)
        if dowsing is not None and self.board.is_active(dowsing):
            return drop_rates(dowsing.state.connections)
        return drop_rates()

    def powered_count(self) -> int:
        return sum(1 for n in self.board if n.type in UPKEEP_TYPES and n.powered)

    def resource_levels(self) -> dict[ResourceKind, int]:
        return {kind: resource_level(amount) for kind, amount in self.ledger.items()}

    def active_portals(self) -> list[Node]:
        return [n for n in self.board.of_type(NodeType.PORTAL) if self.board.is_active(n)]

    def planar_multis(self) -> dict[str, Decimal]:
        """Product of every active portal's earned multipliers, keyed by resource name or "energy"."""
        multis: dict[str, Decimal] = {}
        for portal in self.active_portals():
            plane = self.planes.get(portal.state.plane_id)
            if plane is None:
                continue
            for key, value in plane.resource_multis.items():
                multis[key] = multis.get(key, Decimal(1)) * Decimal(value)
        return multis

    # Grants

    def grant_resource(self, kind: ResourceKind, amount) -> Node:
        """Add `amount` of `kind`, creating its resource node next to the mine on first grant."""
        kind = ResourceKind(kind)
        amount = Decimal(amount) * self.planar_multis().get(kind.value, Decimal(1))
        node = self.resource_node(kind)
        if node is None:
            node = self.board.add_node(
                NodeType.RESOURCE, ResourceState(kind=kind, amount=amount), near=self.mine.position
            )
            logger.info("{} discovered", kind.value.title())
        else:
            self.board.replace_state(node, amount=node.state.amount + amount)
        return node

    # Tick

    def update(self, dt: float) -> None:
        """Advance the whole simulation by `dt` seconds."""
        dt = check_dt(dt)
        self.clock.advance(dt)
        # Edits made between ticks may have shrunk the bonus; trim before anything reads links.
        self.refresh_bonus_connections()
        effects = self.tool_effects()

        # Cooldowns expire before this tick's grants can re-arm them.
        self.production.sweep(dt)

        if self.board.is_active(self.mine):
            result = self.production.mine(
                self.mine.state.progress,
                dt,
                weights=self.current_drop_rates(),
                speed=effects.mining_speed,
                gain=effects.material_gain,
            )
            self.board.replace_state(self.mine, progress=result.progress)
            for kind, amount in result.grants.items():
                self.grant_resource(kind, amount)

        quarry = self.board.first_of_type(NodeType.QUARRY)
        if quarry is not None and self.board.is_active(quarry) and quarry.state.connections:
            result = self.production.quarry(
                quarry.state.progress, dt, quarry.state.connections, self.current_drop_rates()
            )
            self.board.replace_state(quarry, progress=result.progress)
            for kind, amount in result.grants.items():
                self.grant_resource(kind, amount)

        for portal in self.active_portals():
            plane = self.planes.get(portal.state.plane_id)
            if plane is not None:
                self.advance_plane(plane, dt, effects)

        rate = self.economy.energy_per_second(
            levels=self.resource_levels().values(),
            level_effect=effects.material_level_effect,
            multiplier=effects.energy_multiplier * self.planar_multis().get("energy", Decimal(1)),
            powered_count=self.powered_count(),
        )
        if self.economy.apply(dt, rate):
            self.board.replace_state(self.mine, powered=False)

        self.refresh_bonus_connections()

    # Planes

    def plane_speed(self, plane_id: str) -> int:
        """Time multiplier for a plane: an active booster linked to it runs it at level + 1."""
        booster = self.board.first_of_type(NodeType.BOOSTER)
        if booster is not None and self.board.is_active(booster) and plane_id in booster.state.connections:
            return booster.state.level + 1
        return 1

    def advance_plane(self, plane: Plane, dt: float, effects: ToolEffects | None = None) -> Decimal:
        """Run one active plane for `dt` seconds; returns the resource it earned."""
        effects = effects or self.tool_effects()
        elapsed = dt * self.plane_speed(plane.id)
        plane.time_active = self.clock.mark_active(plane.id, elapsed)
        earned = effects.plane_resource_gain(PLANE_BASE_RESOURCE_GAIN, plane.time_active) * Decimal(
            str(elapsed)
        )
        plane.resource_amount += earned
        return earned

    def boost_cost(self, booster: Node) -> Decimal:
        return Decimal(10) ** ((booster.state.level + BOOST_COST_OFFSET) * 2)

    def increase_boost(self, booster: Node) -> bool:
        """Spend energy to raise the booster's level by one."""
        if booster.type != NodeType.BOOSTER:
            raise ValueError(f"{booster.type.value} nodes cannot be boosted")
        if not self.economy.spend(self.boost_cost(booster), "boost", level=booster.state.level):
            return False
        self.board.replace_state(booster, level=booster.state.level + 1)
        return True

    # Connections and capacity

    def refresh_bonus_connections(self, bonus: int | None = None) -> list[Node]:
        """
        Recompute the bonus connection slots (or set them explicitly).

        When the bonus shrinks, every machine is trimmed back to its new
        effective capacity. Returns the trimmed nodes.
        """
        previous = self.bonus_connections
        self.bonus_connections = self.tool_effects().bonus_connections if bonus is None else int(bonus)
        if self.bonus_connections < previous:
            return self.board.enforce_capacities(self.bonus_connections)
        return []

    def capacity(self, node: Node) -> int:
        return self.board.capacity(node, self.bonus_connections)

    def select(self, node: Node | None) -> None:
        """Select `node` (it runs for free while selected), or clear the selection."""
        self.board.select(node)
        self.refresh_bonus_connections()

    def drop(self, node: Node, other: Node) -> bool:
        """Drop `other` onto `node` (the board's drag-and-drop gesture)."""
        self.refresh_bonus_connections()
        if node.type == NodeType.TRASH_CAN and other.type == NodeType.PORTAL:
            self.delete_portal(other)
            return True
        if node.type == NodeType.PORTAL_GENERATOR and other.type == NodeType.PORTAL:
            plane = self.planes[other.state.plane_id]
            self.board.replace_state(node, tier=plane.tier, influences=plane.influence_kinds)
            self.select(node)
            return True
        linked = self.board.drop(node, other, self.bonus_connections)
        self.refresh_bonus_connections()
        return linked

    def toggle_powered(self, node: Node) -> bool:
        powered = self.board.toggle_powered(node)
        self.refresh_bonus_connections()
        return powered

    def buy_connection(self, node: Node) -> bool:
        """Spend energy for one more base connection slot on `node`."""
        if not node.holds_connections:
            raise ValueError(f"{node.type.value} nodes have no connections")
        if not self.economy.buy_connection(node.state.max_connections):
            return False
        self.board.replace_state(node, max_connections=node.state.max_connections + 1)
        return True

    # Crafting

    def craft_tool(self, resource: ResourceKind, near: tuple[float, float] | None = None) -> Node | None:
        """Craft the tool unlocked by `resource`. Returns None if unaffordable or already built."""
        resource = ResourceKind(resource)
        recipe = TOOL_RECIPES[resource]
        node_type = NodeType(recipe.node_type)
        if self.resource_node(resource) is None:
            raise ValueError(f"{resource.value} has not been discovered yet")
        if node_type == NodeType.PASSIVE:
            if self.tool_node(ToolKind.for_resource(resource)) is not None:
                return None
            state = PassiveState(tool=ToolKind.for_resource(resource))
        else:
            if self.board.first_of_type(node_type) is not None:
                return None
            state = default_state(node_type)
        if not self.economy.spend(recipe.cost, "tool", tool=recipe.name):
            return None
        node = self.board.add_node(node_type, state, near=near or self.mine.position)
        logger.info("Crafted {}", recipe.name)
        self.refresh_bonus_connections()
        return node

    def add_influence(self, kind: InfluenceKind, near: tuple[float, float] | None = None) -> Node:
        node = self.board.add_node(
            NodeType.INFLUENCE, InfluenceState(kind=InfluenceKind(kind)), near=near or self.mine.position
        )
        return node

    def add_trash_can(self, near: tuple[float, float] | None = None) -> Node:
        return self.board.add_node(NodeType.TRASH_CAN, default_state(NodeType.TRASH_CAN), near=near)

    # Planes

    def _influence_states(self, kinds) -> list[InfluenceState]:
        by_kind = {n.state.kind: n.state for n in self.board.of_type(NodeType.INFLUENCE)}
        return [by_kind.get(kind, InfluenceState(kind=kind)) for kind in kinds]

    def _next_plane_id(self) -> str:
        n = 0
        while f"portal-{n}" in self.planes:
            n += 1
        return f"portal-{n}"

    def spawn_portal(self, generator: Node, seed: int | None = None) -> Node | None:
        """
        Spend energy to open a portal to a new plane of the generator's tier.

        Returns the portal node, or None if the portal cost can't be paid.
        """
        if generator.type != NodeType.PORTAL_GENERATOR:
            raise ValueError(f"{generator.type.value} nodes cannot spawn portals")
        tier = generator.state.tier
        if tier is None:
            raise ValueError("portal generator has no tier; drop a resource on it first")
        plane_id = self._next_plane_id()
        if not self.economy.spend(self.economy.portal_cost, "portal", plane=plane_id):
            return None
        if seed is None:
            seed = self.plane_seeds.next_u32()
        plane = create_plane(plane_id, tier, seed, self._influence_states(generator.state.influences))
        self.planes[plane_id] = plane
        node = self.board.add_node(
            NodeType.PORTAL, PortalState(plane_id=plane_id), near=generator.position
        )
        self.board.replace_state(generator, tier=None, influences=())
        self.select(None)
        logger.info("Opened portal to {} ({})", plane.name, plane_id)
        return node

    def restore_plane(
        self, plane_id: str, tier: ResourceKind, seed: int, influences=(), resource_multis=None
    ) -> Plane:
        """Rebuild a saved plane from its seed; only earned multipliers are stored alongside it."""
        plane = create_plane(plane_id, tier, seed, influences)
        for key, multi in (resource_multis or {}).items():
            plane.add_resource_multi(key, multi)
        self.planes[plane_id] = plane
        return plane

    def delete_portal(self, portal: Node) -> Plane | None:
        """Remove a portal node, its plane, and every link to it."""
        if portal.type != NodeType.PORTAL:
            raise ValueError(f"{portal.type.value} nodes are not portals")
        self.board.remove_node(portal)
        plane = self.planes.pop(portal.state.plane_id, None)
        self.clock.forget(portal.state.plane_id)
        if plane is not None:
            logger.info("Deleted plane {} ({})", plane.name, plane.id)
        return plane

    # Persistence

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            elapsed=self.clock.elapsed,
            energy=str(self.economy.energy),
            bonus_connections=self.bonus_connections,
            nodes=[
                NodeSnapshot(id=n.id, type=n.type.value, position=n.position, state=to_plain(n.state))
                for n in self.board
            ],
            planes=[plane.to_dict() for plane in self.planes.values()],
            ledger={kind.value: str(amount) for kind, amount in self.ledger.items()},
            mined_cooldowns=self.production.mined_cooldowns.to_dict(),
            quarried_cooldowns=self.production.quarried_cooldowns.to_dict(),
        )

    def get_game_state(self) -> dict:
        """Compact summary for drivers and debug output."""
        return {
            "elapsed": self.clock.elapsed,
            "energy": self.economy.energy,
            "resources": {kind.value: self.amount(kind) for kind in RESOURCE_ORDER if kind in self.ledger},
            "planes": {pid: plane.name for pid, plane in self.planes.items()},
            "powered": self.powered_count(),
        }
