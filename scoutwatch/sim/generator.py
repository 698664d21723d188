"""World generator — deterministic population and per-tick drift.

Every random decision is a pure function of (seed, domain, key, tick) so a
run with a given seed always replays the same way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scoutwatch.core.catalogs import (
    HAZARDOUS_TERRAIN,
    HOSTILE_ACTORS,
    OVERWORLD,
    RAIDER_TYPE,
    STRUCTURE_MESSAGES,
    TRADER_TYPE,
    VALUABLE_RESOURCES,
    capabilities_of,
    hazard_tier,
)
from scoutwatch.core.enums import Capability, Domain, HazardTier
from scoutwatch.core.events import FALL_DAMAGE, ActorDied, AgentDamaged, AgentTraded
from scoutwatch.core.models import ItemStack, Vector3
from scoutwatch.sim.world import GROUND_LEVEL, SimAgent

if TYPE_CHECKING:
    from scoutwatch.config import MonitorConfig
    from scoutwatch.core.events import LifecycleEvent
    from scoutwatch.sim.world import SimActor, SimulatedWorld
    from scoutwatch.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

AGENT_SPACING = 300
WANDER_EVERY = 20
HUNGER_EVERY = 400
REGEN_EVERY = 80
ATTACK_EVERY = 20
ACTOR_STEP_EVERY = 10
KILL_EVERY = 40
FALL_EVERY = 100
TRADE_EVERY = 200
RESPAWN_EVERY = 200
CHASE_RADIUS = 24
HOSTILES_PER_AGENT = 4

_FOOD = ItemStack("minecraft:bread", amount=4, is_food=True)

# Starter loadouts, from fresh spawn to late game
STARTER_KITS: tuple[tuple[ItemStack, ...], ...] = (
    (ItemStack("minecraft:oak_log", 8), ItemStack("minecraft:oak_planks", 12)),
    (
        ItemStack("minecraft:cobblestone", 32),
        ItemStack("minecraft:wooden_pickaxe", damage=10, max_durability=59),
        ItemStack("minecraft:wooden_sword", damage=20, max_durability=59),
        _FOOD,
    ),
    (
        ItemStack("minecraft:iron_ingot", 6),
        ItemStack("minecraft:stone_pickaxe", damage=30, max_durability=131),
        ItemStack("minecraft:stone_sword", damage=120, max_durability=131),
        ItemStack("minecraft:cooked_beef", 5, is_food=True),
        ItemStack("minecraft:red_bed"),
    ),
    (
        ItemStack("minecraft:diamond", 3),
        ItemStack("minecraft:iron_pickaxe", damage=40, max_durability=250),
        ItemStack("minecraft:iron_sword", damage=60, max_durability=250),
        ItemStack("minecraft:iron_chestplate", damage=10, max_durability=240),
        ItemStack("minecraft:shield", damage=5, max_durability=336),
        ItemStack("minecraft:water_bucket"),
        _FOOD,
    ),
)


def _agent_key(agent_id: str) -> int:
    digits = "".join(ch for ch in agent_id if ch.isdigit())
    return int(digits) if digits else len(agent_id)


class WorldGenerator:
    """Populates a SimulatedWorld and advances it one tick at a time."""

    __slots__ = ("_config", "_rng", "_spawns")

    def __init__(self, config: MonitorConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        self._spawns: dict[str, Vector3] = {}

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def populate(self, world: SimulatedWorld) -> None:
        rng = self._rng
        for i in range(self._config.agent_count):
            agent_id = f"agent-{i + 1}"
            x = i * AGENT_SPACING + rng.next_int(Domain.WORLD_GEN, i, 0, -20, 20)
            z = rng.next_int(Domain.WORLD_GEN, i, 1, -20, 20)
            spawn = Vector3(x + 0.5, GROUND_LEVEL, z + 0.5)
            self._spawns[agent_id] = spawn

            kit = STARTER_KITS[i % len(STARTER_KITS)]
            world.add_agent(SimAgent(agent_id, spawn, OVERWORLD, inventory=list(kit)))
            self._scatter_terrain(world, i, spawn)
            self._scatter_actors(world, i, spawn)
        logger.info(
            "World populated: %d agents, %d actors, %d placed cells",
            len(world.agents), len(world.actors), len(world.cells),
        )

    def _scatter_terrain(self, world: SimulatedWorld, idx: int, spawn: Vector3) -> None:
        rng = self._rng
        ores = tuple(VALUABLE_RESOURCES)
        hazards = tuple(HAZARDOUS_TERRAIN)
        for n in range(rng.next_int(Domain.WORLD_GEN, idx, 10, 2, 5)):
            cell = spawn.offset(
                rng.next_int(Domain.WORLD_GEN, idx, 20 + n, -5, 5),
                rng.next_int(Domain.WORLD_GEN, idx, 40 + n, -5, -1),
                rng.next_int(Domain.WORLD_GEN, idx, 60 + n, -5, 5),
            ).floored()
            world.set_cell(OVERWORLD, cell, rng.choice(Domain.WORLD_GEN, idx, 80 + n, ores))
        for n in range(rng.next_int(Domain.WORLD_GEN, idx, 11, 0, 2)):
            cell = spawn.offset(
                rng.next_int(Domain.WORLD_GEN, idx, 100 + n, -2, 2),
                rng.next_int(Domain.WORLD_GEN, idx, 120 + n, -1, 1),
                rng.next_int(Domain.WORLD_GEN, idx, 140 + n, -2, 2),
            ).floored()
            world.set_cell(OVERWORLD, cell, rng.choice(Domain.WORLD_GEN, idx, 160 + n, hazards))
        if rng.next_bool(Domain.WORLD_GEN, idx, 12, 0.5):
            name = rng.choice(Domain.WORLD_GEN, idx, 13, tuple(STRUCTURE_MESSAGES))
            world.add_structure(OVERWORLD, spawn, f"minecraft:{name}")

    def _scatter_actors(self, world: SimulatedWorld, idx: int, spawn: Vector3) -> None:
        rng = self._rng
        if idx % 2 == 0:
            for n in range(rng.next_int(Domain.SPAWN, idx, 0, 4, 6)):
                world.spawn_actor(TRADER_TYPE, self._around(spawn, idx, 10 + n, 10, 30))
        if idx % 3 == 1:
            for n in range(rng.next_int(Domain.SPAWN, idx, 1, 2, 3)):
                world.spawn_actor(RAIDER_TYPE, self._around(spawn, idx, 30 + n, 40, 120))
        for n in range(rng.next_int(Domain.SPAWN, idx, 2, 2, HOSTILES_PER_AGENT)):
            kind = rng.choice(Domain.SPAWN, idx, 50 + n, HOSTILE_ACTORS)
            world.spawn_actor(kind, self._around(spawn, idx, 60 + n, 5, 20))

    def _around(self, center: Vector3, key: int, salt: int, near: int, far: int) -> Vector3:
        rng = self._rng
        dx = rng.next_int(Domain.SPAWN, key, 1000 + salt, near, far)
        dz = rng.next_int(Domain.SPAWN, key, 2000 + salt, -far, far)
        if rng.next_bool(Domain.SPAWN, key, 3000 + salt):
            dx = -dx
        return center.offset(dx, 0, dz)

    # ------------------------------------------------------------------
    # Drift
    # ------------------------------------------------------------------

    def drift(self, world: SimulatedWorld, tick: int) -> list[LifecycleEvent]:
        events: list[LifecycleEvent] = []
        for agent in list(world.agents.values()):
            key = _agent_key(agent.agent_id)
            self._wander(agent, key, tick)
            self._metabolise(agent, tick)
            self._take_hits(world, agent, key, tick)
            events.extend(self._agent_events(world, agent, key, tick))
            if agent.health <= 0:
                self._respawn(agent)
        if tick % ACTOR_STEP_EVERY == 0:
            self._chase(world)
        if tick % RESPAWN_EVERY == 0:
            self._repopulate(world, tick)
        return events

    def _wander(self, agent: SimAgent, key: int, tick: int) -> None:
        if tick % WANDER_EVERY:
            return
        rng = self._rng
        if rng.next_bool(Domain.AGENT_MOVE, key, tick, 0.02):
            reach = 60
        else:
            reach = 4
        dx = rng.next_int(Domain.AGENT_MOVE, key, tick + 1, -reach, reach)
        dz = rng.next_int(Domain.AGENT_MOVE, key, tick + 2, -reach, reach)
        agent.position = agent.position.offset(dx, 0, dz)

    def _metabolise(self, agent: SimAgent, tick: int) -> None:
        if tick % HUNGER_EVERY == 0:
            agent.hunger = max(agent.hunger - 1, 0)
            if agent.hunger < 8 and any(s.is_food for s in agent.inventory):
                agent.hunger = 20
        if tick % REGEN_EVERY == 0 and agent.hunger > 17:
            agent.health = min(agent.health + 1, 20.0)

    def _take_hits(self, world: SimulatedWorld, agent: SimAgent, key: int, tick: int) -> None:
        if tick % ATTACK_EVERY:
            return
        for actor in world.actors.values():
            if actor.dimension != agent.dimension or hazard_tier(actor.actor_type) is HazardTier.NONE:
                continue
            if actor.position.distance(agent.position) <= 2:
                agent.health -= self._rng.next_int(Domain.HEALTH, key, tick, 1, 3)

    def _agent_events(self, world: SimulatedWorld, agent: SimAgent, key: int, tick: int) -> list[LifecycleEvent]:
        rng = self._rng
        events: list[LifecycleEvent] = []

        if tick % KILL_EVERY == 0:
            armed = any(Capability.WEAPON in capabilities_of(s.item_id) for s in agent.inventory)
            target = self._nearest(world, agent, HazardTier.HOSTILE, 3)
            if target is not None and (armed or rng.next_bool(Domain.HEALTH, key, tick + 1)):
                world.remove_actor(target.actor_id)
                events.append(ActorDied(target.actor_type, agent.agent_id))

        if tick % FALL_EVERY == 0 and rng.next_bool(Domain.HEALTH, key, tick + 2, 0.1):
            amount = rng.next_int(Domain.HEALTH, key, tick + 3, 2, 9)
            agent.health -= amount
            events.append(AgentDamaged(agent.agent_id, FALL_DAMAGE, amount))

        if tick % TRADE_EVERY == 0:
            traders = world.query_nearby_actors(agent.dimension, agent.position, 5, actor_type=TRADER_TYPE)
            if traders and rng.next_bool(Domain.INVENTORY, key, tick, 0.3):
                events.append(AgentTraded(agent.agent_id))
        return events

    def _respawn(self, agent: SimAgent) -> None:
        agent.position = self._spawns.get(agent.agent_id, agent.position)
        agent.health = 20.0
        agent.hunger = 20
        logger.debug("Agent %s died and respawned", agent.agent_id)

    def _chase(self, world: SimulatedWorld) -> None:
        for actor in world.actors.values():
            if hazard_tier(actor.actor_type) is HazardTier.NONE:
                continue
            prey = self._closest_agent(world, actor)
            if prey is None:
                continue
            d = actor.position.distance(prey.position)
            if 1.5 < d <= CHASE_RADIUS:
                step = 1.0 / d
                actor.position = actor.position.offset(
                    (prey.position.x - actor.position.x) * step, 0,
                    (prey.position.z - actor.position.z) * step,
                )

    def _repopulate(self, world: SimulatedWorld, tick: int) -> None:
        hostiles = sum(1 for a in world.actors.values() if hazard_tier(a.actor_type) is HazardTier.HOSTILE)
        if hostiles >= len(world.agents) * HOSTILES_PER_AGENT or not world.agents:
            return
        agents = sorted(world.agents)
        target = world.agents[self._rng.choice(Domain.SPAWN, 0, tick, agents)]
        kind = self._rng.choice(Domain.SPAWN, 1, tick, HOSTILE_ACTORS)
        world.spawn_actor(kind, self._around(target.position, tick, 0, 10, 20), target.dimension)

    @staticmethod
    def _nearest(world: SimulatedWorld, agent: SimAgent, tier: HazardTier, radius: float) -> SimActor | None:
        best: SimActor | None = None
        best_d = radius
        for actor in world.actors.values():
            if actor.dimension != agent.dimension or hazard_tier(actor.actor_type) is not tier:
                continue
            d = actor.position.distance(agent.position)
            if d <= best_d:
                best, best_d = actor, d
        return best

    @staticmethod
    def _closest_agent(world: SimulatedWorld, actor: SimActor) -> SimAgent | None:
        best: SimAgent | None = None
        best_d = float("inf")
        for agent in world.agents.values():
            if agent.dimension != actor.dimension:
                continue
            d = agent.position.distance(actor.position)
            if d < best_d:
                best, best_d = agent, d
        return best
