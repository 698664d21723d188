"""SimulatedWorld — an in-memory host world for headless runs, the API and tests.

Terrain is sparse: only cells that were explicitly placed are stored; every
other cell is derived from its height (solid below the ground level, air
above). Regions are assigned per 64x64 column block from the world seed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from scoutwatch.core.catalogs import NETHER, OVERWORLD, THE_END
from scoutwatch.core.enums import Domain
from scoutwatch.core.environment import Environment
from scoutwatch.core.events import AgentJoined, AgentLeft, EventSource
from scoutwatch.core.models import ActorSighting, AgentReading, ItemStack, Vector3

if TYPE_CHECKING:
    from scoutwatch.core.events import LifecycleEvent
    from scoutwatch.sim.generator import WorldGenerator
    from scoutwatch.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

GROUND_LEVEL = 64
REGION_BLOCK = 64
DAY_LENGTH = 24000
INVENTORY_SLOTS = 36

REGIONS: dict[str, tuple[str, ...]] = {
    OVERWORLD: (
        "minecraft:plains", "minecraft:forest", "minecraft:desert", "minecraft:ocean",
        "minecraft:taiga", "minecraft:savanna", "minecraft:jungle", "minecraft:swamp",
    ),
    NETHER: ("minecraft:nether_wastes", "minecraft:crimson_forest", "minecraft:soul_sand_valley"),
    THE_END: ("minecraft:the_end", "minecraft:end_highlands"),
}

_GROUND_CELLS = {
    OVERWORLD: "minecraft:stone",
    NETHER: "minecraft:netherrack",
    THE_END: "minecraft:end_stone",
}


@dataclass(slots=True)
class SimAgent:
    agent_id: str
    position: Vector3
    dimension: str = OVERWORLD
    health: float = 20.0
    hunger: int = 20
    air_supply: int = 300
    in_water: bool = False
    inventory: list[ItemStack] = field(default_factory=list)

    def reading(self) -> AgentReading:
        return AgentReading(
            agent_id=self.agent_id,
            position=self.position,
            dimension=self.dimension,
            health=self.health,
            hunger=self.hunger,
            air_supply=self.air_supply,
            in_water=self.in_water,
            inventory=tuple(self.inventory),
            empty_slots=max(INVENTORY_SLOTS - len(self.inventory), 0),
        )


@dataclass(slots=True)
class SimActor:
    actor_id: str
    actor_type: str
    position: Vector3
    dimension: str = OVERWORLD


class SimulatedWorld(Environment, EventSource):
    """Mutable world state plus the query surface the monitor reads through."""

    def __init__(self, seed: int, rng: DeterministicRNG, generator: WorldGenerator | None = None) -> None:
        self.seed = seed
        self.rng = rng
        self.tick = 0
        self.time_offset = 0
        self.agents: dict[str, SimAgent] = {}
        self.actors: dict[str, SimActor] = {}
        self.cells: dict[tuple[str, int, int, int], str] = {}
        self.structures: dict[tuple[str, int, int], list[str]] = {}
        self._generator = generator
        self._pending: list[LifecycleEvent] = []
        self._next_actor = 0

    # ------------------------------------------------------------------
    # Environment queries
    # ------------------------------------------------------------------

    def list_agents(self) -> Sequence[str]:
        return list(self.agents)

    def query_agent_state(self, agent_id: str) -> AgentReading | None:
        agent = self.agents.get(agent_id)
        return agent.reading() if agent is not None else None

    def query_terrain_cell(self, dimension: str, cell: tuple[int, int, int]) -> str | None:
        x, y, z = cell
        placed = self.cells.get((dimension, x, y, z))
        if placed is not None:
            return placed
        if y < GROUND_LEVEL:
            return _GROUND_CELLS.get(dimension, "minecraft:stone")
        return "minecraft:air"

    def query_nearby_actors(
        self,
        dimension: str,
        position: Vector3,
        max_distance: float,
        exclude_types: Sequence[str] = (),
        actor_type: str | None = None,
    ) -> list[ActorSighting]:
        found: list[ActorSighting] = []
        for actor in self.actors.values():
            if actor.dimension != dimension:
                continue
            if actor_type is not None and actor.actor_type != actor_type:
                continue
            if actor.actor_type in exclude_types:
                continue
            if actor.position.distance(position) <= max_distance:
                found.append(ActorSighting(actor.actor_id, actor.actor_type, actor.position))
        return found

    def query_region_type(self, dimension: str, position: Vector3) -> str | None:
        options = REGIONS.get(dimension)
        if not options:
            return None
        bx = math.floor(position.x / REGION_BLOCK)
        bz = math.floor(position.z / REGION_BLOCK)
        key = (bx * 73856093) ^ (bz * 19349663)
        return self.rng.choice(Domain.WORLD_GEN, key, 0, options)

    def query_time_of_day(self) -> int:
        return (self.time_offset + self.tick) % DAY_LENGTH

    def query_structures(self, dimension: str, position: Vector3) -> list[str]:
        bx = math.floor(position.x / REGION_BLOCK)
        bz = math.floor(position.z / REGION_BLOCK)
        return list(self.structures.get((dimension, bx, bz), ()))

    # ------------------------------------------------------------------
    # Event source
    # ------------------------------------------------------------------

    def poll(self, tick: int) -> list[LifecycleEvent]:
        self.tick = tick
        events, self._pending = self._pending, []
        if self._generator is not None:
            events.extend(self._generator.drift(self, tick))
        return events

    def emit(self, event: LifecycleEvent) -> None:
        """Queue an event for the next poll."""
        self._pending.append(event)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_agent(self, agent: SimAgent, initial_spawn: bool = True) -> SimAgent:
        self.agents[agent.agent_id] = agent
        self.emit(AgentJoined(agent.agent_id, initial_spawn))
        logger.debug("Agent %s spawned at %s", agent.agent_id, agent.position)
        return agent

    def remove_agent(self, agent_id: str) -> None:
        if self.agents.pop(agent_id, None) is not None:
            self.emit(AgentLeft(agent_id))

    def spawn_actor(self, actor_type: str, position: Vector3, dimension: str = OVERWORLD) -> SimActor:
        self._next_actor += 1
        actor = SimActor(f"actor-{self._next_actor}", actor_type, position, dimension)
        self.actors[actor.actor_id] = actor
        return actor

    def remove_actor(self, actor_id: str) -> SimActor | None:
        return self.actors.pop(actor_id, None)

    def set_cell(self, dimension: str, cell: tuple[int, int, int], cell_type: str) -> None:
        x, y, z = cell
        self.cells[(dimension, x, y, z)] = cell_type

    def add_structure(self, dimension: str, position: Vector3, name: str) -> None:
        bx = math.floor(position.x / REGION_BLOCK)
        bz = math.floor(position.z / REGION_BLOCK)
        self.structures.setdefault((dimension, bx, bz), []).append(name)
