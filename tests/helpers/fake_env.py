"""FakeEnvironment — scripted host world for monitor tests.

Every query reads from plain dicts the test fills in, and any query can be
made to raise by naming it in ``failing``.

Usage:
    env = FakeEnvironment()
    env.put_agent("a1", health=5)
    env.put_actor("a1", "minecraft:zombie", distance=3)
    sink = RecordingSink()
    ctx = make_context()
    dispatcher = make_dispatcher(ctx, env, sink)
    dispatcher.process_threats("a1")
    assert "5" in sink.texts("a1")[-1]
"""

from __future__ import annotations

import os
import sys
from dataclasses import replace
from typing import Sequence

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from scoutwatch.ai.quests import QuestGenerator
from scoutwatch.ai.resources import ResourceScanner
from scoutwatch.ai.state_analyzer import StateAnalyzer
from scoutwatch.ai.structures import StructureScanner
from scoutwatch.ai.threats import ThreatScorer
from scoutwatch.config import MonitorConfig
from scoutwatch.core.catalogs import OVERWORLD
from scoutwatch.core.enums import NotificationChannel
from scoutwatch.core.environment import Environment, MessageSink
from scoutwatch.core.models import ActorSighting, AgentReading, ItemStack, Vector3
from scoutwatch.engine.context import MonitorContext
from scoutwatch.engine.dispatcher import NotificationDispatcher
from scoutwatch.systems.clock import ManualClock

ORIGIN = Vector3(0.5, 64.0, 0.5)


class FakeEnvironment(Environment):
    def __init__(self) -> None:
        self.agents: dict[str, AgentReading] = {}
        self.cells: dict[tuple[str, int, int, int], str] = {}
        self.actors: list[tuple[str, ActorSighting]] = []
        self.region: str | None = "minecraft:plains"
        self.time_of_day = 1000
        self.structures: list[str] = []
        self.failing: set[str] = set()
        self.calls: dict[str, int] = {}
        self._next_actor = 0

    # -- scripting --

    def put_agent(self, agent_id: str, position: Vector3 = ORIGIN, dimension: str = OVERWORLD,
                  items: Sequence[str | ItemStack] = (), **fields) -> AgentReading:
        inventory = tuple(i if isinstance(i, ItemStack) else ItemStack(i) for i in items)
        reading = AgentReading(agent_id=agent_id, position=position, dimension=dimension,
                               inventory=inventory, **fields)
        self.agents[agent_id] = reading
        return reading

    def move_agent(self, agent_id: str, position: Vector3) -> None:
        self.agents[agent_id] = replace(self.agents[agent_id], position=position)

    def update_agent(self, agent_id: str, **fields) -> None:
        self.agents[agent_id] = replace(self.agents[agent_id], **fields)

    def put_actor(self, agent_id: str, actor_type: str, distance: float,
                  dimension: str = OVERWORLD) -> ActorSighting:
        """Place an actor *distance* blocks east of the agent."""
        self._next_actor += 1
        origin = self.agents[agent_id].position
        sighting = ActorSighting(f"actor-{self._next_actor}", actor_type, origin.offset(distance, 0, 0))
        self.actors.append((dimension, sighting))
        return sighting

    def put_cell(self, cell: tuple[int, int, int], cell_type: str, dimension: str = OVERWORLD) -> None:
        x, y, z = cell
        self.cells[(dimension, x, y, z)] = cell_type

    def _enter(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.failing:
            raise RuntimeError(f"{name} unavailable")

    # -- Environment --

    def list_agents(self) -> Sequence[str]:
        self._enter("list_agents")
        return list(self.agents)

    def query_agent_state(self, agent_id: str) -> AgentReading | None:
        self._enter("query_agent_state")
        return self.agents.get(agent_id)

    def query_terrain_cell(self, dimension: str, cell: tuple[int, int, int]) -> str | None:
        self._enter("query_terrain_cell")
        x, y, z = cell
        return self.cells.get((dimension, x, y, z), "minecraft:air")

    def query_nearby_actors(self, dimension: str, position: Vector3, max_distance: float,
                            exclude_types: Sequence[str] = (), actor_type: str | None = None,
                            ) -> list[ActorSighting]:
        self._enter("query_nearby_actors")
        return [
            s for dim, s in self.actors
            if dim == dimension
            and s.actor_type not in exclude_types
            and (actor_type is None or s.actor_type == actor_type)
            and s.position.distance(position) <= max_distance
        ]

    def query_region_type(self, dimension: str, position: Vector3) -> str | None:
        self._enter("query_region_type")
        return self.region

    def query_time_of_day(self) -> int:
        self._enter("query_time_of_day")
        return self.time_of_day

    def query_structures(self, dimension: str, position: Vector3) -> list[str]:
        self._enter("query_structures")
        return list(self.structures)


class RecordingSink(MessageSink):
    """Captures every delivered line for assertions."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, NotificationChannel]] = []
        self.broadcasts: list[str] = []

    def send(self, agent_id: str, text: str,
             channel: NotificationChannel = NotificationChannel.SYSTEM) -> None:
        self.sent.append((agent_id, text, channel))

    def broadcast(self, text: str) -> None:
        self.broadcasts.append(text)

    def texts(self, agent_id: str | None = None,
              channel: NotificationChannel | None = None) -> list[str]:
        return [
            text for aid, text, ch in self.sent
            if (agent_id is None or aid == agent_id) and (channel is None or ch == channel)
        ]


def make_context(clock: ManualClock | None = None, **overrides) -> MonitorContext:
    return MonitorContext(MonitorConfig(**overrides), clock or ManualClock())


def make_dispatcher(ctx: MonitorContext, env: Environment, sink: MessageSink) -> NotificationDispatcher:
    cfg = ctx.config
    return NotificationDispatcher(
        ctx, env, sink,
        analyzer=StateAnalyzer(ctx, env),
        threats=ThreatScorer(ctx, env),
        resources=ResourceScanner(env, cfg.resource_scan_radius),
        quests=QuestGenerator(cfg),
        structures=StructureScanner(ctx, env),
    )
