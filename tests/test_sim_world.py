"""Tests for the simulated world: determinism, queries and events."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scoutwatch.config import MonitorConfig
from scoutwatch.core.catalogs import NETHER, OVERWORLD, TRADER_TYPE
from scoutwatch.core.enums import Domain
from scoutwatch.core.events import AgentJoined, AgentLeft
from scoutwatch.core.models import Vector3
from scoutwatch.engine.context import MonitorContext
from scoutwatch.engine.monitor_loop import MonitorLoop
from scoutwatch.sim import SimAgent, SimulatedWorld, build_world
from scoutwatch.systems.clock import ManualClock
from scoutwatch.systems.rng import DeterministicRNG
from scoutwatch.utils.notification_log import NotificationLog


def _bare_world(seed: int = 7) -> SimulatedWorld:
    return SimulatedWorld(seed, DeterministicRNG(seed))


def _run_headless(seed: int, ticks: int) -> list[tuple[int, str, str]]:
    config = MonitorConfig(world_seed=seed, max_ticks=ticks, agent_count=3)
    clock = ManualClock()
    world = build_world(config)
    log = NotificationLog(maxlen=50_000)
    loop = MonitorLoop(MonitorContext(config, clock), world, log, events=world)
    log.bind_tick_source(lambda: loop.tick)
    loop.run(after_tick=lambda _t: clock.advance(config.tick_duration_ms))
    return [(n.tick, n.agent_id, n.text) for n in log.latest(50_000)]


class TestDeterministicRNG:
    def test_same_inputs_same_output(self):
        a, b = DeterministicRNG(1), DeterministicRNG(1)
        assert a.next_float(Domain.SPAWN, 3, 9) == b.next_float(Domain.SPAWN, 3, 9)
        assert a.next_float(Domain.SPAWN, 3, 9) != a.next_float(Domain.SPAWN, 3, 10)

    def test_int_bounds_inclusive(self):
        rng = DeterministicRNG(5)
        values = {rng.next_int(Domain.WORLD_GEN, 0, t, 1, 3) for t in range(300)}
        assert values == {1, 2, 3}


class TestPopulation:
    def test_same_seed_same_world(self):
        config = MonitorConfig(world_seed=11, agent_count=4)
        a, b = build_world(config), build_world(config)
        assert {k: v.position for k, v in a.agents.items()} == {k: v.position for k, v in b.agents.items()}
        assert a.cells == b.cells
        assert [(x.actor_type, x.position) for x in a.actors.values()] == [
            (x.actor_type, x.position) for x in b.actors.values()
        ]

    def test_agent_ids_and_join_events(self):
        world = build_world(MonitorConfig(agent_count=3))
        assert list(world.agents) == ["agent-1", "agent-2", "agent-3"]
        joins = [e for e in world.poll(1) if isinstance(e, AgentJoined)]
        assert [e.agent_id for e in joins] == ["agent-1", "agent-2", "agent-3"]
        assert not any(isinstance(e, AgentJoined) for e in world.poll(2))

    def test_first_agent_has_traders_nearby(self):
        world = build_world(MonitorConfig(agent_count=1))
        reading = world.query_agent_state("agent-1")
        traders = world.query_nearby_actors(OVERWORLD, reading.position, 50, actor_type=TRADER_TYPE)
        assert len(traders) >= 4


class TestQueries:
    def test_terrain_defaults_by_height_and_dimension(self):
        world = _bare_world()
        assert world.query_terrain_cell(OVERWORLD, (0, 63, 0)) == "minecraft:stone"
        assert world.query_terrain_cell(OVERWORLD, (0, 64, 0)) == "minecraft:air"
        assert world.query_terrain_cell(NETHER, (0, 10, 0)) == "minecraft:netherrack"
        world.set_cell(OVERWORLD, (0, 63, 0), "minecraft:lava")
        assert world.query_terrain_cell(OVERWORLD, (0, 63, 0)) == "minecraft:lava"

    def test_region_stable_within_block(self):
        world = _bare_world()
        a = world.query_region_type(OVERWORLD, Vector3(1, 64, 1))
        b = world.query_region_type(OVERWORLD, Vector3(63, 70, 63))
        assert a == b
        assert a.startswith("minecraft:")
        assert world.query_region_type("modded:void", Vector3()) is None

    def test_time_of_day_wraps(self):
        world = _bare_world()
        world.time_offset = 23990
        world.poll(20)
        assert world.query_time_of_day() == 10

    def test_nearby_actor_filters(self):
        world = _bare_world()
        world.spawn_actor("minecraft:zombie", Vector3(5, 64, 0))
        world.spawn_actor("minecraft:player", Vector3(2, 64, 0))
        world.spawn_actor("minecraft:zombie", Vector3(5, 64, 0), NETHER)
        found = world.query_nearby_actors(OVERWORLD, Vector3(0, 64, 0), 12,
                                          exclude_types=("minecraft:player",))
        assert [a.actor_type for a in found] == ["minecraft:zombie"]

    def test_structures_by_block(self):
        world = _bare_world()
        world.add_structure(OVERWORLD, Vector3(10, 64, 10), "minecraft:village")
        assert world.query_structures(OVERWORLD, Vector3(50, 64, 50)) == ["minecraft:village"]
        assert world.query_structures(OVERWORLD, Vector3(70, 64, 50)) == []

    def test_remove_agent_emits_leave(self):
        world = _bare_world()
        world.add_agent(SimAgent("a1", Vector3()))
        world.poll(1)
        world.remove_agent("a1")
        world.remove_agent("a1")
        assert world.poll(2) == [AgentLeft("a1")]
        assert world.query_agent_state("a1") is None

    def test_reading_reports_free_slots(self):
        world = build_world(MonitorConfig(agent_count=1))
        reading = world.query_agent_state("agent-1")
        assert reading.empty_slots == 36 - len(reading.inventory)


class TestNotificationLog:
    def test_for_agent_includes_broadcasts_from_tick(self):
        now = [1]
        log = NotificationLog(tick_source=lambda: now[0])
        log.send("a1", "early")
        now[0] = 5
        log.broadcast("all")
        log.send("a2", "other")
        log.send("a1", "late")
        assert [n.text for n in log.for_agent("a1")] == ["early", "all", "late"]
        assert [n.text for n in log.for_agent("a1", since_tick=5)] == ["all", "late"]


class TestHeadlessRun:
    def test_replays_identically(self):
        first = _run_headless(seed=3, ticks=1200)
        second = _run_headless(seed=3, ticks=1200)
        assert first == second
        assert any(agent == "*" for _, agent, _ in first)
        assert any(agent.startswith("agent-") for _, agent, _ in first)

    def test_welcome_banner_delivered(self):
        messages = _run_headless(seed=9, ticks=200)
        welcome = [m for m in messages if "Your Elite Survival Companion" in m[2]]
        assert [(tick, agent) for tick, agent, _ in welcome] == [
            (41, "agent-1"), (41, "agent-2"), (41, "agent-3"),
        ]
