"""Tests for the notification gates: novelty, cooldowns, framing and isolation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scoutwatch.ai.quests import QuestGenerator
from scoutwatch.ai.resources import ResourceScanner
from scoutwatch.ai.state_analyzer import StateAnalyzer
from scoutwatch.ai.structures import OUTPOST_ALERT, VILLAGE_ALERT, StructureScanner
from scoutwatch.core.enums import NotificationChannel, ThreatKind
from scoutwatch.core.models import ScoredEvent, Vector3
from scoutwatch.engine.dispatcher import (
    GREETING,
    QUEST_HEADER,
    QUEST_SEPARATOR,
    NotificationDispatcher,
    frame_quests,
)
from tests.helpers.fake_env import ORIGIN, FakeEnvironment, RecordingSink, make_context, make_dispatcher

TICK_MS = 50


def _setup(**config):
    env = FakeEnvironment()
    sink = RecordingSink()
    ctx = make_context(**config)
    return env, sink, ctx, make_dispatcher(ctx, env, sink)


class _StubScorer:
    """Returns a fixed, pre-ranked candidate list."""

    def __init__(self, threats):
        self.threats = threats

    def scan_for_threats(self, agent_id, reading):
        return list(self.threats)


# ---------------------------------------------------------------------------
# Greeting
# ---------------------------------------------------------------------------

class TestGreeting:
    def test_greeted_once_by_first_pass(self):
        env, sink, _, dispatcher = _setup()
        env.put_agent("a1")
        dispatcher.process_threats("a1")
        dispatcher.update_quests("a1")
        dispatcher.track_agent("a1")
        assert sink.texts("a1", NotificationChannel.SYSTEM) == list(GREETING)

    def test_missing_agent_is_skipped(self):
        _, sink, ctx, dispatcher = _setup()
        assert dispatcher.process_threats("ghost") is None
        assert dispatcher.update_quests("ghost") is None
        assert dispatcher.track_agent("ghost") is None
        assert dispatcher.scan_structures("ghost") == []
        assert sink.sent == []
        assert ctx.histories == {}


# ---------------------------------------------------------------------------
# Threats
# ---------------------------------------------------------------------------

class TestThreatDispatch:
    def test_same_threat_not_repeated(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.put_actor("a1", "minecraft:zombie", distance=10)
        sent = dispatcher.process_threats("a1")
        assert sent is not None and sent.kind is ThreatKind.MOB
        ctx.clock.advance(ctx.config.threat_cooldown * TICK_MS)
        assert dispatcher.process_threats("a1") is None
        assert len(sink.texts("a1", NotificationChannel.THREAT)) == 1

    def test_changed_threat_waits_for_cooldown(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.put_actor("a1", "minecraft:zombie", distance=10)
        dispatcher.process_threats("a1")

        env.actors.clear()
        env.put_actor("a1", "minecraft:zombie", distance=5)
        assert dispatcher.process_threats("a1") is None
        ctx.clock.advance(ctx.config.threat_cooldown * TICK_MS - 1)
        assert dispatcher.process_threats("a1") is None
        ctx.clock.advance(1)
        sent = dispatcher.process_threats("a1")
        assert sent is not None and sent.danger == 80
        assert sink.texts("a1", NotificationChannel.THREAT)[-1].startswith("§c[HIGH THREAT] ZOMBIE - 5m")

    def test_only_top_candidate_sent(self):
        env = FakeEnvironment()
        sink = RecordingSink()
        ctx = make_context()
        env.put_agent("a1")
        stub = _StubScorer([
            ScoredEvent(ThreatKind.MOB, 9, "§4[EXTREME DANGER] WARDEN - 2m - EVADE!", danger=95),
            ScoredEvent(ThreatKind.MOB, 4, "§e[THREAT] SPIDER detected - 9m away", danger=40),
        ])
        dispatcher = NotificationDispatcher(
            ctx, env, sink,
            analyzer=StateAnalyzer(ctx, env),
            threats=stub,
            resources=ResourceScanner(env),
            quests=QuestGenerator(ctx.config),
            structures=StructureScanner(ctx, env),
        )
        dispatcher.process_threats("a1")
        assert sink.texts("a1", NotificationChannel.THREAT) == ["§4[EXTREME DANGER] WARDEN - 2m - EVADE!"]

    def test_critical_health_message(self):
        env, sink, _, dispatcher = _setup()
        env.put_agent("a1", health=5)
        dispatcher.process_threats("a1")
        [text] = sink.texts("a1", NotificationChannel.THREAT)
        assert "5" in text and "CRITICAL" in text

    def test_cooldowns_are_per_kind(self):
        env, sink, _, dispatcher = _setup()
        env.put_agent("a1")
        env.put_actor("a1", "minecraft:zombie", distance=10)
        dispatcher.process_threats("a1")
        env.update_agent("a1", health=5)
        sent = dispatcher.process_threats("a1")
        assert sent is not None and sent.kind is ThreatKind.HEALTH_CRITICAL

    def test_no_threats_sends_nothing(self):
        env, sink, _, dispatcher = _setup()
        env.put_agent("a1")
        assert dispatcher.process_threats("a1") is None
        assert sink.texts("a1", NotificationChannel.THREAT) == []


# ---------------------------------------------------------------------------
# Scan pass: movement and resources
# ---------------------------------------------------------------------------

class TestTrackAgent:
    def test_stagnation_and_reset(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        for _ in range(41):
            dispatcher.track_agent("a1")
        history = ctx.history("a1")
        assert history.stayed_in_area == 41 * 60

        quests = dispatcher.update_quests("a1")
        assert quests is not None
        assert quests[0].text.startswith("§d[EXPLORE] Stagnant location")

        env.move_agent("a1", ORIGIN.offset(40, 0, 0))
        dispatcher.track_agent("a1")
        assert history.stayed_in_area == 0
        assert history.distance_traveled == 40.0
        assert history.last_location == ORIGIN.offset(40, 0, 0)

    def test_small_moves_accumulate_stay(self):
        env, _, ctx, dispatcher = _setup()
        env.put_agent("a1")
        dispatcher.track_agent("a1")
        env.move_agent("a1", ORIGIN.offset(10, 30, 10))
        dispatcher.track_agent("a1")
        history = ctx.history("a1")
        assert history.stayed_in_area == 120
        assert history.last_location == ORIGIN

    def test_records_region_and_snapshot(self):
        env, _, ctx, dispatcher = _setup()
        env.put_agent("a1")
        snapshot = dispatcher.track_agent("a1")
        assert snapshot.region == "plains"
        assert ctx.snapshots["a1"] is snapshot
        assert ctx.history("a1").regions_visited == {"plains"}

    def test_unknown_region_not_recorded(self):
        env, _, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.region = None
        dispatcher.track_agent("a1")
        assert ctx.history("a1").regions_visited == set()

    def test_resource_alert_respects_cooldown(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.put_cell((1, 63, 1), "minecraft:diamond_ore")
        env.put_cell((-1, 63, 1), "minecraft:gold_ore")
        dispatcher.track_agent("a1")
        dispatcher.track_agent("a1")
        assert sink.texts("a1", NotificationChannel.RESOURCE) == ["§b✦ DIAMONDS DETECTED! ✦"]
        ctx.clock.advance(ctx.config.resource_cooldown * TICK_MS)
        dispatcher.track_agent("a1")
        assert len(sink.texts("a1", NotificationChannel.RESOURCE)) == 2


# ---------------------------------------------------------------------------
# Quests
# ---------------------------------------------------------------------------

class TestQuestDispatch:
    def test_framing(self):
        env, sink, _, dispatcher = _setup()
        env.put_agent("a1", health=5)
        quests = dispatcher.update_quests("a1")
        lines = sink.texts("a1", NotificationChannel.QUEST)
        assert lines == frame_quests(quests)
        assert lines[:3] == [QUEST_SEPARATOR, QUEST_HEADER, QUEST_SEPARATOR]
        assert lines[-1] == QUEST_SEPARATOR
        assert lines[3] == "§4[CRITICAL] IMMEDIATE DANGER - Heal or retreat NOW!"

    def test_unchanged_batch_not_resent(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1", health=5)
        dispatcher.update_quests("a1")
        ctx.clock.advance(ctx.config.quest_cooldown * TICK_MS)
        assert dispatcher.update_quests("a1") is None

    def test_changed_batch_waits_for_cooldown(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1", health=5)
        dispatcher.update_quests("a1")
        env.update_agent("a1", hunger=5)
        assert dispatcher.update_quests("a1") is None
        ctx.clock.advance(ctx.config.quest_cooldown * TICK_MS)
        quests = dispatcher.update_quests("a1")
        assert [q.priority for q in quests] == [100, 90]
        assert ctx.history("a1").last_quests == quests

    def test_empty_batch_sends_nothing(self):
        env, sink, _, dispatcher = _setup()
        env.put_agent("a1")
        assert dispatcher.update_quests("a1") is None
        assert sink.texts("a1", NotificationChannel.QUEST) == []


# ---------------------------------------------------------------------------
# Structures
# ---------------------------------------------------------------------------

class TestStructureDispatch:
    def test_generated_structure_announced_once(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.structures = ["minecraft:stronghold"]
        assert dispatcher.scan_structures("a1") == ["§3[DISCOVERY] §bStronghold - Portal to The End"]
        assert dispatcher.scan_structures("a1") == []
        assert ctx.history("a1").structures_found == 1

    def test_unknown_structure_gets_generic_message(self):
        env, _, _, dispatcher = _setup()
        env.put_agent("a1")
        env.structures = ["minecraft:trail_ruins"]
        assert dispatcher.scan_structures("a1") == ["§7[DISCOVERY] trail_ruins structure found"]

    def test_proximity_alerts(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        for d in (20, 40, 90):
            env.put_actor("a1", "minecraft:villager", distance=d)
        for d in (100, 140):
            env.put_actor("a1", "minecraft:pillager", distance=d)
        env.structures = ["minecraft:village"]
        assert dispatcher.scan_structures("a1") == [VILLAGE_ALERT, OUTPOST_ALERT]
        assert ctx.history("a1").structures_found == 0
        assert sink.texts("a1", NotificationChannel.STRUCTURE) == [VILLAGE_ALERT, OUTPOST_ALERT]

    def test_too_few_traders(self):
        env, _, _, dispatcher = _setup()
        env.put_agent("a1")
        env.put_actor("a1", "minecraft:villager", distance=20)
        env.put_actor("a1", "minecraft:villager", distance=30)
        assert dispatcher.scan_structures("a1") == []

    def test_query_failure_counts_error(self):
        env, _, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.failing.add("query_structures")
        assert dispatcher.scan_structures("a1") == []
        assert ctx.metrics.errors == 1


# ---------------------------------------------------------------------------
# Pass isolation
# ---------------------------------------------------------------------------

class TestRunPass:
    def test_failing_agent_does_not_stop_pass(self):
        env, _, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.put_agent("a2", position=Vector3(100.5, 64.0, 0.5))
        seen: list[str] = []

        def handler(agent_id: str) -> None:
            if agent_id == "a1":
                raise RuntimeError("boom")
            seen.append(agent_id)

        assert dispatcher.run_pass("test", handler) == 1
        assert seen == ["a2"]
        assert ctx.metrics.errors == 1

    def test_listing_failure(self):
        env, _, ctx, dispatcher = _setup()
        env.failing.add("list_agents")
        assert dispatcher.run_pass("test", lambda a: None) == 0
        assert ctx.metrics.errors == 1

    def test_query_failure_inside_handler_is_isolated(self):
        env, sink, ctx, dispatcher = _setup()
        env.put_agent("a1")
        env.put_agent("a2")
        env.failing.add("query_agent_state")
        assert dispatcher.run_pass("threats", dispatcher.process_threats) == 0
        assert ctx.metrics.errors == 2
        assert sink.sent == []
