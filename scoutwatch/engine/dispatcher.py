"""NotificationDispatcher — turns scored candidates into rate-limited messages.

Every outbound category passes the same gate: the candidate must be new
(different from what was last sent to that agent) and its cooldown key must
have expired. Resource finds only check the cooldown.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from scoutwatch.ai.progress import evaluate_progress
from scoutwatch.core.enums import NotificationChannel
from scoutwatch.core.snapshot import UNKNOWN_REGION
from scoutwatch.systems.cooldowns import cooldown_key

if TYPE_CHECKING:
    from scoutwatch.ai.quests import QuestGenerator
    from scoutwatch.ai.resources import ResourceScanner
    from scoutwatch.ai.state_analyzer import StateAnalyzer
    from scoutwatch.ai.structures import StructureScanner
    from scoutwatch.ai.threats import ThreatScorer
    from scoutwatch.core.environment import Environment, MessageSink
    from scoutwatch.core.models import AgentHistory, AgentReading, Quest, ResourceFind, ScoredEvent
    from scoutwatch.core.snapshot import StateSnapshot
    from scoutwatch.engine.context import MonitorContext

logger = logging.getLogger(__name__)

RESOURCE_CATEGORY = "ore"
THREAT_CATEGORY = "threat"
QUEST_CATEGORY = "quest"

QUEST_SEPARATOR = "§6━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━"
QUEST_HEADER = "§b[QUEST INTELLIGENCE SYSTEM]"

GREETING = (
    "§a[SCOUTWATCH] §7Elite tracking initialized",
    "§7Advanced AI companion online - All systems operational",
)


def frame_quests(quests: tuple[Quest, ...]) -> list[str]:
    """Lay out a quest batch as the multi-line block sent to the agent."""
    return [
        QUEST_SEPARATOR,
        QUEST_HEADER,
        QUEST_SEPARATOR,
        *(q.text for q in quests),
        QUEST_SEPARATOR,
    ]


class NotificationDispatcher:
    """Per-agent scan, threat, quest and structure passes."""

    __slots__ = (
        "_ctx",
        "_env",
        "_sink",
        "_analyzer",
        "_threats",
        "_resources",
        "_quests",
        "_structures",
    )

    def __init__(
        self,
        ctx: MonitorContext,
        env: Environment,
        sink: MessageSink,
        analyzer: StateAnalyzer,
        threats: ThreatScorer,
        resources: ResourceScanner,
        quests: QuestGenerator,
        structures: StructureScanner,
    ) -> None:
        self._ctx = ctx
        self._env = env
        self._sink = sink
        self._analyzer = analyzer
        self._threats = threats
        self._resources = resources
        self._quests = quests
        self._structures = structures

    # ------------------------------------------------------------------
    # Pass driver
    # ------------------------------------------------------------------

    def run_pass(self, label: str, handler: Callable[[str], object]) -> int:
        """Apply *handler* to every online agent; one failure never stops the pass.

        Returns the number of agents processed without error.
        """
        try:
            agent_ids = list(self._env.list_agents())
        except Exception:
            self._ctx.metrics.record_error()
            logger.warning("%s pass: could not list agents", label, exc_info=True)
            return 0

        ok = 0
        for agent_id in agent_ids:
            try:
                handler(agent_id)
                ok += 1
            except Exception:
                self._ctx.metrics.record_error()
                logger.warning("%s pass failed for agent %s", label, agent_id, exc_info=True)
        return ok

    # ------------------------------------------------------------------
    # Scan: movement, snapshot, regions, resources
    # ------------------------------------------------------------------

    def track_agent(self, agent_id: str) -> StateSnapshot | None:
        reading = self._env.query_agent_state(agent_id)
        if reading is None:
            return None
        history = self._ensure_history(reading)
        self._update_movement(history, reading)

        snapshot = self._analyzer.analyze(agent_id, history)
        self._ctx.snapshots[agent_id] = snapshot
        if snapshot.region != UNKNOWN_REGION:
            history.regions_visited.add(snapshot.region)

        finds = self._resources.scan(reading.dimension, reading.position)
        if finds:
            self._send_resource(agent_id, finds[0])
        return snapshot

    def _update_movement(self, history: AgentHistory, reading: AgentReading) -> None:
        cfg = self._ctx.config
        moved = reading.position.horizontal_distance(history.last_location)
        if moved < cfg.movement_threshold:
            history.stayed_in_area += cfg.scan_interval
        else:
            history.stayed_in_area = 0
            history.distance_traveled += moved
            history.last_location = reading.position

    def _send_resource(self, agent_id: str, find: ResourceFind) -> bool:
        key = cooldown_key(RESOURCE_CATEGORY, agent_id)
        if self._ctx.cooldowns.is_on_cooldown(key, self._ctx.config.resource_cooldown):
            return False
        self._sink.send(agent_id, find.message, NotificationChannel.RESOURCE)
        self._ctx.cooldowns.set_cooldown(key)
        return True

    # ------------------------------------------------------------------
    # Threats
    # ------------------------------------------------------------------

    def process_threats(self, agent_id: str) -> ScoredEvent | None:
        """Send the top-ranked threat if it is new and off cooldown. Returns what was sent."""
        reading = self._env.query_agent_state(agent_id)
        if reading is None:
            return None
        history = self._ensure_history(reading)

        threats = self._threats.scan_for_threats(agent_id, reading)
        if not threats:
            return None

        top = threats[0]
        key = cooldown_key(THREAT_CATEGORY, agent_id, top.kind.value)
        if top.message == history.last_threat_message:
            return None
        if self._ctx.cooldowns.is_on_cooldown(key, self._ctx.config.threat_cooldown):
            return None

        self._sink.send(agent_id, top.message, NotificationChannel.THREAT)
        history.last_threat_message = top.message
        self._ctx.cooldowns.set_cooldown(key)
        return top

    # ------------------------------------------------------------------
    # Quests
    # ------------------------------------------------------------------

    def update_quests(self, agent_id: str) -> tuple[Quest, ...] | None:
        """Send the quest batch if non-empty, changed and off cooldown."""
        reading = self._env.query_agent_state(agent_id)
        if reading is None:
            return None
        history = self._ensure_history(reading)

        snapshot = self._analyzer.analyze(agent_id, history)
        self._ctx.snapshots[agent_id] = snapshot
        progress = evaluate_progress(snapshot, history)
        quests = self._quests.generate(snapshot, history, progress)

        if not quests or quests == history.last_quests:
            return None
        key = cooldown_key(QUEST_CATEGORY, agent_id)
        if self._ctx.cooldowns.is_on_cooldown(key, self._ctx.config.quest_cooldown):
            return None

        for line in frame_quests(quests):
            self._sink.send(agent_id, line, NotificationChannel.QUEST)
        history.last_quests = quests
        self._ctx.cooldowns.set_cooldown(key)
        logger.debug("Sent %d quests to %s", len(quests), agent_id)
        return quests

    # ------------------------------------------------------------------
    # Structures
    # ------------------------------------------------------------------

    def scan_structures(self, agent_id: str) -> list[str]:
        reading = self._env.query_agent_state(agent_id)
        if reading is None:
            return []
        history = self._ensure_history(reading)
        messages = self._structures.scan(reading, history)
        for text in messages:
            self._sink.send(agent_id, text, NotificationChannel.STRUCTURE)
        return messages

    # ------------------------------------------------------------------

    def _ensure_history(self, reading: AgentReading) -> AgentHistory:
        history, created = self._ctx.track(reading.agent_id, reading.position)
        if created:
            for line in GREETING:
                self._sink.send(reading.agent_id, line, NotificationChannel.SYSTEM)
        return history
