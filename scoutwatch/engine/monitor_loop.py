"""MonitorLoop — the tick engine that drives every monitoring pass.

Per tick:
  1. Poll the event source (if any) and apply lifecycle events.
  2. Advance the scheduler, which runs whichever passes are due:
     scan, threats, quests, structures, performance report, delayed calls.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from scoutwatch.ai.quests import QuestGenerator
from scoutwatch.ai.resources import ResourceScanner
from scoutwatch.ai.state_analyzer import StateAnalyzer
from scoutwatch.ai.structures import StructureScanner
from scoutwatch.ai.threats import ThreatScorer
from scoutwatch.core.catalogs import hazard_tier
from scoutwatch.core.enums import HazardTier, NotificationChannel
from scoutwatch.core.environment import strip_markup
from scoutwatch.core.events import (
    FALL_DAMAGE,
    ActorDied,
    AgentDamaged,
    AgentJoined,
    AgentLeft,
    AgentTraded,
)
from scoutwatch.engine.dispatcher import NotificationDispatcher
from scoutwatch.engine.scheduler import IntervalScheduler
from scoutwatch.engine.snapshot import MonitorSnapshot

if TYPE_CHECKING:
    from scoutwatch.core.environment import Environment, MessageSink
    from scoutwatch.core.events import EventSource, LifecycleEvent
    from scoutwatch.core.models import Vector3
    from scoutwatch.engine.context import MonitorContext

logger = logging.getLogger(__name__)

STARTUP_BANNER = (
    "§6═══════════════════════════════════════════════════",
    "§b         SCOUTWATCH §3MONITOR",
    "§7    Perception-driven agent tracking and advisories",
    "§6═══════════════════════════════════════════════════",
    "§a✓ §7Intelligent threat detection",
    "§a✓ §7Contextual quest generation",
    "§a✓ §7Ore discovery system",
    "§a✓ §7Performance optimization",
    "§6═══════════════════════════════════════════════════",
)

WELCOME_BANNER = (
    "§6━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━",
    "§b           SCOUTWATCH §3MONITOR",
    "§7    Your Elite Survival Companion",
    "§6━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━",
    "§a✓ §7Real-time threat intelligence",
    "§a✓ §7Dynamic contextual quests",
    "§a✓ §7Valuable ore detection",
    "§a✓ §7Structure discovery alerts",
    "§a✓ §7Performance optimized",
    "§6━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━",
    "§7Stay alert. Stay alive. Dominate the world.",
)

FALL_CAUTION = "§e[CAUTION] §6Severe fall damage - Watch your step!"


def _welcome_name(agent_id: str) -> str:
    return f"welcome:{agent_id}"


class MonitorLoop:
    """Owns the scheduler and the per-agent passes.

    Single-threaded: ``tick_once`` must only be called from one thread.
    """

    __slots__ = (
        "_ctx",
        "_env",
        "_sink",
        "_events",
        "_scheduler",
        "_dispatcher",
        "_tick",
        "_started",
        "_positions",
    )

    def __init__(
        self,
        ctx: MonitorContext,
        env: Environment,
        sink: MessageSink,
        events: EventSource | None = None,
    ) -> None:
        cfg = ctx.config
        self._ctx = ctx
        self._env = env
        self._sink = sink
        self._events = events
        self._scheduler = IntervalScheduler(on_error=lambda _name, _exc: ctx.metrics.record_error())
        self._dispatcher = NotificationDispatcher(
            ctx,
            env,
            sink,
            analyzer=StateAnalyzer(ctx, env),
            threats=ThreatScorer(ctx, env),
            resources=ResourceScanner(env, cfg.resource_scan_radius),
            quests=QuestGenerator(cfg),
            structures=StructureScanner(ctx, env),
        )
        self._tick = 0
        self._started = False
        self._positions: dict[str, tuple[Vector3, str]] = {}

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def context(self) -> MonitorContext:
        return self._ctx

    @property
    def dispatcher(self) -> NotificationDispatcher:
        return self._dispatcher

    @property
    def scheduler(self) -> IntervalScheduler:
        return self._scheduler

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Broadcast the startup banner and register the periodic passes (once)."""
        if self._started:
            return
        self._started = True
        cfg = self._ctx.config

        for line in STARTUP_BANNER:
            self._sink.broadcast(line)

        d = self._dispatcher
        self._scheduler.every("scan", cfg.scan_interval, self._scan_pass)
        self._scheduler.every("threats", cfg.threat_check_interval,
                              lambda _t: d.run_pass("threat", d.process_threats))
        self._scheduler.every("quests", cfg.quest_update_interval,
                              lambda _t: d.run_pass("quest", d.update_quests))
        self._scheduler.every("performance", cfg.performance_check_interval, self._performance_report)
        self._scheduler.every("structures", cfg.structure_scan_interval,
                              lambda _t: d.run_pass("structure", d.scan_structures))
        logger.info("Monitor started (scan=%d threat=%d quest=%d ticks)",
                    cfg.scan_interval, cfg.threat_check_interval, cfg.quest_update_interval)

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False once max_ticks is reached."""
        if self._tick >= self._ctx.config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", self._tick)
            return False
        self.start()

        self._tick += 1
        if self._events is not None:
            for event in self._events.poll(self._tick):
                self.handle_event(event)
        self._scheduler.advance(self._tick)
        return True

    def run(self, after_tick: Callable[[int], None] | None = None) -> None:
        """Tick until max_ticks, calling *after_tick* once per completed tick."""
        logger.info("=== Monitor started ===")
        while self.tick_once():
            if after_tick is not None:
                after_tick(self._tick)
            if self._tick % 1000 == 0:
                logger.info("Tick %d: %d agents tracked", self._tick, len(self._ctx.histories))
        logger.info("=== Monitor finished at tick %d ===", self._tick)

    def create_snapshot(self) -> MonitorSnapshot:
        self._refresh_positions()
        return MonitorSnapshot.capture(self._tick, self._ctx, self._positions)

    # ------------------------------------------------------------------
    # Periodic passes
    # ------------------------------------------------------------------

    def _scan_pass(self, _tick: int) -> None:
        t0 = time.perf_counter()
        self._dispatcher.run_pass("scan", self._dispatcher.track_agent)
        self._ctx.metrics.record_update((time.perf_counter() - t0) * 1000.0)

    def _performance_report(self, _tick: int) -> None:
        agents = list(self._env.list_agents())
        if not agents:
            return
        for line in self._ctx.metrics.report_lines(len(agents), self._ctx.cache_size()):
            logger.warning(strip_markup(line))
        self._ctx.enforce_cache_ceilings()
        pruned = self._ctx.cooldowns.prune(self._ctx.config.longest_cooldown)
        if pruned:
            logger.debug("Pruned %d stale cooldowns", pruned)

    def _refresh_positions(self) -> None:
        for agent_id in list(self._ctx.histories):
            try:
                reading = self._env.query_agent_state(agent_id)
            except Exception:
                logger.debug("Position read for %s failed", agent_id, exc_info=True)
                continue
            if reading is not None:
                self._positions[agent_id] = (reading.position, reading.dimension)
        for agent_id in list(self._positions):
            if agent_id not in self._ctx.histories:
                del self._positions[agent_id]

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def handle_event(self, event: LifecycleEvent) -> None:
        match event:
            case AgentJoined(agent_id=agent_id, initial_spawn=initial):
                self.on_agent_join(agent_id, initial)
            case AgentLeft(agent_id=agent_id):
                self.on_agent_leave(agent_id)
            case ActorDied(actor_type=actor_type, killer_id=killer_id):
                self.on_actor_death(actor_type, killer_id)
            case AgentDamaged(agent_id=agent_id, cause=cause, amount=amount):
                self.on_agent_damaged(agent_id, cause, amount)
            case AgentTraded(agent_id=agent_id):
                self.on_agent_traded(agent_id)
            case _:
                logger.warning("Ignoring unknown lifecycle event %r", event)

    def on_agent_join(self, agent_id: str, initial_spawn: bool = True) -> None:
        if not initial_spawn:
            return
        logger.info("Agent %s joined, welcome in %d ticks", agent_id, self._ctx.config.welcome_delay)

        def welcome(_tick: int) -> None:
            for line in WELCOME_BANNER:
                self._sink.send(agent_id, line, NotificationChannel.SYSTEM)

        self._scheduler.call_later(self._ctx.config.welcome_delay, _welcome_name(agent_id), welcome,
                                   now=self._tick)

    def on_actor_death(self, actor_type: str, killer_id: str | None) -> None:
        if killer_id is None or hazard_tier(actor_type) is not HazardTier.HOSTILE:
            return
        history = self._ctx.history(killer_id)
        if history is None:
            return
        history.mobs_killed += 1
        if history.mobs_killed % self._ctx.config.kill_milestone == 0:
            self._sink.send(
                killer_id,
                f"§e[COMBAT] §6Total kills: {history.mobs_killed} - Combat mastery increasing!",
                NotificationChannel.COMBAT,
            )

    def on_agent_damaged(self, agent_id: str, cause: str, amount: float) -> None:
        if cause == FALL_DAMAGE and amount > self._ctx.config.severe_fall_damage:
            self._sink.send(agent_id, FALL_CAUTION, NotificationChannel.CAUTION)

    def on_agent_traded(self, agent_id: str) -> None:
        history = self._ctx.history(agent_id)
        if history is not None:
            history.has_traded = True

    def on_agent_leave(self, agent_id: str) -> None:
        self._scheduler.cancel(_welcome_name(agent_id))
        self._ctx.forget(agent_id)
        self._positions.pop(agent_id, None)
