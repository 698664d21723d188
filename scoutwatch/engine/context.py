"""MonitorContext — the process-scoped owner of all shared mutable stores."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scoutwatch.core.models import AgentHistory
from scoutwatch.engine.performance import PerformanceMonitor
from scoutwatch.systems.cache import ExpiringCache
from scoutwatch.systems.clock import Clock, monotonic_ms
from scoutwatch.systems.cooldowns import CooldownRegistry

if TYPE_CHECKING:
    from scoutwatch.config import MonitorConfig
    from scoutwatch.core.models import Vector3
    from scoutwatch.core.snapshot import StateSnapshot

logger = logging.getLogger(__name__)


class MonitorContext:
    """Bundles the caches, cooldowns, per-agent histories and counters.

    Passed explicitly into every component instead of module globals, so a
    test can build a fresh one per case.
    """

    __slots__ = (
        "config",
        "clock",
        "region_cache",
        "terrain_cache",
        "cooldowns",
        "histories",
        "snapshots",
        "metrics",
    )

    def __init__(self, config: MonitorConfig, clock: Clock = monotonic_ms) -> None:
        self.config = config
        self.clock = clock
        self.region_cache = ExpiringCache(config.region_cache_ttl_ms, clock)
        self.terrain_cache = ExpiringCache(config.terrain_cache_ttl_ms, clock)
        self.cooldowns = CooldownRegistry(config.tick_duration_ms, clock)
        self.histories: dict[str, AgentHistory] = {}
        self.snapshots: dict[str, StateSnapshot] = {}
        self.metrics = PerformanceMonitor()

    def history(self, agent_id: str) -> AgentHistory | None:
        return self.histories.get(agent_id)

    def track(self, agent_id: str, location: Vector3) -> tuple[AgentHistory, bool]:
        """Return the agent's history, creating it on first observation.

        The flag is True when the history was just created.
        """
        history = self.histories.get(agent_id)
        if history is not None:
            return history, False
        history = AgentHistory(agent_id=agent_id, last_location=location, join_time_ms=self.clock())
        self.histories[agent_id] = history
        logger.info("Tracking agent %s from %s", agent_id, location)
        return history, True

    def forget(self, agent_id: str) -> bool:
        """Drop everything held for an agent that left. Returns True if it was tracked."""
        history = self.histories.pop(agent_id, None)
        self.snapshots.pop(agent_id, None)
        dropped = self.cooldowns.forget_agent(agent_id)
        if history is not None:
            logger.info("Stopped tracking agent %s (%d cooldowns dropped)", agent_id, dropped)
        return history is not None

    def cache_size(self) -> int:
        return len(self.region_cache) + len(self.terrain_cache)

    def enforce_cache_ceilings(self) -> None:
        """Coarse growth bound: clear a cache outright once it exceeds its ceiling."""
        cfg = self.config
        if len(self.region_cache) > cfg.region_cache_ceiling:
            logger.info("Region cache over %d entries, clearing", cfg.region_cache_ceiling)
            self.region_cache.clear()
        if len(self.terrain_cache) > cfg.terrain_cache_ceiling:
            logger.info("Terrain cache over %d entries, clearing", cfg.terrain_cache_ceiling)
            self.terrain_cache.clear()
