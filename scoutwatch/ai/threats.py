"""Threat scoring — hazardous actors, vital signs and dangerous terrain.

analyze_danger()               — 0..100 score for one actor at a distance.
detect_environmental_threats() — hazardous cells in a band around a position.
scan_for_threats()             — every threat candidate for an agent, ranked.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from scoutwatch.core.catalogs import (
    ACTOR_DANGER_BONUS,
    AGENT_TYPE,
    HAZARDOUS_TERRAIN,
    ITEM_TYPE,
    TIER_BASE_DANGER,
    display_name,
    hazard_tier,
)
from scoutwatch.core.enums import HazardTier, ThreatKind
from scoutwatch.core.models import ScoredEvent

if TYPE_CHECKING:
    from scoutwatch.core.environment import Environment
    from scoutwatch.core.models import AgentReading, Vector3
    from scoutwatch.engine.context import MonitorContext

logger = logging.getLogger(__name__)

MAX_DANGER = 100
EXTREME_BAND = 90
HIGH_BAND = 70
CRITICAL_HEALTH_PRIORITY = 10
DROWNING_PRIORITY = 9
LOW_HEALTH_PRIORITY = 7

_EXCLUDED_TYPES = (AGENT_TYPE, ITEM_TYPE)
_VERTICAL_BAND = (-1, 0, 1)


def terrain_cache_key(dimension: str, cell: tuple[int, int, int]) -> str:
    x, y, z = cell
    return f"{dimension}:{x}_{y}_{z}"


def threat_message(actor_type: str, danger: int, distance: float) -> str:
    name = display_name(actor_type)
    metres = math.floor(distance)
    if danger >= EXTREME_BAND:
        return f"§4[EXTREME DANGER] {name} - {metres}m - EVADE!"
    if danger >= HIGH_BAND:
        return f"§c[HIGH THREAT] {name} - {metres}m - Prepare to fight or flee"
    return f"§e[THREAT] {name} detected - {metres}m away"


class ThreatScorer:
    """Scores threats for one agent at a time using the shared context."""

    __slots__ = ("_ctx", "_env")

    def __init__(self, ctx: MonitorContext, env: Environment) -> None:
        self._ctx = ctx
        self._env = env

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def analyze_danger(self, health: float, actor_type: str, distance: float) -> int:
        cfg = self._ctx.config
        score = TIER_BASE_DANGER[hazard_tier(actor_type)]

        if distance < cfg.critical_threat_distance:
            score += 40
        elif distance < cfg.secondary_threat_distance:
            score += 20

        if health < cfg.low_health_threshold:
            score += 30

        score += ACTOR_DANGER_BONUS.get(actor_type, 0)
        return max(0, min(score, MAX_DANGER))

    def detect_environmental_threats(self, dimension: str, position: Vector3) -> list[ScoredEvent]:
        """Match each cell of the scan band against the hazardous-terrain catalog."""
        radius = self._ctx.config.environment_scan_radius
        cache = self._ctx.terrain_cache
        found: list[ScoredEvent] = []

        for dx in range(-radius, radius + 1):
            for dy in _VERTICAL_BAND:
                for dz in range(-radius, radius + 1):
                    cell = position.offset(dx, dy, dz).floored()
                    key = terrain_cache_key(dimension, cell)
                    cell_type = cache.get(key)
                    if cell_type is None:
                        cell_type = self._env.query_terrain_cell(dimension, cell)
                        if cell_type is not None:
                            cache.set(key, cell_type)
                    hazard = HAZARDOUS_TERRAIN.get(cell_type) if cell_type else None
                    if hazard is not None:
                        found.append(ScoredEvent(
                            kind=ThreatKind.ENVIRONMENTAL,
                            priority=hazard.priority,
                            message=hazard.message,
                            source_type=cell_type,
                        ))
        return found

    def scan_for_threats(self, agent_id: str, reading: AgentReading) -> list[ScoredEvent]:
        """All threat candidates for the agent, sorted by descending priority.

        A failing query stops the scan early; whatever was gathered up to
        that point is still ranked and returned.
        """
        cfg = self._ctx.config
        threats: list[ScoredEvent] = []
        try:
            self._scan_actors(reading, threats)

            if reading.health <= cfg.critical_health_threshold:
                threats.append(ScoredEvent(
                    kind=ThreatKind.HEALTH_CRITICAL,
                    priority=CRITICAL_HEALTH_PRIORITY,
                    message=f"§4[CRITICAL] Health: {math.floor(reading.health)}/20 - HEAL IMMEDIATELY!",
                ))
            elif reading.health <= cfg.low_health_threshold:
                threats.append(ScoredEvent(
                    kind=ThreatKind.HEALTH_LOW,
                    priority=LOW_HEALTH_PRIORITY,
                    message=f"§c[WARNING] Health: {math.floor(reading.health)}/20 - Find safety and heal",
                ))

            if reading.in_water and reading.air_supply <= cfg.low_air_threshold:
                threats.append(ScoredEvent(
                    kind=ThreatKind.DROWNING,
                    priority=DROWNING_PRIORITY,
                    message=(
                        f"§b[DROWNING] Air: {reading.air_supply}/{reading.total_air_supply}"
                        " - SURFACE NOW!"
                    ),
                ))

            threats.extend(self.detect_environmental_threats(reading.dimension, reading.position))
        except Exception:
            self._ctx.metrics.record_error()
            logger.debug("Threat scan for %s failed part-way", agent_id, exc_info=True)

        threats.sort(key=lambda t: t.priority, reverse=True)
        return threats

    def _scan_actors(self, reading: AgentReading, out: list[ScoredEvent]) -> None:
        cfg = self._ctx.config
        nearby = self._env.query_nearby_actors(
            reading.dimension, reading.position, cfg.max_threat_distance,
            exclude_types=_EXCLUDED_TYPES,
        )
        for actor in nearby:
            if hazard_tier(actor.actor_type) is HazardTier.NONE:
                continue
            distance = reading.position.distance(actor.position)
            danger = self.analyze_danger(reading.health, actor.actor_type, distance)
            if danger <= cfg.danger_report_threshold:
                continue
            out.append(ScoredEvent(
                kind=ThreatKind.MOB,
                priority=danger // 10,
                message=threat_message(actor.actor_type, danger, distance),
                distance=distance,
                danger=danger,
                source_type=actor.actor_type,
            ))
