"""Structure discovery — settlement/outpost proximity and generated structures.

Each structure name is announced at most once per agent; the set of
announced names lives on the agent's history.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scoutwatch.core.catalogs import RAIDER_TYPE, TRADER_TYPE, strip_namespace, structure_message

if TYPE_CHECKING:
    from scoutwatch.core.environment import Environment
    from scoutwatch.core.models import AgentHistory, AgentReading
    from scoutwatch.engine.context import MonitorContext

logger = logging.getLogger(__name__)

VILLAGE = "village"
OUTPOST = "outpost"

VILLAGE_ALERT = "§2[STRUCTURE] §aVillage detected nearby - Trading opportunities available!"
OUTPOST_ALERT = "§c[STRUCTURE] §6Pillager Outpost detected - High danger zone!"


class StructureScanner:
    __slots__ = ("_ctx", "_env")

    def __init__(self, ctx: MonitorContext, env: Environment) -> None:
        self._ctx = ctx
        self._env = env

    def scan(self, reading: AgentReading, history: AgentHistory) -> list[str]:
        """Return the new announcements for this agent, marking them notified."""
        cfg = self._ctx.config
        notified = history.notified_structures
        messages: list[str] = []
        try:
            traders = self._env.query_nearby_actors(
                reading.dimension, reading.position, cfg.structure_village_radius,
                actor_type=TRADER_TYPE,
            )
            if len(traders) >= cfg.structure_village_min and VILLAGE not in notified:
                messages.append(VILLAGE_ALERT)
                notified.add(VILLAGE)

            raiders = self._env.query_nearby_actors(
                reading.dimension, reading.position, cfg.structure_outpost_radius,
                actor_type=RAIDER_TYPE,
            )
            if len(raiders) >= cfg.structure_outpost_min and OUTPOST not in notified:
                messages.append(OUTPOST_ALERT)
                notified.add(OUTPOST)

            for raw in self._env.query_structures(reading.dimension, reading.position):
                name = strip_namespace(raw)
                if name in notified:
                    continue
                messages.append(structure_message(name))
                notified.add(name)
                history.structures_found += 1
                logger.info("Agent %s discovered structure '%s'", history.agent_id, name)
        except Exception:
            self._ctx.metrics.record_error()
            logger.debug("Structure scan for %s failed", history.agent_id, exc_info=True)
        return messages
