"""State analyzer — reads an agent's condition and surroundings into a StateSnapshot.

Starts from pessimistic defaults and overlays one group of facts at a time.
Each group is read independently: a failing query counts an error and leaves
that group at its defaults instead of aborting the tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from scoutwatch.core.catalogs import AIR_CELLS, TRADER_TYPE, capabilities_of, strip_namespace
from scoutwatch.core.enums import Capability
from scoutwatch.core.snapshot import UNKNOWN_DIMENSION, UNKNOWN_REGION, StateSnapshot

if TYPE_CHECKING:
    from scoutwatch.core.environment import Environment
    from scoutwatch.core.models import AgentHistory, AgentReading, Vector3
    from scoutwatch.engine.context import MonitorContext

logger = logging.getLogger(__name__)

NIGHT_START = 13000
NIGHT_END = 23000
WEAR_LIMIT = 0.8
SHELTER_HEIGHT = 2


def region_cache_key(dimension: str, position: Vector3) -> str:
    x, _y, z = position.floored()
    return f"{dimension}:{x}_{z}"


class StateAnalyzer:
    """Builds one StateSnapshot per agent per call. Owns no long-lived state."""

    __slots__ = ("_ctx", "_env")

    def __init__(self, ctx: MonitorContext, env: Environment) -> None:
        self._ctx = ctx
        self._env = env

    def analyze(self, agent_id: str, history: AgentHistory | None = None) -> StateSnapshot:
        facts: dict[str, Any] = {
            "has_traded_with_villager": history.has_traded if history is not None else False,
        }
        reading = self._guarded("agent state", lambda: self._env.query_agent_state(agent_id), None)
        if reading is None:
            return StateSnapshot(**facts)

        facts["dimension"] = reading.dimension or UNKNOWN_DIMENSION
        self._read_health(reading, facts)
        facts["region"] = self._guarded("region", lambda: self._region(reading), UNKNOWN_REGION)
        facts["is_night"] = self._guarded("time of day", self._is_night, False)
        facts["has_shelter"] = self._guarded("shelter", lambda: self._has_shelter(reading), False)
        facts.update(self._guarded("inventory", lambda: self.inventory_facts(reading), {}))
        facts["near_village"] = self._guarded("settlement", lambda: self._near_village(reading), False)
        return StateSnapshot(**facts)

    # ------------------------------------------------------------------
    # Fact groups
    # ------------------------------------------------------------------

    def _read_health(self, reading: AgentReading, facts: dict[str, Any]) -> None:
        facts["health"] = reading.health
        facts["low_health"] = reading.health <= self._ctx.config.low_health_threshold
        if reading.hunger is not None:
            facts["hunger"] = reading.hunger

    def _region(self, reading: AgentReading) -> str:
        cache = self._ctx.region_cache
        key = region_cache_key(reading.dimension, reading.position)
        region = cache.get(key)
        if region is None:
            raw = self._env.query_region_type(reading.dimension, reading.position)
            region = strip_namespace(raw) if raw else UNKNOWN_REGION
            cache.set(key, region)
        return region

    def _is_night(self) -> bool:
        time_of_day = self._env.query_time_of_day()
        return NIGHT_START <= time_of_day <= NIGHT_END

    def _has_shelter(self, reading: AgentReading) -> bool:
        x, y, z = reading.position.offset(0, SHELTER_HEIGHT, 0).floored()
        above = self._env.query_terrain_cell(reading.dimension, (x, y, z))
        return above is not None and above not in AIR_CELLS

    @staticmethod
    def inventory_facts(reading: AgentReading) -> dict[str, bool]:
        """Facts implied by the inventory, via the item capability table."""
        facts: dict[str, bool] = {"inventory_full": reading.empty_slots == 0}
        for stack in reading.inventory:
            if stack.wear_ratio > WEAR_LIMIT:
                facts["low_durability"] = True
            if stack.is_food:
                facts[Capability.FOOD.value] = True
            for cap in capabilities_of(stack.item_id):
                facts[cap.value] = True
        return facts

    def _near_village(self, reading: AgentReading) -> bool:
        cfg = self._ctx.config
        traders = self._env.query_nearby_actors(
            reading.dimension, reading.position, cfg.settlement_radius, actor_type=TRADER_TYPE,
        )
        return len(traders) > cfg.settlement_actor_threshold

    # ------------------------------------------------------------------

    def _guarded(self, what: str, read: Callable[[], Any], default: Any) -> Any:
        try:
            return read()
        except Exception:
            self._ctx.metrics.record_error()
            logger.debug("State read '%s' failed, using default", what, exc_info=True)
            return default
