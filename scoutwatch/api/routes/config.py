"""GET /api/v1/config — expose monitor configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from scoutwatch.api.dependencies import get_engine_manager
from scoutwatch.api.engine_manager import EngineManager
from scoutwatch.api.schemas import MonitorConfigResponse

router = APIRouter()


@router.get("/config", response_model=MonitorConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> MonitorConfigResponse:
    cfg = manager.config
    return MonitorConfigResponse(
        world_seed=cfg.world_seed,
        agent_count=cfg.agent_count,
        max_ticks=cfg.max_ticks,
        tick_duration_ms=cfg.tick_duration_ms,
        scan_interval=cfg.scan_interval,
        threat_check_interval=cfg.threat_check_interval,
        quest_update_interval=cfg.quest_update_interval,
        performance_check_interval=cfg.performance_check_interval,
        structure_scan_interval=cfg.structure_scan_interval,
        resource_cooldown=cfg.resource_cooldown,
        threat_cooldown=cfg.threat_cooldown,
        quest_cooldown=cfg.quest_cooldown,
        region_cache_ttl_ms=cfg.region_cache_ttl_ms,
        terrain_cache_ttl_ms=cfg.terrain_cache_ttl_ms,
        max_quests=cfg.max_quests,
        tick_rate=manager.tick_rate,
    )
