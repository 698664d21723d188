"""GET /api/v1/state — monitor tick, run state and counters."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from scoutwatch.api.dependencies import get_engine_manager
from scoutwatch.api.engine_manager import EngineManager
from scoutwatch.api.schemas import MetricsSchema, MonitorStateResponse

router = APIRouter()


@router.get("/state", response_model=MonitorStateResponse)
def get_state(
    manager: EngineManager = Depends(get_engine_manager),
) -> MonitorStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    return MonitorStateResponse(
        tick=snapshot.tick,
        running=manager.running,
        paused=manager.paused,
        agent_count=len(snapshot.agents),
        cache_size=snapshot.cache_size,
        cooldown_count=snapshot.cooldown_count,
        notification_count=len(manager.notifications),
        metrics=MetricsSchema(**snapshot.metrics.to_dict()),
    )
