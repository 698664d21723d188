"""POST /api/v1/control/{action} and /speed — monitor lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from scoutwatch.api.dependencies import get_engine_manager
from scoutwatch.api.engine_manager import EngineManager
from scoutwatch.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


def _tick(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.tick if snapshot else 0


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    tick = _tick(manager)

    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Monitor already running.", tick=tick)
            manager.start()
            return ControlResponse(status="ok", message="Monitor started.", tick=tick)

        case ControlAction.pause | ControlAction.resume if not manager.running:
            return ControlResponse(status="error", message="Monitor is not running.", tick=tick)

        case ControlAction.pause:
            manager.pause()
            return ControlResponse(status="ok", message=f"Monitor paused at tick {tick}.", tick=tick)

        case ControlAction.resume:
            manager.resume()
            return ControlResponse(status="ok", message="Monitor resumed.", tick=tick)

        case ControlAction.step:
            if not manager.running:
                manager.start(paused=True)
            manager.step()
            return ControlResponse(status="ok", message="One tick requested.", tick=tick)

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Monitor rebuilt from seed.", tick=_tick(manager))


@router.post("/speed", response_model=ControlResponse)
def set_speed(
    tps: float = Query(20.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return ControlResponse(
        status="ok",
        message=f"Tick interval set to {manager.tick_rate * 1000:.0f} ms.",
        tick=_tick(manager),
    )
