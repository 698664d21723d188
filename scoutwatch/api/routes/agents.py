"""GET /api/v1/agents — tracked agents, their history, state and progress."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from scoutwatch.api.dependencies import get_engine_manager
from scoutwatch.api.engine_manager import EngineManager
from scoutwatch.api.schemas import (
    AgentDetailResponse,
    AgentListResponse,
    AgentSummarySchema,
    PositionSchema,
    ProgressSchema,
)
from scoutwatch.engine.snapshot import AgentView

router = APIRouter()


def _position(view: AgentView) -> PositionSchema | None:
    if view.position is None:
        return None
    return PositionSchema(x=view.position.x, y=view.position.y, z=view.position.z)


@router.get("/agents", response_model=AgentListResponse)
def list_agents(
    manager: EngineManager = Depends(get_engine_manager),
) -> AgentListResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    agents = []
    for view in sorted(snapshot.agents.values(), key=lambda v: v.agent_id):
        history = view.history
        agents.append(AgentSummarySchema(
            agent_id=view.agent_id,
            position=_position(view),
            dimension=view.dimension,
            region=view.state.region if view.state else "unknown",
            health=view.state.health if view.state else None,
            stayed_in_area=history["stayed_in_area"],
            mobs_killed=history["mobs_killed"],
            regions_visited=len(history["regions_visited"]),
            structures_found=history["structures_found"],
        ))
    return AgentListResponse(tick=snapshot.tick, agents=agents)


@router.get("/agents/{agent_id}", response_model=AgentDetailResponse)
def get_agent(
    agent_id: str,
    manager: EngineManager = Depends(get_engine_manager),
) -> AgentDetailResponse:
    snapshot = manager.get_snapshot()
    view = snapshot.agents.get(agent_id) if snapshot else None
    if view is None:
        raise HTTPException(status_code=404, detail=f"Agent {agent_id} not tracked")

    return AgentDetailResponse(
        agent_id=view.agent_id,
        position=_position(view),
        dimension=view.dimension,
        history=dict(view.history),
        state=view.state.to_dict() if view.state else None,
        progress=ProgressSchema(**view.progress.to_dict()) if view.progress else None,
    )
