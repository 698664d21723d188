"""GET /api/v1/notifications — delivered messages, newest last."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from scoutwatch.api.dependencies import get_engine_manager
from scoutwatch.api.engine_manager import EngineManager
from scoutwatch.api.schemas import NotificationSchema, NotificationsResponse

router = APIRouter()


@router.get("/notifications", response_model=NotificationsResponse)
def get_notifications(
    since_tick: int = Query(0, ge=0, description="Only return messages sent at or after this tick"),
    limit: int = Query(200, ge=1, le=2000, description="Return at most this many of the newest messages"),
    agent_id: str | None = Query(None, description="Only messages for this agent (plus broadcasts)"),
    manager: EngineManager = Depends(get_engine_manager),
) -> NotificationsResponse:
    log = manager.notifications
    if agent_id is None:
        entries = log.since_tick(since_tick, limit)
    else:
        entries = log.for_agent(agent_id, since_tick)[-limit:]

    snapshot = manager.get_snapshot()
    return NotificationsResponse(
        tick=snapshot.tick if snapshot else 0,
        notifications=[
            NotificationSchema(
                seq=n.seq,
                tick=n.tick,
                agent_id=n.agent_id,
                channel=n.channel.value,
                text=n.text,
                plain_text=n.plain_text,
            )
            for n in entries
        ],
    )
