"""Immutable view of the monitor, safe to hand to API threads."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from scoutwatch.ai.progress import evaluate_progress

if TYPE_CHECKING:
    from scoutwatch.core.models import AgentHistory, ProgressScore, Vector3
    from scoutwatch.core.snapshot import StateSnapshot
    from scoutwatch.engine.context import MonitorContext
    from scoutwatch.engine.performance import PerformanceStats


@dataclass(frozen=True, slots=True)
class AgentView:
    agent_id: str
    position: Vector3 | None
    dimension: str | None
    history: Mapping[str, Any]
    state: StateSnapshot | None
    progress: ProgressScore | None

    def to_dict(self) -> dict[str, Any]:
        pos = self.position
        return {
            "agent_id": self.agent_id,
            "position": None if pos is None else {"x": pos.x, "y": pos.y, "z": pos.z},
            "dimension": self.dimension,
            "history": dict(self.history),
            "state": None if self.state is None else self.state.to_dict(),
            "progress": None if self.progress is None else self.progress.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class MonitorSnapshot:
    tick: int
    agents: Mapping[str, AgentView]
    metrics: PerformanceStats
    cache_size: int
    cooldown_count: int

    @classmethod
    def capture(
        cls,
        tick: int,
        ctx: MonitorContext,
        positions: Mapping[str, tuple[Vector3, str]],
    ) -> MonitorSnapshot:
        """Copy everything the API shows out of the live context.

        *positions* maps agent id to (position, dimension) as last read.
        """
        views: dict[str, AgentView] = {}
        for agent_id, history in ctx.histories.items():
            views[agent_id] = _view(agent_id, history, ctx.snapshots.get(agent_id), positions.get(agent_id))
        return cls(
            tick=tick,
            agents=MappingProxyType(views),
            metrics=ctx.metrics.stats(),
            cache_size=ctx.cache_size(),
            cooldown_count=len(ctx.cooldowns),
        )


def _view(
    agent_id: str,
    history: AgentHistory,
    state: StateSnapshot | None,
    located: tuple[Vector3, str] | None,
) -> AgentView:
    position, dimension = located if located is not None else (None, None)
    return AgentView(
        agent_id=agent_id,
        position=position,
        dimension=dimension,
        history=MappingProxyType(history.to_dict()),
        state=state,
        progress=evaluate_progress(state, history) if state is not None else None,
    )
