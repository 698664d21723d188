"""Lifecycle events delivered by the host world, and the source that yields them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

FALL_DAMAGE = "fall"


@dataclass(frozen=True, slots=True)
class AgentJoined:
    agent_id: str
    initial_spawn: bool = True


@dataclass(frozen=True, slots=True)
class AgentLeft:
    agent_id: str


@dataclass(frozen=True, slots=True)
class ActorDied:
    actor_type: str
    killer_id: str | None = None   # agent credited with the kill, if any


@dataclass(frozen=True, slots=True)
class AgentDamaged:
    agent_id: str
    cause: str
    amount: float


@dataclass(frozen=True, slots=True)
class AgentTraded:
    agent_id: str


LifecycleEvent = Union[AgentJoined, AgentLeft, ActorDied, AgentDamaged, AgentTraded]


class EventSource(ABC):
    """Something that advances alongside the monitor and reports what happened."""

    @abstractmethod
    def poll(self, tick: int) -> list[LifecycleEvent]:
        """Advance to *tick* and return the lifecycle events raised on the way."""
