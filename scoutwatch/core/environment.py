"""Boundary interfaces to the host world: sensor queries in, messages out."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Sequence

from scoutwatch.core.enums import NotificationChannel
from scoutwatch.core.models import ActorSighting, AgentReading, Vector3

_MARKUP = re.compile("§.")


def strip_markup(text: str) -> str:
    """Remove ``§x`` colour/format prefix codes from a message."""
    return _MARKUP.sub("", text)


class Environment(ABC):
    """Read-only queries against the live world.

    Implementations may raise on any call; callers treat a raise as a
    transient failure and fall back to defaults.
    """

    @abstractmethod
    def list_agents(self) -> Sequence[str]:
        """IDs of all agents currently online."""

    @abstractmethod
    def query_agent_state(self, agent_id: str) -> AgentReading | None:
        """Current condition of an agent, or None if it is gone."""

    @abstractmethod
    def query_terrain_cell(self, dimension: str, cell: tuple[int, int, int]) -> str | None:
        """Terrain type identifier at an integer cell, or None if unloaded."""

    @abstractmethod
    def query_nearby_actors(
        self,
        dimension: str,
        position: Vector3,
        max_distance: float,
        exclude_types: Sequence[str] = (),
        actor_type: str | None = None,
    ) -> list[ActorSighting]:
        """Non-agent actors within *max_distance* of *position*."""

    @abstractmethod
    def query_region_type(self, dimension: str, position: Vector3) -> str | None:
        """Region (biome) identifier at *position*, or None if unsupported."""

    @abstractmethod
    def query_time_of_day(self) -> int:
        """Tick within the current day cycle (0-23999)."""

    def query_structures(self, dimension: str, position: Vector3) -> list[str]:
        """Names of generated structures containing *position*.

        Optional: hosts without structure data keep the default.
        """
        return []


class MessageSink(ABC):
    """Outbound channel for formatted, single-line messages."""

    @abstractmethod
    def send(
        self,
        agent_id: str,
        text: str,
        channel: NotificationChannel = NotificationChannel.SYSTEM,
    ) -> None:
        """Deliver one line to a single agent."""

    @abstractmethod
    def broadcast(self, text: str) -> None:
        """Deliver one line to everyone."""
