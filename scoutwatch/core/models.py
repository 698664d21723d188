"""Core data models: Vector3, sensor readings, scored events, agent history."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from scoutwatch.core.enums import QuestCategory, QuestKind, ThreatKind


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable 3D world coordinate."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def offset(self, dx: float, dy: float, dz: float) -> Vector3:
        return Vector3(self.x + dx, self.y + dy, self.z + dz)

    def floored(self) -> tuple[int, int, int]:
        """Integer cell coordinates containing this point."""
        return math.floor(self.x), math.floor(self.y), math.floor(self.z)

    def distance(self, other: Vector3) -> float:
        return math.hypot(self.x - other.x, self.y - other.y, self.z - other.z)

    def horizontal_distance(self, other: Vector3) -> float:
        """Distance in the x/z plane, ignoring height."""
        return math.hypot(self.x - other.x, self.z - other.z)

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f}, {self.z:.1f})"


# ---------------------------------------------------------------------------
# Sensor readings (inbound from the environment)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ItemStack:
    """One occupied inventory slot."""

    item_id: str
    amount: int = 1
    damage: int = 0
    max_durability: int = 0
    is_food: bool = False

    @property
    def wear_ratio(self) -> float:
        if self.max_durability <= 0:
            return 0.0
        return self.damage / self.max_durability


@dataclass(frozen=True, slots=True)
class AgentReading:
    """Raw condition of an agent as reported by the environment."""

    agent_id: str
    position: Vector3
    dimension: str
    health: float = 20.0
    max_health: float = 20.0
    hunger: int | None = None
    air_supply: int = 300
    total_air_supply: int = 300
    in_water: bool = False
    inventory: tuple[ItemStack, ...] = ()
    empty_slots: int = 36


@dataclass(frozen=True, slots=True)
class ActorSighting:
    """A non-agent actor returned by a nearby-actor query."""

    actor_id: str
    actor_type: str
    position: Vector3


# ---------------------------------------------------------------------------
# Candidate events
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScoredEvent:
    """A threat-channel candidate produced before cooldown filtering."""

    kind: ThreatKind
    priority: int
    message: str
    distance: float | None = None
    danger: int | None = None
    source_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "priority": self.priority,
            "message": self.message,
        }
        if self.distance is not None:
            d["distance"] = round(self.distance, 2)
        if self.danger is not None:
            d["danger"] = self.danger
        if self.source_type is not None:
            d["source_type"] = self.source_type
        return d


@dataclass(frozen=True, slots=True)
class ResourceFind:
    """A valuable terrain cell found by the resource scanner."""

    cell_type: str
    rarity: int
    message: str
    distance: float


@dataclass(frozen=True, slots=True)
class Quest:
    """A contextual advisory. Batches compare by full content."""

    kind: QuestKind
    category: QuestCategory
    priority: int
    text: str


@dataclass(frozen=True, slots=True)
class ProgressScore:
    """Four 0-100 sub-scores describing how far along an agent is."""

    survival: int = 0
    combat: int = 0
    exploration: int = 0
    crafting: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "survival": self.survival,
            "combat": self.combat,
            "exploration": self.exploration,
            "crafting": self.crafting,
        }


# ---------------------------------------------------------------------------
# Per-agent history
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class AgentHistory:
    """Cumulative record for one tracked agent.

    Mutated only by the monitor loop on behalf of that agent.
    """

    agent_id: str
    last_location: Vector3
    join_time_ms: float = 0.0
    stayed_in_area: int = 0          # ticks spent within the movement threshold
    mobs_killed: int = 0
    regions_visited: set[str] = field(default_factory=set)
    structures_found: int = 0
    distance_traveled: float = 0.0
    last_threat_message: str = ""
    last_quests: tuple[Quest, ...] = ()
    has_traded: bool = False
    notified_structures: set[str] = field(default_factory=set)

    @property
    def region_count(self) -> int:
        return len(self.regions_visited)

    def to_dict(self) -> dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "stayed_in_area": self.stayed_in_area,
            "mobs_killed": self.mobs_killed,
            "regions_visited": sorted(self.regions_visited),
            "structures_found": self.structures_found,
            "distance_traveled": round(self.distance_traveled, 2),
            "has_traded": self.has_traded,
        }
