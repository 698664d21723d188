"""Pydantic response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- Agents ---

class PositionSchema(BaseModel):
    x: float
    y: float
    z: float


class ProgressSchema(BaseModel):
    survival: int = 0
    combat: int = 0
    exploration: int = 0
    crafting: int = 0


class AgentSummarySchema(BaseModel):
    agent_id: str
    position: PositionSchema | None = None
    dimension: str | None = None
    region: str = "unknown"
    health: float | None = None
    stayed_in_area: int = 0
    mobs_killed: int = 0
    regions_visited: int = 0
    structures_found: int = 0


class AgentDetailResponse(BaseModel):
    agent_id: str
    position: PositionSchema | None = None
    dimension: str | None = None
    history: dict[str, Any] = Field(default_factory=dict)
    state: dict[str, Any] | None = None
    progress: ProgressSchema | None = None


class AgentListResponse(BaseModel):
    tick: int
    agents: list[AgentSummarySchema]


# --- Notifications ---

class NotificationSchema(BaseModel):
    seq: int
    tick: int
    agent_id: str
    channel: str
    text: str
    plain_text: str


class NotificationsResponse(BaseModel):
    tick: int
    notifications: list[NotificationSchema] = Field(default_factory=list)


# --- State ---

class MetricsSchema(BaseModel):
    updates: int
    errors: int
    last_process_ms: float
    avg_process_ms: float


class MonitorStateResponse(BaseModel):
    tick: int
    running: bool
    paused: bool
    agent_count: int
    cache_size: int
    cooldown_count: int
    notification_count: int
    metrics: MetricsSchema


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class MonitorConfigResponse(BaseModel):
    world_seed: int
    agent_count: int
    max_ticks: int
    tick_duration_ms: int
    scan_interval: int
    threat_check_interval: int
    quest_update_interval: int
    performance_check_interval: int
    structure_scan_interval: int
    resource_cooldown: int
    threat_cooldown: int
    quest_cooldown: int
    region_cache_ttl_ms: int
    terrain_cache_ttl_ms: int
    max_quests: int
    tick_rate: float
