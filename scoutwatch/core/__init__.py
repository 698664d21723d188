"""Core data models, catalogs and host-world boundary interfaces."""

from scoutwatch.core.enums import (
    Capability, HazardTier, NotificationChannel, QuestCategory, QuestKind, ThreatKind,
)
from scoutwatch.core.environment import Environment, MessageSink, strip_markup
from scoutwatch.core.events import (
    ActorDied, AgentDamaged, AgentJoined, AgentLeft, AgentTraded, EventSource, LifecycleEvent,
)
from scoutwatch.core.models import (
    ActorSighting, AgentHistory, AgentReading, ItemStack, ProgressScore, Quest,
    ResourceFind, ScoredEvent, Vector3,
)
from scoutwatch.core.snapshot import StateSnapshot

__all__ = [
    "ActorDied",
    "ActorSighting",
    "AgentDamaged",
    "AgentHistory",
    "AgentJoined",
    "AgentLeft",
    "AgentReading",
    "AgentTraded",
    "Capability",
    "Environment",
    "EventSource",
    "HazardTier",
    "ItemStack",
    "LifecycleEvent",
    "MessageSink",
    "NotificationChannel",
    "ProgressScore",
    "Quest",
    "QuestCategory",
    "QuestKind",
    "ResourceFind",
    "ScoredEvent",
    "StateSnapshot",
    "ThreatKind",
    "Vector3",
    "strip_markup",
]
