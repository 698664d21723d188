"""Enumerations used throughout the monitor."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class HazardTier(IntEnum):
    """Danger class of an actor type."""

    NONE = 0
    HOSTILE = 1
    PASSIVE_DANGER = 2
    BOSS = 3


@unique
class ThreatKind(str, Enum):
    """Source of a threat-channel event. Part of the threat cooldown key."""

    MOB = "mob"
    HEALTH_CRITICAL = "health_critical"
    HEALTH_LOW = "health_low"
    DROWNING = "drowning"
    ENVIRONMENTAL = "environmental"


@unique
class QuestCategory(str, Enum):
    SURVIVAL = "survival"
    COMBAT = "combat"
    EXPLORATION = "exploration"
    CRAFTING = "crafting"


@unique
class QuestKind(str, Enum):
    CRITICAL = "critical"
    DIMENSION = "dimension"
    SURVIVAL = "survival"
    SAFETY = "safety"
    INVENTORY = "inventory"
    PROGRESSION = "progression"
    COMBAT = "combat"
    EXPLORATION = "exploration"
    REGION = "region"
    TRADING = "trading"
    MAINTENANCE = "maintenance"


@unique
class Capability(str, Enum):
    """Semantic fact implied by carrying an item.

    Values match the ``StateSnapshot`` field they switch on.
    """

    FOOD = "has_food"
    BED = "has_bed"
    WATER = "has_water"
    WOOD = "has_wood"
    WOOD_TOOLS = "has_wood_tools"
    STONE = "has_stone"
    STONE_TOOLS = "has_stone_tools"
    IRON = "has_iron"
    IRON_TOOLS = "has_iron_tools"
    IRON_ARMOR = "has_iron_armor"
    DIAMONDS = "has_diamonds"
    DIAMOND_TOOLS = "has_diamond_tools"
    DIAMOND_ARMOR = "has_diamond_armor"
    ENCHANTING_TABLE = "has_enchanting_table"
    ENDER_CHEST = "has_ender_chest"
    SHIELD = "has_shield"
    WEAPON = "has_weapon"
    BOAT = "has_boat"
    MAPS = "has_maps"
    FIRE_RESISTANCE = "has_fire_resistance"
    ENDER_PEARLS = "has_ender_pearls"


@unique
class NotificationChannel(str, Enum):
    """Channel a dispatched message belongs to (used by the notification log)."""

    SYSTEM = "system"
    RESOURCE = "resource"
    THREAT = "threat"
    QUEST = "quest"
    STRUCTURE = "structure"
    COMBAT = "combat"
    CAUTION = "caution"


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    WORLD_GEN = 0
    AGENT_MOVE = 1
    ACTOR_MOVE = 2
    SPAWN = 3
    INVENTORY = 4
    HEALTH = 5
