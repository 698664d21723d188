"""Immutable per-tick snapshot of an agent's condition and surroundings."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

UNKNOWN_REGION = "unknown"
UNKNOWN_DIMENSION = "unknown"


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Flat, comparison-friendly record of what an agent has and where it is.

    Defaults are pessimistic: nothing owned, full health, unknown region.
    Built fresh every tick and never persisted.
    """

    dimension: str = UNKNOWN_DIMENSION
    health: float = 20.0
    hunger: int = 20
    low_health: bool = False

    # Equipment and inventory
    has_food: bool = False
    has_bed: bool = False
    has_water: bool = False
    has_wood: bool = False
    has_wood_tools: bool = False
    has_stone: bool = False
    has_stone_tools: bool = False
    has_iron: bool = False
    has_iron_tools: bool = False
    has_iron_armor: bool = False
    has_diamonds: bool = False
    has_diamond_tools: bool = False
    has_diamond_armor: bool = False
    has_enchanting_table: bool = False
    has_ender_chest: bool = False
    has_shield: bool = False
    has_weapon: bool = False
    has_boat: bool = False
    has_maps: bool = False
    has_fire_resistance: bool = False
    has_ender_pearls: bool = False
    inventory_full: bool = False
    low_durability: bool = False

    # Surroundings
    has_shelter: bool = False
    near_village: bool = False
    has_traded_with_villager: bool = False
    region: str = UNKNOWN_REGION
    is_night: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
