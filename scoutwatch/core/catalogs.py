"""Static lookup tables: hazards, resources, structures, item capabilities.

Every table is keyed by a concrete identifier and wrapped in a
``MappingProxyType`` so nothing can mutate it at runtime.  Unknown
identifiers simply miss the lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from scoutwatch.core.enums import Capability, HazardTier

NAMESPACE = "minecraft:"

AGENT_TYPE = "minecraft:player"
ITEM_TYPE = "minecraft:item"
TRADER_TYPE = "minecraft:villager"
RAIDER_TYPE = "minecraft:pillager"

NETHER = "minecraft:the_nether"
THE_END = "minecraft:the_end"
OVERWORLD = "minecraft:overworld"

AIR_CELLS: frozenset[str] = frozenset({
    "minecraft:air", "minecraft:cave_air", "minecraft:void_air",
})


def strip_namespace(identifier: str) -> str:
    return identifier.replace(NAMESPACE, "", 1) if identifier.startswith(NAMESPACE) else identifier


def display_name(identifier: str) -> str:
    """``minecraft:wither_skeleton`` -> ``WITHER_SKELETON``."""
    return strip_namespace(identifier).upper()


# ---------------------------------------------------------------------------
# Actor hazards
# ---------------------------------------------------------------------------

HOSTILE_ACTORS: tuple[str, ...] = (
    "minecraft:zombie", "minecraft:skeleton", "minecraft:creeper", "minecraft:spider",
    "minecraft:enderman", "minecraft:witch", "minecraft:drowned", "minecraft:husk",
    "minecraft:stray", "minecraft:phantom", "minecraft:piglin", "minecraft:zoglin",
    "minecraft:blaze", "minecraft:ghast", "minecraft:hoglin", "minecraft:wither_skeleton",
)
PASSIVE_DANGER_ACTORS: tuple[str, ...] = (
    "minecraft:iron_golem", "minecraft:warden", "minecraft:piglin_brute",
)
BOSS_ACTORS: tuple[str, ...] = ("minecraft:wither", "minecraft:ender_dragon")

ACTOR_TIERS: Mapping[str, HazardTier] = MappingProxyType({
    **{t: HazardTier.HOSTILE for t in HOSTILE_ACTORS},
    **{t: HazardTier.PASSIVE_DANGER for t in PASSIVE_DANGER_ACTORS},
    **{t: HazardTier.BOSS for t in BOSS_ACTORS},
})

TIER_BASE_DANGER: Mapping[HazardTier, int] = MappingProxyType({
    HazardTier.NONE: 0,
    HazardTier.HOSTILE: 60,
    HazardTier.PASSIVE_DANGER: 70,
    HazardTier.BOSS: 100,
})

# Named special cases on top of the tier base score
ACTOR_DANGER_BONUS: Mapping[str, int] = MappingProxyType({
    "minecraft:creeper": 25,     # explosive
    "minecraft:warden": 50,      # apex predator
})


def hazard_tier(actor_type: str) -> HazardTier:
    return ACTOR_TIERS.get(actor_type, HazardTier.NONE)


# ---------------------------------------------------------------------------
# Terrain hazards and valuables
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TerrainHazard:
    priority: int
    message: str


@dataclass(frozen=True, slots=True)
class ValuableResource:
    rarity: int
    message: str


HAZARDOUS_TERRAIN: Mapping[str, TerrainHazard] = MappingProxyType({
    "minecraft:lava": TerrainHazard(10, "§4[CRITICAL] LAVA DETECTED!"),
    "minecraft:flowing_lava": TerrainHazard(10, "§4[CRITICAL] FLOWING LAVA!"),
    "minecraft:fire": TerrainHazard(7, "§c[DANGER] FIRE NEARBY!"),
    "minecraft:magma": TerrainHazard(6, "§6[WARNING] Magma block detected!"),
    "minecraft:sweet_berry_bush": TerrainHazard(2, "§e[CAUTION] Berry bush ahead"),
    "minecraft:cactus": TerrainHazard(2, "§e[CAUTION] Cactus nearby"),
})

VALUABLE_RESOURCES: Mapping[str, ValuableResource] = MappingProxyType({
    "minecraft:diamond_ore": ValuableResource(10, "§b✦ DIAMONDS DETECTED! ✦"),
    "minecraft:deepslate_diamond_ore": ValuableResource(10, "§b✦ DIAMONDS DETECTED! ✦"),
    "minecraft:ancient_debris": ValuableResource(15, "§6✦ ANCIENT DEBRIS FOUND! ✦"),
    "minecraft:emerald_ore": ValuableResource(12, "§a✦ EMERALD DISCOVERED! ✦"),
    "minecraft:deepslate_emerald_ore": ValuableResource(12, "§a✦ EMERALD DISCOVERED! ✦"),
    "minecraft:gold_ore": ValuableResource(5, "§e⚑ Gold ore detected"),
    "minecraft:deepslate_gold_ore": ValuableResource(5, "§e⚑ Gold ore detected"),
    "minecraft:nether_gold_ore": ValuableResource(3, "§e⚑ Nether gold ore detected"),
})


# ---------------------------------------------------------------------------
# Structures
# ---------------------------------------------------------------------------

STRUCTURE_MESSAGES: Mapping[str, str] = MappingProxyType({
    "village": "§2[DISCOVERY] §aVillage - Trade, rest, and resupply",
    "desert_pyramid": "§6[DISCOVERY] §eDesert Temple - Treasure and traps await",
    "jungle_pyramid": "§a[DISCOVERY] §2Jungle Temple - Ancient mechanisms inside",
    "pillager_outpost": "§c[DISCOVERY] §4Pillager Outpost - Extreme danger!",
    "mansion": "§5[DISCOVERY] §dWoodland Mansion - Rare loot and totems",
    "stronghold": "§3[DISCOVERY] §bStronghold - Portal to The End",
    "fortress": "§4[DISCOVERY] §cNether Fortress - Blaze rods and wither skeletons",
    "bastion": "§6[DISCOVERY] §eBastion Remnant - Netherite and piglin gold",
    "end_city": "§d[DISCOVERY] §5End City - Elytra and shulker boxes",
    "monument": "§b[DISCOVERY] §3Ocean Monument - Sponges and prismarine",
})


def structure_message(name: str) -> str:
    return STRUCTURE_MESSAGES.get(name, f"§7[DISCOVERY] {name} structure found")


# ---------------------------------------------------------------------------
# Item capabilities
# ---------------------------------------------------------------------------

_COLORS = (
    "white", "orange", "magenta", "light_blue", "yellow", "lime", "pink", "gray",
    "light_gray", "cyan", "purple", "blue", "brown", "green", "red", "black",
)
_WOODS = (
    "oak", "spruce", "birch", "jungle", "acacia", "dark_oak", "mangrove", "cherry",
    "crimson", "warped", "bamboo",
)
_BOAT_WOODS = ("oak", "spruce", "birch", "jungle", "acacia", "dark_oak", "mangrove", "cherry")
_TOOLS = ("pickaxe", "axe", "shovel")
_ARMOR = ("helmet", "chestplate", "leggings", "boots")
_FOODS = (
    "apple", "golden_apple", "bread", "baked_potato", "carrot", "potato", "beetroot",
    "cooked_beef", "cooked_porkchop", "cooked_chicken", "cooked_mutton", "cooked_rabbit",
    "cooked_cod", "cooked_salmon", "beef", "porkchop", "chicken", "mutton", "rabbit",
    "cod", "salmon", "melon_slice", "sweet_berries", "cookie", "pumpkin_pie",
    "mushroom_stew", "rabbit_stew", "beetroot_soup", "dried_kelp", "glow_berries",
)


def _build_item_capabilities() -> dict[str, frozenset[Capability]]:
    table: dict[str, set[Capability]] = {}

    def grant(item: str, *caps: Capability) -> None:
        table.setdefault(NAMESPACE + item, set()).update(caps)

    for food in _FOODS:
        grant(food, Capability.FOOD)
    for color in _COLORS:
        grant(f"{color}_bed", Capability.BED)
    grant("bed", Capability.BED)
    grant("water_bucket", Capability.WATER)

    for wood in _WOODS:
        suffix = "stem" if wood in ("crimson", "warped") else "log"
        if wood == "bamboo":
            grant("bamboo_block", Capability.WOOD)
        else:
            grant(f"{wood}_{suffix}", Capability.WOOD)
        grant(f"{wood}_planks", Capability.WOOD)
    for wood in _BOAT_WOODS:
        grant(f"{wood}_boat", Capability.BOAT)
        grant(f"{wood}_chest_boat", Capability.BOAT)
    grant("boat", Capability.BOAT)
    grant("bamboo_raft", Capability.BOAT)

    grant("cobblestone", Capability.STONE)
    grant("stone", Capability.STONE)
    grant("iron_ingot", Capability.IRON)
    grant("diamond", Capability.DIAMONDS)

    tool_caps = {
        "wooden": Capability.WOOD_TOOLS,
        "stone": Capability.STONE_TOOLS,
        "iron": Capability.IRON_TOOLS,
        "diamond": Capability.DIAMOND_TOOLS,
    }
    for material, cap in tool_caps.items():
        # Early tiers count any implement, later tiers only the mining tools
        tools = _TOOLS + ("hoe", "sword") if material in ("wooden", "stone") else _TOOLS
        for tool in tools:
            grant(f"{material}_{tool}", cap)
    for material in ("wooden", "stone", "iron", "golden", "diamond", "netherite"):
        grant(f"{material}_sword", Capability.WEAPON)
        grant(f"{material}_axe", Capability.WEAPON)
    for piece in _ARMOR:
        grant(f"iron_{piece}", Capability.IRON_ARMOR)
        grant(f"diamond_{piece}", Capability.DIAMOND_ARMOR)

    grant("enchanting_table", Capability.ENCHANTING_TABLE)
    grant("ender_chest", Capability.ENDER_CHEST)
    grant("shield", Capability.SHIELD)
    grant("map", Capability.MAPS)
    grant("filled_map", Capability.MAPS)
    grant("empty_map", Capability.MAPS)
    grant("fire_resistance", Capability.FIRE_RESISTANCE)
    grant("fire_resistance_potion", Capability.FIRE_RESISTANCE)
    grant("ender_pearl", Capability.ENDER_PEARLS)

    return {item: frozenset(caps) for item, caps in table.items()}


ITEM_CAPABILITIES: Mapping[str, frozenset[Capability]] = MappingProxyType(_build_item_capabilities())


def capabilities_of(item_id: str) -> frozenset[Capability]:
    return ITEM_CAPABILITIES.get(item_id, frozenset())
