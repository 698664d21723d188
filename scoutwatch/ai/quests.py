"""Contextual quest generation — an ordered registry of predicate rules.

QuestInputs  — what a rule may look at (snapshot, history, progress, config).
QuestRule    — one predicate plus the quest it contributes when it matches.
QUEST_RULES  — module-level list, in registration order.
QuestGenerator — runs every rule, ranks matches, keeps the top N.

Register additional rules with the ``quest_rule`` decorator::

    @quest_rule(QuestKind.SAFETY, QuestCategory.SURVIVAL, 40, "§7[TIP] ...")
    def _my_rule(q: QuestInputs) -> bool:
        return q.state.is_night
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from scoutwatch.core.catalogs import NETHER, THE_END
from scoutwatch.core.enums import QuestCategory, QuestKind
from scoutwatch.core.models import Quest

if TYPE_CHECKING:
    from scoutwatch.config import MonitorConfig
    from scoutwatch.core.models import AgentHistory, ProgressScore
    from scoutwatch.core.snapshot import StateSnapshot


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class QuestInputs:
    state: StateSnapshot
    history: AgentHistory
    progress: ProgressScore
    config: MonitorConfig


@dataclass(frozen=True, slots=True)
class QuestRule:
    """A predicate and the quest it yields when the predicate holds."""
    name: str
    quest: Quest
    when: Callable[[QuestInputs], bool]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

QUEST_RULES: list[QuestRule] = []


def quest_rule(kind: QuestKind, category: QuestCategory, priority: int, text: str):
    """Decorator registering a predicate as a quest rule."""
    def decorate(fn: Callable[[QuestInputs], bool]) -> Callable[[QuestInputs], bool]:
        QUEST_RULES.append(QuestRule(
            name=fn.__name__.lstrip("_"),
            quest=Quest(kind=kind, category=category, priority=priority, text=text),
            when=fn,
        ))
        return fn
    return decorate


# ---------------------------------------------------------------------------
# Built-in rules (evaluation order is registration order)
# ---------------------------------------------------------------------------

@quest_rule(QuestKind.CRITICAL, QuestCategory.SURVIVAL, 100,
            "§4[CRITICAL] IMMEDIATE DANGER - Heal or retreat NOW!")
def _critical_health(q: QuestInputs) -> bool:
    return q.state.health < q.config.critical_health_threshold


@quest_rule(QuestKind.DIMENSION, QuestCategory.SURVIVAL, 85,
            "§c[NETHER] Brew fire resistance potions for safety")
def _nether_unprotected(q: QuestInputs) -> bool:
    return q.state.dimension == NETHER and not q.state.has_fire_resistance


@quest_rule(QuestKind.DIMENSION, QuestCategory.EXPLORATION, 80,
            "§d[END] Collect ender pearls to navigate islands")
def _end_without_pearls(q: QuestInputs) -> bool:
    return q.state.dimension == THE_END and not q.state.has_ender_pearls


@quest_rule(QuestKind.SURVIVAL, QuestCategory.SURVIVAL, 90,
            "§e[HUNGER] Critical food shortage - Hunt or harvest immediately")
def _hunger_crisis(q: QuestInputs) -> bool:
    return not q.state.has_food and q.state.hunger < 10


@quest_rule(QuestKind.SAFETY, QuestCategory.SURVIVAL, 75,
            "§c[NIGHT CYCLE] Build shelter - Hostile spawns active")
def _night_exposed(q: QuestInputs) -> bool:
    return q.state.is_night and not q.state.has_shelter and q.progress.survival < 50


@quest_rule(QuestKind.INVENTORY, QuestCategory.CRAFTING, 60,
            "§6[STORAGE] Inventory full - Craft ender chest for portable storage")
def _inventory_full(q: QuestInputs) -> bool:
    return q.state.inventory_full and not q.state.has_ender_chest


@quest_rule(QuestKind.PROGRESSION, QuestCategory.CRAFTING, 70,
            "§a[START] Craft wooden tools to begin your journey")
def _wood_tools(q: QuestInputs) -> bool:
    return q.progress.crafting < 30 and q.state.has_wood and not q.state.has_wood_tools


@quest_rule(QuestKind.PROGRESSION, QuestCategory.CRAFTING, 65,
            "§a[UPGRADE] Stone tools available - 2x durability improvement")
def _stone_tools(q: QuestInputs) -> bool:
    return q.progress.crafting >= 30 and q.state.has_stone and not q.state.has_stone_tools


@quest_rule(QuestKind.PROGRESSION, QuestCategory.CRAFTING, 68,
            "§b[UPGRADE] Smelt iron - Unlock superior tool tier")
def _iron_tools(q: QuestInputs) -> bool:
    return q.progress.crafting >= 50 and q.state.has_iron and not q.state.has_iron_tools


@quest_rule(QuestKind.COMBAT, QuestCategory.COMBAT, 72,
            "§b[DEFENSE] Craft iron armor - Reduce damage by 60%")
def _iron_armor(q: QuestInputs) -> bool:
    return q.state.has_iron and not q.state.has_iron_armor and q.progress.combat < 40


@quest_rule(QuestKind.PROGRESSION, QuestCategory.CRAFTING, 80,
            "§3[ELITE] Diamond tools available - Maximum efficiency")
def _diamond_tools(q: QuestInputs) -> bool:
    return q.state.has_diamonds and not q.state.has_diamond_tools


@quest_rule(QuestKind.PROGRESSION, QuestCategory.CRAFTING, 78,
            "§5[ENCHANT] Build enchanting table - Unlock powerful upgrades")
def _enchanting_table(q: QuestInputs) -> bool:
    return q.state.has_diamonds and not q.state.has_enchanting_table


@quest_rule(QuestKind.EXPLORATION, QuestCategory.EXPLORATION, 50,
            "§d[EXPLORE] Stagnant location - New biomes offer unique resources")
def _stagnant(q: QuestInputs) -> bool:
    return q.history.stayed_in_area > q.config.stagnant_time


@quest_rule(QuestKind.REGION, QuestCategory.SURVIVAL, 73,
            "§6[DESERT] Find oasis or craft water bottles - Dehydration risk")
def _desert_without_water(q: QuestInputs) -> bool:
    return q.state.region == "desert" and not q.state.has_water


@quest_rule(QuestKind.REGION, QuestCategory.EXPLORATION, 55,
            "§9[OCEAN] Craft a boat for efficient water travel")
def _ocean_without_boat(q: QuestInputs) -> bool:
    return q.state.region == "ocean" and not q.state.has_boat


@quest_rule(QuestKind.TRADING, QuestCategory.EXPLORATION, 58,
            "§2[VILLAGE] Trade with villagers for rare items and discounts")
def _untraded_settlement(q: QuestInputs) -> bool:
    return q.state.near_village and not q.state.has_traded_with_villager


@quest_rule(QuestKind.COMBAT, QuestCategory.COMBAT, 62,
            "§7[DEFENSE] Craft a shield to block attacks and explosions")
def _shield_gap(q: QuestInputs) -> bool:
    return not q.state.has_shield and q.progress.combat > 30


@quest_rule(QuestKind.MAINTENANCE, QuestCategory.CRAFTING, 65,
            "§e[REPAIR] Tool durability critical - Use anvil or craft replacement")
def _low_durability(q: QuestInputs) -> bool:
    return q.state.low_durability


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class QuestGenerator:
    """Evaluates every registered rule and keeps the highest-priority matches.

    Ties keep registration order (the sort is stable).
    """

    __slots__ = ("_config", "_rules")

    def __init__(self, config: MonitorConfig, rules: list[QuestRule] | None = None) -> None:
        self._config = config
        self._rules = QUEST_RULES if rules is None else rules

    def generate(
        self,
        state: StateSnapshot,
        history: AgentHistory,
        progress: ProgressScore,
    ) -> tuple[Quest, ...]:
        inputs = QuestInputs(state, history, progress, self._config)
        matched = [rule.quest for rule in self._rules if rule.when(inputs)]
        matched.sort(key=lambda quest: quest.priority, reverse=True)
        return tuple(matched[: self._config.max_quests])
