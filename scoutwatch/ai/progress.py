"""Progress evaluation: four additive sub-scores, each clamped to 0..100."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoutwatch.core.models import ProgressScore

if TYPE_CHECKING:
    from scoutwatch.core.models import AgentHistory
    from scoutwatch.core.snapshot import StateSnapshot

MAX_SCORE = 100


def _clamp(score: int) -> int:
    return max(0, min(score, MAX_SCORE))


def survival_score(state: StateSnapshot) -> int:
    score = 0
    if state.has_food:
        score += 20
    if state.has_bed:
        score += 15
    if state.has_shelter:
        score += 10
    if state.has_water:
        score += 10
    if state.health > 15:
        score += 15
    return _clamp(score)


def combat_score(state: StateSnapshot, history: AgentHistory) -> int:
    score = 0
    if state.has_weapon:
        score += 25
    if state.has_iron_armor:
        score += 30
    if state.has_diamond_armor:
        score += 50
    if state.has_shield:
        score += 15
    if history.mobs_killed > 10:
        score += 20
    return _clamp(score)


def exploration_score(state: StateSnapshot, history: AgentHistory) -> int:
    score = 0
    if history.region_count > 3:
        score += 30
    if history.structures_found > 0:
        score += 20
    if history.distance_traveled > 5000:
        score += 25
    if state.has_maps:
        score += 15
    return _clamp(score)


def crafting_score(state: StateSnapshot) -> int:
    score = 0
    if state.has_wood_tools:
        score += 10
    if state.has_stone_tools:
        score += 20
    if state.has_iron_tools:
        score += 35
    if state.has_diamond_tools:
        score += 50
    if state.has_enchanting_table:
        score += 25
    return _clamp(score)


def evaluate_progress(state: StateSnapshot, history: AgentHistory) -> ProgressScore:
    """Pure function of (snapshot, history)."""
    return ProgressScore(
        survival=survival_score(state),
        combat=combat_score(state, history),
        exploration=exploration_score(state, history),
        crafting=crafting_score(state),
    )
