"""Perception and scoring: snapshots, threats, resources, progress, quests, structures."""

from scoutwatch.ai.progress import evaluate_progress
from scoutwatch.ai.quests import QUEST_RULES, QuestGenerator, QuestRule, quest_rule
from scoutwatch.ai.resources import ResourceScanner
from scoutwatch.ai.state_analyzer import StateAnalyzer
from scoutwatch.ai.structures import StructureScanner
from scoutwatch.ai.threats import ThreatScorer

__all__ = [
    "QUEST_RULES",
    "QuestGenerator",
    "QuestRule",
    "ResourceScanner",
    "StateAnalyzer",
    "StructureScanner",
    "ThreatScorer",
    "evaluate_progress",
    "quest_rule",
]
