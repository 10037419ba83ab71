"""
Combat module for the wave combat engine.

This module contains the action meter scheduler, the resolution engine, the
NPC decision logic and the battle that ties them together.
"""

from .battle import Battle, BattleResult, TargetRef
from .battle_log import BattleLog
from .npc_ai import AbilitySelection, choose_action, choose_target, score_ability
from .resolution import ResolutionEngine
from .scheduler import Scheduler

__all__ = [
    "AbilitySelection",
    "Battle",
    "BattleLog",
    "BattleResult",
    "ResolutionEngine",
    "Scheduler",
    "TargetRef",
    "choose_action",
    "choose_target",
    "score_ability",
]
