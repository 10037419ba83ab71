"""
Wave combat engine.

Resolves turn-based combat between a player party and a sequence of enemy
waves, with turn order driven by a speed-based action meter.
"""

from .combat import Battle, BattleResult, TargetRef
from .core import BattleSettings
from .units import UnitDefinition

__all__ = [
    "Battle",
    "BattleResult",
    "BattleSettings",
    "TargetRef",
    "UnitDefinition",
]
