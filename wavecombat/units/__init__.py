"""
Unit module for the wave combat engine.

This module contains the external unit definitions read by the engine and the
battle-scoped combatants built from them.
"""

from .combatant import Combatant, CombatantSnapshot
from .loader import load_units
from .unit_definition import AbilityReference, GearStats, UnitDefinition

__all__ = [
    "AbilityReference",
    "Combatant",
    "CombatantSnapshot",
    "GearStats",
    "UnitDefinition",
    "load_units",
]
