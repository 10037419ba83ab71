"""
Effects system module for the wave combat engine.

This module contains the named buff and debuff records held by combatants and
the aggregator that turns them into working stats, derived combat stats,
action meter speed and damage mitigation.
"""

# Import base classes
from .base_effect import (
    PERMANENT,
    Effect,
    EffectPayload,
    make_effect,
    merge_duration,
    tick_effects,
    upsert_effect,
)

# Import the aggregation pass and stat curves
from .aggregator import (
    AggregateResult,
    DerivedStats,
    StatBlock,
    aggregate,
    armor_value,
    base_speed_curve,
    magic_reduction,
    physical_reduction,
    resist_value,
    speed_factor,
)

__all__ = [
    "PERMANENT",
    "Effect",
    "EffectPayload",
    "make_effect",
    "merge_duration",
    "tick_effects",
    "upsert_effect",
    "AggregateResult",
    "DerivedStats",
    "StatBlock",
    "aggregate",
    "armor_value",
    "base_speed_curve",
    "magic_reduction",
    "physical_reduction",
    "resist_value",
    "speed_factor",
]
