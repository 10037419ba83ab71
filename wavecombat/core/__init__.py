"""
Core system module for the wave combat engine.

This module contains the fundamental components shared by the rest of the
engine, including fixed combat rules, battle settings, the seeded random
number generator, error types and display utilities.
"""

from .config import BattleSettings

from .constants import (
    AREA_TARGET,
    TURN_THRESHOLD,
    DamageType,
    EffectTag,
    EncounterState,
    NiceEnum,
    Side,
    TargetClass,
    TurnPhase,
)

from .errors import (
    BattleError,
    CombatError,
    ConfigurationError,
    InvalidActionError,
    InvalidTargetError,
    InvariantViolation,
    NotWaitingError,
)

from .rng import RNG

from .utils import (
    ccapture,
    clamp,
    cprint,
    crule,
    make_bar,
    ratio,
)

__all__ = [
    # Configuration
    "BattleSettings",
    # Constants
    "AREA_TARGET",
    "TURN_THRESHOLD",
    "DamageType",
    "EffectTag",
    "EncounterState",
    "NiceEnum",
    "Side",
    "TargetClass",
    "TurnPhase",
    # Errors
    "BattleError",
    "CombatError",
    "ConfigurationError",
    "InvalidActionError",
    "InvalidTargetError",
    "InvariantViolation",
    "NotWaitingError",
    # Randomness
    "RNG",
    # Utilities
    "ccapture",
    "clamp",
    "cprint",
    "crule",
    "make_bar",
    "ratio",
]
