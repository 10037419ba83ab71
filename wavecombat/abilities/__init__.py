"""
Abilities module for the wave combat engine.

This module contains the ability descriptors, the catalog that holds them, the
registry of routines that resolve them, and the built-in routine library.
"""

from .descriptor import AbilityCatalog, AbilityDescriptor
from .registry import ROUTINES, Routine, RoutineRegistry, routine

# Register the built-in routines.
from . import routines  # noqa: F401

from .content import DEFAULT_ABILITIES, default_catalog

__all__ = [
    "AbilityCatalog",
    "AbilityDescriptor",
    "DEFAULT_ABILITIES",
    "ROUTINES",
    "Routine",
    "RoutineRegistry",
    "default_catalog",
    "routine",
]
