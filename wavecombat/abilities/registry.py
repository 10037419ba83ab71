"""
Routine registry.

Routines are the functions that resolve abilities. They are registered under a
string key with the `routine` decorator and looked up by the key a descriptor
names.
"""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from wavecombat.core.errors import ConfigurationError

if TYPE_CHECKING:
    from wavecombat.units.combatant import Combatant

    from .descriptor import AbilityDescriptor

# (battle, caster, target, descriptor) -> None
Routine = Callable[[Any, "Combatant", Any, "AbilityDescriptor"], None]


class RoutineRegistry:
    """A mapping of routine keys to routine functions."""

    def __init__(self) -> None:
        self._routines: dict[str, Routine] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._routines

    def __len__(self) -> int:
        return len(self._routines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._routines)

    def register(self, key: str, routine: Routine) -> None:
        """
        Registers a routine under a key.

        Raises:
            ConfigurationError: If the key is empty or already taken.

        """
        if not key:
            raise ConfigurationError("Routine key must not be empty.")
        if key in self._routines:
            raise ConfigurationError(f"Routine '{key}' is already registered.")
        self._routines[key] = routine

    def routine(self, key: str) -> Callable[[Routine], Routine]:
        """Decorator that registers the decorated function under `key`."""

        def decorator(func: Routine) -> Routine:
            self.register(key, func)
            return func

        return decorator

    def get(self, key: str) -> Routine | None:
        return self._routines.get(key)

    def copy(self) -> "RoutineRegistry":
        clone = RoutineRegistry()
        clone._routines = dict(self._routines)
        return clone


# The registry the built-in routines register themselves into.
ROUTINES = RoutineRegistry()


def routine(key: str) -> Callable[[Routine], Routine]:
    """Registers a built-in routine."""
    return ROUTINES.routine(key)
