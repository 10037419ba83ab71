"""
Exception types raised by the combat engine.

Configuration and routine failures during a battle are logged and absorbed at
the dispatch boundary; the exceptions below are the ones that reach callers.
"""


class CombatError(Exception):
    """Base class for every error raised by the combat engine."""


class InvariantViolation(CombatError):
    """A combatant was left in a state that breaks a combat invariant."""


class ConfigurationError(CombatError):
    """An ability descriptor or routine registration is missing or invalid."""


class BattleError(CombatError):
    """The control surface of a battle was used incorrectly."""


class NotWaitingError(BattleError):
    """A player action was submitted while no player input is pending."""


class InvalidActionError(BattleError):
    """The submitted ability cannot be used by the pending unit."""


class InvalidTargetError(BattleError):
    """The submitted target is not valid for the chosen ability."""
