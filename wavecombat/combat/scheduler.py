"""
Action meter scheduler.

Every tick each living combatant gains action meter equal to its speed. The
fullest meter at or above the turn threshold is granted a turn and pays
exactly one threshold for it; the remainder carries over.
"""

from collections.abc import Sequence

from catchery import log_debug

from wavecombat.core.constants import TURN_THRESHOLD
from wavecombat.units.combatant import Combatant


class Scheduler:
    """Decides who acts next and counts the ticks spent doing so."""

    def __init__(self, threshold: float = TURN_THRESHOLD) -> None:
        self.threshold = threshold
        self.ticks = 0

    def accrue(self, roster: Sequence[Combatant]) -> None:
        """Adds one tick of speed to every living combatant."""
        for unit in roster:
            if unit.is_alive():
                unit.action_meter += unit.speed

    def select(self, roster: Sequence[Combatant]) -> Combatant | None:
        """
        Picks the ready combatant with the fullest action meter.

        Ties go to the combatant that appears first in the roster, which lists
        the party before the enemies, each by slot.

        Args:
            roster (Sequence[Combatant]): All combatants, in roster order.

        Returns:
            Combatant | None: The combatant granted a turn, or None.

        """
        best: Combatant | None = None
        for unit in roster:
            if not unit.is_alive() or unit.action_meter < self.threshold:
                continue
            if best is None or unit.action_meter > best.action_meter:
                best = unit
        if best is not None:
            best.action_meter -= self.threshold
        return best

    def tick(self, roster: Sequence[Combatant]) -> Combatant | None:
        """
        Runs one scheduler tick.

        Args:
            roster (Sequence[Combatant]): All combatants, in roster order.

        Returns:
            Combatant | None: The combatant granted a turn this tick, if any.

        """
        self.ticks += 1
        self.accrue(roster)
        selected = self.select(roster)
        if selected is not None:
            log_debug(
                f"Tick {self.ticks}: {selected.name} is granted a turn.",
                {"meter": round(selected.action_meter, 2)},
            )
        return selected
