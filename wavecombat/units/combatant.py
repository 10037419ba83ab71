"""
Combatant module for the combat engine.

Defines the battle-scoped wrapper around a unit definition: hit points,
shield, action meter, buffs and debuffs, cooldowns and the derived combat
stats rebuilt from the effects the unit holds.
"""

from pydantic import BaseModel, ConfigDict

from wavecombat.core.constants import Side
from wavecombat.core.errors import InvariantViolation
from wavecombat.core.utils import make_bar, ratio
from wavecombat.effects.aggregator import (
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
from wavecombat.effects.base_effect import Effect, tick_effects

from .unit_definition import AbilityReference, UnitDefinition


class CombatantSnapshot(BaseModel):
    """A read-only copy of a combatant's state, for renderers."""

    model_config = ConfigDict(frozen=True)

    name: str
    side: Side
    slot: int
    level: int
    current_hp: int
    max_hp: int
    shield: int
    action_meter: float
    is_dead: bool
    buffs: dict[str, int]
    debuffs: dict[str, int]
    cooldowns: dict[int, int]
    stats: StatBlock
    derived: DerivedStats


class Combatant:
    """
    A unit taking part in an encounter.

    Attributes:
        definition (UnitDefinition):
            The unit this combatant was built from.
        side (Side):
            The roster the combatant fights for.
        slot (int):
            The stable position of the combatant in its roster.
        current_hp (int):
            Remaining hit points, in [0, max_hp].
        shield (int):
            Temporary hit points absorbed before current_hp.
        action_meter (float):
            Progress towards the next turn.
        buffs (dict[str, Effect]):
            Beneficial effects, keyed by name.
        debuffs (dict[str, Effect]):
            Harmful effects, keyed by name.
        cooldowns (dict[int, int]):
            Remaining cooldown turns, keyed by ability slot.
        is_dead (bool):
            Set when the combatant is killed, cleared on resurrection.
        stats (StatBlock):
            Working stats after effect rescaling.
        derived (DerivedStats):
            Derived combat stats from the last aggregation.
        turns_taken (int):
            Number of turns the combatant has been granted.

    """

    definition: UnitDefinition
    side: Side
    slot: int
    current_hp: int
    shield: int
    action_meter: float
    buffs: dict[str, Effect]
    debuffs: dict[str, Effect]
    cooldowns: dict[int, int]
    is_dead: bool
    stats: StatBlock
    derived: DerivedStats
    turns_taken: int

    def __init__(
        self,
        definition: UnitDefinition,
        side: Side,
        slot: int,
        base_crit_chance: float = 0.0,
    ) -> None:
        self.definition = definition
        self.side = side
        self.slot = slot
        self.base_crit_chance = base_crit_chance

        self.current_hp = definition.hp
        self.shield = 0
        self.action_meter = 0.0
        self.buffs = {}
        self.debuffs = {}
        self.cooldowns = {index: 0 for index in range(len(definition.abilities))}
        self.is_dead = False
        self.turns_taken = 0

        self.stats = definition.stats
        self.derived = DerivedStats(crit_chance=base_crit_chance)

    def __repr__(self) -> str:
        return f"Combatant({self.name!r}, {self.side}, slot={self.slot})"

    # ============================================================================
    # DEFINITION PROPERTIES
    # ============================================================================

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def level(self) -> int:
        return self.definition.level

    @property
    def max_hp(self) -> int:
        return self.definition.hp

    @property
    def base_stats(self) -> StatBlock:
        return self.definition.stats

    @property
    def abilities(self) -> list[AbilityReference]:
        return self.definition.abilities

    @property
    def creature_type(self) -> str | None:
        return self.definition.creature_type

    @property
    def colored_name(self) -> str:
        """Returns the combatant's name colored by side."""
        return self.side.colorize(self.name)

    # ============================================================================
    # STATE QUERIES
    # ============================================================================

    def is_alive(self) -> bool:
        """A combatant is alive while it is not flagged dead and has hit points."""
        return not self.is_dead and self.current_hp > 0

    def hp_fraction(self) -> float:
        return ratio(self.current_hp, self.max_hp)

    def is_stunned(self) -> bool:
        return any(debuff.payload.stunned for debuff in self.debuffs.values())

    def is_immune(self) -> bool:
        return any(buff.payload.immunity for buff in self.buffs.values())

    def resists_debuffs(self) -> bool:
        return any(
            buff.payload.debuff_immunity or buff.payload.immunity
            for buff in self.buffs.values()
        )

    def is_untargetable(self) -> bool:
        return any(buff.payload.untargetable for buff in self.buffs.values())

    @property
    def armor(self) -> float:
        return armor_value(self.stats, self.definition.gear.armor)

    @property
    def resist(self) -> float:
        return resist_value(self.stats, self.definition.gear.resist)

    @property
    def physical_reduction(self) -> float:
        return physical_reduction(self.armor)

    @property
    def magic_reduction(self) -> float:
        return magic_reduction(self.resist)

    @property
    def speed(self) -> float:
        """Action meter gained per tick, from agility and the current effects."""
        return base_speed_curve(self.stats.agility) * speed_factor(
            self.buffs.values(), self.debuffs.values()
        )

    # ============================================================================
    # EFFECTS
    # ============================================================================

    def recompute(self) -> None:
        """Rebuilds the working stats and derived stats from the held effects."""
        result = aggregate(
            self.base_stats,
            self.buffs.values(),
            self.debuffs.values(),
            base_crit_chance=self.base_crit_chance,
        )
        self.stats = result.stats
        self.derived = result.derived

    def tick_effects(self) -> list[str]:
        """
        Consumes one turn of every temporary buff and debuff.

        Returns:
            list[str]: The names of the effects that expired.

        """
        return tick_effects(self.buffs) + tick_effects(self.debuffs)

    def total_dot_damage(self) -> int:
        """Sum of the damage over time carried by all debuffs."""
        total = sum(
            debuff.payload.dot_damage
            for debuff in self.debuffs.values()
            if debuff.payload.dot_damage
        )
        return int(total)

    # ============================================================================
    # ABILITIES
    # ============================================================================

    def can_use_ability(self, index: int) -> bool:
        """
        Checks whether the ability in the given slot can be used now.

        Args:
            index (int): The ability slot.

        Returns:
            bool: True if the slot exists, is off cooldown and the unit is not stunned.

        """
        if index < 0 or index >= len(self.abilities):
            return False
        if self.cooldowns.get(index, 0) > 0:
            return False
        return not self.is_stunned()

    def start_cooldown(self, index: int) -> None:
        cooldown = self.abilities[index].cooldown
        if cooldown > 0:
            self.cooldowns[index] = cooldown

    def reduce_cooldowns(self) -> None:
        for index, remaining in self.cooldowns.items():
            if remaining > 0:
                self.cooldowns[index] = remaining - 1

    # ============================================================================
    # INVARIANTS AND SNAPSHOTS
    # ============================================================================

    def check_invariants(self) -> None:
        """
        Verifies the combatant is in a consistent state.

        Raises:
            InvariantViolation: If any combat invariant is broken.

        """
        if self.current_hp < 0:
            raise InvariantViolation(f"{self.name} has negative HP ({self.current_hp}).")
        if self.current_hp > self.max_hp:
            raise InvariantViolation(
                f"{self.name} has {self.current_hp} HP, above its maximum {self.max_hp}."
            )
        if self.shield < 0:
            raise InvariantViolation(f"{self.name} has a negative shield ({self.shield}).")
        if self.action_meter < 0:
            raise InvariantViolation(
                f"{self.name} has a negative action meter ({self.action_meter})."
            )
        if self.is_dead and self.current_hp != 0:
            raise InvariantViolation(f"{self.name} is dead with {self.current_hp} HP.")
        for index, remaining in self.cooldowns.items():
            if remaining < 0:
                raise InvariantViolation(
                    f"{self.name} has a negative cooldown on slot {index}."
                )
        for effects in (self.buffs, self.debuffs):
            for name, effect in effects.items():
                if name != effect.name:
                    raise InvariantViolation(
                        f"{self.name} stores effect '{effect.name}' under '{name}'."
                    )

    def snapshot(self) -> CombatantSnapshot:
        """Returns a frozen copy of the combatant's state."""
        return CombatantSnapshot(
            name=self.name,
            side=self.side,
            slot=self.slot,
            level=self.level,
            current_hp=self.current_hp,
            max_hp=self.max_hp,
            shield=self.shield,
            action_meter=self.action_meter,
            is_dead=self.is_dead,
            buffs={name: effect.duration for name, effect in self.buffs.items()},
            debuffs={name: effect.duration for name, effect in self.debuffs.items()},
            cooldowns=dict(self.cooldowns),
            stats=self.stats,
            derived=self.derived,
        )

    def get_status_line(self, show_bars: bool = True, show_effects: bool = True) -> str:
        """
        Get a formatted status line with health, shield, meter and effects.

        Args:
            show_bars (bool): Whether to show bar representations. Defaults to True.
            show_effects (bool): Whether to list held effects. Defaults to True.

        Returns:
            str: A rich-markup status line.

        """
        name_width = min(max(len(self.name), 8), 16)
        status = f"{self.slot + 1}. [{self.side.color}]{self.name:<{name_width}}[/] "
        if not self.is_alive():
            return status + "| [dim]defeated[/]"
        status += f"| [green]HP:{self.current_hp:>4}/{self.max_hp:<4}[/]"
        if show_bars:
            status += make_bar(self.current_hp, self.max_hp, length=8, color="green")
        if self.shield > 0:
            status += f" [cyan]+{self.shield}[/]"
        status += f" | [yellow]AB:{min(self.action_meter, 99999):>6.0f}[/]"
        if show_effects:
            effects = [
                f"[green]{name}[/]({effect.duration if effect.duration > 0 else '∞'})"
                for name, effect in self.buffs.items()
            ] + [
                f"[red]{name}[/]({effect.duration if effect.duration > 0 else '∞'})"
                for name, effect in self.debuffs.items()
            ]
            if effects:
                status += " | " + " ".join(effects)
        return status
