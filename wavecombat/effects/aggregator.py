"""
Modifier aggregation for the combat engine.

Folds a combatant's buffs and debuffs into its working stat block and its
derived combat stats. Everything is rebuilt from the baseline on each call,
so removing an effect never leaves a stale modifier behind.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from wavecombat.core.constants import (
    ARMOR_AGI_RATIO,
    ARMOR_STR_RATIO,
    MAGIC_REDUCTION_CAP,
    MAGIC_REDUCTION_SCALE,
    PHYSICAL_REDUCTION_CAP,
    PHYSICAL_REDUCTION_SCALE,
    RESIST_INT_RATIO,
    SPEED_AGI_SCALE,
    SPEED_BASE,
)

from .base_effect import Effect


class StatBlock(BaseModel):
    """The three primary stats of a unit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    strength: float = Field(default=0, ge=0, alias="str")
    agility: float = Field(default=0, ge=0, alias="agi")
    intellect: float = Field(default=0, ge=0, alias="int")

    @property
    def total(self) -> float:
        return self.strength + self.agility + self.intellect

    def scaled(self, strength: float, agility: float, intellect: float) -> "StatBlock":
        """Returns a copy with each stat multiplied by the given factor."""
        return StatBlock(
            strength=self.strength * strength,
            agility=self.agility * agility,
            intellect=self.intellect * intellect,
        )


class DerivedStats(BaseModel):
    """
    Combat stats derived from the effects a unit holds.

    Multiplicative stats start at 1 and additive stats start at 0.
    """

    model_config = ConfigDict(frozen=True)

    damage_multiplier: float = 1.0
    defense_multiplier: float = 1.0
    spell_power: float = 1.0
    accuracy: float = 1.0
    healing_received: float = 1.0
    evasion: float = 0.0
    crit_chance: float = 0.0
    dodge_chance: float = 0.0
    miss_chance: float = 0.0
    damage_reflect: float = 0.0


class AggregateResult(BaseModel):
    """The output of one aggregation pass."""

    model_config = ConfigDict(frozen=True)

    stats: StatBlock
    derived: DerivedStats


_MULTIPLICATIVE = (
    "damage_multiplier",
    "defense_multiplier",
    "spell_power",
    "accuracy",
    "healing_received",
)
_ADDITIVE = (
    "evasion",
    "crit_chance",
    "dodge_chance",
    "miss_chance",
    "damage_reflect",
)


def aggregate(
    base_stats: StatBlock,
    buffs: Iterable[Effect],
    debuffs: Iterable[Effect],
    base_crit_chance: float = 0.0,
) -> AggregateResult:
    """
    Computes the working stats and derived stats for a set of effects.

    Buffs are folded first, then debuffs. A debuff's defense multiplier
    divides instead of multiplying, so a value above 1 weakens the holder.

    Args:
        base_stats (StatBlock): The unit's unmodified stats.
        buffs (Iterable[Effect]): The buffs held by the unit.
        debuffs (Iterable[Effect]): The debuffs held by the unit.
        base_crit_chance (float): The crit chance every unit starts with.

    Returns:
        AggregateResult: The rescaled stat block and the derived stats.

    """
    values: dict[str, float] = {name: 1.0 for name in _MULTIPLICATIVE}
    values.update({name: 0.0 for name in _ADDITIVE})
    values["crit_chance"] = base_crit_chance
    str_factor = agi_factor = int_factor = 1.0

    for is_debuff, effects in ((False, buffs), (True, debuffs)):
        for effect in effects:
            payload = effect.payload
            for name in _MULTIPLICATIVE:
                factor = getattr(payload, name)
                if factor is None:
                    continue
                if is_debuff and name == "defense_multiplier":
                    values[name] /= factor
                else:
                    values[name] *= factor
            for name in _ADDITIVE:
                amount = getattr(payload, name)
                if amount is not None:
                    values[name] += amount
            if payload.all_stats_multiplier is not None:
                str_factor *= payload.all_stats_multiplier
                agi_factor *= payload.all_stats_multiplier
                int_factor *= payload.all_stats_multiplier
            if payload.str_multiplier is not None:
                str_factor *= payload.str_multiplier
            if payload.agi_multiplier is not None:
                agi_factor *= payload.agi_multiplier
            if payload.int_multiplier is not None:
                int_factor *= payload.int_multiplier

    return AggregateResult(
        stats=base_stats.scaled(str_factor, agi_factor, int_factor),
        derived=DerivedStats(**values),
    )


def speed_factor(buffs: Iterable[Effect], debuffs: Iterable[Effect]) -> float:
    """Product of the action bar factors of all buffs and debuffs."""
    factor = 1.0
    for buff in buffs:
        if buff.payload.action_bar_multiplier is not None:
            factor *= buff.payload.action_bar_multiplier
    for debuff in debuffs:
        if debuff.payload.action_bar_speed_factor is not None:
            factor *= debuff.payload.action_bar_speed_factor
    return factor


def base_speed_curve(agility: float) -> float:
    """Action meter gained per tick from agility, bounded in [100, 200)."""
    return SPEED_BASE + SPEED_BASE * agility / (agility + SPEED_AGI_SCALE)


def armor_value(stats: StatBlock, gear_armor: float = 0) -> float:
    return ARMOR_STR_RATIO * stats.strength + ARMOR_AGI_RATIO * stats.agility + gear_armor


def resist_value(stats: StatBlock, gear_resist: float = 0) -> float:
    return RESIST_INT_RATIO * stats.intellect + gear_resist


def physical_reduction(armor: float) -> float:
    """Fraction of physical damage removed by armor."""
    if armor <= 0:
        return 0.0
    return PHYSICAL_REDUCTION_CAP * armor / (armor + PHYSICAL_REDUCTION_SCALE)


def magic_reduction(resist: float) -> float:
    """Fraction of magical damage removed by resist."""
    if resist <= 0:
        return 0.0
    return MAGIC_REDUCTION_CAP * resist / (resist + MAGIC_REDUCTION_SCALE)
