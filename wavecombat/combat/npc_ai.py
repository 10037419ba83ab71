from __future__ import annotations

from typing import TYPE_CHECKING, Any

from catchery import log_debug, log_warning
from pydantic import BaseModel, Field

from wavecombat.abilities.descriptor import AbilityDescriptor
from wavecombat.core.constants import AREA_TARGET, EffectTag, TargetClass
from wavecombat.units.combatant import Combatant

if TYPE_CHECKING:
    from wavecombat.combat.battle import Battle

# Score terms.
DAMAGE_WEIGHT = 20.0
HEAL_WEIGHT = 50.0
BUFF_BONUS = 20.0
DEBUFF_BONUS = 10.0
EXECUTE_BONUS = 100.0
RESURRECT_BONUS = 80.0
AREA_BONUS_PER_TARGET = 10.0
ULTIMATE_BONUS = 25.0

# =============================================================================
# Support Functions
# =============================================================================


class AbilitySelection(BaseModel):
    """
    Represents a selected ability along with its target and score.
    """

    index: int = Field(
        description="The ability slot being considered.",
    )
    descriptor: AbilityDescriptor = Field(
        description="The descriptor of the ability.",
    )
    target: Any = Field(
        default=None,
        description="The chosen target: a Combatant, the area sentinel, or None.",
    )
    score: float = Field(
        description="Score of the selection (higher is better).",
    )

    @property
    def has_target(self) -> bool:
        if self.descriptor.target_class is TargetClass.PASSIVE:
            return True
        return self.target is not None


def _hp_ratio(unit: Combatant, missing: bool = False) -> float:
    """
    Helper function to calculate HP ratio.

    Args:
        unit (Combatant):
            The combatant whose HP ratio to calculate.
        missing (bool):
            If True, returns the missing HP ratio (1 - current HP / max HP).

    Returns:
        float:
            The HP ratio (0.0 to 1.0), or missing HP ratio if specified.

    """
    ratio = unit.hp_fraction() if unit.max_hp > 0 else 1.0
    return 1.0 - ratio if missing else ratio


def _average_hp_ratio(units: list[Combatant], missing: bool = False) -> float:
    if not units:
        return 0.0
    return sum(_hp_ratio(unit, missing) for unit in units) / len(units)


# =============================================================================
# TARGETS SORTING FUNCTIONS
# =============================================================================


def _sort_targets_by_hp(targets: list[Combatant]) -> list[Combatant]:
    """Lowest current HP first; ties keep roster order."""
    return sorted(targets, key=lambda t: t.current_hp)


def _sort_targets_by_hp_ratio(targets: list[Combatant]) -> list[Combatant]:
    """Lowest HP fraction first; ties keep roster order."""
    return sorted(targets, key=lambda t: _hp_ratio(t))


def _sort_targets_by_threat(targets: list[Combatant]) -> list[Combatant]:
    """Highest stat total first; ties keep roster order."""
    return sorted(targets, key=lambda t: -t.stats.total)


def get_enemy_targets(battle: Battle, unit: Combatant, descriptor: AbilityDescriptor) -> list[Combatant]:
    """
    Orders the opponents a single-target enemy ability may hit.

    Untargetable opponents are skipped.

    Args:
        battle (Battle): The running battle.
        unit (Combatant): The acting combatant.
        descriptor (AbilityDescriptor): The ability being aimed.

    Returns:
        list[Combatant]: The candidates, best first.

    """
    candidates = [t for t in battle.get_alive_opponents(unit) if not t.is_untargetable()]
    if descriptor.has_tag(EffectTag.EXECUTE):
        return _sort_targets_by_hp_ratio(candidates)
    if descriptor.has_tag(EffectTag.THREAT) or descriptor.has_tag(EffectTag.DEBUFF):
        return _sort_targets_by_threat(candidates)
    return _sort_targets_by_hp(candidates)


def get_ally_targets(battle: Battle, unit: Combatant, descriptor: AbilityDescriptor) -> list[Combatant]:
    """Orders the living allies a single-target ally ability may affect."""
    candidates = battle.get_alive_friendlies(unit)
    if descriptor.has_tag(EffectTag.BUFF) and not descriptor.has_tag(EffectTag.HEAL):
        return _sort_targets_by_threat(candidates)
    return _sort_targets_by_hp_ratio(candidates)


def choose_target(battle: Battle, unit: Combatant, descriptor: AbilityDescriptor) -> Combatant | str | None:
    """
    Chooses the target of an ability according to its target class.

    Args:
        battle (Battle): The running battle.
        unit (Combatant): The acting combatant.
        descriptor (AbilityDescriptor): The ability being aimed.

    Returns:
        Combatant | str | None: A combatant, the area sentinel, or None when
        no valid target exists.

    """
    target_class = descriptor.target_class
    if target_class is TargetClass.SELF:
        return unit
    if target_class.is_area:
        return AREA_TARGET
    if target_class is TargetClass.ENEMY:
        targets = get_enemy_targets(battle, unit, descriptor)
    elif target_class is TargetClass.ALLY:
        targets = get_ally_targets(battle, unit, descriptor)
    elif target_class is TargetClass.DEAD_ALLY:
        targets = battle.get_dead_friendlies(unit)
    else:
        return None
    return targets[0] if targets else None


# =============================================================================
# SCORING
# =============================================================================


def score_ability(battle: Battle, unit: Combatant, index: int, descriptor: AbilityDescriptor) -> float:
    """
    Scores an ability for the acting combatant.

    Args:
        battle (Battle): The running battle.
        unit (Combatant): The acting combatant.
        index (int): The ability slot.
        descriptor (AbilityDescriptor): The ability's descriptor.

    Returns:
        float: The score (higher is better).

    """
    reference = unit.abilities[index]
    opponents = battle.get_alive_opponents(unit)
    friendlies = battle.get_alive_friendlies(unit)

    score = reference.level * 10.0
    if descriptor.has_tag(EffectTag.DAMAGE):
        score += DAMAGE_WEIGHT * _average_hp_ratio(opponents)
    if descriptor.has_tag(EffectTag.HEAL):
        score += HEAL_WEIGHT * _average_hp_ratio(friendlies, missing=True)
    if descriptor.has_tag(EffectTag.BUFF):
        score += BUFF_BONUS / (1 + unit.turns_taken)
    if descriptor.has_tag(EffectTag.DEBUFF):
        score += DEBUFF_BONUS
    if descriptor.has_tag(EffectTag.EXECUTE):
        threshold = battle.settings.execute_threshold
        if any(_hp_ratio(opponent) <= threshold for opponent in opponents):
            score += EXECUTE_BONUS
    if descriptor.has_tag(EffectTag.RESURRECT) and battle.get_dead_friendlies(unit):
        score += RESURRECT_BONUS
    if descriptor.is_area:
        score += AREA_BONUS_PER_TARGET * len(opponents)
    if reference.is_ultimate:
        score += ULTIMATE_BONUS
    return score


# =============================================================================
# ACTION SELECTION
# =============================================================================


def choose_action(battle: Battle, unit: Combatant) -> AbilitySelection | None:
    """
    Chooses the best usable ability and its target.

    Slots are scanned from the last to the first and only a strictly better
    score replaces the current choice, so on a tie the highest slot wins.
    Passive and aura abilities are never chosen.

    Args:
        battle (Battle): The running battle.
        unit (Combatant): The acting combatant.

    Returns:
        AbilitySelection | None: The selection, or None if nothing is usable.
        The selection's target is None when no valid target exists.

    """
    best: AbilitySelection | None = None
    for index in reversed(range(len(unit.abilities))):
        if not unit.can_use_ability(index):
            continue
        reference = unit.abilities[index]
        descriptor = battle.catalog.get(reference.ability_id)
        if descriptor is None:
            log_warning(
                f"{unit.name} has an ability missing from the catalog.",
                {"ability_id": reference.ability_id, "slot": index},
            )
            continue
        if descriptor.is_aura:
            continue
        score = score_ability(battle, unit, index, descriptor)
        if best is None or score > best.score:
            best = AbilitySelection(index=index, descriptor=descriptor, score=score)

    if best is None:
        return None
    best.target = choose_target(battle, unit, best.descriptor)
    log_debug(
        f"{unit.name} chooses {best.descriptor.name}.",
        {"slot": best.index, "score": round(best.score, 2), "target": str(best.target)},
    )
    return best
