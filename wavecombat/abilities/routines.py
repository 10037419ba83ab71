"""
Built-in ability routines.

Each routine resolves one ability through the battle's resolution engine and
writes a line to the battle log. Single-target routines receive a Combatant;
area routines receive the "all" sentinel and walk the roster themselves;
auras receive no target.

Importing this module registers every routine into `ROUTINES`.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TYPE_CHECKING

from wavecombat.core.constants import DamageType
from wavecombat.effects.base_effect import PERMANENT
from wavecombat.units.combatant import Combatant

from .descriptor import AbilityDescriptor
from .registry import routine

if TYPE_CHECKING:
    from wavecombat.combat.battle import Battle


# =============================================================================
# Support Functions
# =============================================================================


def _strike_all(
    battle: Battle,
    caster: Combatant,
    amount: Callable[[Combatant], float],
    damage_type: DamageType,
) -> list[Combatant]:
    """Deals damage to every living opponent of the caster."""
    struck = battle.get_alive_opponents(caster)
    for enemy in struck:
        if not caster.is_alive():
            break
        battle.engine.deal_damage(caster, enemy, amount(enemy), damage_type)
    return struck


def _buff_party(battle: Battle, caster: Combatant, name: str, **payload: float) -> None:
    """Applies a permanent buff to every living ally of the caster."""
    for ally in battle.get_alive_friendlies(caster):
        battle.engine.apply_buff(ally, name, PERMANENT, **payload)


def _execute_or_strike(
    battle: Battle,
    caster: Combatant,
    target: Combatant,
    descriptor: AbilityDescriptor,
    default_threshold: float,
    damage: float,
) -> bool:
    """Kills a target at or below the execute threshold, otherwise hits it."""
    threshold = descriptor.scaling.get("threshold", default_threshold)
    if target.hp_fraction() <= threshold and battle.engine.execute(caster, target) > 0:
        return True
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    return False


# =============================================================================
# Basic Spells
# =============================================================================


@routine("punch")
def punch(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = 5 + caster.stats.total
    dealt = battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} punches {target.name} for {dealt} damage!")


@routine("fury")
def fury(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(caster, "fury", 2, action_bar_multiplier=1.5)
    battle.log(f"{caster.name} enters a fury, increasing attack speed for 2 turns!")


# =============================================================================
# Nature Spells
# =============================================================================


@routine("natures_touch")
def natures_touch(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    healed = battle.engine.heal_unit(
        target, target.max_hp * 0.2 + caster.stats.intellect, caster
    )
    battle.log(f"{caster.name} heals {target.name} for {healed} HP!")


@routine("wild_growth")
def wild_growth(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    for ally in battle.get_alive_friendlies(caster):
        battle.engine.heal_unit(ally, ally.max_hp * 0.1 + caster.stats.intellect * 0.5, caster)
    battle.log(f"{caster.name} casts Wild Growth, healing all allies!")


@routine("beast_form")
def beast_form(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(caster, "beast_form", PERMANENT, str_multiplier=1.5, agi_multiplier=1.5)
    battle.log(f"{caster.name} transforms into beast form!")


@routine("elemental_shield")
def elemental_shield(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    shield = battle.engine.apply_shield(target, caster.stats.intellect * 2)
    battle.log(f"{caster.name} shields {target.name} for {shield} damage!")


@routine("eternal_rune")
def eternal_rune(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.strength * 3 + caster.stats.intellect * 5
    _strike_all(battle, caster, lambda _: damage, DamageType.MAGICAL)
    battle.log(f"{caster.name} unleashes Eternal Rune!")


@routine("natures_wrath")
def natures_wrath(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 4 + caster.stats.agility * 2
    for enemy in _strike_all(battle, caster, lambda _: damage, DamageType.NATURE):
        battle.engine.apply_debuff(enemy, "natures_wrath", 3, dot_damage=damage * 0.2)
    battle.log(f"{caster.name} channels Nature's Wrath!")


@routine("trial_of_grasses")
def trial_of_grasses(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(
        caster,
        "mutation",
        PERMANENT,
        str_multiplier=1.5,
        agi_multiplier=1.5,
        int_multiplier=1.5,
    )
    battle.log(f"{caster.name} undergoes the Trial of Grasses!")


# =============================================================================
# Holy Spells
# =============================================================================


@routine("holy_light")
def holy_light(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    healed = battle.engine.heal_unit(
        target, target.max_hp * 0.3 + caster.stats.intellect * 0.5, caster
    )
    battle.log(f"{caster.name} heals {target.name} with Holy Light for {healed} HP!")


@routine("divine_shield")
def divine_shield(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(target, "divine_shield", 2, immunity=True)
    battle.log(f"{caster.name} grants {target.name} Divine Shield!")


@routine("mass_heal")
def mass_heal(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    for ally in battle.get_alive_friendlies(caster):
        battle.engine.heal_unit(ally, ally.max_hp * 0.15 + caster.stats.intellect, caster)
    battle.log(f"{caster.name} casts Mass Heal!")


@routine("blessed_recovery")
def blessed_recovery(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    if battle.engine.resurrect(target, descriptor.scaling.get("hp_fraction", 0.5)):
        battle.log(f"{caster.name} resurrects {target.name}!")


@routine("heavens_wrath")
def heavens_wrath(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 6
    _strike_all(battle, caster, lambda _: damage, DamageType.HOLY)
    battle.log(f"{caster.name} calls down Heaven's Wrath!")


@routine("divine_intervention")
def divine_intervention(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    for ally in battle.get_alive_friendlies(caster):
        battle.engine.full_heal(ally)
        battle.engine.remove_debuffs(ally)
    battle.log(f"{caster.name} calls upon Divine Intervention!")


@routine("cleanse")
def cleanse(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    removed = battle.engine.remove_debuffs(target)
    battle.log(f"{caster.name} cleanses {target.name} of {len(removed)} effects!")


@routine("holy_strike")
def holy_strike(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.strength * 2 + caster.stats.intellect
    battle.engine.deal_damage(caster, target, damage, DamageType.HOLY)
    battle.log(f"{caster.name} delivers a Holy Strike!")


@routine("divine_storm")
def divine_storm(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.strength * 5 + caster.stats.intellect * 2
    _strike_all(battle, caster, lambda _: damage, DamageType.HOLY)
    battle.log(f"{caster.name} spins in a Divine Storm!")


@routine("wrath_of_heaven")
def wrath_of_heaven(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.strength * 4 + caster.stats.intellect * 4
    _strike_all(battle, caster, lambda _: damage, DamageType.HOLY)
    battle.log(f"{caster.name} channels the Wrath of Heaven!")


@routine("divine_judgment")
def divine_judgment(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 10
    _strike_all(battle, caster, lambda _: damage, DamageType.HOLY)
    battle.log(f"{caster.name} calls down Divine Judgment!")


# =============================================================================
# Marksman Spells
# =============================================================================


@routine("poison_strike")
def poison_strike(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.agility * 1.5
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.engine.apply_debuff(target, "poison", 3, dot_damage=damage * 0.3)
    battle.log(f"{caster.name} poisons {target.name}!")


@routine("multishot")
def multishot(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.agility * 1.2
    _strike_all(battle, caster, lambda _: damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} fires a Multishot!")


@routine("aimed_shot")
def aimed_shot(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    is_crit = battle.rng.chance(0.5)
    damage = caster.stats.agility * 3 * (2 if is_crit else 1)
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} fires an Aimed Shot{' (CRIT!)' if is_crit else ''}!")


@routine("hunters_mark")
def hunters_mark(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_debuff(target, "hunters_mark", PERMANENT, damage_taken_multiplier=1.25)
    battle.log(f"{caster.name} marks {target.name} for the hunt!")


@routine("perfect_shot")
def perfect_shot(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    if _execute_or_strike(battle, caster, target, descriptor, 0.3, caster.stats.agility * 10):
        battle.log(f"{caster.name} executes {target.name} with a Perfect Shot!")
    else:
        battle.log(f"{caster.name} fires a Perfect Shot!")


@routine("wild_hunt")
def wild_hunt(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.agility * 5 + caster.stats.strength * 3
    _strike_all(battle, caster, lambda _: damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} summons The Wild Hunt!")


@routine("silver_bolt")
def silver_bolt(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.agility * 1.5 + caster.stats.intellect * 0.5
    if target.creature_type in ("undead", "demon"):
        damage *= 2
    battle.engine.deal_damage(caster, target, damage, DamageType.HOLY)
    battle.log(f"{caster.name} fires a Silver Bolt!")


# =============================================================================
# Arcane Spells
# =============================================================================


@routine("fireball")
def fireball(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.deal_damage(caster, target, caster.stats.intellect * 2.5, DamageType.FIRE)
    battle.log(f"{caster.name} hurls a Fireball at {target.name}!")


@routine("frost_armor")
def frost_armor(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(caster, "frost_armor", 3, damage_reduction=0.3)
    battle.log(f"{caster.name} encases themselves in Frost Armor!")


@routine("arcane_explosion")
def arcane_explosion(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 2
    _strike_all(battle, caster, lambda _: damage, DamageType.ARCANE)
    battle.log(f"{caster.name} explodes with arcane energy!")


@routine("meteor_storm")
def meteor_storm(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 8
    _strike_all(battle, caster, lambda _: damage, DamageType.FIRE)
    battle.log(f"{caster.name} calls down a Meteor Storm!")


@routine("time_stop")
def time_stop(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    # Upkeep runs before the stun check, so two turns of duration stun once.
    for enemy in battle.get_alive_opponents(caster):
        battle.engine.apply_debuff(enemy, "time_stop", 2, stunned=True)
    battle.log(f"{caster.name} stops time!")


@routine("archon_form")
def archon_form(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(caster, "archon_form", PERMANENT, int_multiplier=2.0, spell_power=1.5)
    battle.log(f"{caster.name} transforms into Archon Form!")


@routine("psi_storm")
def psi_storm(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 3
    _strike_all(battle, caster, lambda _: damage, DamageType.PSIONIC)
    battle.log(f"{caster.name} creates a Psi Storm!")


@routine("void_storm")
def void_storm(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 7
    _strike_all(battle, caster, lambda _: damage, DamageType.VOID)
    battle.log(f"{caster.name} tears reality with a Void Storm!")


@routine("alchemy")
def alchemy(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    outcome = battle.rng.choice(("damage", "heal", "buff", "debuff"))
    if outcome == "damage":
        damage_type = battle.rng.choice([t for t in DamageType if not t.is_physical])
        battle.engine.deal_damage(caster, target, caster.stats.intellect * 3, damage_type)
        battle.log(f"{caster.name}'s potion explodes!")
    elif outcome == "heal":
        battle.engine.heal_unit(target, target.max_hp * 0.3)
        battle.log(f"{caster.name}'s potion heals!")
    elif outcome == "buff":
        battle.engine.apply_buff(target, "alchemy_buff", 3, all_stats_multiplier=1.2)
        battle.log(f"{caster.name}'s potion empowers!")
    else:
        battle.engine.apply_debuff(target, "alchemy_debuff", 3, all_stats_multiplier=0.8)
        battle.log(f"{caster.name}'s potion weakens!")


# =============================================================================
# Martial Spells
# =============================================================================


@routine("blade_strike")
def blade_strike(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.deal_damage(caster, target, caster.stats.strength * 2, DamageType.PHYSICAL)
    battle.log(f"{caster.name} strikes with their blade!")


@routine("shield_bash")
def shield_bash(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.deal_damage(caster, target, caster.stats.strength * 1.5, DamageType.PHYSICAL)
    battle.engine.apply_debuff(target, "stun", 2, stunned=True)
    battle.log(f"{caster.name} bashes {target.name} with their shield!")


@routine("royal_charge")
def royal_charge(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.strength * 2.5
    _strike_all(battle, caster, lambda _: damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} charges through the enemy ranks!")


@routine("shield_slam")
def shield_slam(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    defense = caster.stats.strength * 0.5
    damage = caster.stats.strength * 1.5 + defense * 0.5
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} slams with their shield!")


@routine("consecrate")
def consecrate(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    for enemy in battle.get_alive_opponents(caster):
        battle.engine.apply_debuff(enemy, "consecration", 3, dot_damage=caster.stats.intellect)
    battle.log(f"{caster.name} consecrates the ground!")


@routine("shadow_strike")
def shadow_strike(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.strength * 1.5 + caster.stats.intellect * 1.5
    battle.engine.deal_damage(caster, target, damage, DamageType.SHADOW)
    battle.log(f"{caster.name} strikes from the shadows!")


# =============================================================================
# Rogue Spells
# =============================================================================


@routine("backstab")
def backstab(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    is_crit = battle.rng.chance(0.5)
    damage = caster.stats.agility * 2.5 * (3 if is_crit else 1)
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} backstabs {target.name}{' (CRIT!)' if is_crit else ''}!")


@routine("smoke_bomb")
def smoke_bomb(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.apply_buff(caster, "stealth", 2, untargetable=True, damage_multiplier=1.5)
    battle.log(f"{caster.name} vanishes in smoke!")


@routine("assassinate")
def assassinate(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    if _execute_or_strike(battle, caster, target, descriptor, 0.2, caster.stats.agility * 4):
        battle.log(f"{caster.name} assassinates {target.name}!")
    else:
        battle.log(f"{caster.name} attempts to assassinate {target.name}!")


@routine("shadowstep")
def shadowstep(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.deal_damage(caster, target, caster.stats.agility * 3, DamageType.PHYSICAL)
    battle.log(f"{caster.name} shadowsteps behind {target.name}!")


@routine("coup_de_grace")
def coup_de_grace(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    for _ in range(6):
        if not target.is_alive() or not caster.is_alive():
            break
        is_crit = battle.rng.chance(0.8)
        damage = caster.stats.agility * 1.5 * (2 if is_crit else 1)
        battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} unleashes Coup de Grace!")


@routine("thousand_cuts")
def thousand_cuts(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.agility * 6
    _strike_all(battle, caster, lambda _: damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} performs a Thousand Cuts!")


@routine("purge")
def purge(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    battle.engine.remove_buffs(target)
    battle.log(f"{caster.name} purges {target.name}'s buffs!")


@routine("holy_fire")
def holy_fire(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = caster.stats.intellect * 2.5
    battle.engine.deal_damage(caster, target, damage, DamageType.HOLY)
    battle.engine.apply_debuff(target, "holy_fire", 3, dot_damage=damage * 0.3)
    battle.log(f"{caster.name} burns {target.name} with Holy Fire!")


# =============================================================================
# Auras
# =============================================================================


@routine("valor_aura")
def valor_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "valor_aura", damage_multiplier=1.25, defense_multiplier=1.25)
    battle.log(f"{caster.name}'s Valor Aura inspires allies!")


@routine("vengeance_aura")
def vengeance_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "vengeance_aura", damage_reflect=0.3)
    battle.log(f"{caster.name}'s Vengeance Aura reflects damage!")


@routine("divine_aura")
def divine_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "divine_aura", healing_received=1.25)
    battle.log(f"{caster.name}'s Divine Aura increases healing received!")


@routine("prophecy_aura")
def prophecy_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "prophecy_aura", dodge_chance=0.15)
    battle.log(f"{caster.name}'s Prophecy Aura grants dodge chance!")


@routine("eagle_eye_aura")
def eagle_eye_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "eagle_eye_aura", accuracy=1.2, crit_chance=0.2)
    battle.log(f"{caster.name}'s Eagle Eye Aura sharpens aim!")


@routine("enlightenment_aura")
def enlightenment_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "enlightenment_aura", spell_power=1.3)
    battle.log(f"{caster.name}'s Enlightenment Aura empowers spells!")


@routine("blur_aura")
def blur_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    _buff_party(battle, caster, "blur_aura", evasion=0.25)
    battle.log(f"{caster.name}'s Blur Aura grants evasion!")


@routine("darkness_aura")
def darkness_aura(battle: Battle, caster: Combatant, target: None, descriptor: AbilityDescriptor) -> None:
    for enemy in battle.get_alive_opponents(caster):
        battle.engine.apply_debuff(enemy, "darkness_aura", PERMANENT, miss_chance=0.2)
    battle.log(f"{caster.name}'s Darkness Aura blinds enemies!")


# =============================================================================
# Boss Spells
# =============================================================================


@routine("slash")
def slash(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = min(target.max_hp * descriptor.scaling["percent"], descriptor.scaling["cap"])
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} slashes {target.name} for {round(damage)} damage!")


@routine("bite")
def bite(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = max(target.max_hp * descriptor.scaling["percent"], descriptor.scaling["floor"])
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} bites {target.name} for {round(damage)} damage!")


@routine("frost_breath")
def frost_breath(battle: Battle, caster: Combatant, target: str, descriptor: AbilityDescriptor) -> None:
    damage = caster.base_stats.strength * 2
    for enemy in _strike_all(battle, caster, lambda _: damage, DamageType.FROST):
        battle.engine.apply_debuff(enemy, "slow", 2, action_bar_speed_factor=0.5)
    battle.log(f"{caster.name} breathes frost!")


@routine("gold_toss")
def gold_toss(battle: Battle, caster: Combatant, target: Combatant, descriptor: AbilityDescriptor) -> None:
    damage = caster.base_stats.strength * battle.rng.uniform(0.0, 3.0)
    battle.engine.deal_damage(caster, target, damage, DamageType.PHYSICAL)
    battle.log(f"{caster.name} tosses gold coins for {math.floor(damage)} damage!")
