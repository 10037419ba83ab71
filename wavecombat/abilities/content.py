"""
Built-in ability descriptors.

Every descriptor here resolves through a routine registered in
`wavecombat.abilities.routines`, under the same key as its ability id.
"""

from wavecombat.core.constants import EffectTag as T
from wavecombat.core.constants import TargetClass as C

from .descriptor import AbilityCatalog, AbilityDescriptor


def _ability(
    ability_id: str,
    name: str,
    target_class: C,
    tags: tuple[T, ...],
    description: str = "",
    **scaling: float,
) -> AbilityDescriptor:
    return AbilityDescriptor(
        ability_id=ability_id,
        name=name,
        description=description,
        target_class=target_class,
        effect_tags=frozenset(tags),
        routine_key=ability_id,
        scaling=scaling,
    )


DEFAULT_ABILITIES: list[AbilityDescriptor] = [
    # Basic.
    _ability("punch", "Punch", C.ENEMY, (T.DAMAGE,), "Deals 5 + STR + AGI + INT damage."),
    _ability("fury", "Fury", C.SELF, (T.BUFF, T.SPEED), "Raises action bar gain by 50% for 2 turns."),
    # Nature.
    _ability("natures_touch", "Nature's Touch", C.ALLY, (T.HEAL, T.NATURE)),
    _ability("wild_growth", "Wild Growth", C.ALL_ALLIES, (T.HEAL, T.AOE, T.NATURE)),
    _ability("beast_form", "Beast Form", C.SELF, (T.BUFF, T.TRANSFORM)),
    _ability("elemental_shield", "Elemental Shield", C.ALLY, (T.SHIELD, T.DEFENSE)),
    _ability("eternal_rune", "Eternal Rune", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.ARCANE)),
    _ability("natures_wrath", "Nature's Wrath", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.DOT, T.NATURE)),
    _ability("trial_of_grasses", "Trial of Grasses", C.SELF, (T.BUFF, T.TRANSFORM)),
    # Holy.
    _ability("holy_light", "Holy Light", C.ALLY, (T.HEAL, T.HOLY)),
    _ability("divine_shield", "Divine Shield", C.ALLY, (T.BUFF, T.SHIELD, T.HOLY)),
    _ability("mass_heal", "Mass Heal", C.ALL_ALLIES, (T.HEAL, T.AOE, T.HOLY)),
    _ability("blessed_recovery", "Blessed Recovery", C.DEAD_ALLY, (T.RESURRECT, T.HOLY), hp_fraction=0.5),
    _ability("heavens_wrath", "Heaven's Wrath", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.HOLY)),
    _ability("divine_intervention", "Divine Intervention", C.ALL_ALLIES, (T.HEAL, T.AOE, T.HOLY)),
    _ability("cleanse", "Cleanse", C.ALLY, (T.BUFF, T.HOLY)),
    _ability("holy_strike", "Holy Strike", C.ENEMY, (T.DAMAGE, T.HOLY)),
    _ability("divine_storm", "Divine Storm", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.HOLY)),
    _ability("wrath_of_heaven", "Wrath of Heaven", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.HOLY)),
    _ability("divine_judgment", "Divine Judgment", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.HOLY)),
    # Marksman.
    _ability("poison_strike", "Poison Strike", C.ENEMY, (T.DAMAGE, T.DOT, T.NATURE)),
    _ability("multishot", "Multishot", C.ALL_ENEMIES, (T.DAMAGE, T.AOE)),
    _ability("aimed_shot", "Aimed Shot", C.ENEMY, (T.DAMAGE,)),
    _ability("hunters_mark", "Hunter's Mark", C.ENEMY, (T.DEBUFF, T.THREAT)),
    _ability("perfect_shot", "Perfect Shot", C.ENEMY, (T.DAMAGE, T.EXECUTE), threshold=0.3),
    _ability("wild_hunt", "The Wild Hunt", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.SUMMON)),
    _ability("silver_bolt", "Silver Bolt", C.ENEMY, (T.DAMAGE, T.HOLY)),
    # Arcane.
    _ability("fireball", "Fireball", C.ENEMY, (T.DAMAGE, T.FIRE)),
    _ability("frost_armor", "Frost Armor", C.SELF, (T.BUFF, T.DEFENSE, T.FROST)),
    _ability("arcane_explosion", "Arcane Explosion", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.ARCANE)),
    _ability("meteor_storm", "Meteor Storm", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.FIRE)),
    _ability("time_stop", "Time Stop", C.ALL_ENEMIES, (T.DEBUFF, T.STUN, T.AOE, T.ARCANE)),
    _ability("archon_form", "Archon Form", C.SELF, (T.BUFF, T.TRANSFORM)),
    _ability("psi_storm", "Psi Storm", C.ALL_ENEMIES, (T.DAMAGE, T.AOE)),
    _ability("void_storm", "Void Storm", C.ALL_ENEMIES, (T.DAMAGE, T.AOE, T.SHADOW)),
    _ability("alchemy", "Alchemy", C.ENEMY, (T.DAMAGE, T.DEBUFF)),
    # Martial.
    _ability("blade_strike", "Blade Strike", C.ENEMY, (T.DAMAGE,)),
    _ability("shield_bash", "Shield Bash", C.ENEMY, (T.DAMAGE, T.STUN)),
    _ability("royal_charge", "Royal Charge", C.ALL_ENEMIES, (T.DAMAGE, T.AOE)),
    _ability("shield_slam", "Shield Slam", C.ENEMY, (T.DAMAGE, T.DEFENSE)),
    _ability("consecrate", "Consecrate", C.ALL_ENEMIES, (T.DEBUFF, T.DOT, T.AOE, T.HOLY)),
    _ability("shadow_strike", "Shadow Strike", C.ENEMY, (T.DAMAGE, T.SHADOW)),
    # Rogue.
    _ability("backstab", "Backstab", C.ENEMY, (T.DAMAGE, T.SHADOW)),
    _ability("smoke_bomb", "Smoke Bomb", C.SELF, (T.BUFF, T.SHADOW)),
    _ability("assassinate", "Assassinate", C.ENEMY, (T.DAMAGE, T.EXECUTE), threshold=0.2),
    _ability("shadowstep", "Shadowstep", C.ENEMY, (T.DAMAGE, T.SHADOW)),
    _ability("coup_de_grace", "Coup de Grace", C.ENEMY, (T.DAMAGE,)),
    _ability("thousand_cuts", "Thousand Cuts", C.ALL_ENEMIES, (T.DAMAGE, T.AOE)),
    _ability("purge", "Purge", C.ENEMY, (T.DEBUFF, T.THREAT)),
    _ability("holy_fire", "Holy Fire", C.ENEMY, (T.DAMAGE, T.DOT, T.HOLY)),
    # Auras.
    _ability("valor_aura", "Valor Aura", C.PASSIVE, (T.AURA, T.BUFF)),
    _ability("vengeance_aura", "Vengeance Aura", C.PASSIVE, (T.AURA, T.BUFF)),
    _ability("divine_aura", "Divine Aura", C.PASSIVE, (T.AURA, T.BUFF, T.HOLY)),
    _ability("prophecy_aura", "Prophecy Aura", C.PASSIVE, (T.AURA, T.BUFF)),
    _ability("eagle_eye_aura", "Eagle Eye Aura", C.PASSIVE, (T.AURA, T.BUFF)),
    _ability("enlightenment_aura", "Enlightenment Aura", C.PASSIVE, (T.AURA, T.BUFF, T.ARCANE)),
    _ability("blur_aura", "Blur Aura", C.PASSIVE, (T.AURA, T.BUFF, T.SHADOW)),
    _ability("darkness_aura", "Darkness Aura", C.PASSIVE, (T.AURA, T.DEBUFF, T.SHADOW)),
    # Bosses.
    _ability("slash", "Slash", C.ENEMY, (T.DAMAGE,), percent=0.25, cap=400),
    _ability("bite", "Bite", C.ENEMY, (T.DAMAGE,), percent=0.1, floor=50),
    _ability("frost_breath", "Frost Breath", C.ALL_ENEMIES, (T.DAMAGE, T.DEBUFF, T.AOE, T.FROST)),
    _ability("gold_toss", "Gold Toss", C.ENEMY, (T.DAMAGE,)),
]


def default_catalog() -> AbilityCatalog:
    """Returns a fresh catalog holding every built-in ability."""
    return AbilityCatalog(DEFAULT_ABILITIES)
