"""
Tests for the damage, healing and effect resolution engine.
"""

import pytest
from conftest import StubRNG, make_combatant

from wavecombat.combat.battle_log import BattleLog
from wavecombat.combat.resolution import ResolutionEngine
from wavecombat.core.config import BattleSettings
from wavecombat.core.constants import DamageType, Side
from wavecombat.effects.base_effect import PERMANENT

# =============================================================================
# Damage
# =============================================================================


def test_armor_500_turns_1000_into_550(engine, attacker):
    armored = make_combatant(Side.ENEMY, 0, name="Knight", hp=2000, armor=500)
    assert engine.deal_damage(attacker, armored, 1000, DamageType.PHYSICAL) == 550
    assert armored.current_hp == 1450


def test_magic_uses_resist_and_spell_power(engine, attacker, target):
    engine.apply_buff(attacker, "archon", PERMANENT, spell_power=2.0)
    attacker.recompute()
    # Physical damage ignores spell power.
    assert engine.deal_damage(attacker, target, 100, DamageType.PHYSICAL) == 100
    assert engine.deal_damage(attacker, target, 100, DamageType.FIRE) == 200


def test_immunity_takes_zero_damage(engine, attacker, target):
    engine.apply_buff(target, "divine_shield", 2, immunity=True)
    assert engine.deal_damage(attacker, target, 10_000) == 0
    assert target.current_hp == 1000
    assert target.is_alive()


def test_damage_never_exceeds_remaining_hp(engine, battle_log, attacker):
    weak = make_combatant(Side.ENEMY, 0, name="Weak", hp=100)
    assert engine.deal_damage(attacker, weak, 5000) == 100
    assert weak.current_hp == 0
    assert weak.is_dead
    assert "Weak has been defeated!" in battle_log


def test_dead_target_is_a_noop(engine, attacker, target):
    engine.kill(target)
    assert engine.deal_damage(attacker, target, 100) == 0
    assert engine.heal_unit(target, 100) == 0
    assert not engine.apply_buff(target, "fury", 2, action_bar_multiplier=1.5)
    assert target.buffs == {}


def test_damage_multiplier_and_defense(engine, attacker, target):
    engine.apply_buff(attacker, "valor", PERMANENT, damage_multiplier=1.5)
    engine.apply_buff(target, "stone", PERMANENT, defense_multiplier=2.0)
    attacker.recompute()
    target.recompute()
    assert engine.deal_damage(attacker, target, 100) == 75


def test_damage_reduction_and_taken_multiplier(engine, attacker, target):
    engine.apply_buff(target, "frost_armor", 3, damage_reduction=0.3)
    assert engine.deal_damage(attacker, target, 100) == 70
    engine.apply_debuff(target, "hunters_mark", PERMANENT, damage_taken_multiplier=2.0)
    assert engine.deal_damage(attacker, target, 100) == 140


def test_base_amount_is_floored(engine, attacker, target):
    assert engine.deal_damage(attacker, target, 99.9) == 99


def test_shield_absorbs_first(engine, attacker, target):
    assert engine.apply_shield(target, 50.7) == 50
    assert engine.deal_damage(attacker, target, 80) == 30
    assert target.shield == 0
    assert target.current_hp == 970


def test_shield_cleared_on_death(engine, attacker):
    weak = make_combatant(Side.ENEMY, 0, name="Weak", hp=10)
    engine.apply_shield(weak, 5)
    engine.deal_damage(attacker, weak, 100)
    assert weak.is_dead
    assert weak.shield == 0
    weak.check_invariants()


def test_reflect_hits_attacker(engine, battle_log, attacker, target):
    engine.apply_buff(target, "vengeance_aura", PERMANENT, damage_reflect=0.3)
    target.recompute()
    assert engine.deal_damage(attacker, target, 100) == 100
    assert attacker.current_hp == 970
    assert "Target reflects 30 damage to Attacker!" in battle_log


def test_reflect_can_kill_attacker(engine, attacker, target):
    attacker.current_hp = 10
    engine.apply_buff(target, "thorns", PERMANENT, damage_reflect=1.0)
    target.recompute()
    engine.deal_damage(attacker, target, 100)
    assert attacker.is_dead
    assert attacker.current_hp == 0


def test_reflect_goes_through_attacker_armor(engine, battle_log, target):
    knight = make_combatant(Side.ALLY, 0, name="Knight", armor=500)
    engine.apply_buff(target, "thorns", PERMANENT, damage_reflect=1.0)
    target.recompute()
    assert engine.deal_damage(knight, target, 100) == 100
    assert knight.current_hp == 945
    assert "Target reflects 55 damage to Knight!" in battle_log


def test_reflect_blocked_by_attacker_immunity(engine, battle_log, attacker, target):
    engine.apply_buff(attacker, "divine_shield", 2, immunity=True)
    engine.apply_buff(target, "thorns", PERMANENT, damage_reflect=1.0)
    target.recompute()
    assert engine.deal_damage(attacker, target, 100) == 100
    assert attacker.current_hp == 1000
    assert not any("reflects" in line for line in battle_log)


def test_dead_attacker_deals_no_damage(engine, attacker, target):
    engine.kill(attacker)
    assert engine.deal_damage(attacker, target, 100) == 0
    assert target.current_hp == 1000


def test_immune_target_rolls_no_crit(settings, battle_log, target):
    rng = StubRNG(chances=[True])
    engine = ResolutionEngine(settings, rng, battle_log)
    critter = make_combatant(Side.ALLY, 0, name="Critter")
    engine.apply_buff(critter, "eagle_eye", PERMANENT, crit_chance=0.5)
    critter.recompute()
    engine.apply_buff(target, "divine_shield", 2, immunity=True)
    assert engine.deal_damage(critter, target, 100) == 0
    assert rng.chance_calls == []
    assert "Critical hit on Target!" not in battle_log


def test_critical_hit(settings, battle_log, target):
    rng = StubRNG(chances=[True])
    engine = ResolutionEngine(settings, rng, battle_log)
    critter = make_combatant(Side.ALLY, 0, name="Critter")
    engine.apply_buff(critter, "eagle_eye", PERMANENT, crit_chance=0.5)
    critter.recompute()
    assert engine.deal_damage(critter, target, 100) == 200
    assert rng.chance_calls == [0.5]
    assert "Critical hit on Target!" in battle_log


def test_no_roll_without_avoidance(engine, stub_rng, attacker, target):
    engine.deal_damage(attacker, target, 100)
    assert stub_rng.chance_calls == []


def test_miss(settings, battle_log, attacker, target):
    rng = StubRNG(chances=[True])
    engine = ResolutionEngine(settings, rng, battle_log)
    engine.apply_buff(target, "prophecy", PERMANENT, dodge_chance=0.15, evasion=0.25)
    target.recompute()
    assert engine.avoid_chance(attacker, target) == pytest.approx(0.4)
    assert engine.deal_damage(attacker, target, 100) == 0
    assert target.current_hp == 1000
    assert "Attacker's attack misses Target!" in battle_log


def test_avoid_chance_is_capped(engine, attacker, target):
    engine.apply_buff(target, "blur", PERMANENT, evasion=5.0)
    target.recompute()
    assert engine.avoid_chance(attacker, target) == pytest.approx(0.95)


# =============================================================================
# Kill, execute and resurrection
# =============================================================================


def test_execute(engine, attacker, target):
    target.current_hp = 200
    assert engine.execute(attacker, target) == 200
    assert target.is_dead
    assert target.current_hp == 0


def test_execute_respects_immunity(engine, attacker, target):
    engine.apply_buff(target, "divine_shield", 2, immunity=True)
    assert engine.execute(attacker, target) == 0
    assert target.is_alive()


def test_resurrect(engine, target):
    engine.apply_debuff(target, "poison", 3, dot_damage=10)
    engine.kill(target)
    assert engine.resurrect(target, 0.5)
    assert target.is_alive()
    assert target.current_hp == 500
    assert target.debuffs == {}
    assert not engine.resurrect(target, 0.5)


def test_resurrect_restores_at_least_one_hp(engine):
    tiny = make_combatant(hp=1)
    engine.kill(tiny)
    assert engine.resurrect(tiny, 0.1)
    assert tiny.current_hp == 1


# =============================================================================
# Healing
# =============================================================================


def test_heal_is_clamped_to_missing_hp(engine, target):
    target.current_hp = 900
    assert engine.heal_unit(target, 500) == 100
    assert target.current_hp == 1000


def test_heal_scales_with_healing_received_and_spell_power(engine, attacker, target):
    target.current_hp = 100
    engine.apply_buff(target, "divine_aura", PERMANENT, healing_received=1.5)
    engine.apply_buff(attacker, "enlightenment", PERMANENT, spell_power=2.0)
    target.recompute()
    attacker.recompute()
    assert engine.heal_unit(target, 100, attacker) == 300


def test_full_heal(engine, target):
    target.current_hp = 1
    assert engine.full_heal(target) == 999
    assert target.current_hp == target.max_hp


def test_regenerate(engine, battle_log):
    unit = make_combatant(name="Brute", strength=100)
    assert engine.regenerate(unit) == 0
    unit.current_hp = 500
    assert engine.regenerate(unit) == 5
    assert unit.current_hp == 505
    assert "Brute regenerates 5 HP." in battle_log


def test_regen_ratio_comes_from_settings(battle_log):
    engine = ResolutionEngine(BattleSettings(regen_str_ratio=0.5), StubRNG(), battle_log)
    unit = make_combatant(strength=10)
    unit.current_hp = 1
    assert engine.regenerate(unit) == 5


# =============================================================================
# Effects
# =============================================================================


def test_apply_debuff_resisted(engine, battle_log, target):
    engine.apply_buff(target, "ward", 2, debuff_immunity=True)
    assert not engine.apply_debuff(target, "poison", 3, dot_damage=10)
    assert target.debuffs == {}
    assert "Target resisted Poison!" in battle_log


def test_remove_buffs_keeps_permanent(engine, target):
    engine.apply_buff(target, "valor_aura", PERMANENT, damage_multiplier=1.25)
    engine.apply_buff(target, "fury", 2, action_bar_multiplier=1.5)
    assert engine.remove_buffs(target) == ["fury"]
    assert list(target.buffs) == ["valor_aura"]


def test_remove_debuffs_clears_everything(engine, target):
    engine.apply_debuff(target, "darkness_aura", PERMANENT, miss_chance=0.2)
    engine.apply_debuff(target, "poison", 3, dot_damage=10)
    assert sorted(engine.remove_debuffs(target)) == ["darkness_aura", "poison"]
    assert target.debuffs == {}


def test_apply_dot_combines_all_sources(engine, battle_log, target):
    engine.apply_debuff(target, "poison", 3, dot_damage=10)
    engine.apply_debuff(target, "burn", 2, dot_damage=15)
    assert engine.apply_dot(target) == 25
    assert target.current_hp == 975
    assert "Target takes 25 damage from Poison, Burn!" in battle_log


def test_apply_dot_goes_through_shield(engine, target):
    engine.apply_debuff(target, "poison", 3, dot_damage=25)
    engine.apply_shield(target, 10)
    assert engine.apply_dot(target) == 15
    assert target.shield == 0


def test_apply_dot_blocked_by_immunity(engine, target):
    engine.apply_debuff(target, "poison", 3, dot_damage=25)
    engine.apply_buff(target, "divine_shield", 2, immunity=True)
    assert engine.apply_dot(target) == 0
    assert target.current_hp == 1000


def test_apply_dot_can_kill(engine, target):
    target.current_hp = 5
    engine.apply_debuff(target, "poison", 3, dot_damage=25)
    assert engine.apply_dot(target) == 5
    assert target.is_dead
