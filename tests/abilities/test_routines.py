"""
Tests for the built-in ability routines.
"""

import pytest
from conftest import StubRNG, make_unit

from wavecombat.combat.battle import Battle
from wavecombat.core.config import BattleSettings
from wavecombat.core.constants import DamageType


def setup_fight(caster, *targets, rng=None):
    battle = Battle(settings=BattleSettings(automated=True), rng=rng or StubRNG())
    battle.start([caster], [list(targets)])
    return battle


def use(battle, ability_id, target):
    """Resolves an ability of the first party member directly through its routine."""
    descriptor = battle.catalog.get(ability_id)
    battle.routines.get(ability_id)(battle, battle.party[0], target, descriptor)


def dummy_with_reflect(name):
    return make_unit(name=name, hp=5000, abilities=["vengeance_aura"])


# =============================================================================
# Boss abilities
# =============================================================================


@pytest.mark.parametrize("hp, remaining", [(1000, 750), (2000, 1600)])
def test_slash_is_capped(hp, remaining):
    battle = setup_fight(make_unit(name="Wyrm"), make_unit(name="Knight", hp=hp))
    target = battle.enemies[0]
    use(battle, "slash", target)
    assert target.current_hp == remaining


def test_bite_has_a_floor():
    battle = setup_fight(make_unit(name="Wolf"), make_unit(name="Squire", hp=100))
    target = battle.enemies[0]
    use(battle, "bite", target)
    assert target.current_hp == 50
    assert "Wolf bites Squire for 50 damage!" in battle.battle_log


def test_frost_breath_slows_everyone():
    battle = setup_fight(
        make_unit(name="Wyrm", strength=50),
        make_unit(name="A"),
        make_unit(name="B"),
    )
    use(battle, "frost_breath", "all")
    for enemy in battle.enemies:
        assert enemy.current_hp == 900
        assert enemy.debuffs["slow"].duration == 2
        assert enemy.speed == pytest.approx(50.0)


def test_gold_toss_uses_the_rng():
    battle = setup_fight(
        make_unit(name="Dragon", strength=100),
        make_unit(name="Thief"),
        rng=StubRNG(uniforms=[2.5]),
    )
    use(battle, "gold_toss", battle.enemies[0])
    assert battle.enemies[0].current_hp == 750
    assert "Dragon tosses gold coins for 250 damage!" in battle.battle_log


# =============================================================================
# Hero abilities
# =============================================================================


def test_area_attack_stops_when_the_caster_dies():
    spiky = [dummy_with_reflect(f"Spiky{i}") for i in range(3)]
    battle = setup_fight(make_unit(name="Mage", hp=10, intellect=100), *spiky)
    use(battle, "arcane_explosion", "all")
    assert battle.party[0].is_dead
    assert [enemy.current_hp for enemy in battle.enemies] == [4800, 5000, 5000]
    assert "Mage has been defeated!" in battle.battle_log


@pytest.mark.parametrize("creature_type, remaining", [(None, 850), ("undead", 700), ("demon", 700)])
def test_silver_bolt_against_creature_types(creature_type, remaining):
    battle = setup_fight(
        make_unit(name="Lyra", agility=100),
        make_unit(name="Foe", creature_type=creature_type),
    )
    use(battle, "silver_bolt", battle.enemies[0])
    assert battle.enemies[0].current_hp == remaining


def test_perfect_shot_executes_wounded_targets():
    battle = setup_fight(make_unit(name="Lyra", agility=10), make_unit(name="Foe"))
    target = battle.enemies[0]
    use(battle, "perfect_shot", target)
    assert target.current_hp == 900
    assert "Lyra fires a Perfect Shot!" in battle.battle_log

    target.current_hp = 300
    use(battle, "perfect_shot", target)
    assert target.is_dead
    assert "Lyra executes Foe with a Perfect Shot!" in battle.battle_log


def test_blessed_recovery_revives_at_half_health():
    battle = Battle(settings=BattleSettings(automated=True), rng=StubRNG())
    battle.start([make_unit(name="Aldric"), make_unit(name="Fallen")], [[make_unit(name="Foe")]])
    fallen = battle.party[1]
    battle.engine.kill(fallen)
    use(battle, "blessed_recovery", fallen)
    assert fallen.is_alive()
    assert fallen.current_hp == 500
    assert "Aldric resurrects Fallen!" in battle.battle_log


@pytest.mark.parametrize("ability_id", ["shield_bash", "time_stop"])
def test_stunning_abilities(ability_id):
    battle = setup_fight(make_unit(name="Hero", strength=100), make_unit(name="Foe"))
    descriptor = battle.catalog.get(ability_id)
    target = "all" if descriptor.is_area else battle.enemies[0]
    use(battle, ability_id, target)
    assert battle.enemies[0].is_stunned()


def test_hunters_mark_amplifies_damage():
    battle = setup_fight(make_unit(name="Lyra"), make_unit(name="Foe"))
    target = battle.enemies[0]
    use(battle, "hunters_mark", target)
    assert target.debuffs["hunters_mark"].is_permanent()
    # Punch deals 5 + stat total, amplified by the mark.
    use(battle, "punch", target)
    assert target.current_hp == 1000 - 6


# =============================================================================
# Alchemy
# =============================================================================


def test_alchemy_heal():
    battle = setup_fight(make_unit(name="Alchemist"), make_unit(name="Foe"), rng=StubRNG(choices=["heal"]))
    target = battle.enemies[0]
    target.current_hp = 100
    use(battle, "alchemy", target)
    assert target.current_hp == 400
    assert "Alchemist's potion heals!" in battle.battle_log


def test_alchemy_explosion_picks_a_magic_type():
    battle = setup_fight(
        make_unit(name="Alchemist", intellect=100),
        make_unit(name="Foe"),
        rng=StubRNG(choices=["damage", DamageType.FIRE]),
    )
    use(battle, "alchemy", battle.enemies[0])
    assert battle.enemies[0].current_hp == 700


def test_alchemy_debuff():
    battle = setup_fight(make_unit(name="Alchemist"), make_unit(name="Foe"), rng=StubRNG(choices=["debuff"]))
    use(battle, "alchemy", battle.enemies[0])
    assert battle.enemies[0].debuffs["alchemy_debuff"].duration == 3
