"""
Shared fixtures and factories for the combat engine tests.
"""

from collections.abc import Sequence
from typing import Any

import pytest

from wavecombat.combat.battle import Battle
from wavecombat.combat.battle_log import BattleLog
from wavecombat.combat.resolution import ResolutionEngine
from wavecombat.core.config import BattleSettings
from wavecombat.core.constants import Side
from wavecombat.core.rng import RNG
from wavecombat.effects.aggregator import StatBlock
from wavecombat.units.combatant import Combatant
from wavecombat.units.unit_definition import AbilityReference, GearStats, UnitDefinition


class StubRNG(RNG):
    """An RNG that returns scripted outcomes, then neutral defaults."""

    def __init__(
        self,
        chances: Sequence[bool] = (),
        uniforms: Sequence[float] = (),
        choices: Sequence[Any] = (),
        randints: Sequence[int] = (),
    ) -> None:
        super().__init__(seed=0)
        self.chances = list(chances)
        self.uniforms = list(uniforms)
        self.choices = list(choices)
        self.randints = list(randints)
        self.chance_calls: list[float] = []

    def chance(self, probability: float) -> bool:
        if probability <= 0.0:
            return False
        self.chance_calls.append(probability)
        return self.chances.pop(0) if self.chances else False

    def uniform(self, a: float, b: float) -> float:
        return self.uniforms.pop(0) if self.uniforms else a

    def choice(self, seq: Sequence[Any]) -> Any:
        if self.choices:
            value = self.choices.pop(0)
            assert value in seq
            return value
        return seq[0]

    def randint(self, a: int, b: int) -> int:
        return self.randints.pop(0) if self.randints else a


def make_unit(
    name: str = "Unit",
    hp: int = 1000,
    strength: float = 0,
    agility: float = 0,
    intellect: float = 0,
    armor: float = 0,
    resist: float = 0,
    abilities: Sequence[str | AbilityReference] = (),
    level: int = 1,
    creature_type: str | None = None,
) -> UnitDefinition:
    """Builds a unit definition; abilities may be given as bare ids."""
    return UnitDefinition(
        name=name,
        level=level,
        hp=hp,
        stats=StatBlock(strength=strength, agility=agility, intellect=intellect),
        gear=GearStats(armor=armor, resist=resist),
        abilities=[
            a if isinstance(a, AbilityReference) else AbilityReference(ability_id=a)
            for a in abilities
        ],
        creature_type=creature_type,
    )


def make_combatant(side: Side = Side.ALLY, slot: int = 0, **kwargs: Any) -> Combatant:
    return Combatant(make_unit(**kwargs), side, slot)


@pytest.fixture
def settings():
    return BattleSettings()


@pytest.fixture
def battle_log():
    return BattleLog()


@pytest.fixture
def stub_rng():
    return StubRNG()


@pytest.fixture
def engine(settings, stub_rng, battle_log):
    return ResolutionEngine(settings, stub_rng, battle_log)


@pytest.fixture
def attacker():
    return make_combatant(Side.ALLY, 0, name="Attacker")


@pytest.fixture
def target():
    return make_combatant(Side.ENEMY, 0, name="Target")


@pytest.fixture
def auto_settings():
    return BattleSettings(automated=True)


@pytest.fixture
def make_battle():
    """Factory building a battle with a scripted RNG unless one is given."""

    def _make(settings: BattleSettings | None = None, rng: RNG | None = None, **kwargs: Any) -> Battle:
        return Battle(settings=settings, rng=rng if rng is not None else StubRNG(), **kwargs)

    return _make
