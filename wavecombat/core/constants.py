"""
Constants and enumerations for the combat engine.

Defines the fixed combat rules (action meter threshold, speed and mitigation
curves) and the enumerations for sides, damage types, ability target classes,
effect tags, turn phases and encounter states.
"""

from enum import Enum

# Amount of action meter a combatant spends to take one turn.
TURN_THRESHOLD = 10000

# Speed curve: BASE + BASE * agi / (agi + SPEED_AGI_SCALE), bounded in (100, 200).
SPEED_BASE = 100.0
SPEED_AGI_SCALE = 1000.0

# Armor and resist curves.
ARMOR_STR_RATIO = 0.25
ARMOR_AGI_RATIO = 0.05
RESIST_INT_RATIO = 0.25
PHYSICAL_REDUCTION_CAP = 0.9
PHYSICAL_REDUCTION_SCALE = 500.0
MAGIC_REDUCTION_CAP = 0.3
MAGIC_REDUCTION_SCALE = 1000.0

# Sentinel target used by area abilities.
AREA_TARGET = "all"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class Side(NiceEnum):
    """Which roster a combatant fights for."""

    ALLY = "ally"
    ENEMY = "enemy"

    @property
    def opposite(self) -> "Side":
        return Side.ENEMY if self is Side.ALLY else Side.ALLY

    @property
    def color(self) -> str:
        """Returns the color string associated with this side."""
        return {
            Side.ALLY: "bold blue",
            Side.ENEMY: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies side color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class DamageType(NiceEnum):
    """Defines the types of damage an ability can inflict.

    Only PHYSICAL is mitigated by armor; every other type is magical and is
    mitigated by resist and amplified by the attacker's spell power.
    """

    PHYSICAL = "physical"
    MAGICAL = "magical"
    FIRE = "fire"
    FROST = "frost"
    ARCANE = "arcane"
    HOLY = "holy"
    SHADOW = "shadow"
    NATURE = "nature"
    PSIONIC = "psionic"
    VOID = "void"

    @property
    def is_physical(self) -> bool:
        return self is DamageType.PHYSICAL


class TargetClass(NiceEnum):
    """Declared target class of an ability."""

    ENEMY = "enemy"
    ALLY = "ally"
    SELF = "self"
    DEAD_ALLY = "dead_ally"
    PASSIVE = "passive"
    ALL_ENEMIES = "all_enemies"
    ALL_ALLIES = "all_allies"

    @property
    def is_area(self) -> bool:
        return self in (TargetClass.ALL_ENEMIES, TargetClass.ALL_ALLIES)


class EffectTag(NiceEnum):
    """Tags describing what an ability does, used for AI scoring."""

    DAMAGE = "damage"
    HEAL = "heal"
    BUFF = "buff"
    DEBUFF = "debuff"
    AOE = "aoe"
    EXECUTE = "execute"
    RESURRECT = "resurrect"
    AURA = "aura"
    SHIELD = "shield"
    SPEED = "speed"
    DEFENSE = "defense"
    THREAT = "threat"
    STUN = "stun"
    DOT = "dot"
    TRANSFORM = "transform"
    SUMMON = "summon"
    HOLY = "holy"
    SHADOW = "shadow"
    FIRE = "fire"
    FROST = "frost"
    ARCANE = "arcane"
    NATURE = "nature"


class TurnPhase(NiceEnum):
    """Phases of the turn processor state machine."""

    SCHEDULING = "scheduling"
    SELECTED = "selected"
    EFFECT_UPKEEP = "effect_upkeep"
    DOT_RESOLVE = "dot_resolve"
    DEATH_CHECK = "death_check"
    STUN_CHECK = "stun_check"
    PLAYER_WAIT = "player_wait"
    AI_DECISION = "ai_decision"
    ABILITY_DISPATCH = "ability_dispatch"
    COOLDOWN_REGEN = "cooldown_regen"
    TURN_END = "turn_end"


class EncounterState(NiceEnum):
    """States of the multi-wave encounter."""

    PENDING = "pending"
    WAVE_ACTIVE = "wave_active"
    WAVE_CLEARED = "wave_cleared"
    NEXT_WAVE_LOADING = "next_wave_loading"
    VICTORY = "victory"
    DEFEAT = "defeat"

    @property
    def is_terminal(self) -> bool:
        return self in (EncounterState.VICTORY, EncounterState.DEFEAT)
