"""
Base effect module for the combat engine.

Defines the named buff/debuff records held by combatants, the typed payload
they carry, and the helpers used to upsert and expire them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Permanent duration marker.
PERMANENT = -1


class EffectPayload(BaseModel):
    """
    The stat changes carried by an effect.

    Every field is optional: None means the effect does not touch that stat.
    Unknown keys are rejected so a mistyped modifier fails at construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Scheduler.
    action_bar_multiplier: float | None = Field(
        default=None,
        description="Buff factor applied to action meter gain.",
    )
    action_bar_speed_factor: float | None = Field(
        default=None,
        description="Debuff factor applied to action meter gain.",
    )
    # Incoming damage.
    damage_reduction: float | None = Field(
        default=None,
        description="Fraction of incoming damage removed (buff only).",
    )
    damage_taken_multiplier: float | None = Field(
        default=None,
        description="Factor applied to incoming damage (debuff only).",
    )
    # Multiplicative derived stats.
    damage_multiplier: float | None = None
    defense_multiplier: float | None = None
    spell_power: float | None = None
    accuracy: float | None = None
    healing_received: float | None = None
    # Additive derived stats.
    evasion: float | None = None
    crit_chance: float | None = None
    dodge_chance: float | None = None
    miss_chance: float | None = None
    damage_reflect: float | None = None
    # Flat stat rescaling.
    str_multiplier: float | None = None
    agi_multiplier: float | None = None
    int_multiplier: float | None = None
    all_stats_multiplier: float | None = None
    # Status.
    dot_damage: float | None = Field(
        default=None,
        description="Damage dealt to the holder at the start of each of its turns.",
    )
    stunned: bool = False
    immunity: bool = Field(
        default=False,
        description="The holder takes no damage.",
    )
    debuff_immunity: bool = Field(
        default=False,
        description="Debuffs applied to the holder are resisted.",
    )
    untargetable: bool = Field(
        default=False,
        description="The holder cannot be chosen as a single enemy target.",
    )


class Effect(BaseModel):
    """
    A named buff or debuff applied to a combatant.

    A duration of -1 marks a permanent effect; any other duration counts the
    owner's remaining turn starts before the effect expires.
    """

    name: str = Field(
        description="The name of the effect, unique per holder.",
    )
    duration: int = Field(
        default=PERMANENT,
        description="Remaining turns, or -1 for a permanent effect.",
    )
    payload: EffectPayload = Field(
        default_factory=EffectPayload,
        description="The stat changes the effect carries.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ValueError("Effect name must not be empty.")
        if self.duration != PERMANENT and self.duration <= 0:
            raise ValueError(
                f"Effect '{self.name}' must have a positive duration or be permanent, "
                f"got {self.duration}."
            )

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()

    def is_permanent(self) -> bool:
        """Check if the effect never expires."""
        return self.duration == PERMANENT

    def tick(self) -> bool:
        """
        Consumes one turn of duration.

        Returns:
            bool: True if the effect has expired and must be removed.

        """
        if self.is_permanent():
            return False
        self.duration -= 1
        return self.duration <= 0


def make_effect(name: str, duration: int = PERMANENT, **payload: Any) -> Effect:
    """
    Builds an effect from keyword modifiers.

    Args:
        name (str): The name of the effect.
        duration (int): The duration in turns, or -1 for permanent.
        **payload: The payload fields.

    Returns:
        Effect: The new effect.

    """
    return Effect(name=name, duration=duration, payload=EffectPayload(**payload))


def merge_duration(old: int, new: int) -> int:
    """Returns the longer of two durations, treating -1 as unbounded."""
    if PERMANENT in (old, new):
        return PERMANENT
    return max(old, new)


def upsert_effect(effects: dict[str, Effect], effect: Effect) -> Effect:
    """
    Inserts an effect, or refreshes the existing one with the same name.

    On refresh the payload is replaced and the duration becomes the longer of
    the two, so a holder never carries two entries with one name.

    Args:
        effects (dict[str, Effect]): The name-keyed collection to update.
        effect (Effect): The effect to apply.

    Returns:
        Effect: The entry now stored in the collection.

    """
    existing = effects.get(effect.name)
    if existing is None:
        stored = effect.model_copy()
    else:
        stored = Effect(
            name=effect.name,
            duration=merge_duration(existing.duration, effect.duration),
            payload=effect.payload,
        )
    effects[effect.name] = stored
    return stored


def tick_effects(effects: dict[str, Effect]) -> list[str]:
    """
    Decrements every temporary effect and drops the expired ones.

    Args:
        effects (dict[str, Effect]): The name-keyed collection to update.

    Returns:
        list[str]: The names of the effects that expired.

    """
    expired = [name for name, effect in effects.items() if effect.tick()]
    for name in expired:
        del effects[name]
    return expired
