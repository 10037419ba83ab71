"""
Unit definitions consumed by the combat engine.

A unit definition is the external, persistent description of a hero or an
enemy. The engine only reads it, except for the experience hook.
"""

from typing import Any

from pydantic import BaseModel, Field

from wavecombat.effects.aggregator import StatBlock


class AbilityReference(BaseModel):
    """A slot in a unit's ability list."""

    ability_id: str = Field(
        description="Key of the ability in the ability catalog.",
    )
    level: int = Field(
        default=1,
        ge=1,
        description="Level of the ability, used when scoring it.",
    )
    cooldown: int = Field(
        default=0,
        ge=0,
        description="Turns the ability stays unavailable after use.",
    )
    is_ultimate: bool = Field(
        default=False,
        description="Whether the ability is the unit's ultimate.",
    )


class GearStats(BaseModel):
    """Flat defensive bonuses granted by equipment."""

    armor: float = Field(default=0, ge=0)
    resist: float = Field(default=0, ge=0)


class UnitDefinition(BaseModel):
    """
    The external definition of a unit.

    Attributes mirror the hero/enemy records of the surrounding game: the
    engine builds a Combatant from one of these at every encounter load.
    """

    name: str = Field(
        description="The name of the unit.",
    )
    level: int = Field(
        default=1,
        ge=1,
        description="The level of the unit.",
    )
    hp: int = Field(
        gt=0,
        description="The maximum hit points of the unit.",
    )
    stats: StatBlock = Field(
        default_factory=StatBlock,
        description="The primary stats of the unit.",
    )
    gear: GearStats = Field(
        default_factory=GearStats,
        description="Equipment-derived armor and resist.",
    )
    abilities: list[AbilityReference] = Field(
        default_factory=list,
        description="The ordered ability slots of the unit.",
    )
    creature_type: str | None = Field(
        default=None,
        description="Creature family, e.g. 'undead' or 'demon'.",
    )
    pending_exp: int = Field(
        default=0,
        ge=0,
        description="Experience granted by battles and not yet consumed.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ValueError("Unit name must not be empty.")

    def grant_experience(self, amount: int) -> None:
        """
        Adds experience to the unit.

        Args:
            amount (int): The experience to grant.

        """
        if amount < 0:
            raise ValueError(f"Cannot grant negative experience to {self.name}.")
        self.pending_exp += amount
