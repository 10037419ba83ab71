"""
Ability descriptors and the catalog that holds them.

A descriptor tells the engine how to target an ability, how the AI should
value it, and which routine resolves it.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from wavecombat.core.constants import EffectTag, TargetClass


class AbilityDescriptor(BaseModel):
    """The effect description of one ability."""

    ability_id: str = Field(
        description="Key of the ability in the catalog.",
    )
    name: str = Field(
        description="Display name of the ability.",
    )
    description: str = Field(
        default="",
        description="A brief description of the ability.",
    )
    target_class: TargetClass = Field(
        description="Which units the ability may be aimed at.",
    )
    effect_tags: frozenset[EffectTag] = Field(
        default_factory=frozenset,
        description="What the ability does, used to score it.",
    )
    routine_key: str = Field(
        description="Key of the registered routine that resolves the ability.",
    )
    scaling: dict[str, float] = Field(
        default_factory=dict,
        description="Routine-specific numbers, e.g. a percent and a cap.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.ability_id:
            raise ValueError("Ability descriptor must have an id.")
        if not self.routine_key:
            raise ValueError(f"Ability '{self.ability_id}' must name a routine.")

    def has_tag(self, tag: EffectTag) -> bool:
        return tag in self.effect_tags

    @property
    def is_aura(self) -> bool:
        """Auras resolve once per wave load and are never chosen as actions."""
        return self.target_class is TargetClass.PASSIVE or EffectTag.AURA in self.effect_tags

    @property
    def is_area(self) -> bool:
        return self.target_class.is_area or EffectTag.AOE in self.effect_tags


class AbilityCatalog:
    """A lookup of ability descriptors keyed by ability id."""

    def __init__(self, descriptors: Iterable[AbilityDescriptor] = ()) -> None:
        self._descriptors: dict[str, AbilityDescriptor] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def __contains__(self, ability_id: object) -> bool:
        return ability_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[AbilityDescriptor]:
        return iter(self._descriptors.values())

    def add(self, descriptor: AbilityDescriptor) -> None:
        """Adds a descriptor, replacing any previous one with the same id."""
        if descriptor.ability_id in self._descriptors:
            log_warning(
                f"Replacing ability descriptor '{descriptor.ability_id}'.",
                {"routine_key": descriptor.routine_key},
            )
        self._descriptors[descriptor.ability_id] = descriptor

    def get(self, ability_id: str) -> AbilityDescriptor | None:
        return self._descriptors.get(ability_id)

    @classmethod
    def from_records(cls, records: Mapping[str, Mapping[str, Any]]) -> "AbilityCatalog":
        """
        Builds a catalog from plain records keyed by ability id.

        Args:
            records (Mapping[str, Mapping[str, Any]]): The descriptor records.

        Returns:
            AbilityCatalog: The new catalog.

        """
        return cls(
            AbilityDescriptor.model_validate({"ability_id": ability_id, **record})
            for ability_id, record in records.items()
        )
