"""
Battle configuration for the combat engine.

Collects every policy that is a design decision rather than a fixed rule, so
an encounter can be tuned without touching the engine.
"""

from pydantic import BaseModel, ConfigDict, Field


class BattleSettings(BaseModel):
    """
    Tunable policies of an encounter.

    Pacing delays only matter to interactive front-ends; a headless battle
    resolves identically with them at zero.
    """

    model_config = ConfigDict(frozen=True)

    full_heal_between_waves: bool = Field(
        default=False,
        description="Restore living allies to full HP when a new wave loads.",
    )
    grant_wave_experience: bool = Field(
        default=True,
        description="Grant experience to living allies when a wave is cleared.",
    )
    exp_per_enemy_level: int = Field(
        default=10,
        ge=0,
        description="Experience granted per level of each unit in a cleared wave.",
    )
    victory_bonus_exp: int = Field(
        default=0,
        ge=0,
        description="Extra experience granted to survivors on victory.",
    )
    regen_str_ratio: float = Field(
        default=0.05,
        ge=0.0,
        description="End-of-turn regeneration, as a fraction of strength.",
    )
    wave_transition_ticks: int = Field(
        default=1,
        ge=0,
        description="Number of steps spent loading the next wave.",
    )
    ultimate_initial_cooldown_max: int = Field(
        default=0,
        ge=0,
        description=(
            "Ultimates start on a random cooldown in [1, max]. "
            "Zero disables the initial cooldown."
        ),
    )
    base_crit_chance: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Critical hit chance every combatant starts with.",
    )
    crit_multiplier: float = Field(
        default=2.0,
        ge=1.0,
        description="Damage multiplier of a critical hit.",
    )
    execute_threshold: float = Field(
        default=0.3,
        gt=0.0,
        le=1.0,
        description="HP fraction at or below which execute abilities kill outright.",
    )
    max_avoid_chance: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Cap on the combined miss, dodge and evasion chance.",
    )
    automated: bool = Field(
        default=False,
        description="Start the battle with the party controlled by the AI.",
    )
    tick_delay: float = Field(
        default=0.0,
        ge=0.0,
        description="Seconds to wait between scheduler ticks (presentation only).",
    )
    turn_delay: float = Field(
        default=0.0,
        ge=0.0,
        description="Seconds to wait after each turn (presentation only).",
    )
