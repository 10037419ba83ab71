"""
Tests for effect records and their upsert semantics.
"""

import pytest
from pydantic import ValidationError

from wavecombat.effects.base_effect import (
    PERMANENT,
    Effect,
    EffectPayload,
    make_effect,
    merge_duration,
    tick_effects,
    upsert_effect,
)


def test_upsert_inserts_new_effect():
    effects: dict[str, Effect] = {}
    stored = upsert_effect(effects, make_effect("poison", 3, dot_damage=10))
    assert list(effects) == ["poison"]
    assert stored.duration == 3
    assert stored.payload.dot_damage == 10


def test_upsert_never_duplicates_and_keeps_longer_duration():
    """
    Test that reapplying an effect refreshes the single entry with max(old, new).
    """
    effects: dict[str, Effect] = {}
    upsert_effect(effects, make_effect("poison", 5, dot_damage=10))
    upsert_effect(effects, make_effect("poison", 2, dot_damage=20))
    assert len(effects) == 1
    assert effects["poison"].duration == 5
    # The payload is always replaced by the newest application.
    assert effects["poison"].payload.dot_damage == 20

    upsert_effect(effects, make_effect("poison", 7, dot_damage=5))
    assert len(effects) == 1
    assert effects["poison"].duration == 7


def test_upsert_permanent_wins():
    effects: dict[str, Effect] = {}
    upsert_effect(effects, make_effect("aura", PERMANENT, damage_multiplier=1.25))
    upsert_effect(effects, make_effect("aura", 3, damage_multiplier=1.5))
    assert effects["aura"].is_permanent()
    assert effects["aura"].payload.damage_multiplier == 1.5


def test_upsert_does_not_alias_the_applied_effect():
    effects: dict[str, Effect] = {}
    applied = make_effect("slow", 2, action_bar_speed_factor=0.5)
    upsert_effect(effects, applied)
    tick_effects(effects)
    assert applied.duration == 2


@pytest.mark.parametrize(
    "old, new, expected",
    [(2, 5, 5), (5, 2, 5), (PERMANENT, 3, PERMANENT), (3, PERMANENT, PERMANENT)],
)
def test_merge_duration(old, new, expected):
    assert merge_duration(old, new) == expected


def test_tick_effects_expires_at_zero():
    effects: dict[str, Effect] = {}
    upsert_effect(effects, make_effect("stun", 2, stunned=True))
    upsert_effect(effects, make_effect("aura", PERMANENT, evasion=0.1))

    assert tick_effects(effects) == []
    assert effects["stun"].duration == 1
    assert tick_effects(effects) == ["stun"]
    assert list(effects) == ["aura"]
    assert effects["aura"].duration == PERMANENT


@pytest.mark.parametrize("duration", [0, -2])
def test_effect_rejects_invalid_duration(duration):
    with pytest.raises(ValueError):
        Effect(name="broken", duration=duration)


def test_effect_rejects_empty_name():
    with pytest.raises(ValueError):
        Effect(name="", duration=1)


def test_payload_rejects_unknown_modifier():
    with pytest.raises(ValidationError):
        EffectPayload(damage_multiplyer=2.0)


def test_display_name():
    assert make_effect("hunters_mark").display_name == "Hunters Mark"
