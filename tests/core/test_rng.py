"""
Tests for the seeded random number generator.
"""

import pytest

from wavecombat.core.rng import RNG


def test_same_seed_same_sequence():
    first, second = RNG(42), RNG(42)
    assert [first.random() for _ in range(5)] == [second.random() for _ in range(5)]
    assert first.randint(1, 100) == second.randint(1, 100)
    assert first.uniform(0, 3) == second.uniform(0, 3)


def test_chance_never_draws_for_zero_probability(mocker):
    rng = RNG(1)
    spy = mocker.spy(rng._random, "random")
    assert rng.chance(0.0) is False
    assert rng.chance(-1.0) is False
    spy.assert_not_called()


def test_chance_certain():
    rng = RNG(1)
    assert all(rng.chance(1.0) for _ in range(20))


def test_choice_rejects_empty_sequence():
    with pytest.raises(ValueError):
        RNG(1).choice([])


def test_randint_bounds():
    rng = RNG(7)
    assert all(1 <= rng.randint(1, 3) <= 3 for _ in range(50))
