"""Tests for dice utilities."""

import pytest
import numpy as np
from backyamon.core.dice import (
    all_dice_rolls,
    is_doubles,
    dice_values,
    roll_dice,
    dice_to_string,
    ALL_DICE_ROLLS,
    DICE_PROBABILITIES,
)


class TestDiceUtilities:
    """Tests for dice utility functions."""

    def test_all_dice_rolls(self):
        """Test that we get all 21 unique dice rolls."""
        rolls = all_dice_rolls()
        assert len(rolls) == 21

        for i in range(1, 7):
            assert (i, i) in rolls

        seen = set()
        for roll in rolls:
            canonical = tuple(sorted(roll))
            assert canonical not in seen
            seen.add(canonical)

    def test_is_doubles(self):
        """Test doubles detection."""
        assert is_doubles((1, 1))
        assert is_doubles((6, 6))
        assert not is_doubles((1, 2))

    def test_dice_values(self):
        """Non-doubles give 2 values, doubles give 4."""
        assert dice_values((3, 5)) == [3, 5]
        assert dice_values((4, 4)) == [4, 4, 4, 4]

    def test_dice_to_string(self):
        """Test dice string conversion."""
        assert dice_to_string((3, 5)) == "3-5"
        assert dice_to_string((4, 4)) == "Double 4s"

    def test_dice_probabilities(self):
        """Test that dice probabilities sum to 1."""
        assert len(ALL_DICE_ROLLS) == 21
        assert abs(sum(DICE_PROBABILITIES.values()) - 1.0) < 1e-6
        assert abs(DICE_PROBABILITIES[(1, 1)] - 1/36) < 1e-6
        assert abs(DICE_PROBABILITIES[(1, 2)] - 1/18) < 1e-6


class TestRollDice:
    """Tests for rolling."""

    def test_forced_non_double(self):
        """A forced pair is used verbatim."""
        dice = roll_dice(forced=(5, 2))
        assert dice.values == (5, 2)
        assert dice.remaining == [5, 2]

    def test_forced_double(self):
        """A forced double yields four plays."""
        dice = roll_dice(forced=(3, 3))
        assert dice.remaining == [3, 3, 3, 3]

    def test_random_rolls_in_range(self, rng):
        """Random rolls stay in 1-6 and size remaining correctly."""
        for _ in range(200):
            dice = roll_dice(rng=rng)
            assert all(1 <= v <= 6 for v in dice.values)
            expected = 4 if dice.values[0] == dice.values[1] else 2
            assert len(dice.remaining) == expected

    def test_seeded_rolls_repeat(self):
        """Same seed, same rolls."""
        rng_a = np.random.default_rng(7)
        rng_b = np.random.default_rng(7)
        a = [roll_dice(rng=rng_a).values for _ in range(10)]
        b = [roll_dice(rng=rng_b).values for _ in range(10)]
        assert a == b

    def test_unseeded_roll(self):
        """Rolling without a generator still works."""
        dice = roll_dice()
        assert 1 <= dice.values[0] <= 6

    def test_invalid_forced_values(self):
        """Faces outside 1-6 are rejected."""
        with pytest.raises(AssertionError):
            roll_dice(forced=(0, 7))
