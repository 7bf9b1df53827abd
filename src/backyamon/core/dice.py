"""Dice utilities for backgammon.

This module handles dice rolling, the playable-value multiset for a roll,
and the table of distinct rolls used by the search agents.
"""

from typing import List, Optional, Tuple

import numpy as np

from backyamon.core.types import Dice

DicePair = Tuple[int, int]


def all_dice_rolls() -> List[DicePair]:
    """Generate all 21 unique dice outcomes.

    (2,3) and (3,2) are equivalent, so there are 21 unique rolls:
    - 6 doubles: (1,1), (2,2), ..., (6,6)
    - 15 non-doubles: (1,2), (1,3), ..., (5,6)

    Returns:
        List of all 21 unique dice combinations, sorted
    """
    rolls = []
    for die1 in range(1, 7):
        for die2 in range(die1, 7):
            rolls.append((die1, die2))
    return rolls


def is_doubles(values: DicePair) -> bool:
    """Check if both dice show the same value."""
    return values[0] == values[1]


def dice_values(values: DicePair) -> List[int]:
    """Get the die values playable for a roll.

    For doubles, you get 4 moves. For non-doubles, you get 2 moves.

    Examples:
        >>> dice_values((3, 5))
        [3, 5]
        >>> dice_values((4, 4))
        [4, 4, 4, 4]
    """
    if is_doubles(values):
        return [values[0]] * 4
    return [values[0], values[1]]


def roll_dice(
    forced: Optional[DicePair] = None,
    rng: Optional[np.random.Generator] = None,
) -> Dice:
    """Roll two dice.

    Args:
        forced: Use this pair instead of drawing (deterministic play and tests)
        rng: NumPy random generator; a fresh unseeded one if omitted

    Returns:
        Dice with the rolled pair and its playable values
    """
    if forced is not None:
        values = (int(forced[0]), int(forced[1]))
    else:
        if rng is None:
            rng = np.random.default_rng()
        values = (int(rng.integers(1, 7)), int(rng.integers(1, 7)))
    return Dice(values=values, remaining=dice_values(values))


def dice_to_string(values: DicePair) -> str:
    """Convert dice to readable string.

    Examples:
        >>> dice_to_string((3, 5))
        '3-5'
        >>> dice_to_string((4, 4))
        'Double 4s'
    """
    if is_doubles(values):
        return f"Double {values[0]}s"
    return f"{values[0]}-{values[1]}"


ALL_DICE_ROLLS = all_dice_rolls()

# Doubles have probability 1/36, non-doubles 2/36 = 1/18
DICE_PROBABILITIES = {
    values: 1/36 if is_doubles(values) else 1/18
    for values in ALL_DICE_ROLLS
}
