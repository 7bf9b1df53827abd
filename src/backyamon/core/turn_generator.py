"""Full-turn enumeration.

A turn is the ordered list of single moves a player makes with one roll.
``get_all_legal_turns`` explores every sequence depth-first and applies the
two dice-usage rules:

- Use as many dice as possible: only maximum-length sequences survive.
- If only one die of a non-double roll can be played, it must be the higher
  one whenever the higher one is playable.

Different move orders often reach the same position with the same dice
left, so the continuations from a position are computed once per search.
"""

import logging
from typing import Dict, Hashable, List, Set, Tuple

from backyamon.core.board import position_key
from backyamon.core.moves import apply_move, die_consumed_by_move, get_legal_moves
from backyamon.core.types import GameState, Move, Turn

logger = logging.getLogger(__name__)

Sequence = Tuple[Move, ...]


def _continuations(
    state: GameState,
    cache: Dict[Hashable, List[Sequence]],
) -> List[Sequence]:
    """Every maximal move sequence playable from ``state``."""
    key = position_key(state)
    if key in cache:
        return cache[key]

    legal_moves = get_legal_moves(state)
    if not legal_moves:
        sequences = [()]
    else:
        sequences = []
        for move in legal_moves:
            for rest in _continuations(apply_move(state, move), cache):
                sequences.append((move,) + rest)

    cache[key] = sequences
    return sequences


def get_all_legal_turns(state: GameState) -> List[Turn]:
    """Generate every complete legal turn for the current roll.

    Args:
        state: State in the MOVING phase (not modified)

    Returns:
        Distinct maximal turns in discovery order; ``[[]]`` when the roll
        cannot be played at all.
    """
    sequences = _continuations(state, {})

    max_moves = max(len(seq) for seq in sequences)
    if max_moves == 0:
        return [[]]

    seen: Set[Sequence] = set()
    turns: List[Turn] = []
    for seq in sequences:
        if len(seq) == max_moves and seq not in seen:
            seen.add(seq)
            turns.append(list(seq))

    # Only one die playable: must be the higher die if it can be
    if max_moves == 1 and len(state.dice.remaining) >= 2:
        max_die = max(state.dice.remaining)
        using_higher = [
            turn for turn in turns
            if die_consumed_by_move(state, turn[0]) == max_die
        ]
        if using_higher:
            turns = using_higher

    logger.debug(
        "%s: %d turns of length %d for dice %s",
        state.current_player, len(turns), max_moves, state.dice.remaining,
    )
    return turns
