"""Legal first moves under the dice-usage rules."""

from typing import List

from backyamon.core.turn_generator import get_all_legal_turns
from backyamon.core.types import GameState, Move


def get_constrained_moves(state: GameState) -> List[Move]:
    """Get the moves a player may make next.

    Returns only first moves of maximal-length turns (which also enforces
    the higher-die rule). After one of these is applied, call again on the
    new state for the next step.

    Args:
        state: State in the MOVING phase (not modified)

    Returns:
        Distinct first moves; empty when the roll cannot be played
    """
    moves: List[Move] = []
    for turn in get_all_legal_turns(state):
        if turn and turn[0] not in moves:
            moves.append(turn[0])
    return moves
