"""Turn and phase transitions.

Phase flow for one turn:

    ROLLING --start_moving--> MOVING --end_turn--> ROLLING (opponent)
                                              \\-> GAME_OVER (winner found)

The optional DOUBLING detour from ROLLING lives in ``doubling``.
"""

import logging
from typing import Optional

import numpy as np

from backyamon.core.board import clone_state
from backyamon.core.dice import DicePair, roll_dice
from backyamon.core.moves import get_legal_moves
from backyamon.core.types import GamePhase, GameState
from backyamon.core.winner import check_winner, get_win_type

logger = logging.getLogger(__name__)


def start_moving(
    state: GameState,
    forced: Optional[DicePair] = None,
    rng: Optional[np.random.Generator] = None,
) -> GameState:
    """Roll for the current player and enter the MOVING phase.

    Raises:
        ValueError: If the state is not in the ROLLING phase
    """
    if state.phase != GamePhase.ROLLING:
        raise ValueError(f"Cannot roll in phase {state.phase.value}")

    new_state = clone_state(state)
    new_state.dice = roll_dice(forced=forced, rng=rng)
    new_state.phase = GamePhase.MOVING
    logger.debug("%s rolled %s", new_state.current_player, new_state.dice.values)
    return new_state


def can_move(state: GameState) -> bool:
    """Check if the current player has any legal move available."""
    return len(get_legal_moves(state)) > 0


def end_turn(state: GameState) -> GameState:
    """End the current turn.

    If a player has borne off everything the game is over and the board is
    left as-is. Otherwise the opponent is to roll.
    """
    new_state = clone_state(state)

    winner = check_winner(new_state)
    if winner is not None:
        new_state.phase = GamePhase.GAME_OVER
        new_state.winner = winner
        new_state.win_type = get_win_type(new_state, winner)
        logger.debug("%s wins (%s)", winner, new_state.win_type.value)
        return new_state

    new_state.current_player = new_state.current_player.opponent()
    new_state.phase = GamePhase.ROLLING
    new_state.dice = None
    return new_state
