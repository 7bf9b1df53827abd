"""Doubling cube and match play.

The cube is negotiated before the mover rolls:

    ROLLING --offer_double--> DOUBLING --accept_double--> ROLLING
                                       \\-decline_double--> GAME_OVER

Match scoring follows the Crawford rule: the game right after a player first
reaches match point minus one is played without the cube, and every later
game is post-Crawford (cube allowed again, no further Crawford game).
"""

import logging
from typing import Optional

from backyamon.core.board import clone_state, create_initial_state
from backyamon.core.types import GamePhase, GameState, Player, WinType
from backyamon.core.winner import get_points_won

logger = logging.getLogger(__name__)

MAX_CUBE_VALUE = 64


# ==============================================================================
# CUBE ACTIONS
# ==============================================================================

def can_offer_double(state: GameState) -> bool:
    """Check if the current player may offer a double.

    A player may double only before rolling, outside the Crawford game,
    when the cube is centered or theirs, and below the maximum cube value.
    """
    if state.phase != GamePhase.ROLLING:
        return False
    if state.is_crawford:
        return False
    if state.doubling_cube.value >= MAX_CUBE_VALUE:
        return False
    owner = state.doubling_cube.owner
    return owner is None or owner == state.current_player


def offer_double(state: GameState) -> GameState:
    """Offer a double; the opponent must now accept or decline.

    Raises:
        ValueError: If the current player cannot double
    """
    if not can_offer_double(state):
        raise ValueError(
            f"{state.current_player} cannot double: phase={state.phase.value}, "
            f"cube={state.doubling_cube.value}, owner={state.doubling_cube.owner}"
        )
    new_state = clone_state(state)
    new_state.phase = GamePhase.DOUBLING
    return new_state


def _require_doubling(state: GameState) -> None:
    if state.phase != GamePhase.DOUBLING:
        raise ValueError(f"No double is pending (phase {state.phase.value})")


def accept_double(state: GameState) -> GameState:
    """Accept the pending double.

    The cube value doubles and the accepting player (the opponent of the
    offerer) takes ownership. Play resumes with the offerer rolling.
    """
    _require_doubling(state)
    new_state = clone_state(state)
    new_state.doubling_cube.value *= 2
    new_state.doubling_cube.owner = new_state.current_player.opponent()
    new_state.phase = GamePhase.ROLLING
    logger.debug("Double accepted, cube now %d", new_state.doubling_cube.value)
    return new_state


def decline_double(state: GameState) -> GameState:
    """Decline the pending double.

    The offerer wins a normal game at the current (pre-double) cube value.
    """
    _require_doubling(state)
    new_state = clone_state(state)
    new_state.phase = GamePhase.GAME_OVER
    new_state.winner = new_state.current_player
    new_state.win_type = WinType.NORMAL
    logger.debug("Double declined, %s wins", new_state.winner)
    return new_state


# ==============================================================================
# MATCH PLAY
# ==============================================================================

def game_points(state: GameState) -> int:
    """Points the finished game is worth, cube included."""
    if state.winner is None or state.win_type is None:
        return 0
    return get_points_won(state.win_type, state.doubling_cube.value)


def record_game_result(state: GameState) -> GameState:
    """Add a finished game's points to the match score.

    Also handles Crawford rule transitions for the next game.

    Raises:
        ValueError: If the game is not over
    """
    if state.phase != GamePhase.GAME_OVER or state.winner is None:
        raise ValueError("Cannot score a game that is not over")

    new_state = clone_state(state)
    old_score = state.match_score
    new_state.match_score[state.winner] += game_points(state)

    match_point = state.match_length - 1
    if state.is_crawford:
        new_state.is_crawford = False
        new_state.post_crawford = True
    elif not state.post_crawford and match_point > 0:
        new_state.is_crawford = any(
            old_score[p] < match_point and new_state.match_score[p] == match_point
            for p in Player
        )

    logger.debug(
        "Match score gold=%d red=%d (crawford=%s)",
        new_state.match_score[Player.GOLD],
        new_state.match_score[Player.RED],
        new_state.is_crawford,
    )
    return new_state


def is_match_over(state: GameState) -> bool:
    """Check if either player has reached the match length."""
    return match_winner(state) is not None


def match_winner(state: GameState) -> Optional[Player]:
    """Get the match winner, or None if the match is not over."""
    for player in (Player.GOLD, Player.RED):
        if state.match_score[player] >= state.match_length:
            return player
    return None


def next_game(state: GameState, first_player: Player = Player.GOLD) -> GameState:
    """Start the next game of a match, carrying score and Crawford flags.

    Raises:
        ValueError: If the match is already over
    """
    if is_match_over(state):
        raise ValueError("Match is already over")
    new_state = create_initial_state(match_length=state.match_length)
    new_state.match_score = dict(state.match_score)
    new_state.is_crawford = state.is_crawford
    new_state.post_crawford = state.post_crawford
    new_state.current_player = first_player
    return new_state
