"""Bearing off: eligibility and which piece a die may remove.

Rules:
- A player may bear off only when no piece is on the bar and every piece on
  the board sits in their home board.
- Exact die: the piece whose distance to the edge equals the die may leave.
- Higher die: a die larger than every occupied distance may remove the
  farthest-back piece, and only that piece.
"""

from typing import List

from backyamon.core.constants import (
    HOME_BOARD_END,
    HOME_BOARD_START,
    POINTS_COUNT,
    distance_to_off,
    home_board_range,
)
from backyamon.core.types import OFF, GameState, Move, Player


def can_bear_off(state: GameState, player: Player) -> bool:
    """Check if a player can bear off pieces.

    Borne-off pieces do not matter; only bar and off-home pieces block.

    Args:
        state: Current state
        player: Which player

    Returns:
        True if player can bear off
    """
    if state.bar[player] > 0:
        return False

    low = min(HOME_BOARD_START[player], HOME_BOARD_END[player])
    high = max(HOME_BOARD_START[player], HOME_BOARD_END[player])
    for index in range(POINTS_COUNT):
        if low <= index <= high:
            continue
        point = state.points[index]
        if point is not None and point.player == player:
            return False

    return True


def _farthest_back(state: GameState, player: Player) -> int:
    """Index of the player's home piece farthest from the edge, or -1."""
    for index in home_board_range(player):
        point = state.points[index]
        if point is not None and point.player == player:
            return index
    return -1


def get_bear_off_moves(state: GameState, player: Player, die: int) -> List[Move]:
    """Get bear-off moves for a player given a single die value.

    Does not check ``can_bear_off``; callers gate on it.

    Args:
        state: Current state
        player: Player bearing off
        die: Die value (1-6)

    Returns:
        Zero, one or two bear-off moves
    """
    moves = []
    home = home_board_range(player)

    exact_index = POINTS_COUNT - die if player == Player.GOLD else die - 1
    exact_point = state.points[exact_index] if exact_index in home else None
    if exact_point is not None and exact_point.player == player:
        moves.append(Move(exact_index, OFF))

    farthest = _farthest_back(state, player)
    if (
        farthest != -1
        and farthest != exact_index
        and die > distance_to_off(player, farthest)
    ):
        moves.append(Move(farthest, OFF))

    return moves
