"""Board geometry and the standard starting layout."""

from typing import Dict, List, Tuple

from backyamon.core.types import Player

PIECES_PER_PLAYER = 15
POINTS_COUNT = 24

# (index, count) per player. Gold moves index 0 -> 23, Red moves 23 -> 0.
INITIAL_POSITIONS: Dict[Player, List[Tuple[int, int]]] = {
    Player.GOLD: [(0, 2), (11, 5), (16, 3), (18, 5)],
    Player.RED: [(23, 2), (12, 5), (7, 3), (5, 5)],
}

# Home boards, inclusive index ranges
HOME_BOARD_START: Dict[Player, int] = {
    Player.GOLD: 18,
    Player.RED: 0,
}
HOME_BOARD_END: Dict[Player, int] = {
    Player.GOLD: 23,
    Player.RED: 5,
}


def home_board_range(player: Player) -> range:
    """Indices of a player's home board, from the far edge toward bear-off."""
    if player == Player.GOLD:
        return range(HOME_BOARD_START[player], HOME_BOARD_END[player] + 1)
    return range(HOME_BOARD_END[player], HOME_BOARD_START[player] - 1, -1)


def distance_to_off(player: Player, index: int) -> int:
    """Pips a piece on ``index`` needs to bear off exactly."""
    if player == Player.GOLD:
        return POINTS_COUNT - index
    return index + 1
