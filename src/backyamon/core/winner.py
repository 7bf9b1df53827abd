"""Winner detection and win-tier scoring."""

from typing import Optional

from backyamon.core.constants import PIECES_PER_PLAYER, home_board_range
from backyamon.core.types import GameState, Player, WinType


def check_winner(state: GameState) -> Optional[Player]:
    """Return the player who has borne off all 15 pieces, if any."""
    for player in (Player.GOLD, Player.RED):
        if state.borne_off[player] == PIECES_PER_PLAYER:
            return player
    return None


def get_win_type(state: GameState, winner: Player) -> WinType:
    """Determine the type of win.

    - NORMAL (1x): loser has borne off at least one piece
    - GAMMON (2x): loser has borne off nothing
    - BACKGAMMON (3x): gammon, and the loser still has a piece on the bar or
      in the winner's home board
    """
    loser = winner.opponent()

    if state.borne_off[loser] > 0:
        return WinType.NORMAL

    if state.bar[loser] > 0:
        return WinType.BACKGAMMON

    for index in home_board_range(winner):
        point = state.points[index]
        if point is not None and point.player == loser:
            return WinType.BACKGAMMON

    return WinType.GAMMON


def get_points_won(win_type: WinType, cube_value: int) -> int:
    """Points scored for a win: tier multiplier x cube value."""
    return win_type.multiplier * cube_value
