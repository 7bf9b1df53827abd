"""Board construction, copying and queries.

Board Layout (indices; point number = index + 1):

    12 13 14 15 16 17    18 19 20 21 22 23
    +------------------+------------------+
    |                  |                  |  Gold home (18-23)
    |                  |                  |
    |                  |                  |
    |                  |                  |
    |                  |                  |  Red home (0-5)
    +------------------+------------------+
    11 10  9  8  7  6     5  4  3  2  1  0

    Gold moves 0 -> 23 -> off, Red moves 23 -> 0 -> off.
"""

from typing import Hashable, Tuple

import numpy as np
from numpy.typing import NDArray

from backyamon.core.constants import (
    INITIAL_POSITIONS,
    PIECES_PER_PLAYER,
    POINTS_COUNT,
    distance_to_off,
)
from backyamon.core.types import (
    DoublingCube,
    GamePhase,
    GameState,
    Player,
    PointState,
)


# ==============================================================================
# STATE CONSTRUCTION
# ==============================================================================

def create_initial_state(match_length: int = 1) -> GameState:
    """Create the standard backgammon starting position.

    Standard setup:
    - Gold: 2 on point 1, 5 on 12, 3 on 17, 5 on 19
    - Red: 2 on point 24, 5 on 13, 3 on 8, 5 on 6

    Args:
        match_length: Points needed to win the match

    Returns:
        GameState in the ROLLING phase with Gold to move
    """
    state = GameState(match_length=match_length)
    for player, layout in INITIAL_POSITIONS.items():
        for index, count in layout:
            state.points[index] = PointState(player=player, count=count)
    state.phase = GamePhase.ROLLING
    return state


def empty_state() -> GameState:
    """Create a state with no pieces on the board.

    Useful for setting up specific positions.
    """
    return GameState()


def clone_state(state: GameState) -> GameState:
    """Deep copy a state so the copy can be mutated independently."""
    return GameState(
        points=[
            PointState(player=p.player, count=p.count) if p is not None else None
            for p in state.points
        ],
        bar=dict(state.bar),
        borne_off=dict(state.borne_off),
        current_player=state.current_player,
        phase=state.phase,
        dice=state.dice.copy() if state.dice is not None else None,
        doubling_cube=DoublingCube(
            value=state.doubling_cube.value,
            owner=state.doubling_cube.owner,
        ),
        match_score=dict(state.match_score),
        match_length=state.match_length,
        is_crawford=state.is_crawford,
        post_crawford=state.post_crawford,
        winner=state.winner,
        win_type=state.win_type,
    )


# ==============================================================================
# BOARD QUERIES
# ==============================================================================

def pieces_on_points(state: GameState, player: Player) -> int:
    """Count a player's pieces on the 24 points (bar and off excluded)."""
    return sum(
        p.count for p in state.points if p is not None and p.player == player
    )


def total_pieces(state: GameState, player: Player) -> int:
    """Pieces on points + bar + borne off. Always 15 in a legal game."""
    return pieces_on_points(state, player) + state.bar[player] + state.borne_off[player]


def pip_count(state: GameState, player: Player) -> int:
    """Total pips a player needs to bear off every piece.

    Bar pieces count as 25 pips.
    """
    total = 25 * state.bar[player]
    for index, point in enumerate(state.points):
        if point is not None and point.player == player:
            total += distance_to_off(player, index) * point.count
    return total


def position_key(state: GameState) -> Hashable:
    """Hashable key for everything that decides the mover's legal moves."""
    return (
        tuple(
            (p.player, p.count) if p is not None else None for p in state.points
        ),
        state.bar[Player.GOLD],
        state.bar[Player.RED],
        state.current_player,
        tuple(sorted(state.dice.remaining)) if state.dice is not None else None,
    )


def board_array(state: GameState) -> NDArray[np.int32]:
    """Signed piece counts per point: Gold positive, Red negative."""
    arr = np.zeros(POINTS_COUNT, dtype=np.int32)
    for index, point in enumerate(state.points):
        if point is not None:
            arr[index] = point.count if point.player == Player.GOLD else -point.count
    return arr


def is_valid_state(state: GameState) -> Tuple[bool, str]:
    """Validate piece conservation and slot counts.

    Returns:
        (is_valid, error_message) tuple
    """
    for index, point in enumerate(state.points):
        if point is not None and not 1 <= point.count <= PIECES_PER_PLAYER:
            return False, f"Point {index} has {point.count} pieces"

    for player in Player:
        if state.bar[player] < 0 or state.borne_off[player] < 0:
            return False, f"{player} has a negative bar or borne-off count"
        total = total_pieces(state, player)
        if total != PIECES_PER_PLAYER:
            return False, f"{player} has {total} pieces, should have {PIECES_PER_PLAYER}"

    return True, ""


# ==============================================================================
# BOARD DISPLAY (for debugging)
# ==============================================================================

def board_to_string(state: GameState) -> str:
    """Convert a state to a plain-text table."""
    lines = []
    lines.append("=" * 40)
    lines.append(f"Player to move: {state.current_player}  Phase: {state.phase.value}")
    if state.dice is not None:
        lines.append(f"Dice: {state.dice.values}  Remaining: {state.dice.remaining}")
    lines.append(f"Gold pip count: {pip_count(state, Player.GOLD)}")
    lines.append(f"Red pip count: {pip_count(state, Player.RED)}")
    lines.append("")
    lines.append("Point | Gold | Red")
    lines.append("------+------+-----")

    for index, point in enumerate(state.points):
        gold = point.count if point is not None and point.player == Player.GOLD else 0
        red = point.count if point is not None and point.player == Player.RED else 0
        lines.append(f"{index + 1:4d}  |  {gold:2d}  |  {red:2d}")

    lines.append(f"BAR   |  {state.bar[Player.GOLD]:2d}  |  {state.bar[Player.RED]:2d}")
    lines.append(f"OFF   |  {state.borne_off[Player.GOLD]:2d}  |  {state.borne_off[Player.RED]:2d}")
    lines.append("=" * 40)
    return "\n".join(lines)


def print_board(state: GameState) -> None:
    """Print board to console."""
    print(board_to_string(state))
