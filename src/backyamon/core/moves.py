"""Single-move legality and move application.

A move displaces one piece by one die. ``get_legal_moves`` lists every
single move playable with some remaining die; ``apply_move`` returns a new
state with the move made and the die consumed. Multi-move turn rules live
in ``turn_generator`` and ``constrained_moves``.
"""

from typing import List, Optional

from backyamon.core.bearing_off import can_bear_off, get_bear_off_moves
from backyamon.core.board import clone_state
from backyamon.core.constants import POINTS_COUNT, distance_to_off
from backyamon.core.types import (
    BAR,
    OFF,
    GameState,
    Move,
    Player,
    PointState,
    Slot,
    Source,
)


def get_target_index(from_point: Source, die: int, player: Player) -> int:
    """Get the landing index for a piece moved by ``die``.

    Gold enters from the bar at ``die - 1``, Red at ``24 - die``. The result
    may fall off the board (< 0 or > 23); callers check the range.
    """
    if from_point == BAR:
        return die - 1 if player == Player.GOLD else POINTS_COUNT - die
    return from_point + die * player.direction


def is_point_open(point: Slot, player: Player) -> bool:
    """Check if a player can land on a point.

    You can land on a point if it is empty, you own it, or the opponent has
    exactly one piece there (a blot, which gets hit).
    """
    if point is None:
        return True
    if point.player == player:
        return True
    return point.count <= 1


def _on_board(index: int) -> bool:
    return 0 <= index < POINTS_COUNT


def get_legal_moves(state: GameState) -> List[Move]:
    """List single moves playable with any remaining die.

    Duplicate die values are collapsed, and each move is listed once. While
    the mover has a piece on the bar only bar entries are produced.

    Args:
        state: Current state

    Returns:
        Legal single moves, empty if dice are unset or used up
    """
    dice = state.dice
    if dice is None or not dice.remaining:
        return []

    player = state.current_player
    has_bar = state.bar[player] > 0
    bearing_off = not has_bar and can_bear_off(state, player)
    moves = []

    for die in dict.fromkeys(dice.remaining):
        if has_bar:
            target = get_target_index(BAR, die, player)
            if _on_board(target) and is_point_open(state.points[target], player):
                moves.append(Move(BAR, target))
            continue

        for index, point in enumerate(state.points):
            if point is None or point.player != player:
                continue
            target = get_target_index(index, die, player)
            if _on_board(target) and is_point_open(state.points[target], player):
                moves.append(Move(index, target))

        if bearing_off:
            # A higher-die bear-off can repeat another die's exact one
            for move in get_bear_off_moves(state, player, die):
                if move not in moves:
                    moves.append(move)

    return moves


def die_used_for_move(state: GameState, move: Move) -> int:
    """Determine which die face a move needs.

    For bear-off this is the exact distance; ``apply_move`` may consume a
    larger die when the exact one is not available.
    """
    player = state.current_player
    if move.from_point == BAR:
        return move.to_point + 1 if player == Player.GOLD else POINTS_COUNT - move.to_point
    if move.to_point == OFF:
        return distance_to_off(player, move.from_point)
    return abs(move.to_point - move.from_point)


def _pick_die(remaining: List[int], needed: int, allow_higher: bool) -> Optional[int]:
    if needed in remaining:
        return needed
    if allow_higher:
        higher = [d for d in remaining if d > needed]
        if higher:
            return min(higher)
    return None


def die_consumed_by_move(state: GameState, move: Move) -> Optional[int]:
    """The remaining die ``apply_move`` would spend on ``move``.

    Bear-off prefers the exact die and falls back to the smallest larger one.
    """
    if state.dice is None:
        return None
    return _pick_die(
        state.dice.remaining,
        die_used_for_move(state, move),
        allow_higher=move.to_point == OFF,
    )


def apply_move(state: GameState, move: Move) -> GameState:
    """Apply a single move and return the new state.

    The move must come from ``get_legal_moves`` (or the constrained set) for
    ``state``; anything else is a caller error.

    Args:
        state: State before the move (not modified)
        move: Move to make

    Returns:
        New state with the piece moved, any blot hit, and the die consumed
    """
    new_state = clone_state(state)
    player = new_state.current_player
    opponent = player.opponent()

    # Remove piece from source
    if move.from_point == BAR:
        assert new_state.bar[player] > 0, f"{player} has no piece on the bar"
        new_state.bar[player] -= 1
    else:
        source = new_state.points[move.from_point]
        assert source is not None and source.player == player, (
            f"{player} has no piece on index {move.from_point}"
        )
        source.count -= 1
        if source.count == 0:
            new_state.points[move.from_point] = None

    # Place piece on target
    if move.to_point == OFF:
        new_state.borne_off[player] += 1
    else:
        target = new_state.points[move.to_point]
        if target is not None and target.player == opponent:
            new_state.bar[opponent] += 1
            new_state.points[move.to_point] = PointState(player=player, count=1)
        elif target is not None:
            target.count += 1
        else:
            new_state.points[move.to_point] = PointState(player=player, count=1)

    die = die_consumed_by_move(state, move)
    if die is not None:
        new_state.dice.remaining.remove(die)

    return new_state
