"""Core game logic and data structures."""

from backyamon.core.types import (
    BAR,
    OFF,
    Dice,
    DoublingCube,
    GamePhase,
    GameState,
    Move,
    Player,
    PointState,
    WinType,
)
from backyamon.core.dice import roll_dice
from backyamon.core.board import clone_state, create_initial_state
from backyamon.core.moves import apply_move, get_legal_moves
from backyamon.core.constrained_moves import get_constrained_moves
from backyamon.core.turn_generator import get_all_legal_turns
from backyamon.core.turn import can_move, end_turn, start_moving
from backyamon.core.winner import check_winner, get_win_type

__all__ = [
    "BAR",
    "OFF",
    "Dice",
    "DoublingCube",
    "GamePhase",
    "GameState",
    "Move",
    "Player",
    "PointState",
    "WinType",
    "roll_dice",
    "clone_state",
    "create_initial_state",
    "apply_move",
    "get_legal_moves",
    "get_constrained_moves",
    "get_all_legal_turns",
    "can_move",
    "end_turn",
    "start_moving",
    "check_winner",
    "get_win_type",
]
