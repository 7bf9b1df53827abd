"""Computer opponents.

This module provides the agent interface and the two lighter opponents:
- Beach Bum (easy): plays a uniformly random legal turn
- Selector (medium): plays the turn with the best heuristic score

The search-based opponent lives in ``backyamon.evaluation.search``.

Agents choose whole turns. ``select_moves`` returns the moves to apply in
order, or an empty list when the roll cannot be played.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from backyamon.core.moves import apply_move
from backyamon.core.turn_generator import get_all_legal_turns
from backyamon.core.types import GameState, Move, Turn
from backyamon.evaluation.heuristics import HeuristicWeights, evaluate_board


# ==============================================================================
# AGENT BASE CLASS
# ==============================================================================


@dataclass
class Agent:
    """A computer opponent.

    Attributes:
        name: Display name
        difficulty: "easy", "medium" or "hard"
        select_moves_fn: Picks a full turn for a MOVING state
        should_double_fn: Decides whether to offer a double before rolling
        should_accept_fn: Decides whether to take a pending double
    """
    name: str
    difficulty: str
    select_moves_fn: Callable[[GameState], List[Move]]
    should_double_fn: Callable[[GameState], bool]
    should_accept_fn: Callable[[GameState], bool]

    def select_moves(self, state: GameState) -> List[Move]:
        """Select the moves to play this turn, in order."""
        return self.select_moves_fn(state)

    def should_double(self, state: GameState) -> bool:
        """Whether the current player should offer a double."""
        return self.should_double_fn(state)

    def should_accept_double(self, state: GameState) -> bool:
        """Whether the opponent of the current player should take."""
        return self.should_accept_fn(state)


def playable_turns(state: GameState) -> List[Turn]:
    """All legal turns, or an empty list when nothing can be played."""
    turns = get_all_legal_turns(state)
    if turns == [[]]:
        return []
    return turns


def result_of_turn(state: GameState, turn: Turn) -> GameState:
    """Apply every move of a turn in order."""
    for move in turn:
        state = apply_move(state, move)
    return state


# ==============================================================================
# BEACH BUM (EASY)
# ==============================================================================


def beach_bum(seed: Optional[int] = None, double_rate: float = 0.1) -> Agent:
    """Create an agent that picks a random legal turn.

    It doubles at random about ``double_rate`` of the time and always takes.

    Args:
        seed: Random seed (optional, for reproducibility)
        double_rate: Probability of offering a double when allowed

    Returns:
        Beach Bum agent
    """
    rng = np.random.default_rng(seed)

    def select_random_turn(state: GameState) -> List[Move]:
        turns = playable_turns(state)
        if not turns:
            return []
        return turns[int(rng.integers(0, len(turns)))]

    def random_double(state: GameState) -> bool:
        return bool(rng.random() < double_rate)

    return Agent(
        name="Beach Bum",
        difficulty="easy",
        select_moves_fn=select_random_turn,
        should_double_fn=random_double,
        should_accept_fn=lambda state: True,
    )


# ==============================================================================
# SELECTOR (MEDIUM)
# ==============================================================================


def selector(
    weights: Optional[HeuristicWeights] = None,
    double_threshold: float = 50.0,
    take_threshold: float = -80.0,
) -> Agent:
    """Create an agent that plays the best-scoring turn.

    Each legal turn is applied and the resulting position scored with
    ``evaluate_board`` from the mover's perspective. Ties keep the first
    turn found.

    Args:
        weights: Heuristic weights (defaults if None)
        double_threshold: Double when the mover's score exceeds this
        take_threshold: Take when the taker's score exceeds this

    Returns:
        Selector agent
    """
    def select_best_turn(state: GameState) -> List[Move]:
        turns = playable_turns(state)
        if not turns:
            return []

        best_turn = turns[0]
        best_score = float("-inf")
        for turn in turns:
            score = evaluate_board(result_of_turn(state, turn), state.current_player, weights)
            if score > best_score:
                best_score = score
                best_turn = turn
        return best_turn

    def double_when_ahead(state: GameState) -> bool:
        return evaluate_board(state, state.current_player, weights) > double_threshold

    def take_unless_far_behind(state: GameState) -> bool:
        return evaluate_board(state, state.current_player.opponent(), weights) > take_threshold

    return Agent(
        name="Selector",
        difficulty="medium",
        select_moves_fn=select_best_turn,
        should_double_fn=double_when_ahead,
        should_accept_fn=take_unless_far_behind,
    )
