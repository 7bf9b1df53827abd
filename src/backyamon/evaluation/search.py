"""Lookahead search for the hard computer opponent (King Tubby).

Implements depth-limited expectiminimax over dice rolls:
- Decision nodes: the side to move picks its best (or, for the opponent,
  our worst) full turn.
- Chance nodes: average over the 21 distinct rolls weighted by probability.
- Leaves: ``evaluate_board`` from the searching player's perspective.

A wall-clock budget bounds the search; when it runs out the remaining
nodes are scored statically and the best turn found so far is returned.

Terminology:
- 1-ply: pick the turn whose resulting position scores best.
- 2-ply: for each candidate turn, average the opponent's best reply over
  every roll.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from backyamon.core.dice import ALL_DICE_ROLLS, DICE_PROBABILITIES
from backyamon.core.turn import end_turn, start_moving
from backyamon.core.types import GamePhase, GameState, Move, Player, Turn
from backyamon.evaluation.agents import Agent, playable_turns, result_of_turn
from backyamon.evaluation.heuristics import HeuristicWeights, evaluate_board

logger = logging.getLogger(__name__)

WIN_SCORE = 10_000.0


@dataclass
class SearchConfig:
    """Configuration for lookahead search.

    Attributes:
        ply_depth: Search depth in turns (1 = greedy, 2 = one opponent reply)
        time_limit: Seconds allowed per decision
        prune_to_top_k: Only search the k best turns (by static score) at
            each decision node; None searches every turn
        double_threshold: Double when the mover's score exceeds this
        take_threshold: Take when the taker's score exceeds this
    """
    ply_depth: int = 2
    time_limit: float = 1.8
    prune_to_top_k: Optional[int] = None
    double_threshold: float = 40.0
    take_threshold: float = -60.0

    def __post_init__(self):
        assert self.ply_depth >= 1, f"ply_depth must be >= 1, got {self.ply_depth}"
        assert self.time_limit > 0, f"time_limit must be positive, got {self.time_limit}"


class _Search:
    """One decision's search: perspective, weights and deadline."""

    def __init__(self, config: SearchConfig, weights: Optional[HeuristicWeights], perspective: Player):
        self.config = config
        self.weights = weights
        self.perspective = perspective
        self.deadline = time.perf_counter() + config.time_limit
        self.nodes = 0

    def out_of_time(self) -> bool:
        return time.perf_counter() > self.deadline

    def static(self, state: GameState) -> float:
        self.nodes += 1
        return evaluate_board(state, self.perspective, self.weights)

    def terminal(self, state: GameState) -> float:
        return WIN_SCORE if state.winner == self.perspective else -WIN_SCORE

    def ordered(self, state: GameState, turns: List[Turn]) -> List[Turn]:
        """Order turns best-first for the side to move and apply top-k."""
        k = self.config.prune_to_top_k
        if k is None or len(turns) <= k:
            return turns
        sign = 1.0 if state.current_player == self.perspective else -1.0
        scored = sorted(
            turns,
            key=lambda turn: sign * self.static(result_of_turn(state, turn)),
            reverse=True,
        )
        return scored[:k]

    def after_turn(self, state: GameState, turn: Turn, depth: int) -> float:
        """Value of the position once ``turn`` is played and the turn ends."""
        next_state = end_turn(result_of_turn(state, turn))
        if next_state.phase == GamePhase.GAME_OVER:
            return self.terminal(next_state)
        if depth <= 1 or self.out_of_time():
            return self.static(next_state)
        return self.chance(next_state, depth - 1)

    def chance(self, state: GameState, depth: int) -> float:
        """Expected value over every roll for the side to move."""
        total = 0.0
        total_weight = 0.0
        maximizing = state.current_player == self.perspective

        for roll in ALL_DICE_ROLLS:
            if self.out_of_time():
                break
            weight = DICE_PROBABILITIES[roll]
            rolled = start_moving(state, forced=roll)
            turns = playable_turns(rolled)

            if not turns:
                total += weight * self.static(state)
                total_weight += weight
                continue

            best = float("-inf") if maximizing else float("inf")
            for turn in self.ordered(rolled, turns):
                value = self.after_turn(rolled, turn, depth)
                best = max(best, value) if maximizing else min(best, value)
                if self.out_of_time():
                    break
            total += weight * best
            total_weight += weight

        if total_weight == 0:
            return self.static(state)
        return total / total_weight


def search_best_turn(
    state: GameState,
    config: Optional[SearchConfig] = None,
    weights: Optional[HeuristicWeights] = None,
) -> List[Move]:
    """Find the best full turn for the current player.

    Args:
        state: State in the MOVING phase (not modified)
        config: Search configuration (defaults if None)
        weights: Heuristic weights (defaults if None)

    Returns:
        Best turn found, or an empty list when the roll cannot be played
    """
    if config is None:
        config = SearchConfig()

    turns = playable_turns(state)
    if not turns:
        return []
    if len(turns) == 1:
        return turns[0]

    search = _Search(config, weights, state.current_player)
    best_turn = turns[0]
    best_score = float("-inf")

    for turn in search.ordered(state, turns):
        if search.out_of_time():
            break
        score = search.after_turn(state, turn, config.ply_depth)
        if score > best_score:
            best_score = score
            best_turn = turn
        if best_score >= WIN_SCORE:
            break

    logger.debug(
        "Searched %d turns, %d leaf evaluations, best score %.1f",
        len(turns), search.nodes, best_score,
    )
    return best_turn


def king_tubby(
    config: Optional[SearchConfig] = None,
    weights: Optional[HeuristicWeights] = None,
) -> Agent:
    """Create the expectiminimax agent.

    Args:
        config: Search configuration (defaults if None)
        weights: Heuristic weights (defaults if None)

    Returns:
        King Tubby agent
    """
    if config is None:
        config = SearchConfig()

    def double_when_ahead(state: GameState) -> bool:
        return evaluate_board(state, state.current_player, weights) > config.double_threshold

    def take_unless_far_behind(state: GameState) -> bool:
        return evaluate_board(state, state.current_player.opponent(), weights) > config.take_threshold

    return Agent(
        name="King Tubby",
        difficulty="hard",
        select_moves_fn=lambda state: search_best_turn(state, config, weights),
        should_double_fn=double_when_ahead,
        should_accept_fn=take_unless_far_behind,
    )
