"""Games and matches between two agents.

This is the host side of the engine: it owns the authoritative state,
rolls the dice, runs cube negotiations, forfeits turns that cannot be
played, and checks every agent move against the constrained-move oracle.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from backyamon.core.board import create_initial_state
from backyamon.core.constrained_moves import get_constrained_moves
from backyamon.core.doubling import (
    accept_double,
    can_offer_double,
    decline_double,
    game_points,
    is_match_over,
    match_winner,
    next_game,
    offer_double,
    record_game_result,
)
from backyamon.core.moves import apply_move
from backyamon.core.turn import end_turn, start_moving
from backyamon.core.types import GamePhase, GameState, Move, Player, WinType
from backyamon.evaluation.agents import Agent

logger = logging.getLogger(__name__)


class TurnRecord(NamedTuple):
    """One played turn."""
    player: Player
    dice: Tuple[int, int]
    moves: List[Move]


@dataclass
class GameResult:
    """Result of a single game.

    Attributes:
        final_state: State when play stopped
        turns: Every turn played, in order
        num_turns: Number of turns played
        winner: Winner, or None if the turn limit was hit
        win_type: Win tier, or None if the turn limit was hit
        points: Points won including the cube
    """
    final_state: GameState
    turns: List[TurnRecord]
    num_turns: int
    winner: Optional[Player] = None
    win_type: Optional[WinType] = None
    points: int = 0


@dataclass
class MatchResult:
    """Result of a match."""
    final_state: GameState
    games: List[GameResult] = field(default_factory=list)
    winner: Optional[Player] = None


def _play_turn(state: GameState, agent: Agent) -> Tuple[GameState, List[Move]]:
    moves = agent.select_moves(state)
    for move in moves:
        if move not in get_constrained_moves(state):
            raise ValueError(f"{agent.name} played illegal move {move}")
        state = apply_move(state, move)
    if get_constrained_moves(state):
        raise ValueError(f"{agent.name} stopped before using every playable die")
    return state, moves


def play_game(
    gold_agent: Agent,
    red_agent: Agent,
    state: Optional[GameState] = None,
    rng: Optional[np.random.Generator] = None,
    max_turns: int = 1000,
    allow_doubling: bool = True,
) -> GameResult:
    """Play a single game between two agents.

    Args:
        gold_agent: Agent playing Gold
        red_agent: Agent playing Red
        state: Starting state (standard opening if None)
        rng: Random number generator for the dice
        max_turns: Turn limit before giving up without a winner
        allow_doubling: Whether agents may use the cube

    Returns:
        GameResult with the turn history

    Raises:
        ValueError: If an agent plays an illegal move
    """
    if rng is None:
        rng = np.random.default_rng()
    if state is None:
        state = create_initial_state()

    agents: Dict[Player, Agent] = {Player.GOLD: gold_agent, Player.RED: red_agent}
    turns: List[TurnRecord] = []

    while state.phase != GamePhase.GAME_OVER and len(turns) < max_turns:
        player = state.current_player
        agent = agents[player]

        if allow_doubling and can_offer_double(state) and agent.should_double(state):
            state = offer_double(state)
            if agents[player.opponent()].should_accept_double(state):
                state = accept_double(state)
            else:
                state = decline_double(state)
                break

        state = start_moving(state, rng=rng)
        dice = state.dice.values
        state, moves = _play_turn(state, agent)
        if not moves:
            logger.debug("%s cannot play %s, turn forfeited", player, dice)
        turns.append(TurnRecord(player=player, dice=dice, moves=moves))
        state = end_turn(state)

    result = GameResult(
        final_state=state,
        turns=turns,
        num_turns=len(turns),
        winner=state.winner,
        win_type=state.win_type,
        points=game_points(state),
    )
    if result.winner is None:
        logger.warning("Game stopped after %d turns without a winner", len(turns))
    else:
        logger.info(
            "%s (%s) beat %s: %s for %d point(s) in %d turns",
            agents[result.winner].name,
            result.winner,
            agents[result.winner.opponent()].name,
            result.win_type.value,
            result.points,
            result.num_turns,
        )
    return result


def play_match(
    gold_agent: Agent,
    red_agent: Agent,
    match_length: int,
    rng: Optional[np.random.Generator] = None,
    max_turns: int = 1000,
) -> MatchResult:
    """Play games until one agent reaches ``match_length`` points.

    Stops early if a game hits the turn limit.
    """
    if rng is None:
        rng = np.random.default_rng()

    state = create_initial_state(match_length=match_length)
    match = MatchResult(final_state=state)

    while True:
        result = play_game(gold_agent, red_agent, state=state, rng=rng, max_turns=max_turns)
        match.games.append(result)
        if result.winner is None:
            match.final_state = result.final_state
            break

        scored = record_game_result(result.final_state)
        match.final_state = scored
        if is_match_over(scored):
            break
        state = next_game(scored)

    match.winner = match_winner(match.final_state)
    return match


def compute_game_statistics(games: List[GameResult]) -> dict:
    """Compute statistics from a batch of games.

    Args:
        games: List of game results

    Returns:
        Dictionary of statistics
    """
    total_games = len(games)
    gold_wins = sum(1 for g in games if g.winner == Player.GOLD)
    red_wins = sum(1 for g in games if g.winner == Player.RED)
    unfinished = sum(1 for g in games if g.winner is None)

    avg_turns = float(np.mean([g.num_turns for g in games])) if games else 0.0

    gammons = sum(1 for g in games if g.win_type == WinType.GAMMON)
    backgammons = sum(1 for g in games if g.win_type == WinType.BACKGAMMON)

    return {
        'total_games': total_games,
        'gold_wins': gold_wins,
        'red_wins': red_wins,
        'unfinished': unfinished,
        'gold_win_rate': gold_wins / total_games if total_games > 0 else 0.0,
        'avg_turns': avg_turns,
        'gammons': gammons,
        'backgammons': backgammons,
        'total_points': sum(g.points for g in games),
    }
