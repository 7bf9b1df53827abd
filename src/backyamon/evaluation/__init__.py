"""Position evaluation, computer opponents and agent-vs-agent play."""

from backyamon.evaluation.heuristics import (
    HeuristicWeights,
    evaluate_board,
    count_blots,
    is_past_contact,
)

from backyamon.evaluation.agents import (
    Agent,
    beach_bum,
    selector,
)

from backyamon.evaluation.search import (
    SearchConfig,
    king_tubby,
    search_best_turn,
)

from backyamon.evaluation.self_play import (
    GameResult,
    MatchResult,
    play_game,
    play_match,
    compute_game_statistics,
)

__all__ = [
    # Heuristics
    "HeuristicWeights",
    "evaluate_board",
    "count_blots",
    "is_past_contact",
    # Agents
    "Agent",
    "beach_bum",
    "selector",
    "SearchConfig",
    "king_tubby",
    "search_best_turn",
    # Play
    "GameResult",
    "MatchResult",
    "play_game",
    "play_match",
    "compute_game_statistics",
]
