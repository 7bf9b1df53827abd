"""Command-line entrypoint for backyamon.

Plays games or a match between two computer opponents and prints a summary.

Usage:
    backyamon play --gold selector --red beach-bum --games 10 --seed 42
    backyamon match --gold king-tubby --red selector --length 5
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from backyamon import __version__
from backyamon.core.board import board_to_string
from backyamon.core.types import Player
from backyamon.evaluation.agents import Agent, beach_bum, selector
from backyamon.evaluation.search import SearchConfig, king_tubby
from backyamon.evaluation.self_play import compute_game_statistics, play_game, play_match

AGENT_NAMES = ("beach-bum", "selector", "king-tubby")


def make_agent(name: str, seed: int | None, search_time: float, search_depth: int) -> Agent:
    """Build an agent from its CLI name."""
    if name == "beach-bum":
        return beach_bum(seed=seed)
    if name == "selector":
        return selector()
    if name == "king-tubby":
        return king_tubby(SearchConfig(ply_depth=search_depth, time_limit=search_time))
    raise ValueError(f"Unknown agent: {name}")


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="backyamon",
        description="Backgammon rules engine and computer opponents",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"backyamon {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--gold", choices=AGENT_NAMES, default="selector")
    common.add_argument("--red", choices=AGENT_NAMES, default="beach-bum")
    common.add_argument("--seed", type=int, default=None, help="Seed for dice and random agents")
    common.add_argument("--search-time", type=float, default=1.8, help="King Tubby seconds per turn")
    common.add_argument("--search-depth", type=int, default=2, help="King Tubby depth in turns")
    common.add_argument("--max-turns", type=int, default=1000)

    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", parents=[common], help="Play single games")
    play.add_argument("--games", type=int, default=1)
    play.add_argument("--no-cube", action="store_true", help="Disable the doubling cube")
    play.add_argument("--show-board", action="store_true", help="Print the final board of each game")

    match = subparsers.add_parser("match", parents=[common], help="Play a match")
    match.add_argument("--length", type=int, default=5, help="Points needed to win")

    return parser


def _agents(args: argparse.Namespace) -> tuple[Agent, Agent]:
    red_seed = None if args.seed is None else args.seed + 1
    gold = make_agent(args.gold, args.seed, args.search_time, args.search_depth)
    red = make_agent(args.red, red_seed, args.search_time, args.search_depth)
    return gold, red


def run_play(args: argparse.Namespace) -> int:
    gold, red = _agents(args)
    rng = np.random.default_rng(args.seed)

    results = []
    for game_num in range(1, args.games + 1):
        result = play_game(
            gold,
            red,
            rng=rng,
            max_turns=args.max_turns,
            allow_doubling=not args.no_cube,
        )
        results.append(result)
        outcome = (
            f"{result.winner} wins {result.win_type.value} for {result.points}"
            if result.winner is not None
            else "no winner"
        )
        print(f"Game {game_num}: {outcome} ({result.num_turns} turns)")
        if args.show_board:
            print(board_to_string(result.final_state))

    stats = compute_game_statistics(results)
    print()
    print(f"Gold ({gold.name}) wins: {stats['gold_wins']}/{stats['total_games']}")
    print(f"Red ({red.name}) wins: {stats['red_wins']}/{stats['total_games']}")
    print(f"Gammons: {stats['gammons']}  Backgammons: {stats['backgammons']}")
    print(f"Average turns: {stats['avg_turns']:.1f}")
    return 0


def run_match(args: argparse.Namespace) -> int:
    gold, red = _agents(args)
    rng = np.random.default_rng(args.seed)

    match = play_match(gold, red, args.length, rng=rng, max_turns=args.max_turns)
    for game_num, result in enumerate(match.games, start=1):
        winner = result.winner if result.winner is not None else "nobody"
        print(f"Game {game_num}: {winner} +{result.points}")

    score = match.final_state.match_score
    print()
    print(f"Final score: gold {score[Player.GOLD]} - red {score[Player.RED]}")
    if match.winner is not None:
        print(f"Match winner: {match.winner}")
    else:
        print("Match unfinished")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used by the `backyamon` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        return run_play(args)
    if args.command == "match":
        return run_match(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
