"""Tests for agent-vs-agent games and matches."""

import numpy as np
import pytest

from backyamon.core.board import create_initial_state
from backyamon.core.types import GamePhase, Move, Player, WinType
from backyamon.evaluation.agents import Agent, beach_bum
from backyamon.evaluation.self_play import (
    GameResult,
    compute_game_statistics,
    play_game,
    play_match,
)

GOLD = Player.GOLD
RED = Player.RED


def _scripted(select_moves_fn, double=False, accept=True):
    return Agent(
        name="Scripted",
        difficulty="easy",
        select_moves_fn=select_moves_fn,
        should_double_fn=lambda state: double,
        should_accept_fn=lambda state: accept,
    )


class TestPlayGame:
    """Tests for single games."""

    def test_random_game_finishes(self):
        result = play_game(
            beach_bum(seed=1),
            beach_bum(seed=2),
            rng=np.random.default_rng(3),
            allow_doubling=False,
        )

        assert result.winner in (GOLD, RED)
        assert result.final_state.phase == GamePhase.GAME_OVER
        assert result.num_turns == len(result.turns)
        assert result.points == result.win_type.multiplier
        assert result.final_state.borne_off[result.winner] == 15

    def test_turns_alternate(self):
        result = play_game(
            beach_bum(seed=4),
            beach_bum(seed=5),
            rng=np.random.default_rng(6),
            allow_doubling=False,
        )
        players = [turn.player for turn in result.turns]
        assert players[0] == GOLD
        assert all(a != b for a, b in zip(players, players[1:]))

    def test_seeded_games_repeat(self):
        def run():
            return play_game(
                beach_bum(seed=10),
                beach_bum(seed=11),
                rng=np.random.default_rng(12),
            )

        a, b = run(), run()
        assert a.turns == b.turns
        assert a.points == b.points

    def test_declined_double(self):
        """Gold doubles at once and Red drops: Gold wins 1 point."""
        doubler = beach_bum(seed=0, double_rate=1.0)
        dropper = _scripted(lambda state: [], accept=False)

        result = play_game(doubler, dropper, rng=np.random.default_rng(0))

        assert result.num_turns == 0
        assert result.winner == GOLD
        assert result.win_type == WinType.NORMAL
        assert result.points == 1

    def test_accepted_double_raises_stakes(self):
        doubler = beach_bum(seed=0, double_rate=1.0)
        taker = beach_bum(seed=1, double_rate=0.0)

        result = play_game(doubler, taker, rng=np.random.default_rng(0), max_turns=1)

        assert result.final_state.doubling_cube.value == 2
        assert result.final_state.doubling_cube.owner == RED

    def test_no_cube_when_disabled(self):
        doubler = beach_bum(seed=0, double_rate=1.0)
        result = play_game(
            doubler,
            beach_bum(seed=1),
            rng=np.random.default_rng(0),
            max_turns=4,
            allow_doubling=False,
        )
        assert result.final_state.doubling_cube.value == 1

    def test_turn_limit(self):
        result = play_game(
            beach_bum(seed=0),
            beach_bum(seed=1),
            rng=np.random.default_rng(0),
            max_turns=3,
            allow_doubling=False,
        )
        assert result.num_turns == 3
        assert result.winner is None
        assert result.points == 0

    def test_illegal_move_rejected(self):
        cheater = _scripted(lambda state: [Move(0, 23)])
        with pytest.raises(ValueError):
            play_game(cheater, beach_bum(seed=0), rng=np.random.default_rng(0))

    def test_unfinished_turn_rejected(self):
        idler = _scripted(lambda state: [])
        with pytest.raises(ValueError):
            play_game(idler, beach_bum(seed=0), rng=np.random.default_rng(0))

    def test_custom_start_state(self, make_position):
        """Gold bears off its last pieces on the first roll."""
        state = make_position([(23, GOLD, 1), (0, RED, 15)])
        state.borne_off[GOLD] = 14

        result = play_game(
            beach_bum(seed=0),
            beach_bum(seed=1),
            state=state,
            rng=np.random.default_rng(0),
            allow_doubling=False,
        )

        assert result.num_turns == 1
        assert result.winner == GOLD
        assert result.win_type == WinType.GAMMON
        assert result.points == 2


class TestPlayMatch:
    """Tests for matches."""

    def test_match_reaches_length(self):
        match = play_match(
            beach_bum(seed=20, double_rate=0.0),
            beach_bum(seed=21, double_rate=0.0),
            match_length=3,
            rng=np.random.default_rng(22),
        )

        assert match.winner in (GOLD, RED)
        assert match.final_state.match_score[match.winner] >= 3
        assert len(match.games) >= 1
        total = sum(game.points for game in match.games)
        assert total == sum(match.final_state.match_score.values())

    def test_single_point_match(self):
        match = play_match(
            beach_bum(seed=30),
            beach_bum(seed=31),
            match_length=1,
            rng=np.random.default_rng(32),
        )
        assert len(match.games) == 1
        assert match.winner == match.games[0].winner


class TestStatistics:
    """Tests for compute_game_statistics."""

    def _result(self, winner, win_type, points, turns):
        return GameResult(
            final_state=create_initial_state(),
            turns=[],
            num_turns=turns,
            winner=winner,
            win_type=win_type,
            points=points,
        )

    def test_statistics(self):
        games = [
            self._result(GOLD, WinType.NORMAL, 1, 40),
            self._result(GOLD, WinType.GAMMON, 4, 50),
            self._result(RED, WinType.BACKGAMMON, 3, 60),
            self._result(None, None, 0, 10),
        ]
        stats = compute_game_statistics(games)

        assert stats['total_games'] == 4
        assert stats['gold_wins'] == 2
        assert stats['red_wins'] == 1
        assert stats['unfinished'] == 1
        assert stats['gold_win_rate'] == pytest.approx(0.5)
        assert stats['avg_turns'] == pytest.approx(40.0)
        assert stats['gammons'] == 1
        assert stats['backgammons'] == 1
        assert stats['total_points'] == 8

    def test_empty(self):
        stats = compute_game_statistics([])
        assert stats['total_games'] == 0
        assert stats['gold_win_rate'] == 0.0
        assert stats['avg_turns'] == 0.0
