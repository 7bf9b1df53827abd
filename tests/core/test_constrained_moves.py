"""Tests for the legal next-move set."""

from backyamon.core.constrained_moves import get_constrained_moves
from backyamon.core.dice import roll_dice
from backyamon.core.moves import apply_move, get_legal_moves
from backyamon.core.turn_generator import get_all_legal_turns
from backyamon.core.types import GamePhase, Move, Player

GOLD = Player.GOLD
RED = Player.RED


class TestGetConstrainedMoves:
    """Tests for constrained first moves."""

    def test_higher_die_example(self, make_position):
        """0-2 and 0-5 are both legal singly; only 0-5 survives."""
        state = make_position([(0, GOLD, 1), (7, RED, 2)], dice=(5, 2))
        assert set(get_legal_moves(state)) == {Move(0, 5), Move(0, 2)}
        assert get_constrained_moves(state) == [Move(0, 5)]

    def test_either_die_first(self, make_position):
        state = make_position([(0, GOLD, 1)], dice=(3, 1))
        assert get_constrained_moves(state) == [Move(0, 3), Move(0, 1)]

    def test_move_that_strands_a_die_is_excluded(self, make_position):
        state = make_position(
            [(0, GOLD, 1), (22, GOLD, 1), (6, RED, 2)],
            dice=(6, 1),
        )
        assert Move(22, 23) in get_legal_moves(state)
        assert get_constrained_moves(state) == [Move(0, 1)]

    def test_empty_when_roll_unplayable(self, make_position):
        state = make_position([(2, RED, 2), (4, RED, 2)], dice=(3, 5))
        state.bar[GOLD] = 1
        assert get_constrained_moves(state) == []

    def test_subset_of_legal_moves(self, initial_state):
        state = initial_state
        state.dice = roll_dice(forced=(6, 5))
        state.phase = GamePhase.MOVING

        constrained = get_constrained_moves(state)
        legal = get_legal_moves(state)

        assert constrained
        assert len(constrained) == len(set(constrained))
        assert set(constrained) <= set(legal)

    def test_matches_first_moves_of_turns(self, initial_state):
        state = initial_state
        state.dice = roll_dice(forced=(4, 2))
        state.phase = GamePhase.MOVING

        first_moves = {turn[0] for turn in get_all_legal_turns(state)}
        assert set(get_constrained_moves(state)) == first_moves

    def test_stepwise_play_completes_a_turn(self, initial_state):
        """Repeatedly applying a constrained move uses every die."""
        state = initial_state
        state.dice = roll_dice(forced=(2, 2))
        state.phase = GamePhase.MOVING

        played = 0
        while True:
            moves = get_constrained_moves(state)
            if not moves:
                break
            state = apply_move(state, moves[0])
            played += 1

        assert played == 4
        assert state.dice.remaining == []
