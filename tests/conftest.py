"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from backyamon.core.board import create_initial_state, empty_state
from backyamon.core.dice import roll_dice
from backyamon.core.types import GamePhase, PointState


@pytest.fixture
def rng():
    """Create a seeded NumPy generator for testing."""
    return np.random.default_rng(42)


@pytest.fixture
def initial_state():
    """Standard opening position, Gold to roll."""
    return create_initial_state()


@pytest.fixture
def make_position():
    """Build a MOVING-phase state from (index, player, count) triples."""
    def _make(pieces, dice=None, player=None):
        state = empty_state()
        for index, owner, count in pieces:
            state.points[index] = PointState(player=owner, count=count)
        if player is not None:
            state.current_player = player
        if dice is not None:
            state.dice = roll_dice(forced=dice)
            state.phase = GamePhase.MOVING
        return state
    return _make
