"""Hand-tuned position evaluation used by the computer opponents.

Scores are from one player's perspective; higher is better for that player.
Every term is mirrored for the opponent so a symmetric position scores the
same from either side.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from backyamon.core.board import board_array, pip_count
from backyamon.core.constants import home_board_range
from backyamon.core.types import GameState, Player


@dataclass
class HeuristicWeights:
    """Weights for ``evaluate_board``.

    Attributes:
        made_point: Bonus per point holding 2+ own pieces
        blot: Penalty per point holding a single own piece
        home_piece: Bonus per own piece in the home board
        bar_piece: Penalty per own piece on the bar
        borne_off: Bonus per own piece borne off
        pip_lead: Bonus per pip of race lead
    """
    made_point: float = 10.0
    blot: float = 15.0
    home_piece: float = 5.0
    bar_piece: float = 20.0
    borne_off: float = 10.0
    pip_lead: float = 3.0


def _own_and_opponent(state: GameState, player: Player):
    signed = board_array(state)
    if player == Player.RED:
        signed = -signed
    own = np.where(signed > 0, signed, 0)
    opp = np.where(signed < 0, -signed, 0)
    return own, opp


def _home_mask(player: Player) -> NDArray[np.bool_]:
    mask = np.zeros(24, dtype=bool)
    mask[list(home_board_range(player))] = True
    return mask


def evaluate_board(
    state: GameState,
    player: Player,
    weights: Optional[HeuristicWeights] = None,
) -> float:
    """Evaluate a position from ``player``'s perspective.

    Args:
        state: Position to score
        player: Perspective
        weights: Term weights (defaults if None)

    Returns:
        Heuristic score, positive when ``player`` is better placed
    """
    if weights is None:
        weights = HeuristicWeights()

    opponent = player.opponent()
    own, opp = _own_and_opponent(state, player)
    home = _home_mask(player)

    score = 0.0
    score += weights.made_point * (np.count_nonzero(own >= 2) - np.count_nonzero(opp >= 2))
    score -= weights.blot * (np.count_nonzero(own == 1) - np.count_nonzero(opp == 1))
    score += weights.home_piece * (int(own[home].sum()) - int(opp[home].sum()))
    score -= weights.bar_piece * (state.bar[player] - state.bar[opponent])
    score += weights.borne_off * (state.borne_off[player] - state.borne_off[opponent])
    score += weights.pip_lead * (pip_count(state, opponent) - pip_count(state, player))

    return float(score)


def count_blots(state: GameState, player: Player) -> int:
    """Count points holding exactly one of the player's pieces."""
    own, _ = _own_and_opponent(state, player)
    return int(np.count_nonzero(own == 1))


def is_past_contact(state: GameState, player: Player) -> bool:
    """Check if every piece of ``player`` has passed every opposing piece.

    Bar pieces on either side mean contact is still possible.
    """
    opponent = player.opponent()
    if state.bar[player] > 0 or state.bar[opponent] > 0:
        return False

    own, opp = _own_and_opponent(state, player)
    own_idx = np.flatnonzero(own)
    opp_idx = np.flatnonzero(opp)
    if own_idx.size == 0 or opp_idx.size == 0:
        return True

    if player == Player.GOLD:
        return bool(own_idx.min() > opp_idx.max())
    return bool(own_idx.max() < opp_idx.min())
