"""Core type definitions for the backyamon rules engine.

All game state is plain data. Engine functions never mutate the state they
are given; they clone it first (see ``backyamon.core.board.clone_state``)
and return the new value.

Board indexing:
    Index 0 is point 1 for both players. Gold moves from index 0 toward
    index 23, Red moves from index 23 toward index 0.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


# ==============================================================================
# TAGS
# ==============================================================================

BAR = "bar"
OFF = "off"

PointIndex = int  # 0-23
Source = Union[PointIndex, str]  # point index or BAR
Destination = Union[PointIndex, str]  # point index or OFF


class Player(Enum):
    """Player colors."""
    GOLD = "gold"
    RED = "red"

    def opponent(self) -> "Player":
        """Return the opponent player."""
        return Player.RED if self == Player.GOLD else Player.GOLD

    @property
    def direction(self) -> int:
        """Board direction of travel: +1 for Gold, -1 for Red."""
        return 1 if self == Player.GOLD else -1

    def __str__(self) -> str:
        return self.value


class GamePhase(Enum):
    """Per-turn state machine phases."""
    ROLLING = "ROLLING"
    MOVING = "MOVING"
    DOUBLING = "DOUBLING"
    CHECKING_WIN = "CHECKING_WIN"
    GAME_OVER = "GAME_OVER"


class WinType(Enum):
    """How decisively a game was won."""
    NORMAL = "normal"
    GAMMON = "gammon"
    BACKGAMMON = "backgammon"

    @property
    def multiplier(self) -> int:
        """Points multiplier applied to the cube value."""
        return {WinType.NORMAL: 1, WinType.GAMMON: 2, WinType.BACKGAMMON: 3}[self]


# ==============================================================================
# BOARD AND DICE
# ==============================================================================

@dataclass
class PointState:
    """Occupancy of a single point.

    Attributes:
        player: Owner of every piece on the point
        count: Number of pieces (at least 1)
    """
    player: Player
    count: int

    def __post_init__(self):
        assert self.count >= 1, f"Invalid point count: {self.count}"


Slot = Optional[PointState]


@dataclass
class Dice:
    """A roll and the die values still playable this turn.

    Attributes:
        values: The two faces rolled
        remaining: Playable values (two entries, or four for doubles)
    """
    values: tuple
    remaining: List[int] = field(default_factory=list)

    def __post_init__(self):
        assert len(self.values) == 2, "Dice must have exactly two values"
        assert all(1 <= v <= 6 for v in self.values), f"Invalid dice: {self.values}"

    def copy(self) -> "Dice":
        return Dice(values=tuple(self.values), remaining=list(self.remaining))


@dataclass
class DoublingCube:
    """Doubling cube; ``owner`` is None while the cube is centered."""
    value: int = 1
    owner: Optional[Player] = None

    def __post_init__(self):
        assert self.value >= 1 and self.value & (self.value - 1) == 0, (
            f"Cube value must be a power of two, got {self.value}"
        )


@dataclass(frozen=True)
class Move:
    """One piece moved by one die.

    Attributes:
        from_point: Starting point index (0-23) or BAR
        to_point: Ending point index (0-23) or OFF
    """
    from_point: Source
    to_point: Destination

    def __post_init__(self):
        if self.from_point != BAR:
            assert 0 <= self.from_point <= 23, f"Invalid from_point: {self.from_point}"
        if self.to_point != OFF:
            assert 0 <= self.to_point <= 23, f"Invalid to_point: {self.to_point}"

    def __str__(self) -> str:
        return f"{self.from_point}/{self.to_point}"


# A full turn: up to four single moves, in play order
Turn = List[Move]


def _per_player(value: int = 0) -> Dict[Player, int]:
    return {Player.GOLD: value, Player.RED: value}


# ==============================================================================
# GAME STATE
# ==============================================================================

@dataclass
class GameState:
    """Complete state of one game within a match.

    Attributes:
        points: 24 slots, index 0 = point 1
        bar: Pieces waiting to re-enter, per player
        borne_off: Pieces permanently removed, per player
        current_player: Player whose turn it is
        phase: Current turn phase
        dice: Current roll, None until the mover rolls
        doubling_cube: Cube value and owner
        match_score: Points scored so far in the match, per player
        match_length: Points needed to win the match
        is_crawford: Whether this is the Crawford game (no doubling)
        post_crawford: Whether the Crawford game has already been played
        winner: Winner once the game is over
        win_type: Win tier once the game is over
    """
    points: List[Slot] = field(default_factory=lambda: [None] * 24)
    bar: Dict[Player, int] = field(default_factory=_per_player)
    borne_off: Dict[Player, int] = field(default_factory=_per_player)
    current_player: Player = Player.GOLD
    phase: GamePhase = GamePhase.ROLLING
    dice: Optional[Dice] = None
    doubling_cube: DoublingCube = field(default_factory=DoublingCube)
    match_score: Dict[Player, int] = field(default_factory=_per_player)
    match_length: int = 1
    is_crawford: bool = False
    post_crawford: bool = False
    winner: Optional[Player] = None
    win_type: Optional[WinType] = None

    def __post_init__(self):
        assert len(self.points) == 24, "points must have length 24"
        assert self.match_length >= 1, f"Invalid match length: {self.match_length}"
