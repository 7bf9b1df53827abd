"""
Backyamon - a backgammon rules engine with computer opponents.
"""

__version__ = "0.1.0"

# Core exports
from backyamon.core.types import (
    GamePhase,
    GameState,
    Move,
    Player,
    WinType,
)

__all__ = [
    "GamePhase",
    "GameState",
    "Move",
    "Player",
    "WinType",
]
