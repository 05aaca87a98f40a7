"""
Game sessions on top of the core puzzle model.
"""

from npuzzle.game.puzzle_game import Move, PuzzleGame
from npuzzle.game.statistics import GameStatistics

__all__ = [
    "PuzzleGame",
    "Move",
    "GameStatistics",
]
