"""
npuzzle: the generalized N-puzzle

An in-memory sliding-tile board for any number of tiles: construction from
sizes, configurations or random draws, legal move application, and
puzzle-theoretic queries (solved state, move legality and direction,
parity-based solvability).
"""

# Core model
from npuzzle.core import (
    EMPTY_TILE,
    MAX_N,
    MAX_SIDE_SIZE,
    MIN_N,
    MIN_SIDE_SIZE,
    NO_TILE,
    Direction,
    IllegalMoveError,
    InvalidConfigurationError,
    InvalidPositionError,
    InvalidSideSizeError,
    InvalidSizeError,
    InvalidTileError,
    MoveTrajectory,
    NPuzzleError,
    PuzzleState,
)

# Game sessions
from npuzzle.game import GameStatistics, Move, PuzzleGame

__version__ = "0.1.0"

__all__ = [
    # Core model
    "PuzzleState",
    "Direction",
    "MoveTrajectory",
    "EMPTY_TILE",
    "NO_TILE",
    "MIN_N",
    "MAX_N",
    "MIN_SIDE_SIZE",
    "MAX_SIDE_SIZE",
    # Errors
    "NPuzzleError",
    "InvalidSizeError",
    "InvalidSideSizeError",
    "InvalidConfigurationError",
    "InvalidTileError",
    "InvalidPositionError",
    "IllegalMoveError",
    # Game sessions
    "PuzzleGame",
    "Move",
    "GameStatistics",
]
