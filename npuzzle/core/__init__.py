"""
Core puzzle model.

This module provides the board state, its error types, move directions and
the trajectory container used to export move sequences.
"""

from npuzzle.core.direction import Direction
from npuzzle.core.errors import (
    IllegalMoveError,
    InvalidConfigurationError,
    InvalidPositionError,
    InvalidSideSizeError,
    InvalidSizeError,
    InvalidTileError,
    NPuzzleError,
)
from npuzzle.core.puzzle_state import (
    EMPTY_TILE,
    MAX_N,
    MAX_SIDE_SIZE,
    MIN_N,
    MIN_SIDE_SIZE,
    NO_TILE,
    PuzzleState,
)
from npuzzle.core.trajectory import MoveTrajectory

__all__ = [
    "PuzzleState",
    "Direction",
    "MoveTrajectory",
    "EMPTY_TILE",
    "NO_TILE",
    "MIN_N",
    "MAX_N",
    "MIN_SIDE_SIZE",
    "MAX_SIDE_SIZE",
    "NPuzzleError",
    "InvalidSizeError",
    "InvalidSideSizeError",
    "InvalidConfigurationError",
    "InvalidTileError",
    "InvalidPositionError",
    "IllegalMoveError",
]
