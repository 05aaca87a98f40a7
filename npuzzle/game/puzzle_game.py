import logging
import time
from collections.abc import Callable
from typing import NamedTuple, Optional

import jax.numpy as jnp
import numpy as np

from npuzzle.core.errors import IllegalMoveError
from npuzzle.core.puzzle_state import PuzzleState
from npuzzle.core.trajectory import MoveTrajectory
from npuzzle.game.statistics import GameStatistics
from npuzzle.utils.util import format_int_sequence

logger = logging.getLogger(__name__)


class Move(NamedTuple):
    tile: int
    from_position: int
    to_position: int


class PuzzleGame:
    """A play session on top of a :class:`PuzzleState`.

    The game listens to the puzzle, so every move applied to it (through the
    game or directly on the puzzle) is recorded. It keeps the initial board,
    the move list and the time spent playing, and can undo moves, reset the
    board and rebuild it from the record.

    The clock starts with the first move (or :meth:`start`) and stops when
    the puzzle gets solved or :meth:`pause` is called.

    Several games may watch one puzzle. Each records every move it hears
    about, so one game's :meth:`undo` shows up as a new move in the others.

    Args:
        puzzle: The board to play on. It is mutated in place.
        clock: Zero-argument callable returning seconds, ``time.monotonic``
            by default.
    """

    def __init__(self, puzzle: PuzzleState, clock: Callable[[], float] = time.monotonic):
        self.puzzle = puzzle
        self.initial_configuration = puzzle.get_tiles()
        self.moves: list[Move] = []
        self._clock = clock
        self._elapsed = 0.0
        self._started_at: Optional[float] = None
        self._recording = True
        puzzle.add_tile_listener(self._on_tile_moved)

    @property
    def initial_state(self) -> str:
        """Space-separated initial board, position-indexed."""
        return format_int_sequence(self.initial_configuration)

    @property
    def num_moves(self) -> int:
        return len(self.moves)

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_time(self) -> float:
        elapsed = self._elapsed
        if self._started_at is not None:
            elapsed += self._clock() - self._started_at
        return elapsed

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is not None:
            self._elapsed += self._clock() - self._started_at
            self._started_at = None

    def is_finished(self) -> bool:
        return self.puzzle.is_solved()

    def _on_tile_moved(self, tile: int, old_position: int, new_position: int) -> None:
        if not self._recording:
            return
        self.start()
        self.moves.append(Move(tile, old_position, new_position))
        if self.puzzle.is_solved():
            self.pause()
            logger.debug("Puzzle solved after %d moves", len(self.moves))

    def move_tile_by_position(self, position: int) -> None:
        self.puzzle.move_tile_by_position(position)

    def move_tile(self, tile: int) -> None:
        self.puzzle.move_tile(tile)

    def undo(self) -> Move:
        """Revert the last recorded move and return it.

        The revert is an ordinary move on the puzzle: only this game leaves
        it out of its record. Other tile listeners, another game on the same
        puzzle included, see it like any other move.
        """
        if not self.moves:
            raise IllegalMoveError("There are no moves to undo")
        last = self.moves[-1]
        if not self.puzzle.can_move_by_position(last.to_position):
            raise IllegalMoveError(f"Cannot undo {last}: the board no longer matches the record")
        self.moves.pop()
        self._recording = False
        try:
            self.puzzle.move_tile_by_position(last.to_position)
        finally:
            self._recording = True
        return last

    def reset(self) -> None:
        """Undo every move and clear the clock."""
        while self.moves:
            self.undo()
        self._elapsed = 0.0
        self._started_at = None
        logger.debug("Game reset to %s", self.initial_state)

    def replay(self) -> PuzzleState:
        """A new puzzle rebuilt from the initial board and the recorded moves."""
        puzzle = PuzzleState.from_size_and_configuration(self.puzzle.n, self.initial_configuration)
        puzzle.move_tiles_by_position(move.from_position for move in self.moves)
        return puzzle

    def statistics(self) -> GameStatistics:
        return GameStatistics(num_moves=len(self.moves), elapsed_time=self.elapsed_time)

    def trajectory(self) -> MoveTrajectory:
        puzzle = PuzzleState.from_size_and_configuration(self.puzzle.n, self.initial_configuration)
        configurations = [puzzle.get_tiles()]
        directions = []
        for move in self.moves:
            directions.append(int(puzzle.move_direction_from_position(move.from_position)))
            puzzle.move_tile_by_position(move.from_position)
            configurations.append(puzzle.get_tiles())
        return MoveTrajectory(
            configurations=jnp.asarray(np.stack(configurations)),
            moved_positions=jnp.asarray([m.from_position for m in self.moves], dtype=jnp.int32),
            moved_tiles=jnp.asarray([m.tile for m in self.moves], dtype=jnp.int32),
            directions=jnp.asarray(directions, dtype=jnp.int32),
        )

    def close(self) -> None:
        """Stop listening to the puzzle."""
        self.pause()
        self.puzzle.remove_tile_listener(self._on_tile_moved)
