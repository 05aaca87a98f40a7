import logging
import math
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

import chex
import jax
import jax.numpy as jnp
import numpy as np

from npuzzle.core.direction import Direction
from npuzzle.core.errors import (
    IllegalMoveError,
    InvalidConfigurationError,
    InvalidPositionError,
    InvalidSideSizeError,
    InvalidSizeError,
    InvalidTileError,
)
from npuzzle.utils.util import format_int_sequence, grid_visualize_format, tile_to_char

logger = logging.getLogger(__name__)

TYPE = np.int32

EMPTY_TILE = 0
NO_TILE = -1

MIN_N = 3
MIN_SIDE_SIZE = 2
MAX_SIDE_SIZE = math.isqrt(2**31 - 1)
MAX_N = MAX_SIDE_SIZE**2

TileListener = Callable[[int, int, int], None]


def _is_index(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _side_size_for(n: int) -> int:
    """``ceil(sqrt(n))`` without floating point."""
    return math.isqrt(n - 1) + 1


def _check_n(n) -> int:
    if not _is_index(n) or not MIN_N <= n <= MAX_N:
        raise InvalidSizeError(f"n must be an integer in [{MIN_N}, {MAX_N}], got {n!r}")
    return int(n)


def _check_side_size(side_size) -> int:
    if not _is_index(side_size) or not MIN_SIDE_SIZE <= side_size <= MAX_SIDE_SIZE:
        raise InvalidSideSizeError(
            f"side size must be an integer in [{MIN_SIDE_SIZE}, {MAX_SIDE_SIZE}], "
            f"got {side_size!r}"
        )
    return int(side_size)


def _check_configuration(n: int, configuration) -> np.ndarray:
    """Return a private int array copy of ``configuration`` or raise."""
    try:
        values = np.array(configuration)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(f"Configuration is not a flat integer sequence: {exc}") from exc

    if values.ndim != 1 or values.shape[0] != n:
        raise InvalidConfigurationError(
            f"Configuration must hold exactly {n} values, got shape {values.shape}"
        )
    if not np.issubdtype(values.dtype, np.integer):
        raise InvalidConfigurationError(
            f"Configuration values must be integers, got dtype {values.dtype}"
        )
    out_of_range = values[(values < 0) | (values >= n)]
    if out_of_range.size:
        raise InvalidConfigurationError(
            f"Invalid value {int(out_of_range[0])} in configuration. Must be between 0 and {n - 1}"
        )
    counts = np.bincount(values, minlength=n)
    repeated = np.flatnonzero(counts > 1)
    if repeated.size:
        raise InvalidConfigurationError(f"Repeated value in configuration: {int(repeated[0])}")
    return values.astype(TYPE)


def _invert(permutation: np.ndarray) -> np.ndarray:
    inverse = np.empty_like(permutation)
    inverse[permutation] = np.arange(permutation.shape[0], dtype=permutation.dtype)
    return inverse


def _permutation_parity(permutation: np.ndarray) -> int:
    """Parity (0 even, 1 odd) of a permutation of ``0..len-1`` via its cycle count."""
    visited = np.zeros(permutation.shape[0], dtype=bool)
    cycles = 0
    for start in range(permutation.shape[0]):
        if visited[start]:
            continue
        cycles += 1
        i = start
        while not visited[i]:
            visited[i] = True
            i = permutation[i]
    return (permutation.shape[0] - cycles) % 2


def _fresh_key() -> chex.PRNGKey:
    seed = int(np.random.default_rng().integers(0, 2**31 - 1))
    return jax.random.PRNGKey(seed)


class PuzzleState:
    """A generalized N-puzzle board.

    ``n`` tiles, numbered ``0..n-1``, occupy ``n`` linear positions laid out
    row-major on a grid of side ``ceil(sqrt(n))``. Tile ``0`` is the empty
    slot. When ``n`` is not a perfect square the last row is partial.

    The board keeps two mutually inverse arrays, position -> tile and
    tile -> position, and updates both on every move, so every lookup is
    O(1). The puzzle is solved when every tile ``i`` sits at position ``i``
    (the empty slot at the top-left corner).

    Instances are created through the ``from_*`` / ``random_*`` /
    ``scrambled_*`` classmethods, or directly with ``PuzzleState(n)`` or
    ``PuzzleState(n, configuration)``. Dimensions never change; only moves
    mutate the board. There is no internal locking.

    Args:
        n: Number of tiles, the empty slot included.
        configuration: Optional position-indexed configuration
            (``configuration[p]`` is the tile at position ``p``). Defaults to
            the solved board.
    """

    def __init__(self, n: int, configuration: Optional[Sequence[int]] = None):
        self._n = _check_n(n)
        self._side_size = _side_size_for(self._n)
        if configuration is None:
            position_to_tile = np.arange(self._n, dtype=TYPE)
        else:
            position_to_tile = _check_configuration(self._n, configuration)
        self._position_to_tile = position_to_tile
        self._tile_to_position = _invert(position_to_tile)
        self._listeners: list[TileListener] = []
        logger.debug("Created %d-tile puzzle (side size %d)", self._n, self._side_size)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_size(cls, n: int) -> "PuzzleState":
        """Solved puzzle with ``n`` tiles."""
        return cls(n)

    @classmethod
    def from_side_size(cls, side_size: int) -> "PuzzleState":
        """Solved ``side_size x side_size`` puzzle."""
        side_size = _check_side_size(side_size)
        return cls.from_size(side_size * side_size)

    @classmethod
    def from_size_and_configuration(
        cls, n: int, configuration: Sequence[int], by_tile: bool = False
    ) -> "PuzzleState":
        """
        Puzzle with ``n`` tiles in the given configuration.

        By default ``configuration[p]`` is the tile at position ``p`` (row-major
        board listing). With ``by_tile=True`` it is read the other way round:
        ``configuration[t]`` is the position of tile ``t``.
        """
        n = _check_n(n)
        values = _check_configuration(n, configuration)
        if by_tile:
            values = _invert(values)
        return cls(n, values)

    @classmethod
    def from_side_size_and_configuration(
        cls, side_size: int, configuration: Sequence[int], by_tile: bool = False
    ) -> "PuzzleState":
        side_size = _check_side_size(side_size)
        return cls.from_size_and_configuration(side_size * side_size, configuration, by_tile)

    @classmethod
    def random_from_size(cls, n: int, key: Optional[chex.PRNGKey] = None) -> "PuzzleState":
        """
        Puzzle whose tiles are a uniformly random permutation of the solved board.
        The result is not necessarily solvable; check :meth:`is_solvable`.
        """
        n = _check_n(n)
        if key is None:
            key = _fresh_key()
        board = jax.random.permutation(key, jnp.arange(n, dtype=jnp.int32))
        return cls(n, np.asarray(board))

    @classmethod
    def random_from_side_size(
        cls, side_size: int, key: Optional[chex.PRNGKey] = None
    ) -> "PuzzleState":
        side_size = _check_side_size(side_size)
        return cls.random_from_size(side_size * side_size, key)

    @classmethod
    def scrambled_from_size(
        cls, n: int, num_moves: Optional[int] = None, key: Optional[chex.PRNGKey] = None
    ) -> "PuzzleState":
        """
        Solvable random puzzle built by a random walk of legal moves from the
        solved board. ``num_moves`` defaults to ``100 * n``.
        """
        puzzle = cls.from_size(n)
        if num_moves is None:
            num_moves = 100 * puzzle.n
        if not _is_index(num_moves) or num_moves < 0:
            raise ValueError(f"num_moves must be a non-negative integer, got {num_moves!r}")
        if key is None:
            key = _fresh_key()
        draws = np.asarray(jax.random.uniform(key, (int(num_moves),)))
        for draw in draws:
            candidates = [p for _, p in puzzle._neighbours(puzzle.empty_tile_position())]
            puzzle._apply_move(candidates[min(int(draw * len(candidates)), len(candidates) - 1)])
        logger.debug("Scrambled %d-tile puzzle with %d moves", puzzle.n, num_moves)
        return puzzle

    @classmethod
    def scrambled_from_side_size(
        cls,
        side_size: int,
        num_moves: Optional[int] = None,
        key: Optional[chex.PRNGKey] = None,
    ) -> "PuzzleState":
        side_size = _check_side_size(side_size)
        return cls.scrambled_from_size(side_size * side_size, num_moves, key)

    def copy(self) -> "PuzzleState":
        """Independent copy of the board. Listeners are not copied."""
        return PuzzleState(self._n, self._position_to_tile)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def n(self) -> int:
        return self._n

    @property
    def side_size(self) -> int:
        return self._side_size

    @property
    def num_rows(self) -> int:
        return -(-self._n // self._side_size)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _check_tile(self, tile) -> int:
        if not _is_index(tile) or not 0 <= tile < self._n:
            raise InvalidTileError(f"Invalid tile: {tile!r}")
        return int(tile)

    def _check_position(self, position) -> int:
        if not _is_index(position) or not 0 <= position < self._n:
            raise InvalidPositionError(f"Invalid tile position: {position!r}")
        return int(position)

    def tile_position(self, tile: int) -> int:
        tile = self._check_tile(tile)
        return int(self._tile_to_position[tile])

    def empty_tile_position(self) -> int:
        return int(self._tile_to_position[EMPTY_TILE])

    def tile_at_position(self, position: int) -> int:
        position = self._check_position(position)
        return int(self._position_to_tile[position])

    def tile_at(self, row: int, col: int) -> int:
        """Tile at grid cell ``(row, col)``."""
        if not (_is_index(row) and _is_index(col)) or not (
            0 <= row < self._side_size and 0 <= col < self._side_size
        ):
            raise InvalidPositionError(f"Invalid cell: ({row!r}, {col!r})")
        position = int(row) * self._side_size + int(col)
        if position >= self._n:
            raise InvalidPositionError(f"Cell ({row}, {col}) has no position on a {self._n}-tile board")
        return int(self._position_to_tile[position])

    def get_tile_positions(self) -> np.ndarray:
        """Copy of the tile -> position array."""
        return self._tile_to_position.copy()

    def get_tiles(self) -> np.ndarray:
        """Copy of the position -> tile array (the position-indexed configuration)."""
        return self._position_to_tile.copy()

    def get_puzzle_matrix(self) -> np.ndarray:
        """
        ``side_size x side_size`` snapshot of tile ids, row-major. Cells with
        no position (last row of a non-square board) hold ``NO_TILE``.
        """
        matrix = np.full((self._side_size, self._side_size), NO_TILE, dtype=TYPE)
        matrix.reshape(-1)[: self._n] = self._position_to_tile
        return matrix

    def is_solved(self) -> bool:
        return bool(np.array_equal(self._tile_to_position, np.arange(self._n, dtype=TYPE)))

    def _neighbours(self, position: int) -> list[tuple[Direction, int]]:
        side = self._side_size
        row, col = divmod(position, side)
        result = []
        for direction in Direction:
            d_row, d_col = direction.delta
            next_row, next_col = row + d_row, col + d_col
            if next_row < 0 or not 0 <= next_col < side:
                continue
            neighbour = next_row * side + next_col
            if neighbour < self._n:
                result.append((direction, neighbour))
        return result

    def _dead_ends(self) -> list[tuple[int, int]]:
        """``(position, neighbour)`` for every cell with a single neighbour.

        Only the top-right cell of a two-row board and a last cell alone in
        its row can be one.
        """
        result = []
        for position in sorted({self._side_size - 1, self._n - 1}):
            neighbours = self._neighbours(position)
            if len(neighbours) == 1:
                result.append((position, neighbours[0][1]))
        return result

    def neighbour_positions(self, position: int) -> list[int]:
        """Positions orthogonally adjacent to ``position`` (never across a row edge)."""
        position = self._check_position(position)
        return [p for _, p in self._neighbours(position)]

    def movable_positions(self) -> list[int]:
        return [p for _, p in self._neighbours(self.empty_tile_position())]

    def movable_tiles(self) -> list[int]:
        return [int(self._position_to_tile[p]) for p in self.movable_positions()]

    def can_move_by_position(self, position: int) -> bool:
        position = self._check_position(position)
        empty = self.empty_tile_position()
        return any(p == empty for _, p in self._neighbours(position))

    def can_move(self, tile: int) -> bool:
        tile = self._check_tile(tile)
        return self.can_move_by_position(int(self._tile_to_position[tile]))

    def direction_between(self, position_a: int, position_b: int) -> Direction:
        """Direction from ``position_a`` to the adjacent ``position_b``."""
        position_a = self._check_position(position_a)
        position_b = self._check_position(position_b)
        for direction, neighbour in self._neighbours(position_a):
            if neighbour == position_b:
                return direction
        raise IllegalMoveError(f"Positions {position_a} and {position_b} are not adjacent")

    def move_direction_from_position(self, position: int) -> Direction:
        """Direction in which the tile at ``position`` would slide."""
        position = self._check_position(position)
        empty = self.empty_tile_position()
        for direction, neighbour in self._neighbours(position):
            if neighbour == empty:
                return direction
        raise IllegalMoveError(
            f"The tile at position {position} is not next to the empty tile (position {empty})"
        )

    def move_direction(self, tile: int) -> Direction:
        tile = self._check_tile(tile)
        return self.move_direction_from_position(int(self._tile_to_position[tile]))

    def inversion_count(self) -> int:
        """
        Number of pairs of non-empty tiles that appear in the wrong order when
        the board is read row-major. Builds an ``n x n`` comparison matrix, so
        it is meant for modestly sized boards.
        """
        board = jnp.asarray(self._position_to_tile)
        tiles = board[board != EMPTY_TILE]
        inverted = jnp.triu(tiles[:, None] > tiles[None, :], k=1)
        return int(jnp.sum(inverted, dtype=jnp.int32))

    def is_solvable(self) -> bool:
        """Check if the board can reach the solved configuration.

        A vertical slide moves one tile past ``side_size - 1`` others and shifts
        the empty slot by one row, so ``inversions + (side_size - 1) * empty_row``
        keeps its parity under every move. The goal has no inversions and the
        empty slot in row 0, so the board is solvable iff that sum is even:
        odd widths need an even inversion count, even widths need
        ``inversions + empty_row`` even.

        Some non-square boards also have a dead-end cell (n = 5, or a last row
        holding a single cell). A tile in a dead end can only leave it when
        the empty slot steps in, and the empty slot can only step back out
        by returning that same tile, so the dead end must hold its goal tile
        (or, while the empty slot is inside, its neighbour must). With that
        checked the parity test is exact on every board.

        The inversion parity is read off the permutation's cycle count in O(n).
        """
        empty = self.empty_tile_position()
        for position, neighbour in self._dead_ends():
            resident = neighbour if position == empty else position
            if self._position_to_tile[resident] != position:
                return False

        tiles = self._position_to_tile[self._position_to_tile != EMPTY_TILE] - 1
        inversion_parity = _permutation_parity(tiles)
        empty_row = empty // self._side_size
        return (inversion_parity + (self._side_size - 1) * empty_row) % 2 == 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _apply_move(self, position: int) -> None:
        empty = int(self._tile_to_position[EMPTY_TILE])
        tile = int(self._position_to_tile[position])
        self._position_to_tile[empty] = tile
        self._position_to_tile[position] = EMPTY_TILE
        self._tile_to_position[tile] = empty
        self._tile_to_position[EMPTY_TILE] = position
        failure = None
        for listener in list(self._listeners):
            try:
                listener(tile, position, empty)
            except Exception as exc:
                if failure is not None:
                    logger.error("Tile listener %r failed", listener, exc_info=exc)
                    continue
                failure = exc
        if failure is not None:
            raise failure

    def move_tile_by_position(self, position: int) -> None:
        """Slide the tile at ``position`` into the adjacent empty slot."""
        position = self._check_position(position)
        if not self.can_move_by_position(position):
            raise IllegalMoveError(
                f"The tile at position {position} is not next to the empty tile "
                f"(position {self.empty_tile_position()})"
            )
        logger.debug("Moving tile %d from position %d", self._position_to_tile[position], position)
        self._apply_move(position)

    def move_tiles_by_position(self, positions: Iterable[int]) -> None:
        """
        Apply :meth:`move_tile_by_position` for each position in order. On an
        illegal step the error propagates and earlier steps stay applied.
        """
        for position in positions:
            self.move_tile_by_position(position)

    def move_tile(self, tile: int) -> None:
        tile = self._check_tile(tile)
        self.move_tile_by_position(int(self._tile_to_position[tile]))

    def move_tiles(self, tiles: Iterable[int]) -> None:
        """Tile-id counterpart of :meth:`move_tiles_by_position`, same failure semantics."""
        for tile in tiles:
            self.move_tile(tile)

    def move_empty(self, direction: Direction) -> None:
        """Move the empty slot one cell in ``direction``."""
        direction = Direction(direction)
        empty = self.empty_tile_position()
        for neighbour_direction, neighbour in self._neighbours(empty):
            if neighbour_direction == direction:
                self.move_tile_by_position(neighbour)
                return
        raise IllegalMoveError(
            f"The empty tile at position {empty} cannot move {direction.name.lower()}"
        )

    def add_tile_listener(self, listener: TileListener) -> None:
        """Call ``listener(tile, old_position, new_position)`` after every move.

        Every listener is notified even when an earlier one raises. The move
        stays applied and the first listener error is re-raised afterwards.
        """
        self._listeners.append(listener)

    def remove_tile_listener(self, listener: TileListener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def to_configuration_string(self) -> str:
        return format_int_sequence(self._position_to_tile)

    def to_string(self, highlight_movable: bool = False) -> str:
        cell_width = len(str(self._n - 1))
        highlight = self.movable_tiles() if highlight_movable else ()
        cells = np.full(self.num_rows * self._side_size, NO_TILE, dtype=TYPE)
        cells[: self._n] = self._position_to_tile
        form = grid_visualize_format(self._side_size, self.num_rows, cell_width)
        return form.format(*(tile_to_char(int(t), cell_width, highlight) for t in cells))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PuzzleState(n={self._n}, configuration=[{self.to_configuration_string()}])"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self._n == other._n and bool(
            np.array_equal(self._position_to_tile, other._position_to_tile)
        )

    __hash__ = None
