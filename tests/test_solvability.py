"""Parity-based solvability checked against brute-force reachability."""

import itertools
import math
import random
from collections import deque

import jax
import pytest

from npuzzle import Direction, PuzzleState


def reachable_boards(n: int) -> set[tuple[int, ...]]:
    """Every position-indexed board reachable from the solved one, by BFS."""
    side = math.isqrt(n - 1) + 1

    def neighbours(p):
        if p - side >= 0:
            yield p - side
        if p + side < n:
            yield p + side
        if p % side > 0:
            yield p - 1
        if p % side < side - 1 and p + 1 < n:
            yield p + 1

    start = tuple(range(n))
    seen = {start}
    queue = deque([start])
    while queue:
        board = queue.popleft()
        empty = board.index(0)
        for p in neighbours(empty):
            nxt = list(board)
            nxt[empty], nxt[p] = nxt[p], nxt[empty]
            nxt = tuple(nxt)
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


@pytest.fixture(scope="module")
def reachable_3x3():
    return reachable_boards(9)


@pytest.mark.parametrize("n", [3, 4, 5, 6, 7, 8])
def test_matches_bfs_exhaustively(n):
    reachable = reachable_boards(n)
    for board in itertools.permutations(range(n)):
        puzzle = PuzzleState.from_size_and_configuration(n, board)
        assert puzzle.is_solvable() == (board in reachable), board


@pytest.mark.parametrize("n, expected", [(3, 3), (4, 12), (5, 15), (6, 360), (7, 420), (8, 20160)])
def test_reachable_board_counts(n, expected):
    # Dead-end cells (n = 5, 7) pin a tile and cut the reachable set well below n!/2.
    assert len(reachable_boards(n)) == expected


@pytest.mark.parametrize("n", [5, 7, 13, 21])
def test_dead_end_must_hold_its_own_tile(n):
    # Swapping two tile pairs keeps the parity even but moves a foreign
    # tile into the dead-end cell.
    puzzle = PuzzleState.from_size(n)
    dead_end = 2 if n == 5 else n - 1
    board = puzzle.get_tiles()
    others = [t for t in range(1, n) if t != dead_end][:3]
    board[[dead_end, others[0]]] = board[[others[0], dead_end]]
    board[[others[1], others[2]]] = board[[others[2], others[1]]]
    swapped = PuzzleState.from_size_and_configuration(n, board)
    assert swapped.inversion_count() % 2 == 0
    assert not swapped.is_solvable()


@pytest.mark.parametrize("n", [5, 7, 13, 21])
def test_empty_slot_inside_dead_end(n):
    puzzle = PuzzleState.from_size(n)
    dead_end = 2 if n == 5 else n - 1
    step = Direction.RIGHT if n == 5 else Direction.DOWN
    while puzzle.empty_tile_position() != dead_end:
        puzzle.move_empty(step)
    assert puzzle.is_solvable()

    # Any other tile in front of the dead end makes the board unreachable,
    # even with the parity kept by a second swap.
    entrance = puzzle.neighbour_positions(dead_end)[0]
    others = [p for p in range(n) if p not in (dead_end, entrance)]
    board = puzzle.get_tiles()
    board[[entrance, others[0]]] = board[[others[0], entrance]]
    board[[others[1], others[2]]] = board[[others[2], others[1]]]
    swapped = PuzzleState.from_size_and_configuration(n, board)
    assert swapped.inversion_count() % 2 == puzzle.inversion_count() % 2
    assert not swapped.is_solvable()


def test_matches_bfs_on_3x3_sample(reachable_3x3):
    assert len(reachable_3x3) == math.factorial(9) // 2
    rng = random.Random(0)
    for _ in range(2000):
        board = list(range(9))
        rng.shuffle(board)
        puzzle = PuzzleState.from_size_and_configuration(9, board)
        assert puzzle.is_solvable() == (tuple(board) in reachable_3x3), board


def test_swapping_two_tiles_is_unsolvable(reachable_3x3):
    for a, b in itertools.combinations(range(1, 9), 2):
        board = list(range(9))
        pa, pb = board.index(a), board.index(b)
        board[pa], board[pb] = board[pb], board[pa]
        puzzle = PuzzleState.from_size_and_configuration(9, board)
        assert not puzzle.is_solvable()
        assert tuple(board) not in reachable_3x3


def test_last_two_tiles_swapped():
    puzzle = PuzzleState.from_size_and_configuration(9, [0, 1, 2, 3, 4, 5, 6, 8, 7])
    assert not puzzle.is_solvable()
    assert puzzle.inversion_count() == 1


def test_solved_is_solvable():
    for n in (3, 4, 9, 16, 17, 25, 36):
        assert PuzzleState.from_size(n).is_solvable()


def test_even_width_uses_empty_row():
    # 4x4: moving the empty slot straight down one row changes the
    # inversion parity, the row term compensates.
    puzzle = PuzzleState.from_side_size(4)
    puzzle.move_tile_by_position(4)
    assert puzzle.inversion_count() == 3
    assert puzzle.empty_tile_position() // puzzle.side_size == 1
    assert puzzle.is_solvable()

    swapped = puzzle.get_tiles()
    swapped[[14, 15]] = swapped[[15, 14]]
    assert not PuzzleState.from_size_and_configuration(16, swapped).is_solvable()


def test_inversion_count():
    assert PuzzleState.from_size(16).inversion_count() == 0
    reversed_board = [0] + list(range(15, 0, -1))
    assert PuzzleState.from_size_and_configuration(16, reversed_board).inversion_count() == 105
    # The empty slot is ignored wherever it sits.
    assert PuzzleState.from_size_and_configuration(9, [1, 2, 3, 4, 5, 6, 7, 0, 8]).inversion_count() == 0


def test_inversion_parity_agrees_with_odd_width_rule(rng_key):
    for key in jax.random.split(rng_key, 20):
        puzzle = PuzzleState.random_from_side_size(5, key=key)
        assert puzzle.is_solvable() == (puzzle.inversion_count() % 2 == 0)


def test_inversion_parity_agrees_with_even_width_rule(rng_key):
    for key in jax.random.split(rng_key, 20):
        puzzle = PuzzleState.random_from_side_size(4, key=key)
        empty_row = puzzle.empty_tile_position() // 4
        assert puzzle.is_solvable() == ((puzzle.inversion_count() + empty_row) % 2 == 0)
