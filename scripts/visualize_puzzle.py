"""CLI tool to print an N-puzzle board and its legal moves.

Example::

    python -m scripts.visualize_puzzle --side-size 4 --mode scrambled --seed 7

The command prints the board, whether it is solved and solvable, and one
line per movable tile with the board that results from moving it.
"""

from __future__ import annotations

import logging
from typing import Optional

import click
import jax
from tabulate import tabulate
from termcolor import colored

from npuzzle import NPuzzleError, PuzzleState
from npuzzle.utils.util import parse_int_sequence

STATUS_COLORS = {True: "light_green", False: "light_red"}


def _build_puzzle(
    mode: str, size: Optional[int], side_size: Optional[int], configuration: Optional[str], seed: int
) -> PuzzleState:
    key = jax.random.PRNGKey(seed)
    if configuration is not None:
        values = parse_int_sequence(configuration)
        if side_size is not None:
            return PuzzleState.from_side_size_and_configuration(side_size, values)
        return PuzzleState.from_size_and_configuration(size or len(values), values)
    if side_size is not None:
        size = side_size * side_size
    if size is None:
        raise click.BadParameter("one of --size, --side-size or --configuration is required")
    if mode == "random":
        return PuzzleState.random_from_size(size, key=key)
    if mode == "scrambled":
        return PuzzleState.scrambled_from_size(size, key=key)
    return PuzzleState.from_size(size)


@click.command()
@click.option("--size", "size", type=int, default=None, help="Number of tiles, empty slot included.")
@click.option("--side-size", type=int, default=None, help="Side length of a square board.")
@click.option(
    "--configuration",
    type=str,
    default=None,
    help="Space-separated board listing, position-indexed (e.g. '1 2 3 4 5 6 7 0 8').",
)
@click.option(
    "--mode",
    type=click.Choice(["solved", "random", "scrambled"]),
    default="scrambled",
    show_default=True,
    help="How to build the board when no configuration is given.",
)
@click.option(
    "--seed", default=42, show_default=True, help="PRNG seed for reproducible sampling."
)
@click.option("--color/--no-color", default=True, help="Highlight movable tiles.")
@click.option("--verbose", is_flag=True, help="Log debug records from npuzzle.")
def visualize_puzzle(
    size: Optional[int],
    side_size: Optional[int],
    configuration: Optional[str],
    mode: str,
    seed: int,
    color: bool,
    verbose: bool,
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        puzzle = _build_puzzle(mode, size, side_size, configuration, seed)
    except NPuzzleError as exc:
        raise click.BadParameter(str(exc)) from exc

    click.echo(f"Loaded puzzle: {puzzle!r}")
    click.echo(puzzle.to_string(highlight_movable=color))

    solvable = puzzle.is_solvable()
    status = "solvable" if solvable else "unsolvable"
    if color:
        status = colored(status, STATUS_COLORS[solvable])
    click.echo(f"solved={puzzle.is_solved()} {status} inversions={puzzle.inversion_count()}")

    rows = []
    for position in puzzle.movable_positions():
        tile = puzzle.tile_at_position(position)
        direction = puzzle.move_direction_from_position(position)
        rows.append([tile, position, direction.name, direction.to_string()])
    click.echo(tabulate(rows, headers=["tile", "position", "direction", ""], tablefmt="simple"))

    for position in puzzle.movable_positions():
        neighbour = puzzle.copy()
        tile = neighbour.tile_at_position(position)
        neighbour.move_tile_by_position(position)
        click.echo(f"\nAfter moving tile {tile}:")
        click.echo(neighbour.to_string())


if __name__ == "__main__":
    visualize_puzzle()
