import jax
import pytest

from npuzzle import PuzzleState


@pytest.fixture
def rng_key():
    """Provide a reproducible random key for JAX operations."""
    return jax.random.PRNGKey(42)


@pytest.fixture
def puzzle_3x3():
    """3x3 board with the empty slot at position 7, below tile 5."""
    return PuzzleState.from_size_and_configuration(9, [1, 2, 3, 4, 5, 6, 7, 0, 8])
