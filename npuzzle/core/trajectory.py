import chex
import jax.numpy as jnp


@chex.dataclass
class MoveTrajectory:
    """
    A JAX PyTree dataclass holding the boards visited by a sequence of moves.

    ``configurations[i]`` is the position-indexed board before move ``i``;
    the last row is the board after the final move. ``directions`` stores
    :class:`~npuzzle.core.direction.Direction` values (the direction each
    moved tile slid in).
    """

    configurations: chex.Array  # [T + 1, n]
    moved_positions: chex.Array  # [T]
    moved_tiles: chex.Array  # [T]
    directions: chex.Array  # [T]

    @property
    def num_moves(self) -> int:
        return int(self.moved_positions.shape[0])

    @property
    def final_configuration(self) -> chex.Array:
        return self.configurations[-1]

    def empty_positions(self) -> chex.Array:
        """Position of the empty slot in each visited board."""
        return jnp.argmax(self.configurations == 0, axis=-1)
