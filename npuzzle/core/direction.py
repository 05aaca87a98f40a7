from enum import IntEnum


class Direction(IntEnum):
    """The four axis directions a tile (or the empty slot) can slide in.

    Values double as action indices, so they can be stored in integer
    arrays (see :class:`npuzzle.core.trajectory.MoveTrajectory`).
    """

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def inverse(self) -> "Direction":
        return _INVERSE[self]

    @property
    def delta(self) -> tuple[int, int]:
        """``(row, col)`` offset of one step in this direction."""
        return _DELTAS[self]

    def to_string(self) -> str:
        return _LABELS[self]


_INVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_LABELS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}
