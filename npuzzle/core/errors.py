"""Errors raised by :mod:`npuzzle`.

Every error is a :class:`ValueError`, so callers that only care about bad
input can keep catching ``ValueError``.
"""


class NPuzzleError(ValueError):
    """Base class for all puzzle errors."""


class InvalidSizeError(NPuzzleError):
    """The tile count ``n`` is outside ``[MIN_N, MAX_N]``."""


class InvalidSideSizeError(NPuzzleError):
    """The side size is outside ``[MIN_SIDE_SIZE, MAX_SIDE_SIZE]``."""


class InvalidConfigurationError(NPuzzleError):
    """A configuration has the wrong length, a duplicate or an out-of-range value."""


class InvalidTileError(NPuzzleError):
    """A tile id is outside ``[0, n)``."""


class InvalidPositionError(NPuzzleError):
    """A position (or grid cell) is outside the board."""


class IllegalMoveError(NPuzzleError):
    """A move was requested for a tile that is not next to the empty slot."""
