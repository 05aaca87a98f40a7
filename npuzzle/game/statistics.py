from dataclasses import dataclass


@dataclass(frozen=True)
class GameStatistics:
    """Summary of a game session: moves made and seconds spent playing."""

    num_moves: int
    elapsed_time: float
