from dataclasses import dataclass


@dataclass(slots=True)
class GameClock:
    """Elapsed play time. Lives on the board entity while a game runs."""

    elapsed_seconds: int = 0
    accumulator: float = 0.0


@dataclass(slots=True)
class TurnTimer:
    """Countdown for the current turn; removed when the turn is resolved."""

    remaining_seconds: int
    accumulator: float = 0.0
