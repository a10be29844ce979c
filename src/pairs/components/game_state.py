"""Game state resource describing whether a board is in play."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from pairs.settings import GameSettings


class GameMode(Enum):
    IDLE = auto()
    PLAYING = auto()


@dataclass(frozen=True, slots=True)
class GameSummary:
    total_groups: int
    guess_count: int
    success_rate_percent: float
    elapsed_seconds: int = 0

    @property
    def success_rate(self) -> float:
        return self.total_groups / self.guess_count


@dataclass
class GameState:
    """Singleton component storing the mode and the settings for the next game."""
    mode: GameMode = GameMode.IDLE
    settings: GameSettings = field(default_factory=GameSettings)
    last_summary: Optional[GameSummary] = None
