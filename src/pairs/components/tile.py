from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class TileState(Enum):
    COVERED = auto()
    REVEALED = auto()
    MATCHED = auto()


@dataclass(slots=True)
class Tile:
    """One board cell: its symbol and reveal state.

    Tiles never draw themselves; whoever changes a tile emits the redraw event.
    """
    index: int
    symbol: int
    state: TileState = TileState.COVERED

    def cover(self) -> None:
        self.state = TileState.COVERED

    def reveal(self) -> bool:
        # Only covered tiles flip; matched and already revealed tiles stay put.
        if self.state is not TileState.COVERED:
            return False
        self.state = TileState.REVEALED
        return True

    def mark_matched(self) -> None:
        self.state = TileState.MATCHED

    def is_covered(self) -> bool:
        return self.state is TileState.COVERED

    def is_revealed(self) -> bool:
        return self.state is TileState.REVEALED

    def is_matched(self) -> bool:
        return self.state is TileState.MATCHED

    def display_symbol(self) -> Optional[int]:
        return self.symbol if self.state is TileState.REVEALED else None
