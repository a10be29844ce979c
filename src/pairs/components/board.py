from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    group_size: int
    start_symbol: int
    move_timeout_seconds: int = 0
    # Tile entity ids in row-major order; position in the list is the tile index.
    tile_entities: List[int] = field(default_factory=list)
    guess_count: int = 0

    @property
    def tile_count(self) -> int:
        return self.rows * self.cols

    @property
    def total_groups(self) -> int:
        return self.tile_count // self.group_size
