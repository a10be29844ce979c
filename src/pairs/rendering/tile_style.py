from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from pairs.components.tile import TileState
from pairs.constants import COVERED_COLOR, REVEALED_COLOR


class TileStyle(Enum):
    COVERED = "covered"
    REVEALED = "revealed"
    MATCHED = "matched"


@dataclass(frozen=True, slots=True)
class StyleSpec:
    color: Tuple[int, int, int]
    alpha: int


STYLE_SPECS = {
    TileStyle.COVERED: StyleSpec(color=COVERED_COLOR, alpha=255),
    TileStyle.REVEALED: StyleSpec(color=REVEALED_COLOR, alpha=255),
    # Matched tiles keep their cell but are fully transparent.
    TileStyle.MATCHED: StyleSpec(color=COVERED_COLOR, alpha=0),
}

_STATE_STYLES = {
    TileState.COVERED: TileStyle.COVERED,
    TileState.REVEALED: TileStyle.REVEALED,
    TileState.MATCHED: TileStyle.MATCHED,
}


def style_for(state: TileState) -> TileStyle:
    return _STATE_STYLES[state]


def symbol_text(symbol: int) -> str:
    """Render a symbol code as its Unicode character."""
    try:
        return chr(symbol)
    except (TypeError, ValueError, OverflowError):
        return str(symbol)


def display_for(state: TileState, symbol: int) -> Optional[str]:
    if state is TileState.REVEALED:
        return symbol_text(symbol)
    return None
