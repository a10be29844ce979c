from typing import Optional, Tuple

from pairs.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    MIN_TILE_SIZE,
    STATUS_BAR_HEIGHT,
)


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (tile_size, start_x, start_y) for a board of ``rows`` x ``cols``.

    The board is centred horizontally and sits above the bottom margin. Shared
    by rendering and input so clicks always land on the drawn tile.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - STATUS_BAR_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    start_x = (window_width - cols * tile_size) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def tile_center(window_width: int, window_height: int, rows: int, cols: int, row: int, col: int) -> Tuple[float, float]:
    # Row 0 is the top row on screen; arcade's y axis grows upwards.
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (rows - 1 - row) * tile_size + tile_size / 2
    return x, y


def tile_at_point(window_width: int, window_height: int, rows: int, cols: int, x: float, y: float) -> Optional[Tuple[int, int]]:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row = rows - 1 - int((y - start_y) // tile_size)
    return row, col
