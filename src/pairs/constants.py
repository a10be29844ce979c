# Startup game configuration.
DEFAULT_ROWS = 3
DEFAULT_COLUMNS = 3
DEFAULT_GROUP_SIZE = 3
DEFAULT_START_SYMBOL = 128569  # U+1F639, a run of cat faces follows
DEFAULT_MOVE_TIMEOUT_SECONDS = 0

MIN_GROUP_SIZE = 2
# Highest Unicode code point; symbols are rendered as characters.
MAX_SYMBOL = 0x10FFFF

# Timer period for both the game clock and the per-turn countdown.
CLOCK_PERIOD_SECONDS = 1.0

# Window and board layout.
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Pairs"
TILE_PADDING = 6
MIN_TILE_SIZE = 20
BOTTOM_MARGIN = 20
# Board footprint relative to the window; the tile size shrinks to respect both.
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.80
# Height reserved at the top for the clock and timeout texts.
STATUS_BAR_HEIGHT = 40

# Tile background colors per state.
COVERED_COLOR = (0, 128, 0)        # green
REVEALED_COLOR = (255, 255, 0)     # yellow
SYMBOL_COLOR = (20, 20, 20)
STATUS_TEXT_COLOR = (230, 230, 230)
INVALID_FIELD_COLOR = (220, 40, 40)
VALID_FIELD_COLOR = (230, 230, 230)
