from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                    # payload: dt=float
EVENT_ELAPSED_TIME_CHANGED = "elapsed_time_changed"    # payload: seconds=int|None
EVENT_TIME_REMAINING_CHANGED = "time_remaining_changed"  # payload: seconds=int|None
EVENT_TURN_TIMEOUT = "turn_timeout"                    # payload: None


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"            # payload: index=int or row, col


# ============================================================================
# TILE & BOARD
# ============================================================================
EVENT_TILE_CHANGED = "tile_changed"        # payload: index, row, col, symbol, state=TileState
EVENT_GUESS_FINALIZED = "guess_finalized"  # payload: matched=bool, indices=list[int], guess_count=int, reason=str
EVENT_BOARD_CLEARED = "board_cleared"      # payload: reason=str


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_START_GAME_REQUEST = "start_game_request"        # payload: None
EVENT_GAME_STARTED = "game_started"                    # payload: rows, cols, group_size, total_groups
EVENT_GAME_ENDED = "game_ended"                        # payload: total_groups, guess_count, success_rate_percent, elapsed_seconds
EVENT_GAME_MODE_CHANGED = "game_mode_changed"          # payload: previous_mode=GameMode, new_mode=GameMode
EVENT_CONFIRM_REQUIRED = "confirm_required"            # payload: action=str
EVENT_CONFIRM_ACCEPTED = "confirm_accepted"            # payload: None
EVENT_CONFIRM_DECLINED = "confirm_declined"            # payload: None


# ============================================================================
# SETTINGS
# ============================================================================
EVENT_SETTINGS_APPLY_REQUEST = "settings_apply_request"            # payload: rows, columns, group_size, start_symbol, timeout_seconds
EVENT_SETTINGS_SUBMIT = "settings_submit"                          # payload: None
EVENT_SETTINGS_TOGGLE_REQUEST = "settings_toggle_request"          # payload: None
EVENT_SETTINGS_VISIBILITY_CHANGED = "settings_visibility_changed"  # payload: visible=bool
EVENT_SETTINGS_FIELD_CHANGED = "settings_field_changed"            # payload: field=str, value=int
EVENT_SETTINGS_PREVIEW_CHANGED = "settings_preview_changed"        # payload: symbols=list[int], valid=bool
EVENT_SETTINGS_INVALID = "settings_invalid"                        # payload: reason=str
