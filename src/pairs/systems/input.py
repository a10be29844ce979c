from pairs.components.board import Board
from pairs.components.settings_panel import ConfirmPrompt
from pairs.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from pairs.ui.layout import tile_at_point

LEFT_BUTTON = 1


class InputSystem:
    """Translates left mouse presses on the board into tile activations."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button != LEFT_BUTTON:
            return
        # The board is frozen while the discard prompt is open.
        if any(True for _ in self.world.get_component(ConfirmPrompt)):
            return
        board = self._board()
        if board is None:
            return
        hit = tile_at_point(self.window.width, self.window.height, board.rows, board.cols, x, y)
        if hit is None:
            return
        row, col = hit
        self.event_bus.emit(EVENT_TILE_CLICK, index=row * board.cols + col, row=row, col=col)

    def _board(self):
        for _, board in self.world.get_component(Board):
            return board
        return None
