"""Arcade window wiring the ECS world, event bus and systems together."""
import logging

from arcade import Window, color, run, set_background_color

from pairs.components.game_state import GameMode
from pairs.config import load_settings
from pairs.constants import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from pairs.events.bus import EVENT_MOUSE_PRESS, EVENT_START_GAME_REQUEST, EVENT_TICK, EventBus
from pairs.settings import GameSettings
from pairs.systems.board import BoardSystem
from pairs.systems.clock import ClockSystem
from pairs.systems.game_flow_system import GameFlowSystem
from pairs.systems.input import InputSystem
from pairs.systems.keyboard_input_system import KeyboardInputSystem
from pairs.systems.render import RenderSystem
from pairs.systems.settings_system import SettingsSystem
from pairs.utils.game_state import get_game_state
from pairs.world import create_world

logger = logging.getLogger(__name__)


class PairsWindow(Window):
    def __init__(self, settings: GameSettings | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, settings or load_settings())

        # Game systems
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.clock_system = ClockSystem(self.world, self.event_bus)
        self.settings_system = SettingsSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, self.board_system)

        # Interface systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.keyboard_input_system = KeyboardInputSystem(self.world, self.event_bus, self.settings_system)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)
        self.settings_system.hide()
        self.event_bus.emit(EVENT_START_GAME_REQUEST)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        state = get_game_state(self.world)
        if state and state.mode == GameMode.PLAYING:
            self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, modifiers=modifiers)

    def on_key_press(self, symbol: int, modifiers: int):
        self.keyboard_input_system.handle_key_press(symbol, modifiers)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    PairsWindow()
    logger.info("Window opened")
    run()


if __name__ == "__main__":
    main()
