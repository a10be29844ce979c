"""Keyboard shortcuts for the settings panel, new games and the discard prompt."""
from __future__ import annotations

from esper import World

from pairs.components.settings_panel import ConfirmPrompt
from pairs.events.bus import (
    EventBus,
    EVENT_CONFIRM_ACCEPTED,
    EVENT_CONFIRM_DECLINED,
    EVENT_SETTINGS_SUBMIT,
    EVENT_SETTINGS_TOGGLE_REQUEST,
    EVENT_START_GAME_REQUEST,
)
from pairs.systems.settings_system import SettingsSystem

# pyglet key codes; kept local so the input layer does not import arcade.
KEY_ENTER = 65293
KEY_RETURN = 13
KEY_ESCAPE = 65307
KEY_TAB = 65289
KEY_UP = 65362
KEY_DOWN = 65364
KEY_N = 110
KEY_S = 115
KEY_Y = 121
MOD_SHIFT = 1


class KeyboardInputSystem:
    def __init__(self, world: World, event_bus: EventBus, settings_system: SettingsSystem) -> None:
        self.world = world
        self.event_bus = event_bus
        self.settings_system = settings_system

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        if self._prompt_active():
            if symbol in (KEY_Y, KEY_ENTER, KEY_RETURN):
                self.event_bus.emit(EVENT_CONFIRM_ACCEPTED)
            elif symbol in (KEY_N, KEY_ESCAPE):
                self.event_bus.emit(EVENT_CONFIRM_DECLINED)
            return
        if symbol == KEY_S:
            self.event_bus.emit(EVENT_SETTINGS_TOGGLE_REQUEST)
            return
        if symbol == KEY_N:
            self.event_bus.emit(EVENT_START_GAME_REQUEST)
            return
        if not self.settings_system.panel.visible:
            return
        if symbol == KEY_TAB:
            self.settings_system.focus_next(-1 if modifiers & MOD_SHIFT else 1)
        elif symbol == KEY_UP:
            self.settings_system.adjust_focused(1)
        elif symbol == KEY_DOWN:
            self.settings_system.adjust_focused(-1)
        elif symbol in (KEY_ENTER, KEY_RETURN):
            self.event_bus.emit(EVENT_SETTINGS_SUBMIT)

    def _prompt_active(self) -> bool:
        return any(True for _ in self.world.get_component(ConfirmPrompt))
