"""Settings panel state: visibility, field edits, symbol preview and the apply gate."""
from __future__ import annotations

from esper import World

from pairs.components.settings_panel import SettingsPanel
from pairs.events.bus import (
    EventBus,
    EVENT_SETTINGS_APPLY_REQUEST,
    EVENT_SETTINGS_FIELD_CHANGED,
    EVENT_SETTINGS_INVALID,
    EVENT_SETTINGS_PREVIEW_CHANGED,
    EVENT_SETTINGS_SUBMIT,
    EVENT_SETTINGS_TOGGLE_REQUEST,
    EVENT_SETTINGS_VISIBILITY_CHANGED,
)
from pairs.settings import (
    SETTINGS_FIELDS,
    ConfigurationError,
    GameSettings,
    is_valid_layout,
    preview_symbols,
)
from pairs.utils.game_state import get_settings_panel


class SettingsSystem:
    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SETTINGS_TOGGLE_REQUEST, self.on_toggle_request)
        self.event_bus.subscribe(EVENT_SETTINGS_FIELD_CHANGED, self.on_field_changed)
        self.event_bus.subscribe(EVENT_SETTINGS_SUBMIT, self.on_submit)
        self.refresh_preview()

    @property
    def panel(self) -> SettingsPanel:
        panel = get_settings_panel(self.world)
        if panel is None:
            panel = SettingsPanel.from_settings(GameSettings())
            self.world.create_entity(panel)
        return panel

    def on_toggle_request(self, sender, **payload) -> None:
        self.set_visible(not self.panel.visible)

    def hide(self) -> None:
        self.set_visible(False)

    def set_visible(self, visible: bool) -> None:
        panel = self.panel
        panel.visible = bool(visible)
        self.event_bus.emit(EVENT_SETTINGS_VISIBILITY_CHANGED, visible=panel.visible)

    def on_field_changed(self, sender, **payload) -> None:
        field_name = payload.get("field")
        if field_name not in SETTINGS_FIELDS:
            return
        try:
            value = int(payload.get("value"))
        except (TypeError, ValueError):
            return
        self.panel.values[field_name] = value
        self.refresh_preview()

    def focus_next(self, step: int = 1) -> str:
        panel = self.panel
        position = SETTINGS_FIELDS.index(panel.focused_field)
        panel.focused_field = SETTINGS_FIELDS[(position + step) % len(SETTINGS_FIELDS)]
        return panel.focused_field

    def adjust_focused(self, delta: int) -> None:
        panel = self.panel
        field_name = panel.focused_field
        self.event_bus.emit(
            EVENT_SETTINGS_FIELD_CHANGED,
            field=field_name,
            value=panel.values.get(field_name, 0) + delta,
        )

    def refresh_preview(self) -> bool:
        """Recompute the symbol preview; apply stays disabled while the values are invalid."""
        panel = self.panel
        values = panel.values
        rows = values.get("rows", 0)
        columns = values.get("columns", 0)
        group_size = values.get("group_size", 0)
        if not is_valid_layout(rows, columns, group_size):
            panel.preview = []
            panel.apply_enabled = False
        else:
            panel.preview = preview_symbols(rows, columns, group_size, values.get("start_symbol", 0))
            # The layout is fine; the remaining options can still block apply.
            try:
                GameSettings(**values).validate()
            except (ConfigurationError, TypeError):
                panel.apply_enabled = False
            else:
                panel.apply_enabled = True
        self.event_bus.emit(
            EVENT_SETTINGS_PREVIEW_CHANGED,
            symbols=list(panel.preview),
            valid=panel.apply_enabled,
        )
        return panel.apply_enabled

    def on_submit(self, sender, **payload) -> None:
        panel = self.panel
        if not panel.apply_enabled:
            self.event_bus.emit(EVENT_SETTINGS_INVALID, reason="settings are not valid")
            return
        values = panel.values
        self.event_bus.emit(
            EVENT_SETTINGS_APPLY_REQUEST,
            rows=values["rows"],
            columns=values["columns"],
            group_size=values["group_size"],
            start_symbol=values["start_symbol"],
            timeout_seconds=values["move_timeout_seconds"],
        )
