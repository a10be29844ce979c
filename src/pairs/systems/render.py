from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from esper import World

from pairs.components.board import Board
from pairs.components.game_state import GameSummary
from pairs.components.settings_panel import ConfirmPrompt
from pairs.constants import (
    INVALID_FIELD_COLOR,
    STATUS_TEXT_COLOR,
    SYMBOL_COLOR,
    TILE_PADDING,
    VALID_FIELD_COLOR,
)
from pairs.events.bus import (
    EventBus,
    EVENT_BOARD_CLEARED,
    EVENT_ELAPSED_TIME_CHANGED,
    EVENT_GAME_ENDED,
    EVENT_GAME_STARTED,
    EVENT_SETTINGS_INVALID,
    EVENT_TILE_CHANGED,
    EVENT_TIME_REMAINING_CHANGED,
)
from pairs.rendering.tile_style import STYLE_SPECS, TileStyle, display_for, style_for, symbol_text
from pairs.settings import SETTINGS_FIELDS
from pairs.ui.layout import compute_board_geometry, tile_center
from pairs.utils.game_state import get_settings_panel

FIELD_LABELS = {
    "rows": "Rows",
    "columns": "Columns",
    "group_size": "Same tiles",
    "start_symbol": "Start symbol",
    "move_timeout_seconds": "Move timeout (s)",
}


@dataclass(slots=True)
class TileView:
    row: int
    col: int
    display: Optional[str]
    style: TileStyle


def format_summary(summary: GameSummary) -> str:
    return (
        f"Done!\n{summary.total_groups} of {summary.guess_count} guesses successful\n"
        f"Rate: {summary.success_rate_percent:g}%"
    )


class RenderSystem:
    """Presentation adapter: keeps a view model fed by board events and draws it.

    All state the window shows lives here; nothing in this class mutates the game.
    """

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.tile_views: Dict[int, TileView] = {}
        self.elapsed_text = ""
        self.time_remaining_text = ""
        self.summary: Optional[GameSummary] = None
        self.summary_text = ""
        self.settings_error = ""
        self.event_bus.subscribe(EVENT_TILE_CHANGED, self.on_tile_changed)
        self.event_bus.subscribe(EVENT_BOARD_CLEARED, self.on_board_cleared)
        self.event_bus.subscribe(EVENT_ELAPSED_TIME_CHANGED, self.on_elapsed_time_changed)
        self.event_bus.subscribe(EVENT_TIME_REMAINING_CHANGED, self.on_time_remaining_changed)
        self.event_bus.subscribe(EVENT_GAME_ENDED, self.on_game_ended)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self.event_bus.subscribe(EVENT_SETTINGS_INVALID, self.on_settings_invalid)

    # Event handlers -------------------------------------------------------
    def on_tile_changed(self, sender, **kwargs):
        index = kwargs.get('index')
        state = kwargs.get('state')
        if index is None or state is None:
            return
        style = style_for(state)
        self.render_tile(index, kwargs.get('row', 0), kwargs.get('col', 0), display_for(state, kwargs.get('symbol')), style)

    def on_board_cleared(self, sender, **kwargs):
        self.tile_views.clear()

    def on_elapsed_time_changed(self, sender, **kwargs):
        self.render_elapsed_time(kwargs.get('seconds'))

    def on_time_remaining_changed(self, sender, **kwargs):
        self.render_time_remaining(kwargs.get('seconds'))

    def on_game_started(self, sender, **kwargs):
        self.summary = None
        self.summary_text = ""
        self.settings_error = ""

    def on_game_ended(self, sender, **kwargs):
        self.report_game_end(
            kwargs.get('total_groups', 0),
            kwargs.get('guess_count', 0),
            kwargs.get('success_rate_percent', 0.0),
            kwargs.get('elapsed_seconds', 0),
        )

    def on_settings_invalid(self, sender, **kwargs):
        self.settings_error = kwargs.get('reason') or ""

    # Presentation callbacks -----------------------------------------------
    def render_tile(self, index: int, row: int, col: int, display: Optional[str], style: TileStyle) -> None:
        self.tile_views[index] = TileView(row=row, col=col, display=display, style=style)

    def render_elapsed_time(self, seconds: Optional[int]) -> None:
        self.elapsed_text = "" if seconds is None else f"Play time: {seconds}s"

    def render_time_remaining(self, seconds: Optional[int]) -> None:
        self.time_remaining_text = "" if seconds is None else f"Time for move: {seconds}s"

    def report_game_end(self, total_groups: int, guess_count: int, success_rate_percent: float, elapsed_seconds: int = 0) -> None:
        self.summary = GameSummary(
            total_groups=total_groups,
            guess_count=guess_count,
            success_rate_percent=success_rate_percent,
            elapsed_seconds=elapsed_seconds,
        )
        self.summary_text = format_summary(self.summary)

    # Drawing ---------------------------------------------------------------
    def process(self):
        # Local import keeps the view model usable without a window.
        import arcade
        try:
            arcade.get_window()
        except Exception:
            return
        self._draw_board(arcade)
        self._draw_status(arcade)
        self._draw_settings(arcade)
        self._draw_summary(arcade)
        self._draw_prompt(arcade)

    def _draw_board(self, arcade) -> None:
        board = self._board()
        if board is None:
            return
        tile_size, _, _ = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        draw_size = max(tile_size - TILE_PADDING, 4)
        for view in self.tile_views.values():
            spec = STYLE_SPECS[view.style]
            if spec.alpha == 0:
                continue
            x, y = tile_center(self.window.width, self.window.height, board.rows, board.cols, view.row, view.col)
            arcade.draw_lbwh_rectangle_filled(
                x - draw_size / 2,
                y - draw_size / 2,
                draw_size,
                draw_size,
                (*spec.color, spec.alpha),
            )
            if view.display:
                arcade.draw_text(
                    view.display,
                    x,
                    y,
                    SYMBOL_COLOR,
                    int(draw_size * 0.5),
                    anchor_x="center",
                    anchor_y="center",
                )

    def _draw_status(self, arcade) -> None:
        top = self.window.height - 24
        if self.elapsed_text:
            arcade.draw_text(self.elapsed_text, 16, top, STATUS_TEXT_COLOR, 14)
        if self.time_remaining_text:
            arcade.draw_text(self.time_remaining_text, self.window.width - 16, top, STATUS_TEXT_COLOR, 14, anchor_x="right")

    def _draw_settings(self, arcade) -> None:
        panel = get_settings_panel(self.world)
        if panel is None:
            return
        hint = "S: hide settings" if panel.visible else "S: show settings   N: new game"
        arcade.draw_text(hint, 16, 8, STATUS_TEXT_COLOR, 11)
        if not panel.visible:
            return
        width, height = 300, 230
        left = 8
        bottom = self.window.height - height - 40
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, (20, 30, 50, 230))
        y = bottom + height - 28
        for name in SETTINGS_FIELDS:
            color = STATUS_TEXT_COLOR
            if name == "group_size" and not panel.apply_enabled:
                color = INVALID_FIELD_COLOR
            marker = ">" if name == panel.focused_field else " "
            arcade.draw_text(f"{marker} {FIELD_LABELS[name]}: {panel.values.get(name)}", left + 12, y, color, 13)
            y -= 26
        preview = "".join(symbol_text(symbol) for symbol in panel.preview)
        arcade.draw_text(preview or "-", left + 12, y, VALID_FIELD_COLOR, 16, width=width - 24, multiline=True)
        apply_label = "Enter: apply" if panel.apply_enabled else self.settings_error or "Settings invalid"
        arcade.draw_text(apply_label, left + 12, bottom + 10, VALID_FIELD_COLOR if panel.apply_enabled else INVALID_FIELD_COLOR, 12)

    def _draw_summary(self, arcade) -> None:
        if not self.summary_text:
            return
        arcade.draw_text(
            self.summary_text,
            self.window.width / 2,
            self.window.height / 2,
            STATUS_TEXT_COLOR,
            20,
            anchor_x="center",
            anchor_y="center",
            align="center",
            multiline=True,
            width=int(self.window.width * 0.6),
        )

    def _draw_prompt(self, arcade) -> None:
        for _, prompt in self.world.get_component(ConfirmPrompt):
            arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, (0, 0, 0, 190))
            arcade.draw_text(
                f"{prompt.message}\nY: yes   N: no",
                self.window.width / 2,
                self.window.height / 2,
                STATUS_TEXT_COLOR,
                18,
                anchor_x="center",
                anchor_y="center",
                align="center",
                multiline=True,
                width=int(self.window.width * 0.7),
            )
            return

    def _board(self) -> Optional[Board]:
        for _, board in self.world.get_component(Board):
            return board
        return None
