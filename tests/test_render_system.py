from pairs.components.tile import TileState
from pairs.events.bus import EVENT_SETTINGS_INVALID, EVENT_TILE_CLICK
from pairs.rendering.tile_style import STYLE_SPECS, TileStyle, display_for, style_for, symbol_text
from pairs.settings import GameSettings
from pairs.systems.render import RenderSystem
from tests.helpers import build_game, drive_ticks, indices_by_symbol


class DummyWindow:
    def __init__(self):
        self.width = 800
        self.height = 600


def _setup(settings):
    game = build_game(settings, start=False)
    render = RenderSystem(game.world, game.bus, DummyWindow())
    game.board.create_game()
    return game, render


def test_style_mapping_per_state():
    assert style_for(TileState.COVERED) is TileStyle.COVERED
    assert style_for(TileState.REVEALED) is TileStyle.REVEALED
    assert style_for(TileState.MATCHED) is TileStyle.MATCHED
    assert display_for(TileState.COVERED, 65) is None
    assert display_for(TileState.REVEALED, 65) == "A"
    assert display_for(TileState.MATCHED, 65) is None
    assert STYLE_SPECS[TileStyle.MATCHED].alpha == 0
    assert symbol_text(128569) == "\U0001F639"


def test_tile_views_follow_board_events():
    game, render = _setup(GameSettings(rows=2, columns=2, group_size=2, start_symbol=65))
    assert len(render.tile_views) == 4
    assert all(view.style is TileStyle.COVERED and view.display is None for view in render.tile_views.values())

    a0, a1 = indices_by_symbol(game.board)[65]
    game.bus.emit(EVENT_TILE_CLICK, index=a0)
    assert render.tile_views[a0].display == "A"
    assert render.tile_views[a0].style is TileStyle.REVEALED

    game.bus.emit(EVENT_TILE_CLICK, index=a1)
    game.bus.emit(EVENT_TILE_CLICK, index=a0)
    assert render.tile_views[a0].style is TileStyle.MATCHED
    assert render.tile_views[a1].display is None


def test_clock_texts_and_summary():
    game, render = _setup(GameSettings(rows=1, columns=2, group_size=2, start_symbol=65, move_timeout_seconds=4))
    assert render.elapsed_text == "Play time: 0s"
    assert render.time_remaining_text == ""

    game.bus.emit(EVENT_TILE_CLICK, index=0)
    assert render.time_remaining_text == "Time for move: 4s"
    drive_ticks(game.bus, 1)
    assert render.elapsed_text == "Play time: 1s"
    assert render.time_remaining_text == "Time for move: 3s"

    game.bus.emit(EVENT_TILE_CLICK, index=1)
    game.bus.emit(EVENT_TILE_CLICK, index=0)

    assert render.summary.success_rate_percent == 100.0
    assert render.summary_text == "Done!\n1 of 1 guesses successful\nRate: 100%"
    assert render.tile_views == {}
    assert render.elapsed_text == ""
    assert render.time_remaining_text == ""


def test_new_game_clears_summary_and_errors():
    game, render = _setup(GameSettings(rows=1, columns=2, group_size=2, start_symbol=65))
    game.bus.emit(EVENT_SETTINGS_INVALID, reason="nope")
    render.report_game_end(1, 2, 50.0)
    assert render.settings_error == "nope"
    assert "Rate: 50%" in render.summary_text

    game.board.create_game()

    assert render.summary is None
    assert render.summary_text == ""
    assert render.settings_error == ""
