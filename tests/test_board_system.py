import pytest

from pairs.components.board import Board
from pairs.components.game_state import GameMode
from pairs.components.tile import Tile
from pairs.events.bus import (
    EVENT_GAME_ENDED,
    EVENT_GUESS_FINALIZED,
    EVENT_TILE_CHANGED,
    EVENT_TILE_CLICK,
)
from pairs.settings import ConfigurationError, GameSettings
from pairs.utils.game_state import get_game_state
from tests.helpers import build_game, capture, indices_by_symbol

PAIRS_2X2 = GameSettings(rows=2, columns=2, group_size=2, start_symbol=65)


def _click(game, index):
    game.bus.emit(EVENT_TILE_CLICK, index=index)


def test_create_game_places_covered_tiles_on_distinct_positions():
    game = build_game(GameSettings(rows=3, columns=4, group_size=3, start_symbol=100))
    tiles = game.board.tiles()

    assert len(tiles) == 12
    assert all(tile.is_covered() for _, tile in tiles)
    assert [tile.index for _, tile in tiles] == list(range(12))
    board = game.board.board
    assert isinstance(board, Board)
    assert board.guess_count == 0
    assert sorted(t.symbol for _, t in tiles) == sorted([100, 101, 102, 103] * 3)
    assert get_game_state(game.world).mode == GameMode.PLAYING


def test_create_game_shuffle_is_seeded_by_world_random():
    first = build_game(PAIRS_2X2, seed=7)
    second = build_game(PAIRS_2X2, seed=7)
    assert [t.symbol for _, t in first.board.tiles()] == [t.symbol for _, t in second.board.tiles()]


def test_create_game_rejects_uneven_layout_before_teardown():
    game = build_game(PAIRS_2X2)
    before = game.board.board_entity

    with pytest.raises(ConfigurationError):
        game.board.create_game(GameSettings(rows=1, columns=3, group_size=2, start_symbol=65))

    assert game.board.board_entity == before
    assert len(game.board.tiles()) == 4


def test_worked_example_two_by_two():
    game = build_game(PAIRS_2X2)
    ended = capture(game.bus, EVENT_GAME_ENDED)
    groups = indices_by_symbol(game.board)
    a0, a1 = groups[65]
    b0, b1 = groups[66]

    _click(game, a0)
    _click(game, a1)
    assert game.board.guess_count == 0
    # Third activation only commits the pending pair
    _click(game, b0)
    assert game.board.guess_count == 1
    assert game.board.tile_at(a0)[1].is_matched()
    assert game.board.tile_at(a1)[1].is_matched()
    assert game.board.tile_at(b0)[1].is_covered()

    _click(game, b0)
    _click(game, b1)
    assert not ended
    _click(game, b0)

    assert ended == [{
        "total_groups": 2,
        "guess_count": 2,
        "success_rate_percent": 100.0,
        "elapsed_seconds": 0,
    }]
    summary = get_game_state(game.world).last_summary
    assert summary.success_rate == 1.0
    # Board is torn down after the summary
    assert game.board.board is None
    assert not list(game.world.get_component(Tile))
    assert get_game_state(game.world).mode == GameMode.IDLE


def test_mismatched_group_is_covered_and_counted():
    game = build_game(PAIRS_2X2)
    finalized = capture(game.bus, EVENT_GUESS_FINALIZED)
    groups = indices_by_symbol(game.board)
    a0 = groups[65][0]
    b0 = groups[66][0]

    _click(game, a0)
    _click(game, b0)
    _click(game, a0)

    assert game.board.guess_count == 1
    assert all(tile.is_covered() for _, tile in game.board.tiles())
    assert finalized[0]["matched"] is False
    assert sorted(finalized[0]["indices"]) == sorted([a0, b0])
    assert finalized[0]["reason"] == "click"


def test_active_set_never_exceeds_group_size():
    game = build_game(GameSettings(rows=2, columns=3, group_size=3, start_symbol=65))
    for index in range(6):
        _click(game, index)
        assert len(game.board.active_tiles()) <= 3


def test_guess_count_only_moves_on_finalize():
    game = build_game(GameSettings(rows=2, columns=3, group_size=3, start_symbol=65))
    _click(game, 0)
    _click(game, 1)
    _click(game, 2)
    assert game.board.guess_count == 0
    _click(game, 3)
    assert game.board.guess_count == 1
    assert not game.board.active_tiles()


def test_matched_and_revealed_tiles_ignore_activation():
    game = build_game(PAIRS_2X2)
    changes = capture(game.bus, EVENT_TILE_CHANGED)
    groups = indices_by_symbol(game.board)
    a0, a1 = groups[65]

    _click(game, a0)
    _click(game, a0)
    assert len(changes) == 1
    assert len(game.board.active_tiles()) == 1

    _click(game, a1)
    _click(game, a0)  # finalizes as matched
    changes.clear()
    _click(game, a0)
    assert changes == []
    assert game.board.tile_at(a0)[1].is_matched()
    assert game.board.guess_count == 1


def test_row_col_click_maps_to_index():
    game = build_game(PAIRS_2X2)
    game.bus.emit(EVENT_TILE_CLICK, row=1, col=0)
    assert game.board.tile_at(2)[1].is_revealed()


def test_unknown_tile_and_missing_board_are_ignored():
    game = build_game(PAIRS_2X2)
    _click(game, 99)
    game.bus.emit(EVENT_TILE_CLICK)
    assert not game.board.active_tiles()

    idle = build_game(PAIRS_2X2, start=False)
    _click(idle, 0)
    assert idle.board.board is None


def test_equality_check_is_false_for_empty_group():
    from pairs.systems.board import BoardSystem

    assert BoardSystem.check_equality([]) is False
    assert BoardSystem.check_equality([Tile(0, 5), Tile(1, 5), Tile(2, 5)]) is True
    assert BoardSystem.check_equality([Tile(0, 5), Tile(1, 6)]) is False


def test_success_rate_rounds_to_two_decimals():
    game = build_game(GameSettings(rows=1, columns=6, group_size=2, start_symbol=65))
    ended = capture(game.bus, EVENT_GAME_ENDED)
    groups = indices_by_symbol(game.board)
    first, second, third = (groups[s] for s in (65, 66, 67))

    # One failed guess before clearing everything: 3 groups / 4 guesses.
    _click(game, first[0])
    _click(game, second[0])
    _click(game, first[0])
    for pair in (first, second, third):
        _click(game, pair[0])
        _click(game, pair[1])
        _click(game, pair[0])

    assert ended[0]["guess_count"] == 4
    assert ended[0]["success_rate_percent"] == 75.0


def test_new_game_discards_previous_tiles():
    game = build_game(PAIRS_2X2)
    old_entities = list(game.board.board.tile_entities)

    game.board.create_game(GameSettings(rows=2, columns=3, group_size=2, start_symbol=70))

    assert len(game.board.tiles()) == 6
    assert not any(game.world.entity_exists(ent) for ent in old_entities)
    assert len(list(game.world.get_component(Tile))) == 6
