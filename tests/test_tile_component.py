from pairs.components.tile import Tile, TileState


def test_tile_starts_covered():
    tile = Tile(index=0, symbol=65)
    assert tile.is_covered()
    assert tile.display_symbol() is None


def test_reveal_only_flips_covered_tiles():
    tile = Tile(index=0, symbol=65)
    assert tile.reveal() is True
    assert tile.is_revealed()
    assert tile.display_symbol() == 65
    # Second reveal is a no-op
    assert tile.reveal() is False
    assert tile.is_revealed()


def test_matched_tile_cannot_be_revealed_again():
    tile = Tile(index=3, symbol=66)
    tile.reveal()
    tile.mark_matched()
    assert tile.is_matched()
    assert tile.reveal() is False
    assert tile.state is TileState.MATCHED
    assert tile.display_symbol() is None


def test_cover_is_idempotent():
    tile = Tile(index=1, symbol=65)
    tile.reveal()
    tile.cover()
    tile.cover()
    assert tile.is_covered()
    assert not tile.is_revealed()
