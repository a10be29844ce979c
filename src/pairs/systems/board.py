import logging
import random
from typing import List, Optional, Sequence, Tuple

from esper import World

from pairs.components.board import Board
from pairs.components.board_position import BoardPosition
from pairs.components.game_clock import GameClock, TurnTimer
from pairs.components.game_state import GameMode, GameSummary
from pairs.components.tile import Tile
from pairs.events.bus import (
    EventBus,
    EVENT_BOARD_CLEARED,
    EVENT_ELAPSED_TIME_CHANGED,
    EVENT_GAME_ENDED,
    EVENT_GAME_STARTED,
    EVENT_GUESS_FINALIZED,
    EVENT_TILE_CHANGED,
    EVENT_TILE_CLICK,
    EVENT_TIME_REMAINING_CHANGED,
    EVENT_TURN_TIMEOUT,
)
from pairs.settings import GameSettings, generate_symbols
from pairs.utils.game_state import get_game_state, set_game_mode

logger = logging.getLogger(__name__)

TileEntry = Tuple[int, Tile]


class BoardSystem:
    """Game controller: board setup, turn resolution, timer handles and the end check.

    The tiles revealed at any moment form the active set. A completed guess is
    left on screen and only committed by the next tile activation (or by the
    turn timeout), so the player gets to see every tile they picked.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.board_entity: Optional[int] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TURN_TIMEOUT, self.on_turn_timeout)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def board(self) -> Optional[Board]:
        if self.board_entity is None:
            return None
        try:
            return self.world.component_for_entity(self.board_entity, Board)
        except KeyError:
            return None

    @property
    def guess_count(self) -> int:
        board = self.board
        return board.guess_count if board else 0

    def tiles(self) -> List[TileEntry]:
        board = self.board
        if board is None:
            return []
        return [(ent, self.world.component_for_entity(ent, Tile)) for ent in board.tile_entities]

    def tile_at(self, index: int) -> Optional[TileEntry]:
        board = self.board
        if board is None or not 0 <= index < len(board.tile_entities):
            return None
        ent = board.tile_entities[index]
        return ent, self.world.component_for_entity(ent, Tile)

    def active_tiles(self) -> List[TileEntry]:
        return [(ent, tile) for ent, tile in self.tiles() if tile.is_revealed()]

    def game_in_progress(self) -> bool:
        return any(not tile.is_matched() for _, tile in self.tiles())

    def turn_timer(self) -> Optional[TurnTimer]:
        if self.board_entity is None:
            return None
        return self.world.try_component(self.board_entity, TurnTimer)

    def game_clock(self) -> Optional[GameClock]:
        if self.board_entity is None:
            return None
        return self.world.try_component(self.board_entity, GameClock)

    @staticmethod
    def check_equality(tiles: Sequence[Tile]) -> bool:
        if not tiles:
            return False
        first = tiles[0].symbol
        return all(tile.symbol == first for tile in tiles)

    # ------------------------------------------------------------------
    # Setup and teardown
    # ------------------------------------------------------------------
    def create_game(self, settings: Optional[GameSettings] = None) -> Board:
        state = get_game_state(self.world)
        if settings is None:
            settings = state.settings if state is not None else GameSettings()
        settings.validate()
        symbols = generate_symbols(
            settings.rows, settings.columns, settings.group_size, settings.start_symbol
        )
        rng = getattr(self.world, "random", None) or random.Random()
        rng.shuffle(symbols)

        self.teardown(reason="new_game")
        board = Board(
            rows=settings.rows,
            cols=settings.columns,
            group_size=settings.group_size,
            start_symbol=settings.start_symbol,
            move_timeout_seconds=settings.move_timeout_seconds,
        )
        for index, symbol in enumerate(symbols):
            row, col = divmod(index, settings.columns)
            ent = self.world.create_entity(Tile(index=index, symbol=symbol), BoardPosition(row=row, col=col))
            board.tile_entities.append(ent)
        # The game clock starts with the board; the turn timer waits for the first reveal.
        self.board_entity = self.world.create_entity(board, GameClock())

        if state is not None:
            state.last_summary = None
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info(
            "Game started: %dx%d board, groups of %d, %d groups, move timeout %ds",
            board.rows, board.cols, board.group_size, board.total_groups, board.move_timeout_seconds,
        )
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            rows=board.rows,
            cols=board.cols,
            group_size=board.group_size,
            total_groups=board.total_groups,
        )
        for ent, tile in self.tiles():
            self._emit_tile(ent, tile)
        self.event_bus.emit(EVENT_ELAPSED_TIME_CHANGED, seconds=0)
        self.event_bus.emit(EVENT_TIME_REMAINING_CHANGED, seconds=None)
        return board

    def teardown(self, reason: str = "teardown") -> None:
        """Delete the board and its tiles; both timer handles go with the board entity."""
        board = self.board
        if board is None:
            self.board_entity = None
            return
        for ent in board.tile_entities:
            if self.world.entity_exists(ent):
                self.world.delete_entity(ent, immediate=True)
        self.world.delete_entity(self.board_entity, immediate=True)
        self.board_entity = None
        set_game_mode(self.world, self.event_bus, GameMode.IDLE)
        logger.debug("Board torn down (%s)", reason)
        self.event_bus.emit(EVENT_BOARD_CLEARED, reason=reason)
        self.event_bus.emit(EVENT_ELAPSED_TIME_CHANGED, seconds=None)
        self.event_bus.emit(EVENT_TIME_REMAINING_CHANGED, seconds=None)

    # ------------------------------------------------------------------
    # Turn resolution
    # ------------------------------------------------------------------
    def on_tile_click(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            row = kwargs.get('row')
            col = kwargs.get('col')
            board = self.board
            if row is None or col is None or board is None:
                return
            if not (0 <= row < board.rows and 0 <= col < board.cols):
                return
            index = row * board.cols + col
        self.activate_tile(index)

    def activate_tile(self, index: int) -> None:
        board = self.board
        if board is None:
            return
        entry = self.tile_at(index)
        if entry is None:
            return
        active = self.active_tiles()
        if len(active) >= board.group_size:
            # This activation only commits the pending guess.
            self.finalize_guess(active)
            return
        ent, tile = entry
        if not tile.reveal():
            return
        self._emit_tile(ent, tile)
        if not active and board.move_timeout_seconds > 0:
            self.start_turn_timer()

    def finalize_guess(self, active: Sequence[TileEntry], reason: str = "click") -> bool:
        board = self.board
        if board is None:
            return False
        board.guess_count += 1
        self.cancel_turn_timer()
        matched = self.check_equality([tile for _, tile in active])
        for ent, tile in active:
            if matched:
                tile.mark_matched()
            else:
                tile.cover()
            self._emit_tile(ent, tile)
        logger.debug("Guess %d %s", board.guess_count, "matched" if matched else "failed")
        self.event_bus.emit(
            EVENT_GUESS_FINALIZED,
            matched=matched,
            indices=[tile.index for _, tile in active],
            guess_count=board.guess_count,
            reason=reason,
        )
        if matched:
            self.check_game_end()
        return matched

    def on_turn_timeout(self, sender, **kwargs):
        board = self.board
        if board is None:
            return
        active = self.active_tiles()
        board.guess_count += 1
        self.cancel_turn_timer()
        # Time ran out: the guess fails no matter which symbols are showing.
        for ent, tile in active:
            tile.cover()
            self._emit_tile(ent, tile)
        logger.info("Move timed out, %d tile(s) covered", len(active))
        self.event_bus.emit(
            EVENT_GUESS_FINALIZED,
            matched=False,
            indices=[tile.index for _, tile in active],
            guess_count=board.guess_count,
            reason="timeout",
        )

    # ------------------------------------------------------------------
    # Timer handles
    # ------------------------------------------------------------------
    def start_turn_timer(self) -> None:
        board = self.board
        if board is None or board.move_timeout_seconds <= 0:
            return
        self.world.add_component(self.board_entity, TurnTimer(remaining_seconds=board.move_timeout_seconds))
        self.event_bus.emit(EVENT_TIME_REMAINING_CHANGED, seconds=board.move_timeout_seconds)

    def cancel_turn_timer(self) -> None:
        if self.turn_timer() is None:
            return
        self.world.remove_component(self.board_entity, TurnTimer)
        self.event_bus.emit(EVENT_TIME_REMAINING_CHANGED, seconds=None)

    def stop_clocks(self) -> None:
        self.cancel_turn_timer()
        if self.game_clock() is not None:
            self.world.remove_component(self.board_entity, GameClock)

    # ------------------------------------------------------------------
    # End of game
    # ------------------------------------------------------------------
    def check_game_end(self) -> Optional[GameSummary]:
        board = self.board
        if board is None:
            return None
        if any(not tile.is_matched() for _, tile in self.tiles()):
            return None
        clock = self.game_clock()
        summary = GameSummary(
            total_groups=board.total_groups,
            guess_count=board.guess_count,
            success_rate_percent=round(board.total_groups / board.guess_count * 100, 2),
            elapsed_seconds=clock.elapsed_seconds if clock else 0,
        )
        self.stop_clocks()
        state = get_game_state(self.world)
        if state is not None:
            state.last_summary = summary
        logger.info(
            "Game finished: %d of %d guesses successful (%.2f%%) in %ds",
            summary.total_groups, summary.guess_count, summary.success_rate_percent, summary.elapsed_seconds,
        )
        self.event_bus.emit(
            EVENT_GAME_ENDED,
            total_groups=summary.total_groups,
            guess_count=summary.guess_count,
            success_rate_percent=summary.success_rate_percent,
            elapsed_seconds=summary.elapsed_seconds,
        )
        self.teardown(reason="game_over")
        return summary

    def _emit_tile(self, ent: int, tile: Tile) -> None:
        try:
            pos = self.world.component_for_entity(ent, BoardPosition)
        except KeyError:
            return
        self.event_bus.emit(
            EVENT_TILE_CHANGED,
            index=tile.index,
            row=pos.row,
            col=pos.col,
            symbol=tile.symbol,
            state=tile.state,
        )
