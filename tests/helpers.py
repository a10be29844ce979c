from __future__ import annotations

import random
from collections import defaultdict
from types import SimpleNamespace
from typing import Callable

from pairs.events.bus import EVENT_TICK, EventBus
from pairs.settings import GameSettings
from pairs.systems.board import BoardSystem
from pairs.systems.clock import ClockSystem
from pairs.systems.game_flow_system import GameFlowSystem
from pairs.world import create_world


def build_game(
    settings: GameSettings | None = None,
    *,
    seed: int = 0,
    start: bool = True,
    confirm_discard: Callable[[], bool] | None = None,
) -> SimpleNamespace:
    """Wire a headless game with the core systems and optionally start it."""

    bus = EventBus()
    world = create_world(bus, settings, rng=random.Random(seed))
    board = BoardSystem(world, bus)
    clock = ClockSystem(world, bus)
    flow = GameFlowSystem(world, bus, board, confirm_discard=confirm_discard)
    if start:
        board.create_game()
    return SimpleNamespace(bus=bus, world=world, board=board, clock=clock, flow=flow)


def capture(bus: EventBus, name: str) -> list[dict]:
    """Record the payload of every ``name`` event emitted on ``bus``."""

    received: list[dict] = []

    def _handler(sender, **payload):
        received.append(payload)

    bus.subscribe(name, _handler)
    return received


def indices_by_symbol(board: BoardSystem) -> dict[int, list[int]]:
    groups: dict[int, list[int]] = defaultdict(list)
    for _, tile in board.tiles():
        groups[tile.symbol].append(tile.index)
    return dict(groups)


def drive_ticks(bus: EventBus, n: int = 1, dt: float = 1.0) -> None:
    for _ in range(n):
        bus.emit(EVENT_TICK, dt=dt)
